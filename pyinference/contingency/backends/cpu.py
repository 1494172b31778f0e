"""
CPU reference backend for contingency analyses.

Dispatches to analysis-specific submodules based on design.test_type.
"""

from __future__ import annotations

from typing import Any

from pyinference.core.exceptions import ValidationError
from pyinference.core.result import Result
from pyinference.core.compute.timing import Timer
from pyinference.contingency.design import ContingencyDesign


class CPUContingencyBackend:
    """CPU reference backend for contingency analyses."""

    @property
    def name(self) -> str:
        return 'cpu_contingency'

    def solve(self, design: ContingencyDesign) -> Result[Any]:
        """Dispatch to the implementation for design.test_type."""
        timer = Timer()
        timer.start()

        test_type = design.test_type

        with timer.section(test_type):
            if test_type == "goodness_of_fit":
                from pyinference.contingency.backends._chisq import chisq_gof
                params, warnings_list = chisq_gof(design)
            elif test_type == "independence":
                from pyinference.contingency.backends._chisq import chisq_independence
                params, warnings_list = chisq_independence(design)
            elif test_type == "odds_ratio":
                from pyinference.contingency.backends._odds_ratio import odds_ratio
                params, warnings_list = odds_ratio(design)
            elif test_type == "bayes_factor":
                from pyinference.contingency.backends._bayes_factor import bayes_factor
                params, warnings_list = bayes_factor(design)
            else:
                raise ValidationError(
                    f"Unknown test_type: {test_type!r}; the cpu backend handles "
                    f"goodness_of_fit, independence, odds_ratio and bayes_factor"
                )

        timer.stop()

        return Result(
            params=params,
            info={'test_type': test_type},
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )
