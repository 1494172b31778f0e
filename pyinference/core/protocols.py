"""
Core protocols for pyinference.

Structural interfaces that domain-specific backends satisfy. Protocol
(structural typing) rather than ABC keeps backends free of a common
base class while still type-checkable.
"""

from typing import Protocol, TypeVar, runtime_checkable

from pyinference.core.result import Result

D = TypeVar('D', contravariant=True)  # Design type
P = TypeVar('P', covariant=True)      # Parameter payload type


@runtime_checkable
class Backend(Protocol[D, P]):
    """
    Protocol for computational backends.

    Each backend takes a domain-specific Design and produces a
    domain-specific parameter payload wrapped in a Result.

    Backends are stateless: all configuration is carried by the Design
    or passed at construction time. This makes them easy to test and swap.

    Type Parameters:
        D: The Design type this backend accepts
        P: The parameter payload type this backend produces
    """

    @property
    def name(self) -> str:
        """
        Backend identifier.

        Convention: '{device}_{algorithm}'
        Examples: 'cpu_qr', 'cpu_contingency'
        """
        ...

    def solve(self, design: D) -> Result[P]:
        """
        Execute the statistical computation.

        Raises:
            NumericalError: If numerical issues prevent a solution
            ValidationError: If design is invalid for this backend
        """
        ...
