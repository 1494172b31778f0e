"""
Contingency backends.

Available backends:
    CPUContingencyBackend: CPU reference implementation
"""

from pyinference.contingency.backends.cpu import CPUContingencyBackend

__all__ = [
    "CPUContingencyBackend",
]
