# leafkit/core/errors.py
from __future__ import annotations

__all__ = [
    "LeafSystemError",
    "CatalogNotFoundError",
    "DependencyCycleError",
]



class LeafSystemError(RuntimeError):
    """Base class for faults the leaf system raises instead of returning."""



class CatalogNotFoundError(LeafSystemError):
    """Raised when no leaf catalog directory can be located."""

    def __init__(self, message: str, *, searched: list[str] | None = None) -> None:
        super().__init__(message)
        self.searched: list[str] = list(searched or [])



class DependencyCycleError(LeafSystemError):
    """
    Raised by strict dependency resolution when leaf dependencies form a cycle.

    `cycle` starts and ends with the same leaf name, e.g. ["ETHA", "ETHB", "ETHA"].
    """

    def __init__(self, cycle: list[str]) -> None:
        super().__init__(f"Leaf dependency cycle detected: {' -> '.join(cycle)}")
        self.cycle: list[str] = list(cycle)
