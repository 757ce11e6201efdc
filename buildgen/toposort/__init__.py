"""
Toposort Module

Stable topological sorting for renderer sub-entities (stages, jobs).
"""

from .stable import CycleError, Orderable, SortResult, stable_sort

__all__ = [
    "CycleError",
    "Orderable",
    "SortResult",
    "stable_sort",
]
