"""Schemas shared by the listing endpoints."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SortField:
    """One `(field, direction)` pair of a list ordering."""

    field: str
    descending: bool = False
