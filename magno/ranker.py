"""Ranking of merged results."""

from collections.abc import Iterable

from .models import Result


def rank(results: Iterable[Result]) -> list[Result]:
    """Sort results by seeds, highest first.

    The sort is stable and has no secondary key, so results with equal
    seeds keep the order in which their sources completed. That order
    depends on network latency and can differ between runs.
    """
    return sorted(results, key=lambda r: r.seeds, reverse=True)
