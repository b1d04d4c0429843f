"""Magno: one ranked list of magnet links from many torrent sites."""

from .aggregator import Aggregation, Aggregator, SourceUpdate
from .errors import AdapterFailure, InvalidQuery, MagnoError
from .models import Result
from .normalize import FieldMap, normalize, parse_seeds
from .ranker import rank
from .service import AggregationService

__all__ = [
    "Aggregation",
    "Aggregator",
    "AggregationService",
    "AdapterFailure",
    "FieldMap",
    "InvalidQuery",
    "MagnoError",
    "Result",
    "SourceUpdate",
    "normalize",
    "parse_seeds",
    "rank",
]
