"""Normalization of raw source records into Results."""

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .models import Result

_SEPARATORS = re.compile(r"[,_\s]")


@dataclass(frozen=True)
class FieldMap:
    """Which raw keys hold each canonical field for one source.

    Each entry is a tuple of candidate keys, tried in order.
    """

    title: tuple[str, ...] = ("title", "name")
    magnet: tuple[str, ...] = ("magnet", "magnet_link", "link")
    seeds: tuple[str, ...] = ("seeds", "seeders")
    extra: tuple[str, ...] = ()


DEFAULT_FIELDS = FieldMap()


def parse_seeds(value: Any) -> int:
    """Parse a seed count, returning 0 for anything unusable."""
    if isinstance(value, bool) or value is None:
        return 0
    if isinstance(value, int):
        return max(value, 0)
    if isinstance(value, float):
        if value != value or value in (float("inf"), float("-inf")):
            return 0
        return max(int(value), 0)
    if isinstance(value, str):
        text = _SEPARATORS.sub("", value)
        if not text:
            return 0
        try:
            return max(int(text), 0)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            return 0
        if number != number or number in (float("inf"), float("-inf")):
            return 0
        return max(int(number), 0)
    return 0


def _first(raw: Mapping, keys: tuple[str, ...]) -> Any:
    for key in keys:
        value = raw.get(key)
        if value is not None:
            return value
    return None


def _text(value: Any) -> str:
    if not isinstance(value, str):
        return ""
    return value.strip()


def normalize(
    raw: Any, source_name: str, fields: FieldMap = DEFAULT_FIELDS
) -> Result | None:
    """Map a raw record to a Result, or None if it has no title or magnet."""
    if not isinstance(raw, Mapping):
        return None

    title = _text(_first(raw, fields.title))
    magnet = _text(_first(raw, fields.magnet))
    if not title or not magnet:
        return None

    extra = {key: raw[key] for key in fields.extra if raw.get(key) is not None}

    return Result(
        title=title,
        magnet_link=magnet,
        seeds=parse_seeds(_first(raw, fields.seeds)),
        source=source_name,
        extra=extra,
    )
