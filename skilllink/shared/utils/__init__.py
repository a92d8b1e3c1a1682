"""Shared utilities: datetime, generators, sanitization."""

from skilllink.shared.utils.datetime import (
    ensure_utc,
    parse_day_month_year,
    utc_now,
)
from skilllink.shared.utils.generators import generate_cuid, pair_key
from skilllink.shared.utils.sanitization import InputSanitizer, split_topics

__all__ = [
    "generate_cuid",
    "pair_key",
    "utc_now",
    "ensure_utc",
    "parse_day_month_year",
    "InputSanitizer",
    "split_topics",
]
