"""Display helpers shared by the web page and the report generators."""

from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Optional

from dateutil import parser as dateparser

_SUFFIXES = ["", "K", "M", "B", "T"]


def _as_number(value) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def format_number(value) -> str:
    """Compact count, e.g. 950 -> '950', 1234 -> '1.2K', 3400000 -> '3.4M'."""
    scaled = _as_number(value)
    magnitude = 0
    while abs(scaled) >= 1000 and magnitude < len(_SUFFIXES) - 1:
        scaled /= 1000
        magnitude += 1

    # 999,999 rounds up to 1000K; promote it to 1M instead.
    if round(abs(scaled), 1) >= 1000 and magnitude < len(_SUFFIXES) - 1:
        scaled /= 1000
        magnitude += 1

    text = f"{scaled:.1f}".rstrip("0").rstrip(".")
    return f"{text}{_SUFFIXES[magnitude]}"


def format_relative_date(raw_value: str, now: Optional[datetime] = None) -> str:
    """Human-friendly age of a publish timestamp ('3 days ago', 'Jan 5, 2024')."""
    try:
        published = dateparser.isoparse(raw_value)
    except (TypeError, ValueError):
        return raw_value or ""
    if published.tzinfo is None:
        published = published.replace(tzinfo=timezone.utc)

    now = now or datetime.now(timezone.utc)
    diff_days = math.ceil(abs((now - published).total_seconds()) / 86400)

    if diff_days < 7:
        return f"{diff_days} day{'s' if diff_days > 1 else ''} ago"
    if diff_days < 30:
        weeks = diff_days // 7
        return f"{weeks} week{'s' if weeks > 1 else ''} ago"
    if diff_days < 365:
        months = diff_days // 30
        return f"{months} month{'s' if months > 1 else ''} ago"
    return f"{published:%b} {published.day}, {published.year}"
