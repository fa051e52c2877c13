"""
Module: engine.lookup

Purpose:
    Score lookup for picking a student's total: filter the attainable
    totals by what has been typed so far.

Key Functions:
    - filter_scores(): Totals whose digits contain the query
    - parse_score(): Accept typed text only when it is an attainable total
"""

from __future__ import annotations

from typing import Optional, Sequence


def filter_scores(options: Sequence[int], query: str = "") -> list[int]:
    """
    Keep the options whose decimal form contains ``query``.

    Args:
        options: Attainable totals, in display order
        query: Typed text (blank keeps everything)

    Returns:
        Matching options in their original order

    Example:
        >>> filter_scores([22, 21, 12, 11], "2")
        [22, 21, 12]
    """
    query = query.strip()
    if not query:
        return list(options)
    return [option for option in options if query in str(option)]


def parse_score(text: str, options: Sequence[int]) -> Optional[int]:
    """
    Convert typed text to a score if it names one of the options.

    Returns:
        The score, or None for blank, non-numeric or unattainable text
    """
    text = text.strip()
    if not text:
        return None
    try:
        value = int(text)
    except ValueError:
        return None
    return value if value in options else None
