"""
Utility functions for cannibalization detection.
Keyword normalization, title word sets, rounding, content age, issue ids.
"""
import math
import re
from datetime import date, datetime
from typing import Iterable, Optional, Set

from django.utils.text import slugify


def normalize_keyword(keyword: str) -> str:
    """
    Normalize a target keyword into its grouping key.
    Case-folded and trimmed; inner whitespace is left as-is.

    Example:
        '  Best SEO Tools ' → 'best seo tools'
    """
    if not keyword:
        return ''
    return keyword.strip().casefold()


def keyword_matches_fragment(keyword: str, fragment: str) -> bool:
    """
    Case-insensitive two-way substring test used by semantic grouping.

    Example:
        keyword='best seo tools', fragment='seo tools' → True
        keyword='seo', fragment='seo software' → True
        keyword='link building', fragment='seo tools' → False
    """
    keyword = normalize_keyword(keyword)
    fragment = normalize_keyword(fragment)
    if not keyword or not fragment:
        return False
    return fragment in keyword or keyword in fragment


def title_words(title: str) -> Set[str]:
    """
    Lower-cased whitespace tokens of a title.

    Example:
        'Best SEO Tools 2024' → {'best', 'seo', 'tools', '2024'}
    """
    if not title:
        return set()
    return set(title.lower().split())


def title_overlap_ratio(title_a: str, title_b: str) -> float:
    """
    Shared words divided by the larger title's word count (0.0 - 1.0).
    """
    words_a = title_words(title_a)
    words_b = title_words(title_b)
    largest = max(len(words_a), len(words_b))
    if not largest:
        return 0.0
    return len(words_a & words_b) / largest


def common_title_words(titles: Iterable[str]) -> Set[str]:
    """Words present in every title."""
    common = None
    for title in titles:
        words = title_words(title)
        common = words if common is None else common & words
    return common or set()


def round_half_up(value: float) -> int:
    """Round .5 away from zero for non-negative values (2.5 → 3, not 2)."""
    return int(math.floor(value + 0.5))


def days_since(value: Optional[date], as_of: datetime) -> Optional[int]:
    """
    Whole days between value and as_of, or None if value is missing.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        value = value.date()
    return (as_of.date() - value).days


def build_issue_id(prefix: str, key: str, used: Set[str]) -> str:
    """
    Deterministic issue id from a grouping key, unique within `used`.

    Example:
        ('cannibal', 'best seo tools') → 'cannibal-best-seo-tools'
        a second key slugifying the same way → 'cannibal-best-seo-tools-2'
    """
    slug = slugify(key) or re.sub(r'\s+', '-', key.strip()) or 'group'
    base = f"{prefix}-{slug}"
    candidate = base
    suffix = 2
    while candidate in used:
        candidate = f"{base}-{suffix}"
        suffix += 1
    used.add(candidate)
    return candidate
