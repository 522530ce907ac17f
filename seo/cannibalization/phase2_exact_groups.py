"""
Phase 2: Exact-Keyword Grouping

Partitions the corpus by normalized target keyword. Every keyword shared by
two or more pages becomes a candidate group; single-page keywords are not
competing with anything and are dropped here.

Returns the groups plus the set of keywords they cover, so Phase 3 never
re-flags the same pages under a theme name.
"""
from collections import defaultdict
from typing import List, Set, Tuple

from .constants import GroupKind
from .types import CandidateGroup, Page
from .utils import normalize_keyword


def run_phase2(pages: List[Page]) -> Tuple[List[CandidateGroup], Set[str]]:
    """
    Phase 2: Group pages by exact (normalized) keyword.

    Returns:
        (groups in first-seen keyword order, covered keyword set)
    """
    keyword_groups = defaultdict(list)

    for index, page in enumerate(pages):
        keyword_groups[normalize_keyword(page.target_keyword)].append((index, page))

    groups = []
    covered = set()

    for keyword, members in keyword_groups.items():
        if len(members) < 2:
            continue
        groups.append(CandidateGroup(
            kind=GroupKind.EXACT,
            key=keyword,
            label=keyword,
            pages=members,
        ))
        covered.add(keyword)

    return groups, covered


def count_distinct_keywords(pages: List[Page]) -> int:
    """Distinct normalized target keywords across the corpus."""
    return len({normalize_keyword(page.target_keyword) for page in pages})
