"""
Phase 3: Semantic Overlap Detection

Catches pages that target different but related keywords. Each theme in
SEMANTIC_THEMES lists keyword fragments; a page joins a theme when its
keyword contains a fragment or is contained by one.

Only pages whose keyword did NOT already produce an exact-keyword group are
considered. A theme becomes a group when it has:
- 2+ pages
- 2+ distinct keywords (otherwise it's just an exact-match cluster renamed)
- a dampened overlap score above SEMANTIC_MIN_OVERLAP
"""
import logging
from typing import List, Optional, Set, Tuple

from .conf import CannibalizationConfig
from .constants import GroupKind
from .phase4_score import score_group
from .types import CandidateGroup, GroupScore, Page
from .utils import keyword_matches_fragment, normalize_keyword

logger = logging.getLogger(__name__)


def run_phase3(
    pages: List[Page],
    covered_keywords: Set[str],
    config: CannibalizationConfig,
) -> List[Tuple[CandidateGroup, GroupScore]]:
    """
    Phase 3: Build and score semantic theme groups.

    Returns:
        (group, score) pairs for every theme that passes, in theme table order.
    """
    results = []

    for theme, fragments in config.semantic_themes.items():
        group = _build_theme_group(theme, fragments, pages, covered_keywords)
        if group is None:
            continue

        score = score_group(group, config)
        if score.raw_overlap <= config.semantic_min_overlap:
            logger.debug(f"Theme '{theme}' below overlap threshold ({score.raw_overlap:.1f})")
            continue

        results.append((group, score))

    return results


def _build_theme_group(
    theme: str,
    fragments: List[str],
    pages: List[Page],
    covered_keywords: Set[str],
) -> Optional[CandidateGroup]:
    members = []
    for index, page in enumerate(pages):
        keyword = normalize_keyword(page.target_keyword)
        if keyword in covered_keywords:
            continue
        if any(keyword_matches_fragment(keyword, fragment) for fragment in fragments):
            members.append((index, page))

    if len(members) < 2:
        return None

    distinct_keywords = {normalize_keyword(page.target_keyword) for _, page in members}
    if len(distinct_keywords) < 2:
        return None

    return CandidateGroup(
        kind=GroupKind.SEMANTIC,
        key=theme,
        label=f"{theme} (semantic group)",
        pages=members,
    )
