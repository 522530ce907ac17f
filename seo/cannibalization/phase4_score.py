"""
Phase 4: Primary Selection and Group Scoring

Primary page = highest traffic in the group; ties go to the page that comes
first in the corpus (sorted() is stable and groups are built in corpus order).

Overlap score (0-100), averaged over every secondary vs. the primary:
    title word overlap       × TITLE_WEIGHT
    same vs. related keyword × KEYWORD_WEIGHT
    rank proximity           × RANK_PROXIMITY_WEIGHT   (100 - gap × RANK_GAP_PENALTY)
plus the competitive window share × COMPETITIVE_WINDOW_WEIGHT:
    100 × (pages ranking in the top COMPETITIVE_WINDOW - 1) / (pages - 1)

Traffic loss = min(secondary traffic, total traffic × CONSOLIDATION_UPLIFT).

Severity score = overlap × 0.4 + min(loss / 100, 100) × 0.4 + pages × 10 × 0.2
    >= 70 critical, >= 50 high, >= 30 medium, else low
Every term has a non-negative weight, so raising any input never lowers the tier.

Semantic groups are scored the same way, then the rounded overlap × 0.7 and
loss × 0.5. Severity always uses the rounded, dampened values.
"""
from typing import List, Tuple

from .conf import CannibalizationConfig
from .constants import GroupKind, IssueType, Severity
from .types import CandidateGroup, GroupScore, Page
from .utils import common_title_words, normalize_keyword, round_half_up, title_overlap_ratio


def select_primary(members: List[Tuple[int, Page]]) -> List[Tuple[int, Page]]:
    """
    Order group members by traffic, highest first. members[0] is the primary.
    """
    return sorted(members, key=lambda member: member[1].traffic, reverse=True)


def score_group(group: CandidateGroup, config: CannibalizationConfig) -> GroupScore:
    """
    Severity is derived from the rounded overlap and loss the issue reports,
    so (overlap_score, traffic_loss, page count) always reproduce it.
    """
    ranked = [page for _, page in select_primary(group.pages)]

    overlap = float(round_half_up(calculate_overlap_score(ranked, config)))
    loss = calculate_traffic_loss(ranked, config)

    if group.kind == GroupKind.SEMANTIC:
        overlap *= config.semantic_overlap_dampening
        loss *= config.semantic_loss_dampening

    overlap_score = round_half_up(overlap)
    traffic_loss = round_half_up(loss)

    return GroupScore(
        overlap_score=overlap_score,
        traffic_loss=traffic_loss,
        severity=calculate_severity(overlap_score, traffic_loss, len(ranked), config),
        raw_overlap=overlap,
    )


def calculate_overlap_score(pages: List[Page], config: CannibalizationConfig) -> float:
    """
    Unrounded overlap score for pages ordered primary first.
    """
    if len(pages) < 2:
        return 0.0

    primary = pages[0]
    others = pages[1:]

    pair_total = 0.0
    for page in others:
        title_score = title_overlap_ratio(primary.title, page.title) * 100

        if normalize_keyword(primary.target_keyword) == normalize_keyword(page.target_keyword):
            keyword_score = config.same_keyword_score
        else:
            keyword_score = config.related_keyword_score

        rank_gap = abs(_position(primary, config) - _position(page, config))
        rank_score = max(0, 100 - rank_gap * config.rank_gap_penalty)

        pair_total += (
            title_score * config.title_weight
            + keyword_score * config.keyword_weight
            + rank_score * config.rank_proximity_weight
        )

    competing = sum(1 for page in pages if _in_window(page, config))
    window_score = 100 * max(0, competing - 1) / (len(pages) - 1)

    score = pair_total / len(others) + window_score * config.competitive_window_weight
    return min(100.0, max(0.0, score))


def calculate_traffic_loss(pages: List[Page], config: CannibalizationConfig) -> int:
    """
    Monthly visits the secondaries would hand over if consolidated.
    Never more than the secondaries actually get.
    """
    if len(pages) < 2:
        return 0

    total_traffic = sum(page.traffic for page in pages)
    secondary_traffic = total_traffic - pages[0].traffic

    loss = min(secondary_traffic, round_half_up(total_traffic * config.consolidation_uplift))
    return max(0, loss)


def calculate_severity(overlap_score: float, traffic_loss: float, page_count: int,
                       config: CannibalizationConfig) -> Severity:
    score = (
        overlap_score * config.severity_overlap_weight
        + min(traffic_loss / config.severity_loss_divisor, config.severity_loss_cap) * config.severity_loss_weight
        + page_count * 10 * config.severity_pages_weight
    )

    for severity in (Severity.CRITICAL, Severity.HIGH, Severity.MEDIUM):
        if score >= config.severity_threshold(severity):
            return severity
    return Severity.LOW


def determine_type(pages: List[Page], config: CannibalizationConfig) -> IssueType:
    """
    Why the pages overlap, checked in order:
    one keyword → same_keyword; > 3 shared title words → title_overlap;
    2+ pages in the competitive window → ranking_split; else similar_keyword.
    """
    keywords = {normalize_keyword(page.target_keyword) for page in pages}
    if len(keywords) == 1:
        return IssueType.SAME_KEYWORD

    if len(common_title_words(page.title for page in pages)) > 3:
        return IssueType.TITLE_OVERLAP

    if sum(1 for page in pages if _in_window(page, config)) > 1:
        return IssueType.RANKING_SPLIT

    return IssueType.SIMILAR_KEYWORD


def _position(page: Page, config: CannibalizationConfig) -> int:
    return page.current_rank if page.is_ranked else config.unranked_position


def _in_window(page: Page, config: CannibalizationConfig) -> bool:
    return page.is_ranked and page.current_rank <= config.competitive_window
