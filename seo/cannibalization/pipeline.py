"""
Cannibalization Detection Pipeline Orchestrator

Runs all phases sequentially:
1. Phase 1: Ingest and validate the page corpus
2. Phase 2: Exact-keyword grouping
3. Phase 3: Semantic overlap detection
4. Phase 4: Primary selection and scoring
5. Phase 5: Action recommendation
6. Phase 6: Aggregation (sort, counts, health score)

Main entry point: run_analysis(domain, pages)

A run is a pure function of its inputs apart from the timestamp and the
keyword-metrics provider. Input records are never modified; every Issue
holds its own IssuePage views.
"""
import logging
from datetime import datetime
from typing import Iterable, List, Optional, Set

from django.utils import timezone

from . import phase1_ingest
from . import phase2_exact_groups
from . import phase3_semantic
from . import phase4_score
from . import phase5_recommend
from . import phase6_aggregate
from .conf import CannibalizationConfig, get_config
from .constants import ID_PREFIXES, GroupKind, IssueType
from .enrichment import KeywordMetricsProvider, StaticKeywordMetrics
from .types import Analysis, CandidateGroup, GroupScore, Issue, IssuePage
from .utils import build_issue_id, round_half_up

logger = logging.getLogger(__name__)


def run_analysis(
    domain: str,
    pages: Iterable,
    config: Optional[CannibalizationConfig] = None,
    metrics: Optional[KeywordMetricsProvider] = None,
    now: Optional[datetime] = None,
) -> Analysis:
    """
    Run complete cannibalization analysis over one corpus snapshot.

    Args:
        domain: Site the corpus belongs to (reported back, not fetched)
        pages: Page objects or camelCase page records
        config: Policy knobs (default: settings.CANNIBALIZATION over defaults)
        metrics: Keyword metrics provider (default: StaticKeywordMetrics)
        now: Analysis timestamp (default: timezone.now())

    Returns:
        Analysis with issues sorted critical first

    Raises:
        CorpusValidationError: if any page record is malformed
    """
    config = config or get_config()
    metrics = metrics or StaticKeywordMetrics.from_config(config)
    now = now or timezone.now()

    # =========================================================================
    # PHASE 1: Ingest and Validate
    # =========================================================================
    corpus = phase1_ingest.load_pages(pages)

    # =========================================================================
    # PHASE 2: Exact-Keyword Groups
    # =========================================================================
    exact_groups, covered_keywords = phase2_exact_groups.run_phase2(corpus)
    scored_groups = [(group, phase4_score.score_group(group, config)) for group in exact_groups]

    # =========================================================================
    # PHASE 3: Semantic Groups (scored inside, threshold applied)
    # =========================================================================
    scored_groups += phase3_semantic.run_phase3(corpus, covered_keywords, config)

    # =========================================================================
    # PHASE 4-5: Primary, Recommendation, Enrichment
    # =========================================================================
    used_ids = set()
    issues = [
        _build_issue(group, score, config, metrics, now, used_ids)
        for group, score in scored_groups
    ]

    # =========================================================================
    # PHASE 6: Aggregate
    # =========================================================================
    analysis = phase6_aggregate.run_phase6(
        domain=domain,
        total_pages=len(corpus),
        total_keywords=phase2_exact_groups.count_distinct_keywords(corpus),
        issues=issues,
        analyzed_at=now,
        config=config,
    )

    logger.info(
        f"Cannibalization analysis for {domain}: {analysis.total_pages_analyzed} pages, "
        f"{analysis.issue_count} issues, health {analysis.health_score}"
    )
    return analysis


def _build_issue(
    group: CandidateGroup,
    score: GroupScore,
    config: CannibalizationConfig,
    metrics: KeywordMetricsProvider,
    now: datetime,
    used_ids: Set[str],
) -> Issue:
    ranked = phase4_score.select_primary(group.pages)
    issue_pages = [
        IssuePage(page=page, is_primary=(position == 0), corpus_index=index)
        for position, (index, page) in enumerate(ranked)
    ]
    primary, secondary = ranked[0][1], ranked[1][1]

    action = phase5_recommend.recommend_action(primary, secondary, score.severity, now, config)

    if group.kind == GroupKind.SEMANTIC:
        issue_type = IssueType.SIMILAR_KEYWORD
        gain_ratio = config.semantic_gain_ratio
    else:
        issue_type = phase4_score.determine_type([page for _, page in ranked], config)
        gain_ratio = config.exact_gain_ratio

    keyword_metrics = metrics.lookup(group.label)

    logger.debug(
        f"{group.kind.label} group '{group.label}': {len(ranked)} pages, "
        f"overlap {score.overlap_score}, severity {score.severity.value}, action {action.value}"
    )

    return Issue(
        id=build_issue_id(ID_PREFIXES[group.kind], group.key, used_ids),
        keyword=group.label,
        kind=group.kind,
        pages=issue_pages,
        type=issue_type,
        severity=score.severity,
        overlap_score=score.overlap_score,
        traffic_loss=score.traffic_loss,
        potential_gain=round_half_up(score.traffic_loss * gain_ratio),
        recommended_action=action,
        recommendation=phase5_recommend.generate_recommendation(primary, secondary, action),
        search_volume=keyword_metrics.volume,
        keyword_difficulty=keyword_metrics.difficulty,
        detected_at=now,
    )
