"""
Phase 6: Aggregation

Combines exact and semantic issues into one Analysis:
- issues sorted critical → low (stable, so ties keep detection order)
- per-severity counts
- health score = max(0, 100 - Σ penalty × count), penalties 20/12/6/2

Also holds the read-side helpers the dashboard uses on an existing analysis
(search/severity filter, column sort, select_issues for the list query,
health label, trend snapshot).
"""
from datetime import datetime
from typing import Dict, List, Optional

from .conf import CannibalizationConfig
from .constants import HEALTH_SCORE_LABELS, SEVERITY_ORDER, Severity
from .types import Analysis, Issue, TrendPoint

SORT_FIELDS = {
    'severity': lambda issue: SEVERITY_ORDER[issue.severity],
    'trafficLoss': lambda issue: issue.traffic_loss,
    'overlapScore': lambda issue: issue.overlap_score,
    'pages': lambda issue: len(issue.pages),
}


def run_phase6(
    domain: str,
    total_pages: int,
    total_keywords: int,
    issues: List[Issue],
    analyzed_at: datetime,
    config: CannibalizationConfig,
) -> Analysis:
    """
    Phase 6: Build the Analysis for one run.
    """
    ordered = sort_by_severity(issues)
    counts = count_by_severity(ordered)

    return Analysis(
        domain=domain,
        total_pages_analyzed=total_pages,
        total_keywords_analyzed=total_keywords,
        issue_count=len(ordered),
        issues_by_severity=counts,
        total_traffic_loss=sum(issue.traffic_loss for issue in ordered),
        total_potential_gain=sum(issue.potential_gain for issue in ordered),
        health_score=calculate_health_score(counts, config),
        issues=ordered,
        analyzed_at=analyzed_at,
    )


def sort_by_severity(issues: List[Issue]) -> List[Issue]:
    return sorted(issues, key=lambda issue: SEVERITY_ORDER[issue.severity])


def count_by_severity(issues: List[Issue]) -> Dict[Severity, int]:
    counts = {severity: 0 for severity in Severity}
    for issue in issues:
        counts[issue.severity] += 1
    return counts


def calculate_health_score(counts: Dict[Severity, int], config: CannibalizationConfig) -> int:
    penalty = sum(config.health_penalty(severity) * count for severity, count in counts.items())
    return max(0, 100 - penalty)


def health_score_label(score: int) -> str:
    for lower_bound, label in HEALTH_SCORE_LABELS:
        if score >= lower_bound:
            return label
    return HEALTH_SCORE_LABELS[-1][1]


def filter_issues(issues: List[Issue], search: str = '', severity: Optional[Severity] = None) -> List[Issue]:
    """
    Case-insensitive search over keyword, page urls and titles, plus an
    optional severity filter. Order is preserved.
    """
    result = issues

    if search:
        query = search.lower()
        result = [
            issue for issue in result
            if query in issue.keyword.lower()
            or any(query in p.url.lower() or query in p.title.lower() for p in issue.pages)
        ]

    if severity is not None:
        result = [issue for issue in result if issue.severity == severity]

    return result


def sort_issues(issues: List[Issue], field: str, direction: str = 'asc') -> List[Issue]:
    """
    Sort by one of SORT_FIELDS. Raises ValueError for unknown field/direction.
    """
    if field not in SORT_FIELDS:
        raise ValueError(f"Unknown sort field: {field}. Must be one of: {', '.join(SORT_FIELDS)}")
    if direction not in ('asc', 'desc'):
        raise ValueError(f"Unknown sort direction: {direction}")

    return sorted(issues, key=SORT_FIELDS[field], reverse=(direction == 'desc'))


def select_issues(
    issues: List[Issue],
    search: str = '',
    severity: Optional[str] = None,
    sort: Optional[str] = None,
    direction: str = 'asc',
) -> List[Issue]:
    """
    Issue-list query as the dashboard sends it (plain strings).
    Raises ValueError for an unknown severity, sort field or direction.
    """
    if severity:
        try:
            severity = Severity(severity)
        except ValueError:
            raise ValueError(
                f"Unknown severity: {severity}. Must be one of: {', '.join(Severity.values)}"
            )

    result = filter_issues(issues, search=search or '', severity=severity or None)
    if sort:
        result = sort_issues(result, sort, direction)
    return result


def snapshot_from_analysis(analysis: Analysis) -> TrendPoint:
    """The record an external history store keeps for one run."""
    return TrendPoint(
        date=analysis.analyzed_at.date(),
        issue_count=analysis.issue_count,
        health_score=analysis.health_score,
    )
