"""
Phase 7: Reports and Fix Plans

Generates shareable output from an Analysis:
- Issue report CSV (optional recommendation and page detail columns)
- Redirect plan CSV (secondary → primary for merge/redirect/canonical)
- Markdown action plan grouped by recommended action

IMPORTANT: Nothing here executes a fix. Every redirect row is written with
status pending_review and needs user approval.
"""
import csv
import io
from collections import defaultdict
from typing import Dict, Iterable, List, Optional

from .constants import ACTION_DESCRIPTIONS, REDIRECT_PLAN_ACTIONS, Action, Severity
from .phase6_aggregate import health_score_label
from .types import Analysis, Issue

REDIRECT_CONFIDENCE = {
    Action.REDIRECT: 'high',
    Action.MERGE: 'medium',
    Action.CANONICAL: 'medium',
}


def export_issues_csv(
    issues: List[Issue],
    include_recommendations: bool = True,
    include_page_details: bool = True,
    severities: Optional[Iterable[Severity]] = None,
) -> str:
    """
    Issue report as CSV text.

    Page detail columns cover the two highest-traffic pages; unranked pages
    get an empty position.
    """
    if severities is not None:
        wanted = set(severities)
        issues = [issue for issue in issues if issue.severity in wanted]

    headers = ['Keyword', 'Severity', 'Type', 'Traffic Loss', 'Potential Gain']
    if include_recommendations:
        headers += ['Recommended Action', 'Recommendation']
    if include_page_details:
        headers += [
            'Page 1 URL', 'Page 1 Position', 'Page 1 Traffic',
            'Page 2 URL', 'Page 2 Position', 'Page 2 Traffic',
        ]

    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(headers)

    for issue in issues:
        row = [
            issue.keyword,
            issue.severity.label,
            issue.type.value,
            issue.traffic_loss,
            issue.potential_gain,
        ]
        if include_recommendations:
            row += [issue.recommended_action.label, issue.recommendation]
        if include_page_details:
            for issue_page in issue.pages[:2]:
                rank = issue_page.page.current_rank
                row += [issue_page.url, rank if rank is not None else '', issue_page.traffic]
        writer.writerow(row)

    return output.getvalue()


def build_redirect_plan(issues: List[Issue]) -> List[Dict]:
    """
    Redirect rows for issues whose fix sends the secondaries to the primary.

    Returns list of dicts:
    {
        'source_url': str,
        'target_url': str,
        'action': str,
        'confidence': str ('high', 'medium'),
        'reason': str,
    }
    """
    plan = []

    for issue in issues:
        action = issue.recommended_action
        if action not in REDIRECT_PLAN_ACTIONS:
            continue

        primary = issue.primary
        for issue_page in issue.pages[1:]:
            plan.append({
                'source_url': issue_page.url,
                'target_url': primary.url,
                'action': action.value,
                'confidence': REDIRECT_CONFIDENCE[action],
                'reason': f"{action.label} for '{issue.keyword}' ({issue.severity.label})",
            })

    return plan


def generate_redirect_csv(redirect_plan: List[Dict]) -> str:
    """
    Columns: Source URL, Target URL, Action, Confidence, Reason, Status
    """
    output = io.StringIO()
    writer = csv.writer(output)

    writer.writerow(['Source URL', 'Target URL', 'Action', 'Confidence', 'Reason', 'Status'])

    for redirect in redirect_plan:
        writer.writerow([
            redirect['source_url'],
            redirect['target_url'],
            redirect['action'],
            redirect['confidence'],
            redirect['reason'],
            'pending_review',  # User must approve
        ])

    return output.getvalue()


def generate_action_plan(analysis: Analysis, per_action_limit: int = 5) -> str:
    """
    Generate human-readable action plan.
    """
    lines = []
    lines.append(f"# Cannibalization Fix Action Plan: {analysis.domain}\n")
    lines.append(
        f"Health score: {analysis.health_score}/100 ({health_score_label(analysis.health_score)})"
    )
    lines.append(f"Total issues found: {analysis.issue_count}")
    lines.append(
        f"Estimated traffic loss: {analysis.total_traffic_loss}/mo, "
        f"recoverable: {analysis.total_potential_gain}/mo"
    )
    lines.append("")

    by_action = defaultdict(list)
    for issue in analysis.issues:
        by_action[issue.recommended_action].append(issue)

    for action, issues in by_action.items():
        lines.append(f"## {action.label} ({len(issues)} issues)")
        lines.append(f"**Description:** {ACTION_DESCRIPTIONS[action]}\n")

        for issue in issues[:per_action_limit]:
            lines.append(f"- **{issue.keyword}**: {len(issue.pages)} pages")
            lines.append(
                f"  Severity: {issue.severity.label} | Overlap: {issue.overlap_score} "
                f"| Traffic loss: {issue.traffic_loss}"
            )
            lines.append(f"  {issue.recommendation}\n")

        if len(issues) > per_action_limit:
            lines.append(f"... and {len(issues) - per_action_limit} more\n")

        lines.append("")

    return '\n'.join(lines)
