"""
Test Group F: Phase 6 Aggregation

Tests severity ordering, counts, totals, health score, and the dashboard's
filter/sort/snapshot helpers.
"""
from datetime import date, datetime, timezone

import pytest
from django.test import SimpleTestCase

from seo.cannibalization.conf import build_config
from seo.cannibalization.constants import Action, GroupKind, IssueType, Severity
from seo.cannibalization.phase6_aggregate import (
    calculate_health_score,
    count_by_severity,
    filter_issues,
    health_score_label,
    run_phase6,
    select_issues,
    snapshot_from_analysis,
    sort_issues,
)
from seo.cannibalization.types import Issue, IssuePage, Page

NOW = datetime(2024, 12, 11, 12, 0, tzinfo=timezone.utc)


def make_issue(keyword, severity, traffic_loss=100, potential_gain=70, overlap=50, page_count=2):
    """Helper to build an Issue without running the pipeline."""
    pages = [
        IssuePage(
            page=Page(
                url=f'/{keyword.replace(" ", "-")}-{i}',
                title=f'{keyword.title()} Page {i}',
                target_keyword=keyword,
                traffic=1000 - i,
            ),
            is_primary=(i == 0),
            corpus_index=i,
        )
        for i in range(page_count)
    ]
    return Issue(
        id=f'cannibal-{keyword.replace(" ", "-")}',
        keyword=keyword,
        kind=GroupKind.EXACT,
        pages=pages,
        type=IssueType.SAME_KEYWORD,
        severity=severity,
        overlap_score=overlap,
        traffic_loss=traffic_loss,
        potential_gain=potential_gain,
        recommended_action=Action.CANONICAL,
        recommendation='Add canonical tag',
        search_volume=1000,
        keyword_difficulty=40,
        detected_at=NOW,
    )


class TestRunPhase6(SimpleTestCase):

    def setUp(self):
        self.config = build_config()

    def aggregate(self, issues):
        return run_phase6('example.com', 10, 8, issues, NOW, self.config)

    def test_empty(self):
        analysis = self.aggregate([])

        assert analysis.issue_count == 0
        assert analysis.health_score == 100
        assert analysis.total_traffic_loss == 0
        assert analysis.issues_by_severity == {s: 0 for s in Severity}

    def test_sorted_critical_first_and_stable(self):
        issues = [
            make_issue('a', Severity.LOW),
            make_issue('b', Severity.CRITICAL),
            make_issue('c', Severity.LOW),
            make_issue('d', Severity.CRITICAL),
            make_issue('e', Severity.MEDIUM),
        ]

        analysis = self.aggregate(issues)

        assert [i.keyword for i in analysis.issues] == ['b', 'd', 'e', 'a', 'c']

    def test_counts_and_totals(self):
        issues = [
            make_issue('a', Severity.HIGH, traffic_loss=1000, potential_gain=700),
            make_issue('b', Severity.HIGH, traffic_loss=500, potential_gain=350),
            make_issue('c', Severity.LOW, traffic_loss=10, potential_gain=5),
        ]

        analysis = self.aggregate(issues)

        assert analysis.issues_by_severity[Severity.HIGH] == 2
        assert analysis.issues_by_severity[Severity.LOW] == 1
        assert sum(analysis.issues_by_severity.values()) == analysis.issue_count == 3
        assert analysis.total_traffic_loss == 1510
        assert analysis.total_potential_gain == 1055
        assert analysis.health_score == 100 - 24 - 2
        assert analysis.domain == 'example.com'
        assert analysis.total_pages_analyzed == 10
        assert analysis.total_keywords_analyzed == 8
        assert analysis.analyzed_at == NOW


class TestHealthScore(SimpleTestCase):

    def setUp(self):
        self.config = build_config()

    def health(self, **counts):
        full = {s: counts.get(s.value, 0) for s in Severity}
        return calculate_health_score(full, self.config)

    def test_penalties(self):
        assert self.health(critical=1) == 80
        assert self.health(high=1) == 88
        assert self.health(medium=1) == 94
        assert self.health(low=1) == 98
        assert self.health(critical=2, high=1) == 48

    def test_floor_at_zero(self):
        assert self.health(critical=6) == 0

    def test_each_critical_issue_costs_twenty(self):
        previous = self.health()
        for count in range(1, 8):
            current = self.health(critical=count)
            assert current == max(0, previous - 20)
            previous = current

    def test_any_issue_lowers_health(self):
        for severity in Severity:
            assert self.health(**{severity.value: 1}) < 100

    def test_count_by_severity_includes_every_tier(self):
        counts = count_by_severity([make_issue('a', Severity.MEDIUM)])
        assert counts == {
            Severity.CRITICAL: 0,
            Severity.HIGH: 0,
            Severity.MEDIUM: 1,
            Severity.LOW: 0,
        }

    def test_labels(self):
        assert health_score_label(100) == 'Excellent'
        assert health_score_label(80) == 'Excellent'
        assert health_score_label(60) == 'Good'
        assert health_score_label(59) == 'Needs Attention'
        assert health_score_label(10) == 'Critical'
        assert health_score_label(0) == 'Critical'


class TestFilterAndSort(SimpleTestCase):

    def setUp(self):
        self.issues = [
            make_issue('best seo tools', Severity.MEDIUM, traffic_loss=800, overlap=70),
            make_issue('keyword research', Severity.LOW, traffic_loss=650, overlap=51, page_count=3),
            make_issue('ai writing tools', Severity.CRITICAL, traffic_loss=920, overlap=90),
        ]

    def test_search_keyword(self):
        result = filter_issues(self.issues, search='TOOLS')
        assert [i.keyword for i in result] == ['best seo tools', 'ai writing tools']

    def test_search_url(self):
        result = filter_issues(self.issues, search='/keyword-research-2')
        assert [i.keyword for i in result] == ['keyword research']

    def test_severity_filter(self):
        result = filter_issues(self.issues, severity=Severity.LOW)
        assert [i.keyword for i in result] == ['keyword research']

    def test_no_filters(self):
        assert filter_issues(self.issues) == self.issues

    def test_sort_traffic_loss_desc(self):
        result = sort_issues(self.issues, 'trafficLoss', 'desc')
        assert [i.traffic_loss for i in result] == [920, 800, 650]

    def test_sort_severity(self):
        result = sort_issues(self.issues, 'severity')
        assert [i.severity for i in result] == [Severity.CRITICAL, Severity.MEDIUM, Severity.LOW]

    def test_sort_pages(self):
        result = sort_issues(self.issues, 'pages', 'desc')
        assert result[0].keyword == 'keyword research'

    def test_sort_unknown_field(self):
        with pytest.raises(ValueError):
            sort_issues(self.issues, 'volume')

    def test_sort_unknown_direction(self):
        with pytest.raises(ValueError):
            sort_issues(self.issues, 'severity', 'sideways')

    def test_select_issues_from_strings(self):
        result = select_issues(self.issues, search='tools', severity='medium')
        assert [i.keyword for i in result] == ['best seo tools']

    def test_select_issues_sorted(self):
        result = select_issues(self.issues, sort='overlapScore', direction='desc')
        assert [i.overlap_score for i in result] == [90, 70, 51]

    def test_select_issues_no_query(self):
        assert select_issues(self.issues) == self.issues

    def test_select_issues_unknown_severity(self):
        with pytest.raises(ValueError):
            select_issues(self.issues, severity='urgent')


class TestSnapshot(SimpleTestCase):

    def test_snapshot(self):
        analysis = run_phase6('example.com', 4, 2, [make_issue('a', Severity.HIGH)], NOW, build_config())

        point = snapshot_from_analysis(analysis)

        assert point.date == date(2024, 12, 11)
        assert point.issue_count == 1
        assert point.health_score == 88
