"""
Serializers for cannibalization analysis output.

Renders Analysis / Issue / IssuePage in the camelCase shape the dashboard
(issue list, summary cards, export dialog) reads.
"""
from rest_framework import serializers

from .phase5_recommend import build_fix_suggestion
from .phase6_aggregate import health_score_label, snapshot_from_analysis


class IssuePageSerializer(serializers.Serializer):
    """One page inside an issue, with its primary flag."""
    url = serializers.CharField(source='page.url')
    title = serializers.CharField(source='page.title')
    targetKeyword = serializers.CharField(source='page.target_keyword')
    currentRank = serializers.IntegerField(source='page.current_rank', allow_null=True)
    bestRank = serializers.IntegerField(source='page.best_rank', allow_null=True)
    traffic = serializers.IntegerField(source='page.traffic')
    lastUpdated = serializers.DateField(source='page.last_updated', allow_null=True)
    wordCount = serializers.IntegerField(source='page.word_count')
    pageAuthority = serializers.FloatField(source='page.page_authority')
    backlinks = serializers.IntegerField(source='page.backlinks')
    isPrimary = serializers.BooleanField(source='is_primary')


class FixSuggestionSerializer(serializers.Serializer):
    steps = serializers.ListField(child=serializers.CharField())
    estimatedTime = serializers.CharField(source='estimated_time')
    difficulty = serializers.CharField()


class IssueSerializer(serializers.Serializer):
    id = serializers.CharField()
    keyword = serializers.CharField()
    groupKind = serializers.CharField(source='kind')
    searchVolume = serializers.IntegerField(source='search_volume')
    keywordDifficulty = serializers.IntegerField(source='keyword_difficulty')
    pages = IssuePageSerializer(many=True)
    type = serializers.CharField()
    severity = serializers.CharField()
    overlapScore = serializers.IntegerField(source='overlap_score')
    trafficLoss = serializers.IntegerField(source='traffic_loss')
    potentialGain = serializers.IntegerField(source='potential_gain')
    recommendedAction = serializers.CharField(source='recommended_action')
    recommendation = serializers.CharField()
    fixSuggestion = serializers.SerializerMethodField()
    detectedAt = serializers.DateTimeField(source='detected_at')

    def get_fixSuggestion(self, obj):
        return FixSuggestionSerializer(build_fix_suggestion(obj.recommended_action)).data


class AnalysisSerializer(serializers.Serializer):
    domain = serializers.CharField()
    totalPagesAnalyzed = serializers.IntegerField(source='total_pages_analyzed')
    totalKeywordsAnalyzed = serializers.IntegerField(source='total_keywords_analyzed')
    issueCount = serializers.IntegerField(source='issue_count')
    issuesBySeverity = serializers.SerializerMethodField()
    totalTrafficLoss = serializers.IntegerField(source='total_traffic_loss')
    totalPotentialGain = serializers.IntegerField(source='total_potential_gain')
    healthScore = serializers.IntegerField(source='health_score')
    healthLabel = serializers.SerializerMethodField()
    issues = IssueSerializer(many=True)
    analyzedAt = serializers.DateTimeField(source='analyzed_at')
    snapshot = serializers.SerializerMethodField()

    def get_issuesBySeverity(self, obj):
        return {severity.value: count for severity, count in obj.issues_by_severity.items()}

    def get_healthLabel(self, obj):
        return health_score_label(obj.health_score)

    def get_snapshot(self, obj):
        return TrendPointSerializer(snapshot_from_analysis(obj)).data


class TrendPointSerializer(serializers.Serializer):
    date = serializers.DateField()
    issueCount = serializers.IntegerField(source='issue_count')
    healthScore = serializers.IntegerField(source='health_score')
