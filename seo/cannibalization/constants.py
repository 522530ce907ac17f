"""
Constants for cannibalization detection.
Category enums, theme and keyword-metrics tables, and every policy knob.

Every name in POLICY_DEFAULTS can be overridden through
settings.CANNIBALIZATION (see conf.py).
"""
from django.db import models


# =============================================================================
# CATEGORIES
# =============================================================================

class Severity(models.TextChoices):
    CRITICAL = 'critical', 'Critical'
    HIGH = 'high', 'High'
    MEDIUM = 'medium', 'Medium'
    LOW = 'low', 'Low'


class IssueType(models.TextChoices):
    SAME_KEYWORD = 'same_keyword', 'Same Keyword'
    SIMILAR_KEYWORD = 'similar_keyword', 'Similar Keywords'
    TITLE_OVERLAP = 'title_overlap', 'Title Overlap'
    RANKING_SPLIT = 'ranking_split', 'Ranking Split'


class Action(models.TextChoices):
    MERGE = 'merge', 'Merge Pages'
    REDIRECT = 'redirect', '301 Redirect'
    DIFFERENTIATE = 'differentiate', 'Differentiate Content'
    CANONICAL = 'canonical', 'Add Canonical'
    NOINDEX = 'noindex', 'Noindex Page'
    REOPTIMIZE = 'reoptimize', 'Change Target Keyword'


class GroupKind(models.TextChoices):
    EXACT = 'exact', 'Exact keyword'
    SEMANTIC = 'semantic', 'Semantic group'


# Sort order: critical first
SEVERITY_ORDER = {
    Severity.CRITICAL: 0,
    Severity.HIGH: 1,
    Severity.MEDIUM: 2,
    Severity.LOW: 3,
}

ACTION_DESCRIPTIONS = {
    Action.MERGE: 'Combine both pages into a single, comprehensive article',
    Action.REDIRECT: 'Redirect the weaker page to the stronger one with 301',
    Action.DIFFERENTIATE: 'Make the content focus on different aspects of the topic',
    Action.CANONICAL: 'Point canonical tag to the primary page',
    Action.NOINDEX: 'Remove weaker page from index while keeping it live',
    Action.REOPTIMIZE: 'Change one page to target a different keyword',
}

# Actions whose fix moves authority from the secondary URL onto the primary
REDIRECT_PLAN_ACTIONS = {Action.MERGE, Action.REDIRECT, Action.CANONICAL}


# =============================================================================
# REFERENCE TABLES
# =============================================================================

# Theme → keyword fragments for semantic grouping
SEMANTIC_THEMES = {
    'seo': ['seo tools', 'seo software', 'search engine optimization'],
    'keyword': ['keyword research', 'keyword analysis', 'keyword tool'],
    'content': ['content marketing', 'content strategy', 'content writing'],
    'ai writing': ['ai writing', 'ai content', 'ai writer'],
    'link': ['link building', 'backlinks', 'link strategy'],
}

# Static keyword metrics (stand-in for a real keyword-metrics service)
KEYWORD_VOLUMES = {
    'best seo tools': 22000,
    'keyword research': 33000,
    'ai writing tools': 18000,
    'content marketing': 27000,
    'link building': 14000,
    'seo (semantic group)': 45000,
    'keyword (semantic group)': 38000,
    'content (semantic group)': 32000,
}

KEYWORD_DIFFICULTIES = {
    'best seo tools': 52,
    'keyword research': 48,
    'ai writing tools': 38,
    'content marketing': 55,
    'link building': 62,
}

# Bounds for the random estimate used on a metrics table miss: [low, high)
FALLBACK_VOLUME_RANGE = (5000, 25000)
FALLBACK_DIFFICULTY_RANGE = (30, 70)


# =============================================================================
# POLICY KNOBS
# =============================================================================

POLICY_DEFAULTS = {
    # Overlap score weights (sum to 1.0)
    'TITLE_WEIGHT': 0.3,
    'KEYWORD_WEIGHT': 0.4,
    'RANK_PROXIMITY_WEIGHT': 0.15,
    'COMPETITIVE_WINDOW_WEIGHT': 0.15,
    # Keyword component: same keyword vs. related keyword
    'SAME_KEYWORD_SCORE': 100,
    'RELATED_KEYWORD_SCORE': 50,
    # Each position of rank difference costs this many proximity points
    'RANK_GAP_PENALTY': 5,
    # Positions counted as "competing" (top N)
    'COMPETITIVE_WINDOW': 20,
    # Position assumed for unranked pages
    'UNRANKED_POSITION': 50,

    # Share of the group's total traffic that consolidation would add
    'CONSOLIDATION_UPLIFT': 0.4,

    # Severity = overlap * w + min(loss / divisor, cap) * w + pages * 10 * w
    'SEVERITY_OVERLAP_WEIGHT': 0.4,
    'SEVERITY_LOSS_WEIGHT': 0.4,
    'SEVERITY_LOSS_DIVISOR': 100,
    'SEVERITY_LOSS_CAP': 100,
    'SEVERITY_PAGES_WEIGHT': 0.2,
    'SEVERITY_THRESHOLDS': {
        'critical': 70,
        'high': 50,
        'medium': 30,
    },

    # Semantic groups: weaker confidence than exact matches
    'SEMANTIC_OVERLAP_DAMPENING': 0.7,
    'SEMANTIC_LOSS_DAMPENING': 0.5,
    'SEMANTIC_MIN_OVERLAP': 30,

    # Recoverable share of traffic loss
    'EXACT_GAIN_RATIO': 0.7,
    'SEMANTIC_GAIN_RATIO': 0.5,

    # Action recommender ratios (secondary vs. primary)
    'REDIRECT_TRAFFIC_RATIO': 0.2,
    'REDIRECT_AUTHORITY_RATIO': 0.6,
    'MERGE_TRAFFIC_RATIO': 0.4,
    'STALE_AFTER_DAYS': 180,

    # Health score penalty per issue
    'HEALTH_PENALTIES': {
        'critical': 20,
        'high': 12,
        'medium': 6,
        'low': 2,
    },

    # Reference tables
    'SEMANTIC_THEMES': SEMANTIC_THEMES,
    'KEYWORD_VOLUMES': KEYWORD_VOLUMES,
    'KEYWORD_DIFFICULTIES': KEYWORD_DIFFICULTIES,
}

# Health score bands (lower bound, label), first match wins
HEALTH_SCORE_LABELS = [
    (80, 'Excellent'),
    (60, 'Good'),
    (40, 'Needs Attention'),
    (0, 'Critical'),
]

ID_PREFIXES = {
    GroupKind.EXACT: 'cannibal',
    GroupKind.SEMANTIC: 'semantic',
}
