"""
Phase 5: Action Recommendation

Picks a remediation for each scored group from its two highest-traffic pages
(primary, secondary). Checks run in this order, first match wins:

1. secondary traffic < 20% of primary AND authority < 60% of primary → redirect
2. secondary traffic > 40% of primary → merge (critical/high) or differentiate
3. secondary not updated in 180+ days → redirect
4. by severity: critical → merge, high → redirect, medium → canonical, low → differentiate

Pages with no lastUpdated are never treated as stale.

The recommendation text is a pure function of the action and the two pages.
"""
from datetime import datetime

from .conf import CannibalizationConfig
from .constants import Action, Severity
from .types import FixSuggestion, Page
from .utils import days_since

SEVERITY_FALLBACK_ACTIONS = {
    Severity.CRITICAL: Action.MERGE,
    Severity.HIGH: Action.REDIRECT,
    Severity.MEDIUM: Action.CANONICAL,
    Severity.LOW: Action.DIFFERENTIATE,
}

RECOMMENDATION_TEMPLATES = {
    Action.MERGE: (
        'Merge "{secondary.title}" into "{primary.title}". The primary page has '
        '{primary.backlinks} backlinks vs {secondary.backlinks}. Combine the unique '
        'content from both, then redirect.'
    ),
    Action.REDIRECT: (
        '301 redirect "{secondary.url}" to "{primary.url}". The secondary page only gets '
        '{secondary.traffic} visits vs {primary.traffic}. Preserve any unique value by '
        'updating the primary first.'
    ),
    Action.DIFFERENTIATE: (
        'Differentiate content focus. Consider changing "{secondary.title}" to target a '
        'more specific long-tail variation or different search intent.'
    ),
    Action.CANONICAL: (
        'Add canonical tag on "{secondary.url}" pointing to "{primary.url}". This tells '
        'Google which version to prioritize while keeping both pages live.'
    ),
    Action.NOINDEX: (
        'Add noindex to "{secondary.url}". Keep the page accessible for users but remove '
        'from Google\'s index to consolidate ranking signals.'
    ),
    Action.REOPTIMIZE: (
        'Reoptimize "{secondary.title}" for a different keyword. Current target '
        '"{secondary.target_keyword}" conflicts with the primary page.'
    ),
}

FIX_PLAYBOOK = {
    Action.REDIRECT: {
        'steps': [
            'Review content on both pages for unique value',
            'Update primary page with any missing information',
            'Set up 301 redirect from secondary to primary',
            'Update internal links pointing to old URL',
            'Submit updated sitemap to Google Search Console',
        ],
        'estimated_time': '1-2 hours',
        'difficulty': 'easy',
    },
    Action.MERGE: {
        'steps': [
            'Create comprehensive outline combining both pages',
            'Write new merged content preserving best elements',
            'Update images, links, and media',
            'Publish merged page on primary URL',
            'Set up 301 redirect from secondary URL',
            'Update internal links and sitemap',
        ],
        'estimated_time': '3-4 hours',
        'difficulty': 'medium',
    },
    Action.DIFFERENTIATE: {
        'steps': [
            'Identify unique angle for secondary page',
            'Research alternative long-tail keywords',
            'Rewrite title and meta description',
            'Update content to focus on new angle',
            'Add unique value not in primary page',
        ],
        'estimated_time': '2-3 hours',
        'difficulty': 'medium',
    },
    Action.CANONICAL: {
        'steps': [
            'Add canonical tag to secondary page head',
            'Point canonical to primary page URL',
            'Verify implementation with browser tools',
        ],
        'estimated_time': '15 mins',
        'difficulty': 'easy',
    },
    Action.NOINDEX: {
        'steps': [
            'Add noindex meta tag to secondary page',
            'Remove page from sitemap',
            'Request removal in Google Search Console (optional)',
        ],
        'estimated_time': '15 mins',
        'difficulty': 'easy',
    },
    Action.REOPTIMIZE: {
        'steps': [
            'Research new target keyword with lower competition',
            'Update page title and H1 for new keyword',
            'Rewrite meta description',
            'Adjust content to match new keyword intent',
            'Update internal links anchor text',
        ],
        'estimated_time': '2-3 hours',
        'difficulty': 'medium',
    },
}


def recommend_action(
    primary: Page,
    secondary: Page,
    severity: Severity,
    as_of: datetime,
    config: CannibalizationConfig,
) -> Action:
    """
    Decide the remediation for a primary/secondary pair.

    Args:
        as_of: analysis timestamp, used for the staleness check
    """
    # Weak secondary: nothing worth keeping
    if (secondary.traffic < primary.traffic * config.redirect_traffic_ratio
            and secondary.page_authority < primary.page_authority * config.redirect_authority_ratio):
        return Action.REDIRECT

    # Both pages pull real traffic
    if secondary.traffic > primary.traffic * config.merge_traffic_ratio:
        if severity in (Severity.CRITICAL, Severity.HIGH):
            return Action.MERGE
        return Action.DIFFERENTIATE

    age_days = days_since(secondary.last_updated, as_of)
    if age_days is not None and age_days > config.stale_after_days:
        return Action.REDIRECT

    return SEVERITY_FALLBACK_ACTIONS[severity]


def generate_recommendation(primary: Page, secondary: Page, action: Action) -> str:
    return RECOMMENDATION_TEMPLATES[action].format(primary=primary, secondary=secondary)


def build_fix_suggestion(action: Action) -> FixSuggestion:
    """Numbered remediation steps with effort estimate for an action."""
    playbook = FIX_PLAYBOOK[action]
    return FixSuggestion(
        steps=[f"{number}. {step}" for number, step in enumerate(playbook['steps'], start=1)],
        estimated_time=playbook['estimated_time'],
        difficulty=playbook['difficulty'],
    )
