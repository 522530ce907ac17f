"""
Engine configuration.

Resolves POLICY_DEFAULTS plus settings.CANNIBALIZATION overrides into an
immutable CannibalizationConfig. Pass a config to run_analysis() directly to
bypass Django settings (tests, one-off what-if runs).
"""
import copy
from dataclasses import dataclass, fields
from typing import Dict, List, Optional

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from .constants import POLICY_DEFAULTS, Severity


@dataclass(frozen=True)
class CannibalizationConfig:
    title_weight: float
    keyword_weight: float
    rank_proximity_weight: float
    competitive_window_weight: float
    same_keyword_score: float
    related_keyword_score: float
    rank_gap_penalty: float
    competitive_window: int
    unranked_position: int
    consolidation_uplift: float
    severity_overlap_weight: float
    severity_loss_weight: float
    severity_loss_divisor: float
    severity_loss_cap: float
    severity_pages_weight: float
    severity_thresholds: Dict[str, float]
    semantic_overlap_dampening: float
    semantic_loss_dampening: float
    semantic_min_overlap: float
    exact_gain_ratio: float
    semantic_gain_ratio: float
    redirect_traffic_ratio: float
    redirect_authority_ratio: float
    merge_traffic_ratio: float
    stale_after_days: int
    health_penalties: Dict[str, int]
    semantic_themes: Dict[str, List[str]]
    keyword_volumes: Dict[str, int]
    keyword_difficulties: Dict[str, int]

    def health_penalty(self, severity: Severity) -> int:
        return self.health_penalties[severity.value]

    def severity_threshold(self, severity: Severity) -> float:
        return self.severity_thresholds[severity.value]


def build_config(overrides: Optional[Dict] = None) -> CannibalizationConfig:
    """
    Merge overrides (keyed by the upper-case knob names) onto the defaults.

    Raises ImproperlyConfigured for unknown keys, incomplete tier tables,
    non-positive health penalties or theme fragments that are not lists.
    """
    values = copy.deepcopy(POLICY_DEFAULTS)
    overrides = overrides or {}

    unknown = sorted(set(overrides) - set(values))
    if unknown:
        raise ImproperlyConfigured(
            f"Unknown CANNIBALIZATION setting(s): {', '.join(unknown)}"
        )
    values.update(copy.deepcopy(overrides))

    missing_penalties = {s.value for s in Severity} - set(values['HEALTH_PENALTIES'])
    if missing_penalties:
        raise ImproperlyConfigured(
            f"HEALTH_PENALTIES missing tier(s): {', '.join(sorted(missing_penalties))}"
        )
    # Every tier costs health points
    non_positive = sorted(
        tier for tier, penalty in values['HEALTH_PENALTIES'].items()
        if isinstance(penalty, bool) or not isinstance(penalty, (int, float)) or penalty <= 0
    )
    if non_positive:
        raise ImproperlyConfigured(
            f"HEALTH_PENALTIES must be positive numbers: {', '.join(non_positive)}"
        )

    themes = values['SEMANTIC_THEMES']
    if not isinstance(themes, dict):
        raise ImproperlyConfigured("SEMANTIC_THEMES must map theme names to fragment lists")
    for theme, fragments in themes.items():
        if not isinstance(fragments, (list, tuple)) or not all(isinstance(f, str) for f in fragments):
            raise ImproperlyConfigured(
                f"SEMANTIC_THEMES['{theme}'] must be a list of keyword fragments"
            )

    thresholds = values['SEVERITY_THRESHOLDS']
    tiers = [Severity.CRITICAL.value, Severity.HIGH.value, Severity.MEDIUM.value]
    if any(t not in thresholds for t in tiers):
        raise ImproperlyConfigured("SEVERITY_THRESHOLDS needs critical, high and medium")
    if not thresholds['critical'] >= thresholds['high'] >= thresholds['medium']:
        raise ImproperlyConfigured("SEVERITY_THRESHOLDS must be non-increasing from critical to medium")

    field_names = {f.name for f in fields(CannibalizationConfig)}
    return CannibalizationConfig(**{
        key.lower(): value for key, value in values.items() if key.lower() in field_names
    })


def get_config() -> CannibalizationConfig:
    """Config from settings.CANNIBALIZATION (empty dict if unset)."""
    return build_config(getattr(settings, 'CANNIBALIZATION', None))
