"""
Keyword metrics enrichment.

Search volume and keyword difficulty come from a KeywordMetricsProvider so the
grouping and scoring core stays deterministic. StaticKeywordMetrics is the
stand-in used until a real keyword-metrics service is wired up; swap it for
anything with a lookup(keyword) method.
"""
import logging
import random
from typing import Dict, Optional, Protocol

from .conf import CannibalizationConfig
from .constants import FALLBACK_DIFFICULTY_RANGE, FALLBACK_VOLUME_RANGE
from .types import KeywordMetrics
from .utils import normalize_keyword

logger = logging.getLogger(__name__)


class KeywordMetricsProvider(Protocol):
    def lookup(self, keyword: str) -> KeywordMetrics:
        ...


class StaticKeywordMetrics:
    """
    Table lookup with a bounded random estimate on a miss.

    Each instance owns its Random, so two runs never share state; pass a seed
    for reproducible estimates.
    """

    def __init__(
        self,
        volumes: Optional[Dict[str, int]] = None,
        difficulties: Optional[Dict[str, int]] = None,
        seed: Optional[int] = None,
    ):
        self.volumes = {normalize_keyword(k): v for k, v in (volumes or {}).items()}
        self.difficulties = {normalize_keyword(k): v for k, v in (difficulties or {}).items()}
        self._rng = random.Random(seed)

    @classmethod
    def from_config(cls, config: CannibalizationConfig, seed: Optional[int] = None) -> 'StaticKeywordMetrics':
        return cls(config.keyword_volumes, config.keyword_difficulties, seed=seed)

    def lookup(self, keyword: str) -> KeywordMetrics:
        key = normalize_keyword(keyword)

        volume = self.volumes.get(key)
        if volume is None:
            volume = self._rng.randrange(*FALLBACK_VOLUME_RANGE)
            logger.warning(f"No search volume for '{key}', using estimate {volume}")

        difficulty = self.difficulties.get(key)
        if difficulty is None:
            difficulty = self._rng.randrange(*FALLBACK_DIFFICULTY_RANGE)
            logger.warning(f"No keyword difficulty for '{key}', using estimate {difficulty}")

        return KeywordMetrics(volume=volume, difficulty=difficulty)
