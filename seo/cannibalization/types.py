"""
Engine data types.

Page is the caller's record and is never mutated. IssuePage is the
issue-scoped view that carries the derived is_primary flag.
"""
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Dict, List, Optional, Tuple

from .constants import Action, GroupKind, IssueType, Severity


@dataclass(frozen=True)
class Page:
    """One published content asset from the page corpus."""
    url: str
    title: str
    target_keyword: str
    traffic: int
    current_rank: Optional[int] = None
    best_rank: Optional[int] = None
    backlinks: int = 0
    page_authority: float = 0
    word_count: int = 0
    last_updated: Optional[date] = None

    @property
    def is_ranked(self) -> bool:
        return self.current_rank is not None


@dataclass(frozen=True)
class IssuePage:
    """A page as it appears inside one issue."""
    page: Page
    is_primary: bool
    corpus_index: int

    @property
    def url(self) -> str:
        return self.page.url

    @property
    def title(self) -> str:
        return self.page.title

    @property
    def traffic(self) -> int:
        return self.page.traffic


@dataclass
class CandidateGroup:
    """
    Pages competing for one grouping key, before scoring.

    pages are (corpus_index, Page) pairs in corpus order.
    """
    kind: GroupKind
    key: str
    label: str
    pages: List[Tuple[int, Page]]


@dataclass(frozen=True)
class GroupScore:
    overlap_score: int
    traffic_loss: int
    severity: Severity
    raw_overlap: float = 0.0


@dataclass(frozen=True)
class KeywordMetrics:
    volume: int
    difficulty: int


@dataclass
class Issue:
    """One detected cannibalization conflict."""
    id: str
    keyword: str
    kind: GroupKind
    pages: List[IssuePage]
    type: IssueType
    severity: Severity
    overlap_score: int
    traffic_loss: int
    potential_gain: int
    recommended_action: Action
    recommendation: str
    search_volume: int
    keyword_difficulty: int
    detected_at: datetime

    @property
    def primary(self) -> IssuePage:
        return self.pages[0]


@dataclass
class Analysis:
    """Aggregate result of one run over one domain."""
    domain: str
    total_pages_analyzed: int
    total_keywords_analyzed: int
    issue_count: int
    issues_by_severity: Dict[Severity, int]
    total_traffic_loss: int
    total_potential_gain: int
    health_score: int
    issues: List[Issue] = field(default_factory=list)
    analyzed_at: Optional[datetime] = None


@dataclass(frozen=True)
class FixSuggestion:
    steps: List[str]
    estimated_time: str
    difficulty: str


@dataclass(frozen=True)
class TrendPoint:
    """One snapshot in the external health-history series."""
    date: date
    issue_count: int
    health_score: int
