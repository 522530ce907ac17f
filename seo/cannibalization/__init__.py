"""
Keyword Cannibalization Detection Engine

Finds groups of pages competing for the same search intent, scores the
damage and recommends a fix:
- Phase 1: Ingest and validate the page corpus
- Phase 2: Exact-keyword grouping
- Phase 3: Semantic overlap detection (theme table)
- Phase 4: Primary selection and scoring (overlap, traffic loss, severity)
- Phase 5: Action recommendation
- Phase 6: Aggregation (sort, counts, health score)
- Phase 7: Reports (issue CSV, redirect plan, action plan)
"""

from .pipeline import run_analysis

__version__ = '1.0.0'
__all__ = ['run_analysis']
