"""
Cannibalization Engine Tests

Test Groups:
- Group A: Phase 1 ingest and validation
- Group B: Phase 2 exact-keyword grouping
- Group C: Phase 3 semantic overlap detection
- Group D: Phase 4 primary selection and scoring
- Group E: Phase 5 action recommendation
- Group F: Phase 6 aggregation
- Group G: Phase 7 reports
- Integration: End-to-end pipeline, config, API, management command
"""
