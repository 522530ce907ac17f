"""
Test Group A: Phase 1 Ingest and Validation

Tests camelCase record loading, Page pass-through, and fail-fast errors.
"""
from datetime import date

import pytest
from django.test import SimpleTestCase

from seo.cannibalization.phase1_ingest import CorpusValidationError, load_pages
from seo.cannibalization.types import Page


def page_record(**overrides):
    """Helper to build a valid upstream page record."""
    record = {
        'url': '/blog/best-seo-tools-2024',
        'title': 'Best SEO Tools 2024: Complete Guide',
        'targetKeyword': 'best seo tools',
        'currentRank': 8,
        'traffic': 2500,
        'lastUpdated': '2024-09-15',
        'wordCount': 3200,
        'pageAuthority': 45,
        'backlinks': 23,
    }
    record.update(overrides)
    return record


class TestLoadPages(SimpleTestCase):
    """Valid corpora load into Page objects."""

    def test_camel_case_record(self):
        pages = load_pages([page_record()])

        assert len(pages) == 1
        page = pages[0]
        assert page.url == '/blog/best-seo-tools-2024'
        assert page.target_keyword == 'best seo tools'
        assert page.current_rank == 8
        assert page.traffic == 2500
        assert page.last_updated == date(2024, 9, 15)
        assert page.page_authority == 45
        assert page.backlinks == 23

    def test_optional_fields_default(self):
        """Only url, title, targetKeyword and traffic are required."""
        record = {'url': '/a', 'title': 'A', 'targetKeyword': 'a', 'traffic': 10}

        page = load_pages([record])[0]

        assert page.current_rank is None
        assert page.best_rank is None
        assert page.backlinks == 0
        assert page.page_authority == 0
        assert page.word_count == 0
        assert page.last_updated is None

    def test_null_rank_means_unranked(self):
        page = load_pages([page_record(currentRank=None)])[0]
        assert page.current_rank is None
        assert not page.is_ranked

    def test_page_instances_pass_through(self):
        page = Page(url='/a', title='A', target_keyword='a', traffic=5, current_rank=3,
                    last_updated=date(2024, 1, 2))

        loaded = load_pages([page])

        assert loaded == [page]

    def test_corpus_order_preserved(self):
        records = [page_record(url=f'/p{i}') for i in range(5)]
        pages = load_pages(records)
        assert [p.url for p in pages] == ['/p0', '/p1', '/p2', '/p3', '/p4']

    def test_empty_corpus(self):
        assert load_pages([]) == []

    def test_accepts_generator(self):
        pages = load_pages(page_record(url=f'/p{i}') for i in range(2))
        assert len(pages) == 2


class TestValidationErrors(SimpleTestCase):
    """Malformed input fails the whole run."""

    def test_missing_url(self):
        record = page_record()
        del record['url']

        with pytest.raises(CorpusValidationError) as exc_info:
            load_pages([record])

        assert 'url' in exc_info.value.errors[0]
        assert 'index 0' in str(exc_info.value)

    def test_missing_traffic(self):
        record = page_record()
        del record['traffic']

        with pytest.raises(CorpusValidationError) as exc_info:
            load_pages([record])

        assert 'traffic' in exc_info.value.errors[0]

    def test_negative_traffic(self):
        with pytest.raises(CorpusValidationError) as exc_info:
            load_pages([page_record(traffic=-1)])
        assert 'traffic' in exc_info.value.errors[0]

    def test_authority_out_of_range(self):
        with pytest.raises(CorpusValidationError) as exc_info:
            load_pages([page_record(pageAuthority=150)])
        assert 'pageAuthority' in exc_info.value.errors[0]

    def test_rank_must_be_positive(self):
        with pytest.raises(CorpusValidationError) as exc_info:
            load_pages([page_record(currentRank=0)])
        assert 'currentRank' in exc_info.value.errors[0]

    def test_blank_keyword(self):
        with pytest.raises(CorpusValidationError) as exc_info:
            load_pages([page_record(targetKeyword='   ')])
        assert 'targetKeyword' in exc_info.value.errors[0]

    def test_bad_date(self):
        with pytest.raises(CorpusValidationError) as exc_info:
            load_pages([page_record(lastUpdated='last tuesday')])
        assert 'lastUpdated' in exc_info.value.errors[0]

    def test_duplicate_url(self):
        records = [page_record(), page_record(traffic=10)]

        with pytest.raises(CorpusValidationError) as exc_info:
            load_pages(records)

        assert list(exc_info.value.errors) == [1]
        assert 'Duplicate url' in exc_info.value.errors[1]['url'][0]

    def test_all_bad_records_reported(self):
        records = [page_record(url='/ok'), page_record(url='/a', traffic=-5), {'title': 'x'}]

        with pytest.raises(CorpusValidationError) as exc_info:
            load_pages(records)

        assert set(exc_info.value.errors) == {1, 2}
        assert 'index 1' in str(exc_info.value)

    def test_non_mapping_record(self):
        with pytest.raises(CorpusValidationError) as exc_info:
            load_pages(['/just-a-url'])
        assert 'non_field_errors' in exc_info.value.errors[0]

    def test_corpus_must_be_a_list(self):
        with pytest.raises(CorpusValidationError):
            load_pages({'url': '/a'})
        with pytest.raises(CorpusValidationError):
            load_pages(None)

    def test_scalar_corpus(self):
        for records in (5, True, 3.2):
            with pytest.raises(CorpusValidationError) as exc_info:
                load_pages(records)
            assert 'must be a list' in str(exc_info.value)

    def test_is_a_value_error(self):
        assert issubclass(CorpusValidationError, ValueError)
