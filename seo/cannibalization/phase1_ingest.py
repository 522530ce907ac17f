"""
Phase 1: Ingest and Validate

Turns the caller's page corpus into Page records. Records arrive in the
camelCase shape the rank tracker exports (targetKeyword, currentRank, ...)
or as Page instances; both go through PageInputSerializer.

Any malformed record fails the whole run with CorpusValidationError.
Nothing is dropped silently.
"""
import logging
from collections import abc
from typing import Dict, Iterable, List

from rest_framework import serializers

from .types import Page

logger = logging.getLogger(__name__)


class CorpusValidationError(ValueError):
    """
    Raised when the page corpus violates the input contract.

    errors maps record index → field errors (plain lists of strings).
    """

    def __init__(self, message: str, errors: Dict = None):
        super().__init__(message)
        self.errors = errors or {}


class PageInputSerializer(serializers.Serializer):
    """Serializer for one page record from the upstream crawler/rank tracker."""
    url = serializers.CharField(max_length=2000)
    title = serializers.CharField(allow_blank=True)
    targetKeyword = serializers.CharField(source='target_keyword', max_length=500)
    traffic = serializers.IntegerField(min_value=0)
    currentRank = serializers.IntegerField(source='current_rank', min_value=1, required=False, allow_null=True)
    bestRank = serializers.IntegerField(source='best_rank', min_value=1, required=False, allow_null=True)
    backlinks = serializers.IntegerField(min_value=0, default=0)
    pageAuthority = serializers.FloatField(source='page_authority', min_value=0, max_value=100, default=0)
    wordCount = serializers.IntegerField(source='word_count', min_value=0, default=0)
    lastUpdated = serializers.DateField(source='last_updated', required=False, allow_null=True)


def load_pages(records: Iterable) -> List[Page]:
    """
    Validate every record and return Page objects in corpus order.

    Raises:
        CorpusValidationError: with every bad record's errors, not just the first.
    """
    if not isinstance(records, abc.Iterable) or isinstance(records, (str, bytes, abc.Mapping)):
        raise CorpusValidationError("pages must be a list of page records")

    pages = []
    errors = {}
    seen_urls = {}

    for index, record in enumerate(records):
        if isinstance(record, Page):
            record = PageInputSerializer(record).data
        elif not isinstance(record, abc.Mapping):
            errors[index] = {'non_field_errors': ['Expected a page object.']}
            continue

        serializer = PageInputSerializer(data=record)
        if not serializer.is_valid():
            errors[index] = _plain_errors(serializer.errors)
            continue

        page = Page(**serializer.validated_data)
        if page.url in seen_urls:
            errors[index] = {'url': [f"Duplicate url; already used by record {seen_urls[page.url]}."]}
            continue

        seen_urls[page.url] = index
        pages.append(page)

    if errors:
        first_index = min(errors)
        field, messages = next(iter(errors[first_index].items()))
        message = (
            f"Invalid page record at index {first_index}: {field}: {messages[0]}"
            f" ({len(errors)} invalid record(s) in total)"
        )
        logger.warning(f"Rejected page corpus: {message}")
        raise CorpusValidationError(message, errors)

    return pages


def _plain_errors(errors) -> Dict[str, List[str]]:
    """Flatten DRF ErrorDetail lists into plain strings."""
    return {field: [str(msg) for msg in messages] for field, messages in errors.items()}
