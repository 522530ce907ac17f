"""
Cannibalization analysis API views.
"""
import dataclasses
import logging

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from .phase1_ingest import CorpusValidationError
from .phase6_aggregate import select_issues
from .pipeline import run_analysis
from .serializers import AnalysisSerializer

logger = logging.getLogger(__name__)


@api_view(['POST'])
@permission_classes([AllowAny])
def analyze(request):
    """
    POST /api/v1/cannibalization/analyze/

    Request body:
        {
            "domain": "myblog.com",
            "pages": [{"url": ..., "title": ..., "targetKeyword": ..., "traffic": ...}, ...]
        }

    Query params (narrow the returned issue list; summary fields always cover
    the whole run):
        search: text matched against keyword, page urls and titles
        severity: critical | high | medium | low
        sort: severity | trafficLoss | overlapScore | pages
        direction: asc (default) | desc
    """
    if not isinstance(request.data, dict):
        return Response(
            {'error': 'Request body must be a JSON object'},
            status=status.HTTP_400_BAD_REQUEST,
        )

    domain = request.data.get('domain')
    pages = request.data.get('pages')

    if not domain:
        return Response({'error': 'domain is required'}, status=status.HTTP_400_BAD_REQUEST)
    if not isinstance(pages, list):
        return Response({'error': 'pages must be a list'}, status=status.HTTP_400_BAD_REQUEST)

    try:
        analysis = run_analysis(domain, pages)
    except CorpusValidationError as e:
        logger.warning(f"Analysis rejected for {domain}: {e}")
        return Response(
            {'error': str(e), 'details': e.errors},
            status=status.HTTP_400_BAD_REQUEST,
        )

    params = request.query_params
    try:
        issues = select_issues(
            analysis.issues,
            search=params.get('search', ''),
            severity=params.get('severity'),
            sort=params.get('sort'),
            direction=params.get('direction', 'asc'),
        )
    except ValueError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    analysis = dataclasses.replace(analysis, issues=issues)
    return Response(AnalysisSerializer(analysis).data, status=status.HTTP_200_OK)
