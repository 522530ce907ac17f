"""
Management command to run the cannibalization engine over a page corpus.
Usage:
    python manage.py analyze_cannibalization                 # bundled demo corpus
    python manage.py analyze_cannibalization corpus.json --domain example.com --format csv
    python manage.py analyze_cannibalization --severity medium --sort trafficLoss --direction desc
"""
import dataclasses
import json

from django.core.management.base import BaseCommand, CommandError

from seo.cannibalization.conf import get_config
from seo.cannibalization.constants import Severity
from seo.cannibalization.enrichment import StaticKeywordMetrics
from seo.cannibalization.phase1_ingest import CorpusValidationError
from seo.cannibalization.phase6_aggregate import SORT_FIELDS, select_issues
from seo.cannibalization.phase7_export import (
    build_redirect_plan,
    export_issues_csv,
    generate_action_plan,
    generate_redirect_csv,
)
from seo.cannibalization.pipeline import run_analysis
from seo.cannibalization.sample_data import SAMPLE_PAGES
from seo.cannibalization.serializers import AnalysisSerializer

FORMATS = ('json', 'csv', 'redirects', 'plan')


class Command(BaseCommand):
    help = 'Detect keyword cannibalization in a page corpus (JSON file or the demo corpus)'

    def add_arguments(self, parser):
        parser.add_argument(
            'corpus', nargs='?',
            help='JSON file: a list of page records, or {"domain": ..., "pages": [...]}',
        )
        parser.add_argument('--domain', help='Domain to report (default: from file, else myblog.com)')
        parser.add_argument('--format', choices=FORMATS, default='json')
        parser.add_argument('--seed', type=int, help='Seed for keyword-metrics estimates')
        parser.add_argument('--search', default='', help='Only issues whose keyword, url or title contains this text')
        parser.add_argument('--severity', choices=Severity.values, help='Only issues of this severity')
        parser.add_argument('--sort', choices=list(SORT_FIELDS), help='Sort the issue list by this field')
        parser.add_argument('--direction', choices=('asc', 'desc'), default='asc')

    def handle(self, *args, **options):
        domain, pages = self._load_corpus(options['corpus'])
        domain = options['domain'] or domain or 'myblog.com'

        config = get_config()
        metrics = StaticKeywordMetrics.from_config(config, seed=options['seed'])

        try:
            analysis = run_analysis(domain, pages, config=config, metrics=metrics)
        except CorpusValidationError as e:
            raise CommandError(str(e))

        try:
            issues = select_issues(
                analysis.issues,
                search=options['search'],
                severity=options['severity'],
                sort=options['sort'],
                direction=options['direction'],
            )
        except ValueError as e:
            raise CommandError(str(e))
        analysis = dataclasses.replace(analysis, issues=issues)

        output_format = options['format']
        if output_format == 'csv':
            output = export_issues_csv(analysis.issues)
        elif output_format == 'redirects':
            output = generate_redirect_csv(build_redirect_plan(analysis.issues))
        elif output_format == 'plan':
            output = generate_action_plan(analysis)
        else:
            output = json.dumps(AnalysisSerializer(analysis).data, indent=2)

        self.stdout.write(output)

    def _load_corpus(self, path):
        if not path:
            return None, SAMPLE_PAGES

        try:
            with open(path, encoding='utf-8') as f:
                data = json.load(f)
        except OSError as e:
            raise CommandError(f"Cannot read corpus file {path}: {e}")
        except json.JSONDecodeError as e:
            raise CommandError(f"Corpus file {path} is not valid JSON: {e}")

        if isinstance(data, dict):
            return data.get('domain'), data.get('pages')
        return None, data
