import json

from django.core.management.base import BaseCommand, CommandError

from apps.earnings.application.tasks import build_earnings_report, get_international_earnings
from apps.earnings.domain.exceptions import PayPalError
from apps.earnings.domain.models import DateRange


class Command(BaseCommand):
    help = 'Build the international PayPal earnings report for a date range'

    def add_arguments(self, parser):
        parser.add_argument(
            '--range',
            dest='date_range',
            choices=[date_range.value for date_range in DateRange],
            default=DateRange.LAST_30_DAYS.value,
            help='Date range: 30d, 90d, ytd or 1y (default: 30d)'
        )
        parser.add_argument(
            '--sync',
            action='store_true',
            help='Execute synchronously instead of using Celery task queue'
        )
        parser.add_argument(
            '--json',
            action='store_true',
            help='Print the full report as JSON (synchronous mode only)'
        )

    def handle(self, **options):
        date_range = options['date_range']

        if not options['sync']:
            self.stdout.write('Dispatching Celery task...')
            task = build_earnings_report.delay(date_range)
            self.stdout.write(self.style.SUCCESS(f'Task dispatched with ID: {task.id}'))
            return

        self.stdout.write(f'Building earnings report for {date_range}...')

        try:
            report = get_international_earnings(date_range)
        except PayPalError as e:
            raise CommandError(f'Failed: {e}')

        if options['json']:
            self.stdout.write(json.dumps(report.to_dict(), indent=2))
            return

        summary = report.summary.to_dict()
        self.stdout.write(
            self.style.SUCCESS(
                f"{report.start_date} to {report.end_date}: "
                f"{summary['transaction_count']} sales, "
                f"gross {summary['gross_total']} {summary['currency']}, "
                f"fees {summary['fee_total']}, net {summary['net_total']}, "
                f"avg ticket {summary['avg_ticket']}"
            )
        )
        for country in report.sales_by_country[:5]:
            row = country.to_dict()
            self.stdout.write(f"  {row['country_code']}: {row['amount']} ({row['count']})")
        if report.skipped_count:
            self.stdout.write(
                self.style.WARNING(f'Skipped {report.skipped_count} internal transfer(s)')
            )
