"""
Management command to render a forecourt CSV to a standalone HTML map.

Usage:
    python manage.py render_price_map path/to/fuel-prices.csv --output map.html
"""
from django.core.management.base import BaseCommand, CommandError

from fuel_map.price_map.map_builder import build_price_map
from fuel_map.price_map.services import ForecourtCsvService


class Command(BaseCommand):
    help = 'Render forecourts from a fuel price CSV onto an HTML map'

    def add_arguments(self, parser):
        parser.add_argument('csv_file', type=str, help='Path to the CSV file')
        parser.add_argument(
            '--output',
            default='price_map.html',
            help='Where to write the map (default: price_map.html)',
        )

    def handle(self, *args, **options):
        csv_file = options['csv_file']
        output = options['output']

        self.stdout.write(f'Loading CSV from: {csv_file}')

        try:
            with open(csv_file, 'rb') as handle:
                result = ForecourtCsvService().parse_upload(handle)
        except FileNotFoundError:
            raise CommandError(f'File not found: {csv_file}')
        except OSError as e:
            raise CommandError(f'Could not read {csv_file}: {e}')
        except ValueError as e:
            raise CommandError(str(e))

        if result.error:
            self.stdout.write(self.style.WARNING(f'Parse error: {result.error}'))

        stats = result.stats
        if stats is None:
            self.stdout.write(self.style.WARNING('No forecourts with coordinates found'))
        else:
            self.stdout.write(f'Sites: {stats.count}')
            self.stdout.write(f'Brands: {stats.brands}')

        price_range = result.price_range
        if price_range is not None:
            self.stdout.write(
                f'Price scale: £{price_range.low:.3f} - £{price_range.high:.3f}'
            )

        price_map = build_price_map(result.points, price_range)
        price_map.save(output)

        self.stdout.write(self.style.SUCCESS(f'Map written to {output}'))
