"""
Django management command to recalculate depreciation for all assets
"""
from datetime import datetime

from django.core.management.base import BaseCommand, CommandError

from fintracks.finance.models import Asset
from fintracks.finance.services import update_depreciation


class Command(BaseCommand):
    help = 'Recalculate accumulated depreciation and book value for assets'

    def add_arguments(self, parser):
        parser.add_argument(
            '--as-of',
            type=str,
            help='Calculation date (YYYY-MM-DD), defaults to today',
        )
        parser.add_argument(
            '--asset-id',
            type=int,
            help='Update a specific asset only',
        )

    def handle(self, *args, **options):
        as_of = None
        if options.get('as_of'):
            try:
                as_of = datetime.strptime(options['as_of'], '%Y-%m-%d').date()
            except ValueError:
                raise CommandError('Invalid --as-of date, expected YYYY-MM-DD')

        assets = Asset.objects.all()
        if options.get('asset_id'):
            assets = assets.filter(id=options['asset_id'])

        count = 0
        for asset in assets:
            update_depreciation(asset, as_of=as_of)
            self.stdout.write(
                f"{asset.kode_asset}: akumulasi={asset.akumulasi_penyusutan} nilai_buku={asset.nilai_buku}"
            )
            count += 1

        self.stdout.write(self.style.SUCCESS(f"Updated depreciation for {count} asset(s)"))
