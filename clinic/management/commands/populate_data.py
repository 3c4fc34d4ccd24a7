"""
Management command to populate a tenant with sample financial records.
"""
from datetime import date, timedelta
from decimal import Decimal
import random

from django.core.management.base import BaseCommand, CommandError

from clinic.constants import BILL_CATEGORIES, INCOME_CATEGORIES
from clinic.models import Bill, Income, Tenant


BILL_NAMES = {
    'Medical Supplies': ['Gloves', 'Syringes', 'Gauze'],
    'Pharmaceuticals': ['Antibiotics', 'Analgesics'],
    'Equipment Maintenance': ['MRI service', 'Autoclave repair'],
    'Staff Salaries': ['Nursing payroll', 'Physician payroll'],
    'Patient Care': ['Meals', 'Linen'],
    'Laboratory': ['Reagents', 'Sample transport'],
    'Radiology': ['X-ray film', 'Contrast media'],
    'Emergency Services': ['Ambulance fuel'],
    'Administrative': ['Office supplies', 'Software licences'],
    'Facilities Management': ['Electricity', 'Cleaning'],
}


class Command(BaseCommand):
    help = 'Populate a tenant with sample bills and income'

    def add_arguments(self, parser):
        parser.add_argument('--tenant', default='demo')
        parser.add_argument('--months', type=int, default=3, help='how many months back to cover')
        parser.add_argument('--seed', type=int, default=None)

    def handle(self, *args, **options):
        tenant = Tenant.objects.filter(slug=options['tenant']).first()
        if tenant is None:
            raise CommandError(f"Tenant '{options['tenant']}' does not exist; run ensure_test_users first")
        rnd = random.Random(options['seed'])
        days = max(options['months'], 1) * 30

        self.stdout.write(f'Creating sample data for {tenant.slug}...')
        bills = self.create_bills(tenant, rnd, days)
        income = self.create_income(tenant, rnd, days)
        self.stdout.write(self.style.SUCCESS(f'Created {len(bills)} bills and {len(income)} income entries'))

    def _random_day(self, rnd, days):
        return date.today() - timedelta(days=rnd.randint(0, days))

    def _random_amount(self, rnd, low, high):
        return Decimal(rnd.randint(low * 100, high * 100)) / 100

    def create_bills(self, tenant, rnd, days):
        bills = []
        for category in BILL_CATEGORIES:
            for name in BILL_NAMES[category]:
                bills.append(Bill(
                    tenant=tenant, name=name, category=category,
                    amount=self._random_amount(rnd, 50, 5000), date=self._random_day(rnd, days),
                ))
        return Bill.objects.bulk_create(bills)

    def create_income(self, tenant, rnd, days):
        entries = [
            Income(
                tenant=tenant, name=f'{category} revenue', category=category,
                amount=self._random_amount(rnd, 200, 15000), date=self._random_day(rnd, days),
            )
            for category in INCOME_CATEGORIES
            for _ in range(2)
        ]
        return Income.objects.bulk_create(entries)
