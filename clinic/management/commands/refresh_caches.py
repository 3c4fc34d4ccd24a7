from django.core.management.base import BaseCommand
from django.utils import timezone

from clinic.models import Tenant
from clinic.services import subscriptions


class Command(BaseCommand):
    help = "Warm the per-tenant subscription cache."

    def handle(self, *args, **options):
        now = timezone.now()
        keys_refreshed = []
        for slug in Tenant.objects.values_list('slug', flat=True):
            subscriptions.invalidate(slug)
            subscriptions.get_subscription(slug)
            keys_refreshed.append(subscriptions.cache_key(slug))
        self.stdout.write(self.style.SUCCESS(f"Refreshed {len(keys_refreshed)} keys at {now}"))
