from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from .models import Subscription
from .services import subscriptions


@receiver(post_save, sender=Subscription)
@receiver(post_delete, sender=Subscription)
def drop_cached_subscription(sender, instance, **kwargs):
    subscriptions.invalidate(instance.tenant_id)
