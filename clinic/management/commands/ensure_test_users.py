# clinic/management/commands/ensure_test_users.py
from django.core.management.base import BaseCommand
from django.contrib.auth.hashers import make_password
from clinic.models import Subscription, Tenant, User

TEST_SET = [
    ("owner1", "owner"),
    ("admin1", "admin"),
    ("doctor1", "doctor"),
    ("user1", "user"),
]


class Command(BaseCommand):
    help = "Ensure a demo tenant, its subscription and one user per role exist (idempotent)."

    def add_arguments(self, parser):
        parser.add_argument("--tenant", default="demo", help="tenant slug")
        parser.add_argument("--plan", default="plus", choices=["starter", "plus"])
        parser.add_argument("--password", default="P@ssw0rd1")

    def handle(self, *args, **opts):
        tenant, _ = Tenant.objects.get_or_create(slug=opts["tenant"], defaults={"name": opts["tenant"].title()})
        Subscription.objects.update_or_create(tenant=tenant, defaults={"plan_type": opts["plan"], "active": True})
        self.stdout.write(self.style.SUCCESS(f"ok: tenant {tenant.slug} on {opts['plan']}"))

        for username, role in TEST_SET:
            u, created = User.objects.get_or_create(
                username=username,
                defaults={"role": role, "tenant": tenant, "password": make_password(opts["password"]), "is_active": True},
            )
            if not created:
                # reset password, role and tenant binding
                u.password = make_password(opts["password"])
                u.role = role
                u.tenant = tenant
                u.is_active = True
                u.save(update_fields=["password", "role", "tenant", "is_active"])
            self.stdout.write(self.style.SUCCESS(f"ok: {username} ({role})"))
        self.stdout.write(self.style.SUCCESS("All test users ensured."))
