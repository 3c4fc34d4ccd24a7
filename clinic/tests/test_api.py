"""
Integration tests for the clinic API.

These tests exercise bill and income management, tenant isolation, role
gating and the tenant scoped dashboard endpoints with Django REST
Framework's APIClient inside APITestCase.

To run the tests:

```
pytest -q clinic/tests
```
"""
from datetime import date
from unittest import mock

from django.core.cache import cache
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient, APITestCase

from clinic.models import AuditEvent, Bill, Income, Subscription, Tenant, User


class FinanceAPITests(APITestCase):
    def setUp(self) -> None:
        cache.clear()
        self.tenant = Tenant.objects.create(slug="acme", name="Acme Hospital")
        self.other = Tenant.objects.create(slug="globex", name="Globex Clinic")
        Subscription.objects.create(tenant=self.tenant, plan_type="plus")

        self.admin = User.objects.create_user(username="admin1", password="P@ssw0rd1", role="admin", tenant=self.tenant)
        self.owner = User.objects.create_user(username="owner1", password="P@ssw0rd1", role="owner", tenant=self.tenant)
        self.doctor = User.objects.create_user(username="doctor1", password="P@ssw0rd1", role="doctor", tenant=self.tenant)
        self.other_admin = User.objects.create_user(username="admin2", password="P@ssw0rd1", role="admin", tenant=self.other)

        self.client = APIClient()
        self.client.force_authenticate(user=self.admin)

    def _bill(self, **kwargs):
        data = {"name": "Gloves", "amount": 150.50, "date": "2024-02-10", "category": "Medical Supplies"}
        data.update(kwargs)
        return self.client.post(reverse("bills"), data, format="json")

    def test_create_bill_then_list(self) -> None:
        resp = self._bill()
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        self.assertEqual(resp.data["name"], "Gloves")
        self.assertEqual(resp.data["amount"], 150.5)
        self.assertEqual(resp.data["date"], "2024-02-10")

        resp = self.client.get(reverse("bills"))
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(len(resp.data), 1)
        self.assertEqual(resp.data[0]["category"], "Medical Supplies")
        bill = Bill.objects.get()
        self.assertEqual(bill.tenant, self.tenant)
        self.assertTrue(AuditEvent.objects.filter(action="bill.create", object_id=str(bill.id)).exists())

    def test_list_is_newest_first(self) -> None:
        first = self._bill(name="First").data["id"]
        second = self._bill(name="Second").data["id"]
        ids = [r["id"] for r in self.client.get(reverse("bills")).data]
        self.assertEqual(ids, [second, first])

    def test_invalid_input_answers_400_with_error(self) -> None:
        cases = [
            {"name": ""},
            {"amount": 0},
            {"amount": -5},
            {"amount": "abc"},
            {"date": "10/02/2024"},
            {"category": "Snacks"},
        ]
        for override in cases:
            resp = self._bill(**override)
            self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST, override)
            self.assertIn("error", resp.data)
        self.assertEqual(Bill.objects.count(), 0)

    def test_name_is_stored_as_typed(self) -> None:
        name = "Gloves & Masks < 10 boxes"
        resp = self._bill(name=name)
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        self.assertEqual(resp.data["name"], name)
        self.assertEqual(Bill.objects.get().name, name)
        self.assertEqual(self.client.get(reverse("bills")).data[0]["name"], name)

    def test_markup_in_name_is_rejected(self) -> None:
        resp = self._bill(name="<b>Gloves</b>")
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertTrue(resp.data["error"].startswith("name:"))
        self.assertFalse(Bill.objects.exists())

    def test_amount_is_rounded_to_cents(self) -> None:
        resp = self._bill(amount=12.345)
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        self.assertEqual(resp.data["amount"], 12.35)
        self.assertEqual(str(Bill.objects.get().amount), "12.35")
        resp = self._bill(amount=0.004)
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)

    def test_income_category_set_is_separate(self) -> None:
        resp = self.client.post(reverse("income"), {
            "name": "Blood panel", "amount": 80, "date": "2024-02-03", "category": "Laboratory",
        }, format="json")
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        resp = self.client.post(reverse("income"), {
            "name": "Payroll", "amount": 80, "date": "2024-02-03", "category": "Staff Salaries",
        }, format="json")
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(Income.objects.count(), 1)

    def test_update_with_id_in_body(self) -> None:
        bill_id = self._bill().data["id"]
        resp = self.client.put(reverse("bills"), {"id": bill_id, "amount": 99.99}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data["amount"], 99.99)
        self.assertEqual(resp.data["name"], "Gloves")

    def test_update_without_id_is_rejected(self) -> None:
        resp = self.client.put(reverse("bills"), {"amount": 10}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(resp.data["error"], "id is required")

    def test_update_by_path(self) -> None:
        bill_id = self._bill().data["id"]
        resp = self.client.put(reverse("bill_detail", args=[bill_id]), {"category": "Laboratory"}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(Bill.objects.get(pk=bill_id).category, "Laboratory")

    def test_unknown_record_is_404(self) -> None:
        resp = self.client.put(reverse("bills"), {"id": 4242, "amount": 10}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(resp.data["error"], "Bill not found")
        resp = self.client.delete(reverse("bill_detail", args=[4242]))
        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)

    def test_delete(self) -> None:
        bill_id = self._bill().data["id"]
        resp = self.client.delete(reverse("bill_detail", args=[bill_id]))
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data, {"ok": True})
        self.assertFalse(Bill.objects.exists())
        self.assertTrue(AuditEvent.objects.filter(action="bill.delete").exists())

    def test_tenant_isolation(self) -> None:
        bill_id = self._bill().data["id"]
        other = APIClient()
        other.force_authenticate(user=self.other_admin)
        self.assertEqual(other.get(reverse("bills")).data, [])
        self.assertEqual(other.get(reverse("bill_detail", args=[bill_id])).status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(other.delete(reverse("bill_detail", args=[bill_id])).status_code, status.HTTP_404_NOT_FOUND)
        self.assertTrue(Bill.objects.filter(pk=bill_id).exists())

    def test_owner_shares_tenant_records(self) -> None:
        self._bill()
        owner = APIClient()
        owner.force_authenticate(user=self.owner)
        self.assertEqual(len(owner.get(reverse("bills")).data), 1)

    def test_doctor_cannot_touch_finance(self) -> None:
        doctor = APIClient()
        doctor.force_authenticate(user=self.doctor)
        for name in ("bills", "income", "finance_summary"):
            resp = doctor.get(reverse(name))
            self.assertEqual(resp.status_code, status.HTTP_403_FORBIDDEN)
            self.assertIn("error", resp.data)

    def test_anonymous_is_401(self) -> None:
        resp = APIClient().get(reverse("bills"))
        self.assertEqual(resp.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertIn("error", resp.data)

    def test_storage_failure_answers_generic_500(self) -> None:
        with mock.patch("clinic.services.finance.list_records", side_effect=RuntimeError("db down")):
            resp = self.client.get(reverse("bills"))
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.data, {"error": "Failed to fetch bills"})

        with mock.patch("clinic.services.finance.create_record", side_effect=RuntimeError("db down")):
            resp = self.client.post(reverse("income"), {
                "name": "Visit", "amount": 50, "date": "2024-02-03", "category": "Consultations",
            }, format="json")
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.data, {"error": "Failed to create income entry"})

    def test_summary(self) -> None:
        self._bill(amount=100, date="2024-02-10")
        self._bill(amount=50, date="2024-03-10", category="Laboratory")
        self.client.post(reverse("income"), {
            "name": "Visits", "amount": 400, "date": "2024-02-12", "category": "Consultations",
        }, format="json")

        resp = self.client.get(reverse("finance_summary"))
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data["expenses"]["total"], 150.0)
        self.assertEqual(resp.data["income"]["total"], 400.0)
        self.assertEqual(resp.data["balance"], 250.0)

        resp = self.client.get(reverse("finance_summary"), {"month": 2, "year": 2024})
        self.assertEqual(resp.data["expenses"]["total"], 100.0)
        self.assertEqual(resp.data["expenses"]["byCategory"], {"Medical Supplies": 100.0})
        self.assertEqual(resp.data["balance"], 300.0)

        resp = self.client.get(reverse("finance_summary"), {"month": 13})
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)


class TenantEndpointTests(APITestCase):
    def setUp(self) -> None:
        cache.clear()
        self.tenant = Tenant.objects.create(slug="acme", name="Acme Hospital")
        self.subscription = Subscription.objects.create(tenant=self.tenant, plan_type="starter")
        self.other = Tenant.objects.create(slug="globex", name="Globex Clinic")
        self.admin = User.objects.create_user(username="admin1", password="P@ssw0rd1", role="admin", tenant=self.tenant)
        self.doctor = User.objects.create_user(username="doctor1", password="P@ssw0rd1", role="doctor", tenant=self.tenant)
        User.objects.create_user(username="stranger", password="P@ssw0rd1", role="user", tenant=self.other)
        self.client = APIClient()
        self.client.force_authenticate(user=self.admin)

    def test_verify_role(self) -> None:
        resp = self.client.get(reverse("verify_role", args=["acme"]))
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data, {"role": "admin", "tenant": "acme"})

    def test_other_tenant_is_forbidden(self) -> None:
        for name in ("verify_role", "subscription", "navigation", "patients"):
            resp = self.client.get(reverse(name, args=["globex"]))
            self.assertEqual(resp.status_code, status.HTTP_403_FORBIDDEN, name)

    def test_subscription(self) -> None:
        resp = self.client.get(reverse("subscription", args=["acme"]))
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data["planType"], "starter")
        self.assertTrue(resp.data["active"])

    def test_subscription_cache_follows_plan_changes(self) -> None:
        self.client.get(reverse("subscription", args=["acme"]))
        self.subscription.plan_type = "plus"
        self.subscription.save()
        resp = self.client.get(reverse("subscription", args=["acme"]))
        self.assertEqual(resp.data["planType"], "plus")

    def test_subscription_missing_gives_null_plan(self) -> None:
        self.subscription.delete()
        resp = self.client.get(reverse("subscription", args=["acme"]))
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertIsNone(resp.data["planType"])

    def test_navigation_for_admin_on_starter(self) -> None:
        resp = self.client.get(reverse("navigation", args=["acme"]))
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data["planType"], "starter")
        self.assertEqual([s["label"] for s in resp.data["sections"]], ["Financial", "Medical", "Management"])
        management = resp.data["sections"][2]["subItems"]
        self.assertEqual([i["label"] for i in management], ["User Management"])

    def test_navigation_without_subscription_assumes_plus(self) -> None:
        self.subscription.delete()
        doctor = APIClient()
        doctor.force_authenticate(user=self.doctor)
        resp = doctor.get(reverse("navigation", args=["acme"]))
        self.assertEqual(resp.data["planType"], "plus")
        medical = resp.data["sections"][0]["subItems"]
        self.assertIn("Patients", [i["label"] for i in medical])

    def test_patients_lists_tenant_users_without_passwords(self) -> None:
        resp = self.client.get(reverse("patients", args=["acme"]))
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual([u["username"] for u in resp.data], ["doctor1", "admin1"])
        for user in resp.data:
            self.assertNotIn("password", user)
            self.assertEqual(user["tenant"], "acme")

    def test_patients_failure_is_500(self) -> None:
        with mock.patch("clinic.views.tenants.list_tenant_users", side_effect=RuntimeError("boom")):
            resp = self.client.get(reverse("patients", args=["acme"]))
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.data, {"error": "Failed to fetch users"})

    def test_superuser_gets_404_for_unknown_tenant(self) -> None:
        root = User.objects.create_superuser(username="root", password="P@ssw0rd1", email="root@example.com")
        client = APIClient()
        client.force_authenticate(user=root)
        resp = client.get(reverse("subscription", args=["nowhere"]))
        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(resp.data, {"error": "Tenant not found"})

    def test_healthz(self) -> None:
        resp = APIClient().get("/healthz")
        self.assertEqual(resp.status_code, 200)
