# companies/tests/test_tenancy.py

from django.contrib.auth import get_user_model
from django.contrib.auth.models import AnonymousUser
from django.db import IntegrityError
from django.test import RequestFactory, TestCase
from rest_framework.exceptions import PermissionDenied

from companies.models import Company
from companies.tenancy import HasActiveCompany, get_request_company, resolve_company


class TenancyTests(TestCase):
    def setUp(self):
        self.company = Company.objects.create(name="Acme Ltd", tax_number="TX-1")
        self.user = get_user_model().objects.create_user(
            email="clerk@acme.test", password="pass12345", company=self.company
        )
        self.factory = RequestFactory()

    def _request(self, user):
        request = self.factory.get("/")
        request.user = user
        return request

    def test_active_company_is_resolved(self):
        self.assertEqual(resolve_company(self._request(self.user)), self.company)
        self.assertTrue(HasActiveCompany().has_permission(self._request(self.user), None))

    def test_anonymous_has_no_company(self):
        self.assertIsNone(get_request_company(self._request(AnonymousUser())))

    def test_inactive_company_is_denied(self):
        self.company.is_active = False
        self.company.save()

        with self.assertRaises(PermissionDenied):
            resolve_company(self._request(self.user))
        self.assertFalse(HasActiveCompany().has_permission(self._request(self.user), None))


class CompanyModelTests(TestCase):
    def test_tax_number_unique_when_present(self):
        Company.objects.create(name="One", tax_number="TX-9")
        with self.assertRaises(IntegrityError):
            Company.objects.create(name="Two", tax_number="TX-9")

    def test_blank_tax_numbers_may_repeat(self):
        Company.objects.create(name="One", tax_number="")
        Company.objects.create(name="Two", tax_number="")
        Company.objects.create(name="Three")
        self.assertEqual(Company.objects.count(), 3)

    def test_string_representation(self):
        self.assertEqual(str(Company(name="Acme", tax_number="TX-1")), "Acme (TX-1)")
        self.assertEqual(str(Company(name="Acme")), "Acme")


class BootstrapCompanyCommandTests(TestCase):
    def test_creates_company_and_admin_then_is_idempotent(self):
        from io import StringIO

        from django.core.management import call_command

        call_command("bootstrap_company", "--company", "Acme", "--email", "boss@acme.test", "--password", "pw-123", stdout=StringIO())
        call_command("bootstrap_company", "--company", "Acme", "--email", "boss@acme.test", stdout=StringIO())

        self.assertEqual(Company.objects.filter(name="Acme").count(), 1)
        user = get_user_model().objects.get(email="boss@acme.test")
        self.assertEqual(user.company.name, "Acme")
        self.assertEqual(user.role, "admin")
        self.assertTrue(user.check_password("pw-123"))

    def test_password_required_for_new_user(self):
        from io import StringIO

        from django.core.management import call_command
        from django.core.management.base import CommandError

        with self.assertRaises(CommandError):
            call_command("bootstrap_company", "--company", "Acme", "--email", "new@acme.test", stdout=StringIO())
