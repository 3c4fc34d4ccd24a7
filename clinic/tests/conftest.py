from urllib.parse import urlsplit

import pytest
import requests
from django.core.cache import cache
from django.test import Client
from requests.structures import CaseInsensitiveDict
from rest_framework.authtoken.models import Token
from rest_framework.test import APIClient

from clinic.client import ApiClient
from clinic.models import Subscription, Tenant, User

BASE_URL = 'http://testserver'
PASSWORD = 'P@ssw0rd1'


class DjangoClientAdapter(requests.adapters.BaseAdapter):
    """Transport adapter that hands requests to Django's test client.

    Lets the ``requests`` based client package talk to the API in-process
    inside the test transaction.
    """

    def __init__(self):
        super().__init__()
        self.client = Client()

    def send(self, request, stream=False, timeout=None, verify=True, cert=None, proxies=None):
        url = urlsplit(request.url)
        path = url.path + (f'?{url.query}' if url.query else '')
        body = request.body or b''
        if isinstance(body, str):
            body = body.encode('utf-8')
        headers = {
            k: v for k, v in request.headers.items()
            if k.lower() not in ('content-type', 'content-length', 'host')
        }
        dj = self.client.generic(
            request.method, path, data=body,
            content_type=request.headers.get('Content-Type', 'application/json'),
            headers=headers,
        )
        resp = requests.Response()
        resp.status_code = dj.status_code
        resp.reason = dj.reason_phrase
        resp._content = dj.content
        resp.headers = CaseInsensitiveDict(dict(dj.items()))
        resp.encoding = 'utf-8'
        resp.url = request.url
        resp.request = request
        return resp

    def close(self):
        pass


@pytest.fixture(autouse=True)
def _clear_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def tenant(db):
    t = Tenant.objects.create(slug='acme', name='Acme Hospital')
    Subscription.objects.create(tenant=t, plan_type='plus')
    return t


@pytest.fixture
def other_tenant(db):
    t = Tenant.objects.create(slug='globex', name='Globex Clinic')
    Subscription.objects.create(tenant=t, plan_type='starter')
    return t


@pytest.fixture
def make_user(db, tenant):
    def _make(username, role, tenant=tenant, **extra):
        return User.objects.create_user(username=username, password=PASSWORD, role=role, tenant=tenant, **extra)
    return _make


@pytest.fixture
def admin_user(make_user):
    return make_user('admin1', 'admin')


@pytest.fixture
def doctor_user(make_user):
    return make_user('doctor1', 'doctor')


@pytest.fixture
def api_as():
    """DRF APIClient authenticated as the given user."""
    def _client(user):
        c = APIClient()
        c.force_authenticate(user=user)
        return c
    return _client


@pytest.fixture
def http_client(db):
    """``ApiClient`` whose HTTP calls are served by the in-process API."""
    def _make(user=None):
        session = requests.Session()
        session.mount(BASE_URL, DjangoClientAdapter())
        token = Token.objects.get_or_create(user=user)[0].key if user else None
        return ApiClient(BASE_URL, token=token, session=session)
    return _make
