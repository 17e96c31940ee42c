"""
Tests for core: authentication, user settings, audit logs and the query cache
"""
from django.core.cache import cache
from django.test import TestCase, RequestFactory
from rest_framework import status
from rest_framework.request import Request
from datetime import date
from fintracks.core.cache_utils import (
    QueryCache, apply_filters, build_query_key, dashboard_cache, invalidate_dashboard_cache,
)
from fintracks.core.models import AuditLog, UserSettings
from fintracks.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from fintracks.core.utils import create_audit_log, parse_date_range
from fintracks.locations.models import Platform


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class QueryCacheTests(TestCase):
    """Freshness of cached reads"""

    def setUp(self):
        cache.clear()
        self.clock = FakeClock()
        self.cache = QueryCache(ttl=300, clock=self.clock, prefix='test')
        self.calls = 0

    def fetch(self):
        self.calls += 1
        return {'rows': self.calls}

    def test_second_read_within_ttl_is_served_from_cache(self):
        first = self.cache.get_or_fetch('stores', self.fetch)
        self.clock.advance(299)
        second = self.cache.get_or_fetch('stores', self.fetch)
        self.assertEqual(self.calls, 1)
        self.assertEqual(first, second)

    def test_read_after_ttl_fetches_again(self):
        self.cache.get_or_fetch('stores', self.fetch)
        self.clock.advance(301)
        result = self.cache.get_or_fetch('stores', self.fetch)
        self.assertEqual(self.calls, 2)
        self.assertEqual(result, {'rows': 2})

    def test_per_call_ttl_overrides_default(self):
        self.cache.get_or_fetch('short', self.fetch, ttl=10)
        self.clock.advance(11)
        self.cache.get_or_fetch('short', self.fetch, ttl=10)
        self.assertEqual(self.calls, 2)

    def test_invalidate_forces_refetch(self):
        self.cache.get_or_fetch('stores', self.fetch)
        self.cache.invalidate('stores')
        self.cache.get_or_fetch('stores', self.fetch)
        self.assertEqual(self.calls, 2)

    def test_clear_drops_all_entries(self):
        self.cache.get_or_fetch('a', self.fetch)
        self.cache.get_or_fetch('b', self.fetch)
        self.cache.clear()
        self.assertIsNone(self.cache.get_entry('a'))
        self.assertIsNone(self.cache.get_entry('b'))

    def test_entry_records_fetch_time_and_ttl(self):
        self.cache.get_or_fetch('stores', self.fetch)
        entry = self.cache.get_entry('stores')
        self.assertEqual(entry['fetched_at'], 1000.0)
        self.assertEqual(entry['ttl'], 300)
        self.assertEqual(entry['data'], {'rows': 1})

    def test_query_key_is_order_independent(self):
        key1 = build_query_key('sales', filters={'status': 'delivered', 'store_id': 1})
        key2 = build_query_key('sales', filters={'store_id': 1, 'status': 'delivered'})
        self.assertEqual(key1, key2)
        self.assertNotEqual(key1, build_query_key('sales', filters={'status': 'pending'}))

    def test_invalidate_dashboard_cache(self):
        dashboard_cache.get_or_fetch('metrics', self.fetch)
        self.assertIsNotNone(dashboard_cache.get_entry('metrics'))
        invalidate_dashboard_cache()
        self.assertIsNone(dashboard_cache.get_entry('metrics'))


class ApplyFiltersTests(TestCase):

    def setUp(self):
        TestDataFactory.create_platform(name='Shopee')
        TestDataFactory.create_platform(name='Tokopedia')
        TestDataFactory.create_platform(name='Lazada')

    def test_list_filter(self):
        qs = apply_filters(Platform.objects.all(), {'nama_platform': ['Shopee', 'Lazada']})
        self.assertEqual(qs.count(), 2)

    def test_wildcard_filter(self):
        qs = apply_filters(Platform.objects.all(), {'nama_platform': '%toko%'})
        self.assertEqual(list(qs.values_list('nama_platform', flat=True)), ['Tokopedia'])

    def test_range_filters(self):
        first = Platform.objects.order_by('id').first()
        qs = apply_filters(Platform.objects.all(), {'id': f'gte.{first.id + 1}'})
        self.assertEqual(qs.count(), 2)
        qs = apply_filters(Platform.objects.all(), {'id': f'lte.{first.id}'})
        self.assertEqual(qs.count(), 1)

    def test_empty_values_ignored(self):
        qs = apply_filters(Platform.objects.all(), {'nama_platform': '', 'is_active': None})
        self.assertEqual(qs.count(), 3)


class UtilsTests(TestCase):

    def setUp(self):
        self.factory = RequestFactory()

    def test_parse_date_range(self):
        request = Request(self.factory.get('/', {'date_from': '2024-01-01', 'date_to': '2024-01-31'}))
        self.assertEqual(parse_date_range(request), (date(2024, 1, 1), date(2024, 1, 31)))

    def test_parse_date_range_default(self):
        request = Request(self.factory.get('/', {'date_to': '2024-01-31'}))
        start, end = parse_date_range(request)
        self.assertEqual((end - start).days, 30)

    def test_parse_date_range_invalid(self):
        request = Request(self.factory.get('/', {'date_from': '31/01/2024'}))
        with self.assertRaises(ValueError):
            parse_date_range(request)

    def test_create_audit_log_with_user(self):
        user = TestDataFactory.create_user()
        log = create_audit_log(user=user, action='create', model_name='Sale', object_id=5,
                               changes={'total': '100'})
        self.assertEqual(log.user, user)
        self.assertEqual(log.object_id, '5')

    def test_create_audit_log_missing_fields(self):
        self.assertIsNone(create_audit_log(action='create', model_name=None, object_id=1))
        self.assertEqual(AuditLog.objects.count(), 0)


class AuthAPITests(TestCase):

    def setUp(self):
        self.user = TestDataFactory.create_user(username='admin1', password='secret123')
        self.client = AuthenticatedAPIClient()

    def test_login_returns_tokens(self):
        response = self.client.post('/api/v1/auth/login/', {'username': 'admin1', 'password': 'secret123'},
                                    format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn('access', response.data)
        self.assertIn('refresh', response.data)

    def test_login_wrong_password(self):
        response = self.client.post('/api/v1/auth/login/', {'username': 'admin1', 'password': 'wrong'},
                                    format='json')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_me_requires_auth(self):
        response = self.client.get('/api/v1/auth/me/')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_me(self):
        self.client.authenticate_user(self.user)
        response = self.client.get('/api/v1/auth/me/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['username'], 'admin1')


class UserSettingsAPITests(TestCase):

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)

    def test_settings_created_on_first_read(self):
        response = self.client.get('/api/v1/user-settings/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['low_stock_threshold'], 5)
        self.assertTrue(UserSettings.objects.filter(user=self.user).exists())

    def test_patch_settings(self):
        response = self.client.patch('/api/v1/user-settings/',
                                     {'company_name': 'PT Maju', 'modal_awal': '50000000.00'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['company_name'], 'PT Maju')

    def test_negative_threshold_rejected(self):
        response = self.client.patch('/api/v1/user-settings/', {'low_stock_threshold': -1}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)


class AuditLogAPITests(TestCase):

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)

    def test_filter_audit_logs(self):
        create_audit_log(user=self.user, action='create', model_name='Sale', object_id=1)
        create_audit_log(user=self.user, action='delete', model_name='Purchase', object_id=2)
        response = self.client.get('/api/v1/audit-logs/', {'model_name': 'Sale'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]['action'], 'create')
