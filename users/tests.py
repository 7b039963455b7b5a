from unittest import mock

from django.core.cache import cache
from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import TestCase, override_settings
from rest_framework import status
from rest_framework.test import APITestCase
from rest_framework_simplejwt.tokens import AccessToken

from advocate_profile.models import Advocate
from common.choices import UserRole
from users.models import User
from users.throttles import AuthRequestThrottle


class UserAuthTestCase(APITestCase):

    def setUp(self):
        cache.clear()
        self.user_data = {
            'name': 'Asha Rao',
            'email': 'asha@example.com',
            'phone': '9876543210',
            'password': 'StrongPass123',
        }
        self.user = User.objects.create_user(**self.user_data)

    # ================= Register =================
    def test_register_client(self):
        data = {
            'name': 'New Client',
            'email': 'NewClient@Example.com',
            'password': 'StrongPass123',
        }
        response = self.client.post('/api/auth/register/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['message'], 'User registered successfully')
        self.assertEqual(response.data['user']['role'], UserRole.USER)
        self.assertEqual(response.data['user']['email'], 'newclient@example.com')
        self.assertIn('access', response.data['tokens'])
        self.assertIn('refresh', response.data['tokens'])
        self.assertFalse(Advocate.objects.filter(user__email='newclient@example.com').exists())

    def test_register_advocate_creates_profile(self):
        data = {
            'name': 'Vikram Advocate',
            'email': 'vikram@example.com',
            'password': 'StrongPass123',
            'role': 'advocate',
            'specialization': 'Family Law',
            'experience_years': 8,
            'bar_council_number': 'BAR/123/2015',
            'location': 'Pune',
            'hourly_rate': '1500.00',
        }
        response = self.client.post('/api/auth/register/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

        advocate = Advocate.objects.get(user__email='vikram@example.com')
        self.assertEqual(advocate.specialization, 'Family Law')
        self.assertEqual(advocate.experience_years, 8)
        self.assertFalse(advocate.is_verified)
        self.assertTrue(advocate.is_available)

    def test_register_duplicate_email(self):
        data = dict(self.user_data, email='ASHA@example.com')
        response = self.client.post('/api/auth/register/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('error', response.data)
        self.assertEqual(User.objects.filter(email='asha@example.com').count(), 1)

    def test_register_admin_role_rejected(self):
        data = {
            'name': 'Sneaky',
            'email': 'sneaky@example.com',
            'password': 'StrongPass123',
            'role': 'admin',
        }
        response = self.client.post('/api/auth/register/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(User.objects.filter(email='sneaky@example.com').exists())

    def test_register_duplicate_bar_number_leaves_no_user(self):
        owner = User.objects.create_user(email='owner@example.com', password='x' * 8, name='Owner',
                                         role=UserRole.ADVOCATE)
        Advocate.objects.create(user=owner, bar_council_number='BAR/1')
        data = {
            'name': 'Copycat',
            'email': 'copycat@example.com',
            'password': 'StrongPass123',
            'role': 'advocate',
            'bar_council_number': 'BAR/1',
        }
        response = self.client.post('/api/auth/register/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(User.objects.filter(email='copycat@example.com').exists())

    def test_register_missing_fields(self):
        response = self.client.post('/api/auth/register/', {'email': 'x@example.com'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('details', response.data)

    # ================= Login JWT =================
    def test_login_user(self):
        response = self.client.post('/api/auth/login/', {
            'email': self.user_data['email'],
            'password': self.user_data['password'],
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['message'], 'Login successful')
        self.assertEqual(response.data['user']['id'], self.user.pk)

        access = AccessToken(response.data['tokens']['access'])
        self.assertEqual(access['role'], UserRole.USER)
        self.assertEqual(str(access['user_id']), str(self.user.pk))

    def test_login_wrong_password(self):
        response = self.client.post('/api/auth/login/', {
            'email': self.user_data['email'],
            'password': 'WrongPass',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.data, {'error': 'Invalid email or password'})

    def test_login_unknown_email(self):
        response = self.client.post('/api/auth/login/', {
            'email': 'ghost@example.com',
            'password': 'StrongPass123',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_token_authenticates_me(self):
        login = self.client.post('/api/auth/login/', {
            'email': self.user_data['email'],
            'password': self.user_data['password'],
        }, format='json')
        access = login.data['tokens']['access']

        self.client.credentials(HTTP_AUTHORIZATION=f'Bearer {access}')
        response = self.client.get('/api/auth/me/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['email'], self.user_data['email'])
        self.assertNotIn('password', response.data)

    def test_refresh_token(self):
        login = self.client.post('/api/auth/login/', {
            'email': self.user_data['email'],
            'password': self.user_data['password'],
        }, format='json')
        response = self.client.post('/api/auth/token/refresh/', {
            'refresh': login.data['tokens']['refresh'],
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn('access', response.data)

    # ================= Auth failures =================
    def test_me_requires_token(self):
        response = self.client.get('/api/auth/me/')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertIn('error', response.data)

    def test_garbage_token_rejected(self):
        self.client.credentials(HTTP_AUTHORIZATION='Bearer not-a-token')
        response = self.client.get('/api/auth/me/')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    @mock.patch.object(AuthRequestThrottle, 'THROTTLE_RATES', {'auth': '2/min'})
    def test_login_is_throttled(self):
        payload = {'email': self.user_data['email'], 'password': 'WrongPass'}
        for _ in range(2):
            self.client.post('/api/auth/login/', payload, format='json')
        response = self.client.post('/api/auth/login/', payload, format='json')
        self.assertEqual(response.status_code, status.HTTP_429_TOO_MANY_REQUESTS)


class UserModelTestCase(TestCase):

    def test_email_is_lowercased(self):
        user = User.objects.create_user(email='MiXeD@Example.COM', password='pass12345', name='Mixed')
        self.assertEqual(user.email, 'mixed@example.com')
        self.assertTrue(user.is_client)

    def test_create_superuser_is_admin_role(self):
        admin = User.objects.create_superuser(email='root@example.com', password='pass12345', name='Root')
        self.assertEqual(admin.role, UserRole.ADMIN)
        self.assertTrue(admin.is_admin_role)
        self.assertTrue(admin.is_staff)

    def test_password_is_hashed(self):
        user = User.objects.create_user(email='h@example.com', password='pass12345', name='H')
        self.assertNotEqual(user.password, 'pass12345')
        self.assertTrue(user.check_password('pass12345'))


class EnsureAdminCommandTestCase(TestCase):

    @override_settings(DEFAULT_ADMIN_EMAIL='boss@example.com', DEFAULT_ADMIN_PASSWORD='admin123',
                       DEFAULT_ADMIN_PHONE='9999999999')
    def test_creates_admin_once(self):
        call_command('ensure_admin')
        call_command('ensure_admin')

        admins = User.objects.filter(email='boss@example.com')
        self.assertEqual(admins.count(), 1)
        self.assertEqual(admins.get().role, UserRole.ADMIN)
        self.assertTrue(admins.get().check_password('admin123'))

    def test_refuses_to_promote_existing_user(self):
        User.objects.create_user(email='taken@example.com', password='pass12345', name='Taken')
        with self.assertRaises(CommandError):
            call_command('ensure_admin', email='taken@example.com', password='pass12345')
