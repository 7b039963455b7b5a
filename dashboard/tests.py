from datetime import date, time
from decimal import Decimal

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from advocate_profile.models import Advocate
from bookings.models import Booking
from catalog.models import Service
from common.choices import BookingStatus, PaymentStatus, SessionType, UserRole
from rating_and_reviews.models import Review
from users.models import User


class AdminDashboardAPITests(APITestCase):
    def setUp(self):
        self.admin = User.objects.create_superuser(email='root@example.com', password='pass12345', name='Root')

        self.client_user = User.objects.create_user(
            email='client@example.com', password='pass12345', name='Client One', phone='9000000001'
        )
        User.objects.create_user(email='client2@example.com', password='pass12345', name='Client Two')

        self.advocate_user = User.objects.create_user(
            email='adv@example.com', password='pass12345', name='Meera Shah', role=UserRole.ADVOCATE
        )
        self.advocate = Advocate.objects.create(
            user=self.advocate_user, specialization='Family Law', location='Mumbai',
        )

        self.paid = self._booking(day=1, total=Decimal('500.00'), payment=PaymentStatus.PAID,
                                  booking_status=BookingStatus.COMPLETED)
        self._booking(day=2, total=Decimal('250.50'), payment=PaymentStatus.PAID,
                      booking_status=BookingStatus.CONFIRMED)
        self._booking(day=3, total=Decimal('999.00'), payment=PaymentStatus.PENDING)
        self._booking(day=4, total=Decimal('100.00'), payment=PaymentStatus.REFUNDED)

        self.client.force_authenticate(user=self.admin)

    def _booking(self, day, total, payment, booking_status=BookingStatus.PENDING):
        return Booking.objects.create(
            user=self.client_user,
            advocate=self.advocate,
            booking_date=date(2024, 7, day),
            booking_time=time(10, 0),
            service_type=SessionType.ONLINE,
            total_amount=total,
            payment_status=payment,
            status=booking_status,
        )

    # ================= Stats =================
    def test_dashboard_stats(self):
        response = self.client.get(reverse('dashboard:dashboard-stats'))
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        data = response.data
        self.assertEqual(data['totalUsers'], 2)
        self.assertEqual(data['totalAdvocates'], 1)
        self.assertEqual(data['totalBookings'], 4)
        self.assertEqual(data['pendingBookings'], 2)
        self.assertEqual(Decimal(data['totalRevenue']), Decimal('750.50'))
        self.assertEqual(len(data['recentBookings']), 4)

        newest = data['recentBookings'][0]
        self.assertEqual(newest['user_name'], 'Client One')
        self.assertEqual(newest['advocate_name'], 'Meera Shah')

    def test_recent_bookings_capped_at_ten(self):
        for day in range(5, 20):
            self._booking(day=day, total=Decimal('1.00'), payment=PaymentStatus.PENDING)
        response = self.client.get(reverse('dashboard:dashboard-stats'))
        self.assertEqual(len(response.data['recentBookings']), 10)
        self.assertEqual(response.data['totalBookings'], 19)

    def test_revenue_zero_without_paid_bookings(self):
        Booking.objects.all().delete()
        response = self.client.get(reverse('dashboard:dashboard-stats'))
        self.assertEqual(Decimal(response.data['totalRevenue']), Decimal('0'))
        self.assertEqual(response.data['recentBookings'], [])

    # ================= Role gate =================
    def test_non_admins_forbidden(self):
        for user in (self.client_user, self.advocate_user):
            self.client.force_authenticate(user=user)
            for name in ('dashboard:dashboard-stats', 'dashboard:admin-users',
                         'dashboard:admin-advocates', 'dashboard:admin-bookings'):
                response = self.client.get(reverse(name))
                self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN, name)

    def test_anonymous_unauthorized(self):
        self.client.force_authenticate(user=None)
        response = self.client.get(reverse('dashboard:dashboard-stats'))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    # ================= Lists =================
    def test_user_list(self):
        response = self.client.get(reverse('dashboard:admin-users'))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 4)
        self.assertEqual(
            set(response.data[0].keys()), {'id', 'name', 'email', 'phone', 'role', 'created_at'}
        )

    def test_advocate_list(self):
        response = self.client.get(reverse('dashboard:admin-advocates'))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)
        row = response.data[0]
        self.assertEqual(row['id'], self.advocate.pk)
        self.assertEqual(row['name'], 'Meera Shah')
        self.assertEqual(row['email'], 'adv@example.com')
        self.assertFalse(row['is_verified'])

    def test_booking_list(self):
        response = self.client.get(reverse('dashboard:admin-bookings'))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 4)
        self.assertEqual(response.data[0]['user_email'], 'client@example.com')
        self.assertEqual(response.data[0]['advocate_email'], 'adv@example.com')

    # ================= Verify =================
    def test_verify_advocate(self):
        url = reverse('dashboard:admin-advocate-verify', args=[self.advocate.pk])
        response = self.client.patch(url, {'is_verified': True}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {'message': 'Advocate verification status updated'})
        self.advocate.refresh_from_db()
        self.assertTrue(self.advocate.is_verified)

        self.client.patch(url, {'is_verified': False}, format='json')
        self.advocate.refresh_from_db()
        self.assertFalse(self.advocate.is_verified)

    def test_verify_requires_flag(self):
        url = reverse('dashboard:admin-advocate-verify', args=[self.advocate.pk])
        response = self.client.patch(url, {}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_verify_unknown_advocate(self):
        url = reverse('dashboard:admin-advocate-verify', args=[999999])
        response = self.client.patch(url, {'is_verified': True}, format='json')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data, {'error': 'Advocate not found'})

    # ================= Delete =================
    def test_delete_user_cascades(self):
        Review.objects.create(booking=self.paid, user=self.client_user, advocate=self.advocate, rating=5)

        response = self.client.delete(reverse('dashboard:admin-user-delete', args=[self.client_user.pk]))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {'message': 'User deleted successfully'})
        self.assertFalse(User.objects.filter(pk=self.client_user.pk).exists())
        self.assertFalse(Booking.objects.exists())
        self.assertFalse(Review.objects.exists())

    def test_delete_advocate_user_removes_profile_services_bookings_reviews(self):
        Service.objects.create(advocate=self.advocate, title='Consult', description='Call',
                               price=Decimal('500.00'), duration_minutes=30)
        Review.objects.create(booking=self.paid, user=self.client_user, advocate=self.advocate, rating=4)

        response = self.client.delete(reverse('dashboard:admin-user-delete', args=[self.advocate_user.pk]))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(Advocate.objects.filter(pk=self.advocate.pk).exists())
        self.assertFalse(Service.objects.exists())
        self.assertFalse(Booking.objects.exists())
        self.assertFalse(Review.objects.exists())
        self.assertTrue(User.objects.filter(pk=self.client_user.pk).exists())

    def test_delete_unknown_user(self):
        response = self.client.delete(reverse('dashboard:admin-user-delete', args=[999999]))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data, {'error': 'User not found'})
