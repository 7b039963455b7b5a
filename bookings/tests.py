from datetime import date, time
from decimal import Decimal

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from advocate_profile.models import Advocate
from bookings.models import Booking
from catalog.models import Service
from common.choices import BookingStatus, PaymentStatus, SessionType, UserRole
from users.models import User


class BookingAPITestBase(APITestCase):

    def setUp(self):
        self.client_user = User.objects.create_user(
            email='client@example.com', password='pass12345', name='Client One', phone='9000000001'
        )
        self.other_client = User.objects.create_user(
            email='client2@example.com', password='pass12345', name='Client Two'
        )
        self.advocate_user = User.objects.create_user(
            email='adv@example.com', password='pass12345', name='Meera Shah',
            phone='9000000002', role=UserRole.ADVOCATE,
        )
        self.advocate = Advocate.objects.create(
            user=self.advocate_user, specialization='Family Law', location='Mumbai',
            hourly_rate=Decimal('500.00'),
        )
        self.other_advocate_user = User.objects.create_user(
            email='adv2@example.com', password='pass12345', name='Arjun Das', role=UserRole.ADVOCATE,
        )
        self.other_advocate = Advocate.objects.create(user=self.other_advocate_user)
        self.service = Service.objects.create(
            advocate=self.advocate, title='Consult', description='Call',
            price=Decimal('750.00'), duration_minutes=45,
        )

    def make_booking(self, user=None, advocate=None, **extra):
        defaults = {
            'booking_date': date(2024, 5, 10),
            'booking_time': time(10, 30),
            'service_type': SessionType.ONLINE,
            'total_amount': Decimal('500.00'),
        }
        defaults.update(extra)
        return Booking.objects.create(
            user=user or self.client_user, advocate=advocate or self.advocate, **defaults
        )


class BookingCreateTests(BookingAPITestBase):

    def setUp(self):
        super().setUp()
        self.url = reverse('bookings:booking-create')
        self.client.force_authenticate(user=self.client_user)

    def test_hourly_rate_booking(self):
        response = self.client.post(self.url, {
            'advocate_id': self.advocate.pk,
            'booking_date': '2024-06-01',
            'booking_time': '14:00',
            'service_type': 'online',
            'notes': 'Custody question',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['message'], 'Booking created successfully')

        booking = Booking.objects.get(pk=response.data['bookingId'])
        self.assertEqual(booking.total_amount, Decimal('500.00'))
        self.assertEqual(booking.status, BookingStatus.PENDING)
        self.assertEqual(booking.payment_status, PaymentStatus.PENDING)
        self.assertEqual(booking.user, self.client_user)
        self.assertIsNone(booking.service_id)

    def test_service_price_wins(self):
        response = self.client.post(self.url, {
            'advocate_id': self.advocate.pk,
            'service_id': self.service.pk,
            'booking_date': '2024-06-01',
            'booking_time': '14:00',
            'service_type': 'offline',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        booking = Booking.objects.get(pk=response.data['bookingId'])
        self.assertEqual(booking.total_amount, Decimal('750.00'))
        self.assertEqual(booking.service, self.service)

    def test_total_is_a_snapshot(self):
        response = self.client.post(self.url, {
            'advocate_id': self.advocate.pk,
            'booking_date': '2024-06-01',
            'booking_time': '14:00',
            'service_type': 'online',
        }, format='json')
        self.advocate.hourly_rate = Decimal('900.00')
        self.advocate.save()

        booking = Booking.objects.get(pk=response.data['bookingId'])
        self.assertEqual(booking.total_amount, Decimal('500.00'))

    def test_no_rate_means_zero(self):
        response = self.client.post(self.url, {
            'advocate_id': self.other_advocate.pk,
            'booking_date': '2024-06-01',
            'booking_time': '14:00',
            'service_type': 'online',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(Booking.objects.get(pk=response.data['bookingId']).total_amount, Decimal('0.00'))

    def test_missing_fields(self):
        response = self.client.post(self.url, {'advocate_id': self.advocate.pk}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data, {
            'error': 'Missing required fields: advocate_id, booking_date, booking_time, '
                     'and service_type are required'
        })

    def test_non_object_body(self):
        response = self.client.post(self.url, [1, 2], format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data, {'error': 'Invalid data. Expected a JSON object.'})
        self.assertFalse(Booking.objects.exists())

    def test_unknown_advocate(self):
        response = self.client.post(self.url, {
            'advocate_id': 999999,
            'booking_date': '2024-06-01',
            'booking_time': '14:00',
            'service_type': 'online',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data, {'error': 'Advocate not found'})
        self.assertFalse(Booking.objects.exists())

    def test_service_of_another_advocate(self):
        response = self.client.post(self.url, {
            'advocate_id': self.other_advocate.pk,
            'service_id': self.service.pk,
            'booking_date': '2024-06-01',
            'booking_time': '14:00',
            'service_type': 'online',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(Booking.objects.exists())

    def test_invalid_session_type(self):
        response = self.client.post(self.url, {
            'advocate_id': self.advocate.pk,
            'booking_date': '2024-06-01',
            'booking_time': '14:00',
            'service_type': 'both',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_advocate_cannot_book(self):
        self.client.force_authenticate(user=self.advocate_user)
        response = self.client.post(self.url, {
            'advocate_id': self.other_advocate.pk,
            'booking_date': '2024-06-01',
            'booking_time': '14:00',
            'service_type': 'online',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_anonymous_cannot_book(self):
        self.client.force_authenticate(user=None)
        response = self.client.post(self.url, {}, format='json')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)


class BookingListTests(BookingAPITestBase):

    def test_my_bookings_newest_slot_first(self):
        early = self.make_booking(booking_date=date(2024, 5, 1))
        late = self.make_booking(booking_date=date(2024, 5, 20), service=self.service)
        self.make_booking(user=self.other_client)

        self.client.force_authenticate(user=self.client_user)
        response = self.client.get(reverse('bookings:my-bookings'))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([row['id'] for row in response.data], [late.pk, early.pk])
        self.assertEqual(response.data[0]['advocate_name'], 'Meera Shah')
        self.assertEqual(response.data[0]['service_title'], 'Consult')
        self.assertIsNone(response.data[1]['service_title'])

    def test_advocate_bookings(self):
        mine = self.make_booking()
        self.make_booking(advocate=self.other_advocate)

        self.client.force_authenticate(user=self.advocate_user)
        response = self.client.get(reverse('bookings:advocate-bookings'))
        self.assertEqual([row['id'] for row in response.data], [mine.pk])
        self.assertEqual(response.data[0]['user_name'], 'Client One')
        self.assertEqual(response.data[0]['user_email'], 'client@example.com')


class BookingStatusTests(BookingAPITestBase):

    def setUp(self):
        super().setUp()
        self.booking = self.make_booking()
        self.url = reverse('bookings:booking-status', args=[self.booking.pk])

    def test_owner_advocate_updates_status(self):
        self.client.force_authenticate(user=self.advocate_user)
        response = self.client.patch(self.url, {'status': 'confirmed'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {'message': 'Booking status updated'})
        self.booking.refresh_from_db()
        self.assertEqual(self.booking.status, BookingStatus.CONFIRMED)

    def test_any_transition_is_allowed(self):
        self.booking.status = BookingStatus.CANCELLED
        self.booking.save()
        self.client.force_authenticate(user=self.advocate_user)
        response = self.client.patch(self.url, {'status': 'completed'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.booking.refresh_from_db()
        self.assertEqual(self.booking.status, BookingStatus.COMPLETED)

    def test_unknown_status_rejected(self):
        self.client.force_authenticate(user=self.advocate_user)
        response = self.client.patch(self.url, {'status': 'archived'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.booking.refresh_from_db()
        self.assertEqual(self.booking.status, BookingStatus.PENDING)

    def test_other_advocate_gets_404(self):
        self.client.force_authenticate(user=self.other_advocate_user)
        response = self.client.patch(self.url, {'status': 'confirmed'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data, {'error': 'Booking not found or unauthorized'})

    def test_client_cannot_update_status(self):
        self.client.force_authenticate(user=self.client_user)
        response = self.client.patch(self.url, {'status': 'confirmed'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)


class BookingCancelTests(BookingAPITestBase):

    def test_owner_cancels(self):
        booking = self.make_booking(status=BookingStatus.CONFIRMED)
        self.client.force_authenticate(user=self.client_user)
        response = self.client.patch(reverse('bookings:booking-cancel', args=[booking.pk]))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {'message': 'Booking cancelled'})
        booking.refresh_from_db()
        self.assertEqual(booking.status, BookingStatus.CANCELLED)

    def test_other_client_cannot_cancel(self):
        booking = self.make_booking()
        self.client.force_authenticate(user=self.other_client)
        response = self.client.patch(reverse('bookings:booking-cancel', args=[booking.pk]))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        booking.refresh_from_db()
        self.assertEqual(booking.status, BookingStatus.PENDING)


class BookingDetailTests(BookingAPITestBase):

    def setUp(self):
        super().setUp()
        self.booking = self.make_booking(service=self.service)
        self.url = reverse('bookings:booking-detail', args=[self.booking.pk])

    def test_client_owner_sees_detail(self):
        self.client.force_authenticate(user=self.client_user)
        response = self.client.get(self.url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['advocate_name'], 'Meera Shah')
        self.assertEqual(response.data['user_email'], 'client@example.com')
        self.assertEqual(response.data['service_description'], 'Call')

    def test_advocate_owner_sees_detail(self):
        self.client.force_authenticate(user=self.advocate_user)
        self.assertEqual(self.client.get(self.url).status_code, status.HTTP_200_OK)

    def test_admin_sees_any_booking(self):
        admin = User.objects.create_superuser(email='root@example.com', password='pass12345', name='Root')
        self.client.force_authenticate(user=admin)
        self.assertEqual(self.client.get(self.url).status_code, status.HTTP_200_OK)

    def test_strangers_are_forbidden(self):
        for user in (self.other_client, self.other_advocate_user):
            self.client.force_authenticate(user=user)
            response = self.client.get(self.url)
            self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
            self.assertEqual(response.data, {'error': 'Unauthorized'})

    def test_missing_booking(self):
        self.client.force_authenticate(user=self.client_user)
        response = self.client.get(reverse('bookings:booking-detail', args=[999999]))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data, {'error': 'Booking not found'})


class BookingCascadeTests(BookingAPITestBase):

    def test_deleting_client_removes_bookings(self):
        self.make_booking()
        self.client_user.delete()
        self.assertFalse(Booking.objects.exists())

    def test_deleting_advocate_user_removes_profile_and_bookings(self):
        self.make_booking()
        self.advocate_user.delete()
        self.assertFalse(Advocate.objects.filter(pk=self.advocate.pk).exists())
        self.assertFalse(Service.objects.filter(pk=self.service.pk).exists())
        self.assertFalse(Booking.objects.exists())
