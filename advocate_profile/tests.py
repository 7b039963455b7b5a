from datetime import date, time
from decimal import Decimal

from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from advocate_profile.models import Advocate
from bookings.models import Booking
from catalog.models import Service
from common.choices import BookingStatus, ServiceType, SessionType, UserRole
from rating_and_reviews.models import Review
from users.models import User


def make_advocate(email, name, **profile):
    user = User.objects.create_user(email=email, password='pass12345', name=name, role=UserRole.ADVOCATE)
    return Advocate.objects.create(user=user, **profile)


class AdvocateDirectoryTests(APITestCase):
    """
    Public listing and its filters.
    """

    def setUp(self):
        self.family = make_advocate(
            'meera@example.com', 'Meera Shah',
            specialization='Family Law', location='Mumbai',
            rating=Decimal('4.50'), total_reviews=10,
        )
        self.criminal = make_advocate(
            'arjun@example.com', 'Arjun Das',
            specialization='Criminal Law', location='Delhi',
            rating=Decimal('3.80'), total_reviews=4,
        )
        self.away = make_advocate(
            'away@example.com', 'Away Advocate',
            specialization='Family Law', location='Mumbai',
            rating=Decimal('5.00'), is_available=False,
        )
        self.url = reverse('advocate-list')

    def _ids(self, response):
        return [row['id'] for row in response.data]

    def test_list_is_public_and_sorted_by_rating(self):
        response = self.client.get(self.url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(self._ids(response), [self.family.pk, self.criminal.pk])
        self.assertEqual(response.data[0]['name'], 'Meera Shah')
        self.assertEqual(response.data[0]['email'], 'meera@example.com')

    def test_unavailable_advocates_hidden(self):
        response = self.client.get(self.url)
        self.assertNotIn(self.away.pk, self._ids(response))

    def test_search_matches_name_specialization_or_location(self):
        self.assertEqual(self._ids(self.client.get(self.url, {'search': 'arjun'})), [self.criminal.pk])
        self.assertEqual(self._ids(self.client.get(self.url, {'search': 'family'})), [self.family.pk])
        self.assertEqual(self._ids(self.client.get(self.url, {'search': 'delhi'})), [self.criminal.pk])

    def test_specialization_and_location_filters(self):
        response = self.client.get(self.url, {'specialization': 'criminal'})
        self.assertEqual(self._ids(response), [self.criminal.pk])
        response = self.client.get(self.url, {'location': 'mum'})
        self.assertEqual(self._ids(response), [self.family.pk])

    def test_min_rating_filter(self):
        response = self.client.get(self.url, {'minRating': '4'})
        self.assertEqual(self._ids(response), [self.family.pk])
        for row in response.data:
            self.assertGreaterEqual(Decimal(row['rating']), Decimal('4'))

    def test_service_type_filter_matches_both(self):
        Service.objects.create(
            advocate=self.family, title='Consult', price=Decimal('500.00'),
            duration_minutes=30, service_type=ServiceType.BOTH,
        )
        Service.objects.create(
            advocate=self.criminal, title='Court visit', price=Decimal('900.00'),
            duration_minutes=60, service_type=ServiceType.OFFLINE,
        )

        online = self.client.get(self.url, {'serviceType': 'online'})
        self.assertEqual(self._ids(online), [self.family.pk])

        offline = self.client.get(self.url, {'serviceType': 'offline'})
        self.assertEqual(self._ids(offline), [self.family.pk, self.criminal.pk])

    def test_service_type_ignores_inactive_services(self):
        Service.objects.create(
            advocate=self.criminal, title='Old online', price=Decimal('100.00'),
            duration_minutes=30, service_type=ServiceType.ONLINE, is_active=False,
        )
        response = self.client.get(self.url, {'serviceType': 'online'})
        self.assertEqual(response.data, [])

    def test_service_type_combined_with_other_filters(self):
        Service.objects.create(
            advocate=self.family, title='Consult', price=Decimal('500.00'),
            duration_minutes=30, service_type=ServiceType.ONLINE,
        )
        response = self.client.get(self.url, {'serviceType': 'online', 'location': 'delhi'})
        self.assertEqual(response.data, [])

    def test_invalid_service_type(self):
        response = self.client.get(self.url, {'serviceType': 'telepathy'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)


class AdvocateDetailTests(APITestCase):

    def setUp(self):
        self.advocate = make_advocate('meera@example.com', 'Meera Shah', specialization='Family Law')
        self.active = Service.objects.create(
            advocate=self.advocate, title='Consult', price=Decimal('500.00'), duration_minutes=30,
        )
        Service.objects.create(
            advocate=self.advocate, title='Retired', price=Decimal('10.00'), duration_minutes=30, is_active=False,
        )
        client = User.objects.create_user(email='c@example.com', password='pass12345', name='Client One')
        for day in range(1, 13):
            booking = Booking.objects.create(
                user=client, advocate=self.advocate, booking_date=date(2024, 1, day),
                booking_time=time(10, 0), service_type=SessionType.ONLINE, status=BookingStatus.COMPLETED,
            )
            Review.objects.create(booking=booking, user=client, advocate=self.advocate, rating=5)

    def test_detail_includes_active_services_and_recent_reviews(self):
        response = self.client.get(reverse('advocate-detail', args=[self.advocate.pk]))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([s['id'] for s in response.data['services']], [self.active.pk])
        self.assertEqual(len(response.data['reviews']), 10)
        self.assertEqual(response.data['reviews'][0]['user_name'], 'Client One')

    def test_unknown_advocate(self):
        response = self.client.get(reverse('advocate-detail', args=[999999]))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data, {'error': 'Advocate not found'})


class AdvocateSelfServiceTests(APITestCase):

    def setUp(self):
        self.advocate = make_advocate(
            'meera@example.com', 'Meera Shah',
            specialization='Family Law', location='Mumbai', hourly_rate=Decimal('1000.00'),
        )
        self.client.force_authenticate(user=self.advocate.user)

    def test_my_profile(self):
        response = self.client.get(reverse('advocate-my-profile'))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['id'], self.advocate.pk)
        self.assertIn('bar_council_number', response.data)

    def test_update_profile_keeps_omitted_fields(self):
        response = self.client.put(reverse('advocate-profile-update'), {
            'bio': 'Twenty years at the Bombay High Court.',
            'hourly_rate': '1200.00',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['message'], 'Profile updated successfully')

        self.advocate.refresh_from_db()
        self.assertEqual(self.advocate.hourly_rate, Decimal('1200.00'))
        self.assertEqual(self.advocate.specialization, 'Family Law')
        self.assertEqual(self.advocate.location, 'Mumbai')

    def test_update_rejects_negative_rate(self):
        response = self.client.put(reverse('advocate-profile-update'), {'hourly_rate': '-5'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_toggle_availability(self):
        response = self.client.patch(reverse('advocate-availability'), {'is_available': False}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {'message': 'Availability updated', 'is_available': False})
        self.advocate.refresh_from_db()
        self.assertFalse(self.advocate.is_available)

    def test_availability_requires_boolean(self):
        response = self.client.patch(reverse('advocate-availability'), {}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_client_cannot_touch_advocate_endpoints(self):
        client = User.objects.create_user(email='c@example.com', password='pass12345', name='Client')
        self.client.force_authenticate(user=client)
        response = self.client.patch(reverse('advocate-availability'), {'is_available': False}, format='json')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_advocate_without_profile(self):
        orphan = User.objects.create_user(
            email='orphan@example.com', password='pass12345', name='Orphan', role=UserRole.ADVOCATE
        )
        self.client.force_authenticate(user=orphan)
        response = self.client.get(reverse('advocate-my-profile'))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data, {'error': 'Advocate profile not found'})


class RecomputeRatingTests(TestCase):

    def setUp(self):
        self.advocate = make_advocate('meera@example.com', 'Meera Shah')
        self.client_user = User.objects.create_user(email='c@example.com', password='pass12345', name='Client')

    def _review(self, day, rating):
        booking = Booking.objects.create(
            user=self.client_user, advocate=self.advocate, booking_date=date(2024, 2, day),
            booking_time=time(9, 0), service_type=SessionType.OFFLINE, status=BookingStatus.COMPLETED,
        )
        return Review.objects.create(booking=booking, user=self.client_user, advocate=self.advocate, rating=rating)

    def test_no_reviews(self):
        self.assertEqual(self.advocate.recompute_rating(), (Decimal('0.00'), 0))

    def test_mean_of_all_reviews(self):
        for day, rating in enumerate([5, 4, 4], start=1):
            self._review(day, rating)
        rating, total = self.advocate.recompute_rating()
        self.assertEqual(rating, Decimal('4.33'))
        self.assertEqual(total, 3)

        self.advocate.refresh_from_db()
        self.assertEqual(self.advocate.rating, Decimal('4.33'))
        self.assertEqual(self.advocate.total_reviews, 3)

    def test_half_rounds_up(self):
        self._review(1, 4)
        self._review(2, 5)
        self._review(3, 5)
        self._review(4, 5)
        self._review(5, 5)
        self._review(6, 5)
        self._review(7, 5)
        self._review(8, 5)
        # 39 / 8 = 4.875
        rating, _ = self.advocate.recompute_rating()
        self.assertEqual(rating, Decimal('4.88'))
