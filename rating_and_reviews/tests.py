from datetime import date, time
from decimal import Decimal

from django.db import IntegrityError, transaction
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from advocate_profile.models import Advocate
from bookings.models import Booking
from common.choices import BookingStatus, SessionType, UserRole
from rating_and_reviews.models import Review
from users.models import User


class ReviewAPITests(APITestCase):

    def setUp(self):
        self.client_user = User.objects.create_user(email='client@example.com', password='pass12345',
                                                    name='Client One')
        self.other_client = User.objects.create_user(email='client2@example.com', password='pass12345',
                                                     name='Client Two')
        advocate_user = User.objects.create_user(email='adv@example.com', password='pass12345',
                                                 name='Meera Shah', role=UserRole.ADVOCATE)
        self.advocate = Advocate.objects.create(user=advocate_user, hourly_rate=Decimal('500.00'))
        self.url = reverse('review-create')
        self.client.force_authenticate(user=self.client_user)

    def make_booking(self, user=None, booking_status=BookingStatus.COMPLETED, day=1):
        return Booking.objects.create(
            user=user or self.client_user,
            advocate=self.advocate,
            booking_date=date(2024, 4, day),
            booking_time=time(10, 0),
            service_type=SessionType.ONLINE,
            status=booking_status,
        )

    def test_review_updates_rating(self):
        booking = self.make_booking()
        response = self.client.post(self.url, {
            'booking_id': booking.pk, 'rating': 4, 'comment': 'Clear advice',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['message'], 'Review submitted successfully')
        self.assertTrue(Review.objects.filter(pk=response.data['reviewId'], booking=booking).exists())

        self.advocate.refresh_from_db()
        self.assertEqual(self.advocate.rating, Decimal('4.00'))
        self.assertEqual(self.advocate.total_reviews, 1)

    def test_rating_is_mean_of_all_reviews(self):
        for day, rating in enumerate([5, 3, 4, 2], start=1):
            booking = self.make_booking(day=day)
            response = self.client.post(self.url, {'booking_id': booking.pk, 'rating': rating}, format='json')
            self.assertEqual(response.status_code, status.HTTP_201_CREATED)

        self.advocate.refresh_from_db()
        self.assertEqual(self.advocate.rating, Decimal('3.50'))
        self.assertEqual(self.advocate.total_reviews, 4)

    def test_second_review_for_same_booking(self):
        booking = self.make_booking()
        self.client.post(self.url, {'booking_id': booking.pk, 'rating': 5}, format='json')
        response = self.client.post(self.url, {'booking_id': booking.pk, 'rating': 1}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data, {'error': 'Review already exists for this booking'})
        self.assertEqual(Review.objects.filter(booking=booking).count(), 1)
        self.advocate.refresh_from_db()
        self.assertEqual(self.advocate.rating, Decimal('5.00'))
        self.assertEqual(self.advocate.total_reviews, 1)

    def test_booking_not_completed(self):
        for booking_status in (BookingStatus.PENDING, BookingStatus.CONFIRMED, BookingStatus.CANCELLED):
            booking = self.make_booking(booking_status=booking_status)
            response = self.client.post(self.url, {'booking_id': booking.pk, 'rating': 5}, format='json')
            self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
            self.assertEqual(response.data, {'error': 'Invalid booking or booking not completed'})
        self.assertFalse(Review.objects.exists())

    def test_someone_elses_booking(self):
        booking = self.make_booking(user=self.other_client)
        response = self.client.post(self.url, {'booking_id': booking.pk, 'rating': 5}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(Review.objects.exists())

    def test_rating_out_of_range(self):
        booking = self.make_booking()
        for rating in (0, 6):
            response = self.client.post(self.url, {'booking_id': booking.pk, 'rating': rating}, format='json')
            self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(Review.objects.exists())

    def test_advocate_cannot_review(self):
        self.client.force_authenticate(user=self.advocate.user)
        booking = self.make_booking()
        response = self.client.post(self.url, {'booking_id': booking.pk, 'rating': 5}, format='json')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_public_review_list(self):
        first = self.make_booking(day=1)
        second = self.make_booking(day=2)
        Review.objects.create(booking=first, user=self.client_user, advocate=self.advocate, rating=3,
                              comment='x' * 80)
        latest = Review.objects.create(booking=second, user=self.client_user, advocate=self.advocate, rating=5)

        self.client.force_authenticate(user=None)
        response = self.client.get(reverse('review-advocate-list', args=[self.advocate.pk]))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 2)
        self.assertEqual(response.data[0]['id'], latest.pk)
        self.assertEqual(response.data[0]['user_name'], 'Client One')
        self.assertEqual(response.data[1]['short_comment'], 'x' * 50 + '...')

    def test_deleting_booking_removes_review(self):
        booking = self.make_booking()
        Review.objects.create(booking=booking, user=self.client_user, advocate=self.advocate, rating=4)
        booking.delete()
        self.assertFalse(Review.objects.exists())

    def test_database_rejects_out_of_range_rating(self):
        booking = self.make_booking()
        with self.assertRaises(IntegrityError), transaction.atomic():
            Review.objects.create(booking=booking, user=self.client_user, advocate=self.advocate, rating=9)


class BookingToReviewFlowTests(APITestCase):

    def test_book_complete_review(self):
        client_user = User.objects.create_user(email='client@example.com', password='pass12345', name='Client')
        advocate_user = User.objects.create_user(email='adv@example.com', password='pass12345', name='Adv',
                                                 role=UserRole.ADVOCATE)
        advocate = Advocate.objects.create(user=advocate_user, hourly_rate=Decimal('500.00'))

        self.client.force_authenticate(user=client_user)
        created = self.client.post(reverse('bookings:booking-create'), {
            'advocate_id': advocate.pk,
            'booking_date': '2024-08-01',
            'booking_time': '09:30',
            'service_type': 'online',
        }, format='json')
        self.assertEqual(created.status_code, status.HTTP_201_CREATED)
        booking_id = created.data['bookingId']

        early = self.client.post(reverse('review-create'), {'booking_id': booking_id, 'rating': 4}, format='json')
        self.assertEqual(early.status_code, status.HTTP_400_BAD_REQUEST)

        self.client.force_authenticate(user=advocate_user)
        updated = self.client.patch(reverse('bookings:booking-status', args=[booking_id]),
                                    {'status': 'completed'}, format='json')
        self.assertEqual(updated.status_code, status.HTTP_200_OK)

        self.client.force_authenticate(user=client_user)
        reviewed = self.client.post(reverse('review-create'), {'booking_id': booking_id, 'rating': 4}, format='json')
        self.assertEqual(reviewed.status_code, status.HTTP_201_CREATED)

        advocate.refresh_from_db()
        self.assertEqual(advocate.total_reviews, 1)
        self.assertEqual(advocate.rating, Decimal('4.00'))
