from datetime import date, time
from decimal import Decimal

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from advocate_profile.models import Advocate
from bookings.models import Booking
from catalog.models import Service
from common.choices import ServiceType, SessionType, UserRole
from users.models import User


class ServiceAPITests(APITestCase):

    def setUp(self):
        self.owner_user = User.objects.create_user(
            email='owner@example.com', password='pass12345', name='Owner', role=UserRole.ADVOCATE
        )
        self.owner = Advocate.objects.create(user=self.owner_user)
        self.other_user = User.objects.create_user(
            email='other@example.com', password='pass12345', name='Other', role=UserRole.ADVOCATE
        )
        self.other = Advocate.objects.create(user=self.other_user)

        self.service = Service.objects.create(
            advocate=self.owner, title='Consult', description='30 minute call',
            price=Decimal('500.00'), duration_minutes=30, service_type=ServiceType.ONLINE,
        )
        self.retired = Service.objects.create(
            advocate=self.owner, title='Retired', description='Old offer',
            price=Decimal('100.00'), duration_minutes=15, is_active=False,
        )
        self.client.force_authenticate(user=self.owner_user)

    # ================= Create =================
    def test_create_service(self):
        response = self.client.post(reverse('service-create'), {
            'title': 'Contract review',
            'description': 'Up to ten pages',
            'price': '2500.00',
            'duration_minutes': 90,
            'service_type': 'offline',
            'category': 'Corporate',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['message'], 'Service created successfully')

        service = Service.objects.get(pk=response.data['serviceId'])
        self.assertEqual(service.advocate, self.owner)
        self.assertTrue(service.is_active)
        self.assertEqual(service.service_type, ServiceType.OFFLINE)

    def test_create_defaults_to_both(self):
        response = self.client.post(reverse('service-create'), {
            'title': 'Anything', 'description': 'Either way', 'price': '10', 'duration_minutes': 10,
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(Service.objects.get(pk=response.data['serviceId']).service_type, ServiceType.BOTH)

    def test_create_free_service(self):
        response = self.client.post(reverse('service-create'), {
            'title': 'Free intro', 'description': 'No charge', 'price': 0, 'duration_minutes': 15,
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

    def test_create_missing_fields(self):
        response = self.client.post(reverse('service-create'), {'title': 'Only a title'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data, {
            'error': 'Missing required fields: title, description, price, and duration_minutes are required'
        })

    def test_create_non_object_body(self):
        response = self.client.post(reverse('service-create'), [1, 2], format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data, {'error': 'Invalid data. Expected a JSON object.'})

    def test_create_rejects_bad_values(self):
        for bad in ({'price': '-1'}, {'duration_minutes': 0}, {'service_type': 'carrier-pigeon'}):
            payload = {'title': 'T', 'description': 'D', 'price': '10', 'duration_minutes': 10}
            payload.update(bad)
            response = self.client.post(reverse('service-create'), payload, format='json')
            self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, bad)

    def test_client_cannot_create(self):
        client = User.objects.create_user(email='c@example.com', password='pass12345', name='Client')
        self.client.force_authenticate(user=client)
        response = self.client.post(reverse('service-create'), {
            'title': 'T', 'description': 'D', 'price': '10', 'duration_minutes': 10,
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    # ================= Lists =================
    def test_my_services_include_inactive(self):
        response = self.client.get(reverse('service-my-list'))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual({row['id'] for row in response.data}, {self.service.pk, self.retired.pk})

    def test_public_list_only_active(self):
        self.client.force_authenticate(user=None)
        response = self.client.get(reverse('service-advocate-list', args=[self.owner.pk]))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([row['id'] for row in response.data], [self.service.pk])
        self.assertEqual(response.data[0]['advocate_id'], self.owner.pk)

    # ================= Update / delete =================
    def test_update_own_service(self):
        response = self.client.put(reverse('service-detail', args=[self.service.pk]), {
            'price': '750.00',
            'is_active': False,
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['message'], 'Service updated successfully')

        self.service.refresh_from_db()
        self.assertEqual(self.service.price, Decimal('750.00'))
        self.assertFalse(self.service.is_active)
        self.assertEqual(self.service.title, 'Consult')

    def test_update_other_advocates_service(self):
        self.client.force_authenticate(user=self.other_user)
        response = self.client.put(reverse('service-detail', args=[self.service.pk]), {'price': '1'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data, {'error': 'Service not found or unauthorized'})
        self.service.refresh_from_db()
        self.assertEqual(self.service.price, Decimal('500.00'))

    def test_delete_keeps_bookings(self):
        client = User.objects.create_user(email='c@example.com', password='pass12345', name='Client')
        booking = Booking.objects.create(
            user=client, advocate=self.owner, service=self.service,
            booking_date=date(2024, 3, 1), booking_time=time(11, 0),
            service_type=SessionType.ONLINE, total_amount=Decimal('500.00'),
        )

        response = self.client.delete(reverse('service-detail', args=[self.service.pk]))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {'message': 'Service deleted successfully'})
        self.assertFalse(Service.objects.filter(pk=self.service.pk).exists())

        booking.refresh_from_db()
        self.assertIsNone(booking.service_id)
        self.assertEqual(booking.total_amount, Decimal('500.00'))

    def test_delete_missing_service(self):
        response = self.client.delete(reverse('service-detail', args=[999999]))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)


class ServiceQuerySetTests(APITestCase):

    def test_offering_includes_both(self):
        user = User.objects.create_user(email='a@example.com', password='pass12345', name='A',
                                        role=UserRole.ADVOCATE)
        advocate = Advocate.objects.create(user=user)
        both = Service.objects.create(advocate=advocate, title='B', price=1, duration_minutes=5,
                                      service_type=ServiceType.BOTH)
        online = Service.objects.create(advocate=advocate, title='On', price=1, duration_minutes=5,
                                        service_type=ServiceType.ONLINE)
        Service.objects.create(advocate=advocate, title='Off', price=1, duration_minutes=5,
                               service_type=ServiceType.OFFLINE)

        self.assertEqual(set(Service.objects.offering(ServiceType.ONLINE)), {both, online})
        self.assertEqual(Service.objects.active().offering(ServiceType.OFFLINE).count(), 2)
