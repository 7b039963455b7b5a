from django.utils.translation import gettext_lazy as _
from django.db import models

class UserRole(models.TextChoices):
    USER = 'user', _('User')
    ADVOCATE = 'advocate', _('Advocate')
    ADMIN = 'admin', _('Admin')

class BookingStatus(models.TextChoices):
    PENDING = 'pending', _('Pending')
    CONFIRMED = 'confirmed', _('Confirmed')
    COMPLETED = 'completed', _('Completed')
    CANCELLED = 'cancelled', _('Cancelled')

class PaymentStatus(models.TextChoices):
    PENDING = 'pending', _('Pending')
    PAID = 'paid', _('Paid')
    REFUNDED = 'refunded', _('Refunded')

class SessionType(models.TextChoices):
    ONLINE = 'online', _('Online')
    OFFLINE = 'offline', _('Offline')

class ServiceType(models.TextChoices):
    ONLINE = 'online', _('Online')
    OFFLINE = 'offline', _('Offline')
    BOTH = 'both', _('Both')
