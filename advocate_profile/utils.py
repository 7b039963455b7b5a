from rest_framework.exceptions import NotFound

from .models import Advocate


def get_own_advocate(user):
    """
    Advocate profile of the authenticated advocate, or 404 when the account has
    no profile row (e.g. it was created through the Django admin).
    """
    advocate = Advocate.objects.filter(user_id=user.pk).first()
    if advocate is None:
        raise NotFound("Advocate profile not found")
    return advocate
