from rest_framework_simplejwt.tokens import RefreshToken


def issue_tokens(user):
    """
    Build an access/refresh pair for ``user``. The role travels as a claim so
    clients can route without an extra round trip; the server still reads the
    role from the database on every request.
    """
    refresh = RefreshToken.for_user(user)
    refresh["role"] = user.role
    return {
        "access": str(refresh.access_token),
        "refresh": str(refresh),
    }
