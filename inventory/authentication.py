"""
Bearer token authentication for the API.

This module defines a subclass of simplejwt's ``JWTAuthentication``
that reads ``Authorization: Bearer <token>`` headers.  Keeping it apart
from the views gives settings a stable import path and avoids circular
imports when the REST framework initialises authentication classes.
"""
from __future__ import annotations

from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import AuthenticationFailed
from rest_framework_simplejwt.tokens import RefreshToken


class BearerJWTAuthentication(JWTAuthentication):
    """JWT authentication using the ``Bearer`` keyword.

    Tokens carry the user's ``id``, ``role`` and ``email`` claims; the
    user row is still loaded on every request so role changes and
    suspensions take effect without re-login.
    """

    www_authenticate_realm = 'medtrack'

    def get_user(self, validated_token):
        user = super().get_user(validated_token)
        if getattr(user, 'status', None) == 'suspended':
            raise AuthenticationFailed('Account suspended', code='user_suspended')
        return user


def issue_tokens(user) -> RefreshToken:
    """Return a refresh token carrying ``role`` and ``email`` claims.

    ``refresh.access_token`` copies these claims onto each access token
    it mints, including those minted by the refresh endpoint.
    """
    refresh = RefreshToken.for_user(user)
    refresh['role'] = user.role
    refresh['email'] = user.email
    return refresh
