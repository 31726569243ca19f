"""
Authentication views.

Login is by e-mail and password and returns a JWT access token (in
``token``) and a refresh token.  Registration and password resets are
administrator actions; there is no self-service sign-up.
"""
from __future__ import annotations

import logging

from django.contrib.auth.models import update_last_login
from django.utils.crypto import get_random_string
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import AuthenticationFailed, NotFound, ValidationError
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.views import TokenRefreshView

from .authentication import issue_tokens
from .models import User
from .permissions import IsAdminRole
from .serializers.auth import (
    ChangePasswordSerializer,
    LoginSerializer,
    RegisterSerializer,
    ResetPasswordSerializer,
)
from .views.users import serialize_user

security_logger = logging.getLogger('medtrack.security')

TEMP_PASSWORD_LENGTH = 8


@api_view(['POST'])
@permission_classes([AllowAny])
def login_view(request):
    s = LoginSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    email = s.validated_data['email']
    password = s.validated_data['password']

    user = User.objects.filter(email__iexact=email).first()
    if user is None or not user.check_password(password):
        security_logger.warning("Failed login for %s from %s", email, request.META.get('REMOTE_ADDR'))
        raise AuthenticationFailed('Invalid credentials')
    if user.status == User.STATUS_SUSPENDED:
        security_logger.warning("Login refused for suspended account %s", email)
        raise AuthenticationFailed('Account suspended')

    refresh = issue_tokens(user)
    update_last_login(None, user)
    security_logger.info("User %s logged in", user.id)
    return Response({
        'success': True,
        'token': str(refresh.access_token),
        'refresh': str(refresh),
        'user': {
            'id': user.id,
            'name': user.name,
            'email': user.email,
            'role': user.role,
            'status': user.status,
        },
    })


@api_view(['POST'])
@permission_classes([AllowAny])
def jwt_refresh_view(request):
    """Return a new access token (as ``token``) from a refresh token."""
    view = TokenRefreshView.as_view()
    resp = view(request._request)
    if isinstance(resp, Response) and 'access' in resp.data:
        data = dict(resp.data)
        data['token'] = data.pop('access')
        return Response(data, status=resp.status_code)
    return resp


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def profile_view(request):
    return Response(serialize_user(request.user))


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def change_password_view(request):
    s = ChangePasswordSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    user = request.user
    if not user.check_password(s.validated_data['old_password']):
        raise ValidationError({'old_password': 'Old password incorrect'})
    user.set_password(s.validated_data['new_password'])
    user.save(update_fields=['password', 'updated_at'])
    security_logger.info("User %s changed password", user.id)
    return Response({'message': 'Password changed'})


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def register_view(request):
    s = RegisterSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    user = User.objects.create_user(
        username=vd['email'],
        email=vd['email'],
        password=vd['password'],
        name=vd['name'],
        role=vd['role'],
        department=vd.get('department') or None,
        status=vd['status'],
    )
    security_logger.info("User %s registered %s as %s", request.user.id, user.email, user.role)
    return Response({'message': 'User created', 'user': serialize_user(user)}, status=201)


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def reset_password_view(request):
    s = ResetPasswordSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    user = User.objects.filter(email__iexact=s.validated_data['email']).first()
    if user is None:
        raise NotFound('User not found')
    temp_password = get_random_string(TEMP_PASSWORD_LENGTH)
    user.set_password(temp_password)
    user.save(update_fields=['password', 'updated_at'])
    security_logger.warning("Password for %s reset by admin %s", user.email, request.user.id)
    return Response({'message': 'Password reset', 'tempPassword': temp_password})
