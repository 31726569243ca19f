"""
User administration views.

Only administrators may list, create, edit, suspend or delete accounts.
The list response is marked non-cacheable since it reflects account
status changes immediately.
"""
from __future__ import annotations

import logging

from django.db.models import Q
from django.shortcuts import get_object_or_404
from django.utils.cache import add_never_cache_headers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from ..models import User
from ..permissions import IsAdminRole
from ..serializers.auth import RegisterSerializer
from ..serializers.user import UserListQuerySerializer, UserStatusSerializer, UserUpdateSerializer

security_logger = logging.getLogger('medtrack.security')


def serialize_user(user: User) -> dict:
    return {
        'id': user.id,
        'name': user.name,
        'email': user.email,
        'role': user.role,
        'department': user.department,
        'status': user.status,
        'createdAt': user.created_at.isoformat() if user.created_at else None,
        'updatedAt': user.updated_at.isoformat() if user.updated_at else None,
    }


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def users_list(request):
    if request.method == 'GET':
        q = UserListQuerySerializer(data=request.query_params)
        q.is_valid(raise_exception=True)
        params = q.validated_data
        qs = User.objects.all()
        term = (params.get('q') or '').strip()
        if term:
            qs = qs.filter(Q(name__icontains=term) | Q(email__icontains=term) | Q(department__icontains=term))
        for field in ('role', 'status'):
            value = params.get(field)
            if value and value != 'all':
                qs = qs.filter(**{field: value})
        resp = Response([serialize_user(u) for u in qs.order_by('-created_at', '-id')])
        add_never_cache_headers(resp)
        return resp

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
    security_logger.info("User %s created account %s", request.user.id, user.email)
    return Response(serialize_user(user), status=201)


@api_view(['PUT', 'DELETE'])
@permission_classes([IsAuthenticated, IsAdminRole])
def user_detail(request, pk: int):
    user = get_object_or_404(User, pk=pk)
    if request.method == 'DELETE':
        if user.pk == request.user.pk:
            raise ValidationError({'detail': 'Cannot delete your own account'})
        user.delete()
        security_logger.warning("User %s deleted account %s", request.user.id, pk)
        return Response({'message': 'User deleted'})

    s = UserUpdateSerializer(data=request.data, context={'user': user})
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    for field in ('name', 'role', 'department', 'status'):
        if field in vd:
            setattr(user, field, vd[field])
    if 'email' in vd:
        user.email = vd['email']
        user.username = vd['email']
    if vd.get('password'):
        user.set_password(vd['password'])
    user.save()
    return Response(serialize_user(user))


@api_view(['PUT'])
@permission_classes([IsAuthenticated, IsAdminRole])
def user_status(request, pk: int):
    user = get_object_or_404(User, pk=pk)
    s = UserStatusSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    user.status = s.validated_data['status']
    user.save(update_fields=['status', 'updated_at'])
    security_logger.warning("User %s set account %s to %s", request.user.id, user.pk, user.status)
    return Response(serialize_user(user))
