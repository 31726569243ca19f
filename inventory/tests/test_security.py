import pytest
from django.urls import reverse
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import AccessToken

from inventory.models import User

pytestmark = pytest.mark.django_db

PASSWORD = 'P@ssw0rd1'


def make_user(email, role='user', **extra):
    return User.objects.create_user(
        username=email, email=email, password=PASSWORD, name=email.split('@')[0], role=role, **extra
    )


def login(client, email, password=PASSWORD):
    return client.post(reverse('login_view'), {'email': email, 'password': password}, format='json')


def bearer(client, token):
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {token}')
    return client


def test_login_returns_jwt_with_role_claims():
    client = APIClient()
    u = make_user('tech@hospital.local', role='staff')
    r = login(client, 'Tech@Hospital.local')
    assert r.status_code == 200
    assert r.data['success'] is True
    assert r.data['user'] == {
        'id': u.id, 'name': 'tech', 'email': 'tech@hospital.local', 'role': 'staff', 'status': 'active',
    }
    claims = AccessToken(r.data['token'])
    assert int(claims['id']) == u.id
    assert claims['role'] == 'staff'
    assert claims['email'] == 'tech@hospital.local'


def test_login_rejects_bad_credentials():
    client = APIClient()
    make_user('a@hospital.local')
    for email, password in [('a@hospital.local', 'wrong'), ('nobody@hospital.local', PASSWORD)]:
        r = login(client, email, password)
        assert r.status_code == 401
        assert r.data['error']['message'] == 'Invalid credentials'


def test_login_rejects_role_in_payload():
    client = APIClient()
    u = make_user('b@hospital.local')
    r = client.post(
        reverse('login_view'),
        {'email': 'b@hospital.local', 'password': PASSWORD, 'role': 'admin'},
        format='json',
    )
    assert r.status_code == 200
    assert r.data['user']['role'] == 'user'
    u.refresh_from_db()
    assert u.role == 'user'


def test_suspended_user_cannot_login_or_use_old_token():
    client = APIClient()
    u = make_user('c@hospital.local')
    token = login(client, 'c@hospital.local').data['token']

    u.status = User.STATUS_SUSPENDED
    u.save()

    r = login(client, 'c@hospital.local')
    assert r.status_code == 401
    assert r.data['error']['message'] == 'Account suspended'

    r = bearer(client, token).get('/api/auth/profile')
    assert r.status_code == 401


def test_profile_and_refresh_flow():
    client = APIClient()
    make_user('d@hospital.local')
    data = login(client, 'd@hospital.local').data

    r = bearer(client, data['token']).get('/api/auth/profile')
    assert r.status_code == 200
    assert r.data['email'] == 'd@hospital.local'
    assert 'password' not in r.data

    r = APIClient().post('/api/auth/refresh', {'refresh': data['refresh']}, format='json')
    assert r.status_code == 200
    assert AccessToken(r.data['token'])['role'] == 'user'


def test_garbage_token_is_rejected():
    client = bearer(APIClient(), 'not-a-jwt')
    r = client.get('/api/devices')
    assert r.status_code == 401
    assert r.data['ok'] is False


def test_change_password_checks_old_password():
    client = APIClient()
    u = make_user('e@hospital.local')
    bearer(client, login(client, 'e@hospital.local').data['token'])

    r = client.post('/api/auth/change-password', {'old_password': 'nope', 'new_password': 'N3wPass!'}, format='json')
    assert r.status_code == 400
    assert r.data['error']['message'] == 'Old password incorrect'

    r = client.post('/api/auth/change-password', {'old_password': PASSWORD, 'new_password': 'N3wPass!'}, format='json')
    assert r.status_code == 200
    u.refresh_from_db()
    assert u.check_password('N3wPass!')


def test_register_and_reset_password_are_admin_only():
    client = APIClient()
    make_user('staff@hospital.local', role='staff')
    make_user('admin@hospital.local', role='admin')

    bearer(client, login(client, 'staff@hospital.local').data['token'])
    r = client.post('/api/auth/register', {'name': 'X', 'email': 'x@hospital.local', 'password': 'p'}, format='json')
    assert r.status_code == 403
    assert r.data['error']['message'] == 'Admin only'

    bearer(client, login(client, 'admin@hospital.local').data['token'])
    r = client.post('/api/auth/register', {'name': 'X', 'email': 'x@hospital.local', 'password': 'p4ss'}, format='json')
    assert r.status_code == 201
    assert r.data['user']['role'] == 'user'

    r = client.post('/api/auth/register', {'name': 'Y', 'email': 'x@hospital.local', 'password': 'p'}, format='json')
    assert r.status_code == 400
    assert r.data['error']['message'] == 'Email already exists'

    r = client.post('/api/auth/register', {'email': 'z@hospital.local'}, format='json')
    assert r.status_code == 400
    assert r.data['error']['message'] == 'Missing fields'

    r = client.post('/api/auth/reset-password', {'email': 'x@hospital.local'}, format='json')
    assert r.status_code == 200
    temp = r.data['tempPassword']
    assert len(temp) == 8
    assert User.objects.get(email='x@hospital.local').check_password(temp)


def test_user_admin_endpoints():
    client = APIClient()
    admin = make_user('admin@hospital.local', role='admin')
    nurse = make_user('nurse@hospital.local', role='staff', department='ICU')
    bearer(client, login(client, 'admin@hospital.local').data['token'])

    r = client.get('/api/users', {'q': 'icu', 'role': 'all'})
    assert r.status_code == 200
    assert [u['id'] for u in r.data] == [nurse.id]
    assert 'no-store' in r['Cache-Control']

    r = client.put(f'/api/users/{nurse.id}/status', {'status': 'banned'}, format='json')
    assert r.status_code == 400
    assert r.data['error']['message'] == 'Invalid status'

    r = client.put(f'/api/users/{nurse.id}/status', {'status': 'suspended'}, format='json')
    assert r.status_code == 200
    assert r.data['status'] == 'suspended'

    r = client.put(f'/api/users/{nurse.id}', {'name': 'Head Nurse', 'password': 'S3cret!!'}, format='json')
    assert r.status_code == 200
    nurse.refresh_from_db()
    assert nurse.name == 'Head Nurse'
    assert nurse.check_password('S3cret!!')

    r = client.delete(f'/api/users/{admin.id}')
    assert r.status_code == 400

    r = client.delete(f'/api/users/{nurse.id}')
    assert r.status_code == 200
    assert not User.objects.filter(pk=nurse.pk).exists()


def test_non_admin_cannot_list_users():
    client = APIClient()
    make_user('f@hospital.local')
    bearer(client, login(client, 'f@hospital.local').data['token'])
    r = client.get('/api/users')
    assert r.status_code == 403
