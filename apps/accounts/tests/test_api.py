import pytest
from django.urls import reverse
from rest_framework import status
from apps.accounts.models import User


# =============================================================================
# User Model Tests
# =============================================================================

@pytest.mark.django_db
class TestUserModel:

    def test_create_user_normalizes_email(self):
        user = User.objects.create_user(email='Someone@EXAMPLE.com', password='TestPass123!')

        assert user.email == 'Someone@example.com'
        assert user.check_password('TestPass123!')
        assert not user.is_staff

    def test_create_user_requires_email(self):
        with pytest.raises(ValueError):
            User.objects.create_user(email='', password='TestPass123!')

    def test_create_superuser(self):
        admin = User.objects.create_superuser(email='admin@example.com', password='TestPass123!')

        assert admin.is_staff
        assert admin.is_superuser

    def test_display_name_uses_full_name(self, user):
        assert user.get_display_name() == 'Test User'

    def test_display_name_falls_back_to_email(self):
        user = User.objects.create_user(email='nameless@example.com', password='TestPass123!')

        assert user.get_display_name() == 'nameless'


# =============================================================================
# Token Tests
# =============================================================================

@pytest.mark.django_db
class TestTokenObtain:
    """Tests for POST /api/auth/token/"""

    def test_obtain_token(self, api_client, user):
        url = reverse('token_obtain_pair')
        response = api_client.post(url, {
            'email': 'testuser@example.com',
            'password': 'TestPass123!',
        }, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert 'access' in response.data
        assert 'refresh' in response.data

    def test_wrong_password(self, api_client, user):
        url = reverse('token_obtain_pair')
        response = api_client.post(url, {
            'email': 'testuser@example.com',
            'password': 'WrongPass123!',
        }, format='json')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_inactive_user(self, api_client, user_inactive):
        url = reverse('token_obtain_pair')
        response = api_client.post(url, {
            'email': 'inactive@example.com',
            'password': 'TestPass123!',
        }, format='json')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_refresh_token(self, api_client, user):
        obtain = api_client.post(reverse('token_obtain_pair'), {
            'email': 'testuser@example.com',
            'password': 'TestPass123!',
        }, format='json')

        response = api_client.post(reverse('token_refresh'), {
            'refresh': obtain.data['refresh'],
        }, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert 'access' in response.data


@pytest.mark.django_db
class TestHealthCheck:

    def test_health_check(self, api_client):
        response = api_client.get(reverse('health-check'))

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {'status': 'ok'}
