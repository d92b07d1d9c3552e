"""Authentication, session and profile routes."""
from unittest.mock import Mock

import pytest

from uiforge.services.service_base import AuthenticationError

NEW_USER = {'email': 'grace@example.com', 'password': 'long-password', 'username': 'grace'}


@pytest.mark.integration
class TestRegistration:

    def test_register_logs_the_user_in(self, client):
        response = client.post('/api/auth/register', json=dict(NEW_USER, firstName='Grace'))

        assert response.status_code == 201
        data = response.get_json()
        assert data['success'] is True
        assert data['user']['email'] == 'grace@example.com'
        assert data['user']['firstName'] == 'Grace'
        assert 'passwordHash' not in data['user'] and 'password_hash' not in data['user']

        status = client.get('/api/auth/status').get_json()
        assert status['authenticated'] is True
        assert status['user']['email'] == 'grace@example.com'

    def test_duplicate_email(self, app):
        first = app.test_client()
        assert first.post('/api/auth/register', json=NEW_USER).status_code == 201

        response = app.test_client().post('/api/auth/register', json=dict(NEW_USER, username='other'))

        assert response.status_code == 409
        assert response.get_json()['error'] == "User with this email already exists"

    def test_duplicate_username(self, app):
        assert app.test_client().post('/api/auth/register', json=NEW_USER).status_code == 201

        response = app.test_client().post('/api/auth/register', json=dict(NEW_USER, email='other@example.com'))

        assert response.status_code == 409
        assert response.get_json()['error'] == "Username already exists"

    def test_invalid_payload(self, client):
        response = client.post('/api/auth/register', json={'email': 'bad', 'password': 'short'})

        assert response.status_code == 400
        assert response.get_json()['success'] is False

    def test_register_when_logged_in(self, registered_client):
        response = registered_client.post('/api/auth/register', json=NEW_USER)

        assert response.status_code == 400
        assert response.get_json() == {'error': 'Already authenticated'}


@pytest.mark.integration
class TestLoginLogout:

    def test_status_anonymous(self, client):
        assert client.get('/api/auth/status').get_json() == {'authenticated': False, 'user': None}

    def test_login_and_logout(self, app):
        app.test_client().post('/api/auth/register', json=NEW_USER)
        client = app.test_client()

        response = client.post('/api/auth/login', json={'email': 'Grace@example.com', 'password': 'long-password'})
        assert response.status_code == 200
        assert response.get_json()['user']['username'] == 'grace'

        assert client.post('/api/auth/logout').get_json() == {'success': True}
        assert client.get('/api/auth/status').get_json()['authenticated'] is False

    def test_wrong_password(self, app):
        app.test_client().post('/api/auth/register', json=NEW_USER)

        response = app.test_client().post('/api/auth/login', json={'email': NEW_USER['email'], 'password': 'wrong-one'})

        assert response.status_code == 401
        assert response.get_json()['error'] == "Invalid email or password"

    def test_logout_requires_session(self, client):
        response = client.post('/api/auth/logout')

        assert response.status_code == 401
        assert response.get_json() == {'error': 'Authentication required'}


@pytest.mark.integration
class TestProfile:

    def test_profile_requires_session(self, client):
        assert client.get('/api/user/profile').status_code == 401
        assert client.put('/api/user/profile', json={'bio': 'x'}).status_code == 401

    def test_get_profile(self, registered_client):
        response = registered_client.get('/api/user/profile')

        assert response.status_code == 200
        profile = response.get_json()['profile']
        assert profile['email'] == 'ada@example.com'
        assert profile['lastName'] == 'Lovelace'

    def test_update_profile(self, registered_client):
        response = registered_client.put('/api/user/profile', json={
            'firstName': 'Augusta', 'age': 36, 'dateOfBirth': '1815-12-10', 'bio': 'Analyst',
        })

        assert response.status_code == 200
        profile = response.get_json()['profile']
        assert profile['firstName'] == 'Augusta'
        assert profile['age'] == 36
        assert profile['dateOfBirth'] == '1815-12-10'
        assert registered_client.get('/api/auth/status').get_json()['user']['bio'] == 'Analyst'

    def test_update_profile_validation(self, registered_client):
        response = registered_client.put('/api/user/profile', json={'age': -1})
        assert response.status_code == 400

    def test_update_profile_duplicate_username(self, app, registered_client):
        app.test_client().post('/api/auth/register', json=NEW_USER)

        response = registered_client.put('/api/user/profile', json={'username': 'grace'})

        assert response.status_code == 409


@pytest.mark.integration
class TestGoogleOAuth:

    def test_not_configured(self, client):
        response = client.get('/api/auth/google')

        assert response.status_code == 503
        assert response.get_json()['error'] == "Google authentication is not configured"
        assert client.get('/api/auth/google/callback?code=x&state=y').status_code == 503

    @pytest.fixture
    def oauth(self, components):
        service = Mock()
        service.is_configured = True
        service.authorization_url.return_value = ('https://accounts.google.com/o/oauth2/v2/auth?state=s', 's')
        components.set_oauth_service(service)
        return service

    def test_redirects_to_provider(self, client, oauth):
        response = client.get('/api/auth/google')

        assert response.status_code == 302
        assert response.headers['Location'].startswith('https://accounts.google.com/')
        redirect_uri = oauth.authorization_url.call_args[0][0]
        assert redirect_uri.endswith('/api/auth/google/callback')

    def test_callback_success_logs_in(self, client, oauth):
        oauth.fetch_profile.return_value = {'sub': 'g-42', 'email': 'new@example.com', 'given_name': 'New'}

        response = client.get('/api/auth/google/callback?code=abc&state=s')

        assert response.status_code == 302
        assert response.headers['Location'].endswith('/?auth=success')
        status = client.get('/api/auth/status').get_json()
        assert status['authenticated'] is True
        assert status['user']['firstName'] == 'New'
        assert status['user']['emailVerified'] is True

    def test_callback_failure(self, client, oauth):
        oauth.fetch_profile.side_effect = AuthenticationError("state mismatch")

        response = client.get('/api/auth/google/callback?code=abc&state=wrong')

        assert response.status_code == 302
        assert response.headers['Location'].endswith('/?auth=failed')
        assert client.get('/api/auth/status').get_json()['authenticated'] is False

    def test_callback_profile_without_email(self, client, oauth):
        oauth.fetch_profile.return_value = {'sub': 'g-43'}

        response = client.get('/api/auth/google/callback?code=abc&state=s')

        assert response.headers['Location'].endswith('/?auth=failed')

    def test_provider_error_param(self, client, oauth):
        response = client.get('/api/auth/google/callback?error=access_denied')

        assert response.headers['Location'].endswith('/?auth=failed')
        oauth.fetch_profile.assert_not_called()
