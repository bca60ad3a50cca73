"""
HTTP route tests.

Covers:
  - guests are redirected to /login on protected routes
  - register / login / logout flows and their error messages
  - the alice end-to-end scenario
  - add / delete track routes (validation, cascade, 404)
  - store failures become a generic 500
"""

import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

EMBED = 'https://www.youtube.com/embed/q76bMAP1Xqg'


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def app():
    """Create a fresh app with an in-memory database."""
    os.environ['SECRET_KEY'] = 'test-secret-key-routes'

    from config import config
    config.SQLALCHEMY_DATABASE_URI = 'sqlite://'

    from app import create_app
    application = create_app(testing=True)
    yield application


@pytest.fixture()
def guest(app):
    """Unauthenticated test client."""
    return app.test_client()


def _register(client, username, password='password1'):
    return client.post('/register', data={'username': username, 'password': password})


@pytest.fixture()
def user_client(app):
    """Registered and logged-in test client."""
    client = app.test_client()
    resp = _register(client, 'regular')
    assert resp.status_code == 302
    return client


def _create_track(app, name='Heavy Rain on Tin Roof'):
    with app.app_context():
        from app.models import db
        from app.services import TrackStore
        return TrackStore(db.session).create(name, EMBED).id


def _session_token(client):
    with client.session_transaction() as sess:
        return sess.get('sid')


# ===========================================================================
# 1. Guests
# ===========================================================================

class TestGuestRedirected:
    """Protected routes redirect guests to the login page."""

    @pytest.mark.parametrize('method,url', [
        ('get', '/favorites'),
        ('post', '/favorite/1'),
        ('post', '/unfavorite/1'),
        ('post', '/add'),
        ('post', '/delete/1'),
        ('get', '/account/password'),
    ])
    def test_protected(self, guest, method, url):
        resp = getattr(guest, method)(url)
        assert resp.status_code == 302
        assert resp.headers['Location'].endswith('/login')

    def test_public_pages(self, guest):
        assert guest.get('/').status_code == 200
        assert guest.get('/browse').status_code == 200
        assert guest.get('/login').status_code == 200
        assert guest.get('/register').status_code == 200

    def test_empty_library(self, guest):
        resp = guest.get('/')
        assert resp.status_code == 200
        assert b'No tracks yet.' in resp.data

    def test_unknown_path(self, guest):
        resp = guest.get('/definitely/not/here')
        assert resp.status_code == 404
        assert b'404 Not Found' in resp.data

    def test_security_headers(self, guest):
        resp = guest.get('/')
        assert resp.headers['X-Content-Type-Options'] == 'nosniff'

    def test_health(self, app, guest):
        _create_track(app)
        resp = guest.get('/healthz')
        assert resp.get_json() == {'status': 'ok', 'tracks': 1}


# ===========================================================================
# 2. Auth flows
# ===========================================================================

class TestAuthRoutes:

    def test_register_starts_session(self, app):
        client = app.test_client()
        resp = _register(client, 'newbie')
        assert resp.status_code == 302
        assert resp.headers['Location'].endswith('/')
        assert _session_token(client)
        assert client.get('/favorites').status_code == 200

    def test_register_short_password(self, guest):
        resp = _register(guest, 'shorty', '12345')
        assert resp.status_code == 400
        assert b'password too short' in resp.data

    def test_register_empty_username(self, guest):
        resp = _register(guest, '', 'password1')
        assert resp.status_code == 400

    def test_register_duplicate(self, app):
        _register(app.test_client(), 'taken')
        resp = _register(app.test_client(), 'taken', 'different1')
        assert resp.status_code == 409
        assert b'already taken' in resp.data

    def test_login_wrong_password(self, app):
        _register(app.test_client(), 'carol')
        client = app.test_client()
        resp = client.post('/login', data={'username': 'carol', 'password': 'nope123'})
        assert resp.status_code == 401
        assert b'Invalid username or password.' in resp.data
        assert _session_token(client) is None

    def test_login_unknown_user(self, guest):
        resp = guest.post('/login', data={'username': 'ghost', 'password': 'password1'})
        assert resp.status_code == 401

    def test_logout_destroys_session(self, app, user_client):
        token = _session_token(user_client)
        resp = user_client.post('/logout')
        assert resp.status_code == 302
        assert resp.headers['Location'].endswith('/login')
        assert user_client.get('/favorites').status_code == 302

        with app.app_context():
            from app.exceptions import Unauthenticated
            from app.models import db
            from app.services import SessionManager
            with pytest.raises(Unauthenticated):
                SessionManager(db.session).resolve(token)

    def test_change_password(self, app, user_client):
        resp = user_client.post('/account/password', data={
            'current_password': 'password1',
            'new_password': 'password2',
        })
        assert resp.status_code == 200
        assert b'Password updated.' in resp.data

        client = app.test_client()
        assert client.post('/login', data={
            'username': 'regular', 'password': 'password1',
        }).status_code == 401
        assert client.post('/login', data={
            'username': 'regular', 'password': 'password2',
        }).status_code == 302

    def test_change_password_wrong_current(self, user_client):
        resp = user_client.post('/account/password', data={
            'current_password': 'wrongpass',
            'new_password': 'password2',
        })
        assert resp.status_code == 400

    def test_login_again_ends_previous_session(self, app):
        from app.exceptions import Unauthenticated
        from app.models import db
        from app.services import SessionManager

        client = app.test_client()
        _register(client, 'twice')
        first = _session_token(client)

        resp = client.post('/login', data={'username': 'twice', 'password': 'password1'})
        assert resp.status_code == 302
        second = _session_token(client)
        assert second and second != first

        with app.app_context():
            manager = SessionManager(db.session)
            with pytest.raises(Unauthenticated):
                manager.resolve(first)
            assert manager.resolve(second)

    def test_register_long_username(self, guest):
        resp = _register(guest, 'x' * 81)
        assert resp.status_code == 400
        assert b'at most 80 characters' in resp.data

    def test_change_password_ends_other_sessions(self, app, user_client):
        other_device = app.test_client()
        other_device.post('/login', data={'username': 'regular', 'password': 'password1'})
        assert other_device.get('/favorites').status_code == 200

        resp = user_client.post('/account/password', data={
            'current_password': 'password1',
            'new_password': 'password2',
        })
        assert resp.status_code == 200

        assert other_device.get('/favorites').status_code == 302
        assert user_client.get('/favorites').status_code == 200


# ===========================================================================
# 3. End-to-end scenario
# ===========================================================================

def test_alice_scenario(app):
    track_id = _create_track(app, 'T123')

    _register(app.test_client(), 'alice', 'password1')

    client = app.test_client()
    resp = client.post('/login', data={'username': 'alice', 'password': 'wrongpass'})
    assert b'Invalid username or password.' in resp.data

    resp = client.post('/login', data={'username': 'alice', 'password': 'password1'})
    assert resp.status_code == 302
    token = _session_token(client)
    assert token

    resp = client.post(f'/favorite/{track_id}')
    assert resp.status_code == 302
    assert resp.headers['Location'].endswith('/favorites')

    resp = client.get('/favorites')
    assert resp.status_code == 200
    assert b'T123' in resp.data

    client.post('/logout')

    with app.app_context():
        from app.exceptions import Unauthenticated
        from app.models import db
        from app.services import SessionManager
        with pytest.raises(Unauthenticated):
            SessionManager(db.session).resolve(token)


# ===========================================================================
# 4. Tracks and favorites
# ===========================================================================

class TestTrackRoutes:

    def test_add_track(self, app, user_client):
        resp = user_client.post('/add', data={
            'name': 'French Jazz Cafe',
            'embedUrl': EMBED,
        })
        assert resp.status_code == 302
        assert '?error=' not in resp.headers['Location']
        assert b'French Jazz Cafe' in user_client.get('/browse').data

    def test_add_track_invalid_url(self, app, user_client):
        resp = user_client.post('/add', data={
            'name': 'Bad',
            'embedUrl': 'https://www.youtube.com/watch?v=q76bMAP1Xqg',
        })
        assert resp.status_code == 302
        assert '?error=' in resp.headers['Location']

        with app.app_context():
            from app.models import db
            from app.services import TrackStore
            assert TrackStore(db.session).count() == 0

    def test_index_shows_error_message(self, guest):
        resp = guest.get('/?error=Something%20broke')
        assert b'Something broke' in resp.data

    def test_index_marks_favorited_track(self, app, user_client):
        track_id = _create_track(app, 'Only Track')
        assert b'>Favorite</button>' in user_client.get('/').data

        user_client.post(f'/favorite/{track_id}')

        page = user_client.get('/').data
        assert b'>Unfavorite</button>' in page
        assert b'>Favorite</button>' not in page

    def test_favorite_unknown_track(self, user_client):
        assert user_client.post('/favorite/999').status_code == 404

    def test_favorite_and_unfavorite(self, app, user_client):
        track_id = _create_track(app, 'Chiptune Menu')
        user_client.post(f'/favorite/{track_id}')
        user_client.post(f'/favorite/{track_id}')
        assert user_client.get('/favorites').data.count(b'<h3>Chiptune Menu</h3>') == 1

        user_client.post(f'/unfavorite/{track_id}')
        assert b'No favorites yet.' in user_client.get('/favorites').data

    def test_unfavorite_not_favorited(self, app, user_client):
        track_id = _create_track(app)
        resp = user_client.post(f'/unfavorite/{track_id}')
        assert resp.status_code == 302

    def test_delete_cascades_to_every_user(self, app):
        track_id = _create_track(app, 'Doomed Track')

        alice = app.test_client()
        bob = app.test_client()
        _register(alice, 'alice')
        _register(bob, 'bob')
        alice.post(f'/favorite/{track_id}')
        bob.post(f'/favorite/{track_id}')

        resp = alice.post(f'/delete/{track_id}')
        assert resp.status_code == 302
        assert resp.headers['Location'].endswith('/browse')

        assert b'Doomed Track' not in alice.get('/favorites').data
        assert b'Doomed Track' not in bob.get('/favorites').data
        assert b'Doomed Track' not in bob.get('/browse').data

    def test_delete_unknown_track(self, user_client):
        assert user_client.post('/delete/999').status_code == 404


# ===========================================================================
# 5. Failures
# ===========================================================================

class TestFailures:

    def test_store_failure_is_generic_500(self, app, guest, monkeypatch):
        from app.exceptions import StoreFailure

        def broken(self):
            raise StoreFailure('tracks.find_random')

        monkeypatch.setattr('app.services.tracks.TrackStore.find_random', broken)
        resp = guest.get('/')
        assert resp.status_code == 500
        assert b'Something went wrong' in resp.data
        assert b'tracks.find_random' not in resp.data

    def test_missing_database_url_is_fatal(self, monkeypatch):
        from config import config
        from app import create_app
        from app.exceptions import ConfigurationError

        monkeypatch.setattr(config, 'SQLALCHEMY_DATABASE_URI', None)
        with pytest.raises(ConfigurationError):
            create_app(testing=True)

    def test_logout_store_failure_is_500(self, app, user_client, monkeypatch):
        from sqlalchemy.exc import OperationalError

        token = _session_token(user_client)

        def broken_commit(self):
            raise OperationalError('COMMIT', {}, Exception('disk I/O error'))

        monkeypatch.setattr('sqlalchemy.orm.Session.commit', broken_commit)
        resp = user_client.post('/logout')
        assert resp.status_code == 500
        assert b'Something went wrong' in resp.data
        assert b'disk I/O error' not in resp.data

        monkeypatch.undo()

        # The session survived the failed destroy, so logging out can be retried
        assert _session_token(user_client) == token
        assert user_client.get('/favorites').status_code == 200
        assert user_client.post('/logout').status_code == 302
        assert user_client.get('/favorites').status_code == 302
