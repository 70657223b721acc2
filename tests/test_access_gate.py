"""
Tests for the upload access gate
"""
from unittest.mock import MagicMock

import pytest

import config
from core.errors import AuthError
from database import User
from services.access_gate import AccessDecision, AccessGate


def lookup_for(*states):
    def lookup(state):
        if state in states:
            return User(id=1, name='tester', state=state)
        return None
    return lookup


class TestAuthorize:

    def test_missing_cookie_is_unauthenticated(self):
        gate = AccessGate(allow_upload=True, user_lookup=lookup_for('good'))
        assert gate.authorize(None) is AccessDecision.UNAUTHENTICATED
        assert gate.authorize('') is AccessDecision.UNAUTHENTICATED

    def test_unknown_cookie_is_forbidden(self):
        gate = AccessGate(allow_upload=True, user_lookup=lookup_for('good'))
        assert gate.authorize('bad') is AccessDecision.FORBIDDEN

    def test_known_cookie_is_allowed(self):
        gate = AccessGate(allow_upload=True, user_lookup=lookup_for('good'))
        assert gate.authorize('good') is AccessDecision.ALLOWED

    def test_disabled_uploads_are_forbidden(self):
        lookup = MagicMock()
        gate = AccessGate(allow_upload=False, user_lookup=lookup)
        assert gate.authorize('good') is AccessDecision.FORBIDDEN
        lookup.assert_not_called()

    def test_flag_defaults_to_config(self, monkeypatch):
        monkeypatch.setattr(config, 'ALLOW_UPLOAD', True)
        assert AccessGate(user_lookup=lookup_for()).allow_upload is True
        monkeypatch.setattr(config, 'ALLOW_UPLOAD', False)
        assert AccessGate(user_lookup=lookup_for()).allow_upload is False


class TestCheck:

    def test_allowed_returns_none(self):
        gate = AccessGate(allow_upload=True, user_lookup=lookup_for('good'))
        assert gate.check('good', remote_addr='127.0.0.1', path='/api/upload') is None

    @pytest.mark.parametrize('cookie, status, message', [
        (None, 401, 'Not logged in!'),
        ('bad', 403, 'Invalid Cookie'),
    ])
    def test_denied_raises_auth_error(self, cookie, status, message):
        gate = AccessGate(allow_upload=True, user_lookup=lookup_for('good'))
        with pytest.raises(AuthError) as exc_info:
            gate.check(cookie, remote_addr='127.0.0.1', path='/api/upload')
        assert exc_info.value.status_code == status
        assert exc_info.value.message == message

    def test_disabled_message(self):
        gate = AccessGate(allow_upload=False, user_lookup=lookup_for('good'))
        with pytest.raises(AuthError) as exc_info:
            gate.check('good')
        assert exc_info.value.status_code == 403
        assert exc_info.value.message == 'Uploads are disabled'

    def test_check_enabled_ignores_cookie(self):
        lookup = MagicMock()
        AccessGate(allow_upload=True, user_lookup=lookup).check_enabled()
        lookup.assert_not_called()

        with pytest.raises(AuthError) as exc_info:
            AccessGate(allow_upload=False, user_lookup=lookup).check_enabled(path='/api/other')
        assert exc_info.value.status_code == 403
        assert exc_info.value.message == 'Uploads are disabled'
        lookup.assert_not_called()
