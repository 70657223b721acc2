"""
Access gate for the upload API.

A request may upload when the process-wide ALLOW_UPLOAD flag is on and its
session cookie maps to a known user:

    no cookie              -> UNAUTHENTICATED (401)
    cookie, no such user   -> FORBIDDEN (403)
    uploads disabled       -> FORBIDDEN (403)
    otherwise              -> ALLOWED
"""

from enum import Enum
from typing import Callable, Optional

import config
from core.errors import AuthError
from database import users
from utils.logging_config import get_logger

logger = get_logger('AccessGate')


class AccessDecision(Enum):
    UNAUTHENTICATED = 401
    FORBIDDEN = 403
    ALLOWED = 200


class AccessGate:
    def __init__(self, allow_upload: bool = None, user_lookup: Callable[[str], Optional[object]] = None):
        self.allow_upload = config.ALLOW_UPLOAD if allow_upload is None else allow_upload
        self._user_lookup = user_lookup or users.get_user_by_state

    def authorize(self, cookie_value: Optional[str]) -> AccessDecision:
        if not self.allow_upload:
            return AccessDecision.FORBIDDEN
        if not cookie_value:
            return AccessDecision.UNAUTHENTICATED
        if self._user_lookup(cookie_value) is None:
            return AccessDecision.FORBIDDEN
        return AccessDecision.ALLOWED

    def check_enabled(self, remote_addr: str = None, path: str = None):
        """Raise AuthError (403) when the upload API is switched off."""
        if not self.allow_upload:
            self._refuse(AccessDecision.FORBIDDEN, "Uploads are disabled", remote_addr, path)

    def check(self, cookie_value: Optional[str], remote_addr: str = None, path: str = None):
        """
        Raise AuthError unless the request is allowed.

        Raises:
            AuthError: With status 401 or 403
        """
        self.check_enabled(remote_addr, path)

        decision = self.authorize(cookie_value)
        if decision is AccessDecision.ALLOWED:
            return

        message = "Invalid Cookie" if decision is AccessDecision.FORBIDDEN else "Not logged in!"
        self._refuse(decision, message, remote_addr, path)

    @staticmethod
    def _refuse(decision: AccessDecision, message: str, remote_addr: str, path: str):
        logger.warning(f"Returned {decision.value} to {remote_addr} - tried to reach '{path}' ({message})")
        raise AuthError(message, status_code=decision.value)
