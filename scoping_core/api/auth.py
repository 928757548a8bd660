"""
'api/auth.py': Bearer-token verification against Firebase Authentication ID tokens.
"""
import logging
from typing import Optional

from fastapi import Header, Request
from google.auth.exceptions import GoogleAuthError
from google.auth.transport import requests as google_requests
from google.oauth2 import id_token
from werkzeug.exceptions import Unauthorized

BEARER_PREFIX = "Bearer "


class FirebaseTokenVerifier:
    """Verifies Firebase ID tokens issued for one project."""

    def __init__(self, project_id: str, logger: Optional[logging.Logger] = None):
        self.project_id = project_id
        self.logger = logger or logging.getLogger("scoping.auth")
        self._request = google_requests.Request()

    def verify(self, token: str) -> bool:
        try:
            id_token.verify_firebase_token(token, self._request, audience=self.project_id)
            return True
        except (ValueError, GoogleAuthError) as e:
            self.logger.error(f"[verify] Error verifying ID token: {e}")
            return False


def verify_bearer_token(request: Request, authorization: Optional[str] = Header(default=None)) -> None:
    """Reject the request unless it carries a valid `Authorization: Bearer <token>` header."""
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        raise Unauthorized(description="Missing bearer token")

    token = authorization[len(BEARER_PREFIX):].strip()
    if not token or not request.app.state.token_verifier.verify(token):
        raise Unauthorized(description="Invalid bearer token")
