"""
Access gate for protected endpoints.

The ``require_auth`` decorator sits in front of every task endpoint.  It
pulls the bearer token out of the ``Authorization`` header, hands it to
:func:`tracker_app.jwt.verify_token`, and either records the caller's
identity on ``flask.g`` or answers 401 without ever calling the view.

Two distinct rejections are possible:

* no header, or one that does not start with exactly ``"Bearer "`` --
  the caller must supply a credential;
* a header is present but the token fails verification -- the credential
  is invalid (bad signature, expired, tampered, or malformed alike).
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from functools import wraps

from flask import Response, current_app, g, jsonify, request

from .errors import AuthRequiredError, InvalidTokenError, TrackerError
from .jwt import verify_token

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


def _reject(error: TrackerError) -> tuple[Response, int]:
    return jsonify(error.to_dict()), error.status_code


def extract_bearer_token(auth_header: str | None) -> str | None:
    """
    Return the token part of a ``Bearer <token>`` header value.

    The scheme prefix is case-sensitive and must be followed by a single
    space.  Returns ``None`` when the header is absent or uses another
    scheme; a bare ``"Bearer "`` yields an empty string, which then fails
    verification.
    """
    if not auth_header or not auth_header.startswith(BEARER_PREFIX):
        return None
    return auth_header.split(" ")[1]


def require_auth(view_func: Callable[..., tuple[Response, int] | Response]):
    """
    Decorator that enforces Bearer-token authentication on a view.

    On success ``g.user`` holds the decoded claims and ``g.username`` the
    authenticated identity.  On failure the request is short-circuited with
    a 401 JSON error and the wrapped view is never invoked.
    """

    @wraps(view_func)
    def wrapper(*args, **kwargs):
        token = extract_bearer_token(request.headers.get("Authorization"))
        if token is None:
            return _reject(AuthRequiredError())

        payload = verify_token(
            token,
            current_app.config["JWT_SECRET_KEY"],
            algorithms=[current_app.config.get("JWT_ALGORITHM", "HS256")],
            leeway=int(current_app.config.get("JWT_CLOCK_SKEW_SECONDS", 0)),
        )
        if payload is None:
            logger.debug("Rejected invalid token on %s %s", request.method, request.path)
            return _reject(InvalidTokenError())

        g.user = payload
        g.username = payload["username"]
        return view_func(*args, **kwargs)

    return wrapper
