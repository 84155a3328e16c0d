import jwt
from flask import current_app, request

from .simple_logger import get_logger

logger = get_logger("auth")


def _normalize_user_payload(payload):
    """Ensure common fields (like email) are available on decoded tokens."""
    if not payload or not isinstance(payload, dict):
        return None

    email = (
        payload.get('email')
        or payload.get('Email')
        or payload.get('user_email')
    )

    if not email:
        username = (
            payload.get('username')
            or payload.get('preferred_username')
            or payload.get('sub')
        )
        if isinstance(username, str) and '@' in username:
            email = username

    if not isinstance(email, str) or not email.strip():
        return None

    payload['email'] = email.strip().lower()
    return payload


def decode_jwt(token):
    config = current_app.config
    try:
        if config.get('JWT_VERIFY_SIGNATURE', True):
            payload = jwt.decode(
                token,
                config['JWT_SECRET_KEY'],
                algorithms=config.get('JWT_ALGORITHMS') or ['HS256'],
                options={"verify_aud": False},
            )
        else:
            payload = jwt.decode(token, options={"verify_signature": False, "verify_aud": False})
    except jwt.PyJWTError as e:
        logger.warning(f"Rejected bearer token: {e}")
        return None
    return _normalize_user_payload(payload)


def get_current_user():
    """Decoded identity claims for the request, or None."""
    auth = request.headers.get('Authorization', None)
    if not auth:
        return None
    # Handle malformed auth headers (e.g., "Bearer " without token)
    parts = auth.split(' ')
    if len(parts) < 2 or parts[0].lower() != 'bearer' or not parts[1]:
        return None
    return decode_jwt(parts[1])
