"""
Security utilities: password hashing and signed session tokens
"""

import logging
from typing import Any, Optional

from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer
from passlib.context import CryptContext

from .config import SECRET_KEY, SESSION_MAX_AGE

logger = logging.getLogger(__name__)

SESSION_SALT = "collaborator-session"

# Password hashing context
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


# ============================================================================
# PASSWORD SECURITY
# ============================================================================


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """Verify password against stored hash; accounts without a password never match"""
    if not hashed_password:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError as e:
        logger.error(f"Password verification error: {e}")
        return False


# ============================================================================
# SESSION TOKENS
# ============================================================================


def _serializer() -> URLSafeTimedSerializer:
    return URLSafeTimedSerializer(SECRET_KEY)


def generate_session_token(data: dict[str, Any]) -> str:
    """Generate a signed, time-limited bearer token"""
    return _serializer().dumps(data, salt=SESSION_SALT)


def verify_session_token(token: str, max_age: int = SESSION_MAX_AGE) -> Optional[dict[str, Any]]:
    """
    Verify and decode a session token

    Returns:
        Decoded data if valid, None if invalid or expired
    """
    try:
        return _serializer().loads(token, salt=SESSION_SALT, max_age=max_age)
    except SignatureExpired:
        logger.warning("Session token expired")
        return None
    except BadSignature:
        logger.warning("Invalid session token signature")
        return None
