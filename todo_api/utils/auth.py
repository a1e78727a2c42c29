import logging
from datetime import datetime, timedelta, UTC
from typing import Optional

from fastapi import Header
from jose import jwt, JWTError, ExpiredSignatureError
from passlib.context import CryptContext

from todo_api.errors import AuthError

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str):
    """Hash a password after validating bcrypt's 72-byte limit.

    Raises ValueError if the UTF-8 encoding of the password exceeds 72 bytes.
    """
    if isinstance(password, str):
        b = password.encode("utf-8")
        if len(b) > 72:
            raise ValueError("password too long: must be at most 72 bytes when UTF-8 encoded")
    return pwd_context.hash(password)


def verify_password(plain, hashed):
    """Verify a plaintext password against a hash.

    If verification raises a ValueError (for example plain >72 bytes), return False
    so the caller responds with an authentication failure instead of an error.
    """
    try:
        return pwd_context.verify(plain, hashed)
    except ValueError:
        return False


def create_token(user_id: int, username: str) -> str:
    # read settings at call-time so tests (and runtime overrides) that modify
    # todo_api.config take effect immediately
    import todo_api.config as _cfg
    expire = datetime.now(UTC) + timedelta(minutes=_cfg.ACCESS_TOKEN_EXPIRE_MINUTES)
    data = {
        "sub": str(user_id),
        "username": username,
        "exp": int(expire.timestamp()),  # JWT spec uses Unix timestamp
    }
    return jwt.encode(data, _cfg.SECRET_KEY, algorithm=_cfg.ALGORITHM)


def decode_token(token: str) -> int:
    """Return the user id carried by a token.

    Raises ExpiredSignatureError / JWTError from python-jose, or ValueError
    when the subject is missing or not numeric.
    """
    import todo_api.config as _cfg
    # jwt.decode validates exp automatically
    payload = jwt.decode(token, _cfg.SECRET_KEY, algorithms=[_cfg.ALGORITHM])
    sub = payload.get("sub")
    if sub is None:
        raise ValueError("token has no subject")
    return int(sub)


def _extract_token(authorization: Optional[str]) -> Optional[str]:
    if authorization:
        parts = authorization.split()
        if len(parts) == 2 and parts[0].lower() == "bearer":
            return parts[1]
    return None


def get_current_user_id(authorization: Optional[str] = Header(None)) -> int:
    """Auth gate for task routes.

    Resolves the bearer token to a user id without touching the database.
    Missing, invalid and expired tokens are logged differently but all produce
    the same 401 for the client.
    """
    token = _extract_token(authorization)
    if not token:
        logger.info("rejected request: missing bearer token")
        raise AuthError("Not authenticated")
    try:
        return decode_token(token)
    except ExpiredSignatureError:
        logger.warning("rejected request: expired token")
    except (JWTError, ValueError) as e:
        logger.warning("rejected request: invalid token (%s)", e)
    raise AuthError("Not authenticated")
