import logging
import re
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
import jwt
from fastapi import Header, HTTPException
from pydantic import BaseModel

from config import get_jwt_secret
from schemas import Role

logger = logging.getLogger(__name__)

BCRYPT_ROUNDS = 10
MIN_PASSWORD_LENGTH = 6
BCRYPT_MAX_BYTES = 72
TOKEN_TTL = timedelta(hours=1)
JWT_ALGORITHM = "HS256"

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class TokenData(BaseModel):
    id: str
    role: Role


def is_valid_email(email: str) -> bool:
    return bool(EMAIL_RE.match(email))


def _password_bytes(password: str) -> bytes:
    # bcrypt only looks at the first 72 bytes
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    return bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(_password_bytes(password), password_hash.encode("utf-8"))
    except ValueError:
        # stored value is not a bcrypt hash
        return False


def _secret() -> str:
    secret = get_jwt_secret()
    if not secret:
        raise RuntimeError("JWT_SECRET is not configured")
    return secret


def create_token(user_id: str, role: Role) -> str:
    payload = {
        "id": str(user_id),
        "role": Role(role).value,
        "exp": datetime.now(timezone.utc) + TOKEN_TTL,
    }
    return jwt.encode(payload, _secret(), algorithm=JWT_ALGORITHM)


def decode_token(token: str) -> TokenData:
    """Decode and verify a bearer token, mapping failures to 401s."""
    try:
        decoded = jwt.decode(token, _secret(), algorithms=[JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        logger.warning("Token verification failed: expired")
        raise HTTPException(status_code=401, detail="Token expired")
    except jwt.InvalidTokenError as e:
        logger.warning(f"Token verification failed: {e}")
        raise HTTPException(status_code=401, detail="Invalid token")
    try:
        return TokenData(id=decoded["id"], role=decoded["role"])
    except (KeyError, ValueError):
        raise HTTPException(status_code=401, detail="Invalid token")


def bearer_token(authorization: Optional[str]) -> str:
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="No valid Bearer token provided")
    token = authorization[len("Bearer "):].strip()
    if not token:
        raise HTTPException(status_code=401, detail="No valid Bearer token provided")
    return token


def require_role(role: Role):
    """Build a dependency that admits only tokens carrying `role`."""

    def dependency(authorization: Optional[str] = Header(None)) -> TokenData:
        user = decode_token(bearer_token(authorization))
        if user.role != role:
            logger.warning(f"Not authorized: role is {user.role.value}, {role.value} required")
            raise HTTPException(status_code=403, detail=f"Not authorized: {role.value.capitalize()} only")
        return user

    return dependency


require_admin = require_role(Role.ADMIN)
require_tourist = require_role(Role.TOURIST)
