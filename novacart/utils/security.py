# novacart/utils/security.py
from datetime import datetime, timedelta, timezone

import jwt
from passlib.context import CryptContext

from novacart.utils.settings import JWT_ALGORITHM, JWT_LIFETIME_DAYS, JWT_SECRET, PASSWORD_SCHEMES

pwd_context = CryptContext(schemes=PASSWORD_SCHEMES, deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)


def create_access_token(claims: dict, expires_delta: timedelta | None = None) -> str:
    to_encode = claims.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(days=JWT_LIFETIME_DAYS))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, JWT_SECRET, algorithm=JWT_ALGORITHM)


def decode_access_token(token: str) -> dict:
    """Raises jwt.PyJWTError on a bad signature, expiry or malformed token."""
    return jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM], options={"require": ["exp"]})
