from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from fastapi import Depends, Header
from jwt import PyJWTError
from passlib.context import CryptContext

from crowdfund.core.config import ALGORITHM, ACCESS_TOKEN_EXPIRE_MINUTES, BCRYPT_ROUNDS, Settings, get_app_settings
from crowdfund.core.errors import AuthError

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=BCRYPT_ROUNDS)

def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)

def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)

def create_access_token(data: dict, secret_key: str, expires_delta: Optional[timedelta] = None) -> str:
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, secret_key, algorithm=ALGORITHM)

def verify_token(token: str, secret_key: str) -> dict:
    try:
        return jwt.decode(token, secret_key, algorithms=[ALGORITHM])
    except PyJWTError:
        raise AuthError("Invalid token")

def get_current_subject(
    authorization: Optional[str] = Header(None),
    settings: Settings = Depends(get_app_settings),
):
    """Resolve the user id from the raw ``Authorization`` header.

    The header carries the token itself, not ``Bearer <token>``.
    """
    if not authorization:
        raise AuthError("Access denied")
    payload = verify_token(authorization, settings.secret_key)
    subject = payload.get("id")
    if subject is None:
        raise AuthError("Invalid token")
    return subject
