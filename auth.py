"""Хеширование паролей, выпуск и проверка JWT, зависимость текущего пользователя"""

import datetime
from typing import Optional

import bcrypt
import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from config import Settings, get_settings
from exceptions import InvalidTokenError, MissingTokenError, TokenExpiredError

bearer_scheme = HTTPBearer(auto_error=False)


def hash_password(password: str, rounds: int = 12) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Битый хеш в БД считаем несовпадением
        return False


def create_access_token(
        user_id: int,
        email: str,
        settings: Settings,
        now: Optional[datetime.datetime] = None
) -> str:
    """Выпустить токен с минимальными claims: user_id и email"""
    issued_at = now or datetime.datetime.now(datetime.timezone.utc)
    payload = {
        "user_id": user_id,
        "email": email,
        "iat": issued_at,
        "exp": issued_at + datetime.timedelta(days=settings.token_expire_days),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, settings: Settings) -> int:
    """Проверить подпись и срок действия, вернуть user_id"""
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp", "user_id"]}
        )
    except jwt.ExpiredSignatureError as e:
        raise TokenExpiredError() from e
    except jwt.InvalidTokenError as e:
        raise InvalidTokenError() from e

    user_id = payload["user_id"]
    if not isinstance(user_id, int):
        raise InvalidTokenError()
    return user_id


def get_bearer_token(
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)
) -> str:
    """Достать токен из заголовка Authorization: Bearer <token>"""
    if credentials is None or not credentials.credentials:
        raise MissingTokenError()
    return credentials.credentials


def current_user_auth(
        token: str = Depends(get_bearer_token),
        settings: Settings = Depends(get_settings)
) -> int:
    """ID пользователя из проверенного токена"""
    return decode_access_token(token, settings)
