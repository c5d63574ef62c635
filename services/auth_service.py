import logging
from typing import Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

import crud.user as user_crud
from auth import create_access_token, decode_access_token, hash_password, verify_password
from config import Settings
from exceptions import DuplicateAccountError, InvalidCredentialsError, UserNotFoundError
from models.user import UserDB
from schemas.user import UserCreate, UserLogin

logger = logging.getLogger(__name__)


class AuthService:
    """Регистрация, вход и проверка токенов"""

    def __init__(self, db: Session, settings: Settings):
        self.db = db
        self.settings = settings

    def register(self, data: UserCreate) -> Tuple[str, UserDB]:
        if user_crud.account_exists(self.db, data.username, data.email):
            raise DuplicateAccountError()

        password_hash = hash_password(data.password, rounds=self.settings.bcrypt_rounds)
        try:
            user = user_crud.create_user(self.db, data.username, data.email, password_hash)
        except IntegrityError as e:
            # Параллельная регистрация с теми же данными
            self.db.rollback()
            raise DuplicateAccountError() from e

        logger.info(f"Registered user id={user.id} username='{user.username}'")
        return self._issue_token(user), user

    def login(self, data: UserLogin) -> Tuple[str, UserDB]:
        user = user_crud.get_user_by_email(self.db, data.email)
        if user is None or not verify_password(data.password, user.password_hash):
            logger.info(f"Failed login attempt for '{data.email}'")
            raise InvalidCredentialsError()

        logger.info(f"User id={user.id} logged in")
        return self._issue_token(user), user

    def verify_token(self, token: str) -> int:
        return decode_access_token(token, self.settings)

    def get_profile(self, token: str) -> UserDB:
        return self.get_user(self.verify_token(token))

    def get_user(self, user_id: int) -> UserDB:
        user = user_crud.get_user(self.db, user_id)
        if user is None:
            raise UserNotFoundError()
        return user

    def _issue_token(self, user: UserDB) -> str:
        return create_access_token(user.id, user.email, self.settings)
