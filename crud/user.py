from sqlalchemy.orm import Session
from sqlalchemy import or_
from typing import Optional
from models.user import UserDB


def get_user(db: Session, user_id: int) -> Optional[UserDB]:
    return db.query(UserDB).filter(UserDB.id == user_id).first()


def get_user_by_username(db: Session, username: str) -> Optional[UserDB]:
    return db.query(UserDB).filter(UserDB.username == username).first()


def get_user_by_email(db: Session, email: str) -> Optional[UserDB]:
    return db.query(UserDB).filter(UserDB.email == email).first()


def account_exists(db: Session, username: str, email: str) -> bool:
    """Есть ли пользователь с таким username или email"""
    return db.query(UserDB.id).filter(
        or_(UserDB.username == username, UserDB.email == email)
    ).first() is not None


def create_user(db: Session, username: str, email: str, password_hash: str) -> UserDB:
    db_user = UserDB(username=username, email=email, password_hash=password_hash)
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return db_user


def delete_user(db: Session, user_id: int) -> bool:
    db_user = get_user(db, user_id)
    if not db_user:
        return False

    db.delete(db_user)
    db.commit()
    return True
