from pydantic import BaseModel, EmailStr, Field, field_validator
from datetime import datetime

EMAIL_MAX_LENGTH = 100
# bcrypt принимает не больше 72 байт
PASSWORD_MAX_BYTES = 72


def _normalize_email(v):
    if len(v) > EMAIL_MAX_LENGTH:
        raise ValueError(f'Email must be at most {EMAIL_MAX_LENGTH} characters')
    return v.lower()


def _check_password_bytes(v):
    if len(v.encode("utf-8")) > PASSWORD_MAX_BYTES:
        raise ValueError(f'Password must be at most {PASSWORD_MAX_BYTES} bytes')
    return v


class UserBase(BaseModel):
    username: str = Field(..., min_length=3, max_length=50)
    email: EmailStr

    @field_validator('username')
    @classmethod
    def username_alphanumeric(cls, v):
        if not v.replace('_', '').replace('-', '').isalnum():
            raise ValueError('Username may contain only letters, digits, "_" and "-"')
        return v

    @field_validator('email')
    @classmethod
    def email_normalized(cls, v):
        return _normalize_email(v)


class UserCreate(UserBase):
    password: str = Field(..., min_length=8, max_length=72)

    @field_validator('password')
    @classmethod
    def password_strength(cls, v):
        _check_password_bytes(v)
        if not any(ch.isalpha() for ch in v) or not any(ch.isdigit() for ch in v):
            raise ValueError('Password must contain at least one letter and one digit')
        return v


class UserLogin(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=72)

    @field_validator('email')
    @classmethod
    def email_normalized(cls, v):
        return _normalize_email(v)

    @field_validator('password')
    @classmethod
    def password_bytes(cls, v):
        return _check_password_bytes(v)


class UserResponse(BaseModel):
    """Публичные данные пользователя (без хеша пароля)"""
    id: int
    username: str
    email: str

    class Config:
        from_attributes = True


class UserProfile(UserResponse):
    created_at: datetime
