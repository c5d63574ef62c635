from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from auth import get_bearer_token
from config import Settings, get_settings
from database import get_db
from schemas.user import UserCreate, UserLogin
from schemas.response import AuthResponse, ProfileResponse
from services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


def get_auth_service(
        db: Session = Depends(get_db),
        settings: Settings = Depends(get_settings)
) -> AuthService:
    return AuthService(db, settings)


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(user: UserCreate, service: AuthService = Depends(get_auth_service)):
    """Зарегистрировать пользователя и выдать токен"""
    token, db_user = service.register(user)
    return AuthResponse(
        message="User registered successfully",
        token=token,
        user=db_user
    )


@router.post("/login", response_model=AuthResponse)
def login(credentials: UserLogin, service: AuthService = Depends(get_auth_service)):
    """Вход по email и паролю"""
    token, db_user = service.login(credentials)
    return AuthResponse(
        message="Login successful",
        token=token,
        user=db_user
    )


@router.get("/profile", response_model=ProfileResponse)
def read_profile(
        token: str = Depends(get_bearer_token),
        service: AuthService = Depends(get_auth_service)
):
    """Профиль текущего пользователя"""
    return ProfileResponse(user=service.get_profile(token))
