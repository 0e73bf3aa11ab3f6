"""
Routes d'authentification pour l'API.

Ce module fournit les endpoints d'inscription, de connexion et de lecture du profil, ainsi que la
dépendance `get_current_user` qui résout l'utilisateur à partir du jeton porteur.
"""

from fastapi import APIRouter, Depends, Header

from backend.api.schemas import (
    AuthResponse,
    LoginPayload,
    ProfileResponse,
    SignupPayload,
    UserOut,
)
from backend.apigw.errors import AuthError
from backend.app.metrics import SIGNUPS
from backend.core.container import container
from backend.domain.auth import create_access_token, decode_token
from backend.domain.entities import User

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _issue_token(user: User) -> str:
    return create_access_token(
        secret=container.settings.JWT_SECRET,
        alg=container.settings.JWT_ALG,
        expires_min=container.settings.JWT_EXPIRES_MIN,
        payload={"sub": user.id, "email": user.email},
    )


def get_current_user(authorization: str = Header(None)) -> User:
    """Extrait et valide l'utilisateur courant à partir du token d'autorisation."""
    if not authorization or not authorization.lower().startswith("bearer "):
        raise AuthError("No token, authorization denied")
    token = authorization.split(" ", 1)[1].strip()
    data = decode_token(token, container.settings.JWT_SECRET, container.settings.JWT_ALG)
    if not data:
        raise AuthError("Token is not valid")
    user = container.accounts.get_user(data.sub)
    if not user:
        raise AuthError("Token is not valid")
    return user


current_user_dep = Depends(get_current_user)


@router.post("/signup", response_model=AuthResponse, status_code=201)
def signup(p: SignupPayload):
    """Inscrit un nouvel utilisateur; le signe est déduit de la date de naissance."""
    user = container.accounts.signup(p.name, str(p.email), p.password, p.birthdate)
    SIGNUPS.inc()
    return AuthResponse(
        message="User created successfully",
        token=_issue_token(user),
        user=UserOut.from_user(user),
    )


@router.post("/login", response_model=AuthResponse)
def login(p: LoginPayload):
    """Authentifie un utilisateur et retourne un token d'accès."""
    user = container.accounts.authenticate(str(p.email), p.password)
    return AuthResponse(
        message="Login successful",
        token=_issue_token(user),
        user=UserOut.from_user(user),
    )


@router.get("/profile", response_model=ProfileResponse)
def profile(user: User = current_user_dep):
    """Retourne le profil de l'utilisateur authentifié."""
    return ProfileResponse(user=UserOut.from_user(user))
