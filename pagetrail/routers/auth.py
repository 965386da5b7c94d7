from fastapi import APIRouter, Depends, Response

from pagetrail.config import SESSION_COOKIE
from pagetrail.dependencies import get_current_user_id, get_identity_provider, get_session_token
from pagetrail.schemas.auth import (
    AuthResponse,
    LoginRequest,
    MessageResponse,
    SessionResponse,
    SignUpRequest,
    UserResponse,
)
from pagetrail.services.identity import LocalIdentityProvider

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/signup", response_model=AuthResponse, status_code=201)
async def signup(
    data: SignUpRequest,
    response: Response,
    identity: LocalIdentityProvider = Depends(get_identity_provider),
):
    await identity.sign_up(data.email, data.password, data.username)
    user, token = await identity.sign_in(data.email, data.password)
    response.set_cookie(SESSION_COOKIE, token, httponly=True, samesite="lax")
    return AuthResponse(
        message="User registered and logged in successfully!",
        user=UserResponse.model_validate(user),
        token=token,
    )


@router.post("/login", response_model=AuthResponse)
async def login(
    data: LoginRequest,
    response: Response,
    identity: LocalIdentityProvider = Depends(get_identity_provider),
):
    user, token = await identity.sign_in(data.email, data.password)
    response.set_cookie(SESSION_COOKIE, token, httponly=True, samesite="lax")
    return AuthResponse(message="Logged in successfully!", user=UserResponse.model_validate(user), token=token)


@router.post("/logout", response_model=MessageResponse)
async def logout(
    response: Response,
    token: str | None = Depends(get_session_token),
    identity: LocalIdentityProvider = Depends(get_identity_provider),
):
    await identity.sign_out(token)
    response.delete_cookie(SESSION_COOKIE)
    return MessageResponse(message="Logged out successfully.")


@router.get("/session", response_model=SessionResponse)
async def check_session(user_id: str = Depends(get_current_user_id)):
    return SessionResponse(message="Session is active! You are logged in.", user_id=user_id)
