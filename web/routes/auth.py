"""
인증 라우트

로그인 / 로그아웃 / 인증 상태 확인
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Response

from core.config.loader import Settings
from core.storage.user_store import UserStore
from core.types import Principal
from web.dependencies import get_app_settings, get_user_store
from web.models.requests import LoginRequest
from web.models.responses import AuthStatusResponse, LoginResponse, SuccessResponse
from web.security import (
    clear_session_cookie,
    create_session_token,
    get_principal,
    set_session_cookie,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Auth"])


@router.post("/login", response_model=LoginResponse)
async def login(
    request: LoginRequest,
    response: Response,
    users: UserStore = Depends(get_user_store),
    settings: Settings = Depends(get_app_settings),
) -> LoginResponse:
    """로그인

    성공 시 세션 쿠키 발급.
    사용자 없음과 비밀번호 불일치는 같은 401로 응답.
    """
    if not request.username or not request.password:
        raise HTTPException(status_code=400, detail="Username and password are required")

    principal = await users.authenticate(request.username, request.password)
    if principal is None:
        raise HTTPException(status_code=401, detail="Invalid credentials")

    token = create_session_token(
        principal,
        settings.web_secret_key,
        settings.session_max_age_sec,
    )
    set_session_cookie(response, token, settings)

    logger.info(f"로그인: {principal.username}", extra={"user_id": principal.user_id})
    return LoginResponse(username=principal.username)


@router.post("/logout", response_model=SuccessResponse)
async def logout(response: Response) -> SuccessResponse:
    """로그아웃 (세션 쿠키 삭제)"""
    clear_session_cookie(response)
    return SuccessResponse()


@router.get("/check-auth", response_model=AuthStatusResponse)
async def check_auth(
    principal: Principal | None = Depends(get_principal),
) -> AuthStatusResponse:
    """인증 상태 확인"""
    if principal is None:
        return AuthStatusResponse(authenticated=False)
    return AuthStatusResponse(authenticated=True, username=principal.username)
