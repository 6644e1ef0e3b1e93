"""
세션 인증

로그인 성공 시 서명된 JWT(HS256)를 HttpOnly 쿠키로 발급하고,
요청마다 쿠키에서 Principal을 복원한다.

토큰 payload:
- sub: 사용자 ID (문자열)
- username: 로그인 이름
- iat / exp: 발급 / 만료 시각
"""

import logging
from datetime import datetime, timedelta

import jwt
from fastapi import Depends, HTTPException, Request, Response

from core.config.loader import Settings
from core.constants import Defaults
from core.types import Principal
from core.utils.timezone import now_utc
from web.dependencies import get_app_settings

logger = logging.getLogger(__name__)


def create_session_token(
    principal: Principal,
    secret_key: str,
    max_age_sec: int = Defaults.SESSION_MAX_AGE_SEC,
    now: datetime | None = None,
) -> str:
    """세션 토큰 발급

    Args:
        principal: 인증된 사용자
        secret_key: 서명 키 (web.secret_key)
        max_age_sec: 유효 시간 (초)
        now: 발급 시각 (테스트용, None이면 현재 UTC)

    Returns:
        JWT 문자열
    """
    issued_at = now or now_utc()
    payload = {
        "sub": str(principal.user_id),
        "username": principal.username,
        "iat": issued_at,
        "exp": issued_at + timedelta(seconds=max_age_sec),
    }
    return jwt.encode(payload, secret_key, algorithm=Defaults.SESSION_ALGORITHM)


def decode_session_token(token: str, secret_key: str) -> Principal | None:
    """세션 토큰 검증

    서명 불일치, 만료, 형식 오류는 모두 None.

    Args:
        token: JWT 문자열
        secret_key: 서명 키

    Returns:
        복원된 Principal 또는 None
    """
    try:
        payload = jwt.decode(token, secret_key, algorithms=[Defaults.SESSION_ALGORITHM])
    except jwt.ExpiredSignatureError:
        logger.debug("만료된 세션 토큰")
        return None
    except jwt.PyJWTError as e:
        logger.debug(f"유효하지 않은 세션 토큰: {e}")
        return None

    try:
        user_id = int(payload["sub"])
        username = str(payload["username"])
    except (KeyError, TypeError, ValueError):
        logger.debug("세션 토큰 payload 형식 오류")
        return None

    return Principal(user_id=user_id, username=username)


def set_session_cookie(response: Response, token: str, settings: Settings) -> None:
    """세션 쿠키 설정"""
    response.set_cookie(
        key=Defaults.SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.session_max_age_sec,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
    )


def clear_session_cookie(response: Response) -> None:
    """세션 쿠키 삭제"""
    response.delete_cookie(key=Defaults.SESSION_COOKIE_NAME)


def get_principal(
    request: Request,
    settings: Settings = Depends(get_app_settings),
) -> Principal | None:
    """요청 쿠키에서 Principal 복원 (없으면 None)"""
    token = request.cookies.get(Defaults.SESSION_COOKIE_NAME)
    if not token:
        return None
    return decode_session_token(token, settings.web_secret_key)


def require_principal(
    principal: Principal | None = Depends(get_principal),
) -> Principal:
    """인증 필수 의존성

    Raises:
        HTTPException: 401 (로그인 필요)
    """
    if principal is None:
        raise HTTPException(status_code=401, detail="Authentication required")
    return principal
