"""
비밀번호 해시

bcrypt 해시 생성/검증. 해시 문자열은 users.password_hash에 그대로 저장.
"""

import logging

import bcrypt

from core.constants import Defaults

logger = logging.getLogger(__name__)

# bcrypt는 72바이트 이후를 무시하므로 입력 자체를 제한
MAX_PASSWORD_BYTES = 72


def hash_password(password: str, rounds: int = Defaults.BCRYPT_ROUNDS) -> str:
    """비밀번호 해시 생성
    
    Args:
        password: 평문 비밀번호
        rounds: bcrypt cost factor
        
    Returns:
        bcrypt 해시 문자열 ($2b$...)
        
    Raises:
        ValueError: 빈 비밀번호이거나 72바이트 초과
    """
    encoded = password.encode("utf-8")
    if not password:
        raise ValueError("Password cannot be empty")
    if len(encoded) > MAX_PASSWORD_BYTES:
        raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
    
    hashed = bcrypt.hashpw(encoded, bcrypt.gensalt(rounds=rounds))
    return hashed.decode("ascii")


def verify_password(password: str, password_hash: str) -> bool:
    """비밀번호 검증
    
    형식이 깨진 해시는 예외 대신 False 반환.
    
    Args:
        password: 평문 비밀번호
        password_hash: 저장된 bcrypt 해시
        
    Returns:
        일치 여부
    """
    encoded = password.encode("utf-8")
    if not password or len(encoded) > MAX_PASSWORD_BYTES:
        return False
    
    try:
        return bcrypt.checkpw(encoded, password_hash.encode("ascii"))
    except ValueError as e:
        logger.warning(f"Invalid password hash format: {e}")
        return False
