"""
유틸리티 패키지

타임존 처리, 비밀번호 해시 등 공통 유틸리티
"""

from core.utils.timezone import (
    now_utc,
    now_utc_iso,
    parse_utc,
)
from core.utils.passwords import (
    hash_password,
    verify_password,
)

__all__ = [
    "now_utc",
    "now_utc_iso",
    "parse_utc",
    "hash_password",
    "verify_password",
]
