"""
UserStore - 사용자 저장소

users 테이블을 통해 로그인 사용자 관리.
사용자 생성은 CLI(scripts/add_user.py)에서만 수행하고,
Web은 인증 조회만 한다.
"""

import logging
import sqlite3

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.domain.entities import User
from core.domain.validation import validate_name
from core.errors import StorageFailure, ValidationError
from core.types import Principal
from core.utils.passwords import hash_password, verify_password
from core.utils.timezone import now_utc_iso

logger = logging.getLogger(__name__)


class UserStore:
    """사용자 저장소

    Args:
        db: SQLite 어댑터
    """

    def __init__(self, db: SQLiteAdapter):
        self.db = db

    async def create_user(self, username: str, password: str) -> User:
        """사용자 생성

        Args:
            username: 로그인 이름 (앞뒤 공백 제거)
            password: 평문 비밀번호 (bcrypt 해시로 저장)

        Returns:
            생성된 User

        Raises:
            ValidationError: 이름/비밀번호가 비었거나 이미 존재하는 이름
            StorageFailure: 저장소 오류 (확인 이후 같은 이름이 먼저 저장된 경우 포함)
        """
        clean_username = validate_name(username, "Username")
        if not password:
            raise ValidationError("Password is required", field="password")

        try:
            password_hash = hash_password(password)
        except ValueError as e:
            raise ValidationError(str(e), field="password") from e

        created_at = now_utc_iso()

        try:
            async with self.db.transaction(immediate=True):
                if await self.get_by_username(clean_username) is not None:
                    raise ValidationError("Username already exists", field="username")
                cursor = await self.db.execute(
                    """
                    INSERT INTO users (username, password_hash, created_at)
                    VALUES (?, ?, ?)
                    """,
                    (clean_username, password_hash, created_at),
                )
                user_id = cursor.lastrowid
        except sqlite3.Error as e:
            logger.error(f"사용자 생성 실패: {e}", extra={"username": clean_username})
            raise StorageFailure("create user") from e

        if user_id is None:
            logger.error("사용자 INSERT 후 rowid 없음", extra={"username": clean_username})
            raise StorageFailure("create user")
        logger.info(f"사용자 생성: {clean_username}", extra={"user_id": user_id})

        return User(
            id=user_id,
            username=clean_username,
            password_hash=password_hash,
            created_at=created_at,
        )

    async def get_by_username(self, username: str) -> User | None:
        """이름으로 사용자 조회"""
        row = await self.db.fetchone(
            "SELECT id, username, password_hash, created_at FROM users WHERE username = ?",
            (username,),
        )
        return User.from_row(row) if row else None

    async def authenticate(self, username: str, password: str) -> Principal | None:
        """자격 증명 검증

        사용자가 없거나 비밀번호가 틀리면 None (구분하지 않음).

        Returns:
            인증 성공 시 Principal
        """
        if not username or not password:
            return None

        user = await self.get_by_username(username.strip())
        if user is None or not verify_password(password, user.password_hash):
            logger.warning(f"로그인 실패: {username}")
            return None

        return Principal(user_id=user.id, username=user.username)
