"""
사용자 추가

Web에는 회원가입이 없으므로 로그인 사용자는 이 스크립트로만 생성한다.

사용법:
    python -m scripts.add_user --username admin
    python -m scripts.add_user --username admin --password secret
"""

import argparse
import asyncio
import getpass
import logging
import sys
from pathlib import Path

# 프로젝트 루트를 Python 경로에 추가
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from adapters.db.sqlite_adapter import SQLiteAdapter, init_schema
from core.config.loader import get_settings
from core.domain.entities import User
from core.errors import LedgerError
from core.logging import setup_logging
from core.storage.user_store import UserStore

logger = logging.getLogger(__name__)


async def add_user(db_path: Path, username: str, password: str) -> User:
    """스키마 초기화 후 사용자 생성

    Raises:
        ValidationError: 빈 값 또는 중복 이름
        StorageFailure: 저장소 오류
    """
    async with SQLiteAdapter(db_path) as db:
        await init_schema(db)
        return await UserStore(db).create_user(username, password)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="로그인 사용자 추가")
    parser.add_argument("--username", required=True, help="로그인 이름")
    parser.add_argument(
        "--password",
        default=None,
        help="비밀번호 (생략 시 프롬프트로 입력)",
    )
    parser.add_argument(
        "--secrets",
        type=Path,
        default=None,
        help="secrets.yaml 경로 (기본: config/secrets.yaml)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI 진입점

    Returns:
        종료 코드 (성공 0, 실패 1)
    """
    args = build_parser().parse_args(argv)

    username = args.username.strip()
    if not username:
        logger.error("사용자 이름이 비어 있습니다")
        return 1

    password = args.password
    if password is None:
        password = getpass.getpass("Password: ")
    if not password:
        logger.error("비밀번호가 비어 있습니다")
        return 1

    settings = get_settings(args.secrets)

    try:
        user = asyncio.run(add_user(settings.db_path, username, password))
    except LedgerError as e:
        logger.error(f"사용자 추가 실패: {e}")
        return 1

    logger.info(f"사용자 추가 완료: {user.username} (id={user.id})")
    return 0


if __name__ == "__main__":
    setup_logging("cli")
    sys.exit(main())
