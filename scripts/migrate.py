"""
DB 스키마 마이그레이션

미적용 마이그레이션을 적용하고 현재 버전을 출력.
Web 시작 시에도 자동 적용되므로 배포 전 확인용.

사용법:
    python -m scripts.migrate
    python -m scripts.migrate --status
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# 프로젝트 루트를 Python 경로에 추가
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.config.loader import get_settings
from core.ledger.schema import LATEST_VERSION, get_schema_version, migrate
from core.logging import setup_logging

logger = logging.getLogger(__name__)


async def run(db_path: Path, status_only: bool = False) -> int:
    """마이그레이션 실행

    Args:
        db_path: DB 파일 경로
        status_only: True면 버전만 확인

    Returns:
        실행 후 스키마 버전
    """
    async with SQLiteAdapter(db_path) as db:
        if status_only:
            version = await get_schema_version(db)
            logger.info(f"스키마 버전: v{version} (최신 v{LATEST_VERSION})")
            return version

        logger.info(f"마이그레이션 시작: {db_path}")
        applied = await migrate(db)
        version = await get_schema_version(db)

    if applied:
        logger.info(f"마이그레이션 완료: {applied} → v{version}")
    else:
        logger.info(f"적용할 마이그레이션 없음 (v{version})")
    return version


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="DB 스키마 마이그레이션")
    parser.add_argument(
        "--status",
        action="store_true",
        help="적용하지 않고 현재 버전만 출력",
    )
    parser.add_argument(
        "--secrets",
        type=Path,
        default=None,
        help="secrets.yaml 경로 (기본: config/secrets.yaml)",
    )
    args = parser.parse_args(argv)

    settings = get_settings(args.secrets)
    version = asyncio.run(run(settings.db_path, status_only=args.status))

    return 0 if version == LATEST_VERSION else 1


if __name__ == "__main__":
    setup_logging("cli")
    sys.exit(main())
