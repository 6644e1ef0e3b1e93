"""
SQLite 어댑터 테스트

SQLiteAdapter 및 관련 함수 테스트.
"""

from pathlib import Path

import aiosqlite
import pytest
import pytest_asyncio

from adapters.db.sqlite_adapter import (
    SQLiteAdapter,
    create_connection,
    init_schema,
)
from core.ledger.schema import LATEST_VERSION


class TestCreateConnection:
    """create_connection 테스트"""

    @pytest.mark.asyncio
    async def test_create_connection(self, tmp_path: Path) -> None:
        """연결 생성 (WAL 모드)"""
        conn = await create_connection(tmp_path / "test.db")

        cursor = await conn.execute("PRAGMA journal_mode")
        row = await cursor.fetchone()
        assert row[0].upper() == "WAL"

        await conn.close()

    @pytest.mark.asyncio
    async def test_foreign_keys_enabled(self, tmp_path: Path) -> None:
        """외래 키 제약 활성화"""
        conn = await create_connection(tmp_path / "fk.db")

        cursor = await conn.execute("PRAGMA foreign_keys")
        row = await cursor.fetchone()
        assert row[0] == 1

        await conn.close()

    @pytest.mark.asyncio
    async def test_creates_parent_directory(self, tmp_path: Path) -> None:
        """부모 디렉토리 생성"""
        db_path = tmp_path / "subdir" / "test.db"

        conn = await create_connection(db_path)

        assert db_path.parent.exists()

        await conn.close()


class TestSQLiteAdapter:
    """SQLiteAdapter 테스트"""

    @pytest_asyncio.fixture
    async def adapter(self, tmp_path: Path) -> SQLiteAdapter:
        """어댑터 픽스처"""
        adapter = SQLiteAdapter(tmp_path / "test.db")
        await adapter.connect()
        yield adapter
        await adapter.close()

    @pytest.mark.asyncio
    async def test_connect_and_close(self, tmp_path: Path) -> None:
        """연결 및 종료"""
        adapter = SQLiteAdapter(tmp_path / "test.db")

        assert adapter.is_connected is False

        await adapter.connect()
        assert adapter.is_connected is True

        await adapter.close()
        assert adapter.is_connected is False

    @pytest.mark.asyncio
    async def test_execute_without_connection(self, tmp_path: Path) -> None:
        """연결 전 실행 시 에러"""
        adapter = SQLiteAdapter(tmp_path / "test.db")

        with pytest.raises(RuntimeError, match="Not connected"):
            await adapter.execute("SELECT 1")

    @pytest.mark.asyncio
    async def test_execute(self, adapter: SQLiteAdapter) -> None:
        """SQL 실행"""
        await adapter.execute("CREATE TABLE test (id INTEGER PRIMARY KEY, name TEXT)")
        await adapter.execute("INSERT INTO test (name) VALUES (?)", ("Sommerfest",))
        await adapter.commit()

        row = await adapter.fetchone("SELECT name FROM test WHERE id = 1")
        assert row[0] == "Sommerfest"

    @pytest.mark.asyncio
    async def test_fetchall(self, adapter: SQLiteAdapter) -> None:
        """전체 조회"""
        await adapter.execute("CREATE TABLE items (value TEXT)")
        for value in ("A", "B", "C"):
            await adapter.execute("INSERT INTO items (value) VALUES (?)", (value,))
        await adapter.commit()

        rows = await adapter.fetchall("SELECT value FROM items ORDER BY value")

        assert [r[0] for r in rows] == ["A", "B", "C"]

    @pytest.mark.asyncio
    async def test_immediate_transaction(self, adapter: SQLiteAdapter) -> None:
        """BEGIN IMMEDIATE 트랜잭션 커밋"""
        await adapter.execute("CREATE TABLE tx_immediate (id INTEGER)")
        await adapter.commit()

        async with adapter.transaction(immediate=True) as conn:
            assert conn.in_transaction
            await adapter.execute("INSERT INTO tx_immediate (id) VALUES (1)")

        rows = await adapter.fetchall("SELECT id FROM tx_immediate")
        assert rows == [(1,)]

    @pytest.mark.asyncio
    async def test_transaction_commit(self, adapter: SQLiteAdapter) -> None:
        """트랜잭션 커밋"""
        await adapter.execute("CREATE TABLE tx_test (id INTEGER)")
        await adapter.commit()

        async with adapter.transaction():
            await adapter.execute("INSERT INTO tx_test (id) VALUES (1)")
            await adapter.execute("INSERT INTO tx_test (id) VALUES (2)")

        rows = await adapter.fetchall("SELECT id FROM tx_test")
        assert len(rows) == 2

    @pytest.mark.asyncio
    async def test_transaction_rollback(self, adapter: SQLiteAdapter) -> None:
        """트랜잭션 롤백"""
        await adapter.execute("CREATE TABLE tx_test2 (id INTEGER)")
        await adapter.commit()

        with pytest.raises(ValueError):
            async with adapter.transaction():
                await adapter.execute("INSERT INTO tx_test2 (id) VALUES (1)")
                raise ValueError("의도적 에러")

        rows = await adapter.fetchall("SELECT id FROM tx_test2")
        assert len(rows) == 0

    @pytest.mark.asyncio
    async def test_transaction_rolls_back_ddl(self, adapter: SQLiteAdapter) -> None:
        """DDL도 트랜잭션에 포함"""
        with pytest.raises(ValueError):
            async with adapter.transaction():
                await adapter.execute("CREATE TABLE ddl_tx (id INTEGER)")
                raise ValueError("의도적 에러")

        assert await adapter.table_exists("ddl_tx") is False

    @pytest.mark.asyncio
    async def test_table_exists(self, adapter: SQLiteAdapter) -> None:
        """테이블 존재 확인"""
        assert await adapter.table_exists("nonexistent") is False

        await adapter.execute("CREATE TABLE existing (id INTEGER)")
        await adapter.commit()

        assert await adapter.table_exists("existing") is True

    @pytest.mark.asyncio
    async def test_get_table_info(self, adapter: SQLiteAdapter) -> None:
        """테이블 정보 조회"""
        await adapter.execute("CREATE TABLE info (id INTEGER PRIMARY KEY, name TEXT NOT NULL)")
        await adapter.commit()

        columns = await adapter.get_table_info("info")

        assert [c["name"] for c in columns] == ["id", "name"]
        assert columns[0]["pk"] is True
        assert columns[1]["notnull"] is True

    @pytest.mark.asyncio
    async def test_context_manager(self, tmp_path: Path) -> None:
        """컨텍스트 매니저"""
        async with SQLiteAdapter(tmp_path / "ctx_test.db") as adapter:
            assert adapter.is_connected is True
            await adapter.execute("CREATE TABLE ctx (id INTEGER)")

        # 컨텍스트 종료 후 연결 해제 확인
        assert adapter.is_connected is False


class TestInitSchema:
    """init_schema 테스트"""

    @pytest.mark.asyncio
    async def test_init_schema_creates_tables(self, tmp_path: Path) -> None:
        """스키마 초기화 - 테이블 생성"""
        async with SQLiteAdapter(tmp_path / "schema_test.db") as adapter:
            version = await init_schema(adapter)

            assert version == LATEST_VERSION
            for table in (
                "schema_version",
                "users",
                "events",
                "event_responsibles",
                "expenses",
                "standalone_income",
            ):
                assert await adapter.table_exists(table) is True, table

    @pytest.mark.asyncio
    async def test_init_schema_idempotent(self, tmp_path: Path) -> None:
        """스키마 초기화 멱등성 (여러 번 실행 가능)"""
        async with SQLiteAdapter(tmp_path / "idempotent_test.db") as adapter:
            await init_schema(adapter)
            version = await init_schema(adapter)

            assert version == LATEST_VERSION

    @pytest.mark.asyncio
    async def test_expenses_schema(self, tmp_path: Path) -> None:
        """expenses 스키마 확인"""
        async with SQLiteAdapter(tmp_path / "expense_schema_test.db") as adapter:
            await init_schema(adapter)

            columns = {c["name"]: c for c in await adapter.get_table_info("expenses")}

            assert columns["selling_price_per_unit"]["notnull"] is False
            assert columns["quantity"]["notnull"] is True
            assert columns["category"]["notnull"] is True

    @pytest.mark.asyncio
    async def test_username_unique(self, tmp_path: Path) -> None:
        """username UNIQUE 제약조건"""
        async with SQLiteAdapter(tmp_path / "unique_test.db") as adapter:
            await init_schema(adapter)

            await adapter.execute(
                "INSERT INTO users (username, password_hash) VALUES ('alice', 'x')"
            )
            await adapter.commit()

            with pytest.raises(aiosqlite.IntegrityError):
                await adapter.execute(
                    "INSERT INTO users (username, password_hash) VALUES ('alice', 'y')"
                )
