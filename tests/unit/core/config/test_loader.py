"""
core/config/loader.py 테스트

secrets.yaml 로드, 검증, DB 경로 결정 테스트
"""

from pathlib import Path

import pytest

from core.config.loader import (
    Secrets,
    SecretsLoadError,
    load_secrets,
    get_db_path,
    Settings,
    get_settings,
)
from core.constants import Defaults, Paths, PROJECT_ROOT
from core.types import AppMode


class TestSecrets:
    """Secrets 데이터클래스 테스트"""

    def test_creation(self) -> None:
        """기본 생성 (선택 필드는 기본값)"""
        secrets = Secrets(mode=AppMode.DEVELOPMENT, web_secret_key="session_secret")

        assert secrets.mode == AppMode.DEVELOPMENT
        assert secrets.web_secret_key == "session_secret"
        assert secrets.session_max_age_sec == Defaults.SESSION_MAX_AGE_SEC
        assert secrets.cookie_secure is False
        assert secrets.db_path_override is None

    def test_frozen(self) -> None:
        """불변성 확인"""
        secrets = Secrets(mode=AppMode.DEVELOPMENT, web_secret_key="key")

        with pytest.raises(AttributeError):
            secrets.web_secret_key = "other"  # type: ignore


class TestLoadSecrets:
    """load_secrets 함수 테스트"""

    def test_load_development(self, temp_secrets_file: Path, temp_dir: Path) -> None:
        """Development 모드 로드"""
        secrets = load_secrets(temp_secrets_file)

        assert secrets.mode == AppMode.DEVELOPMENT
        assert secrets.web_secret_key == "test_session_secret_key_xyz"
        assert secrets.session_max_age_sec == 3600
        assert secrets.db_path_override == temp_dir / "event_budget_test.db"

    def test_load_production(self, temp_secrets_file_production: Path) -> None:
        """Production 모드 로드"""
        secrets = load_secrets(temp_secrets_file_production)

        assert secrets.mode == AppMode.PRODUCTION
        assert secrets.cookie_secure is True
        assert secrets.db_path_override is None

    def test_file_not_found(self, temp_dir: Path) -> None:
        """파일 없음"""
        with pytest.raises(SecretsLoadError, match="찾을 수 없습니다"):
            load_secrets(temp_dir / "nonexistent.yaml")

    def test_invalid_mode(self, temp_secrets_file_invalid_mode: Path) -> None:
        """유효하지 않은 mode"""
        with pytest.raises(ValueError, match="유효하지 않은 mode"):
            load_secrets(temp_secrets_file_invalid_mode)

    def test_empty_file(self, temp_dir: Path) -> None:
        """빈 파일"""
        empty_file = temp_dir / "empty.yaml"
        empty_file.write_text("", encoding="utf-8")

        with pytest.raises(SecretsLoadError, match="비어 있습니다"):
            load_secrets(empty_file)

    def test_not_a_mapping(self, temp_dir: Path) -> None:
        """최상위가 매핑이 아님"""
        file = temp_dir / "list.yaml"
        file.write_text("- mode\n- web\n", encoding="utf-8")

        with pytest.raises(SecretsLoadError, match="매핑"):
            load_secrets(file)

    def test_missing_mode(self, temp_dir: Path) -> None:
        """mode 필드 누락"""
        content = """
web:
  secret_key: "key"
"""
        file = temp_dir / "no_mode.yaml"
        file.write_text(content, encoding="utf-8")

        with pytest.raises(SecretsLoadError, match="'mode' 필드가 없습니다"):
            load_secrets(file)

    def test_missing_web_secret(self, temp_dir: Path) -> None:
        """web secret_key 누락"""
        file = temp_dir / "no_web_secret.yaml"
        file.write_text("mode: development\n", encoding="utf-8")

        with pytest.raises(SecretsLoadError, match="'secret_key'가 없습니다"):
            load_secrets(file)

    @pytest.mark.parametrize("value", ["0", "-5", "'abc'", "true"])
    def test_invalid_session_max_age(self, temp_dir: Path, value: str) -> None:
        """session_max_age_sec는 양의 정수만 허용"""
        content = f"""
mode: development
web:
  secret_key: "key"
  session_max_age_sec: {value}
"""
        file = temp_dir / "bad_max_age.yaml"
        file.write_text(content, encoding="utf-8")

        with pytest.raises(SecretsLoadError, match="session_max_age_sec"):
            load_secrets(file)

    def test_relative_db_path(self, temp_dir: Path) -> None:
        """상대 DB 경로는 프로젝트 루트 기준"""
        content = """
mode: development
web:
  secret_key: "key"
database:
  path: "data/custom.db"
"""
        file = temp_dir / "relative_db.yaml"
        file.write_text(content, encoding="utf-8")

        secrets = load_secrets(file)

        assert secrets.db_path_override == PROJECT_ROOT / "data" / "custom.db"

    def test_invalid_yaml(self, temp_dir: Path) -> None:
        """잘못된 YAML 형식"""
        file = temp_dir / "invalid.yaml"
        file.write_text("invalid: yaml: content:", encoding="utf-8")

        with pytest.raises(SecretsLoadError, match="파싱 실패"):
            load_secrets(file)


class TestGetDbPath:
    """get_db_path 함수 테스트"""

    def test_development_db(self) -> None:
        """Development DB 경로"""
        secrets = Secrets(mode=AppMode.DEVELOPMENT, web_secret_key="key")

        db_path = get_db_path(secrets)

        assert db_path == Paths.DEV_DB
        assert isinstance(db_path, Path)

    def test_production_db(self) -> None:
        """Production DB 경로"""
        secrets = Secrets(mode=AppMode.PRODUCTION, web_secret_key="key")

        assert get_db_path(secrets) == Paths.PROD_DB

    def test_override_wins(self, temp_dir: Path) -> None:
        """database.path 지정 시 모드와 무관하게 우선"""
        override = temp_dir / "override.db"
        secrets = Secrets(
            mode=AppMode.PRODUCTION,
            web_secret_key="key",
            db_path_override=override,
        )

        assert get_db_path(secrets) == override


class TestSettings:
    """Settings 클래스 테스트"""

    def setup_method(self) -> None:
        """각 테스트 전에 싱글턴 초기화"""
        Settings.reset()

    def teardown_method(self) -> None:
        Settings.reset()

    def test_creation(self, temp_secrets_file: Path) -> None:
        """기본 생성"""
        settings = Settings(temp_secrets_file)

        assert settings.mode == AppMode.DEVELOPMENT
        assert settings.web_secret_key == "test_session_secret_key_xyz"

    def test_singleton(self, temp_secrets_file: Path) -> None:
        """싱글턴 확인"""
        settings1 = Settings(temp_secrets_file)
        settings2 = Settings()  # 경로 없이 호출

        assert settings1 is settings2

    def test_properties(self, temp_secrets_file: Path, temp_dir: Path) -> None:
        """프로퍼티 확인"""
        settings = Settings(temp_secrets_file)

        assert isinstance(settings.mode, AppMode)
        assert settings.session_max_age_sec == 3600
        assert settings.cookie_secure is False
        assert settings.db_path == temp_dir / "event_budget_test.db"

    def test_reset(self, temp_secrets_file: Path) -> None:
        """reset 후 재생성"""
        settings1 = Settings(temp_secrets_file)
        Settings.reset()
        settings2 = Settings(temp_secrets_file)

        # reset 후에는 새 인스턴스
        assert settings1 is not settings2


class TestGetSettings:
    """get_settings 함수 테스트"""

    def setup_method(self) -> None:
        """각 테스트 전에 싱글턴 초기화"""
        Settings.reset()

    def teardown_method(self) -> None:
        Settings.reset()

    def test_returns_settings(self, temp_secrets_file: Path) -> None:
        """Settings 인스턴스 반환"""
        settings = get_settings(temp_secrets_file)

        assert isinstance(settings, Settings)
        assert settings.mode == AppMode.DEVELOPMENT

    def test_singleton_via_function(self, temp_secrets_file: Path) -> None:
        """함수를 통한 싱글턴 확인"""
        settings1 = get_settings(temp_secrets_file)
        settings2 = get_settings()

        assert settings1 is settings2
