"""
core/utils/passwords.py 테스트

테스트 속도를 위해 bcrypt cost factor 4 사용
"""

import pytest

from core.utils.passwords import MAX_PASSWORD_BYTES, hash_password, verify_password

FAST_ROUNDS = 4


class TestHashPassword:
    """hash_password 테스트"""

    def test_bcrypt_format(self) -> None:
        hashed = hash_password("secret", rounds=FAST_ROUNDS)

        assert hashed.startswith("$2b$04$")

    def test_salted(self) -> None:
        """같은 비밀번호라도 해시는 매번 다름"""
        assert hash_password("secret", rounds=FAST_ROUNDS) != hash_password(
            "secret", rounds=FAST_ROUNDS
        )

    def test_empty_rejected(self) -> None:
        with pytest.raises(ValueError, match="empty"):
            hash_password("", rounds=FAST_ROUNDS)

    def test_too_long_rejected(self) -> None:
        with pytest.raises(ValueError, match="at most"):
            hash_password("a" * (MAX_PASSWORD_BYTES + 1), rounds=FAST_ROUNDS)

    def test_multibyte_length_counted_in_bytes(self) -> None:
        """한글 1자 = 3바이트"""
        with pytest.raises(ValueError):
            hash_password("가" * 25, rounds=FAST_ROUNDS)


class TestVerifyPassword:
    """verify_password 테스트"""

    def test_correct_password(self) -> None:
        hashed = hash_password("correct horse", rounds=FAST_ROUNDS)

        assert verify_password("correct horse", hashed) is True

    def test_wrong_password(self) -> None:
        hashed = hash_password("correct horse", rounds=FAST_ROUNDS)

        assert verify_password("battery staple", hashed) is False

    def test_empty_password(self) -> None:
        hashed = hash_password("x", rounds=FAST_ROUNDS)

        assert verify_password("", hashed) is False

    def test_too_long_password(self) -> None:
        hashed = hash_password("x", rounds=FAST_ROUNDS)

        assert verify_password("x" * 100, hashed) is False

    def test_malformed_hash(self) -> None:
        """깨진 해시는 예외 없이 False"""
        assert verify_password("secret", "not-a-bcrypt-hash") is False
