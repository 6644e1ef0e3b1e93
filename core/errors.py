"""
Ledger 예외 정의

모든 Ledger 연산은 성공하거나 아래 셋 중 하나로 실패한다.
- ValidationError: 클라이언트가 고칠 수 있는 입력 오류 (쓰기 전 검출)
- NotFound: 없는 리소스 또는 다른 사용자의 리소스 (구분하지 않음)
- StorageFailure: 예상하지 못한 저장소 오류 (재시도하지 않음)
"""


class LedgerError(Exception):
    """Ledger 예외 기반 클래스"""

    pass


class ValidationError(LedgerError):
    """입력 검증 실패

    Args:
        message: 사용자에게 보여줄 메시지
        field: 문제가 된 필드명 (선택)
    """

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.message = message
        self.field = field


class NotFound(LedgerError):
    """리소스 없음 (또는 소유자가 아님)

    Args:
        resource: 리소스 종류 (Event, Expense 등)
    """

    def __init__(self, resource: str):
        super().__init__(f"{resource} not found")
        self.resource = resource


class StorageFailure(LedgerError):
    """저장소 오류

    원인 예외는 로그에만 남기고 메시지는 불투명하게 유지.

    Args:
        operation: 실패한 연산 이름
    """

    def __init__(self, operation: str):
        super().__init__(f"Failed to {operation}")
        self.operation = operation
