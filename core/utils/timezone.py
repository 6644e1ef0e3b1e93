"""
타임존 유틸리티

내부 저장은 항상 UTC ISO-8601 문자열 (마이크로초 포함).
"""

from datetime import datetime, timezone


def now_utc() -> datetime:
    """현재 UTC 시간 반환 (타임존 명시)
    
    datetime.now(timezone.utc)의 축약형.
    
    Returns:
        현재 UTC 시간 (tzinfo=timezone.utc)
    """
    return datetime.now(timezone.utc)


def now_utc_iso() -> str:
    """현재 UTC 시간을 저장용 ISO 문자열로 반환
    
    마이크로초까지 고정 폭으로 기록하므로 문자열 정렬 = 시간 정렬.
    
    Returns:
        예: '2026-10-18T09:30:00.123456+00:00'
    """
    return now_utc().isoformat(timespec="microseconds")


def parse_utc(value: str) -> datetime:
    """저장된 ISO 문자열을 UTC datetime으로 변환
    
    Args:
        value: ISO-8601 문자열 (naive면 UTC로 간주)
        
    Returns:
        UTC datetime
    """
    dt = datetime.fromisoformat(value)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)
