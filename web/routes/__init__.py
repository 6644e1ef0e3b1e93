"""
API 라우트 패키지

각 기능별 라우터 모듈:
- health: 헬스 체크
- auth: 로그인/로그아웃/인증 상태
- events: 이벤트 CRUD, 담당자
- expenses: 지출
- standalone_income: 독립 수입
- summary: 전체 합계
"""
