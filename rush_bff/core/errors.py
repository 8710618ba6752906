"""
errors.py

도메인 오류(Domain Error) 분류 정의 파일.

서비스 계층은 HTTP를 모르는 상태로 이 예외들만 발생시키고,
main.py의 예외 핸들러가 kind에 따라 HTTP 상태 코드로 변환한다.

- ValidationError     : 입력 형식/범위 오류 (rating, vote_value, end_time 등)
- ConflictError       : 유일성 제약 위반 (중복 출석, 중복 투표, 중복 email 등)
- AuthorizationError  : 역할/상태상 허용되지 않는 요청
- NotFoundError       : 참조 대상 없음
- InvalidStateError   : 현재 생명주기 상태와 맞지 않는 요청

모든 오류는 논리 오류이므로 내부에서 재시도하지 않는다.

"""


class DomainError(Exception):
    kind = "domain_error"

    def __init__(self, message: str, *, field: str | None = None):
        super().__init__(message)
        self.message = message
        self.field = field

    def to_dict(self) -> dict:
        return {"kind": self.kind, "field": self.field}


class ValidationError(DomainError):
    kind = "validation_error"


class ConflictError(DomainError):
    kind = "conflict"


class AuthorizationError(DomainError):
    kind = "authorization_error"


class NotFoundError(DomainError):
    kind = "not_found"


class InvalidStateError(DomainError):
    kind = "invalid_state"
