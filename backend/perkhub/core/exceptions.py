# 커스텀 예외 클래스 정의
# 주니어 개발자님께: 서비스/저장소 레이어는 HTTP를 모릅니다.
# 여기 정의된 예외를 던지면 main.py의 예외 핸들러가 HTTP 응답으로 바꿔 줍니다.

from typing import Any, Dict, List, Optional


class AppError(Exception):
    """애플리케이션 예외의 기본 클래스

    Attributes:
        status_code: 응답에 사용할 HTTP 상태 코드
        code: 클라이언트가 분기할 수 있는 기계 판독용 에러 코드
        message: 사람이 읽는 에러 메시지
    """
    status_code: int = 500
    code: str = "internal_error"
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_body(self) -> Dict[str, Any]:
        return {"error": {"code": self.code, "message": self.message}}


class ValidationError(AppError):
    """입력 형식이 잘못되었을 때 (비밀번호 정책 위반 포함)"""
    status_code = 400
    code = "validation_error"
    default_message = "Invalid request"

    def __init__(self, message: Optional[str] = None, details: Optional[List[Dict[str, Any]]] = None):
        self.details = details or []
        super().__init__(message)

    def to_body(self) -> Dict[str, Any]:
        body = super().to_body()
        if self.details:
            body["error"]["details"] = self.details
        return body


class InvalidCredentialsError(AppError):
    """로그인 실패

    주니어 개발자님께: "없는 이메일"과 "틀린 비밀번호"를 같은 메시지로 돌려줍니다.
    메시지가 다르면 공격자가 가입된 이메일을 알아낼 수 있기 때문입니다.
    """
    status_code = 401
    code = "invalid_credentials"
    default_message = "Invalid email or password"


class UnauthenticatedError(AppError):
    """토큰이 없거나, 형식이 틀리거나, 만료되었거나, 사용자가 사라진 경우"""
    status_code = 401
    code = "unauthenticated"
    default_message = "Could not validate credentials"


class PerkNotFoundError(AppError):
    status_code = 404
    code = "not_found"
    default_message = "Perk not found"


class DuplicateAccountError(AppError):
    """정규화된 이메일이 이미 등록되어 있을 때"""
    status_code = 409
    code = "duplicate_account"
    default_message = "Email already registered"


class DatabaseUnavailableError(AppError):
    """MongoDB 연결 실패 시 발생하는 예외

    Attributes:
        uri: 연결을 시도한 MongoDB URI
    """
    status_code = 503
    code = "database_unavailable"
    default_message = "Database is not available"

    def __init__(self, message: Optional[str] = None, uri: Optional[str] = None):
        self.uri = uri
        super().__init__(message)
