"""
core/exceptions.py - 통합 예외 계층 구조

애플리케이션 전체에서 사용되는 예외 클래스들을 정의합니다.
일관된 예외 처리와 에러 메시지를 제공합니다.

예외 계층 구조:
    CTError (베이스)
    ├── ValidationError (필수 자격증명 누락 등 입력 검증)
    └── ConfigError (설정 관련)

    AuthError (인증 관련) - core.auth.types에서 정의
    ├── AuthenticationError
    ├── DecodeError
    └── ConfigurationError

Usage:
    from core.exceptions import ValidationError, get_error_message

    try:
        client.initiate_auth(...)
    except ClientError as e:
        message = get_error_message(e)
"""

from typing import Any, Dict, Optional

# =============================================================================
# 베이스 예외
# =============================================================================


class CTError(Exception):
    """Cognito Token 기본 예외 클래스

    모든 커스텀 예외의 베이스 클래스입니다.

    Attributes:
        message: 에러 메시지
        cause: 원인 예외 (체이닝용)
        details: 추가 상세 정보
    """

    def __init__(
        self,
        message: str,
        cause: Optional[Exception] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.details = details or {}

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """예외 정보를 딕셔너리로 반환"""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "cause": str(self.cause) if self.cause else None,
            "details": self.details,
        }


# =============================================================================
# 입력 검증 예외
# =============================================================================


class ValidationError(CTError):
    """입력 검증 오류

    필수 자격증명 필드가 비어있을 때 캐시/네트워크 접근 전에 발생합니다.
    캐시되지 않으며 호출자에게 그대로 전파됩니다.
    """

    def __init__(
        self,
        field: str,
        reason: str = "필수 값입니다",
        value: Any = None,
        cause: Optional[Exception] = None,
    ):
        message = f"검증 오류 [{field}]: {reason}"
        super().__init__(message, cause)
        self.field = field
        self.reason = reason
        self.value = value
        self.details.update(
            {
                "field": field,
                "reason": reason,
            }
        )


# =============================================================================
# 설정 관련 예외
# =============================================================================


class ConfigError(CTError):
    """설정 관련 예외"""

    def __init__(
        self,
        key: str,
        message: str,
        cause: Optional[Exception] = None,
    ):
        full_message = f"설정 오류 [{key}]: {message}"
        super().__init__(full_message, cause)
        self.config_key = key
        self.details["config_key"] = key


# =============================================================================
# 예외 유틸리티 함수
# =============================================================================


def get_error_code(error: Exception) -> Optional[str]:
    """botocore ClientError에서 에러 코드 추출

    Args:
        error: 확인할 예외

    Returns:
        에러 코드 (예: "NotAuthorizedException") 또는 None
    """
    if hasattr(error, "response"):
        return error.response.get("Error", {}).get("Code")
    return None


def get_error_message(error: Exception) -> str:
    """사람이 읽을 수 있는 에러 메시지 추출

    ClientError는 서비스가 돌려준 Error.Message를 그대로 사용합니다.
    (예: "Incorrect username or password.")

    Args:
        error: 예외

    Returns:
        에러 메시지
    """
    if isinstance(error, CTError):
        return error.message

    if hasattr(error, "response"):
        error_info = error.response.get("Error", {})
        message = error_info.get("Message")
        if message:
            return message
        code = error_info.get("Code")
        if code:
            return code

    message = str(error)
    return message or error.__class__.__name__


def is_not_authorized(error: Exception) -> bool:
    """잘못된 자격증명 오류인지 확인

    Args:
        error: 확인할 예외

    Returns:
        NotAuthorized/UserNotFound 계열이면 True
    """
    return get_error_code(error) in (
        "NotAuthorizedException",
        "UserNotFoundException",
        "PasswordResetRequiredException",
        "UserNotConfirmedException",
    )


def is_throttling(error: Exception) -> bool:
    """스로틀링 오류인지 확인

    Args:
        error: 확인할 예외

    Returns:
        스로틀링 오류이면 True
    """
    throttling_codes = {
        "Throttling",
        "ThrottlingException",
        "TooManyRequestsException",
        "LimitExceededException",
    }
    return get_error_code(error) in throttling_codes


def format_error_for_user(error: Exception) -> str:
    """사용자에게 표시할 에러 메시지 포맷팅

    Args:
        error: 예외

    Returns:
        사용자 친화적인 에러 메시지
    """
    if isinstance(error, CTError):
        # 커스텀 예외는 이미 포맷팅됨
        return str(error)

    # boto3 ClientError
    if hasattr(error, "response"):
        error_info = error.response.get("Error", {})
        code = error_info.get("Code", "UnknownError")
        message = error_info.get("Message", str(error))

        friendly_messages = {
            "ResourceNotFoundException": "User Pool 또는 App Client를 찾을 수 없습니다. ID를 확인하세요.",
            "TooManyRequestsException": "요청이 너무 많습니다. 잠시 후 다시 시도하세요.",
        }

        return friendly_messages.get(code, f"{code}: {message}")

    return str(error)
