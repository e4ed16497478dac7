# core/auth/types/types.py
"""
core/auth/types/types.py - Cognito 토큰 모듈의 핵심 타입 정의

이 모듈은 토큰 캐시 시스템 전체에서 사용되는 기본 타입들을 정의합니다.

포함 항목:
    - TokenType: 발급받을 토큰 종류 열거형 (ACCESS, ID, RAW_REQUEST)
    - CredentialSet: 호출마다 생성되는 자격증명 묶음 (캐시 키의 원천)
    - Authenticator: 모든 인증 클라이언트가 구현해야 하는 추상 기본 클래스 (ABC)
    - 에러 클래스: AuthError, AuthenticationError, DecodeError, ConfigurationError
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from core.exceptions import ValidationError


# =============================================================================
# Token Type Enum
# =============================================================================


class TokenType(Enum):
    """발급받을 토큰 종류를 나타내는 열거형

    - ACCESS: Access Token (기본값)
    - ID: ID Token
    - RAW_REQUEST: 원본 요청용 (Access Token과 동일하게 처리)
    """

    ACCESS = "access"
    ID = "id"
    RAW_REQUEST = "raw_request"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: TokenType | str | None) -> TokenType:
        """문자열/None을 TokenType으로 변환

        비어있으면 ACCESS를 반환합니다.

        Raises:
            ValidationError: 알 수 없는 토큰 타입
        """
        if isinstance(value, TokenType):
            return value
        if not value:
            return cls.ACCESS
        try:
            return cls(value)
        except ValueError as e:
            raise ValidationError(
                "TokenType",
                f"지원하지 않는 토큰 타입입니다 ({', '.join(t.value for t in cls)})",
                value=value,
                cause=e,
            ) from e


# =============================================================================
# Credential Set
# =============================================================================

# 필수 필드: (속성 이름, 사용자에게 보여줄 인자 이름)
REQUIRED_FIELDS: tuple[tuple[str, str], ...] = (
    ("username", "Username"),
    ("password", "Password"),
    ("region", "Region"),
    ("client_id", "ClientId"),
    ("user_pool_id", "UserPoolId"),
)


@dataclass(frozen=True)
class CredentialSet:
    """인증 요청 하나에 사용되는 자격증명 묶음

    호출마다 생성되며 직접 저장되지 않습니다.
    (저장되는 것은 이 값에서 파생된 캐시 키뿐입니다)

    Attributes:
        username: Cognito 사용자 이름
        password: 비밀번호
        region: User Pool 리전 (예: ap-northeast-2)
        client_id: App Client ID
        user_pool_id: User Pool ID (예: ap-northeast-2_AbCdEfGhI)
        token_type: 발급받을 토큰 종류
        client_secret: App Client 시크릿 (옵션)
    """

    username: str
    password: str
    region: str
    client_id: str
    user_pool_id: str
    token_type: TokenType = TokenType.ACCESS
    client_secret: str | None = None

    def __post_init__(self):
        # 직접 생성된 경우에도 토큰 타입 정규화 (None/"" → ACCESS, 문자열 → TokenType)
        object.__setattr__(self, "token_type", TokenType.parse(self.token_type))

    def validate(self) -> None:
        """필수 필드 검증

        Raises:
            ValidationError: 비어있는 필수 필드가 있는 경우 (첫 번째 필드 이름 포함)
        """
        for attr, display_name in REQUIRED_FIELDS:
            if not getattr(self, attr):
                raise ValidationError(display_name)

    @classmethod
    def create(
        cls,
        username: str | None,
        password: str | None,
        region: str | None,
        client_id: str | None,
        user_pool_id: str | None,
        token_type: TokenType | str | None = None,
        client_secret: str | None = None,
    ) -> CredentialSet:
        """호출자 인자로부터 검증된 CredentialSet 생성

        토큰 타입이 비어있으면 ACCESS로 설정합니다.

        Raises:
            ValidationError: 필수 필드 누락 또는 알 수 없는 토큰 타입
        """
        credentials = cls(
            username=username or "",
            password=password or "",
            region=region or "",
            client_id=client_id or "",
            user_pool_id=user_pool_id or "",
            token_type=TokenType.parse(token_type),
            client_secret=client_secret or None,
        )
        credentials.validate()
        return credentials

    def __repr__(self) -> str:
        # 비밀번호/시크릿은 출력하지 않음
        return (
            f"CredentialSet(username={self.username!r}, region={self.region!r}, "
            f"client_id={self.client_id!r}, user_pool_id={self.user_pool_id!r}, "
            f"token_type={self.token_type.value!r})"
        )


# =============================================================================
# Authenticator Interface (Abstract Base Class)
# =============================================================================


class Authenticator(ABC):
    """모든 인증 클라이언트가 구현해야 하는 추상 기본 클래스

    실제 네트워크 핸드셰이크(SRP 등)를 수행하고 토큰 문자열을 반환합니다.

    Example:
        class MyAuthenticator(Authenticator):
            def authenticate(self, credentials: CredentialSet) -> str:
                ...
    """

    @abstractmethod
    def authenticate(self, credentials: CredentialSet) -> str:
        """인증을 수행하고 토큰 문자열을 반환합니다.

        Args:
            credentials: 자격증명 묶음

        Returns:
            토큰 종류(access/id)에 맞는 토큰 문자열

        Raises:
            AuthenticationError: 잘못된 자격증명, 네트워크 오류, 설정 오류 등
        """
        pass

    def close(self) -> None:  # noqa: B027
        """리소스를 정리합니다.

        기본 구현은 아무것도 하지 않습니다.
        """
        pass


# =============================================================================
# Error Classes
# =============================================================================


class AuthError(Exception):
    """인증 관련 기본 에러 클래스

    모든 인증 에러의 부모 클래스입니다.
    원인 예외(cause)를 체이닝하여 디버깅을 용이하게 합니다.

    Attributes:
        message: 에러 메시지
        cause: 원인 예외 (옵션)
    """

    def __init__(self, message: str, cause: Exception | None = None):
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message


class AuthenticationError(AuthError):
    """인증 클라이언트가 실패했을 때 발생하는 에러

    message에는 사용자가 읽을 수 있는 메시지가 그대로 담기며,
    이 메시지가 에러 토큰에 저장되고 호출 결과로 반환됩니다.

    Attributes:
        error_code: 서비스 에러 코드 (옵션, 예: NotAuthorizedException)
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message, cause)
        self.error_code = error_code


class DecodeError(AuthError):
    """토큰 구조가 잘못되었거나 세그먼트를 디코딩할 수 없을 때 발생하는 에러

    캐시 조회 경로에서는 "유효하지 않음"으로 처리되며 외부로 전파되지 않습니다.

    Attributes:
        segment: 디코딩에 실패한 세그먼트 이름 (header/payload, 옵션)
    """

    def __init__(
        self,
        message: str,
        segment: str | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message, cause)
        self.segment = segment


class ConfigurationError(AuthError):
    """인증 클라이언트 설정 오류

    boto3 클라이언트 생성 실패, 잘못된 리전 등의 경우 발생합니다.

    Attributes:
        config_key: 문제가 된 설정 키 이름 (옵션)
    """

    def __init__(
        self,
        message: str,
        config_key: str | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message, cause)
        self.config_key = config_key
