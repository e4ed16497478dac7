"""
core/auth/template.py - 호출자용 인자 정의와 실행 진입점

요청 템플릿 태그(AwsCognitoToken)로 노출되는 인자 목록과 실행 함수입니다.
인자 순서는 run()의 위치 인자 순서와 같습니다.

    Username, Password, Region, ClientId, UserPoolId, TokenType, ClientSecret

Example:
    from core.auth.template import run

    value = run(resolver, "user", "pw", "ap-northeast-2", "client", "ap-northeast-2_Pool")
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

from .types import CredentialSet, TokenType

if TYPE_CHECKING:
    from .resolver import TokenResolver

REQUIRED_MESSAGE = "Required"


class ArgumentKind(Enum):
    """인자 입력 타입"""

    STRING = "string"
    ENUM = "enum"


@dataclass(frozen=True)
class ArgumentOption:
    """enum 인자의 선택지"""

    display_name: str
    value: str


@dataclass(frozen=True)
class TemplateArgument:
    """템플릿 인자 정의

    Attributes:
        display_name: 표시 이름 (run()의 키워드 인자 이름과 동일)
        kind: 입력 타입
        required: 필수 여부
        default: 기본값 (옵션)
        options: enum 선택지
    """

    display_name: str
    kind: ArgumentKind = ArgumentKind.STRING
    required: bool = False
    default: str | None = None
    options: tuple[ArgumentOption, ...] = field(default_factory=tuple)

    def validate(self, value: Any) -> str:
        """입력값 검증

        Returns:
            문제 없으면 빈 문자열, 필수값이 비어있으면 "Required"
        """
        if self.required and not value:
            return REQUIRED_MESSAGE
        return ""

    @property
    def choices(self) -> list[str]:
        return [option.value for option in self.options]


TEMPLATE_ARGS: tuple[TemplateArgument, ...] = (
    TemplateArgument("Username", required=True),
    TemplateArgument("Password", required=True),
    TemplateArgument("Region", required=True),
    TemplateArgument("ClientId", required=True),
    TemplateArgument("UserPoolId", required=True),
    TemplateArgument(
        "TokenType",
        kind=ArgumentKind.ENUM,
        default=TokenType.ACCESS.value,
        options=(
            ArgumentOption("access", TokenType.ACCESS.value),
            ArgumentOption("id", TokenType.ID.value),
            ArgumentOption("Raw Request", TokenType.RAW_REQUEST.value),
        ),
    ),
    TemplateArgument("ClientSecret"),
)


@dataclass(frozen=True)
class TemplateTag:
    """템플릿 태그 메타데이터"""

    name: str
    display_name: str
    description: str
    args: tuple[TemplateArgument, ...]


TEMPLATE_TAG = TemplateTag(
    name="AwsCognitoToken",
    display_name="AWS Cognito Token",
    description="AWS Cognito User Pool에서 JWT 토큰을 발급받아 캐시합니다",
    args=TEMPLATE_ARGS,
)


def validate_arguments(values: dict[str, Any]) -> dict[str, str]:
    """인자값 일괄 검증

    Args:
        values: {display_name: 값}

    Returns:
        {display_name: "Required"} - 문제 있는 인자만 포함
    """
    errors = {}
    for argument in TEMPLATE_ARGS:
        message = argument.validate(values.get(argument.display_name))
        if message:
            errors[argument.display_name] = message
    return errors


def run(
    resolver: TokenResolver,
    Username: str | None,
    Password: str | None,
    Region: str | None,
    ClientId: str | None,
    UserPoolId: str | None,
    TokenType: str | None = None,
    ClientSecret: str | None = None,
) -> str:
    """템플릿 태그 실행

    Returns:
        토큰 문자열 또는 인증 실패 메시지

    Raises:
        ValidationError: 필수 인자 누락 (예: "검증 오류 [Username]: 필수 값입니다")
    """
    credentials = CredentialSet.create(
        username=Username,
        password=Password,
        region=Region,
        client_id=ClientId,
        user_pool_id=UserPoolId,
        token_type=TokenType,
        client_secret=ClientSecret,
    )
    return resolver.resolve_token(credentials)
