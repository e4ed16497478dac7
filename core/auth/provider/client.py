"""
core/auth/provider/client.py - cognito-idp boto3 client 생성 헬퍼

Retry(adaptive 모드) + 타임아웃이 설정된 cognito-idp client를 생성합니다.
InitiateAuth/RespondToAuthChallenge는 서명이 필요 없는 API이므로
AWS 자격증명 조회 없이 UNSIGNED로 호출합니다.

Example:
    from core.auth.provider.client import get_cognito_client

    client = get_cognito_client(region_name="ap-northeast-2")
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Literal

if TYPE_CHECKING:
    import boto3

# Retry mode 타입 (botocore TypedDict와 호환)
RetryMode = Literal["legacy", "standard", "adaptive"]

SERVICE_NAME = "cognito-idp"

# 기본 retry 설정
DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_RETRY_MODE: RetryMode = "adaptive"
DEFAULT_CONNECT_TIMEOUT = 10  # 초
DEFAULT_READ_TIMEOUT = 30  # 초


def get_cognito_client(
    region_name: str,
    session: boto3.Session | None = None,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    retry_mode: RetryMode = DEFAULT_RETRY_MODE,
    connect_timeout: int = DEFAULT_CONNECT_TIMEOUT,
    read_timeout: int = DEFAULT_READ_TIMEOUT,
    **kwargs: Any,
) -> Any:
    """Retry가 적용된 cognito-idp client 생성

    Args:
        region_name: User Pool 리전
        session: boto3 Session (None이면 새로 생성)
        max_attempts: 최대 시도 횟수 (기본: 3)
        retry_mode: 재시도 모드 ('adaptive' 또는 'standard')
        connect_timeout: 연결 타임아웃 (초)
        read_timeout: 읽기 타임아웃 (초)
        **kwargs: session.client()에 전달할 추가 인자

    Returns:
        boto3 cognito-idp client
    """
    import boto3
    from botocore import UNSIGNED
    from botocore.config import Config

    config = Config(
        retries={"max_attempts": max_attempts, "mode": retry_mode},  # pyright: ignore[reportArgumentType]
        connect_timeout=connect_timeout,
        read_timeout=read_timeout,
        signature_version=UNSIGNED,
    )

    # 기존 config가 있으면 병합
    if "config" in kwargs:
        existing = kwargs.pop("config")
        config = config.merge(existing)

    if session is None:
        session = boto3.Session()

    return session.client(  # pyright: ignore[reportCallIssue]
        SERVICE_NAME,
        region_name=region_name,
        config=config,
        **kwargs,
    )
