"""
core/auth/provider/cognito.py - Cognito User Pool SRP 인증 클라이언트

USER_SRP_AUTH 흐름으로 로그인하여 Access Token 또는 ID Token을 반환합니다.
SRP 계산은 pycognito(AWSSRP)가 수행하고, 여기서는 다음만 담당합니다:

- 리전별 cognito-idp client 생성/재사용
- 토큰 타입(access/id/raw_request)에 맞는 토큰 선택
- 모든 실패를 사람이 읽을 수 있는 메시지의 AuthenticationError로 변환
  (예: NotAuthorizedException → "Incorrect username or password.")

Example:
    from core.auth.provider import CognitoSRPAuthenticator

    authenticator = CognitoSRPAuthenticator()
    token = authenticator.authenticate(credentials)
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any

from botocore.exceptions import BotoCoreError, ClientError
from pycognito.aws_srp import AWSSRP
from pycognito.exceptions import WarrantException

from core.exceptions import get_error_code, get_error_message, is_not_authorized, is_throttling

from ..types import AuthenticationError, Authenticator, ConfigurationError, CredentialSet, TokenType
from .client import (
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_READ_TIMEOUT,
    get_cognito_client,
)

if TYPE_CHECKING:
    import boto3

logger = logging.getLogger(__name__)

# 토큰 타입별 AuthenticationResult 키
_RESULT_KEYS = {
    TokenType.ACCESS: "AccessToken",
    TokenType.ID: "IdToken",
    # raw_request는 access 토큰과 동일하게 처리
    TokenType.RAW_REQUEST: "AccessToken",
}


class CognitoSRPAuthenticator(Authenticator):
    """Cognito User Pool SRP 인증 클라이언트

    Thread-safe 구현 (리전별 client 캐시는 Lock으로 보호).
    """

    def __init__(
        self,
        session: boto3.Session | None = None,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        connect_timeout: int = DEFAULT_CONNECT_TIMEOUT,
        read_timeout: int = DEFAULT_READ_TIMEOUT,
    ):
        """CognitoSRPAuthenticator 초기화

        Args:
            session: boto3 Session (None이면 client 생성 시 새로 만듦)
            max_attempts: cognito-idp 최대 시도 횟수
            connect_timeout: 연결 타임아웃 (초)
            read_timeout: 읽기 타임아웃 (초)
        """
        self._session = session
        self._max_attempts = max_attempts
        self._connect_timeout = connect_timeout
        self._read_timeout = read_timeout
        self._clients: dict[str, Any] = {}
        self._lock = threading.Lock()

    def _get_client(self, region: str) -> Any:
        """리전별 cognito-idp client 반환 (없으면 생성)"""
        with self._lock:
            client = self._clients.get(region)
            if client is not None:
                return client

            try:
                client = get_cognito_client(
                    region_name=region,
                    session=self._session,
                    max_attempts=self._max_attempts,
                    connect_timeout=self._connect_timeout,
                    read_timeout=self._read_timeout,
                )
            except BotoCoreError as e:
                raise ConfigurationError(
                    f"cognito-idp client 생성 실패 ({region}): {e}",
                    config_key="Region",
                    cause=e,
                ) from e

            self._clients[region] = client
            return client

    def authenticate(self, credentials: CredentialSet) -> str:
        """SRP 인증 후 토큰 반환

        Args:
            credentials: 자격증명 묶음

        Returns:
            token_type에 맞는 JWT 문자열

        Raises:
            AuthenticationError: 인증 실패 (메시지는 Cognito가 돌려준 그대로)
            ConfigurationError: client 생성 실패 또는 잘못된 User Pool ID
        """
        # User Pool ID 형식: {region}_{id}
        if "_" not in credentials.user_pool_id.strip("_"):
            raise ConfigurationError(
                f"잘못된 User Pool ID 형식입니다: {credentials.user_pool_id}",
                config_key="UserPoolId",
            )

        client = self._get_client(credentials.region)
        srp = AWSSRP(
            username=credentials.username,
            password=credentials.password,
            pool_id=credentials.user_pool_id,
            client_id=credentials.client_id,
            client=client,
            client_secret=credentials.client_secret,
        )

        try:
            response = srp.authenticate_user()
        except ClientError as e:
            self._log_client_error(credentials, e)
            raise AuthenticationError(
                get_error_message(e),
                error_code=get_error_code(e),
                cause=e,
            ) from e
        except BotoCoreError as e:
            logger.warning("Cognito 연결 실패 [%s]: %s", credentials.region, e)
            raise AuthenticationError(get_error_message(e), cause=e) from e
        except (WarrantException, NotImplementedError) as e:
            # NEW_PASSWORD_REQUIRED, MFA 등 지원하지 않는 챌린지
            logger.warning("Cognito 챌린지 처리 불가 [%s]: %s", credentials.username, e)
            raise AuthenticationError(get_error_message(e), cause=e) from e

        return self._select_token(response, credentials.token_type)

    @staticmethod
    def _select_token(response: dict[str, Any], token_type: TokenType) -> str:
        """AuthenticationResult에서 토큰 타입에 맞는 토큰 선택"""
        result = response.get("AuthenticationResult") or {}
        result_key = _RESULT_KEYS[token_type]
        token = result.get(result_key)
        if not token:
            raise AuthenticationError(f"인증 응답에 {result_key}가 없습니다")
        return token

    @staticmethod
    def _log_client_error(credentials: CredentialSet, error: ClientError) -> None:
        if is_not_authorized(error):
            logger.info("Cognito 인증 거부 [%s]: %s", credentials.username, get_error_message(error))
        elif is_throttling(error):
            logger.warning("Cognito 스로틀링 [%s]: %s", credentials.region, get_error_message(error))
        else:
            logger.warning(
                "Cognito 인증 오류 [%s] (%s): %s",
                credentials.username,
                get_error_code(error),
                get_error_message(error),
            )

    def close(self) -> None:
        """캐시된 client 정리"""
        with self._lock:
            self._clients.clear()
