"""
tests/conftest.py - pytest 공통 픽스처

자격증명, 저장소, 가짜 인증 클라이언트와 테스트 헬퍼를 제공합니다.

Usage:
    def test_something(credentials, memory_store, fake_authenticator, clock):
        resolver = TokenResolver(memory_store, fake_authenticator, clock=clock)
"""

import os
import sys
import threading
from pathlib import Path
from typing import List, Optional

import pytest

# 프로젝트 루트를 sys.path에 추가
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from core.auth.token import encode  # noqa: E402
from core.auth.types import AuthenticationError, Authenticator, CredentialSet, TokenType  # noqa: E402

# 테스트 기준 시각 (2023-11-14 22:13:20 UTC)
NOW = 1_700_000_000.0


# =============================================================================
# 환경 설정
# =============================================================================


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch):
    """테스트 환경 설정"""
    # 사용자 환경의 CT_* 값이 테스트에 섞이지 않도록 제거
    for key in list(os.environ):
        if key.startswith("CT_"):
            monkeypatch.delenv(key, raising=False)

    monkeypatch.setenv("AWS_DEFAULT_REGION", "ap-northeast-2")

    yield


# =============================================================================
# 토큰 헬퍼
# =============================================================================


def make_token(exp: Optional[float] = None, nbf: Optional[float] = None, **claims) -> str:
    """테스트용 토큰 생성 헬퍼 (서명 세그먼트 포함)"""
    payload = dict(claims)
    if exp is not None:
        payload["exp"] = exp
    if nbf is not None:
        payload["nbf"] = nbf
    return encode({"alg": "RS256", "kid": "test"}, payload) + ".signature"


class FixedClock:
    """고정 시각 clock (advance로 시간 이동)"""

    def __init__(self, now: float = NOW):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeAuthenticator(Authenticator):
    """호출 횟수를 기록하는 가짜 인증 클라이언트

    fail_message가 설정되면 AuthenticationError를 발생시킵니다.
    """

    def __init__(self, clock: FixedClock, lifetime: int = 3600):
        self.clock = clock
        self.lifetime = lifetime
        self.fail_message: Optional[str] = None
        self.delay: Optional[threading.Event] = None
        self.calls: List[CredentialSet] = []
        self._lock = threading.Lock()
        self.closed = False

    @property
    def call_count(self) -> int:
        return len(self.calls)

    def authenticate(self, credentials: CredentialSet) -> str:
        with self._lock:
            self.calls.append(credentials)
            serial = len(self.calls)

        if self.delay is not None:
            self.delay.wait(timeout=5)

        if self.fail_message is not None:
            raise AuthenticationError(self.fail_message, error_code="NotAuthorizedException")

        return make_token(
            exp=self.clock() + self.lifetime,
            token_use=credentials.token_type.value,
            sub=credentials.username,
            serial=serial,
        )

    def close(self) -> None:
        self.closed = True


# =============================================================================
# 픽스처
# =============================================================================


@pytest.fixture
def clock():
    """고정 시각 clock"""
    return FixedClock()


@pytest.fixture
def credentials():
    """기본 자격증명 묶음"""
    return CredentialSet(
        username="user@example.com",
        password="Passw0rd!",
        region="ap-northeast-2",
        client_id="1example23456789",
        user_pool_id="ap-northeast-2_AbCdEfGhI",
        token_type=TokenType.ACCESS,
    )


@pytest.fixture
def memory_store():
    """빈 메모리 저장소"""
    from core.auth.cache import MemoryStore

    return MemoryStore()


@pytest.fixture
def fake_authenticator(clock):
    """가짜 인증 클라이언트"""
    return FakeAuthenticator(clock)


@pytest.fixture
def resolver(memory_store, fake_authenticator, clock):
    """메모리 저장소 + 가짜 인증 클라이언트로 구성된 TokenResolver"""
    from core.auth.resolver import TokenResolver

    return TokenResolver(memory_store, fake_authenticator, clock=clock)


# =============================================================================
# 테스트 헬퍼 함수
# =============================================================================


def create_mock_client_error(
    error_code: str,
    error_message: str = "Test error",
    operation_name: str = "InitiateAuth",
) -> Exception:
    """ClientError 생성 헬퍼"""
    from botocore.exceptions import ClientError

    return ClientError(
        {
            "Error": {
                "Code": error_code,
                "Message": error_message,
            }
        },
        operation_name,
    )
