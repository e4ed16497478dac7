# core/auth/resolver.py
"""
core/auth/resolver.py - 토큰 캐시 결정 엔진

자격증명 묶음으로 캐시 키를 계산하고, 캐시된 토큰을 재사용할지,
새로 인증할지, 캐시된 에러를 돌려줄지 결정합니다.

호출 흐름:
    START → KEY_COMPUTED → CACHE_CHECKED
        ├── HIT_VALID_OK      캐시된 토큰이 유효 → 그대로 반환
        ├── HIT_VALID_ERROR   캐시된 에러 토큰이 유효 → 에러 메시지 반환
        └── MISS_OR_INVALID   없음/만료/디코딩 실패 → 인증
                ├── 성공: 토큰 저장 후 반환
                └── 실패: 에러 토큰(60초) 저장 후 에러 메시지 반환
    → RESOLVED

반환값 규칙:
    - resolve(): Resolution (내부 결과 Ok | Failure + 도달 상태)
    - resolve_token(): 문자열 하나 (성공 시 토큰, 인증 실패 시 에러 메시지)
    - 필수 필드 누락(ValidationError)만 예외로 전파됩니다.

동시성:
    같은 캐시 키에 대한 동시 호출은 키별 Lock으로 직렬화되어
    인증은 한 번만 수행되고 나머지는 저장된 결과를 재사용합니다.
    서로 다른 키는 서로 막지 않습니다.

Example:
    from core.auth.cache import MemoryStore
    from core.auth.provider import CognitoSRPAuthenticator
    from core.auth.resolver import TokenResolver

    resolver = TokenResolver(MemoryStore(), CognitoSRPAuthenticator())
    token = resolver.resolve_token(credentials)
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Union

from .cache import Store, fingerprint, make_cache_key
from .token import decode, get_error_claim, is_valid, make_error_token
from .token.error_token import ERROR_TOKEN_TTL_SECONDS
from .types import AuthError, Authenticator, CredentialSet, DecodeError

logger = logging.getLogger(__name__)


# =============================================================================
# 결과 타입
# =============================================================================


class ResolveState(Enum):
    """호출이 도달한 분기"""

    HIT_VALID_OK = "hit_valid_ok"
    HIT_VALID_ERROR = "hit_valid_error"
    MISS_OR_INVALID = "miss_or_invalid"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Ok:
    """토큰 획득 성공"""

    token: str


@dataclass(frozen=True)
class Failure:
    """인증 실패 (캐시된 에러 포함)"""

    message: str


Result = Union[Ok, Failure]


@dataclass(frozen=True)
class Resolution:
    """resolve() 결과

    Attributes:
        result: Ok(token) 또는 Failure(message)
        state: 도달한 분기
        authenticated: 이번 호출에서 인증 클라이언트를 호출했는지 여부
    """

    result: Result
    state: ResolveState
    authenticated: bool = False

    @property
    def ok(self) -> bool:
        return isinstance(self.result, Ok)

    @property
    def from_cache(self) -> bool:
        return self.state is not ResolveState.MISS_OR_INVALID

    @property
    def value(self) -> str:
        """외부 계약용 문자열 (토큰 또는 에러 메시지)"""
        if isinstance(self.result, Ok):
            return self.result.token
        return self.result.message


# =============================================================================
# TokenResolver
# =============================================================================


class TokenResolver:
    """토큰 캐시 결정 엔진

    저장소와 인증 클라이언트는 생성 시 주입합니다.
    (전역 상태 없음 - 인스턴스마다 독립된 캐시 범위)
    """

    def __init__(
        self,
        store: Store,
        authenticator: Authenticator,
        clock: Callable[[], float] = time.time,
        error_ttl_seconds: int = ERROR_TOKEN_TTL_SECONDS,
    ):
        """TokenResolver 초기화

        Args:
            store: 캐시 저장소
            authenticator: 인증 클라이언트
            clock: 현재 시각(epoch 초) 함수
            error_ttl_seconds: 에러 토큰 유지 시간 (기본 60초)
        """
        self.store = store
        self.authenticator = authenticator
        self._clock = clock
        self._error_ttl_seconds = error_ttl_seconds

        # 키별 single-flight Lock: {key: [lock, 대기자 수]}
        self._key_locks: dict[str, list] = {}
        self._registry_lock = threading.Lock()

    @contextmanager
    def _single_flight(self, key: str) -> Iterator[None]:
        """같은 키에 대한 조회/인증/저장을 직렬화"""
        with self._registry_lock:
            entry = self._key_locks.get(key)
            if entry is None:
                entry = [threading.Lock(), 0]
                self._key_locks[key] = entry
            entry[1] += 1

        lock = entry[0]
        try:
            with lock:
                yield
        finally:
            with self._registry_lock:
                entry[1] -= 1
                if entry[1] == 0:
                    del self._key_locks[key]

    def _lookup(self, key: str) -> Resolution | None:
        """캐시 조회 - 사용 가능한 항목이 없으면 None"""
        token = self.store.get_item(key)
        if not token:
            logger.debug("캐시 미스 [%s]", fingerprint(key))
            return None

        try:
            payload = decode(token)
        except DecodeError as e:
            logger.debug("캐시된 토큰 디코딩 실패 [%s]: %s", fingerprint(key), e)
            return None

        if not is_valid(payload, self._clock()):
            logger.debug("캐시된 토큰 만료/미유효 [%s]", fingerprint(key))
            return None

        error = get_error_claim(payload)
        if error is not None:
            logger.debug("캐시된 에러 토큰 사용 [%s]", fingerprint(key))
            return Resolution(Failure(error), ResolveState.HIT_VALID_ERROR)

        logger.debug("캐시된 토큰 재사용 [%s]", fingerprint(key))
        return Resolution(Ok(token), ResolveState.HIT_VALID_OK)

    def _refresh(self, credentials: CredentialSet, key: str) -> Resolution:
        """인증 후 결과(토큰 또는 에러 토큰)를 캐시에 저장"""
        try:
            token = self.authenticator.authenticate(credentials)
        except AuthError as e:
            error_token = make_error_token(e.message, self._clock(), self._error_ttl_seconds)
            self.store.set_item(key, error_token)
            logger.info(
                "인증 실패, %d초간 에러 캐시 [%s]: %s",
                self._error_ttl_seconds,
                fingerprint(key),
                e.message,
            )
            return Resolution(Failure(e.message), ResolveState.MISS_OR_INVALID, authenticated=True)

        self.store.set_item(key, token)
        logger.debug("새 토큰 저장 [%s]", fingerprint(key))
        return Resolution(Ok(token), ResolveState.MISS_OR_INVALID, authenticated=True)

    def resolve(self, credentials: CredentialSet) -> Resolution:
        """토큰 결정

        Args:
            credentials: 자격증명 묶음

        Returns:
            Resolution

        Raises:
            ValidationError: 필수 필드 누락 (캐시/네트워크 접근 전)
        """
        credentials.validate()
        key = make_cache_key(credentials)

        with self._single_flight(key):
            cached = self._lookup(key)
            if cached is not None:
                return cached
            return self._refresh(credentials, key)

    def resolve_token(self, credentials: CredentialSet) -> str:
        """토큰 또는 에러 메시지 문자열 반환

        인증 실패는 예외가 아니라 에러 메시지 문자열로 반환됩니다.

        Raises:
            ValidationError: 필수 필드 누락
        """
        return self.resolve(credentials).value
