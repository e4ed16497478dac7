# core/auth/cache/cache.py
"""
토큰 캐시 저장소 구현

- make_cache_key: CredentialSet → 캐시 키 (7개 필드를 "::"로 연결)
- Store: 캐시 저장소 인터페이스 (get_item/set_item)
- MemoryStore: 메모리 기반 저장소 (Thread-safe)
- FileStore: JSON 파일 기반 저장소 (프로세스 간 재사용)

설계 원칙:
- 저장소는 TTL을 관리하지 않음. 만료는 토큰의 exp/nbf 클레임으로만 판단
- 캐시 키에는 비밀번호가 포함되므로 파일에는 SHA-256 해시 키로만 저장
- 로그에는 키 대신 짧은 fingerprint만 남김
"""

import hashlib
import json
import logging
import os
import tempfile
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional

from ..types import CredentialSet

logger = logging.getLogger(__name__)

# 캐시 키 생성에 사용할 구분자
KEY_SEPARATOR = "::"


def make_cache_key(credentials: CredentialSet) -> str:
    """CredentialSet에서 캐시 키 생성

    같은 자격증명이면 항상 같은 키, 토큰 타입이 다르면 다른 키가 생성됩니다.
    client_secret이 없으면 빈 문자열로 대체합니다.

    Args:
        credentials: 자격증명 묶음

    Returns:
        "username::password::region::client_id::user_pool_id::token_type::client_secret"
    """
    return KEY_SEPARATOR.join(
        [
            credentials.username,
            credentials.password,
            credentials.region,
            credentials.client_id,
            credentials.user_pool_id,
            credentials.token_type.value,
            credentials.client_secret or "",
        ]
    )


def hash_key(key: str) -> str:
    """캐시 키의 SHA-256 해시 (파일 저장용)"""
    return hashlib.sha256(key.encode("utf-8")).hexdigest()


def fingerprint(key: str) -> str:
    """로그 출력용 짧은 키 식별자"""
    return hash_key(key)[:12]


# =============================================================================
# Store Interface
# =============================================================================


class Store(ABC):
    """캐시 저장소 인터페이스

    키/값 모두 문자열입니다. 같은 키에 다시 저장하면 마지막 값이 남습니다.
    """

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """값 조회 (없으면 None)"""
        pass

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """값 저장 (덮어쓰기)"""
        pass

    @abstractmethod
    def delete_item(self, key: str) -> bool:
        """값 삭제

        Returns:
            True if 삭제됨
        """
        pass

    @abstractmethod
    def items(self) -> Dict[str, str]:
        """저장된 모든 항목 ({저장 키: 값})"""
        pass

    @abstractmethod
    def clear(self) -> None:
        """모든 항목 삭제"""
        pass

    def __len__(self) -> int:
        return len(self.items())


# =============================================================================
# Memory-based Store
# =============================================================================


class MemoryStore(Store):
    """메모리 기반 캐시 저장소

    프로세스 내에서만 유효합니다. Thread-safe 구현.
    """

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})
        self._lock = threading.RLock()

    def get_item(self, key: str) -> Optional[str]:
        with self._lock:
            return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            self._data[key] = value

    def delete_item(self, key: str) -> bool:
        with self._lock:
            if key in self._data:
                del self._data[key]
                return True
            return False

    def items(self) -> Dict[str, str]:
        with self._lock:
            return dict(self._data)

    def clear(self) -> None:
        with self._lock:
            self._data.clear()


# =============================================================================
# File-based Store
# =============================================================================


def default_cache_path() -> Path:
    """기본 캐시 파일 경로 (~/.cognito-token/cache.json)"""
    return Path.home() / ".cognito-token" / "cache.json"


class FileStore(Store):
    """JSON 파일 기반 캐시 저장소

    캐시 파일 형식:
        {"<sha256(key)>": "<token>", ...}

    원본 키(비밀번호 포함)는 파일에 기록되지 않습니다.
    파일은 임시 파일에 쓴 뒤 교체하며, 권한은 0600입니다.
    """

    def __init__(self, cache_path: Optional[str] = None):
        """FileStore 초기화

        Args:
            cache_path: 캐시 파일 경로 (기본: ~/.cognito-token/cache.json)
        """
        self.cache_path = Path(cache_path) if cache_path else default_cache_path()
        self._lock = threading.RLock()

    def _load(self) -> Dict[str, str]:
        """캐시 파일 로드 (없거나 파싱 실패 시 빈 딕셔너리)"""
        try:
            if not self.cache_path.exists():
                return {}

            with open(self.cache_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("캐시 파일 로드 실패 (%s): %s", self.cache_path, e)
            return {}

        if not isinstance(data, dict):
            logger.warning("캐시 파일 형식이 잘못되었습니다: %s", self.cache_path)
            return {}

        return {k: v for k, v in data.items() if isinstance(k, str) and isinstance(v, str)}

    def _save(self, data: Dict[str, str]) -> None:
        """캐시 파일 저장

        Raises:
            OSError: 파일 저장 실패 시
        """
        self.cache_path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_path = tempfile.mkstemp(
            dir=str(self.cache_path.parent),
            prefix=".cache-",
            suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            os.replace(tmp_path, self.cache_path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

    def get_item(self, key: str) -> Optional[str]:
        with self._lock:
            return self._load().get(hash_key(key))

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            data = self._load()
            data[hash_key(key)] = value
            self._save(data)

    def delete_item(self, key: str) -> bool:
        with self._lock:
            data = self._load()
            stored_key = hash_key(key)
            if stored_key not in data:
                return False
            del data[stored_key]
            self._save(data)
            return True

    def items(self) -> Dict[str, str]:
        with self._lock:
            return self._load()

    def clear(self) -> None:
        with self._lock:
            try:
                if self.cache_path.exists():
                    self.cache_path.unlink()
            except OSError as e:
                logger.warning("캐시 파일 삭제 실패 (%s): %s", self.cache_path, e)
                raise
