"""
core/config.py - 설정 및 버전 정보

환경 변수에서 실행 설정을 읽어 Settings 데이터 클래스로 제공합니다.

환경 변수:
    CT_CACHE_PATH         캐시 파일 경로 (기본: ~/.cognito-token/cache.json)
    CT_ERROR_TTL_SECONDS  에러 토큰 유지 시간 (기본: 60)
    CT_LOG_LEVEL          로그 레벨 (기본: WARNING)
    CT_CONNECT_TIMEOUT    Cognito 연결 타임아웃 초 (기본: 10)
    CT_READ_TIMEOUT       Cognito 읽기 타임아웃 초 (기본: 30)
    CT_MAX_ATTEMPTS       Cognito 최대 시도 횟수 (기본: 3)

Usage:
    from core.config import load_settings

    settings = load_settings()
    store = FileStore(settings.cache_path)
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from core.exceptions import ConfigError

ENV_PREFIX = "CT_"

DEFAULT_ERROR_TTL_SECONDS = 60
DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_CONNECT_TIMEOUT = 10  # 초
DEFAULT_READ_TIMEOUT = 30  # 초
DEFAULT_MAX_ATTEMPTS = 3

_VERSION_FILE = Path(__file__).resolve().parent.parent / "version.txt"


def get_version() -> str:
    """버전 문자열 반환

    프로젝트 루트의 version.txt에서 읽습니다.
    파일이 없으면 "0.0.0"을 반환합니다.
    """
    try:
        version = _VERSION_FILE.read_text(encoding="utf-8").strip()
    except OSError:
        return "0.0.0"
    return version or "0.0.0"


@dataclass(frozen=True)
class Settings:
    """실행 설정

    Attributes:
        cache_path: 캐시 파일 경로 (None이면 기본 경로)
        error_ttl_seconds: 에러 토큰 유지 시간 (초)
        log_level: 로그 레벨 이름
        connect_timeout: Cognito 연결 타임아웃 (초)
        read_timeout: Cognito 읽기 타임아웃 (초)
        max_attempts: Cognito 최대 시도 횟수
    """

    cache_path: str | None = None
    error_ttl_seconds: int = DEFAULT_ERROR_TTL_SECONDS
    log_level: str = DEFAULT_LOG_LEVEL
    connect_timeout: int = DEFAULT_CONNECT_TIMEOUT
    read_timeout: int = DEFAULT_READ_TIMEOUT
    max_attempts: int = DEFAULT_MAX_ATTEMPTS


def _read_int(environ: Mapping[str, str], name: str, default: int, minimum: int = 0) -> int:
    key = f"{ENV_PREFIX}{name}"
    raw = environ.get(key)
    if raw is None or raw.strip() == "":
        return default

    try:
        value = int(raw)
    except ValueError as e:
        raise ConfigError(key, f"정수여야 합니다 (입력값: '{raw}')", cause=e) from e

    if value < minimum:
        raise ConfigError(key, f"{minimum} 이상이어야 합니다 (입력값: {value})")
    return value


def _read_log_level(environ: Mapping[str, str]) -> str:
    key = f"{ENV_PREFIX}LOG_LEVEL"
    level = environ.get(key, DEFAULT_LOG_LEVEL).strip().upper() or DEFAULT_LOG_LEVEL
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigError(key, f"알 수 없는 로그 레벨입니다: {level}")
    return level


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """환경 변수에서 Settings 생성

    Args:
        environ: 환경 변수 매핑 (기본: os.environ)

    Returns:
        Settings 인스턴스

    Raises:
        ConfigError: 값 형식이 잘못된 경우
    """
    if environ is None:
        environ = os.environ

    return Settings(
        cache_path=environ.get(f"{ENV_PREFIX}CACHE_PATH") or None,
        error_ttl_seconds=_read_int(environ, "ERROR_TTL_SECONDS", DEFAULT_ERROR_TTL_SECONDS, minimum=1),
        log_level=_read_log_level(environ),
        connect_timeout=_read_int(environ, "CONNECT_TIMEOUT", DEFAULT_CONNECT_TIMEOUT, minimum=1),
        read_timeout=_read_int(environ, "READ_TIMEOUT", DEFAULT_READ_TIMEOUT, minimum=1),
        max_attempts=_read_int(environ, "MAX_ATTEMPTS", DEFAULT_MAX_ATTEMPTS, minimum=1),
    )
