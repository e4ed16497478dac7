"""
core/auth/token/validity.py - 토큰 유효성 판단

- is_valid: 디코딩된 payload가 주어진 시각에 사용 가능한지 판단 (순수 함수)
- is_token_valid: 토큰 문자열 기준 판단. 디코딩 실패는 "유효하지 않음"으로 처리

판단 규칙:
    - exp가 있고 exp < now → 만료
    - nbf가 있고 nbf > now → 아직 유효하지 않음
    - 그 외 → 유효 (exp/nbf가 모두 없으면 만료 시각이 없는 토큰으로 간주)
"""

from __future__ import annotations

import logging
import numbers
from typing import Any

from ..types import DecodeError
from .codec import decode, get_claim_times

logger = logging.getLogger(__name__)


def _is_number(value: Any) -> bool:
    # bool은 int의 하위 타입이지만 시각으로 취급하지 않음
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def is_valid(payload: dict[str, Any], now: float) -> bool:
    """payload가 현재 시각에 사용 가능한지 확인

    Args:
        payload: 디코딩된 토큰 payload
        now: 현재 시각 (epoch 초)

    Returns:
        사용 가능하면 True
    """
    exp, nbf = get_claim_times(payload)

    if exp is not None:
        if not _is_number(exp):
            return False
        if exp < now:
            return False

    if nbf is not None:
        if not _is_number(nbf):
            return False
        if nbf > now:
            return False

    return True


def is_token_valid(token: str, now: float) -> bool:
    """토큰 문자열이 현재 시각에 사용 가능한지 확인

    디코딩 실패는 예외 없이 False로 처리합니다.

    Args:
        token: 토큰 문자열
        now: 현재 시각 (epoch 초)

    Returns:
        사용 가능하면 True
    """
    try:
        payload = decode(token)
    except DecodeError as e:
        logger.debug("캐시된 토큰 디코딩 실패, 무효로 처리: %s", e)
        return False
    return is_valid(payload, now)
