"""
core/auth/token/error_token.py - 에러 토큰 (negative cache)

인증 실패 시 에러 메시지를 담은 짧은 수명의 토큰을 만들어 캐시에 저장합니다.
같은 잘못된 값으로 60초 안에 다시 호출하면 네트워크 호출 없이 캐시된 에러를 돌려받습니다.
"""

from __future__ import annotations

from .codec import encode

# 에러 토큰 유지 시간 (1분)
ERROR_TOKEN_TTL_SECONDS = 60

ERROR_TOKEN_HEADER = {
    "alg": "HS256",
    "typ": "JWT",
}


def make_error_token(message: str, now: float, ttl_seconds: int = ERROR_TOKEN_TTL_SECONDS) -> str:
    """에러 메시지를 담은 토큰 생성

    Args:
        message: 에러 메시지
        now: 현재 시각 (epoch 초)
        ttl_seconds: 유지 시간 (기본 60초)

    Returns:
        payload가 {"error": message, "exp": now + ttl_seconds}인 토큰
    """
    payload = {
        "error": message,
        "exp": now + ttl_seconds,
    }
    return encode(ERROR_TOKEN_HEADER, payload)


def get_error_claim(payload: dict) -> str | None:
    """payload에 담긴 에러 메시지 반환 (에러 토큰이 아니면 None)"""
    error = payload.get("error")
    if error is None:
        return None
    return error if isinstance(error, str) else str(error)
