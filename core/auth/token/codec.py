"""
core/auth/token/codec.py - 서명 없는 토큰 인코딩/디코딩

토큰 형식:
    base64url(header JSON) + "." + base64url(payload JSON)

- base64url: "+" → "-", "/" → "_", 끝의 "=" 패딩 제거
- Cognito가 발급한 토큰은 세 번째(서명) 세그먼트를 갖지만 검증하지 않습니다.
  (직접 발급했거나 보안 채널로 받은 토큰만 다루기 때문)

Example:
    from core.auth.token.codec import encode, decode

    token = encode({"alg": "HS256", "typ": "JWT"}, {"exp": 1700000000})
    payload = decode(token)
"""

from __future__ import annotations

import base64
import binascii
import json
from typing import Any

from ..types import DecodeError

SEGMENT_SEPARATOR = "."


def base64url_encode(data: bytes) -> str:
    """바이트를 패딩 없는 base64url 문자열로 변환"""
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def base64url_decode(segment: str) -> bytes:
    """패딩 없는 base64url 문자열을 바이트로 변환

    Raises:
        DecodeError: base64url 문자 집합이 아니거나 길이가 잘못된 경우
    """
    padding = len(segment) % 4
    if padding == 1:
        raise DecodeError("base64url 세그먼트 길이가 잘못되었습니다")
    if padding:
        segment += "=" * (4 - padding)

    try:
        return base64.b64decode(segment, altchars=b"-_", validate=True)
    except (binascii.Error, ValueError) as e:
        raise DecodeError("base64url 디코딩 실패", cause=e) from e


def _encode_segment(data: dict[str, Any]) -> str:
    raw = json.dumps(data, separators=(",", ":"), ensure_ascii=False)
    return base64url_encode(raw.encode("utf-8"))


def _decode_segment(segment: str, label: str) -> dict[str, Any]:
    """세그먼트 하나를 JSON 객체로 디코딩"""
    try:
        raw = base64url_decode(segment)
    except DecodeError as e:
        raise DecodeError(f"{label} 디코딩 실패", segment=label, cause=e.cause) from e

    try:
        data = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise DecodeError(f"{label} JSON 파싱 실패", segment=label, cause=e) from e

    if not isinstance(data, dict):
        raise DecodeError(f"{label}가 JSON 객체가 아닙니다", segment=label)
    return data


def _split(token: str) -> list[str]:
    if not isinstance(token, str):
        raise DecodeError(f"토큰은 문자열이어야 합니다 (받은 타입: {type(token).__name__})")

    token = token.strip()
    if not token:
        raise DecodeError("토큰이 비어있습니다")

    parts = token.split(SEGMENT_SEPARATOR)
    if len(parts) < 2:
        raise DecodeError(f"잘못된 토큰 형식 - 최소 2개 세그먼트가 필요합니다 (받은 개수: {len(parts)})")
    return parts


def encode(header: dict[str, Any], payload: dict[str, Any]) -> str:
    """header와 payload를 각각 직렬화하여 토큰 생성

    Args:
        header: 알고리즘/타입 메타데이터
        payload: 클레임

    Returns:
        "header.payload" 형식의 토큰 문자열
    """
    return SEGMENT_SEPARATOR.join((_encode_segment(header), _encode_segment(payload)))


def decode(token: str) -> dict[str, Any]:
    """토큰의 payload를 디코딩 (서명 검증 없음)

    Args:
        token: 토큰 문자열 (2개 또는 3개 세그먼트)

    Returns:
        payload 딕셔너리

    Raises:
        DecodeError: 구조가 잘못되었거나 세그먼트를 디코딩할 수 없는 경우
    """
    return _decode_segment(_split(token)[1], "payload")


def decode_header(token: str) -> dict[str, Any]:
    """토큰의 header를 디코딩

    Raises:
        DecodeError: 구조가 잘못되었거나 세그먼트를 디코딩할 수 없는 경우
    """
    return _decode_segment(_split(token)[0], "header")


def get_claim_times(payload: dict[str, Any]) -> tuple[Any, Any]:
    """payload에서 (exp, nbf) 클레임 추출

    Returns:
        (exp, nbf) - 없는 클레임은 None
    """
    return payload.get("exp"), payload.get("nbf")
