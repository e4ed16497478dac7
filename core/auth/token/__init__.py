# core/auth/token/__init__.py
"""
토큰 코덱, 유효성 판단, 에러 토큰 모듈

- codec: 서명 없는 토큰 인코딩/디코딩 (header.payload)
- validity: exp/nbf 기반 유효성 판단
- error_token: 인증 실패를 60초간 캐시하기 위한 에러 토큰

Note:
    이 모듈은 Lazy Import 패턴을 사용합니다.
"""

__all__ = [
    # Codec
    "encode",
    "decode",
    "decode_header",
    "get_claim_times",
    # Validity
    "is_valid",
    "is_token_valid",
    # Error token
    "make_error_token",
    "get_error_claim",
    "ERROR_TOKEN_TTL_SECONDS",
]

_IMPORT_MAPPING = {
    "encode": (".codec", "encode"),
    "decode": (".codec", "decode"),
    "decode_header": (".codec", "decode_header"),
    "get_claim_times": (".codec", "get_claim_times"),
    "is_valid": (".validity", "is_valid"),
    "is_token_valid": (".validity", "is_token_valid"),
    "make_error_token": (".error_token", "make_error_token"),
    "get_error_claim": (".error_token", "get_error_claim"),
    "ERROR_TOKEN_TTL_SECONDS": (".error_token", "ERROR_TOKEN_TTL_SECONDS"),
}


def __getattr__(name: str):
    """Lazy import - 실제 사용 시점에만 모듈 로드"""
    if name in _IMPORT_MAPPING:
        module_name, attr_name = _IMPORT_MAPPING[name]
        import importlib

        module = importlib.import_module(module_name, __name__)
        return getattr(module, attr_name)

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
