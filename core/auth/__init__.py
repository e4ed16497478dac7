# core/auth/__init__.py
"""
Cognito 토큰 캐시 모듈 (core/auth)

문제점 해결:
- 요청마다 SRP 인증 → 유효한 토큰은 캐시에서 재사용
- 잘못된 자격증명으로 반복 호출 → 에러 토큰으로 60초간 실패를 캐시
- 전역 캐시 상태 → 저장소/인증 클라이언트를 TokenResolver에 주입

구성:
- TokenResolver: 캐시 결정 엔진 (재사용 / 재인증 / 캐시된 에러)
- Store: 캐시 저장소 인터페이스 (MemoryStore, FileStore)
- Authenticator: 인증 클라이언트 인터페이스 (CognitoSRPAuthenticator)
- 토큰 유틸리티: encode/decode, is_valid, make_error_token

사용 예시:
    from core.auth import (
        CognitoSRPAuthenticator,
        CredentialSet,
        FileStore,
        TokenResolver,
    )

    resolver = TokenResolver(FileStore(), CognitoSRPAuthenticator())

    credentials = CredentialSet.create(
        username="user@example.com",
        password="secret",
        region="ap-northeast-2",
        client_id="1example23456789",
        user_pool_id="ap-northeast-2_AbCdEfGhI",
        token_type="id",
    )

    # 토큰 또는 에러 메시지
    value = resolver.resolve_token(credentials)

Note:
    이 모듈은 Lazy Import 패턴을 사용합니다.
    실제 사용 시점에만 하위 모듈이 로드되어 CLI 시작 시간을 최적화합니다.
"""

__all__ = [
    # Types
    "TokenType",
    "CredentialSet",
    "Authenticator",
    "AuthError",
    "AuthenticationError",
    "DecodeError",
    "ConfigurationError",
    # Token
    "encode",
    "decode",
    "decode_header",
    "is_valid",
    "is_token_valid",
    "make_error_token",
    "ERROR_TOKEN_TTL_SECONDS",
    # Cache
    "Store",
    "MemoryStore",
    "FileStore",
    "make_cache_key",
    # Providers
    "CognitoSRPAuthenticator",
    # Resolver
    "TokenResolver",
    "Resolution",
    "ResolveState",
    "Ok",
    "Failure",
    # Template
    "TEMPLATE_TAG",
    "TEMPLATE_ARGS",
    "run",
]

# Lazy import 매핑 테이블
_IMPORT_MAPPING = {
    # Types
    "TokenType": (".types", "TokenType"),
    "CredentialSet": (".types", "CredentialSet"),
    "Authenticator": (".types", "Authenticator"),
    "AuthError": (".types", "AuthError"),
    "AuthenticationError": (".types", "AuthenticationError"),
    "DecodeError": (".types", "DecodeError"),
    "ConfigurationError": (".types", "ConfigurationError"),
    # Token
    "encode": (".token", "encode"),
    "decode": (".token", "decode"),
    "decode_header": (".token", "decode_header"),
    "is_valid": (".token", "is_valid"),
    "is_token_valid": (".token", "is_token_valid"),
    "make_error_token": (".token", "make_error_token"),
    "ERROR_TOKEN_TTL_SECONDS": (".token", "ERROR_TOKEN_TTL_SECONDS"),
    # Cache
    "Store": (".cache", "Store"),
    "MemoryStore": (".cache", "MemoryStore"),
    "FileStore": (".cache", "FileStore"),
    "make_cache_key": (".cache", "make_cache_key"),
    # Providers
    "CognitoSRPAuthenticator": (".provider", "CognitoSRPAuthenticator"),
    # Resolver
    "TokenResolver": (".resolver", "TokenResolver"),
    "Resolution": (".resolver", "Resolution"),
    "ResolveState": (".resolver", "ResolveState"),
    "Ok": (".resolver", "Ok"),
    "Failure": (".resolver", "Failure"),
    # Template
    "TEMPLATE_TAG": (".template", "TEMPLATE_TAG"),
    "TEMPLATE_ARGS": (".template", "TEMPLATE_ARGS"),
    "run": (".template", "run"),
}


def __getattr__(name: str):
    """Lazy import - 실제 사용 시점에만 모듈 로드

    CLI 시작 시간 최적화를 위해 무거운 의존성(boto3, pycognito 등)을
    실제 필요한 시점에만 로드합니다.
    """
    if name in _IMPORT_MAPPING:
        module_name, attr_name = _IMPORT_MAPPING[name]
        import importlib

        module = importlib.import_module(module_name, __name__)
        return getattr(module, attr_name)

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
