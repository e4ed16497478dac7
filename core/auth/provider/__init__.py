# core/auth/provider/__init__.py
"""
인증 클라이언트 구현 모듈

Authenticator 구현 목록:
- CognitoSRPAuthenticator: Cognito User Pool USER_SRP_AUTH 인증

Note:
    이 모듈은 Lazy Import 패턴을 사용합니다.
"""

__all__ = [
    "CognitoSRPAuthenticator",
    "get_cognito_client",
]

_IMPORT_MAPPING = {
    "CognitoSRPAuthenticator": (".cognito", "CognitoSRPAuthenticator"),
    "get_cognito_client": (".client", "get_cognito_client"),
}


def __getattr__(name: str):
    """Lazy import - 실제 사용 시점에만 모듈 로드"""
    if name in _IMPORT_MAPPING:
        module_name, attr_name = _IMPORT_MAPPING[name]
        import importlib

        module = importlib.import_module(module_name, __name__)
        return getattr(module, attr_name)

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
