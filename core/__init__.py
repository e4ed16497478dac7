# core/__init__.py
"""
core - Cognito 토큰 캐시 인프라

토큰 발급/캐시 로직 전체를 포함하는 최상위 패키지입니다.

아키텍처:
    core/
    ├── auth/           # 토큰 캐시 서브시스템
    │   ├── types/      # TokenType, CredentialSet, Authenticator, 에러
    │   ├── token/      # 토큰 코덱, 유효성, 에러 토큰
    │   ├── cache/      # 캐시 키, 저장소 (메모리/파일)
    │   ├── provider/   # Cognito SRP 인증 클라이언트
    │   ├── resolver.py # 캐시 결정 엔진
    │   └── template.py # 호출자용 인자 정의, run()
    ├── config.py       # 환경 변수 설정, 버전
    └── exceptions.py   # 통합 예외 계층

Usage:
    # 설정 사용
    from core.config import load_settings
    settings = load_settings()

    # 토큰 발급
    from core.auth import TokenResolver, FileStore, CognitoSRPAuthenticator, CredentialSet
    resolver = TokenResolver(FileStore(settings.cache_path), CognitoSRPAuthenticator())
    token = resolver.resolve_token(CredentialSet.create(...))
"""

from core import auth, config, exceptions

__all__: list[str] = [
    # 서브패키지
    "auth",
    # 모듈
    "config",
    "exceptions",
]
