# core/auth/cache/__init__.py
"""
Cognito 토큰 캐시 저장소 모듈

이 모듈은 자격증명 묶음에서 파생된 캐시 키로 토큰을 저장하여
불필요한 인증 호출을 줄입니다.

캐시 전략:
- MemoryStore: 메모리 기반 - 프로세스 내 재사용
- FileStore: 파일 기반 (~/.cognito-token/cache.json) - CLI 반복 실행 시 재사용

Note:
    이 모듈은 Lazy Import 패턴을 사용합니다.
"""

__all__ = [
    "Store",
    "MemoryStore",
    "FileStore",
    "KEY_SEPARATOR",
    "make_cache_key",
    "hash_key",
    "fingerprint",
    "default_cache_path",
]

_IMPORT_MAPPING = {
    "Store": (".cache", "Store"),
    "MemoryStore": (".cache", "MemoryStore"),
    "FileStore": (".cache", "FileStore"),
    "KEY_SEPARATOR": (".cache", "KEY_SEPARATOR"),
    "make_cache_key": (".cache", "make_cache_key"),
    "hash_key": (".cache", "hash_key"),
    "fingerprint": (".cache", "fingerprint"),
    "default_cache_path": (".cache", "default_cache_path"),
}


def __getattr__(name: str):
    """Lazy import - 실제 사용 시점에만 모듈 로드"""
    if name in _IMPORT_MAPPING:
        module_name, attr_name = _IMPORT_MAPPING[name]
        import importlib

        module = importlib.import_module(module_name, __name__)
        return getattr(module, attr_name)

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
