# cli/ui - 콘솔 출력 컴포넌트 (rich)
"""
콘솔 출력 모듈

CLI 전용 출력 헬퍼 (성공/에러 메시지, 테이블, JSON 등)
"""

# Direct imports (rich is commonly used, no lazy import needed)
from .console import (
    SYMBOL_ERROR,
    SYMBOL_INFO,
    SYMBOL_SUCCESS,
    SYMBOL_WARNING,
    console,
    get_console,
    print_error,
    print_info,
    print_json,
    print_rule,
    print_success,
    print_table,
    print_warning,
)

__all__ = [
    "SYMBOL_ERROR",
    "SYMBOL_INFO",
    "SYMBOL_SUCCESS",
    "SYMBOL_WARNING",
    "console",
    "get_console",
    "print_error",
    "print_info",
    "print_json",
    "print_rule",
    "print_success",
    "print_table",
    "print_warning",
]
