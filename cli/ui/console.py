"""
cli/ui/console.py - Rich 콘솔 유틸리티

일관된 콘솔 출력을 위한 함수들
"""

import json
import logging
import platform

from rich.console import Console
from rich.markup import escape
from rich.rule import Rule
from rich.table import Table

# botocore 노이즈 로그 제한
logging.getLogger("botocore.httpchecksum").setLevel(logging.WARNING)
logging.getLogger("botocore.credentials").setLevel(logging.WARNING)
logging.getLogger("botocore.loaders").setLevel(logging.WARNING)
logging.getLogger("botocore.session").setLevel(logging.WARNING)


def get_console() -> Console:
    """Rich Console 인스턴스를 생성하고 반환합니다."""
    is_windows = platform.system().lower() == "windows"

    return Console(
        color_system="auto",
        highlight=False,
        soft_wrap=True,
        markup=True,
        emoji=not is_windows,
    )


# 전역 콘솔 인스턴스
console = get_console()


# =============================================================================
# 표준 출력 스타일 (이모지 없이 Rich 스타일만 사용)
# =============================================================================

# 상태 심볼
SYMBOL_SUCCESS = "✓"  # 완료
SYMBOL_ERROR = "✗"  # 에러
SYMBOL_WARNING = "!"  # 경고
SYMBOL_INFO = "•"  # 정보


def print_success(message: str) -> None:
    """성공 메시지 출력 (초록색 체크마크)

    Args:
        message: 출력할 메시지
    """
    console.print(f"[green]{SYMBOL_SUCCESS} {escape(message)}[/green]")


def print_error(message: str) -> None:
    """에러 메시지 출력 (빨간색 X)

    Args:
        message: 출력할 메시지
    """
    console.print(f"[red]{SYMBOL_ERROR} {escape(message)}[/red]")


def print_warning(message: str) -> None:
    """경고 메시지 출력 (노란색 경고)

    Args:
        message: 출력할 메시지
    """
    console.print(f"[yellow]{SYMBOL_WARNING} {escape(message)}[/yellow]")


def print_info(message: str) -> None:
    """정보 메시지 출력 (파란색 정보)

    Args:
        message: 출력할 메시지
    """
    console.print(f"[blue]{SYMBOL_INFO} {escape(message)}[/blue]")


def print_table(
    title: str,
    columns: list[str],
    rows: list[list],
) -> None:
    """테이블 형식으로 데이터를 출력합니다.

    Args:
        title: 테이블 제목
        columns: 컬럼 헤더 리스트
        rows: 행 데이터 리스트
    """
    table = Table(title=title, show_header=True, header_style="bold magenta")

    for column in columns:
        table.add_column(column)

    for row in rows:
        table.add_row(*[str(cell) for cell in row])

    console.print(table)


def print_rule(title: str = "", style: str = "dim") -> None:
    """Rich Rule로 구분선 출력

    Args:
        title: 구분선 제목 (빈 문자열이면 제목 없는 구분선)
        style: 스타일 (기본: dim)
    """
    if title:
        console.print(Rule(title=title, style=style))
    else:
        console.print(Rule(style=style))


def print_json(data: dict) -> None:
    """JSON 형식으로 데이터 출력 (Rich syntax highlighting)

    Args:
        data: 출력할 데이터
    """
    json_str = json.dumps(data, ensure_ascii=False, indent=2, default=str)
    console.print_json(json_str)
