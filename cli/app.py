"""
cli/app.py - 메인 CLI 엔트리포인트

Click 기반의 CLI 애플리케이션 진입점입니다.

명령어 구조:
    ct --version            # 버전 표시
    ct token [옵션]         # 토큰 발급 (캐시 재사용)
    ct decode TOKEN         # 토큰 header/payload 확인
    ct cache list           # 캐시 항목 상태 확인
    ct cache clear          # 캐시 파일 삭제

    예시:
    ct token -u user@example.com -r ap-northeast-2 \\
        --client-id 1example23456789 --user-pool-id ap-northeast-2_AbCdEfGhI
    ct token ... --token-type id

종료 코드:
    token 명령은 인증 실패 시에도 에러 메시지를 출력하고 0으로 종료합니다.
    필수 값 누락, 잘못된 설정은 1로 종료합니다.

Usage:
    $ ct token --help
    $ python -m cli.app token --help
"""

import logging
import sys
import time
from datetime import datetime, timezone

import click
from click import Context

from core.auth.template import TEMPLATE_ARGS, run, validate_arguments
from core.config import Settings, get_version, load_settings
from core.exceptions import CTError, format_error_for_user

# WARNING 레벨로 설정하여 INFO 로그가 토큰 출력에 섞이지 않도록 함
logging.basicConfig(
    level=logging.WARNING,
    format="%(asctime)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

VERSION = get_version()

# --token-type 선택지 (템플릿 인자 정의와 동일)
TOKEN_TYPE_CHOICES = next(arg.choices for arg in TEMPLATE_ARGS if arg.display_name == "TokenType")

STORE_FILE = "file"
STORE_MEMORY = "memory"


def _get_settings(ctx: Context) -> Settings:
    return ctx.obj["settings"]


def _build_resolver(settings: Settings, store_kind: str, cache_path: str | None):
    """설정에 맞는 TokenResolver 생성"""
    from core.auth.cache import FileStore, MemoryStore
    from core.auth.provider import CognitoSRPAuthenticator
    from core.auth.resolver import TokenResolver

    if store_kind == STORE_MEMORY:
        store = MemoryStore()
    else:
        store = FileStore(cache_path or settings.cache_path)

    authenticator = CognitoSRPAuthenticator(
        max_attempts=settings.max_attempts,
        connect_timeout=settings.connect_timeout,
        read_timeout=settings.read_timeout,
    )
    return TokenResolver(store, authenticator, error_ttl_seconds=settings.error_ttl_seconds)


def _format_epoch(value) -> str:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return "-"
    return datetime.fromtimestamp(value, tz=timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")


@click.group()
@click.version_option(VERSION, prog_name="ct")
@click.option("-v", "--verbose", is_flag=True, help="디버그 로그 출력")
@click.pass_context
def cli(ctx: Context, verbose: bool) -> None:
    """CT - AWS Cognito Token CLI

    Cognito User Pool 토큰을 발급받아 만료될 때까지 캐시합니다.
    """
    from cli.ui import print_error

    try:
        settings = load_settings()
    except CTError as e:
        print_error(format_error_for_user(e))
        raise SystemExit(1) from e

    logging.getLogger().setLevel(logging.DEBUG if verbose else settings.log_level)

    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings


# =============================================================================
# token
# =============================================================================


@cli.command("token")
@click.option("-u", "--username", envvar="CT_USERNAME", default="", help="Cognito 사용자 이름")
@click.option("-p", "--password", envvar="CT_PASSWORD", default="", help="비밀번호 (생략 시 입력 프롬프트)")
@click.option("-r", "--region", envvar="CT_REGION", default="", help="User Pool 리전")
@click.option("--client-id", envvar="CT_CLIENT_ID", default="", help="App Client ID")
@click.option("--user-pool-id", envvar="CT_USER_POOL_ID", default="", help="User Pool ID")
@click.option(
    "-t",
    "--token-type",
    type=click.Choice(TOKEN_TYPE_CHOICES),
    default=TOKEN_TYPE_CHOICES[0],
    show_default=True,
    help="발급할 토큰 종류",
)
@click.option("--client-secret", envvar="CT_CLIENT_SECRET", default=None, help="App Client Secret (옵션)")
@click.option(
    "--store",
    "store_kind",
    type=click.Choice([STORE_FILE, STORE_MEMORY]),
    default=STORE_FILE,
    show_default=True,
    help="캐시 저장소 (memory는 프로세스 종료 시 사라짐)",
)
@click.option("--cache-path", default=None, help="캐시 파일 경로")
@click.pass_context
def token_command(
    ctx: Context,
    username: str,
    password: str,
    region: str,
    client_id: str,
    user_pool_id: str,
    token_type: str,
    client_secret: str | None,
    store_kind: str,
    cache_path: str | None,
) -> None:
    """토큰 발급

    유효한 캐시가 있으면 재사용하고, 없으면 SRP 인증 후 저장합니다.
    인증 실패 시 에러 메시지를 출력합니다 (60초간 같은 결과를 캐시).
    """
    from cli.ui import print_error

    if not password and sys.stdin.isatty():
        password = click.prompt("Password", hide_input=True, default="", show_default=False)

    values = {
        "Username": username,
        "Password": password,
        "Region": region,
        "ClientId": client_id,
        "UserPoolId": user_pool_id,
        "TokenType": token_type,
        "ClientSecret": client_secret,
    }

    missing = validate_arguments(values)
    if missing:
        for name in missing:
            print_error(f"{name}: {missing[name]}")
        raise SystemExit(1)

    resolver = _build_resolver(_get_settings(ctx), store_kind, cache_path)
    try:
        value = run(resolver, **values)
    except CTError as e:
        print_error(format_error_for_user(e))
        raise SystemExit(1) from e
    finally:
        resolver.authenticator.close()

    click.echo(value)


# =============================================================================
# decode
# =============================================================================


@cli.command("decode")
@click.argument("token")
def decode_command(token: str) -> None:
    """토큰 header/payload 출력 (서명 검증 없음)"""
    from cli.ui import print_error, print_json, print_rule, print_success, print_warning
    from core.auth.token import decode, decode_header, get_error_claim, is_valid
    from core.auth.types import DecodeError

    try:
        header = decode_header(token)
        payload = decode(token)
    except DecodeError as e:
        print_error(str(e))
        raise SystemExit(1) from e

    print_rule("Header")
    print_json(header)
    print_rule("Payload")
    print_json(payload)

    error = get_error_claim(payload)
    if error is not None:
        print_warning(f"에러 토큰입니다: {error}")

    if is_valid(payload, time.time()):
        print_success(f"유효한 토큰 (만료: {_format_epoch(payload.get('exp'))})")
    else:
        print_warning(f"만료되었거나 아직 유효하지 않은 토큰 (만료: {_format_epoch(payload.get('exp'))})")


# =============================================================================
# cache
# =============================================================================


@cli.group("cache")
def cache_cmd():
    """캐시 파일 관리

    \b
    ct cache list     캐시 항목 상태 확인
    ct cache clear    캐시 파일 삭제
    """
    pass


@cache_cmd.command("list")
@click.option("--cache-path", default=None, help="캐시 파일 경로")
@click.pass_context
def cache_list(ctx: Context, cache_path: str | None) -> None:
    """캐시 항목 목록

    파일에는 해시된 키만 저장되므로 키 앞 12자리만 표시합니다.
    """
    from cli.ui import print_info, print_table
    from core.auth.cache import FileStore
    from core.auth.token import decode, get_error_claim, is_valid
    from core.auth.types import DecodeError

    store = FileStore(cache_path or _get_settings(ctx).cache_path)
    entries = store.items()

    if not entries:
        print_info(f"캐시가 비어 있습니다: {store.cache_path}")
        return

    now = time.time()
    rows = []
    for stored_key, token in sorted(entries.items()):
        try:
            payload = decode(token)
        except DecodeError:
            rows.append([stored_key[:12], "[red]invalid[/red]", "-"])
            continue

        if not is_valid(payload, now):
            status = "[dim]expired[/dim]"
        elif get_error_claim(payload) is not None:
            status = "[yellow]error[/yellow]"
        else:
            status = "[green]ok[/green]"
        rows.append([stored_key[:12], status, _format_epoch(payload.get("exp"))])

    print_table(f"캐시 항목 ({store.cache_path})", ["키", "상태", "만료"], rows)


@cache_cmd.command("clear")
@click.option("--cache-path", default=None, help="캐시 파일 경로")
@click.option("-y", "--yes", is_flag=True, help="확인 없이 삭제")
@click.pass_context
def cache_clear(ctx: Context, cache_path: str | None, yes: bool) -> None:
    """캐시 파일 삭제"""
    from cli.ui import console, print_error, print_success
    from core.auth.cache import FileStore

    store = FileStore(cache_path or _get_settings(ctx).cache_path)
    count = len(store)

    if not yes and not click.confirm(f"캐시 항목 {count}개를 삭제하시겠습니까?", default=False):
        console.print("[dim]취소되었습니다.[/dim]")
        return

    try:
        store.clear()
    except OSError as e:
        print_error(f"캐시 삭제 실패: {e}")
        raise SystemExit(1) from e

    print_success(f"캐시 항목 {count}개를 삭제했습니다.")


if __name__ == "__main__":
    cli()
