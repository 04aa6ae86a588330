#!/usr/bin/env python3
"""
Command-line client for the registros backend.

Tokens and the cached user persist in the client storage file between runs
(CLIENT_STORAGE_PATH, default ~/.registros/storage.json).

Examples:
  registros_cli.py login admin@servicio.com admin123
  registros_cli.py list --page 1 --page-size 20 --search ACC
  registros_cli.py export --format csv --output registros.csv
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

from app.client.context import ClientContext, build_client_context
from app.config import get_settings
from app.logging_config import configure_logging
from app.models.registro import RegistrosListParams

DEFAULT_STORAGE_PATH = "~/.registros/storage.json"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Registros de ajustes client")
    sub = parser.add_subparsers(dest="command", required=True)

    login = sub.add_parser("login", help="Authenticate and store tokens")
    login.add_argument("email")
    login.add_argument("password")

    sub.add_parser("logout", help="End the session and clear stored tokens")
    sub.add_parser("whoami", help="Show the current user")
    sub.add_parser("stats", help="Show backend statistics")

    list_cmd = sub.add_parser("list", help="List registros")
    list_cmd.add_argument("--page", type=int)
    list_cmd.add_argument("--page-size", type=int)
    list_cmd.add_argument("--search")

    export = sub.add_parser("export", help="Download an export file")
    export.add_argument("--format", choices=["csv", "excel"], default="csv")
    export.add_argument("--output", required=True)
    return parser


def _print_json(value: object) -> None:
    print(json.dumps(value, indent=2, ensure_ascii=False))


async def _run(args: argparse.Namespace, ctx: ClientContext) -> int:
    if args.command == "login":
        result = await ctx.session.login(args.email, args.password)
        if not result.success:
            print(f"login failed: {result.error}", file=sys.stderr)
            return 1
        user = ctx.session.state.user
        print(f"logged in as {user.email} ({user.role})" if user else "logged in")
        return 0

    if args.command == "logout":
        await ctx.session.logout()
        print("logged out")
        return 0

    state = await ctx.session.init()
    if not state.is_authenticated:
        print("not authenticated; run `login` first", file=sys.stderr)
        return 1

    if args.command == "whoami":
        _print_json(state.user.model_dump() if state.user else None)
        return 0

    if args.command == "stats":
        response = await ctx.registros.get_stats()
    elif args.command == "list":
        params = RegistrosListParams(page=args.page, page_size=args.page_size, search=args.search)
        response = await ctx.registros.get_registros(params)
    else:
        export = await ctx.registros.export_registros(args.format)
        if not export.success or export.data is None:
            print(f"export failed: {export.error}", file=sys.stderr)
            return 1
        Path(args.output).write_bytes(export.data)
        print(f"wrote {len(export.data)} bytes to {args.output}")
        return 0

    if not response.success:
        print(f"{args.command} failed: {response.error}", file=sys.stderr)
        return 1
    _print_json(response.data)
    return 0


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(settings.log_level)
    if not settings.client_storage_path:
        settings = settings.model_copy(update={"client_storage_path": DEFAULT_STORAGE_PATH})
    ctx = build_client_context(settings)
    return asyncio.run(_run(args, ctx))


if __name__ == "__main__":
    try:
        raise SystemExit(main())
    except Exception as exc:  # noqa: BLE001
        print(f"registros_cli failed: {exc}", file=sys.stderr)
        raise SystemExit(1)
