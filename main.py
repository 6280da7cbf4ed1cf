import argparse
import asyncio
import json
import logging
import sys

import aiohttp

from config import get_settings
from core import AppState
from errors import ApiClientError
from version import __version__

log = logging.getLogger(__name__)


def _parse_params(pairs: list[str]) -> dict:
    params = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep:
            raise argparse.ArgumentTypeError(f"expected key=value, got {pair!r}")
        params[key] = value
    return params


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="erp-client", description="ERP backend client")
    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument("--api-url", help="override ERP_API_URL")
    sub = parser.add_subparsers(dest="command", required=True)

    login = sub.add_parser("login", help="sign in and store tokens")
    login.add_argument("username")
    login.add_argument("password")

    sub.add_parser("logout", help="sign out and forget tokens")
    sub.add_parser("whoami", help="show the signed-in user")

    req = sub.add_parser("request", help="send an authenticated request")
    req.add_argument("method")
    req.add_argument("path")
    req.add_argument("--json", dest="body", help="JSON request body")
    req.add_argument("--param", action="append", default=[], metavar="KEY=VALUE")
    return parser


async def run(args, state: AppState):
    if args.command == "login":
        return await state.session.login(args.username, args.password)
    if args.command == "logout":
        await state.session.logout()
        return {"success": True}
    if args.command == "whoami":
        if not state.is_authenticated:
            return None
        return await state.session.ensure_user()
    if args.command == "request":
        body = args.json_body
        return await state.api_client.request(
            args.method, args.path, params=args.params or None, json=body,
        )
    raise ValueError(f"unknown command {args.command!r}")


async def _main(args) -> int:
    settings = get_settings()
    if args.api_url:
        settings = settings.model_copy(update={"api_url": args.api_url})

    state = AppState(settings, on_logged_out=lambda: print("Session expired, please log in again.",
                                                             file=sys.stderr))
    try:
        result = await run(args, state)
    except (ApiClientError, aiohttp.ClientError, asyncio.TimeoutError) as e:
        log.debug("Command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        await state.close()

    if isinstance(result, bytes):
        sys.stdout.buffer.write(result)
    elif result is not None:
        print(json.dumps(result, ensure_ascii=False, indent=2))
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command == "request":
        try:
            args.params = _parse_params(args.param)
        except argparse.ArgumentTypeError as e:
            parser.error(str(e))
        try:
            args.json_body = json.loads(args.body) if args.body else None
        except json.JSONDecodeError as e:
            parser.error(f"--json is not valid JSON: {e}")
    logging.basicConfig(
        level=get_settings().log_level,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )
    return asyncio.run(_main(args))


if __name__ == "__main__":
    sys.exit(main())
