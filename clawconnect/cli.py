"""Command-line entry point.

    clawconnect chat [--host HOST] [--port PORT] [--secure] [--token T] [--password P]
    clawconnect proxy [PORT] [TARGET]

`chat` runs an interactive gateway session: lines typed on stdin are sent
as chat messages, completed replies and status changes are printed.
`proxy` runs the WebSocket-to-TCP bridge for remote viewers.
"""

from __future__ import annotations

import asyncio
import logging
import argparse
import contextlib
from collections.abc import Sequence

from .logging import configure_logging
from .proxy import run_proxy
from .helpers.urls import strip_host
from .telemetry import init_telemetry, shutdown_telemetry
from .gateway import ChatMessage, ConnectionConfig, GatewaySessionClient
from .session import ConnectionStatus, describe_status
from .config import (
    PROXY_TARGET,
    GATEWAY_AUTH_TOKEN,
    PROXY_LISTEN_HOST,
    PROXY_LISTEN_PORT,
    GATEWAY_DEFAULT_HOST,
    GATEWAY_AUTH_PASSWORD,
)

logger = logging.getLogger(__name__)

CHAT_COMMANDS = (
    "\nCommands:\n"
    "  /help      Show this message\n"
    "  /history   Print the transcript\n"
    "  /reload    Reload history from the gateway\n"
    "  /clear     Clear the local transcript\n"
    "  /status    Show connection status\n"
    "  /quit      Disconnect and exit\n"
)


class _InputClosed(Exception):
    pass


async def _ainput(prompt: str) -> str:
    loop = asyncio.get_running_loop()
    try:
        return await loop.run_in_executor(None, lambda: input(prompt))
    except (EOFError, KeyboardInterrupt) as exc:
        raise _InputClosed("stdin closed") from exc


def _print_message(message: ChatMessage) -> None:
    label = {"assistant": "agent", "system": "system", "user": "you"}[message.role]
    print(f"\n{label} > {message.content}\n", flush=True)


def _print_status(status: ConnectionStatus) -> None:
    print(f"[{describe_status(status)}]", flush=True)


async def _handle_command(command: str, client: GatewaySessionClient) -> bool:
    """Run a slash command; return True to exit."""
    cmd = command.strip().lower()
    if cmd in {"help", "?"}:
        print(CHAT_COMMANDS)
        return False
    if cmd == "history":
        for message in client.messages.value:
            _print_message(message)
        return False
    if cmd == "reload":
        await client.load_history()
        logger.info("Transcript has %d messages", len(client.messages))
        return False
    if cmd == "clear":
        client.clear_messages()
        return False
    if cmd in {"status", "info"}:
        logger.info(
            "status=%s session_key=%s reconnect_attempts=%d",
            client.status.value,
            client.session_key or "-",
            client.reconnect.attempts,
        )
        return False
    if cmd in {"quit", "exit", "stop"}:
        return True
    logger.warning("Unknown command '/%s'. Type /help for options.", command)
    return False


async def run_chat(config: ConnectionConfig) -> None:
    client = GatewaySessionClient()
    unsubscribe_status = client.connection_status.subscribe(_print_status)
    unsubscribe_messages = client.on_message.subscribe(_print_message)
    client.connect(config)
    print(CHAT_COMMANDS)
    try:
        while True:
            try:
                line = (await _ainput("you > ")).strip()
            except _InputClosed:
                break
            if not line:
                continue
            if line.startswith("/"):
                if await _handle_command(line[1:], client):
                    break
                continue
            await client.send_message(line)
            last = client.messages.value[-1] if len(client.messages) else None
            if last is not None and last.role == "system":
                _print_message(last)
    finally:
        unsubscribe_status()
        unsubscribe_messages()
        await client.aclose()


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="clawconnect", description="Gateway chat and remote viewer tools")
    sub = parser.add_subparsers(dest="command", required=True)

    chat = sub.add_parser("chat", help="interactive gateway chat session")
    chat.add_argument("--host", default=GATEWAY_DEFAULT_HOST, help=f"gateway host (default: {GATEWAY_DEFAULT_HOST})")
    chat.add_argument("--port", type=int, default=None, help="gateway port (default: 18789, or 8443 with --secure)")
    chat.add_argument("--secure", action="store_true", help="use wss://")
    chat.add_argument("--token", default=GATEWAY_AUTH_TOKEN, help="auth token (default env GATEWAY_AUTH_TOKEN)")
    chat.add_argument(
        "--password",
        default=GATEWAY_AUTH_PASSWORD,
        help="auth password (default env GATEWAY_AUTH_PASSWORD)",
    )

    proxy = sub.add_parser("proxy", help="WebSocket-to-TCP bridge for remote viewers")
    proxy.add_argument("port", nargs="?", type=int, default=PROXY_LISTEN_PORT, help="listen port")
    proxy.add_argument("target", nargs="?", default=PROXY_TARGET, help="VNC target host:port")
    proxy.add_argument("--listen-host", default=PROXY_LISTEN_HOST, help="listen address")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    configure_logging()
    init_telemetry()
    try:
        if args.command == "chat":
            try:
                config = ConnectionConfig.from_host(
                    strip_host(args.host),
                    args.port,
                    secure=args.secure,
                    auth_token=args.token,
                    auth_password=args.password,
                )
            except ValueError as exc:
                raise SystemExit(str(exc)) from exc
            asyncio.run(run_chat(config))
        else:
            with contextlib.suppress(KeyboardInterrupt):
                asyncio.run(run_proxy(args.listen_host, args.port, args.target))
    finally:
        shutdown_telemetry()
    return 0


__all__ = ["main", "run_chat"]
