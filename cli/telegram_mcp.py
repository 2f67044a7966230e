"""telegram-mcp CLI — validate config, log in, list tools, serve, query audit logs."""

from __future__ import annotations

import argparse
import asyncio
import getpass
import json
import sys
from pathlib import Path

# Ensure project root is importable when running as script
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))


def cmd_validate(args: argparse.Namespace) -> None:
    """Validate a telegram-mcp.yaml config."""
    from runtime.config_loader import load_config

    try:
        config = load_config(args.config)
    except FileNotFoundError:
        print(f"Error: config not found: {args.config}", file=sys.stderr)
        sys.exit(1)
    except Exception as exc:
        print(f"Error: invalid config: {exc}", file=sys.stderr)
        sys.exit(1)

    tg = config.telegram
    print(f"Config OK: {config.app.name} v{config.app.version}")
    print(f"  API ID:        {tg.api_id}")
    print(f"  Database dir:  {tg.database_directory}")
    print(f"  Files dir:     {tg.files_directory}")
    print(f"  tdjson:        {tg.tdjson_path or '(auto)'}")
    print(f"  Audit path:    {config.audit.path if config.audit.enabled else '(disabled)'}")


async def _login(config_path: str | None) -> None:
    from contracts.messaging import AuthorizationState
    from runtime.config_loader import load_config
    from runtime.telegram.client import TdlibTelegramClient

    config = load_config(config_path)
    client = TdlibTelegramClient(config.telegram)
    await client.initialize()
    try:
        state = await client.wait_for_authorization_state()
        while state != AuthorizationState.READY:
            if state == AuthorizationState.WAITING_PHONE:
                await client.set_phone_number(input("Phone number (international format): ").strip())
            elif state == AuthorizationState.WAITING_CODE:
                await client.set_authentication_code(input("Login code: ").strip())
            elif state == AuthorizationState.WAITING_PASSWORD:
                await client.set_password(getpass.getpass("Two-step verification password: "))
            elif state == AuthorizationState.CLOSED:
                raise RuntimeError("TDLib closed the session during login")
            state = await client.wait_for_authorization_state(
                exclude=(AuthorizationState.UNKNOWN, AuthorizationState.WAITING_PARAMS, state)
            )
        print("Logged in.")
        print(await client.get_me())
    finally:
        await client.close()


def cmd_login(args: argparse.Namespace) -> None:
    """Authorize the TDLib session interactively."""
    try:
        asyncio.run(_login(args.config))
    except Exception as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)


def cmd_serve(args: argparse.Namespace) -> None:
    """Serve MCP over stdio."""
    import os

    if args.config:
        os.environ["TELEGRAM_MCP_CONFIG"] = args.config

    from runtime.mcp_server import main as serve_main

    serve_main()


def cmd_tools(args: argparse.Namespace) -> None:
    """List the built-in tool catalog."""
    from contracts.config import TelegramConfig
    from runtime.telegram.client import TdlibTelegramClient
    from runtime.tools.catalog import all_tools
    from runtime.tools.registry import ToolRegistry

    # Descriptors only; the client is never initialized.
    registry = ToolRegistry()
    registry.register_all(all_tools(TdlibTelegramClient(TelegramConfig(api_id=0, api_hash=""))))

    if args.openai:
        print(json.dumps(registry.get_openai_definitions(), indent=2))
        return

    for descriptor in sorted(registry.descriptors(), key=lambda d: d.name):
        required = ", ".join(descriptor.input_schema["required"]) or "-"
        print(f"{descriptor.name:32s}  required: {required}")
        print(f"    {descriptor.description}")
    print(f"\n{len(registry)} tools")


def cmd_logs(args: argparse.Namespace) -> None:
    """Query audit logs."""
    from contracts.audit import AuditEvent
    from runtime.audit.query import query_by_event, query_by_request, query_by_tool, tail

    log_path = args.log_path

    if not Path(log_path).exists():
        print(f"No audit log found at {log_path}", file=sys.stderr)
        sys.exit(1)

    if args.request_id:
        entries = query_by_request(log_path, args.request_id)
    elif args.event:
        try:
            event = AuditEvent(args.event)
        except ValueError:
            valid = ", ".join(e.value for e in AuditEvent)
            print(f"Unknown event type: {args.event}", file=sys.stderr)
            print(f"Valid events: {valid}", file=sys.stderr)
            sys.exit(1)
        entries = query_by_event(log_path, event, limit=args.limit)
    elif args.tool:
        entries = query_by_tool(log_path, args.tool, limit=args.limit)
    else:
        entries = tail(log_path, n=args.limit)

    if not entries:
        print("No matching audit entries.")
        return

    for entry in entries:
        record = json.loads(entry.model_dump_json())
        if args.json:
            print(json.dumps(record))
        else:
            ts = record["ts"][:19]
            event = record["event"]
            rid = record["request_id"][:8]
            detail = json.dumps(record.get("detail", {}))
            print(f"{ts}  [{event:12s}]  {rid}  {detail}")


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="telegram-mcp",
        description="Telegram MCP server CLI",
    )
    sub = parser.add_subparsers(dest="command")

    # validate
    p_val = sub.add_parser("validate", help="Validate a telegram-mcp.yaml config")
    p_val.add_argument(
        "config", nargs="?", default="telegram-mcp.yaml", help="Path to config"
    )
    p_val.set_defaults(func=cmd_validate)

    # login
    p_login = sub.add_parser("login", help="Authorize the Telegram session interactively")
    p_login.add_argument("config", nargs="?", default=None, help="Path to config")
    p_login.set_defaults(func=cmd_login)

    # serve
    p_serve = sub.add_parser("serve", help="Serve MCP over stdio")
    p_serve.add_argument("config", nargs="?", default=None, help="Path to config")
    p_serve.set_defaults(func=cmd_serve)

    # tools
    p_tools = sub.add_parser("tools", help="List the built-in tools")
    p_tools.add_argument("--openai", action="store_true", help="OpenAI function-calling format")
    p_tools.set_defaults(func=cmd_tools)

    # logs
    p_logs = sub.add_parser("logs", help="Query audit logs")
    p_logs.add_argument("log_path", help="Path to audit JSONL file")
    p_logs.add_argument("--request-id", "-r", help="Filter by request ID")
    p_logs.add_argument("--event", "-e", help="Filter by event type")
    p_logs.add_argument("--tool", "-t", help="Filter by tool name")
    p_logs.add_argument("--limit", "-n", type=int, default=20, help="Max entries")
    p_logs.add_argument("--json", action="store_true", help="Output raw JSON")
    p_logs.set_defaults(func=cmd_logs)

    args = parser.parse_args()
    if not args.command:
        parser.print_help()
        sys.exit(1)

    args.func(args)


if __name__ == "__main__":
    main()
