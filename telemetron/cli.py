"""CLI for Telemetron."""

from __future__ import annotations

import argparse
import json
import sys

from .bootstrap import build_context
from .errors import SourceError


def _print(data):
    print(json.dumps(data, indent=2, ensure_ascii=False))


def build_parser():
    parser = argparse.ArgumentParser(description="Telemetron CLI")
    sub = parser.add_subparsers(dest="command", required=True)

    snapshot = sub.add_parser("snapshot", help="Print the current system state")
    snapshot.set_defaults(cmd="snapshot")

    serve = sub.add_parser("runserver", help="Run HTTP server")
    serve.add_argument("--host")
    serve.add_argument("--port", type=int)
    serve.set_defaults(cmd="runserver")

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    ctx = build_context()
    try:
        if args.command == "snapshot":
            try:
                state = ctx.service.get_system_state()
            except SourceError as exc:
                ctx.loggers["telemetron"].error("Snapshot failed: %s", exc)
                return 1
            _print(state.to_dict())
        elif args.command == "runserver":
            from .app import create_app

            app = create_app(context=ctx)
            app.run(
                host=args.host or ctx.config.server.host,
                port=args.port or ctx.config.server.port,
            )
    finally:
        ctx.shutdown()
    return 0


if __name__ == "__main__":
    sys.exit(main())
