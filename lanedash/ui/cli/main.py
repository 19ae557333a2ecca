from __future__ import annotations

import argparse

from lanedash.ui.cli import commands
from simulator import POLICIES


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="LaneDash")
    subparsers = parser.add_subparsers(dest="command", required=True)

    common_parent = argparse.ArgumentParser(add_help=False)
    common_parent.add_argument("--fps", type=int, default=None)
    common_parent.add_argument("--seed", type=int, default=None)

    sub = subparsers.add_parser("play", parents=[common_parent], help="Play in a pygame window")
    sub.set_defaults(func=commands.cmd_play)

    sub = subparsers.add_parser("simulate", parents=[common_parent], help="Run headless games with scripted policies")
    sub.add_argument("--policy", choices=sorted(POLICIES), action="append", default=None)
    sub.add_argument("--runs", type=int, default=None)
    sub.add_argument("--workers", type=int, default=None)
    sub.add_argument("--max-frames", type=int, default=None)
    sub.set_defaults(func=commands.cmd_simulate)

    sub = subparsers.add_parser("serve", parents=[common_parent], help="Serve the web API")
    sub.add_argument("--host", default=None)
    sub.add_argument("--port", type=int, default=None)
    sub.set_defaults(func=commands.cmd_serve)

    sub = subparsers.add_parser("report", parents=[common_parent], help="Print the saved simulation summary")
    sub.set_defaults(func=commands.cmd_report)

    sub = subparsers.add_parser("doctor", parents=[common_parent], help="Check environment/dependencies")
    sub.set_defaults(func=commands.cmd_doctor)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()
