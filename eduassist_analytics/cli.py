# eduassist_analytics/cli.py
"""Command line entry point: ``eduassist-rollup``."""
import argparse
import asyncio
import json
import logging
import signal
import sys

from .core.exceptions import RollupException
from .core.logging import setup_logging
from .jobs import run_standalone_rollup
from .schemas.rollup_schemas import RollupRequest

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="eduassist-rollup",
        description="Aggregate grades, attendance and fees into class analytics snapshots",
    )
    parser.add_argument("--period", help="Explicit reporting period label")
    parser.add_argument("--term", help="Term recorded on the snapshots")
    parser.add_argument("--year", type=int, help="Year recorded on the snapshots")
    parser.add_argument("--school-id", dest="schoolId", help="Restrict to one school")
    parser.add_argument("--class-id", dest="classId", help="Restrict to one class")
    parser.add_argument("--debug", action="store_true", help="Print per-class detail")
    return parser


async def _run(request: RollupRequest) -> dict:
    cancel_event = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, cancel_event.set)
        except NotImplementedError:
            # Windows event loops have no signal handlers
            pass

    summary = await run_standalone_rollup(request, cancel_event=cancel_event)
    return summary.as_response(debug=request.debug)


def main(argv=None) -> int:
    setup_logging()
    args = build_parser().parse_args(argv)
    payload = {key: value for key, value in vars(args).items() if value is not None}

    try:
        request = RollupRequest.model_validate(payload)
        response = asyncio.run(_run(request))
    except RollupException as e:
        print(json.dumps({"error": e.message}))
        return 1
    except ValueError as e:
        print(json.dumps({"error": str(e)}))
        return 2

    print(json.dumps(response, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
