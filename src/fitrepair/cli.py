"""
Command-line entry point: repair a FIT export and write the result.
"""

import argparse
import logging
import sys
from datetime import datetime, timezone
from typing import List

import pandas as pd
from dateutil import tz

from fitrepair.codec import decode_fit_file, write_fit_file
from fitrepair.constants import PAUSE_THRESHOLD_SECONDS
from fitrepair.exceptions import FitRepairError
from fitrepair.messages import Message, MessageKind
from fitrepair.pipeline import RepairConfig, repair_messages

__all__ = ["parse_arguments", "main_with_args", "main", "lap_table"]

DEFAULT_OUTPUT = "output.fit"
DEFAULT_TIMEZONE = "UTC"


def _non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid calories value: {value!r}") from exc
    if number < 0:
        raise argparse.ArgumentTypeError("calories must be a non-negative number")
    return number


def parse_arguments(args=None):
    """Parse command line arguments"""
    ap = argparse.ArgumentParser(
        prog="fitrepair",
        description="Repair the timing and lap summaries of a FIT file exported from eBike Flow.",
    )
    ap.add_argument("input", help="The FIT file exported from eBike Flow")
    ap.add_argument(
        "-o", "--output", default=DEFAULT_OUTPUT, help="The name of the output FIT file"
    )
    ap.add_argument(
        "-c",
        "--calories",
        type=_non_negative_int,
        default=None,
        help="The amount of calories to add to the workout",
    )
    ap.add_argument(
        "--pause-threshold",
        type=float,
        default=PAUSE_THRESHOLD_SECONDS,
        help="Seconds without records that count as a pause",
    )
    ap.add_argument(
        "--no-pause-laps", action="store_true", help="Do not write rest laps for pauses"
    )
    ap.add_argument("--tz", type=str, default=DEFAULT_TIMEZONE, help="Timezone for the lap table")
    ap.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return ap.parse_args(args)


def lap_table(messages: List[Message], tz_name: str = DEFAULT_TIMEZONE) -> pd.DataFrame:
    """Tabulate the lap messages of a repaired file with local start and end times."""
    local = tz.gettz(tz_name)

    def _local(ts):
        return datetime.fromtimestamp(ts, tz=timezone.utc).astimezone(local).strftime(
            "%Y-%m-%d %H:%M:%S"
        )

    rows = [
        {
            "lap": idx,
            "intensity": m.get("intensity"),
            "start_time": _local(m.get("start_time")),
            "end_time": _local(m.get("timestamp")),
            "elapsed_s": m.get("total_elapsed_time"),
            "timer_s": m.get("total_timer_time"),
            "calories": (
                round(m.get("total_calories"), 1) if m.get("total_calories") is not None else ""
            ),
        }
        for idx, m in enumerate(msg for msg in messages if msg.kind is MessageKind.LAP)
    ]
    return pd.DataFrame(rows)


def main_with_args(args):
    """Main function that takes parsed arguments"""
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    config = RepairConfig(
        pause_threshold=args.pause_threshold, emit_pause_laps=not args.no_pause_laps
    )
    try:
        messages = repair_messages(decode_fit_file(args.input), args.calories, config)
        output = write_fit_file(messages, args.output)
    except FitRepairError as exc:
        print(f"❌ Error converting file: {exc}", file=sys.stderr)
        return 1

    print(f"✅ Output file written to {output}!")
    print(lap_table(messages, args.tz).to_string(index=False))
    return 0


def main():
    """Main entry point for command line"""
    args = parse_arguments()
    return main_with_args(args)


if __name__ == "__main__":
    sys.exit(main())
