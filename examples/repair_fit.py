#!/usr/bin/env python3
"""
Example script demonstrating how to use the fitrepair library.

This script shows how to:
1. Decode a FIT file exported from eBike Flow
2. Repair its records, pauses and summaries
3. Inspect the rebuilt session and write the result
"""

import sys
from pathlib import Path

# Add src to path if running without installation
src_path = Path(__file__).parent.parent / "src"
if src_path.exists():
    sys.path.insert(0, str(src_path))

from fitrepair import MessageKind, repair_messages
from fitrepair.codec import decode_fit_file, write_fit_file
from fitrepair.exceptions import FitRepairError


def main():
    """Run example FIT file repair."""
    data_dir = Path(__file__).parent.parent / "data" / "samples"

    if not data_dir.exists():
        print(f"Error: Data directory not found: {data_dir}")
        return 1

    fit_files = list(data_dir.glob("*.fit"))
    if not fit_files:
        print(f"No FIT files found in {data_dir}")
        return 1

    fit_file = fit_files[0]
    print(f"Repairing: {fit_file.name}")
    print("=" * 60)

    try:
        messages = repair_messages(decode_fit_file(fit_file), total_energy=500)
    except FitRepairError as exc:
        print(f"❌ Could not repair {fit_file.name}: {exc}")
        return 1

    session = next(m for m in messages if m.kind is MessageKind.SESSION)
    laps = [m for m in messages if m.kind is MessageKind.LAP]
    print("\n📊 Session Summary:")
    print(f"   Sport: {session.get('sport')}")
    print(f"   Elapsed: {session.get('total_elapsed_time')} s")
    print(f"   Timer: {session.get('total_timer_time')} s")
    print(f"   Calories: {session.get('total_calories')}")
    print(f"   Laps: {len(laps)}")

    output = write_fit_file(messages, data_dir / f"repaired-{fit_file.name}")
    print(f"\n✅ Written: {output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
