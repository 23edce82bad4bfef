#!/usr/bin/env python3
"""
Example: Basic DRO analysis

Shows how to use the DRO analyzer to inspect a capture before converting it.
"""

import sys

sys.path.insert(0, "..")

from droconv.analysis import DROAnalyzer


def main():
    analyzer = DROAnalyzer(rate=700)
    analysis = analyzer.analyze_file(sys.argv[1] if len(sys.argv) > 1 else "song.dro")

    # Basic info
    print(f"Version: {analysis.version}")
    print(f"Length: {analysis.length_ms} ms (decoded {analysis.duration_seconds:.2f} s)")
    print(f"Register writes: {analysis.event_count}")
    print(f"IMF ticks at {analysis.rate} Hz: {analysis.imf_ticks}")
    print(f"Multiple chips: {analysis.multiple_chips}")
    print()

    # Registers
    print("Most written registers:")
    for register, count in analysis.top_registers:
        print(f"  0x{register:02X}: {count}")

    # First few writes
    print()
    print("First writes:")
    for event in analyzer.dro.events[:8]:
        print(f"  {event}")


if __name__ == "__main__":
    main()
