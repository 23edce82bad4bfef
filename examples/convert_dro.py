#!/usr/bin/env python3
"""
Example: Convert a DRO capture to IMF

Writes a type-0 file for Commander Keen and a tagged type-1 file
for Wolfenstein 3-D from the same capture.
"""

import logging
import sys

sys.path.insert(0, "..")

from pathlib import Path
from droconv import ConvertOptions, ImfFlavor
from droconv.converters import DROToIMFConverter


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

    dro_file = Path(sys.argv[1] if len(sys.argv) > 1 else "song.dro")

    # Type-0 at 560 Hz
    print("Converting to IMF type-0 (560 Hz)...")
    converter = DROToIMFConverter()
    output = converter.convert_and_save(dro_file, dro_file.with_suffix(".imf"))
    print(f"  Created: {output} ({output.stat().st_size} bytes, {converter.event_count} writes)")

    # Type-1 at 700 Hz with tags
    print("\nConverting to IMF type-1 (700 Hz)...")
    options = ConvertOptions(
        rate=700,
        flavor=ImfFlavor.TYPE_1,
        title=dro_file.stem,
        remarks="Converted from a DOSBox capture",
    )
    converter = DROToIMFConverter(options)
    output = converter.convert_and_save(dro_file, dro_file.with_suffix(".wlf"))
    print(f"  Created: {output} ({output.stat().st_size} bytes)")

    if converter.multiple_chips:
        print("\nNote: writes to the second OPL chip were dropped.")


if __name__ == "__main__":
    main()
