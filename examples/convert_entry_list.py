"""Example: Convert a PDF start list to CSV and TXT.

Usage:
    python examples/convert_entry_list.py start_list.pdf [output_dir] [config.yaml]
"""

import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from entrylist_converter import (
    ConversionSession,
    Document,
    Done,
    EntryExtractor,
    ExportFormat,
    ExtractionConfig,
    Failed,
)

# Load environment variables
load_dotenv()


def main(argv: list[str]) -> int:
    if len(argv) < 2:
        print(__doc__)
        return 2

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    pdf_path = Path(argv[1])
    output_dir = Path(argv[2]) if len(argv) > 2 else Path("output")
    config = ExtractionConfig.from_yaml(Path(argv[3])) if len(argv) > 3 else ExtractionConfig()

    extractor = EntryExtractor(
        api_key=os.getenv("GEMINI_API_KEY"),
        default_config=config,
    )
    session = ConversionSession(extractor)

    print("=" * 60)
    print(f"Converting {pdf_path.name}")
    print("=" * 60)

    state = session.select(Document.from_path(pdf_path))
    if isinstance(state, Failed):
        print(session.status_message)
        return 1

    state = session.process()
    print(session.status_message)

    if not isinstance(state, Done) or not state.entries:
        return 1

    for entry in state.entries[:5]:
        print(f"  {entry.rider:<30} {entry.horse_name:<25} {entry.height}")

    for fmt in ExportFormat:
        path = session.export(fmt).write(output_dir)
        print(f"Saved {path}")

    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
