#!/usr/bin/env python3
"""Regenerate files-index.json for every indexed section of the content root."""

import sys
from pathlib import Path

from formation_catalog.config import INDEXED_SECTIONS, resolve_content_root
from formation_catalog.core.catalog.sources import generate_files_index


def run_generate(content_root: Path) -> int:
    """Write the index of each indexed section.

    Returns:
        int: Exit code (0 for success, non-zero for failure).
    """
    status = 0
    for section in sorted(INDEXED_SECTIONS):
        directory = content_root / section
        print(f"📦 Indexing {directory}...")
        try:
            files = generate_files_index(directory)
        except FileNotFoundError as e:
            print(f"❌ {e}")
            status = 1
            continue
        print(f"   {len(files)} files listed")

    if status == 0:
        print("✅ Index generation complete!")
    return status


if __name__ == "__main__":
    root = sys.argv[1] if len(sys.argv) > 1 else resolve_content_root()
    if root is None or root.startswith(("http://", "https://")):
        print("❌ Pass a local content directory as the first argument")
        sys.exit(1)
    sys.exit(run_generate(Path(root)))
