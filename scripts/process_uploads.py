"""Re-run the upload hooks over files that are already stored.

Usage: python scripts/process_uploads.py <path> [<path> ...]

Directories are walked recursively. Every image gets its orientation fixed
and is recompressed, exactly as a fresh upload would be.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Iterator

from upload_handler.config.settings import get_settings
from upload_handler.imgproc.errors import PersistFailed
from upload_handler.imgproc.probe import detect_mime_type
from upload_handler.monitoring.logging import configure_logging
from upload_handler.services.uploads import UploadedFile, UploadHandler

logger = logging.getLogger("process_uploads")


def iter_files(paths: list[Path]) -> Iterator[Path]:
    for path in paths:
        if path.is_dir():
            yield from sorted(p for p in path.rglob("*") if p.is_file())
        elif path.is_file():
            yield path


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("paths", nargs="+", type=Path)
    args = parser.parse_args()

    settings = get_settings()
    configure_logging(settings)
    handler = UploadHandler(settings)

    processed = failed = 0
    for path in iter_files(args.paths):
        mime_type = detect_mime_type(path)
        if mime_type is None:
            continue
        try:
            handler.handle_upload(UploadedFile(file=str(path), url="", type=mime_type))
        except PersistFailed as exc:
            logger.error("%s", exc)
            failed += 1
            continue
        processed += 1

    logger.info("Processed %s file(s), %s failed", processed, failed)
    return 1 if failed else 0


if __name__ == "__main__":
    raise SystemExit(main())
