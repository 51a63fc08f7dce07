"""Import Medicines — load the source CSV into the medicines table.

Usage:
    python -m scripts.import_medicines data/medicines.csv [--batch-size 1000] [--keep-existing]

Invariants:
    - Existing rows are deleted first unless --keep-existing
    - Rows are inserted in batches, one commit per batch
    - Row parsing (defaults for blank strength, bad unit_size / price) lives in
      medcatalog.core.medicine_rows
"""

import argparse
import asyncio
import csv
import logging
import sys
from pathlib import Path
from typing import Iterator

from sqlalchemy import delete, insert

from medcatalog.config import get_settings
from medcatalog.core.medicine_rows import parse_medicine_row
from medcatalog.db.base import Base
from medcatalog.db.session import create_session_factory
from medcatalog.infrastructure.observability import setup_logging
from medcatalog.models.medicine import Medicine

logger = logging.getLogger("scripts.import_medicines")

DEFAULT_BATCH_SIZE = 1000


def read_rows(path: Path) -> Iterator[dict]:
    with path.open(newline="", encoding="utf-8-sig") as fh:
        for row in csv.DictReader(fh):
            yield parse_medicine_row(row)


def batched(rows: Iterator[dict], size: int) -> Iterator[list[dict]]:
    batch: list[dict] = []
    for row in rows:
        batch.append(row)
        if len(batch) >= size:
            yield batch
            batch = []
    if batch:
        yield batch


async def import_medicines(
    csv_path: Path,
    database_url: str,
    batch_size: int = DEFAULT_BATCH_SIZE,
    keep_existing: bool = False,
) -> int:
    """Import the CSV and return the number of inserted rows."""
    engine, session_factory = create_session_factory(database_url)
    inserted = 0
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        async with session_factory() as db:
            if not keep_existing:
                await db.execute(delete(Medicine))
                await db.commit()
                logger.info("Cleared existing medicines")
            for number, batch in enumerate(batched(read_rows(csv_path), batch_size), 1):
                await db.execute(insert(Medicine), batch)
                await db.commit()
                inserted += len(batch)
                logger.info(f"Imported batch {number} ({inserted} rows so far)")
    finally:
        await engine.dispose()
    return inserted


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Import medicines from CSV")
    parser.add_argument("csv_path", type=Path)
    parser.add_argument("--batch-size", type=int, default=DEFAULT_BATCH_SIZE)
    parser.add_argument(
        "--keep-existing", action="store_true",
        help="append instead of replacing the current catalog",
    )
    parser.add_argument("--database-url", default=None)
    args = parser.parse_args(argv)

    settings = get_settings()
    setup_logging(settings.log_level, "text")
    if not args.csv_path.is_file():
        logger.error(f"CSV not found: {args.csv_path}")
        return 1
    if args.batch_size < 1:
        parser.error("--batch-size must be >= 1")

    count = asyncio.run(import_medicines(
        args.csv_path,
        args.database_url or settings.database_url,
        batch_size=args.batch_size,
        keep_existing=args.keep_existing,
    ))
    logger.info(f"Import completed: {count} medicines")
    return 0


if __name__ == "__main__":
    sys.exit(main())
