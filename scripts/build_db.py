"""
Build the SQLite corpus (data/database.db) from the seed JSON files in data/seed.
"""
import os
import sys
import argparse
import logging

SRC_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir, "src"))
if SRC_DIR not in sys.path:
    sys.path.insert(0, SRC_DIR)

from ghana_law import config  # noqa: E402
from ghana_law.ingest.corpus import build_database  # noqa: E402

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger("build_db")


def main():
    parser = argparse.ArgumentParser(description="Build the Ghana law corpus database")
    parser.add_argument("--seed-dir", type=str, default=config.SEED_DIR, help="Directory of seed JSON files")
    parser.add_argument("--out", type=str, default=config.CORPUS_DB_PATH, help="Output SQLite path")
    args = parser.parse_args()

    try:
        summary = build_database(args.seed_dir, args.out)
    except Exception as e:
        logger.error(f"Failed to build database: {e}")
        sys.exit(1)
    size_mb = os.path.getsize(args.out) / (1024 * 1024)
    logger.info(f"Output: {args.out} ({size_mb:.1f} MB) {summary.model_dump()}")


if __name__ == "__main__":
    main()
