"""
Check GhanaLII for acts that are missing from the local corpus.

Exit codes:
  0 = no updates
  1 = updates found
  2 = check failed (missing database, network or parse error)
"""
import os
import sys
import argparse
import logging

SRC_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir, "src"))
if SRC_DIR not in sys.path:
    sys.path.insert(0, SRC_DIR)

from ghana_law import config  # noqa: E402
from ghana_law.ingest.update_checker import UpdateCheckError, check_for_updates  # noqa: E402

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger("check_updates")

MAX_LISTED = 20


def main() -> int:
    parser = argparse.ArgumentParser(description="Check GhanaLII for new acts")
    parser.add_argument("--db", type=str, default=config.CORPUS_DB_PATH, help="Local corpus database")
    parser.add_argument("--pages", type=int, default=config.UPDATE_CHECK_PAGES, help="Listing pages to check")
    args = parser.parse_args()

    try:
        hits = check_for_updates(args.db, page_limit=args.pages)
    except UpdateCheckError as e:
        logger.error(f"Update check failed: {e}")
        return 2

    logger.info(f"New acts: {len(hits)}")
    if not hits:
        logger.info("No recent upstream changes detected in the checked window.")
        return 0
    for hit in hits[:MAX_LISTED]:
        logger.info(f"  - {hit.document_id} ({hit.title})")
    return 1


if __name__ == "__main__":
    sys.exit(main())
