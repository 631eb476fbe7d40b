"""
Fetch Ghana Acts of Parliament from GhanaLII and write one seed JSON per act.

Phase 1 discovers acts from the paginated listing (cached in data/source/act-index.json),
phase 2 fetches and parses each act. Re-running skips acts that already have a seed.

  python scripts/ingest.py                    # full run
  python scripts/ingest.py --limit 20         # first 20 acts
  python scripts/ingest.py --skip-discovery   # reuse the cached index
"""
import os
import sys
import argparse
import logging

SRC_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir, "src"))
if SRC_DIR not in sys.path:
    sys.path.insert(0, SRC_DIR)

from ghana_law.ingest.crawler import run_ingest  # noqa: E402

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger("ingest")


def main():
    parser = argparse.ArgumentParser(description="Ingest Ghana legislation from GhanaLII")
    parser.add_argument("--limit", type=int, default=None, help="Only process the first N acts")
    parser.add_argument("--skip-discovery", action="store_true", help="Reuse the cached act index if present")
    args = parser.parse_args()

    try:
        summary = run_ingest(limit=args.limit, skip_discovery=args.skip_discovery)
    except Exception as e:
        logger.error(f"Ingestion failed: {e}")
        sys.exit(1)
    logger.info(f"Ingestion complete: {summary.model_dump()}")


if __name__ == "__main__":
    main()
