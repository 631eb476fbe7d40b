"""Two-phase GhanaLII ingestion.

Phase 1 (discovery) walks the paginated act listing and caches the index as
JSON. Phase 2 (content) fetches each act page, parses it and writes one seed
file per act. Phase 2 is incremental: acts with an existing seed are skipped,
and acts that upstream reports as gone (404 or moved) get a stub seed so they
are not retried on the next run.
"""
from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Callable, Iterator, List, Optional, Union

from ghana_law import config
from ghana_law.parsing.act_index import dedupe_entries, parse_act_index
from ghana_law.parsing.act_parser import parse_act_content
from ghana_law.scraper.fetcher import FetchError, FetchResult, fetch_act_content, fetch_act_index
from .schemas import ActIndexEntry, IngestSummary, ParsedAct, act_document_id

logger = logging.getLogger(__name__)

PROGRESS_EVERY = 50
GONE_STATUSES = {404, 301, 302}


class SeedStore:
    """One JSON file per act under `root`, named <year>_<act_number>.json."""

    def __init__(self, root: Union[str, Path] = config.SEED_DIR) -> None:
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)

    def path_for(self, year: int, act_number: int) -> Path:
        return self.root / f"{year}_{act_number}.json"

    def has(self, entry: ActIndexEntry) -> bool:
        return self.path_for(entry.year, entry.act_number).exists()

    def write(self, act: ParsedAct) -> Path:
        path = self.path_for(act.year, act.act_number)
        path.write_text(act.model_dump_json(indent=2), encoding='utf-8')
        return path

    def iter_seeds(self) -> Iterator[ParsedAct]:
        for path in sorted(self.root.glob('*.json')):
            if path.name.startswith(('.', '_')):
                continue
            yield ParsedAct.model_validate_json(path.read_text(encoding='utf-8'))


def stub_record(entry: ActIndexEntry) -> ParsedAct:
    return ParsedAct(
        id=act_document_id(entry.act_number, entry.year),
        title=entry.title,
        short_name='',
        act_number=entry.act_number,
        year=entry.year,
        status='in_force',
        issued_date=f"{entry.year}-01-01",
        url=entry.url,
    )


def save_index(entries: List[ActIndexEntry], path: Union[str, Path] = config.INDEX_PATH) -> None:
    os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump([e.model_dump() for e in entries], f, indent=2, ensure_ascii=False)


def load_index(path: Union[str, Path] = config.INDEX_PATH) -> List[ActIndexEntry]:
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)
    return [ActIndexEntry(**item) for item in data]


def discover_acts(fetch: Callable[[int], FetchResult] = fetch_act_index,
                  max_pages: int = config.DISCOVERY_PAGE_LIMIT,
                  index_path: Optional[Union[str, Path]] = config.INDEX_PATH) -> List[ActIndexEntry]:
    logger.info("Phase 1: discovering Ghana Acts of Parliament from GhanaLII")
    collected: List[ActIndexEntry] = []
    page = 0
    while page < max_pages:
        result = fetch(page)
        if result.status != 200:
            logger.info(f"Index page {page}: HTTP {result.status}, stopping discovery")
            break
        parsed = parse_act_index(result.body)
        collected.extend(parsed.entries)
        logger.info(f"Index page {page}: {len(parsed.entries)} entries")
        page += 1
        if not parsed.has_next_page:
            break
    else:
        logger.warning(f"Hit page limit of {max_pages}, stopping discovery")

    entries = dedupe_entries(collected)
    logger.info(f"Discovered {len(entries)} unique acts (from {len(collected)} entries, {page} pages)")
    if index_path:
        save_index(entries, index_path)
        logger.info(f"Index saved to {index_path}")
    return entries


def fetch_and_parse_acts(entries: List[ActIndexEntry], limit: Optional[int] = None,
                         store: Optional[SeedStore] = None,
                         fetch: Callable[[str], FetchResult] = fetch_act_content) -> IngestSummary:
    store = store or SeedStore()
    todo = entries[:limit] if limit else entries
    logger.info(f"Phase 2: fetching content for {len(todo)} acts")
    summary = IngestSummary()

    for entry in todo:
        if store.has(entry):
            summary.skipped += 1
        else:
            try:
                result = fetch(entry.url)
                if result.status == 200:
                    act = parse_act_content(result.body, entry.year, entry.act_number, entry.title)
                    store.write(act)
                    summary.provisions += len(act.provisions)
                elif result.status in GONE_STATUSES:
                    store.write(stub_record(entry))
                    summary.failed += 1
                else:
                    logger.error(f"HTTP {result.status} for {entry.year}/{entry.act_number}")
                    summary.failed += 1
            except (FetchError, ValueError) as e:
                logger.error(f"Failed {entry.year}/{entry.act_number}: {e}")
                summary.failed += 1

        summary.processed += 1
        if summary.processed % PROGRESS_EVERY == 0:
            logger.info(
                f"Progress: {summary.processed}/{len(todo)} ({summary.skipped} skipped, "
                f"{summary.failed} failed, {summary.provisions} provisions)"
            )

    logger.info(
        f"Phase 2 complete: processed={summary.processed} skipped={summary.skipped} "
        f"failed={summary.failed} provisions={summary.provisions}"
    )
    return summary


def run_ingest(limit: Optional[int] = None, skip_discovery: bool = False) -> IngestSummary:
    if skip_discovery and os.path.exists(config.INDEX_PATH):
        entries = load_index(config.INDEX_PATH)
        logger.info(f"Using cached act index from {config.INDEX_PATH} ({len(entries)} acts)")
    else:
        entries = discover_acts()
    return fetch_and_parse_acts(entries, limit=limit)


__all__ = [
    'SeedStore', 'stub_record', 'discover_acts', 'fetch_and_parse_acts', 'run_ingest',
    'save_index', 'load_index',
]
