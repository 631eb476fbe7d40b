"""Upstream freshness check.

Compares the first few pages of the GhanaLII act listing against the ids in
the local corpus and reports acts that exist upstream but not locally. Each
page request has a hard wall-clock deadline; any HTTP or network failure
aborts the whole check with UpdateCheckError.
"""
from __future__ import annotations
import logging
import sqlite3
import threading
from pathlib import Path
from typing import List, Union

import requests  # type: ignore[import-untyped]

from ghana_law import config
from ghana_law.parsing.act_index import parse_act_index
from ghana_law.storage.db import connect
from .schemas import ActIndexEntry, UpdateHit

logger = logging.getLogger(__name__)


class UpdateCheckError(RuntimeError):
    """The update check could not be completed (database, network or HTTP error)."""


def index_page_url(page: int) -> str:
    base = f"{config.BASE_URL}/gh/legislation/act/"
    return base if page == 0 else f"{base}?page={page}"


def _read_page(url: str, timeout: float, outcome: dict, cancelled: threading.Event) -> None:
    try:
        with requests.get(
            url,
            headers={'User-Agent': config.USER_AGENT, 'Accept': 'text/html'},
            timeout=timeout,
            stream=True,
        ) as response:
            if not response.ok:
                outcome['status'] = response.status_code
                return
            chunks = []
            for chunk in response.iter_content(chunk_size=8192):
                if cancelled.is_set():
                    return
                chunks.append(chunk)
            outcome['text'] = b''.join(chunks).decode(response.encoding or 'utf-8', errors='replace')
    except requests.exceptions.RequestException as e:
        outcome['error'] = e


def fetch_index_page(page: int, timeout: float = config.UPDATE_CHECK_TIMEOUT) -> str:
    """Fetch one listing page, giving up once ``timeout`` seconds have passed.

    The deadline covers the whole exchange (connect, headers and body). The
    read runs on a daemon thread so a server that trickles its body cannot
    hold the caller past the deadline.
    """
    url = index_page_url(page)
    outcome: dict = {}
    cancelled = threading.Event()
    worker = threading.Thread(
        target=_read_page, args=(url, timeout, outcome, cancelled), name=f"update-check-{page}", daemon=True
    )
    worker.start()
    worker.join(timeout)
    if worker.is_alive():
        cancelled.set()
        raise UpdateCheckError(f"Page {page} not received within {timeout}s")
    if 'error' in outcome:
        e = outcome['error']
        raise UpdateCheckError(f"Request for page {page} failed: {e}") from e
    if 'status' in outcome:
        raise UpdateCheckError(f"HTTP {outcome['status']} on page {page}")
    if 'text' not in outcome:
        raise UpdateCheckError(f"No body received for page {page}")
    return outcome['text']


def fetch_recent_entries(page_limit: int = config.UPDATE_CHECK_PAGES,
                         timeout: float = config.UPDATE_CHECK_TIMEOUT) -> List[ActIndexEntry]:
    entries: List[ActIndexEntry] = []
    for page in range(page_limit):
        parsed = parse_act_index(fetch_index_page(page, timeout=timeout))
        entries.extend(parsed.entries)
        if not parsed.has_next_page:
            break
    return entries


def local_document_ids(db_path: Union[str, Path]) -> set[str]:
    try:
        conn = connect(db_path, readonly=True)
    except FileNotFoundError as e:
        raise UpdateCheckError(str(e)) from e
    try:
        return {row['id'] for row in conn.execute("SELECT id FROM legal_documents")}
    except sqlite3.Error as e:
        raise UpdateCheckError(f"Could not read local documents: {e}") from e
    finally:
        conn.close()


def check_for_updates(db_path: Union[str, Path] = config.CORPUS_DB_PATH,
                      page_limit: int = config.UPDATE_CHECK_PAGES,
                      timeout: float = config.UPDATE_CHECK_TIMEOUT) -> List[UpdateHit]:
    local = local_document_ids(db_path)
    recent = fetch_recent_entries(page_limit, timeout)
    logger.info(f"Checked {len(recent)} upstream entries from up to {page_limit} page(s)")
    return [
        UpdateHit(document_id=e.document_id, title=e.title, year=e.year, act_number=e.act_number)
        for e in recent
        if e.document_id not in local
    ]


__all__ = ['UpdateCheckError', 'check_for_updates', 'fetch_index_page', 'fetch_recent_entries', 'index_page_url']
