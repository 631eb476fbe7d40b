"""Corpus build: seed JSON files -> SQLite database.

Steps:
 1. Drop any existing database file and create the schema.
 2. Load every seed in one transaction: documents, de-duplicated provisions,
    international references extracted from provision text, definitions.
 3. Write build metadata, switch the journal back to DELETE, ANALYZE, VACUUM.

A failure while loading rolls back every seed; uniqueness conflicts on single
references or definitions are skipped and the build carries on.
"""
from __future__ import annotations
import logging
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator, List, Set, Tuple, Union

from ghana_law import config
from ghana_law.parsing.intl_references import extract_intl_references
from ghana_law.storage.db import connect, create_schema, remove_database
from .dedupe import dedupe_provisions
from .schemas import BuildSummary, ExtractedReference, ParsedAct

logger = logging.getLogger(__name__)

BUILDER = 'ghana_law.ingest.corpus'


class PrimaryImplementationTracker:
    """Hands out at most one primary-implementation flag per (document, instrument).

    Only `implements` references are eligible; the first one seen in load
    order for a pair gets the flag. A slot is claimed only once the reference
    row has been stored.
    """

    def __init__(self) -> None:
        self._claimed: Set[Tuple[str, str]] = set()

    def is_available(self, document_id: str, ref: ExtractedReference) -> bool:
        return ref.relationship == 'implements' and (document_id, ref.instrument_id) not in self._claimed

    def claim(self, document_id: str, ref: ExtractedReference) -> None:
        self._claimed.add((document_id, ref.instrument_id))


def iter_seed_files(seed_dir: Union[str, Path]) -> Iterator[Path]:
    root = Path(seed_dir)
    if not root.is_dir():
        return
    for path in sorted(root.glob('*.json')):
        if path.name.startswith(('.', '_')):
            continue
        yield path


def eur_lex_url(ref: ExtractedReference) -> str | None:
    if ref.community in ('AU', 'ECOWAS'):
        return None
    kind = 'reg' if ref.instrument_type == 'regulation' else 'dir'
    return f"https://eur-lex.europa.eu/eli/{kind}/{ref.year}/{ref.number}/oj"


def _short_name(ref: ExtractedReference) -> str:
    return f"{'Regulation' if ref.instrument_type == 'regulation' else 'Directive'} {ref.year}/{ref.number}"


def _insert_document(conn: sqlite3.Connection, act: ParsedAct) -> None:
    conn.execute(
        """
        INSERT INTO legal_documents (id, type, title, short_name, act_number, year, status, issued_date, in_force_date, url)
        VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        """,
        (act.id, act.type or 'act', act.title, act.short_name or None, act.act_number, act.year,
         act.status or 'in_force', act.issued_date, act.in_force_date, act.url),
    )


def _load_seed(conn: sqlite3.Connection, act: ParsedAct, tracker: PrimaryImplementationTracker,
               summary: BuildSummary) -> None:
    _insert_document(conn, act)
    summary.documents += 1

    if not act.provisions:
        summary.empty_documents += 1
        logger.info(f"{act.id}: no content (0 provisions)")
    else:
        deduped, stats = dedupe_provisions(act.provisions)
        summary.duplicate_refs += stats.duplicate_refs
        summary.conflicting_duplicates += stats.conflicting_duplicates
        if stats.duplicate_refs:
            logger.warning(
                f"{stats.duplicate_refs} duplicate refs in {act.id} "
                f"({stats.conflicting_duplicates} with different text)"
            )

        for prov in deduped:
            cur = conn.execute(
                """
                INSERT INTO legal_provisions (document_id, provision_ref, part, chapter, section, title, content)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (act.id, prov.provision_ref, prov.part, prov.chapter, prov.section, prov.title, prov.content),
            )
            summary.provisions += 1
            provision_id = cur.lastrowid

            refs = extract_intl_references(prov.content)
            if not refs:
                continue
            source_id = f"{act.id}:{prov.provision_ref}"
            verified_at = datetime.now(timezone.utc).isoformat()
            for ref in refs:
                short = _short_name(ref)
                cur = conn.execute(
                    """
                    INSERT OR IGNORE INTO intl_documents
                      (id, type, year, number, community, title, short_name, url_eur_lex, description)
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (ref.instrument_id, ref.instrument_type, ref.year, ref.number, ref.community,
                     ref.title or short, short, eur_lex_url(ref), 'Auto-extracted from Ghana statute text'),
                )
                if cur.rowcount > 0:
                    summary.intl_documents += 1

                is_primary = tracker.is_available(act.id, ref)
                try:
                    conn.execute(
                        """
                        INSERT INTO intl_references
                          (source_type, source_id, document_id, provision_id, intl_document_id, intl_article,
                           reference_type, reference_context, full_citation, is_primary_implementation,
                           implementation_status, last_verified)
                        VALUES ('provision', ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                        """,
                        (source_id, act.id, provision_id, ref.instrument_id, ref.article, ref.relationship,
                         ref.context, ref.full_citation, int(is_primary),
                         'complete' if is_primary else 'unknown', verified_at),
                    )
                    summary.intl_references += 1
                    if is_primary:
                        tracker.claim(act.id, ref)
                except sqlite3.IntegrityError as e:
                    logger.debug(f"Skipping duplicate reference {source_id} -> {ref.instrument_id}: {e}")

    for d in act.definitions:
        try:
            conn.execute(
                "INSERT INTO definitions (document_id, term, definition, source_provision) VALUES (?, ?, ?, ?)",
                (act.id, d.term, d.definition, d.source_provision),
            )
            summary.definitions += 1
        except sqlite3.IntegrityError:
            logger.debug(f"Skipping duplicate definition '{d.term}' in {act.id}")


def _write_metadata(conn: sqlite3.Connection) -> None:
    rows: List[Tuple[str, str]] = [
        ('tier', 'free'),
        ('schema_version', config.SCHEMA_VERSION),
        ('built_at', datetime.now(timezone.utc).isoformat()),
        ('builder', BUILDER),
        ('jurisdiction', config.JURISDICTION),
        ('source', config.SOURCE_NAME),
        ('licence', config.LICENCE),
    ]
    with conn:
        conn.executemany("INSERT INTO db_metadata (key, value) VALUES (?, ?)", rows)


def build_database(seed_dir: Union[str, Path] = config.SEED_DIR,
                   db_path: Union[str, Path] = config.CORPUS_DB_PATH) -> BuildSummary:
    remove_database(db_path)
    conn = connect(db_path)
    summary = BuildSummary()
    try:
        conn.execute("PRAGMA journal_mode = WAL")
        create_schema(conn)

        seed_files = list(iter_seed_files(seed_dir))
        if not seed_files:
            logger.warning(f"No seed files under {seed_dir}; database created with empty schema")
            conn.execute("PRAGMA journal_mode = DELETE")
            return summary

        tracker = PrimaryImplementationTracker()
        with conn:
            for path in seed_files:
                act = ParsedAct.model_validate_json(path.read_text(encoding='utf-8'))
                _load_seed(conn, act, tracker, summary)

        _write_metadata(conn)
        conn.execute("PRAGMA journal_mode = DELETE")
        conn.execute("ANALYZE")
        conn.execute("VACUUM")
    finally:
        conn.close()

    logger.info(
        f"Build complete: {summary.documents} documents, {summary.provisions} provisions, "
        f"{summary.definitions} definitions, {summary.intl_documents} intl documents, "
        f"{summary.intl_references} intl references"
    )
    if summary.empty_documents:
        logger.info(f"{summary.empty_documents} documents with no provisions (content unavailable)")
    if summary.duplicate_refs:
        logger.warning(
            f"Data quality: {summary.duplicate_refs} duplicate refs detected "
            f"({summary.conflicting_duplicates} with conflicting text)"
        )
    return summary


__all__ = ['PrimaryImplementationTracker', 'build_database', 'iter_seed_files', 'eur_lex_url']
