"""Read-only statute lookups over the corpus.

All functions take an open sqlite3 connection and return plain dicts ready
for JSON. Unknown documents or provisions come back as empty results with an
`error` or `warnings` entry; nothing here raises on bad ids.
"""
from __future__ import annotations
import logging
import re
import sqlite3
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

SEARCH_DEFAULT_LIMIT = 10
SEARCH_MAX_LIMIT = 50
STANCE_DEFAULT_LIMIT = 5
STANCE_MAX_LIMIT = 20
ALL_PROVISIONS_CAP = 200


def _clamp(value: Any, default: int, upper: int) -> int:
    try:
        n = int(value)
    except (TypeError, ValueError):
        return default
    return max(1, min(upper, n))


def resolve_document_id(conn: sqlite3.Connection, value: Optional[str]) -> Optional[str]:
    """Accept an id ("act-843-2012") or a title fragment ("Data Protection Act")."""
    value = (value or '').strip()
    if not value:
        return None
    row = conn.execute("SELECT id FROM legal_documents WHERE id = ?", (value,)).fetchone()
    if row is None:
        row = conn.execute(
            "SELECT id FROM legal_documents WHERE title LIKE ? ORDER BY year DESC, id LIMIT 1",
            (f"%{value}%",),
        ).fetchone()
    return row['id'] if row else None


def quote_fts_query(query: str) -> str:
    """Turn free text into a safe FTS5 query: every word becomes a quoted token."""
    tokens = re.findall(r"\w+", query or '', flags=re.UNICODE)
    return ' '.join(f'"{t}"' for t in tokens)


def _run_search(conn: sqlite3.Connection, fts_query: str, document_id: Optional[str],
                status: Optional[str], limit: int) -> List[Dict[str, Any]]:
    sql = """
        SELECT p.document_id, d.title AS document_title, d.status, p.provision_ref,
               p.part, p.chapter, p.section, p.title,
               snippet(provisions_fts, 0, '>>>', '<<<', '...', 32) AS snippet,
               bm25(provisions_fts) AS relevance
        FROM provisions_fts
        JOIN legal_provisions p ON p.id = provisions_fts.rowid
        JOIN legal_documents d ON d.id = p.document_id
        WHERE provisions_fts MATCH ?
    """
    params: List[Any] = [fts_query]
    if document_id:
        sql += " AND p.document_id = ?"
        params.append(document_id)
    if status:
        sql += " AND d.status = ?"
        params.append(status)
    sql += " ORDER BY relevance LIMIT ?"
    params.append(limit)
    return [dict(r) for r in conn.execute(sql, params).fetchall()]


def search_legislation(conn: sqlite3.Connection, query: str, document_id: Optional[str] = None,
                       status: Optional[str] = None, limit: Any = SEARCH_DEFAULT_LIMIT) -> Dict[str, Any]:
    limit = _clamp(limit, SEARCH_DEFAULT_LIMIT, SEARCH_MAX_LIMIT)
    out: Dict[str, Any] = {'query': query, 'results': [], 'warnings': []}
    if not (query or '').strip():
        out['warnings'].append('Empty query')
        return out

    resolved = None
    if document_id:
        resolved = resolve_document_id(conn, document_id)
        if resolved is None:
            out['warnings'].append(f'Document "{document_id}" not found in database')
            return out

    try:
        out['results'] = _run_search(conn, query, resolved, status, limit)
    except sqlite3.OperationalError as e:
        # raw user text is not always valid FTS5 syntax (stray quotes, bare operators)
        fallback = quote_fts_query(query)
        logger.debug(f"FTS query {query!r} rejected ({e}); retrying as {fallback!r}")
        if fallback:
            out['results'] = _run_search(conn, fallback, resolved, status, limit)
    return out


def _document_row(conn: sqlite3.Connection, document_id: str) -> Optional[sqlite3.Row]:
    return conn.execute(
        "SELECT id, title, short_name, act_number, year, status, issued_date, in_force_date, url "
        "FROM legal_documents WHERE id = ?",
        (document_id,),
    ).fetchone()


def get_provision(conn: sqlite3.Connection, document_id: str, section: Optional[str] = None,
                  provision_ref: Optional[str] = None) -> Dict[str, Any]:
    resolved = resolve_document_id(conn, document_id)
    if resolved is None:
        return {'error': f'Document "{document_id}" not found in database', 'provisions': []}
    doc = _document_row(conn, resolved)
    out: Dict[str, Any] = {
        'document_id': doc['id'],
        'document_title': doc['title'],
        'status': doc['status'],
        'url': doc['url'],
        'provisions': [],
    }
    cols = "provision_ref, part, chapter, section, title, content"

    if provision_ref or section:
        if provision_ref:
            rows = conn.execute(
                f"SELECT {cols} FROM legal_provisions WHERE document_id = ? AND provision_ref = ?",
                (resolved, provision_ref.strip()),
            ).fetchall()
        else:
            sec = section.strip()
            rows = conn.execute(
                f"SELECT {cols} FROM legal_provisions WHERE document_id = ? AND (provision_ref = ? OR section = ?) "
                "ORDER BY id",
                (resolved, f"s{sec}", sec),
            ).fetchall()
        out['provisions'] = [dict(r) for r in rows]
        if not rows:
            out['error'] = f"Provision {provision_ref or section} not found in {doc['title']}"
        return out

    rows = conn.execute(
        f"SELECT {cols} FROM legal_provisions WHERE document_id = ? ORDER BY id LIMIT ?",
        (resolved, ALL_PROVISIONS_CAP + 1),
    ).fetchall()
    out['provisions'] = [dict(r) for r in rows[:ALL_PROVISIONS_CAP]]
    out['truncated'] = len(rows) > ALL_PROVISIONS_CAP
    return out


def check_currency(conn: sqlite3.Connection, document_id: str,
                   provision_ref: Optional[str] = None) -> Dict[str, Any]:
    resolved = resolve_document_id(conn, document_id)
    if resolved is None:
        return {
            'document_id': document_id,
            'is_current': False,
            'status': 'not_found',
            'warnings': [f'Document "{document_id}" not found in database'],
        }
    doc = _document_row(conn, resolved)
    warnings: List[str] = []
    if doc['status'] == 'repealed':
        warnings.append('This statute has been repealed')
    elif doc['status'] == 'amended':
        warnings.append('This statute has been amended; check the amending instrument')

    out: Dict[str, Any] = {
        'document_id': doc['id'],
        'title': doc['title'],
        'status': doc['status'],
        'is_current': doc['status'] != 'repealed',
        'issued_date': doc['issued_date'],
        'in_force_date': doc['in_force_date'],
        'warnings': warnings,
    }
    if provision_ref:
        row = conn.execute(
            "SELECT 1 FROM legal_provisions WHERE document_id = ? AND provision_ref = ?",
            (resolved, provision_ref.strip()),
        ).fetchone()
        out['provision_ref'] = provision_ref
        out['provision_exists'] = row is not None
        if row is None:
            warnings.append(f"Provision {provision_ref} not found in {doc['title']}")
    return out


def build_legal_stance(conn: sqlite3.Connection, query: str, document_id: Optional[str] = None,
                       limit: Any = STANCE_DEFAULT_LIMIT) -> Dict[str, Any]:
    """Search provisions, then attach the international instruments behind the matched acts."""
    limit = _clamp(limit, STANCE_DEFAULT_LIMIT, STANCE_MAX_LIMIT)
    found = search_legislation(conn, query, document_id=document_id, limit=limit)
    doc_ids = list(dict.fromkeys(r['document_id'] for r in found['results']))

    basis: List[Dict[str, Any]] = []
    if doc_ids:
        placeholders = ','.join('?' for _ in doc_ids)
        rows = conn.execute(
            f"""
            SELECT r.document_id, i.id AS instrument_id, i.title, i.short_name, i.community,
                   GROUP_CONCAT(DISTINCT r.reference_type) AS reference_types,
                   MAX(r.is_primary_implementation) AS is_primary
            FROM intl_references r
            JOIN intl_documents i ON i.id = r.intl_document_id
            WHERE r.document_id IN ({placeholders})
            GROUP BY r.document_id, i.id
            ORDER BY r.document_id, i.year
            LIMIT ?
            """,
            (*doc_ids, limit),
        ).fetchall()
        for r in rows:
            item = dict(r)
            item['reference_types'] = (item['reference_types'] or '').split(',') if item['reference_types'] else []
            item['is_primary'] = bool(item['is_primary'])
            basis.append(item)

    return {
        'query': query,
        'provisions': found['results'],
        'intl_basis': basis,
        'total_citations': len(found['results']) + len(basis),
        'warnings': found['warnings'],
    }


__all__ = [
    'resolve_document_id', 'quote_fts_query', 'search_legislation', 'get_provision',
    'check_currency', 'build_legal_stance',
]
