"""International instrument lookups (EU regulations/directives, AU and other conventions)."""
from __future__ import annotations
import sqlite3
from typing import Any, Dict, List, Optional, Sequence

from .legislation import _clamp, resolve_document_id


def _split(value: Optional[str]) -> List[str]:
    return [v for v in (value or '').split(',') if v]


def get_intl_basis(conn: sqlite3.Connection, document_id: str, include_articles: bool = False,
                   reference_types: Optional[Sequence[str]] = None) -> Dict[str, Any]:
    resolved = resolve_document_id(conn, document_id)
    if resolved is None:
        return {'error': f'Document "{document_id}" not found in database', 'instruments': []}

    sql = """
        SELECT i.id, i.type, i.year, i.number, i.community, i.title, i.short_name, i.url_eur_lex,
               GROUP_CONCAT(DISTINCT r.reference_type) AS reference_types,
               GROUP_CONCAT(DISTINCT r.intl_article) AS articles,
               MAX(r.is_primary_implementation) AS is_primary,
               COUNT(*) AS reference_count
        FROM intl_references r
        JOIN intl_documents i ON i.id = r.intl_document_id
        WHERE r.document_id = ?
    """
    params: List[Any] = [resolved]
    if reference_types:
        sql += f" AND r.reference_type IN ({','.join('?' for _ in reference_types)})"
        params.extend(reference_types)
    sql += " GROUP BY i.id ORDER BY i.year, i.id"

    instruments = []
    for row in conn.execute(sql, params).fetchall():
        item = dict(row)
        item['reference_types'] = _split(item['reference_types'])
        item['is_primary'] = bool(item['is_primary'])
        articles = _split(item.pop('articles'))
        if include_articles:
            item['articles'] = articles
        instruments.append(item)

    title = conn.execute("SELECT title FROM legal_documents WHERE id = ?", (resolved,)).fetchone()['title']
    return {'document_id': resolved, 'document_title': title, 'instruments': instruments}


def get_implementations(conn: sqlite3.Connection, instrument_id: str, primary_only: bool = False,
                        in_force_only: bool = False) -> Dict[str, Any]:
    instrument = conn.execute(
        "SELECT id, type, year, number, community, title, short_name, url_eur_lex FROM intl_documents WHERE id = ?",
        ((instrument_id or '').strip(),),
    ).fetchone()
    if instrument is None:
        return {'error': f'International document "{instrument_id}" not found in database', 'implementations': []}

    sql = """
        SELECT d.id AS document_id, d.title, d.short_name, d.act_number, d.year, d.status,
               MAX(r.is_primary_implementation) AS is_primary,
               GROUP_CONCAT(DISTINCT r.reference_type) AS reference_types,
               COUNT(*) AS reference_count
        FROM intl_references r
        JOIN legal_documents d ON d.id = r.document_id
        WHERE r.intl_document_id = ?
    """
    params: List[Any] = [instrument['id']]
    if in_force_only:
        sql += " AND d.status = 'in_force'"
    sql += " GROUP BY d.id"
    if primary_only:
        sql += " HAVING MAX(r.is_primary_implementation) = 1"
    sql += " ORDER BY d.year DESC, d.id"

    implementations = []
    for row in conn.execute(sql, params).fetchall():
        item = dict(row)
        item['is_primary'] = bool(item['is_primary'])
        item['reference_types'] = _split(item['reference_types'])
        item['implementation_status'] = 'complete' if item['is_primary'] else 'unknown'
        implementations.append(item)
    return {'instrument': dict(instrument), 'implementations': implementations}


def get_provision_intl_basis(conn: sqlite3.Connection, document_id: str, provision_ref: str) -> Dict[str, Any]:
    resolved = resolve_document_id(conn, document_id)
    if resolved is None:
        return {'error': f'Document "{document_id}" not found in database', 'references': []}
    prov = conn.execute(
        "SELECT id, provision_ref, title FROM legal_provisions WHERE document_id = ? AND provision_ref = ?",
        (resolved, (provision_ref or '').strip()),
    ).fetchone()
    if prov is None:
        return {
            'document_id': resolved,
            'error': f'Provision {provision_ref} not found in {resolved}',
            'references': [],
        }
    rows = conn.execute(
        """
        SELECT r.intl_document_id AS instrument_id, i.title, i.short_name, i.community,
               r.intl_article AS article, r.reference_type, r.reference_context, r.full_citation,
               r.is_primary_implementation AS is_primary
        FROM intl_references r
        JOIN intl_documents i ON i.id = r.intl_document_id
        WHERE r.document_id = ? AND r.provision_id = ?
        ORDER BY r.id
        """,
        (resolved, prov['id']),
    ).fetchall()
    refs = []
    for r in rows:
        item = dict(r)
        item['is_primary'] = bool(item['is_primary'])
        refs.append(item)
    return {
        'document_id': resolved,
        'provision_ref': prov['provision_ref'],
        'provision_title': prov['title'],
        'references': refs,
    }


def search_intl_instruments(conn: sqlite3.Connection, query: Optional[str] = None,
                            instrument_type: Optional[str] = None, year_from: Optional[int] = None,
                            year_to: Optional[int] = None, has_ghanaian_implementation: bool = False,
                            limit: Any = 20) -> Dict[str, Any]:
    """List instruments known to the corpus, most widely referenced first.

    Each hit carries how many Ghanaian statutes reference the instrument and
    how many of those implement it.
    """
    limit = _clamp(limit, 20, 100)
    sql = """
        SELECT i.id, i.type, i.year, i.number, i.community, i.title, i.short_name, i.url_eur_lex,
               COUNT(DISTINCT r.document_id) AS ghanaian_statute_count,
               COUNT(DISTINCT CASE WHEN r.reference_type = 'implements' THEN r.document_id END)
                 AS implementing_statute_count
        FROM intl_documents i
        LEFT JOIN intl_references r ON r.intl_document_id = i.id
        WHERE 1 = 1
    """
    params: List[Any] = []
    term = (query or '').strip()
    if term:
        like = f"%{term}%"
        sql += " AND (i.title LIKE ? OR i.short_name LIKE ? OR i.id LIKE ?)"
        params.extend([like, like, like])
    if instrument_type:
        sql += " AND i.type = ?"
        params.append(instrument_type)
    if year_from is not None:
        sql += " AND i.year >= ?"
        params.append(year_from)
    if year_to is not None:
        sql += " AND i.year <= ?"
        params.append(year_to)
    sql += " GROUP BY i.id"
    if has_ghanaian_implementation:
        sql += " HAVING implementing_statute_count > 0"
    sql += " ORDER BY ghanaian_statute_count DESC, i.year DESC, i.id LIMIT ?"
    params.append(limit)

    results = [dict(row) for row in conn.execute(sql, params).fetchall()]
    return {
        'query': term or None,
        'filters': {
            'type': instrument_type,
            'year_from': year_from,
            'year_to': year_to,
            'has_ghanaian_implementation': has_ghanaian_implementation,
        },
        'results': results,
        'total': len(results),
    }


# instrument id -> id of the instrument that replaced it
SUPERSEDED_INSTRUMENTS = {
    'directive:1995/46': 'regulation:2016/679',
}


def validate_intl_compliance(conn: sqlite3.Connection, document_id: str, provision_ref: Optional[str] = None,
                             instrument_id: Optional[str] = None) -> Dict[str, Any]:
    resolved = resolve_document_id(conn, document_id)
    if resolved is None:
        return {'error': f'Document "{document_id}" not found in database', 'instruments': []}
    doc = conn.execute("SELECT title, status FROM legal_documents WHERE id = ?", (resolved,)).fetchone()

    sql = """
        SELECT r.intl_document_id AS instrument_id, i.title, i.short_name, i.community,
               MAX(CASE WHEN r.reference_type = 'implements' THEN 1 ELSE 0 END) AS implemented,
               GROUP_CONCAT(DISTINCT r.intl_article) AS articles,
               COUNT(*) AS reference_count
        FROM intl_references r
        JOIN intl_documents i ON i.id = r.intl_document_id
        WHERE r.document_id = ?
    """
    params: List[Any] = [resolved]
    ref = (provision_ref or '').strip()
    if ref:
        prov = conn.execute(
            "SELECT id FROM legal_provisions WHERE document_id = ? AND provision_ref = ?", (resolved, ref)
        ).fetchone()
        if prov is None:
            return {
                'document_id': resolved,
                'error': f'Provision {ref} not found in {resolved}',
                'instruments': [],
            }
        sql += " AND r.provision_id = ?"
        params.append(prov['id'])
    if instrument_id:
        sql += " AND r.intl_document_id = ?"
        params.append(instrument_id.strip())
    sql += " GROUP BY r.intl_document_id ORDER BY i.year, i.id"

    warnings: List[str] = []
    if doc['status'] == 'repealed':
        warnings.append('This statute has been repealed')

    instruments = []
    for row in conn.execute(sql, params).fetchall():
        item = dict(row)
        item['articles'] = _split(item['articles'])
        item['status'] = 'implemented' if item.pop('implemented') else 'referenced'
        if item['status'] == 'referenced':
            warnings.append(f"No implementing provision found for {item['instrument_id']}")
        replacement = SUPERSEDED_INSTRUMENTS.get(item['instrument_id'])
        if replacement:
            warnings.append(f"{item['instrument_id']} has been superseded by {replacement}")
        instruments.append(item)

    implemented = sum(1 for i in instruments if i['status'] == 'implemented')
    if not instruments:
        status = 'not_applicable'
    elif implemented == len(instruments):
        status = 'compliant'
    elif implemented:
        status = 'partial'
    else:
        status = 'unclear'

    return {
        'document_id': resolved,
        'document_title': doc['title'],
        'provision_ref': ref or None,
        'compliance_status': status,
        'instruments': instruments,
        'warnings': warnings,
    }


__all__ = [
    'get_intl_basis', 'get_implementations', 'get_provision_intl_basis',
    'search_intl_instruments', 'validate_intl_compliance', 'SUPERSEDED_INSTRUMENTS',
]
