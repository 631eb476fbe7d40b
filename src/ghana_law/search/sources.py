"""Corpus provenance and coverage. Counts are best-effort: a missing table reads as 0."""
from __future__ import annotations
import logging
import sqlite3
from typing import Any, Dict

from ghana_law import config

logger = logging.getLogger(__name__)

COUNTED_TABLES = ('legal_documents', 'legal_provisions', 'definitions', 'intl_documents', 'intl_references')


def safe_count(conn: sqlite3.Connection, table: str) -> int:
    if table not in COUNTED_TABLES:
        raise ValueError(f"Not a countable table: {table}")
    try:
        row = conn.execute(f"SELECT COUNT(*) AS count FROM {table}").fetchone()
    except sqlite3.Error as e:
        logger.warning(f"Count of {table} unavailable: {e}")
        return 0
    return int(row['count']) if row else 0


def metadata_value(conn: sqlite3.Connection, key: str) -> str:
    try:
        row = conn.execute("SELECT value FROM db_metadata WHERE key = ?", (key,)).fetchone()
    except sqlite3.Error as e:
        logger.warning(f"db_metadata unavailable: {e}")
        return 'unknown'
    return row['value'] if row else 'unknown'


def list_sources(conn: sqlite3.Connection) -> Dict[str, Any]:
    documents = safe_count(conn, 'legal_documents')
    return {
        'jurisdiction': 'Ghana (GH)',
        'sources': [
            {
                'name': 'GhanaLII',
                'authority': 'African Legal Information Institute (AfricanLII)',
                'url': 'https://ghalii.org',
                'license': 'Free Access (AfricanLII open access principles)',
                'coverage': 'Ghana Acts of Parliament as published on GhanaLII.',
                'languages': ['en'],
            },
        ],
        'database': {
            'tier': metadata_value(conn, 'tier'),
            'schema_version': metadata_value(conn, 'schema_version'),
            'built_at': metadata_value(conn, 'built_at'),
            'document_count': documents,
            'provision_count': safe_count(conn, 'legal_provisions'),
            'intl_document_count': safe_count(conn, 'intl_documents'),
        },
        'limitations': [
            f"Covers {documents:,} Ghanaian Acts of Parliament; subsidiary legislation is not included.",
            'Historical legislation before GhanaLII digitisation may be incomplete.',
            'International cross-references are auto-extracted from statute text.',
            'Always verify against official Ghana Gazette publications when legal certainty is required.',
        ],
    }


def about(conn: sqlite3.Connection, version: str) -> Dict[str, Any]:
    return {
        'server': {'name': 'Ghana Law Corpus', 'version': version},
        'dataset': {
            'built': metadata_value(conn, 'built_at'),
            'builder': metadata_value(conn, 'builder'),
            'jurisdiction': 'Ghana (GH)',
            'source': config.SOURCE_NAME,
            'licence': config.LICENCE,
            'counts': {table: safe_count(conn, table) for table in COUNTED_TABLES},
        },
        'security': {'access_model': 'read-only'},
    }


__all__ = ['list_sources', 'about', 'safe_count', 'metadata_value']
