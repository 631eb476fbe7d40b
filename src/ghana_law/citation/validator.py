"""Citation validation against the corpus.

A citation is only reported as existing when both the act and the cited
section are present in the database. Store errors never escape: they are
logged and surface as a warning on the result.
"""
from __future__ import annotations
import logging
import sqlite3
from typing import Optional

from .models import ParsedCitation, ValidationResult
from .parser import parse_citation

logger = logging.getLogger(__name__)

# Some GhanaLII sections were stored with doubled parentheses, e.g. "1((2))"
_NORMALIZED_SECTION = "REPLACE(REPLACE(section, '((', '('), '))', ')')"

PROVISION_EXISTS_SQL = f"""
SELECT 1
FROM legal_provisions
WHERE document_id = ?
  AND (
    provision_ref = ?
    OR section = ?
    OR {_NORMALIZED_SECTION} = ?
    OR (
      ? = 1
      AND (provision_ref LIKE ? OR {_NORMALIZED_SECTION} LIKE ?)
    )
  )
LIMIT 1
"""


def find_document(conn: sqlite3.Connection, parsed: ParsedCitation) -> Optional[sqlite3.Row]:
    row = None
    if parsed.act_number:
        row = conn.execute(
            "SELECT id, title, status FROM legal_documents WHERE act_number = ? AND year = ? LIMIT 1",
            (parsed.act_number, parsed.year),
        ).fetchone()
    if row is None and parsed.title:
        row = conn.execute(
            "SELECT id, title, status FROM legal_documents WHERE title LIKE ? LIMIT 1",
            (f"%{parsed.title}%{parsed.year if parsed.year is not None else ''}%",),
        ).fetchone()
    return row


def provision_exists(conn: sqlite3.Connection, document_id: str, parsed: ParsedCitation) -> bool:
    pinpoint = parsed.pinpoint
    provision_ref = f"s{pinpoint}"
    allow_prefix = parsed.subsection is None and parsed.paragraph is None
    row = conn.execute(
        PROVISION_EXISTS_SQL,
        (document_id, provision_ref, pinpoint, pinpoint, 1 if allow_prefix else 0,
         f"{provision_ref}(%", f"{pinpoint}(%"),
    ).fetchone()
    return row is not None


def validate_citation(conn: sqlite3.Connection, citation: str) -> ValidationResult:
    parsed = parse_citation(citation)
    if not parsed.valid:
        return ValidationResult(citation=parsed, warnings=[parsed.error or 'Invalid citation format'])

    try:
        doc = find_document(conn, parsed)
        if doc is None:
            identifier = (
                f"Act {parsed.act_number} ({parsed.year})" if parsed.act_number
                else f"{parsed.title} {parsed.year}"
            )
            return ValidationResult(citation=parsed, warnings=[f'Document "{identifier}" not found in database'])

        result = ValidationResult(
            citation=parsed,
            document_exists=True,
            document_id=doc['id'],
            document_title=doc['title'],
            status=doc['status'],
        )
        if doc['status'] == 'repealed':
            result.warnings.append('This statute has been repealed')

        if parsed.section:
            result.provision_exists = provision_exists(conn, doc['id'], parsed)
            if not result.provision_exists:
                result.warnings.append(f"Section {parsed.pinpoint} not found in {doc['title']}")
        return result
    except sqlite3.Error as e:
        logger.error(f"Citation lookup failed for {citation!r}: {e}")
        return ValidationResult(citation=parsed, warnings=[f"Corpus lookup failed: {e}"])


__all__ = ['validate_citation', 'find_document', 'provision_exists']
