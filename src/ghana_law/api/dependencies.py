import logging
import sqlite3
from typing import Any, Optional, Tuple, Type, TypeVar

from flask import current_app, g, jsonify, request
from pydantic import BaseModel, ValidationError
from werkzeug.exceptions import BadRequest

from ghana_law.api import config
from ghana_law.storage.db import connect

logger = logging.getLogger("api")

M = TypeVar("M", bound=BaseModel)


def get_db() -> Optional[sqlite3.Connection]:
    """Per-request read-only corpus connection; None when the database file is missing."""
    if 'db' not in g:
        path = current_app.config.get('CORPUS_DB_PATH', config.CORPUS_DB_PATH)
        try:
            g.db = connect(path, readonly=True)
        except FileNotFoundError:
            logger.warning(f"[api] Corpus database not found at {path}")
            g.db = None
    return g.db


def close_db(_exc: Optional[BaseException] = None) -> None:
    conn = g.pop('db', None)
    if conn is not None:
        conn.close()


def corpus_unavailable():
    return jsonify({"error": "Corpus database not available. Run scripts/build_db.py first."}), 503


def require_api_key():
    if config.API_KEY:
        key = request.headers.get("X-API-Key", "")
        if key != config.API_KEY:
            return jsonify({"error": "Unauthorized"}), 401
    return None


def parse_body(model: Type[M]) -> Tuple[Optional[M], Any]:
    """Validate the JSON body against `model`; returns (parsed, None) or (None, error response)."""
    raw = request.get_json(silent=True)
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise BadRequest("Body must be a JSON object")
    try:
        return model(**raw), None
    except ValidationError as ve:
        return None, (jsonify({"error": "validation_failed", "details": ve.errors(include_url=False)}), 400)
