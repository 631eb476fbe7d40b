import os
import platform

from flask import Blueprint, Response, current_app, jsonify

from ghana_law.api import config, dependencies
from ghana_law.search.sources import about as corpus_about
from ghana_law.search.sources import list_sources

monitoring_bp = Blueprint('monitoring', __name__)


@monitoring_bp.route("/metrics", methods=["GET"])
def metrics():
    from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
    return Response(generate_latest(), mimetype=CONTENT_TYPE_LATEST)


@monitoring_bp.route("/version", methods=["GET"])
def version():
    return jsonify({
        "version": config.APP_VERSION,
        "env": config.APP_ENV,
        "commit": os.getenv("GIT_COMMIT"),
        "python": platform.python_version(),
    })


@monitoring_bp.route("/api/health", methods=["GET"])
def health():
    path = current_app.config.get('CORPUS_DB_PATH', config.CORPUS_DB_PATH)
    corpus_ready = os.path.exists(path)
    return jsonify({"status": "ok" if corpus_ready else "degraded", "corpus": corpus_ready}), 200


@monitoring_bp.route("/api/sources", methods=["GET"])
def sources():
    auth = dependencies.require_api_key()
    if auth:
        return auth
    conn = dependencies.get_db()
    if conn is None:
        return dependencies.corpus_unavailable()
    return jsonify(list_sources(conn))


@monitoring_bp.route("/api/about", methods=["GET"])
def about():
    auth = dependencies.require_api_key()
    if auth:
        return auth
    conn = dependencies.get_db()
    if conn is None:
        return dependencies.corpus_unavailable()
    return jsonify(corpus_about(conn, config.APP_VERSION))
