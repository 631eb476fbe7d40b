from flask import Blueprint, jsonify
from flasgger import swag_from

from ghana_law.api import config, dependencies, models
from ghana_law.api.extensions import limiter
from ghana_law.search.legislation import build_legal_stance, check_currency, get_provision, search_legislation

legislation_bp = Blueprint('legislation', __name__)


def _document_body(extra=None):
    props = {'document_id': {'type': 'string', 'example': 'act-843-2012'}}
    props.update(extra or {})
    return [{'name': 'body', 'in': 'body', 'required': True, 'schema': {'type': 'object', 'properties': props}}]


@legislation_bp.route("/api/search", methods=["POST"])
@limiter.limit("60/minute")
@swag_from({
    'tags': ['legislation'],
    'consumes': ['application/json'],
    'parameters': [{
        'name': 'body', 'in': 'body', 'required': True,
        'schema': {'type': 'object', 'properties': {
            'query': {'type': 'string'}, 'document_id': {'type': 'string'},
            'status': {'type': 'string', 'enum': ['in_force', 'amended', 'repealed']},
            'limit': {'type': 'integer'},
        }}
    }],
    'responses': {200: {'description': 'Ranked provisions with >>>highlight<<< snippets'}}
})
def search():
    auth = dependencies.require_api_key()
    if auth:
        return auth
    body, error = dependencies.parse_body(models.SearchRequest)
    if error:
        return error
    conn = dependencies.get_db()
    if conn is None:
        return dependencies.corpus_unavailable()
    limit = min(body.limit, config.MAX_SEARCH_RESULTS)
    return jsonify(search_legislation(conn, body.query, document_id=body.document_id, status=body.status, limit=limit))


@legislation_bp.route("/api/provisions", methods=["POST"])
@swag_from({
    'tags': ['legislation'],
    'consumes': ['application/json'],
    'parameters': _document_body({'section': {'type': 'string'}, 'provision_ref': {'type': 'string'}}),
    'responses': {200: {'description': 'Provision text'}, 404: {'description': 'Unknown document or provision'}}
})
def provisions():
    auth = dependencies.require_api_key()
    if auth:
        return auth
    body, error = dependencies.parse_body(models.ProvisionRequest)
    if error:
        return error
    conn = dependencies.get_db()
    if conn is None:
        return dependencies.corpus_unavailable()
    result = get_provision(conn, body.document_id, section=body.section, provision_ref=body.provision_ref)
    return jsonify(result), 404 if result.get('error') else 200


@legislation_bp.route("/api/currency", methods=["POST"])
@swag_from({
    'tags': ['legislation'],
    'consumes': ['application/json'],
    'parameters': _document_body({'provision_ref': {'type': 'string'}}),
    'responses': {200: {'description': 'In-force status and warnings'}}
})
def currency():
    auth = dependencies.require_api_key()
    if auth:
        return auth
    body, error = dependencies.parse_body(models.CurrencyRequest)
    if error:
        return error
    conn = dependencies.get_db()
    if conn is None:
        return dependencies.corpus_unavailable()
    return jsonify(check_currency(conn, body.document_id, provision_ref=body.provision_ref))


@legislation_bp.route("/api/stance", methods=["POST"])
@limiter.limit("30/minute")
@swag_from({
    'tags': ['legislation'],
    'consumes': ['application/json'],
    'parameters': [{
        'name': 'body', 'in': 'body', 'required': True,
        'schema': {'type': 'object', 'properties': {
            'query': {'type': 'string'}, 'document_id': {'type': 'string'}, 'limit': {'type': 'integer'},
        }}
    }],
    'responses': {200: {'description': 'Provisions plus international basis'}}
})
def stance():
    auth = dependencies.require_api_key()
    if auth:
        return auth
    body, error = dependencies.parse_body(models.StanceRequest)
    if error:
        return error
    conn = dependencies.get_db()
    if conn is None:
        return dependencies.corpus_unavailable()
    return jsonify(build_legal_stance(conn, body.query, document_id=body.document_id, limit=body.limit))
