from flask import Blueprint, jsonify
from flasgger import swag_from

from ghana_law.api import dependencies, models
from ghana_law.search.international import (
    get_implementations,
    get_intl_basis,
    get_provision_intl_basis,
    search_intl_instruments,
    validate_intl_compliance,
)

international_bp = Blueprint('international', __name__)


def _respond(result):
    return jsonify(result), 404 if result.get('error') else 200


@international_bp.route("/api/intl/basis", methods=["POST"])
@swag_from({
    'tags': ['international'],
    'consumes': ['application/json'],
    'parameters': [{
        'name': 'body', 'in': 'body', 'required': True,
        'schema': {'type': 'object', 'properties': {
            'document_id': {'type': 'string'}, 'include_articles': {'type': 'boolean'},
            'reference_types': {'type': 'array', 'items': {'type': 'string'}},
        }}
    }],
    'responses': {200: {'description': 'International instruments behind a statute'}}
})
def basis():
    auth = dependencies.require_api_key()
    if auth:
        return auth
    body, error = dependencies.parse_body(models.IntlBasisRequest)
    if error:
        return error
    conn = dependencies.get_db()
    if conn is None:
        return dependencies.corpus_unavailable()
    return _respond(get_intl_basis(conn, body.document_id, include_articles=body.include_articles,
                                   reference_types=body.reference_types))


@international_bp.route("/api/intl/implementations", methods=["POST"])
@swag_from({
    'tags': ['international'],
    'consumes': ['application/json'],
    'parameters': [{
        'name': 'body', 'in': 'body', 'required': True,
        'schema': {'type': 'object', 'properties': {
            'instrument_id': {'type': 'string', 'example': 'regulation:2016/679'},
            'primary_only': {'type': 'boolean'}, 'in_force_only': {'type': 'boolean'},
        }}
    }],
    'responses': {200: {'description': 'Ghanaian statutes referencing the instrument'}}
})
def implementations():
    auth = dependencies.require_api_key()
    if auth:
        return auth
    body, error = dependencies.parse_body(models.ImplementationsRequest)
    if error:
        return error
    conn = dependencies.get_db()
    if conn is None:
        return dependencies.corpus_unavailable()
    return _respond(get_implementations(conn, body.instrument_id, primary_only=body.primary_only,
                                        in_force_only=body.in_force_only))


@international_bp.route("/api/intl/provision-basis", methods=["POST"])
@swag_from({
    'tags': ['international'],
    'consumes': ['application/json'],
    'parameters': [{
        'name': 'body', 'in': 'body', 'required': True,
        'schema': {'type': 'object', 'properties': {
            'document_id': {'type': 'string'}, 'provision_ref': {'type': 'string'},
        }}
    }],
    'responses': {200: {'description': 'Article-level references from one provision'}}
})
def provision_basis():
    auth = dependencies.require_api_key()
    if auth:
        return auth
    body, error = dependencies.parse_body(models.ProvisionBasisRequest)
    if error:
        return error
    conn = dependencies.get_db()
    if conn is None:
        return dependencies.corpus_unavailable()
    return _respond(get_provision_intl_basis(conn, body.document_id, body.provision_ref))


@international_bp.route("/api/intl/search", methods=["POST"])
@swag_from({
    'tags': ['international'],
    'consumes': ['application/json'],
    'parameters': [{
        'name': 'body', 'in': 'body', 'required': False,
        'schema': {'type': 'object', 'properties': {
            'query': {'type': 'string', 'example': 'data protection'},
            'type': {'type': 'string', 'enum': ['directive', 'regulation']},
            'year_from': {'type': 'integer'}, 'year_to': {'type': 'integer'},
            'has_ghanaian_implementation': {'type': 'boolean'},
            'limit': {'type': 'integer', 'default': 20, 'maximum': 100},
        }}
    }],
    'responses': {200: {'description': 'Instruments with counts of referencing statutes'}}
})
def search_instruments():
    auth = dependencies.require_api_key()
    if auth:
        return auth
    body, error = dependencies.parse_body(models.IntlSearchRequest)
    if error:
        return error
    conn = dependencies.get_db()
    if conn is None:
        return dependencies.corpus_unavailable()
    return jsonify(search_intl_instruments(
        conn, body.query, instrument_type=body.type, year_from=body.year_from, year_to=body.year_to,
        has_ghanaian_implementation=body.has_ghanaian_implementation, limit=body.limit,
    ))


@international_bp.route("/api/intl/compliance", methods=["POST"])
@swag_from({
    'tags': ['international'],
    'consumes': ['application/json'],
    'parameters': [{
        'name': 'body', 'in': 'body', 'required': True,
        'schema': {'type': 'object', 'properties': {
            'document_id': {'type': 'string', 'example': 'act-843-2012'},
            'provision_ref': {'type': 'string'}, 'instrument_id': {'type': 'string'},
        }}
    }],
    'responses': {200: {'description': 'compliant, partial, unclear or not_applicable'}}
})
def compliance():
    auth = dependencies.require_api_key()
    if auth:
        return auth
    body, error = dependencies.parse_body(models.ComplianceRequest)
    if error:
        return error
    conn = dependencies.get_db()
    if conn is None:
        return dependencies.corpus_unavailable()
    return _respond(validate_intl_compliance(conn, body.document_id, provision_ref=body.provision_ref,
                                             instrument_id=body.instrument_id))
