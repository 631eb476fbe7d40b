from flask import Blueprint, jsonify
from flasgger import swag_from

from ghana_law.api import dependencies, models, state
from ghana_law.api.extensions import limiter
from ghana_law.citation import format_citation, parse_citation, validate_citation

citation_bp = Blueprint('citation', __name__)

_CITATION_BODY = {
    'name': 'body', 'in': 'body', 'required': True,
    'schema': {'type': 'object', 'properties': {'citation': {'type': 'string'}}},
}


@citation_bp.route("/api/citations/validate", methods=["POST"])
@limiter.limit("60/minute")
@swag_from({
    'tags': ['citations'],
    'consumes': ['application/json'],
    'parameters': [_CITATION_BODY],
    'responses': {200: {'description': 'Validation result'}, 400: {'description': 'Invalid body'},
                  503: {'description': 'Corpus missing'}}
})
def validate():
    auth = dependencies.require_api_key()
    if auth:
        return auth
    parsed, error = dependencies.parse_body(models.CitationRequest)
    if error:
        return error
    conn = dependencies.get_db()
    if conn is None:
        return dependencies.corpus_unavailable()
    result = validate_citation(conn, parsed.citation)
    if state.CITATIONS_VALIDATED:
        state.CITATIONS_VALIDATED.labels(str(result.document_exists and result.provision_exists).lower()).inc()
    return jsonify(result.model_dump())


@citation_bp.route("/api/citations/parse", methods=["POST"])
@swag_from({
    'tags': ['citations'],
    'consumes': ['application/json'],
    'parameters': [_CITATION_BODY],
    'responses': {200: {'description': 'Parsed citation'}}
})
def parse():
    auth = dependencies.require_api_key()
    if auth:
        return auth
    parsed, error = dependencies.parse_body(models.CitationRequest)
    if error:
        return error
    return jsonify(parse_citation(parsed.citation).model_dump())


@citation_bp.route("/api/citations/format", methods=["POST"])
@swag_from({
    'tags': ['citations'],
    'consumes': ['application/json'],
    'parameters': [{
        'name': 'body', 'in': 'body', 'required': True,
        'schema': {'type': 'object', 'properties': {
            'citation': {'type': 'string'},
            'format': {'type': 'string', 'enum': ['full', 'short', 'pinpoint']},
        }}
    }],
    'responses': {200: {'description': 'Formatted citation'}}
})
def format_():
    auth = dependencies.require_api_key()
    if auth:
        return auth
    body, error = dependencies.parse_body(models.FormatCitationRequest)
    if error:
        return error
    parsed = parse_citation(body.citation)
    out = {
        "input": body.citation,
        "format": body.format,
        "formatted": format_citation(parsed, body.format),
        "parsed": parsed.model_dump(),
    }
    if not parsed.valid:
        out["error"] = parsed.error
    return jsonify(out)
