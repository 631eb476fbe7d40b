"""Ghana statute citation parsing, validation and formatting."""

from ghana_law.citation.models import (
    CitationStyle,
    ParsedCitation,
    ValidationResult,
)

from ghana_law.citation.parser import parse_citation
from ghana_law.citation.formatter import format_citation
from ghana_law.citation.validator import validate_citation

__all__ = [
    # Models
    "CitationStyle",
    "ParsedCitation",
    "ValidationResult",
    # Operations
    "parse_citation",
    "format_citation",
    "validate_citation",
]
