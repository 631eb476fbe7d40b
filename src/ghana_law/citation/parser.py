"""Ghana statute citation parsing.

Accepted shapes, tried in this order (first match wins):
  - act-843-2012, s. 1
  - Section 1, Data Protection Act 2012 (Act 843)
  - Section 1, Data Protection Act 2012
  - s. 1 DPA 2012
  - Data Protection Act 2012 (Act 843), s. 1
  - Data Protection Act 2012, s. 1

The ID form comes first so "act-843-2012, s. 1" is never read as a title
followed by a trailing section.
"""
from __future__ import annotations
import re
from typing import Callable, List, Optional, Tuple

from .models import ParsedCitation

REF = r"(\d+(?:\(\d+\))*(?:\([a-z]\))*)"
SECTION_WORD = r"(?:Section|s\.?)"

ID_BASED = re.compile(rf"^(act-\d+-\d{{4}})\s*,?\s*{SECTION_WORD}\s*{REF}\s*$", re.IGNORECASE)
FULL_WITH_ACT_NUMBER = re.compile(
    rf"^{SECTION_WORD}\s+{REF}\s*,?\s+(.+?)\s+(\d{{4}})\s*\(Act\s+(\d+)\)\s*$", re.IGNORECASE
)
FULL = re.compile(rf"^{SECTION_WORD}\s+{REF}\s*,?\s+(.+?)\s+(\d{{4}})\s*$", re.IGNORECASE)
SHORT = re.compile(rf"^s\.?\s+{REF}\s+(.+?)\s+(\d{{4}})$", re.IGNORECASE)
TRAILING_WITH_ACT_NUMBER = re.compile(
    rf"^(.+?)\s+(\d{{4}})\s*\(Act\s+(\d+)\)\s*,?\s*{SECTION_WORD}\s*{REF}\s*$", re.IGNORECASE
)
TRAILING = re.compile(rf"^(.+?)\s+(\d{{4}})\s*,?\s*{SECTION_WORD}\s*{REF}\s*$", re.IGNORECASE)

ACT_ID_RE = re.compile(r"^act-(\d+)-(\d{4})$", re.IGNORECASE)
SECTION_REF = re.compile(r"^(\d+)(?:\((\d+)\))?(?:\(([a-z])\))?$")


def decompose_section(raw: str, title: Optional[str], year: int, act_number: Optional[int],
                      grammar: str) -> ParsedCitation:
    """Split "1(2)(a)" into section/subsection/paragraph; keep the raw ref if it does not fit."""
    base = dict(valid=True, kind='act', grammar=grammar,
                title=title.strip() if title else None, year=year, act_number=act_number)
    m = SECTION_REF.match(raw)
    if not m:
        return ParsedCitation(section=raw, **base)
    return ParsedCitation(section=m.group(1), subsection=m.group(2) or None, paragraph=m.group(3) or None, **base)


def _id_based(m: re.Match) -> Optional[ParsedCitation]:
    parts = ACT_ID_RE.match(m.group(1))
    if not parts:
        return None
    return decompose_section(m.group(2), None, int(parts.group(2)), int(parts.group(1)), 'id')


Builder = Callable[[re.Match], Optional[ParsedCitation]]

GRAMMARS: List[Tuple[re.Pattern, Builder]] = [
    (ID_BASED, _id_based),
    (FULL_WITH_ACT_NUMBER,
     lambda m: decompose_section(m.group(1), m.group(2), int(m.group(3)), int(m.group(4)), 'full_with_act')),
    (FULL, lambda m: decompose_section(m.group(1), m.group(2), int(m.group(3)), None, 'full')),
    (SHORT, lambda m: decompose_section(m.group(1), m.group(2), int(m.group(3)), None, 'short')),
    (TRAILING_WITH_ACT_NUMBER,
     lambda m: decompose_section(m.group(4), m.group(1), int(m.group(2)), int(m.group(3)), 'trailing_with_act')),
    (TRAILING, lambda m: decompose_section(m.group(3), m.group(1), int(m.group(2)), None, 'trailing')),
]


def parse_citation(citation: str) -> ParsedCitation:
    text = (citation or '').strip()
    for pattern, build in GRAMMARS:
        m = pattern.match(text)
        if m:
            parsed = build(m)
            if parsed is not None:
                return parsed
    return ParsedCitation(valid=False, kind='unknown', error=f'Could not parse Ghana citation: "{text}"')


__all__ = ['parse_citation', 'decompose_section', 'GRAMMARS']
