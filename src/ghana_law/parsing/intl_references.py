"""International instrument references in Ghanaian statute text.

Two families are recognised:
  - EU-style numbered instruments:
      Directive (EU) 2016/680, Regulation (EC) No 45/2001,
      Directive 95/46/EC, Regulation 2016/679
  - Named conventions with fixed identities (GDPR, Malabo Convention,
    Budapest Convention, Convention 108, EU Directive 95/46)

Each hit carries a 120-character context window on either side, an optional
article pinpoint found in that window, and a relationship guessed from
implementation keywords. Results are unique per (instrument_id, article).
"""
from __future__ import annotations
import re
from typing import List, Optional, Set, Tuple

from ghana_law.ingest.schemas import ExtractedReference

CONTEXT_CHARS = 120

_COMMUNITIES = r"(EU|EC|EEC|Euratom)"
_NUMBERED = r"(\d{2,4})\/(\d{1,4})"

# (pattern, group index of community or None, group of year, group of number); order matters
NUMBERED_PATTERNS: List[Tuple[re.Pattern, Optional[int], int, int]] = [
    (re.compile(rf"\b(Regulation|Directive)\s*\({_COMMUNITIES}\)\s*(?:No\.?\s*)?{_NUMBERED}\b", re.IGNORECASE), 2, 3, 4),
    (re.compile(rf"\b(Regulation|Directive)\s*(?:No\.?\s*)?{_NUMBERED}\/{_COMMUNITIES}\b", re.IGNORECASE), 4, 2, 3),
    (re.compile(rf"\b(Regulation|Directive)\s*(?:No\.?\s*)?{_NUMBERED}\b", re.IGNORECASE), None, 2, 3),
]

NAMED_INSTRUMENTS = [
    {
        'pattern': re.compile(r"\b(?:GDPR|General Data Protection Regulation)\b", re.IGNORECASE),
        'instrument_id': 'regulation:2016/679', 'instrument_type': 'regulation', 'community': 'EU',
        'year': 2016, 'number': 679,
        'title': 'General Data Protection Regulation (GDPR)',
    },
    {
        'pattern': re.compile(r"\bEU\s*(?:Data Protection\s*)?Directive\s*95\/46\b", re.IGNORECASE),
        'instrument_id': 'directive:1995/46', 'instrument_type': 'directive', 'community': 'EC',
        'year': 1995, 'number': 46,
        'title': 'EU Data Protection Directive 95/46/EC',
    },
    {
        'pattern': re.compile(
            r"\b(?:Malabo Convention|AU Convention on Cyber Security|"
            r"African Union Convention on Cyber Security and Personal Data Protection)\b",
            re.IGNORECASE,
        ),
        'instrument_id': 'directive:2014/1', 'instrument_type': 'directive', 'community': 'AU',
        'year': 2014, 'number': 1,
        'title': 'AU Convention on Cyber Security and Personal Data Protection (Malabo Convention)',
    },
    {
        'pattern': re.compile(r"\b(?:Budapest Convention|Convention on Cybercrime)\b", re.IGNORECASE),
        'instrument_id': 'directive:2001/185', 'instrument_type': 'directive', 'community': 'EU',
        'year': 2001, 'number': 185,
        'title': 'Convention on Cybercrime (Budapest Convention)',
    },
    {
        'pattern': re.compile(r"\bConvention\s*108\b", re.IGNORECASE),
        'instrument_id': 'directive:1981/108', 'instrument_type': 'directive', 'community': 'EU',
        'year': 1981, 'number': 108,
        'title': (
            'Convention for the Protection of Individuals with regard to Automatic '
            'Processing of Personal Data (Convention 108)'
        ),
    },
]

ARTICLE_RE = re.compile(r"\bArticle\s+(\d+[A-Za-z]?(?:\(\d+\))?)", re.IGNORECASE)
IMPLEMENTS_RE = re.compile(
    r"\b(?:implement\w*|transpos\w*|supplement\w*|compl(?:y|ies|ied|iance)|gives\s+effect)\b",
    re.IGNORECASE,
)

_COMMUNITY_CANON = {'EU': 'EU', 'EC': 'EC', 'EEC': 'EEC', 'EURATOM': 'Euratom', 'AU': 'AU', 'ECOWAS': 'ECOWAS'}


def normalize_year(raw: str) -> int:
    """Two-digit years: 50-99 -> 19xx, 00-49 -> 20xx."""
    try:
        year = int(raw)
    except (TypeError, ValueError):
        return 0
    if len(raw) == 2:
        return 1900 + year if year >= 50 else 2000 + year
    return year


def normalize_community(raw: Optional[str]) -> str:
    if not raw:
        return 'EU'
    return _COMMUNITY_CANON.get(raw.upper(), 'EU')


def instrument_id(instrument_type: str, year: int, number: int) -> str:
    return f"{instrument_type}:{year}/{number}"


def context_window(text: str, start: int, end: int) -> str:
    lo = max(0, start - CONTEXT_CHARS)
    hi = min(len(text), end + CONTEXT_CHARS)
    return re.sub(r"\s+", " ", text[lo:hi]).strip()


def extract_article(context: str) -> Optional[str]:
    m = ARTICLE_RE.search(context)
    return m.group(1) if m else None


def infer_relationship(context: str) -> str:
    return 'implements' if IMPLEMENTS_RE.search(context) else 'references'


def extract_intl_references(text: str) -> List[ExtractedReference]:
    if not text or not text.strip():
        return []
    refs: List[ExtractedReference] = []
    seen: Set[Tuple[str, str]] = set()

    def add(ref: ExtractedReference) -> None:
        if ref.dedupe_key in seen:
            return
        seen.add(ref.dedupe_key)
        refs.append(ref)

    for pattern, community_group, year_group, number_group in NUMBERED_PATTERNS:
        for m in pattern.finditer(text):
            year = normalize_year(m.group(year_group))
            number = int(m.group(number_group))
            if year <= 0 or number <= 0:
                continue
            kind = m.group(1).lower()
            context = context_window(text, m.start(), m.end())
            add(ExtractedReference(
                instrument_type=kind,
                community=normalize_community(m.group(community_group) if community_group else None),
                year=year,
                number=number,
                instrument_id=instrument_id(kind, year, number),
                article=extract_article(context),
                full_citation=m.group(0),
                context=context,
                relationship=infer_relationship(context),
            ))

    for named in NAMED_INSTRUMENTS:
        for m in named['pattern'].finditer(text):
            context = context_window(text, m.start(), m.end())
            add(ExtractedReference(
                instrument_type=named['instrument_type'],
                community=named['community'],
                year=named['year'],
                number=named['number'],
                instrument_id=named['instrument_id'],
                article=extract_article(context),
                full_citation=m.group(0),
                context=context,
                relationship=infer_relationship(context),
                title=named['title'],
            ))

    return refs


__all__ = [
    'extract_intl_references', 'normalize_year', 'normalize_community', 'infer_relationship',
    'extract_article', 'instrument_id', 'NAMED_INSTRUMENTS',
]
