"""Citation formatting.

  full:     Section 1, Data Protection Act 2012 (Act 843)
  short:    s. 1, DPA 2012
  pinpoint: s. 1
"""
from __future__ import annotations

from .models import ParsedCitation


def format_citation(parsed: ParsedCitation, style: str = 'full') -> str:
    if not parsed.valid or not parsed.section:
        return ''
    pinpoint = parsed.pinpoint
    title = parsed.title or ''
    year = parsed.year if parsed.year is not None else ''

    if style == 'pinpoint':
        return f"s. {pinpoint}"
    if not parsed.title and parsed.act_number and parsed.year:
        # id-only citation: the canonical id form is the only one that parses back
        return f"act-{parsed.act_number}-{parsed.year}, s. {pinpoint}"
    if style == 'short':
        return f"s. {pinpoint}, {title} {year}".strip()
    # anything unrecognised falls back to the full form
    act_suffix = f" (Act {parsed.act_number})" if parsed.act_number else ''
    return f"Section {pinpoint}, {title} {year}{act_suffix}".strip()


__all__ = ['format_citation']
