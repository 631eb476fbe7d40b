"""Act index (listing page) parsing for GhanaLII.

Listing links follow the Akoma Ntoso pattern, optionally with a subtype:
  /akn/gh/act/2012/843/eng@2012-05-10
  /akn/gh/act/ca/1993/9/eng@1993-01-07
  /akn/gh/act/pndcl/1992/305/eng@1992-12-17
"""
from __future__ import annotations
import re
from typing import List

from bs4 import BeautifulSoup

from ghana_law.ingest.schemas import ActIndexEntry, ActIndexResult

AKN_ACT_HREF_RE = re.compile(r"/akn/gh/act/(?:[a-z]+/)?(\d{4})/(\d+)/eng@")
NEXT_LABELS = {'next', '>', '›'}


def dedupe_entries(entries: List[ActIndexEntry]) -> List[ActIndexEntry]:
    seen = set()
    out: List[ActIndexEntry] = []
    for e in entries:
        key = (e.year, e.act_number)
        if key in seen:
            continue
        seen.add(key)
        out.append(e)
    return out


def parse_act_index(html: str) -> ActIndexResult:
    soup = BeautifulSoup(html or '', 'html.parser')
    entries: List[ActIndexEntry] = []
    for a in soup.select('a[href*="/akn/gh/act/"]'):
        href = a.get('href', '')
        text = a.get_text(' ', strip=True)
        if not href or not text:
            continue
        m = AKN_ACT_HREF_RE.search(href)
        if not m:
            continue
        entries.append(ActIndexEntry(
            title=re.sub(r"\s+", " ", text).strip(),
            year=int(m.group(1)),
            act_number=int(m.group(2)),
            url=href,
        ))

    page_links = soup.select('a[href*="page="]')
    has_next = False
    for link in page_links:
        label = link.get_text(strip=True).lower()
        if label in NEXT_LABELS or 'next' in label:
            has_next = True
            break
    # GhanaLII uses numbered pagination; any page link on a non-empty page counts
    has_numbered_next = bool(page_links) and bool(entries)

    return ActIndexResult(entries=dedupe_entries(entries), has_next_page=has_next or has_numbered_next)


__all__ = ['parse_act_index', 'dedupe_entries']
