"""GhanaLII act page parsing.

GhanaLII runs on the AfricanLII / Laws.Africa platform and serves Akoma Ntoso
flavoured HTML:

  <section class="akn-part" id="part_I">
    <h2>PART I - PRELIMINARY</h2>
    <section class="akn-section" id="part_I__sec_1">
      <h3>1. Application</h3>
      <section class="akn-subsection">
        <span class="akn-num">(1)</span>
        <span class="akn-content"><span class="akn-p">...</span></span>
      </section>
    </section>
  </section>

plus an embedded table of contents in <script id="akn_toc_json">.

Pages are not consistent, so provisions are extracted with three strategies
tried in order (markup, TOC, plain-text regex). The first one that yields at
least one provision wins; a page where all three fail still produces a
ParsedAct with no provisions.
"""
from __future__ import annotations
import json
import logging
import re
from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, List, Optional, Sequence

from bs4 import BeautifulSoup, Tag

from ghana_law.ingest.schemas import Definition, ParsedAct, Provision, act_document_id

logger = logging.getLogger(__name__)

SEC_ID_RE = re.compile(r"(?:^|__)sec_(\d+)")
LEADING_NUM_RE = re.compile(r"^\d+\.\s*")
SITE_SUFFIX_RE = re.compile(r"\s*[–—-]\s*GhaLII\s*$")
FRBR_DATE_RE = re.compile(r"@(\d{4}-\d{2}-\d{2})")
PART_RE = re.compile(r"^PART\s", re.IGNORECASE)
CHAPTER_RE = re.compile(r"^CHAPTER\s", re.IGNORECASE)
TEXT_SECTION_RE = re.compile(
    r"(?:Section|SECTION)\s+(\d+)[.\s—–-]+(.+?)(?=(?:Section|SECTION)\s+\d+|\Z)",
    re.DOTALL,
)
DEFINITIONS_HEADING_RE = re.compile(r"\b(?:interpretation|definitions?)\b", re.IGNORECASE)
# "term" means ...;  with straight, curly or low-9 quotes
DEFINITION_RE = re.compile(
    r"[“\"„]([^”\"‟]+)[”\"‟]\s+means\s+([^;]+);",
    re.IGNORECASE,
)

TEXT_CLASSES = {'akn-p', 'akn-content', 'akn-intro', 'akn-listIntroduction'}
DIRECT_TEXT_CLASSES = {'akn-p', 'akn-content'}
SHORT_NAME_STOPWORDS = {'The', 'And', 'For', 'Act', 'Of', 'In', 'To', 'With'}


def normalize_ws(text: str | None) -> str:
    return re.sub(r"\s+", " ", text or "").strip()


@dataclass
class HeadingContext:
    """Running part/chapter state for a single pass over one document.

    Values persist until a later heading overwrites them; they are never
    reset between provisions.
    """
    part: Optional[str] = None
    chapter: Optional[str] = None

    def observe(self, heading: str) -> None:
        if PART_RE.match(heading):
            self.part = heading
        if CHAPTER_RE.match(heading):
            self.chapter = heading


# ── DOM helpers ──────────────────────────────────────────────────────────────

def _has_class(tag: Tag, names: Iterable[str]) -> bool:
    classes = tag.get('class') or []
    return any(c in names for c in classes)


def _parents_until(el: Tag, root: Tag) -> Iterator[Tag]:
    for parent in el.parents:
        if parent is root:
            return
        yield parent


def _outermost_text(root: Tag, names: set[str], exclude_class: Optional[str] = None) -> List[str]:
    """Text of elements carrying one of `names`, skipping ones nested in another match."""
    parts: List[str] = []
    for el in root.find_all(lambda t: _has_class(t, names)):
        ancestors = list(_parents_until(el, root))
        if any(_has_class(p, names) for p in ancestors):
            continue
        if exclude_class and any(_has_class(p, {exclude_class}) for p in ancestors):
            continue
        txt = normalize_ws(el.get_text())
        if txt:
            parts.append(txt)
    return parts


def _is_structural_container(tag: Tag) -> bool:
    if tag.name != 'section':
        return False
    for c in tag.get('class') or []:
        if c == 'akn-subpart' or 'akn-part' in c or 'akn-chapter' in c:
            return True
    return False


# ── Strategy 1: Akoma Ntoso section markup ───────────────────────────────────

def _section_content(section: Tag) -> str:
    parts: List[str] = []
    for sub in section.find_all('section', class_='akn-subsection'):
        num_el = sub.find(class_='akn-num', recursive=False)
        num = normalize_ws(num_el.get_text()) if num_el else ''
        text = ' '.join(_outermost_text(sub, TEXT_CLASSES))
        if text:
            parts.append(f"{num} {text}" if num else text)
    if not parts:
        parts = _outermost_text(section, DIRECT_TEXT_CLASSES, exclude_class='akn-subsection')
    return normalize_ws(' '.join(parts))


def provisions_from_markup(soup: BeautifulSoup) -> List[Provision]:
    ctx = HeadingContext()
    provisions: List[Provision] = []
    for section in soup.find_all('section', class_='akn-section'):
        sec_id = section.get('id') or section.get('data-eid') or ''
        m = SEC_ID_RE.search(sec_id)
        if not m:
            continue
        num = m.group(1)

        heading = section.find(['h3', 'h4'], recursive=False)
        title = LEADING_NUM_RE.sub('', normalize_ws(heading.get_text()) if heading else '').strip()

        # outermost container first so a CHAPTER inside a PART sees both
        containers = [p for p in section.parents if isinstance(p, Tag) and _is_structural_container(p)]
        for container in reversed(containers):
            h = container.find(['h2', 'h3'], recursive=False)
            if h is not None:
                ctx.observe(normalize_ws(h.get_text()))

        content = _section_content(section)
        if content:
            provisions.append(Provision(
                provision_ref=f"s{num}",
                part=ctx.part,
                chapter=ctx.chapter,
                section=num,
                title=title,
                content=content,
            ))
    return provisions


# ── Strategy 2: embedded table of contents ───────────────────────────────────

def provisions_from_toc(soup: BeautifulSoup) -> List[Provision]:
    script = soup.find('script', id='akn_toc_json')
    if script is None:
        return []
    try:
        toc = json.loads(script.string or "")
    except ValueError as e:
        logger.debug(f"Unreadable TOC JSON: {e}")
        return []

    ctx = HeadingContext()
    provisions: List[Provision] = []

    def walk(items) -> None:
        if not isinstance(items, list):
            return
        for item in items:
            if not isinstance(item, dict):
                continue
            kind = item.get('type')
            item_id = item.get('id') or ''
            if kind == 'part':
                ctx.part = normalize_ws(item.get('title')) or ctx.part
            elif kind == 'chapter':
                ctx.chapter = normalize_ws(item.get('title')) or ctx.chapter
            elif kind == 'section' and item_id:
                m = SEC_ID_RE.search(item_id)
                el = soup.find(id=item_id) if m else None
                if m and el is not None:
                    content = normalize_ws(el.get_text())
                    heading_text = item.get('title') or ''
                    if heading_text:
                        content = content.replace(heading_text, '', 1).strip()
                    if content:
                        num = m.group(1)
                        provisions.append(Provision(
                            provision_ref=f"s{num}",
                            part=ctx.part,
                            chapter=ctx.chapter,
                            section=num,
                            title=(item.get('heading') or '').strip(),
                            content=content,
                        ))
            walk(item.get('children'))

    walk(toc)
    return provisions


# ── Strategy 3: plain text ───────────────────────────────────────────────────

def provisions_from_text(soup: BeautifulSoup) -> List[Provision]:
    root = soup.body or soup
    full_text = root.get_text('\n')
    provisions: List[Provision] = []
    for m in TEXT_SECTION_RE.finditer(full_text):
        num = m.group(1)
        body = m.group(2).strip()
        split = re.search(r"[.\n]", body)
        if split and split.start() > 0:
            title = body[:split.start()].strip()
            content = body[split.start() + 1:].strip()
        else:
            title, content = '', body
        content = normalize_ws(content)
        if content:
            provisions.append(Provision(
                provision_ref=f"s{num}",
                section=num,
                title=normalize_ws(title),
                content=content,
            ))
    return provisions


Strategy = Callable[[BeautifulSoup], List[Provision]]
STRATEGIES: Sequence[tuple[str, Strategy]] = (
    ('markup', provisions_from_markup),
    ('toc', provisions_from_toc),
    ('text', provisions_from_text),
)


# ── Metadata helpers ─────────────────────────────────────────────────────────

def extract_definitions(content: str, source_provision: str) -> List[Definition]:
    return [
        Definition(term=m.group(1).strip(), definition=m.group(2).strip(), source_provision=source_provision)
        for m in DEFINITION_RE.finditer(content)
    ]


def build_short_name(title: str, year: int) -> str:
    """Abbreviate a title, e.g. "Data Protection Commission Act, 2012" -> "DPC 2012"."""
    stripped = re.sub(r"[()]", "", title)
    stripped = re.sub(r",\s*\d{4}.*$", "", stripped)
    words = stripped.split()
    if len(words) <= 3:
        return f"{title} {year}"
    significant = [
        w for w in words
        if len(w) > 2 and w[0] == w[0].upper() and w not in SHORT_NAME_STOPWORDS
    ]
    if len(significant) >= 2:
        initials = ''.join(w[0] for w in significant[:4])
        return f"{initials} {year}"
    return f"{title[:30].strip()} {year}"


def _page_title(soup: BeautifulSoup, fallback: str) -> str:
    el = soup.find('title')
    raw = el.get_text().strip() if el else ''
    raw = SITE_SUFFIX_RE.sub('', raw)
    return normalize_ws(raw or fallback)


def _issued_date(soup: BeautifulSoup, year: int) -> str:
    script = soup.find('script', id='track-page-properties')
    if script is not None:
        try:
            props = json.loads(script.string or "")
        except ValueError:
            props = None
        uri = props.get('expression_frbr_uri') if isinstance(props, dict) else None
        if isinstance(uri, str):
            m = FRBR_DATE_RE.search(uri)
            if m:
                return m.group(1)
    return f"{year}-01-01"


def parse_act_content(html: str, year: int, act_number: int, fallback_title: str) -> ParsedAct:
    soup = BeautifulSoup(html or '', 'html.parser')
    title = _page_title(soup, fallback_title)

    provisions: List[Provision] = []
    for name, strategy in STRATEGIES:
        provisions = strategy(soup)
        if provisions:
            logger.debug(f"act {year}/{act_number}: {len(provisions)} provisions via {name} strategy")
            break
    else:
        logger.warning(f"act {year}/{act_number}: no content extracted by any strategy")

    definitions: List[Definition] = []
    for prov in provisions:
        if DEFINITIONS_HEADING_RE.search(prov.title or ''):
            definitions.extend(extract_definitions(prov.content, prov.provision_ref))

    return ParsedAct(
        id=act_document_id(act_number, year),
        title=title,
        short_name=build_short_name(title, year),
        act_number=act_number,
        year=year,
        status='in_force',
        issued_date=_issued_date(soup, year),
        url=f"https://ghalii.org/akn/gh/act/{year}/{act_number}",
        provisions=provisions,
        definitions=definitions,
    )


__all__ = [
    'HeadingContext', 'STRATEGIES', 'parse_act_content', 'provisions_from_markup',
    'provisions_from_toc', 'provisions_from_text', 'extract_definitions', 'build_short_name',
    'normalize_ws',
]
