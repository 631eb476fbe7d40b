from conftest import AKN_HTML, INDEX_HTML, TEXT_HTML, TOC_HTML

from ghana_law.parsing.act_index import parse_act_index
from ghana_law.parsing.act_parser import build_short_name, parse_act_content


def test_index_entries_are_deduplicated_and_normalised():
    result = parse_act_index(INDEX_HTML)
    keys = [(e.year, e.act_number) for e in result.entries]
    assert keys == [(2012, 843), (2020, 1038), (1992, 305)]
    assert result.entries[2].title == 'Local Government Law'
    assert result.entries[0].document_id == 'act-843-2012'
    assert result.has_next_page is True


def test_index_without_pagination_has_no_next_page():
    result = parse_act_index('<html><body><a href="/akn/gh/act/2019/1000/eng@2019-01-01">Some Act</a></body></html>')
    assert len(result.entries) == 1
    assert result.has_next_page is False


def test_markup_strategy_tracks_parts_and_chapters():
    act = parse_act_content(AKN_HTML, 2012, 843, 'fallback')
    assert [p.provision_ref for p in act.provisions] == ['s1', 's2', 's3', 's4']
    s1, s2, s3, s4 = act.provisions
    assert s1.title == 'Interpretation'
    assert s1.part == 'PART I - PRELIMINARY'
    assert s1.chapter is None
    assert s1.content.startswith('(1) In this Act')
    assert s2.content == 'This Act implements Directive 95/46/EC and applies to processing in Ghana.'
    assert s3.part == 'PART II - DATA PROTECTION PRINCIPLES'
    assert s3.chapter == 'CHAPTER 1 - Principles'
    assert s3.content == '(1) A person who processes data shall act lawfully. (2) Processing shall be accountable.'
    # context carries over to sections outside any container
    assert s4.part == 'PART II - DATA PROTECTION PRINCIPLES'
    assert s4.chapter == 'CHAPTER 1 - Principles'


def test_document_metadata_from_page():
    act = parse_act_content(AKN_HTML, 2012, 843, 'fallback')
    assert act.id == 'act-843-2012'
    assert act.title == 'Data Protection Act, 2012 (Act 843)'
    assert act.issued_date == '2012-05-10'
    assert act.status == 'in_force'
    assert act.url == 'https://ghalii.org/akn/gh/act/2012/843'


def test_definitions_come_from_interpretation_sections():
    act = parse_act_content(AKN_HTML, 2012, 843, 'fallback')
    terms = {d.term: d for d in act.definitions}
    assert set(terms) == {'data controller', 'personal data'}
    assert terms['personal data'].definition == 'data about an individual'
    assert terms['data controller'].source_provision == 's1'


def test_toc_strategy():
    act = parse_act_content(TOC_HTML, 2020, 1038, 'fallback')
    assert [p.provision_ref for p in act.provisions] == ['s1', 's2']
    s1, s2 = act.provisions
    assert s1.title == 'Establishment of the Authority'
    assert s1.content == 'There is established a Cyber Security Authority.'
    assert s1.part == 'Part I - Cyber Security Authority'
    assert s2.content == 'The object of the Authority is to regulate cybersecurity activities.'
    assert act.issued_date == '2020-01-01'


def test_plain_text_strategy():
    act = parse_act_content(TEXT_HTML, 1960, 100, 'fallback')
    assert [(p.section, p.title) for p in act.provisions] == [('1', 'Short title'), ('2', 'Repeal')]
    assert act.provisions[0].content == 'This Act may be cited as the Old Ordinance Act.'
    assert act.provisions[1].content == 'The Previous Ordinance is repealed.'


def test_empty_page_still_yields_document():
    act = parse_act_content('', 2001, 7, 'Fallback Title Act')
    assert act.title == 'Fallback Title Act'
    assert act.provisions == []
    assert act.definitions == []
    assert act.issued_date == '2001-01-01'


def test_short_names():
    assert build_short_name('Data Protection Commission Act, 2012', 2012) == 'DPC 2012'
    assert build_short_name('Courts Act', 1993) == 'Courts Act 1993'
