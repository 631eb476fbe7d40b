from ghana_law.search.international import (
    get_implementations,
    get_intl_basis,
    get_provision_intl_basis,
    search_intl_instruments,
    validate_intl_compliance,
)
from ghana_law.search.legislation import (
    build_legal_stance,
    check_currency,
    get_provision,
    quote_fts_query,
    resolve_document_id,
    search_legislation,
)
from ghana_law.search.sources import about, list_sources


def test_search_highlights_matches(corpus):
    out = search_legislation(corpus, 'Commission')
    assert [r['provision_ref'] for r in out['results']] == ['s2']
    hit = out['results'][0]
    assert hit['document_id'] == 'act-843-2012'
    assert '>>>Commission<<<' in hit['snippet']


def test_search_filters(corpus):
    assert search_legislation(corpus, 'Act', status='repealed')['results'][0]['document_id'] == 'act-100-1960'
    scoped = search_legislation(corpus, 'data', document_id='Data Protection')
    assert scoped['results']
    assert {r['document_id'] for r in scoped['results']} == {'act-843-2012'}


def test_search_limit_is_clamped(corpus):
    assert len(search_legislation(corpus, 'Act', limit=1)['results']) == 1
    assert len(search_legislation(corpus, 'Act', limit='lots')['results']) >= 1


def test_invalid_fts_syntax_falls_back_to_quoted_terms(corpus):
    out = search_legislation(corpus, 'data "controllers')
    assert [r['provision_ref'] for r in out['results']] == ['s2']
    assert quote_fts_query('data "controllers') == '"data" "controllers"'


def test_search_unknown_document(corpus):
    out = search_legislation(corpus, 'data', document_id='act-1-1900')
    assert out['results'] == []
    assert out['warnings'] == ['Document "act-1-1900" not found in database']


def test_resolve_document_by_title(corpus):
    assert resolve_document_id(corpus, 'act-772-2008') == 'act-772-2008'
    assert resolve_document_id(corpus, 'Electronic Transactions') == 'act-772-2008'
    assert resolve_document_id(corpus, '') is None


def test_get_single_provision(corpus):
    out = get_provision(corpus, 'act-843-2012', section='2')
    assert out['document_title'] == 'Data Protection Act, 2012 (Act 843)'
    assert [p['provision_ref'] for p in out['provisions']] == ['s2']
    assert 'error' not in out


def test_get_all_provisions(corpus):
    out = get_provision(corpus, 'act-843-2012')
    assert [p['provision_ref'] for p in out['provisions']] == ['s1', 's2', 's3', 's5(1)']
    assert out['truncated'] is False


def test_get_missing_provision(corpus):
    out = get_provision(corpus, 'act-843-2012', provision_ref='s42')
    assert out['provisions'] == []
    assert out['error'] == 'Provision s42 not found in Data Protection Act, 2012 (Act 843)'
    assert 'error' in get_provision(corpus, 'no-such-act')


def test_currency(corpus):
    current = check_currency(corpus, 'act-843-2012', provision_ref='s1')
    assert current['is_current'] is True
    assert current['provision_exists'] is True
    assert current['warnings'] == []

    repealed = check_currency(corpus, 'act-100-1960')
    assert repealed['is_current'] is False
    assert repealed['warnings'] == ['This statute has been repealed']

    missing = check_currency(corpus, 'act-1-1900')
    assert missing['status'] == 'not_found'


def test_legal_stance_includes_international_basis(corpus):
    out = build_legal_stance(corpus, 'implements')
    assert {p['document_id'] for p in out['provisions']} == {'act-843-2012'}
    instruments = {b['instrument_id'] for b in out['intl_basis']}
    assert instruments == {'directive:1995/46', 'regulation:2016/679'}
    assert out['total_citations'] == len(out['provisions']) + len(out['intl_basis'])


def test_intl_basis(corpus):
    out = get_intl_basis(corpus, 'act-843-2012', include_articles=True)
    by_id = {i['id']: i for i in out['instruments']}
    assert set(by_id) == {'directive:1995/46', 'regulation:2016/679'}
    assert by_id['directive:1995/46']['is_primary'] is True
    assert by_id['directive:1995/46']['reference_count'] == 2
    assert by_id['directive:1995/46']['reference_types'] == ['implements']
    assert by_id['directive:1995/46']['articles'] == []


def test_intl_basis_type_filter(corpus):
    out = get_intl_basis(corpus, 'act-843-2012', reference_types=['references'])
    assert out['instruments'] == []
    assert 'error' in get_intl_basis(corpus, 'no-such-act')


def test_implementations(corpus):
    out = get_implementations(corpus, 'directive:2014/1')
    assert out['instrument']['community'] == 'AU'
    impl = out['implementations']
    assert [i['document_id'] for i in impl] == ['act-772-2008']
    assert impl[0]['implementation_status'] == 'complete'
    assert get_implementations(corpus, 'directive:2014/1', in_force_only=True)['implementations']
    assert 'error' in get_implementations(corpus, 'regulation:1999/1')


def test_provision_intl_basis(corpus):
    out = get_provision_intl_basis(corpus, 'act-843-2012', 's3')
    assert out['provision_title'] == 'Interpretation of Part'
    assert [(r['instrument_id'], r['is_primary']) for r in out['references']] == [('directive:1995/46', False)]
    assert 'error' in get_provision_intl_basis(corpus, 'act-843-2012', 's77')


def test_sources_and_about(corpus):
    sources = list_sources(corpus)
    assert sources['database']['document_count'] == 4
    assert sources['database']['tier'] == 'free'
    assert sources['sources'][0]['url'] == 'https://ghalii.org'

    info = about(corpus, '9.9.9')
    assert info['server']['version'] == '9.9.9'
    assert info['dataset']['counts']['intl_references'] == 5
    assert info['dataset']['builder'] == 'ghana_law.ingest.corpus'


def test_search_intl_instruments_by_keyword(corpus):
    out = search_intl_instruments(corpus, 'data protection')
    assert [r['id'] for r in out['results']] == ['regulation:2016/679', 'directive:2014/1']
    assert out['total'] == 2
    gdpr = out['results'][0]
    assert gdpr['ghanaian_statute_count'] == 1
    assert gdpr['implementing_statute_count'] == 1


def test_search_intl_instruments_filters(corpus):
    directives = search_intl_instruments(corpus, instrument_type='directive')
    assert [r['id'] for r in directives['results']] == ['directive:2014/1', 'directive:2001/185', 'directive:1995/46']
    recent = search_intl_instruments(corpus, year_from=2010)
    assert {r['id'] for r in recent['results']} == {'regulation:2016/679', 'directive:2014/1'}
    older = search_intl_instruments(corpus, year_to=2001)
    assert {r['id'] for r in older['results']} == {'directive:1995/46', 'directive:2001/185'}
    implemented = search_intl_instruments(corpus, has_ghanaian_implementation=True)
    assert 'directive:2001/185' not in {r['id'] for r in implemented['results']}
    assert len(implemented['results']) == 3
    assert len(search_intl_instruments(corpus, limit=1)['results']) == 1
    assert len(search_intl_instruments(corpus, limit=500)['results']) == 4


def test_compliance_when_every_instrument_is_implemented(corpus):
    out = validate_intl_compliance(corpus, 'act-843-2012')
    assert out['compliance_status'] == 'compliant'
    assert {i['instrument_id']: i['status'] for i in out['instruments']} == {
        'directive:1995/46': 'implemented',
        'regulation:2016/679': 'implemented',
    }
    assert out['warnings'] == ['directive:1995/46 has been superseded by regulation:2016/679']


def test_compliance_partial_and_unclear(corpus):
    partial = validate_intl_compliance(corpus, 'Electronic Transactions')
    assert partial['document_id'] == 'act-772-2008'
    assert partial['compliance_status'] == 'partial'
    assert partial['warnings'] == ['No implementing provision found for directive:2001/185']

    unclear = validate_intl_compliance(corpus, 'act-772-2008', instrument_id='directive:2001/185')
    assert unclear['compliance_status'] == 'unclear'
    assert [i['instrument_id'] for i in unclear['instruments']] == ['directive:2001/185']


def test_compliance_not_applicable(corpus):
    out = validate_intl_compliance(corpus, 'act-843-2012', provision_ref='s2')
    assert out['provision_ref'] == 's2'
    assert out['compliance_status'] == 'not_applicable'
    assert out['instruments'] == []

    repealed = validate_intl_compliance(corpus, 'act-100-1960')
    assert repealed['compliance_status'] == 'not_applicable'
    assert repealed['warnings'] == ['This statute has been repealed']


def test_compliance_unknown_ids(corpus):
    assert 'error' in validate_intl_compliance(corpus, 'no-such-act')
    missing = validate_intl_compliance(corpus, 'act-843-2012', provision_ref='s77')
    assert missing['error'] == 'Provision s77 not found in act-843-2012'
