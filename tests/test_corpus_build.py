import sqlite3

import pytest

from conftest import corpus_acts, make_act
from ghana_law.ingest.corpus import PrimaryImplementationTracker, _load_seed, build_database, eur_lex_url, iter_seed_files
from ghana_law.ingest.crawler import SeedStore
from ghana_law.ingest.schemas import BuildSummary
from ghana_law.parsing.intl_references import extract_intl_references
from ghana_law.storage.db import connect, create_schema


def test_build_summary(tmp_path, seed_store):
    summary = build_database(seed_store.root, tmp_path / 'corpus.db')
    assert summary.documents == 4
    assert summary.provisions == 7
    assert summary.empty_documents == 1
    # duplicate definition term is skipped, not fatal
    assert summary.definitions == 1
    assert summary.intl_documents == 4
    assert summary.intl_references == 5


def test_only_first_implementing_provision_is_primary(corpus):
    rows = corpus.execute(
        """
        SELECT source_id, is_primary_implementation, implementation_status
        FROM intl_references
        WHERE document_id = 'act-843-2012' AND intl_document_id = 'directive:1995/46'
        ORDER BY id
        """
    ).fetchall()
    assert [(r['source_id'], r['is_primary_implementation'], r['implementation_status']) for r in rows] == [
        ('act-843-2012:s1', 1, 'complete'),
        ('act-843-2012:s3', 0, 'unknown'),
    ]


def test_instrument_rows(corpus):
    malabo = corpus.execute("SELECT * FROM intl_documents WHERE id = 'directive:2014/1'").fetchone()
    assert malabo['community'] == 'AU'
    assert malabo['url_eur_lex'] is None
    directive = corpus.execute("SELECT * FROM intl_documents WHERE id = 'directive:1995/46'").fetchone()
    assert directive['short_name'] == 'Directive 1995/46'
    assert directive['url_eur_lex'] == 'https://eur-lex.europa.eu/eli/dir/1995/46/oj'


def test_metadata_written(corpus):
    meta = {r['key']: r['value'] for r in corpus.execute("SELECT key, value FROM db_metadata")}
    assert meta['tier'] == 'free'
    assert meta['jurisdiction'] == 'GH'
    assert meta['builder'] == 'ghana_law.ingest.corpus'
    assert meta['built_at']


def test_empty_document_is_loaded(corpus):
    doc = corpus.execute("SELECT title FROM legal_documents WHERE id = 'act-999-2021'").fetchone()
    assert doc['title'] == 'Pending Content Act, 2021'
    count = corpus.execute("SELECT COUNT(*) FROM legal_provisions WHERE document_id = 'act-999-2021'").fetchone()[0]
    assert count == 0


def test_fts_follows_base_table(tmp_path):
    conn = connect(tmp_path / 'fts.db')
    create_schema(conn)
    conn.execute("INSERT INTO legal_documents (id, type, title, year) VALUES ('act-1-2000', 'act', 'A', 2000)")
    conn.execute(
        "INSERT INTO legal_provisions (document_id, provision_ref, section, content) "
        "VALUES ('act-1-2000', 's1', '1', 'original wording')"
    )
    assert conn.execute("SELECT COUNT(*) FROM provisions_fts WHERE provisions_fts MATCH 'original'").fetchone()[0] == 1
    conn.execute("UPDATE legal_provisions SET content = 'revised wording' WHERE provision_ref = 's1'")
    assert conn.execute("SELECT COUNT(*) FROM provisions_fts WHERE provisions_fts MATCH 'original'").fetchone()[0] == 0
    assert conn.execute("SELECT COUNT(*) FROM provisions_fts WHERE provisions_fts MATCH 'revised'").fetchone()[0] == 1
    conn.close()


def test_rebuild_replaces_previous_database(tmp_path, seed_store):
    db_path = tmp_path / 'corpus.db'
    build_database(seed_store.root, db_path)
    second = build_database(seed_store.root, db_path)
    assert second.documents == 4


def test_no_seeds_gives_empty_schema(tmp_path):
    db_path = tmp_path / 'empty.db'
    summary = build_database(tmp_path / 'nothing-here', db_path)
    assert summary.documents == 0
    conn = connect(db_path, readonly=True)
    assert conn.execute("SELECT COUNT(*) FROM legal_documents").fetchone()[0] == 0
    conn.close()


def test_seed_iteration_skips_hidden_files(tmp_path):
    store = SeedStore(tmp_path)
    store.write(corpus_acts()[0])
    (tmp_path / '_index.json').write_text('[]', encoding='utf-8')
    (tmp_path / '.partial.json').write_text('{}', encoding='utf-8')
    assert [p.name for p in iter_seed_files(tmp_path)] == ['2012_843.json']


def test_invalid_seed_aborts_build(tmp_path, seed_store):
    (seed_store.root / '2030_1.json').write_text('{"id": "broken"}', encoding='utf-8')
    with pytest.raises(ValueError):
        build_database(seed_store.root, tmp_path / 'broken.db')


def test_eur_lex_url_only_for_european_instruments():
    gdpr = extract_intl_references('Regulation (EU) 2016/679')[0]
    assert eur_lex_url(gdpr) == 'https://eur-lex.europa.eu/eli/reg/2016/679/oj'


def test_readonly_connection_rejects_writes(corpus):
    with pytest.raises(sqlite3.OperationalError):
        corpus.execute("DELETE FROM legal_documents")


def test_primary_tracker_across_three_provisions():
    tracker = PrimaryImplementationTracker()
    mentions = [
        extract_intl_references('Regulation 2016/679 is referred to here.')[0],
        extract_intl_references('This Part implements Regulation 2016/679.')[0],
        extract_intl_references('This Part also gives effect to Regulation 2016/679.')[0],
    ]
    flags = []
    for ref in mentions:
        flags.append(tracker.is_available('act-843-2012', ref))
        if flags[-1]:
            tracker.claim('act-843-2012', ref)
    assert flags == [False, True, False]
    # a different document gets its own primary
    assert tracker.is_available('act-772-2008', mentions[1]) is True


def test_primary_moves_on_when_first_reference_is_a_duplicate(tmp_path):
    conn = connect(tmp_path / 'dup.db')
    create_schema(conn)
    conn.execute('PRAGMA foreign_keys = OFF')
    conn.execute(
        "INSERT INTO intl_documents (id, type, year, number, community) "
        "VALUES ('regulation:2016/679', 'regulation', 2016, 679, 'EU')"
    )
    conn.execute(
        "INSERT INTO intl_references (source_type, source_id, document_id, intl_document_id, intl_article, "
        "reference_type) VALUES ('provision', 'act-1-2000:s1', 'act-1-2000', 'regulation:2016/679', '6', 'implements')"
    )
    act = make_act(1, 2000, 'Sample Act, 2000', provisions=[
        {'provision_ref': 's1', 'section': '1', 'title': 'Application',
         'content': 'This Act implements Article 6 of Regulation (EU) 2016/679.'},
        {'provision_ref': 's2', 'section': '2', 'title': 'Scope',
         'content': 'This Part implements Regulation (EU) 2016/679.'},
    ])
    summary = BuildSummary()
    _load_seed(conn, act, PrimaryImplementationTracker(), summary)
    assert summary.intl_references == 1
    row = conn.execute(
        "SELECT is_primary_implementation, implementation_status FROM intl_references WHERE source_id = 'act-1-2000:s2'"
    ).fetchone()
    assert (row['is_primary_implementation'], row['implementation_status']) == (1, 'complete')
    conn.close()
