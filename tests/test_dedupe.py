from ghana_law.ingest.dedupe import dedupe_provisions
from ghana_law.ingest.schemas import Provision


def _prov(ref, content, title=None):
    return Provision(provision_ref=ref, section=ref.lstrip('s'), title=title, content=content)


def test_longer_content_wins():
    short = _prov('s1', 'a' * 40, title='Short')
    long = _prov('s1', 'b' * 60, title='Long')
    out, stats = dedupe_provisions([short, _prov('s2', 'other'), long])
    assert [p.provision_ref for p in out] == ['s1', 's2']
    assert out[0].content == 'b' * 60
    assert stats.duplicate_refs == 1
    assert stats.conflicting_duplicates == 1


def test_equal_length_keeps_first_and_counts_conflict():
    out, stats = dedupe_provisions([_prov('s1', 'first text'), _prov('s1', 'other text')])
    assert len(out) == 1
    assert out[0].content == 'first text'
    assert stats.conflicting_duplicates == 1


def test_whitespace_only_differences_are_not_conflicts():
    out, stats = dedupe_provisions([_prov('s1', 'same  text'), _prov(' s1 ', 'same text')])
    assert len(out) == 1
    assert stats.duplicate_refs == 1
    assert stats.conflicting_duplicates == 0


def test_missing_title_taken_from_loser():
    out, _ = dedupe_provisions([_prov('s3', 'short', title='Heading'), _prov('s3', 'much longer body')])
    assert out[0].content == 'much longer body'
    assert out[0].title == 'Heading'
