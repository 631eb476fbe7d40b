import os
import sys

import pytest

# Ensure the `src/` directory is on sys.path so we can import `ghana_law` package
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
SRC_DIR = os.path.join(PROJECT_ROOT, "src")
if SRC_DIR not in sys.path:
    sys.path.insert(0, SRC_DIR)

from ghana_law.ingest.corpus import build_database  # noqa: E402
from ghana_law.ingest.crawler import SeedStore  # noqa: E402
from ghana_law.ingest.schemas import Definition, ParsedAct, Provision  # noqa: E402
from ghana_law.storage.db import connect  # noqa: E402


AKN_HTML = """<html>
<head>
<title>Data Protection Act, 2012 (Act 843) – GhaLII</title>
<script id="track-page-properties" type="application/json">{"expression_frbr_uri": "/akn/gh/act/2012/843/eng@2012-05-10"}</script>
</head>
<body>
<section class="akn-part" id="part_I">
  <h2>PART I - PRELIMINARY</h2>
  <section class="akn-section" id="part_I__sec_1">
    <h3>1. Interpretation</h3>
    <section class="akn-subsection" id="part_I__sec_1__subsec_1">
      <span class="akn-num">(1)</span>
      <span class="akn-content"><span class="akn-p">In this Act, "data controller" means a person who determines the purposes of processing; "personal data" means data about an individual;</span></span>
    </section>
  </section>
  <section class="akn-section" id="part_I__sec_2">
    <h3>2. Application</h3>
    <span class="akn-content"><span class="akn-p">This Act implements Directive 95/46/EC and applies to processing in Ghana.</span></span>
  </section>
</section>
<section class="akn-part" id="part_II">
  <h2>PART II - DATA PROTECTION PRINCIPLES</h2>
  <section class="akn-chapter" id="part_II__chp_1">
    <h2>CHAPTER 1 - Principles</h2>
    <section class="akn-section" id="part_II__chp_1__sec_3">
      <h3>3. Principles of data protection</h3>
      <section class="akn-subsection"><span class="akn-num">(1)</span><span class="akn-content"><span class="akn-p">A person who processes data shall act lawfully.</span></span></section>
      <section class="akn-subsection"><span class="akn-num">(2)</span><span class="akn-content"><span class="akn-p">Processing shall be accountable.</span></span></section>
    </section>
  </section>
</section>
<section class="akn-section" data-eid="sec_4">
  <h3>4. Registration</h3>
  <span class="akn-p">A data controller shall register with the Commission.</span>
</section>
<section class="akn-section" id="schedule_1">
  <h3>Schedule</h3>
  <span class="akn-p">Not a numbered section.</span>
</section>
</body>
</html>
"""

TOC_HTML = """<html>
<head>
<title>Cybersecurity Act, 2020 (Act 1038) – GhaLII</title>
<script id="akn_toc_json" type="application/json">[
  {"type": "part", "id": "part_I", "title": "Part I - Cyber Security Authority", "children": [
    {"type": "section", "id": "sec_1", "title": "1. Establishment of the Authority", "heading": "Establishment of the Authority", "children": []}
  ]},
  {"type": "section", "id": "sec_2", "title": "2. Objects", "heading": "Objects"}
]</script>
</head>
<body>
<div id="sec_1">
<h3>1. Establishment of the Authority</h3>
<p>There is established a Cyber Security Authority.</p>
</div>
<div id="sec_2">
<h3>2. Objects</h3>
<p>The object of the Authority is to regulate cybersecurity activities.</p>
</div>
</body>
</html>
"""

TEXT_HTML = """<html>
<head><title>Old Ordinance Act, 1960</title></head>
<body><pre>
Section 1. Short title
This Act may be cited as the Old Ordinance Act.
Section 2 - Repeal
The Previous Ordinance is repealed.
</pre></body>
</html>
"""

INDEX_HTML = """<html><body>
<table>
<tr><td><a href="/akn/gh/act/2012/843/eng@2012-05-10">Data Protection Act, 2012 (Act 843)</a></td></tr>
<tr><td><a href="/akn/gh/act/2020/1038/eng@2020-12-29">Cybersecurity Act, 2020 (Act 1038)</a></td></tr>
<tr><td><a href="/akn/gh/act/pndcl/1992/305/eng@1992-12-17">  Local   Government Law  </a></td></tr>
<tr><td><a href="/akn/gh/act/2012/843/eng@2012-05-10">Data Protection Act, 2012 (Act 843)</a></td></tr>
<tr><td><a href="/akn/gh/act/2012/843/eng@2012-05-10"></a></td></tr>
</table>
<nav><a href="?page=1">Next</a></nav>
</body></html>
"""


def make_act(act_number, year, title, provisions=(), definitions=(), status='in_force'):
    return ParsedAct(
        id=f"act-{act_number}-{year}",
        title=title,
        short_name='',
        act_number=act_number,
        year=year,
        status=status,
        issued_date=f"{year}-01-01",
        url=f"https://ghalii.org/akn/gh/act/{year}/{act_number}",
        provisions=[Provision(**p) for p in provisions],
        definitions=[Definition(**d) for d in definitions],
    )


def corpus_acts():
    return [
        make_act(843, 2012, "Data Protection Act, 2012 (Act 843)", provisions=[
            {'provision_ref': 's1', 'section': '1', 'title': 'Interpretation',
             'content': 'This Act implements Directive 95/46/EC and has regard to the GDPR.'},
            {'provision_ref': 's2', 'section': '2', 'title': 'Register',
             'content': 'The Commission shall keep a register of data controllers.'},
            {'provision_ref': 's3', 'section': '3', 'title': 'Interpretation of Part',
             'content': 'Directive 95/46/EC is implemented in this Part.'},
            {'provision_ref': 's5(1)', 'section': '5(1)', 'title': 'Data subject rights',
             'content': 'A data subject may request access to personal data.'},
        ], definitions=[
            {'term': 'data controller', 'definition': 'a person who determines purposes', 'source_provision': 's1'},
            {'term': 'data controller', 'definition': 'a duplicate that must be dropped', 'source_provision': 's1'},
        ]),
        make_act(772, 2008, "Electronic Transactions Act, 2008 (Act 772)", provisions=[
            {'provision_ref': 's1', 'section': '1', 'title': 'Application',
             'content': 'This Act supplements the Malabo Convention on electronic commerce.'},
            {'provision_ref': 's2', 'section': '2', 'title': 'Cooperation',
             'content': 'Regard is had to the Budapest Convention.'},
        ]),
        make_act(100, 1960, "Old Ordinance Act, 1960", status='repealed', provisions=[
            {'provision_ref': 's1', 'section': '1', 'title': 'Short title',
             'content': 'This Act may be cited as the Old Ordinance Act.'},
        ]),
        make_act(999, 2021, "Pending Content Act, 2021"),
    ]


@pytest.fixture
def seed_store(tmp_path):
    store = SeedStore(tmp_path / "seed")
    for act in corpus_acts():
        store.write(act)
    return store


@pytest.fixture
def corpus_path(tmp_path, seed_store):
    db_path = tmp_path / "database.db"
    build_database(seed_store.root, db_path)
    return db_path


@pytest.fixture
def corpus(corpus_path):
    conn = connect(corpus_path, readonly=True)
    yield conn
    conn.close()
