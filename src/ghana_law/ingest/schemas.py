"""Canonical schemas for statute ingestion.

These pydantic models define the records that flow through the pipeline:
index discovery -> act parsing -> seed JSON -> corpus build.
Seed files on disk are `ParsedAct.model_dump_json()` output, so field names
here are the seed file format.
"""
from __future__ import annotations
from pydantic import BaseModel, Field
from typing import List, Literal, Optional

InstrumentType = Literal['directive', 'regulation']
Community = Literal['EU', 'EC', 'EEC', 'Euratom', 'AU', 'ECOWAS']
Relationship = Literal['implements', 'references']
DocumentStatus = Literal['in_force', 'amended', 'repealed']


def act_document_id(act_number: int, year: int) -> str:
    return f"act-{act_number}-{year}"


class ActIndexEntry(BaseModel):
    title: str
    year: int
    act_number: int
    url: str

    @property
    def document_id(self) -> str:
        return act_document_id(self.act_number, self.year)


class ActIndexResult(BaseModel):
    entries: List[ActIndexEntry] = Field(default_factory=list)
    has_next_page: bool = False


class Provision(BaseModel):
    provision_ref: str
    part: Optional[str] = None
    chapter: Optional[str] = None
    section: str
    title: Optional[str] = None
    content: str


class Definition(BaseModel):
    term: str
    definition: str
    source_provision: Optional[str] = None


class ParsedAct(BaseModel):
    id: str
    type: str = 'act'
    title: str
    short_name: str = ''
    act_number: int
    year: int
    status: DocumentStatus = 'in_force'
    issued_date: Optional[str] = None
    in_force_date: Optional[str] = None
    url: Optional[str] = None
    provisions: List[Provision] = Field(default_factory=list)
    definitions: List[Definition] = Field(default_factory=list)


class ExtractedReference(BaseModel):
    instrument_type: InstrumentType
    community: Community
    year: int
    number: int
    instrument_id: str
    article: Optional[str] = None
    full_citation: str
    context: str
    relationship: Relationship
    title: Optional[str] = None  # display title for named instruments
    is_primary: bool = False

    @property
    def dedupe_key(self) -> tuple[str, str]:
        return (self.instrument_id, self.article or '')


class DedupStats(BaseModel):
    duplicate_refs: int = 0
    conflicting_duplicates: int = 0


class IngestSummary(BaseModel):
    processed: int = 0
    skipped: int = 0
    failed: int = 0
    provisions: int = 0


class BuildSummary(BaseModel):
    documents: int = 0
    provisions: int = 0
    definitions: int = 0
    intl_documents: int = 0
    intl_references: int = 0
    empty_documents: int = 0
    duplicate_refs: int = 0
    conflicting_duplicates: int = 0


class UpdateHit(BaseModel):
    document_id: str
    title: str
    year: int
    act_number: int


__all__ = [
    'ActIndexEntry', 'ActIndexResult', 'Provision', 'Definition', 'ParsedAct',
    'ExtractedReference', 'DedupStats', 'IngestSummary', 'BuildSummary', 'UpdateHit',
    'act_document_id',
]
