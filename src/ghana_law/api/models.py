from typing import List, Literal, Optional
from pydantic import BaseModel, Field

ReferenceType = Literal[
    'implements', 'supplements', 'applies', 'references', 'complies_with',
    'derogates_from', 'amended_by', 'repealed_by', 'cites_article',
]


class CitationRequest(BaseModel):
    citation: str = Field(min_length=1, max_length=500)


class FormatCitationRequest(CitationRequest):
    format: Literal['full', 'short', 'pinpoint'] = 'full'


class SearchRequest(BaseModel):
    query: str = Field(min_length=1, max_length=1000)
    document_id: Optional[str] = Field(default=None, max_length=300)
    status: Optional[Literal['in_force', 'amended', 'repealed']] = None
    limit: int = Field(default=10, ge=1, le=50)


class ProvisionRequest(BaseModel):
    document_id: str = Field(min_length=1, max_length=300)
    section: Optional[str] = Field(default=None, max_length=50)
    provision_ref: Optional[str] = Field(default=None, max_length=50)


class CurrencyRequest(BaseModel):
    document_id: str = Field(min_length=1, max_length=300)
    provision_ref: Optional[str] = Field(default=None, max_length=50)


class StanceRequest(BaseModel):
    query: str = Field(min_length=1, max_length=1000)
    document_id: Optional[str] = Field(default=None, max_length=300)
    limit: int = Field(default=5, ge=1, le=20)


class IntlBasisRequest(BaseModel):
    document_id: str = Field(min_length=1, max_length=300)
    include_articles: bool = False
    reference_types: Optional[List[ReferenceType]] = None


class ImplementationsRequest(BaseModel):
    instrument_id: str = Field(min_length=1, max_length=100, examples=['regulation:2016/679'])
    primary_only: bool = False
    in_force_only: bool = False


class ProvisionBasisRequest(BaseModel):
    document_id: str = Field(min_length=1, max_length=300)
    provision_ref: str = Field(min_length=1, max_length=50)


class IntlSearchRequest(BaseModel):
    query: Optional[str] = Field(default=None, max_length=300)
    type: Optional[Literal['directive', 'regulation']] = None
    year_from: Optional[int] = Field(default=None, ge=1900, le=2100)
    year_to: Optional[int] = Field(default=None, ge=1900, le=2100)
    has_ghanaian_implementation: bool = False
    limit: int = Field(default=20, ge=1, le=100)


class ComplianceRequest(BaseModel):
    document_id: str = Field(min_length=1, max_length=300)
    provision_ref: Optional[str] = Field(default=None, max_length=50)
    instrument_id: Optional[str] = Field(default=None, max_length=100, examples=['regulation:2016/679'])
