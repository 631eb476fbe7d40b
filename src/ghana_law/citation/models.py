from typing import List, Literal, Optional
from pydantic import BaseModel, Field

CitationStyle = Literal['full', 'short', 'pinpoint']


class ParsedCitation(BaseModel):
    valid: bool
    kind: str = 'unknown'
    grammar: Optional[str] = None
    title: Optional[str] = None
    act_number: Optional[int] = None
    year: Optional[int] = None
    section: Optional[str] = None
    subsection: Optional[str] = None
    paragraph: Optional[str] = None
    error: Optional[str] = None

    @property
    def pinpoint(self) -> str:
        ref = self.section or ''
        if self.subsection:
            ref += f"({self.subsection})"
        if self.paragraph:
            ref += f"({self.paragraph})"
        return ref


class ValidationResult(BaseModel):
    citation: ParsedCitation
    document_exists: bool = False
    provision_exists: bool = False
    document_id: Optional[str] = None
    document_title: Optional[str] = None
    status: Optional[str] = None
    warnings: List[str] = Field(default_factory=list)
