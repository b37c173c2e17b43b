from pydantic import BaseModel, Field
from typing import Dict, List, Literal, Optional

StyleIssueType = Literal["tone", "formality", "clarity", "wordChoice"]
CitationIssueType = Literal["missing", "style_inconsistency"]
FormattingIssueType = Literal["spacing", "numbering"]


class HeadingAnalysis(BaseModel):
    levels: List[int] = Field(default_factory=list)
    proper_hierarchy: bool = True
    skipped_at: List[str] = Field(default_factory=list)  # headings that jump more than one level
    consistent_formatting: bool = True


class FlowAnalysis(BaseModel):
    logical_progression: bool = False
    out_of_order: bool = False
    conclusion_before_introduction: bool = False
    transition_density: float = 0.0
    coherence_score: float = 0.0
    issues: List[str] = Field(default_factory=list)
    suggestions: List[str] = Field(default_factory=list)


class StructureAnalysis(BaseModel):
    has_introduction: bool
    has_conclusion: bool
    heading_hierarchy: HeadingAnalysis
    section_flow: FlowAnalysis
    section_count: int = 0


class StyleIssue(BaseModel):
    type: StyleIssueType
    rule: str
    description: str
    suggestion: Optional[str] = None


class StyleAnalysis(BaseModel):
    academic_tone: float
    formality_level: float
    clarity_score: float
    average_sentence_length: float = 0.0
    long_sentence_ratio: float = 0.0
    readability: Dict[str, float] = Field(default_factory=dict)
    style_issues: List[StyleIssue] = Field(default_factory=list)


class TerminologyIssue(BaseModel):
    term: str
    inconsistent_usage: List[str]
    counts: Dict[str, int] = Field(default_factory=dict)
    suggested_standardization: str
    locations: List[int] = Field(default_factory=list)


class CitationIssue(BaseModel):
    type: CitationIssueType
    rule: str
    description: str
    suggestion: Optional[str] = None
    start: Optional[int] = None
    end: Optional[int] = None
    context: Optional[str] = None
    claim: Optional[str] = None


class FormattingIssue(BaseModel):
    type: FormattingIssueType
    description: str
    suggestion: Optional[str] = None
    occurrences: int = 0


class ConsistencyAnalysis(BaseModel):
    terminology_issues: List[TerminologyIssue] = Field(default_factory=list)
    citation_issues: List[CitationIssue] = Field(default_factory=list)
    formatting_issues: List[FormattingIssue] = Field(default_factory=list)
    citation_styles: List[str] = Field(default_factory=list)


class CompletenessAnalysis(BaseModel):
    missing_sections: List[str] = Field(default_factory=list)
    found_sections: List[str] = Field(default_factory=list)
    insufficient_detail: List[str] = Field(default_factory=list)
    content_score: float = 0.0
    completeness_score: float = 0.0
