from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional

from proofreader.models.concern import Category, ProofreadingConcern, Severity


class AnalysisOptions(BaseModel):
    categories: List[Category] = Field(default_factory=list)
    min_severity: Optional[Severity] = None
    include_grammar: bool = True


class AnalyzeRequest(BaseModel):
    conversation_id: str = Field(min_length=1)
    document_content: str
    idea_definitions: List[Dict[str, Any]] = Field(default_factory=list)
    analysis_options: Optional[AnalysisOptions] = None


class AnalysisSummary(BaseModel):
    total_concerns: int
    concerns_by_category: Dict[str, int]
    concerns_by_severity: Dict[str, int]


class AnalysisMetadata(BaseModel):
    processing_time_ms: int
    model_used: str
    analysis_timestamp: str
    version: str
    content_length: int
    idea_definitions_used: int


class AnalyzeResponse(BaseModel):
    success: bool = True
    concerns: List[ProofreadingConcern]
    analysis: AnalysisSummary
    metadata: AnalysisMetadata
