import logging
import time
from datetime import datetime, timezone
from functools import lru_cache

from fastapi import APIRouter, Depends, HTTPException

from proofreader.core import config
from proofreader.core.errors import ValidationError
from proofreader.models.api import (
    AnalysisMetadata, AnalysisSummary, AnalyzeRequest, AnalyzeResponse,
)
from proofreader.services.analyze import ConcernAnalysisEngine, filter_concerns, summarize
from proofreader.services.llm import OpenAIStructuredClient
from proofreader.utils.perf import PerformanceMonitor

log = logging.getLogger("routes_analyze")

router = APIRouter(tags=["analyze"])


@lru_cache(maxsize=1)
def get_engine() -> ConcernAnalysisEngine:
    # AI concerns only when a key is configured; heuristics always run
    llm = OpenAIStructuredClient(api_key=config.OPENAI_API_KEY) if config.OPENAI_API_KEY else None
    if llm is None:
        log.info("OPENAI_API_KEY missing - rule-based analysis only.")
    return ConcernAnalysisEngine(llm=llm, monitor=PerformanceMonitor())


def _validate(req: AnalyzeRequest) -> None:
    if len(req.document_content) > config.MAX_DOCUMENT_CHARS:
        raise HTTPException(
            status_code=413,
            detail=f"Document content too large (max {config.MAX_DOCUMENT_CHARS} characters)",
        )
    if len(req.document_content.strip()) < config.MIN_DOCUMENT_CHARS:
        raise HTTPException(status_code=400, detail="Document content too short for meaningful analysis")


@router.post("/analyze", response_model=AnalyzeResponse)
def analyze(req: AnalyzeRequest, engine: ConcernAnalysisEngine = Depends(get_engine)):
    started = time.perf_counter()
    _validate(req)
    try:
        concerns = engine.analyze_content(req.document_content, req.conversation_id)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if req.analysis_options:
        concerns = filter_concerns(concerns, req.analysis_options)

    counts = summarize(concerns)
    return AnalyzeResponse(
        concerns=concerns,
        analysis=AnalysisSummary(
            total_concerns=len(concerns),
            concerns_by_category=counts["by_category"],
            concerns_by_severity=counts["by_severity"],
        ),
        metadata=AnalysisMetadata(
            processing_time_ms=int((time.perf_counter() - started) * 1000),
            model_used=config.OPENAI_MODEL if engine.ai_enabled else "rule-based",
            analysis_timestamp=datetime.now(timezone.utc).isoformat(),
            version=config.ANALYSIS_VERSION,
            content_length=len(req.document_content),
            idea_definitions_used=len(req.idea_definitions),
        ),
    )
