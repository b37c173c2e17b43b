from __future__ import annotations
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Dict, List, Optional, Tuple
import logging

from proofreader.core.config import ANALYZER_WORKERS
from proofreader.core.errors import AnalysisSubsystemError, ValidationError
from proofreader.models.api import AnalysisOptions
from proofreader.models.concern import (
    CATEGORIES, SEVERITIES, SEVERITY_RANK, ProofreadingConcern,
)
from proofreader.services import concerns as C
from proofreader.services.completeness import analyze_completeness
from proofreader.services.consistency import analyze_consistency
from proofreader.services.llm import AIConcernGenerator, StructuredLLM
from proofreader.services.structure import analyze_structure
from proofreader.services.style import analyze_style
from proofreader.utils.perf import MeasureSink, NullMonitor

log = logging.getLogger("analyze")

Analyzer = Tuple[str, Callable, Callable]

# (name, analysis, analysis -> concerns); independent of each other
ANALYZERS: List[Analyzer] = [
    ("structure", analyze_structure, C.structure_concerns),
    ("style", analyze_style, C.style_concerns),
    ("consistency", analyze_consistency, C.consistency_concerns),
    ("completeness", analyze_completeness, C.completeness_concerns),
]


def run_analyzer(analyzer: Analyzer, content: str, conversation_id: str) -> List[ProofreadingConcern]:
    name, analyze, convert = analyzer
    try:
        return convert(analyze(content), conversation_id)
    except Exception as e:
        err = AnalysisSubsystemError(name, e)
        log.warning("%s; continuing without its findings", err, exc_info=True)
        return []


class ConcernAnalysisEngine:
    """
    Runs the rule-based analyzers (and the AI generator when an LLM client is
    given) over one document and returns prioritized, deduplicated concerns.

    Holds no per-call state, so one instance can serve concurrent calls.
    """

    def __init__(
        self,
        llm: Optional[StructuredLLM] = None,
        monitor: Optional[MeasureSink] = None,
        max_workers: int = ANALYZER_WORKERS,
        analyzers: Optional[List[Analyzer]] = None,
    ):
        self._ai = AIConcernGenerator(llm) if llm is not None else None
        self._monitor = monitor or NullMonitor()
        self._max_workers = max_workers
        self._analyzers = list(analyzers if analyzers is not None else ANALYZERS)

    @property
    def ai_enabled(self) -> bool:
        return self._ai is not None

    def _run_ai(self, content: str, conversation_id: str) -> List[ProofreadingConcern]:
        try:
            return self._ai.generate(content, conversation_id)
        except Exception:
            log.warning("AI concern generation raised; ignoring", exc_info=True)
            return []

    def analyze_content(self, content: str, conversation_id: str) -> List[ProofreadingConcern]:
        if not content or not content.strip():
            raise ValidationError("Content is required for analysis")

        self._monitor.start_measure("content-analysis")
        try:
            with ThreadPoolExecutor(max_workers=self._max_workers) as pool:
                ai_future = (
                    pool.submit(self._run_ai, content, conversation_id) if self._ai else None
                )
                futures = [
                    pool.submit(run_analyzer, a, content, conversation_id) for a in self._analyzers
                ]
                rule_based: List[ProofreadingConcern] = []
                for f in futures:
                    rule_based.extend(f.result())
                ai = ai_future.result() if ai_future else []
        finally:
            self._monitor.end_measure("content-analysis")

        final = C.sort_concerns(C.deduplicate(ai + rule_based))
        log.info(
            "Analysis for %s: %d rule-based + %d AI concern(s) -> %d after dedup",
            conversation_id, len(rule_based), len(ai), len(final),
        )
        return final


def summarize(concerns: List[ProofreadingConcern]) -> Dict[str, Dict[str, int]]:
    by_category = {c: 0 for c in CATEGORIES}
    by_severity = {s: 0 for s in SEVERITIES}
    for c in concerns:
        by_category[c.category] += 1
        by_severity[c.severity] += 1
    return {"by_category": by_category, "by_severity": by_severity}


def filter_concerns(concerns: List[ProofreadingConcern], options: AnalysisOptions) -> List[ProofreadingConcern]:
    out = concerns
    if options.categories:
        out = [c for c in out if c.category in options.categories]
    if options.min_severity:
        floor = SEVERITY_RANK[options.min_severity]
        out = [c for c in out if SEVERITY_RANK[c.severity] >= floor]
    if not options.include_grammar:
        out = [c for c in out if c.category != "grammar"]
    return out
