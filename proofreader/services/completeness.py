"""
Completeness of a thesis proposal against a fixed section template.

The template and the content checks are tuned for research proposals, so
minimum word counts are lower than for a finished thesis.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List, Optional, Pattern, Tuple
import re

from proofreader.core.config import (
    DETAIL_FLOOR_WORDS, COMPLETENESS_WEIGHTS, QUALITY_PASS_THRESHOLD,
    SECTION_BALANCE_RATIO, DEPTH_MIN_INDICATORS, DEPTH_MIN_CHARS,
    EVIDENCE_MIN_INDICATORS, EVIDENCE_MIN_CHARS, CRITICAL_MIN_INDICATORS, CRITICAL_MIN_CHARS,
)
from proofreader.models.analysis import CompletenessAnalysis
from proofreader.services.consistency import has_citation
from proofreader.services.sections import (
    Section, contains_term, content_sections, extract_sections, normalize_title,
)


@dataclass(frozen=True)
class ExpectedSection:
    name: str
    aliases: Tuple[str, ...]
    critical: bool
    min_words: int
    description: str

    @property
    def names(self) -> Tuple[str, ...]:
        return (self.name,) + self.aliases


EXPECTED_SECTIONS: List[ExpectedSection] = [
    ExpectedSection("introduction", ("intro", "background", "overview"), True, 100,
                    "Should establish context, problem statement, and objectives"),
    ExpectedSection("literature review", ("related work", "prior research", "theoretical framework"), False, 250,
                    "Should summarize relevant research and identify gaps (concise for proposals)"),
    ExpectedSection("methodology", ("methods", "approach", "research design"), True, 200,
                    "Should outline the research approach, data collection, and analysis plan (concise)"),
    ExpectedSection("research questions", ("research problem", "objectives", "aims"), True, 50,
                    "Should clearly state specific research questions or hypotheses"),
    ExpectedSection("significance", ("importance", "contribution", "impact"), False, 100,
                    "Should explain the importance and potential impact of the research"),
    ExpectedSection("timeline", ("schedule", "plan", "milestones"), False, 50,
                    "A brief timeline or plan for the proposed research"),
    ExpectedSection("limitations", ("constraints", "scope"), False, 50,
                    "A short acknowledgement of scope and limitations"),
]

# (label reported when absent, pattern over lower-cased text); None means "any citation"
CONTENT_REQUIREMENTS: List[Tuple[str, Optional[Pattern[str]]]] = [
    ("thesis statement or main argument",
     re.compile(r"thesis\s+statement|main\s+argument|central\s+claim|research\s+hypothesis|\bwe\s+argue\b")),
    ("clear research questions",
     re.compile(r"research\s+questions?|research\s+problem|\bwhat\s+is\b|\bhow\s+does\b|\bwhy\s+do\b|\?")),
    ("literature citations", None),
    ("research methodology description",
     re.compile(r"\bmethod|\bapproach|data\s+collection|\banalys[ie]s\b|\bsurvey|\binterview|\bexperiment")),
    ("research significance or contribution",
     re.compile(r"significan|\bimportan|contribut|\bimpact|\bbenefit|\badvance")),
    ("research scope or limitations",
     re.compile(r"\bscope\b|limitation|constraint|boundar|\bexclud")),
    ("research timeline or plan",
     re.compile(r"timeline|schedule|\bplan|\bphase|\bmonths?\b|\bweeks?\b|semester|\byears?\b")),
    ("expected outcomes or results",
     re.compile(r"outcome|\bresults?\b|finding|conclusion|\bexpect|anticipat")),
]

DEPTH_INDICATORS = [
    "analysis", "examination", "investigation", "exploration", "evaluation",
    "comparison", "synthesis", "interpretation", "discussion", "critique",
]
EVIDENCE_INDICATORS = [
    "for example", "for instance", "such as", "including", "specifically",
    "data shows", "results indicate", "evidence suggests", "studies demonstrate",
]
CRITICAL_INDICATORS = [
    "however", "although", "despite", "nevertheless", "on the other hand",
    "alternatively", "in contrast", "conversely", "whereas", "while",
]


def _section_found(req: ExpectedSection, content_lower: str, titles: List[str]) -> bool:
    return any(
        contains_term(content_lower, n) or any(contains_term(t, n) for t in titles)
        for n in req.names
    )


def matching_requirement(title: str) -> Optional[ExpectedSection]:
    t = normalize_title(title)
    for req in EXPECTED_SECTIONS:
        if any(contains_term(t, n) for n in req.names):
            return req
    return None


def check_content_requirements(content: str) -> Tuple[float, List[str]]:
    lower = content.lower()
    missing: List[str] = []
    for label, pattern in CONTENT_REQUIREMENTS:
        present = has_citation(content) if pattern is None else pattern.search(lower) is not None
        if not present:
            missing.append(label)
    found = len(CONTENT_REQUIREMENTS) - len(missing)
    return found / len(CONTENT_REQUIREMENTS), missing


def completeness_score(
    section_ratio: float,
    detail_ratio: float,
    content_ratio: float,
    weights: Dict[str, float] = COMPLETENESS_WEIGHTS,
) -> float:
    return (
        weights["sections"] * section_ratio
        + weights["detail"] * detail_ratio
        + weights["content"] * content_ratio
    )


def content_quality_issues(content: str, sections: List[Section]) -> List[str]:
    issues: List[str] = []
    lower = content.lower()

    depth = sum(1 for t in DEPTH_INDICATORS if t in lower)
    if depth < DEPTH_MIN_INDICATORS and len(content) > DEPTH_MIN_CHARS:
        issues.append("Limited analytical depth - consider adding more analysis, evaluation, and critical discussion")

    evidence = sum(1 for t in EVIDENCE_INDICATORS if t in lower)
    if evidence < EVIDENCE_MIN_INDICATORS and len(content) > EVIDENCE_MIN_CHARS:
        issues.append("Limited use of examples and evidence - add specific examples and supporting data")

    critical = sum(1 for t in CRITICAL_INDICATORS if contains_term(lower, t))
    if critical < CRITICAL_MIN_INDICATORS and len(content) > CRITICAL_MIN_CHARS:
        issues.append("Limited critical analysis - consider adding contrasting viewpoints and alternative perspectives")

    if len(sections) > 2:
        counts = [s.word_count for s in sections]
        if max(counts) > min(counts) * SECTION_BALANCE_RATIO:
            issues.append("Unbalanced section development - some sections are significantly longer than others")
    return issues


def analyze_completeness(content: str) -> CompletenessAnalysis:
    lower = content.lower()
    sections = content_sections(extract_sections(content))
    titles = [normalize_title(s.title) for s in sections if not s.implicit]

    missing: List[str] = []
    found: List[str] = []
    for req in EXPECTED_SECTIONS:
        if _section_found(req, lower, titles):
            found.append(req.name)
        elif req.critical:
            missing.append(req.name)

    insufficient: List[str] = []
    for s in sections:
        req = None if s.implicit else matching_requirement(s.title)
        if req and s.word_count < req.min_words:
            insufficient.append(
                f"{s.title} ({s.word_count} words, needs {req.min_words}+ words): {req.description}"
            )

    content_ratio, content_missing = check_content_requirements(content)

    critical = [r for r in EXPECTED_SECTIONS if r.critical]
    section_ratio = sum(1 for r in critical if r.name in found) / len(critical)
    detail_ratio = (
        sum(1 for s in sections if s.word_count >= DETAIL_FLOOR_WORDS) / len(sections)
        if sections else 0.0
    )
    score = completeness_score(section_ratio, detail_ratio, content_ratio)

    if score < QUALITY_PASS_THRESHOLD:
        insufficient.extend(content_quality_issues(content, sections))

    for label in content_missing:
        if label not in missing:
            missing.append(label)

    return CompletenessAnalysis(
        missing_sections=missing,
        found_sections=found,
        insufficient_detail=insufficient,
        content_score=content_ratio,
        completeness_score=score,
    )
