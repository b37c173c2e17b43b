from __future__ import annotations
from typing import Dict, List, Pattern, Tuple
import re

from proofreader.core.config import CITATION_WINDOW_CHARS, REFERENCE_TAIL_FRACTION
from proofreader.models.analysis import (
    CitationIssue, ConsistencyAnalysis, FormattingIssue, TerminologyIssue,
)


def _v(name: str, pattern: str) -> Tuple[str, Pattern[str]]:
    return name, re.compile(pattern, re.I)


# preferred variant first
TERMINOLOGY_GROUPS: List[List[Tuple[str, Pattern[str]]]] = [
    [_v("methodology", r"\bmethodolog(?:y|ies)\b"), _v("method", r"\bmethods?\b"),
     _v("approach", r"\bapproach(?:es)?\b")],
    [_v("dataset", r"\bdatasets?\b"), _v("data set", r"\bdata sets?\b")],
    [_v("email", r"\bemails?\b"), _v("e-mail", r"\be-mails?\b")],
    [_v("website", r"\bwebsites?\b"), _v("web site", r"\bweb sites?\b")],
    [_v("online", r"\bonline\b"), _v("on-line", r"\bon-line\b")],
    [_v("cooperate", r"\bcooperat\w*"), _v("co-operate", r"\bco-operat\w*")],
    [_v("analyze", r"\banalyz(?:e|es|ed|ing|er|ers)\b"), _v("analyse", r"\banalys(?:e|ed|ing)\b")],
    [_v("organization", r"\borganizations?\b"), _v("organisation", r"\borganisations?\b")],
    [_v("behavior", r"\bbehavior(?:s|al)?\b"), _v("behaviour", r"\bbehaviour(?:s|al)?\b")],
    [_v("modeling", r"\bmodel(?:ing|ed)\b"), _v("modelling", r"\bmodell(?:ing|ed)\b")],
    [_v("optimize", r"\boptimiz(?:e|es|ed|ing|ation)\b"), _v("optimise", r"\boptimis(?:e|es|ed|ing|ation)\b")],
    [_v("center", r"\bcenters?\b"), _v("centre", r"\bcentres?\b")],
    [_v("color", r"\bcolors?\b"), _v("colour", r"\bcolours?\b")],
]

CITATION_STYLES: List[Tuple[str, Pattern[str]]] = [
    ("APA", re.compile(
        r"\([A-Z][A-Za-z'\-]+(?: et al\.)?(?:,? (?:&|and) [A-Z][A-Za-z'\-]+)?,? \d{4}[a-z]?\)"
    )),
    ("MLA", re.compile(r"\([A-Z][A-Za-z'\-]+ \d{1,3}(?:[-–]\d{1,3})?\)")),
    ("Chicago", re.compile(r"\^\d+")),
    ("Numbered", re.compile(r"\[\d+(?:\s*[,–-]\s*\d+)*\]")),
]

CLAIM_INDICATORS = re.compile(
    r"\b(research (?:shows|suggests|indicates)|studies (?:show|indicate|suggest|have shown)"
    r"|evidence (?:suggests|shows)|it has been shown|data shows"
    r"|according to (?:research|studies)|scholars argue|experts agree)\b",
    re.I,
)
REFERENCE_HEADING = re.compile(
    r"^#{1,6}\s+(?:\d+\.?\s*)?(references|bibliography|works cited|reference list|sources)\b",
    re.I | re.M,
)

_SPACING = re.compile(r" {2,}|\t+")
LIST_MARKERS: List[Tuple[str, Pattern[str]]] = [
    ("-", re.compile(r"^\s*-\s+", re.M)),
    ("*", re.compile(r"^\s*\*\s+", re.M)),
    ("+", re.compile(r"^\s*\+\s+", re.M)),
    ("numbered", re.compile(r"^\s*\d+[.)]\s+", re.M)),
]


def terminology_issues(content: str) -> List[TerminologyIssue]:
    issues: List[TerminologyIssue] = []
    for group in TERMINOLOGY_GROUPS:
        counts: Dict[str, int] = {}
        locations: List[int] = []
        for name, pattern in group:
            hits = [m.start() for m in pattern.finditer(content)]
            if hits:
                counts[name] = len(hits)
                locations.extend(hits)
        if len(counts) < 2:
            continue
        used = list(counts)
        issues.append(TerminologyIssue(
            term="/".join(used),
            inconsistent_usage=used,
            counts=counts,
            suggested_standardization=group[0][0],
            locations=sorted(locations),
        ))
    return issues


def citation_counts(content: str) -> Dict[str, int]:
    return {name: len(p.findall(content)) for name, p in CITATION_STYLES}


def has_citation(text: str) -> bool:
    return any(p.search(text) for _, p in CITATION_STYLES)


def _context(content: str, start: int, end: int, pad: int = 40) -> str:
    return content[max(0, start - pad): end + pad].replace("\n", " ").strip()


def citation_issues(content: str) -> Tuple[List[CitationIssue], List[str]]:
    issues: List[CitationIssue] = []
    counts = citation_counts(content)
    styles = [name for name, n in counts.items() if n > 0]

    if not styles:
        issues.append(CitationIssue(
            type="missing",
            rule="NO_CITATIONS",
            description="No citations found in the document",
            suggestion="Add proper citations to support your arguments",
        ))
    elif len(styles) > 1:
        issues.append(CitationIssue(
            type="style_inconsistency",
            rule="MIXED_STYLES",
            description=f"Multiple citation formats detected: {', '.join(styles)}",
            suggestion="Use a consistent citation style throughout the document",
        ))

    for m in CLAIM_INDICATORS.finditer(content):
        window = content[m.end(): m.end() + CITATION_WINDOW_CHARS]
        if has_citation(window):
            continue
        issues.append(CitationIssue(
            type="missing",
            rule="UNSUPPORTED_CLAIM",
            description=f'The claim introduced by "{m.group(1)}" is not followed by a citation',
            suggestion="Cite the research or studies this claim relies on",
            start=m.start(),
            end=m.end(),
            context=_context(content, m.start(), m.end()),
            claim=m.group(1),
        ))

    if styles:
        tail_start = len(content) * REFERENCE_TAIL_FRACTION
        if not any(m.start() >= tail_start for m in REFERENCE_HEADING.finditer(content)):
            issues.append(CitationIssue(
                type="missing",
                rule="NO_REFERENCE_LIST",
                description="In-text citations are present but no reference list was found near the end of the document",
                suggestion='Add a "References" section listing every cited source',
            ))
    return issues, styles


def formatting_issues(content: str) -> List[FormattingIssue]:
    issues: List[FormattingIssue] = []

    spacing = len(_SPACING.findall(content))
    if spacing:
        issues.append(FormattingIssue(
            type="spacing",
            description=f"Inconsistent spacing detected (multiple spaces or tabs, {spacing} occurrence(s))",
            suggestion="Use consistent single spaces between words",
            occurrences=spacing,
        ))

    markers = {name: len(p.findall(content)) for name, p in LIST_MARKERS}
    used = [name for name, n in markers.items() if n > 0]
    if len(used) > 1:
        issues.append(FormattingIssue(
            type="numbering",
            description=f"Mixed list formatting styles detected: {', '.join(used)}",
            suggestion="Use consistent list formatting throughout the document",
            occurrences=sum(markers.values()),
        ))
    return issues


def analyze_consistency(content: str) -> ConsistencyAnalysis:
    citations, styles = citation_issues(content)
    return ConsistencyAnalysis(
        terminology_issues=terminology_issues(content),
        citation_issues=citations,
        formatting_issues=formatting_issues(content),
        citation_styles=styles,
    )
