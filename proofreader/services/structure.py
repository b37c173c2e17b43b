from __future__ import annotations
from typing import List, Optional, Tuple
import re

from proofreader.core.config import (
    INTRO_LEAD_PARAGRAPHS, INTRO_MIN_WORDS, MIN_SECTIONS_FOR_PROGRESSION,
    MIN_ORDERED_SECTIONS, HEADING_CONSISTENCY_RATIO, TRANSITION_TARGET_DENSITY,
    ORDER_WEIGHT, WEAK_TOPIC_SENTENCE_CHARS, WEAK_TOPIC_PENALTY, MIN_SENTENCES_FOR_FLOW,
)
from proofreader.models.analysis import FlowAnalysis, HeadingAnalysis, StructureAnalysis
from proofreader.services.sections import (
    HEADING, Section, contains_term, content_sections, extract_sections, heading_lines,
    normalize_title, split_paragraphs, split_sentences, word_count,
)

INTRO_HEADINGS = ("introduction", "overview", "background")
CONCLUSION_HEADINGS = ("conclusion", "conclusions", "summary", "final thoughts", "concluding remarks")

INTRO_OPENERS = [
    re.compile(r"^\s*this\s+(paper|document|thesis|proposal|study)\b", re.I | re.M),
    re.compile(r"^\s*the\s+purpose\s+of\s+this\b", re.I | re.M),
]
CONCLUSION_PHRASES = re.compile(r"\b(in\s+conclusion|to\s+summarize|to\s+conclude)\b", re.I)

# either one is enough in a lead paragraph
PURPOSE_CUES = [
    "purpose", "aim", "aims", "this study", "this paper", "this proposal", "this thesis",
    "we propose", "we investigate", "the focus of this",
]
# only count in a lead paragraph of INTRO_MIN_WORDS or more
GENERAL_CUES = [
    "objective", "objectives", "motivation", "research question", "research questions",
    "focus", "context", "problem", "goal", "goals",
]

SMALL_WORDS = {
    "a", "an", "the", "and", "but", "or", "nor", "for", "so", "yet", "as", "at",
    "by", "in", "of", "on", "to", "up", "via", "with", "from", "into", "vs",
}

CANONICAL_ORDER = [
    ("introduction", ("introduction", "background", "overview")),
    ("literature", ("literature", "related work", "prior research")),
    ("methodology", ("methodology", "methods", "method", "research design")),
    ("results", ("results", "findings")),
    ("discussion", ("discussion",)),
    ("conclusion", ("conclusion", "conclusions", "concluding", "summary")),
]

CONNECTORS = [
    "therefore", "thus", "consequently", "as a result", "hence",
    "however", "nevertheless", "nonetheless", "on the contrary", "conversely",
    "furthermore", "moreover", "additionally", "in addition", "similarly",
    "for example", "for instance", "specifically", "namely", "in particular",
    "first", "second", "third", "finally", "in conclusion", "to summarize",
]


def _heading_titles(content: str) -> List[str]:
    return [normalize_title(t) for _, t in heading_lines(content)]


def _body_paragraphs(content: str) -> List[str]:
    """Paragraphs with heading lines removed."""
    paragraphs = []
    for p in split_paragraphs(content):
        body = "\n".join(line for line in p.split("\n") if not HEADING.match(line)).strip()
        if body:
            paragraphs.append(body)
    return paragraphs


def _lead_paragraphs(content: str) -> List[str]:
    return _body_paragraphs(content)[:INTRO_LEAD_PARAGRAPHS]


def has_introduction(content: str) -> bool:
    if any(t.startswith(INTRO_HEADINGS) for t in _heading_titles(content)):
        return True
    if any(p.search(content) for p in INTRO_OPENERS):
        return True

    for p in _lead_paragraphs(content):
        lower = p.lower()
        if any(contains_term(lower, cue) for cue in PURPOSE_CUES):
            return True
        if word_count(p) >= INTRO_MIN_WORDS and any(contains_term(lower, cue) for cue in GENERAL_CUES):
            return True
    return False


def has_conclusion(content: str) -> bool:
    if any(t.startswith(CONCLUSION_HEADINGS) for t in _heading_titles(content)):
        return True
    return CONCLUSION_PHRASES.search(content) is not None


def _heading_words(text: str) -> List[str]:
    return [w for w in re.sub(r"^[\d.\s]+", "", text).split() if w[0].isalpha()]


def _is_title_case(text: str) -> bool:
    ws = _heading_words(text)
    return all(w[0].isupper() or (i > 0 and w.lower() in SMALL_WORDS) for i, w in enumerate(ws))


def _is_sentence_case(text: str) -> bool:
    ws = _heading_words(text)
    if not ws:
        return True
    if not ws[0][0].isupper():
        return False
    # acronyms stay upper case in sentence case
    return all(not w[0].isupper() or w.isupper() for w in ws[1:])


def analyze_headings(headings: List[Tuple[int, str]]) -> HeadingAnalysis:
    levels = [lvl for lvl, _ in headings]
    skipped: List[str] = []
    previous: Optional[int] = None
    for lvl, title in headings:
        if previous is not None and lvl > previous + 1:
            skipped.append(f"{'#' * lvl} {title} (after level {previous})")
        previous = lvl

    texts = [t for _, t in headings if t]
    consistent = True
    if len(texts) >= 2:
        needed = len(texts) * HEADING_CONSISTENCY_RATIO
        title_case = sum(1 for t in texts if _is_title_case(t))
        sentence_case = sum(1 for t in texts if _is_sentence_case(t))
        consistent = title_case >= needed or sentence_case >= needed

    return HeadingAnalysis(
        levels=levels,
        proper_hierarchy=not skipped,
        skipped_at=skipped,
        consistent_formatting=consistent,
    )


def section_type(title: str) -> Optional[int]:
    """Index into CANONICAL_ORDER, or None for sections outside the template."""
    t = normalize_title(title)
    for i, (_, keys) in enumerate(CANONICAL_ORDER):
        if any(contains_term(t, k) for k in keys):
            return i
    return None


def transition_density(content: str) -> Tuple[float, int]:
    sentences = split_sentences(content)
    if not sentences:
        return 0.0, 0
    with_connector = sum(
        1 for s in sentences if any(contains_term(s.lower(), c) for c in CONNECTORS)
    )
    return with_connector / len(sentences), len(sentences)


def analyze_flow(content: str, sections: List[Section]) -> FlowAnalysis:
    flow = FlowAnalysis()
    scored = content_sections(sections)
    types = [section_type(s.title) for s in scored]

    last = -1
    recognized = 0
    out_of_order: List[str] = []
    for s, idx in zip(scored, types):
        if idx is None:
            continue
        recognized += 1
        if idx < last:
            out_of_order.append(s.title)
        last = max(last, idx)

    intro_at = next((i for i, t in enumerate(types) if t == 0), None)
    conclusion_at = next((i for i, t in enumerate(types) if t == len(CANONICAL_ORDER) - 1), None)
    flow.conclusion_before_introduction = (
        intro_at is not None and conclusion_at is not None and conclusion_at < intro_at
    )
    flow.out_of_order = bool(out_of_order)
    flow.logical_progression = (
        len(scored) >= MIN_SECTIONS_FOR_PROGRESSION
        and not flow.out_of_order
        and not flow.conclusion_before_introduction
        and recognized >= MIN_ORDERED_SECTIONS
    )

    if flow.conclusion_before_introduction:
        flow.issues.append("The conclusion appears before the introduction")
    if out_of_order:
        flow.issues.append(f"Sections appear out of the expected order: {', '.join(out_of_order)}")
        flow.suggestions.append(
            "Order sections as introduction, literature, methodology, results, discussion, conclusion"
        )
    if len(scored) < MIN_SECTIONS_FOR_PROGRESSION:
        flow.issues.append(
            f"Only {len(scored)} section(s) found; at least {MIN_SECTIONS_FOR_PROGRESSION} are needed for a clear progression"
        )
        flow.suggestions.append("Organize the document into clearly headed sections")

    density, n_sentences = transition_density(content)
    flow.transition_density = density
    if density < TRANSITION_TARGET_DENSITY and n_sentences > MIN_SENTENCES_FOR_FLOW:
        flow.issues.append("Limited use of logical connectors between ideas")
        flow.suggestions.append(
            'Add transitional phrases to show relationships between ideas (e.g., "Furthermore," "However," "As a result")'
        )

    paragraphs = _body_paragraphs(content)
    weak = sum(
        1 for p in paragraphs
        if len((split_sentences(p) or [""])[0]) < WEAK_TOPIC_SENTENCE_CHARS
    )
    weak_topics = bool(paragraphs) and weak > len(paragraphs) * 0.5
    if weak_topics:
        flow.issues.append("Many paragraphs lack strong topic sentences")
        flow.suggestions.append("Begin each paragraph with a clear topic sentence that introduces the main idea")

    score = ORDER_WEIGHT * float(flow.logical_progression)
    score += (1 - ORDER_WEIGHT) * min(density / TRANSITION_TARGET_DENSITY, 1.0)
    if weak_topics:
        score -= WEAK_TOPIC_PENALTY
    flow.coherence_score = max(0.0, min(1.0, score))
    return flow


def analyze_structure(content: str) -> StructureAnalysis:
    sections = extract_sections(content)
    return StructureAnalysis(
        has_introduction=has_introduction(content),
        has_conclusion=has_conclusion(content),
        heading_hierarchy=analyze_headings(heading_lines(content)),
        section_flow=analyze_flow(content, sections),
        section_count=len(content_sections(sections)),
    )
