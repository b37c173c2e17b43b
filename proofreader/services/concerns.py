from __future__ import annotations
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional
from uuid import uuid4

from proofreader.core.config import (
    ACADEMIC_TONE_THRESHOLD, FORMALITY_THRESHOLD, CLARITY_THRESHOLD, READABILITY_FLOOR,
    COHERENCE_CONCERN_THRESHOLD, COMPLETENESS_CONCERN_THRESHOLD, SIMILARITY_THRESHOLD,
    MAX_TITLE_CHARS,
)
from proofreader.models.analysis import (
    CompletenessAnalysis, ConsistencyAnalysis, StructureAnalysis, StyleAnalysis,
)
from proofreader.models.concern import (
    Category, ContentLocation, ProofreadingConcern, Severity, SEVERITY_RANK,
)

STYLE_CATEGORY: Dict[str, Category] = {
    "tone": "academic_style",
    "formality": "academic_style",
    "clarity": "clarity",
    "wordChoice": "terminology",
}
STYLE_TITLES = {
    "INFORMAL_TERMS": "Informal Language",
    "CONTRACTIONS": "Contractions in Academic Text",
    "FIRST_PERSON": "Overuse of First-Person Pronouns",
    "LONG_SENTENCES": "Overly Long Sentences",
    "VAGUE_WORDS": "Vague Word Choice",
    "ACADEMIC_PHRASES": "Limited Academic Phrasing",
}
CITATION_TITLES = {
    "missing": "Missing Citations",
    "style_inconsistency": "Inconsistent Citation Style",
}
FORMATTING_TITLES = {
    "spacing": "Spacing Issues",
    "numbering": "Numbering Inconsistencies",
}


def create_concern(
    conversation_id: str,
    category: Category,
    severity: Severity,
    title: str,
    description: str,
    suggestions: Optional[List[str]] = None,
    location: Optional[ContentLocation] = None,
    ai_generated: bool = False,
) -> ProofreadingConcern:
    now = datetime.now(timezone.utc)
    if len(title) > MAX_TITLE_CHARS:
        title = title[: MAX_TITLE_CHARS - 3].rstrip() + "..."
    return ProofreadingConcern(
        id=uuid4().hex,
        conversation_id=conversation_id,
        category=category,
        severity=severity,
        title=title,
        description=description,
        location=location,
        suggestions=list(suggestions or []),
        related_ideas=[],
        status="to_be_done",
        ai_generated=ai_generated,
        created_at=now,
        updated_at=now,
    )


def structure_concerns(structure: StructureAnalysis, conversation_id: str) -> List[ProofreadingConcern]:
    out: List[ProofreadingConcern] = []
    if not structure.has_introduction:
        out.append(create_concern(
            conversation_id, "structure", "high",
            "Missing Introduction Section",
            "The document appears to lack a clear introduction section, which is essential for establishing context and objectives.",
            ["Add an introduction section that outlines the research problem, objectives, and structure"],
        ))
    if not structure.has_conclusion:
        out.append(create_concern(
            conversation_id, "structure", "medium",
            "Missing Conclusion Section",
            "The document lacks a conclusion or summary section to wrap up the main points.",
            ["Add a conclusion section that summarizes key points and future directions"],
        ))

    headings = structure.heading_hierarchy
    if not headings.proper_hierarchy:
        out.append(create_concern(
            conversation_id, "structure", "medium",
            "Improper Heading Hierarchy",
            "Heading levels skip one or more levels, which may confuse readers: "
            + "; ".join(headings.skipped_at),
            ["Ensure heading levels follow a logical progression (H1 → H2 → H3)", "Avoid skipping heading levels"],
        ))
    if not headings.consistent_formatting:
        out.append(create_concern(
            conversation_id, "structure", "low",
            "Inconsistent Heading Capitalization",
            "Headings mix title case and sentence case.",
            ["Pick title case or sentence case and apply it to every heading"],
        ))

    flow = structure.section_flow
    if flow.out_of_order or flow.conclusion_before_introduction:
        out.append(create_concern(
            conversation_id, "structure", "high" if flow.conclusion_before_introduction else "medium",
            "Sections Out of Logical Order",
            "; ".join(i for i in flow.issues if "order" in i or "before" in i) + ".",
            ["Order sections as introduction, literature, methodology, results, discussion, conclusion"],
        ))
    if flow.coherence_score < COHERENCE_CONCERN_THRESHOLD:
        detail = "; ".join(flow.issues)
        out.append(create_concern(
            conversation_id, "coherence", "medium",
            "Poor Section Flow",
            "The logical flow between sections could be improved for better coherence."
            + (f" Observed: {detail}." if detail else ""),
            flow.suggestions or [
                "Add transition sentences between sections",
                "Ensure each section builds logically on the previous one",
            ],
        ))
    return out


def style_concerns(style: StyleAnalysis, conversation_id: str) -> List[ProofreadingConcern]:
    out: List[ProofreadingConcern] = []
    if style.academic_tone < ACADEMIC_TONE_THRESHOLD:
        out.append(create_concern(
            conversation_id, "academic_style", "high",
            "Insufficient Academic Tone",
            f"The writing style may not be sufficiently academic for a thesis proposal (tone score {style.academic_tone:.2f}).",
            ["Use more formal academic vocabulary", "Incorporate discipline-specific terminology", "Avoid colloquial expressions"],
        ))
    if style.formality_level < FORMALITY_THRESHOLD:
        out.append(create_concern(
            conversation_id, "academic_style", "medium",
            "Low Formality Level",
            "The document contains informal language that may not be appropriate for academic writing.",
            ["Replace informal terms with formal alternatives", "Use academic transition words", "Maintain consistent formal tone"],
        ))
    if style.clarity_score < CLARITY_THRESHOLD:
        out.append(create_concern(
            conversation_id, "clarity", "medium",
            "Clarity Issues",
            f"Some sentences may be too complex or unclear, affecting readability "
            f"(average sentence length {style.average_sentence_length:.1f} words).",
            ["Break down overly complex sentences", "Use clearer, more direct language", "Ensure each sentence has a clear purpose"],
        ))
    fre = style.readability.get("flesch_reading_ease")
    if fre is not None and fre < READABILITY_FLOOR:
        out.append(create_concern(
            conversation_id, "clarity", "low",
            "Low Readability Score",
            f"Flesch Reading Ease is {fre:.0f}, which is very difficult even for an academic audience.",
            ["Shorten sentences and prefer common words where precision allows"],
        ))

    for issue in style.style_issues:
        out.append(create_concern(
            conversation_id,
            STYLE_CATEGORY.get(issue.type, "clarity"),
            "medium" if issue.type == "clarity" else "low",
            STYLE_TITLES.get(issue.rule, "Style Issue"),
            issue.description,
            [issue.suggestion] if issue.suggestion else [],
        ))
    return out


def consistency_concerns(consistency: ConsistencyAnalysis, conversation_id: str) -> List[ProofreadingConcern]:
    out: List[ProofreadingConcern] = []
    for issue in consistency.terminology_issues:
        usage = ", ".join(f'"{v}" ({n}x)' for v, n in issue.counts.items())
        out.append(create_concern(
            conversation_id, "terminology", "low",
            f'Inconsistent Use of "{issue.term}"',
            f"Several variants of the same term are used: {usage}.",
            [f'Standardize usage to "{issue.suggested_standardization}"', "Review all instances for consistency"],
            ContentLocation(start_position=issue.locations[0]) if issue.locations else None,
        ))

    for issue in consistency.citation_issues:
        title = CITATION_TITLES.get(issue.type, "Citation Issue")
        location = None
        if issue.rule == "UNSUPPORTED_CLAIM":
            # one concern per claim, so the title carries the phrase
            title = f'Unsupported Claim: "{issue.claim}"'
            location = ContentLocation(start_position=issue.start, end_position=issue.end, context=issue.context)
        elif issue.rule == "NO_REFERENCE_LIST":
            title = "Missing Reference List"
        out.append(create_concern(
            conversation_id, "citations", "high" if issue.type == "missing" else "medium",
            title,
            issue.description,
            [issue.suggestion] if issue.suggestion else [],
            location,
        ))

    for issue in consistency.formatting_issues:
        out.append(create_concern(
            conversation_id, "consistency", "low",
            FORMATTING_TITLES.get(issue.type, "Formatting Issue"),
            issue.description,
            [issue.suggestion] if issue.suggestion else [],
        ))
    return out


def completeness_concerns(completeness: CompletenessAnalysis, conversation_id: str) -> List[ProofreadingConcern]:
    out: List[ProofreadingConcern] = []
    if completeness.missing_sections:
        out.append(create_concern(
            conversation_id, "completeness", "high",
            "Missing Required Sections",
            f"The following required sections are missing: {', '.join(completeness.missing_sections)}",
            ["Add the missing sections to complete the proposal structure", "Ensure all required components are addressed for a proposal"],
        ))
    if completeness.insufficient_detail:
        out.append(create_concern(
            conversation_id, "completeness", "medium",
            "Insufficient Detail in Sections",
            f"The following sections need more development: {'; '.join(completeness.insufficient_detail)}",
            ["Expand these sections with more detailed content appropriate for a proposal", "Provide concise examples or planned approaches"],
        ))
    if completeness.completeness_score < COMPLETENESS_CONCERN_THRESHOLD:
        out.append(create_concern(
            conversation_id, "completeness", "high",
            "Overall Completeness Issues",
            f"The document appears to be incomplete and needs significant development (completeness {completeness.completeness_score:.0%}).",
            ["Review proposal requirements and ensure all components are addressed", "Develop existing sections to clarify the planned work"],
        ))
    return out


def title_similarity(a: str, b: str) -> float:
    """Jaccard similarity of lower-cased, space-separated title words."""
    s1 = set(a.lower().split())
    s2 = set(b.lower().split())
    union = s1 | s2
    if not union:
        return 1.0
    return len(s1 & s2) / len(union)


def are_similar(a: ProofreadingConcern, b: ProofreadingConcern, threshold: float = SIMILARITY_THRESHOLD) -> bool:
    return a.category == b.category and title_similarity(a.title, b.title) > threshold


def deduplicate(
    concerns: Iterable[ProofreadingConcern], threshold: float = SIMILARITY_THRESHOLD
) -> List[ProofreadingConcern]:
    kept: List[ProofreadingConcern] = []
    for c in concerns:
        if not any(are_similar(k, c, threshold) for k in kept):
            kept.append(c)
    return kept


def sort_concerns(concerns: Iterable[ProofreadingConcern]) -> List[ProofreadingConcern]:
    return sorted(concerns, key=lambda c: (-SEVERITY_RANK[c.severity], c.category))
