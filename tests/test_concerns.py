# tests/test_concerns.py
from typing import get_args

from proofreader.models.analysis import (
    CitationIssue, CitationIssueType, CompletenessAnalysis, ConsistencyAnalysis,
    FormattingIssueType, StyleIssueType, TerminologyIssue,
)
from proofreader.services.concerns import (
    CITATION_TITLES, FORMATTING_TITLES, STYLE_CATEGORY,
    completeness_concerns, consistency_concerns, create_concern, deduplicate,
    sort_concerns, structure_concerns, title_similarity,
)
from proofreader.services.structure import analyze_structure


def _c(title, category="structure", severity="medium"):
    return create_concern("conv-1", category, severity, title, "desc")


def test_create_concern_defaults():
    c = create_concern("conv-1", "clarity", "low", "Title", "Body")
    assert c.status == "to_be_done"
    assert c.related_ideas == [] and c.suggestions == []
    assert not c.ai_generated
    assert c.created_at == c.updated_at
    assert c.created_at.tzinfo is not None
    assert c.id != create_concern("conv-1", "clarity", "low", "Title", "Body").id


def test_long_titles_are_truncated():
    c = _c("word " * 40)
    assert len(c.title) <= 80
    assert c.title.endswith("...")


def test_title_similarity():
    assert title_similarity("Missing Introduction Section", "missing introduction section") == 1.0
    assert title_similarity("Clarity Issues", "Missing Citations") == 0.0


def test_deduplicate_keeps_first_of_similar_titles():
    first = _c("Missing Introduction Section")
    dup = _c("missing introduction section")
    other = _c("Missing Introduction Section", category="completeness")
    kept = deduplicate([first, dup, other])
    assert kept == [first, other]


def test_deduplicate_is_idempotent():
    items = [_c("Clarity Issues"), _c("Clarity Issues"), _c("Poor Section Flow")]
    once = deduplicate(items)
    assert deduplicate(once) == once


def test_sort_by_severity_then_category():
    items = [
        _c("a", "terminology", "low"),
        _c("b", "clarity", "high"),
        _c("c", "structure", "critical"),
        _c("d", "citations", "high"),
    ]
    ordered = sort_concerns(items)
    assert [c.title for c in ordered] == ["c", "d", "b", "a"]


def test_results_only_structure_concerns():
    structure = analyze_structure("# Results\nFindings here.")
    titles = {c.title for c in structure_concerns(structure, "conv-1")}
    assert "Missing Introduction Section" in titles
    assert "Missing Conclusion Section" in titles


def test_unsupported_claims_keep_their_phrase_and_location():
    analysis = ConsistencyAnalysis(
        citation_issues=[
            CitationIssue(
                type="missing", rule="UNSUPPORTED_CLAIM", description="Claim without citation",
                suggestion="Cite a source", start=4, end=18, context="... research shows ...",
                claim="research shows",
            ),
            CitationIssue(type="missing", rule="NO_REFERENCE_LIST", description="No references"),
        ],
    )
    claim, refs = consistency_concerns(analysis, "conv-1")
    assert claim.title == 'Unsupported Claim: "research shows"'
    assert claim.category == "citations" and claim.severity == "high"
    assert claim.location.start_position == 4 and claim.location.end_position == 18
    assert refs.title == "Missing Reference List"


def test_terminology_concern_names_variants():
    analysis = ConsistencyAnalysis(terminology_issues=[
        TerminologyIssue(
            term="methodology/method", inconsistent_usage=["methodology", "method"],
            counts={"methodology": 2, "method": 2}, suggested_standardization="methodology",
            locations=[4, 30],
        ),
    ])
    (c,) = consistency_concerns(analysis, "conv-1")
    assert c.category == "terminology"
    assert "methodology" in c.title and "method" in c.title
    assert c.location.start_position == 4


def test_completeness_concerns():
    analysis = CompletenessAnalysis(
        missing_sections=["methodology"],
        found_sections=["introduction"],
        insufficient_detail=["Introduction (12 words, needs 100+ words): context"],
        content_score=0.25,
        completeness_score=0.3,
    )
    titles = [c.title for c in completeness_concerns(analysis, "conv-1")]
    assert titles == [
        "Missing Required Sections", "Insufficient Detail in Sections", "Overall Completeness Issues",
    ]


def test_every_issue_type_has_a_mapping():
    assert set(get_args(StyleIssueType)) == set(STYLE_CATEGORY)
    assert set(get_args(CitationIssueType)) == set(CITATION_TITLES)
    assert set(get_args(FormattingIssueType)) == set(FORMATTING_TITLES)
