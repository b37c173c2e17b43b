# tests/test_style.py
import textstat

from proofreader.services.style import (
    academic_tone, analyze_style, clarity_score, formality_level, readability_metrics, style_issues,
)

from conftest import concise_document, long_winded_document


def _rules(text):
    return {i.rule for i in style_issues(text)}


def test_academic_tone_counts_vocabulary():
    assert academic_tone("The cat sat on the mat.") == 0.0
    assert academic_tone("This research presents evidence from a study.") == 1.0


def test_formality_baseline_and_direction():
    neutral = "The sample was collected in spring."
    assert formality_level(neutral) == 0.5
    assert formality_level("Furthermore, the sample was large. Moreover, it was varied.") > 0.5
    assert formality_level("It was really pretty basically okay.") < 0.5


def test_clarity_bands():
    assert clarity_score(concise_document()) == 1.0
    assert clarity_score(long_winded_document()) == 0.0


def test_long_sentences_flagged_as_clarity_issue():
    issues = [i for i in style_issues(long_winded_document()) if i.rule == "LONG_SENTENCES"]
    assert len(issues) == 1
    assert issues[0].type == "clarity"
    assert "42 of 42" in issues[0].description


def test_informal_terms_and_contractions():
    rules = _rules("We can't say the results are awesome. They're kind of mixed.")
    assert {"INFORMAL_TERMS", "CONTRACTIONS"} <= rules


def test_first_person_density():
    assert "FIRST_PERSON" in _rules("I think we should study this because our data is new.")
    assert "FIRST_PERSON" not in _rules("The study examines new data from the survey.")


def test_vague_words_are_word_choice():
    issues = [i for i in style_issues("This stuff is a good thing.") if i.rule == "VAGUE_WORDS"]
    assert issues and issues[0].type == "wordChoice"
    assert "stuff" in issues[0].description


def test_academic_phrases_only_checked_on_longer_text():
    short = "A plain sentence."
    assert "ACADEMIC_PHRASES" not in _rules(short)
    assert "ACADEMIC_PHRASES" in _rules(long_winded_document())


def test_long_winded_document_scores_below_concise_control():
    long_style = analyze_style(long_winded_document())
    control = analyze_style(concise_document())
    assert long_style.academic_tone < control.academic_tone
    assert long_style.clarity_score < control.clarity_score
    assert long_style.average_sentence_length > 25


def test_readability_metrics_reported(monkeypatch):
    monkeypatch.setattr(textstat, "flesch_reading_ease", lambda text: 42.0)
    monkeypatch.setattr(textstat, "automated_readability_index", lambda text: 12.5)
    assert readability_metrics("# Title\nSome text.") == {
        "flesch_reading_ease": 42.0,
        "automated_readability_index": 12.5,
    }


def test_readability_failure_keeps_other_style_findings(monkeypatch):
    def missing_corpus(text):
        raise LookupError("Resource 'cmudict' not found")

    monkeypatch.setattr(textstat, "flesch_reading_ease", missing_corpus)
    style = analyze_style(long_winded_document())
    assert style.readability == {}
    assert "LONG_SENTENCES" in {i.rule for i in style.style_issues}
    assert style.clarity_score < 0.6
