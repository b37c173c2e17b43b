from __future__ import annotations
from typing import Dict, List
import logging
import re
import textstat

from proofreader.core.config import (
    LONG_SENTENCE_THRESHOLD, LONG_SENTENCE_RATIO, FIRST_PERSON_RATIO,
    ACADEMIC_WORDS_PER_UNIT, FORMALITY_WORDS_PER_UNIT, MIN_ACADEMIC_PHRASES,
    ACADEMIC_PHRASE_MIN_CHARS, CLARITY_BANDS, SHORT_SENTENCE_AVERAGE,
    SHORT_SENTENCE_SCORE, LONG_RATIO_PENALTY,
)
from proofreader.models.analysis import StyleAnalysis, StyleIssue
from proofreader.services.sections import (
    count_term, split_sentences, strip_markdown, word_count, words,
)

log = logging.getLogger("style")

ACADEMIC_TERMS = [
    "research", "analysis", "methodology", "finding", "conclusion",
    "hypothes", "theor", "evidence", "data", "study", "studies", "investigat",
    "examin", "evaluat", "assess", "framework", "approach", "empiric", "literature",
]
FORMAL_CONNECTIVES = [
    "furthermore", "moreover", "consequently", "therefore", "thus", "hence",
    "nevertheless", "nonetheless", "in addition", "accordingly", "whereas",
]
INFORMAL_TERMS = [
    "really", "pretty", "quite", "sort of", "kind of", "basically",
    "actually", "totally", "super", "very", "a lot", "lots of",
    "tons of", "bunch of", "okay", "ok",
]
COLLOQUIALISMS = [
    "a bunch of", "a lot of", "tons of", "loads of", "heaps of",
    "kind of", "sort of", "pretty much", "way too", "super",
    "awesome", "cool", "neat", "weird", "crazy", "insane",
]
CONTRACTIONS = [
    "don't", "won't", "can't", "isn't", "aren't", "wasn't", "weren't",
    "haven't", "hasn't", "hadn't", "doesn't", "didn't", "it's", "we're", "they're",
]
FIRST_PERSON = {"i", "me", "my", "mine", "myself", "we", "us", "our", "ours", "ourselves"}
VAGUE_WORDS = ["thing", "things", "stuff", "good", "nice", "bad", "a lot", "etc"]
ACADEMIC_PHRASES = [
    "it is argued that", "it can be seen that", "it is evident that",
    "research suggests", "studies indicate", "evidence demonstrates",
    "furthermore", "moreover", "in addition", "consequently",
]

_TOKEN = re.compile(r"[a-z']+")


def _bare_words(text: str) -> List[str]:
    return [t.strip("'") for t in _TOKEN.findall(text.lower())]


def _found(text_lower: str, terms: List[str]) -> List[str]:
    return [t for t in terms if count_term(text_lower, t)]


def academic_tone(content: str) -> float:
    tokens = words(content.lower())
    if not tokens:
        return 0.0
    hits = sum(1 for w in tokens if any(t in w for t in ACADEMIC_TERMS))
    return min(hits / max(len(tokens) / ACADEMIC_WORDS_PER_UNIT, 1), 1.0)


def formality_level(content: str) -> float:
    lower = content.lower()
    formal = sum(count_term(lower, t) for t in FORMAL_CONNECTIVES)
    informal = sum(count_term(lower, t) for t in INFORMAL_TERMS)
    scale = max(word_count(content) / FORMALITY_WORDS_PER_UNIT, 1)
    return max(0.0, min(1.0, 0.5 + 0.5 * (formal - informal) / scale))


def sentence_lengths(content: str) -> List[int]:
    return [word_count(s) for s in split_sentences(content)]


def clarity_score(content: str) -> float:
    lengths = sentence_lengths(content)
    if not lengths:
        return 0.0
    avg = sum(lengths) / len(lengths)
    long_ratio = sum(1 for n in lengths if n > LONG_SENTENCE_THRESHOLD) / len(lengths)

    band = 1.0
    for bound, score in CLARITY_BANDS:
        if avg > bound:
            band = score
            break
    else:
        if avg < SHORT_SENTENCE_AVERAGE:
            band = SHORT_SENTENCE_SCORE
    return max(0.0, band - long_ratio * LONG_RATIO_PENALTY)


def readability_metrics(text: str) -> Dict[str, float]:
    """Best effort: textstat may need corpora that are not installed."""
    plain = strip_markdown(text)
    try:
        return {
            "flesch_reading_ease": textstat.flesch_reading_ease(plain),
            "automated_readability_index": textstat.automated_readability_index(plain),
        }
    except Exception as e:
        log.warning("Readability metrics unavailable: %r", e)
        return {}


def style_issues(content: str) -> List[StyleIssue]:
    issues: List[StyleIssue] = []
    lower = content.lower()

    informal = _found(lower, COLLOQUIALISMS + [t for t in INFORMAL_TERMS if t not in COLLOQUIALISMS])
    if informal:
        issues.append(StyleIssue(
            type="tone",
            rule="INFORMAL_TERMS",
            description=f"Informal or colloquial expressions found: {', '.join(informal[:5])}",
            suggestion='Replace colloquial expressions with formal academic language: "numerous" instead of "a bunch of", "significantly" instead of "way too"',
        ))

    contractions = [c for c in CONTRACTIONS if c in lower]
    if contractions:
        issues.append(StyleIssue(
            type="formality",
            rule="CONTRACTIONS",
            description=f"Found contractions: {', '.join(contractions)}",
            suggestion='Avoid contractions in academic writing. Use full forms: "do not" instead of "don\'t", "cannot" instead of "can\'t"',
        ))

    tokens = _bare_words(content)
    if tokens:
        first_person = sum(1 for w in tokens if w in FIRST_PERSON)
        ratio = first_person / len(tokens)
        if ratio > FIRST_PERSON_RATIO:
            issues.append(StyleIssue(
                type="formality",
                rule="FIRST_PERSON",
                description=f"First-person pronouns make up {ratio:.1%} of the words ({first_person} occurrences)",
                suggestion="Prefer impersonal constructions such as \"This study examines\" over \"I examine\"",
            ))

    lengths = sentence_lengths(content)
    if lengths:
        long_count = sum(1 for n in lengths if n > LONG_SENTENCE_THRESHOLD)
        if long_count / len(lengths) > LONG_SENTENCE_RATIO:
            issues.append(StyleIssue(
                type="clarity",
                rule="LONG_SENTENCES",
                description=(
                    f"{long_count} of {len(lengths)} sentences exceed {LONG_SENTENCE_THRESHOLD} words"
                ),
                suggestion="Split long sentences so each one carries a single idea",
            ))

    vague = _found(lower, VAGUE_WORDS)
    if vague:
        issues.append(StyleIssue(
            type="wordChoice",
            rule="VAGUE_WORDS",
            description=f"Vague words found: {', '.join(vague)}",
            suggestion="Replace vague words with precise, discipline-specific terms",
        ))

    phrases = len(_found(lower, ACADEMIC_PHRASES))
    if phrases < MIN_ACADEMIC_PHRASES and len(content) > ACADEMIC_PHRASE_MIN_CHARS:
        issues.append(StyleIssue(
            type="tone",
            rule="ACADEMIC_PHRASES",
            description="Limited use of academic phrases and expressions",
            suggestion='Incorporate more academic phrases: "It is argued that...", "Research suggests...", "Furthermore...", "Consequently..."',
        ))
    return issues


def analyze_style(content: str) -> StyleAnalysis:
    lengths = sentence_lengths(content)
    avg = sum(lengths) / len(lengths) if lengths else 0.0
    long_ratio = (
        sum(1 for n in lengths if n > LONG_SENTENCE_THRESHOLD) / len(lengths) if lengths else 0.0
    )
    return StyleAnalysis(
        academic_tone=academic_tone(content),
        formality_level=formality_level(content),
        clarity_score=clarity_score(content),
        average_sentence_length=avg,
        long_sentence_ratio=long_ratio,
        readability=readability_metrics(content),
        style_issues=style_issues(content),
    )
