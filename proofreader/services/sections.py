from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Tuple
import re

HEADING = re.compile(r"^(#{1,6})\s+")
_HEADING_LINE = re.compile(r"^(#{1,6})\s+(.*?)(?:\s+#+)?\s*$")
_SENTENCE_SPLIT = re.compile(r"[.!?]+")
_PARAGRAPH_SPLIT = re.compile(r"\n\s*\n")
_NUMBERING = re.compile(r"^(?:\d+(?:\.\d+)*\.?|[IVXLC]+\.)\s+")
_MD_MARKUP = re.compile(r"^\s*(?:#{1,6}\s+|[-*+]\s+|\d+\.\s+|>\s*)", re.MULTILINE)

IMPLICIT_TITLE = "Introduction"


@dataclass
class Section:
    title: str
    level: int  # 0 for the implicit leading section
    start_line: int
    lines: List[str] = field(default_factory=list)
    implicit: bool = False

    @property
    def body(self) -> str:
        return "\n".join(self.lines)

    @property
    def word_count(self) -> int:
        return word_count(self.body)

    @property
    def is_blank(self) -> bool:
        return not self.body.strip()


def extract_sections(text: str) -> List[Section]:
    """
    Split markdown text into sections at heading lines.

    Every input line lands in exactly one section: heading lines open their
    own section, other lines go to the most recent one. Lines before the
    first heading form an implicit "Introduction" section.
    """
    sections: List[Section] = []
    current: Section | None = None

    for i, line in enumerate(text.split("\n")):
        m = HEADING.match(line)
        if m:
            current = Section(title=heading_text(line), level=len(m.group(1)), start_line=i)
            sections.append(current)
            continue
        if current is None:
            current = Section(title=IMPLICIT_TITLE, level=0, start_line=i, implicit=True)
            sections.append(current)
        current.lines.append(line)
    return sections


def content_sections(sections: List[Section]) -> List[Section]:
    return [s for s in sections if not s.is_blank]


def heading_text(line: str) -> str:
    m = _HEADING_LINE.match(line)
    return m.group(2).strip() if m else line.strip()


def heading_lines(text: str) -> List[Tuple[int, str]]:
    """(level, title) for every markdown heading, in document order."""
    out: List[Tuple[int, str]] = []
    for line in text.split("\n"):
        m = HEADING.match(line)
        if m:
            out.append((len(m.group(1)), heading_text(line)))
    return out


def normalize_title(title: str) -> str:
    # "2.1 Research Design" -> "research design"
    return _NUMBERING.sub("", title.strip()).strip().lower()


def words(text: str) -> List[str]:
    return [w for w in text.split() if w]


def word_count(text: str) -> int:
    return len(words(text))


def split_sentences(text: str) -> List[str]:
    return [s.strip() for s in _SENTENCE_SPLIT.split(text) if s.strip()]


def split_paragraphs(text: str) -> List[str]:
    return [p.strip() for p in _PARAGRAPH_SPLIT.split(text) if p.strip()]


def strip_markdown(text: str) -> str:
    return _MD_MARKUP.sub("", text)


def contains_term(text_lower: str, term: str) -> bool:
    """Word-boundary match, so "aim" does not fire inside "claim"."""
    return re.search(rf"\b{re.escape(term)}\b", text_lower) is not None


def count_term(text_lower: str, term: str) -> int:
    return len(re.findall(rf"\b{re.escape(term)}\b", text_lower))
