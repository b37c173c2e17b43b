from datetime import datetime, timezone
from typing import List, Literal, Optional, get_args
from uuid import uuid4

from pydantic import BaseModel, Field

Category = Literal[
    "structure",
    "clarity",
    "coherence",
    "academic_style",
    "consistency",
    "completeness",
    "citations",
    "terminology",
    "grammar",
]
Severity = Literal["low", "medium", "high", "critical"]
Status = Literal["to_be_done", "addressed", "rejected"]

CATEGORIES = get_args(Category)
SEVERITIES = get_args(Severity)

# higher rank sorts first
SEVERITY_RANK = {s: i for i, s in enumerate(SEVERITIES)}


def _now() -> datetime:
    return datetime.now(timezone.utc)


class ContentLocation(BaseModel):
    section: Optional[str] = None
    paragraph: Optional[int] = None
    start_position: Optional[int] = None
    end_position: Optional[int] = None
    context: Optional[str] = None


class ProofreadingConcern(BaseModel):
    id: str = Field(default_factory=lambda: uuid4().hex)
    conversation_id: str
    category: Category
    severity: Severity
    title: str
    description: str
    location: Optional[ContentLocation] = None
    suggestions: List[str] = Field(default_factory=list)
    related_ideas: List[str] = Field(default_factory=list)
    status: Status = "to_be_done"
    ai_generated: bool = False
    created_at: datetime = Field(default_factory=_now)
    updated_at: datetime = Field(default_factory=_now)
