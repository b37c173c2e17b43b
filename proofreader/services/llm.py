# proofreader/services/llm.py
import json
import re
import logging
from typing import Any, Dict, List, Optional, Protocol, Type, TypeVar

from openai import OpenAI
from pydantic import BaseModel, Field, field_validator
from pydantic import ValidationError as SchemaError

from proofreader.core.config import OPENAI_MODEL, LLM_TIMEOUT_SECONDS
from proofreader.core.errors import AIGenerationError
from proofreader.models.concern import (
    CATEGORIES, SEVERITIES, Category, ProofreadingConcern, Severity,
)
from proofreader.services.concerns import create_concern

log = logging.getLogger("llm")

T = TypeVar("T", bound=BaseModel)

SYSTEM = (
    "You are an academic writing assistant reviewing a thesis proposal.\n"
    "Report actionable writing concerns about structure, clarity, coherence, "
    "academic style, consistency, completeness, citations and terminology.\n"
    "Return ONLY valid JSON matching this JSON schema:\n"
    "{schema}\n"
    "No prose, no markdown, no extra keys."
)

PROMPT = (
    "Analyze the following document and return a JSON object with a 'concerns' array. "
    "Each concern has: title (short), description (detailed), "
    "category (one of {categories}), severity (one of {severities}), "
    "and suggestions (array of short action items).\n\nDocument:\n\n{content}"
)

# labels the model tends to use instead of ours
CATEGORY_ALIASES = {
    "style": "academic_style",
    "academic_tone": "academic_style",
    "tone": "academic_style",
    "citation": "citations",
    "flow": "coherence",
    "formatting": "consistency",
}

AI_PREFIX = "(AI-generated) "

# grab the last {...} block to be resilient to any prefacing text
_JSON_FENCE = re.compile(r"\{.*\}\s*$", re.DOTALL)


class AIConcernItem(BaseModel):
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    category: Category
    severity: Severity
    suggestions: List[str] = Field(default_factory=list)

    @field_validator("category", "severity", mode="before")
    @classmethod
    def _normalize_label(cls, v: Any, info) -> Any:
        if not isinstance(v, str):
            return v
        label = v.strip().lower().replace(" ", "_").replace("-", "_")
        if info.field_name == "category":
            label = CATEGORY_ALIASES.get(label, label)
        return label


class ConcernEnvelope(BaseModel):
    # items are validated one by one so a single bad item does not sink the rest
    concerns: List[Dict[str, Any]]


class StructuredLLM(Protocol):
    def generate(self, prompt: str, schema: Type[T]) -> T: ...


def _extract_json(text: str) -> dict:
    try:
        return json.loads(text)
    except Exception:
        pass
    m = _JSON_FENCE.search(text)
    if m:
        return json.loads(m.group(0))
    raise ValueError("Model output was not valid JSON")


class OpenAIStructuredClient:
    """
    Single-attempt OpenAI Chat Completions call in JSON mode, validated
    against a pydantic schema. Retries belong to the caller.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = OPENAI_MODEL,
        timeout: float = LLM_TIMEOUT_SECONDS,
        client: Optional[OpenAI] = None,
    ):
        self.model = model
        self._client = client or OpenAI(api_key=api_key, timeout=timeout, max_retries=0)

    def _chat(self, messages: list) -> str:
        log.info("LLM chat call model=%s, messages=%d", self.model, len(messages))
        resp = self._client.chat.completions.create(
            model=self.model,
            messages=messages,
            response_format={"type": "json_object"},
        )
        return resp.choices[0].message.content or ""

    def generate(self, prompt: str, schema: Type[T]) -> T:
        system = SYSTEM.format(schema=json.dumps(schema.model_json_schema()))
        out = self._chat([
            {"role": "system", "content": system},
            {"role": "user", "content": prompt},
        ])
        return schema.model_validate(_extract_json(out))


def build_prompt(content: str) -> str:
    return PROMPT.format(
        categories=", ".join(CATEGORIES),
        severities=", ".join(SEVERITIES),
        content=content,
    )


def parse_items(raw_items: List[Dict[str, Any]]) -> List[AIConcernItem]:
    items: List[AIConcernItem] = []
    for i, raw in enumerate(raw_items):
        try:
            items.append(AIConcernItem.model_validate(raw))
        except SchemaError as e:
            log.warning("Dropping AI concern %d: %s", i, e.errors()[0].get("msg", e))
    return items


class AIConcernGenerator:
    def __init__(self, llm: StructuredLLM):
        self._llm = llm

    def generate(self, content: str, conversation_id: str) -> List[ProofreadingConcern]:
        """Best effort: any failure is logged and yields no concerns."""
        try:
            items = self._request(content)
        except AIGenerationError as e:
            log.warning("AI concern generation failed, continuing with rule-based analysis: %s", e)
            return []

        concerns = [
            create_concern(
                conversation_id,
                it.category,
                it.severity,
                it.title,
                AI_PREFIX + it.description,
                it.suggestions,
                ai_generated=True,
            )
            for it in items
        ]
        log.info("AI produced %d concern(s)", len(concerns))
        return concerns

    def _request(self, content: str) -> List[AIConcernItem]:
        try:
            envelope = self._llm.generate(build_prompt(content), ConcernEnvelope)
            if not isinstance(envelope, ConcernEnvelope):
                envelope = ConcernEnvelope.model_validate(envelope)
        except Exception as e:
            raise AIGenerationError(f"LLM request failed: {e!r}") from e
        items = parse_items(envelope.concerns)
        if envelope.concerns and not items:
            raise AIGenerationError("No AI concern matched the expected schema")
        return items
