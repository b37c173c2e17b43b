# tests/conftest.py
from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from proofreader.main import app
from proofreader.api.routes_analyze import get_engine
from proofreader.services.analyze import ConcernAnalysisEngine

# --------------------------------------------------------------------
# Sample documents
# --------------------------------------------------------------------
PROPOSAL = """# Introduction

The purpose of this proposal is to examine how remote work affects research collaboration in
universities. This study focuses on the research questions that shape collaboration, the
evidence available in the literature, and the significance of the expected findings for
institutions (Smith, 2020). Furthermore, the thesis statement is that hybrid arrangements
improve output while reducing informal contact.

# Literature Review

Prior research on collaboration highlights communication costs (Jones, 2019). However, studies
indicate that digital tools reduce these costs (Lee, 2021). Moreover, the analysis of team
structure suggests that distance matters less than coordination (Brown, 2018).

# Methodology

The methodology combines a survey of faculty with interviews. Data collection takes place over
two semesters, and the analysis uses regression models. Consequently, the approach balances
breadth with depth (Garcia, 2022).

# Timeline

The plan covers twelve months, with each phase producing a written report.

# Conclusion

In conclusion, this proposal outlines a feasible study with clear expected outcomes.

# References

Smith, J. (2020). Remote work. Journal of Work.
"""

LONG_SENTENCE = (
    "The small team walked along the quiet river bank on a warm afternoon and talked "
    "about the boats the birds the trees the weather and the long road home together"
)
CONCISE_SENTENCES = [
    "Furthermore, this research examines the evidence from each study in detail.",
    "However, the analysis of the data supports the hypothesis in several ways.",
]


def long_winded_document(n: int = 42) -> str:
    return "\n\n".join(f"{LONG_SENTENCE} on day {i}." for i in range(n))


def concise_document(n: int = 42) -> str:
    return "\n\n".join(CONCISE_SENTENCES[i % 2] for i in range(n))


@pytest.fixture
def proposal() -> str:
    return PROPOSAL


# --------------------------------------------------------------------
# Structured LLM fakes
# --------------------------------------------------------------------
class FakeLLM:
    """Returns a canned concern envelope and records prompts."""

    def __init__(self, concerns: list | None = None):
        self.concerns = concerns if concerns is not None else [
            {
                "title": "Unclear Research Gap",
                "description": "The gap the study fills is implied but never stated.",
                "category": "clarity",
                "severity": "high",
                "suggestions": ["State the gap in one sentence at the end of the introduction"],
            }
        ]
        self.prompts: list[str] = []

    def generate(self, prompt, schema):
        self.prompts.append(prompt)
        return schema.model_validate({"concerns": self.concerns})


class FailingLLM:
    def __init__(self, exc: Exception | None = None):
        self.exc = exc or ConnectionError("network unreachable")
        self.calls = 0

    def generate(self, prompt, schema):
        self.calls += 1
        raise self.exc


@pytest.fixture
def fake_llm() -> FakeLLM:
    return FakeLLM()


@pytest.fixture
def failing_llm() -> FailingLLM:
    return FailingLLM()


@pytest.fixture
def engine() -> ConcernAnalysisEngine:
    return ConcernAnalysisEngine()


# --------------------------------------------------------------------
# FastAPI test client with a rule-based engine (never calls OpenAI)
# --------------------------------------------------------------------
@pytest.fixture
def client():
    app.dependency_overrides[get_engine] = lambda: ConcernAnalysisEngine()
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()

