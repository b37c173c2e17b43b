import os

MAX_REQUEST_BYTES = 512 * 1024  # JSON body soft cap
MAX_DOCUMENT_CHARS = 100_000
MIN_DOCUMENT_CHARS = 10

# LLM settings
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY", "")
OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
LLM_TIMEOUT_SECONDS = float(os.getenv("LLM_TIMEOUT_SECONDS", "60"))

ANALYZER_WORKERS = 5
ANALYSIS_VERSION = "1.0"

# Structure
INTRO_LEAD_PARAGRAPHS = 2
INTRO_MIN_WORDS = 40  # a lead paragraph this long reads as an introduction
MIN_SECTIONS_FOR_PROGRESSION = 3
MIN_ORDERED_SECTIONS = 2
HEADING_CONSISTENCY_RATIO = 0.8
TRANSITION_TARGET_DENSITY = 0.2
ORDER_WEIGHT = 0.4
WEAK_TOPIC_SENTENCE_CHARS = 50
WEAK_TOPIC_PENALTY = 0.15
MIN_SENTENCES_FOR_FLOW = 5
COHERENCE_CONCERN_THRESHOLD = 0.5

# Style
LONG_SENTENCE_THRESHOLD = 25  # words
LONG_SENTENCE_RATIO = 0.3
FIRST_PERSON_RATIO = 0.02
ACADEMIC_WORDS_PER_UNIT = 100
FORMALITY_WORDS_PER_UNIT = 50
MIN_ACADEMIC_PHRASES = 2
ACADEMIC_PHRASE_MIN_CHARS = 500
ACADEMIC_TONE_THRESHOLD = 0.3
FORMALITY_THRESHOLD = 0.4
CLARITY_THRESHOLD = 0.6
READABILITY_FLOOR = 20  # Flesch Reading Ease
# (exclusive lower bound on average sentence length, band score), checked in order
CLARITY_BANDS = ((25, 0.5), (20, 0.7))
SHORT_SENTENCE_AVERAGE = 10
SHORT_SENTENCE_SCORE = 0.6
LONG_RATIO_PENALTY = 0.5

# Consistency
CITATION_WINDOW_CHARS = 100
REFERENCE_TAIL_FRACTION = 0.5

# Completeness
DETAIL_FLOOR_WORDS = 100
COMPLETENESS_WEIGHTS = {
    "sections": 0.5,
    "detail": 0.3,
    "content": 0.2,
}
QUALITY_PASS_THRESHOLD = 0.5
COMPLETENESS_CONCERN_THRESHOLD = 0.5
SECTION_BALANCE_RATIO = 3
DEPTH_MIN_INDICATORS = 3
DEPTH_MIN_CHARS = 500
EVIDENCE_MIN_INDICATORS = 2
EVIDENCE_MIN_CHARS = 800
CRITICAL_MIN_INDICATORS = 2
CRITICAL_MIN_CHARS = 600

# Aggregation
SIMILARITY_THRESHOLD = 0.7
MAX_TITLE_CHARS = 80
