class ProofreaderError(RuntimeError):
    ...


class ValidationError(ProofreaderError):
    """Input the engine refuses to analyze."""


class AnalysisSubsystemError(ProofreaderError):
    def __init__(self, analyzer: str, cause: BaseException):
        super().__init__(f"{analyzer} analyzer failed: {cause!r}")
        self.analyzer = analyzer
        self.cause = cause


class AIGenerationError(ProofreaderError):
    """LLM call failed or returned output that does not fit the concern schema."""
