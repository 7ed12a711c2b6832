"""
Intent Configuration

Weight tables and resolution thresholds are plain pydantic models injected
into the scorer and resolver; IntentSettings reads the tunable parts from the
environment.
"""

from functools import cached_property

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ScoringWeights(BaseModel):
    """Additive contribution of each scoring signal, per intent."""

    # DEBUG_ISSUE
    debug_problem_sentiment: float = 0.4
    debug_why_question: float = 0.3
    debug_keyword: float = 0.3
    debug_error_term: float = 0.4

    # UNDERSTAND_FLOW
    flow_how_question: float = 0.4
    flow_term: float = 0.3
    flow_multiple_entities: float = 0.2
    flow_keyword: float = 0.2

    # LOCATE_ENTITY
    locate_where_question: float = 0.5
    locate_term: float = 0.3
    locate_single_entity: float = 0.2

    # COMPARE_ENTITIES
    compare_term: float = 0.5
    compare_multiple_entities: float = 0.3
    compare_conjunction: float = 0.2

    # EXPLORE_ARCHITECTURE
    architecture_keyword: float = 0.4
    architecture_term: float = 0.3
    architecture_complex_query: float = 0.2

    # ANALYZE_PERFORMANCE
    performance_keyword: float = 0.4
    performance_term: float = 0.3
    performance_bottleneck_term: float = 0.2

    # GENERATE_DOCUMENTATION
    documentation_term: float = 0.3
    documentation_learning_sentiment: float = 0.2
    documentation_summary_term: float = 0.2

    # UNDERSTAND_ENTITY
    entity_base: float = Field(default=0.3, gt=0.0, description="Default intent always scores above zero")
    entity_what_question: float = 0.3
    entity_single_entity: float = 0.2
    entity_learning_sentiment: float = 0.1

    model_config = {"frozen": True}


class ResolutionConfig(BaseModel):
    """Primary/secondary selection and confidence blending."""

    secondary_margin: float = Field(default=0.2, ge=0.0, description="Max distance below the primary score")
    secondary_min_score: float = Field(default=0.3, ge=0.0, description="Secondary score must exceed this")
    max_secondary: int = Field(default=2, ge=0, le=7, description="Max number of secondary intents")
    primary_score_weight: float = Field(default=0.7, ge=0.0, le=1.0, description="Weight of primary score")
    analysis_confidence_weight: float = Field(default=0.3, ge=0.0, le=1.0, description="Weight of analysis confidence")

    model_config = {"frozen": True}


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO", description="Log level")
    format: str = Field(default="console", pattern=r"^(console|json)$", description="Renderer")


class IntentSettings(BaseSettings):
    """
    Intent service settings.

    Environment variables use the CODEGRAPH_INTENT_ prefix.
    Example: CODEGRAPH_INTENT_LOG_LEVEL=DEBUG, CODEGRAPH_INTENT_SECONDARY_MARGIN=0.25
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="CODEGRAPH_INTENT_",
        extra="ignore",
    )

    # Logging
    log_level: str = "INFO"
    log_format: str = "console"

    # Resolution
    secondary_margin: float = 0.2
    secondary_min_score: float = 0.3
    max_secondary: int = 2
    primary_score_weight: float = 0.7
    analysis_confidence_weight: float = 0.3

    @cached_property
    def resolution(self) -> ResolutionConfig:
        return ResolutionConfig(
            secondary_margin=self.secondary_margin,
            secondary_min_score=self.secondary_min_score,
            max_secondary=self.max_secondary,
            primary_score_weight=self.primary_score_weight,
            analysis_confidence_weight=self.analysis_confidence_weight,
        )

    @cached_property
    def logging(self) -> LoggingConfig:
        return LoggingConfig(level=self.log_level, format=self.log_format)


DEFAULT_WEIGHTS = ScoringWeights()
DEFAULT_RESOLUTION = ResolutionConfig()
