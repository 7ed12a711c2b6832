"""
Intent Analysis Models

Defines the records produced by query analysis, intent scoring and
strategy recommendation. Every record is immutable and built per request.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from codegraph_intent.exceptions import AnalysisStructureError


class IntentKind(str, Enum):
    """Developer query intents. Declaration order breaks score ties."""

    DEBUG_ISSUE = "DEBUG_ISSUE"  # Troubleshoot an error or failure
    UNDERSTAND_FLOW = "UNDERSTAND_FLOW"  # Follow a process or execution flow
    LOCATE_ENTITY = "LOCATE_ENTITY"  # Find where a code entity lives
    COMPARE_ENTITIES = "COMPARE_ENTITIES"  # Contrast two or more entities
    EXPLORE_ARCHITECTURE = "EXPLORE_ARCHITECTURE"  # Structure and design questions
    ANALYZE_PERFORMANCE = "ANALYZE_PERFORMANCE"  # Bottlenecks and optimization
    GENERATE_DOCUMENTATION = "GENERATE_DOCUMENTATION"  # Explain, describe, summarize
    UNDERSTAND_ENTITY = "UNDERSTAND_ENTITY"  # Default: what is this entity

    @property
    def humanized(self) -> str:
        """Lower-case label with spaces, e.g. 'debug issue'."""
        return self.value.replace("_", " ").lower()


ScoreMap = dict[IntentKind, float]


class QuestionType(str, Enum):
    """Question pattern kinds in priority order."""

    WHAT = "WHAT"
    HOW = "HOW"
    WHERE = "WHERE"
    WHY = "WHY"
    WHEN = "WHEN"
    UNKNOWN = "UNKNOWN"


class ComplexityLevel(str, Enum):
    SIMPLE = "simple"
    MODERATE = "moderate"
    COMPLEX = "complex"


class Sentiment(str, Enum):
    """Coarse tone of the query, used as a scoring signal."""

    PROBLEM_FOCUSED = "PROBLEM_FOCUSED"
    LEARNING_FOCUSED = "LEARNING_FOCUSED"
    NEUTRAL = "NEUTRAL"


@dataclass(frozen=True)
class EntityCounts:
    classes: int
    methods: int
    packages: int

    @property
    def total(self) -> int:
        return self.classes + self.methods + self.packages

    def to_dict(self) -> dict[str, int]:
        return {
            "classes": self.classes,
            "methods": self.methods,
            "packages": self.packages,
            "total": self.total,
        }


@dataclass(frozen=True)
class ExtractedEntities:
    """
    Code entities found in the raw query.

    Attributes:
        classes: Class-like identifiers (e.g. "UserService")
        methods: Method-call-like tokens (e.g. "processOrder()")
        packages: Dotted lower-case package names (e.g. "com.acme.billing")
    """

    classes: tuple[str, ...] = ()
    methods: tuple[str, ...] = ()
    packages: tuple[str, ...] = ()

    @property
    def all_entities(self) -> tuple[str, ...]:
        """Union of all three lists, first occurrence wins."""
        return tuple(dict.fromkeys(self.classes + self.methods + self.packages))

    @property
    def counts(self) -> EntityCounts:
        return EntityCounts(
            classes=len(self.classes),
            methods=len(self.methods),
            packages=len(self.packages),
        )

    @property
    def total(self) -> int:
        return self.counts.total

    def to_dict(self) -> dict[str, Any]:
        return {
            "classes": list(self.classes),
            "methods": list(self.methods),
            "packages": list(self.packages),
            "all_entities": list(self.all_entities),
            "counts": self.counts.to_dict(),
        }


@dataclass(frozen=True)
class QuestionPatterns:
    """Which interrogative templates matched the query."""

    what: bool = False
    how: bool = False
    where: bool = False
    why: bool = False
    when: bool = False

    @property
    def flags(self) -> dict[QuestionType, bool]:
        return {
            QuestionType.WHAT: self.what,
            QuestionType.HOW: self.how,
            QuestionType.WHERE: self.where,
            QuestionType.WHY: self.why,
            QuestionType.WHEN: self.when,
        }

    @property
    def primary_pattern(self) -> QuestionType:
        for kind, matched in self.flags.items():
            if matched:
                return kind
        return QuestionType.UNKNOWN

    @property
    def has_question_pattern(self) -> bool:
        return any(self.flags.values())

    @property
    def pattern_count(self) -> int:
        return sum(self.flags.values())

    def to_dict(self) -> dict[str, Any]:
        return {
            "patterns": {kind.value.lower(): matched for kind, matched in self.flags.items()},
            "primary_pattern": self.primary_pattern.value,
            "has_question_pattern": self.has_question_pattern,
        }


@dataclass(frozen=True)
class ComplexityAssessment:
    word_count: int
    sentence_count: int
    entity_count: int
    complexity_score: float
    complexity_level: ComplexityLevel

    def to_dict(self) -> dict[str, Any]:
        return {
            "word_count": self.word_count,
            "sentence_count": self.sentence_count,
            "entity_count": self.entity_count,
            "complexity_score": self.complexity_score,
            "complexity_level": self.complexity_level.value,
        }


@dataclass(frozen=True)
class KeywordHits:
    """Vocabulary words found in the normalized query, per category."""

    debug: tuple[str, ...] = ()
    flow: tuple[str, ...] = ()
    architecture: tuple[str, ...] = ()
    performance: tuple[str, ...] = ()

    @property
    def total_keywords(self) -> int:
        return len(self.debug) + len(self.flow) + len(self.architecture) + len(self.performance)

    def to_dict(self) -> dict[str, Any]:
        return {
            "debug": list(self.debug),
            "flow": list(self.flow),
            "architecture": list(self.architecture),
            "performance": list(self.performance),
            "total_keywords": self.total_keywords,
        }


@dataclass(frozen=True)
class QueryCharacteristics:
    """Surface traits of the query that feed scoring and strategy selection."""

    length: int
    has_conjunctions: bool = False
    has_negation: bool = False
    is_imperative: bool = False
    sentiment: Sentiment = Sentiment.NEUTRAL

    def to_dict(self) -> dict[str, Any]:
        return {
            "length": self.length,
            "has_conjunctions": self.has_conjunctions,
            "has_negation": self.has_negation,
            "is_imperative": self.is_imperative,
            "sentiment": self.sentiment.value,
        }


@dataclass(frozen=True)
class AnalysisMetrics:
    """
    Quality of the analysis itself.

    ``analysis_confidence`` feeds intent resolution. ``specificity`` (entities,
    quoted text) and ``clarity`` (question words, length, trailing "?") are
    informational; ``overall_score`` is their mean.
    """

    analysis_confidence: float
    entity_density: float
    question_pattern_count: int
    analysis_complete: bool = True
    specificity: float = 0.0
    clarity: float = 0.0

    @property
    def overall_score(self) -> float:
        return (self.specificity + self.clarity) / 2.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "analysis_confidence": self.analysis_confidence,
            "entity_density": self.entity_density,
            "question_pattern_count": self.question_pattern_count,
            "analysis_complete": self.analysis_complete,
            "specificity": self.specificity,
            "clarity": self.clarity,
            "overall_score": self.overall_score,
        }


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    value = data[name]
    if not isinstance(value, dict):
        raise TypeError(f"'{name}' must be a mapping, got {type(value).__name__}")
    return value


def _strings(data: dict[str, Any], name: str) -> tuple[str, ...]:
    # a bare string would otherwise be split into characters
    value = data[name]
    if not isinstance(value, (list, tuple)) or not all(isinstance(item, str) for item in value):
        raise TypeError(f"'{name}' must be a list of strings")
    return tuple(value)


@dataclass(frozen=True)
class AnalysisResult:
    """
    Structured breakdown of a single query.

    Attributes:
        original_query: Query as received (case preserved)
        normalized_query: Trimmed, lower-cased query used for matching
        entities: Extracted code entities
        question_patterns: Matched interrogative templates
        complexity: Size and complexity assessment
        keywords: Category keyword hits
        characteristics: Surface traits, including sentiment
        metrics: Quality metrics of the analysis itself
        context_keys: Keys of the auxiliary context (values are never read)
    """

    original_query: str
    normalized_query: str
    entities: ExtractedEntities
    question_patterns: QuestionPatterns
    complexity: ComplexityAssessment
    keywords: KeywordHits
    characteristics: QueryCharacteristics
    metrics: AnalysisMetrics
    context_keys: tuple[str, ...] = ()

    @property
    def context_provided(self) -> bool:
        return bool(self.context_keys)

    def to_dict(self) -> dict[str, Any]:
        return {
            "original_query": self.original_query,
            "normalized_query": self.normalized_query,
            "entities": self.entities.to_dict(),
            "question_patterns": self.question_patterns.to_dict(),
            "complexity": self.complexity.to_dict(),
            "keywords": self.keywords.to_dict(),
            "characteristics": self.characteristics.to_dict(),
            "metrics": self.metrics.to_dict(),
            "context_provided": self.context_provided,
            "context_keys": list(self.context_keys),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AnalysisResult":
        """
        Rebuild an analysis from its ``to_dict`` form.

        Derived fields (counts, primary pattern, totals) are recomputed, not trusted.

        Raises:
            AnalysisStructureError: If a required section or field is missing or mistyped
        """
        if not isinstance(data, dict):
            raise AnalysisStructureError(f"Analysis must be a mapping, got {type(data).__name__}")

        section = None
        try:
            section = "original_query"
            original_query = data["original_query"]
            if not isinstance(original_query, str):
                raise TypeError("original_query must be a string")
            normalized_query = data.get("normalized_query")
            if normalized_query is None:
                normalized_query = original_query.strip().lower()
            elif not isinstance(normalized_query, str):
                raise TypeError("normalized_query must be a string")

            section = "entities"
            entities = _section(data, "entities")
            extracted = ExtractedEntities(
                classes=_strings(entities, "classes"),
                methods=_strings(entities, "methods"),
                packages=_strings(entities, "packages"),
            )

            section = "question_patterns"
            patterns = _section(_section(data, "question_patterns"), "patterns")
            question_patterns = QuestionPatterns(
                **{kind: bool(patterns[kind]) for kind in ("what", "how", "where", "why", "when")}
            )

            section = "complexity"
            complexity = _section(data, "complexity")
            assessment = ComplexityAssessment(
                word_count=int(complexity["word_count"]),
                sentence_count=int(complexity["sentence_count"]),
                entity_count=int(complexity["entity_count"]),
                complexity_score=float(complexity["complexity_score"]),
                complexity_level=ComplexityLevel(complexity["complexity_level"]),
            )

            section = "keywords"
            keywords = _section(data, "keywords")
            hits = KeywordHits(
                debug=_strings(keywords, "debug"),
                flow=_strings(keywords, "flow"),
                architecture=_strings(keywords, "architecture"),
                performance=_strings(keywords, "performance"),
            )

            section = "characteristics"
            traits = _section(data, "characteristics") if data.get("characteristics") is not None else {}
            characteristics = QueryCharacteristics(
                length=int(traits.get("length", len(original_query))),
                has_conjunctions=bool(traits.get("has_conjunctions", False)),
                has_negation=bool(traits.get("has_negation", False)),
                is_imperative=bool(traits.get("is_imperative", False)),
                sentiment=Sentiment(traits.get("sentiment", Sentiment.NEUTRAL.value)),
            )

            section = "metrics"
            metrics = _section(data, "metrics")
            analysis_metrics = AnalysisMetrics(
                analysis_confidence=float(metrics["analysis_confidence"]),
                entity_density=float(metrics.get("entity_density", 0.0)),
                question_pattern_count=int(metrics.get("question_pattern_count", question_patterns.pattern_count)),
                analysis_complete=bool(metrics.get("analysis_complete", True)),
                specificity=float(metrics.get("specificity", 0.0)),
                clarity=float(metrics.get("clarity", 0.0)),
            )

            section = "context_keys"
            context_keys = _strings(data, "context_keys") if data.get("context_keys") is not None else ()
        except (KeyError, TypeError, ValueError) as e:
            raise AnalysisStructureError(f"Invalid analysis section '{section}': {e}", missing=section) from e

        return cls(
            original_query=original_query,
            normalized_query=normalized_query,
            entities=extracted,
            question_patterns=question_patterns,
            complexity=assessment,
            keywords=hits,
            characteristics=characteristics,
            metrics=analysis_metrics,
            context_keys=context_keys,
        )


@dataclass(frozen=True)
class PrimaryIntent:
    kind: IntentKind
    confidence: float  # raw score, may exceed 1.0
    explanation: str

    def to_dict(self) -> dict[str, Any]:
        return {"intent": self.kind.value, "confidence": self.confidence, "explanation": self.explanation}


@dataclass(frozen=True)
class SecondaryIntent:
    kind: IntentKind
    confidence: float
    score_difference: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "intent": self.kind.value,
            "confidence": self.confidence,
            "score_difference": self.score_difference,
        }


@dataclass(frozen=True)
class ResolvedIntent:
    """
    Intent resolution outcome.

    Attributes:
        primary: Highest scoring intent
        secondary: Up to two near-tied alternatives, best first
        all_scores: Raw score of every intent kind
        overall_confidence: Blend of primary score and analysis confidence (0-1)
        question_type: Primary question pattern of the analysed query
        sentiment: Sentiment used for scoring
    """

    primary: PrimaryIntent
    secondary: tuple[SecondaryIntent, ...]
    all_scores: ScoreMap
    overall_confidence: float
    question_type: QuestionType = QuestionType.UNKNOWN
    sentiment: Sentiment = Sentiment.NEUTRAL

    def to_dict(self) -> dict[str, Any]:
        return {
            "primary": self.primary.to_dict(),
            "secondary": [s.to_dict() for s in self.secondary],
            "all_scores": {kind.value: score for kind, score in self.all_scores.items()},
            "overall_confidence": self.overall_confidence,
            "question_type": self.question_type.value,
            "sentiment": self.sentiment.value,
        }


class Strategy(str, Enum):
    """Downstream retrieval strategies, from narrowest to broadest."""

    SURGICAL = "SURGICAL"
    FOCUSED = "FOCUSED"
    BALANCED = "BALANCED"
    EXPLORATORY = "EXPLORATORY"
    COMPARATIVE = "COMPARATIVE"


class PhaseType(str, Enum):
    SEQUENTIAL = "SEQUENTIAL"
    PARALLEL = "PARALLEL"


@dataclass(frozen=True)
class ExecutionPhase:
    tools: tuple[str, ...]
    type: PhaseType

    def to_dict(self) -> dict[str, Any]:
        return {"tools": list(self.tools), "type": self.type.value}


@dataclass(frozen=True)
class ExecutionPlan:
    tool_sequence: tuple[str, ...]
    phases: tuple[ExecutionPhase, ...]
    use_parallelism: bool
    max_depth: int
    max_results: int
    timeout_seconds: int
    estimated_duration: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "tool_sequence": list(self.tool_sequence),
            "phases": [p.to_dict() for p in self.phases],
            "use_parallelism": self.use_parallelism,
            "parameters": {
                "max_depth": self.max_depth,
                "max_results": self.max_results,
                "timeout": self.timeout_seconds,
            },
            "estimated_duration": self.estimated_duration,
        }


@dataclass(frozen=True)
class StrategyRecommendation:
    strategy: Strategy
    base_strategy: Strategy
    confidence: float
    description: str
    rationale: str
    plan: ExecutionPlan
    recommendations: tuple[str, ...] = field(default_factory=tuple)

    @property
    def modifiers_applied(self) -> bool:
        return self.strategy != self.base_strategy

    def to_dict(self) -> dict[str, Any]:
        return {
            "recommended": self.strategy.value,
            "confidence": self.confidence,
            "description": self.description,
            "rationale": self.rationale,
            "execution_plan": self.plan.to_dict(),
            "recommendations": list(self.recommendations),
            "base_strategy": self.base_strategy.value,
            "modifiers_applied": self.modifiers_applied,
        }
