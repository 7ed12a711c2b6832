"""
Strategy Recommender

Maps a resolved intent and the query's shape to a downstream retrieval
strategy and an execution plan over the retrieval tools.
"""

from dataclasses import dataclass

from codegraph_intent.domain.models import (
    AnalysisResult,
    ComplexityLevel,
    ExecutionPhase,
    ExecutionPlan,
    IntentKind,
    PhaseType,
    ResolvedIntent,
    Strategy,
    StrategyRecommendation,
)
from codegraph_intent.exceptions import AnalysisStructureError
from codegraph_intent.observability import get_logger
from codegraph_intent.utils import clamp

logger = get_logger(__name__)

# Retrieval tools
HUNT_CODE = "hunt_code"
EXPLORE_STRUCTURE = "explore_structure"
TRACE_EXECUTION_PATH = "trace_execution_path"
ENRICH_CONTEXT = "enrich_context"
GENERATE_NARRATIVE = "generate_narrative"


@dataclass(frozen=True)
class StrategyProfile:
    description: str
    tools: tuple[str, ...]
    parallelism: bool
    estimated_time: str
    max_depth: int
    timeout_seconds: int
    rationale: str


STRATEGY_PROFILES: dict[Strategy, StrategyProfile] = {
    Strategy.SURGICAL: StrategyProfile(
        description="Focused, precise analysis for specific problems",
        tools=(HUNT_CODE, TRACE_EXECUTION_PATH, ENRICH_CONTEXT),
        parallelism=False,
        estimated_time="30-60 seconds",
        max_depth=2,
        timeout_seconds=60,
        rationale="Using precise, focused analysis for specific problem resolution.",
    ),
    Strategy.FOCUSED: StrategyProfile(
        description="Targeted analysis with limited scope expansion",
        tools=(HUNT_CODE, EXPLORE_STRUCTURE, ENRICH_CONTEXT),
        parallelism=True,
        estimated_time="45-90 seconds",
        max_depth=3,
        timeout_seconds=90,
        rationale="Using targeted analysis with controlled scope expansion.",
    ),
    Strategy.BALANCED: StrategyProfile(
        description="Comprehensive analysis with moderate depth",
        tools=(HUNT_CODE, EXPLORE_STRUCTURE, TRACE_EXECUTION_PATH, ENRICH_CONTEXT),
        parallelism=True,
        estimated_time="60-120 seconds",
        max_depth=4,
        timeout_seconds=120,
        rationale="Using comprehensive analysis with moderate depth.",
    ),
    Strategy.EXPLORATORY: StrategyProfile(
        description="Deep exploration for complex architectural understanding",
        tools=(EXPLORE_STRUCTURE, HUNT_CODE, TRACE_EXECUTION_PATH, ENRICH_CONTEXT, GENERATE_NARRATIVE),
        parallelism=True,
        estimated_time="90-180 seconds",
        max_depth=5,
        timeout_seconds=180,
        rationale="Using deep exploration for complex architectural understanding.",
    ),
    Strategy.COMPARATIVE: StrategyProfile(
        description="Side-by-side analysis for entity comparison",
        tools=(HUNT_CODE, EXPLORE_STRUCTURE, ENRICH_CONTEXT),
        parallelism=False,
        estimated_time="75-150 seconds",
        max_depth=3,
        timeout_seconds=150,
        rationale="Using side-by-side analysis for entity comparison.",
    ),
}

MAX_RESULTS = {
    ComplexityLevel.SIMPLE: 10,
    ComplexityLevel.MODERATE: 20,
    ComplexityLevel.COMPLEX: 50,
}

LOW_CONFIDENCE = 0.6
MIN_STRATEGY_CONFIDENCE = 0.3


class StrategyRecommender:
    """
    Rule-based strategy selection.

    A base strategy is picked from the primary intent, then adjusted once for
    query complexity, intent confidence and entity count.
    """

    def recommend(self, resolved: ResolvedIntent, analysis: AnalysisResult) -> StrategyRecommendation:
        """
        Recommend a retrieval strategy.

        Args:
            resolved: Output of IntentResolver.resolve
            analysis: The analysis the intent was resolved from

        Returns:
            StrategyRecommendation with execution plan

        Raises:
            AnalysisStructureError: If either input has the wrong type
        """
        if not isinstance(resolved, ResolvedIntent):
            raise AnalysisStructureError(f"Expected ResolvedIntent, got {type(resolved).__name__}", missing="intent")
        if not isinstance(analysis, AnalysisResult):
            raise AnalysisStructureError(f"Expected AnalysisResult, got {type(analysis).__name__}", missing="analysis")

        intent = resolved.primary.kind
        intent_confidence = resolved.primary.confidence
        level = analysis.complexity.complexity_level

        base = self.base_strategy(intent, analysis)
        strategy = self.apply_modifiers(base, analysis, intent_confidence)
        profile = STRATEGY_PROFILES[strategy]

        recommendation = StrategyRecommendation(
            strategy=strategy,
            base_strategy=base,
            confidence=self.strategy_confidence(strategy, intent_confidence, level),
            description=profile.description,
            rationale=(
                f"Selected '{strategy.value.lower()}' strategy for '{intent.humanized}' intent. "
                f"Query complexity is {level.value}. {profile.rationale}"
            ),
            plan=self.build_plan(strategy, intent, level),
            recommendations=self.recommendations(strategy, intent, analysis),
        )

        logger.debug(
            "strategy_recommended",
            strategy=strategy.value,
            base_strategy=base.value,
            intent=intent.value,
            confidence=round(recommendation.confidence, 3),
        )
        return recommendation

    def base_strategy(self, intent: IntentKind, analysis: AnalysisResult) -> Strategy:
        if intent in (IntentKind.DEBUG_ISSUE, IntentKind.ANALYZE_PERFORMANCE):
            return Strategy.SURGICAL
        if intent == IntentKind.UNDERSTAND_FLOW:
            return Strategy.EXPLORATORY if analysis.entities.total > 3 else Strategy.FOCUSED
        if intent == IntentKind.LOCATE_ENTITY:
            return Strategy.FOCUSED
        if intent == IntentKind.COMPARE_ENTITIES:
            return Strategy.COMPARATIVE
        if intent == IntentKind.EXPLORE_ARCHITECTURE:
            return Strategy.EXPLORATORY
        if intent == IntentKind.GENERATE_DOCUMENTATION:
            if analysis.complexity.complexity_level == ComplexityLevel.COMPLEX:
                return Strategy.EXPLORATORY
            return Strategy.BALANCED
        return Strategy.BALANCED

    def apply_modifiers(self, base: Strategy, analysis: AnalysisResult, intent_confidence: float) -> Strategy:
        """First matching rule wins; otherwise the base strategy stands."""
        level = analysis.complexity.complexity_level
        entity_count = analysis.entities.total

        if level == ComplexityLevel.COMPLEX and base == Strategy.FOCUSED:
            return Strategy.BALANCED
        if level == ComplexityLevel.COMPLEX and base == Strategy.BALANCED:
            return Strategy.EXPLORATORY
        if level == ComplexityLevel.SIMPLE and intent_confidence < LOW_CONFIDENCE:
            if base == Strategy.EXPLORATORY:
                return Strategy.BALANCED
            if base == Strategy.BALANCED:
                return Strategy.FOCUSED
        if entity_count > 5:
            return Strategy.EXPLORATORY
        if entity_count == 0 and analysis.complexity.word_count < 5:
            return Strategy.FOCUSED
        return base

    def build_plan(self, strategy: Strategy, intent: IntentKind, level: ComplexityLevel) -> ExecutionPlan:
        profile = STRATEGY_PROFILES[strategy]
        tools = self.customize_tools(profile.tools, intent)
        return ExecutionPlan(
            tool_sequence=tools,
            phases=self.build_phases(tools, profile.parallelism),
            use_parallelism=profile.parallelism,
            max_depth=profile.max_depth,
            max_results=MAX_RESULTS.get(level, 20),
            timeout_seconds=profile.timeout_seconds,
            estimated_duration=profile.estimated_time,
        )

    @staticmethod
    def customize_tools(tools: tuple[str, ...], intent: IntentKind) -> tuple[str, ...]:
        customized = list(tools)

        if intent in (IntentKind.UNDERSTAND_FLOW, IntentKind.GENERATE_DOCUMENTATION):
            if GENERATE_NARRATIVE not in customized:
                customized.append(GENERATE_NARRATIVE)

        if intent == IntentKind.DEBUG_ISSUE and TRACE_EXECUTION_PATH in customized:
            customized.remove(TRACE_EXECUTION_PATH)
            customized.insert(1, TRACE_EXECUTION_PATH)

        if intent == IntentKind.EXPLORE_ARCHITECTURE and EXPLORE_STRUCTURE not in customized:
            customized.insert(0, EXPLORE_STRUCTURE)

        return tuple(customized)

    @staticmethod
    def build_phases(tools: tuple[str, ...], parallel: bool) -> tuple[ExecutionPhase, ...]:
        if not parallel:
            return tuple(ExecutionPhase(tools=(tool,), type=PhaseType.SEQUENTIAL) for tool in tools)

        phases = []
        if HUNT_CODE in tools:
            phases.append(ExecutionPhase(tools=(HUNT_CODE,), type=PhaseType.SEQUENTIAL))

        fan_out = tuple(tool for tool in (EXPLORE_STRUCTURE, TRACE_EXECUTION_PATH) if tool in tools)
        if fan_out:
            phases.append(ExecutionPhase(tools=fan_out, type=PhaseType.PARALLEL))

        for tool in (ENRICH_CONTEXT, GENERATE_NARRATIVE):
            if tool in tools:
                phases.append(ExecutionPhase(tools=(tool,), type=PhaseType.SEQUENTIAL))

        return tuple(phases)

    @staticmethod
    def strategy_confidence(strategy: Strategy, intent_confidence: float, level: ComplexityLevel) -> float:
        confidence = intent_confidence * 0.7
        if strategy in (Strategy.SURGICAL, Strategy.FOCUSED):
            confidence += 0.2
        if level == ComplexityLevel.COMPLEX:
            confidence -= 0.1
        return clamp(confidence, MIN_STRATEGY_CONFIDENCE, 1.0)

    @staticmethod
    def recommendations(strategy: Strategy, intent: IntentKind, analysis: AnalysisResult) -> tuple[str, ...]:
        notes = []
        if analysis.complexity.complexity_level == ComplexityLevel.COMPLEX:
            notes.append("Consider breaking down complex query into smaller parts")
        if intent == IntentKind.DEBUG_ISSUE:
            notes.append("Focus on error context and execution path analysis")
        if strategy == Strategy.EXPLORATORY:
            notes.append("Allow sufficient time for comprehensive analysis")
        if analysis.characteristics is not None and analysis.characteristics.has_conjunctions:
            notes.append("Query contains multiple concerns - results may address each separately")
        return tuple(notes)
