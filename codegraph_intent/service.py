"""
Query Intent Service

Tool boundary for the intent pipeline. Every operation returns a
ToolResponse envelope; exceptions raised by the pipeline stages are turned
into error envelopes here and nowhere else.
"""

from collections.abc import Callable, Mapping
from typing import Any

from codegraph_intent.domain.envelope import ToolResponse
from codegraph_intent.domain.models import AnalysisResult, ResolvedIntent, Sentiment
from codegraph_intent.domain.ports import SessionStateSink
from codegraph_intent.exceptions import IntentError, IntentInternalError, QueryValidationError
from codegraph_intent.infrastructure.feature_extractor import FeatureExtractor
from codegraph_intent.infrastructure.resolver import IntentResolver
from codegraph_intent.infrastructure.strategy import StrategyRecommender
from codegraph_intent.observability import (
    INTENTS_RESOLVED,
    LAST_CONFIDENCE,
    TOOL_CALLS,
    TOOL_LATENCY,
    LogPerformance,
    add_context,
    clear_context,
    get_logger,
    record_counter,
    record_gauge,
    record_histogram,
)

logger = get_logger(__name__)

ANALYZER_TOOL = "QueryAnalyzer"
RESOLVER_TOOL = "IntentResolver"
STRATEGY_TOOL = "StrategyRecommender"
CLASSIFIER_TOOL = "QueryIntentClassifier"


class QueryIntentService:
    """
    Facade over extraction, resolution and strategy recommendation.

    Example:
        ```python
        service = QueryIntentService(session=InMemorySessionState())
        response = service.classify("Why does OrderProcessor throw a NullPointerException?")
        if response.ok:
            response.data["intent"]["primary"]["intent"]  # "DEBUG_ISSUE"
        ```
    """

    def __init__(
        self,
        extractor: FeatureExtractor | None = None,
        resolver: IntentResolver | None = None,
        recommender: StrategyRecommender | None = None,
        session: SessionStateSink | None = None,
    ):
        self.extractor = extractor or FeatureExtractor()
        self.resolver = resolver or IntentResolver()
        self.recommender = recommender or StrategyRecommender()
        self.session = session

    def analyze_query(self, query: str, aux_context: Mapping[str, Any] | None = None) -> ToolResponse:
        """
        Extract features from a query.

        Returns:
            Success envelope with the AnalysisResult dict, or an error envelope
            (ValidationError) for a blank query
        """

        def run() -> dict[str, Any]:
            return self.extractor.analyze(query, aux_context).to_dict()

        return self._execute("analyze_query", ANALYZER_TOOL, run)

    def resolve_intent(
        self,
        analysis: AnalysisResult | Mapping[str, Any],
        sentiment: Sentiment | str | None = None,
    ) -> ToolResponse:
        """
        Resolve intent from an analysis.

        Args:
            analysis: AnalysisResult, or its dict form (validated on the way in)
            sentiment: Optional sentiment override

        Returns:
            Success envelope with the ResolvedIntent dict, or an error envelope
            (StructuralError) for a malformed analysis
        """

        def run() -> dict[str, Any]:
            resolved = self._resolve(self._coerce_analysis(analysis), sentiment)
            return resolved.to_dict()

        return self._execute("resolve_intent", RESOLVER_TOOL, run)

    def recommend_strategy(
        self,
        resolved: ResolvedIntent,
        analysis: AnalysisResult | Mapping[str, Any],
    ) -> ToolResponse:
        def run() -> dict[str, Any]:
            return self.recommender.recommend(resolved, self._coerce_analysis(analysis)).to_dict()

        return self._execute("recommend_strategy", STRATEGY_TOOL, run)

    def classify(
        self,
        query: str,
        aux_context: Mapping[str, Any] | None = None,
        sentiment: Sentiment | str | None = None,
    ) -> ToolResponse:
        """
        Run the whole pipeline: analysis, intent resolution, strategy.

        Returns:
            Success envelope with data = {"analysis", "intent", "strategy"}
        """

        def run() -> dict[str, Any]:
            analysis = self.extractor.analyze(query, aux_context)
            resolved = self._resolve(analysis, sentiment)
            recommendation = self.recommender.recommend(resolved, analysis)
            return {
                "analysis": analysis.to_dict(),
                "intent": resolved.to_dict(),
                "strategy": recommendation.to_dict(),
            }

        return self._execute("classify", CLASSIFIER_TOOL, run)

    def _resolve(self, analysis: AnalysisResult, sentiment: Sentiment | str | None) -> ResolvedIntent:
        resolved = self.resolver.resolve(analysis, self._coerce_sentiment(sentiment), self.session)
        record_counter(INTENTS_RESOLVED, labels={"intent": resolved.primary.kind.value})
        record_gauge(LAST_CONFIDENCE, resolved.overall_confidence)
        return resolved

    @staticmethod
    def _coerce_analysis(analysis: AnalysisResult | Mapping[str, Any]) -> AnalysisResult:
        if isinstance(analysis, Mapping):
            return AnalysisResult.from_dict(dict(analysis))
        return analysis

    @staticmethod
    def _coerce_sentiment(sentiment: Sentiment | str | None) -> Sentiment | None:
        if sentiment is None or isinstance(sentiment, Sentiment):
            return sentiment
        try:
            return Sentiment(str(sentiment).upper())
        except ValueError as e:
            allowed = ", ".join(s.value for s in Sentiment)
            raise QueryValidationError(
                f"Unknown sentiment '{sentiment}' (expected one of: {allowed})",
                field="sentiment",
            ) from e

    def _execute(self, operation: str, tool_name: str, run: Callable[[], dict[str, Any]]) -> ToolResponse:
        """Run one operation and wrap the outcome in an envelope."""
        add_context(operation=operation)
        perf = LogPerformance(logger, operation, tool=tool_name)
        try:
            with perf:
                data = run()
        except IntentError as e:
            return self._failure(operation, tool_name, e, type(e).__name__, perf.duration_ms)
        except Exception as e:
            internal = IntentInternalError(f"{operation} failed: {e}")
            return self._failure(operation, tool_name, internal, type(e).__name__, perf.duration_ms)
        finally:
            clear_context("operation")

        record_counter(TOOL_CALLS, labels={"tool": tool_name, "status": "success"})
        record_histogram(TOOL_LATENCY, perf.duration_ms)
        return ToolResponse.success(operation, data, tool_name, perf.duration_ms)

    @staticmethod
    def _failure(
        operation: str,
        tool_name: str,
        error: IntentError,
        exception_name: str,
        duration_ms: float,
    ) -> ToolResponse:
        record_counter(TOOL_CALLS, labels={"tool": tool_name, "status": "error"})
        record_histogram(TOOL_LATENCY, duration_ms)

        details: dict[str, Any] = {
            "kind": error.kind,
            "exception": exception_name,
            "execution_time_ms": duration_ms,
        }
        details.update(error.details)
        return ToolResponse.failure(operation, str(error), details)
