"""
Tests for the QueryIntentService tool boundary.
"""

import pytest

from codegraph_intent.domain.ports import INTENT_CONFIDENCE_KEY, RESOLVED_INTENT_KEY
from codegraph_intent.infrastructure.resolver import IntentResolver
from codegraph_intent.observability import get_metrics_collector
from codegraph_intent.service import QueryIntentService


class ExplodingExtractor:
    def analyze(self, query, aux_context=None):
        raise RuntimeError("tokenizer crashed")


class ExplodingScorer:
    def score_all(self, analysis, sentiment):
        raise ZeroDivisionError("division by zero")


class TestAnalyzeQuery:
    def test_success_envelope(self, service):
        response = service.analyze_query("What is the UserService class?")

        assert response.ok
        assert response.operation == "analyze_query"
        assert response.metadata.tool_name == "QueryAnalyzer"
        assert response.metadata.execution_time_ms >= 0
        assert response.data["entities"]["classes"] == ["UserService"]
        assert response.data["question_patterns"]["primary_pattern"] == "WHAT"

    def test_empty_query_is_validation_error(self, service):
        response = service.analyze_query("")

        assert not response.ok
        assert response.data is None
        assert response.error == "Query cannot be empty"
        assert response.details["kind"] == "ValidationError"
        assert response.details["exception"] == "QueryValidationError"
        assert response.details["execution_time_ms"] >= 0

    def test_envelope_shapes(self, service):
        success = service.analyze_query("where is the router").to_dict()
        failure = service.analyze_query("   ").to_dict()

        assert set(success) == {"status", "operation", "data", "metadata"}
        assert set(failure) == {"status", "operation", "error", "details"}
        assert success["status"] == "success"
        assert failure["status"] == "error"


class TestResolveIntent:
    def test_accepts_analysis_dict(self, service):
        analysis = service.analyze_query("Compare OrderService and PaymentService").data

        response = service.resolve_intent(analysis)

        assert response.ok
        assert response.metadata.tool_name == "IntentResolver"
        assert response.data["primary"]["intent"] == "COMPARE_ENTITIES"

    def test_accepts_analysis_result(self, service, analyze):
        response = service.resolve_intent(analyze("What is the UserService class?"))

        assert response.data["primary"]["intent"] == "UNDERSTAND_ENTITY"

    def test_sentiment_override_as_string(self, service, analyze):
        analysis = analyze("Why does OrderProcessor throw a NullPointerException?")

        response = service.resolve_intent(analysis, sentiment="problem_focused")

        assert response.data["primary"]["intent"] == "DEBUG_ISSUE"
        assert response.data["all_scores"]["DEBUG_ISSUE"] == pytest.approx(1.4)
        assert response.data["sentiment"] == "PROBLEM_FOCUSED"

    def test_unknown_sentiment_is_validation_error(self, service, analyze):
        response = service.resolve_intent(analyze("hello"), sentiment="angry")

        assert response.details["kind"] == "ValidationError"
        assert response.details["field"] == "sentiment"

    def test_incomplete_analysis_is_structural_error(self, service):
        response = service.resolve_intent({"original_query": "hello"})

        assert not response.ok
        assert response.details["kind"] == "StructuralError"
        assert response.details["missing"] == "entities"

    @pytest.mark.parametrize(
        "section,field,value",
        [
            ("characteristics", None, ["oops"]),
            ("normalized_query", None, 42),
            ("entities", "classes", "UserService"),
        ],
    )
    def test_mistyped_payload_is_structural_error(self, service, analyze, section, field, value):
        payload = analyze("What is the UserService class?").to_dict()
        if field is None:
            payload[section] = value
        else:
            payload[section][field] = value

        response = service.resolve_intent(payload)

        assert not response.ok
        assert response.details["kind"] == "StructuralError"

    def test_wrong_type_is_structural_error(self, service):
        response = service.resolve_intent("What is the UserService class?")

        assert response.details["kind"] == "StructuralError"

    def test_writes_session_state(self, service, session_state, analyze):
        response = service.resolve_intent(analyze("What is the UserService class?"))

        assert session_state.get(RESOLVED_INTENT_KEY) == "UNDERSTAND_ENTITY"
        assert session_state.get(INTENT_CONFIDENCE_KEY) == response.data["overall_confidence"]

    def test_internal_error(self, analyze):
        service = QueryIntentService(resolver=IntentResolver(scorer=ExplodingScorer()))

        response = service.resolve_intent(analyze("hello"))

        assert response.details["kind"] == "InternalError"
        assert response.data is None


class TestRecommendStrategy:
    def test_success(self, service, resolver, analyze):
        analysis = analyze("Compare OrderService and PaymentService")

        response = service.recommend_strategy(resolver.resolve(analysis), analysis.to_dict())

        assert response.ok
        assert response.metadata.tool_name == "StrategyRecommender"
        assert response.data["recommended"] == "COMPARATIVE"

    def test_missing_intent(self, service, analyze):
        response = service.recommend_strategy(None, analyze("hello"))

        assert response.details["kind"] == "StructuralError"


class TestClassify:
    def test_scenarios(self, service):
        cases = {
            "What is the UserService class?": "UNDERSTAND_ENTITY",
            "Compare OrderService and PaymentService": "COMPARE_ENTITIES",
            "How does the checkout process work?": "UNDERSTAND_FLOW",
            "Where is the PaymentService?": "LOCATE_ENTITY",
        }

        for query, expected in cases.items():
            response = service.classify(query)
            assert response.ok, query
            assert response.data["intent"]["primary"]["intent"] == expected, query

    def test_data_sections(self, service):
        query = "Why does OrderProcessor throw a NullPointerException?"
        response = service.classify(query, sentiment="PROBLEM_FOCUSED")

        assert set(response.data) == {"analysis", "intent", "strategy"}
        assert response.data["intent"]["primary"]["intent"] == "DEBUG_ISSUE"
        assert response.data["strategy"]["recommended"] == "SURGICAL"
        assert response.metadata.tool_name == "QueryIntentClassifier"

    def test_empty_query(self, service, session_state):
        response = service.classify("")

        assert response.status == "error"
        assert response.details["kind"] == "ValidationError"
        assert len(session_state) == 0

    def test_unexpected_exception_is_internal_error(self):
        service = QueryIntentService(extractor=ExplodingExtractor())

        response = service.classify("hello")

        assert response.details["kind"] == "InternalError"
        assert response.details["exception"] == "RuntimeError"
        assert "tokenizer crashed" in response.error


class TestMetrics:
    def test_records_calls_and_intents(self, service):
        service.classify("Compare OrderService and PaymentService")
        service.classify("")

        metrics = get_metrics_collector()
        success = {"tool": "QueryIntentClassifier", "status": "success"}
        error = {"tool": "QueryIntentClassifier", "status": "error"}
        assert metrics.get_counter("intent_tool_calls_total", success) == 1
        assert metrics.get_counter("intent_tool_calls_total", error) == 1
        assert metrics.get_counter("intent_resolved_total", {"intent": "COMPARE_ENTITIES"}) == 1
        assert metrics.get_histogram_stats("intent_tool_latency_ms")["count"] == 2

    def test_gauge_tracks_last_confidence(self, service):
        service.classify("What is the UserService class?")
        last = service.classify("Compare OrderService and PaymentService")

        gauge = get_metrics_collector().get_gauge("intent_last_overall_confidence")
        assert gauge == last.data["intent"]["overall_confidence"]

    def test_failed_resolution_leaves_gauge_untouched(self, service):
        service.classify("")

        assert "intent_last_overall_confidence" not in get_metrics_collector().get_all_metrics()["gauges"]
