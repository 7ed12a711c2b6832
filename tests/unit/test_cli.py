"""
Tests for the codegraph-intent CLI.
"""

import json

import pytest
from typer.testing import CliRunner

from codegraph_intent.cli import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
    """Keep log lines out of captured output"""
    monkeypatch.setenv("CODEGRAPH_INTENT_LOG_LEVEL", "CRITICAL")


class TestClassifyCommand:
    def test_json_output(self):
        result = runner.invoke(app, ["classify", "Compare OrderService and PaymentService", "--json"])

        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert payload["status"] == "success"
        assert payload["data"]["intent"]["primary"]["intent"] == "COMPARE_ENTITIES"
        assert payload["data"]["strategy"]["recommended"] == "COMPARATIVE"

    def test_sentiment_option(self):
        result = runner.invoke(
            app,
            [
                "classify",
                "Why does OrderProcessor throw a NullPointerException?",
                "--sentiment",
                "PROBLEM_FOCUSED",
                "--json",
            ],
        )

        assert result.exit_code == 0
        assert json.loads(result.stdout)["data"]["intent"]["primary"]["intent"] == "DEBUG_ISSUE"

    def test_rich_output(self):
        result = runner.invoke(app, ["classify", "What is the UserService class?"])

        assert result.exit_code == 0
        assert "UNDERSTAND_ENTITY" in result.stdout
        assert "Strategy:" in result.stdout

    def test_empty_query_exits_with_error(self):
        result = runner.invoke(app, ["classify", "   ", "--json"])

        assert result.exit_code == 1
        assert '"ValidationError"' in result.stdout

    def test_bad_sentiment_exits_with_error(self):
        result = runner.invoke(app, ["classify", "hello", "--sentiment", "angry"])

        assert result.exit_code == 1
        assert "ValidationError" in result.stdout


class TestInvalidSettings:
    """Bad CODEGRAPH_INTENT_* values are reported, not raised"""

    @pytest.fixture(autouse=True)
    def bad_weight(self, monkeypatch):
        monkeypatch.setenv("CODEGRAPH_INTENT_PRIMARY_SCORE_WEIGHT", "1.5")

    def test_panel_and_exit_code(self):
        result = runner.invoke(app, ["classify", "What is the UserService class?"])

        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "ConfigurationError" in result.stdout
        assert "primary_score_weight" in result.stdout

    def test_json_envelope(self):
        result = runner.invoke(app, ["analyze", "What is the UserService class?", "--json"])

        assert result.exit_code == 1
        payload = json.loads(result.stdout)
        assert payload["status"] == "error"
        assert payload["operation"] == "analyze_query"
        assert payload["details"] == {"kind": "ConfigurationError"}
        assert "primary_score_weight" in payload["error"]


class TestAnalyzeCommand:
    def test_json_output(self):
        result = runner.invoke(app, ["analyze", "What is the UserService class?", "--json"])

        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert payload["operation"] == "analyze_query"
        assert payload["data"]["entities"]["classes"] == ["UserService"]

    def test_rich_output(self):
        result = runner.invoke(app, ["analyze", "How does processOrder() work?"])

        assert result.exit_code == 0
        assert "processOrder()" in result.stdout
        assert "HOW" in result.stdout

    def test_empty_query(self):
        result = runner.invoke(app, ["analyze", ""])

        assert result.exit_code == 1
