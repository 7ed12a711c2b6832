"""
CodeGraph Intent CLI

Command-line interface for query analysis and intent classification.
"""

import json
from typing import Any

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from codegraph_intent.config import IntentSettings
from codegraph_intent.domain.envelope import ToolResponse
from codegraph_intent.infrastructure import FeatureExtractor, InMemorySessionState, IntentResolver, StrategyRecommender
from codegraph_intent.observability import setup_logging
from codegraph_intent.service import QueryIntentService

app = typer.Typer(
    name="codegraph-intent",
    help="CodeGraph Intent - classify developer queries about a codebase",
    add_completion=False,
)

console = Console()


def _build_service(operation: str, as_json: bool) -> QueryIntentService:
    """Build the service from CODEGRAPH_INTENT_* settings; exit 1 if they are invalid."""
    try:
        settings = IntentSettings()
        logging_config = settings.logging
        resolution = settings.resolution
    except ValidationError as e:
        problems = "; ".join(f"{'.'.join(map(str, err['loc']))}: {err['msg']}" for err in e.errors())
        response = ToolResponse.failure(operation, f"Invalid settings: {problems}", {"kind": "ConfigurationError"})
        _report(response, as_json)
        raise typer.Exit(1) from e

    setup_logging(level=logging_config.level, format=logging_config.format)
    return QueryIntentService(
        extractor=FeatureExtractor(),
        resolver=IntentResolver(config=resolution),
        recommender=StrategyRecommender(),
        session=InMemorySessionState(),
    )


def _report(response: ToolResponse, as_json: bool) -> None:
    if as_json:
        _emit_json(response)
    else:
        _fail(response)


def _emit_json(response: ToolResponse) -> None:
    typer.echo(json.dumps(response.to_dict(), indent=2, default=str))


def _fail(response: ToolResponse) -> None:
    details = response.details
    console.print(
        Panel.fit(
            f"[bold red]{details.get('kind', 'Error')}[/bold red]\n{response.error}",
            title=f"[red]✗ {response.operation} failed[/red]",
            border_style="red",
        )
    )


@app.command()
def analyze(
    query: str = typer.Argument(..., help="Developer query to analyze"),
    as_json: bool = typer.Option(False, "--json", help="Print the raw response envelope as JSON"),
):
    """
    Extract entities, question patterns, complexity and keywords from a query.

    Examples:
        codegraph-intent analyze "What is the UserService class?"
    """
    response = _build_service("analyze_query", as_json).analyze_query(query)

    if response.ok and not as_json:
        _render_analysis(response.data)
    else:
        _report(response, as_json)

    if not response.ok:
        raise typer.Exit(1)


@app.command()
def classify(
    query: str = typer.Argument(..., help="Developer query to classify"),
    sentiment: str | None = typer.Option(
        None, "--sentiment", "-s", help="Override sentiment (PROBLEM_FOCUSED, LEARNING_FOCUSED, NEUTRAL)"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the raw response envelope as JSON"),
):
    """
    Resolve the intent of a query and recommend a retrieval strategy.

    Examples:
        codegraph-intent classify "Compare OrderService and PaymentService"
        codegraph-intent classify "Why does OrderProcessor throw a NullPointerException?" -s PROBLEM_FOCUSED
    """
    response = _build_service("classify", as_json).classify(query, sentiment=sentiment)

    if response.ok and not as_json:
        _render_classification(response.data, response.metadata.execution_time_ms)
    else:
        _report(response, as_json)

    if not response.ok:
        raise typer.Exit(1)


def _render_analysis(analysis: dict[str, Any]) -> None:
    console.print(f"\n[bold cyan]🔍 Query Analysis[/bold cyan]  [dim]{analysis['original_query']}[/dim]\n")

    entities = analysis["entities"]
    table = Table(title="Entities")
    table.add_column("Kind", style="cyan")
    table.add_column("Matches", style="white")
    for kind in ("classes", "methods", "packages"):
        table.add_row(kind, ", ".join(entities[kind]) or "-")
    console.print(table)

    patterns = analysis["question_patterns"]
    complexity = analysis["complexity"]
    metrics = analysis["metrics"]
    keywords = analysis["keywords"]

    summary = Table(show_header=False)
    summary.add_column("Field", style="bold")
    summary.add_column("Value")
    summary.add_row("Primary pattern", patterns["primary_pattern"])
    summary.add_row(
        "Complexity",
        f"{complexity['complexity_level']} ({complexity['complexity_score']:.2f}, "
        f"{complexity['word_count']} words, {complexity['sentence_count']} sentences)",
    )
    for category in ("debug", "flow", "architecture", "performance"):
        summary.add_row(f"{category} keywords", ", ".join(keywords[category]) or "-")
    summary.add_row("Sentiment", analysis["characteristics"]["sentiment"])
    summary.add_row("Analysis confidence", f"{metrics['analysis_confidence']:.2f}")
    summary.add_row("Specificity / clarity", f"{metrics['specificity']:.2f} / {metrics['clarity']:.2f}")
    console.print(summary)


def _render_classification(data: dict[str, Any], execution_time_ms: float) -> None:
    intent = data["intent"]
    strategy = data["strategy"]
    primary = intent["primary"]

    console.print(
        Panel.fit(
            f"[bold green]{primary['intent']}[/bold green]  "
            f"(overall confidence {intent['overall_confidence']:.2f})\n{primary['explanation']}",
            title="[cyan]Resolved Intent[/cyan]",
            border_style="cyan",
        )
    )

    table = Table(title="Intent Scores")
    table.add_column("Intent", style="cyan")
    table.add_column("Score", style="yellow", justify="right")
    secondary = {s["intent"] for s in intent["secondary"]}
    for kind, score in sorted(intent["all_scores"].items(), key=lambda item: item[1], reverse=True):
        marker = " ★" if kind == primary["intent"] else (" ·" if kind in secondary else "")
        table.add_row(f"{kind}{marker}", f"{score:.2f}")
    console.print(table)

    plan = strategy["execution_plan"]
    console.print(f"\n[bold]Strategy:[/bold] {strategy['recommended']} ({strategy['confidence']:.2f})")
    console.print(f"[dim]{strategy['rationale']}[/dim]")
    console.print(f"[bold]Tools:[/bold] {' → '.join(plan['tool_sequence'])}")
    console.print(f"[bold]Estimated:[/bold] {plan['estimated_duration']}")
    for note in strategy["recommendations"]:
        console.print(f"  • {note}")
    console.print(f"\n[dim]Completed in {execution_time_ms:.1f} ms[/dim]")


if __name__ == "__main__":
    app()
