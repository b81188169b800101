"""Command-line interface for the SEO Metrics engine."""

import json
import sys
from pathlib import Path

import click
from loguru import logger
from rich import box
from rich.console import Console
from rich.table import Table

from .config import get_settings, load_reference_tables
from .exceptions import InvalidInputError
from .models.keyword import Device, KeywordAttributes
from .services import (
    AnomalyDetector,
    IntentClassifier,
    KeywordValueScorer,
    TrafficEstimator,
    TrendAnalyzer,
)

console = Console()

MONTH_NAMES = [
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
]


def _configure_logging(debug: bool) -> None:
    settings = get_settings()
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if debug else "WARNING")
    try:
        Path(settings.log_file).parent.mkdir(parents=True, exist_ok=True)
        logger.add(settings.log_file, rotation="10 MB", level=settings.log_level, retention="30 days")
    except OSError:
        logger.warning("Cannot write log file {}, logging to stderr only", settings.log_file)


def _load_points(path: str) -> list:
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise InvalidInputError(f"Cannot read volume data from {path}: {exc}") from exc

    if isinstance(data, dict):
        data = data.get("points", data.get("monthly_searches", []))
    if not isinstance(data, list):
        raise InvalidInputError(f"{path} must contain a list of monthly points")
    return data


def _months(months) -> str:
    return ", ".join(MONTH_NAMES[m - 1] for m in months) or "-"


def _print_json(payload) -> None:
    click.echo(json.dumps(payload, indent=2))


@click.group()
@click.version_option(version="1.0.0", prog_name="SEO Metrics Engine")
@click.option('--debug/--no-debug', default=False, help='Enable debug logging')
@click.pass_context
def cli(ctx, debug):
    """SEO Metrics & Forecasting Engine.

    Trend, forecast, anomaly, keyword value and intent analysis.
    """
    _configure_logging(debug)
    ctx.obj = {"settings": get_settings()}


def _run(func):
    """Report InvalidInputError as a clean CLI failure."""
    try:
        func()
    except InvalidInputError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        sys.exit(1)


@cli.command()
@click.argument("data_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--keyword", "-k", default="", help="Keyword the series belongs to")
@click.option("--horizon", "-n", type=int, default=None, help="Months to forecast")
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of a table")
@click.pass_context
def trend(ctx, data_file, keyword, horizon, as_json):
    """Analyze seasonality, growth and forecast for a JSON volume series."""
    settings = ctx.obj["settings"]

    def _do():
        analyzer = TrendAnalyzer.from_settings(settings)
        if horizon is not None:
            analyzer.horizon = horizon
        report = analyzer.analyze(_load_points(data_file), keyword=keyword)

        if as_json:
            _print_json(report.to_dict())
            return

        summary = Table(title=f"Trend analysis: {keyword or data_file}", box=box.ROUNDED)
        summary.add_column("Metric", style="cyan")
        summary.add_column("Value", style="white")
        summary.add_row("Seasonal", "yes" if report.is_seasonal else "no")
        summary.add_row("Pattern", report.seasonality_pattern.value)
        summary.add_row("Peak months", _months(report.peak_months))
        summary.add_row("Low months", _months(report.low_months))
        summary.add_row("YoY growth", f"{report.growth_rate:+.1f}%")
        summary.add_row("Volatility", str(report.volatility))
        summary.add_row("Confidence", str(report.confidence))
        summary.add_row("Anomalies", str(len(report.anomalies)))
        console.print(summary)

        if report.forecast:
            table = Table(title="Forecast", box=box.SIMPLE)
            table.add_column("Month")
            table.add_column("Predicted", justify="right")
            table.add_column("Confidence", justify="right")
            table.add_column("Trend")
            for f in report.forecast:
                table.add_row(
                    f"{MONTH_NAMES[f.month - 1]} {f.year}",
                    f"{f.predicted_volume:,}",
                    f"{f.confidence}%",
                    f.trend.value,
                )
            console.print(table)

    _run(_do)


@cli.command()
@click.argument("data_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--multiplier", "-m", type=float, default=None, help="Standard deviations threshold")
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of a table")
@click.pass_context
def anomalies(ctx, data_file, multiplier, as_json):
    """List spikes and drops in a JSON volume series."""
    settings = ctx.obj["settings"]

    def _do():
        detector = AnomalyDetector(load_reference_tables(settings.reference_tables_path))
        found = detector.detect(
            _load_points(data_file),
            multiplier if multiplier is not None else settings.anomaly_std_multiplier,
        )

        if as_json:
            _print_json([a.to_dict() for a in found])
            return
        if not found:
            console.print("[green]No anomalies found.")
            return

        table = Table(title="Anomalies", box=box.ROUNDED)
        table.add_column("Month")
        table.add_column("Volume", justify="right")
        table.add_column("Type")
        for a in found:
            color = "green" if a.type.value == "spike" else "red"
            table.add_row(
                f"{MONTH_NAMES[a.month - 1]} {a.year}",
                f"{a.volume:,}",
                f"[{color}]{a.type.value}[/{color}]",
            )
        console.print(table)

    _run(_do)


@cli.command()
@click.option("--keyword", "-k", default="", help="Keyword text")
@click.option("--volume", "-v", type=float, required=True, help="Monthly search volume")
@click.option("--cpc", "-c", type=float, default=0.0, help="Cost per click")
@click.option("--difficulty", "-d", type=float, default=0.0, help="Keyword difficulty (0-100)")
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of a table")
@click.pass_context
def value(ctx, keyword, volume, cpc, difficulty, as_json):
    """Estimate the monthly value and opportunity of a keyword."""
    settings = ctx.obj["settings"]

    def _do():
        scorer = KeywordValueScorer(load_reference_tables(settings.reference_tables_path))
        result = scorer.score(KeywordAttributes.parse({
            "keyword": keyword,
            "search_volume": volume,
            "cpc": cpc,
            "keyword_difficulty": difficulty,
        }))

        if as_json:
            _print_json(result.to_dict())
            return

        table = Table(title=f"Keyword value: {keyword or '-'}", box=box.ROUNDED)
        table.add_column("Metric", style="cyan")
        table.add_column("Value")
        table.add_row("Estimated clicks (#1)", f"{result.estimated_clicks:,}")
        table.add_row("Monthly value", f"${result.monthly_value:,.2f}")
        table.add_row("Opportunity score", f"{result.opportunity_score:.1f}")
        table.add_row("Priority", result.priority.value)
        console.print(table)

    _run(_do)


@cli.command()
@click.argument("keyword")
@click.option("--cpc", "-c", type=float, default=0.0, help="Cost per click signal")
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of a table")
@click.pass_context
def intent(ctx, keyword, cpc, as_json):
    """Classify the search intent of a keyword."""
    settings = ctx.obj["settings"]

    def _do():
        classifier = IntentClassifier(load_reference_tables(settings.reference_tables_path))
        result = classifier.classify(keyword, cpc)

        if as_json:
            _print_json(result.to_dict())
            return

        table = Table(title=f"Search intent: {keyword}", box=box.ROUNDED)
        table.add_column("Metric", style="cyan")
        table.add_column("Value")
        table.add_row("Intent", result.primary.value)
        table.add_row("Confidence", f"{result.confidence}%")
        table.add_row("Buying stage", result.buying_stage.value)
        table.add_row("Commercial score", str(result.commercial_score))
        table.add_row("Urgency", str(result.urgency))
        table.add_row("Recommendation", result.recommendation)
        console.print(table)

    _run(_do)


@cli.command()
@click.option("--position", "-p", type=int, required=True, help="SERP position")
@click.option("--volume", "-v", type=float, required=True, help="Monthly search volume")
@click.option("--device", type=click.Choice([d.value for d in Device]), default=None)
@click.option("--feature", "-f", "features", multiple=True, help="SERP feature present (repeatable)")
@click.option("--brand", is_flag=True, help="Apply the brand CTR boost")
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of a table")
@click.pass_context
def traffic(ctx, position, volume, device, features, brand, as_json):
    """Estimate organic clicks at a SERP position."""
    settings = ctx.obj["settings"]

    def _do():
        estimator = TrafficEstimator(load_reference_tables(settings.reference_tables_path))
        result = estimator.estimate(
            position,
            volume,
            serp_features=features,
            device=device or settings.default_device,
            brand_boost=brand,
        )

        if as_json:
            _print_json(result.to_dict())
            return

        console.print(
            f"Position [bold]{result.position}[/bold] ({result.device.value}): "
            f"CTR {result.ctr:.1%}, ~{result.estimated_clicks:,} clicks/month"
        )
        for impact in result.serp_feature_impact:
            console.print(f"  - {impact.feature}: {impact.explanation}")

    _run(_do)


if __name__ == "__main__":
    cli()
