"""
RTA Command Line Interface.

  rta analyze PATH   analyze a React/TypeScript project
  rta info           presets, categories and usage examples
  rta init           write a .rta.json for the current directory
  rta models         list selectable AI models
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table
from rich.theme import Theme

from rta.config import APP_VERSION, settings
from rta.core.analyzer import ProjectNotFoundError, analyze_project
from rta.core.catalog import CATEGORIES, list_rules, rules_by_category
from rta.core.config_resolver import CONFIG_FILENAME, preset_template
from rta.core.presets import PRESET_DESCRIPTIONS
from rta.llm.gateway import LLMGateway
from rta.llm.reconciler import AVAILABLE_MODELS, InsightService
from rta.models.rule_models import ConfigOverrides, Preset, Severity
from rta.output.formatters import (
    FORMATS,
    SEVERITY_STYLES,
    format_output,
    generate_summary,
    table_renderables,
)

# --- Initialize Rich Console ---
custom_theme = Theme({
    "info": "cyan",
    "warning": "yellow",
    "error": "bold red",
    "success": "green",
    "path": "dim blue",
})
console = Console(theme=custom_theme)
err_console = Console(theme=custom_theme, stderr=True)

PRESET_NAMES = [preset.value for preset in Preset]


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )


def _split(value: str | None) -> list[str] | None:
    if value is None:
        return None
    return [item.strip() for item in value.split(",") if item.strip()]


def _print_rules() -> None:
    console.print("[info]Available Rules[/info]\n")
    for category, rules in rules_by_category().items():
        console.print(f"[bold]{category.upper()}[/bold]")
        for rule in rules:
            style = SEVERITY_STYLES[rule.default_severity]
            console.print(f"  [{style}]{rule.default_severity.value:<7}[/{style}] {rule.id}")
            console.print(f"          {rule.description}")
        console.print()


def _print_categories() -> None:
    console.print("[info]Available Categories[/info]\n")
    for name, description in CATEGORIES.items():
        console.print(f"- [bold]{name}[/bold]")
        console.print(f"  {description}\n")


def _print_detailed_rules() -> None:
    rules = list_rules()
    table = Table(title=f"Detailed Rules ({len(rules)} total)")
    table.add_column("#", justify="right")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name")
    table.add_column("Category")
    table.add_column("Severity")
    table.add_column("Description")
    for index, rule in enumerate(rules, start=1):
        style = SEVERITY_STYLES[rule.default_severity]
        table.add_row(
            str(index),
            rule.id,
            rule.name,
            rule.category,
            f"[{style}]{rule.default_severity.value}[/{style}]",
            rule.description,
        )
    console.print(table)


# --- Main CLI Group ---
@click.group(help="RTA: rule-based React and TypeScript code analysis with optional AI insights.")
@click.version_option(APP_VERSION, prog_name="rta")
def cli() -> None:
    load_dotenv()


@cli.command()
@click.argument("path", required=False, default=".", type=click.Path(path_type=Path))
@click.option(
    "--preset",
    "-p",
    type=click.Choice(PRESET_NAMES, case_sensitive=False),
    default=None,
    help=f"Preset configuration (default: .rta.json or {settings.default_preset}).",
)
@click.option("--category", "-c", default=None, help="Comma-separated category allow-list.")
@click.option("--rules", "-r", default=None, help="Comma-separated rule allow-list.")
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(FORMATS, case_sensitive=False),
    default="table",
    show_default=True,
    help="Output format.",
)
@click.option("--output", "-o", type=click.Path(dir_okay=False, path_type=Path), default=None, help="Save results to file.")
@click.option("--ai/--no-ai", default=False, show_default=True, help="Enhance the report with AI insights.")
@click.option("--list-rules", is_flag=True, default=False, help="List all available rules and exit.")
@click.option("--list-categories", is_flag=True, default=False, help="List all available categories and exit.")
@click.option("--fail-on-errors", is_flag=True, default=False, help="Exit with code 1 when error findings exist.")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Show progress logs and diagnostics.")
def analyze(
    path: Path,
    preset: str | None,
    category: str | None,
    rules: str | None,
    output_format: str,
    output: Path | None,
    ai: bool,
    list_rules: bool,
    list_categories: bool,
    fail_on_errors: bool,
    verbose: bool,
) -> None:
    """Analyze a React TypeScript project."""
    _configure_logging(verbose)

    if list_rules:
        _print_rules()
        return
    if list_categories:
        _print_categories()
        return

    # JSON on stdout must stay parseable, so progress goes to stderr
    status = err_console if output_format == "json" and output is None else console

    overrides: dict = {}
    if preset:
        overrides["preset"] = preset
    if category is not None:
        overrides["categories"] = _split(category)
    if rules is not None:
        overrides["enabled_rules"] = _split(rules)

    status.print(f"Analyzing React project at: [path]{path}[/path]")

    try:
        result = analyze_project(path, ConfigOverrides(**overrides))
    except ProjectNotFoundError as e:
        err_console.print(f"[error]{e}[/error]")
        sys.exit(1)

    if ai:
        gateway = LLMGateway()
        if not gateway.configured:
            status.print("[warning]AI enhancement requested but GROQ_API_KEY is not set[/warning]")
        else:
            status.print(f"Enhancing analysis with AI ([info]{gateway.model}[/info])...")
        result = InsightService(gateway).enhance_analysis(result)

    if output is not None:
        output.write_text(format_output(result, output_format), encoding="utf-8")
        status.print(f"[success]Results saved to:[/success] [path]{output}[/path]")
    elif output_format == "table":
        for renderable in table_renderables(result):
            console.print(renderable)
    else:
        click.echo(format_output(result, output_format))

    status.print(generate_summary(result), highlight=False)

    if verbose and result.diagnostics:
        status.print("\n[warning]Diagnostics:[/warning]")
        for diagnostic in result.diagnostics:
            status.print(f"  - {diagnostic}", highlight=False)

    has_errors = any(f.severity == Severity.ERROR for f in result.findings)
    if fail_on_errors and has_errors:
        sys.exit(1)


@cli.command()
@click.option("--rules", "show_rules", is_flag=True, default=False, help="Show detailed rule information.")
def info(show_rules: bool) -> None:
    """Display supported presets, categories and usage examples."""
    console.print(f"[bold]RTA v{APP_VERSION}[/bold]\n")

    if show_rules:
        _print_detailed_rules()
        return

    console.print("[info]Available Presets:[/info]")
    for preset in Preset:
        console.print(f"  - {preset.value:<12} {PRESET_DESCRIPTIONS[preset]}")
    console.print()

    console.print("[info]Available Categories:[/info]")
    for name, description in CATEGORIES.items():
        console.print(f"  - {name:<15} {description}")
    console.print()

    console.print("[info]AI Enhancement:[/info]")
    console.print("  Set GROQ_API_KEY to enable AI insights (model via RTA_MODEL)\n")

    console.print("[info]Examples:[/info]")
    console.print("  rta analyze ./my-project --preset strict")
    console.print("  rta analyze ./my-project --category accessibility,performance")
    console.print("  rta analyze ./my-project --rules missing-alt-text,react-missing-key")
    console.print("  rta analyze ./my-project --ai --format markdown -o report.md")


@cli.command()
@click.option(
    "--preset",
    "-p",
    type=click.Choice(PRESET_NAMES, case_sensitive=False),
    default="recommended",
    show_default=True,
    help="Preset to initialize with.",
)
def init(preset: str) -> None:
    """Write a .rta.json configuration file in the current directory."""
    config_path = Path.cwd() / CONFIG_FILENAME
    if config_path.exists():
        console.print(f"[warning]Configuration file already exists:[/warning] [path]{config_path}[/path]")
        return

    config_path.write_text(json.dumps(preset_template(preset), indent=2) + "\n", encoding="utf-8")
    console.print(f"[success]Created {CONFIG_FILENAME} with {preset} preset[/success]")


@cli.command()
def models() -> None:
    """List the AI models that can be selected with RTA_MODEL."""
    table = Table(title="Available Models")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name")
    table.add_column("Cost")
    table.add_column("Recommended for")
    for model in AVAILABLE_MODELS:
        marker = " (current)" if model.id == settings.rta_model else ""
        table.add_row(model.id + marker, model.name, model.cost_level, model.recommended)
    console.print(table)


if __name__ == "__main__":
    cli()
