from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, List, Optional

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from .bdd.models import BDDFeature
from .bdd.renderer import write_features
from .config import AppConfig
from .generation.generator import COVERAGE_HINTS, generate_batch
from .logging_setup import setup_logging
from .models import StepByStepTestCase, TestCaseFormat, record_to_dict
from .parsing.discovery import discover_inputs
from .parsing.dispatch import parse_multiple_test_cases
from .rendering.step_renderer import write_step_cases


app = typer.Typer(add_completion=False, no_args_is_help=True)
console = Console()
err_console = Console(stderr=True)


def _load_config(model: Optional[str] = None) -> AppConfig:
    load_dotenv(override=False)
    config = AppConfig()
    if model:
        config.openai_model = model
    return config


def _resolve_format(value: Optional[str], config: AppConfig) -> TestCaseFormat:
    if value is None:
        return config.default_format
    try:
        return TestCaseFormat.from_string(value)
    except ValueError as e:
        raise typer.BadParameter(str(e)) from None


def _describe(record: Any) -> tuple[str, str]:
    if isinstance(record, BDDFeature):
        steps = sum(len(s.steps) for s in record.scenarios)
        return record.title, f"{len(record.scenarios)} scenario(s), {steps} step(s)"
    if isinstance(record, StepByStepTestCase):
        return record.title, f"{len(record.steps)} step(s)"
    if isinstance(record, dict):
        return str(record.get("title", "")), "JSON passthrough"
    return repr(record), "JSON passthrough"


def _summary_table(title: str, records: List[Any]) -> Table:
    table = Table(title=title)
    table.add_column("#", justify="right")
    table.add_column("Title")
    table.add_column("Contents")
    for idx, record in enumerate(records, start=1):
        name, contents = _describe(record)
        table.add_row(str(idx), name or "[dim](untitled)[/dim]", contents)
    return table


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(None, help="Log level (defaults to LOG_LEVEL or INFO)"),
    log_file: Optional[Path] = typer.Option(None, help="Also write logs to this file"),
):
    """Parse BDD and step-by-step test case text into structured records."""
    cfg = _load_config()
    setup_logging(log_level or cfg.log_level, log_file, console=err_console)


@app.command()
def parse(
    path: str = typer.Argument(..., help="File or directory with test case text, or '-' for stdin"),
    fmt: Optional[str] = typer.Option(None, "--format", "-f", help="BDD or STEP_BY_STEP (defaults to DEFAULT_FORMAT)"),
    out: Optional[Path] = typer.Option(None, help="Write parsed records as JSON to this file"),
):
    """Parse test case text (or JSON) into structured test case records."""
    cfg = _load_config()
    test_format = _resolve_format(fmt, cfg)

    sources: List[tuple[str, str]] = []
    if path == "-":
        sources.append(("<stdin>", sys.stdin.read()))
    else:
        root = Path(path).resolve()
        if not root.exists():
            raise typer.BadParameter(f"Path not found: {root}")
        for file in discover_inputs(root, ignore_globs=cfg.ignore_globs, suffixes=cfg.input_suffixes):
            try:
                sources.append((str(file), file.read_text(encoding="utf-8")))
            except UnicodeDecodeError:
                err_console.print(f"[yellow]Skipping[/yellow] {file}: not UTF-8 text")

    if not sources:
        err_console.print("[yellow]No input files found[/yellow]")
        raise typer.Exit(code=0)

    records: List[Any] = []
    for name, text in sources:
        parsed = parse_multiple_test_cases(text, test_format)
        err_console.print(f"[dim]Parsed[/dim] {name}: {len(parsed)} test case(s)")
        records.extend(parsed)

    payload = json.dumps([record_to_dict(r) for r in records], indent=2, ensure_ascii=False)
    if out is not None:
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(payload + "\n", encoding="utf-8")
        console.print(_summary_table(f"{test_format.value} test cases", records))
        console.print(f"[green]Wrote[/green] {len(records)} test case(s) to {out}")
    else:
        err_console.print(_summary_table(f"{test_format.value} test cases", records))
        typer.echo(payload)


@app.command()
def render(
    records_json: Path = typer.Argument(..., help="JSON file produced by 'parse'"),
    out_dir: Path = typer.Option(Path("rendered"), help="Directory to write .feature / .txt files"),
):
    """Render parsed records back into Gherkin features and step-by-step text."""
    if not records_json.exists():
        raise typer.BadParameter(f"Records JSON not found: {records_json}")
    data = json.loads(records_json.read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = [data]

    features: List[BDDFeature] = []
    step_cases: List[StepByStepTestCase] = []
    for idx, item in enumerate(data, start=1):
        if isinstance(item, dict) and "scenarios" in item:
            features.append(BDDFeature.model_validate(item))
        elif isinstance(item, dict) and "steps" in item:
            step_cases.append(StepByStepTestCase.model_validate(item))
        else:
            console.print(f"[yellow]Skipping[/yellow] record #{idx}: not a BDD or step-by-step test case")

    def _written(i, total, file_path):
        pct = int(i * 100 / max(1, total))
        console.print(f"[green]Wrote[/green] {file_path}  [dim]{i}/{total} ({pct}%)[/dim]")

    written = write_features(features, out_dir, progress_callback=_written)
    written += write_step_cases(step_cases, out_dir, progress_callback=_written)
    console.print(f"Rendered [bold]{len(written)}[/bold] file(s) to {out_dir}")


@app.command()
def generate(
    requirements: List[Path] = typer.Argument(..., help="Text files, one requirement or user story each"),
    fmt: Optional[str] = typer.Option(None, "--format", "-f", help="BDD or STEP_BY_STEP (defaults to DEFAULT_FORMAT)"),
    coverage: str = typer.Option("standard", help=f"One of: {', '.join(COVERAGE_HINTS)}"),
    model: Optional[str] = typer.Option(None, help="OpenAI model to use for generation"),
    out: Path = typer.Option(Path("generated.json"), help="Where to write generated test cases"),
):
    """Generate test cases for each requirement with an LLM and parse the result."""
    cfg = _load_config(model)
    test_format = _resolve_format(fmt, cfg)
    if coverage not in COVERAGE_HINTS:
        raise typer.BadParameter(f"Coverage must be one of: {', '.join(COVERAGE_HINTS)}")

    texts: List[str] = []
    for req in requirements:
        if not req.exists():
            raise typer.BadParameter(f"Requirement file not found: {req}")
        texts.append(req.read_text(encoding="utf-8"))

    def _progress(i, total, result):
        pct = int(i * 100 / max(1, total))
        console.print(f"[dim]Generated:[/dim] {i}/{total} ({pct}%) - {len(result.cases)} test case(s)")

    results = generate_batch(texts, test_format, coverage, cfg, progress_callback=_progress)

    payload = [
        {
            "requirement": r.requirement,
            "format": r.format.value,
            "coverage": r.coverage,
            "cases": [record_to_dict(c) for c in r.cases],
        }
        for r in results
    ]
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(json.dumps(payload, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")

    cases = [c for r in results for c in r.cases]
    console.print(_summary_table("Generated test cases", cases))
    console.print(f"[green]Wrote[/green] {len(cases)} test case(s) to {out}")


if __name__ == "__main__":  # pragma: no cover
    app()
