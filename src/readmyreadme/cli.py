from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterator, List, Optional, Sequence

import typer

from readmyreadme import server
from readmyreadme.config import TomlTable, load_settings
from readmyreadme.lint import lint_text, qualifies, span_positions
from readmyreadme.observability import setup_logging
from readmyreadme.schema import LintDiagnosticDTO, LintResponse, PositionDTO, ReadmeSettings

logger = logging.getLogger(__name__)

app = typer.Typer(add_completion=False)


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Logging level (defaults to READMYREADME_LOG_LEVEL or INFO)."
    ),
) -> None:
    """Lint README outlines against a template of expected sections."""
    setup_logging(log_level)


def _iter_documents(paths: Sequence[Path], patterns: Sequence[str]) -> Iterator[Path]:
    for path in paths:
        if not path.exists():
            raise typer.BadParameter(f"No such file or directory: {path}")
        if path.is_file():
            yield path
            continue
        for candidate in sorted(path.rglob("*")):
            if candidate.is_file() and qualifies(candidate, patterns):
                yield candidate


def _lint_file(path: Path, settings: ReadmeSettings) -> list[LintDiagnosticDTO]:
    text = path.read_text(encoding="utf-8")
    results: list[LintDiagnosticDTO] = []
    for diagnostic in lint_text(text, settings):
        (start_line, start_col), (end_line, end_col) = span_positions(text, diagnostic.span)
        results.append(
            LintDiagnosticDTO(
                path=str(path),
                kind=diagnostic.kind.value,
                severity=diagnostic.severity.value,
                message=diagnostic.message,
                source=diagnostic.source,
                start=PositionDTO(line=start_line, character=start_col),
                end=PositionDTO(line=end_line, character=end_col),
                section=diagnostic.section,
            )
        )
    return results


def run_lint(paths: Sequence[Path], settings: ReadmeSettings) -> LintResponse:
    response = LintResponse()
    for path in _iter_documents(paths, settings.document_patterns):
        try:
            diagnostics = _lint_file(path, settings)
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("cannot lint %s: %s", path, exc)
            response.errors.append(f"{path}: {exc}")
            continue
        response.files.append(str(path))
        response.diagnostics.extend(diagnostics)
    return response


def format_diagnostic(diagnostic: LintDiagnosticDTO) -> str:
    # Lines and columns are one-based for terminals and editors.
    return (
        f"{diagnostic.path}:{diagnostic.start.line + 1}:{diagnostic.start.character + 1}: "
        f"{diagnostic.severity}: {diagnostic.message} [{diagnostic.kind}]"
    )


def _settings_from_options(
    *,
    root: Optional[Path],
    config: Optional[Path],
    heading_level: Optional[int],
    max_problems: Optional[int],
) -> ReadmeSettings:
    overrides: TomlTable = {
        "heading_level": heading_level,
        "max_number_of_problems": max_problems,
    }
    return load_settings(root=root, config_path=config, overrides=overrides)


@app.command("lint")
def lint(
    paths: List[Path] = typer.Argument(..., help="Files or directories to lint."),
    root: Optional[Path] = typer.Option(None, "--root", help="Directory holding readmyreadme.toml."),
    config: Optional[Path] = typer.Option(None, "--config", help="Explicit configuration file."),
    heading_level: Optional[int] = typer.Option(None, "--heading-level", min=1, max=6),
    max_problems: Optional[int] = typer.Option(None, "--max-problems", min=0),
    json_output: bool = typer.Option(False, "--json", help="Emit a JSON report."),
    fail_on_violations: bool = typer.Option(
        False, "--fail-on-violations", help="Exit 1 when any diagnostic is reported."
    ),
) -> None:
    """Lint the heading outline of README files."""
    settings = _settings_from_options(
        root=root, config=config, heading_level=heading_level, max_problems=max_problems
    )
    response = run_lint(paths, settings)
    if json_output:
        typer.echo(json.dumps(response.model_dump(), indent=2, sort_keys=True))
    else:
        for diagnostic in response.diagnostics:
            typer.echo(format_diagnostic(diagnostic))
        for error in response.errors:
            typer.echo(f"error: {error}", err=True)
    if response.errors:
        raise typer.Exit(code=2)
    if fail_on_violations and response.diagnostics:
        raise typer.Exit(code=1)


@app.command("show-config")
def show_config(
    root: Optional[Path] = typer.Option(None, "--root"),
    config: Optional[Path] = typer.Option(None, "--config"),
) -> None:
    """Print the effective settings as JSON."""
    settings = load_settings(root=root, config_path=config)
    typer.echo(json.dumps(settings.model_dump(by_alias=True), indent=2))


@app.command("server")
def serve() -> None:
    """Start the language server on stdio."""
    server.start()


if __name__ == "__main__":  # pragma: no cover
    app()  # pragma: no cover
