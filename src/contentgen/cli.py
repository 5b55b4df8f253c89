from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer
from jinja2 import TemplateError

from contentgen.errors import ContentGenError
from contentgen.service import ContentGenerationService

app = typer.Typer(help="contentgen CLI")


# -----------------------------
# Helpers
# -----------------------------

def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _coerce_value(v: str) -> Any:
    try:
        return json.loads(v)
    except Exception:
        return v


def _parse_sets(pairs: Optional[List[str]]) -> Dict[str, Any]:
    params: Dict[str, Any] = {}
    for kv in pairs or []:
        if "=" not in kv:
            raise typer.BadParameter(f"--set expects key=value, got: {kv}")
        k, v = kv.split("=", 1)
        params[k.strip()] = _coerce_value(v.strip())
    return params


def _build_service(config: Path, base_path: Optional[Path], simple: bool = False) -> ContentGenerationService:
    config = config.expanduser().resolve()
    base = base_path.expanduser().resolve() if base_path else config.parent
    return ContentGenerationService.from_file(config, base, simple=simple)


def _fail(e: Exception) -> None:
    typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


def _emit(text: str, out: Optional[Path]) -> None:
    if out:
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(text, encoding="utf-8")
        typer.secho(f"Wrote {out}", fg=typer.colors.GREEN)
    else:
        typer.echo(text)


# -----------------------------
# Commands
# -----------------------------

@app.command()
def resolve(
    config: Path = typer.Argument(..., help="Mapping configuration (.json/.yaml)"),
    base_path: Optional[Path] = typer.Option(None, "--base-path", "-b", help="Directory data source paths are relative to (default: config dir)"),
    out: Optional[Path] = typer.Option(None, "--out", "-o", help="Write the context JSON here"),
    simple: bool = typer.Option(False, "--simple", help="Primary/fallback lookup only; honours options.strictMode"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
):
    """Resolve every placeholder and print the context as JSON."""
    _setup_logging(verbose)
    try:
        ctx = _build_service(config, base_path, simple).resolved_context()
    except ContentGenError as e:
        _fail(e)
    _emit(json.dumps(ctx, indent=2, ensure_ascii=False, default=str), out)


@app.command()
def render(
    config: Path = typer.Argument(..., help="Mapping configuration (.json/.yaml)"),
    template: Path = typer.Argument(..., help="Jinja template to render"),
    base_path: Optional[Path] = typer.Option(None, "--base-path", "-b"),
    out: Optional[Path] = typer.Option(None, "--out", "-o", help="Where to write the rendered file"),
    set: List[str] = typer.Option(None, "--set", "-s", help="Extra context key=value (repeatable)"),
    simple: bool = typer.Option(False, "--simple", help="Primary/fallback lookup only; honours options.strictMode"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
):
    """Render a template with the resolved context."""
    _setup_logging(verbose)
    extra = _parse_sets(set)
    try:
        svc = _build_service(config, base_path, simple)
        text = svc.generate_content_with_context(template.expanduser().resolve(), extra)
    except (ContentGenError, TemplateError) as e:
        _fail(e)
    _emit(text, out)


@app.command()
def stats(
    config: Path = typer.Argument(..., help="Mapping configuration (.json/.yaml)"),
    base_path: Optional[Path] = typer.Option(None, "--base-path", "-b"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
):
    """Print service statistics (sources, mappings, cache)."""
    _setup_logging(verbose)
    try:
        svc = _build_service(config, base_path)
    except ContentGenError as e:
        _fail(e)
    typer.echo(json.dumps(svc.statistics(), indent=2))


if __name__ == "__main__":
    app()
