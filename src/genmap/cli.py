from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import jsonschema
import typer

from genmap.config import GenmapConfig, load_config
from genmap.io import jsonl_append, read_json, read_jsonl
from genmap.mapping.engine import build_api_input
from genmap.mapping.load import load_schema_yaml
from genmap.mapping.validate import payload_errors
from genmap.registry.registry import ModelRegistry

app = typer.Typer(help="genmap CLI: map generation form data to provider payloads")

LOG_FORMAT = "[genmap] %(message)s"


def _configure_logging(level: str) -> None:
    logger = logging.getLogger("genmap")
    if not logger.handlers:
        h = logging.StreamHandler()
        h.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(h)
    logger.setLevel(level)


def _state(ctx: typer.Context) -> Dict[str, Any]:
    if ctx.obj is None:
        ctx.obj = {"config": GenmapConfig()}
    return ctx.obj


def _registry(ctx: typer.Context) -> ModelRegistry:
    st = _state(ctx)
    if "registry" not in st:
        try:
            st["registry"] = st["config"].registry()
        except (FileNotFoundError, ValueError) as e:
            raise typer.BadParameter(f"Cannot load model catalog: {e}")
    return st["registry"]


def _dump(payload: Dict[str, Any], out: Optional[Path]) -> None:
    text = json.dumps(payload, indent=2, ensure_ascii=False)
    if out:
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(text + "\n", encoding="utf-8")
        typer.secho(f"Wrote {out}", fg=typer.colors.GREEN)
    else:
        typer.echo(text)


def _check(payload: Dict[str, Any], schema_path: Optional[Path]) -> None:
    if schema_path is None:
        return
    try:
        errors = payload_errors(payload, schema_path)
    except (OSError, json.JSONDecodeError, jsonschema.SchemaError) as e:
        raise typer.BadParameter(f"Cannot use validation schema {schema_path}: {e}")
    if errors:
        for err in errors:
            typer.secho(f"invalid payload: {err}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


def _read_form(path: Path) -> Dict[str, Any]:
    try:
        return read_json(path)
    except (FileNotFoundError, ValueError) as e:
        raise typer.BadParameter(f"Cannot read form data: {e}")


@app.callback()
def main(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML config file"),
    catalog: Optional[Path] = typer.Option(None, "--catalog", help="Extra model catalog YAML"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="DEBUG | INFO | WARNING | ERROR"),
):
    try:
        cfg = load_config(config)
        if catalog is not None:
            cfg.catalog = catalog
        if log_level is not None:
            cfg = GenmapConfig.from_config({**cfg.__dict__, "log_level": log_level})
    except ValueError as e:
        raise typer.BadParameter(str(e))
    _configure_logging(cfg.log_level)
    ctx.obj = {"config": cfg}


# -----------------------------
# Payload building
# -----------------------------

@app.command()
def build(
    ctx: typer.Context,
    model: str = typer.Option(..., "--model", "-m", help="Model id from the catalog"),
    data: Path = typer.Option(..., "--data", "-d", help="Form data JSON"),
    out: Optional[Path] = typer.Option(None, "--out", "-o", help="Write payload JSON here"),
    validate: Optional[Path] = typer.Option(None, "--validate", help="JSON Schema the payload must satisfy"),
):
    """Build the provider payload for MODEL from form data."""
    setting = _registry(ctx).find_setting(model)
    if setting is None or setting.api_input is None:
        raise typer.BadParameter(f"Unknown model or model without apiInput: '{model}'")
    form = _read_form(data)
    form.setdefault("model_id", model)
    payload = build_api_input(setting.api_input, form)
    _check(payload, validate)
    _dump(payload, out)


@app.command("build-schema")
def build_schema_cmd(
    schema: Path = typer.Option(..., "--schema", "-s", help="Mapping schema YAML"),
    data: Path = typer.Option(..., "--data", "-d", help="Form data JSON"),
    out: Optional[Path] = typer.Option(None, "--out", "-o"),
):
    """Build a payload from an ad-hoc mapping schema file."""
    try:
        api_input = load_schema_yaml(schema)
    except (FileNotFoundError, ValueError) as e:
        raise typer.BadParameter(str(e))
    _dump(build_api_input(api_input, _read_form(data)), out)


@app.command()
def batch(
    ctx: typer.Context,
    model: str = typer.Option(..., "--model", "-m"),
    rows: Path = typer.Option(..., "--rows", "-r", help="JSONL, one form per line"),
    out: Path = typer.Option(Path("payloads.jsonl"), "--out", "-o"),
):
    """Map every form in ROWS and append the payloads to OUT."""
    setting = _registry(ctx).find_setting(model)
    if setting is None or setting.api_input is None:
        raise typer.BadParameter(f"Unknown model or model without apiInput: '{model}'")
    try:
        forms = read_jsonl(rows)
    except (FileNotFoundError, ValueError) as e:
        raise typer.BadParameter(str(e))
    out = out.expanduser().resolve()
    n = 0
    for form in forms:
        form.setdefault("model_id", model)
        jsonl_append(out, build_api_input(setting.api_input, form))
        n += 1
    typer.echo(f"Done. wrote {n} payload(s) to {out}")


# -----------------------------
# Catalog queries
# -----------------------------

@app.command()
def models(
    ctx: typer.Context,
    tag: Optional[str] = typer.Option(None, "--tag", "-t", help="Substring match on model tags"),
):
    """List catalog models (id, endpoint, label)."""
    reg = _registry(ctx)
    found = reg.find_by_tag(tag) if tag else reg.all_models()
    for m in found:
        typer.echo(f"{m.id}\t{m.endpoint or '-'}\t{m.label}")


@app.command()
def endpoint(ctx: typer.Context, model: str = typer.Argument(..., help="Model id")):
    """Print the provider endpoint for MODEL."""
    ep = _registry(ctx).find_endpoint(model)
    if not ep:
        typer.secho(f"No endpoint for '{model}'", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    typer.echo(ep)


if __name__ == "__main__":
    app()
