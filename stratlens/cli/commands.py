"""Click CLI commands for stratlens."""

from __future__ import annotations

import json
from pathlib import Path

import click

from stratlens.config import AppConfig, IndicatorConfig
from stratlens.engine.errors import StratlensError
from stratlens.engine.types import PriceSample
from stratlens.utils.logging import get_logger, new_run_id, setup_logging

logger = get_logger(__name__)


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """stratlens: technical indicators and text chunking for strategy research."""
    cfg = AppConfig()
    setup_logging(level=cfg.log_level, log_format=cfg.log_format)
    new_run_id()
    ctx.obj = cfg


def _load_samples(prices_file: Path) -> list[PriceSample]:
    """Read a JSON array of price records and validate it into samples."""
    from stratlens.engine.ingest import parse_samples

    try:
        records = json.loads(prices_file.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise click.ClickException(f"{prices_file} is not valid JSON: {e}") from e
    if not isinstance(records, list):
        raise click.ClickException(f"{prices_file} must contain a JSON array of records")

    try:
        return parse_samples(records)
    except StratlensError as e:
        raise click.ClickException(str(e)) from e


@cli.command()
@click.argument(
    "prices_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option("--sma-period", type=int, default=None, help="SMA period (default: config).")
@click.option("--rsi-period", type=int, default=None, help="RSI period (default: config).")
@click.option(
    "--latest",
    is_flag=True,
    help="Only print the most recent values per indicator (latest_window), newest first.",
)
@click.pass_obj
def indicators(
    cfg: AppConfig,
    prices_file: Path,
    sma_period: int | None,
    rsi_period: int | None,
    latest: bool,
) -> None:
    """Compute SMA, RSI and MACD from a JSON array of price records.

    Each record needs "date" and "close"; "volume" is optional.
    """
    from pydantic import ValidationError

    from stratlens.engine.report import compute_indicators

    overrides = {
        k: v
        for k, v in (("sma_period", sma_period), ("rsi_period", rsi_period))
        if v is not None
    }
    try:
        ind_config = IndicatorConfig(**{**cfg.indicators.model_dump(), **overrides})
    except ValidationError as e:
        raise click.ClickException(str(e)) from e

    samples = _load_samples(prices_file)
    try:
        report = compute_indicators(samples, ind_config)
        payload = (
            report.latest(ind_config.latest_window) if latest else report.to_dict()
        )
    except (StratlensError, ValueError) as e:
        raise click.ClickException(str(e)) from e

    click.echo(json.dumps(payload, indent=2, allow_nan=False))


@cli.command()
@click.argument(
    "prices_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option("--json", "as_json", is_flag=True, help="Print signals as a JSON array.")
@click.pass_obj
def signals(cfg: AppConfig, prices_file: Path, as_json: bool) -> None:
    """Show trend and momentum signal flags for the latest sample."""
    from stratlens.engine.signals import generate_signals

    samples = _load_samples(prices_file)
    raised = generate_signals(samples, cfg.signals)

    if as_json:
        click.echo(json.dumps([s.value for s in raised]))
        return

    if not raised:
        click.echo("No signals")
        return
    for s in raised:
        click.echo(s.value)


@cli.command()
@click.argument(
    "text_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--max-chunk-size",
    type=click.IntRange(min=1),
    default=None,
    help="Characters per chunk (default: max_tokens * chars_per_token).",
)
@click.option("--json", "as_json", is_flag=True, help="Print chunks as a JSON array.")
@click.pass_obj
def chunk(
    cfg: AppConfig,
    text_file: Path,
    max_chunk_size: int | None,
    as_json: bool,
) -> None:
    """Split a text file into bounded-size chunks."""
    from stratlens.text.chunker import split_into_chunks

    size = max_chunk_size or cfg.chunking.max_chunk_size
    text = text_file.read_text(encoding="utf-8")
    chunks = split_into_chunks(text, size)
    logger.info("file_chunked", path=str(text_file), chunks=len(chunks), max_chunk_size=size)

    if as_json:
        click.echo(json.dumps(chunks, indent=2))
        return

    click.echo(f"{len(chunks)} chunks (max size: {size} characters)")
    for i, c in enumerate(chunks, start=1):
        click.echo(f"  Chunk {i}/{len(chunks)} ({len(c)} characters)")


@cli.command()
@click.pass_obj
def config(cfg: AppConfig) -> None:
    """Show current configuration."""
    click.echo("=== stratlens Configuration ===\n")

    click.echo(f"Log Level:    {cfg.log_level}")
    click.echo(f"Log Format:   {cfg.log_format}")
    click.echo("")

    click.echo("[Indicators]")
    click.echo(f"  SMA Period:     {cfg.indicators.sma_period}")
    click.echo(f"  RSI Period:     {cfg.indicators.rsi_period}")
    click.echo(f"  MACD Fast/Slow: {cfg.indicators.macd_fast}/{cfg.indicators.macd_slow}")
    click.echo(f"  Latest Window:  {cfg.indicators.latest_window}")
    click.echo("")

    click.echo("[Signals]")
    click.echo(f"  SMA/EMA Trend:  {cfg.signals.sma_period}/{cfg.signals.ema_period}")
    click.echo(f"  RSI Period:     {cfg.signals.rsi_period}")
    click.echo(f"  RSI Levels:     {cfg.signals.oversold:g}/{cfg.signals.overbought:g}")
    click.echo("")

    click.echo("[Chunking]")
    click.echo(f"  Max Tokens:      {cfg.chunking.max_tokens}")
    click.echo(f"  Chars/Token:     {cfg.chunking.chars_per_token}")
    click.echo(f"  Max Chunk Size:  {cfg.chunking.max_chunk_size}")
