from __future__ import annotations

from pathlib import Path
import typer

from lrc_lyrics.config import LrcOptions
from lrc_lyrics.errors import LrcError
from lrc_lyrics.logging_setup import setup_logging
from lrc_lyrics.lrc.export import export_json, export_lrc, export_srt
from lrc_lyrics.lrc.model import Lyrics, TimeTag
from lrc_lyrics.lrc.parse import LrcParseStats, parse_lrc_with_stats


app = typer.Typer(no_args_is_help=True, add_completion=False)


def _load(lrc_path: Path, opts: LrcOptions) -> tuple[Lyrics, LrcParseStats]:
    text = lrc_path.read_text(encoding="utf-8")
    try:
        return parse_lrc_with_stats(text, opts)
    except LrcError as e:
        typer.echo(f"{lrc_path}: {e}", err=True)
        raise typer.Exit(code=1) from e


def _write(data: str, out: Path | None) -> None:
    if out:
        out.write_text(data, encoding="utf-8")
    else:
        typer.echo(data, nl=False)


@app.command()
def check(
    lrc_path: Path,
    lenient: bool = typer.Option(False, "--lenient", help="Skip malformed lines instead of failing"),
    known_keys: bool = typer.Option(False, "--known-keys", help="Reject non-standard ID tag keys"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
):
    """Parse LRC and print stats."""
    setup_logging(debug)
    lyrics, stats = _load(lrc_path, LrcOptions(strict=not lenient, allow_unknown_keys=not known_keys))
    typer.echo(f"lines_total={stats.lines_total}")
    typer.echo(f"lines_metadata={stats.lines_metadata}")
    typer.echo(f"lines_timed={stats.lines_timed}")
    typer.echo(f"lines_skipped={stats.lines_skipped}")
    typer.echo(f"timed_lines_total={stats.timed_lines_total}")
    typer.echo(f"tags={sorted(lyrics.metadata)}")


@app.command()
def fmt(
    lrc_path: Path,
    lenient: bool = typer.Option(False, "--lenient", help="Skip malformed lines instead of failing"),
    known_keys: bool = typer.Option(False, "--known-keys", help="Reject non-standard ID tag keys"),
    group: bool = typer.Option(False, "--group", help="Collapse runs of lines with identical text into one"),
    out: Path | None = typer.Option(None, "--out", help="Output file (default: stdout)"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
):
    """Rewrite LRC in canonical form (sorted tags, sorted time tags)."""
    setup_logging(debug)
    opts = LrcOptions(strict=not lenient, allow_unknown_keys=not known_keys)
    lyrics, _stats = _load(lrc_path, opts)
    _write(export_lrc(lyrics, group_time_tags=group), out)


@app.command()
def export(
    lrc_path: Path,
    fmt: str = typer.Option("srt", "--format", case_sensitive=False, help="lrc|srt|json"),
    lenient: bool = typer.Option(False, "--lenient", help="Skip malformed lines instead of failing"),
    out: Path | None = typer.Option(None, "--out", help="Output file (default: stdout)"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
):
    """Export LRC to SRT/JSON/LRC."""
    setup_logging(debug)
    fmt_l = fmt.lower()
    if fmt_l not in ("lrc", "srt", "json"):
        raise typer.BadParameter("format must be one of: lrc, srt, json")

    lyrics, _stats = _load(lrc_path, LrcOptions(strict=not lenient))
    try:
        if fmt_l == "json":
            data = export_json(lyrics)
        elif fmt_l == "lrc":
            data = export_lrc(lyrics)
        else:
            data = export_srt(lyrics)
    except LrcError as e:
        typer.echo(f"{lrc_path}: {e}", err=True)
        raise typer.Exit(code=1) from e
    _write(data, out)


@app.command()
def at(lrc_path: Path, time: str):
    """Print the lyric line shown at TIME (mm:ss.xx)."""
    try:
        when = TimeTag.parse(time)
    except LrcError as e:
        raise typer.BadParameter(str(e)) from e

    lyrics, _stats = _load(lrc_path, LrcOptions())
    i = lyrics.find_timed_line_index(when)
    if i is None:
        typer.echo(f"No line yet at {when}")
        return
    line = lyrics.get_timed_lines()[i]
    typer.echo(f"{line.time.to_tag()}{line.text}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
