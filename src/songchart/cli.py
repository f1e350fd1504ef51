import logging
import sys
from pathlib import Path

import click

from .converter import convert_to_degrees
from .exceptions import FetchError, SongchartError
from .parser import parse_song
from .registry import get_source
from .sources.local import STDIN, LocalSource
from .views import ViewMode, render

logger = logging.getLogger(__name__)

DEFAULT_TONIC = "D"
TONIC_PROMPT = "Tonic (e.g. C, D, G#, Fm)"


def _stdin_is_interactive() -> bool:
    return sys.stdin.isatty()


def _fail(exc: SongchartError) -> None:
    """Print *exc* as an error message and exit with status 1."""
    if isinstance(exc, FetchError):
        msg = f"Error: Could not fetch {exc.url}"
        if exc.status_code:
            msg += f" (HTTP {exc.status_code})"
    else:
        msg = f"Error: {exc}"
    click.echo(msg, err=True)
    sys.exit(1)


def _write_or_echo(text: str, output_path: str | None) -> None:
    if output_path is None:
        click.echo(text)
        return
    dest = Path(output_path)
    dest.write_text(text + "\n", encoding="utf-8")
    click.echo(f"Written to {dest}")


@click.group()
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log debug output to stderr.")
def main(verbose: bool) -> None:
    """Parse chord charts and convert chords to scale degrees.

    \b
    SOURCE may be:
      - a chart or Markdown file (```song fences are extracted)
      - an http(s) URL
      - "-" for stdin
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


@main.command()
@click.argument("source")
@click.option("-m", "--mode", type=click.Choice([m.value for m in ViewMode]), default="both",
              show_default=True, help="Which projection of the chart to print.")
@click.option("-o", "--output", "output_path", default=None, metavar="PATH",
              help="Write to PATH instead of stdout.")
def view(source: str, mode: str, output_path: str | None) -> None:
    """Print a chord chart as chords+lyrics, lyrics only, chords only or JSON."""
    try:
        text = get_source(source).load(source)
    except SongchartError as exc:
        _fail(exc)

    song = parse_song(text)
    logger.debug("Parsed %d sections, %d rows", len(song.sections), sum(1 for _ in song.rows()))
    _write_or_echo(render(song, mode), output_path)


@main.command()
@click.argument("source")
@click.option("-t", "--tonic", envvar="SONGCHART_TONIC", default=None,
              help="Key centre the degrees are relative to. Asked for on a terminal, "
                   f"otherwise {DEFAULT_TONIC}.")
@click.option("-o", "--output", "output_path", default=None, metavar="PATH",
              help="Write to PATH instead of stdout.")
@click.option("--in-place", is_flag=True, default=False,
              help="Rewrite SOURCE itself (whole file, local files only).")
def degrees(source: str, tonic: str | None, output_path: str | None, in_place: bool) -> None:
    """Rewrite absolute chords (C, F#m7, Bb/D) as Roman scale degrees."""
    if in_place and output_path:
        raise click.UsageError("--in-place and --output are mutually exclusive")

    # --- Tonic ---
    # Piped stdin carries the chart, so it cannot answer a prompt.
    if tonic is None:
        if source != STDIN and _stdin_is_interactive():
            tonic = click.prompt(TONIC_PROMPT, default=DEFAULT_TONIC)
        else:
            logger.debug("No tonic given, using %s", DEFAULT_TONIC)
            tonic = DEFAULT_TONIC

    # --- Load ---
    try:
        loader = get_source(source)
        if in_place:
            if not isinstance(loader, LocalSource) or source == STDIN:
                raise click.UsageError("--in-place needs a local file as SOURCE")
            text = loader.fetch(source)
        else:
            text = loader.load(source)
    except SongchartError as exc:
        _fail(exc)

    # --- Convert ---
    try:
        converted = convert_to_degrees(text, tonic)
    except SongchartError as exc:
        _fail(exc)

    # --- Output ---
    if in_place:
        Path(source).write_text(converted, encoding="utf-8")
        click.echo(f"Written to {source}")
        return
    _write_or_echo(converted.rstrip("\n"), output_path)
