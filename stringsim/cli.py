"""Command line entry point for stringsim."""

from __future__ import annotations

import logging
import sys
import time

import click

from .engine import DEFAULT_THRESHOLD, RunConfig, compare
from .errors import StringSimError
from .loaders import check_input_path, read_strings
from .scorers import available_metrics

logger = logging.getLogger(__name__)

EPILOG = """\b
Examples:
  stringsim adam adan
  stringsim adam adan Aden -i -o output.json
  stringsim adam --f2 strings.txt -m Levenshtein
  stringsim --f1 strings_one.json --f2 strings_two.txt -o out.csv
"""


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


def _require(ctx: click.Context, n: int, items) -> None:
    if len(items) < n:
        raise click.UsageError(f"Expected {n} arguments, got {len(items)}.", ctx=ctx)


def collect_inputs(ctx: click.Context, args, file1, file2):
    """Work out the primary and comparison lists from arguments and files.

    --f1 and --f2 both given: files only. Only --f1: arguments are the
    comparison strings. Only --f2: arguments are the primary strings.
    Neither: the first argument is compared against the rest.
    """
    for path in (file1, file2):
        if path:
            check_input_path(path)
    args = list(args)
    if file1:
        primary = read_strings(file1)
        if file2:
            return primary, read_strings(file2)
        _require(ctx, 1, args)
        return primary, args
    if file2:
        _require(ctx, 1, args)
        return args, read_strings(file2)
    _require(ctx, 2, args)
    return args[:1], args[1:]


@click.command(
    help="Calculate the similarity between at least two strings.",
    epilog=EPILOG,
)
@click.argument("strings", nargs=-1)
@click.option("--f1", "file1", default="", help="File of s1 strings (.txt one per line, or a .json array of strings).")
@click.option("--f2", "file2", default="", help="File of s2 strings (.txt one per line, or a .json array of strings).")
@click.option("-o", "--out", "output", default="", help="Output file (.json or .csv). Results are printed when omitted.")
@click.option("-m", "--metric", default="Jaro", show_default=True, help="Similarity metric: " + ", ".join(available_metrics()) + ".")
@click.option("-i", "--insensitive", is_flag=True, help="Case insensitive comparison.")
@click.option("-u", "--unidecode", is_flag=True, help="Compare ASCII transliterations of the strings.")
@click.option("-s", "--silent", is_flag=True, help="Do not print results to stdout.")
@click.option("--threshold", default=DEFAULT_THRESHOLD, show_default=True, type=click.IntRange(min=0), help="Pair count above which results are streamed to the output file.")
@click.option("--workers", default=None, type=click.IntRange(min=1), help="Worker threads (default: CPU count).")
@click.option("--skip-errors", is_flag=True, help="Skip pairs the metric cannot score instead of aborting.")
@click.option("-v", "--verbose", is_flag=True, help="Log progress to stderr.")
@click.pass_context
def main(ctx, strings, file1, file2, output, metric, insensitive, unidecode, silent, threshold, workers, skip_errors, verbose):
    _configure_logging(verbose)
    if not strings and not file1 and not file2:
        click.echo(ctx.get_help())
        return

    start = time.perf_counter()
    try:
        primary, comparison = collect_inputs(ctx, strings, file1, file2)
        config = RunConfig(
            metric=metric,
            insensitive=insensitive,
            ascii_fold=unidecode,
            silent=silent,
            output=output or None,
            threshold=threshold,
            workers=workers,
            on_error="skip" if skip_errors else "abort",
        )
        summary = compare(primary, comparison, config)
    except StringSimError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    for s1, s2, message in summary.skipped:
        click.echo(f"Skipped {s1!r} / {s2!r}: {message}", err=True)
    logger.info(
        "Done: %d records (%s mode) in %.3fs",
        summary.records_written,
        summary.mode,
        time.perf_counter() - start,
    )

