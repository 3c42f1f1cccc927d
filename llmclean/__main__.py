"""CLI entry point: python -m llmclean [INPUT] [options]"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from rich import box
from rich.console import Console
from rich.table import Table

from llmclean.items import CleaningStats
from llmclean.query import clamp_chunk_size, clean, output_filename
from llmclean.rag import write_json
from llmclean.settings import DEFAULT_CHUNK_TOKENS, MAX_CHUNK_TOKENS, MIN_CHUNK_TOKENS

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="llmclean",
        description=(
            "Clean HTML into readable text, Markdown, or token-sized JSON chunks.\n"
            "Reads a file or stdin. No network access, no LLMs required."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("input", nargs="?", default="-", metavar="INPUT",
                        help="HTML file to clean, or '-' for stdin (default: stdin)")
    parser.add_argument("--mode", choices=["plaintext", "markdown", "json"],
                        default="plaintext", metavar="{plaintext,markdown,json}",
                        help="Output format (default: plaintext)")
    parser.add_argument("--chunk-size", default=DEFAULT_CHUNK_TOKENS, metavar="N",
                        help=(
                            f"Target tokens per JSON chunk, clamped to "
                            f"{MIN_CHUNK_TOKENS}-{MAX_CHUNK_TOKENS} (default: {DEFAULT_CHUNK_TOKENS})"
                        ))
    parser.add_argument("--out", default=None, metavar="PATH",
                        help=(
                            "Write output to PATH instead of stdout; a directory "
                            "receives cleaned-content.{txt,md,json}"
                        ))
    parser.add_argument("--stats", action="store_true", default=False,
                        help="Print cleaning statistics to stderr")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        metavar="{DEBUG,INFO,WARNING,ERROR}",
                        help="Logging level (default: WARNING)")
    return parser


def _read_input(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8", errors="replace")


def _resolve_output_path(out: str, mode: str) -> Path:
    path = Path(out)
    if path.is_dir():
        return path / output_filename(mode)  # type: ignore[arg-type]
    return path


def _print_stats(stats: CleaningStats, console: Console) -> None:
    tbl = Table(
        title="[bold cyan]Cleaning Summary[/bold cyan]",
        box=box.SIMPLE_HEAVY,
        show_header=False,
    )
    tbl.add_column("Metric", style="bold")
    tbl.add_column("Value", justify="right", style="green")
    tbl.add_row("Original length", f"{stats.original_length:,}")
    tbl.add_row("Cleaned length", f"{stats.cleaned_length:,}")
    tbl.add_row("Reduction", f"{stats.reduction_percent}%")
    tbl.add_row("Words", f"{stats.word_count:,}")
    tbl.add_row("Tokens", f"~{stats.estimated_tokens:,}")
    tbl.add_row("Chunks", str(stats.chunk_count))
    console.print(tbl)


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )

    try:
        html = _read_input(args.input)
    except OSError as exc:
        print(f"ERROR: Could not read {args.input}: {exc}", file=sys.stderr)
        return 1

    if not html.strip():
        print("ERROR: Please provide some HTML to clean", file=sys.stderr)
        return 1

    result = clean(html, chunk_size=clamp_chunk_size(args.chunk_size))
    if result.is_empty:
        print("No meaningful content found in the HTML", file=sys.stderr)
        return 1

    if args.out:
        out_path = _resolve_output_path(args.out, args.mode)
        try:
            if args.mode == "json":
                write_json(result.json_output, out_path)
            else:
                out_path.parent.mkdir(parents=True, exist_ok=True)
                out_path.write_text(result.render(args.mode) + "\n", encoding="utf-8")
        except OSError as exc:
            print(f"ERROR: Could not write {out_path}: {exc}", file=sys.stderr)
            return 1
        logger.info("Wrote %s output to %s", args.mode, out_path)
    else:
        sys.stdout.write(result.render(args.mode) + "\n")

    if args.stats:
        _print_stats(result.stats, Console(stderr=True))

    return 0


if __name__ == "__main__":
    sys.exit(main())
