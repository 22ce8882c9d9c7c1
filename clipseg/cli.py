"""Command-line interface for segmentation and clipboard analysis."""

import argparse
import asyncio
import functools
import json
import logging
import sys
from concurrent.futures import ProcessPoolExecutor, as_completed
from pathlib import Path

import pandas as pd
from tqdm import tqdm

from .analyzer import ClipboardContentAnalyzer
from .classifier import classify
from .config import Config, SegmentationOptions
from .pipeline import Segmenter, segment_with_strategies
from .registry import StrategyRegistry
from .rules import RULES, multi_rule_analyze

logger = logging.getLogger(__name__)

CSV_COLUMNS = ["Segment", "Length", "Source_Line_Number", "Segment_Order", "Content_Type"]


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the CLI."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Segment and classify clipboard text",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Segment text given on the command line
  clipseg segment "Hello world. This is a test!"

  # Segment stdin with only some strategies
  cat notes.txt | clipseg segment --plugins chinese,english

  # Analyze clipboard text as JSON
  clipseg analyze "https://github.com/foo/bar"

  # Break an identifier down with explicit rules
  clipseg rules "getUserName_v2" --rule naming_split --rule digit_split

  # Segment a JSONL file into a CSV
  clipseg batch --input data/input.jsonl --output data/segments.csv --workers 4
        """,
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    subparsers = parser.add_subparsers(dest="command", required=True, help="Command to run")

    segment_parser = subparsers.add_parser("segment", help="Print one segment per line")
    segment_parser.add_argument("text", nargs="?", help="Text to segment (default: stdin)")
    setup_options_arguments(segment_parser)

    analyze_parser = subparsers.add_parser("analyze", help="Print an analysis report as JSON")
    analyze_parser.add_argument("text", nargs="?", help="Text to analyze (default: stdin)")
    setup_config_argument(analyze_parser)

    batch_parser = subparsers.add_parser("batch", help="Segment a JSONL file into a CSV")
    batch_parser.add_argument(
        "--input",
        type=Path,
        required=True,
        help="Path to input JSONL file with a text or content field",
    )
    batch_parser.add_argument(
        "--output",
        type=Path,
        required=True,
        help="Path of the CSV file to write",
    )
    batch_parser.add_argument(
        "--workers",
        type=int,
        default=1,
        help="Number of parallel workers (default: 1)",
    )
    setup_options_arguments(batch_parser)

    rules_parser = subparsers.add_parser("rules", help="Apply split and remove rules, print JSON")
    rules_parser.add_argument("text", nargs="?", help="Text to break down (default: stdin)")
    rules_parser.add_argument(
        "--rule",
        dest="rules",
        action="append",
        choices=list(RULES),
        default=[],
        help="Rule to apply; repeat for several rules",
    )
    setup_config_argument(rules_parser)

    return parser.parse_args(argv)


def setup_config_argument(parser: argparse.ArgumentParser) -> None:
    """Setup the configuration file option."""
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to YAML configuration file",
    )


def setup_options_arguments(parser: argparse.ArgumentParser) -> None:
    """Setup segmentation option overrides shared by several commands."""
    setup_config_argument(parser)
    parser.add_argument(
        "--plugins",
        type=str,
        help="Comma separated strategy names (default: chinese,english,url,code,list)",
    )
    parser.add_argument(
        "--no-cache",
        action="store_true",
        help="Disable the result cache",
    )


def build_config(args: argparse.Namespace) -> Config:
    """Build configuration from arguments."""
    if args.config:
        config = Config.from_yaml(args.config)
    else:
        config = Config()

    overrides = {}
    if getattr(args, "plugins", None):
        overrides["selected_plugins"] = args.plugins
    if getattr(args, "no_cache", False):
        overrides["cache_enabled"] = False
    if overrides:
        config.segmentation = SegmentationOptions(
            **{**config.segmentation.model_dump(), **overrides}
        )
    return config


def read_text_argument(args: argparse.Namespace) -> str:
    if args.text is not None:
        return args.text
    return sys.stdin.read()


def segment_record(
    line_num: int, record: dict, options: SegmentationOptions, strategies: dict
) -> list[dict]:
    """Segment one JSONL record into CSV rows."""
    text = record.get("text") or record.get("content") or ""
    if not isinstance(text, str) or not text.strip():
        return []
    content_type = classify(text).value
    segments = segment_with_strategies(text, options, strategies)
    return [
        {
            "Segment": segment,
            "Length": len(segment),
            "Source_Line_Number": line_num,
            "Segment_Order": order,
            "Content_Type": content_type,
        }
        for order, segment in enumerate(segments, 1)
    ]


@functools.lru_cache(maxsize=1)
def _default_strategies() -> dict:
    return StrategyRegistry.with_defaults().snapshot()


def _segment_record_worker(args: tuple) -> tuple[int, list[dict]]:
    """Worker for parallel batch processing. Must be module-level for pickling.

    Args:
        args: (line_num, record, options_dict)
    """
    line_num, record, options = args
    rows = segment_record(line_num, record, SegmentationOptions(**options), _default_strategies())
    return line_num, rows


def load_records(input_path: Path) -> list[tuple[int, dict]]:
    """Read JSONL records, skipping blank and malformed lines."""
    records = []
    with open(input_path, "r", encoding="utf-8") as infile:
        for line_num, line in enumerate(infile, 1):
            line = line.strip()
            if not line:
                continue
            try:
                record = json.loads(line)
            except json.JSONDecodeError:
                logger.warning(f"Skipping malformed JSON at line {line_num}")
                continue
            if isinstance(record, dict):
                records.append((line_num, record))
    return records


def run_batch(config: Config, input_path: Path, output_path: Path, workers: int = 1) -> int:
    """Segment every record of a JSONL file and write the rows to a CSV.

    Args:
        config: Configuration providing the segmentation options
        input_path: JSONL file with a ``text`` or ``content`` field per line
        output_path: CSV file to write
        workers: Number of worker processes; 1 runs in-process

    Returns:
        Number of records that produced at least one segment
    """
    records = load_records(input_path)
    options = config.segmentation
    results_by_line: dict[int, list[dict]] = {}

    if workers <= 1:
        strategies = _default_strategies()
        for line_num, record in tqdm(records, desc="Segmenting"):
            rows = segment_record(line_num, record, options, strategies)
            if rows:
                results_by_line[line_num] = rows
    else:
        options_dict = options.model_dump()
        with ProcessPoolExecutor(max_workers=workers) as executor:
            futures = {
                executor.submit(_segment_record_worker, (line_num, record, options_dict)): line_num
                for line_num, record in records
            }
            for future in tqdm(
                as_completed(futures), total=len(futures), desc=f"Segmenting ({workers} workers)"
            ):
                line_num = futures[future]
                try:
                    _, rows = future.result()
                except Exception as e:
                    logger.error(f"Worker error at line {line_num}: {e}")
                    continue
                if rows:
                    results_by_line[line_num] = rows

    rows = [row for line_num in sorted(results_by_line) for row in results_by_line[line_num]]
    output_path.parent.mkdir(parents=True, exist_ok=True)
    pd.DataFrame(rows, columns=CSV_COLUMNS).to_csv(output_path, index=False)
    logger.info(f"Wrote {len(rows)} segments to {output_path}")
    return len(results_by_line)


def handle_segment(args: argparse.Namespace, config: Config) -> int:
    """Handle segment command."""
    text = read_text_argument(args)
    segmenter = Segmenter(config)
    try:
        segments = asyncio.run(segmenter.segment(text))
    finally:
        segmenter.close()
    for segment in segments:
        print(segment)
    return 0


def handle_analyze(args: argparse.Namespace, config: Config) -> int:
    """Handle analyze command."""
    text = read_text_argument(args)
    segmenter = Segmenter(config)
    analyzer = ClipboardContentAnalyzer(segmenter, config.analyzer)
    try:
        report = asyncio.run(analyzer.analyze(text))
    finally:
        segmenter.close()
    print(json.dumps(report.to_dict(), ensure_ascii=False, indent=2))
    return 0


def handle_batch(args: argparse.Namespace, config: Config) -> int:
    """Handle batch command."""
    try:
        count = run_batch(config, args.input, args.output, args.workers)
    except FileNotFoundError as e:
        print(f"Error: File not found - {e}", file=sys.stderr)
        return 1
    print(f"\nProcessed {count} records")
    return 0


def handle_rules(args: argparse.Namespace, config: Config) -> int:
    """Handle rules command."""
    text = read_text_argument(args)
    analysis = multi_rule_analyze(text, args.rules, config.rules)
    print(json.dumps(analysis.to_dict(), ensure_ascii=False, indent=2))
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    setup_logging(args.verbose)

    try:
        config = build_config(args)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    handlers = {
        "segment": handle_segment,
        "analyze": handle_analyze,
        "batch": handle_batch,
        "rules": handle_rules,
    }
    try:
        return handlers[args.command](args, config)
    except Exception as e:
        logging.exception(f"{args.command} failed")
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
