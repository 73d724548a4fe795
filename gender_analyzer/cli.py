"""
Command-line front end for gender analysis of name lists.

Examples:
    gender-analyzer --sample
    gender-analyzer ceos.csv --provider genderize -o results.csv
    gender-analyzer names.txt --provider openrouter --reanalyze unknown,errors \\
        --reanalyze-provider perplexity --format tsv -o results.tsv
"""
import argparse
import sys
import threading
from pathlib import Path
from typing import List, Optional

from gender_analyzer import config
from gender_analyzer.custom_logger import configure_global_logger, get_logger
from gender_analyzer.export import export_results, summarize_results, to_csv_text, to_tsv_text
from gender_analyzer.ingest import SAMPLE_NAMES, load_names, parse_name_list
from gender_analyzer.pipeline import (
    PipelineState,
    PipelineValidationError,
    PredictionPipeline,
    ReanalysisFilter,
)
from gender_analyzer.predictors import PROVIDERS, ProviderConfig

logger = get_logger(__name__)

REANALYZE_CHOICES = ("unknown", "low-confidence", "errors")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gender-analyzer",
        description="Predict the likely gender of each name in a list",
    )
    parser.add_argument(
        "input",
        nargs="?",
        help="CSV or text file with names, or '-' to read one name per line from stdin",
    )
    parser.add_argument("--sample", action="store_true", help="Analyze the built-in sample names")
    parser.add_argument("--column", help="CSV column holding the names (auto-detected by default)")
    parser.add_argument(
        "--provider",
        default="simple",
        choices=sorted(PROVIDERS),
        help="Prediction provider (default: simple)",
    )
    parser.add_argument("--api-key", help="Provider API key (default: from environment)")
    parser.add_argument("--model", help="Model for openrouter/perplexity")
    parser.add_argument(
        "-o", "--output",
        default="-",
        help="Output file, or '-' for stdout (default: -)",
    )
    parser.add_argument("--format", choices=["csv", "tsv"], help="Output format (default: from extension, else csv)")
    parser.add_argument(
        "--reanalyze",
        help=f"Comma-separated categories to re-analyze after the run: {', '.join(REANALYZE_CHOICES)}",
    )
    parser.add_argument(
        "--reanalyze-provider",
        choices=sorted(PROVIDERS),
        help="Provider for the re-analysis pass (default: same as --provider)",
    )
    parser.add_argument("--reanalyze-api-key", help="API key for the re-analysis provider")
    parser.add_argument("--reanalyze-model", help="Model for the re-analysis provider")
    parser.add_argument("--delay", type=float, help="Seconds to wait between names")
    parser.add_argument("--settings", type=Path, help="Settings YAML file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def parse_reanalysis_filter(value: str, threshold: int) -> ReanalysisFilter:
    """Turn 'unknown,low-confidence' into a ReanalysisFilter."""
    categories = {part.strip() for part in value.split(",") if part.strip()}
    invalid = categories - set(REANALYZE_CHOICES)
    if invalid or not categories:
        raise ValueError(
            f"Invalid re-analysis categories: {', '.join(sorted(invalid)) or value!r}. "
            f"Choose from: {', '.join(REANALYZE_CHOICES)}"
        )
    return ReanalysisFilter(
        unknown="unknown" in categories,
        low_confidence="low-confidence" in categories,
        errors="errors" in categories,
        threshold=threshold,
    )


def make_provider_config(provider: str, api_key: Optional[str], model: Optional[str], settings: dict) -> ProviderConfig:
    provider_settings = config.get_setting(settings, "providers", provider, {}) or {}
    return ProviderConfig(
        provider=provider,
        api_key=api_key or config.get_api_key(provider),
        model=model or provider_settings.get("model"),
        endpoint=provider_settings.get("endpoint"),
        timeout=float(config.get_setting(settings, "http", "timeout_seconds", config.DEFAULT_TIMEOUT_SECONDS)),
        referer=config.get_setting(settings, "http", "referer", config.DEFAULT_REFERER),
        title=config.get_setting(settings, "http", "title", config.DEFAULT_TITLE),
    )


def read_names(args) -> List[str]:
    if args.sample:
        return list(SAMPLE_NAMES)
    if args.input is None:
        raise ValueError("Please give an input file, '-' for stdin, or --sample")
    if args.input == "-":
        return parse_name_list(sys.stdin.read())
    return load_names(args.input, column=args.column)


def run_in_worker(pipeline: PredictionPipeline, target, *target_args) -> None:
    """Run a pipeline pass in a worker thread so Ctrl-C can request a stop."""
    errors = []
    done = threading.Event()

    def _work():
        try:
            target(*target_args)
        except BaseException as exc:  # re-raised in the calling thread
            errors.append(exc)
        finally:
            done.set()

    worker = threading.Thread(target=_work, name="gender-analyzer-pipeline", daemon=True)
    worker.start()
    # an interrupted join() can report the worker as finished while it still runs
    while not done.is_set():
        try:
            done.wait(0.2)
        except KeyboardInterrupt:
            if pipeline.cancel():
                logger.warning("Stopping after current name...")
    worker.join()
    if errors:
        raise errors[0]


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_global_logger(verbose=args.verbose)

    try:
        settings = config.load_settings(args.settings)
    except (FileNotFoundError, ValueError) as exc:
        logger.error("Could not load settings: %s", exc)
        return 1

    threshold = int(config.get_setting(settings, "pipeline", "low_confidence_threshold",
                                       config.LOW_CONFIDENCE_THRESHOLD))
    delay = args.delay
    if delay is None:
        delay = float(config.get_setting(settings, "pipeline", "delay_seconds", config.DEFAULT_DELAY_SECONDS))
    reanalysis_delay = args.delay
    if reanalysis_delay is None:
        reanalysis_delay = float(config.get_setting(settings, "pipeline", "reanalysis_delay_seconds",
                                                    config.DEFAULT_REANALYSIS_DELAY_SECONDS))

    try:
        names = read_names(args)
        selection = parse_reanalysis_filter(args.reanalyze, threshold) if args.reanalyze else None
    except (FileNotFoundError, ValueError) as exc:
        logger.error("%s", exc)
        return 1

    pipeline = PredictionPipeline(delay=delay, reanalysis_delay=reanalysis_delay)
    provider_config = make_provider_config(args.provider, args.api_key, args.model, settings)

    exit_code = 0
    try:
        run_in_worker(pipeline, pipeline.start, names, provider_config)
        if selection is not None and pipeline.state is PipelineState.COMPLETED:
            reanalysis_config = make_provider_config(
                args.reanalyze_provider or args.provider,
                args.reanalyze_api_key or (None if args.reanalyze_provider else args.api_key),
                args.reanalyze_model,
                settings,
            )
            run_in_worker(pipeline, pipeline.reanalyze, selection, reanalysis_config)
    except PipelineValidationError as exc:
        logger.error("Analysis failed: %s", exc)
        exit_code = 1
        if not pipeline.results:
            return exit_code

    results = pipeline.results
    fmt = args.format
    if args.output == "-":
        text = to_tsv_text(results) if fmt == "tsv" else to_csv_text(results)
        sys.stdout.write(text)
    elif results:
        export_results(results, args.output, fmt=fmt)

    summary = summarize_results(results, threshold=threshold)
    logger.info(
        "Results: %d male, %d female, %d unknown (%d total); "
        "%d low confidence, %d errors, %d re-analyzed",
        summary["male"], summary["female"], summary["unknown"], summary["total"],
        summary["low_confidence"], summary["errors"], summary["reanalyzed"],
    )
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
