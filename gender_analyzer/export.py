"""Exporting and summarizing prediction results."""
from datetime import date
from pathlib import Path
from typing import Dict, Iterable, Optional, Union

import pandas as pd

from gender_analyzer.config import LOW_CONFIDENCE_THRESHOLD
from gender_analyzer.custom_logger import get_logger
from gender_analyzer.pipeline import PredictionResult

logger = get_logger(__name__)

EXPORT_COLUMNS = ["Full Name", "First Name", "Gender", "Confidence", "Status"]

SEPARATORS = {"csv": ",", "tsv": "\t"}


def results_to_dataframe(results: Iterable[PredictionResult]) -> pd.DataFrame:
    """Tabulate results with the export column layout."""
    rows = [
        [r.name, r.first_name, r.gender, int(r.confidence), r.status]
        for r in results
    ]
    return pd.DataFrame(rows, columns=EXPORT_COLUMNS)


def _render(results: Iterable[PredictionResult], fmt: str) -> str:
    if fmt not in SEPARATORS:
        raise ValueError(f"Unsupported export format: {fmt}. Use 'csv' or 'tsv'.")
    df = results_to_dataframe(results)
    return df.to_csv(sep=SEPARATORS[fmt], index=False, lineterminator="\n")


def to_csv_text(results: Iterable[PredictionResult]) -> str:
    """Render results as comma-separated text with a header row."""
    return _render(results, "csv")


def to_tsv_text(results: Iterable[PredictionResult]) -> str:
    """Render results as tab-separated text with a header row (opens in Excel)."""
    return _render(results, "tsv")


def default_export_filename(fmt: str = "csv", today: Optional[date] = None) -> str:
    """Return ``gender_analysis_<YYYY-MM-DD>.<fmt>``."""
    today = today or date.today()
    return f"gender_analysis_{today.isoformat()}.{fmt}"


def export_results(
    results: Iterable[PredictionResult],
    path: Union[str, Path],
    fmt: Optional[str] = None,
) -> Path:
    """Write results to a CSV or TSV file.

    Args:
        results: Results to export, in order
        path: Destination file
        fmt: "csv" or "tsv"; inferred from the file extension when omitted
            (anything other than ``.tsv`` is written as CSV)

    Returns:
        Path of the written file

    Raises:
        ValueError: If results are empty or the format is unsupported
    """
    results = list(results)
    if not results:
        raise ValueError("No results to export. Please run analysis first.")

    path = Path(path)
    if fmt is None:
        fmt = "tsv" if path.suffix.lower() == ".tsv" else "csv"

    text = _render(results, fmt)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    logger.info("Exported %d results to %s", len(results), path)
    return path


def summarize_results(
    results: Iterable[PredictionResult],
    threshold: int = LOW_CONFIDENCE_THRESHOLD,
) -> Dict[str, int]:
    """Count results by gender and by re-analysis category.

    Returns:
        Dictionary with total, male, female, unknown, low_confidence
        (known gender below ``threshold``), errors and reanalyzed counts
    """
    results = list(results)
    genders = pd.Series([r.gender for r in results], dtype=object).value_counts()
    return {
        "total": len(results),
        "male": int(genders.get("male", 0)),
        "female": int(genders.get("female", 0)),
        "unknown": len(results) - int(genders.get("male", 0)) - int(genders.get("female", 0)),
        "low_confidence": sum(1 for r in results if r.gender != "unknown" and r.confidence < threshold),
        "errors": sum(1 for r in results if r.error),
        "reanalyzed": sum(1 for r in results if r.reanalyzed),
    }
