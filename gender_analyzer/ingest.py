"""Loading name lists from pasted text and delimited files."""
from pathlib import Path
from typing import List, Optional, Union

import pandas as pd

from gender_analyzer.custom_logger import get_logger

logger = get_logger(__name__)

# Column headers recognized as holding the names, in priority order
NAME_COLUMN_CANDIDATES = [
    "CEO Name", "Ceo Name", "ceo_name", "ceoname", "CEO", "ceo",
    "Name", "name", "Full Name", "fullname", "Executive", "Leader",
]

SAMPLE_NAMES = [
    "Dr. Alexander Bethke-Jaenicke",
    "Prof. Maria Rodriguez",
    "Mr. John Smith Jr.",
    "Ms. Sarah Johnson",
    "Alexander Wang",
    "Anna Bauer",
    "Michael Chen",
    "Lisa Anderson",
    "Patricia Williams",
    "Robert Johnson",
    "Jennifer Davis",
    "Christopher Miller",
    "Elizabeth Wilson",
    "Daniel Moore",
    "Michelle Taylor",
    "Matthew Anderson",
    "Sarah Thomas",
    "David Jackson",
    "Lisa White",
    "James Harris",
]


def parse_name_list(text: Optional[str]) -> List[str]:
    """Split newline-separated text into names, dropping blank lines.

    Example:
        >>> parse_name_list("  Anna Bauer\\n\\nMichael Chen  ")
        ['Anna Bauer', 'Michael Chen']
    """
    if not text:
        return []
    return [line.strip() for line in text.splitlines() if line.strip()]


def detect_name_column(columns: List[str]) -> Optional[str]:
    """Return the first recognized name column, or None."""
    stripped = {str(column).strip(): column for column in columns}
    for candidate in NAME_COLUMN_CANDIDATES:
        if candidate in stripped:
            return stripped[candidate]
    return None


def find_column(columns: List[str], column: str) -> Optional[str]:
    """Find ``column`` among ``columns``, ignoring surrounding whitespace."""
    for candidate in columns:
        if str(candidate).strip() == column.strip():
            return candidate
    return None


def load_names_from_csv(path: Union[str, Path], column: Optional[str] = None) -> List[str]:
    """Load names from one column of a CSV file.

    Quoted fields may contain commas. Every value is read as text.

    Args:
        path: Path to the CSV file (must have a header row)
        column: Column holding the names; auto-detected when omitted

    Returns:
        Non-empty, stripped names in file order

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file has no data rows or no usable name column
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"CSV file not found at {path}")

    try:
        df = pd.read_csv(path, dtype=str, keep_default_na=False, skipinitialspace=True)
    except pd.errors.EmptyDataError as exc:
        raise ValueError(f"CSV file {path} appears to be empty or has no data rows") from exc

    if df.empty:
        raise ValueError(f"CSV file {path} appears to be empty or has no data rows")

    headers = [str(c).strip() for c in df.columns]
    if column is None:
        name_column = detect_name_column(list(df.columns))
        if name_column is None:
            raise ValueError(
                f"Could not find a name column. Available columns: {', '.join(headers)}"
            )
    else:
        name_column = find_column(list(df.columns), column)
        if name_column is None:
            raise ValueError(
                f"Column '{column}' not found. Available columns: {', '.join(headers)}"
            )

    names = df[name_column].str.strip()
    names = names[names != ""].tolist()
    logger.info("Loaded %d names from column: %s", len(names), str(name_column).strip())
    return names


def load_names(path: Union[str, Path], column: Optional[str] = None) -> List[str]:
    """Load names from a CSV file or a plain-text file with one name per line.

    Args:
        path: Input file; ``.csv`` is read as CSV, ``.txt`` or no extension as text
        column: Name column for CSV input (auto-detected when omitted)

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: For unsupported file formats or unreadable content
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".csv":
        return load_names_from_csv(path, column=column)

    if suffix in (".xlsx", ".xls"):
        raise ValueError("Excel files are not supported. Please convert to CSV.")

    if suffix not in ("", ".txt"):
        raise ValueError(f"Unsupported file format: {suffix}. Please use CSV or text files.")

    if not path.exists():
        raise FileNotFoundError(f"Name list not found at {path}")

    names = parse_name_list(path.read_text(encoding="utf-8"))
    logger.info("Loaded %d names from %s", len(names), path.name)
    return names
