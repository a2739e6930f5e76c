"""
Data loading functions for the bulk sync job.

This module loads profile populations exported from the profiles table.
No scoring is done here, and `qualities` / `requirements` cells are passed
through untouched: tolerant parsing happens when profiles are built.

Supported formats:
- .json: a list of profile objects
- .jsonl: one profile object per line
- .csv: one profile per row, nested objects and lists stored as JSON text
- .yaml / .yml: a list of profile objects
"""

import json
import logging
from pathlib import Path
from typing import Dict, List, Any

import pandas as pd
import yaml

from ..profiles.schema import Profile

logger = logging.getLogger(__name__)

LIST_COLUMNS = ("interests", "profile_images")


def load_profile_frame(filepath: str, delimiter: str = ",") -> pd.DataFrame:
    """
    Load a profile export into a DataFrame.

    Args:
        filepath: Path to the export file
        delimiter: Field delimiter for CSV files

    Returns:
        DataFrame with one row per profile

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is empty or the format is unsupported
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Profile data file not found: {filepath}")

    suffix = path.suffix.lower()
    logger.info(f"Loading profiles from {filepath}")

    if suffix == ".csv":
        try:
            df = pd.read_csv(filepath, sep=delimiter, dtype={"user_id": str})
        except pd.errors.EmptyDataError:
            raise ValueError(f"Profile data file is empty: {filepath}")
    elif suffix == ".jsonl":
        df = pd.read_json(filepath, lines=True, dtype={"user_id": str})
    elif suffix == ".json":
        with open(filepath, "r") as f:
            records = json.load(f)
        df = _records_to_frame(records, filepath)
    elif suffix in (".yaml", ".yml"):
        with open(filepath, "r") as f:
            records = yaml.safe_load(f)
        df = _records_to_frame(records, filepath)
    else:
        raise ValueError(f"Unsupported profile file format: {suffix}")

    if df.empty:
        raise ValueError(f"Profile data file is empty: {filepath}")

    logger.info(f"Loaded {len(df)} rows with {len(df.columns)} columns")
    return df


def _records_to_frame(records: Any, filepath: str) -> pd.DataFrame:
    if records is None:
        return pd.DataFrame()
    if not isinstance(records, list):
        raise ValueError(f"Expected a list of profiles in {filepath}, got {type(records).__name__}")
    return pd.DataFrame.from_records(records)


def frame_to_records(df: pd.DataFrame) -> List[Dict[str, Any]]:
    """
    Convert a profile DataFrame to plain records.

    Missing cells become None; list columns stored as JSON text are decoded.
    """
    clean = df.astype(object).where(pd.notna(df), None)
    records = clean.to_dict(orient="records")
    for record in records:
        for column in LIST_COLUMNS:
            if isinstance(record.get(column), str):
                record[column] = _decode_list_cell(record[column])
    return records


def _decode_list_cell(cell: str) -> Any:
    text = cell.strip()
    if not text.startswith("["):
        return cell
    try:
        return json.loads(text)
    except ValueError:
        logger.warning(f"Could not decode list cell: {cell!r}")
        return []


def load_profiles(filepath: str, delimiter: str = ",") -> List[Profile]:
    """
    Load a profile export into Profile records.

    Args:
        filepath: Path to the export file
        delimiter: Field delimiter for CSV files

    Returns:
        List of Profile objects in file order
    """
    df = load_profile_frame(filepath, delimiter=delimiter)
    profiles = [Profile.from_dict(record) for record in frame_to_records(df)]

    missing_ids = sum(1 for p in profiles if p.user_id is None)
    if missing_ids:
        logger.warning(f"{missing_ids} profiles have no user_id")

    return profiles
