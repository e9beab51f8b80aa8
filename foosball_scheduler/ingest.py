"""
Loading the player table.
"""

import pandas as pd
from pathlib import Path
from typing import List, Optional, Tuple

from .config import SchedulerConfig
from .exceptions import InvalidInputError

EXCEL_SUFFIXES = {".xlsx", ".xls"}


def read_table(path: str) -> pd.DataFrame:
    """Read a CSV or Excel file into a DataFrame."""
    if Path(path).suffix.lower() in EXCEL_SUFFIXES:
        return pd.read_excel(path)
    return pd.read_csv(path)


def load_players(path: str, config: Optional[SchedulerConfig] = None) -> List[Tuple[str, float]]:
    """
    Load (name, rating) pairs from a player table.

    Args:
        path: CSV or Excel file with one row per player
        config: Scheduler configuration (for column names)

    Returns:
        List[Tuple[str, float]]: Players in file order
    """
    if config is None:
        config = SchedulerConfig()

    df = read_table(path)
    return players_from_dataframe(df, config)


def players_from_dataframe(df: pd.DataFrame, config: SchedulerConfig) -> List[Tuple[str, float]]:
    """Extract (name, rating) pairs from a player DataFrame."""
    name_col = config.columns.name
    rating_col = config.columns.rating

    # Validate required columns exist
    required_columns = [name_col, rating_col]
    missing_columns = [col for col in required_columns if col not in df.columns]

    if missing_columns:
        raise InvalidInputError(
            f"Missing required columns: {missing_columns}. Found columns: {list(df.columns)}"
        )

    players = []
    for idx, row in df.iterrows():
        name = row[name_col]
        rating = row[rating_col]

        if pd.isna(name) and pd.isna(rating):
            print(f"Warning: Skipping empty row {idx}")
            continue

        if pd.isna(name) or not str(name).strip():
            raise InvalidInputError(f"Row {idx} has no player name")

        try:
            value = float(rating)
        except (TypeError, ValueError):
            raise InvalidInputError(f"Row {idx}: invalid rating for {name}: {rating!r}")

        players.append((str(name).strip(), value))

    return players
