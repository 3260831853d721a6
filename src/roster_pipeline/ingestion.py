"""CSV ingestion for squad roster exports.

Expected header: player_id,name,position,rating and, optionally,
injury,illness,suspension_games. Header names are matched case-insensitively
and every value is read as text; typing happens in cleaning.
"""

import logging
from pathlib import Path

import pandas as pd

from src.roster_pipeline.config import OPTIONAL_COLUMNS, REQUIRED_COLUMNS

logger = logging.getLogger(__name__)


class IngestionError(Exception):
    """Raised when a roster CSV cannot be read."""


class RosterIngester:
    """Reads one team's roster CSV into a pandas DataFrame."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def read_roster(self) -> pd.DataFrame:
        """Read the roster file.

        Returns DataFrame with columns:
            player_id, name, position, rating, injury, illness,
            suspension_games  (all text, blanks as "")

        Raises:
            FileNotFoundError: if the file does not exist.
            IngestionError: if the file is unreadable or lacks a required
                column.
        """
        if not self.path.exists():
            raise FileNotFoundError(f"Roster file not found: {self.path}")

        logger.info("Reading roster: %s", self.path.name)
        try:
            df = pd.read_csv(self.path, dtype=str, keep_default_na=False)
        except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
            raise IngestionError(f"Failed to read roster {self.path}: {e}") from e

        df.columns = [str(col).strip().lower() for col in df.columns]

        missing = [col for col in REQUIRED_COLUMNS if col not in df.columns]
        if missing:
            raise IngestionError(
                f"Roster {self.path.name} is missing column(s): {', '.join(missing)}"
            )

        for col in OPTIONAL_COLUMNS:
            if col not in df.columns:
                df[col] = ""

        df = df[REQUIRED_COLUMNS + OPTIONAL_COLUMNS].copy()
        for col in df.columns:
            df[col] = df[col].str.strip().str.strip('"')

        logger.info("Loaded %d roster rows", len(df))
        return df
