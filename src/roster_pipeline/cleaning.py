"""Cleaning of ingested roster data.

- Map position aliases to canonical positions (DM -> CDM, FW -> ST, ...)
- Clamp ratings into the 1-99 range
- Normalise availability columns (blank -> None, suspensions >= 0)
- Drop unusable rows and repeated player ids
"""

import logging
from typing import List, Optional

import pandas as pd

from src.lineup_engine.config import MAX_RATING, MIN_RATING
from src.lineup_engine.models import Player, Position
from src.roster_pipeline.config import OPTIONAL_COLUMNS, POSITION_ALIASES

logger = logging.getLogger(__name__)

_VALID_POSITIONS = {p.value for p in Position}


def _blank_to_none(value) -> Optional[str]:
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return None
    value = str(value).strip()
    return value or None


class RosterCleaner:
    """Turns a raw roster DataFrame into rows the lineup engine can use."""

    @staticmethod
    def normalize_position(value) -> Optional[str]:
        """Canonical position for a raw value, or None if unrecognised.

        Examples:
            "st"  -> "ST"
            "DM"  -> "CDM"
            "LF"  -> "LW"
            "SW"  -> None
        """
        value = _blank_to_none(value)
        if value is None:
            return None
        code = value.upper()
        code = POSITION_ALIASES.get(code, code)
        return code if code in _VALID_POSITIONS else None

    @staticmethod
    def clamp_rating(value) -> Optional[int]:
        """Integer rating within bounds, or None if not numeric."""
        value = _blank_to_none(value)
        if value is None:
            return None
        try:
            rating = int(round(float(value)))
        except (ValueError, OverflowError):
            return None
        return max(MIN_RATING, min(MAX_RATING, rating))

    @staticmethod
    def suspension_games(value) -> int:
        """Remaining suspension games; blanks and junk count as 0."""
        value = _blank_to_none(value)
        if value is None:
            return 0
        try:
            games = int(float(value))
        except (ValueError, OverflowError):
            return 0
        return max(0, games)

    def clean(self, df: pd.DataFrame) -> pd.DataFrame:
        """Clean a roster DataFrame from :class:`RosterIngester`.

        Rows without an id, a name, a known position or a numeric rating
        are dropped with a warning. A repeated player id keeps its first row.
        """
        out = df.copy()
        for col in OPTIONAL_COLUMNS:
            if col not in out.columns:
                out[col] = None

        out["player_id"] = out["player_id"].apply(_blank_to_none)
        out["name"] = out["name"].apply(_blank_to_none)
        out["position"] = out["position"].apply(self.normalize_position)
        out["rating"] = out["rating"].apply(self.clamp_rating)
        out["injury"] = out["injury"].apply(_blank_to_none)
        out["illness"] = out["illness"].apply(_blank_to_none)
        out["suspension_games"] = out["suspension_games"].apply(self.suspension_games)

        invalid = (
            out["player_id"].isna()
            | out["name"].isna()
            | out["position"].isna()
            | out["rating"].isna()
        )
        if invalid.any():
            logger.warning(
                "Dropping %d unusable roster rows: %s",
                invalid.sum(),
                df.loc[invalid, "name"].tolist(),
            )
            out = out[~invalid]

        repeated = out["player_id"].duplicated(keep="first")
        if repeated.any():
            logger.warning(
                "Dropping %d repeated player ids: %s",
                repeated.sum(),
                out.loc[repeated, "player_id"].tolist(),
            )
            out = out[~repeated]

        out = out.reset_index(drop=True)
        logger.info("Cleaned roster: %d players", len(out))
        return out

    @staticmethod
    def to_players(df: pd.DataFrame) -> List[Player]:
        """Build Player records from a cleaned roster, in row order."""
        return [
            Player(
                id=str(row["player_id"]),
                name=str(row["name"]),
                position=Position(row["position"]),
                rating=int(row["rating"]),
                injury=_blank_to_none(row["injury"]),
                illness=_blank_to_none(row["illness"]),
                suspension_games=int(row["suspension_games"]),
            )
            for _, row in df.iterrows()
        ]
