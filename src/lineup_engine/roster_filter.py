"""Availability filtering for automatic slot filling."""

from typing import Iterable, List, Optional

from src.lineup_engine.models import Player


def unavailable_reason(player: Player) -> Optional[str]:
    """Why a player cannot be auto-selected, or None if available."""
    if player.suspension_games and player.suspension_games > 0:
        return "suspended"
    if player.injury:
        return "injured"
    if player.illness:
        return "ill"
    return None


def is_available(player: Player) -> bool:
    """Whether *player* may be picked by auto-fill."""
    return unavailable_reason(player) is None


def available_players(roster: Iterable[Player]) -> List[Player]:
    """Players fit to be auto-selected, in roster order.

    The roster itself is not modified; unavailable players stay on it and
    may still be placed manually.
    """
    return [p for p in roster if is_available(p)]
