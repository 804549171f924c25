"""
Harvest - Resource yield for a list of requested tiles.

Each die pip pays for one tile. Requesting more tiles than the budget
covers is not an error: the request is cut to the first tiles in the
order given. Ineligible tiles are skipped with a reason.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
import logging
from typing import Sequence

from .state import GameState, Position, Resources


logger = logging.getLogger(__name__)


class HarvestSkipReason(Enum):
    MISSING_TILE = "missing_tile"
    NOT_OWNED = "not_owned"
    BLOCKED_BY_OPPONENT = "blocked_by_opponent"
    CLAIM_PROTECTED = "claim_protected"
    NO_RESOURCES = "no_resources"


@dataclass
class HarvestReport:
    harvested: list[Position] = field(default_factory=list)
    skipped: list[tuple[Position, HarvestSkipReason]] = field(default_factory=list)
    truncated: list[Position] = field(default_factory=list)
    resources: Resources = field(default_factory=Resources)

    @property
    def tile_count(self) -> int:
        return len(self.harvested)


def _skip_reason(state: GameState, player_name: str, position: Position) -> HarvestSkipReason | None:
    tile = state.board.tile_at(position)
    if tile is None:
        return HarvestSkipReason.MISSING_TILE
    if tile.claimed_by is None:
        return HarvestSkipReason.NOT_OWNED

    if state.opposing_champions_at(player_name, position):
        return HarvestSkipReason.BLOCKED_BY_OPPONENT

    if tile.claimed_by != player_name:
        # Blockade: stand on someone else's unprotected claim
        own_champion_here = any(c.player_name == player_name for c in state.champions_at(position))
        if not own_champion_here:
            return HarvestSkipReason.NOT_OWNED
        if state.is_claim_protected(tile):
            return HarvestSkipReason.CLAIM_PROTECTED

    if tile.resources is None or tile.resources.total() == 0:
        return HarvestSkipReason.NO_RESOURCES
    return None


def calculate_harvest(
    state: GameState,
    player_name: str,
    positions: Sequence[Position],
    budget: int,
) -> HarvestReport:
    """Work out what harvesting `positions` would yield. Does not change any state."""
    state.get_player(player_name)
    report = HarvestReport()

    requested = list(positions)
    if len(requested) > budget:
        report.truncated = requested[budget:]
        requested = requested[:budget]
        logger.debug(
            "%s asked to harvest %d tiles with budget %d; dropping %s",
            player_name, len(positions), budget, [str(p) for p in report.truncated],
        )

    for position in requested:
        reason = _skip_reason(state, player_name, position)
        if reason is not None:
            logger.debug("%s cannot harvest %s: %s", player_name, position, reason.value)
            report.skipped.append((position, reason))
            continue
        report.harvested.append(position)
        report.resources.add(state.board.require_tile(position).resources)

    return report


def apply_harvest(state: GameState, player_name: str, report: HarvestReport):
    state.get_player(player_name).resources.add(report.resources)
