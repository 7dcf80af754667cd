"""Classify mixtures against fixed saturation points."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType

from .models import Classification, SoluteKind

log = logging.getLogger(__name__)

# Concentration % at or above which the solute no longer dissolves (water, 20 C).
# Alcohol is fully miscible, so it only saturates at the top of the scale.
SATURATION_TABLE: Mapping[SoluteKind, float] = MappingProxyType(
    {
        SoluteKind.SALT: 36.0,
        SoluteKind.SUGAR: 65.0,
        SoluteKind.ALCOHOL: 100.0,
    }
)
DEFAULT_SATURATION = 100.0

# Game-design simplification, applies to every solute.
DILUTED_BELOW = 5.0


def saturation_threshold(solute: SoluteKind, table: Mapping[SoluteKind, float] | None = None) -> float:
    """Return the saturation point for a solute, defaulting to the top of the scale."""
    if table is None:
        table = SATURATION_TABLE
    return table.get(solute, DEFAULT_SATURATION)


def classify(
    solute: SoluteKind | None,
    concentration: float,
    table: Mapping[SoluteKind, float] | None = None,
) -> Classification:
    """Classify a solute at a concentration percentage.

    ``concentration`` is expected in [0, 100]; callers clamp user input before
    calling and values outside that range are not corrected here.
    """
    if solute is None or solute is SoluteKind.NONE or concentration == 0:
        return Classification.NO_SOLUTE
    if concentration < DILUTED_BELOW:
        return Classification.DILUTED
    max_concentration = saturation_threshold(solute, table)
    if concentration >= max_concentration:
        log.debug("%s at %s%% reached saturation point %s", solute.value, concentration, max_concentration)
        return Classification.SATURATED
    return Classification.CONCENTRATED
