"""Bundled challenge catalog, solvent choices and tutorial text."""

from __future__ import annotations

from collections.abc import Sequence

from .models import Challenge, SoluteKind

CHALLENGES: tuple[Challenge, ...] = (
    Challenge(
        id=1,
        title="Basic Saline Solution",
        description="Make a salt solution at 5% concentration.",
        target_solute=SoluteKind.SALT,
        target_concentration=5.0,
        hint="Remember: 5g of salt for every 100ml of water.",
    ),
    Challenge(
        id=2,
        title="Saturated Sugar Solution",
        description="Find the saturation point of sugar in water.",
        target_solute=SoluteKind.SUGAR,
        target_concentration=65.0,
        hint="Keep adding sugar until no more dissolves.",
    ),
    Challenge(
        id=3,
        title="Perfect Mixture",
        description="Make a 15% alcohol solution.",
        target_solute=SoluteKind.ALCOHOL,
        target_concentration=15.0,
        hint="15ml of alcohol for every 100ml of total solution.",
    ),
)

# Solvent id -> display label. Solvents do not affect classification.
SOLVENTS: dict[str, str] = {
    "water": "Water (H2O)",
    "ethanol": "Ethanol",
}
DEFAULT_SOLVENT = "water"

TUTORIAL_CONCEPTS: tuple[tuple[str, str], ...] = (
    ("Solute", "the substance that dissolves"),
    ("Solvent", "the substance that does the dissolving (usually water)"),
    ("Solution", "the resulting homogeneous mixture"),
)

SOLUTION_TYPES_GUIDE: tuple[tuple[str, str], ...] = (
    ("Diluted", "little solute compared to the solvent"),
    ("Concentrated", "a lot of solute, but it still dissolves"),
    ("Saturated", "the solvent cannot dissolve any more solute"),
)


def validate_catalog(challenges: Sequence[Challenge]) -> None:
    """Validate that a catalog is non-empty, well-formed and ordered by id."""
    if not challenges:
        raise ValueError("Challenge catalog is empty.")

    seen: set[int] = set()
    previous_id = 0
    for challenge in challenges:
        if challenge.id <= 0:
            raise ValueError(f"Challenge id must be positive: {challenge.id}")
        if challenge.id in seen:
            raise ValueError(f"Duplicate challenge id: {challenge.id}")
        if challenge.id < previous_id:
            raise ValueError(f"Challenge {challenge.id} is out of order (after {previous_id}).")
        if challenge.target_solute is SoluteKind.NONE:
            raise ValueError(f"Challenge {challenge.id} has no target solute.")
        if not 0 <= challenge.target_concentration <= 100:
            raise ValueError(
                f"Challenge {challenge.id} target concentration {challenge.target_concentration} is outside 0-100."
            )
        if challenge.tolerance_band < 0:
            raise ValueError(f"Challenge {challenge.id} has a negative tolerance band.")
        seen.add(challenge.id)
        previous_id = challenge.id
