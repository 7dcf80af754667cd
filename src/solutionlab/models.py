"""Core domain models for solution mixing and challenge progress."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class SoluteKind(Enum):
    """Substance that can be dissolved in the lab."""

    NONE = "none"
    SALT = "salt"
    SUGAR = "sugar"
    ALCOHOL = "alcohol"

    @property
    def label(self) -> str:
        return _SOLUTE_LABELS[self]

    @property
    def formula(self) -> str:
        return _SOLUTE_FORMULAS[self]


_SOLUTE_LABELS = {
    SoluteKind.NONE: "No solute",
    SoluteKind.SALT: "Salt",
    SoluteKind.SUGAR: "Sugar",
    SoluteKind.ALCOHOL: "Alcohol",
}

_SOLUTE_FORMULAS = {
    SoluteKind.NONE: "",
    SoluteKind.SALT: "NaCl",
    SoluteKind.SUGAR: "C12H22O11",
    SoluteKind.ALCOHOL: "C2H5OH",
}


class Classification(Enum):
    """Kind of solution produced by a mixture."""

    NO_SOLUTE = "no solute"
    DILUTED = "diluted"
    CONCENTRATED = "concentrated"
    SATURATED = "saturated"


class ChallengeState(Enum):
    """Where a challenge stands on the board."""

    COMPLETED = "completed"
    ACTIVE = "active"
    LOCKED = "locked"


class Cue(Enum):
    """Feedback signal the presentation layer may play or show."""

    SUCCESS = "success"
    ERROR = "error"
    POUR = "pour"


@dataclass(frozen=True)
class Mixture:
    """Solute dissolved in a solvent at a concentration percentage.

    ``concentration`` must already be clamped to [0, 100] by whatever
    collected it.
    """

    solute: SoluteKind
    solvent: str
    concentration: float


@dataclass(frozen=True)
class Challenge:
    """One target mixture the learner must reproduce."""

    id: int
    title: str
    description: str
    target_solute: SoluteKind
    target_concentration: float
    hint: str
    tolerance_band: float = 2.0

    def matches(self, mixture: Mixture) -> bool:
        """Return whether a mixture hits this target within the inclusive tolerance."""
        if mixture.solute is not self.target_solute:
            return False
        return abs(mixture.concentration - self.target_concentration) <= self.tolerance_band


@dataclass(frozen=True)
class AllCompleted:
    """Sentinel returned once every challenge has been completed."""


COMPLETED = AllCompleted()


@dataclass(frozen=True)
class ExperimentRecord:
    """One logged experiment."""

    mixture: Mixture
    classification: Classification
    timestamp: datetime


@dataclass(frozen=True)
class ExperimentResult:
    """Outcome of committing one experiment."""

    classification: Classification
    advanced: bool
    new_score: int
    completed_challenge: Challenge | None = None


@dataclass(frozen=True)
class ChallengeStatus:
    """Challenge board row."""

    challenge: Challenge
    state: ChallengeState
