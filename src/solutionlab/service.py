"""Application service for the virtual chemistry lab."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass

from .catalog import CHALLENGES, DEFAULT_SOLVENT, SOLVENTS
from .classifier import classify
from .models import (
    AllCompleted,
    Challenge,
    ChallengeStatus,
    Classification,
    Cue,
    ExperimentRecord,
    ExperimentResult,
    Mixture,
    SoluteKind,
)
from .tracker import ChallengeTracker, Clock, InvalidMixture, utc_now

log = logging.getLogger(__name__)

SOLUTE_CHOICES: tuple[SoluteKind, ...] = (SoluteKind.SALT, SoluteKind.SUGAR, SoluteKind.ALCOHOL)
_SOLUTE_ALIASES = {
    "nacl": SoluteKind.SALT,
    "sucrose": SoluteKind.SUGAR,
}


@dataclass(frozen=True)
class LabFeedback:
    """Result of pressing "create solution", with the cues to play."""

    mixture: Mixture
    result: ExperimentResult | None
    cues: tuple[Cue, ...]
    error: str | None = None


class LabService:
    """Coordinates input handling, the tracker and feedback cues."""

    def __init__(
        self,
        challenges: Iterable[Challenge] = CHALLENGES,
        sound_enabled: bool = True,
        clock: Clock = utc_now,
    ) -> None:
        """Initialize service with a fresh tracker."""
        self.tracker = ChallengeTracker(challenges, clock=clock)
        self.sound_enabled = sound_enabled

    def toggle_sound(self) -> bool:
        """Flip feedback cues on/off and return the new setting."""
        self.sound_enabled = not self.sound_enabled
        return self.sound_enabled

    def preview(self, solute: SoluteKind, concentration: float) -> Classification:
        """Classify without recording anything."""
        return classify(solute, concentration)

    def create_solution(self, solute: SoluteKind, solvent: str, concentration: float) -> LabFeedback:
        """Commit one experiment and pick the feedback cues for it."""
        mixture = Mixture(solute=solute, solvent=solvent, concentration=concentration)
        try:
            result = self.tracker.record_experiment(mixture)
        except InvalidMixture as exc:
            return LabFeedback(mixture=mixture, result=None, cues=self._cues(Cue.ERROR), error=str(exc))

        if result.advanced:
            cues = self._cues(Cue.SUCCESS, Cue.POUR)
        else:
            cues = self._cues(Cue.POUR)
        return LabFeedback(mixture=mixture, result=result, cues=cues)

    def current_challenge(self) -> Challenge | AllCompleted:
        """Return the active challenge or the completed sentinel."""
        return self.tracker.current_challenge()

    def challenge_board(self) -> list[ChallengeStatus]:
        """Return challenge rows for the board view."""
        return self.tracker.challenge_statuses()

    def history(self, newest_first: bool = True) -> list[ExperimentRecord]:
        """Return experiment history ordered for display."""
        records = list(self.tracker.history)
        if newest_first:
            records.reverse()
        return records

    @property
    def score(self) -> int:
        return self.tracker.score

    def _cues(self, *cues: Cue) -> tuple[Cue, ...]:
        if not self.sound_enabled:
            return ()
        return cues


def parse_concentration(text: str) -> float:
    """Parse a concentration percentage and clamp it to [0, 100]."""
    stripped = text.strip().rstrip("%").strip()
    try:
        value = float(stripped)
    except ValueError:
        raise ValueError(f"Not a number: {text!r}") from None
    if not math.isfinite(value):
        raise ValueError(f"Concentration must be finite: {text!r}")
    clamped = max(0.0, min(100.0, value))
    if clamped != value:
        log.debug("Clamped concentration %s to %s", value, clamped)
    return clamped


def parse_solute(text: str) -> SoluteKind:
    """Map menu input (number, name or alias) to a solute; unknown input means no solute."""
    lowered = text.strip().lower()
    if not lowered:
        return SoluteKind.NONE
    if lowered.isdigit():
        index = int(lowered) - 1
        if 0 <= index < len(SOLUTE_CHOICES):
            return SOLUTE_CHOICES[index]
        return SoluteKind.NONE
    for solute in SOLUTE_CHOICES:
        if lowered in {solute.value, solute.label.lower()}:
            return solute
    return _SOLUTE_ALIASES.get(lowered, SoluteKind.NONE)


def parse_solvent(text: str) -> str:
    """Map menu input (number or id) to a solvent id, defaulting to water."""
    lowered = text.strip().lower()
    solvent_ids = list(SOLVENTS)
    if lowered.isdigit():
        index = int(lowered) - 1
        if 0 <= index < len(solvent_ids):
            return solvent_ids[index]
        return DEFAULT_SOLVENT
    if lowered in SOLVENTS:
        return lowered
    return DEFAULT_SOLVENT
