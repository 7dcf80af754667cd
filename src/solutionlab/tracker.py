"""Challenge progression and experiment log."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import UTC, datetime

from .catalog import CHALLENGES, validate_catalog
from .classifier import classify
from .models import (
    COMPLETED,
    AllCompleted,
    Challenge,
    ChallengeState,
    ChallengeStatus,
    ExperimentRecord,
    ExperimentResult,
    Mixture,
    SoluteKind,
)

log = logging.getLogger(__name__)

CHALLENGE_REWARD = 100

Clock = Callable[[], datetime]


class InvalidMixture(ValueError):
    """Raised when an experiment is committed without a solute."""


def utc_now() -> datetime:
    return datetime.now(UTC)


class ChallengeTracker:
    """Sequences challenges and owns score and experiment history.

    Challenges must be completed in catalog order. ``active_index`` is
    1-based; once it passes the end of the catalog every challenge is
    completed and the tracker keeps logging experiments without scoring.

    Not thread-safe: callers in a concurrent setting must route every call
    through a single owner.
    """

    def __init__(self, challenges: Iterable[Challenge] = CHALLENGES, clock: Clock = utc_now) -> None:
        """Initialize tracker at the first challenge."""
        self._catalog = tuple(challenges)
        validate_catalog(self._catalog)
        self._clock = clock
        self._active_index = 1
        self._score = 0
        self._history: list[ExperimentRecord] = []

    @property
    def catalog(self) -> tuple[Challenge, ...]:
        return self._catalog

    @property
    def active_index(self) -> int:
        return self._active_index

    @property
    def score(self) -> int:
        return self._score

    @property
    def is_completed(self) -> bool:
        return self._active_index > len(self._catalog)

    @property
    def history(self) -> tuple[ExperimentRecord, ...]:
        """Experiments in the order they were recorded."""
        return tuple(self._history)

    def current_challenge(self) -> Challenge | AllCompleted:
        """Return the active challenge, or ``COMPLETED`` after the last one."""
        if self.is_completed:
            return COMPLETED
        return self._catalog[self._active_index - 1]

    def record_experiment(self, mixture: Mixture) -> ExperimentResult:
        """Log one experiment and advance when it matches the active challenge."""
        if mixture.solute is None or mixture.solute is SoluteKind.NONE:
            log.debug("Rejected experiment without solute (solvent=%s)", mixture.solvent)
            raise InvalidMixture("Select a solute before creating a solution.")

        classification = classify(mixture.solute, mixture.concentration)
        self._history.append(ExperimentRecord(mixture=mixture, classification=classification, timestamp=self._clock()))

        current = self.current_challenge()
        if isinstance(current, AllCompleted) or not current.matches(mixture):
            return ExperimentResult(classification=classification, advanced=False, new_score=self._score)

        self._score += CHALLENGE_REWARD
        self._active_index += 1
        log.info("Challenge %s completed, score %s", current.id, self._score)
        if self.is_completed:
            log.info("All %s challenges completed", len(self._catalog))
        return ExperimentResult(
            classification=classification,
            advanced=True,
            new_score=self._score,
            completed_challenge=current,
        )

    def challenge_statuses(self) -> list[ChallengeStatus]:
        """Return completed/active/locked state for each challenge."""
        statuses: list[ChallengeStatus] = []
        for index, challenge in enumerate(self._catalog, start=1):
            if index < self._active_index:
                state = ChallengeState.COMPLETED
            elif index == self._active_index:
                state = ChallengeState.ACTIVE
            else:
                state = ChallengeState.LOCKED
            statuses.append(ChallengeStatus(challenge=challenge, state=state))
        return statuses
