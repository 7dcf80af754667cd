"""CLI entrypoint for the virtual chemistry lab."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from .catalog import DEFAULT_SOLVENT, SOLUTION_TYPES_GUIDE, SOLVENTS, TUTORIAL_CONCEPTS
from .models import AllCompleted, Cue, ExperimentRecord, SoluteKind
from .service import SOLUTE_CHOICES, LabFeedback, LabService, parse_concentration, parse_solute, parse_solvent
from .tracker import CHALLENGE_REWARD

InputFn = Callable[[str], str]
PrintFn = Callable[[str], None]
MENU_QUIT_COMMANDS = {"q"}
MENU_BACK_COMMANDS = {"b"}
AVATAR_COUNT = 3
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

log = logging.getLogger(__name__)


class QuitApp(Exception):
    """Signal immediate app exit from nested menu flows."""


class Screen(Enum):
    """Which view the shell is showing."""

    START = "start"
    TUTORIAL = "tutorial"
    LAB = "lab"
    FREE_PLAY = "free-play"
    CHALLENGES = "challenges"


@dataclass
class LabSession:
    """Presentation state: who is playing and what is on the bench."""

    name: str = ""
    avatar: int = 1
    solute: SoluteKind = SoluteKind.NONE
    solvent: str = DEFAULT_SOLVENT
    concentration: float = 0.0


ScreenFn = Callable[[LabService, LabSession, InputFn, PrintFn], Screen]


def run(argv: list[str] | None = None) -> int:
    """Run the CLI application."""
    parser = argparse.ArgumentParser(prog="solutionlab", description="Virtual chemistry lab: mix solutions")
    parser.add_argument("command", nargs="?", default="play", choices=["play"])
    parser.add_argument("--no-sound", action="store_true", help="start with feedback cues disabled")
    parser.add_argument("--log-level", default="WARNING", choices=LOG_LEVELS, help="logging verbosity")
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")
    return play_shell(sound_enabled=not args.no_sound)


def play_shell(input_fn: InputFn = input, print_fn: PrintFn = print, sound_enabled: bool = True) -> int:
    """Run the screen-routing shell until the user quits."""
    service = LabService(sound_enabled=sound_enabled)
    session = LabSession()
    screens: dict[Screen, ScreenFn] = {
        Screen.START: _start_flow,
        Screen.TUTORIAL: _tutorial_flow,
        Screen.LAB: _lab_flow,
        Screen.FREE_PLAY: _free_play_flow,
        Screen.CHALLENGES: _challenges_flow,
    }
    screen = Screen.START
    try:
        while True:
            log.debug("Showing screen %s", screen.value)
            screen = screens[screen](service, session, input_fn, print_fn)
    except QuitApp:
        print_fn(f"\nGoodbye, {session.name or 'scientist'}! Final score: {service.score}")
        return 0


def _start_flow(service: LabService, session: LabSession, input_fn: InputFn, print_fn: PrintFn) -> Screen:
    """Welcome screen: pick a scientist name and avatar."""
    print_fn("\n=== Welcome, future Chemistry Master! ===")
    print_fn("You have been chosen to enter the most advanced lab in the universe.")
    print_fn("Here you will not only learn about solutions, you will make them yourself.")
    print_fn(f"Sound: {'on' if service.sound_enabled else 'off'}")

    while True:
        prompt = f"Scientist name [{session.name}]: " if session.name else "Scientist name: "
        name = input_fn(prompt).strip()
        if name.lower() in MENU_QUIT_COMMANDS:
            raise QuitApp()
        if name:
            session.name = name
        if session.name:
            break
        print_fn("A name is required to start.")

    while True:
        choice = input_fn(f"Choose avatar 1-{AVATAR_COUNT} [{session.avatar}]: ").strip().lower()
        if choice in MENU_QUIT_COMMANDS:
            raise QuitApp()
        if not choice:
            break
        if choice.isdigit() and 1 <= int(choice) <= AVATAR_COUNT:
            session.avatar = int(choice)
            break
        print_fn("Invalid avatar.")

    print_fn(f"Let's begin the adventure, {session.name}!")
    return Screen.LAB


def _tutorial_flow(service: LabService, session: LabSession, input_fn: InputFn, print_fn: PrintFn) -> Screen:
    """Explain the basic concepts and offer a live classification preview."""
    print_fn("\n=== Interactive Tutorial ===")
    print_fn("Basic concepts:")
    for term, meaning in TUTORIAL_CONCEPTS:
        print_fn(f"- {term}: {meaning}")
    print_fn("Solute + Solvent = Solution")
    print_fn("\nTypes of solutions:")
    for term, meaning in SOLUTION_TYPES_GUIDE:
        print_fn(f"- {term}: {meaning}")

    while True:
        print_fn("\n1) Try a concentration")
        print_fn("2) Go to the virtual lab")
        print_fn("b) Back to start")
        print_fn("q) Quit")
        choice = input_fn("Choose: ").strip().lower()
        if choice in MENU_QUIT_COMMANDS:
            raise QuitApp()
        if choice in MENU_BACK_COMMANDS:
            return Screen.START
        if choice == "2":
            return Screen.LAB
        if choice == "1":
            # Preview falls back to salt until a solute is picked in the lab.
            solute = session.solute if session.solute is not SoluteKind.NONE else SoluteKind.SALT
            concentration = _ask_concentration(input_fn, print_fn)
            if concentration is None:
                continue
            session.concentration = concentration
            classification = service.preview(solute, concentration)
            print_fn(f"{solute.label} at {_format_pct(concentration)}%: {classification.value}")
        else:
            print_fn("Invalid choice.")


def _lab_flow(service: LabService, session: LabSession, input_fn: InputFn, print_fn: PrintFn) -> Screen:
    """Main lab: mix solutions to complete challenges."""
    while True:
        print_fn("\n=== Virtual Lab ===")
        print_fn(f"Scientist: {session.name} (avatar {session.avatar})  Score: {service.score}")
        _print_active_challenge(service, print_fn)
        _print_bench(service, session, print_fn)
        print_fn("1) Choose solute")
        print_fn("2) Choose solvent")
        print_fn("3) Set concentration")
        print_fn("4) Create solution")
        print_fn("5) Experiment history")
        print_fn("6) Challenges")
        print_fn("7) Free experimentation")
        print_fn("8) Tutorial")
        print_fn("s) Sound on/off")
        print_fn("b) Back to start")
        print_fn("q) Quit")
        choice = input_fn("Choose: ").strip().lower()

        if choice in MENU_QUIT_COMMANDS:
            raise QuitApp()
        if choice in MENU_BACK_COMMANDS:
            return Screen.START
        if choice == "1":
            _choose_solute(session, input_fn, print_fn)
        elif choice == "2":
            _choose_solvent(session, input_fn, print_fn)
        elif choice == "3":
            concentration = _ask_concentration(input_fn, print_fn)
            if concentration is not None:
                session.concentration = concentration
        elif choice == "4":
            _create_solution(service, session, print_fn)
        elif choice == "5":
            _history_flow(service, print_fn)
        elif choice == "6":
            return Screen.CHALLENGES
        elif choice == "7":
            return Screen.FREE_PLAY
        elif choice == "8":
            return Screen.TUTORIAL
        elif choice == "s":
            enabled = service.toggle_sound()
            print_fn(f"Sound {'on' if enabled else 'off'}.")
        else:
            print_fn("Invalid choice.")


def _free_play_flow(service: LabService, session: LabSession, input_fn: InputFn, print_fn: PrintFn) -> Screen:
    """Free experimentation without the challenge panel."""
    print_fn("\n=== Free Experimentation ===")
    print_fn("Experiment freely with different solutes and concentrations.")
    while True:
        _print_bench(service, session, print_fn)
        print_fn("1) Choose solute")
        print_fn("2) Set concentration")
        print_fn("3) Run experiment")
        print_fn("b) Back to lab")
        print_fn("q) Quit")
        choice = input_fn("Choose: ").strip().lower()
        if choice in MENU_QUIT_COMMANDS:
            raise QuitApp()
        if choice in MENU_BACK_COMMANDS:
            return Screen.LAB
        if choice == "1":
            _choose_solute(session, input_fn, print_fn)
        elif choice == "2":
            concentration = _ask_concentration(input_fn, print_fn)
            if concentration is not None:
                session.concentration = concentration
        elif choice == "3":
            _create_solution(service, session, print_fn)
        else:
            print_fn("Invalid choice.")


def _challenges_flow(service: LabService, session: LabSession, input_fn: InputFn, print_fn: PrintFn) -> Screen:
    """Show every challenge with its completed/active/locked state."""
    print_fn("\n=== Chemistry Challenges ===")
    for status in service.challenge_board():
        challenge = status.challenge
        print_fn(f"{challenge.id}) {challenge.title} [{status.state.value}]")
        print_fn(f"   {challenge.description}")
        print_fn(
            f"   Target: {challenge.target_solute.label} at {_format_pct(challenge.target_concentration)}%"
            f" (+/-{_format_pct(challenge.tolerance_band)})"
        )
    if isinstance(service.current_challenge(), AllCompleted):
        print_fn(f"You completed every challenge, {session.name}! Final score: {service.score}")

    while True:
        print_fn("b) Back to lab")
        print_fn("q) Quit")
        choice = input_fn("Choose: ").strip().lower()
        if choice in MENU_QUIT_COMMANDS:
            raise QuitApp()
        if choice in MENU_BACK_COMMANDS:
            return Screen.LAB
        print_fn("Invalid choice.")


def _history_flow(service: LabService, print_fn: PrintFn) -> None:
    """Print experiment history, newest first."""
    records = service.history(newest_first=True)
    print_fn("\n=== Experiment History ===")
    if not records:
        print_fn("No experiments yet. Create your first solution!")
        return
    for record in records:
        print_fn(_format_record(record))


def _choose_solute(session: LabSession, input_fn: InputFn, print_fn: PrintFn) -> None:
    print_fn("Solutes:")
    for idx, solute in enumerate(SOLUTE_CHOICES, start=1):
        print_fn(f"{idx}) {solute.label} ({solute.formula})")
    session.solute = parse_solute(input_fn("Choose solute: "))
    if session.solute is SoluteKind.NONE:
        print_fn("No solute selected.")


def _choose_solvent(session: LabSession, input_fn: InputFn, print_fn: PrintFn) -> None:
    print_fn("Solvents:")
    for idx, label in enumerate(SOLVENTS.values(), start=1):
        print_fn(f"{idx}) {label}")
    session.solvent = parse_solvent(input_fn("Choose solvent: "))


def _ask_concentration(input_fn: InputFn, print_fn: PrintFn) -> float | None:
    """Read one concentration; returns None after reporting invalid input."""
    text = input_fn("Concentration (0-100%): ")
    try:
        return parse_concentration(text)
    except ValueError:
        print_fn("Invalid concentration.")
        return None


def _create_solution(service: LabService, session: LabSession, print_fn: PrintFn) -> None:
    """Commit the bench mixture and report the outcome."""
    feedback = service.create_solution(session.solute, session.solvent, session.concentration)
    _play_cues(feedback, print_fn)
    if feedback.result is None:
        print_fn(feedback.error or "Could not create solution.")
        return

    result = feedback.result
    print_fn(
        f"Created {session.solute.label} at {_format_pct(session.concentration)}% "
        f"in {session.solvent}: {result.classification.value}"
    )
    if result.advanced and result.completed_challenge is not None:
        print_fn(
            f"Challenge complete: {result.completed_challenge.title}! "
            f"+{CHALLENGE_REWARD} points (score {result.new_score})"
        )
        if isinstance(service.current_challenge(), AllCompleted):
            print_fn("Congratulations! You completed every challenge.")


def _play_cues(feedback: LabFeedback, print_fn: PrintFn) -> None:
    for cue in feedback.cues:
        print_fn(_CUE_TEXT[cue])


_CUE_TEXT = {
    Cue.SUCCESS: "*ding*",
    Cue.ERROR: "*buzz*",
    Cue.POUR: "*glug glug*",
}


def _print_active_challenge(service: LabService, print_fn: PrintFn) -> None:
    current = service.current_challenge()
    if isinstance(current, AllCompleted):
        print_fn("Level: finished")
        print_fn("All challenges completed!")
        return
    tracker = service.tracker
    print_fn(f"Level: {tracker.active_index}/{len(tracker.catalog)}")
    print_fn(f"Challenge {current.id}: {current.title}")
    print_fn(f"  {current.description}")
    print_fn(f"  Hint: {current.hint}")


def _print_bench(service: LabService, session: LabSession, print_fn: PrintFn) -> None:
    if session.solute is SoluteKind.NONE:
        print_fn(f"Bench: pick a solute to begin ({_format_pct(session.concentration)}% set)")
        return
    preview = service.preview(session.solute, session.concentration)
    print_fn(
        f"Bench: {session.solute.label} at {_format_pct(session.concentration)}% "
        f"in {SOLVENTS.get(session.solvent, session.solvent)} -> {preview.value}"
    )


def _format_record(record: ExperimentRecord) -> str:
    mixture = record.mixture
    stamp = record.timestamp.astimezone().strftime("%H:%M:%S")
    return (
        f"{mixture.solute.label} {_format_pct(mixture.concentration)}% in {mixture.solvent}"
        f" - {record.classification.value} - {stamp}"
    )


def _format_pct(value: float) -> str:
    return f"{value:g}"


def main_entry() -> None:
    """Console script entrypoint."""
    raise SystemExit(run())


if __name__ == "__main__":  # pragma: no cover
    main_entry()
