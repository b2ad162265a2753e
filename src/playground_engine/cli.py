# Area: Shared
"""
playground_engine.cli — Command-line interface
==============================================

Terminal front end for the engine: play the demo quiz or a quiz file,
play the mini-games against the built-in opponents, and print standings
or player progress from stored session snapshots.

Usage:
    python -m playground_engine quiz                          # Demo quiz
    python -m playground_engine quiz --file quiz.json         # Quiz from file
    python -m playground_engine rps --rounds 5 --seed 7       # Rock-paper-scissors
    python -m playground_engine grid --difficulty hard        # Grid game
    python -m playground_engine leaderboard --sessions s.json --period weekly
    python -m playground_engine progress --sessions s.json

Settings come from --config (JSON), then PLAYGROUND_* environment
variables (a .env file is honoured).
"""

import argparse
import json
import random
import sys
from pathlib import Path
from typing import Any, Callable, List, Optional, Sequence

from pydantic import ValidationError

from ._quiz.flow import QuizFlow
from ._quiz.models import Quiz
from ._opponents.choice_opponent import ALL_CHOICES, Choice, ChoiceOpponent
from ._opponents.grid_opponent import GridOpponent
from ._rounds.history import RoundHistory
from ._rounds.matches import ChoiceMatch, GridMatch
from ._leaderboard.periods import Period
from ._leaderboard.progress import build_progress
from ._leaderboard.standings import build_leaderboard, paginate
from ._session.models import Challenge
from ._session.snapshot import load_session_snapshot
from ._shared.config import EngineSettings, load_settings
from ._shared.logging_config import log_engine_error, setup_logging
from ._shared.timers import TimerScheduler
from .demo_services import InMemoryPersistence, demo_challenges, demo_quiz
from .errors import EngineError

CHOICE_KEYS = {
    "r": Choice.ROCK,
    "p": Choice.PAPER,
    "s": Choice.SCISSORS,
    "rock": Choice.ROCK,
    "paper": Choice.PAPER,
    "scissors": Choice.SCISSORS,
}

Prompt = Callable[[str], str]


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="playground-engine",
        description="Playground engine - quizzes, challenges and mini-games",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  playground-engine quiz
  playground-engine rps --rounds 10
  playground-engine grid --difficulty easy --seed 3
  playground-engine leaderboard --sessions sessions.json --period monthly
  PLAYGROUND_CHOICE_COUNTER_PROBABILITY=1.0 playground-engine rps
        """,
    )
    parser.add_argument("--config", type=str, help="Path to JSON config file")
    parser.add_argument("--log-file", type=str, help="Path to the JSON-lines log file")
    parser.add_argument(
        "--log-level",
        type=str,
        help="Override the configured log level (DEBUG, INFO, WARNING, ...)",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    quiz = sub.add_parser("quiz", help="Take a quiz in the terminal")
    quiz.add_argument(
        "--file", type=str,
        help="Quiz JSON file (default: built-in demo quiz); time_limit values are "
             "checked when each answer is entered",
    )

    rps = sub.add_parser("rps", help="Play rock-paper-scissors against the adaptive opponent")
    rps.add_argument("--rounds", type=int, default=5, help="Number of rounds (default: 5)")
    rps.add_argument("--seed", type=int, help="Seed for the opponent's random source")

    grid = sub.add_parser("grid", help="Play the 3x3 grid game against the heuristic opponent")
    grid.add_argument("--difficulty", choices=["easy", "hard"], default="easy")
    grid.add_argument("--games", type=int, default=1, help="Number of games (default: 1)")
    grid.add_argument("--seed", type=int, help="Seed for the opponent's random source")

    board = sub.add_parser("leaderboard", help="Print standings from session snapshots")
    board.add_argument("--sessions", type=str, required=True, help="JSON list of session snapshots")
    board.add_argument(
        "--period",
        choices=[p.value for p in Period],
        default=Period.WEEKLY.value,
    )
    board.add_argument("--page", type=int, default=1)
    board.add_argument("--names", type=str, help="JSON object mapping user ids to display names")

    progress = sub.add_parser("progress", help="Print per-player progress from session snapshots")
    progress.add_argument("--sessions", type=str, required=True, help="JSON list of session snapshots")
    progress.add_argument("--catalog", type=str, help="JSON list of challenges (default: demo set)")
    progress.add_argument("--user", type=str, help="Only print this user")

    return parser.parse_args(argv)


def _read_json(path: str) -> Any:
    with open(Path(path), encoding="utf-8") as f:
        return json.load(f)


def _load_sessions(path: str):
    return [load_session_snapshot(item) for item in _read_json(path)]


# ── Commands ──────────────────────────────────────────────────


def run_quiz(quiz: Quiz, prompt: Prompt = input,
             timers: Optional[TimerScheduler] = None) -> int:
    """
    Take a quiz at the terminal.

    Time limits are checked each time an answer comes back: an answer
    typed after the question or quiz budget ran out is discarded and the
    quiz completes with the remaining questions unanswered.
    """
    store = InMemoryPersistence()
    if timers is None:
        timers = TimerScheduler()
    flow = QuizFlow(quiz, persistence=store, timers=timers)
    print(f"\n{quiz.title} ({len(quiz.questions)} questions)\n")

    while not flow.current_state.is_completed:
        state = flow.current_state
        question = flow.current_question
        limit = f" [{question.time_limit:g}s]" if question.time_limit else ""
        print(f"Q{state.question_index + 1}.{limit} {question.prompt}")
        for label, option in zip("abcdefgh", question.options):
            print(f"   {label}) {option}")
        try:
            answer = prompt("> ")
        except EOFError:
            flow.finish()
            break
        timers.poll()
        if flow.current_state.is_completed:
            print("   Time is up.")
            break
        if question.options and len(answer.strip()) == 1:
            # Accept the option letter as shorthand
            letter = "abcdefgh".find(answer.strip().lower())
            if 0 <= letter < len(question.options):
                answer = question.options[letter]

        record = flow.submit_answer(answer)
        print("   Correct!" if record.is_correct else f"   Incorrect. Answer: {question.correct_answer}")
        if question.explanation:
            print(f"   {question.explanation}")
        flow.advance()

    result = flow.result
    print(json.dumps(result.to_dict(), indent=2))
    print("PASSED" if flow.passed() else "NOT PASSED")
    return 0


def run_choice_game(settings: EngineSettings, rounds: int, seed: Optional[int] = None,
                    prompt: Prompt = input) -> int:
    opponent = ChoiceOpponent(
        window=settings.choice_window,
        counter_probability=settings.choice_counter_probability,
        rng=random.Random(seed),
    )
    match = ChoiceMatch(opponent, RoundHistory())
    options = "/".join(c.value for c in ALL_CHOICES)

    while len(match.history) < rounds:
        try:
            raw = prompt(f"[{options}] > ").strip().lower()
        except EOFError:
            break
        choice = CHOICE_KEYS.get(raw)
        if choice is None:
            print(f"Unknown choice '{raw}'")
            continue
        outcome = match.play(choice)
        print(f"You: {choice.value}  Opponent: {outcome.opponent_move.value}  → {outcome.result.value}")

    print(json.dumps(match.history.stats().to_dict(), indent=2))
    return 0


def _render_board(board: List[Optional[str]]) -> str:
    cells = [mark or str(i) for i, mark in enumerate(board)]
    rows = [" | ".join(cells[r * 3:r * 3 + 3]) for r in range(3)]
    return "\n---------\n".join(rows)


def run_grid_game(settings: EngineSettings, difficulty: str, games: int,
                  seed: Optional[int] = None, prompt: Prompt = input) -> int:
    rng = random.Random(seed)
    if difficulty == "easy":
        opponent = GridOpponent.easy(rng=rng, probability=settings.grid_random_move_probability)
    else:
        opponent = GridOpponent.hard(rng=rng)
    match = GridMatch(opponent, RoundHistory())

    while len(match.history) < games:
        print(_render_board(match.board))
        try:
            raw = prompt("cell > ").strip()
        except EOFError:
            break
        try:
            match.play(int(raw))
        except ValueError as e:
            print(f"Invalid move: {e}")
            continue
        if match.is_over:
            print(_render_board(match.board))
            print(f"Game over: {match.outcome.result.value}")
            match.reset()

    print(json.dumps(match.history.stats().to_dict(), indent=2))
    return 0


def show_leaderboard(settings: EngineSettings, sessions_path: str, period: str,
                     page: int, names_path: Optional[str] = None) -> int:
    sessions = _load_sessions(sessions_path)
    names = _read_json(names_path) if names_path else None
    entries = build_leaderboard(sessions, period, display_names=names)
    result = paginate(entries, page=page, page_size=settings.leaderboard_page_size, period=period)
    print(json.dumps(result.to_dict(), indent=2))
    return 0


def show_progress(sessions_path: str, catalog_path: Optional[str] = None,
                  user: Optional[str] = None) -> int:
    sessions = _load_sessions(sessions_path)
    if catalog_path:
        catalog = [Challenge.from_dict(c) for c in _read_json(catalog_path)]
    else:
        catalog = demo_challenges()
    progress = build_progress(sessions, catalog)
    if user is not None:
        progress = {k: v for k, v in progress.items() if k == user}
    print(json.dumps([p.to_dict() for p in progress.values()], indent=2))
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main CLI entry point."""
    args = parse_args(argv)

    try:
        settings = load_settings(args.config)
    except (ValidationError, json.JSONDecodeError) as e:
        print(f"Error: Invalid configuration: {e}", file=sys.stderr)
        return 1

    level = settings.log_level_value
    if args.log_level:
        try:
            level = EngineSettings(log_level=args.log_level).log_level_value
        except ValidationError:
            print(f"Error: Unknown log level: {args.log_level}", file=sys.stderr)
            return 1
    setup_logging(args.log_file or settings.log_file, level)

    try:
        if args.command == "quiz":
            quiz = Quiz.from_dict(_read_json(args.file)) if args.file else demo_quiz()
            return run_quiz(quiz)
        if args.command == "rps":
            return run_choice_game(settings, args.rounds, args.seed)
        if args.command == "grid":
            return run_grid_game(settings, args.difficulty, args.games, args.seed)
        if args.command == "leaderboard":
            return show_leaderboard(settings, args.sessions, args.period, args.page, args.names)
        if args.command == "progress":
            return show_progress(args.sessions, args.catalog, args.user)
    except EngineError as e:
        log_engine_error(e)
        return 1
    except (OSError, json.JSONDecodeError, KeyError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 1
