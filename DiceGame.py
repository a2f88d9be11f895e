import argparse
import sys
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional

import numpy as np

from DiceReport import AggregateResults, PrintReport, ReportRow, TotalElapsedTime

# Promote numpy warnings (like overflow) to exceptions to halt execution
np.seterr(all='raise')

## --- CONFIGURATION ---
debug = False

DIE_SIDES = 6
IGNORED_VALUE = 3  # rolled value that removes the die without scoring

DEFAULT_DICE_COUNT = 5
DEFAULT_ITERATION_COUNT = 10_000


class InvalidConfiguration(ValueError):
    """Raised when the dice count or iteration count is below one."""


def _is_integer(value):
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool)


@dataclass(frozen=True)
class GameConfig:
    iteration_count: int = DEFAULT_ITERATION_COUNT
    dice_count: int = DEFAULT_DICE_COUNT

    def validate(self):
        if not _is_integer(self.dice_count) or self.dice_count <= 0:
            raise InvalidConfiguration("Minimum No of Dice Should be 1")
        if not _is_integer(self.iteration_count) or self.iteration_count <= 0:
            raise InvalidConfiguration("Minimum No of Iteration Should be 1")
        return self


@dataclass(frozen=True)
class IterationResult:
    score: int
    elapsed_time: float


@dataclass(frozen=True)
class SimulationSummary:
    config: GameConfig
    rows: List[ReportRow] = field(default_factory=list)
    total_elapsed_time: float = 0.0


## --- HELPERS ---

def RollDice(count, rng=None):
    """Roll `count` fair dice and return them as a NumPy array."""
    generator = rng if rng is not None else np.random.default_rng()
    return generator.integers(1, DIE_SIDES + 1, size=count, dtype=np.int8)


def _roll_round(count, generator, roll_die):
    if roll_die is None:
        return RollDice(count, generator)
    return np.fromiter((roll_die() for _ in range(count)), dtype=np.int8, count=count)


## --- MAIN GAMEPLAY ---

def ScoreTrial(dice_count: int, rng=None, roll_die: Optional[Callable[[], int]] = None) -> int:
    """
    Plays one trial and returns its score.

    Each round rolls every die still in play. If any die shows IGNORED_VALUE,
    those dice leave play and the round scores nothing. Otherwise the lowest
    die leaves play and its value is added to the score. Every round removes
    at least one die, so a trial lasts at most `dice_count` rounds.

    Args:
        dice_count: Dice in play at the start of the trial.
        rng: NumPy Generator used when `roll_die` is not given.
        roll_die: Optional zero-argument callable returning a face in 1..DIE_SIDES.
    """
    if not _is_integer(dice_count) or dice_count <= 0:
        raise InvalidConfiguration("Minimum No of Dice Should be 1")

    generator = rng if rng is not None or roll_die is not None else np.random.default_rng()
    return _play_trial(dice_count, generator, roll_die)


def _play_trial(dice_count, generator, roll_die):
    # dice_count is already validated
    remaining = int(dice_count)
    total_score = 0
    round_no = 1

    while remaining > 0:
        dice = _roll_round(remaining, generator, roll_die)
        ignored = int(np.count_nonzero(dice == IGNORED_VALUE))
        lowest = int(dice.min())

        if ignored > 0:
            remaining -= ignored
        else:
            remaining -= 1
            total_score += lowest

        if debug:
            print(f"Round {round_no} | {dice.tolist()} | ignored {ignored} | score {total_score} | left {remaining}")
        round_no += 1

    return total_score


def RunTrials(config: GameConfig, rng=None, roll_die=None) -> List[IterationResult]:
    config.validate()
    generator = rng if rng is not None or roll_die is not None else np.random.default_rng()

    results = []
    for _ in range(config.iteration_count):
        start = time.perf_counter()
        score = _play_trial(config.dice_count, generator, roll_die)
        elapsed = time.perf_counter() - start
        results.append(IterationResult(score=score, elapsed_time=elapsed))
    return results


def SimulateGame(config=None, rng=None, roll_die=None, show_report=True) -> SimulationSummary:
    config = (config if config is not None else GameConfig()).validate()

    results = RunTrials(config, rng=rng, roll_die=roll_die)
    rows = AggregateResults(results)
    total_elapsed = TotalElapsedTime(results)

    if show_report:
        PrintReport(config.iteration_count, config.dice_count, rows, total_elapsed)

    return SimulationSummary(config=config, rows=rows, total_elapsed_time=total_elapsed)


## --- CLI ---

def _parse_int(value):
    try:
        return int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Expected an integer, got {value!r}") from exc


def _build_argument_parser():
    parser = argparse.ArgumentParser(
        description="Simulate the minimum-die scoring game and report how often each total occurs."
    )
    parser.add_argument(
        "--dice-count",
        type=_parse_int,
        default=DEFAULT_DICE_COUNT,
        help=f"Dice rolled at the start of each game (default: {DEFAULT_DICE_COUNT}).",
    )
    parser.add_argument(
        "--iterations",
        type=_parse_int,
        default=DEFAULT_ITERATION_COUNT,
        help=f"Number of games to simulate (default: {DEFAULT_ITERATION_COUNT:,}).",
    )
    return parser


def main(argv=None):
    cli_args = _build_argument_parser().parse_args(argv)
    config = GameConfig(iteration_count=cli_args.iterations, dice_count=cli_args.dice_count)
    try:
        SimulateGame(config)
    except InvalidConfiguration as exc:
        sys.exit(f"Error: {exc}")


if __name__ == "__main__":
    main()
