from dataclasses import dataclass
from typing import List

import pandas as pd


@dataclass(frozen=True)
class ReportRow:
    score: int
    total_elapsed_time: float
    occurrence_count: int


def _results_frame(results):
    return pd.DataFrame({
        "score": [int(r.score) for r in results],
        "elapsed_time": [float(r.elapsed_time) for r in results],
    })


def AggregateResults(results) -> List[ReportRow]:
    """
    Group iteration results by score.

    Returns one ReportRow per distinct score, ascending, holding the summed
    elapsed time and the number of iterations that produced that score.
    """
    df = _results_frame(results)
    if df.empty:
        return []

    grouped = (
        df.groupby("score", sort=True)["elapsed_time"]
        .agg(total_elapsed_time="sum", occurrence_count="size")
        .reset_index()
    )
    return [
        ReportRow(
            score=int(row.score),
            total_elapsed_time=float(row.total_elapsed_time),
            occurrence_count=int(row.occurrence_count),
        )
        for row in grouped.itertuples(index=False)
    ]


def TotalElapsedTime(results) -> float:
    return float(_results_frame(results)["elapsed_time"].sum())


def FormatReport(iteration_count, dice_count, rows, total_elapsed_time):
    lines = [f"\nNumber of Simulations was {iteration_count} using {dice_count} dice\n"]
    for row in rows:
        lines.append(
            f"\tTotal {row.score} occurs {row.total_elapsed_time:.4f} occurred {row.occurrence_count} times"
        )
    lines.append(f"\nTotal Simulation took {total_elapsed_time:.4f} seconds\n")
    return "\n".join(lines)


def PrintReport(iteration_count, dice_count, rows, total_elapsed_time):
    print(FormatReport(iteration_count, dice_count, rows, total_elapsed_time))
