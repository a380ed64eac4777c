"""Read-only formatting of workouts for the list and map labels."""

from __future__ import annotations

from mapty.workout.model import Workout

RUNNING_ICON = "🏃‍♂️"
CYCLING_ICON = "🚴‍♀️"

DetailRow = tuple[str, str, str]


def workout_icon(kind: str) -> str:
    return RUNNING_ICON if kind == "running" else CYCLING_ICON


def marker_label(workout: Workout) -> str:
    return f"{workout_icon(workout.kind)} {workout.description}"


def _fmt_value(value: float) -> str:
    # Whole numbers print without a trailing ".0", like the form shows them.
    return str(int(value)) if float(value).is_integer() else f"{value:g}"


def _fmt_rate(value: float | None) -> str:
    return f"{value:.1f}" if value is not None else "--"


def detail_rows(workout: Workout) -> list[DetailRow]:
    rows: list[DetailRow] = [
        (workout_icon(workout.kind), _fmt_value(workout.distance), "km"),
        ("⏱", _fmt_value(workout.duration), "min"),
    ]
    if workout.kind == "running":
        rows.append(("⚡️", _fmt_rate(workout.pace), "min/km"))
        rows.append(("🦶🏼", _fmt_value(workout.cadence or 0.0), "spm"))
    else:
        rows.append(("⚡️", _fmt_rate(workout.speed), "km/h"))
        rows.append(("⛰", _fmt_value(workout.elevation_gain or 0.0), "m"))
    return rows


def summary_line(workout: Workout) -> str:
    details = "  ".join(f"{value} {unit}" for _, value, unit in detail_rows(workout))
    return f"{workout.id}  {workout.description:<22} {details}  clicks={workout.clicks}"
