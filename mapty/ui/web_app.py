"""NiceGUI web UI for Mapty."""

from __future__ import annotations

from pathlib import Path

from nicegui import ui

from mapty.core.context import MaptyContext
from mapty.ui.presenter import detail_rows, marker_label, workout_icon
from mapty.workout.creation import InvalidInput
from mapty.workout.storage import FileStorage

GEOLOCATION_TIMEOUT_SEC = 15.0

# Resolves to [lat, lng] or null; denial is not an error for the log.
_GEOLOCATION_JS = """
new Promise((resolve) => {
  if (!navigator.geolocation) { resolve(null); return; }
  navigator.geolocation.getCurrentPosition(
    (pos) => resolve([pos.coords.latitude, pos.coords.longitude]),
    () => resolve(null),
  );
})
"""


def run_web_ui(
    *,
    data_dir: Path | None = None,
    host: str = "127.0.0.1",
    port: int = 8090,
) -> int:
    context = MaptyContext(FileStorage(data_dir))
    context.load()

    ui.add_head_html(
        """
        <style>
          body {
            background: #2d3439;
            color: #ececec;
            font-family: "Manrope", Arial, sans-serif;
          }
          .mp-card {
            background: #42484d;
            border-radius: 8px;
            border-left: 5px solid transparent;
          }
          .mp-running { border-left-color: #00c46a; }
          .mp-cycling { border-left-color: #ffb545; }
          .mp-unit { color: #aaa; font-size: 0.75rem; text-transform: uppercase; }
        </style>
        """
    )

    with ui.column().classes("w-full max-w-3xl mx-auto gap-3"):
        with ui.row().classes("w-full items-center justify-between"):
            ui.label("MAPTY").classes("text-xl font-semibold tracking-wide")
            status_label = ui.label("").classes("text-sm")

        with ui.card().classes("w-full mp-card"):
            with ui.row().classes("w-full items-end gap-2"):
                type_select = ui.select(
                    {"running": "Running", "cycling": "Cycling"},
                    value="running",
                    label="Type",
                )
                distance_input = ui.input("Distance", placeholder="km")
                duration_input = ui.input("Duration", placeholder="min")
                cadence_input = ui.input("Cadence", placeholder="step/min")
                elevation_input = ui.input("Elev Gain", placeholder="meters")
                elevation_input.set_visibility(False)
            with ui.row().classes("w-full items-end gap-2"):
                lat_input = ui.input("Latitude")
                lng_input = ui.input("Longitude")
                locate_btn = ui.button("Use my position").props("outline")
                submit_btn = ui.button("OK")
                reset_btn = ui.button("Reset").props("color=negative outline")

        workouts_column = ui.column().classes("w-full gap-2")

    def refresh_status() -> None:
        count = len(context.collection.workouts())
        saved = "" if context.last_save_ok else " | not saved, storage unavailable"
        status_label.text = f"{count} workout(s){saved}"

    def refresh_list() -> None:
        workouts_column.clear()
        with workouts_column:
            # Newest first, right under the form.
            for workout in reversed(context.collection.workouts()):
                with ui.card().classes(f"w-full mp-card mp-{workout.kind} cursor-pointer") as card:
                    ui.label(workout.description).classes("text-base font-semibold")
                    with ui.row().classes("gap-4"):
                        for icon, value, unit in detail_rows(workout):
                            with ui.row().classes("items-baseline gap-1"):
                                ui.label(icon)
                                ui.label(value).classes("font-medium")
                                ui.label(unit).classes("mp-unit")

                    def on_pick(picked_id: str = workout.id) -> None:
                        picked = context.select(picked_id)
                        if picked is None:
                            return
                        lat, lng = picked.coords
                        ui.notify(f"{marker_label(picked)} @ {lat:.4f}, {lng:.4f}")
                        refresh_status()

                    card.on("click", on_pick)
        refresh_status()

    def hide_form() -> None:
        distance_input.value = ""
        duration_input.value = ""
        cadence_input.value = ""
        elevation_input.value = ""

    def on_toggle_type() -> None:
        is_running = type_select.value == "running"
        cadence_input.set_visibility(is_running)
        elevation_input.set_visibility(not is_running)

    def on_submit() -> None:
        kind = str(type_select.value)
        try:
            workout = context.log_workout(
                kind=kind,
                coords=(lat_input.value, lng_input.value),
                distance=distance_input.value,
                duration=duration_input.value,
                cadence=cadence_input.value if kind == "running" else None,
                elevation_gain=elevation_input.value if kind == "cycling" else None,
            )
        except InvalidInput as exc:
            ui.notify(exc.message, color="negative")
            return
        ui.notify(f"{workout_icon(workout.kind)} {workout.description}", color="positive")
        hide_form()
        refresh_list()

    async def on_locate() -> None:
        try:
            coords = await ui.run_javascript(_GEOLOCATION_JS, timeout=GEOLOCATION_TIMEOUT_SEC)
        except TimeoutError:
            coords = None
        if not coords:
            ui.notify("Could not get your position!", color="warning")
            return
        context.initial_coords = (float(coords[0]), float(coords[1]))
        lat_input.value = str(coords[0])
        lng_input.value = str(coords[1])

    def on_reset() -> None:
        context.reset()
        refresh_list()

    type_select.on_value_change(lambda _: on_toggle_type())
    submit_btn.on_click(on_submit)
    locate_btn.on_click(on_locate)
    reset_btn.on_click(on_reset)

    refresh_list()
    ui.run(host=host, port=port, reload=False, title="Mapty")
    return 0
