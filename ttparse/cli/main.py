from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional, Tuple

import typer

from ..config import Settings, load_settings
from ..data.store import ProfileStore
from ..errors import TimetableError
from ..parser import parse_timetable, parse_timetable_or_raise
from ..render.csv_out import csv_blocks, write_csv_blocks
from ..render.html_ui import write_html_ui
from ..validate.checks import check_timetable
from ..validate.report import format_validation_report, write_validation_report

logger = logging.getLogger(__name__)


def _setup_logging(logs_dir: Path, level: int = logging.INFO) -> None:
    logs_dir.mkdir(parents=True, exist_ok=True)
    root = logging.getLogger()
    # Swap out handlers from an earlier call so the file follows the current root
    for h in [h for h in root.handlers if getattr(h, "_ttparse", False)]:
        root.removeHandler(h)
        h.close()
    fmt = logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")
    for h in (logging.FileHandler(logs_dir / "ttparse.log", encoding="utf-8"), logging.StreamHandler()):
        h.setFormatter(fmt)
        h._ttparse = True  # type: ignore[attr-defined]
        root.addHandler(h)
    root.setLevel(level)


def run_pipeline(text: str, outputs_dir: Path, settings: Settings | None = None) -> Tuple[str, str]:
    """Parse, check and render one pasted timetable into outputs_dir.

    Writes timetable.csv, ui/index.html and validation.json; returns the CSV
    text and the formatted report. Raises TimetableParseError on bad input.
    """
    settings = settings or Settings()
    tt = parse_timetable_or_raise(text, settings.parser)
    report = check_timetable(tt)
    write_validation_report(report, outputs_dir)
    csv = csv_blocks(tt)
    write_csv_blocks(csv, outputs_dir)
    ui_path = write_html_ui(tt, outputs_dir)
    logger.info("Rendered %d day(s) to %s", len(tt.days), ui_path)
    return csv, format_validation_report(report)


app = typer.Typer(add_completion=False, help="Faculty timetable parser")

_state: dict = {}


def _settings() -> Settings:
    return _state.get("settings") or load_settings()


def _read(file: Path) -> str:
    try:
        return file.read_text(encoding="utf-8")
    except OSError as exc:
        typer.echo(f"cannot read {file}: {exc}", err=True)
        raise typer.Exit(code=1)


@app.callback()
def main(
    root: Path = typer.Option(Path("."), help="Project root holding configs/ttparse.toml"),
    log_level: str = typer.Option("WARNING", help="Log level"),
) -> None:
    settings = load_settings(root)
    _state["settings"] = settings
    _setup_logging(settings.logs_dir, getattr(logging, log_level.upper(), logging.WARNING))


@app.command("parse")
def cli_parse(
    file: Path = typer.Argument(..., help="Pasted timetable text"),
    json_out: Optional[Path] = typer.Option(None, help="Also write the JSON here"),
) -> None:
    result = parse_timetable(_read(file), _settings().parser)
    if not result.ok:
        typer.echo(f"error: {result.reason}", err=True)
        raise typer.Exit(code=1)
    payload = json.dumps(result.timetable.to_dict(), indent=2)
    if json_out is not None:
        json_out.write_text(payload, encoding="utf-8")
    typer.echo(payload)


@app.command("render")
def cli_render(
    file: Path = typer.Argument(..., help="Pasted timetable text"),
    outputs: Optional[Path] = typer.Option(None, help="Output directory"),
) -> None:
    settings = _settings()
    try:
        _, validation = run_pipeline(_read(file), outputs or settings.outputs_dir, settings)
    except TimetableError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=1)
    typer.echo(validation)


@app.command("save")
def cli_save(
    uid: str = typer.Argument(..., help="User id"),
    file: Path = typer.Argument(..., help="Pasted timetable text"),
    name: str = typer.Option("", help="Full name"),
    department: str = typer.Option("", help="Department"),
    employee_id: str = typer.Option("", help="Employee ID"),
) -> None:
    settings = _settings()
    store = ProfileStore(settings.profiles_dir, settings.parser)
    try:
        profile = store.save_timetable(
            uid, _read(file), name=name, department=department, employee_id=employee_id
        )
    except TimetableError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"Saved {len(profile.timetable.days)} day(s) for {uid}")


@app.command("complete")
def cli_complete(uid: str = typer.Argument(..., help="User id")) -> None:
    settings = _settings()
    store = ProfileStore(settings.profiles_dir, settings.parser)
    try:
        profile = store.complete_signup(uid)
    except TimetableError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"Signup completed for {uid} at {profile.completed_at}")


if __name__ == "__main__":  # pragma: no cover
    app()
