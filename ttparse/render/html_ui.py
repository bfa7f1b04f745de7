from __future__ import annotations

from html import escape
from pathlib import Path
from typing import List

from ..models.timetable import Timetable

TRACK_TITLES = {"theory": "Theory Classes", "lab": "Lab Classes"}
ROOM_TEXT = {"theory": "#2563eb", "lab": "#16a34a"}


def build_html(tt: Timetable, title: str = "Your Timetable") -> str:
    day_names: List[str] = list(tt.days)

    def cell_html(day: str, track: str, idx: int) -> str:
        c = tt.get(day, track, idx)
        if c is None:
            return "<td class='empty'>—</td>"
        style = f" style=\"background:{escape(c.color)}\"" if c.color else ""
        parts = [f"<span class='code'>{escape(c.code)}</span>"]
        if c.room:
            parts.append(f"<span class='room' style='color:{ROOM_TEXT[track]}'>{escape(c.room)}</span>")
        if c.instructor:
            parts.append(f"<span class='instructor'>{escape(c.instructor)}</span>")
        return f"<td{style}><div class='cell'>{'<br/>'.join(parts)}</div></td>"

    blocks = []
    for track, heading in TRACK_TITLES.items():
        head_cells = "".join(f"<th>{escape(d)}</th>" for d in day_names)
        rows_html = []
        for idx, s in enumerate(tt.slots_for(track)):
            row_cells = "".join(cell_html(d, track, idx) for d in day_names)
            rows_html.append(
                f"<tr><th class='time'>{escape(s.start)} - {escape(s.end)}</th>{row_cells}</tr>"
            )
        blocks.append(
            f"<section class='track {track}'>"
            f"<h2>{heading}</h2>"
            f"<table class='tt'>"
            f"<thead><tr><th class='corner'>Time</th>{head_cells}</tr></thead>"
            f"<tbody>{''.join(rows_html)}</tbody>"
            f"</table>"
            f"</section>"
        )

    style = """
    <style>
    body { font-family: system-ui, Arial, sans-serif; margin: 20px; color: #222; }
    .track { margin-bottom: 36px; }
    .tt { border-collapse: collapse; width: 100%; }
    .tt th, .tt td { border: 1px solid #ddd; padding: 6px; text-align: center; min-width: 110px; }
    .tt thead th { background:#f7f7f7; font-weight:600; }
    .tt .time, .tt .corner { background:#fafafa; text-align:left; white-space: nowrap; }
    .code { font-weight: 600; }
    .room { font-size: 12px; }
    .instructor { font-size: 12px; color:#666; font-style: italic; }
    .empty { color:#ccc; }
    </style>
    """

    return (
        f"<html><head><meta charset='utf-8'><title>{escape(title)}</title>" + style + "</head><body>"
        f"<h1>{escape(title)}</h1>"
        + "".join(blocks)
        + "</body></html>"
    )


def write_html_ui(tt: Timetable, outputs_dir: Path, title: str = "Your Timetable") -> Path:
    ui_dir = outputs_dir / "ui"
    ui_dir.mkdir(parents=True, exist_ok=True)
    out_path = ui_dir / "index.html"
    out_path.write_text(build_html(tt, title), encoding="utf-8")
    return out_path
