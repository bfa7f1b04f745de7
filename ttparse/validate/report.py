from __future__ import annotations

import json
from pathlib import Path
from typing import Dict


def write_validation_report(report: Dict[str, object], outputs_dir: Path) -> Path:
    outputs_dir.mkdir(parents=True, exist_ok=True)
    path = outputs_dir / "validation.json"
    with path.open("w", encoding="utf-8") as f:
        json.dump(report, f, indent=2)
    return path


def format_validation_report(report: Dict[str, object]) -> str:
    lines: list[str] = []
    for key in ("day_count", "theory_slot_count", "lab_slot_count", "class_count", "complex_count"):
        lines.append(f"{key}: {report.get(key)}")
    violations = report.get("violations_by_rule", {})
    lines.append("violations_by_rule:")
    if isinstance(violations, dict):
        if not violations:
            lines.append("  (none)")
        for k, v in violations.items():
            lines.append(f"  - {k}: {len(v)}")
    return "\n".join(lines)
