from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Tuple

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParserSettings:
    # Cells that mean "nothing scheduled"
    empty_tokens: Tuple[str, ...] = ("-", "Lunch")
    saturation: int = 70
    lightness: int = 80


@dataclass(frozen=True)
class Settings:
    parser: ParserSettings = field(default_factory=ParserSettings)
    outputs_dir: Path = Path("outputs")
    profiles_dir: Path = Path("profiles")
    logs_dir: Path = Path("logs")


def _project_root() -> Path:
    # ttparse/config.py -> project root is parents[1]
    return Path(__file__).resolve().parents[1]


def load_settings(project_root: Path | str | None = None) -> Settings:
    """Load settings from configs/ttparse.toml if present, else defaults.

    Recognised tables:
      [parser]  empty_tokens, saturation, lightness
      [paths]   outputs, profiles, logs (relative to the project root)
    Unknown keys are ignored; bad values fall back to the default.
    """
    root: Path = _project_root() if project_root is None else Path(project_root)
    base = Settings(
        outputs_dir=root / "outputs",
        profiles_dir=root / "profiles",
        logs_dir=root / "logs",
    )
    cfg = root / "configs" / "ttparse.toml"
    if not cfg.exists():
        return base
    try:
        data: Dict[str, Any] = tomllib.loads(cfg.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", cfg, exc)
        return base

    p = data.get("parser") if isinstance(data.get("parser"), dict) else {}
    paths = data.get("paths") if isinstance(data.get("paths"), dict) else {}
    defaults = base.parser

    def get_int(name: str, default: int) -> int:
        try:
            return int(p.get(name, default))
        except (TypeError, ValueError):
            return default

    tokens = p.get("empty_tokens", defaults.empty_tokens)
    if not isinstance(tokens, (list, tuple)) or not all(isinstance(t, str) for t in tokens):
        tokens = defaults.empty_tokens

    def get_path(name: str, default: Path) -> Path:
        v = paths.get(name)
        return root / v if isinstance(v, str) and v else default

    return Settings(
        parser=ParserSettings(
            empty_tokens=tuple(tokens),
            saturation=get_int("saturation", defaults.saturation),
            lightness=get_int("lightness", defaults.lightness),
        ),
        outputs_dir=get_path("outputs", base.outputs_dir),
        profiles_dir=get_path("profiles", base.profiles_dir),
        logs_dir=get_path("logs", base.logs_dir),
    )
