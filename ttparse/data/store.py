from __future__ import annotations

import json
import logging
import os
import re
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict

from ..config import ParserSettings
from ..errors import ProfileCorruptError, ProfileNotFoundError, ProfileValidationError
from ..models.profile import FacultyProfile
from ..parser import parse_timetable_or_raise
from ..parser.cells import DEFAULT_SETTINGS
from ..validate.checks import validate_profile

logger = logging.getLogger(__name__)

UID = re.compile(r"[A-Za-z0-9_.@-]+")


def load_json(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


class ProfileStore:
    """Faculty documents kept as one JSON file per user id.

    Writes merge into the existing document, like a document-store
    ``set(..., merge=True)``.
    """

    def __init__(self, root: Path, settings: ParserSettings = DEFAULT_SETTINGS):
        self.root = Path(root)
        self.settings = settings

    def _path(self, uid: str) -> Path:
        if not UID.fullmatch(uid) or uid in {".", ".."}:
            raise ProfileValidationError(f"invalid user id: {uid!r}")
        return self.root / f"{uid}.json"

    def _read(self, uid: str) -> Dict[str, Any]:
        path = self._path(uid)
        if not path.exists():
            return {}
        try:
            doc = load_json(path)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise ProfileCorruptError(f"profile {uid} is unreadable: {exc}") from exc
        if not isinstance(doc, dict):
            raise ProfileCorruptError(f"profile {uid} is not a JSON object")
        return doc

    def _merge(self, uid: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        doc = self._read(uid)
        doc.update(fields)
        self.root.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self.root, prefix=f".{uid}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(doc, f, indent=2)
            os.replace(tmp, self._path(uid))
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise
        return doc

    def _profile(self, uid: str, doc: Dict[str, Any]) -> FacultyProfile:
        try:
            return FacultyProfile.from_dict(uid, doc)
        except (KeyError, TypeError, AttributeError) as exc:
            raise ProfileCorruptError(f"profile {uid} has a malformed timetable: {exc!r}") from exc

    def load(self, uid: str) -> FacultyProfile | None:
        doc = self._read(uid)
        if not doc:
            return None
        return self._profile(uid, doc)

    def save_timetable(
        self,
        uid: str,
        raw_text: str,
        *,
        name: str,
        department: str,
        employee_id: str,
    ) -> FacultyProfile:
        """Validate the profile, parse the pasted timetable and merge both in.

        Nothing is written when either step fails.
        """
        profile = FacultyProfile(uid=uid, name=name, department=department, employee_id=employee_id)
        problem = validate_profile(profile)
        if problem:
            raise ProfileValidationError(problem)
        if not raw_text.strip():
            raise ProfileValidationError("Timetable data is required")

        profile.timetable = parse_timetable_or_raise(raw_text, self.settings)
        doc = self._merge(uid, profile.to_dict())
        logger.info("Saved timetable for %s (%d days)", uid, len(profile.timetable.days))
        return self._profile(uid, doc)

    def complete_signup(self, uid: str, now: datetime | None = None) -> FacultyProfile:
        profile = self.load(uid)
        if profile is None or profile.timetable is None:
            raise ProfileNotFoundError("Timetable not saved")
        problem = validate_profile(profile)
        if problem:
            raise ProfileValidationError(problem)
        stamp = (now or datetime.now(timezone.utc)).isoformat()
        doc = self._merge(uid, {"signupCompleted": True, "completedAt": stamp})
        logger.info("Signup completed for %s", uid)
        return self._profile(uid, doc)
