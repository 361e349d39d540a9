"""ATS presence checklist evaluated against raw resume text."""
from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Sequence

from resumefit.config import checklist_path, load_checklist_config
from resumefit.errors import ConfigError
from resumefit.models import PresenceChecklistItem


@dataclass(frozen=True)
class Criterion:
    label: str
    pattern: re.Pattern

    def matches(self, text: str) -> bool:
        return bool(self.pattern.search(text))


def parse_criteria(raw: list) -> tuple[Criterion, ...]:
    criteria: list[Criterion] = []
    for i, entry in enumerate(raw):
        if not isinstance(entry, dict) or not entry.get("label") or not entry.get("pattern"):
            raise ConfigError(f"Checklist criterion #{i + 1} needs a label and a pattern")
        try:
            pattern = re.compile(str(entry["pattern"]), re.IGNORECASE)
        except re.error as exc:
            raise ConfigError(f"Bad pattern for {entry['label']!r}: {exc}") from exc
        criteria.append(Criterion(label=str(entry["label"]), pattern=pattern))
    return tuple(criteria)


@lru_cache(maxsize=4)
def _criteria_from(path: Path) -> tuple[Criterion, ...]:
    return parse_criteria(load_checklist_config(path)["criteria"])


def default_criteria() -> tuple[Criterion, ...]:
    return _criteria_from(checklist_path())


def build_presence_checklist(
    text: str, criteria: Sequence[Criterion] | None = None
) -> list[PresenceChecklistItem]:
    criteria = default_criteria() if criteria is None else criteria
    text = text or ""
    return [PresenceChecklistItem(label=c.label, present=c.matches(text)) for c in criteria]
