from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class Delimiter:
    name: str
    pattern: re.Pattern

    def split(self, line: str) -> List[str]:
        return self.pattern.split(line)


TAB = Delimiter("tab", re.compile(r"\t"))
PIPE = Delimiter("pipe", re.compile(r"\|"))
COMMA = Delimiter("comma", re.compile(r","))
SPACES = Delimiter("spaces", re.compile(r"\s{2,}"))


def detect_delimiter(line: str) -> Delimiter:
    """Sniff the column separator from one line.

    Tab wins over pipe, pipe over comma; with none of them the line is
    treated as visually aligned text and split on runs of 2+ spaces.
    """
    if "\t" in line:
        return TAB
    if "|" in line:
        return PIPE
    if "," in line:
        return COMMA
    return SPACES
