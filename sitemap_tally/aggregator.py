# File: sitemap_tally/aggregator.py
"""sitemap_tally.aggregator: reduces the stream of discovered URLs to a single count."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from enum import Enum
from typing import AsyncIterable, Callable, Optional, Union

__all__ = [
    "RunMode",
    "Total",
    "PatternMatch",
    "Mode",
    "mode_from_options",
    "reduce",
    "ScanSummary",
]


class RunMode(str, Enum):
    """Run types offered to the user."""

    TOTAL = "total"
    PATTERN = "pattern"


@dataclass(frozen=True, slots=True)
class Total:
    """Count every discovered URL."""

    run_type = RunMode.TOTAL


@dataclass(frozen=True, slots=True)
class PatternMatch:
    """Count URLs containing ``pattern``, ignoring case. Not a regex."""

    pattern: str
    run_type = RunMode.PATTERN


Mode = Union[Total, PatternMatch]


def mode_from_options(run_type: Union[str, RunMode], pattern: Optional[str] = None) -> Mode:
    """Build a Mode from the run type and pattern chosen by the user."""
    kind = RunMode(run_type)
    if kind is RunMode.TOTAL:
        return Total()
    if pattern is None:
        raise ValueError("pattern run requires a pattern")
    return PatternMatch(pattern)


def _predicate(mode: Mode) -> Callable[[str], bool]:
    if isinstance(mode, PatternMatch):
        needle = mode.pattern.lower()
        return lambda url: needle in url.lower()
    return lambda url: True


async def reduce(stream: AsyncIterable[str], mode: Mode) -> int:
    """Drain *stream* to end-of-stream and count the items selected by *mode*.

    The count does not depend on the order items arrive in.
    """
    matches = _predicate(mode)
    count = 0
    async for url in stream:
        if matches(url):
            count += 1
    return count


@dataclass(slots=True)
class ScanSummary:
    """Outcome of a run: the chosen sitemap, the run type and the count."""

    selection: str
    run_type: RunMode
    count: int
    pattern: Optional[str] = None

    @property
    def label(self) -> str:
        return "matches found" if self.run_type is RunMode.PATTERN else "URLs found"

    def json(self, *, pretty: bool = False) -> str:
        """Return the summary as JSON."""
        output = asdict(self)
        output["run_type"] = self.run_type.value
        output["label"] = self.label
        return json.dumps(output, ensure_ascii=False, indent=2 if pretty else None)
