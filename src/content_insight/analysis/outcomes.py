"""Per-provider analysis outcome types.

An outcome is exactly one of two variants, each of which knows its own
wire shape:

- :class:`AnalysisSuccess` -> ``{"keywords": [...], "summary": "..."}``
- :class:`AnalysisFailure` -> ``{"error": "..."}``
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union


@dataclass(frozen=True)
class AnalysisSuccess:
    """Keywords and summary returned by a provider.

    ``keywords`` is empty when the provider answered with prose instead of
    the requested JSON; ``summary`` then holds that prose.
    """

    keywords: list[str] = field(default_factory=list)
    summary: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"keywords": list(self.keywords), "summary": self.summary}


@dataclass(frozen=True)
class AnalysisFailure:
    """A provider call that produced no usable text."""

    reason: str

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.reason}


AnalysisOutcome = Union[AnalysisSuccess, AnalysisFailure]

AnalysisMap = dict[str, AnalysisOutcome]
"""Provider name -> outcome for one request."""


def serialize_analysis_map(results: AnalysisMap) -> dict[str, dict[str, Any]]:
    """Render an :data:`AnalysisMap` as the ``aiResults`` JSON object."""
    return {name: outcome.to_dict() for name, outcome in results.items()}
