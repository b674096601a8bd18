"""Data models for the response matcher."""

from dataclasses import dataclass


@dataclass(frozen=True)
class QAPair:
    """A stored context and the response returned when a query matches it."""

    context: str
    response: str


@dataclass(frozen=True)
class MatchResult:
    """Best-scoring corpus entry for a single query."""

    response: str
    score: float
    index: int
