"""Serenity - retrieval-based response matching over a QA corpus."""

from .corpus import CorpusLoader
from .exceptions import CorpusLoadError
from .index import CorpusIndex, IndexSnapshot, tokenize
from .matcher import (
    NOT_UNDERSTOOD_RESPONSE,
    STILL_LEARNING_RESPONSE,
    SimilarityMatcher,
)
from .models import MatchResult, QAPair
from .pipeline import ResponsePipeline

__all__ = [
    "NOT_UNDERSTOOD_RESPONSE",
    "STILL_LEARNING_RESPONSE",
    "CorpusIndex",
    "CorpusLoadError",
    "CorpusLoader",
    "IndexSnapshot",
    "MatchResult",
    "QAPair",
    "ResponsePipeline",
    "SimilarityMatcher",
    "tokenize",
]
