"""Cosine-similarity matching of user input against the corpus index."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
from sklearn.metrics import pairwise

from .config import config
from .models import MatchResult

if TYPE_CHECKING:
    from .index import CorpusIndex, IndexSnapshot

STILL_LEARNING_RESPONSE = "I'm still learning. Please try again later."
NOT_UNDERSTOOD_RESPONSE = "I'm sorry, I don't understand. Can you rephrase?"

logger = config.get_logger(__name__)


class SimilarityMatcher:
    """Selects the corpus response whose context best matches a query."""

    def __init__(self, index: CorpusIndex, threshold: float | None = None) -> None:
        """Initialize the matcher.

        Args:
            index: Corpus index to read from.
            threshold: Minimum score a match must exceed. If None, uses
                config.SIMILARITY_THRESHOLD.
        """
        self.index = index
        self.threshold = (
            threshold if threshold is not None else config.SIMILARITY_THRESHOLD
        )

    @staticmethod
    def cosine_similarity(query_vector: np.ndarray, matrix: np.ndarray) -> np.ndarray:
        """Calculate cosine similarity between a query and each matrix row.

        Rows or queries with zero magnitude score 0.

        Returns:
            np.ndarray: One similarity score per row of ``matrix``.
        """
        if not matrix.shape[0] or not query_vector.any():
            return np.zeros(matrix.shape[0], dtype=np.float64)
        return pairwise.cosine_similarity(query_vector.reshape(1, -1), matrix)[0]

    def similarity(self, text_a: str, text_b: str) -> float:
        """Cosine similarity of two texts in the active corpus space.

        Returns:
            Score in [0, 1]; identical in both argument orders.
        """
        snapshot = self.index.snapshot
        vector_a = snapshot.vectorize_array(text_a)
        vector_b = snapshot.vectorize_array(text_b)
        if not vector_b.any():
            return 0.0
        return float(self.cosine_similarity(vector_a, vector_b.reshape(1, -1))[0])

    def best_match(self, query: str) -> MatchResult | None:
        """Find the corpus entry most similar to ``query``.

        Returns:
            The best entry if its score exceeds the threshold, otherwise None.
        """
        return self._match(self.index.snapshot, query)

    def best_response(self, query: str) -> str:
        """Answer ``query`` with the best matching corpus response.

        Never raises: an empty corpus, blank input or a weak match each map to
        a fixed fallback string.

        Returns:
            The matched response or a fallback message.
        """
        snapshot = self.index.snapshot
        if snapshot.is_empty():
            return STILL_LEARNING_RESPONSE

        match = self._match(snapshot, query)
        if match is None:
            return NOT_UNDERSTOOD_RESPONSE
        return match.response

    def _match(self, snapshot: IndexSnapshot, query: str) -> MatchResult | None:
        if snapshot.is_empty() or not query or not query.strip():
            return None

        query_vector = snapshot.vectorize_array(query)
        scores = self.cosine_similarity(query_vector, snapshot.matrix)

        # argmax returns the first maximum, so earlier entries win ties.
        position = int(np.argmax(scores))
        score = float(scores[position])
        logger.debug("Best corpus match %d with similarity %.4f", position, score)

        if score <= self.threshold:
            return None
        return MatchResult(
            response=snapshot.pairs[position].response,
            score=score,
            index=position,
        )
