"""TF-IDF corpus index over the context side of the QA corpus."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np
from sklearn.feature_extraction.text import TfidfVectorizer

from .config import config
from .corpus import CorpusLoader
from .exceptions import CorpusLoadError

if TYPE_CHECKING:
    from .models import QAPair

TOKEN_PATTERN = r"(?u)[^\W_]+"

logger = config.get_logger(__name__)


def build_vectorizer() -> TfidfVectorizer:
    """Create an unfitted vectorizer with raw term counts and smoothed IDF.

    Returns:
        TfidfVectorizer producing un-normalized TF-IDF weights.
    """
    return TfidfVectorizer(
        lowercase=True,
        token_pattern=TOKEN_PATTERN,
        norm=None,
        smooth_idf=True,
        sublinear_tf=False,
    )


_analyzer = build_vectorizer().build_analyzer()


def tokenize(text: str) -> list[str]:
    """Lower-case ``text`` and split it on non-alphanumeric boundaries.

    Returns:
        Tokens in order of appearance.
    """
    return _analyzer(text)


@dataclass(frozen=True, eq=False)
class IndexSnapshot:
    """Immutable vector-space view of one loaded corpus.

    ``vectorizer`` is None when the corpus has no terms at all. Columns of
    ``matrix`` follow the sorted term order of ``vocabulary``.
    """

    pairs: tuple[QAPair, ...]
    vectorizer: TfidfVectorizer | None
    vocabulary: dict[str, int]
    matrix: np.ndarray

    @classmethod
    def build(cls, pairs: list[QAPair] | tuple[QAPair, ...]) -> IndexSnapshot:
        """Fit the vectorizer on the contexts of ``pairs``.

        Returns:
            A fully built snapshot.
        """
        pairs = tuple(pairs)
        contexts = [pair.context for pair in pairs]

        if not any(tokenize(context) for context in contexts):
            return cls(
                pairs=pairs,
                vectorizer=None,
                vocabulary={},
                matrix=np.zeros((len(pairs), 0), dtype=np.float64),
            )

        vectorizer = build_vectorizer()
        matrix = vectorizer.fit_transform(contexts).toarray()
        # Terms sort in the same order as their columns.
        vocabulary = {
            term: int(column)
            for term, column in sorted(vectorizer.vocabulary_.items())
        }
        return cls(
            pairs=pairs,
            vectorizer=vectorizer,
            vocabulary=vocabulary,
            matrix=matrix,
        )

    @classmethod
    def empty(cls) -> IndexSnapshot:
        """Snapshot of an unloaded index.

        Returns:
            A snapshot with no pairs and no vocabulary.
        """
        return cls.build(())

    def is_empty(self) -> bool:
        """Check whether the snapshot holds no pairs.

        Returns:
            True if there are no QA pairs.
        """
        return not self.pairs

    def vectorize_array(self, text: str) -> np.ndarray:
        """Project ``text`` onto this snapshot's vocabulary.

        Terms the corpus never saw are dropped.

        Returns:
            Dense TF-IDF vector aligned with the matrix columns.
        """
        if self.vectorizer is None:
            return np.zeros(0, dtype=np.float64)
        return self.vectorizer.transform([text]).toarray()[0]

    def vectorize(self, text: str) -> dict[str, float]:
        """Term-weight mapping for ``text`` in sorted term order.

        Returns:
            Mapping of each recognized term to its TF-IDF weight.
        """
        return self._as_mapping(self.vectorize_array(text))

    def context_vector(self, position: int) -> dict[str, float]:
        """Cached term-weight mapping of the context at ``position``.

        Returns:
            Mapping of term to weight for that corpus entry.
        """
        return self._as_mapping(self.matrix[position])

    def _as_mapping(self, vector: np.ndarray) -> dict[str, float]:
        return {
            term: float(vector[column])
            for term, column in self.vocabulary.items()
            if vector[column] > 0
        }


class CorpusIndex:
    """Owns the active QA corpus and its TF-IDF representation.

    Readers work against whatever snapshot is current when they start. ``load``
    builds a complete replacement before swapping it in, so a reader sees the
    old corpus or the new one, never a mix.
    """

    def __init__(self) -> None:
        """Initialize an empty, unloaded index."""
        self._snapshot = IndexSnapshot.empty()
        self._write_lock = threading.Lock()
        self._ready = threading.Event()

    @property
    def snapshot(self) -> IndexSnapshot:
        """The snapshot currently serving reads."""
        return self._snapshot

    @property
    def pairs(self) -> tuple[QAPair, ...]:
        """QA pairs of the active corpus, in load order."""
        return self._snapshot.pairs

    @property
    def vocabulary(self) -> list[str]:
        """Distinct terms of the active corpus, sorted."""
        return list(self._snapshot.vocabulary)

    @property
    def is_ready(self) -> bool:
        """Whether at least one load has completed successfully."""
        return self._ready.is_set()

    def __len__(self) -> int:
        return len(self._snapshot.pairs)

    def load(self, source: object) -> None:
        """Replace the corpus with the pairs parsed from ``source``.

        Args:
            source: CSV text with a ``context``/``response`` header, or an
                iterable of ``QAPair``, ``(context, response)`` tuples or
                mappings.

        Raises:
            CorpusLoadError: If the source is unreadable or malformed. The
                previously loaded corpus stays active.
        """
        with self._write_lock:
            try:
                pairs = CorpusLoader.load_source(source)
            except CorpusLoadError as exc:
                logger.warning(
                    "Corpus load failed; keeping %d existing pairs: %s", len(self), exc
                )
                raise

            snapshot = IndexSnapshot.build(pairs)
            self._snapshot = snapshot
            self._ready.set()

        logger.info(
            "Loaded corpus with %d QA pairs and %d terms",
            len(snapshot.pairs),
            len(snapshot.vocabulary),
        )

    def wait_until_ready(self, timeout: float | None = None) -> bool:
        """Block until the first successful load.

        Returns:
            True if the index is ready, False if ``timeout`` elapsed first.
        """
        return self._ready.wait(timeout)

    def is_empty(self) -> bool:
        """Check whether the active corpus holds no pairs.

        Returns:
            True if there are no QA pairs.
        """
        return self._snapshot.is_empty()

    def vectorize(self, text: str) -> dict[str, float]:
        """TF-IDF weights of ``text`` against the active corpus.

        Returns:
            Mapping of each recognized term to its weight, in sorted term order.
        """
        return self._snapshot.vectorize(text)
