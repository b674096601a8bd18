"""Response pipeline wiring corpus loading to the similarity matcher."""

from pathlib import Path

from .config import config
from .corpus import CorpusLoader
from .index import CorpusIndex
from .matcher import SimilarityMatcher

logger = config.get_logger(__name__)


class ResponsePipeline:
    """Orchestrates Read -> Parse -> Index -> Match for a corpus file."""

    def __init__(
        self,
        corpus_path: Path | None = None,
        threshold: float | None = None,
        index: CorpusIndex | None = None,
    ) -> None:
        """Initialize the pipeline without loading anything.

        Args:
            corpus_path: CSV file to load. If None, uses config.CORPUS_PATH.
            threshold: Minimum match score. If None, uses
                config.SIMILARITY_THRESHOLD.
            index: Existing index to share. If None, a fresh one is created.
        """
        self.corpus_path = Path(corpus_path) if corpus_path else config.CORPUS_PATH
        self.index = index if index is not None else CorpusIndex()
        self.matcher = SimilarityMatcher(self.index, threshold=threshold)

    @property
    def is_ready(self) -> bool:
        """Whether a corpus has been loaded successfully."""
        return self.index.is_ready

    def load_corpus_file(self, file_path: Path | None = None) -> int:
        """Read a corpus CSV file and load it into the index.

        Args:
            file_path: File to load. If None, uses the pipeline's corpus path.
                A successful load makes it the path used by :meth:`reload`.

        Returns:
            Number of QA pairs now in the index.

        Raises:
            CorpusLoadError: If the file cannot be read or parsed. The index
                keeps its previous corpus.
        """
        path = Path(file_path) if file_path else self.corpus_path
        logger.info("Loading corpus from %s", path)

        text = CorpusLoader.read_file(path)
        self.index.load(text)

        self.corpus_path = path
        return len(self.index)

    def reload(self) -> int:
        """Reload the corpus from the last loaded path.

        Returns:
            Number of QA pairs now in the index.
        """
        return self.load_corpus_file(self.corpus_path)

    def respond(self, message: str) -> str:
        """Answer a user message from the corpus.

        Returns:
            The best matching response or a fallback message.
        """
        message = (message or "").strip()
        logger.debug("Processing message: %s", message)
        return self.matcher.best_response(message)
