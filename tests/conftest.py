"""Test configuration and fixtures for Serenity tests.

This module provides reusable test fixtures organized by functionality:
- Constants and test data
- CSV text factories
- Corpus index and matcher factories
- Pipeline fixtures
"""

from pathlib import Path

import pytest

from serenity import CorpusIndex, QAPair, ResponsePipeline, SimilarityMatcher

PROJECT_ROOT = Path(__file__).resolve().parent.parent
TEST_DATA_DIR = PROJECT_ROOT / "tests" / "data"


class TestConstants:
    """Centralized test constants shared across test files."""

    SAD_CONTEXT = "I feel sad"
    SAD_RESPONSE = "I'm sorry to hear that"
    HAPPY_CONTEXT = "I feel happy"
    HAPPY_RESPONSE = "That's wonderful!"

    DEFAULT_THRESHOLD = 0.2
    SAMPLE_CORPUS_SIZE = 5


@pytest.fixture
def mood_pairs() -> list[QAPair]:
    """The two-entry sad/happy corpus."""
    return [
        QAPair(TestConstants.SAD_CONTEXT, TestConstants.SAD_RESPONSE),
        QAPair(TestConstants.HAPPY_CONTEXT, TestConstants.HAPPY_RESPONSE),
    ]


@pytest.fixture
def csv_text_factory():
    """Factory building CSV corpus text from a header and raw lines."""

    def _create_csv(
        lines: list[str],
        header: str = "context,response",
    ) -> str:
        return "\n".join([header, *lines]) + "\n"

    return _create_csv


@pytest.fixture
def corpus_index_factory():
    """Factory creating independent ``CorpusIndex`` instances, optionally loaded."""

    def _create_index(source=None) -> CorpusIndex:  # noqa: ANN001
        index = CorpusIndex()
        if source is not None:
            index.load(source)
        return index

    return _create_index


@pytest.fixture
def empty_index(corpus_index_factory) -> CorpusIndex:
    """Index that has never been loaded."""
    return corpus_index_factory()


@pytest.fixture
def mood_index(corpus_index_factory, mood_pairs) -> CorpusIndex:
    """Index loaded with the sad/happy corpus."""
    return corpus_index_factory(mood_pairs)


@pytest.fixture
def matcher_factory():
    """Factory creating matchers over a given index."""

    def _create_matcher(
        index: CorpusIndex,
        threshold: float = TestConstants.DEFAULT_THRESHOLD,
    ) -> SimilarityMatcher:
        return SimilarityMatcher(index, threshold=threshold)

    return _create_matcher


@pytest.fixture
def mood_matcher(matcher_factory, mood_index) -> SimilarityMatcher:
    """Matcher over the sad/happy corpus."""
    return matcher_factory(mood_index)


@pytest.fixture(scope="session")
def sample_corpus_path() -> Path:
    """Path to the hand-written sample corpus CSV.

    Read-only test data shared across tests.
    """
    return TEST_DATA_DIR / "sample_qa.csv"


@pytest.fixture
def sample_index(corpus_index_factory, sample_corpus_path) -> CorpusIndex:
    """Index loaded from the sample corpus file."""
    return corpus_index_factory(sample_corpus_path.read_text(encoding="utf-8"))


@pytest.fixture
def corpus_file_factory(tmp_path, csv_text_factory):
    """Factory writing CSV corpus files into a temporary directory."""

    def _create_file(
        lines: list[str], name: str = "corpus.csv", **kwargs: str
    ) -> Path:
        path = tmp_path / name
        path.write_text(csv_text_factory(lines, **kwargs), encoding="utf-8")
        return path

    return _create_file


@pytest.fixture
def pipeline_factory():
    """Factory creating ``ResponsePipeline`` instances for a corpus file."""

    def _create_pipeline(
        corpus_path: Path,
        threshold: float = TestConstants.DEFAULT_THRESHOLD,
    ) -> ResponsePipeline:
        return ResponsePipeline(corpus_path=corpus_path, threshold=threshold)

    return _create_pipeline
