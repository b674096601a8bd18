"""Corpus loading: CSV text, CSV files and in-memory pairs to ``QAPair`` lists."""

import io
from collections.abc import Iterable, Mapping
from pathlib import Path

import pandas as pd

from .config import config
from .exceptions import CorpusLoadError
from .models import QAPair

CONTEXT_COLUMN = "context"
RESPONSE_COLUMN = "response"
REQUIRED_COLUMNS = (CONTEXT_COLUMN, RESPONSE_COLUMN)

CSV_TEXT_SOURCE = "<csv text>"

logger = config.get_logger(__name__)


class CorpusLoader:
    """Parses corpus sources into ordered lists of QA pairs."""

    @staticmethod
    def read_file(file_path: Path, encoding: str | None = None) -> str:
        """Read a corpus CSV file as text.

        Returns:
            The raw CSV content.

        Raises:
            CorpusLoadError: If the file cannot be opened or decoded.
        """
        encoding = encoding or config.CORPUS_ENCODING
        try:
            with Path(file_path).open(encoding=encoding) as file:
                text = file.read()
        except (OSError, UnicodeDecodeError) as exc:
            msg = f"Unable to read corpus file {file_path}: {exc}"
            raise CorpusLoadError(msg, source=str(file_path)) from exc

        logger.info("Read corpus file %s (%d characters)", file_path, len(text))
        return text

    @staticmethod
    def parse_csv(text: str | bytes, source: str = CSV_TEXT_SOURCE) -> list[QAPair]:
        """Parse CSV text with a ``context``/``response`` header.

        Rows with an empty context or response are skipped, as are lines with
        more fields than the header. Extra columns are ignored.

        Returns:
            QA pairs in row order.

        Raises:
            CorpusLoadError: If the text is not valid CSV or a required column
                is missing from the header.
        """
        if isinstance(text, bytes):
            try:
                text = text.decode(config.CORPUS_ENCODING)
            except UnicodeDecodeError as exc:
                msg = f"Corpus source is not valid {config.CORPUS_ENCODING}"
                raise CorpusLoadError(msg, source=source) from exc

        # The header is read as a data row so its width fixes the field count;
        # pandas never infers an index column and longer rows are dropped whole.
        try:
            frame = pd.read_csv(
                io.StringIO(text),
                header=None,
                dtype=str,
                keep_default_na=False,
                on_bad_lines="skip",
            )
        except (pd.errors.ParserError, pd.errors.EmptyDataError) as exc:
            msg = f"Unable to parse corpus CSV: {exc}"
            raise CorpusLoadError(msg, source=source) from exc

        columns = [
            str(column).lstrip("\ufeff").strip().lower() for column in frame.iloc[0]
        ]
        missing = [column for column in REQUIRED_COLUMNS if column not in columns]
        if missing:
            msg = f"Corpus CSV header is missing required columns: {', '.join(missing)}"
            raise CorpusLoadError(msg, source=source)

        duplicated = [
            column for column in REQUIRED_COLUMNS if columns.count(column) > 1
        ]
        if duplicated:
            msg = f"Corpus CSV header repeats required columns: {', '.join(duplicated)}"
            raise CorpusLoadError(msg, source=source)

        frame = frame.iloc[1:].set_axis(columns, axis=1).fillna("")
        rows = zip(frame[CONTEXT_COLUMN], frame[RESPONSE_COLUMN], strict=True)
        pairs = CorpusLoader.from_records(rows)

        skipped = len(frame) - len(pairs)
        if skipped:
            logger.info("Skipped %d incomplete corpus rows from %s", skipped, source)
        return pairs

    @staticmethod
    def from_records(records: Iterable[object]) -> list[QAPair]:
        """Normalize already-parsed records into QA pairs.

        Accepts ``QAPair`` instances, ``(context, response)`` sequences and
        mappings with ``context``/``response`` keys. Anything else, and any
        record with an empty field, is skipped.

        Returns:
            QA pairs in input order.
        """
        pairs = []
        for record in records:
            pair = CorpusLoader._coerce_record(record)
            if pair is None:
                logger.debug("Skipping unusable corpus record: %r", record)
                continue
            pairs.append(pair)
        return pairs

    @staticmethod
    def _coerce_record(record: object) -> QAPair | None:
        if isinstance(record, QAPair):
            context, response = record.context, record.response
        elif isinstance(record, Mapping):
            context = record.get(CONTEXT_COLUMN)
            response = record.get(RESPONSE_COLUMN)
        elif isinstance(record, (tuple, list)) and len(record) == 2:  # noqa: PLR2004
            context, response = record
        else:
            return None

        if not isinstance(context, str) or not isinstance(response, str):
            return None
        context = context.strip()
        response = response.strip()
        if not context or not response:
            return None
        return QAPair(context=context, response=response)

    @classmethod
    def load_source(cls, source: object) -> list[QAPair]:
        """Turn any supported corpus source into QA pairs.

        Args:
            source: CSV text (``str`` or ``bytes``) or an iterable of records
                accepted by :meth:`from_records`.

        Returns:
            QA pairs in source order.

        Raises:
            CorpusLoadError: If the source type is unsupported or unparseable.
        """
        if isinstance(source, (str, bytes)):
            return cls.parse_csv(source)
        if isinstance(source, Iterable) and not isinstance(source, Mapping):
            return cls.from_records(source)
        msg = f"Unsupported corpus source type: {type(source).__name__}"
        raise CorpusLoadError(msg, source=type(source).__name__)
