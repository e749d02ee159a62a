"""Conversion session: document selection, extraction and export.

The session owns the caller-level state as a single tagged value::

    Idle -> Selected -> Extracting -> Done | Failed

``reset()`` returns to ``Idle`` from any state and drops the document and
its entries. Exports are only available in ``Done`` and never change state.
"""

from __future__ import annotations

import logging
import threading
from typing import Literal

from pydantic import BaseModel, ConfigDict

from entrylist_converter.core.config import ExtractionConfig
from entrylist_converter.core.document import Document
from entrylist_converter.core.exceptions import (
    ExtractionError,
    InvalidInputKindError,
    SessionStateError,
)
from entrylist_converter.core.extractor import EntryExtractor
from entrylist_converter.export.renderers import ExportArtifact, ExportFormat, build_artifact
from entrylist_converter.schemas.entry import CompetitionEntry

logger = logging.getLogger(__name__)


class Idle(BaseModel):
    """No document selected."""

    model_config = ConfigDict(frozen=True)

    status: Literal["idle"] = "idle"


class Selected(BaseModel):
    """A PDF document is selected and waiting to be processed."""

    model_config = ConfigDict(frozen=True)

    status: Literal["selected"] = "selected"
    document: Document


class Extracting(BaseModel):
    """The inference call for the document is in flight."""

    model_config = ConfigDict(frozen=True)

    status: Literal["extracting"] = "extracting"
    document: Document


class Done(BaseModel):
    """Extraction finished; ``entries`` may be empty."""

    model_config = ConfigDict(frozen=True)

    status: Literal["done"] = "done"
    document: Document
    entries: tuple[CompetitionEntry, ...]


class Failed(BaseModel):
    """Selection or extraction failed.

    ``document`` is kept when the failure happened during extraction so the
    caller can offer another attempt; it is None when the selection itself
    was rejected.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    status: Literal["failed"] = "failed"
    error: ExtractionError
    document: Document | None = None


SessionState = Idle | Selected | Extracting | Done | Failed


class ConversionSession:
    """Drives one document at a time through extraction and export.

    Example:
        ```python
        session = ConversionSession(EntryExtractor())
        session.select(Document.from_path("start_list.pdf"))
        state = session.process()
        if isinstance(state, Done):
            session.export(ExportFormat.CSV).write("out")
        else:
            print(session.status_message)
        ```
    """

    NO_DOCUMENT_MESSAGE = "Select a PDF file to convert."
    READY_MESSAGE = "Ready to process {name}."
    PROCESSING_MESSAGE = "Processing {name}..."
    SUCCESS_MESSAGE = "{count} entries processed successfully."
    NO_ENTRIES_MESSAGE = (
        "No entries could be read from the PDF file. Please check the file's format."
    )

    def __init__(
        self,
        extractor: EntryExtractor,
        config: ExtractionConfig | None = None,
    ) -> None:
        self._extractor = extractor
        self.config = config or extractor.default_config
        self._state: SessionState = Idle()
        # Bumped on every select/reset; a result from an older generation is dropped
        self._generation = 0
        self._lock = threading.Lock()

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def document(self) -> Document | None:
        return getattr(self._state, "document", None)

    @property
    def entries(self) -> tuple[CompetitionEntry, ...] | None:
        if isinstance(self._state, Done):
            return self._state.entries
        return None

    @property
    def error(self) -> ExtractionError | None:
        if isinstance(self._state, Failed):
            return self._state.error
        return None

    @property
    def status_message(self) -> str:
        """Human-readable description of the current state."""
        state = self._state
        if isinstance(state, Idle):
            return self.NO_DOCUMENT_MESSAGE
        if isinstance(state, Selected):
            return self.READY_MESSAGE.format(name=state.document.name or "document")
        if isinstance(state, Extracting):
            return self.PROCESSING_MESSAGE.format(name=state.document.name or "document")
        if isinstance(state, Done):
            if not state.entries:
                return self.NO_ENTRIES_MESSAGE
            return self.SUCCESS_MESSAGE.format(count=len(state.entries))
        return str(state.error)

    def select(self, document: Document) -> SessionState:
        """Select a new document, discarding any previous document and entries.

        A document not declared as PDF moves the session to ``Failed`` with an
        :class:`InvalidInputKindError` and no document.

        Raises:
            SessionStateError: If an extraction is in flight.
        """
        with self._lock:
            if isinstance(self._state, Extracting):
                raise SessionStateError(
                    "Cannot select a document while extraction is running",
                    status=self._state.status,
                )
            self._generation += 1

            if not document.is_pdf:
                logger.info("Rejected %s (%s)", document.name or "document", document.media_type)
                self._state = Failed(
                    error=InvalidInputKindError(
                        "Please select a file in PDF format.",
                        media_type=document.media_type,
                    ),
                )
            else:
                self._state = Selected(document=document)
            return self._state

    def process(self) -> SessionState:
        """Run extraction on the selected document.

        Allowed from ``Selected``, and from ``Failed`` when the failure kept a
        document (a new attempt). Blocks until the extractor returns.

        Returns:
            The resulting state, ``Done`` or ``Failed``.

        Raises:
            SessionStateError: If there is no document to process.
        """
        with self._lock:
            state = self._state
            if isinstance(state, Selected) or (
                isinstance(state, Failed) and state.document is not None
            ):
                document = state.document
            else:
                raise SessionStateError(
                    "Select a PDF document before processing",
                    status=state.status,
                )
            generation = self._generation
            self._state = Extracting(document=document)

        outcome: SessionState
        try:
            entries = self._extractor.extract(document)
            outcome = Done(document=document, entries=entries)
        except ExtractionError as e:
            outcome = Failed(error=e, document=document)
        except Exception:
            with self._lock:
                if self._generation == generation:
                    self._state = Selected(document=document)
            raise

        with self._lock:
            if self._generation != generation:
                logger.info("Discarding result for %s after reset", document.name or "document")
                return self._state
            self._state = outcome
            return outcome

    def reset(self) -> SessionState:
        """Return to ``Idle`` and drop the document and any entries."""
        with self._lock:
            self._generation += 1
            self._state = Idle()
            return self._state

    def export(self, fmt: ExportFormat | str, filename: str | None = None) -> ExportArtifact:
        """Render the extracted entries.

        Args:
            fmt: Output format.
            filename: File name override, defaults to the configured name.

        Raises:
            SessionStateError: If no extraction has finished.
        """
        state = self._state
        if not isinstance(state, Done):
            raise SessionStateError("Nothing to export before extraction is done", status=state.status)

        fmt = ExportFormat(fmt)
        if filename is None:
            filename = self.config.csv_filename if fmt is ExportFormat.CSV else self.config.txt_filename
        return build_artifact(state.entries, fmt, filename=filename)
