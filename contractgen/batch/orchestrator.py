import threading
from collections.abc import Callable, Mapping, Sequence
from datetime import date

from contractgen.batch.archive import ArchiveBuilder
from contractgen.batch.exceptions import ArchiveError, RunFailureError
from contractgen.batch.file_naming import build_document_file_name
from contractgen.batch.models import BatchOutcome, BatchReport, BatchState
from contractgen.config.settings import Settings
from contractgen.container.base import BaseContainerAdapter
from contractgen.container.models import TemplatePackage
from contractgen.logging.logger import Log
from contractgen.records.models import ReplacementRecord
from contractgen.substitution.engine import SubstitutionEngine

ProgressCallback = Callable[[float, str], None]


class BatchOrchestrator:
    """Generate one document per record and bundle the results into a zip.

    Records are processed one at a time in queue order. A failing record is
    reported and skipped; it never stops the batch.
    """

    def __init__(
        self,
        engine: SubstitutionEngine,
        adapter: BaseContainerAdapter,
        settings: Settings,
    ) -> None:
        self._engine = engine
        self._adapter = adapter
        self._settings = settings
        self._state = BatchState.IDLE

    @property
    def state(self) -> BatchState:
        return self._state

    def run(
        self,
        records: Sequence[ReplacementRecord],
        template: TemplatePackage,
        original_content: str,
        original_values: Mapping[str, str],
        on_progress: ProgressCallback | None = None,
        cancel_event: threading.Event | None = None,
        checkpoint: Callable[[], None] | None = None,
        today: date | None = None,
    ) -> BatchReport:
        """Process every record and return the report with the final archive.

        Raises:
            RunFailureError: if the archive cannot be finalized.
        """
        today = today or date.today()
        total = len(records)
        archive = ArchiveBuilder(self._settings.archive_compression_level)
        outcomes: list[BatchOutcome] = []
        self._state = BatchState.RUNNING
        Log.info(f"Starting batch of {total} records from template {template.name}")

        for index, record in enumerate(records):
            if cancel_event is not None and cancel_event.is_set():
                Log.warning(f"Batch cancelled after {index} of {total} records")
                self._state = BatchState.ABORTED
                break

            _notify(on_progress, index / total * 90, f"Processing record {index + 1} of {total}...")
            outcome = self._process_record(record, template, original_content, original_values, today)
            if outcome.success:
                stored_name = archive.add(outcome.file_name, outcome.document)
                if stored_name != outcome.file_name:
                    outcome = BatchOutcome(
                        record_id=outcome.record_id,
                        success=True,
                        file_name=stored_name,
                        document=outcome.document,
                    )
            outcomes.append(outcome)

            if checkpoint is not None:
                checkpoint()

        _notify(on_progress, 95, "Building archive...")
        try:
            archive_bytes = archive.finalize()
        except ArchiveError as exc:
            self._state = BatchState.ABORTED
            Log.exception(f"Batch run failed: {exc}")
            raise RunFailureError(f"Batch run failed: {exc}") from exc
        _notify(on_progress, 100, "Done")

        if self._state is BatchState.RUNNING:
            self._state = BatchState.COMPLETED
        processed = len(archive)
        Log.info(f"Processed {processed}/{total} records")
        return BatchReport(
            processed_count=processed,
            total_count=total,
            archive=archive_bytes,
            outcomes=outcomes,
            state=self._state,
        )

    def _process_record(
        self,
        record: ReplacementRecord,
        template: TemplatePackage,
        original_content: str,
        original_values: Mapping[str, str],
        today: date,
    ) -> BatchOutcome:
        try:
            content = self._engine.substitute(
                original_content,
                original_values,
                record.selected_fields,
                record.new_values,
            )
            document = self._adapter.repackage(template.data, content)
            file_name = build_document_file_name(
                record.new_values,
                today,
                name_field=self._settings.file_name_field,
                prefix=self._settings.file_name_prefix,
                fallback=self._settings.file_name_fallback,
                max_length=self._settings.file_name_max_length,
                extension=self._adapter.EXTENSION,
            )
        except Exception as exc:
            Log.error(f"Record {record.id} failed: {exc}")
            return BatchOutcome(record_id=record.id, success=False, error=str(exc))

        Log.debug(f"Record {record.id} generated as {file_name}")
        return BatchOutcome(record_id=record.id, success=True, file_name=file_name, document=document)


def _notify(on_progress: ProgressCallback | None, percent: float, status: str) -> None:
    if on_progress is not None:
        on_progress(percent, status)
