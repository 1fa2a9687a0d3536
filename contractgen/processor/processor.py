import threading
from collections.abc import Iterable, Mapping, Sequence

from contractgen.batch.models import BatchReport
from contractgen.batch.orchestrator import BatchOrchestrator, ProgressCallback
from contractgen.config.settings import Settings
from contractgen.container.base import BaseContainerAdapter
from contractgen.container.factory import ContainerAdapterFactory
from contractgen.container.models import TemplatePackage
from contractgen.container.template_loader import TemplateLoader
from contractgen.extraction.extractor import FieldExtractor
from contractgen.fields.catalog import FieldCatalog, build_default_catalog
from contractgen.logging.logger import Log
from contractgen.normalization.normalizer import ValueNormalizer
from contractgen.processor.models import TemplateAnalysis
from contractgen.records.exceptions import RecordValidationError
from contractgen.records.models import RecordQueue, ReplacementRecord
from contractgen.records.validator import validate_record
from contractgen.substitution.engine import SubstitutionEngine
from contractgen.substitution.models import SubstitutionMode


class Processor:
    """Orchestrates the contract generation workflow.

    Workflow: load template -> detect fields -> queue records -> generate batch.
    """

    def __init__(
        self,
        catalog: FieldCatalog,
        loader: TemplateLoader,
        adapter: BaseContainerAdapter,
        extractor: FieldExtractor,
        orchestrator: BatchOrchestrator,
    ) -> None:
        self._catalog = catalog
        self._loader = loader
        self._adapter = adapter
        self._extractor = extractor
        self._orchestrator = orchestrator

    @property
    def catalog(self) -> FieldCatalog:
        return self._catalog

    @property
    def loader(self) -> TemplateLoader:
        return self._loader

    def analyze(self, template: TemplatePackage) -> TemplateAnalysis:
        """Read the template body and detect the current field values."""
        Log.info(f"Analyzing template {template.name} ({template.size_bytes} bytes)")
        content = self._adapter.read_content(template.data)
        values = self._extractor.extract(content)
        return TemplateAnalysis(template=template, content=content, values=values)

    def queue_record(
        self,
        analysis: TemplateAnalysis,
        selected_fields: Iterable[str],
        new_values: Mapping[str, str],
        queue: RecordQueue | None = None,
        record_id: int | str | None = None,
    ) -> ReplacementRecord:
        """Validate the entered values and turn them into a queued record.

        Raises:
            RecordValidationError: if any value fails validation.
        """
        selected = list(selected_fields)
        result = validate_record(
            selected, new_values, self._catalog, analysis.values.detected_fields
        )
        if not result.is_valid:
            raise RecordValidationError(result.message)
        for warning in result.warnings:
            Log.warning(f"{warning.field}: {warning.message}")

        record = ReplacementRecord.create(selected, new_values, record_id)
        if queue is not None:
            queue.add(record)
        Log.info(f"Queued record {record.id} with {len(record.selected_fields)} fields")
        return record

    def generate(
        self,
        analysis: TemplateAnalysis,
        records: Sequence[ReplacementRecord],
        on_progress: ProgressCallback | None = None,
        cancel_event: threading.Event | None = None,
    ) -> BatchReport:
        """Produce one document per record and return the batch report."""
        return self._orchestrator.run(
            records,
            analysis.template,
            analysis.content,
            analysis.values,
            on_progress=on_progress,
            cancel_event=cancel_event,
        )


def build_processor(settings: Settings) -> Processor:
    """Build a Processor with all required components."""
    catalog = build_default_catalog()
    adapter = ContainerAdapterFactory.create(settings)
    loader = TemplateLoader(adapter, settings.max_template_size_bytes)
    extractor = FieldExtractor(catalog, ValueNormalizer(catalog))
    engine = SubstitutionEngine(SubstitutionMode(settings.substitution_mode.lower()))
    orchestrator = BatchOrchestrator(engine, adapter, settings)
    return Processor(
        catalog=catalog,
        loader=loader,
        adapter=adapter,
        extractor=extractor,
        orchestrator=orchestrator,
    )
