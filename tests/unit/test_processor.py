from unittest.mock import MagicMock

import pytest

from contractgen.batch.orchestrator import BatchOrchestrator
from contractgen.config.settings import Settings
from contractgen.container.models import TemplatePackage
from contractgen.container.template_loader import TemplateLoader
from contractgen.container.zip_adapter import OdtContainerAdapter
from contractgen.extraction.extractor import FieldExtractor
from contractgen.extraction.models import ExtractionResult
from contractgen.fields.catalog import build_default_catalog
from contractgen.processor.models import TemplateAnalysis
from contractgen.processor.processor import Processor, build_processor
from contractgen.records.exceptions import RecordValidationError
from contractgen.records.models import RecordQueue
from contractgen.substitution.models import SubstitutionMode

_TEMPLATE = TemplatePackage(name="contract.docx", data=b"zip-bytes")


def _make_processor() -> tuple[Processor, MagicMock, MagicMock, MagicMock]:
    adapter = MagicMock()
    extractor = MagicMock(spec=FieldExtractor)
    orchestrator = MagicMock(spec=BatchOrchestrator)
    adapter.read_content.return_value = "<w:t>نام پدر: محمد</w:t>"
    extractor.extract.return_value = ExtractionResult({"owner_father_name": "محمد"})
    processor = Processor(
        catalog=build_default_catalog(),
        loader=MagicMock(spec=TemplateLoader),
        adapter=adapter,
        extractor=extractor,
        orchestrator=orchestrator,
    )
    return processor, adapter, extractor, orchestrator


def _make_analysis() -> TemplateAnalysis:
    return TemplateAnalysis(
        template=_TEMPLATE,
        content="<w:t>نام پدر: محمد</w:t>",
        values=ExtractionResult({"owner_father_name": "محمد"}),
    )


class TestAnalyze:
    def test_reads_content_and_extracts_values(self) -> None:
        processor, adapter, extractor, _ = _make_processor()

        analysis = processor.analyze(_TEMPLATE)

        adapter.read_content.assert_called_once_with(b"zip-bytes")
        extractor.extract.assert_called_once_with("<w:t>نام پدر: محمد</w:t>")
        assert analysis.template is _TEMPLATE
        assert analysis.values["owner_father_name"] == "محمد"


class TestQueueRecord:
    def test_valid_record_is_queued(self) -> None:
        processor, *_ = _make_processor()
        queue = RecordQueue()

        record = processor.queue_record(
            _make_analysis(),
            ["owner_father_name"],
            {"owner_father_name": "احمد"},
            queue=queue,
            record_id=1,
        )

        assert record.id == 1
        assert record.new_values["owner_father_name"] == "احمد"
        assert 1 in queue

    def test_back_to_back_records_get_distinct_ids(self) -> None:
        processor, *_ = _make_processor()
        queue = RecordQueue()

        for name in ("احمد", "رضا", "کاظم"):
            processor.queue_record(
                _make_analysis(), ["owner_father_name"], {"owner_father_name": name}, queue=queue
            )

        assert len(queue) == 3
        ids = [record.id for record in queue]
        assert ids == sorted(set(ids))

    def test_invalid_record_raises_with_message(self) -> None:
        processor, *_ = _make_processor()
        queue = RecordQueue()

        with pytest.raises(RecordValidationError, match="Invalid fields: نام پدر"):
            processor.queue_record(
                _make_analysis(), ["owner_father_name"], {"owner_father_name": "Ahmad"}, queue=queue
            )
        assert len(queue) == 0

    def test_empty_selection_raises(self) -> None:
        processor, *_ = _make_processor()
        with pytest.raises(RecordValidationError, match="Select at least one field"):
            processor.queue_record(_make_analysis(), [], {})


class TestGenerate:
    def test_delegates_to_orchestrator(self) -> None:
        processor, _, _, orchestrator = _make_processor()
        analysis = _make_analysis()
        records = [MagicMock()]
        progress = MagicMock()

        report = processor.generate(analysis, records, on_progress=progress)

        orchestrator.run.assert_called_once_with(
            records,
            _TEMPLATE,
            analysis.content,
            analysis.values,
            on_progress=progress,
            cancel_event=None,
        )
        assert report is orchestrator.run.return_value


class TestBuildProcessor:
    def test_wires_configured_components(self) -> None:
        processor = build_processor(
            Settings(container_format="odt", substitution_mode="BOUNDED")
        )
        assert isinstance(processor._adapter, OdtContainerAdapter)
        assert processor._orchestrator._engine.mode is SubstitutionMode.BOUNDED
        assert len(processor.catalog) == 9

    def test_rejects_unknown_substitution_mode(self) -> None:
        with pytest.raises(ValueError):
            build_processor(Settings(substitution_mode="fuzzy"))
