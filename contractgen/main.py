from datetime import date
from pathlib import Path

from contractgen.batch.file_naming import build_archive_file_name
from contractgen.config.settings import Settings
from contractgen.logging.logger import Log
from contractgen.processor.processor import build_processor
from contractgen.records.loader import load_records
from contractgen.records.models import ReplacementRecord
from contractgen.records.validator import validate_record


def main() -> None:
    """Entry point: load template -> detect fields -> validate records -> write archive."""
    settings = Settings()
    Log.configure(settings.log_level)

    processor = build_processor(settings)
    template = processor.loader.load(Path(settings.template_path))
    analysis = processor.analyze(template)

    records: list[ReplacementRecord] = []
    for record in load_records(Path(settings.records_path)):
        result = validate_record(
            record.selected_fields,
            record.new_values,
            processor.catalog,
            analysis.values.detected_fields,
        )
        if not result.is_valid:
            Log.warning(f"Skipping record {record.id}: {result.message}")
            continue
        records.append(record)

    report = processor.generate(
        analysis,
        records,
        on_progress=lambda percent, status: Log.info(f"[{percent:.0f}%] {status}"),
    )

    output_path = Path(settings.output_dir) / build_archive_file_name(date.today())
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(report.archive)
    Log.info(
        f"Wrote {output_path}: {report.processed_count}/{report.total_count} documents, "
        f"{report.failed_count} failed"
    )


if __name__ == "__main__":
    main()
