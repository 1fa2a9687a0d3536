"""Pattern-based field detection over a template's raw body content.

Processing flow, per catalog field in order:
1. Table-aware pattern on the structural copy (line breaks flattened, markup
   kept), so a label cell and its neighbouring value cell stay adjacent.
2. Plain patterns, in declaration order, on the de-markupped and
   whitespace-collapsed copy. The first non-empty capture wins.
3. The combined "from date A to date B valid" sentence supplies both contract
   dates at once and overrides the single-date patterns.
4. Normalize, then keep the value only if the field accepts it.
"""

import re

from contractgen.extraction.models import ExtractionResult
from contractgen.fields.catalog import FieldCatalog
from contractgen.fields.models import FieldDefinition
from contractgen.logging.logger import Log
from contractgen.normalization.base import BaseValueNormalizer
from contractgen.normalization.normalizer import clean_capture

START_DATE_FIELD = "contract_start_date"
END_DATE_FIELD = "contract_end_date"

_TAG_RE = re.compile(r"<[^>]+>")
_WHITESPACE_RE = re.compile(r"\s+")
_LINE_BREAK_RE = re.compile(r"\r\n|\n|\r")
_DATE_RANGE_RE = re.compile(r"از\s*تاریخ\s*(.*?)\s*تا\s*(.*?)\s*معتبر است", re.IGNORECASE)


def plain_text(content: str) -> str:
    """Drop every tag and collapse whitespace."""
    return _WHITESPACE_RE.sub(" ", _TAG_RE.sub(" ", content)).strip()


def structural_text(content: str) -> str:
    """Flatten line breaks so multi-line cell markup matches as one run."""
    return _LINE_BREAK_RE.sub(" ", content)


class FieldExtractor:
    """Detects catalog fields in document body content."""

    def __init__(self, catalog: FieldCatalog, normalizer: BaseValueNormalizer) -> None:
        self._catalog = catalog
        self._normalizer = normalizer

    def extract(self, content: str) -> ExtractionResult:
        """Return the accepted value of every field detected in *content*."""
        if not content:
            return ExtractionResult()

        text = plain_text(content)
        structure = structural_text(content)
        date_range = self._match_date_range(text)

        values: dict[str, str] = {}
        for definition in self._catalog.definitions():
            candidate = self._find_candidate(definition, text, structure)
            if definition.id in date_range:
                candidate = date_range[definition.id]
            if not candidate:
                continue

            value = self._normalizer.normalize(definition.id, candidate)
            if not value:
                continue
            if not definition.accept(value):
                Log.debug(f"Rejected {definition.id} candidate {value!r}")
                continue
            values[definition.id] = value

        Log.info(f"Detected {len(values)} of {len(self._catalog)} fields")
        return ExtractionResult(values)

    # ------------------------------------------------------------------
    # Candidate search
    # ------------------------------------------------------------------

    def _find_candidate(
        self,
        definition: FieldDefinition,
        text: str,
        structure: str,
    ) -> str:
        if definition.table_pattern is not None:
            match = definition.table_pattern.search(structure)
            if match:
                candidate = clean_capture(match.group(1))
                if candidate:
                    return candidate

        for pattern in definition.detection_patterns:
            match = pattern.search(text)
            if not match:
                continue
            candidate = clean_capture(match.group(1))
            if candidate:
                return candidate
        return ""

    @staticmethod
    def _match_date_range(text: str) -> dict[str, str]:
        match = _DATE_RANGE_RE.search(text)
        if not match:
            return {}
        found: dict[str, str] = {}
        start = clean_capture(match.group(1))
        end = clean_capture(match.group(2))
        if start:
            found[START_DATE_FIELD] = start
        if end:
            found[END_DATE_FIELD] = end
        return found
