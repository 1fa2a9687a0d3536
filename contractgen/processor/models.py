from dataclasses import dataclass

from contractgen.container.models import TemplatePackage
from contractgen.extraction.models import ExtractionResult


@dataclass(frozen=True)
class TemplateAnalysis:
    """A loaded template together with its body content and detected values."""

    template: TemplatePackage
    content: str
    values: ExtractionResult
