"""Literal, field-scoped rewriting of template body content.

For every selected field the value detected in the template is escaped and
each literal occurrence of it is replaced by the record's new value. The
engine assumes a detected value is specific enough that an unrelated identical
string elsewhere in the document is acceptable collateral; ``BOUNDED`` mode
narrows this to occurrences that are not part of a longer word or number.
"""

import re
from collections.abc import Iterable, Mapping
from xml.sax.saxutils import escape

from contractgen.logging.logger import Log
from contractgen.substitution.exceptions import SubstitutionError
from contractgen.substitution.models import SubstitutionMode, SubstitutionResult


class SubstitutionEngine:
    """Produces a per-record variant of the template content."""

    def __init__(
        self,
        mode: SubstitutionMode = SubstitutionMode.ALL,
        escape_xml: bool = True,
    ) -> None:
        self._mode = mode
        self._escape_xml = escape_xml

    @property
    def mode(self) -> SubstitutionMode:
        return self._mode

    def substitute(
        self,
        content: str,
        original_values: Mapping[str, str],
        selected_fields: Iterable[str],
        new_values: Mapping[str, str],
    ) -> str:
        """Return *content* with the selected fields' values replaced.

        Raises:
            SubstitutionError: on an unexpected internal failure. A field whose
                original value does not occur is not an error.
        """
        return self.substitute_with_report(
            content, original_values, selected_fields, new_values
        ).content

    def substitute_with_report(
        self,
        content: str,
        original_values: Mapping[str, str],
        selected_fields: Iterable[str],
        new_values: Mapping[str, str],
    ) -> SubstitutionResult:
        """Same as ``substitute`` but also reports occurrence counts per field."""
        try:
            return self._run(content, original_values, selected_fields, new_values)
        except SubstitutionError:
            raise
        except Exception as exc:
            raise SubstitutionError(f"Substitution failed: {exc}") from exc

    def _run(
        self,
        content: str,
        original_values: Mapping[str, str],
        selected_fields: Iterable[str],
        new_values: Mapping[str, str],
    ) -> SubstitutionResult:
        result = SubstitutionResult(content=content)

        for field_id in dict.fromkeys(selected_fields):
            old_value = original_values.get(field_id) or ""
            new_value = new_values.get(field_id) or ""
            if not old_value or not new_value or old_value == new_value:
                continue

            replacement = escape(new_value) if self._escape_xml else new_value
            pattern = self._compile(old_value)
            result.content, count = pattern.subn(lambda _m: replacement, result.content)
            result.occurrences[field_id] = count

            if count == 0:
                result.missing_fields.append(field_id)
                Log.debug(f"No occurrences of {field_id} value {old_value!r} in content")
            else:
                Log.debug(f"Replaced {count} occurrences of {old_value!r} with {new_value!r}")

        return result

    def _compile(self, value: str) -> re.Pattern[str]:
        literal = re.escape(value)
        if self._mode is SubstitutionMode.BOUNDED:
            return re.compile(rf"(?<!\w){literal}(?!\w)")
        return re.compile(literal)
