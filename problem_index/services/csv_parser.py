"""CSV parsing for company problem lists.

Source files are loosely structured: header names vary between companies
and columns are not guaranteed. This module turns each file into an
ordered list of ``RawRecord`` values; nothing downstream looks at raw rows.

Updates:
    v0.1.0 - 2026-09-03 - Added header-tolerant title and frequency extraction.
"""

from __future__ import annotations

import csv
import io
import logging
import math
import re
from typing import Any, Mapping, Optional

from ..core.models import RawRecord

logger = logging.getLogger(__name__)

TITLE_KEYS: tuple[str, ...] = (
    "title",
    "problem",
    "problem title",
    "question",
    "question title",
    "name",
)
FREQUENCY_KEYS: tuple[str, ...] = ("frequency", "freq", "count", "occurrences")

_BOOLEAN_LITERALS = frozenset({"true", "TRUE", "True", "false", "FALSE", "False"})
_numeric_regex = re.compile(r"^\s*-?(\d+\.?|\.\d+|\d+\.\d+)([eE][-+]?\d+)?\s*$")
_leading_int_regex = re.compile(r"^\s*([+-]?\d+)")

ParsedRows = list[dict[str, str]]


class CsvProblemParser:
    """Converts raw CSV text into per-file problem records."""

    def parse_csv(self, content: str) -> ParsedRows:
        """Parse CSV text into row dictionaries keyed by normalized header.

        Args:
            content (str): Raw CSV file content.

        Returns:
            list[dict[str, str]]: Rows with trimmed, lower-cased header keys.
                Malformed files yield an empty list.
        """

        text = content.lstrip("\ufeff")
        try:
            reader = csv.reader(io.StringIO(text))
            header: Optional[list[str]] = None
            rows: ParsedRows = []
            for cells in reader:
                if not cells:
                    continue
                if header is None:
                    header = [cell.strip().lower() for cell in cells]
                    continue
                rows.append(
                    {key: value for key, value in zip(header, cells) if key}
                )
        except csv.Error as exc:
            logger.warning("CSV parse error: %s", exc)
            return []
        return rows

    def extract_problems(self, rows: list[Mapping[str, Any]]) -> list[RawRecord]:
        """Pull ``(title, frequency)`` records out of parsed rows.

        Rows without a usable title are skipped and duplicate titles within
        the same file keep their first occurrence.
        """

        problems: list[RawRecord] = []
        seen: set[str] = set()

        for row in rows:
            title = self.extract_title(row)
            if not title:
                continue

            key = title.lower().strip()
            if key in seen:
                continue
            seen.add(key)

            problems.append(
                RawRecord(title=title.strip(), frequency=self.extract_frequency(row))
            )

        return problems

    def extract_title(self, row: Mapping[str, Any]) -> Optional[str]:
        for key in TITLE_KEYS:
            value = row.get(key)
            if _is_textual(value):
                return value

        for value in row.values():
            if _is_textual(value) and value.strip():
                return value

        return None

    def extract_frequency(self, row: Mapping[str, Any]) -> int:
        for key in FREQUENCY_KEYS:
            frequency = _parse_int(row.get(key))
            if frequency is not None:
                return frequency
        return 1

    def parse_all(
        self, repo_data: Mapping[str, Mapping[str, str]]
    ) -> dict[str, dict[str, list[RawRecord]]]:
        """Parse every company/window file fetched from the archive.

        Args:
            repo_data (Mapping[str, Mapping[str, str]]): ``company -> window -> csv text``.

        Returns:
            dict[str, dict[str, list[RawRecord]]]: Records per company and window.
        """

        parsed: dict[str, dict[str, list[RawRecord]]] = {}
        for company_name, windows in repo_data.items():
            parsed[company_name] = {}
            for window, content in windows.items():
                problems = self.extract_problems(self.parse_csv(content))
                parsed[company_name][window] = problems
                logger.debug(
                    "Parsed %s/%s: %s problems", company_name, window, len(problems)
                )
        return parsed


def _is_textual(value: Any) -> bool:
    """Return True for non-empty string cells that are not numbers or booleans."""

    if not isinstance(value, str) or not value:
        return False
    return value not in _BOOLEAN_LITERALS and not _numeric_regex.match(value)


def _parse_int(value: Any) -> Optional[int]:
    """Parse an integer prefix the way spreadsheet exports expect (``87.5`` -> 87)."""

    if value is None:
        return None
    text = str(value)
    if _numeric_regex.match(text):
        number = float(text)
        return int(number) if math.isfinite(number) else None
    match = _leading_int_regex.match(text)
    return int(match.group(1)) if match else None
