"""Spreadsheet and catalog loaders for transliteration test cases."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

import yaml
from openpyxl import load_workbook

from case_types import CatalogCase, TestCase
from exceptions import CatalogLoadError, FixtureLoadError

logger = logging.getLogger("fixture_loader")

# Fixture columns: TC ID, Test case name, Input length type, Input, Expected output,
# Actual output, Status, Accuracy justification, What is covered
FIXTURE_COLUMNS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("tc_id", ("TC ID",)),
    ("test_case_name", ("Test case name",)),
    ("input_length_type", ("Input length type",)),
    ("input", ("Input",)),
    ("expected_output", ("Expected output",)),
    ("actual_output", ("Actual output",)),
    ("status", ("Status",)),
    (
        "accuracy_justification",
        ("Accuracy justification / Description of issue type", "Accuracy justification"),
    ),
    ("what_is_covered", ("What is covered by the test", "What is covered")),
)


def _cell_text(value: Any) -> str:
    """Coerce a spreadsheet cell to text; missing and empty cells become ''."""
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def load_fixture_rows(path: Path) -> List[Dict[str, Any]]:
    """
    Read the first sheet of a fixture workbook into header-keyed rows.

    Rows keep file order. Fully blank rows are skipped and blank cells are
    left out of the row mapping; no other validation happens here.
    """
    path = Path(path)
    if not path.exists():
        raise FixtureLoadError(f"Fixture file not found: {path}", file_path=str(path))

    try:
        workbook = load_workbook(path, read_only=True, data_only=True)
    except Exception as exc:
        raise FixtureLoadError(f"Failed to open fixture workbook: {exc}", file_path=str(path)) from exc

    try:
        sheet = workbook.worksheets[0]
        rows = sheet.iter_rows(values_only=True)
        header = next(rows, None)
        if header is None:
            return []
        names = [_cell_text(value).strip() for value in header]

        records: List[Dict[str, Any]] = []
        for values in rows:
            record = {
                name: value
                for name, value in zip(names, values)
                if name and value is not None and value != ""
            }
            if record:
                records.append(record)
        return records
    finally:
        workbook.close()


def normalize_row(row: Mapping[str, Any]) -> TestCase:
    """Map a raw fixture row onto a TestCase, substituting '' for absent fields."""
    values: Dict[str, str] = {}
    for field_name, headers in FIXTURE_COLUMNS:
        raw = None
        for header in headers:
            if row.get(header) is not None:
                raw = row[header]
                break
        values[field_name] = _cell_text(raw)
    return TestCase(**values)


def normalize_rows(rows: Iterable[Mapping[str, Any]]) -> List[TestCase]:
    return [normalize_row(row) for row in rows]


def filter_cases(cases: Iterable[TestCase]) -> List[TestCase]:
    """
    Drop cases with a blank id or input, and every repeat of an id already kept.

    The first occurrence of an id wins regardless of the other fields.
    """
    seen_ids: set[str] = set()
    kept: List[TestCase] = []
    dropped = 0
    for case in cases:
        if not case.is_runnable() or case.tc_id in seen_ids:
            dropped += 1
            continue
        seen_ids.add(case.tc_id)
        kept.append(case)
    logger.debug(f"Kept {len(kept)} case(s), dropped {dropped}")
    return kept


def load_test_cases(
    path: Path,
    only_ids: Optional[Iterable[str]] = None,
) -> List[TestCase]:
    """Load, normalize and filter the fixture spreadsheet."""
    cases = filter_cases(normalize_rows(load_fixture_rows(path)))
    if only_ids:
        id_filter = set(only_ids)
        cases = [case for case in cases if case.tc_id in id_filter]
    return cases


def _parse_catalog_entry(data: Any, index: int, file_path: str) -> CatalogCase:
    """Parse one canonical case mapping."""
    if not isinstance(data, dict):
        raise CatalogLoadError("Catalog entry must be a mapping", file_path=file_path, index=index)

    missing = [key for key in ("id", "singlish", "expectedSinhala") if key not in data]
    if missing:
        raise CatalogLoadError(
            f"Catalog entry is missing {', '.join(missing)}",
            file_path=file_path,
            index=index,
        )

    return CatalogCase(
        id=str(data["id"]),
        singlish=str(data["singlish"]),
        expected_sinhala=str(data["expectedSinhala"]),
        category=str(data.get("category") or "General"),
        description=str(data.get("description") or ""),
    )


def load_case_catalog(path: Path) -> List[CatalogCase]:
    """Load the canonical case list (JSON or YAML array of mappings)."""
    path = Path(path)
    if not path.exists():
        raise CatalogLoadError(f"Case catalog not found: {path}", file_path=str(path))

    try:
        raw = path.read_text(encoding="utf-8")
        if path.suffix.lower() in {".yml", ".yaml"}:
            data = yaml.safe_load(raw)
        else:
            data = json.loads(raw)
    except Exception as exc:
        raise CatalogLoadError(f"Failed to parse case catalog: {exc}", file_path=str(path)) from exc

    if not isinstance(data, list):
        raise CatalogLoadError("Case catalog must be a list of cases", file_path=str(path))

    return [_parse_catalog_entry(item, i, str(path)) for i, item in enumerate(data)]


def catalog_from_cases(cases: Sequence[TestCase]) -> List[CatalogCase]:
    """Derive canonical entries from fixture cases so titles line up with the run."""
    return [
        CatalogCase(
            id=case.tc_id,
            singlish=case.input,
            expected_sinhala=case.expected_output,
            category=case.input_length_type or "General",
            description=case.test_case_name,
        )
        for case in cases
    ]
