"""Reading scan records from a JSON dump."""

import json
import logging
from dataclasses import fields
from pathlib import Path
from typing import Any

from scandump.database.models import FileAttributes, ScanRecord

logger = logging.getLogger(__name__)


class ScanFileError(Exception):
    """Raised when the scan dump cannot be read or has an invalid shape."""


_STRING_FIELDS = {"file_path", "file_name", "file_extension"}
_BOOL_FIELDS = {"read_failure"}

# "FilePath", "filepath" and "file_path" all normalize to "filepath"
_FIELD_BY_KEY = {f.name.replace("_", ""): f.name for f in fields(ScanRecord)}

_ATTRIBUTE_BY_NAME = {
    flag.name.replace("_", "").lower(): flag for flag in FileAttributes if flag.name
}


def load_scan_records(path: Path) -> list[ScanRecord]:
    """Read the whole JSON array at path into memory."""
    logger.info("Loading scan records from %s", path)
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ScanFileError(f"Malformed JSON in {path}: {e}") from e
    except OSError as e:
        raise ScanFileError(f"Cannot read {path}: {e}") from e

    records = parse_scan_records(data)
    logger.info("Loaded %d records from %s", len(records), path)
    return records


def parse_scan_records(data: Any) -> list[ScanRecord]:
    if not isinstance(data, list):
        raise ScanFileError(f"Expected a JSON array of records, got {type(data).__name__}")
    return [_parse_record(item, index) for index, item in enumerate(data)]


def _parse_record(item: Any, index: int) -> ScanRecord:
    if not isinstance(item, dict):
        raise ScanFileError(f"Record {index}: expected an object, got {type(item).__name__}")

    values: dict[str, Any] = {}
    for key, value in item.items():
        name = _FIELD_BY_KEY.get(_normalize_key(key))
        if name is None:
            continue
        try:
            values[name] = _coerce(name, value)
        except (TypeError, ValueError) as e:
            raise ScanFileError(f"Record {index}: invalid {key!r}: {e}") from e

    return ScanRecord(**values)


def _normalize_key(key: str) -> str:
    return key.replace("_", "").lower()


def _coerce(name: str, value: Any) -> Any:
    if name in _STRING_FIELDS:
        if value is not None and not isinstance(value, str):
            raise TypeError(f"expected a string, got {type(value).__name__}")
        if value is not None:
            # lone surrogates from \ud800-style escapes are not valid UTF-8
            value.encode("utf-8")
        return value

    if name in _BOOL_FIELDS:
        if not isinstance(value, bool):
            raise TypeError(f"expected a boolean, got {type(value).__name__}")
        return value

    if name == "attributes" and isinstance(value, str):
        return int(parse_attributes(value))

    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"expected an integer, got {type(value).__name__}")
    return value


def parse_attributes(text: str) -> FileAttributes:
    """Parse a comma-separated attribute list such as "ReadOnly, Archive"."""
    result = FileAttributes.NONE
    for part in text.split(","):
        name = part.strip().replace("_", "").lower()
        if not name:
            continue
        if name.isdigit():
            result |= FileAttributes(int(name))
            continue
        flag = _ATTRIBUTE_BY_NAME.get(name)
        if flag is None:
            raise ValueError(f"unknown file attribute {part.strip()!r}")
        result |= flag
    return result
