"""Load raw asset records from JSON or YAML documents.

A document holds one record (a mapping) or a list of records. The
loader only parses; shape checks belong to the validation engine.
"""

from __future__ import annotations

import datetime as dt
import json
from pathlib import Path
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

JSON_SUFFIXES = frozenset({".json"})
YAML_SUFFIXES = frozenset({".yaml", ".yml"})


class RecordLoadError(ValueError):
    """A document could not be decoded as JSON or YAML."""

    def __init__(self, source: str, reason: str) -> None:
        super().__init__(f"Cannot parse {source}: {reason}")
        self.source = source
        self.reason = reason


def _plain(value: Any) -> Any:
    """Convert YAML-native scalars the engine does not model back to text.

    Unquoted YAML timestamps load as datetime objects; asset records carry
    them as ISO strings.
    """
    if isinstance(value, dict):
        return {key: _plain(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_plain(item) for item in value]
    if isinstance(value, (dt.datetime, dt.date)):
        return value.isoformat()
    return value


def _load_json(text: str, source: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise RecordLoadError(source, str(exc)) from exc


def _load_yaml(text: str, source: str) -> Any:
    try:
        return _plain(YAML(typ="safe").load(text))
    except YAMLError as exc:
        raise RecordLoadError(source, str(exc)) from exc


def parse_records(text: str, *, source: str = "<stdin>", suffix: str = "") -> Any:
    """Parse *text* as JSON or YAML.

    *suffix* picks the format (``.json``, ``.yaml``/``.yml``). Without a
    known suffix JSON is tried first; YAML is a superset for the shapes
    records take, so a document that is not JSON is re-read as YAML.
    """
    suffix = suffix.lower()
    if suffix in JSON_SUFFIXES:
        return _load_json(text, source)
    if suffix in YAML_SUFFIXES:
        return _load_yaml(text, source)
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return _load_yaml(text, source)


def read_records(path: Path) -> Any:
    """Read and parse the document at *path*.

    Raises:
        FileNotFoundError: If *path* does not exist.
        RecordLoadError: If the content is neither valid JSON nor YAML.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise RecordLoadError(str(path), "file is not UTF-8 text") from exc
    return parse_records(text, source=str(path), suffix=path.suffix)
