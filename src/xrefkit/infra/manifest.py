"""YAML manifest loader for pipeline outputs.

A manifest lists the documents each pipeline produced, using the same
attribute names producers write (``Xref``, ``Link``, ``Children``)::

    pipelines:
      Content:
        - Xref: intro
          Link: /docs/intro.html
          Children:
            - Xref: intro-setup
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from xrefkit.core.exceptions import ManifestError
from xrefkit.core.logging import get_logger
from xrefkit.core.types import CHILDREN_KEY, LINK_KEY, XREF_KEY, Document, PipelineOutputs

logger = get_logger(__name__)


def load_manifest(path: Path) -> PipelineOutputs:
    """Load pipeline outputs from a YAML manifest file."""
    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ManifestError(f"Invalid YAML in {path}: {e}") from e
    except OSError as e:
        raise ManifestError(f"Cannot read manifest {path}: {e}") from e

    outputs = parse_manifest(data)
    logger.info("Loaded %d pipeline(s) from %s", len(outputs.pipelines), path)
    return outputs


def parse_manifest(data: Any) -> PipelineOutputs:
    """Build pipeline outputs from already-parsed manifest data."""
    if data is None:
        return PipelineOutputs()
    if not isinstance(data, dict):
        msg = f"Manifest root must be a mapping, got {type(data).__name__}"
        raise ManifestError(msg)

    pipelines = data.get("pipelines") or {}
    if not isinstance(pipelines, dict):
        msg = f"Manifest 'pipelines' must be a mapping, got {type(pipelines).__name__}"
        raise ManifestError(msg)

    parsed: dict[str, list[Document]] = {}
    for name, entries in pipelines.items():
        if entries is None:
            entries = []
        if not isinstance(entries, list):
            msg = f"Pipeline {name!r} must list its documents, got {type(entries).__name__}"
            raise ManifestError(msg)
        location = str(name)
        parsed[location] = [
            _parse_document(entry, f"{location}[{index}]") for index, entry in enumerate(entries)
        ]
    return PipelineOutputs(pipelines=parsed)


def _parse_document(entry: Any, location: str) -> Document:
    if not isinstance(entry, dict):
        msg = f"{location}: document must be a mapping, got {type(entry).__name__}"
        raise ManifestError(msg)

    for key in (XREF_KEY, LINK_KEY):
        value = entry.get(key)
        if value is not None and not isinstance(value, str):
            msg = f"{location}: {key} must be a string, got {type(value).__name__}"
            raise ManifestError(msg)

    children = entry.get(CHILDREN_KEY)
    if children is not None and not isinstance(children, list):
        msg = f"{location}: {CHILDREN_KEY} must be a list, got {type(children).__name__}"
        raise ManifestError(msg)

    attributes = dict(entry)
    attributes[CHILDREN_KEY] = [
        _parse_document(child, f"{location}.{CHILDREN_KEY}[{index}]")
        for index, child in enumerate(children or [])
    ]
    return Document.from_attributes(attributes)
