import json
import logging
import math
import numbers
from typing import Any, Iterable, List

from matplotlib import colors

import config
from model import UNSELECTABLE_KINDS, ShapeRevision, ToolKind

logger = logging.getLogger(__name__)

CONTENT_SCENE = "scene"
CONTENT_LOG = "log"

_TOOL_KIND_VALUES = {kind.value for kind in ToolKind}
_MULTI_SEGMENT_VALUES = {kind.value for kind in UNSELECTABLE_KINDS}


class InvalidDocumentError(ValueError):
    pass


def _is_number(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool) and math.isfinite(value)


def _require(condition: bool, index: int, message: str) -> None:
    if not condition:
        raise InvalidDocumentError(f"revision {index}: {message}")


def _validate_coordinate(value: Any, index: int, where: str) -> None:
    _require(isinstance(value, dict), index, f"{where} must be an object")
    _require(_is_number(value.get("x")) and _is_number(value.get("y")), index, f"{where} needs numeric x and y")


def validate_revision(payload: Any, index: int = 0) -> None:
    """Check one serialized revision field by field, raising InvalidDocumentError."""
    _require(isinstance(payload, dict), index, "must be an object")
    _require(isinstance(payload.get("id"), str) and payload["id"] != "", index, "id must be a non-empty string")
    tool_kind = payload.get("toolKind")
    _require(isinstance(tool_kind, str) and tool_kind in _TOOL_KIND_VALUES, index, f"unknown toolKind {payload.get('toolKind')!r}")
    for key in ("strokeColor", "fillColor"):
        value = payload.get(key)
        _require(isinstance(value, str) and colors.is_color_like(value), index, f"{key} must be a color string")
    width = payload.get("strokeWidth")
    _require(_is_number(width) and width > 0, index, "strokeWidth must be a positive number")
    z_index = payload.get("zIndex")
    _require(_is_number(z_index) and float(z_index).is_integer(), index, "zIndex must be an integer")
    _require(isinstance(payload.get("disabled"), bool), index, "disabled must be a boolean")
    segments = payload.get("segments")
    _require(isinstance(segments, list), index, "segments must be a list")
    for segment in segments:
        _require(isinstance(segment, dict), index, "segment must be an object")
        _validate_coordinate(segment.get("from"), index, "segment.from")
        _validate_coordinate(segment.get("to"), index, "segment.to")
    if payload["toolKind"] not in _MULTI_SEGMENT_VALUES:
        _require(len(segments) == 1, index, f"{payload['toolKind']} needs exactly one segment")


def encode_document(revisions: Iterable[ShapeRevision], content: str = CONTENT_SCENE) -> str:
    payload = {
        "format": config.DOCUMENT_FORMAT,
        "version": config.DOCUMENT_VERSION,
        "content": content,
        "revisions": [revision.to_dict() for revision in revisions],
    }
    return json.dumps(payload, indent=2)


def decode_document(text: str) -> List[ShapeRevision]:
    """Parse and validate a document; nothing is returned unless every revision passes."""
    try:
        payload = json.loads(text)
    except (TypeError, ValueError) as exc:
        raise InvalidDocumentError(f"not a JSON document: {exc}") from exc

    if isinstance(payload, dict):
        if payload.get("format") != config.DOCUMENT_FORMAT:
            raise InvalidDocumentError(f"unsupported format {payload.get('format')!r}")
        if payload.get("version") != config.DOCUMENT_VERSION:
            raise InvalidDocumentError(f"unsupported version {payload.get('version')!r}")
        items = payload.get("revisions")
    else:
        items = payload
    if not isinstance(items, list):
        raise InvalidDocumentError("revisions must be a list")

    for index, item in enumerate(items):
        validate_revision(item, index)
    return [ShapeRevision.from_dict(item) for item in items]


def save_document(path: str, text: str) -> None:
    with open(path, "w", encoding="utf-8") as file:
        file.write(text)
    logger.info("Wrote %s", path)


def load_document(path: str) -> str:
    with open(path, "r", encoding="utf-8") as file:
        return file.read()
