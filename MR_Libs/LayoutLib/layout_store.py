"""
Layout file storage for Minecraft Render.

Layouts are stored as JSON documents so that new texture slots or skin
arrangements can be described without code changes.

The layout file schema includes:
- schema_version
- name
- source_width / source_height
- canvases: identifier, file_name, width, height, fill, reference_file
- entries: name, source [x, y, w, h], canvas, dest [x, y], transform, scale,
  allow_overlap

Functions:
    layout_to_document: Build the JSON document for a layout
    layout_from_document: Parse a JSON document into a layout
    save_layout: Write a layout file
    load_layout: Read and validate a layout file
"""

from pathlib import Path
from typing import Any, Dict
import json
import logging

from MR_Libs.constants import FIELD_SCHEMA_VERSION, LAYOUT_SCHEMA_VERSION
from MR_Libs.errors import LayoutFormatError
from MR_Libs.LayoutLib.layout_models import SkinLayout
from MR_Libs.LayoutLib.layout_remapper import validate_layout

logger = logging.getLogger(__name__)


def layout_to_document(layout: SkinLayout) -> Dict[str, Any]:
    payload: Dict[str, Any] = {FIELD_SCHEMA_VERSION: LAYOUT_SCHEMA_VERSION}
    payload.update(layout.to_dict())
    return payload


def layout_from_document(payload: Any) -> SkinLayout:
    """
    Parse and validate a layout document.

    Args:
        payload: Decoded JSON document

    Returns:
        The validated SkinLayout

    Raises:
        LayoutFormatError: If the document is malformed or has an unknown schema version
        SkinRenderError: If the layout table itself is invalid (bounds, canvases, overlaps)
    """
    if not isinstance(payload, dict):
        raise LayoutFormatError("layout", f"expected an object, got {type(payload).__name__}")

    version = payload.get(FIELD_SCHEMA_VERSION, LAYOUT_SCHEMA_VERSION)
    if version != LAYOUT_SCHEMA_VERSION:
        raise LayoutFormatError(
            FIELD_SCHEMA_VERSION,
            f"unsupported version {version}, expected {LAYOUT_SCHEMA_VERSION}",
        )

    layout = SkinLayout.from_dict(payload)
    validate_layout(layout)
    return layout


def save_layout(layout: SkinLayout, layout_path: Path) -> Path:
    """
    Save a layout to a JSON file.

    Args:
        layout: The layout to save
        layout_path: Destination file path

    Returns:
        The path written
    """
    layout_path = Path(layout_path)
    layout_path.parent.mkdir(parents=True, exist_ok=True)
    layout_path.write_text(json.dumps(layout_to_document(layout), indent=2), encoding="utf-8")
    logger.info(f"Saved layout '{layout.name}' to {layout_path}")
    return layout_path


def load_layout(layout_path: Path) -> SkinLayout:
    """
    Load a layout from a JSON file.

    Args:
        layout_path: Path to the layout file

    Returns:
        The validated SkinLayout

    Raises:
        FileNotFoundError: If the file does not exist
        LayoutFormatError: If the file is not valid JSON or not a valid layout
    """
    layout_path = Path(layout_path)
    try:
        payload = json.loads(layout_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise LayoutFormatError(str(layout_path), f"invalid JSON: {e}")

    layout = layout_from_document(payload)
    logger.info(f"Loaded layout '{layout.name}' from {layout_path}")
    return layout
