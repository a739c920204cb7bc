"""
Décodage des blobs JSON stockés en base (columns, properties, widgets).

Les écritures restent permissives: un blob opaque est stocké tel quel.
Le décodage se fait à la lecture, en deux variantes:
- strict (``*_strict``): lève ParseError, pour les read-modify-write
- tolérant: log un warning et renvoie une structure vide, pour les projections
"""

import json
import logging
from typing import Any, Dict, List
from pydantic import BaseModel, ValidationError as PydanticValidationError
from notebase.core.errors import ParseError
from notebase.schemas.database import ColumnDef
from notebase.schemas.dashboard import WidgetDef

logger = logging.getLogger(__name__)


def dump_blob(value: Any, default: str) -> str:
    """Sérialise une valeur pour stockage; une string est gardée telle quelle"""
    if value is None:
        return default
    if isinstance(value, str):
        return value
    if isinstance(value, BaseModel):
        return value.model_dump_json(by_alias=True, exclude_none=True)
    if isinstance(value, list):
        value = [
            item.model_dump(by_alias=True, exclude_none=True) if isinstance(item, BaseModel) else item
            for item in value
        ]
    return json.dumps(value)


def _loads(raw: Any, expected: type, what: str):
    if raw is None or raw == "":
        return expected()
    if isinstance(raw, expected):
        return raw
    try:
        value = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise ParseError(f"Invalid {what} blob: {e}")
    if not isinstance(value, expected):
        raise ParseError(f"Invalid {what} blob: expected a JSON {expected.__name__}")
    return value


# func 1: properties

def parse_properties_strict(raw: Any) -> Dict[str, Any]:
    return _loads(raw, dict, "properties")


def parse_properties(raw: Any) -> Dict[str, Any]:
    try:
        return parse_properties_strict(raw)
    except ParseError as e:
        logger.warning(f"Ignoring properties: {e.detail}")
        return {}


# func 2: columns

def parse_columns_strict(raw: Any) -> List[ColumnDef]:
    items = _loads(raw, list, "columns")
    try:
        return [ColumnDef.model_validate(item) for item in items]
    except PydanticValidationError as e:
        raise ParseError(f"Invalid column definition: {e.error_count()} error(s)")


def parse_columns(raw: Any) -> List[ColumnDef]:
    try:
        items = _loads(raw, list, "columns")
    except ParseError as e:
        logger.warning(f"Ignoring columns: {e.detail}")
        return []

    columns = []
    for item in items:
        try:
            columns.append(ColumnDef.model_validate(item))
        except PydanticValidationError:
            logger.warning(f"Skipping malformed column: {item!r}")
    return columns


def dump_columns(columns: List[ColumnDef]) -> str:
    return json.dumps([c.model_dump(by_alias=True, exclude_none=True) for c in columns])


# func 3: widgets

def parse_widgets_strict(raw: Any) -> List[WidgetDef]:
    items = _loads(raw, list, "widgets")
    try:
        return [WidgetDef.model_validate(item) for item in items]
    except PydanticValidationError as e:
        raise ParseError(f"Invalid widget definition: {e.error_count()} error(s)")


def parse_widgets(raw: Any) -> List[WidgetDef]:
    try:
        items = _loads(raw, list, "widgets")
    except ParseError as e:
        logger.warning(f"Ignoring widgets: {e.detail}")
        return []

    widgets = []
    for item in items:
        try:
            widgets.append(WidgetDef.model_validate(item))
        except PydanticValidationError:
            logger.warning(f"Skipping malformed widget: {item!r}")
    return widgets


def dump_widgets(widgets: List[WidgetDef]) -> str:
    return json.dumps([w.model_dump(by_alias=True, exclude_none=True) for w in widgets])
