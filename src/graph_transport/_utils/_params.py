import json
from enum import Enum
from typing import Any, Mapping, Optional
from urllib.parse import quote_plus

from ..models.errors import EncodingError


class ParamKind(str, Enum):
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    STRUCTURED = "structured"
    UPLOAD = "upload"


def classify_param(value: Any) -> ParamKind:
    """Tag a parameter value with the kind that decides how it is encoded."""
    from .._http._uploadable import UploadableIO

    if isinstance(value, UploadableIO):
        return ParamKind.UPLOAD
    if isinstance(value, str):
        return ParamKind.STRING
    # bool is a subclass of int, check it first
    if isinstance(value, bool):
        return ParamKind.BOOLEAN
    if isinstance(value, (int, float)):
        return ParamKind.NUMBER
    return ParamKind.STRUCTURED


def to_json(value: Any) -> str:
    try:
        return json.dumps(
            value, separators=(",", ":"), ensure_ascii=False, allow_nan=False
        )
    except (TypeError, ValueError) as e:
        raise EncodingError(
            f"Cannot serialize value of type {type(value).__name__}: {e}"
        ) from e


def serialize_param(value: Any) -> str:
    """Render a scalar parameter value as the text sent on the wire.

    Strings are used verbatim. Every other value is sent as its JSON text, so
    ``True`` becomes ``true``, ``None`` becomes ``null`` and a string nested in
    a list keeps its quotes.

    Raises:
        EncodingError: for upload values, which only multipart bodies can
            carry, and for values JSON cannot represent.
    """
    kind = classify_param(value)
    if kind is ParamKind.STRING:
        return value
    if kind in (ParamKind.NUMBER, ParamKind.BOOLEAN, ParamKind.STRUCTURED):
        return to_json(value)
    if kind is ParamKind.UPLOAD:
        raise EncodingError(
            "Uploadable values can only be sent in a multipart request body"
        )
    raise EncodingError(f"Unhandled parameter kind: {kind}")


def encode_params(params: Optional[Mapping[Any, Any]]) -> str:
    """Encode a mapping into a form-encoded query string.

    Entries are sorted by the string form of their key so that the output is
    stable, which signature generation upstream relies on.

    Args:
        params: mapping of parameter names to values. ``None`` is treated as an
            empty mapping.

    Returns:
        str: ``key1=value1&key2=value2``, or ``""`` for no parameters.

    Examples:
        >>> encode_params({"a": 2, "b": "My String"})
        'a=2&b=My+String'
    """
    items = sorted((params or {}).items(), key=lambda item: str(item[0]))
    return "&".join(
        f"{key}={quote_plus(serialize_param(value), safe='')}" for key, value in items
    )
