"""Result serializer — deterministic JSON for tool results."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from contracts.errors import EncodingError
from contracts.value import Value


def encode_json(result: Mapping[str, Any]) -> str:
    """Encode *result* as compact JSON with sorted keys.

    Nested records are normalised through ``Value`` first, so lists of
    mappings are encoded once and unknown objects become strings.
    Raises ``EncodingError`` for values JSON cannot carry (bytes, NaN,
    text that is not valid UTF-8).
    """
    native = Value.from_native(result).to_native()
    try:
        text = json.dumps(
            native,
            sort_keys=True,
            separators=(",", ":"),
            ensure_ascii=False,
            allow_nan=False,
        )
        # Lone surrogates survive json.dumps but not the transport.
        text.encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise EncodingError(str(exc)) from exc
    return text


def to_json(result: Mapping[str, Any]) -> str:
    """Like ``encode_json`` but returns ``"{}"`` when encoding fails."""
    try:
        return encode_json(result)
    except EncodingError:
        return "{}"
