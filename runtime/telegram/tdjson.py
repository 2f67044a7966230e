"""ctypes binding to TDLib's JSON interface (libtdjson)."""

from __future__ import annotations

import ctypes
import ctypes.util
import json
from typing import Any

from contracts.errors import MissingConfigurationError

_LIBRARY_NAMES = ("tdjson", "tdjson.dll", "libtdjson.so", "libtdjson.dylib")


def find_tdjson(path: str | None = None) -> str:
    """Resolve the libtdjson shared library path."""
    if path:
        return path
    for name in _LIBRARY_NAMES:
        found = ctypes.util.find_library(name)
        if found:
            return found
    raise MissingConfigurationError("libtdjson shared library not found (set telegram.tdjson_path)")


class TdJson:
    """Thin wrapper over the four tdjson entry points.

    Objects are passed as dicts and encoded to / decoded from JSON here;
    ``receive`` returns ``None`` when the timeout elapses with nothing queued.
    """

    def __init__(self, path: str | None = None) -> None:
        resolved = find_tdjson(path)
        try:
            lib = ctypes.CDLL(resolved)
        except OSError as exc:
            raise MissingConfigurationError(f"cannot load {resolved}: {exc}") from exc

        lib.td_create_client_id.restype = ctypes.c_int
        lib.td_create_client_id.argtypes = []

        lib.td_send.restype = None
        lib.td_send.argtypes = [ctypes.c_int, ctypes.c_char_p]

        lib.td_receive.restype = ctypes.c_char_p
        lib.td_receive.argtypes = [ctypes.c_double]

        lib.td_execute.restype = ctypes.c_char_p
        lib.td_execute.argtypes = [ctypes.c_char_p]

        self._lib = lib

    def create_client_id(self) -> int:
        return self._lib.td_create_client_id()

    def send(self, client_id: int, request: dict[str, Any]) -> None:
        self._lib.td_send(client_id, json.dumps(request).encode("utf-8"))

    def receive(self, timeout: float) -> dict[str, Any] | None:
        raw = self._lib.td_receive(timeout)
        if raw is None:
            return None
        return json.loads(raw.decode("utf-8"))

    def execute(self, request: dict[str, Any]) -> dict[str, Any] | None:
        """Run a synchronous request (logging setup and the like)."""
        raw = self._lib.td_execute(json.dumps(request).encode("utf-8"))
        if raw is None:
            return None
        return json.loads(raw.decode("utf-8"))
