"""
Static file serving adapter.

Wraps Starlette's StaticFiles so that every file it serves is flagged on
the request scope. The header middleware reads the flag to decide whether
the static-file cache profile applies.
"""

import os
from typing import Any, MutableMapping

from starlette.responses import Response
from starlette.staticfiles import StaticFiles

STATIC_FILE_STATE_KEY = "static_file"


def mark_static_file(scope: MutableMapping[str, Any]) -> None:
    """Flag the request in ``scope`` as a static-file response."""
    scope.setdefault("state", {})[STATIC_FILE_STATE_KEY] = True


def is_static_file(scope: MutableMapping[str, Any]) -> bool:
    state = scope.get("state") or {}
    return bool(state.get(STATIC_FILE_STATE_KEY, False))


class CacheProfileStaticFiles(StaticFiles):
    """StaticFiles that marks each served file for the cache stage."""

    def file_response(
        self,
        full_path: "str | os.PathLike[str]",
        stat_result: os.stat_result,
        scope: MutableMapping[str, Any],
        status_code: int = 200,
    ) -> Response:
        response = super().file_response(full_path, stat_result, scope, status_code)
        mark_static_file(scope)
        return response
