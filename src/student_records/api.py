"""Minimal REST API over a :class:`RecordStore`.

Uses only the Python standard library (``http.server`` + ``json``).  The
server exposes:

* **POST   /students**: add a record (``201``, or ``409`` on duplicate id).
* **GET    /students**: list every record in store order.
* **GET    /students/<id>**: look up one record (``404`` when missing).
* **DELETE /students/<id>**: remove one record (``404`` when missing).
* **GET    /health**: liveness check (always returns 200).

Start with::

    python -m student_records.api --port 8080
"""

from __future__ import annotations

import json
import sys
import uuid
from http.server import BaseHTTPRequestHandler, HTTPServer
from typing import Any, Dict, Optional, Sequence

from .config import DEFAULT_TABLE_SIZE, StoreConfig
from .models import StoreResult, parse_int
from .store import RecordStore

# Module-level store (configured on server start).
_store: Optional[RecordStore] = None

_PREFIX = "/students"


def _get_store() -> RecordStore:
    global _store  # noqa: PLW0603
    if _store is None:
        _store = RecordStore()
    return _store


def configure(
    config: StoreConfig | None = None,
    store: RecordStore | None = None,
) -> RecordStore:
    """(Re)configure the module-level store.

    An explicit *store* wins; otherwise a fresh store is built from
    *config*.
    """
    global _store  # noqa: PLW0603
    _store = store if store is not None else RecordStore(config)
    return _store


# ------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------


def _result_body(result: StoreResult, operation_id: str) -> Dict[str, Any]:
    body = result.to_dict()
    body["operation_id"] = operation_id
    return body


# ------------------------------------------------------------------
# Request handler
# ------------------------------------------------------------------


class _Handler(BaseHTTPRequestHandler):
    """HTTP request handler for the student record API."""

    def _send_json(self, status: int, body: Dict[str, Any]) -> None:
        payload = json.dumps(body).encode()
        self.send_response(status)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(payload)))
        self.end_headers()
        self.wfile.write(payload)

    def _read_body(self) -> bytes:
        length = int(self.headers.get("Content-Length", 0))
        return self.rfile.read(length)

    def _read_json(self) -> Optional[Dict[str, Any]]:
        """Parse request body as a JSON object; send 400 on failure."""
        try:
            raw = json.loads(self._read_body())
        except (json.JSONDecodeError, ValueError):
            self._send_json(400, {"error": "Invalid JSON"})
            return None
        if not isinstance(raw, dict):
            self._send_json(400, {"error": "JSON body must be an object"})
            return None
        return raw

    def _require_fields(self, raw: Dict[str, Any], fields: tuple) -> bool:
        """Validate required fields; send 400 on failure. Return True if ok."""
        missing = [f for f in fields if f not in raw]
        if missing:
            self._send_json(400, {"error": f"Missing fields: {', '.join(missing)}"})
            return False
        return True

    def _path_id(self) -> Optional[int]:
        """Parse ``/students/<id>``; send 400 on a non-integer id."""
        student_id = parse_int(self.path[len(_PREFIX) + 1:])
        if student_id is None:
            self._send_json(400, {"error": "student_id must be an integer"})
        return student_id

    # --- POST /students -----------------------------------------------

    def _handle_insert(self) -> None:
        raw = self._read_json()
        if raw is None:
            return
        if not self._require_fields(raw, ("student_id", "name", "grade")):
            return

        student_id = raw["student_id"]
        if isinstance(student_id, bool) or not isinstance(student_id, int):
            self._send_json(400, {"error": "student_id must be an integer"})
            return
        if not isinstance(raw["name"], str) or not isinstance(raw["grade"], str):
            self._send_json(400, {"error": "name and grade must be strings"})
            return

        operation_id = raw.get("operation_id") or uuid.uuid4().hex
        result = _get_store().insert(
            student_id, raw["name"], raw["grade"], operation_id=operation_id
        )
        self._send_json(201 if result.ok else 409, _result_body(result, operation_id))

    # --- GET /students/<id> -------------------------------------------

    def _handle_find(self) -> None:
        student_id = self._path_id()
        if student_id is None:
            return
        operation_id = uuid.uuid4().hex
        result = _get_store().find(student_id, operation_id=operation_id)
        self._send_json(200 if result.ok else 404, _result_body(result, operation_id))

    # --- DELETE /students/<id> ----------------------------------------

    def _handle_delete(self) -> None:
        student_id = self._path_id()
        if student_id is None:
            return
        operation_id = uuid.uuid4().hex
        result = _get_store().delete(student_id, operation_id=operation_id)
        self._send_json(200 if result.ok else 404, _result_body(result, operation_id))

    # --- GET /students ------------------------------------------------

    def _handle_list(self) -> None:
        operation_id = uuid.uuid4().hex
        records = _get_store().list_all(operation_id=operation_id)
        self._send_json(200, {
            "operation_id": operation_id,
            "count": len(records),
            "records": [r.to_dict() for r in records],
        })

    # --- GET /health ---------------------------------------------------

    def _handle_health(self) -> None:
        self._send_json(200, {"status": "ok"})

    # --- Routing -------------------------------------------------------

    def _is_item_path(self) -> bool:
        return self.path.startswith(_PREFIX + "/") and len(self.path) > len(_PREFIX) + 1

    def do_POST(self) -> None:  # noqa: N802
        if self.path == _PREFIX:
            self._handle_insert()
        else:
            self._send_json(404, {"error": "Not found"})

    def do_GET(self) -> None:  # noqa: N802
        if self.path == "/health":
            self._handle_health()
        elif self.path == _PREFIX:
            self._handle_list()
        elif self._is_item_path():
            self._handle_find()
        else:
            self._send_json(404, {"error": "Not found"})

    def do_DELETE(self) -> None:  # noqa: N802
        if self._is_item_path():
            self._handle_delete()
        else:
            self._send_json(404, {"error": "Not found"})

    # Suppress default stderr logging in tests
    def log_message(self, format: str, *args: Any) -> None:  # noqa: A002
        pass


def create_server(
    host: str = "0.0.0.0",
    port: int = 8080,
    config: StoreConfig | None = None,
    store: RecordStore | None = None,
) -> HTTPServer:
    """Create (but do not start) the student record HTTP server."""
    configure(config, store=store)
    return HTTPServer((host, port), _Handler)


# ------------------------------------------------------------------
# CLI entry-point
# ------------------------------------------------------------------


def main(argv: Optional[Sequence[str]] = None) -> int:
    import argparse

    parser = argparse.ArgumentParser(description="Student record store API")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=8080)
    parser.add_argument("--table-size", type=int, default=DEFAULT_TABLE_SIZE)
    args = parser.parse_args(argv)

    try:
        config = StoreConfig(table_size=args.table_size).validate()
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    server = create_server(host=args.host, port=args.port, config=config)
    print(f"Serving on {args.host}:{args.port}")
    try:
        server.serve_forever()
    finally:
        _get_store().teardown()
        server.server_close()
    return 0  # pragma: no cover


if __name__ == "__main__":
    sys.exit(main())
