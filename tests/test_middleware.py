"""Tests for the error-envelope handlers called directly."""

from __future__ import annotations

import json

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from tasktrack import NotFoundError, StorageError, ValidationError
from tasktrack.core.api.middleware import http_error_handler, tasktrack_error_handler, validation_error_handler


def _request(path: str = "/api/tasks/9") -> Request:
    return Request({"type": "http", "method": "GET", "path": path, "headers": [], "query_string": b""})


async def test_tasktrack_errors_use_their_status() -> None:
    for error, status_code in [
        (NotFoundError("Task 9 not found"), 404),
        (ValidationError("Task name is required"), 400),
        (StorageError("Storage failure during task get: locked"), 500),
    ]:
        response = await tasktrack_error_handler(_request(), error)

        assert response.status_code == status_code
        assert json.loads(response.body) == {"errorMessage": error.message}


async def test_validation_errors_joined_into_one_message() -> None:
    exc = RequestValidationError(
        [
            {"loc": ("path", "task_id"), "msg": "Input should be a valid integer", "type": "int_parsing"},
            {"loc": ("body", "status"), "msg": "Input should be 'open' or 'closed'", "type": "enum"},
        ]
    )

    response = await validation_error_handler(_request(), exc)

    assert response.status_code == 400
    assert json.loads(response.body) == {
        "errorMessage": "path.task_id: Input should be a valid integer; "
        "body.status: Input should be 'open' or 'closed'"
    }


async def test_http_errors_keep_status_and_headers() -> None:
    exc = StarletteHTTPException(status_code=405, detail="Method Not Allowed", headers={"Allow": "GET"})

    response = await http_error_handler(_request(), exc)

    assert response.status_code == 405
    assert response.headers["Allow"] == "GET"
    assert json.loads(response.body) == {"errorMessage": "Method Not Allowed"}
