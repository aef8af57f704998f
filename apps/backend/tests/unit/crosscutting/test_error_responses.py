"""Unit tests for RFC7807 error factories, SchedulerError mapping and handlers."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from scheduler.api.exception_handlers import register_exception_handlers
from scheduler.application.usecases import SchedulerError, SchedulerErrorCode
from scheduler.crosscutting.error_responses import (
    AppHTTPException,
    ErrorCode,
    ErrorDetail,
    conflict,
    database_error,
    forbidden,
    internal_error,
    not_found,
    unauthorized,
    validation_error,
)
from scheduler.crosscutting.exceptions import DatabaseError
from scheduler.domain.entities import Reservation
from scheduler.interfaces.api.http.error_mapping import raise_scheduler_error

pytestmark = pytest.mark.unit


class TestErrorFactories:
    """Test error factory functions."""

    def test_validation_error(self):
        exc = validation_error("Invalid input", [{"field": "name", "msg": "required"}])
        assert exc.status_code == 422
        assert exc.code == ErrorCode.VALIDATION_ERROR
        assert exc.errors == [{"field": "name", "msg": "required"}]

    def test_not_found(self):
        exc = not_found("Duty 4 not found.")
        assert exc.status_code == 404
        assert exc.code == ErrorCode.NOT_FOUND

    def test_conflict(self):
        assert conflict("taken").status_code == 409

    def test_unauthorized(self):
        exc = unauthorized()
        assert exc.status_code == 401
        assert exc.code == ErrorCode.UNAUTHORIZED

    def test_forbidden(self):
        exc = forbidden("Admin only")
        assert exc.status_code == 403
        assert exc.code == ErrorCode.FORBIDDEN

    def test_internal_error(self):
        assert internal_error().status_code == 500

    def test_database_error(self):
        exc = database_error()
        assert exc.status_code == 503
        assert exc.code == ErrorCode.DATABASE_ERROR


class TestErrorDetail:
    """Test ErrorDetail model."""

    def test_serialization(self):
        detail = ErrorDetail(
            title="Not Found",
            status=404,
            detail="Resource not found",
            code=ErrorCode.NOT_FOUND,
        )
        data = detail.model_dump(exclude_none=True)
        assert data["status"] == 404
        assert data["code"] == "NOT_FOUND"
        assert "errors" not in data


class TestSchedulerErrorMapping:
    @pytest.mark.parametrize(
        "code,status",
        [
            (SchedulerErrorCode.VALIDATION_ERROR, 422),
            (SchedulerErrorCode.UNAUTHORIZED, 403),
            (SchedulerErrorCode.NOT_FOUND, 404),
            (SchedulerErrorCode.CONFLICT, 409),
        ],
    )
    def test_status_per_code(self, code, status):
        with pytest.raises(AppHTTPException) as exc_info:
            raise_scheduler_error(SchedulerError(code=code, message="nope"))

        assert exc_info.value.status_code == status
        assert exc_info.value.detail == "nope"

    def test_conflicts_travel_in_errors(self, today):
        blocking = Reservation(id=9, start_date=today, end_date=today, user_id=1)

        with pytest.raises(AppHTTPException) as exc_info:
            raise_scheduler_error(
                SchedulerError(code=SchedulerErrorCode.CONFLICT, message="overlap"),
                conflicts=[blocking],
            )

        assert exc_info.value.errors == [
            {
                "reservation_id": 9,
                "start_date": today.isoformat(),
                "end_date": today.isoformat(),
            }
        ]


class TestExceptionHandlers:
    def _client(self) -> TestClient:
        app = FastAPI()
        register_exception_handlers(app)

        @app.get("/db")
        def db_down():
            raise DatabaseError("connection refused")

        @app.get("/conflict")
        def clash():
            raise conflict("Dates conflict with existing reservation(s): 1")

        return TestClient(app)

    def test_database_error_is_503_problem_json(self):
        response = self._client().get("/db")

        assert response.status_code == 503
        assert response.headers["content-type"].startswith("application/problem+json")
        body = response.json()
        assert body["code"] == "DATABASE_ERROR"
        assert "error_id" in body["errors"][0]

    def test_app_exception_is_serialized(self):
        response = self._client().get("/conflict")

        assert response.status_code == 409
        assert response.json()["detail"].startswith("Dates conflict")
