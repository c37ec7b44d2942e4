"""
Use case template for the invoicing application layer.

Every invoice workflow runs through ``UseCase.execute``: validate the request,
run ``process`` against the aggregate, and report the outcome as a response.
Domain and repository errors are turned into error responses here and nowhere
else; the layers below raise and never log them.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, ClassVar, Generic, TypeVar
from uuid import UUID, uuid4

from invoicing.application.interfaces.exceptions import RepositoryError
from invoicing.domain.exceptions import DomainException

TRequest = TypeVar("TRequest")
TResponse = TypeVar("TResponse")

VALIDATION_ERROR_CODE = "InvalidRequest"
UNEXPECTED_ERROR_CODE = "UnexpectedError"

# Errors callers can act on; their class name becomes the response error code
EXPECTED_ERRORS: tuple[type[Exception], ...] = (DomainException, RepositoryError)


@dataclass
class UseCaseRequest:
    """Tracing fields shared by every request."""

    request_id: UUID | None = None
    correlation_id: UUID | None = None
    metadata: dict[str, Any] | None = None

    def __post_init__(self) -> None:
        if self.request_id is None:
            self.request_id = uuid4()
        if self.metadata is None:
            self.metadata = {}


@dataclass
class UseCaseResponse:
    """Outcome of a use case; ``error_code`` names the failure when ``success`` is False."""

    success: bool
    data: Any | None = None
    error: str | None = None
    error_code: str | None = None
    request_id: UUID | None = None

    @classmethod
    def success_response(cls, data: Any, request_id: UUID) -> "UseCaseResponse":
        return cls(success=True, data=data, request_id=request_id)

    @classmethod
    def error_response(
        cls, error: str, request_id: UUID, error_code: str | None = None
    ) -> "UseCaseResponse":
        return cls(success=False, error=error, error_code=error_code, request_id=request_id)


class UseCase(ABC, Generic[TRequest, TResponse]):
    """
    Template for invoice workflows.

    Subclasses implement ``validate`` (cheap request checks, no repository
    access) and ``process`` (load, mutate, save). ``response_class`` is the
    type returned on failure, so callers always get the response type they
    expect.
    """

    response_class: ClassVar[type[UseCaseResponse]] = UseCaseResponse

    def __init__(self, name: str | None = None) -> None:
        """
        Args:
            name: Name used in log messages and the logger name; defaults to
                the class name
        """
        self.name = name or self.__class__.__name__
        self.logger = logging.getLogger(f"{__name__}.{self.name}")

    async def execute(self, request: TRequest) -> TResponse:
        """
        Run the use case and report the outcome.

        Never raises for domain or repository failures; those come back as
        error responses whose ``error_code`` is the exception class name.

        Args:
            request: Request DTO for this use case

        Returns:
            Response of this use case's response type
        """
        request_id = getattr(request, "request_id", None) or uuid4()
        log_extra = self._log_extra(request, request_id)

        self.logger.info(f"Executing {self.name}", extra={**log_extra, "use_case": self.name})

        try:
            validation_error = await self.validate(request)
            if validation_error:
                self.logger.warning(
                    f"Invalid {self.name} request: {validation_error}", extra=log_extra
                )
                return self._create_error_response(
                    validation_error, request_id, VALIDATION_ERROR_CODE
                )

            response = await self.process(request)

        except EXPECTED_ERRORS as e:
            error_code = type(e).__name__
            self.logger.warning(
                f"{self.name} rejected: {e}",
                extra={**log_extra, "error_code": error_code},
            )
            return self._create_error_response(str(e), request_id, error_code)

        except Exception as e:
            self.logger.error(
                f"{self.name} failed unexpectedly: {e}",
                extra=log_extra,
                exc_info=True,
            )
            return self._create_error_response(str(e), request_id, UNEXPECTED_ERROR_CODE)

        self.logger.info(
            f"{self.name} completed",
            extra={**log_extra, "success": getattr(response, "success", True)},
        )
        return response

    @abstractmethod
    async def validate(self, request: TRequest) -> str | None:
        """Return an error message for a malformed request, or None."""

    @abstractmethod
    async def process(self, request: TRequest) -> TResponse:
        """Carry out the workflow for a validated request."""

    def _log_extra(self, request: Any, request_id: UUID) -> dict[str, Any]:
        correlation_id = getattr(request, "correlation_id", None)
        extra: dict[str, Any] = {
            "request_id": str(request_id),
            # InvoicingLogRecord already owns "correlation_id"
            "request_correlation_id": str(correlation_id) if correlation_id else None,
        }
        log_context = getattr(request, "log_context", None)
        if callable(log_context):
            extra.update(log_context())
        return extra

    def _create_error_response(
        self, error: str, request_id: UUID, error_code: str | None = None
    ) -> TResponse:
        response = self.response_class.error_response(error, request_id, error_code)
        return response  # type: ignore[return-value]
