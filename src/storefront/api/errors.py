"""HTTP error mapping.

Starts from Protean's standard exception handlers and adjusts the statuses
the storefront contract differs on: a wrong order state is a 400, an
exhausted payment is a 503, and request-body validation is a 400.
"""

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ExpectedVersionError, InvalidStateError
from protean.integrations.fastapi import register_exception_handlers

from storefront.payment.retry import PaymentUnavailable


def register_error_handlers(app: FastAPI) -> None:
    register_exception_handlers(app)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": jsonable_encoder(exc.errors())})

    @app.exception_handler(InvalidStateError)
    async def invalid_state_handler(request: Request, exc: InvalidStateError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": str(exc)})

    @app.exception_handler(PaymentUnavailable)
    async def payment_unavailable_handler(request: Request, exc: PaymentUnavailable) -> JSONResponse:
        return JSONResponse(
            status_code=503,
            content={
                "error": str(exc),
                "order_id": exc.order_id,
                "attempts": exc.attempts,
                "last_failure": exc.last_failure,
            },
        )

    @app.exception_handler(ExpectedVersionError)
    async def version_conflict_handler(request: Request, exc: ExpectedVersionError) -> JSONResponse:
        return JSONResponse(status_code=409, content={"error": str(exc)})
