from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ..core.errors import (
    AccountNotFoundError,
    AccountNumberGenerationError,
    DuplicateIdentityError,
    InsufficientFundsError,
    InvalidAmountError,
    SameAccountTransferError,
    StorageError,
    UnderageApplicantError,
)


logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AccountNotFoundError)
    async def account_not_found_handler(
        request: Request, exc: AccountNotFoundError
    ) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(DuplicateIdentityError)
    async def duplicate_identity_handler(
        request: Request, exc: DuplicateIdentityError
    ) -> JSONResponse:
        return JSONResponse(status_code=409, content={"detail": str(exc)})

    @app.exception_handler(UnderageApplicantError)
    async def underage_handler(
        request: Request, exc: UnderageApplicantError
    ) -> JSONResponse:
        return JSONResponse(status_code=422, content={"detail": str(exc)})

    @app.exception_handler(InsufficientFundsError)
    async def insufficient_funds_handler(
        request: Request, exc: InsufficientFundsError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=409,
            content={"detail": str(exc), "shortfall": str(exc.shortfall)},
        )

    @app.exception_handler(InvalidAmountError)
    async def invalid_amount_handler(
        request: Request, exc: InvalidAmountError
    ) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(SameAccountTransferError)
    async def same_account_handler(
        request: Request, exc: SameAccountTransferError
    ) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
        logger.error("storage.failure", exc_info=exc)
        return JSONResponse(status_code=503, content={"detail": "Storage unavailable"})

    @app.exception_handler(AccountNumberGenerationError)
    async def account_number_handler(
        request: Request, exc: AccountNumberGenerationError
    ) -> JSONResponse:
        logger.error("account.number_exhausted", exc_info=exc)
        return JSONResponse(status_code=503, content={"detail": str(exc)})
