from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import SQLAlchemyError

from repogen.api.router import apiRouter
from repogen.core.exceptions import (
    BaseRepogenException, InternalServerErrorException, ValidationException
)
from repogen.core.logging import getLogger, setupLogging

logger = getLogger(__name__)

app = FastAPI(
    title="SQL Repository Generator",
    version="0.1.0",
    description="Generates SQL Repository item descriptors and column constants from database schema metadata.",
)

@app.on_event("startup")
async def onStartup():
    setupLogging()
    logger.info("SQL Repository Generator started")


@app.exception_handler(BaseRepogenException)
async def repogenExceptionHandler(request: Request, exc: BaseRepogenException):
    errorDetail = exc.detail["error"]
    if exc.statusCode >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.errorType}: {exc.message}")

    return JSONResponse(
        status_code=exc.statusCode,
        content={"error": errorDetail}
    )

@app.exception_handler(RequestValidationError)
async def validationExceptionHandler(request: Request, exc: RequestValidationError):
    errorMessages = []
    for error in exc.errors():
        loc = []
        for item in error["loc"]:
            if isinstance(item, int):
                loc.append(f"[{item}]")
            else:
                loc.append(str(item))

        locPath = ".".join(loc).replace(".[", "[")
        errorMessages.append(f"Field '{locPath}': {error['msg']}")

    validationError = ValidationException(message="Validation Error: " + "; ".join(errorMessages))

    return JSONResponse(
        status_code=validationError.statusCode,
        content={"error": validationError.detail["error"]}
    )

@app.exception_handler(SQLAlchemyError)
async def sqlalchemyExceptionHandler(request: Request, exc: SQLAlchemyError):
    logger.error(f"Database error on {request.url.path}: {exc}")
    serverError = InternalServerErrorException(message="A database error occurred.")
    serverError.errorType = type(exc).__name__

    return JSONResponse(
        status_code=serverError.statusCode,
        content={"error": serverError.detail["error"]}
    )

@app.exception_handler(Exception)
async def genericExceptionHandler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.url.path}")
    serverError = InternalServerErrorException(message="An unexpected internal server error occurred.")
    serverError.errorType = type(exc).__name__

    return JSONResponse(
        status_code=serverError.statusCode,
        content={"error": serverError.detail["error"]}
    )

app.include_router(apiRouter)

@app.get("/", include_in_schema=False)
async def root():
    return {"message": "Welcome to the SQL Repository Generator!"}
