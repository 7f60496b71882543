from fastapi import status as httpStatus
from typing import List, Optional
from pydantic import BaseModel

class RepogenErrorModel(BaseModel):
    message: str
    type: str
    code: int
    stack: Optional[List[str]] = None

class ErrorResponse(BaseModel):
    error: RepogenErrorModel

class BaseRepogenException(Exception):
    def __init__(self, statusCode: int, message: str, errorType: str, stack: Optional[List[str]] = None):
        super().__init__(message)
        self.statusCode = statusCode
        self.message = message
        self.errorType = errorType
        self.stack = stack

    @property
    def detail(self) -> dict:
        return {"error": {
            "message": self.message,
            "type": self.errorType,
            "code": self.statusCode,
            "stack": self.stack
        }}

class ValidationException(BaseRepogenException):
    def __init__(self, message: str):
        super().__init__(
            statusCode=httpStatus.HTTP_400_BAD_REQUEST,
            message=message,
            errorType="ValidationException"
        )

class MetaModelException(BaseRepogenException):
    """Raised when a descriptor document cannot be turned into meta objects."""

    def __init__(self, message: str):
        super().__init__(
            statusCode=httpStatus.HTTP_400_BAD_REQUEST,
            message=message,
            errorType="MetaModelException"
        )

class NoSuchTableException(BaseRepogenException):
    def __init__(self, tableName: str, schemaName: Optional[str] = None):
        qualifiedName = f"{schemaName}.{tableName}" if schemaName else tableName
        super().__init__(
            statusCode=httpStatus.HTTP_404_NOT_FOUND,
            message=f"Table with identifier '{qualifiedName}' not found.",
            errorType="NoSuchTableException"
        )

class SchemaIntrospectionException(BaseRepogenException):
    def __init__(self, message: str):
        super().__init__(
            statusCode=httpStatus.HTTP_500_INTERNAL_SERVER_ERROR,
            message=message,
            errorType="SchemaIntrospectionException"
        )

class GeneratorException(BaseRepogenException):
    """Generation failure for a single artifact.

    Wraps the failure that caused it (if any) so callers can report either
    this exception's message or the original problem via
    ``getEffectiveException``.
    """

    def __init__(self, message: Optional[str] = None, rootCause: Optional[BaseException] = None):
        if message is None:
            message = str(rootCause) if rootCause is not None else "Artifact generation failed."
        super().__init__(
            statusCode=httpStatus.HTTP_500_INTERNAL_SERVER_ERROR,
            message=message,
            errorType="GeneratorException"
        )
        self.rootCause = rootCause
        if rootCause is not None:
            self.__cause__ = rootCause

    def getEffectiveException(self) -> BaseException:
        return self.rootCause if self.rootCause is not None else self

class InternalServerErrorException(BaseRepogenException):
    def __init__(self, message: str = "An unexpected internal server error occurred."):
        super().__init__(
            statusCode=httpStatus.HTTP_500_INTERNAL_SERVER_ERROR,
            message=message,
            errorType="InternalServerErrorException"
        )
