from fastapi import APIRouter, Request

from repogen.models.descriptor_models import ItemDescriptor, SQLRepository
from repogen.services.descriptor_reader import descriptorReader
from repogen.core.exceptions import (
    BaseRepogenException, ErrorResponse, InternalServerErrorException, ValidationException
)

router = APIRouter(
    prefix="/v1/descriptors",
    tags=["Descriptors"],
    responses={
        400: {"model": ErrorResponse, "description": "Bad Request"},
        500: {"model": ErrorResponse, "description": "Internal Server Error"},
    }
)

async def readRepositoryBody(request: Request) -> SQLRepository:
    content = await request.body()
    if not content.strip():
        raise ValidationException("Request body must contain a SQL Repository document.")
    return descriptorReader.parseString(content)

@router.post("/parse", response_model=SQLRepository)
async def parseDescriptorEndpoint(request: Request):
    try:
        return await readRepositoryBody(request)
    except BaseRepogenException as e:
        raise e
    except Exception as e:
        raise InternalServerErrorException(message=str(e))

@router.post("/parse/default", response_model=ItemDescriptor)
async def parseDefaultItemDescriptorEndpoint(request: Request):
    try:
        repository = await readRepositoryBody(request)
        if repository.defaultItemDescriptor is None:
            raise ValidationException("SQL Repository document does not contain an item descriptor.")
        return repository.defaultItemDescriptor
    except BaseRepogenException as e:
        raise e
    except Exception as e:
        raise InternalServerErrorException(message=str(e))
