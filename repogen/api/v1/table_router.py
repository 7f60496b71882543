from fastapi import APIRouter, Depends, Path, Query, Response
from sqlalchemy.ext.asyncio import AsyncConnection
from typing import List, Optional

from repogen.db.session import getConnection
from repogen.crud.crud_table import CRUDTable, runWithTables
from repogen.models.schema_models import TableColumnsResponse, TableRecord
from repogen.core.config import settings
from repogen.core.exceptions import (
    BaseRepogenException, ErrorResponse, InternalServerErrorException
)
from repogen.services.constants_generator import ConstantsGenerator
from repogen.services.descriptor_generator import DescriptorXmlGenerator
from repogen.services.generator_base import GenerationContext


router = APIRouter(
    prefix="/v1/tables",
    tags=["Tables"],
    responses={
        400: {"model": ErrorResponse, "description": "Bad Request"},
        404: {"model": ErrorResponse, "description": "Not Found"},
        500: {"model": ErrorResponse, "description": "Internal Server Error"},
    }
)

def resolveSchema(schemaName: Optional[str]) -> Optional[str]:
    return schemaName if schemaName else settings.schemaName


@router.get("", response_model=List[TableRecord])
async def listTablesEndpoint(
    conn: AsyncConnection = Depends(getConnection),
    schemaName: Optional[str] = Query(None, alias="schema", description="Schema to list tables of"),
    tableNamePattern: Optional[str] = Query(None, alias="pattern", description="SQL LIKE pattern, e.g. 'ORD%'")
):
    schemaName = resolveSchema(schemaName)
    pattern = tableNamePattern or settings.tableNamePattern
    try:
        return await runWithTables(conn, lambda crud: crud.listTables(schemaName, pattern))
    except BaseRepogenException as e:
        raise e
    except Exception as e:
        raise InternalServerErrorException(message=str(e))


@router.get("/{tableName}", response_model=TableColumnsResponse)
async def loadTableEndpoint(
    tableName: str = Path(..., description="Physical table name"),
    schemaName: Optional[str] = Query(None, alias="schema"),
    conn: AsyncConnection = Depends(getConnection)
):
    schemaName = resolveSchema(schemaName)

    def load(crud: CRUDTable) -> TableColumnsResponse:
        table = crud.getTable(tableName, schemaName)
        return TableColumnsResponse(
            table=table,
            columns=crud.getColumns(table),
            primaryKeys=crud.getPrimaryKeys(table)
        )

    try:
        return await runWithTables(conn, load)
    except BaseRepogenException as e:
        raise e
    except Exception as e:
        raise InternalServerErrorException(message=str(e))


@router.get("/{tableName}/descriptor")
async def generateDescriptorEndpoint(
    tableName: str = Path(..., description="Physical table name"),
    schemaName: Optional[str] = Query(None, alias="schema"),
    author: Optional[str] = Query(None),
    conn: AsyncConnection = Depends(getConnection)
):
    schemaName = resolveSchema(schemaName)
    context = GenerationContext(author=author or settings.author)

    def generate(crud: CRUDTable) -> str:
        return DescriptorXmlGenerator(crud, context).generate(crud.getTable(tableName, schemaName))

    try:
        content = await runWithTables(conn, generate)
    except BaseRepogenException as e:
        raise e
    except Exception as e:
        raise InternalServerErrorException(message=str(e))
    return Response(content=content, media_type="application/xml")


@router.get("/{tableName}/constants")
async def generateConstantsEndpoint(
    tableName: str = Path(..., description="Physical table name"),
    schemaName: Optional[str] = Query(None, alias="schema"),
    author: Optional[str] = Query(None),
    packageName: Optional[str] = Query(None, alias="package"),
    conn: AsyncConnection = Depends(getConnection)
):
    schemaName = resolveSchema(schemaName)
    context = GenerationContext(author=author or settings.author, packageName=packageName or settings.packageName)

    def generate(crud: CRUDTable) -> str:
        return ConstantsGenerator(crud, context).generate(crud.getTable(tableName, schemaName))

    try:
        content = await runWithTables(conn, generate)
    except BaseRepogenException as e:
        raise e
    except Exception as e:
        raise InternalServerErrorException(message=str(e))
    return Response(content=content, media_type="text/plain")
