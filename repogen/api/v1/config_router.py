from fastapi import APIRouter
from repogen.models.schema_models import GeneratorConfig
from repogen.core.config import settings

router = APIRouter()

@router.get("/config", response_model=GeneratorConfig)
async def getConfig():
    defaultProperties = {
        "author": settings.author,
        "output-directory": settings.outputDirectory,
        "unmapped-type-policy": settings.unmappedTypePolicy,
    }
    if settings.schemaName:
        defaultProperties["schema"] = settings.schemaName
    if settings.tableNamePattern:
        defaultProperties["table-name-pattern"] = settings.tableNamePattern
    if settings.packageName:
        defaultProperties["package"] = settings.packageName

    overrideProperties = {
    }

    return GeneratorConfig(
        default=defaultProperties,
        override=overrideProperties
    )
