from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncConnection
from typing import Callable, Dict, Iterable, List, Optional

from repogen.core.exceptions import GeneratorException
from repogen.core.logging import getLogger
from repogen.crud.crud_table import CRUDTable, runWithTables
from repogen.models.schema_models import TableRecord
from repogen.services.generator_base import ArtifactGenerator
from repogen.services.storage_accessor import StorageAccessor

logger = getLogger(__name__)

class RenderedArtifact(BaseModel):
    table: TableRecord
    fileName: str
    content: Optional[str] = None
    error: Optional[str] = None

class GenerationSummary(BaseModel):
    written: List[str] = []
    failed: Dict[str, str] = {}

def renderTableResources(generator: ArtifactGenerator, tables: Iterable[TableRecord]) -> List[RenderedArtifact]:
    """Generate one artifact per table; a failed table is recorded and the rest still run."""
    rendered = []
    for table in tables:
        fileName = generator.getOutputFileName(table)
        try:
            content = generator.generate(table)
        except GeneratorException as e:
            cause = e.getEffectiveException()
            logger.error(f"Failed to generate {fileName} for {table.getQualifiedName()}: {e.message}"
                         + (f" (caused by {type(cause).__name__}: {cause})" if cause is not e else ""))
            rendered.append(RenderedArtifact(table=table, fileName=fileName, error=e.message))
            continue
        rendered.append(RenderedArtifact(table=table, fileName=fileName, content=content))
    return rendered

async def writeTableResources(rendered: Iterable[RenderedArtifact], storage: StorageAccessor) -> GenerationSummary:
    summary = GenerationSummary()
    for artifact in rendered:
        if artifact.content is None:
            summary.failed[artifact.table.getQualifiedName()] = artifact.error or "Generation failed."
            continue
        path = await storage.writeTextFile(artifact.fileName, artifact.content)
        logger.info(f"Wrote {path}")
        summary.written.append(path)
    return summary

async def generateTableResources(
    conn: AsyncConnection,
    generatorFactory: Callable[[CRUDTable], ArtifactGenerator],
    storage: StorageAccessor,
    schemaName: Optional[str] = None,
    tableNamePattern: Optional[str] = None
) -> GenerationSummary:
    def render(crudTable: CRUDTable) -> List[RenderedArtifact]:
        tables = crudTable.listTables(schemaName, tableNamePattern)
        logger.info(f"Generating {len(tables)} table resource(s)")
        return renderTableResources(generatorFactory(crudTable), tables)

    rendered = await runWithTables(conn, render)
    return await writeTableResources(rendered, storage)
