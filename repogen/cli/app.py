"""Typer CLI application."""

import asyncio
from pathlib import Path
from typing import Callable, List, Optional

import typer

from repogen.core.config import settings
from repogen.core.exceptions import BaseRepogenException, MetaModelException
from repogen.core.logging import getLogger, setupLogging
from repogen.crud.crud_table import CRUDTable
from repogen.db.session import createEngine
from repogen.services.constants_generator import ConstantsGenerator
from repogen.services.descriptor_generator import DescriptorXmlGenerator
from repogen.services.descriptor_reader import descriptorReader
from repogen.services.generator_base import ArtifactGenerator, GenerationContext
from repogen.services.storage_accessor import StorageAccessor
from repogen.services.table_resources import GenerationSummary, generateTableResources

logger = getLogger(__name__)

app = typer.Typer(help="Generate SQL Repository descriptors and column constants from a database schema.")

UrlOption = typer.Option(None, "--url", help="SQLAlchemy async database URL")
AuthorOption = typer.Option(None, "--author", help="Author written into generated headers")
SchemaOption = typer.Option(None, "--schema", help="Schema to read tables from")
PatternOption = typer.Option(None, "--table-pattern", help="SQL LIKE pattern restricting the tables")

async def runGeneration(
    databaseUrl: Optional[str],
    outputDir: Path,
    generatorFactory: Callable[[CRUDTable], ArtifactGenerator],
    schemaName: Optional[str],
    tableNamePattern: Optional[str]
) -> GenerationSummary:
    engine = createEngine(databaseUrl)
    try:
        async with engine.connect() as conn:
            return await generateTableResources(
                conn,
                generatorFactory,
                StorageAccessor(str(outputDir)),
                schemaName=schemaName,
                tableNamePattern=tableNamePattern
            )
    finally:
        await engine.dispose()

def reportSummary(summary: GenerationSummary) -> None:
    for path in summary.written:
        typer.echo(path)
    for tableName, message in summary.failed.items():
        typer.echo(f"Failed: {tableName}: {message}", err=True)
    typer.echo(f"Generated {len(summary.written)} file(s), {len(summary.failed)} failure(s)")

def runCommand(
    outputDir: Path,
    generatorFactory: Callable[[CRUDTable], ArtifactGenerator],
    databaseUrl: Optional[str],
    schemaName: Optional[str],
    tableNamePattern: Optional[str]
) -> None:
    try:
        summary = asyncio.run(runGeneration(
            databaseUrl or settings.databaseUrl,
            outputDir,
            generatorFactory,
            schemaName or settings.schemaName,
            tableNamePattern or settings.tableNamePattern
        ))
    except BaseRepogenException as e:
        typer.echo(f"Error: {e.message}", err=True)
        raise typer.Exit(1)
    except Exception as e:
        logger.exception("Generation aborted")
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    reportSummary(summary)


@app.command()
def descriptors(
    outputDir: Path = typer.Argument(..., help="Directory the repository XML files are written to"),
    url: Optional[str] = UrlOption,
    author: Optional[str] = AuthorOption,
    schema: Optional[str] = SchemaOption,
    tablePattern: Optional[str] = PatternOption,
    policy: Optional[str] = typer.Option(None, "--policy", help="Unmapped column types: preserve, omit or fail")
):
    """
    Write one SQL Repository item descriptor per table.
    """
    setupLogging()
    if policy is not None and policy not in ("preserve", "omit", "fail"):
        typer.echo(f"Error: unknown unmapped type policy '{policy}'", err=True)
        raise typer.Exit(2)

    context = GenerationContext(author=author or settings.author)
    runCommand(
        outputDir,
        lambda crud: DescriptorXmlGenerator(crud, context, unmappedTypePolicy=policy),
        url, schema, tablePattern
    )


@app.command()
def constants(
    outputDir: Path = typer.Argument(..., help="Directory the constants classes are written to"),
    url: Optional[str] = UrlOption,
    author: Optional[str] = AuthorOption,
    schema: Optional[str] = SchemaOption,
    tablePattern: Optional[str] = PatternOption,
    package: Optional[str] = typer.Option(None, "--package", help="Package declared by the generated classes")
):
    """
    Write one column constants class per table.
    """
    setupLogging()
    context = GenerationContext(author=author or settings.author, packageName=package or settings.packageName)
    runCommand(
        outputDir,
        lambda crud: ConstantsGenerator(crud, context),
        url, schema, tablePattern
    )


@app.command()
def inspect(files: List[Path] = typer.Argument(..., help="SQL Repository XML files")):
    """
    Read repository files and print their item descriptors.
    """
    setupLogging()
    try:
        repositories = descriptorReader.readRepositoryFiles(files)
    except MetaModelException as e:
        typer.echo(f"Error: {e.message}", err=True)
        raise typer.Exit(1)

    for path, repository in repositories:
        headerName = repository.header.name if repository.header else None
        typer.echo(f"{path}: {headerName or '(no header)'}")
        default = repository.defaultItemDescriptor
        for descriptor in repository.getItemDescriptorList():
            marker = "*" if default is not None and descriptor.name == default.name else " "
            primary = (descriptor.primaryTable.name or "(unnamed)") if descriptor.primaryTable else "-"
            typer.echo(f"  {marker} {descriptor.name} (primary table: {primary}, "
                       f"{len(descriptor.tables)} table(s), {len(descriptor.properties)} property(ies))")


if __name__ == "__main__":
    app()
