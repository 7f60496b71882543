"""Shared pieces of the table driven artifact generators.

A generator turns one ``TableRecord`` into the text of one artifact. Column
and primary key metadata come from a ``SchemaIntrospection`` collaborator;
any failure while reading them surfaces as a ``GeneratorException`` that
keeps the original error as its root cause.
"""

import datetime
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Protocol, Sequence

from sqlalchemy.exc import SQLAlchemyError

from repogen.core.config import settings
from repogen.core.exceptions import GeneratorException, SchemaIntrospectionException
from repogen.models.schema_models import ColumnRecord, PrimaryKeyRecord, TableRecord

class SchemaIntrospection(Protocol):
    def getColumns(self, table: TableRecord) -> List[ColumnRecord]: ...

    def getPrimaryKeys(self, table: TableRecord) -> List[PrimaryKeyRecord]: ...

class ArtifactGenerator(Protocol):
    def generate(self, table: TableRecord) -> str: ...

    def getOutputFileName(self, table: TableRecord) -> str: ...

@dataclass(frozen=True)
class GenerationContext:
    author: str = field(default_factory=lambda: settings.author)
    packageName: Optional[str] = None
    clock: Callable[[], datetime.datetime] = datetime.datetime.now

    def getNow(self) -> datetime.datetime:
        return self.clock()

    def getDateString(self) -> str:
        # Long date format, e.g. "July 8, 2002".
        now = self.getNow()
        return f"{now:%B} {now.day}, {now.year}"

def loadColumns(introspection: SchemaIntrospection, table: TableRecord) -> Sequence[ColumnRecord]:
    try:
        return introspection.getColumns(table)
    except (SQLAlchemyError, SchemaIntrospectionException) as e:
        raise GeneratorException(f"Could not read the columns of table '{table.getQualifiedName()}'.", rootCause=e)

def loadPrimaryKeys(introspection: SchemaIntrospection, table: TableRecord) -> Sequence[PrimaryKeyRecord]:
    try:
        return introspection.getPrimaryKeys(table)
    except (SQLAlchemyError, SchemaIntrospectionException) as e:
        raise GeneratorException(f"Could not read the primary keys of table '{table.getQualifiedName()}'.", rootCause=e)
