import re
from sqlalchemy import inspect
from sqlalchemy import types as sqltypes
from sqlalchemy.engine import Inspector
from sqlalchemy.ext.asyncio import AsyncConnection
from typing import Any, Callable, Dict, List, Optional, Tuple, TypeVar

from repogen.core.exceptions import NoSuchTableException
from repogen.core.logging import getLogger
from repogen.models.schema_models import ColumnRecord, PrimaryKeyRecord, TableRecord
from repogen.services.type_mapper import SqlType

logger = getLogger(__name__)

T = TypeVar("T")

# Sizes reported for types that carry no declared length.
DEFAULT_SIZES = {
    SqlType.BIGINT: 19,
    SqlType.INTEGER: 10,
    SqlType.SMALLINT: 5,
    SqlType.BOOLEAN: 1,
    SqlType.DATE: 10,
    SqlType.TIME: 8,
    SqlType.TIMESTAMP: 26,
    SqlType.TIMESTAMP_WITH_TIMEZONE: 32,
    SqlType.DOUBLE: 17,
    SqlType.FLOAT: 17,
    SqlType.REAL: 7,
}

def toSqlType(columnType: Any) -> Tuple[int, int, Optional[int]]:
    """Translate a reflected SQLAlchemy type into (type code, size, decimal digits)."""
    length = getattr(columnType, "length", None)

    if isinstance(columnType, sqltypes.NullType):
        code = SqlType.NULL
    elif isinstance(columnType, sqltypes.ARRAY):
        code = SqlType.ARRAY
    elif isinstance(columnType, sqltypes.Boolean):
        code = SqlType.BOOLEAN
    elif isinstance(columnType, sqltypes.BigInteger):
        code = SqlType.BIGINT
    elif isinstance(columnType, sqltypes.SmallInteger):
        code = SqlType.SMALLINT
    elif isinstance(columnType, sqltypes.Integer):
        code = SqlType.INTEGER
    elif isinstance(columnType, sqltypes.Float):
        if isinstance(columnType, sqltypes.REAL):
            code = SqlType.REAL
        elif isinstance(columnType, sqltypes.Double):
            code = SqlType.DOUBLE
        else:
            code = SqlType.FLOAT
        length = columnType.precision
    elif isinstance(columnType, sqltypes.Numeric):
        code = SqlType.DECIMAL if isinstance(columnType, sqltypes.DECIMAL) else SqlType.NUMERIC
        return code, columnType.precision or 0, columnType.scale
    elif isinstance(columnType, sqltypes.DateTime):
        code = SqlType.TIMESTAMP_WITH_TIMEZONE if columnType.timezone else SqlType.TIMESTAMP
    elif isinstance(columnType, sqltypes.Date):
        code = SqlType.DATE
    elif isinstance(columnType, sqltypes.Time):
        code = SqlType.TIME
    elif isinstance(columnType, sqltypes.Text):
        if isinstance(columnType, sqltypes.CLOB):
            code = SqlType.CLOB
        elif isinstance(columnType, sqltypes.UnicodeText):
            code = SqlType.LONGNVARCHAR
        else:
            code = SqlType.LONGVARCHAR
    elif isinstance(columnType, sqltypes.String):
        if isinstance(columnType, sqltypes.NCHAR):
            code = SqlType.NCHAR
        elif isinstance(columnType, sqltypes.CHAR):
            code = SqlType.CHAR
        elif isinstance(columnType, sqltypes.NVARCHAR):
            code = SqlType.NVARCHAR
        else:
            code = SqlType.VARCHAR
    elif isinstance(columnType, sqltypes.LargeBinary):
        code = SqlType.BLOB if isinstance(columnType, sqltypes.BLOB) else SqlType.LONGVARBINARY
    elif isinstance(columnType, sqltypes.VARBINARY):
        code = SqlType.VARBINARY
    elif isinstance(columnType, sqltypes.BINARY):
        code = SqlType.BINARY
    else:
        code = SqlType.OTHER

    return code, length or DEFAULT_SIZES.get(code, 0), None

def likePatternToRegex(pattern: str) -> "re.Pattern[str]":
    parts = []
    for char in pattern:
        if char == "%":
            parts.append(".*")
        elif char == "_":
            parts.append(".")
        else:
            parts.append(re.escape(char))
    return re.compile("".join(parts))

class CRUDTable:
    """Reads table, column and primary key records through a SQLAlchemy inspector."""

    def __init__(self, inspector: Inspector):
        self.inspector = inspector

    def listTables(self, schemaName: Optional[str] = None, tableNamePattern: Optional[str] = None) -> List[TableRecord]:
        names = self.inspector.get_table_names(schema=schemaName)
        if tableNamePattern:
            regex = likePatternToRegex(tableNamePattern)
            names = [n for n in names if regex.fullmatch(n)]
        return [TableRecord(name=n, schemaName=schemaName) for n in names]

    def getTable(self, tableName: str, schemaName: Optional[str] = None) -> TableRecord:
        if not self.inspector.has_table(tableName, schema=schemaName):
            raise NoSuchTableException(tableName=tableName, schemaName=schemaName)
        return TableRecord(name=tableName, schemaName=schemaName)

    def getColumns(self, table: TableRecord) -> List[ColumnRecord]:
        columns = []
        for reflected in self.inspector.get_columns(table.name, schema=table.schemaName):
            code, size, decimalDigits = toSqlType(reflected["type"])
            default = reflected.get("default")
            columns.append(ColumnRecord(
                name=reflected["name"],
                dataType=code,
                typeName=str(reflected["type"]),
                size=size,
                decimalDigits=decimalDigits,
                nullable=bool(reflected.get("nullable", True)),
                defaultValue=str(default) if default is not None else None,
                autoIncrement=reflected.get("autoincrement") is True
            ))
        logger.debug(f"Loaded {len(columns)} column(s) for {table.getQualifiedName()}")
        return columns

    def getPrimaryKeys(self, table: TableRecord) -> List[PrimaryKeyRecord]:
        constraint: Dict[str, Any] = self.inspector.get_pk_constraint(table.name, schema=table.schemaName) or {}
        return [
            PrimaryKeyRecord(name=columnName, keySequence=i + 1, constraintName=constraint.get("name"))
            for i, columnName in enumerate(constraint.get("constrained_columns") or [])
        ]

async def runWithTables(conn: AsyncConnection, fn: Callable[[CRUDTable], T]) -> T:
    """Run ``fn`` against a CRUDTable bound to the synchronous side of an async connection."""
    return await conn.run_sync(lambda syncConn: fn(CRUDTable(inspect(syncConn))))
