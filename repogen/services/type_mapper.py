from enum import IntEnum
from types import MappingProxyType
from typing import Mapping, Optional

from repogen.models.schema_models import ColumnRecord

class SqlType(IntEnum):
    """Standard relational (JDBC) type codes."""
    BIT = -7
    TINYINT = -6
    SMALLINT = 5
    INTEGER = 4
    BIGINT = -5
    FLOAT = 6
    REAL = 7
    DOUBLE = 8
    NUMERIC = 2
    DECIMAL = 3
    CHAR = 1
    VARCHAR = 12
    LONGVARCHAR = -1
    NCHAR = -15
    NVARCHAR = -9
    LONGNVARCHAR = -16
    DATE = 91
    TIME = 92
    TIMESTAMP = 93
    TIME_WITH_TIMEZONE = 2013
    TIMESTAMP_WITH_TIMEZONE = 2014
    BINARY = -2
    VARBINARY = -3
    LONGVARBINARY = -4
    NULL = 0
    OTHER = 1111
    JAVA_OBJECT = 2000
    DISTINCT = 2001
    STRUCT = 2002
    ARRAY = 2003
    BLOB = 2004
    CLOB = 2005
    REF = 2006
    DATALINK = 70
    BOOLEAN = 16
    ROWID = -8
    NCLOB = 2011
    SQLXML = 2009
    REF_CURSOR = 2012

DATA_TYPE_LONG = "long"
DATA_TYPE_INTEGER = "int"
DATA_TYPE_SMALLINT = "short"

# None marks a type with no descriptor representation.
DATA_TYPES: Mapping[SqlType, Optional[str]] = MappingProxyType({
    SqlType.BIGINT: DATA_TYPE_LONG,
    SqlType.INTEGER: DATA_TYPE_INTEGER,
    SqlType.SMALLINT: DATA_TYPE_SMALLINT,
    SqlType.TINYINT: DATA_TYPE_SMALLINT,
    SqlType.CHAR: "string",
    SqlType.VARCHAR: "string",
    SqlType.NCHAR: "string",
    SqlType.NVARCHAR: "string",
    SqlType.LONGVARCHAR: "big string",
    SqlType.LONGNVARCHAR: "big string",
    SqlType.CLOB: "big string",
    SqlType.NCLOB: "big string",
    SqlType.BINARY: "binary",
    SqlType.VARBINARY: "binary",
    SqlType.LONGVARBINARY: "binary",
    SqlType.BLOB: "binary",
    SqlType.DATE: "date",
    SqlType.TIME: "timestamp",
    SqlType.TIMESTAMP: "timestamp",
    SqlType.TIME_WITH_TIMEZONE: "timestamp",
    SqlType.TIMESTAMP_WITH_TIMEZONE: "timestamp",
    SqlType.DECIMAL: "double",
    SqlType.NUMERIC: "double",
    SqlType.DOUBLE: "double",
    SqlType.REAL: "double",
    SqlType.FLOAT: "float",
    SqlType.BIT: "boolean",
    SqlType.BOOLEAN: "boolean",
    SqlType.ARRAY: None,
    SqlType.JAVA_OBJECT: None,
    SqlType.DISTINCT: "map",
    SqlType.STRUCT: None,
    SqlType.REF: None,
    SqlType.NULL: None,
    SqlType.OTHER: None,
    SqlType.ROWID: None,
    SqlType.SQLXML: None,
    SqlType.DATALINK: None,
    SqlType.REF_CURSOR: None,
})

def mapType(sqlType: int) -> Optional[str]:
    try:
        return DATA_TYPES.get(SqlType(sqlType))
    except ValueError:
        # Driver specific code outside the standard set.
        return None

def normalizeSqlType(column: ColumnRecord) -> int:
    """Treat DECIMAL/NUMERIC columns with zero decimal digits as integral types sized by precision."""
    if column.dataType not in (SqlType.DECIMAL, SqlType.NUMERIC) or column.decimalDigits != 0:
        return column.dataType

    if column.size < 6:
        return SqlType.SMALLINT
    elif column.size < 11:
        return SqlType.INTEGER
    return SqlType.BIGINT

def getPropertyDataType(column: ColumnRecord) -> Optional[str]:
    return mapType(normalizeSqlType(column))
