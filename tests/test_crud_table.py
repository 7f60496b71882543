import pytest
from sqlalchemy import create_engine, inspect
from sqlalchemy import types as sqltypes

from repogen.core.exceptions import NoSuchTableException
from repogen.crud.crud_table import CRUDTable, likePatternToRegex, toSqlType
from repogen.models.schema_models import TableRecord
from repogen.services.type_mapper import SqlType, getPropertyDataType

@pytest.fixture
def crudTable(databasePath):
    engine = create_engine(f"sqlite:///{databasePath}")
    with engine.connect() as conn:
        yield CRUDTable(inspect(conn))
    engine.dispose()

def test_list_tables(crudTable):
    names = {t.name for t in crudTable.listTables()}
    assert names == {"ORDERS", "ORDER_ITEMS", "CUSTOMERS"}

def test_list_tables_with_like_pattern(crudTable):
    assert {t.name for t in crudTable.listTables(tableNamePattern="ORD%")} == {"ORDERS", "ORDER_ITEMS"}
    assert [t.name for t in crudTable.listTables(tableNamePattern="ORDER_")] == ["ORDERS"]
    assert crudTable.listTables(tableNamePattern="NOTHING%") == []

def test_listed_tables_carry_the_requested_schema(crudTable):
    tables = crudTable.listTables(schemaName="main", tableNamePattern="CUSTOMERS")
    assert tables == [TableRecord(name="CUSTOMERS", schemaName="main")]
    assert tables[0].getQualifiedName() == "main.CUSTOMERS"

def test_get_missing_table(crudTable):
    with pytest.raises(NoSuchTableException) as excInfo:
        crudTable.getTable("MISSING")
    assert excInfo.value.statusCode == 404

def test_columns_in_declaration_order(crudTable):
    columns = crudTable.getColumns(crudTable.getTable("ORDERS"))
    assert [c.name for c in columns] == ["ID", "SUB_ID", "ORDER_DATE", "TOTAL", "QUANTITY"]

def test_column_metadata(crudTable):
    columns = {c.name: c for c in crudTable.getColumns(crudTable.getTable("ORDERS"))}

    assert columns["ID"].dataType == SqlType.INTEGER
    assert not columns["ID"].nullable

    assert columns["ORDER_DATE"].dataType == SqlType.VARCHAR
    assert columns["ORDER_DATE"].size == 30
    assert not columns["ORDER_DATE"].nullable

    assert columns["TOTAL"].dataType == SqlType.DECIMAL
    assert columns["TOTAL"].size == 12
    assert columns["TOTAL"].decimalDigits == 2
    assert columns["TOTAL"].nullable
    assert getPropertyDataType(columns["TOTAL"]) == "double"

    assert columns["QUANTITY"].decimalDigits == 0
    assert getPropertyDataType(columns["QUANTITY"]) == "int"

def test_other_column_types(crudTable):
    columns = {c.name: c for c in crudTable.getColumns(crudTable.getTable("CUSTOMERS"))}
    assert getPropertyDataType(columns["CUSTOMER_ID"]) == "long"
    assert getPropertyDataType(columns["CREATED"]) == "date"
    assert getPropertyDataType(columns["ACTIVE"]) == "boolean"

    notes = {c.name: c for c in crudTable.getColumns(crudTable.getTable("ORDER_ITEMS"))}
    assert getPropertyDataType(notes["NOTE"]) == "big string"

def test_primary_keys_in_key_sequence_order(crudTable):
    primaryKeys = crudTable.getPrimaryKeys(crudTable.getTable("ORDERS"))
    assert [(pk.name, pk.keySequence) for pk in primaryKeys] == [("ID", 1), ("SUB_ID", 2)]

@pytest.mark.parametrize("columnType, expected", [
    (sqltypes.BigInteger(), (SqlType.BIGINT, 19, None)),
    (sqltypes.SmallInteger(), (SqlType.SMALLINT, 5, None)),
    (sqltypes.String(40), (SqlType.VARCHAR, 40, None)),
    (sqltypes.CHAR(2), (SqlType.CHAR, 2, None)),
    (sqltypes.NVARCHAR(12), (SqlType.NVARCHAR, 12, None)),
    (sqltypes.Numeric(8, 3), (SqlType.NUMERIC, 8, 3)),
    (sqltypes.DateTime(timezone=True), (SqlType.TIMESTAMP_WITH_TIMEZONE, 32, None)),
    (sqltypes.Time(), (SqlType.TIME, 8, None)),
    (sqltypes.LargeBinary(), (SqlType.LONGVARBINARY, 0, None)),
    (sqltypes.ARRAY(sqltypes.Integer()), (SqlType.ARRAY, 0, None)),
    (sqltypes.NullType(), (SqlType.NULL, 0, None)),
])
def test_to_sql_type(columnType, expected):
    assert toSqlType(columnType) == expected

def test_like_pattern_escapes_regex_characters():
    regex = likePatternToRegex("A.B%")
    assert regex.fullmatch("A.BC")
    assert not regex.fullmatch("AXBC")
