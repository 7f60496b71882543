import datetime
import logging

import pytest
from sqlalchemy import create_engine, text

from repogen.core.logging import ROOT_LOGGER_NAME
from repogen.models.schema_models import ColumnRecord, PrimaryKeyRecord, TableRecord
from repogen.services.generator_base import GenerationContext
from repogen.services.type_mapper import SqlType

class FakeIntrospection:
    """In-memory column and primary key source keyed by table name."""

    def __init__(self, columns=None, primaryKeys=None, error=None):
        self.columns = columns or {}
        self.primaryKeys = primaryKeys or {}
        self.error = error

    def getColumns(self, table: TableRecord):
        if self.error is not None:
            raise self.error
        return self.columns.get(table.name, [])

    def getPrimaryKeys(self, table: TableRecord):
        if self.error is not None:
            raise self.error
        return self.primaryKeys.get(table.name, [])

def column(name, dataType, size=0, nullable=True, decimalDigits=None, typeName=None):
    return ColumnRecord(
        name=name,
        dataType=dataType,
        size=size,
        nullable=nullable,
        decimalDigits=decimalDigits,
        typeName=typeName
    )

def primaryKey(name, keySequence):
    return PrimaryKeyRecord(name=name, keySequence=keySequence)


@pytest.fixture
def context():
    return GenerationContext(
        author="tester",
        clock=lambda: datetime.datetime(2026, 10, 19, 9, 30)
    )

@pytest.fixture
def ordersIntrospection():
    return FakeIntrospection(
        columns={
            "orders": [
                column("ID", SqlType.INTEGER, size=10, nullable=False),
                column("NAME", SqlType.VARCHAR, size=30),
            ]
        },
        primaryKeys={"orders": [primaryKey("ID", 1)]}
    )

SCHEMA_DDL = [
    "CREATE TABLE ORDERS (ID INTEGER NOT NULL, SUB_ID INTEGER NOT NULL, ORDER_DATE VARCHAR(30) NOT NULL, "
    "TOTAL DECIMAL(12, 2), QUANTITY NUMERIC(10, 0), PRIMARY KEY (ID, SUB_ID))",
    "CREATE TABLE ORDER_ITEMS (ITEM_ID INTEGER PRIMARY KEY, NOTE TEXT)",
    "CREATE TABLE CUSTOMERS (CUSTOMER_ID BIGINT NOT NULL PRIMARY KEY, CREATED DATE, ACTIVE BOOLEAN)",
]

def createSchema(databasePath, statements=SCHEMA_DDL) -> str:
    """Create a sqlite database file and return its path as a string."""
    engine = create_engine(f"sqlite:///{databasePath}")
    with engine.begin() as conn:
        for statement in statements:
            conn.execute(text(statement))
    engine.dispose()
    return str(databasePath)

@pytest.fixture
def databasePath(tmp_path):
    return createSchema(tmp_path / "schema.db")

@pytest.fixture(autouse=True)
def resetLogging():
    yield
    logging.getLogger(ROOT_LOGGER_NAME).handlers.clear()
