from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Optional

class TableRecord(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    schemaName: Optional[str] = Field(None, alias="schema")
    tableType: str = "TABLE"
    remarks: Optional[str] = None

    def getQualifiedName(self) -> str:
        return f"{self.schemaName}.{self.name}" if self.schemaName else self.name

class ColumnRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    dataType: int # relational type code, see SqlType
    typeName: Optional[str] = None
    size: int = 0
    decimalDigits: Optional[int] = None # None when the driver does not report a scale
    nullable: bool = True
    defaultValue: Optional[str] = None
    autoIncrement: bool = False

class PrimaryKeyRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str # column name
    keySequence: int
    constraintName: Optional[str] = None

class TableColumnsResponse(BaseModel):
    table: TableRecord
    columns: List[ColumnRecord]
    primaryKeys: List[PrimaryKeyRecord]

class GeneratorConfig(BaseModel):
    default: Optional[Dict[str, str]] = None
    override: Optional[Dict[str, str]] = None
