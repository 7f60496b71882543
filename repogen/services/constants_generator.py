from typing import List, Optional, Sequence

from repogen.models.schema_models import ColumnRecord, TableRecord
from repogen.services.generator_base import GenerationContext, SchemaIntrospection, loadColumns
from repogen.services.naming import getObjectName

CLASS_NAME_SUFFIX = "MetaData"
PREFIX_MAX_LEN = "MAX_LEN_"
PREFIX_REQUIRED = "REQUIRED_"

def getClassName(objectName: str) -> str:
    return objectName + CLASS_NAME_SUFFIX

def getConstantName(prefix: str, column: ColumnRecord) -> str:
    return prefix + column.name.upper()

class ConstantsGenerator:
    """Generates a class of column size and required-ness constants for a single table.

    Emits one ``MAX_LEN_<COLUMN>`` constant per column followed by one
    ``REQUIRED_<COLUMN>`` constant per column, both in the order the schema
    returned the columns.
    """

    def __init__(self, introspection: SchemaIntrospection, context: Optional[GenerationContext] = None):
        self.introspection = introspection
        self.context = context or GenerationContext()

    def getOutputFileName(self, table: TableRecord) -> str:
        return getClassName(getObjectName(table)) + ".java"

    def generate(self, table: TableRecord) -> str:
        columns = loadColumns(self.introspection, table)

        lines: List[str] = []
        lines.extend(self.buildHeader())
        lines.extend(self.buildClassDeclaration(table))
        lines.extend(self.buildMaxLengthConstants(columns))
        lines.extend(self.buildIsRequiredConstants(columns))
        lines.extend(self.buildFooter())
        return "\n".join(lines) + "\n"

    def buildHeader(self) -> List[str]:
        lines = []
        if self.context.packageName:
            lines.append(f"package {self.context.packageName};")
        lines.extend([
            "",
            "/**********************************************************************************",
            "*",
            "*\tClass that contains constants that describe the meta data of table column",
            "*\tinformation such as maximum lengths and required fields.",
            "*",
            f"*\t@author {self.context.author}",
            "*\t@version 1.0.0.0",
            f"*\t@date {self.context.getDateString()}",
            "*",
            "**********************************************************************************/",
        ])
        return lines

    def buildClassDeclaration(self, table: TableRecord) -> List[str]:
        return ["", f"public class {getClassName(getObjectName(table))}", "{"]

    def buildSectionHeader(self, title: str) -> List[str]:
        return [
            "\t/**************************************************************************",
            "\t*",
            f"\t*\t{title}",
            "\t*",
            "\t**************************************************************************/",
        ]

    def buildMaxLengthConstants(self, columns: Sequence[ColumnRecord]) -> List[str]:
        lines = self.buildSectionHeader("Constants - maximum lengths")
        for column in columns:
            lines.append("")
            lines.append(f'\t/** Constant - maximum length of field "{column.name}". */')
            lines.append(f"\tpublic static final int {getConstantName(PREFIX_MAX_LEN, column)} = {column.size};")
        return lines

    def buildIsRequiredConstants(self, columns: Sequence[ColumnRecord]) -> List[str]:
        lines = [""]
        lines.extend(self.buildSectionHeader("Constants - is required?"))
        for column in columns:
            isRequired = "false" if column.nullable else "true"
            lines.append("")
            lines.append(f'\t/** Constant - is field "{column.name}" required. */')
            lines.append(f"\tpublic static final boolean {getConstantName(PREFIX_REQUIRED, column)} = {isRequired};")
        return lines

    def buildFooter(self) -> List[str]:
        return ["}"]
