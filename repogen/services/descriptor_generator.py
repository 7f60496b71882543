from typing import List, Optional, Sequence
from xml.sax.saxutils import escape

from repogen.core.config import settings
from repogen.core.exceptions import GeneratorException
from repogen.core.logging import getLogger
from repogen.models.schema_models import ColumnRecord, PrimaryKeyRecord, TableRecord
from repogen.services.generator_base import GenerationContext, SchemaIntrospection, loadColumns, loadPrimaryKeys
from repogen.services.naming import getColumnObjectName, getObjectName
from repogen.services.type_mapper import getPropertyDataType

logger = getLogger(__name__)

UNMAPPED_DATA_TYPE = "null"

def escapeAttribute(value: str) -> str:
    return escape(value, {'"': "&quot;"})

def getPrimaryKeyColumns(primaryKeys: Sequence[PrimaryKeyRecord], columns: Sequence[ColumnRecord]) -> Optional[str]:
    """Comma separated primary key columns, or the first column when the table has no primary key."""
    if primaryKeys:
        return ",".join(pk.name for pk in primaryKeys)
    return columns[0].name if columns else None

class DescriptorXmlGenerator:
    """Generates a SQL repository item descriptor for a single table."""

    def __init__(self, introspection: SchemaIntrospection, context: Optional[GenerationContext] = None, unmappedTypePolicy: Optional[str] = None):
        self.introspection = introspection
        self.context = context or GenerationContext()
        self.unmappedTypePolicy = unmappedTypePolicy or settings.unmappedTypePolicy

    def getOutputFileName(self, table: TableRecord) -> str:
        return getObjectName(table) + "Repository.xml"

    def generate(self, table: TableRecord) -> str:
        columns = loadColumns(self.introspection, table)
        primaryKeys = loadPrimaryKeys(self.introspection, table)

        idColumnNames = getPrimaryKeyColumns(primaryKeys, columns)
        if idColumnNames is None:
            raise GeneratorException(f"Table '{table.getQualifiedName()}' has neither primary keys nor columns to use as the id column.")

        lines: List[str] = []
        lines.extend(self.buildXmlHeader())
        lines.extend(self.buildHeader(table))
        lines.extend(self.buildItemDescriptorBody(table, columns, idColumnNames))
        lines.extend(self.buildFooter())
        return "\n".join(lines) + "\n"

    def buildXmlHeader(self) -> List[str]:
        return [
            '<?xml version="1.0" encoding="UTF-8" standalone="no" ?>',
            "",
            "<!DOCTYPE gsa-template",
            '  PUBLIC "-//Art Technology Group, Inc.//DTD Dynamo Security//EN"',
            '         "http://www.atg.com/dtds/gsa/gsa_1.0.dtd">',
            "",
            "<gsa-template>",
        ]

    def buildHeader(self, table: TableRecord) -> List[str]:
        return [
            "",
            "\t<header>",
            f"\t\t<name>{escape(getObjectName(table))}Repository</name>",
            f"\t\t<author>{escape(self.context.author)}</author>",
            "\t\t<description>",
            f"\t\t\t{escape(table.name)} Entity SQL to object mapping",
            "\t\t</description>",
            "\t</header>",
        ]

    def buildItemDescriptorBody(self, table: TableRecord, columns: Sequence[ColumnRecord], idColumnNames: str) -> List[str]:
        lines = [
            "",
            f'\t<item-descriptor name="{escapeAttribute(getObjectName(table))}" default="true">',
            f'\t\t<table name="{escapeAttribute(table.getQualifiedName())}" type="primary" id-column-names="{escapeAttribute(idColumnNames)}">',
        ]
        for column in columns:
            lines.append(self.buildProperty(table, column))
        lines.append("\t\t</table>")
        lines.append("\t</item-descriptor>")
        return lines

    def buildProperty(self, table: TableRecord, column: ColumnRecord) -> str:
        dataType = getPropertyDataType(column)
        required = "false" if column.nullable else "true"

        dataTypeAttr = ""
        if dataType is not None:
            dataTypeAttr = f' data-types="{escapeAttribute(dataType)}"'
        elif self.unmappedTypePolicy == "fail":
            raise GeneratorException(
                f"Column '{column.name}' of table '{table.getQualifiedName()}' has type code {column.dataType} "
                f"({column.typeName or 'unknown'}) with no repository data type."
            )
        elif self.unmappedTypePolicy == "omit":
            logger.warning(f"Omitting data-types for column '{column.name}' of '{table.getQualifiedName()}': type code {column.dataType} is not mapped.")
        else:
            logger.warning(f"Writing data-types=\"{UNMAPPED_DATA_TYPE}\" for column '{column.name}' of '{table.getQualifiedName()}': type code {column.dataType} is not mapped.")
            dataTypeAttr = f' data-types="{UNMAPPED_DATA_TYPE}"'

        return (
            f'\t\t\t<property name="{escapeAttribute(getColumnObjectName(column))}"'
            f' column-names="{escapeAttribute(column.name)}"'
            f'{dataTypeAttr} required="{required}" />'
        )

    def buildFooter(self) -> List[str]:
        return ["", "</gsa-template>"]
