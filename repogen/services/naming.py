from typing import Optional

from repogen.models.schema_models import ColumnRecord, TableRecord

def createObjectName(value: Optional[str]) -> Optional[str]:
    """Convert a database name to a proper cased object name, e.g. "user_group" to "UserGroup".

    Names without underscores are assumed to already follow object naming
    and only get their first character upper cased.
    """
    if not value:
        return value

    if "_" not in value:
        return value[0].upper() + value[1:]

    result = []
    upperCaseNext = True
    for char in value.lower():
        if char == "_" or char.isspace():
            upperCaseNext = True
        elif upperCaseNext and char.islower():
            result.append(char.upper())
            upperCaseNext = False
        else:
            result.append(char)

    return "".join(result)

def getObjectName(table: TableRecord) -> str:
    return createObjectName(table.name)

def getColumnObjectName(column: ColumnRecord) -> str:
    return createObjectName(column.name)
