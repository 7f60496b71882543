from lxml import etree
from pydantic import BaseModel, ConfigDict
from typing import Callable, Dict, Iterable, List, Optional, TypeVar

from repogen.core.exceptions import MetaModelException
from repogen.core.logging import getLogger

logger = getLogger(__name__)

T = TypeVar("T")

ATTR_VALUE_TRUE = "true"

def isElement(node) -> bool:
    # Comments and processing instructions are _Element subclasses with a non-string tag.
    return isinstance(node, etree._Element) and isinstance(node.tag, str)

def selectDefault(candidates: List[T], isFlagged: Callable[[T], bool]) -> Optional[T]:
    """Pick the last explicitly flagged candidate, else the first one seen."""
    flagged = [c for c in candidates if isFlagged(c)]
    if flagged:
        return flagged[-1]
    return candidates[0] if candidates else None

def mapByName(entities: Iterable[T], kind: str) -> Dict[str, T]:
    mapped: Dict[str, T] = {}
    for entity in entities:
        if entity.name is None:
            logger.debug(f"Skipping unnamed {kind} in the name mapping.")
            continue
        if entity.name in mapped:
            logger.warning(f"Duplicate {kind} name '{entity.name}'; the later definition replaces the earlier one.")
        mapped[entity.name] = entity
    return mapped

class Header(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: Optional[str] = None
    author: Optional[str] = None
    version: Optional[str] = None
    description: Optional[str] = None

    @classmethod
    def fromNode(cls, node) -> "Header":
        description = node.findtext("description")
        return cls(
            name=node.findtext("name"),
            author=node.findtext("author"),
            version=node.findtext("version"),
            description=description.strip() if description is not None else None
        )

class Property(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    columnName: Optional[str] = None # single column or comma joined list
    dataType: Optional[str] = None
    itemType: Optional[str] = None
    repository: Optional[str] = None
    required: bool = False

    @classmethod
    def fromNode(cls, node) -> "Property":
        name = node.get("name")
        if not name:
            raise MetaModelException("Item Descriptor Property is missing a name attribute.")

        columnName = node.get("column-name")
        if columnName is None:
            columnName = node.get("column-names")

        dataType = node.get("data-type")
        if dataType is None:
            dataType = node.get("data-types")

        itemType = node.get("item-type")
        if itemType is None:
            itemType = node.get("component-item-type")

        return cls(
            name=name,
            columnName=columnName,
            dataType=dataType,
            itemType=itemType,
            repository=node.get("repository"),
            required=node.get("required") == ATTR_VALUE_TRUE
        )

    def getColumnNames(self) -> List[str]:
        if not self.columnName:
            return []
        return [c.strip() for c in self.columnName.split(",") if c.strip()]

    def getDataTypes(self) -> List[str]:
        if not self.dataType:
            return []
        return [t.strip() for t in self.dataType.split(",") if t.strip()]

class Table(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: Optional[str] = None
    schemaName: Optional[str] = None
    tableType: Optional[str] = None
    isPrimary: bool = False
    idColumnNames: Optional[str] = None

    @classmethod
    def fromNode(cls, node) -> "Table":
        name = node.get("name") or None
        schemaName = name.rsplit(".", 1)[0] if name and "." in name else None
        tableType = node.get("type")

        return cls(
            name=name,
            schemaName=schemaName,
            tableType=tableType,
            isPrimary=tableType == "primary",
            idColumnNames=node.get("id-column-names")
        )

    def getUnqualifiedName(self) -> Optional[str]:
        if self.name is None:
            return None
        return self.name.rsplit(".", 1)[-1]

    def getIdColumns(self) -> List[str]:
        if not self.idColumnNames:
            return []
        return [c.strip() for c in self.idColumnNames.split(",") if c.strip()]

class ItemDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    isDefault: bool = False
    tables: Dict[str, Table] = {}
    primaryTable: Optional[Table] = None
    properties: Dict[str, Property] = {}

    @classmethod
    def fromNode(cls, node) -> "ItemDescriptor":
        if not isElement(node):
            raise MetaModelException("Item Descriptor node must be of type Element.")

        name = node.get("name")
        if not name:
            raise MetaModelException("Item Descriptor is missing a name attribute.")

        tables = [Table.fromNode(n) for n in node.iterdescendants("table")]
        properties = [Property.fromNode(n) for n in node.iterdescendants("property")]

        return cls(
            name=name,
            isDefault=node.get("default") == ATTR_VALUE_TRUE,
            tables=mapByName(tables, "table"),
            primaryTable=selectDefault(tables, lambda t: t.isPrimary),
            properties=mapByName(properties, "property")
        )

    def getTable(self, name: str) -> Optional[Table]:
        return self.tables.get(name)

    def getProperty(self, name: str) -> Optional[Property]:
        return self.properties.get(name)

class SQLRepository(BaseModel):
    model_config = ConfigDict(frozen=True)

    header: Optional[Header] = None
    itemDescriptors: Dict[str, ItemDescriptor] = {}
    defaultItemDescriptor: Optional[ItemDescriptor] = None

    @classmethod
    def fromNode(cls, node) -> "SQLRepository":
        if not isElement(node):
            raise MetaModelException("SQL Repository (gsa-template) node must be of type Element.")

        headerNode = next(node.iterdescendants("header"), None)
        header = Header.fromNode(headerNode) if headerNode is not None else None

        itemDescriptors = [ItemDescriptor.fromNode(n) for n in node.iterdescendants("item-descriptor")]

        return cls(
            header=header,
            itemDescriptors=mapByName(itemDescriptors, "item descriptor"),
            defaultItemDescriptor=selectDefault(itemDescriptors, lambda d: d.isDefault)
        )

    def getItemDescriptor(self, name: str) -> Optional[ItemDescriptor]:
        return self.itemDescriptors.get(name)

    def getItemDescriptorList(self) -> List[ItemDescriptor]:
        return list(self.itemDescriptors.values())
