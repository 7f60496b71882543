import os
from lxml import etree
from typing import List, Sequence, Tuple, Union

from repogen.core.exceptions import MetaModelException
from repogen.core.logging import getLogger
from repogen.models.descriptor_models import SQLRepository

logger = getLogger(__name__)

class DescriptorReader:
    def __init__(self):
        # Descriptors reference a remote DTD; never fetch it or expand entities.
        self.parser = etree.XMLParser(
            load_dtd=False,
            no_network=True,
            resolve_entities=False,
            remove_comments=False
        )

    def readRepository(self, node) -> SQLRepository:
        if isinstance(node, etree._ElementTree):
            node = node.getroot()
        return SQLRepository.fromNode(node)

    def parseString(self, content: Union[str, bytes]) -> SQLRepository:
        if isinstance(content, str):
            # lxml refuses str input that carries an encoding declaration.
            content = content.encode("utf-8")
        try:
            root = etree.fromstring(content, parser=self.parser)
        except etree.XMLSyntaxError as e:
            raise MetaModelException(f"Could not parse the SQL Repository document: {e}")
        return self.readRepository(root)

    def parseFile(self, path: Union[str, os.PathLike]) -> SQLRepository:
        try:
            tree = etree.parse(os.fspath(path), parser=self.parser)
        except etree.XMLSyntaxError as e:
            raise MetaModelException(f"Could not parse the SQL Repository document {path}: {e}")
        except OSError as e:
            raise MetaModelException(f"Could not read the SQL Repository document {path}: {e}")
        return self.readRepository(tree)

    def readRepositoryFiles(self, paths: Sequence[Union[str, os.PathLike]]) -> List[Tuple[str, SQLRepository]]:
        results = []
        for path in paths:
            try:
                repository = self.parseFile(path)
            except MetaModelException as e:
                logger.error(f"While processing {os.path.abspath(path)} ...")
                raise MetaModelException(f"{os.fspath(path)}: {e.message}")
            logger.debug(f"Read {len(repository.itemDescriptors)} item descriptor(s) from {path}")
            results.append((os.fspath(path), repository))
        return results

descriptorReader = DescriptorReader()
