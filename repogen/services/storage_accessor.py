import os
import aiofiles
import aiofiles.os as aios
from repogen.core.exceptions import ValidationException

class StorageAccessor:
    def __init__(self, baseOutputPath: str):
        self.baseOutputPath = baseOutputPath

    def resolvePath(self, relativeOrAbsolutePath: str) -> str:
        if os.path.isabs(relativeOrAbsolutePath):
            return relativeOrAbsolutePath

        basePath = os.path.abspath(self.baseOutputPath)
        fullPath = os.path.abspath(os.path.join(basePath, relativeOrAbsolutePath))
        if os.path.commonpath([basePath, fullPath]) != basePath:
            raise ValidationException(f"Path traversal attempt detected for relative path: {relativeOrAbsolutePath}")
        return fullPath

    async def readTextFile(self, path: str) -> str:
        resolvedPath = self.resolvePath(path)
        async with aiofiles.open(resolvedPath, mode='r', encoding='utf-8') as f:
            return await f.read()

    async def writeTextFile(self, path: str, content: str) -> str:
        # Sink errors are the caller's to handle; nothing is wrapped here.
        resolvedPath = self.resolvePath(path)
        parentDir = os.path.dirname(resolvedPath)
        if parentDir and not await aios.path.exists(parentDir):
            await aios.makedirs(parentDir, exist_ok=True)
        async with aiofiles.open(resolvedPath, mode='w', encoding='utf-8') as f:
            await f.write(content)
        return resolvedPath

    async def fileExists(self, path: str) -> bool:
        return await aios.path.exists(self.resolvePath(path))
