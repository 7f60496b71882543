import getpass
from typing import Literal, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

def defaultAuthor() -> str:
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return "repogen"

class Settings(BaseSettings):
    databaseUrl: str = "sqlite+aiosqlite:///./repogen.db"
    author: str = defaultAuthor()
    schemaName: Optional[str] = None
    tableNamePattern: Optional[str] = None # SQL LIKE pattern, e.g. "ORD%"
    packageName: Optional[str] = None
    outputDirectory: str = "generated"
    # What the descriptor generator writes for a column type with no mapping.
    unmappedTypePolicy: Literal["preserve", "omit", "fail"] = "preserve"
    logLevel: str = "INFO"
    logFile: Optional[str] = None

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

settings = Settings()
