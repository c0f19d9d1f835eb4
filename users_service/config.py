import os
from dotenv import load_dotenv
from pydantic import BaseModel

# Chargement des variables d'environnement
load_dotenv()


class Settings(BaseModel):
    """Runtime settings of the users service.

    Defaults match a local setup: API on port 3000, client dev server on
    http://localhost:5173/ and a SQLite file next to the working directory.
    """

    port: int = 3000
    client_domain: str = "http://localhost:5173/"
    database_url: str = "sqlite+aiosqlite:///./users.db"
    log_file: str = "logs.json"
    log_level: str = "INFO"
    db_echo: bool = False

    class Config:
        frozen = True

    @classmethod
    def from_env(cls) -> "Settings":
        defaults = cls()
        return cls(
            port=int(os.getenv("PORT", defaults.port)),
            client_domain=os.getenv("CLIENT_DOMAIN", defaults.client_domain),
            database_url=os.getenv("DATABASE_URL", defaults.database_url),
            log_file=os.getenv("LOG_FILE", defaults.log_file),
            log_level=os.getenv("LOG_LEVEL", defaults.log_level),
            db_echo=os.getenv("DB_ECHO", "false").lower() in ("1", "true", "yes"),
        )

    @property
    def cors_origins(self):
        # Browsers send Origin without the trailing slash
        return [self.client_domain.rstrip("/")]
