import os
from dotenv import load_dotenv
from pydantic import BaseModel, field_validator

# Chargement des variables d'environnement
load_dotenv()


class ClientConfig(BaseModel):
    """Where the client finds the users API."""

    api_url: str = "http://localhost:3000"

    class Config:
        frozen = True

    @field_validator("api_url")
    @classmethod
    def strip_trailing_slash(cls, v):
        return v.rstrip("/")

    @classmethod
    def from_env(cls) -> "ClientConfig":
        return cls(api_url=os.getenv("API_URL", cls().api_url))
