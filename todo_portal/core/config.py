# File: todo_portal/core/config.py

import os
from functools import lru_cache
from typing import List

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

load_dotenv()


class Settings(BaseModel):
    # Basic app info
    PROJECT_NAME: str = "Todo Management API"
    VERSION: str = "1.0.0"

    api_prefix: str = "/api"
    debug: bool = os.getenv("DEBUG", "false").lower() in ("1", "true", "yes")
    port: int = int(os.getenv("PORT", "3000"))
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # CORS ("*" keeps every origin open, like the dev frontend expects)
    backend_cors_origins: List[str] = Field(default=os.getenv("BACKEND_CORS_ORIGINS", "*"), validate_default=True)

    # Security / auth
    # NOTE: the fallback secret is for local development only.
    secret_key: str = os.getenv("JWT_SECRET", "your-secret-key-change-in-production")
    algorithm: str = "HS256"
    access_token_expire_minutes: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24)))  # 24h
    bcrypt_rounds: int = int(os.getenv("BCRYPT_ROUNDS", "10"))
    password_min_length: int = 8

    # Todo listing
    default_page_size: int = 10
    max_page_size: int = 100

    @field_validator("backend_cors_origins", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v):
        if isinstance(v, str):
            return [i.strip() for i in v.split(",") if i.strip()]
        if isinstance(v, list):
            return v
        return []


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
