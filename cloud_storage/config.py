from pathlib import Path
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Literal, Optional
import logging
from functools import lru_cache


class Settings(BaseSettings):
    """
    General application configuration with type validation.
    Automatically reads variables from the environment and the .env file.
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    STORAGE_PROVIDER: Literal["dropbox", "s3"] = "dropbox"
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[Path] = None


class DropboxSettings(BaseSettings):
    """
    Credentials and confinement settings for the Dropbox adapter.
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    DBX_APP_KEY: Optional[str] = None
    DBX_APP_SECRET: Optional[str] = None
    DBX_ACCESS_TOKEN: str
    # Root path on Dropbox; nothing outside of it is ever touched.
    DBX_BASE_DIR: str = ""
    # 0 means unlimited recursion when listing folders.
    DBX_LIST_DEPTH_LIMIT: int = Field(0, ge=0)

    @model_validator(mode="after")
    def validate_dropbox_settings(self):
        if not self.DBX_ACCESS_TOKEN.strip():
            raise ValueError("DBX_ACCESS_TOKEN cannot be empty")

        if bool(self.DBX_APP_KEY) != bool(self.DBX_APP_SECRET):
            raise ValueError("DBX_APP_KEY and DBX_APP_SECRET must be set together")

        base_dir = self.DBX_BASE_DIR.strip()
        if ".." in base_dir:
            raise ValueError("DBX_BASE_DIR should not contain a parent directory segment")
        if base_dir and not base_dir.startswith("/"):
            raise ValueError("DBX_BASE_DIR must be empty or start with '/'")
        if base_dir.endswith("/"):
            base_dir = base_dir[:-1]
        self.DBX_BASE_DIR = base_dir
        return self


class AmazonS3Settings(BaseSettings):
    """
    Credentials and bucket for the Amazon S3 adapter.
    The bucket is fixed here so no other bucket is touched by mistake.
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    AWS_S3_KEY: str
    AWS_S3_SECRET: str
    AWS_S3_REGION: str
    AWS_S3_BUCKET: str

    @model_validator(mode="after")
    def validate_s3_settings(self):
        for key in ["AWS_S3_KEY", "AWS_S3_SECRET", "AWS_S3_REGION", "AWS_S3_BUCKET"]:
            if not getattr(self, key).strip():
                raise ValueError(f"{key} is required and cannot be empty")
        return self


@lru_cache()
def get_settings() -> Settings:
    """
    Returns a cached instance of the application settings.
    The first call to this function will initialize the settings.
    """
    return Settings()


@lru_cache()
def get_dropbox_settings() -> DropboxSettings:
    """Returns a cached instance of the Dropbox settings."""
    settings = DropboxSettings()
    logging.debug(f"Loaded Dropbox settings with base dir '{settings.DBX_BASE_DIR}'")
    return settings


@lru_cache()
def get_s3_settings() -> AmazonS3Settings:
    """Returns a cached instance of the Amazon S3 settings."""
    return AmazonS3Settings()
