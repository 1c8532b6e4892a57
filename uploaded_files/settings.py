import logging

from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict

from uploaded_files.models.configuration import UploadConfiguration

logger = logging.getLogger(__name__)


class FilesystemSettings(BaseModel):
    type: str = "local"

    local_path: str = "./uploads"

    s3_bucket: str = ""
    s3_region: str = ""
    s3_access_key_id: str = ""
    s3_secret_access_key: str = ""
    s3_endpoint_url: str = ""


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="UPLOADED_FILES_", extra="ignore")

    # Both maps are JSON objects when given through the environment, e.g.
    # UPLOADED_FILES_CONFIGURATIONS='{"default": {"filesystem": "default", "path": "/uploads"}}'
    configurations: dict[str, UploadConfiguration] = {
        "default": UploadConfiguration(filesystem="default"),
    }
    filesystems: dict[str, FilesystemSettings] = {
        "default": FilesystemSettings(),
    }

    log_level: str = "INFO"
    # Level for the uploaded_files loggers only; empty inherits log_level.
    package_log_level: str = ""
    log_json: bool = False


settings = Settings()
