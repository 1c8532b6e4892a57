from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class UploadConfiguration(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    filesystem: str = Field(min_length=1)
    base_uri: str | None = None
    path: str | None = None

    @property
    def base_path(self) -> str:
        """Storage prefix without leading or trailing slashes."""
        return (self.path or "").strip("/")

    @property
    def public_base(self) -> str:
        """Public URL prefix without a trailing slash."""
        return (self.base_uri or "").rstrip("/")
