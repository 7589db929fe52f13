"""
Configuration models for the gist to activity sync.
"""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class TrackedEntity(BaseModel):
    """A GitHub user whose gists are mirrored."""
    name: str = Field(..., description="GitHub username, unique within the config")
    last_visit: Optional[str] = Field(
        None,
        alias="lastVisit",
        description="Timestamp of the last successful on-demand lookup"
    )

    model_config = ConfigDict(populate_by_name=True)


class AppConfig(BaseModel):
    """
    Configuration for the sync service.
    Loaded once at process start from the JSON config file.
    """
    # Source
    github_base_url: str = Field("https://api.github.com", alias="githubBaseUrl")
    github_token: str = Field(..., alias="githubToken", min_length=1)

    # Destination
    pipedrive_base_url: str = Field(..., alias="pipedriveBaseUrl", min_length=1)
    pipedrive_token: str = Field(..., alias="pipedriveToken", min_length=1)

    # Tracked users
    users: List[TrackedEntity] = Field(default_factory=list)

    # Runtime options
    schedule: str = Field("*/15 * * * *", description="Cron expression for the recurring sync")
    data_dir: str = Field("data", alias="dataDir", description="Directory for raw gist snapshots")
    request_timeout: float = Field(30.0, alias="requestTimeout", gt=0)

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("github_base_url", "pipedrive_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("users")
    @classmethod
    def unique_user_names(cls, v: List[TrackedEntity]) -> List[TrackedEntity]:
        names = [user.name for user in v]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"Duplicate tracked users: {', '.join(duplicates)}")
        return v

    def get_user(self, name: str) -> Optional[TrackedEntity]:
        """Find a tracked user by name."""
        for user in self.users:
            if user.name == name:
                return user
        return None
