"""
Record models for data flowing from GitHub to Pipedrive.
"""

from typing import Any, List, Optional
from pydantic import BaseModel, ConfigDict, Field

# Fixed values for every activity created from a gist
ACTIVITY_TYPE = "Task"
ACTIVITY_NOT_DONE = 0
NOTE_OWNER_SEPARATOR = "; Owner: "


class GistOwner(BaseModel):
    """Owner block of a gist."""
    login: str

    model_config = ConfigDict(frozen=True, extra="allow")


class Gist(BaseModel):
    """
    A gist as returned by the GitHub API.

    Only the fields needed for an activity are required; everything else
    GitHub sends is kept so the raw snapshot stays complete.
    """
    id: str
    html_url: str
    owner: GistOwner

    model_config = ConfigDict(frozen=True, extra="allow")


class Activity(BaseModel):
    """A Pipedrive activity ready to be posted."""
    subject: str
    note: str
    type: str = ACTIVITY_TYPE
    done: int = ACTIVITY_NOT_DONE

    model_config = ConfigDict(frozen=True)


class PublishOutcome(BaseModel):
    """An activity that Pipedrive accepted."""
    id: Any
    subject: Optional[str] = None
    success: bool = True


# One inner list per tracked user, in tracked-user order
SourceBatch = List[List[Gist]]


class EntityFetchResult(BaseModel):
    """Result of fetching the gists of a single tracked user."""
    entity: str
    success: bool
    gists: List[Gist] = Field(default_factory=list)
    status_code: Optional[int] = None
    error: Optional[str] = None
