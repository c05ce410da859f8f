"""
PipelineActivity resource models (jenkins.io/v1).
"""

from pydantic import BaseModel, Field
from typing import Dict, List, Optional
from datetime import datetime

from controller.src.models.step import ActivityStatus, ActivityStep

ACTIVITY_API_VERSION = "jenkins.io/v1"
ACTIVITY_KIND = "PipelineActivity"

class ObjectMeta(BaseModel):
    name: str = ""
    namespace: str = ""
    labels: Optional[Dict[str, str]] = None
    annotations: Optional[Dict[str, str]] = None
    resource_version: Optional[str] = Field(None, alias="resourceVersion")

    class Config:
        populate_by_name = True
        extra = "allow"

class PipelineActivitySpec(BaseModel):
    pipeline: str = ""
    build: str = ""
    status: ActivityStatus = ActivityStatus.NONE
    started_timestamp: Optional[datetime] = Field(None, alias="startedTimestamp")
    completed_timestamp: Optional[datetime] = Field(None, alias="completedTimestamp")
    steps: List[ActivityStep] = []
    git_url: str = Field("", alias="gitUrl")
    git_owner: str = Field("", alias="gitOwner")
    git_repository: str = Field("", alias="gitRepository")
    git_branch: str = Field("", alias="gitBranch")
    context: str = ""
    base_sha: str = Field("", alias="baseSHA")
    last_commit_sha: str = Field("", alias="lastCommitSHA")

    class Config:
        populate_by_name = True
        extra = "allow"

class PipelineActivity(BaseModel):
    api_version: str = Field("", alias="apiVersion")
    kind: str = ""
    metadata: ObjectMeta = Field(default_factory=ObjectMeta)
    spec: PipelineActivitySpec = Field(default_factory=PipelineActivitySpec)

    class Config:
        populate_by_name = True
        extra = "allow"

    @property
    def name(self) -> str:
        return self.metadata.name

    def to_dict(self) -> dict:
        """Serialize to the Kubernetes JSON shape."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")
