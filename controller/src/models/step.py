"""
Activity step models.
"""

from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime
from enum import Enum

class ActivityStatus(str, Enum):
    NONE = ""
    PENDING = "Pending"
    RUNNING = "Running"
    SUCCEEDED = "Succeeded"
    FAILED = "Failed"
    ABORTED = "Aborted"

    def is_terminated(self) -> bool:
        return self in (ActivityStatus.SUCCEEDED, ActivityStatus.FAILED, ActivityStatus.ABORTED)

class StepKind(str, Enum):
    STAGE = "Stage"
    PROMOTE = "Promote"
    PREVIEW = "Preview"

class CoreActivityStep(BaseModel):
    name: str = ""
    description: str = ""
    status: ActivityStatus = ActivityStatus.NONE
    started_timestamp: Optional[datetime] = Field(None, alias="startedTimestamp")
    completed_timestamp: Optional[datetime] = Field(None, alias="completedTimestamp")

    class Config:
        populate_by_name = True
        extra = "allow"

class StageActivityStep(CoreActivityStep):
    steps: List[CoreActivityStep] = []

class PromoteActivityStep(CoreActivityStep):
    environment: str = ""

class PreviewActivityStep(CoreActivityStep):
    environment: str = ""
    application_url: str = Field("", alias="applicationURL")

class ActivityStep(BaseModel):
    """One entry of an activity's step list; exactly one payload matches `kind`."""

    kind: StepKind = StepKind.STAGE
    stage: Optional[StageActivityStep] = None
    promote: Optional[PromoteActivityStep] = None
    preview: Optional[PreviewActivityStep] = None

    class Config:
        populate_by_name = True
        extra = "allow"

    def core(self) -> Optional[CoreActivityStep]:
        if self.stage is not None:
            return self.stage
        if self.promote is not None:
            return self.promote
        return self.preview

    def is_promotion(self) -> bool:
        return self.kind in (StepKind.PREVIEW, StepKind.PROMOTE)
