"""
Tekton PipelineRun snapshot models (tekton.dev/v1beta1).

Only the parts of the resource read by the activity reconciler are modelled;
anything else on the object is kept as extra data.
"""

from pydantic import BaseModel, Field
from typing import Dict, List, Optional
from datetime import datetime

from controller.src.models.activity import ObjectMeta

class _Base(BaseModel):
    class Config:
        populate_by_name = True
        extra = "allow"

class TerminatedState(_Base):
    exit_code: int = Field(0, alias="exitCode")
    reason: str = ""
    started_at: Optional[datetime] = Field(None, alias="startedAt")
    finished_at: Optional[datetime] = Field(None, alias="finishedAt")

class RunningState(_Base):
    started_at: Optional[datetime] = Field(None, alias="startedAt")

class WaitingState(_Base):
    reason: str = ""
    message: str = ""

class StepState(_Base):
    name: str = ""
    container: str = ""
    terminated: Optional[TerminatedState] = None
    running: Optional[RunningState] = None
    waiting: Optional[WaitingState] = None

class TaskRunStatus(_Base):
    pod_name: str = Field("", alias="podName")
    steps: List[StepState] = []

class PipelineRunTaskRunStatus(_Base):
    pipeline_task_name: str = Field("", alias="pipelineTaskName")
    status: Optional[TaskRunStatus] = None

class PipelineRunStatus(_Base):
    task_runs: Optional[Dict[str, PipelineRunTaskRunStatus]] = Field(None, alias="taskRuns")

class PipelineRun(_Base):
    api_version: str = Field("tekton.dev/v1beta1", alias="apiVersion")
    kind: str = "PipelineRun"
    metadata: ObjectMeta = Field(default_factory=ObjectMeta)
    status: PipelineRunStatus = Field(default_factory=PipelineRunStatus)
