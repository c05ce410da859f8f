"""
Lighthouse trigger configuration (`triggers.yaml`) models.
"""

from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional

TEKTON_PIPELINE_AGENT = "tekton-pipeline"

class JobBase(BaseModel):
    name: str = ""
    agent: str = ""
    source_path: str = Field("", alias="source")
    pipeline_run_spec: Optional[Dict[str, Any]] = None
    max_concurrency: Optional[int] = None

    class Config:
        populate_by_name = True
        extra = "allow"

class Presubmit(JobBase):
    context: str = ""
    always_run: bool = False
    optional: bool = False
    trigger: str = ""
    rerun_command: str = ""

class Postsubmit(JobBase):
    context: str = ""
    branches: List[str] = []

class TriggerConfigSpec(BaseModel):
    presubmits: List[Presubmit] = []
    postsubmits: List[Postsubmit] = []

    class Config:
        extra = "allow"

class TriggerConfig(BaseModel):
    api_version: str = Field("config.lighthouse.jenkins-x.io/v1alpha1", alias="apiVersion")
    kind: str = "TriggerConfig"
    spec: TriggerConfigSpec = Field(default_factory=TriggerConfigSpec)

    class Config:
        populate_by_name = True
        extra = "allow"

    def jobs(self) -> List[JobBase]:
        return [*self.spec.presubmits, *self.spec.postsubmits]
