from controller.src.models.step import (
    ActivityStatus,
    StepKind,
    CoreActivityStep,
    StageActivityStep,
    PromoteActivityStep,
    PreviewActivityStep,
    ActivityStep,
)
from controller.src.models.activity import (
    ObjectMeta,
    PipelineActivitySpec,
    PipelineActivity,
)
from controller.src.models.pipeline_run import (
    TerminatedState,
    RunningState,
    WaitingState,
    StepState,
    TaskRunStatus,
    PipelineRunTaskRunStatus,
    PipelineRunStatus,
    PipelineRun,
)
from controller.src.models.labels import LabelKeys, DEFAULT_LABEL_KEYS, get_label

__all__ = [
    "ActivityStatus",
    "StepKind",
    "CoreActivityStep",
    "StageActivityStep",
    "PromoteActivityStep",
    "PreviewActivityStep",
    "ActivityStep",
    "ObjectMeta",
    "PipelineActivitySpec",
    "PipelineActivity",
    "TerminatedState",
    "RunningState",
    "WaitingState",
    "StepState",
    "TaskRunStatus",
    "PipelineRunTaskRunStatus",
    "PipelineRunStatus",
    "PipelineRun",
    "LabelKeys",
    "DEFAULT_LABEL_KEYS",
    "get_label",
]
