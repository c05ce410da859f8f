from linter.src.models.trigger import (
    TEKTON_PIPELINE_AGENT,
    JobBase,
    Presubmit,
    Postsubmit,
    TriggerConfigSpec,
    TriggerConfig,
)
from linter.src.models.result import LintTest

__all__ = [
    "TEKTON_PIPELINE_AGENT",
    "JobBase",
    "Presubmit",
    "Postsubmit",
    "TriggerConfigSpec",
    "TriggerConfig",
    "LintTest",
]
