from linter.src.services.pipeline_parser import (
    validate_pipeline_run,
    PipelineConfigError,
)
from linter.src.services.pipeline_loader import load_tekton_resource_as_pipeline_run
from linter.src.services.linter import Linter, LintError, load_trigger_config
from linter.src.services.report import render_results, log_results

__all__ = [
    "validate_pipeline_run",
    "PipelineConfigError",
    "load_tekton_resource_as_pipeline_run",
    "Linter",
    "LintError",
    "load_trigger_config",
    "render_results",
    "log_results",
]
