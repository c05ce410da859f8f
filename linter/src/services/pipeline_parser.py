"""
Tekton PipelineRun validator.
"""

import re
from typing import Any, Dict, List, Optional

class PipelineConfigError(Exception):
    """Raised when pipeline configuration is invalid."""
    pass

DNS_LABEL = re.compile(r"^[a-z0-9]([-a-z0-9]*[a-z0-9])?$")

def validate_pipeline_run(pr: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Validate a PipelineRun resource structure."""
    if not pr:
        raise PipelineConfigError("Empty PipelineRun")

    if not isinstance(pr, dict):
        raise PipelineConfigError("PipelineRun must be a dictionary")

    api_version = pr.get("apiVersion", "")
    if not isinstance(api_version, str) or not api_version.startswith("tekton.dev/"):
        raise PipelineConfigError(f"PipelineRun 'apiVersion' must be a tekton.dev version, got '{api_version}'")

    if pr.get("kind") != "PipelineRun":
        raise PipelineConfigError(f"Expected kind 'PipelineRun', got '{pr.get('kind')}'")

    spec = pr.get("spec")
    if not isinstance(spec, dict):
        raise PipelineConfigError("PipelineRun must have a 'spec' dictionary")

    has_ref = "pipelineRef" in spec
    has_spec = "pipelineSpec" in spec
    if has_ref == has_spec:
        raise PipelineConfigError("PipelineRun spec must have exactly one of 'pipelineRef' or 'pipelineSpec'")

    if has_spec:
        validate_pipeline_spec(spec["pipelineSpec"])

    return pr

def validate_pipeline_spec(spec: Any):
    if not isinstance(spec, dict):
        raise PipelineConfigError("'pipelineSpec' must be a dictionary")

    if "tasks" not in spec:
        raise PipelineConfigError("Pipeline must have 'tasks' defined")

    tasks = spec["tasks"]
    if not isinstance(tasks, list):
        raise PipelineConfigError("Pipeline 'tasks' must be a list")

    if len(tasks) == 0:
        raise PipelineConfigError("Pipeline must have at least one task")

    names: List[str] = []
    for i, task in enumerate(tasks):
        names.append(validate_task(task, i, names))

    for task in tasks:
        run_after = task.get("runAfter") or []
        if not isinstance(run_after, list):
            raise PipelineConfigError(f"Task '{task['name']}' 'runAfter' must be a list")
        for after in run_after:
            if after not in names:
                raise PipelineConfigError(f"Task '{task['name']}' runAfter unknown task '{after}'")

    final_tasks = spec.get("finally") or []
    if not isinstance(final_tasks, list):
        raise PipelineConfigError("Pipeline 'finally' must be a list")
    for i, task in enumerate(final_tasks):
        names.append(validate_task(task, i, names))

def validate_task(task: Any, index: int, seen: List[str]) -> str:
    """Validate a single pipeline task and return its name."""
    if not isinstance(task, dict):
        raise PipelineConfigError(f"Task {index} must be a dictionary")

    # Required fields
    if "name" not in task:
        raise PipelineConfigError(f"Task {index} missing 'name'")

    name = task["name"]
    if not isinstance(name, str) or not DNS_LABEL.match(name):
        raise PipelineConfigError(f"Task {index} 'name' must be a valid DNS label, got '{name}'")

    if name in seen:
        raise PipelineConfigError(f"Task name '{name}' is used more than once")

    has_ref = "taskRef" in task
    has_spec = "taskSpec" in task
    if has_ref == has_spec:
        raise PipelineConfigError(f"Task '{name}' must have exactly one of 'taskRef' or 'taskSpec'")

    if has_spec:
        task_spec = task["taskSpec"]
        if not isinstance(task_spec, dict):
            raise PipelineConfigError(f"Task '{name}' 'taskSpec' must be a dictionary")
        steps = task_spec.get("steps")
        if not isinstance(steps, list) or len(steps) == 0:
            raise PipelineConfigError(f"Task '{name}' must have at least one step")
        for i, step in enumerate(steps):
            validate_step(step, i, name)

    return name

def validate_step(step: Any, index: int, task_name: str):
    """Validate a single task step."""
    if not isinstance(step, dict):
        raise PipelineConfigError(f"Task '{task_name}' step {index} must be a dictionary")

    if "image" not in step:
        raise PipelineConfigError(f"Task '{task_name}' step {index} missing 'image'")

    if not isinstance(step["image"], str) or not step["image"]:
        raise PipelineConfigError(f"Task '{task_name}' step {index} 'image' must be a string")

    name = step.get("name")
    if name is not None and (not isinstance(name, str) or not DNS_LABEL.match(name)):
        raise PipelineConfigError(f"Task '{task_name}' step {index} 'name' must be a valid DNS label, got '{name}'")

    if step.get("script") and step.get("command"):
        raise PipelineConfigError(f"Task '{task_name}' step {index} cannot use both 'script' and 'command'")
