"""
Load Tekton resources as PipelineRuns.

Pipelines, Tasks and TaskRuns are wrapped into an equivalent PipelineRun.
Steps whose image is `uses:<path>` are replaced by the steps of the
referenced local file.
"""

import copy
import logging
import os
from typing import Any, Callable, Dict, FrozenSet, List

import yaml

from linter.src.services.pipeline_parser import PipelineConfigError

logger = logging.getLogger(__name__)

USES_PREFIX = "uses:"
DEFAULT_API_VERSION = "tekton.dev/v1beta1"

GetData = Callable[[str], bytes]

def load_tekton_resource_as_pipeline_run(
    data: bytes,
    base_dir: str,
    message: str,
    get_data: GetData,
    chain: FrozenSet[str] = frozenset(),
) -> Dict[str, Any]:
    """Parse a Tekton resource and resolve it into a PipelineRun dict."""
    try:
        doc = yaml.safe_load(data)
    except yaml.YAMLError as e:
        raise PipelineConfigError(f"failed to parse YAML for {message}: {e}") from e

    pr = to_pipeline_run(doc, message)
    for task in pipeline_tasks(pr):
        task_spec = task.get("taskSpec")
        if isinstance(task_spec, dict) and isinstance(task_spec.get("steps"), list):
            task_spec["steps"] = expand_steps(task_spec["steps"], base_dir, get_data, chain)
    return pr

def to_pipeline_run(doc: Any, message: str) -> Dict[str, Any]:
    if not isinstance(doc, dict):
        raise PipelineConfigError(f"{message} does not contain a Tekton resource")

    kind = doc.get("kind", "")
    api_version = doc.get("apiVersion") or DEFAULT_API_VERSION
    metadata = doc.get("metadata") or {}
    spec = doc.get("spec") or {}
    if not isinstance(metadata, dict):
        raise PipelineConfigError(f"{message} 'metadata' must be a mapping")
    if not isinstance(spec, dict):
        raise PipelineConfigError(f"{message} 'spec' must be a mapping")
    name = metadata.get("name") or "from-source"

    if kind == "PipelineRun":
        return copy.deepcopy(doc)
    if kind == "Pipeline":
        pipeline_spec = copy.deepcopy(spec)
    elif kind == "Task":
        pipeline_spec = {"tasks": [{"name": name, "taskSpec": copy.deepcopy(spec)}]}
    elif kind == "TaskRun":
        task = {"name": name}
        if "taskRef" in spec:
            task["taskRef"] = copy.deepcopy(spec["taskRef"])
        else:
            task["taskSpec"] = copy.deepcopy(spec.get("taskSpec") or {})
        pipeline_spec = {"tasks": [task]}
    else:
        raise PipelineConfigError(f"kind '{kind}' is not supported for {message}")

    return {
        "apiVersion": api_version,
        "kind": "PipelineRun",
        "metadata": copy.deepcopy(metadata),
        "spec": {"pipelineSpec": pipeline_spec},
    }

def pipeline_tasks(pr: Dict[str, Any]) -> List[Dict[str, Any]]:
    spec = pr.get("spec")
    if not isinstance(spec, dict):
        return []
    pipeline_spec = spec.get("pipelineSpec")
    if not isinstance(pipeline_spec, dict):
        return []
    tasks = []
    for key in ("tasks", "finally"):
        value = pipeline_spec.get(key)
        if isinstance(value, list):
            tasks.extend(t for t in value if isinstance(t, dict))
    return tasks

def expand_steps(steps: List[Any], base_dir: str, get_data: GetData, chain: FrozenSet[str]) -> List[Any]:
    result = []
    for step in steps:
        image = step.get("image") if isinstance(step, dict) else None
        if not isinstance(image, str) or not image.startswith(USES_PREFIX):
            result.append(step)
            continue
        source = image[len(USES_PREFIX):].strip()
        if "@" in source:
            # git references are resolved by lighthouse at trigger time
            logger.debug(f"Leaving remote step reference {source} unresolved")
            result.append(step)
            continue

        path = os.path.normpath(os.path.join(base_dir, source))
        if path in chain:
            raise PipelineConfigError(f"recursive uses of {path}")
        data = get_data(path)
        included = load_tekton_resource_as_pipeline_run(
            data, os.path.dirname(path), f"file {path}", get_data, chain | {path}
        )
        included_steps = [
            s
            for task in pipeline_tasks(included)
            if isinstance(task.get("taskSpec"), dict) and isinstance(task["taskSpec"].get("steps"), list)
            for s in task["taskSpec"]["steps"]
            if isinstance(s, dict)
        ]

        name = step.get("name")
        if name:
            included_steps = [s for s in included_steps if s.get("name") == name]
            if not included_steps:
                raise PipelineConfigError(f"no step named '{name}' in {path}")

        overrides = {k: v for k, v in step.items() if k not in ("image", "name")}
        for s in included_steps:
            result.append({**s, **overrides})
    return result
