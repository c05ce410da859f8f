"""
Convert a Tekton PipelineRun into a PipelineActivity.
"""

from typing import Optional

from controller.src.models.activity import (
    ACTIVITY_API_VERSION,
    ACTIVITY_KIND,
    PipelineActivity,
)
from controller.src.models.labels import (
    BASE_SHA_LABEL,
    CLONE_URI_ANNOTATION,
    DEFAULT_LABEL_KEYS,
    LAST_COMMIT_SHA_LABEL,
    POD_NAME_LABEL,
    TRACE_CONTEXT_ANNOTATIONS,
    LabelKeys,
    get_label,
)
from controller.src.models.pipeline_run import PipelineRun
from controller.src.models.step import (
    ActivityStatus,
    ActivityStep,
    StageActivityStep,
    StepKind,
)
from controller.src.services.merge import merge_steps
from controller.src.services.stages import Clock, build_stages, utcnow
from controller.src.services.status import DefaultStatusAggregator, StatusAggregator

INITIALISING_STAGE = "initialising"

def copy_metadata(run: PipelineRun, activity: PipelineActivity):
    """Copy namespace, labels and annotations from the run onto the activity."""
    meta = activity.metadata
    meta.namespace = run.metadata.namespace
    if meta.annotations is None:
        meta.annotations = {}
    if meta.labels is None:
        meta.labels = {}
    for key, value in (run.metadata.annotations or {}).items():
        # trace context belongs to the run only
        if key in TRACE_CONTEXT_ANNOTATIONS:
            continue
        meta.annotations[key] = value
    meta.labels.update(run.metadata.labels or {})

def apply_run_labels(run: PipelineRun, activity: PipelineActivity, label_keys: LabelKeys):
    spec = activity.spec
    labels = run.metadata.labels
    if labels is not None:
        if not spec.git_owner:
            spec.git_owner = get_label(labels, label_keys.owner)
        if not spec.git_repository:
            spec.git_repository = get_label(labels, label_keys.repository)
        if not spec.git_branch:
            spec.git_branch = get_label(labels, label_keys.branch)
        if not spec.build:
            spec.build = get_label(labels, label_keys.build)
        if not spec.context:
            spec.context = get_label(labels, label_keys.context)
        if not spec.base_sha:
            spec.base_sha = labels.get(BASE_SHA_LABEL, "")
        if not spec.last_commit_sha:
            spec.last_commit_sha = labels.get(LAST_COMMIT_SHA_LABEL, "")
    if spec.git_owner and spec.git_repository and spec.git_branch and not spec.pipeline:
        spec.pipeline = f"{spec.git_owner}/{spec.git_repository}/{spec.git_branch}"
    annotations = run.metadata.annotations
    if annotations is not None and not spec.git_url:
        spec.git_url = annotations.get(CLONE_URI_ANNOTATION, "")

def to_pipeline_activity(
    run: PipelineRun,
    activity: PipelineActivity,
    overwrite_steps: bool = False,
    label_keys: LabelKeys = DEFAULT_LABEL_KEYS,
    aggregator: Optional[StatusAggregator] = None,
    clock: Clock = utcnow,
) -> PipelineActivity:
    """
    Fold the current state of a pipeline run into the activity.

    The activity is modified in place and returned. With `overwrite_steps`
    stages built from the run replace stages of the same name, otherwise an
    activity which already has real stages keeps them.
    """
    if not activity.api_version:
        activity.api_version = ACTIVITY_API_VERSION
    if not activity.kind:
        activity.kind = ACTIVITY_KIND

    copy_metadata(run, activity)
    apply_run_labels(run, activity, label_keys)

    spec = activity.spec
    stages, pod_name = build_stages(run, clock)
    spec.steps = merge_steps(spec.steps, stages, overwrite_steps)

    if spec.steps and spec.started_timestamp is None:
        first = spec.steps[0].stage
        if first is not None:
            spec.started_timestamp = first.started_timestamp
    if spec.started_timestamp is None:
        spec.started_timestamp = clock()

    if not spec.steps and not overwrite_steps:
        spec.steps.append(ActivityStep(
            kind=StepKind.STAGE,
            stage=StageActivityStep(
                name=INITIALISING_STAGE,
                status=ActivityStatus.RUNNING,
            ),
        ))

    if pod_name:
        activity.metadata.labels[POD_NAME_LABEL] = pod_name

    (aggregator or DefaultStatusAggregator()).update_status(activity)
    return activity
