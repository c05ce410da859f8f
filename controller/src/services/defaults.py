"""
Backfill missing PipelineActivity values from labels and steps.
"""

from controller.src.models.activity import PipelineActivity
from controller.src.models.labels import DEFAULT_LABEL_KEYS, LabelKeys, get_label
from controller.src.models.step import ActivityStatus

def default_values(activity: PipelineActivity, label_keys: LabelKeys = DEFAULT_LABEL_KEYS):
    """Default missing identity fields, start time and status of an activity."""
    spec = activity.spec
    labels = activity.metadata.labels
    if labels:
        if not spec.git_owner:
            spec.git_owner = get_label(labels, label_keys.owner)
        if not spec.git_repository:
            spec.git_repository = get_label(labels, label_keys.repository)
        if not spec.git_branch:
            spec.git_branch = get_label(labels, label_keys.branch)
        if not spec.context:
            spec.context = get_label(labels, label_keys.context)
        if not spec.build:
            spec.build = get_label(labels, label_keys.build)

    if spec.started_timestamp is None:
        for step in spec.steps:
            core = step.core()
            if core is not None and core.started_timestamp is not None:
                spec.started_timestamp = core.started_timestamp
                break

    if spec.status == ActivityStatus.NONE:
        # last known status wins
        for step in reversed(spec.steps):
            core = step.core()
            if core is not None and core.status != ActivityStatus.NONE:
                spec.status = core.status
                break
