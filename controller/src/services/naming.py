"""
Activity naming: sanitized resource names, humanized step names and the
build number allocation for pipeline runs.
"""

import logging
import re
from typing import Sequence

from controller.src.models.activity import PipelineActivity
from controller.src.models.labels import (
    BUILD_ID_LABEL,
    BUILD_LABEL,
    BUILD_NUM_LABEL,
    DEFAULT_LABEL_KEYS,
    LabelKeys,
    get_label,
)
from controller.src.models.pipeline_run import PipelineRun

logger = logging.getLogger(__name__)

INVALID_NAME_CHARS = re.compile(r"[^a-z0-9]+")

def to_valid_name(text: str) -> str:
    """
    Convert text into a valid Kubernetes resource name.
    Lowercase letters and digits are kept, every run of other characters
    becomes a single dash and no dash is left at either end.
    """
    return INVALID_NAME_CHARS.sub("-", text.lower()).strip("-")

def humanize(text: str) -> str:
    """Split into words on dashes and underscores and capitalise each word."""
    words = text.replace("-", " ").replace("_", " ").split(" ")
    return " ".join(w[:1].upper() + w[1:] for w in words)

def to_pipeline_activity_name(
    run: PipelineRun,
    activities: Sequence[PipelineActivity],
    label_keys: LabelKeys = DEFAULT_LABEL_KEYS,
) -> str:
    """
    Generate the PipelineActivity name for a pipeline run.

    Returns an empty string when the run does not carry enough labels yet.
    When the run has no build number, either the build of an activity
    already created for the same lighthouse build id is reused, or the next
    free build number for the branch is allocated. The chosen build is
    written back onto the run's labels.
    """
    labels = run.metadata.labels
    if labels is None:
        return ""

    build = labels.get(BUILD_LABEL, "")
    owner = get_label(labels, label_keys.owner)
    repository = get_label(labels, label_keys.repository)
    branch = get_label(labels, label_keys.branch)

    if not owner or not repository or not branch:
        return ""

    prefix = f"{owner}-{repository}-{branch}-"
    if build:
        return to_valid_name(prefix + build)

    build_id = labels.get(BUILD_NUM_LABEL, "")
    if not build_id:
        return ""

    for activity in activities:
        pa_labels = activity.metadata.labels
        if not pa_labels:
            continue
        if pa_labels.get(BUILD_ID_LABEL) == build_id or pa_labels.get(BUILD_NUM_LABEL) == build_id:
            if activity.spec.build:
                labels[BUILD_LABEL] = activity.spec.build
                logger.debug(f"Reusing activity {activity.name} for build id {build_id}")
                return activity.name

    # no activity has this build id yet so find the next free build number
    names = {a.name for a in activities}
    number = 1
    while True:
        name = to_valid_name(prefix + str(number))
        if name not in names:
            labels[BUILD_LABEL] = str(number)
            return name
        number += 1
