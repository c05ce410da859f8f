"""
Lighthouse label and annotation keys, and the label lookup helper.
"""

from dataclasses import dataclass
from typing import Mapping, Optional, Sequence, Tuple

BUILD_LABEL = "build"
BUILD_ID_LABEL = "buildID"
BUILD_NUM_LABEL = "lighthouse.jenkins-x.io/buildNum"
BASE_SHA_LABEL = "lighthouse.jenkins-x.io/baseSHA"
LAST_COMMIT_SHA_LABEL = "lighthouse.jenkins-x.io/lastCommitSHA"
POD_NAME_LABEL = "podName"

CLONE_URI_ANNOTATION = "lighthouse.jenkins-x.io/cloneURI"
TRACE_CONTEXT_ANNOTATIONS = frozenset({
    "lighthouse.jenkins-x.io/traceparent",
    "lighthouse.jenkins-x.io/tracestate",
})

@dataclass(frozen=True)
class LabelKeys:
    """Candidate label keys per field, most specific first."""

    owner: Tuple[str, ...] = ("owner", "lighthouse.jenkins-x.io/refs.org")
    repository: Tuple[str, ...] = ("repository", "lighthouse.jenkins-x.io/refs.repo")
    branch: Tuple[str, ...] = ("branch", "lighthouse.jenkins-x.io/branch")
    build: Tuple[str, ...] = (BUILD_LABEL, BUILD_NUM_LABEL)
    context: Tuple[str, ...] = ("context", "lighthouse.jenkins-x.io/context")

DEFAULT_LABEL_KEYS = LabelKeys()

def get_label(labels: Optional[Mapping[str, str]], candidates: Sequence[str]) -> str:
    """Return the first non-empty value for the candidate keys."""
    if not labels:
        return ""
    for key in candidates:
        value = labels.get(key)
        if value:
            return value
    return ""
