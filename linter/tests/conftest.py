"""Shared fixtures for linter tests."""

import pytest

TRIGGERS = """
apiVersion: config.lighthouse.jenkins-x.io/v1alpha1
kind: TriggerConfig
spec:
  presubmits:
    - name: pr
      context: "pr"
      always_run: true
      optional: false
      source: "pullrequest.yaml"
  postsubmits:
    - name: release
      context: "release"
      source: "release.yaml"
      branches:
        - ^main$
"""

PIPELINE_RUN = """
apiVersion: tekton.dev/v1beta1
kind: PipelineRun
metadata:
  name: {name}
spec:
  pipelineSpec:
    tasks:
      - name: from-build-pack
        taskSpec:
          steps:
            - name: build
              image: golang:1.21
              script: make build
"""

@pytest.fixture
def write_file():
    def _write(path, text):
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text)
        return path
    return _write

@pytest.fixture
def lighthouse_repo(tmp_path, write_file):
    """A repository with a single valid `.lighthouse/jenkins-x` trigger directory."""
    job_dir = tmp_path / ".lighthouse" / "jenkins-x"
    write_file(job_dir / "triggers.yaml", TRIGGERS)
    write_file(job_dir / "pullrequest.yaml", PIPELINE_RUN.format(name="pullrequest"))
    write_file(job_dir / "release.yaml", PIPELINE_RUN.format(name="release"))
    return tmp_path
