"""Shared fixtures for controller tests."""

from datetime import datetime, timedelta, timezone

import pytest

from controller.src.models.pipeline_run import PipelineRun

NOW = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)

@pytest.fixture
def now():
    return NOW

@pytest.fixture
def clock():
    return lambda: NOW

@pytest.fixture
def ts():
    """Timestamp `minutes` after a fixed start as a Kubernetes string."""
    start = NOW - timedelta(hours=1)

    def _ts(minutes):
        return (start + timedelta(minutes=minutes)).strftime("%Y-%m-%dT%H:%M:%SZ")

    return _ts

@pytest.fixture
def make_run():
    def _make_run(labels=None, annotations=None, task_runs=None, namespace="jx", name="acme-app-main-abcde"):
        return PipelineRun.model_validate({
            "apiVersion": "tekton.dev/v1beta1",
            "kind": "PipelineRun",
            "metadata": {
                "name": name,
                "namespace": namespace,
                "labels": labels,
                "annotations": annotations,
            },
            "status": {"taskRuns": task_runs},
        })

    return _make_run

@pytest.fixture
def lighthouse_labels():
    return {
        "lighthouse.jenkins-x.io/refs.org": "acme",
        "lighthouse.jenkins-x.io/refs.repo": "app",
        "lighthouse.jenkins-x.io/branch": "main",
        "lighthouse.jenkins-x.io/buildNum": "17",
        "lighthouse.jenkins-x.io/context": "release",
    }
