"""Tests for building stages from task runs."""

from datetime import datetime, timezone

from controller.src.models.step import ActivityStatus, StepKind
from controller.src.services.stages import build_stages

def task_run(name, steps, pod="pod-1"):
    return {"pipelineTaskName": name, "status": {"podName": pod, "steps": steps}}

def test_build_and_test_stage(make_run, ts, clock):
    run = make_run(task_runs={
        "run-build-and-test-x": task_run("build-and-test", [
            {"name": "git-clone", "terminated": {"exitCode": 0, "startedAt": ts(0), "finishedAt": ts(1)}},
            {"name": "npm_test", "running": {"startedAt": ts(1)}},
        ]),
    })

    stages, pod_name = build_stages(run, clock)

    assert pod_name == "pod-1"
    assert len(stages) == 1
    assert stages[0].kind == StepKind.STAGE
    stage = stages[0].stage
    assert stage.name == "build and test"
    assert [s.name for s in stage.steps] == ["Git Clone", "Npm Test"]
    assert stage.steps[0].status == ActivityStatus.SUCCEEDED
    assert stage.steps[1].status == ActivityStatus.RUNNING
    assert stage.started_timestamp == stage.steps[0].started_timestamp
    assert stage.completed_timestamp is None

def test_failed_step(make_run, ts, clock):
    run = make_run(task_runs={
        "tr": task_run("release", [
            {"name": "build", "terminated": {"exitCode": 2, "startedAt": ts(0), "finishedAt": ts(3)}},
            {"name": "push", "terminated": {"exitCode": 1}},
        ]),
    })

    stages, _ = build_stages(run, clock)

    steps = stages[0].stage.steps
    assert steps[0].status == ActivityStatus.FAILED
    # no finish time so this one is not known to have failed
    assert steps[1].status == ActivityStatus.PENDING
    assert steps[1].completed_timestamp is None

def test_running_step_after_running_step_is_pending(make_run, ts, clock):
    run = make_run(task_runs={
        "tr": task_run("build", [
            {"name": "a", "running": {"startedAt": ts(0)}},
            {"name": "b", "running": {"startedAt": ts(0)}},
        ]),
    })

    stages, _ = build_stages(run, clock)

    steps = stages[0].stage.steps
    assert steps[0].status == ActivityStatus.PENDING
    assert steps[1].status == ActivityStatus.PENDING
    assert steps[1].started_timestamp is None

def test_waiting_step_keeps_previous_terminated(make_run, ts, clock):
    run = make_run(task_runs={
        "tr": task_run("build", [
            {"name": "a", "terminated": {"exitCode": 0, "startedAt": ts(0), "finishedAt": ts(1)}},
            {"name": "b", "waiting": {"reason": "PodInitializing"}},
            {"name": "c", "running": {"startedAt": ts(2)}},
        ]),
    })

    stages, _ = build_stages(run, clock)

    steps = stages[0].stage.steps
    assert steps[1].status == ActivityStatus.PENDING
    assert steps[2].status == ActivityStatus.RUNNING

def test_terminated_without_finish_time_is_stamped(make_run, ts, now, clock):
    run = make_run(task_runs={
        "tr": task_run("build", [{"name": "a", "terminated": {"exitCode": 0, "startedAt": ts(0)}}]),
    })

    stages, _ = build_stages(run, clock)

    stage = stages[0].stage
    assert stage.steps[0].status == ActivityStatus.SUCCEEDED
    assert stage.steps[0].completed_timestamp == now
    assert stage.completed_timestamp == now

def test_first_step_without_start_is_stamped(make_run, now, clock):
    run = make_run(task_runs={"tr": task_run("build", [{"name": "a", "waiting": {}}])})

    stages, _ = build_stages(run, clock)

    stage = stages[0].stage
    assert stage.steps[0].started_timestamp == now
    assert stage.started_timestamp == now

def test_stage_timestamps_from_sub_steps(make_run, ts, clock):
    run = make_run(task_runs={
        "tr": task_run("build", [
            {"name": "a", "terminated": {"exitCode": 0, "startedAt": ts(0), "finishedAt": ts(1)}},
            {"name": "b", "terminated": {"exitCode": 0, "startedAt": ts(1), "finishedAt": ts(5)}},
        ]),
    })

    stages, _ = build_stages(run, clock)

    stage = stages[0].stage
    assert stage.started_timestamp == datetime(2024, 5, 1, 11, 0, tzinfo=timezone.utc)
    assert stage.completed_timestamp == datetime(2024, 5, 1, 11, 5, tzinfo=timezone.utc)

def test_task_runs_without_status_or_steps(make_run, ts, clock):
    run = make_run(task_runs={
        "a": {"pipelineTaskName": "no-status"},
        "b": task_run("no-steps", [], pod=""),
        "c": task_run("lint", [{"name": "lint", "running": {"startedAt": ts(0)}}], pod="pod-c"),
        "d": task_run("test", [{"name": "test", "running": {"startedAt": ts(0)}}], pod="pod-d"),
    })

    stages, pod_name = build_stages(run, clock)

    assert [s.stage.name for s in stages] == ["lint", "test"]
    assert pod_name == "pod-c"

def test_no_task_runs(make_run, clock):
    assert build_stages(make_run(), clock) == ([], "")
