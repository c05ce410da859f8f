"""
Build activity stages from the task run statuses of a pipeline run.
"""

from datetime import datetime, timezone
from typing import Callable, List, Optional, Tuple

from controller.src.models.pipeline_run import PipelineRun, StepState
from controller.src.models.step import (
    ActivityStatus,
    ActivityStep,
    CoreActivityStep,
    StageActivityStep,
    StepKind,
)
from controller.src.services.naming import humanize

Clock = Callable[[], datetime]

def utcnow() -> datetime:
    return datetime.now(timezone.utc)

def step_status(step: StepState, previous_terminated: bool) -> Tuple[ActivityStatus, Optional[datetime], Optional[datetime]]:
    """
    Work out the status and timestamps of a single step.
    A running step only counts as running when the step before it finished.
    """
    terminated = step.terminated
    if terminated is not None:
        status = ActivityStatus.PENDING
        if terminated.exit_code == 0:
            status = ActivityStatus.SUCCEEDED
        elif terminated.finished_at is not None:
            status = ActivityStatus.FAILED
        return status, terminated.started_at, terminated.finished_at
    if step.running is not None and previous_terminated:
        return ActivityStatus.RUNNING, step.running.started_at, None
    return ActivityStatus.PENDING, None, None

def build_stages(run: PipelineRun, clock: Clock = utcnow) -> Tuple[List[ActivityStep], str]:
    """
    Convert each task run into a stage with one sub-step per container step.
    Returns the stages and the first pod name seen.
    """
    pod_name = ""
    stages = []
    task_runs = run.status.task_runs or {}
    for task_run in task_runs.values():
        stage_name = task_run.pipeline_task_name.replace("-", " ")
        status = task_run.status
        if status is None:
            continue
        if not pod_name:
            pod_name = status.pod_name

        stage = None
        previous_terminated = False
        for step in status.steps:
            state, started, completed = step_status(step, previous_terminated)
            if step.terminated is not None:
                previous_terminated = True
            elif step.running is not None:
                previous_terminated = False

            if state.is_terminated() and completed is None:
                completed = clock()

            sub_step = CoreActivityStep(
                name=humanize(step.name),
                status=state,
                started_timestamp=started,
                completed_timestamp=completed,
            )
            if stage is None:
                stage = StageActivityStep(
                    name=stage_name,
                    status=state,
                    started_timestamp=started,
                )
            stage.steps.append(sub_step)

        if stage is None:
            continue

        first = stage.steps[0]
        if first.started_timestamp is None:
            first.started_timestamp = clock()
        if stage.started_timestamp is None:
            stage.started_timestamp = first.started_timestamp
        if stage.completed_timestamp is None:
            stage.completed_timestamp = stage.steps[-1].completed_timestamp
        stages.append(ActivityStep(kind=StepKind.STAGE, stage=stage))

    return stages, pod_name
