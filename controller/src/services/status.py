"""
Roll up step statuses into the overall activity status.
"""

from datetime import datetime
from typing import Iterable, List, Optional, Protocol

from controller.src.models.activity import PipelineActivity
from controller.src.models.step import ActivityStatus, CoreActivityStep, StageActivityStep

class StatusAggregator(Protocol):
    def update_status(self, activity: PipelineActivity) -> None:
        ...

def _latest(timestamps: Iterable[Optional[datetime]]) -> Optional[datetime]:
    values = [t for t in timestamps if t is not None]
    return max(values) if values else None

def combine_statuses(statuses: List[ActivityStatus]) -> ActivityStatus:
    """Derive a single status from a list of child statuses."""
    if not statuses:
        return ActivityStatus.PENDING
    if ActivityStatus.FAILED in statuses:
        return ActivityStatus.FAILED
    if ActivityStatus.ABORTED in statuses:
        return ActivityStatus.ABORTED
    if all(s == ActivityStatus.SUCCEEDED for s in statuses):
        return ActivityStatus.SUCCEEDED
    if any(s == ActivityStatus.RUNNING or s.is_terminated() for s in statuses):
        return ActivityStatus.RUNNING
    return ActivityStatus.PENDING

def update_stage_status(stage: StageActivityStep):
    if not stage.steps:
        return
    stage.status = combine_statuses([s.status for s in stage.steps])
    if stage.status.is_terminated() and stage.completed_timestamp is None:
        stage.completed_timestamp = _latest(s.completed_timestamp for s in stage.steps)

class DefaultStatusAggregator:
    """
    Stages take their status from their sub-steps. The activity is complete
    once every step has terminated; until then it is running as soon as any
    step has made progress.
    """

    def update_status(self, activity: PipelineActivity) -> None:
        spec = activity.spec
        cores: List[CoreActivityStep] = []
        for step in spec.steps:
            if step.stage is not None:
                update_stage_status(step.stage)
            core = step.core()
            if core is not None:
                cores.append(core)

        if not cores:
            spec.status = ActivityStatus.PENDING
            spec.completed_timestamp = None
            return

        statuses = [c.status for c in cores]
        if all(s.is_terminated() for s in statuses):
            spec.status = combine_statuses(statuses)
            if spec.completed_timestamp is None:
                spec.completed_timestamp = _latest(c.completed_timestamp for c in cores)
            return

        if any(s == ActivityStatus.RUNNING or s.is_terminated() for s in statuses):
            spec.status = ActivityStatus.RUNNING
        else:
            spec.status = ActivityStatus.PENDING
        spec.completed_timestamp = None
