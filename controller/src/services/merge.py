"""
Merge freshly built stages into the steps of an existing activity.
"""

from typing import List

from controller.src.models.step import ActivityStep, StepKind

RELEASE_STAGE = "Release"

def has_real_stage(steps: List[ActivityStep]) -> bool:
    return any(
        s.kind == StepKind.STAGE and s.stage is not None and s.stage.name != RELEASE_STAGE
        for s in steps
    )

def overwrite_stages(existing: List[ActivityStep], stages: List[ActivityStep]) -> List[ActivityStep]:
    """
    Replace existing stages of the same name in place.
    New stages go before the first preview/promote step, or at the end.
    """
    steps = list(existing)
    for stage in stages:
        if stage.stage is None:
            continue
        idx = -1
        found = False
        for i, s in enumerate(steps):
            if s.stage is not None and s.stage.name == stage.stage.name:
                steps[i] = s.model_copy(update={"stage": stage.stage})
                found = True
                break
            if idx < 0 and s.is_promotion():
                idx = i
        if found:
            continue
        if idx < 0:
            steps.append(stage)
        else:
            steps.insert(idx, stage)
    return steps

def merge_steps(existing: List[ActivityStep], stages: List[ActivityStep], overwrite: bool = False) -> List[ActivityStep]:
    """Combine built stages with an activity's existing steps."""
    if overwrite:
        return overwrite_stages(existing, stages)
    if has_real_stage(existing):
        # trust the activity; its steps may have been written by other tools
        return list(existing)
    return list(stages) + [s for s in existing if s.is_promotion()]
