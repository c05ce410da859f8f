"""Tests for merging built stages into existing activity steps."""

from controller.src.models.step import (
    ActivityStatus,
    ActivityStep,
    PreviewActivityStep,
    PromoteActivityStep,
    StageActivityStep,
    StepKind,
)
from controller.src.services.merge import merge_steps

def stage(name, status=ActivityStatus.RUNNING):
    return ActivityStep(kind=StepKind.STAGE, stage=StageActivityStep(name=name, status=status))

def promote(name="promote: staging"):
    return ActivityStep(kind=StepKind.PROMOTE, promote=PromoteActivityStep(name=name, environment="staging"))

def preview(name="preview"):
    return ActivityStep(kind=StepKind.PREVIEW, preview=PreviewActivityStep(name=name))

def names(steps):
    return [s.core().name for s in steps]

def test_preserve_keeps_real_stages():
    existing = [stage("from build pack", ActivityStatus.SUCCEEDED), promote()]
    built = [stage("from build pack", ActivityStatus.RUNNING), stage("extra")]

    result = merge_steps(existing, built)

    assert result == existing
    assert result[0].stage.status == ActivityStatus.SUCCEEDED

def test_preserve_replaces_release_only_stages_and_keeps_promotions():
    existing = [stage("Release"), promote(), preview()]
    built = [stage("build"), stage("test")]

    result = merge_steps(existing, built)

    assert names(result) == ["build", "test", "promote: staging", "preview"]

def test_preserve_with_no_existing_steps():
    built = [stage("build")]
    assert merge_steps([], built) == built

def test_overwrite_replaces_stage_in_place():
    existing = [stage("build", ActivityStatus.RUNNING), stage("test", ActivityStatus.PENDING), promote()]
    built = [stage("test", ActivityStatus.SUCCEEDED)]

    result = merge_steps(existing, built, overwrite=True)

    assert names(result) == ["build", "test", "promote: staging"]
    assert result[1].stage.status == ActivityStatus.SUCCEEDED
    # the caller's list is left alone
    assert existing[1].stage.status == ActivityStatus.PENDING

def test_overwrite_inserts_before_first_promotion():
    existing = [stage("build"), preview(), promote(), stage("after")]
    built = [stage("deploy")]

    result = merge_steps(existing, built, overwrite=True)

    assert names(result) == ["build", "deploy", "preview", "promote: staging", "after"]

def test_overwrite_appends_without_promotions():
    existing = [stage("build")]
    built = [stage("build", ActivityStatus.SUCCEEDED), stage("test")]

    result = merge_steps(existing, built, overwrite=True)

    assert names(result) == ["build", "test"]
    assert result[0].stage.status == ActivityStatus.SUCCEEDED

def test_overwrite_with_no_built_stages():
    existing = [stage("build"), promote()]
    assert merge_steps(existing, [], overwrite=True) == existing
