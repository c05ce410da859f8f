"""Tests for the activity stores."""

from unittest.mock import MagicMock

import pytest
from kubernetes.client.rest import ApiException

from controller.src.k8s.activity_store import (
    ActivityStoreError,
    InMemoryActivityStore,
    KubernetesActivityStore,
)
from controller.src.models.activity import ObjectMeta, PipelineActivity
from controller.src.models.step import ActivityStatus

ITEM = {
    "apiVersion": "jenkins.io/v1",
    "kind": "PipelineActivity",
    "metadata": {"name": "acme-app-main-1", "namespace": "jx", "resourceVersion": "42"},
    "spec": {
        "build": "1",
        "status": "Running",
        "gitOwner": "acme",
        "steps": [{"kind": "Stage", "stage": {"name": "build", "status": "Running", "extraField": "kept"}}],
    },
}

def test_in_memory_store_returns_copies():
    store = InMemoryActivityStore()
    store.upsert(PipelineActivity(metadata=ObjectMeta(name="a", namespace="jx")))

    got = store.get("a", "jx")
    got.spec.build = "changed"

    assert store.get("a", "jx").spec.build == ""
    assert store.get("a", "other") is None

def test_in_memory_store_requires_name():
    with pytest.raises(ActivityStoreError):
        InMemoryActivityStore().upsert(PipelineActivity())

def test_list_parses_items():
    api = MagicMock()
    api.list_namespaced_custom_object.return_value = {"items": [ITEM]}

    activities = KubernetesActivityStore(api).list("jx")

    assert len(activities) == 1
    pa = activities[0]
    assert pa.name == "acme-app-main-1"
    assert pa.spec.status == ActivityStatus.RUNNING
    assert pa.spec.git_owner == "acme"
    api.list_namespaced_custom_object.assert_called_once_with(
        group="jenkins.io", version="v1", namespace="jx", plural="pipelineactivities",
    )

def test_list_failure():
    api = MagicMock()
    api.list_namespaced_custom_object.side_effect = ApiException(status=403, reason="Forbidden")

    with pytest.raises(ActivityStoreError, match="Forbidden"):
        KubernetesActivityStore(api).list("jx")

def test_unparseable_items_raise_store_error():
    api = MagicMock()
    item = {**ITEM, "spec": {**ITEM["spec"], "status": "NotExecuted"}}
    api.list_namespaced_custom_object.return_value = {"items": [item]}
    api.get_namespaced_custom_object.return_value = item

    store = KubernetesActivityStore(api)
    with pytest.raises(ActivityStoreError, match="failed to parse PipelineActivity acme-app-main-1"):
        store.list("jx")
    with pytest.raises(ActivityStoreError, match="failed to parse PipelineActivity acme-app-main-1"):
        store.get("acme-app-main-1", "jx")

def test_get_missing_returns_none():
    api = MagicMock()
    api.get_namespaced_custom_object.side_effect = ApiException(status=404, reason="Not Found")

    assert KubernetesActivityStore(api).get("nope", "jx") is None

def test_round_trip_keeps_unknown_fields():
    pa = PipelineActivity.model_validate(ITEM)
    body = pa.to_dict()

    assert body["spec"]["steps"][0]["stage"]["extraField"] == "kept"
    assert body["spec"]["gitOwner"] == "acme"
    assert body["metadata"]["resourceVersion"] == "42"

def test_upsert_creates_new_activity():
    api = MagicMock()
    api.create_namespaced_custom_object.side_effect = lambda **kw: kw["body"]
    pa = PipelineActivity(api_version="jenkins.io/v1", kind="PipelineActivity",
                          metadata=ObjectMeta(name="acme-app-main-2", namespace="jx"))

    saved = KubernetesActivityStore(api).upsert(pa)

    assert saved.name == "acme-app-main-2"
    body = api.create_namespaced_custom_object.call_args.kwargs["body"]
    assert body["metadata"]["name"] == "acme-app-main-2"
    api.replace_namespaced_custom_object.assert_not_called()

def test_upsert_replaces_existing_activity():
    api = MagicMock()
    api.replace_namespaced_custom_object.side_effect = lambda **kw: kw["body"]
    pa = PipelineActivity.model_validate(ITEM)

    KubernetesActivityStore(api).upsert(pa)

    assert api.replace_namespaced_custom_object.call_args.kwargs["name"] == "acme-app-main-1"
    api.create_namespaced_custom_object.assert_not_called()

def test_upsert_replaces_on_conflict():
    api = MagicMock()
    api.create_namespaced_custom_object.side_effect = ApiException(status=409, reason="Conflict")
    api.get_namespaced_custom_object.return_value = ITEM
    api.replace_namespaced_custom_object.side_effect = lambda **kw: kw["body"]
    pa = PipelineActivity(metadata=ObjectMeta(name="acme-app-main-1", namespace="jx"))

    KubernetesActivityStore(api).upsert(pa)

    body = api.replace_namespaced_custom_object.call_args.kwargs["body"]
    assert body["metadata"]["resourceVersion"] == "42"

def test_upsert_failure():
    api = MagicMock()
    api.create_namespaced_custom_object.side_effect = ApiException(status=500, reason="Boom")
    pa = PipelineActivity(metadata=ObjectMeta(name="a", namespace="jx"))

    with pytest.raises(ActivityStoreError, match="Boom"):
        KubernetesActivityStore(api).upsert(pa)
