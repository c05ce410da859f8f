"""
Storage for PipelineActivity records, keyed by activity name.
"""

import logging
from typing import Dict, List, Optional, Protocol, Tuple

from kubernetes import client
from kubernetes.client.rest import ApiException
from pydantic import ValidationError

from controller.src.k8s.client import ACTIVITY_GROUP, ACTIVITY_PLURAL, ACTIVITY_VERSION
from controller.src.models.activity import PipelineActivity

logger = logging.getLogger(__name__)

class ActivityStoreError(Exception):
    """Raised when activities cannot be read or written."""
    pass

class ActivityStore(Protocol):
    def list(self, namespace: str) -> List[PipelineActivity]:
        ...

    def get(self, name: str, namespace: str) -> Optional[PipelineActivity]:
        ...

    def upsert(self, activity: PipelineActivity) -> PipelineActivity:
        ...

class InMemoryActivityStore:
    """Activity store held in a dict; hands out copies so callers never share state."""

    def __init__(self, activities: Optional[List[PipelineActivity]] = None):
        self._items: Dict[Tuple[str, str], PipelineActivity] = {}
        for activity in activities or []:
            self.upsert(activity)

    def list(self, namespace: str) -> List[PipelineActivity]:
        return [
            a.model_copy(deep=True)
            for (ns, _), a in self._items.items()
            if ns == namespace
        ]

    def get(self, name: str, namespace: str) -> Optional[PipelineActivity]:
        activity = self._items.get((namespace, name))
        return activity.model_copy(deep=True) if activity is not None else None

    def upsert(self, activity: PipelineActivity) -> PipelineActivity:
        if not activity.name:
            raise ActivityStoreError("cannot store an activity without a name")
        key = (activity.metadata.namespace, activity.name)
        self._items[key] = activity.model_copy(deep=True)
        return activity

class KubernetesActivityStore:
    """PipelineActivity custom resources in a cluster."""

    def __init__(self, api: client.CustomObjectsApi):
        self.api = api

    def list(self, namespace: str) -> List[PipelineActivity]:
        try:
            result = self.api.list_namespaced_custom_object(
                group=ACTIVITY_GROUP,
                version=ACTIVITY_VERSION,
                namespace=namespace,
                plural=ACTIVITY_PLURAL,
            )
        except ApiException as e:
            raise ActivityStoreError(f"failed to list PipelineActivities in namespace {namespace}: {e.reason}") from e
        return [self._parse(item) for item in result.get("items", [])]

    def get(self, name: str, namespace: str) -> Optional[PipelineActivity]:
        try:
            item = self.api.get_namespaced_custom_object(
                group=ACTIVITY_GROUP,
                version=ACTIVITY_VERSION,
                namespace=namespace,
                plural=ACTIVITY_PLURAL,
                name=name,
            )
        except ApiException as e:
            if e.status == 404:
                return None
            raise ActivityStoreError(f"failed to get PipelineActivity {name}: {e.reason}") from e
        return self._parse(item)

    def upsert(self, activity: PipelineActivity) -> PipelineActivity:
        namespace = activity.metadata.namespace
        name = activity.name
        try:
            if activity.metadata.resource_version:
                item = self._replace(activity)
            else:
                try:
                    item = self.api.create_namespaced_custom_object(
                        group=ACTIVITY_GROUP,
                        version=ACTIVITY_VERSION,
                        namespace=namespace,
                        plural=ACTIVITY_PLURAL,
                        body=activity.to_dict(),
                    )
                    logger.info(f"Created PipelineActivity {name}")
                except ApiException as e:
                    if e.status != 409:
                        raise
                    # Created by someone else meanwhile, replace it
                    logger.warning(f"PipelineActivity {name} already exists, replacing...")
                    current = self.get(name, namespace)
                    if current is not None:
                        activity.metadata.resource_version = current.metadata.resource_version
                    item = self._replace(activity)
        except ApiException as e:
            raise ActivityStoreError(f"failed to save PipelineActivity {name}: {e.reason}") from e
        return self._parse(item)

    def _parse(self, item: dict) -> PipelineActivity:
        try:
            return PipelineActivity.model_validate(item)
        except ValidationError as e:
            name = (item.get("metadata") or {}).get("name", "")
            raise ActivityStoreError(f"failed to parse PipelineActivity {name}: {e}") from e

    def _replace(self, activity: PipelineActivity) -> dict:
        item = self.api.replace_namespaced_custom_object(
            group=ACTIVITY_GROUP,
            version=ACTIVITY_VERSION,
            namespace=activity.metadata.namespace,
            plural=ACTIVITY_PLURAL,
            name=activity.name,
            body=activity.to_dict(),
        )
        logger.debug(f"Updated PipelineActivity {activity.name}")
        return item
