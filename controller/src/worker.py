"""
PipelineRun watcher - reconciles every observed run into its activity.
"""

import logging
import time
from typing import Any, Dict

from kubernetes import watch
from kubernetes.client.rest import ApiException
from pydantic import ValidationError

from controller.src.config import get_settings
from controller.src.k8s.activity_store import ActivityStoreError, KubernetesActivityStore
from controller.src.k8s.client import (
    PIPELINE_RUN_PLURAL,
    TEKTON_GROUP,
    TEKTON_VERSION,
    get_custom_api,
)
from controller.src.models.pipeline_run import PipelineRun
from controller.src.services.reconciler import ActivityReconciler

logger = logging.getLogger(__name__)
settings = get_settings()

def handle_event(reconciler: ActivityReconciler, event: Dict[str, Any]):
    """Reconcile a single watch event."""
    if event.get("type") == "DELETED":
        return
    obj = event.get("object") or {}
    try:
        run = PipelineRun.model_validate(obj)
    except ValidationError as e:
        logger.error(f"Ignoring malformed PipelineRun event: {e}")
        return
    try:
        reconciler.reconcile(run)
    except ActivityStoreError as e:
        logger.error(f"Failed to reconcile PipelineRun {run.metadata.name}: {e}")
    except Exception as e:
        logger.exception(f"Failed to reconcile PipelineRun {run.metadata.name}: {e}")

def watch_pipeline_runs(reconciler: ActivityReconciler):
    """Stream PipelineRun events until the watch times out."""
    api = get_custom_api()
    w = watch.Watch()
    for event in w.stream(
        api.list_namespaced_custom_object,
        group=TEKTON_GROUP,
        version=TEKTON_VERSION,
        namespace=settings.k8s_namespace,
        plural=PIPELINE_RUN_PLURAL,
        timeout_seconds=settings.watch_timeout_seconds,
    ):
        handle_event(reconciler, event)

def run_worker():
    """Main worker loop."""
    reconciler = ActivityReconciler(
        store=KubernetesActivityStore(get_custom_api()),
        overwrite_steps=settings.overwrite_steps,
    )
    logger.info(f"Watching PipelineRuns in namespace {settings.k8s_namespace}...")

    while True:
        try:
            watch_pipeline_runs(reconciler)
        except KeyboardInterrupt:
            logger.info("Worker shutting down...")
            break
        except ApiException as e:
            logger.error(f"Watch failed: {e.reason}")
            time.sleep(settings.watch_retry_seconds)
        except Exception as e:
            logger.exception(f"Worker error: {e}")
            time.sleep(settings.watch_retry_seconds)
