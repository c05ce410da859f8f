"""
Reconcile pipeline runs into PipelineActivity records.
"""

import logging
from typing import Optional, Tuple

from controller.src.k8s.activity_store import ActivityStore
from controller.src.models.activity import ObjectMeta, PipelineActivity
from controller.src.models.labels import DEFAULT_LABEL_KEYS, LabelKeys
from controller.src.models.pipeline_run import PipelineRun
from controller.src.services.activity_builder import to_pipeline_activity
from controller.src.services.defaults import default_values
from controller.src.services.naming import to_pipeline_activity_name
from controller.src.services.stages import Clock, utcnow
from controller.src.services.status import DefaultStatusAggregator, StatusAggregator

logger = logging.getLogger(__name__)

class ActivityReconciler:
    """
    Folds each observation of a pipeline run into its activity.

    Callers must not reconcile two runs of the same owner/repository/branch
    at the same time, since build numbers are allocated from the activities
    listed at the start of each call.
    """

    def __init__(
        self,
        store: ActivityStore,
        aggregator: Optional[StatusAggregator] = None,
        label_keys: LabelKeys = DEFAULT_LABEL_KEYS,
        overwrite_steps: bool = False,
        clock: Clock = utcnow,
    ):
        self.store = store
        self.aggregator = aggregator or DefaultStatusAggregator()
        self.label_keys = label_keys
        self.overwrite_steps = overwrite_steps
        self.clock = clock

    def reconcile(self, run: PipelineRun) -> Tuple[str, Optional[PipelineActivity]]:
        """
        Create or update the activity for a run.
        Returns ("", None) when the run has no identity yet.
        """
        namespace = run.metadata.namespace
        existing = self.store.list(namespace)
        name = to_pipeline_activity_name(run, existing, self.label_keys)
        if not name:
            logger.debug(f"Skipping PipelineRun {run.metadata.name}: missing owner, repository, branch or build labels")
            return "", None

        activity = next((a for a in existing if a.name == name), None)
        if activity is None:
            logger.info(f"Creating PipelineActivity {name} for PipelineRun {run.metadata.name}")
            activity = PipelineActivity(metadata=ObjectMeta(name=name, namespace=namespace))
        else:
            default_values(activity, self.label_keys)

        to_pipeline_activity(
            run,
            activity,
            overwrite_steps=self.overwrite_steps,
            label_keys=self.label_keys,
            aggregator=self.aggregator,
            clock=self.clock,
        )
        activity = self.store.upsert(activity)
        logger.info(f"PipelineActivity {name} is {activity.spec.status.value or 'unknown'}")
        return name, activity
