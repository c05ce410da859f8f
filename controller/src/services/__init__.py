from controller.src.services.activity_builder import to_pipeline_activity
from controller.src.services.defaults import default_values
from controller.src.services.merge import merge_steps
from controller.src.services.naming import humanize, to_pipeline_activity_name, to_valid_name
from controller.src.services.reconciler import ActivityReconciler
from controller.src.services.stages import build_stages
from controller.src.services.status import DefaultStatusAggregator, StatusAggregator

__all__ = [
    "to_pipeline_activity",
    "default_values",
    "merge_steps",
    "humanize",
    "to_pipeline_activity_name",
    "to_valid_name",
    "ActivityReconciler",
    "build_stages",
    "DefaultStatusAggregator",
    "StatusAggregator",
]
