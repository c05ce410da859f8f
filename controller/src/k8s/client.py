"""
Kubernetes client initialization and utilities.
"""

from kubernetes import client, config
import logging

from controller.src.config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()

TEKTON_GROUP = "tekton.dev"
TEKTON_VERSION = "v1beta1"
PIPELINE_RUN_PLURAL = "pipelineruns"

ACTIVITY_GROUP = "jenkins.io"
ACTIVITY_VERSION = "v1"
ACTIVITY_PLURAL = "pipelineactivities"

_api_client = None
_custom_objects = None

def init_k8s_client():
    """Initialize Kubernetes client."""
    global _api_client, _custom_objects

    try:
        if settings.k8s_in_cluster:
            # Running inside Kubernetes
            config.load_incluster_config()
            logger.info("Loaded in-cluster Kubernetes config")
        else:
            # Running locally (Docker Desktop, minikube, etc.)
            config.load_kube_config()
            logger.info("Loaded local Kubernetes config")

        _api_client = client.ApiClient()
        _custom_objects = client.CustomObjectsApi(_api_client)

        # Test connection
        _custom_objects.list_namespaced_custom_object(
            group=ACTIVITY_GROUP,
            version=ACTIVITY_VERSION,
            namespace=settings.k8s_namespace,
            plural=ACTIVITY_PLURAL,
            limit=1,
        )
        logger.info("Kubernetes client initialized successfully")

        return True
    except Exception as e:
        logger.error(f"Failed to initialize Kubernetes client: {e}")
        return False

def get_custom_api() -> client.CustomObjectsApi:
    """Get CustomObjects API client for PipelineRun and PipelineActivity operations."""
    global _custom_objects
    if _custom_objects is None:
        init_k8s_client()
    return _custom_objects
