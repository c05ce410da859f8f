from controller.src.k8s.client import (
    init_k8s_client,
    get_custom_api,
)
from controller.src.k8s.activity_store import (
    ActivityStore,
    ActivityStoreError,
    InMemoryActivityStore,
    KubernetesActivityStore,
)

__all__ = [
    "init_k8s_client",
    "get_custom_api",
    "ActivityStore",
    "ActivityStoreError",
    "InMemoryActivityStore",
    "KubernetesActivityStore",
]
