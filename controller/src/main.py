"""
PipelineActivity Controller - Main entry point.
"""

import logging
import sys

from controller.src.config import get_settings
from controller.src.k8s.client import init_k8s_client
from controller.src.worker import run_worker

logger = logging.getLogger(__name__)

def main():
    """Main entry point."""
    settings = get_settings()

    # Configure logging
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)]
    )

    logger.info("Starting PipelineActivity Controller")
    logger.info(f"Kubernetes namespace: {settings.k8s_namespace}")
    logger.info(f"Overwrite steps: {settings.overwrite_steps}")

    # Initialize Kubernetes client
    if not init_k8s_client():
        logger.error("Failed to initialize Kubernetes client")
        sys.exit(1)

    run_worker()

if __name__ == "__main__":
    main()
