"""
Lint lighthouse trigger configurations and the pipelines they reference.
"""

import logging
import os
from typing import Any, Callable, Dict, List, Optional

import yaml
from pydantic import ValidationError

from linter.src.config import get_settings
from linter.src.models.result import LintTest
from linter.src.models.trigger import TEKTON_PIPELINE_AGENT, TriggerConfig
from linter.src.services.pipeline_loader import GetData, load_tekton_resource_as_pipeline_run
from linter.src.services.pipeline_parser import PipelineConfigError, validate_pipeline_run

logger = logging.getLogger(__name__)

Resolver = Callable[[bytes, str, str, GetData], Dict[str, Any]]
Validator = Callable[[Dict[str, Any]], Any]

class LintError(Exception):
    """Raised when a lighthouse directory cannot be walked."""
    pass

def read_file(path: str) -> bytes:
    try:
        with open(path, "rb") as f:
            return f.read()
    except OSError as e:
        raise PipelineConfigError(f"failed to read file {path}: {e}") from e

def load_trigger_config(path: str) -> TriggerConfig:
    """Load a triggers.yaml file."""
    try:
        with open(path, "rb") as f:
            data = yaml.safe_load(f.read())
    except OSError as e:
        raise PipelineConfigError(f"failed to load file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise PipelineConfigError(f"failed to parse YAML file {path}: {e}") from e

    try:
        return TriggerConfig.model_validate(data or {})
    except ValidationError as e:
        raise PipelineConfigError(f"failed to unmarshal YAML file {path}: {e}") from e

class Linter:
    """
    Walks `.lighthouse` directories recording one LintTest per file checked.
    """

    def __init__(
        self,
        dir: str = ".",
        recursive: bool = False,
        resolver: Optional[Resolver] = None,
        validator: Optional[Validator] = None,
        get_data: GetData = read_file,
    ):
        settings = get_settings()
        self.dir = dir
        self.recursive = recursive
        self.resolver = resolver or load_tekton_resource_as_pipeline_run
        self.validator = validator or validate_pipeline_run
        self.get_data = get_data
        self.lighthouse_dir_name = settings.lighthouse_dir_name
        self.triggers_file_name = settings.triggers_file_name
        self.tests: List[LintTest] = []

    @property
    def failed(self) -> List[LintTest]:
        return [t for t in self.tests if not t.passed]

    @property
    def passed(self) -> bool:
        return not self.failed

    def run(self) -> List[LintTest]:
        if self.recursive:
            def on_error(e: OSError):
                raise LintError(f"failed to walk dir {e.filename}: {e}") from e

            for path, dirnames, _ in os.walk(self.dir, onerror=on_error):
                dirnames.sort()
                if os.path.basename(path) == self.lighthouse_dir_name:
                    self.lint_dir(path)
        else:
            self.lint_dir(os.path.join(self.dir, self.lighthouse_dir_name))
        return self.tests

    def lint_dir(self, dir: str):
        try:
            names = sorted(os.listdir(dir))
        except OSError as e:
            raise LintError(f"failed to read dir {dir}: {e}") from e

        for name in names:
            trigger_dir = os.path.join(dir, name)
            if name.startswith(".") or not os.path.isdir(trigger_dir):
                continue

            triggers_file = os.path.join(trigger_dir, self.triggers_file_name)
            if not os.path.isfile(triggers_file):
                continue

            test = LintTest(file=triggers_file)
            self.tests.append(test)
            try:
                triggers = load_trigger_config(triggers_file)
            except PipelineConfigError as e:
                test.error = e
                continue

            self.load_config_file(triggers, trigger_dir)

    def load_config_file(self, config: TriggerConfig, dir: str) -> TriggerConfig:
        """Lint every pipeline referenced by the trigger config."""
        for job in config.jobs():
            if job.source_path:
                path = os.path.join(dir, job.source_path)
                test = LintTest(file=path)
                self.tests.append(test)
                try:
                    self.load_job_base_from_source_path(path)
                except PipelineConfigError as e:
                    test.error = e
            if not job.agent and job.pipeline_run_spec is not None:
                job.agent = TEKTON_PIPELINE_AGENT
        return config

    def load_job_base_from_source_path(self, path: str) -> Dict[str, Any]:
        try:
            data = self.get_data(path)
        except PipelineConfigError as e:
            raise PipelineConfigError(f"failed to load file {path}: {e}") from e
        if not data or not data.strip():
            raise PipelineConfigError(f"empty file {path}")

        message = f"file {path}"
        try:
            pr = self.resolver(data, os.path.dirname(path), message, self.get_data)
        except PipelineConfigError as e:
            raise PipelineConfigError(f"failed to unmarshal YAML file {path}: {e}") from e

        try:
            self.validator(pr)
        except PipelineConfigError as e:
            raise PipelineConfigError(f"failed to validate YAML file {path}: {e}") from e
        return pr
