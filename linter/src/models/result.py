from dataclasses import dataclass
from typing import Optional

@dataclass
class LintTest:
    """Outcome of linting a single file."""

    file: str
    error: Optional[Exception] = None

    @property
    def passed(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        return {
            "file": self.file,
            "passed": self.passed,
            "error": str(self.error) if self.error is not None else None,
        }
