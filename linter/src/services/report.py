"""
Render and log lint results.
"""

import json
import logging
from typing import List, Optional

import yaml

from linter.src.models.result import LintTest

logger = logging.getLogger(__name__)

FORMATS = ("tap", "json", "yaml")

def render_tap(tests: List[LintTest]) -> str:
    lines = ["TAP version 13", f"1..{len(tests)}"]
    for i, test in enumerate(tests, start=1):
        if test.passed:
            lines.append(f"ok {i} - {test.file}")
            continue
        lines.append(f"not ok {i} - {test.file}")
        lines.append("  ---")
        lines.append(f"  message: {json.dumps(str(test.error))}")
        lines.append("  ...")
    return "\n".join(lines) + "\n"

def render_results(tests: List[LintTest], fmt: str = "tap") -> str:
    """Render lint results in the given format."""
    if fmt == "tap":
        return render_tap(tests)
    results = [t.to_dict() for t in tests]
    if fmt == "json":
        return json.dumps(results, indent=2) + "\n"
    if fmt == "yaml":
        return yaml.safe_dump(results, sort_keys=False)
    raise ValueError(f"unsupported format '{fmt}', expected one of {', '.join(FORMATS)}")

def log_results(tests: List[LintTest], out_file: Optional[str] = None, fmt: str = "tap") -> int:
    """Log each result, optionally write the report, and return the failure count."""
    failed = 0
    for test in tests:
        if test.passed:
            logger.info(f"{test.file} OK")
        else:
            failed += 1
            logger.error(f"{test.file} failed: {test.error}")

    if out_file:
        with open(out_file, "w") as f:
            f.write(render_results(tests, fmt))
        logger.info(f"Wrote {fmt} results to {out_file}")

    logger.info(f"Linted {len(tests)} files, {failed} failed")
    return failed
