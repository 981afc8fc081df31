"""
Pipeline error types.

Every error is fatal: the run stops at the stage that raised it.
"""

from typing import Any, List, Optional


class PipelineError(Exception):
    """Base class for all pipeline failures."""


class FetchError(PipelineError):
    """A source document could not be retrieved."""

    def __init__(self, source_name: str, url: str, reason: str):
        self.source_name = source_name
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to fetch {source_name} from {url}: {reason}")


class SchemaIntegrityError(PipelineError):
    """A post-parse check failed; the upstream layout can no longer be trusted."""

    def __init__(self, source_name: str, failures: Optional[List[Any]] = None, message: str = ""):
        self.source_name = source_name
        self.failures = failures or []
        if not message:
            message = "; ".join(f"{f.check_name}: {f.message}" for f in self.failures)
        super().__init__(f"{source_name} failed integrity checks: {message}")


class TypeCoercionError(PipelineError):
    """A cell expected to hold a number or percent did not parse."""

    def __init__(self, column: str, value: Any, row: Any = None):
        self.column = column
        self.value = value
        self.row = row
        location = f" (row {row})" if row is not None else ""
        super().__init__(f"Cannot coerce {value!r} in column '{column}'{location}")
