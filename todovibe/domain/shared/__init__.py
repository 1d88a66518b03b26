"""Shared domain building blocks.

Example usage:
    >>> from todovibe.domain.shared import Ok, Err, Result, is_ok
    >>>
    >>> def find(task_id: str) -> Result[str, str]:
    ...     if not task_id:
    ...         return Err("Task not found")
    ...     return Ok(task_id)
"""

from todovibe.domain.shared.result import Err, Ok, Result, is_err, is_ok, unwrap_or

__all__ = [
    "Ok",
    "Err",
    "Result",
    "is_ok",
    "is_err",
    "unwrap_or",
]
