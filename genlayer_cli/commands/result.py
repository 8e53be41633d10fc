"""
Action results and the process exit status derived from them.

Every action returns ``ok(...)`` or ``fail(...)``. Commands hand that dict
back to click and the root group turns a failure into exit status 1.

Private keys and API keys must never be placed in a result.
"""

from typing import Any, Optional

from genlayer_cli.commands.errors import GenlayerError

EXIT_OK = 0
EXIT_FAILURE = 1


def ok(data: Optional[Any] = None, **extras: Any) -> dict[str, Any]:
    result: dict[str, Any] = {"success": True}
    if data is not None:
        result["data"] = data
    result.update(extras)
    return result


def fail(
    message: str, *, error: Optional[Exception] = None, **extras: Any
) -> dict[str, Any]:
    """Failure result for ``message``.

    When ``error`` is a GenlayerError its code and details are copied so
    callers can branch on ``error_code`` without inspecting the exception.
    """
    result: dict[str, Any] = {"success": False, "error": message}
    if error is not None:
        result["error_type"] = type(error).__name__
        result["error_message"] = str(error)
        if isinstance(error, GenlayerError):
            if error.code:
                result["error_code"] = error.code
            if error.details:
                result["error_details"] = error.details
    result.update(extras)
    return result


def exit_status(outcome: Any) -> int:
    """Exit status for whatever a command returned.

    Only an explicit failure counts: a ``fail(...)`` dict or ``False`` from
    the lifecycle actions. Anything else (None, ok dicts) exits 0.
    """
    if outcome is False:
        return EXIT_FAILURE
    if isinstance(outcome, dict) and outcome.get("success") is False:
        return EXIT_FAILURE
    return EXIT_OK
