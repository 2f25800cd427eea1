"""
Invocation of a single protocol implementation.

Turns whatever an implementation hands back into an explicit AttemptResult,
so the dispatcher never has to guess what a bare None meant.
"""

from __future__ import annotations

import inspect
import logging
from typing import Any, TYPE_CHECKING

from pgwire_negotiate.types import AttemptResult

if TYPE_CHECKING:
    from pgwire_negotiate._core.registry import RegistryEntry
    from pgwire_negotiate.types import ConnectionRequest

logger = logging.getLogger(__name__)


def interpret_result(value: Any) -> AttemptResult:
    """
    Classify the raw return value of an implementation's attempt().

    Args:
        value: AttemptResult, connection handle, or None

    Returns:
        AttemptResult (None becomes declined, any other object a success)
    """
    if isinstance(value, AttemptResult):
        return value
    if value is None:
        return AttemptResult.declined()
    return AttemptResult.success(value)


async def run_attempt(
    entry: "RegistryEntry",
    request: "ConnectionRequest",
) -> AttemptResult:
    """
    Invoke one registry entry exactly once.

    Exceptions raised by the implementation are not caught here; they are
    hard failures and belong to the caller.

    Args:
        entry: Registry entry to invoke
        request: Read-only connection request

    Returns:
        Interpreted AttemptResult
    """
    logger.debug(f"Trying protocol version {entry.version} against {request.host}:{request.port}")

    value = entry.implementation.attempt(request)
    if inspect.isawaitable(value):
        value = await value

    return interpret_result(value)
