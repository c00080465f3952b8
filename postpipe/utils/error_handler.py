"""Shared error handling helpers.

Content pipeline failures are recoverable: loaders and parsers log what went
wrong and hand back a default instead of propagating. These helpers keep that
pattern in one place so every call site logs the same way.
"""

import copy
import functools
import inspect
from collections.abc import Callable
from typing import Any, TypeVar

import structlog

logger = structlog.get_logger(__name__)

T = TypeVar("T")


class ErrorHandler:
    """Logging helpers for the common failure patterns"""

    @staticmethod
    def log_and_return_default(
        operation_name: str, exception: Exception, default_value: T, **kwargs: Any
    ) -> T:
        """Log the failure and return ``default_value``"""
        logger.error(f"Failed to {operation_name}", error=str(exception), **kwargs)
        return default_value

    @staticmethod
    def log_and_reraise(
        operation_name: str, exception: Exception, **kwargs: Any
    ) -> None:
        """Log the failure, then re-raise it"""
        logger.error(f"Failed to {operation_name}", error=str(exception), **kwargs)
        raise exception


def _fresh_default(default_return: Any) -> Any:
    # Mutable defaults are copied so callers never share one list/dict.
    if isinstance(default_return, list | dict | set):
        return copy.copy(default_return)
    return default_return


def handle_errors(
    operation_name: str,
    default_return: Any = None,
    reraise: bool = False,
    exceptions: tuple[type[Exception], ...] = (Exception,),
    **log_kwargs: Any,
):
    """
    Decorator wrapping a function with the standard error handling.

    Args:
        operation_name: Name of the operation, used in the log message
        default_return: Value returned when the call fails
        reraise: Re-raise after logging instead of returning the default
        exceptions: Exception types handled; anything else propagates
        **log_kwargs: Extra context added to the log entry
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except exceptions as e:
                if reraise:
                    ErrorHandler.log_and_reraise(operation_name, e, **log_kwargs)
                return ErrorHandler.log_and_return_default(
                    operation_name, e, _fresh_default(default_return), **log_kwargs
                )

        @functools.wraps(func)
        async def async_wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except exceptions as e:
                if reraise:
                    ErrorHandler.log_and_reraise(operation_name, e, **log_kwargs)
                return ErrorHandler.log_and_return_default(
                    operation_name, e, _fresh_default(default_return), **log_kwargs
                )

        if inspect.iscoroutinefunction(func):
            return async_wrapper
        return wrapper

    return decorator


def safe_with_default(operation_name: str, default_value: Any, **log_kwargs: Any):
    """Return ``default_value`` on failure"""
    return handle_errors(operation_name, default_return=default_value, **log_kwargs)


def critical_operation(operation_name: str, **log_kwargs: Any):
    """Log and re-raise on failure"""
    return handle_errors(operation_name, reraise=True, **log_kwargs)
