"""Verbose logger for lofigps."""

from typing import Any

from rich.console import Console
from rich.markup import escape

# Global instance, stdout stays free for command output
_console = Console(stderr=True)
_verbose = False


def set_verbose(enabled: bool) -> None:
    """Enable or disable verbose mode."""
    global _verbose
    _verbose = enabled


def is_verbose() -> bool:
    """Return whether verbose mode is on."""
    return _verbose


def log_call(service: str, method: str, **kwargs: Any) -> None:
    """Log a service call with its parameters.

    Args:
        service: Service name (e.g. "TrackStore")
        method: Method name (e.g. "insert")
        **kwargs: Call parameters
    """
    params = []
    for key, value in kwargs.items():
        if value is None:
            continue
        str_value = str(value)
        if len(str_value) > 50:
            str_value = str_value[:47] + "..."
        params.append(f"{key}={str_value}")

    message = f"→ {service}.{method}({', '.join(params)})"

    if _verbose:
        _console.print(f"  [dim]{escape(message)}[/dim]", highlight=False)


def log_result(service: str, method: str, result: Any) -> None:
    """Log the result of a service call.

    Args:
        service: Service name
        method: Method name
        result: Call result
    """
    str_result = str(result)
    if len(str_result) > 80:
        str_result = str_result[:77] + "..."

    message = f"← {service}.{method} = {str_result}"

    if _verbose:
        _console.print(f"  [dim]{escape(message)}[/dim]", highlight=False)


def log_info(message: str) -> None:
    """Log an informational message."""
    if _verbose:
        _console.print(f"  [dim]{escape(message)}[/dim]", highlight=False)


def log_warning(message: str) -> None:
    """Log a warning. Warnings are printed even outside verbose mode."""
    _console.print(f"  [yellow]⚠ {escape(message)}[/yellow]", highlight=False)
