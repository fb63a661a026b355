# Copyright 2025 Tobias Olenyi.
# SPDX-License-Identifier: Apache-2.0

"""Error classes for the domview CLI."""

import functools
import os
import sys
import traceback
from typing import Any, Callable, TypeVar, cast

from rich.console import Console
from rich.panel import Panel
from rich.text import Text
from rich.traceback import Traceback

from domview.core import DomViewError

console = Console(stderr=True)

F = TypeVar("F", bound=Callable[..., Any])


class CLIError(DomViewError):
    """Base class for CLI-specific errors."""

    def __init__(self, message: str):
        super().__init__(f"CLI error: {message}")


class StructureUnavailableError(CLIError):
    """The viewer could not reach READY for the requested structure."""

    def __init__(self, reason: str, external_url: str):
        self.reason = reason
        self.external_url = external_url
        super().__init__(f"{reason}\nView the structure on RCSB instead: {external_url}")


class InvalidArgumentError(CLIError):
    """Exception raised when an invalid argument is provided."""

    def __init__(self, argument: str, reason: str):
        message = f"Invalid argument: {argument}"
        suggestion = f"Reason: {reason}\nRun 'domview --help' for more information."
        super().__init__(f"{message}\n{suggestion}")


def error_handler(func: F) -> F:
    """Decorator that renders domview errors as a Rich panel.

    The wrapped command returns 1 instead of raising.
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except DomViewError as e:
            tb = sys.exc_info()[2]
            frame = traceback.extract_tb(tb)[-1]
            filename = os.path.basename(frame.filename)
            lineno = frame.lineno

            title = Text("domview Error", style="bold red")
            error_type = Text(f"[{e.__class__.__name__}]", style="red")
            location = Text(f" at {filename}:{lineno}", style="dim")
            header = Text.assemble(title, " ", error_type, location)

            panel = Panel(
                Text(e.message), title=header, border_style="red", padding=(1, 2)
            )
            console.print(panel)
            return 1
        except Exception as e:
            console.print("[bold red]Unexpected Error:[/bold red]", str(e))
            console.print(Traceback())
            return 1

    return cast(F, wrapper)
