"""
Logging and Console Utilities.

All user facing output goes through the standard `logging` library, rendered
by `rich`. The module exposes:

1.  **Logging helpers** (`log_info`, `log_success`, `log_warning`, `log_error`)
    and `log_diagnostic`, which renders an expansion diagnostic at the level
    matching its severity.
2.  **A swappable console**. `console` is a proxy whose backend can be replaced
    with `set_console` (e.g. a recording console in tests); the logging
    handler follows the backend.
"""

import logging
from pathlib import Path
from typing import Any, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.theme import Theme

from hookgen.core.diagnostics import Diagnostic, Severity

SUCCESS_LEVEL_NUM = 25
logging.addLevelName(SUCCESS_LEVEL_NUM, "SUCCESS")

_THEME = Theme(
  {
    "logging.level.success": "green",
    "info": "dim cyan",
    "warning": "yellow",
    "error": "bold red",
    "note": "cyan",
    "success": "green",
    "path": "bold blue",
    "code": "bold magenta",
  }
)

_SEVERITY_LEVELS = {
  Severity.ERROR: logging.ERROR,
  Severity.WARNING: logging.WARNING,
  Severity.NOTE: logging.INFO,
}


class _ConsoleProxy:
  """
  Forwards to a replaceable `rich.console.Console` backend.

  Modules import the module-level `console` once; swapping the backend later
  redirects both direct prints and log records.
  """

  def __init__(self) -> None:
    self._backend: Console = Console(theme=_THEME)
    self._configure_logging()

  def set_backend(self, new_console: Console) -> None:
    self._backend = new_console
    self._configure_logging()

  def reset(self) -> None:
    self._backend = Console(theme=_THEME)
    self._configure_logging()

  @property
  def backend(self) -> Console:
    return self._backend

  def _configure_logging(self) -> None:
    """Replaces any RichHandler on the root logger with one bound to the backend."""
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
      if isinstance(handler, RichHandler):
        root_logger.removeHandler(handler)

    rich_handler = RichHandler(
      console=self._backend,
      show_time=False,
      omit_repeated_times=False,
      show_path=False,
      markup=True,
      rich_tracebacks=True,
    )

    root_logger.setLevel(logging.INFO)
    root_logger.addHandler(rich_handler)

  def print(self, *args: Any, **kwargs: Any) -> None:
    self._backend.print(*args, **kwargs)

  def __getattr__(self, name: str) -> Any:
    return getattr(self._backend, name)


console = _ConsoleProxy()


def set_console(new_console: Console) -> None:
  """
  Redirects console output and logging to another Rich console.

  Args:
      new_console (Console): The console to use from now on.
  """
  console.set_backend(new_console)


def reset_console() -> None:
  """Restores output to a standard output console."""
  console.reset()


def get_console() -> Console:
  """Returns the active console backend."""
  return console.backend


def log_info(msg: str) -> None:
  """
  Logs an informational message.

  Args:
      msg (str): The message content. Can include rich markup like [bold].
  """
  logging.info(f"ℹ️  {msg}", extra={"markup": True})


def log_success(msg: str) -> None:
  """Logs a success message at the SUCCESS level."""
  logging.log(SUCCESS_LEVEL_NUM, f"✅ {msg}", extra={"markup": True})


def log_warning(msg: str) -> None:
  """Logs a warning message."""
  logging.warning(f"⚠️  {msg}", extra={"markup": True})


def log_error(msg: str) -> None:
  """Logs an error message."""
  logging.error(f"❌ {msg}", extra={"markup": True})


def log_diagnostic(diagnostic: Diagnostic, path: Optional[Path] = None) -> None:
  """
  Logs an expansion diagnostic in compiler style (``file:line:col: severity: message``).

  Args:
      diagnostic (Diagnostic): The message to render.
      path (Optional[Path]): Input file the position refers to.
  """
  prefix = f"[path]{escape(str(path))}[/path]:" if path else ""
  style = diagnostic.severity.value
  text = f"{prefix}[{style}]{escape(str(diagnostic))}[/{style}]"
  logging.log(_SEVERITY_LEVELS[diagnostic.severity], text, extra={"markup": True})
