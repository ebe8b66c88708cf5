"""
Central Logging and Console Utilities.

Routes the standard `logging` library through `rich` for formatting.

1.  **Standard Logging Integration**: Configures a `RichHandler` on the root
    logger and provides helpers (`log_info`, `log_success`, `log_warning`,
    `log_error`) used by the CLI handlers.
2.  **Swappable Output**: The module-level `console` forwards `print` to a Rich
    Console. That Console can be replaced via `set_console`, e.g. with a
    recording console in tests, and the logging handler follows it.

Attributes:
    console (_SwappableConsole): A global, stable reference to the active Rich Console.
"""

import logging
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

# Between INFO and WARNING
SUCCESS_LEVEL_NUM = 25
logging.addLevelName(SUCCESS_LEVEL_NUM, "SUCCESS")

_THEME = Theme(
  {
    "logging.level.success": "green",
    "info": "dim cyan",
    "warning": "yellow",
    "error": "bold red",
    "success": "green",
    "path": "bold blue",
    "code": "bold magenta",
  }
)


class _SwappableConsole:
  """
  Holds the Rich Console used by the CLI for tables, diffs and log records.

  Handlers import the holder once; swapping the backend redirects both
  `print` and `logging` output without re-importing.

  Attributes:
      _backend (Console): The active Rich Console instance.
  """

  def __init__(self) -> None:
    self._backend: Console = Console(theme=_THEME)
    self._configure_logging()

  def set_backend(self, new_console: Console) -> None:
    """
    Injects a new Console backend and updates logging handlers.

    Args:
        new_console (Console): The new Rich Console instance to use.
    """
    self._backend = new_console
    self._configure_logging()

  def reset(self) -> None:
    self._backend = Console(theme=_THEME)
    self._configure_logging()

  def _configure_logging(self) -> None:
    """
    Points the root logger's RichHandler at the current backend console.
    """
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


console = _SwappableConsole()


def set_console(new_console: Console) -> None:
  """
  Replaces the console used for printing and logging.

  Args:
      new_console (Console): The configured Rich console to use globally.
  """
  console.set_backend(new_console)


def reset_console() -> None:
  console.reset()


def set_verbose(verbose: bool) -> None:
  """Switches the root logger between DEBUG and INFO."""
  logging.getLogger().setLevel(logging.DEBUG if verbose else logging.INFO)


def log_info(msg: str) -> None:
  """
  Logs an informational message via standard logging.

  Args:
      msg (str): The message content. Can include rich markup like [bold].
  """
  logging.info(f"ℹ️  {msg}", extra={"markup": True})


def log_success(msg: str) -> None:
  logging.log(SUCCESS_LEVEL_NUM, f"✅ {msg}", extra={"markup": True})


def log_warning(msg: str) -> None:
  logging.warning(f"⚠️  {msg}", extra={"markup": True})


def log_error(msg: str) -> None:
  """
  Logs an error message via standard logging.

  Markup is disabled because error text frequently quotes Rust source such as
  ``Vec<[u8]>`` that rich would otherwise try to interpret.

  Args:
      msg (str): The message content.
  """
  logging.error(f"❌ {msg}", extra={"markup": False})
