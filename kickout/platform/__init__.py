"""Platform abstraction layer: processes, files, HTTP, user paths."""

from .files import atomic_write_text
from .paths import user_config_dir
from .process import (
    CommandExecutionError,
    CommandResult,
    CommandRunner,
    MockRunner,
    ShellRunner,
)

__all__ = [
    # files
    "atomic_write_text",
    # paths
    "user_config_dir",
    # process
    "CommandExecutionError",
    "CommandResult",
    "CommandRunner",
    "MockRunner",
    "ShellRunner",
]
