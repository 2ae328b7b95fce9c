"""Platform abstraction layer."""

from .files import (
    atomic_write_text,
    copy_tree,
    remove_matching,
    remove_path,
    remove_paths,
)
from .process import (
    ProcessError,
    run,
    run_silent,
    run_to_file,
)

__all__ = [
    # files
    "atomic_write_text",
    "copy_tree",
    "remove_matching",
    "remove_path",
    "remove_paths",
    # process
    "ProcessError",
    "run",
    "run_silent",
    "run_to_file",
]
