"""Shared-mount subdirectory volume plugin."""

from .config import PluginConfig
from .controller import MountController, UnmountController, init_plugin
from .lock import LockManager
from .mount_table import MountEntry, MountTable, ProcMounts
from .mounter import CommandRunner, Mounter
from .naming import identifier_for
from .result import Result, Status
from .cli import main as flexsubdir_main

__all__ = [
    "PluginConfig",
    "MountController",
    "UnmountController",
    "init_plugin",
    "LockManager",
    "MountEntry",
    "MountTable",
    "ProcMounts",
    "CommandRunner",
    "Mounter",
    "identifier_for",
    "Result",
    "Status",
    "flexsubdir_main",
]
