"""Command-line entrypoint invoked by the orchestrator's volume manager."""

from __future__ import annotations

import argparse
import logging
import sys
from importlib import metadata
from typing import Callable, Iterable

from .config import PluginConfig
from .controller import MountController, UnmountController, init_plugin
from .errors import PluginError
from .lock import LockManager
from .mount_table import MountTable, ProcMounts
from .mounter import Mounter
from .payload import parse_mount_request
from .result import Result

log = logging.getLogger(__name__)

# Orchestrator calls this plugin deliberately declines.
UNSUPPORTED_COMMANDS = (
    "getvolumename",
    "attach",
    "detach",
    "waitforattach",
    "isattached",
    "mountdevice",
    "unmountdevice",
)


def _version() -> str:
    try:
        return metadata.version("flexsubdir")
    except metadata.PackageNotFoundError:
        return "unknown"


def _build_parser() -> argparse.ArgumentParser:
    # Only consulted for --version; every other token goes to dispatch().
    parser = argparse.ArgumentParser(prog="flexsubdir")
    parser.add_argument("--version", action="version", version=f"flexsubdir {_version()}")
    return parser


def configure_logging(config: PluginConfig) -> None:
    # stdout carries the JSON result only.
    handler: logging.Handler | None = None
    open_error = None
    if config.log_file:
        try:
            handler = logging.FileHandler(config.log_file, encoding="utf-8")
        except OSError as exc:
            open_error = exc
    if handler is None:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(process)d %(levelname)s %(name)s: %(message)s")
    )
    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(logging.DEBUG if config.debug else logging.INFO)
    if open_error is not None:
        log.warning("cannot open log file %s, logging to stderr: %s", config.log_file, open_error)


def _components(config: PluginConfig) -> tuple[LockManager, MountTable, Mounter]:
    return LockManager(config), MountTable(ProcMounts(config.mounts_file)), Mounter(config)


def _init(config: PluginConfig, args: list[str]) -> Result:
    return init_plugin(config)


def _mount(config: PluginConfig, args: list[str]) -> Result:
    if len(args) < 2:
        return Result.failure("usage: mount <target> <json options>")
    request = parse_mount_request(args[0], args[1])
    return MountController(config, *_components(config)).mount(request)


def _unmount(config: PluginConfig, args: list[str]) -> Result:
    if not args:
        return Result.failure("usage: unmount <target>")
    return UnmountController(config, *_components(config)).unmount(args[0])


HANDLERS: dict[str, Callable[[PluginConfig, list[str]], Result]] = {
    "init": _init,
    "mount": _mount,
    "unmount": _unmount,
}


def dispatch(command: str, args: list[str], config: PluginConfig) -> Result:
    handler = HANDLERS.get(command)
    if handler is None:
        if command in UNSUPPORTED_COMMANDS:
            return Result.not_supported(f"{command} is not supported by this driver")
        return Result.not_supported(f"unknown command {command!r}")
    try:
        return handler(config, args)
    except PluginError as exc:
        log.error("%s failed: %s", command, exc)
        return Result.failure(str(exc))
    except Exception as exc:
        log.exception("%s failed unexpectedly", command)
        return Result.failure(f"{command} failed: {exc}")


def main(argv: Iterable[str] | None = None, config: PluginConfig | None = None) -> int:
    tokens = list(argv) if argv is not None else sys.argv[1:]
    if tokens[:1] == ["--version"]:
        _build_parser().parse_args(tokens[:1])
    command, args = (tokens[0], tokens[1:]) if tokens else ("", [])
    config = config or PluginConfig.from_env()
    configure_logging(config)

    result = dispatch(command, args, config)
    log.debug("%s -> %s", command, result.status.value)
    print(result.to_json(), flush=True)
    return result.exit_code
