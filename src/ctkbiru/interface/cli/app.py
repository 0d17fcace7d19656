from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: argument parsing, runtime configuration and
logging bootstrap, command dispatch, and mapping of outcomes to messages and
process exit codes.

Exit codes:
    0   success, and every "not found" condition (friendly message)
    1   invalid input file, non-empty destination, failed generation, I/O errors
    2   usage errors (argparse)
    130 interrupted by the user
"""

import os
import sys
from typing import Callable, Dict, List, Optional

from ctkbiru.core.generator import generate_blueprint
from ctkbiru.core.parser import iter_blueprint_lines
from ctkbiru.core.renderer import render_blueprint_tree
from ctkbiru.core.snapshot import snapshot_directory
from ctkbiru.domain.blueprint_models import STATUS_NOT_EMPTY, STATUS_NOT_FOUND
from ctkbiru.domain.config import RuntimeConfig, build_runtime_config
from ctkbiru.domain.errors import (
    BlueprintError,
    BlueprintNotFoundError,
    InvalidBlueprintFileError,
    StorageLocationError,
)
from ctkbiru.infra.logging import LoggingConfig, configure_logging, get_logger
from ctkbiru.infra.store import BlueprintStore
from ctkbiru.interface.cli import args as cli_args
from ctkbiru.utils.i18n import i18n

logger = get_logger(__name__)

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code.
    """
    if sys.platform == "win32":
        if hasattr(sys.stdout, "reconfigure"):
            sys.stdout.reconfigure(encoding="utf-8")
        if hasattr(sys.stderr, "reconfigure"):
            sys.stderr.reconfigure(encoding="utf-8")

    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Runtime configuration (storage location is resolved exactly once)
    try:
        runtime = build_runtime_config(debug=args.debug, log_file=args.log_file)
    except StorageLocationError as e:
        print(f"ERROR: {i18n.t('cli.errors.storage', error=str(e))}", file=sys.stderr)
        return 1

    # 3. Logging bootstrap
    configure_logging(LoggingConfig(
        console_level=runtime.console_level,
        log_file=runtime.log_file,
        file_level=runtime.file_level,
    ))
    logger.debug(f"Command '{args.command}' using storage {runtime.storage_dir}")

    if runtime.locale != i18n.locale:
        i18n.load_locale(runtime.locale)

    store = BlueprintStore(runtime.storage_dir)
    handler = _COMMANDS[args.command]

    # 4. Command execution phase
    try:
        return handler(args, store, runtime)
    except KeyboardInterrupt:
        msg = i18n.t("cli.status.interrupted")
        logger.warning(msg)
        print(msg, file=sys.stderr)
        return 130
    except OSError as e:
        msg = i18n.t("cli.errors.unexpected", error=str(e))
        logger.error(msg)
        print(f"ERROR: {msg}", file=sys.stderr)
        return 1
    except Exception as e:
        msg = i18n.t("cli.errors.unexpected", error=str(e))
        logger.critical(msg, exc_info=True)
        print(f"ERROR: {msg}", file=sys.stderr)
        return 1

# -----------------------------------------------------------------------------
# COMMAND HANDLERS
# -----------------------------------------------------------------------------

def _cmd_list(args, store: BlueprintStore, runtime: RuntimeConfig) -> int:
    print(i18n.t("cli.status.list_header"))
    for name in store.list():
        print(name)
    return 0


def _cmd_show(args, store: BlueprintStore, runtime: RuntimeConfig) -> int:
    if not store.contains(args.blueprint):
        print(i18n.t("cli.errors.not_found"))
        return 0

    if args.tree:
        try:
            with store.open(args.blueprint) as stream:
                lines = render_blueprint_tree(iter_blueprint_lines(stream), title=args.blueprint)
        except BlueprintError as e:
            print(f"ERROR: {i18n.t('cli.errors.show_failed', error=str(e))}", file=sys.stderr)
            return 1
        print("\n".join(lines))
        return 0

    print(i18n.t("cli.status.show_header", name=args.blueprint))
    for line in store.read_lines(args.blueprint):
        print(line)
    return 0


def _cmd_add(args, store: BlueprintStore, runtime: RuntimeConfig) -> int:
    try:
        store.save(args.file, args.name)
    except InvalidBlueprintFileError as e:
        logger.info(str(e))
        print(f"ERROR: {i18n.t('cli.errors.invalid_file')}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"ERROR: {i18n.t('cli.errors.add_failed', error=str(e))}", file=sys.stderr)
        return 1

    print(i18n.t("cli.status.added"))
    return 0


def _cmd_rm(args, store: BlueprintStore, runtime: RuntimeConfig) -> int:
    try:
        store.delete(args.blueprint)
    except BlueprintNotFoundError:
        print(i18n.t("cli.errors.not_found"))
        return 0
    except OSError as e:
        print(f"ERROR: {i18n.t('cli.errors.remove_failed', error=str(e))}", file=sys.stderr)
        return 1

    print(i18n.t("cli.status.removed"))
    return 0


def _cmd_capture(args, store: BlueprintStore, runtime: RuntimeConfig) -> int:
    indent = args.indent if args.indent is not None else runtime.snapshot_indent
    try:
        lines = snapshot_directory(os.path.abspath(args.directory), indent_width=indent)
        content = "".join(f"{line}\n" for line in lines).encode("utf-8")
        store.write(args.blueprint, content)
    except (OSError, ValueError) as e:
        print(f"ERROR: {i18n.t('cli.errors.capture_failed', error=str(e))}", file=sys.stderr)
        return 1

    print(i18n.t("cli.status.captured", count=len(lines)))
    return 0


def _cmd_gen(args, store: BlueprintStore, runtime: RuntimeConfig) -> int:
    result = generate_blueprint(store, args.blueprint, target_path=args.path, wrapper_name=args.name)

    if result.ok:
        print(i18n.t("cli.status.generated"))
        logger.info(i18n.t(
            "cli.status.generated_detail",
            directories=result.directories,
            files=result.files,
            path=result.destination,
        ))
        return 0

    if result.status == STATUS_NOT_FOUND:
        print(i18n.t("cli.errors.not_found"))
        return 0

    if result.status == STATUS_NOT_EMPTY:
        print(i18n.t("cli.errors.not_empty"), file=sys.stderr)
        return 1

    print(f"ERROR: {i18n.t('cli.errors.gen_failed', error=result.error)}", file=sys.stderr)
    return 1


_COMMANDS: Dict[str, Callable[..., int]] = {
    "list": _cmd_list,
    "show": _cmd_show,
    "add": _cmd_add,
    "rm": _cmd_rm,
    "capture": _cmd_capture,
    "gen": _cmd_gen,
}

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
