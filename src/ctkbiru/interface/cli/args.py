from __future__ import annotations

"""
CLI Argument Definition.

Defines the command-line schema: global diagnostics flags and one
subcommand per store or generation operation.
"""

import argparse

from ctkbiru import __version__
from ctkbiru.utils.i18n import i18n

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the ctkbiru CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="ctkbiru",
        description=i18n.t("app.description"),
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    # --- Diagnostics ---
    p.add_argument(
        "--debug",
        action="store_true",
        help=i18n.t("cli.args.debug"),
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help=i18n.t("cli.args.log_file"),
    )

    sub = p.add_subparsers(dest="command", metavar="COMMAND")
    sub.required = True

    # --- Store queries ---
    sub.add_parser("list", help=i18n.t("cli.commands.list"))

    show = sub.add_parser("show", help=i18n.t("cli.commands.show"))
    show.add_argument("blueprint", help=i18n.t("cli.args.blueprint"))
    show.add_argument(
        "--tree",
        action="store_true",
        help=i18n.t("cli.args.tree"),
    )

    # --- Store mutations ---
    add = sub.add_parser("add", help=i18n.t("cli.commands.add"))
    add.add_argument("file", help=i18n.t("cli.args.file"))
    add.add_argument(
        "-n", "--name",
        default=None,
        help=i18n.t("cli.args.add_name"),
    )

    rm = sub.add_parser("rm", help=i18n.t("cli.commands.rm"))
    rm.add_argument("blueprint", help=i18n.t("cli.args.blueprint"))

    capture = sub.add_parser("capture", help=i18n.t("cli.commands.capture"))
    capture.add_argument("directory", help=i18n.t("cli.args.directory"))
    capture.add_argument("blueprint", help=i18n.t("cli.args.blueprint"))
    capture.add_argument(
        "--indent",
        type=int,
        default=None,
        help=i18n.t("cli.args.indent"),
    )

    # --- Generation ---
    gen = sub.add_parser("gen", help=i18n.t("cli.commands.gen"))
    gen.add_argument("blueprint", help=i18n.t("cli.args.blueprint"))
    gen.add_argument(
        "-n", "--name",
        default=None,
        help=i18n.t("cli.args.gen_name"),
    )
    gen.add_argument(
        "-p", "--path",
        default=None,
        help=i18n.t("cli.args.path"),
    )

    return p
