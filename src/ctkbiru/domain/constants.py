from __future__ import annotations

"""
Domain Constants.

Centralized values shared by the parser, the store and the command surface:
blueprint syntax markers, storage naming and configuration versioning.
"""

# -----------------------------------------------------------------------------
# BLUEPRINT SYNTAX
# -----------------------------------------------------------------------------
INDENT_CHAR = " "
DIR_MARKER = "/"

# -----------------------------------------------------------------------------
# STORAGE
# -----------------------------------------------------------------------------
BLUEPRINT_EXTENSION = ".txt"
STORAGE_DIR_NAME = ".ctkbiru"
STORAGE_ENV_VAR = "CTKBIRU_HOME"
CONFIG_FILE_NAME = "config.json"
LOG_DIR_NAME = "logs"
LOG_FILE_NAME = "ctkbiru.log"

CURRENT_CONFIG_VERSION = "1.0.0"
DEFAULT_SNAPSHOT_INDENT = 2

# -----------------------------------------------------------------------------
# LOCALIZATION
# -----------------------------------------------------------------------------
DEFAULT_LOCALE = "en"
SUPPORTED_LOCALES = ("en", "es")
