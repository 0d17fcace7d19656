from __future__ import annotations

"""
Unit tests for Internationalization (i18n) consistency.

Ensures that all locale files (en.json, es.json) share the exact
same key structure and dot-notation resolution works as expected.
"""

import json
import os
from typing import Any, Dict, Set

import pytest

from ctkbiru.domain.config import save_settings
from ctkbiru.interface.cli.app import main
from ctkbiru.utils.i18n import I18n, i18n


def _get_flat_keys(d: Dict[str, Any], prefix: str = "") -> Set[str]:
    """Helper to flatten nested dictionary keys into dot-notation sets."""
    keys = set()
    for k, v in d.items():
        new_key = f"{prefix}.{k}" if prefix else k
        if isinstance(v, dict):
            keys.update(_get_flat_keys(v, new_key))
        else:
            keys.add(new_key)
    return keys


def test_locales_key_parity() -> None:
    """TC-01: Verify that EN and ES locales have identical keys."""
    base_path = os.path.dirname(os.path.abspath(__file__))
    loc_rel = os.path.join("..", "..", "..", "src", "ctkbiru", "interface", "locales")
    locales_dir = os.path.abspath(os.path.join(base_path, loc_rel))

    with open(os.path.join(locales_dir, "en.json"), "r", encoding="utf-8") as f:
        en_keys = _get_flat_keys(json.load(f))

    with open(os.path.join(locales_dir, "es.json"), "r", encoding="utf-8") as f:
        es_keys = _get_flat_keys(json.load(f))

    assert en_keys - es_keys == set(), "Keys missing in es.json"
    assert es_keys - en_keys == set(), "Keys missing in en.json"


def test_dot_notation_resolution() -> None:
    """TC-02: Nested keys resolve and interpolate."""
    manager = I18n("en")
    assert manager.is_loaded
    assert manager.t("cli.status.added") == "Blueprint added!"
    assert manager.t("cli.status.captured", count=3) == "Blueprint captured! (3 entries)"


def test_missing_keys_fall_back() -> None:
    """TC-03: Unknown keys return the default, or the key itself."""
    manager = I18n("en")
    assert manager.t("cli.nope") == "cli.nope"
    assert manager.t("cli.nope", default="fallback {x}", x=1) == "fallback 1"
    # a key that stops at a branch is not a string
    assert manager.t("cli.status") == "cli.status"


def test_missing_locale_is_tolerated() -> None:
    """TC-04: An unknown locale leaves lookups in fallback mode."""
    manager = I18n("xx")
    assert not manager.is_loaded
    assert manager.t("cli.status.added", default="ok") == "ok"


def test_bad_format_arguments_return_template() -> None:
    manager = I18n("en")
    assert manager.t("cli.status.captured") == "Blueprint captured! ({count} entries)"
    assert manager.t("cli.status.captured", other=1) == "Blueprint captured! ({count} entries)"


def test_cli_uses_configured_locale(isolated_storage, capsys) -> None:
    """TC-05: The 'locale' setting switches user-facing messages."""
    save_settings(str(isolated_storage), {"locale": "es"})
    try:
        assert main(["list"]) == 0
        assert capsys.readouterr().out.startswith("Plantillas:")
    finally:
        i18n.load_locale("en")


@pytest.mark.parametrize("locale", ["en", "es"])
def test_every_locale_loads(locale: str) -> None:
    manager = I18n(locale)
    assert manager.is_loaded
    assert manager.locale == locale
