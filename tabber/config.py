# tabber/config.py
from __future__ import annotations

import contextlib
import json
import logging
import os
import tempfile
from datetime import datetime

from .converter import DEFAULT_TAB_WIDTH, ConversionOptions

logger = logging.getLogger("tabber.config")

APP_DIR = os.path.expanduser("~/.tabber")
CONFIG_PATH = os.path.join(APP_DIR, "config.json")

DEFAULTS = {
    "tab_size": DEFAULT_TAB_WIDTH,
    "preserve_indentation_in_empty_lines": True,
    "preserve_literals": True,
    "excluded_languages": ["markdown", "plaintext"],
    "include_languages_only": [],
    "skip_extensions": [".jpg", ".jpeg", ".png", ".gif", ".ico", ".exe", ".dll"],
}

LANGUAGE_BY_EXTENSION = {
    ".c": "c",
    ".cpp": "cpp",
    ".cs": "csharp",
    ".css": "css",
    ".go": "go",
    ".h": "c",
    ".html": "html",
    ".java": "java",
    ".js": "javascript",
    ".json": "json",
    ".jsx": "javascriptreact",
    ".md": "markdown",
    ".mjs": "javascript",
    ".php": "php",
    ".py": "python",
    ".rs": "rust",
    ".scss": "scss",
    ".sh": "shellscript",
    ".ts": "typescript",
    ".tsx": "typescriptreact",
    ".txt": "plaintext",
    ".xml": "xml",
    ".yaml": "yaml",
    ".yml": "yaml",
}


class ConfigSaveError(Exception):
    """Raised when the configuration cannot be written to disk."""


def load_config() -> dict:
    deprecated_keys = {"respect_vscode_settings", "format_on_save"}
    try:
        os.makedirs(APP_DIR, exist_ok=True)
        if not os.path.exists(CONFIG_PATH):
            with contextlib.suppress(ConfigSaveError):
                save_config(DEFAULTS)
            return _defaults()
        with open(CONFIG_PATH, encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"expected a JSON object, got {type(data).__name__}")
    except (OSError, ValueError) as exc:
        logger.warning("Could not read %s: %s", CONFIG_PATH, exc)
        return _recover_corrupt_config()

    changed = False
    for k in list(data):
        if k in deprecated_keys:
            data.pop(k, None)
            changed = True
    for k, v in DEFAULTS.items():
        if k not in data:
            data[k] = _copy_value(v)
            changed = True
    if changed:
        with contextlib.suppress(ConfigSaveError):
            save_config(data)
    return data


def _recover_corrupt_config() -> dict:
    if os.path.exists(CONFIG_PATH):
        stamp = datetime.now().strftime("%Y%m%d-%H%M%S-%f")
        backup = f"{CONFIG_PATH}.corrupt-{stamp}"
        try:
            os.replace(CONFIG_PATH, backup)
            logger.warning("Moved unreadable config to %s", backup)
        except OSError as exc:
            logger.warning("Could not back up %s: %s", CONFIG_PATH, exc)
    with contextlib.suppress(ConfigSaveError):
        save_config(DEFAULTS)
    return _defaults()


def save_config(cfg: dict) -> None:
    """Write ``cfg`` to ``CONFIG_PATH`` through a temp file in the same directory."""

    os.makedirs(APP_DIR, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=".tabber-settings.", suffix=".tmp", dir=APP_DIR)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(cfg, f, indent=2, sort_keys=True)
            f.write("\n")
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, CONFIG_PATH)
    except (OSError, TypeError, ValueError) as exc:
        with contextlib.suppress(OSError):
            os.unlink(tmp_name)
        raise ConfigSaveError(f"Could not write tabber settings to {CONFIG_PATH}: {exc}") from exc
    logger.debug("Saved settings to %s", CONFIG_PATH)


def _defaults() -> dict:
    return {k: _copy_value(v) for k, v in DEFAULTS.items()}


def _copy_value(value):
    return list(value) if isinstance(value, list) else value


def conversion_options(cfg: dict, tab_size: int | None = None) -> ConversionOptions:
    """Resolve settings into the options the converter takes.

    An explicit ``tab_size`` wins over the configured one; anything that is
    not a positive integer falls back to the default width.
    """

    width = tab_size if tab_size is not None else cfg.get("tab_size")
    if isinstance(width, bool) or not isinstance(width, int) or width < 1:
        width = DEFAULT_TAB_WIDTH
    return ConversionOptions(
        tab_width=width,
        preserve_indentation_in_empty_lines=bool(
            cfg.get("preserve_indentation_in_empty_lines", True)
        ),
        only_leading_spaces=True,
        preserve_literals=bool(cfg.get("preserve_literals", True)),
    )


def language_for_path(path: str) -> str:
    ext = os.path.splitext(path)[1].lower()
    return LANGUAGE_BY_EXTENSION.get(ext, ext.lstrip(".") or "plaintext")


def should_process_file(path: str, cfg: dict) -> bool:
    language = language_for_path(path)
    include_only = cfg.get("include_languages_only") or []
    if include_only:
        return language in include_only
    return language not in (cfg.get("excluded_languages") or [])
