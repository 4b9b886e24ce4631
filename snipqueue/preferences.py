"""User preferences for snipqueue.

Loads settings from ~/.snipqueue/preferences.yaml.
Falls back to sensible defaults if the file doesn't exist or is invalid.
Creates a default file on first run so users can discover and edit it.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from .log import logger
from .platform import snipqueue_file

PREFS_PATH = snipqueue_file("preferences.yaml")
DEFAULT_STORE_PATH = snipqueue_file("queue.json")

_DEFAULT_YAML = """\
# snipqueue preferences
# Delete this file to reset to defaults.

storage:
  path: ""                       # queue file (empty = ~/.snipqueue/queue.json)

export:
  use_system_clipboard: true     # false = copy through the terminal (OSC 52) only

display:
  show_used: true                # keep spent snippets visible until cleared
  show_timestamps: false         # show creation time next to each snippet
"""


@dataclass
class StoragePreferences:
    """Where the queue is persisted."""

    path: str = ""

    def resolve(self) -> Path:
        return Path(self.path).expanduser() if self.path else DEFAULT_STORE_PATH


@dataclass
class ExportPreferences:
    use_system_clipboard: bool = True


@dataclass
class DisplayPreferences:
    """Display settings for the queue view."""

    show_used: bool = True
    show_timestamps: bool = False


@dataclass
class Preferences:
    """Top-level preferences."""

    storage: StoragePreferences = field(default_factory=StoragePreferences)
    export: ExportPreferences = field(default_factory=ExportPreferences)
    display: DisplayPreferences = field(default_factory=DisplayPreferences)


def load_preferences(path: Path | None = None) -> Preferences:
    """Load preferences from YAML file.

    Falls back to defaults if the file doesn't exist or is invalid.
    Creates a default preferences file on first run.
    """
    path = path or PREFS_PATH
    prefs = Preferences()

    if path.exists():
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
            if not isinstance(data, dict):
                raise ValueError("preferences root must be a mapping")
            if isinstance(data.get("storage"), dict):
                sdata = data["storage"]
                if "path" in sdata:
                    prefs.storage.path = str(sdata["path"] or "")
            if isinstance(data.get("export"), dict):
                edata = data["export"]
                if "use_system_clipboard" in edata:
                    prefs.export.use_system_clipboard = bool(
                        edata["use_system_clipboard"]
                    )
            if isinstance(data.get("display"), dict):
                ddata = data["display"]
                if "show_used" in ddata:
                    prefs.display.show_used = bool(ddata["show_used"])
                if "show_timestamps" in ddata:
                    prefs.display.show_timestamps = bool(ddata["show_timestamps"])
        except (OSError, ValueError, yaml.YAMLError):
            logger.warning("invalid preferences file %s, using defaults", path, exc_info=True)
            return Preferences()
    else:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(_DEFAULT_YAML, encoding="utf-8")
        except OSError:
            logger.debug("could not write default preferences to %s", path, exc_info=True)

    return prefs


def save_show_used(enabled: bool, path: Path | None = None) -> None:
    """Persist the show_used display preference.

    Surgically updates only the show_used value, preserving the rest of the
    file (including user comments) as-is.
    """
    path = path or PREFS_PATH
    try:
        if path.exists():
            text = path.read_text(encoding="utf-8")
        else:
            path.parent.mkdir(parents=True, exist_ok=True)
            text = _DEFAULT_YAML

        value = "true" if enabled else "false"
        if re.search(r"^\s+show_used:", text, re.MULTILINE):
            text = re.sub(
                r"^(\s+show_used:)\s*\S+",
                f"\\1 {value}",
                text,
                count=1,
                flags=re.MULTILINE,
            )
        elif re.search(r"^display:", text, re.MULTILINE):
            text = re.sub(
                r"^(display:.*)$",
                f"\\1\n  show_used: {value}",
                text,
                count=1,
                flags=re.MULTILINE,
            )
        else:
            text = text.rstrip() + f"\n\ndisplay:\n  show_used: {value}\n"

        path.write_text(text, encoding="utf-8")
    except OSError:
        logger.debug("could not save show_used to %s", path, exc_info=True)
