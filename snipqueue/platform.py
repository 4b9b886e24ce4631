"""Platform glue: data paths and the system clipboard.

Detects the runtime platform once at import time.  Everything that
touches the OS clipboard goes through :func:`copy_to_clipboard`.
"""

from __future__ import annotations

import base64
import platform
import shutil
import subprocess
import sys
from pathlib import Path

from .log import logger

_system = platform.system()  # "Linux", "Darwin", "Windows"

try:
    _uname_release = platform.uname().release.lower()
except OSError:
    _uname_release = ""

IS_WINDOWS = _system == "Windows"
IS_MACOS = _system == "Darwin"
IS_LINUX = _system == "Linux"
IS_WSL = IS_LINUX and "microsoft" in _uname_release

# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------


def snipqueue_home() -> Path:
    """Return ``~/.snipqueue``, where the queue and preferences live."""
    return Path.home() / ".snipqueue"


def snipqueue_file(name: str) -> Path:
    return snipqueue_home() / name


# ---------------------------------------------------------------------------
# Clipboard
# ---------------------------------------------------------------------------


def copy_to_clipboard(text: str, *, system: bool = True) -> bool:
    """Copy *text* to the system clipboard.

    Prefers the platform-native tool; falls back to an OSC 52 escape on
    stdout when no tool is available (works in most modern terminals and
    over SSH, but cannot report whether the terminal honoured it).
    With ``system=False`` only the OSC 52 escape is used.
    """
    if not system:
        return _clip_osc52(text)
    if IS_WSL:
        copied = _clip_exe(text, "utf-16-le")
    elif IS_WINDOWS:
        copied = _clip_exe(text, "utf-8")
    elif IS_MACOS:
        copied = _run_clip_tool(["pbcopy"], text)
    else:
        copied = _clip_linux(text)
    return copied or _clip_osc52(text)


def _clip_osc52(text: str) -> bool:
    try:
        encoded = base64.b64encode(text.encode("utf-8")).decode("ascii")
        sys.stdout.write(f"\033]52;c;{encoded}\a")
        sys.stdout.flush()
        return True
    except (OSError, ValueError):
        logger.debug("OSC 52 clipboard write failed", exc_info=True)
        return False


def _clip_exe(text: str, encoding: str) -> bool:
    """Windows and WSL: clip.exe (WSL needs UTF-16LE input)."""
    if not shutil.which("clip.exe"):
        return False
    try:
        proc = subprocess.Popen(
            ["clip.exe"],
            stdin=subprocess.PIPE,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
        proc.communicate(text.encode(encoding))
        return proc.returncode == 0
    except (subprocess.SubprocessError, OSError):
        logger.debug("clip.exe clipboard copy failed", exc_info=True)
        return False


def _run_clip_tool(cmd: list[str], text: str) -> bool:
    if not shutil.which(cmd[0]):
        return False
    try:
        subprocess.run(cmd, input=text.encode("utf-8"), check=True, timeout=2)
        return True
    except (subprocess.SubprocessError, OSError):
        logger.debug("Clipboard via %s failed", cmd[0], exc_info=True)
        return False


def _clip_linux(text: str) -> bool:
    """Linux: try wl-copy (Wayland), xclip, xsel."""
    for cmd in (
        ["wl-copy"],
        ["xclip", "-selection", "clipboard"],
        ["xsel", "--clipboard", "--input"],
    ):
        if _run_clip_tool(cmd, text):
            return True
    return False
