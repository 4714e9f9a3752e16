"""Outbound order handoff and the account-number clipboard side channel."""

from __future__ import annotations

import shutil
import subprocess
import webbrowser
from typing import Callable

from lumer_order.debuglog import NULL_LOG, DebugLog
from lumer_order.errors import ClipboardError, HandoffError
from lumer_order.models import Notifier

Copier = Callable[[str], None]

# Tried in order; the first one installed wins.
_CLIPBOARD_COMMANDS: tuple[tuple[str, ...], ...] = (
    ("pbcopy",),
    ("wl-copy",),
    ("xclip", "-selection", "clipboard"),
    ("xsel", "--clipboard", "--input"),
    ("clip",),
)

COPY_OK_MESSAGE = "Nomor rekening berhasil disalin!"
COPY_FAILED_MESSAGE = "Gagal menyalin nomor rekening"


def open_order_link(url: str) -> None:
    """Open the deep link in a new browser tab; HandoffError when nothing accepts it."""
    try:
        opened = webbrowser.open_new_tab(url)
    except webbrowser.Error as exc:
        raise HandoffError(f"Could not open browser: {exc}") from exc
    if not opened:
        raise HandoffError("No browser available to open the order link")


def system_clipboard_copy(text: str) -> None:
    """Copy synchronously through the first available platform clipboard command."""
    for command in _CLIPBOARD_COMMANDS:
        if shutil.which(command[0]) is None:
            continue
        try:
            subprocess.run(command, input=text.encode("utf-8"), check=True, timeout=5)
        except (OSError, subprocess.SubprocessError) as exc:
            raise ClipboardError(f"{command[0]} failed: {exc}") from exc
        return
    raise ClipboardError("No clipboard command found")


class ClipboardService:
    """Copy text with a primary mechanism and a fallback; failures become notifications."""

    def __init__(
        self,
        primary: Copier | None,
        fallback: Copier,
        notify: Notifier,
        log: DebugLog = NULL_LOG,
    ) -> None:
        self.primary = primary
        self.fallback = fallback
        self.notify = notify
        self.log = log

    def copy(self, text: str) -> bool:
        if self.primary is not None:
            try:
                self.primary(text)
            except Exception as exc:
                self.log.write(f"clipboard_primary_failed error={exc!r}")
            else:
                self.notify(COPY_OK_MESSAGE, "information")
                return True

        try:
            self.fallback(text)
        except Exception as exc:
            self.log.write(f"clipboard_fallback_failed error={exc!r}")
            self.notify(COPY_FAILED_MESSAGE, "error")
            return False

        self.notify(COPY_OK_MESSAGE, "information")
        return True
