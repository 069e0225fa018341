from __future__ import annotations

import os
from typing import TYPE_CHECKING, Optional, Sequence

from devtools_cli.config import settings

if TYPE_CHECKING:
    from devtools_cli.menu.model import MenuItem

UI_WIDTH = 72

ANSI_RESET = "\033[0m"
ANSI_BOLD = "\033[1m"
ANSI_DIM = "\033[2m"
ANSI_CYAN = "\033[36m"
ANSI_BLUE = "\033[34m"
ANSI_GREEN = "\033[32m"
ANSI_YELLOW = "\033[33m"
ANSI_RED = "\033[31m"
ANSI_WHITE = "\033[37m"

CURSOR_MARKER = "▶ "
CONTROLS_HINT = "↑/↓ move | Enter select | ← back | q quit"
INSTALL_HINT = " | i install"

STATUS_REQUIREMENT_PREFIX = "Requirement failed:"
STATUS_ERROR_PREFIXES = ("Error:", "Install error:")


def color_enabled() -> bool:
    """Colour is on unless NO_COLOR is set or the setting turns it off."""
    if os.environ.get("NO_COLOR"):
        return False
    return settings.get_bool("color_enabled", default=True)


def normalize_crlf(text: str) -> str:
    normalized = text.replace("\r\n", "\n").replace("\r", "\n")
    return normalized.replace("\n", "\r\n")


class MenuRenderer:
    """Builds full-screen frames for the raw-mode menu.

    Frames use CR+LF line endings because output post-processing is off in
    raw mode.
    """

    def __init__(
        self,
        session_title: str = settings.DEFAULT_SESSION_TITLE,
        *,
        use_color: Optional[bool] = None,
        width: int = UI_WIDTH,
    ) -> None:
        self.session_title = session_title
        self.use_color = color_enabled() if use_color is None else use_color
        self.width = width

    def paint(self, text: str, style: str) -> str:
        if not self.use_color or not style:
            return text
        return f"{style}{text}{ANSI_RESET}"

    def render_menu_screen(
        self,
        *,
        title: str,
        items: Sequence[MenuItem],
        selected_index: int,
        depth: int,
        max_depth: int,
        status: str = "",
        install_available: bool = False,
    ) -> str:
        top_rule = "=" * self.width
        bottom_rule = "-" * self.width
        lines = [
            self.paint(top_rule, ANSI_CYAN),
            self.paint(self.session_title, ANSI_BOLD + ANSI_WHITE),
            f"{self.paint('Menu:', ANSI_BOLD + ANSI_BLUE)} {self.paint(title, ANSI_YELLOW)}",
            f"{self.paint('Depth:', ANSI_BOLD + ANSI_BLUE)} {depth}/{max_depth}",
            self.paint(top_rule, ANSI_CYAN),
            "",
        ]

        for index, item in enumerate(items):
            lines.append(self._render_item(item, index == selected_index))

        lines.extend(["", self.paint(bottom_rule, ANSI_CYAN)])
        controls = CONTROLS_HINT
        if install_available:
            controls += INSTALL_HINT
        lines.append(self.paint(controls, ANSI_DIM))

        if status:
            lines.extend(["", self.format_status(status)])

        return "\r\n".join(lines) + "\r\n"

    def _render_item(self, item: MenuItem, selected: bool) -> str:
        marker = CURSOR_MARKER if selected else "  "
        label = f"{marker}{item.label}"
        line = self.paint(label, ANSI_BOLD + ANSI_GREEN if selected else ANSI_WHITE)
        if item.description:
            line += f" {self.paint('-', ANSI_DIM)} {self.paint(item.description, ANSI_DIM)}"
        return line

    def format_status(self, status: str) -> str:
        color = ANSI_GREEN
        if status.startswith(STATUS_REQUIREMENT_PREFIX):
            color = ANSI_YELLOW
        if status.startswith(STATUS_ERROR_PREFIXES):
            color = ANSI_RED
        lines = normalize_crlf(status).split("\r\n")
        return "\r\n".join(self.paint(line, color) for line in lines)
