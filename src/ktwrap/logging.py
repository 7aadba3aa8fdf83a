# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""User-facing logging helpers with optional colour, emoji and CI annotations."""

from __future__ import annotations

from rich.text import Text

from .console import detect_stderr_tty, detect_tty, get_console_manager


def emoji(symbol: str, enable: bool) -> str:
    """Select an emoji symbol based on the caller's preference.

    Args:
        symbol: Emoji text to include in the output.
        enable: Flag indicating whether emoji output is desired.

    Returns:
        str: Emoji symbol when enabled, otherwise an empty string.
    """

    return symbol if enable else ""


def _print_line(
    msg: str,
    *,
    style: str | None,
    use_emoji: bool,
    use_color: bool | None = None,
    stderr: bool = False,
) -> None:
    """Render ``msg`` to the console using shared styling helpers.

    Args:
        msg: Message text to print to the console.
        style: Rich style name to apply when colour output is active.
        use_emoji: Flag indicating whether emoji output is desired.
        use_color: Optional explicit colour flag overriding TTY detection.
        stderr: Write to standard error rather than standard output.
    """

    tty = detect_stderr_tty() if stderr else detect_tty()
    color_enabled = tty if use_color is None else use_color
    console = get_console_manager().get(color=color_enabled, emoji=use_emoji, stderr=stderr)
    text = Text(msg)
    if style and color_enabled:
        text.stylize(style)
    console.print(text)


def info(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Emit an informational message."""

    prefix = emoji("ℹ️ ", use_emoji)
    _print_line(f"{prefix}{msg}", style="cyan", use_emoji=use_emoji, use_color=use_color)


def ok(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Emit a success message."""

    prefix = emoji("✅ ", use_emoji)
    _print_line(f"{prefix}{msg}", style="green", use_emoji=use_emoji, use_color=use_color)


def fail(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Emit an error message on standard error."""

    prefix = emoji("❌ ", use_emoji)
    _print_line(
        f"{prefix}{msg}",
        style="bold red",
        use_emoji=use_emoji,
        use_color=use_color,
        stderr=True,
    )


def annotation(msg: str, *, level: str = "error", title: str | None = None) -> str:
    """Return ``msg`` as a single-line GitHub Actions workflow command.

    Args:
        msg: Message text; embedded newlines are escaped.
        level: Annotation level (``error``, ``warning`` or ``notice``).
        title: Optional annotation title.

    Returns:
        str: Workflow command such as ``::error title=ktwrap::message``.
    """

    escaped = msg.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")
    properties = f" title={title}" if title else ""
    return f"::{level}{properties}::{escaped}"


def report_error(msg: str, *, ci: bool, title: str | None = None) -> None:
    """Report a fatal error in the form best suited to the current context.

    Under CI the message becomes a workflow annotation on stdout. On an
    interactive terminal it is rendered in colour on stderr, and otherwise as
    a plain ``error:`` line on stderr.
    """

    if ci:
        print(annotation(msg, title=title), flush=True)
        return
    if detect_stderr_tty():
        fail(msg, use_emoji=True, use_color=True)
        return
    _print_line(f"error: {msg}", style=None, use_emoji=False, use_color=False, stderr=True)


__all__ = ["annotation", "emoji", "fail", "info", "ok", "report_error"]
