"""Filter-graph string encoding shared by every lowering step.

Values inside ``-filter_complex`` pass two parsers: the filtergraph parser
(splits on ``,`` ``;`` ``[`` ``]``, handles ``'`` and ``\\``) and then the
filter option parser (splits on ``:``, handles ``'`` and ``\\``).
"""

from __future__ import annotations


def fmt_time(seconds: float) -> str:
    """Seconds with millisecond precision, as FFmpeg options expect."""
    return f"{seconds:.3f}"


def escape_path(path: str) -> str:
    """Escape a file path for a filter option (e.g. ``fontfile=``).

    Backslashes become forward slashes; ``:`` is escaped for both levels so a
    Windows drive letter survives: ``C:`` → ``C\\\\:``.
    """
    return path.replace("\\", "/").replace(":", "\\\\:")


def escape_drawtext(text: str) -> str:
    """Escape text for an unquoted drawtext ``text=`` value."""
    return (
        text
        .replace("\\", "\\\\\\\\")  # both levels
        .replace("'", "\\\\\\'")  # both levels
        .replace(":", "\\\\:")  # both levels
        .replace(",", "\\,")  # filtergraph level only
        .replace(";", "\\;")
        .replace("[", "\\[")
        .replace("]", "\\]")
    )


def escape_expr(expr: str) -> str:
    """Escape commas in an unquoted option expression: ``min(a,b)`` → ``min(a\\,b)``."""
    return expr.replace(",", "\\,")


def ffmpeg_color(color: str) -> str:
    """``#RRGGBB[AA]`` → ``0xRRGGBB[AA]``; named colors pass through."""
    return color.replace("#", "0x", 1)


def enable_window(start: float, end: float | None) -> str:
    """Timeline gate for a filter active from ``start`` to ``end`` (or forever)."""
    if end is None:
        return f"enable='gte(t,{fmt_time(start)})'"
    return f"enable='between(t,{fmt_time(start)},{fmt_time(end)})'"
