"""Effect lowering — time-gated overlays on the merged video."""

from __future__ import annotations

from dataclasses import dataclass, field

from vidpipe.edl.escape import (
    enable_window,
    escape_drawtext,
    escape_expr,
    escape_path,
    ffmpeg_color,
    fmt_time,
)
from vidpipe.edl.labels import LabelAllocator, ref
from vidpipe.edl.zoom import Rect, ZoomSegment, find_segment, remap_for_zoom, zoom_crop_rect
from vidpipe.models.edl import (
    TEXT_POSITIONS,
    BRollParams,
    EditDecision,
    FadeToBlackParams,
    HighlightRegionParams,
    SlowMotionParams,
    TextOverlayParams,
)
from vidpipe.utils.progress import log_debug, log_warning

TEXT_ANIM_SECONDS = 0.4
SLIDE_UP_PX = 60
POP_SCALE = 1.15
DRAW_SECONDS = 0.5
MIN_SPEED, MAX_SPEED = 0.25, 4.0
PIP_MARGIN = 10

# Shorthands the planning agent tends to send
POSITION_SHORTHANDS = {
    "top": "top-center",
    "bottom": "bottom-center",
    "left": "bottom-left",
    "right": "bottom-right",
}

PIP_ANCHORS = {
    "top-left": f"x={PIP_MARGIN}:y={PIP_MARGIN}",
    "top-right": f"x=W-w-{PIP_MARGIN}:y={PIP_MARGIN}",
    "bottom-left": f"x={PIP_MARGIN}:y=H-h-{PIP_MARGIN}",
    "bottom-right": f"x=W-w-{PIP_MARGIN}:y=H-h-{PIP_MARGIN}",
}


@dataclass
class EffectContext:
    """State effect lowering reads (zoom table) and writes (warnings)."""

    zoom_table: list[ZoomSegment] = field(default_factory=list)
    font_path: str | None = None
    source_width: int = 1920
    source_height: int = 1080
    warnings: list[str] = field(default_factory=list)

    def warn(self, message: str) -> None:
        log_warning(message)
        self.warnings.append(message)


def compile_effect(effect: EditDecision, ctx: EffectContext) -> str | None:
    """Lower one effect to a video filter, or None when it draws nothing.

    ``b_roll`` needs an extra input and is lowered by :func:`compile_broll`.
    """
    if effect.tool == "text_overlay":
        return _text_overlay(effect, ctx)
    if effect.tool == "highlight_region":
        return _highlight_region(effect, ctx)
    if effect.tool == "slow_motion":
        return _slow_motion(effect)
    if effect.tool == "fade_to_black":
        p = FadeToBlackParams.parse(effect.params)
        return (
            f"fade=type=out:start_time={fmt_time(effect.start_time)}"
            f":duration={fmt_time(p.duration)}:color=black"
        )
    return None


def audio_fade_out(effect: EditDecision, in_label: str, out_label: str) -> str:
    """Audio fade matching a ``fade_to_black`` effect."""
    p = FadeToBlackParams.parse(effect.params)
    return (
        f"{ref(in_label)}afade=type=out:start_time={fmt_time(effect.start_time)}"
        f":duration={fmt_time(p.duration)}{ref(out_label)}"
    )


# ---------------------------------------------------------------------------
# text_overlay
# ---------------------------------------------------------------------------


def text_position(position: str, font_size: int, ctx: EffectContext) -> tuple[str, str]:
    """drawtext x/y expressions for a position preset."""
    pad = round(font_size * 0.5)
    position = POSITION_SHORTHANDS.get(position, position)
    if position not in TEXT_POSITIONS:
        ctx.warn(f"Unknown text position '{position}', using bottom-center")
        position = "bottom-center"

    vertical, _, horizontal = position.partition("-")
    if position == "center":
        vertical, horizontal = "center", "center"

    x = {
        "left": f"{pad}",
        "center": "(w-text_w)/2",
        "right": f"w-text_w-{pad}",
    }[horizontal]
    y = {
        "top": f"{pad}",
        "center": "(h-text_h)/2",
        "bottom": f"h-text_h-{pad}",
    }[vertical]
    return x, y


def _text_overlay(effect: EditDecision, ctx: EffectContext) -> str | None:
    p = TextOverlayParams.parse(effect.params)
    if not p.text:
        ctx.warn(f"text_overlay {effect.id} has no text, skipping")
        return None

    start = effect.start_time
    x, y = text_position(p.position, p.font_size, ctx)
    font_size = p.font_size
    alpha = ""

    if p.animation == "fade-in":
        alpha = (
            f":alpha='if(lt(t,{fmt_time(start + TEXT_ANIM_SECONDS)}),"
            f"min(1,(t-{fmt_time(start)})/{fmt_time(TEXT_ANIM_SECONDS)}),1)'"
        )
    elif p.animation == "slide-up":
        y = escape_expr(
            f"if(lt(t,{fmt_time(start + TEXT_ANIM_SECONDS)}),"
            f"{y}+{SLIDE_UP_PX}*(1-(t-{fmt_time(start)})/{fmt_time(TEXT_ANIM_SECONDS)}),{y})"
        )
    elif p.animation == "pop":
        # drawtext can't safely evaluate a per-frame fontsize expression
        font_size = round(p.font_size * POP_SCALE)

    font_file = f":fontfile={escape_path(ctx.font_path)}" if ctx.font_path else ""
    box = f":box=1:boxcolor={ffmpeg_color(p.background_color)}" if p.background_color else ""

    return (
        f"drawtext=text={escape_drawtext(p.text)}:fontsize={font_size}"
        f":fontcolor={ffmpeg_color(p.color)}{font_file}:x={x}:y={y}{box}{alpha}"
        f":{enable_window(start, effect.end_time)}"
    )


# ---------------------------------------------------------------------------
# highlight_region
# ---------------------------------------------------------------------------


def _highlight_region(effect: EditDecision, ctx: EffectContext) -> str | None:
    p = HighlightRegionParams.parse(effect.params)
    if not p.has_region:
        ctx.warn(f"highlight_region {effect.id} has no region, skipping")
        return None

    if max(p.x, p.y, p.width, p.height) <= 1.0:
        box = Rect(p.x, p.y, p.width, p.height)
    else:
        box = Rect(
            p.x / ctx.source_width,
            p.y / ctx.source_height,
            p.width / ctx.source_width,
            p.height / ctx.source_height,
        )

    mid = effect.start_time if effect.end_time is None else (effect.start_time + effect.end_time) / 2
    segment = find_segment(ctx.zoom_table, mid)
    if segment is not None:
        crop = zoom_crop_rect(segment.tool, segment.params, segment.webcam_region, segment.source_width)
        if crop is not None:
            remapped = remap_for_zoom(box, crop)
            if remapped is None:
                ctx.warn(f"highlight_region {effect.id} is outside the zoomed area, dropped")
                return None
            log_debug("Effects", f"{effect.id} remapped for zoom: {box} -> {remapped}")
            box = remapped

    enable = enable_window(effect.start_time, effect.end_time)
    color = ffmpeg_color(p.color)
    x, y = f"iw*{box.x:.3f}", f"ih*{box.y:.3f}"
    w, h = f"iw*{box.w:.3f}", f"ih*{box.h:.3f}"
    thickness = p.border_width

    if p.animation == "pulse":
        # drawbox t= takes no expressions; use the peak thickness
        thickness = p.border_width * 3
    elif p.animation == "draw":
        w = escape_expr(
            f"min({w},({w})*(t-{fmt_time(effect.start_time)})/{fmt_time(DRAW_SECONDS)})"
        )

    drawbox = f"drawbox=x={x}:y={y}:w={w}:h={h}:color={color}:t={thickness}:{enable}"
    if p.dim_outside:
        drawbox = f"drawbox=x=0:y=0:w=iw:h=ih:color=black@0.5:t=fill:{enable},{drawbox}"
    return drawbox


# ---------------------------------------------------------------------------
# slow_motion
# ---------------------------------------------------------------------------


def _slow_motion(effect: EditDecision) -> str:
    p = SlowMotionParams.parse(effect.params)
    speed = min(MAX_SPEED, max(MIN_SPEED, p.speed))
    return f"setpts={1 / speed:.3f}*PTS"


# ---------------------------------------------------------------------------
# b_roll
# ---------------------------------------------------------------------------


def compile_broll(
    effect: EditDecision,
    input_index: int,
    video_label: str,
    labels: LabelAllocator,
    out_w: int,
    out_h: int,
) -> tuple[list[str], str]:
    """Scale input ``input_index`` and overlay it on ``video_label``.

    Returns the filter fragments and the new video label.
    """
    p = BRollParams.parse(effect.params)
    enable = enable_window(effect.start_time, effect.end_time)
    scaled = labels.new("broll")
    out = labels.new("brollout")

    if p.display_mode == "picture-in-picture":
        anchor = PIP_ANCHORS.get(p.pip_position, PIP_ANCHORS["bottom-right"])
        scale = f"scale=iw*{p.pip_size}/100:-1"
        overlay = f"overlay={anchor}:{enable}"
    else:
        scale = f"scale={out_w}:{out_h}"
        overlay = f"overlay=0:0:{enable}"

    fragments = [
        f"[{input_index}:v]{scale}{ref(scaled)}",
        f"{ref(video_label)}{ref(scaled)}{overlay}{ref(out)}",
    ]
    return fragments, out
