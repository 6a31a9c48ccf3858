"""EDL compiler — lowers an EditDecisionList into one FFmpeg filter graph.

Steps:
1. Resolve layouts into closed spans (segments)
2. Trim each segment and apply its layout; trim matching audio
3. Chain segments with xfade (transitions) or concat (cuts), tracking
   video and audio output durations separately
4. Record each segment's output-time range (zoom table)
5. Chain effects onto the merged video
6. Overlay b-roll inputs
7. Finish audio and build the output arguments

Single pass, no I/O. Layout contiguity is not re-checked here: run
``EdlAccumulator.validate()`` first.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field

from vidpipe.edl.effects import EffectContext, audio_fade_out, compile_broll, compile_effect
from vidpipe.edl.escape import fmt_time
from vidpipe.edl.labels import LabelAllocator, ref
from vidpipe.edl.layouts import LayoutContext, compile_layout
from vidpipe.edl.timeline import Span, resolve_layout_spans
from vidpipe.edl.transitions import compile_transition, xfade_settings
from vidpipe.edl.zoom import ZoomSegment
from vidpipe.models.config import CompilerConfig
from vidpipe.models.edl import (
    BOUNDARY_TOLERANCE,
    BRollParams,
    EditDecision,
    EditDecisionList,
    WebcamRegion,
)
from vidpipe.utils.progress import log_debug, log_step


@dataclass
class CompileResult:
    """Everything needed to run the compiled EDL through FFmpeg."""

    filter_complex: str
    output_args: list[str]
    input_args: list[str] = field(default_factory=list)  # extra -i pairs (b-roll)
    passes: int = 1
    estimated_duration: float | None = None  # seconds, before speed effects
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class _Chain:
    """Result of joining all segments."""

    video: str
    audio: str
    video_duration: float
    audio_duration: float
    zoom_table: list[ZoomSegment]


def compile_edl(edl: EditDecisionList, config: CompilerConfig | None = None) -> CompileResult:
    """Compile an EDL into a single-pass filter graph plus FFmpeg arguments."""
    config = config or CompilerConfig()
    meta = edl.metadata
    out_w = meta.output_width or config.default_output_width
    out_h = meta.output_height or config.default_output_height
    source_width = meta.source_width or config.default_source_width
    source_height = meta.source_height or config.default_source_height
    source_duration = meta.source_duration or config.fallback_source_duration
    fps = f"{meta.output_fps or config.frame_rate:g}"

    layouts, transitions, effects = edl.layouts, edl.transitions, edl.effects

    log_step(
        "Compile",
        f"{len(layouts)} layouts, {len(transitions)} transitions, {len(effects)} effects "
        f"(webcam: {'detected' if edl.webcam_region else 'none'}, output {out_w}x{out_h})",
    )
    for d in edl.decisions:
        log_debug("Compile", f"decision {d.id}: {d.tool} t={d.describe_range()} params={d.params}")

    labels = LabelAllocator()
    parts: list[str] = []

    spans = resolve_layout_spans(layouts, source_duration)

    if not spans:
        passthrough = labels.new("v")
        parts.append(f"[0:v]copy{ref(passthrough)}")
        video: str = passthrough
        audio: str | None = None
        duration = meta.source_duration
        zoom_table: list[ZoomSegment] = []
    else:
        ctx = LayoutContext(
            out_w=out_w,
            out_h=out_h,
            webcam=edl.webcam_region,
            source_width=source_width,
            target_aspect_ratio=meta.target_aspect_ratio,
        )
        seg_video: list[str] = []
        seg_audio: list[str] = []

        for i, span in enumerate(spans):
            trim, v, a = labels.new("trim"), labels.new("v"), labels.new("a")
            start, end = fmt_time(span.start), fmt_time(span.end)

            parts.append(f"[0:v]trim=start={start}:end={end},setpts=PTS-STARTPTS,fps={fps}{ref(trim)}")
            parts.append(compile_layout(span.tool, span.params, ctx, trim, v, labels))
            parts.append(f"[0:a]atrim=start={start}:end={end},asetpts=PTS-STARTPTS{ref(a)}")
            log_debug("Compile", f"segment {i} ({span.tool}) {start}-{end} -> [{v}] [{a}]")

            seg_video.append(v)
            seg_audio.append(a)

        chain = _chain_segments(
            spans, seg_video, seg_audio, transitions, labels, parts,
            webcam=edl.webcam_region, source_width=source_width, fps=fps,
        )
        video, audio = chain.video, chain.audio
        duration = chain.video_duration
        zoom_table = chain.zoom_table

    # Effects, in declared order
    effect_ctx = EffectContext(
        zoom_table=zoom_table,
        font_path=meta.font_path,
        source_width=source_width,
        source_height=source_height,
    )
    filters: list[str] = []
    fade_out: EditDecision | None = None

    for effect in effects:
        if effect.tool == "b_roll":
            continue
        if effect.tool == "fade_to_black":
            if fade_out is not None:
                effect_ctx.warn(f"Extra fade_to_black {effect.id} ignored (using {fade_out.id})")
                continue
            fade_out = effect
        lowered = compile_effect(effect, effect_ctx)
        if lowered:
            log_debug("Compile", f"effect {effect.id} ({effect.tool}): {lowered}")
            filters.append(lowered)

    if filters:
        vout = labels.named("vout")
        parts.append(f"{ref(video)}{','.join(filters)}{ref(vout)}")
        video = vout

    # b-roll: one extra input each, indices follow the main video (0)
    input_args: list[str] = []
    input_index = 1
    for effect in effects:
        if effect.tool != "b_roll":
            continue
        image_path = BRollParams.parse(effect.params).image_path
        if not image_path:
            effect_ctx.warn(f"b_roll {effect.id} has no imagePath, skipping")
            continue
        input_args.extend(["-i", image_path])
        fragments, video = compile_broll(effect, input_index, video, labels, out_w, out_h)
        parts.extend(fragments)
        input_index += 1

    # Audio: segment-trimmed when layouts exist, raw otherwise
    aout = labels.named("aout")
    parts.append(f"{ref(audio) if audio else '[0:a]'}aresample=async=1{ref(aout)}")
    audio_out = aout
    if fade_out is not None:
        afaded = labels.named("afaded")
        parts.append(audio_fade_out(fade_out, aout, afaded))
        audio_out = afaded

    filter_complex = ";\n".join(parts)
    output_args = [
        "-map", ref(video),
        "-map", ref(audio_out),
        "-c:v", config.video_codec,
        "-pix_fmt", config.pixel_format,
        "-preset", config.preset,
        "-crf", str(config.crf),
        "-c:a", config.audio_codec,
        "-b:a", config.audio_bitrate,
    ]

    log_step(
        "Compile",
        f"{len(parts)} filter parts, {len(filter_complex)} chars, "
        f"map {ref(video)} + {ref(audio_out)}",
    )
    log_debug("Compile", f"filter_complex:\n{filter_complex}")

    return CompileResult(
        filter_complex=filter_complex,
        output_args=output_args,
        input_args=input_args,
        passes=1,
        estimated_duration=duration,
        warnings=effect_ctx.warnings,
    )


def _transition_at(transitions: list[EditDecision], boundary: float) -> EditDecision | None:
    return next(
        (t for t in transitions if abs(t.start_time - boundary) < BOUNDARY_TOLERANCE),
        None,
    )


def _chain_segments(
    spans: list[Span],
    seg_video: list[str],
    seg_audio: list[str],
    transitions: list[EditDecision],
    labels: LabelAllocator,
    parts: list[str],
    *,
    webcam: WebcamRegion | None,
    source_width: int,
    fps: str,
) -> _Chain:
    """Join segments left to right.

    A crossfade overlaps the tail of the running output with the head of
    the next segment, so it shortens the video by its duration. Audio is
    never blended: the running audio is trimmed by the same amount and then
    concatenated, keeping both streams the same length.
    """

    def zoom_segment(start: float, span: Span) -> ZoomSegment:
        return ZoomSegment(
            concat_start=start,
            concat_end=start + span.duration,
            tool=span.tool,
            params=span.params,
            webcam_region=webcam,
            source_width=source_width,
        )

    prev_v, prev_a = seg_video[0], seg_audio[0]
    video_duration = audio_duration = spans[0].duration
    table = [zoom_segment(0.0, spans[0])]

    for i in range(1, len(spans)):
        span = spans[i]
        is_last = i == len(spans) - 1
        out_v = labels.named("vmerged") if is_last else labels.new("chain")
        out_a = labels.named("amerged") if is_last else labels.new("achain")

        transition = _transition_at(transitions, span.start)
        settings = xfade_settings(transition) if transition is not None else None

        if settings is not None:
            _, blend = settings
            offset = max(0.0, video_duration - blend)
            xfade = compile_transition(transition, prev_v, seg_video[i], out_v, offset)
            parts.append(xfade)
            log_debug("Compile", f"boundary {i} {transition.tool}: offset={fmt_time(offset)} {xfade}")
            seg_start = offset
            video_duration = offset + span.duration

            trimmed_end = max(0.0, audio_duration - blend)
            atrim = labels.new("atrim")
            parts.append(f"{ref(prev_a)}atrim=end={fmt_time(trimmed_end)},asetpts=PTS-STARTPTS{ref(atrim)}")
            parts.append(f"{ref(atrim)}{ref(seg_audio[i])}concat=n=2:v=0:a=1{ref(out_a)}")
            audio_duration = trimmed_end + span.duration
        else:
            log_debug("Compile", f"boundary {i} hard cut: [{prev_v}]+[{seg_video[i]}] -> [{out_v}]")
            seg_start = video_duration
            # concat resets the timebase; re-normalize so a later xfade lines up
            concat_out = out_v if is_last else labels.new("concatraw")
            parts.append(f"{ref(prev_v)}{ref(seg_video[i])}concat=n=2:v=1:a=0{ref(concat_out)}")
            if not is_last:
                parts.append(f"{ref(concat_out)}fps={fps}{ref(out_v)}")
            video_duration += span.duration

            parts.append(f"{ref(prev_a)}{ref(seg_audio[i])}concat=n=2:v=0:a=1{ref(out_a)}")
            audio_duration += span.duration

        table.append(zoom_segment(seg_start, span))
        prev_v, prev_a = out_v, out_a

    return _Chain(
        video=prev_v,
        audio=prev_a,
        video_duration=video_duration,
        audio_duration=audio_duration,
        zoom_table=table,
    )
