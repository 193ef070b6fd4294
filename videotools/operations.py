"""User-facing media operations.

Each :class:`VideoTools` method is one blocking, all-or-nothing unit of
work: it builds an FFMPEG command, runs it through the injected
:class:`ProcessManager` and reports a boolean (or, for thumbnails, the
output path).  Re-encoding operations render into a temp artifact that is
only moved to ``output`` once it is known to be good, so a failed run never
leaves a partial file behind.
"""

import logging
import shutil
from pathlib import Path
from typing import Optional, Sequence

from .config import VideoToolsConfig
from .duration import parse_duration
from .executor.command_builder import CommandBuilder
from .executor.filter_graph import build_scale_filter, build_watermark_graph
from .executor.process_manager import ProcessManager, ProcessResult
from .sanitize import escape_concat_path, require_file
from .temp_artifacts import TempArtifactManager, TempScope
from .video.analyzer import VideoAnalyzer
from .video.formats import (
    AudioCodec,
    AudioFormat,
    OutputFormat,
    audio_profile_for,
)

NORMALIZED_PREFIX = "normalized_"
CONCAT_LIST_PREFIX = "ffmpeg_merge_"
RENDER_PREFIX = "render_"


def _non_empty(path: str | Path) -> bool:
    path = Path(path)
    return path.is_file() and path.stat().st_size > 0


def _output_dir_exists(output: str | Path) -> bool:
    return Path(output).parent.is_dir()


class VideoTools:
    """Trim, thumbnail, extract audio, merge, watermark and resize media files."""

    def __init__(
        self,
        process_manager: Optional[ProcessManager] = None,
        temp_manager: Optional[TempArtifactManager] = None,
        config: Optional[VideoToolsConfig] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize the operations.

        Args:
            process_manager: Executor for FFMPEG commands. Built from
                ``config`` if not provided.
            temp_manager: Allocator for intermediate files. Built from
                ``config`` if not provided.
            config: Profiles and engine settings. Defaults apply if None.
            logger: Receives diagnostics. Defaults to the ``videotools``
                logger.
        """
        self.config = config or VideoToolsConfig()
        self.process_manager = process_manager or ProcessManager(
            ffmpeg_path=self.config.ffmpeg_path,
            timeout=self.config.timeout,
        )
        self.temp_manager = temp_manager or TempArtifactManager(self.config.temp_dir)
        self.log = logger or logging.getLogger("videotools")
        self.last_result: Optional[ProcessResult] = None
        self._analyzer: Optional[VideoAnalyzer] = None

    @classmethod
    def from_config(
        cls,
        config: VideoToolsConfig,
        logger: Optional[logging.Logger] = None,
    ) -> "VideoTools":
        """Wire an instance entirely from configuration."""
        return cls(config=config, logger=logger)

    @property
    def analyzer(self) -> VideoAnalyzer:
        """ffprobe-backed analyzer using the configured ``ffprobe_path``.

        Created on first use so a missing ffprobe only matters to callers
        that analyze media.

        Raises:
            RuntimeError: If ffprobe is not configured and not on PATH.
        """
        if self._analyzer is None:
            self._analyzer = VideoAnalyzer(self.config.ffprobe_path)
        return self._analyzer

    # ------------------------------------------------------------------ #
    #   Execution helpers                                                  #
    # ------------------------------------------------------------------ #

    def _run(self, builder: CommandBuilder) -> ProcessResult:
        command = builder.build()
        self.log.debug("Executing command: %s", command.to_string())
        result = self.process_manager.execute(command)
        self.last_result = result
        if not result.success:
            self.log.error(
                "FFMPEG failed with return code %d: %s",
                result.return_code, result.error_message,
            )
        return result

    def _render(
        self,
        scope: TempScope,
        builder: CommandBuilder,
        output: str | Path,
    ) -> bool:
        """Run ``builder`` into a temp file and promote it to ``output``.

        The builder must not have an output yet.  The temp file keeps the
        output's suffix so FFMPEG picks the same muxer.
        """
        if not _output_dir_exists(output):
            self.log.error("Output directory does not exist: %s", Path(output).parent)
            return False

        rendered = scope.create(suffix=Path(output).suffix, prefix=RENDER_PREFIX)
        builder.output(rendered)

        result = self._run(builder)
        if not result.success:
            return False
        if not _non_empty(rendered):
            self.log.error("FFMPEG reported success but %s is missing or empty", output)
            return False

        try:
            scope.promote(rendered, output)
        except OSError as e:
            self.log.error("Could not move %s to %s: %s", rendered, output, e)
            return False
        return True

    # ------------------------------------------------------------------ #
    #   Operations                                                         #
    # ------------------------------------------------------------------ #

    def trim(
        self,
        input: str | Path,
        output: str | Path,
        start: str,
        duration: str,
    ) -> bool:
        """Cut ``duration`` of video starting at ``start``.

        Args:
            input: Path to input video.
            output: Path where the trimmed video will be saved.
            start: Start time (e.g. ``"0:01:20"``).
            duration: Length to keep (e.g. ``"0:00:15"``).

        Returns:
            True if the trimmed file was written.
        """
        start_seconds = parse_duration(start)
        duration_seconds = parse_duration(duration)
        self.log.debug(
            "Trimming %s from %ds for %ds", input, start_seconds, duration_seconds,
        )

        builder = CommandBuilder()
        builder.input(input)
        builder.trim(start=start_seconds, duration=duration_seconds)
        builder.profile(self.config.render)

        with self.temp_manager.scope() as scope:
            return self._render(scope, builder, output)

    def thumbnail(
        self,
        input_path: str | Path,
        output_path: str | Path,
        time: str = "1",
    ) -> str:
        """Save the frame at ``time`` as an image.

        Returns ``output_path`` whether or not extraction succeeded; check
        the file (or ``last_result``) to find out.
        """
        seconds = parse_duration(time)

        builder = CommandBuilder()
        builder.input(input_path, ["-ss", str(seconds)])
        builder.frames(1)
        builder.output(output_path)

        result = self._run(builder)
        if not result.success:
            self.log.warning("Thumbnail at %ds of %s was not written", seconds, input_path)

        return str(output_path)

    def extract_audio(
        self,
        input: str | Path,
        output: str | Path,
        format: str = "mp3",
    ) -> bool:
        """Extract the audio track.

        ``format`` is ``"mp3"`` or ``"wav"``; anything else is encoded as
        mp3.
        """
        builder = CommandBuilder()
        builder.input(input)
        builder.no_video()
        builder.profile(OutputFormat(audio=audio_profile_for(format)))

        with self.temp_manager.scope() as scope:
            return self._render(scope, builder, output)

    def merge(self, inputs: Sequence[str | Path], output: str | Path) -> bool:
        """Concatenate videos in order.

        Inputs are first normalized to the canonical profile so the final
        join can use stream copy.  Intermediate files are always removed.

        Returns:
            False for an empty list or any engine failure.

        Raises:
            FileNotFoundError: If any input does not exist.
        """
        inputs = list(inputs)
        if not inputs:
            self.log.warning("Merge called without inputs")
            return False

        sources = [require_file(path) for path in inputs]

        # Single video - just copy
        if len(sources) == 1:
            try:
                shutil.copyfile(sources[0], output)
            except OSError as e:
                self.log.error("Could not copy %s to %s: %s", sources[0], output, e)
                return False
            return Path(output).exists()

        # Fail before spending a transcode per input
        if not _output_dir_exists(output):
            self.log.error("Output directory does not exist: %s", Path(output).parent)
            return False

        with self.temp_manager.scope() as scope:
            normalized = []
            for index, source in enumerate(sources):
                target = scope.create(suffix=".mp4", prefix=NORMALIZED_PREFIX)
                if not self._normalize(source, target):
                    self.log.error(
                        "Merge aborted: could not normalize input %d (%s)", index, source,
                    )
                    return False
                normalized.append(target)

            list_file = scope.create(suffix=".txt", prefix=CONCAT_LIST_PREFIX)
            with open(list_file, "w", encoding="utf-8") as fh:
                for path in normalized:
                    fh.write(f"file {escape_concat_path(path)}\n")

            builder = CommandBuilder()
            builder.input(list_file, ["-f", "concat", "-safe", "0"])
            builder.output_options("-c", "copy")
            return self._render(scope, builder, output)

    def _normalize(self, source: Path, target: Path) -> bool:
        builder = CommandBuilder()
        builder.input(source)
        builder.profile(self.config.canonical)
        builder.output_options("-avoid_negative_ts", "make_zero")
        builder.output(target)
        return self._run(builder).success and _non_empty(target)

    def add_watermark(
        self,
        input: str | Path,
        output: str | Path,
        watermark_path: str | Path,
        position: Optional[str] = None,
        x: int = 10,
        y: int = 10,
        width: Optional[int] = None,
        height: Optional[int] = None,
        opacity: float = 1.0,
    ) -> bool:
        """Overlay an image onto a video.

        Args:
            input: Path to input video.
            output: Path where the watermarked video will be saved.
            watermark_path: Path to the watermark image.
            position: top-left, top-right, bottom-left, bottom-right or
                center. Unset or unknown uses ``x``/``y`` from the top-left.
            x: Horizontal margin in pixels.
            y: Vertical margin in pixels.
            width: Watermark width (None = keep aspect from height).
            height: Watermark height (None = keep aspect from width).
            opacity: 0 = transparent, 1 = opaque.

        Returns:
            True if a non-empty output was written. Every failure,
            including missing files, is reported as False.
        """
        try:
            require_file(input, "Input video file")
            require_file(watermark_path, "Watermark file")

            self.log.debug("Opening video: %s", input)
            self.log.debug("Watermark path: %s", watermark_path)

            graph = build_watermark_graph(
                position=position, x=x, y=y,
                width=width, height=height, opacity=opacity,
            )
            self.log.debug("Filter complex: %s", graph.to_string())

            builder = CommandBuilder()
            builder.input(input)
            builder.input(watermark_path)
            builder.complex_filter(graph)
            builder.map(graph.map_label(), "0:a?")
            builder.profile(OutputFormat(
                video=self.config.render.video,
                audio=AudioFormat(codec=AudioCodec.COPY),
            ))

            with self.temp_manager.scope() as scope:
                success = self._render(scope, builder, output)

            self.log.debug(
                "Watermark %s", "applied successfully" if success else "failed",
            )
            return success

        except (OSError, TypeError, ValueError) as e:
            self.log.error("Watermark failed: %s", e)
            return False

    def resize(
        self,
        input: str | Path,
        output: str | Path,
        width: int,
        height: int,
        keep_aspect: bool = True,
    ) -> bool:
        """Scale a video.

        With ``keep_aspect`` the video is fitted inside ``width`` x
        ``height`` and never upscaled; otherwise it is stretched to exactly
        that size.
        """
        builder = CommandBuilder()
        builder.input(input)
        builder.vf(build_scale_filter(width, height, keep_aspect))

        with self.temp_manager.scope() as scope:
            return self._render(scope, builder, output)
