"""Media metadata extraction using ffprobe."""

import json
import subprocess
import shutil
from pathlib import Path
from typing import Optional
from pydantic import BaseModel


class StreamInfo(BaseModel):
    """Information about a single stream."""
    index: int
    codec_name: str
    codec_type: str
    width: Optional[int] = None
    height: Optional[int] = None
    frame_rate: Optional[float] = None
    sample_rate: Optional[int] = None
    channels: Optional[int] = None
    duration: Optional[float] = None


class VideoMetadata(BaseModel):
    """Container-level metadata plus its streams."""
    file_path: str
    file_size: int
    format_name: str
    duration: float
    streams: list[StreamInfo] = []

    @property
    def video_streams(self) -> list[StreamInfo]:
        return [s for s in self.streams if s.codec_type == "video"]

    @property
    def audio_streams(self) -> list[StreamInfo]:
        return [s for s in self.streams if s.codec_type == "audio"]

    @property
    def primary_video(self) -> Optional[StreamInfo]:
        """Get the primary video stream."""
        streams = self.video_streams
        return streams[0] if streams else None

    @property
    def resolution(self) -> Optional[tuple[int, int]]:
        """Get video resolution as (width, height)."""
        video = self.primary_video
        if video and video.width and video.height:
            return (video.width, video.height)
        return None


class VideoAnalyzer:
    """Analyzes media files using ffprobe."""

    def __init__(self, ffprobe_path: Optional[str] = None):
        """Initialize the analyzer.

        Args:
            ffprobe_path: Path to ffprobe executable. If None, will search PATH.
        """
        self.ffprobe_path = ffprobe_path or shutil.which("ffprobe")
        if not self.ffprobe_path:
            raise RuntimeError("ffprobe not found in PATH")

    def analyze(self, media_path: str | Path) -> VideoMetadata:
        """Analyze a media file and extract metadata.

        Raises:
            FileNotFoundError: If the file doesn't exist.
            RuntimeError: If ffprobe fails to analyze the file.
        """
        media_path = Path(media_path)
        if not media_path.exists():
            raise FileNotFoundError(f"Media file not found: {media_path}")

        cmd = [
            self.ffprobe_path,
            "-v", "quiet",
            "-print_format", "json",
            "-show_format",
            "-show_streams",
            str(media_path),
        ]

        result = subprocess.run(cmd, capture_output=True, text=True)
        if result.returncode != 0:
            raise RuntimeError(f"ffprobe failed: {result.stderr}")

        return self._parse_probe_data(str(media_path), json.loads(result.stdout))

    def duration(self, media_path: str | Path) -> float:
        """Container duration in seconds."""
        return self.analyze(media_path).duration

    def _parse_probe_data(self, file_path: str, data: dict) -> VideoMetadata:
        """Parse ffprobe JSON output into VideoMetadata."""
        format_info = data.get("format", {})
        return VideoMetadata(
            file_path=file_path,
            file_size=int(format_info.get("size", 0)),
            format_name=format_info.get("format_name", "unknown"),
            duration=float(format_info.get("duration", 0)),
            streams=[self._parse_stream(s) for s in data.get("streams", [])],
        )

    def _parse_stream(self, stream: dict) -> StreamInfo:
        frame_rate = None
        if stream.get("r_frame_rate"):
            try:
                num, den = map(int, stream["r_frame_rate"].split("/"))
                frame_rate = num / den if den != 0 else None
            except (ValueError, ZeroDivisionError):
                pass

        return StreamInfo(
            index=stream.get("index", 0),
            codec_name=stream.get("codec_name", "unknown"),
            codec_type=stream.get("codec_type", "unknown"),
            width=stream.get("width"),
            height=stream.get("height"),
            frame_rate=frame_rate,
            sample_rate=int(stream["sample_rate"]) if stream.get("sample_rate") else None,
            channels=stream.get("channels"),
            duration=float(stream["duration"]) if stream.get("duration") else None,
        )
