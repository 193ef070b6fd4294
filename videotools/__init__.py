"""
videotools: declarative media operations on top of FFMPEG

Trim, thumbnail, extract audio, merge, watermark and resize video files by
building and running ffmpeg command lines, with guaranteed cleanup of
intermediate files.

Example usage:
    tools = VideoTools()
    tools.trim("in.mp4", "clip.mp4", start="0:01:20", duration="15")
    tools.merge(["a.mp4", "b.mov"], "joined.mp4")
    tools.add_watermark("in.mp4", "out.mp4", "logo.png", position="bottom-right", opacity=0.5)
"""

__version__ = "1.0.0"

from .config import VideoToolsConfig, load_config
from .duration import parse_duration
from .executor.process_manager import ProcessManager, ProcessResult
from .operations import VideoTools
from .temp_artifacts import TempArtifactManager

__all__ = [
    "VideoTools",
    "VideoToolsConfig",
    "load_config",
    "parse_duration",
    "ProcessManager",
    "ProcessResult",
    "TempArtifactManager",
]
