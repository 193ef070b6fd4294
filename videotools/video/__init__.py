"""Media probing and encoding profiles."""

from .analyzer import VideoAnalyzer, VideoMetadata
from .formats import (
    AudioFormat,
    AudioOutput,
    OutputFormat,
    VideoFormat,
    audio_profile_for,
)

__all__ = [
    "VideoAnalyzer",
    "VideoMetadata",
    "AudioFormat",
    "AudioOutput",
    "OutputFormat",
    "VideoFormat",
    "audio_profile_for",
]
