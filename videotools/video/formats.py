"""Video, audio, and output profile definitions."""

import logging
from enum import Enum
from typing import Optional
from pydantic import BaseModel

logger = logging.getLogger("videotools")


class VideoCodec(str, Enum):
    """Supported video codecs."""
    H264 = "libx264"
    COPY = "copy"


class AudioCodec(str, Enum):
    """Supported audio codecs."""
    AAC = "aac"
    MP3 = "libmp3lame"
    PCM = "pcm_s16le"
    COPY = "copy"


class AudioOutput(str, Enum):
    """Audio container formats accepted by extract_audio."""
    MP3 = "mp3"
    WAV = "wav"


class VideoFormat(BaseModel):
    """Video encoding profile."""
    codec: VideoCodec = VideoCodec.H264
    fps: Optional[float] = None
    bitrate: Optional[str] = None
    crf: Optional[int] = None
    preset: Optional[str] = None

    def to_ffmpeg_args(self) -> list[str]:
        """Convert to FFMPEG command arguments."""
        args = ["-c:v", self.codec.value]
        if self.codec == VideoCodec.COPY:
            return args

        if self.fps:
            args.extend(["-r", f"{self.fps:g}"])

        if self.crf is not None:
            args.extend(["-crf", str(self.crf)])
        elif self.bitrate:
            args.extend(["-b:v", self.bitrate])

        if self.preset:
            args.extend(["-preset", self.preset])

        return args


class AudioFormat(BaseModel):
    """Audio encoding profile."""
    codec: AudioCodec = AudioCodec.AAC
    bitrate: Optional[str] = None
    sample_rate: Optional[int] = None
    channels: Optional[int] = None

    def to_ffmpeg_args(self) -> list[str]:
        """Convert to FFMPEG command arguments."""
        args = ["-c:a", self.codec.value]
        if self.codec == AudioCodec.COPY:
            return args

        if self.bitrate:
            args.extend(["-b:a", self.bitrate])

        if self.sample_rate:
            args.extend(["-ar", str(self.sample_rate)])

        if self.channels:
            args.extend(["-ac", str(self.channels)])

        return args


class OutputFormat(BaseModel):
    """Combined video + audio profile.

    ``None`` for either side means the operation decides (drop the
    stream, or let the engine pick its default).
    """
    video: Optional[VideoFormat] = None
    audio: Optional[AudioFormat] = None

    def to_ffmpeg_args(self) -> list[str]:
        """Convert to FFMPEG command arguments."""
        args: list[str] = []

        if self.video:
            args.extend(self.video.to_ffmpeg_args())

        if self.audio:
            args.extend(self.audio.to_ffmpeg_args())

        return args


# General-purpose re-encode used by trim
RENDER_PROFILE = OutputFormat(
    video=VideoFormat(codec=VideoCodec.H264, crf=23, preset="fast"),
    audio=AudioFormat(codec=AudioCodec.AAC, bitrate="128k"),
)

# Every merge input is transcoded to this before stream-copy concat
CANONICAL_PROFILE = OutputFormat(
    video=VideoFormat(codec=VideoCodec.H264, fps=30, crf=23, preset="fast"),
    audio=AudioFormat(
        codec=AudioCodec.AAC, bitrate="128k", sample_rate=44100, channels=2,
    ),
)

AUDIO_PROFILES: dict[AudioOutput, AudioFormat] = {
    AudioOutput.MP3: AudioFormat(codec=AudioCodec.MP3, bitrate="128k"),
    AudioOutput.WAV: AudioFormat(codec=AudioCodec.PCM),
}

DEFAULT_AUDIO_OUTPUT = AudioOutput.MP3


def resolve_audio_output(name: Optional[str]) -> AudioOutput:
    """Map a user-supplied format name onto a known audio output.

    Unknown names fall back to :data:`DEFAULT_AUDIO_OUTPUT` instead of
    raising.
    """
    key = str(name or "").strip().lower()
    try:
        return AudioOutput(key)
    except ValueError:
        logger.debug(
            "Unknown audio format %r, falling back to %s",
            name, DEFAULT_AUDIO_OUTPUT.value,
        )
        return DEFAULT_AUDIO_OUTPUT


def audio_profile_for(name: Optional[str]) -> AudioFormat:
    """Return the encoding profile for an audio format name."""
    return AUDIO_PROFILES[resolve_audio_output(name)]
