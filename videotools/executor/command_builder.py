"""FFMPEG command builder for constructing argument vectors and filter chains."""

from dataclasses import dataclass, field
from typing import Optional, TYPE_CHECKING
from pathlib import Path

from ..sanitize import escape_filter_value, quote_command

if TYPE_CHECKING:
    from ..video.formats import OutputFormat
    from .filter_graph import FilterGraph


@dataclass
class Filter:
    """Represents a single FFMPEG filter.

    ``args`` are positional option values, ``params`` are ``key=value``
    options.  Values are escaped when serialized; names and keys are
    trusted identifiers chosen by this package.
    """
    name: str
    args: list[str | int | float] = field(default_factory=list)
    params: dict[str, str | int | float] = field(default_factory=dict)

    def to_string(self) -> str:
        """Convert filter to FFMPEG filter string."""
        options = [escape_filter_value(a) for a in self.args]
        options.extend(
            f"{k}={escape_filter_value(v)}" for k, v in self.params.items()
        )
        if not options:
            return self.name
        return f"{self.name}=" + ":".join(options)


@dataclass
class FilterChain:
    """A chain of filters connected in sequence."""
    filters: list[Filter] = field(default_factory=list)

    def add(self, filter_obj: Filter) -> "FilterChain":
        """Add a filter to the chain."""
        self.filters.append(filter_obj)
        return self

    def __bool__(self) -> bool:
        return bool(self.filters)

    def to_string(self) -> str:
        """Convert filter chain to FFMPEG filter string."""
        return ",".join(f.to_string() for f in self.filters)


@dataclass
class FFMPEGCommand:
    """Represents a complete FFMPEG command."""
    inputs: list[str] = field(default_factory=list)
    outputs: list[str] = field(default_factory=list)
    input_options: dict[int, list[str]] = field(default_factory=dict)
    output_options: list[str] = field(default_factory=list)
    video_filters: FilterChain = field(default_factory=FilterChain)
    complex_filter: Optional["FilterGraph"] = None
    maps: list[str] = field(default_factory=list)
    overwrite: bool = True

    def to_args(self) -> list[str]:
        """Convert command to list of arguments for subprocess."""
        args = ["ffmpeg"]

        if self.overwrite:
            args.append("-y")

        # Inputs with their options (keyed by input index so the same
        # file can appear twice with different options)
        for index, input_path in enumerate(self.inputs):
            args.extend(self.input_options.get(index, []))
            args.extend(["-i", input_path])

        # Filters
        if self.complex_filter is not None:
            args.extend(["-filter_complex", self.complex_filter.to_string()])
        elif self.video_filters:
            args.extend(["-vf", self.video_filters.to_string()])

        for stream in self.maps:
            args.extend(["-map", stream])

        # Output options
        args.extend(self.output_options)

        # Outputs
        args.extend(self.outputs)

        return args

    def to_string(self) -> str:
        """Convert command to shell string."""
        return quote_command(self.to_args())


class CommandBuilder:
    """Builder for constructing FFMPEG commands."""

    def __init__(self):
        self._command = FFMPEGCommand()

    def input(
        self,
        path: str | Path,
        options: Optional[list[str]] = None,
    ) -> "CommandBuilder":
        """Add an input file. Options are placed before its ``-i``."""
        self._command.inputs.append(str(path))
        if options:
            index = len(self._command.inputs) - 1
            self._command.input_options[index] = list(options)
        return self

    def output(self, path: str | Path) -> "CommandBuilder":
        """Set output file."""
        self._command.outputs.append(str(path))
        return self

    def output_options(self, *options: str) -> "CommandBuilder":
        """Add output options."""
        self._command.output_options.extend(options)
        return self

    def profile(self, fmt: "OutputFormat") -> "CommandBuilder":
        """Apply a video/audio encoding profile."""
        self._command.output_options.extend(fmt.to_ffmpeg_args())
        return self

    def no_video(self) -> "CommandBuilder":
        """Remove video from output."""
        self._command.output_options.append("-vn")
        return self

    def vf(self, *filters: Filter) -> "CommandBuilder":
        """Add video filters."""
        for f in filters:
            self._command.video_filters.add(f)
        return self

    def trim(
        self,
        start: Optional[float] = None,
        duration: Optional[float] = None,
    ) -> "CommandBuilder":
        """Add output-side seek and duration options."""
        if start is not None:
            self._command.output_options.extend(["-ss", str(start)])
        if duration is not None:
            self._command.output_options.extend(["-t", str(duration)])
        return self

    def frames(self, count: int) -> "CommandBuilder":
        """Limit the number of video frames written."""
        self._command.output_options.extend(["-vframes", str(int(count))])
        return self

    def complex_filter(self, graph: "FilterGraph") -> "CommandBuilder":
        """Set complex filtergraph."""
        self._command.complex_filter = graph
        return self

    def map(self, *streams: str) -> "CommandBuilder":
        """Select streams for the output (``[label]`` or ``0:a?``)."""
        self._command.maps.extend(streams)
        return self

    def build(self) -> FFMPEGCommand:
        """Build and return the command."""
        return self._command
