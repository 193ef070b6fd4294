"""FFMPEG command construction and execution modules."""

from .command_builder import CommandBuilder, Filter, FilterChain, FFMPEGCommand
from .filter_graph import (
    FilterGraph,
    FilterStage,
    OverlayPosition,
    build_scale_filter,
    build_watermark_graph,
    resolve_overlay_position,
)
from .process_manager import ProcessManager, ProcessResult

__all__ = [
    "CommandBuilder",
    "Filter",
    "FilterChain",
    "FFMPEGCommand",
    "FilterGraph",
    "FilterStage",
    "OverlayPosition",
    "build_scale_filter",
    "build_watermark_graph",
    "resolve_overlay_position",
    "ProcessManager",
    "ProcessResult",
]
