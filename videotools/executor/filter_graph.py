"""Typed filter graphs for ``-filter_complex`` and the watermark/scale builders.

A graph is assembled from :class:`FilterStage` objects and only turned
into FFMPEG's textual syntax by :meth:`FilterGraph.to_string`, so every
interpolated value goes through :func:`escape_filter_value`.

Example::

    [1:v]scale=120:-1[scaled];[scaled]format=rgba,colorchannelmixer=aa=0.5[transparent];
    [0:v][transparent]overlay=main_w-overlay_w-10:10[out]
"""

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .command_builder import Filter, FilterChain

logger = logging.getLogger("videotools")

# Streams of the command's inputs, e.g. "0:v", "1:a"
_PRIMARY_LABEL = re.compile(r"^\d+:[va]$")
# Labels produced by stages
_STAGE_LABEL = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

MAIN_VIDEO = "0:v"
WATERMARK_VIDEO = "1:v"
OUTPUT_LABEL = "out"


@dataclass
class FilterStage:
    """One ``[in...]filter,filter[out]`` link of a filter graph."""
    inputs: list[str]
    chain: FilterChain
    output: str

    def to_string(self) -> str:
        ins = "".join(f"[{label}]" for label in self.inputs)
        return f"{ins}{self.chain.to_string()}[{self.output}]"


@dataclass
class FilterGraph:
    """Ordered filter stages ending in a single mappable label."""
    stages: list[FilterStage] = field(default_factory=list)

    @property
    def labels(self) -> list[str]:
        return [stage.output for stage in self.stages]

    @property
    def output(self) -> Optional[str]:
        """Label of the terminal stage."""
        return self.stages[-1].output if self.stages else None

    def add(
        self,
        inputs: list[str],
        filters: list[Filter],
        output: str,
    ) -> "FilterGraph":
        """Append a stage.

        Raises:
            ValueError: If an input label is neither a primary input nor
                produced by an earlier stage, if ``output`` is not a plain
                identifier, or if ``output`` is already taken.
        """
        produced = self.labels
        for label in inputs:
            if not (_PRIMARY_LABEL.match(label) or label in produced):
                raise ValueError(f"Unknown filter graph input label: [{label}]")
        if not _STAGE_LABEL.match(output):
            raise ValueError(f"Invalid filter graph output label: [{output}]")
        if output in produced:
            raise ValueError(f"Duplicate filter graph output label: [{output}]")
        if not filters:
            raise ValueError(f"Filter stage [{output}] has no filters")

        self.stages.append(FilterStage(list(inputs), FilterChain(list(filters)), output))
        return self

    def map_label(self) -> str:
        """The ``-map`` argument selecting the terminal output."""
        if self.output is None:
            raise ValueError("Cannot map an empty filter graph")
        return f"[{self.output}]"

    def to_string(self) -> str:
        """Convert the graph to FFMPEG ``-filter_complex`` syntax."""
        return ";".join(stage.to_string() for stage in self.stages)


class OverlayPosition(str, Enum):
    """Named watermark anchors."""
    TOP_LEFT = "top-left"
    TOP_RIGHT = "top-right"
    BOTTOM_LEFT = "bottom-left"
    BOTTOM_RIGHT = "bottom-right"
    CENTER = "center"


def resolve_position_name(position: Optional[str]) -> OverlayPosition:
    """Map a position name onto an anchor; unset or unknown -> top-left."""
    if position is None:
        return OverlayPosition.TOP_LEFT
    # Accept bottom_right as well as bottom-right
    key = str(position).strip().lower().replace("_", "-")
    try:
        return OverlayPosition(key)
    except ValueError:
        logger.debug("Unknown overlay position %r, using explicit x/y", position)
        return OverlayPosition.TOP_LEFT


def resolve_overlay_position(
    position: Optional[str],
    x: int = 10,
    y: int = 10,
) -> tuple[str, str]:
    """Resolve a named position plus margins into overlay x/y expressions."""
    x = int(x)
    y = int(y)
    anchor = resolve_position_name(position)

    if anchor == OverlayPosition.TOP_RIGHT:
        return f"main_w-overlay_w-{x}", str(y)
    if anchor == OverlayPosition.BOTTOM_LEFT:
        return str(x), f"main_h-overlay_h-{y}"
    if anchor == OverlayPosition.BOTTOM_RIGHT:
        return f"main_w-overlay_w-{x}", f"main_h-overlay_h-{y}"
    if anchor == OverlayPosition.CENTER:
        return "(main_w-overlay_w)/2", "(main_h-overlay_h)/2"
    return str(x), str(y)


def build_watermark_graph(
    position: Optional[str] = None,
    x: int = 10,
    y: int = 10,
    width: Optional[int] = None,
    height: Optional[int] = None,
    opacity: float = 1.0,
) -> FilterGraph:
    """Build the scale -> opacity -> overlay graph for a watermark.

    Input 0 is the main video and input 1 the watermark image.  The scale
    stage is added only when a dimension is given (the other side becomes
    ``-1`` to keep aspect), the opacity stage only when ``opacity < 1``.
    The result always ends in ``[out]``.
    """
    graph = FilterGraph()
    watermark = WATERMARK_VIDEO

    if width is not None or height is not None:
        scale_w = int(width) if width is not None else -1
        scale_h = int(height) if height is not None else -1
        graph.add([watermark], [Filter("scale", args=[scale_w, scale_h])], "scaled")
        watermark = "scaled"

    opacity = float(opacity)
    if opacity < 1.0:
        graph.add(
            [watermark],
            [
                Filter("format", args=["rgba"]),
                Filter("colorchannelmixer", params={"aa": max(0.0, opacity)}),
            ],
            "transparent",
        )
        watermark = "transparent"

    pos_x, pos_y = resolve_overlay_position(position, x, y)
    graph.add([MAIN_VIDEO, watermark], [Filter("overlay", args=[pos_x, pos_y])], OUTPUT_LABEL)
    return graph


def build_scale_filter(width: int, height: int, keep_aspect: bool = True) -> Filter:
    """Scale filter for resize.

    With ``keep_aspect`` the target box is first clamped to the source
    size and the image is then fitted inside it, so the result never
    upscales and never distorts.  Fitted sizes are rounded down to even
    numbers, which libx264 with yuv420p requires.  Without ``keep_aspect``
    the output is exactly ``width`` x ``height``.
    """
    width = int(width)
    height = int(height)
    if keep_aspect:
        return Filter(
            "scale",
            args=[f"min({width},iw)", f"min({height},ih)"],
            params={
                "force_original_aspect_ratio": "decrease",
                "force_divisible_by": 2,
            },
        )
    return Filter("scale", args=[width, height])
