"""Output-format negotiation for video transcoding.

Decides the output video track's size, frame rate, keyframe interval and bit
rate from the input track and a resizing policy, or signals that
transcoding is unnecessary.
"""

from transcode_strategy.bitrate import estimate_bit_rate, parse_bit_rate
from transcode_strategy.exceptions import (
    AlreadyCompressedError,
    ResizeError,
    StrategyConfigError,
    StrategyError,
    StrategyUnavailableError,
)
from transcode_strategy.formats import (
    COLOR_FORMAT_SURFACE,
    MIME_TYPE_AVC,
    EncoderCapabilities,
)
from transcode_strategy.resizers import (
    AtMostResizer,
    ExactResizer,
    FractionResizer,
    MultiResizer,
    PassThroughResizer,
    Resizer,
)
from transcode_strategy.size import ExactSize, Size
from transcode_strategy.video import (
    BITRATE_UNKNOWN,
    DEFAULT_FRAME_RATE,
    DEFAULT_KEYFRAME_INTERVAL,
    Builder,
    DefaultVideoStrategy,
    Options,
)

__version__ = "0.1.0"

__all__ = [
    "AlreadyCompressedError",
    "AtMostResizer",
    "BITRATE_UNKNOWN",
    "Builder",
    "COLOR_FORMAT_SURFACE",
    "DEFAULT_FRAME_RATE",
    "DEFAULT_KEYFRAME_INTERVAL",
    "DefaultVideoStrategy",
    "EncoderCapabilities",
    "ExactResizer",
    "ExactSize",
    "FractionResizer",
    "MIME_TYPE_AVC",
    "MultiResizer",
    "Options",
    "PassThroughResizer",
    "ResizeError",
    "Resizer",
    "Size",
    "StrategyConfigError",
    "StrategyError",
    "StrategyUnavailableError",
    "estimate_bit_rate",
    "parse_bit_rate",
]
