"""Track format keys and encoder constants.

Track formats are plain mappings owned by the demuxer/encoder layers. This
module is the single place that names the keys read and written by the
strategies.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

TrackFormat = Mapping[str, Any]

KEY_MIME_TYPE = "mime_type"
KEY_WIDTH = "width"
KEY_HEIGHT = "height"
KEY_FRAME_RATE = "frame_rate"
KEY_KEYFRAME_INTERVAL = "keyframe_interval"
KEY_BIT_RATE = "bit_rate"
KEY_COLOR_FORMAT = "color_format"

MIME_TYPE_AVC = "video/avc"

# Surface input for hardware encoders (MediaCodecInfo COLOR_FormatSurface)
COLOR_FORMAT_SURFACE = 0x7F000789


@dataclass(frozen=True)
class EncoderCapabilities:
    """What the downstream encoder configuration accepts.

    Supplied by the encoder-setup layer; the strategy only reads it.
    """

    # Older encoder surfaces only accept whole-second keyframe intervals
    float_keyframe_interval: bool = True


DEFAULT_CAPABILITIES = EncoderCapabilities()


def create_video_format(mime_type: str, width: int, height: int) -> dict[str, Any]:
    """Create a new, independent video track format.

    Args:
        mime_type: Codec mime type.
        width: Frame width in pixels.
        height: Frame height in pixels.

    Returns:
        Fresh mapping holding the mime type and dimensions.
    """
    return {KEY_MIME_TYPE: mime_type, KEY_WIDTH: width, KEY_HEIGHT: height}
