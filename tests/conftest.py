"""Shared test fixtures for transcode-strategy."""

import pytest

from transcode_strategy.formats import MIME_TYPE_AVC


@pytest.fixture
def landscape_format() -> dict:
    """Return a 1080p landscape HEVC input track format."""
    return {"mime_type": "video/hevc", "width": 1920, "height": 1080}


@pytest.fixture
def portrait_format() -> dict:
    """Return a 1080p portrait HEVC input track format."""
    return {"mime_type": "video/hevc", "width": 1080, "height": 1920}


@pytest.fixture
def compressed_avc_format() -> dict:
    """Return a small AVC input that is already well compressed."""
    return {
        "mime_type": MIME_TYPE_AVC,
        "width": 640,
        "height": 480,
        "frame_rate": 24,
        "keyframe_interval": 5,
    }
