"""External tool support for playfit.

- detection: ffmpeg/ffprobe lookup (configured path, then PATH)
- encoders: codec name to ffmpeg encoder name mapping
"""

from playfit.tools.detection import (
    MissingToolError,
    find_tool,
    require_tool,
    require_tools,
)
from playfit.tools.encoders import (
    get_audio_encoder,
    get_video_encoder,
)

__all__ = [
    "MissingToolError",
    "find_tool",
    "require_tool",
    "require_tools",
    "get_audio_encoder",
    "get_video_encoder",
]
