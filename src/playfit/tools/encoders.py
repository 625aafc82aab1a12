"""Codec to ffmpeg encoder mapping.

Policies name codecs the way ffprobe reports them (h264, hevc, mp3). ffmpeg
needs an encoder name for -c:v / -c:a; codecs without an entry are passed
through unchanged, which works for ffmpeg's native encoders (aac, ac3, mpeg4).
"""

VIDEO_ENCODERS: dict[str, str] = {
    "h264": "libx264",
    "hevc": "libx265",
    "h265": "libx265",
    "vp8": "libvpx",
    "vp9": "libvpx-vp9",
    "av1": "libaom-av1",
    "xvid": "libxvid",
    "theora": "libtheora",
}

AUDIO_ENCODERS: dict[str, str] = {
    "mp3": "libmp3lame",
    "opus": "libopus",
    "vorbis": "libvorbis",
}


def get_video_encoder(codec: str) -> str:
    """Get the ffmpeg encoder name for a video codec."""
    return VIDEO_ENCODERS.get(codec.casefold(), codec)


def get_audio_encoder(codec: str) -> str:
    """Get the ffmpeg encoder name for an audio codec."""
    return AUDIO_ENCODERS.get(codec.casefold(), codec)
