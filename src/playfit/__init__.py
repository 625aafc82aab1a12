"""playfit - fit media files to a playback device's capabilities."""

__version__ = "0.1.0"
