"""VidSub: English subtitles for uploaded videos, generated with local models."""

__version__ = "0.1.0"
