"""Playback logging and output."""

from courtplay.logging.playback_log import LogEntry, PlaybackLog

__all__ = ["LogEntry", "PlaybackLog"]
