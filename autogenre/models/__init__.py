"""Data models for AutoGenre."""

from autogenre.models.config import AppSettings
from autogenre.models.metadata import AudioFileEntry, Metadata
from autogenre.models.suggestion import Confidence, MetadataSuggestion

__all__ = ["AppSettings", "AudioFileEntry", "Metadata", "Confidence", "MetadataSuggestion"]
