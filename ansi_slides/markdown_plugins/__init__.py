"""markdown-it-py plugins used by the markdown reader."""
from .heading_attrs import heading_attrs_plugin
from .speaker_notes import speaker_notes_plugin

__all__ = ["heading_attrs_plugin", "speaker_notes_plugin"]
