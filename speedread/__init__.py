"""Document indexing and RSVP playback engine."""

__version__ = "0.1.0"
