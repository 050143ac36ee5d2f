"""FieldTrack: field officer attendance and live distance tracking."""

__version__ = "0.1.0"
