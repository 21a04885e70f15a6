"""Session state and export for AI vs AI."""

from aivsai.session.exporter import ExportHeader, SessionExporter, read_header
from aivsai.session.models import Session, Turn

__all__ = ["ExportHeader", "Session", "SessionExporter", "Turn", "read_header"]
