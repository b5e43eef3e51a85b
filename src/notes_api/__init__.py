"""Notes API: Lambda handlers serving notes from a snapshot store."""

__version__ = "0.1.0"
