"""Document and report storage."""

from .documents import DocumentStore, FileDocumentStore
from .reports import ReportSink, iso_timestamp

__all__ = ["DocumentStore", "FileDocumentStore", "ReportSink", "iso_timestamp"]
