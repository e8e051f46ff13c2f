"""Catalog documents, reconciliation and reports."""

from .document import LeafNode, MappingNode, Node, document_from_data, join_path, node_from_data
from .reconciler import DEFAULT_FALLBACK_PREFIX, Reconciler, build_reconciler
from .report import Report, ReportEntry, ShapeConflict, render_report

__all__ = [
    "DEFAULT_FALLBACK_PREFIX",
    "LeafNode",
    "MappingNode",
    "Node",
    "Reconciler",
    "Report",
    "ReportEntry",
    "ShapeConflict",
    "build_reconciler",
    "document_from_data",
    "join_path",
    "node_from_data",
    "render_report",
]
