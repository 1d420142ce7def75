from .record import Record
from .rendered import RenderedRow, DiagnosticRow, RenderedNode, TableView

__all__ = ["Record", "RenderedRow", "DiagnosticRow", "RenderedNode", "TableView"]
