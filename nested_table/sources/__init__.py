"""
Record sources: the external collaborator that fetches records, optionally
scoped to a parent identifier.
"""
from .base import RecordSource
from .http_source import HttpRecordSource
from .ibis_source import IbisRecordSource

__all__ = ["RecordSource", "HttpRecordSource", "IbisRecordSource"]
