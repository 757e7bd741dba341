"""Search engine dialects: template text -> normalized args."""

from query_tries.dialects.base import Dialect
from query_tries.dialects.factory import get_dialect, supported_engines

__all__ = ["Dialect", "get_dialect", "supported_engines"]
