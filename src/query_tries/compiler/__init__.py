"""Try argument compiler: template + variables -> engine args."""

from query_tries.compiler.compiler import TryArgumentCompiler
from query_tries.compiler.request import build_search_request
from query_tries.compiler.substitution import substitute

__all__ = ["TryArgumentCompiler", "build_search_request", "substitute"]
