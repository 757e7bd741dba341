"""Try lifecycle: sequencing and create/update/delete orchestration."""

from query_tries.lifecycle.manager import TryLifecycleManager
from query_tries.lifecycle.sequencer import TrySequencer

__all__ = ["TryLifecycleManager", "TrySequencer"]
