"""
Shared runtime helpers.
"""

from media_services.core.sync import innermost_exception, run_sync

__all__ = ["innermost_exception", "run_sync"]
