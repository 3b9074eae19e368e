"""Services for diffreview.

Services encapsulate business logic and orchestrate domain models.
They receive dependencies via constructor injection.
"""

from diffreview.services.diff_cache import DiffCache
from diffreview.services.export import format_location, to_markdown, write_markdown
from diffreview.services.review_service import RefreshResult, ReviewFile, ReviewService

__all__ = [
    "DiffCache",
    "RefreshResult",
    "ReviewFile",
    "ReviewService",
    "format_location",
    "to_markdown",
    "write_markdown",
]
