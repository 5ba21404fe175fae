"""Root of the FixWatch error hierarchy.

Every error the domain raises carries enough metadata to be rendered as
RFC 7807 problem details, so the API layer never needs a lookup table
from exception class to HTTP status.
"""

from __future__ import annotations

from typing import Any


class FixWatchError(Exception):
    """Base class for all FixWatch domain errors.

    Subclasses override ``problem_type``, ``title`` and ``status_code``.
    Errors left at a 5xx status never put their message on the wire.
    """

    problem_type: str = "urn:fixwatch:internal-error"
    title: str = "Internal Error"
    status_code: int = 500

    def to_problem_dict(self) -> dict[str, Any]:
        """Serialize to a problem details dictionary.

        The ``instance`` member is left for the API layer to fill in.
        """
        if self.status_code >= 500:
            detail = "An unexpected error occurred"
        else:
            detail = str(self)
        return {
            "type": self.problem_type,
            "title": self.title,
            "status": self.status_code,
            "detail": detail,
        }
