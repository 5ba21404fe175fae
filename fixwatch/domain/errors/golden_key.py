"""Golden key errors."""

from __future__ import annotations

from typing import Any

from fixwatch.domain.exceptions import FixWatchError


class GoldenKeyForbiddenError(FixWatchError):
    """Raised when a presented secret has no golden key.

    The fingerprint is never included in the message, so a caller
    cannot learn anything about which fingerprints hold keys.

    HTTP Status: 403 Forbidden
    """

    problem_type = "urn:fixwatch:golden-key:forbidden"
    title = "Golden Key Required"
    status_code = 403

    def __init__(self, action: str) -> None:
        """Initialize the error.

        Args:
            action: The privileged action that was refused.
        """
        self.action = action
        super().__init__(f"A valid golden key is required to {action}")

    def to_problem_dict(self) -> dict[str, Any]:
        """Serialize to an RFC 7807 problem details dictionary."""
        result = super().to_problem_dict()
        result["action"] = self.action
        return result
