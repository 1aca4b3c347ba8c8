"""Validation of client-supplied credentials and protocol parameters."""

from __future__ import annotations

import hmac
import re
from typing import Any

from fcm_broker.core.config import ClientCredentialSettings, FcmSettings

CLIENT_CREDENTIALS_GRANT_TYPE = "client_credentials"
FCM_SCOPE = "https://www.googleapis.com/auth/firebase.messaging"

_PRINTABLE_ASCII = re.compile(r"[ -~]*")


def is_printable_ascii(value: str) -> bool:
    return _PRINTABLE_ASCII.fullmatch(value) is not None


class CredentialValidator:
    """Checks request values against the configured expectations.

    Every method is side-effect free and safe to call concurrently.
    """

    def __init__(self, client_settings: ClientCredentialSettings, fcm_settings: FcmSettings) -> None:
        self._client = client_settings
        self._fcm = fcm_settings

    def validate_client_credentials(self, client_id: str, client_secret: str) -> bool:
        """Return whether the id/secret pair matches the configured credentials.

        Values containing anything outside printable ASCII are rejected before
        comparison. The comparison itself is constant time.
        """
        if not all(is_printable_ascii(value) for value in (client_id, client_secret)):
            return False
        id_matches = hmac.compare_digest(
            client_id.encode("utf-8"), self._client.client_id.encode("utf-8")
        )
        secret_matches = hmac.compare_digest(
            client_secret.encode("utf-8"), self._client.client_secret.encode("utf-8")
        )
        return id_matches and secret_matches

    def validate_grant_type(self, grant_type: Any) -> bool:
        return grant_type == CLIENT_CREDENTIALS_GRANT_TYPE

    def validate_scope(self, scope: Any) -> bool:
        return scope == FCM_SCOPE

    def validate_fcm_project_identity(self, project_number: Any) -> bool:
        """Return whether the claim is exactly the expected project number.

        The claim must be a string; ``123456`` is not accepted for ``"123456"``.
        """
        return isinstance(project_number, str) and project_number == self._fcm.expected_project_number


__all__ = [
    "CLIENT_CREDENTIALS_GRANT_TYPE",
    "CredentialValidator",
    "FCM_SCOPE",
    "is_printable_ascii",
]
