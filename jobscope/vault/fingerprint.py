"""Device fingerprint used as the KDF password.

The fingerprint is derived from non-secret facts about the running
environment. Anyone who can run code as the same user can recompute it, so
the encryption built on top of it protects stored secrets from casual
inspection of the storage file only.
"""

import hashlib
import platform

FINGERPRINT_VERSION = "jobScope-v1"


def default_user_agent() -> str:
    return f"{platform.system()} {platform.machine()} {platform.node()}"


def device_fingerprint(extension_id: str, user_agent: str | None = None) -> str:
    """Stable SHA-256 hex digest of identity, user agent and version tag."""
    agent = user_agent or default_user_agent()
    data = f"{extension_id}-{agent}-{FINGERPRINT_VERSION}"
    return hashlib.sha256(data.encode("utf-8")).hexdigest()
