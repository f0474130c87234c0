"""Store configuration for hdcacl."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from hdcacl._constants import ACL_FILE_NAME, DEFAULT_FILE_MODE
from hdcacl.exceptions import AclConfigError


@dataclasses.dataclass(frozen=True)
class AclConfig:
    """Where and how the device ACL is persisted.

    Parameters
    ----------
    root : str
        Device-local storage directory holding the ACL blob.
    file_name : str
        Name of the ACL blob inside *root*. Defaults to ``acl.data``.
    file_mode : int
        Permission bits for a newly written ACL file.
    """

    root: str
    file_name: str = ACL_FILE_NAME
    file_mode: int = DEFAULT_FILE_MODE

    @classmethod
    def from_env(cls, **overrides: Any) -> AclConfig:
        """Create configuration from environment variables.

        Reads ``HDC_ACL_ROOT``, ``HDC_ACL_FILE_NAME`` and
        ``HDC_ACL_FILE_MODE`` (octal, e.g. ``600``). Explicit keyword
        arguments override environment values.

        Raises
        ------
        AclConfigError
            If no storage root is configured or the file mode is not octal.
        """
        env = os.environ

        config_kwargs: dict[str, Any] = {}
        root = env.get("HDC_ACL_ROOT")
        if root:
            config_kwargs["root"] = root
        file_name = env.get("HDC_ACL_FILE_NAME")
        if file_name:
            config_kwargs["file_name"] = file_name

        mode_env = env.get("HDC_ACL_FILE_MODE")
        if mode_env is not None and "file_mode" not in overrides:
            try:
                config_kwargs["file_mode"] = int(mode_env, 8)
            except ValueError as exc:
                raise AclConfigError(f"HDC_ACL_FILE_MODE must be octal, got {mode_env!r}") from exc

        config_kwargs.update({k: v for k, v in overrides.items() if v is not None})

        if not config_kwargs.get("root"):
            raise AclConfigError("ACL storage root is not configured (set HDC_ACL_ROOT)")

        return cls(**config_kwargs)
