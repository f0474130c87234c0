"""Access Control List record."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, ValidationInfo, field_validator, model_validator
from pydantic.alias_generators import to_camel

from hdcacl._crypto.hashing import canonical_json
from hdcacl.exceptions import AclFormatError

# Validation context key marking input read from persisted JSON.
_PERSISTED = "persisted"


class Acl(BaseModel):
    """The persisted ACL of one device.

    Parameters
    ----------
    version : str
        Opaque version tag. Empty means a legacy, unversioned ACL which
        may be cleared without a signature.
    managers : list[str]
        Base58 identities allowed to sign changes to this ACL. Any one
        of them is sufficient.
    drivers : list[str]
        Base58 identities allowed to operate the device. Carried through,
        never consulted for authorization.
    fleet_name : str
        Optional fleet name (``fleetName`` in JSON). Part of the signed
        messages when non-empty.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    version: str = ""
    managers: list[str] = Field(default_factory=list)
    drivers: list[str] = Field(default_factory=list)
    fleet_name: str = ""

    @field_validator("version", "fleet_name", mode="before")
    @classmethod
    def _null_to_empty_string(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("managers", "drivers", mode="before")
    @classmethod
    def _null_to_empty_list(cls, value: Any) -> Any:
        return [] if value is None else value

    @model_validator(mode="before")
    @classmethod
    def _match_persisted_keys(cls, values: Any, info: ValidationInfo) -> Any:
        """Map persisted JSON keys onto the ACL's JSON field names.

        Only applies to :meth:`from_data`. An exact key matches first,
        otherwise keys match case-insensitively; when several keys map to
        the same field the last one wins. Any other key, including the
        snake_case attribute names, is ignored.
        """
        if not isinstance(values, dict) or not (info.context or {}).get(_PERSISTED):
            return values
        json_keys = {field.alias or name for name, field in cls.model_fields.items()}
        folded = {key.casefold(): key for key in json_keys}
        matched: dict[str, Any] = {}
        for key, value in values.items():
            json_key = key if key in json_keys else folded.get(str(key).casefold())
            if json_key is not None:
                matched[json_key] = value
        return matched

    @classmethod
    def from_data(cls, data: bytes | str) -> Acl:
        """Deserialize persisted ACL JSON.

        Raises
        ------
        AclFormatError
            If *data* is not a JSON object with the ACL shape.
        """
        try:
            return cls.model_validate_json(data, context={_PERSISTED: True})
        except ValidationError as exc:
            raise AclFormatError(f"unmarshalling acl data: {exc}") from exc

    def to_json(self) -> bytes:
        """Serialize to the canonical persisted form.

        Keys are emitted as ``version, managers, drivers, fleetName``;
        ``version`` and ``fleetName`` are omitted when empty. The lists
        are always present, never ``null``.
        """
        payload: dict[str, Any] = {}
        if self.version:
            payload["version"] = self.version
        payload["managers"] = list(self.managers)
        payload["drivers"] = list(self.drivers)
        if self.fleet_name:
            payload["fleetName"] = self.fleet_name
        return canonical_json(payload)

    @property
    def is_versioned(self) -> bool:
        """Whether the ACL carries a version tag (and so needs a signature to clear)."""
        return bool(self.version)

    def is_manager(self, identity: str) -> bool:
        return identity in self.managers

    def is_driver(self, identity: str) -> bool:
        return identity in self.drivers
