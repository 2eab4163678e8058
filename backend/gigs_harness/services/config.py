import os
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict

_FALSE = {"0", "false", "no", "off"}

ENV_PREFIX = "GIGS_"


class Configuration(BaseModel):
    """Capabilities of the implementation under test.

    Each flag enables a group of checks. Implementations which do not support
    a capability disable the flag, and the corresponding checks are skipped
    instead of failing.
    """

    model_config = ConfigDict(frozen=True)

    is_standard_identifier_supported: bool = True
    is_standard_name_supported: bool = True
    is_standard_alias_supported: bool = True
    is_dependency_identification_supported: bool = True
    is_deprecated_object_creation_supported: bool = True
    is_factory_preserving_user_values: bool = True

    @staticmethod
    def env_name(key: str) -> str:
        return ENV_PREFIX + key.upper()

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None) -> "Configuration":
        """Read the flags from ``GIGS_IS_STANDARD_NAME_SUPPORTED``-style variables.

        Unset variables leave the flag enabled.
        """
        getenv = os.getenv if environ is None else environ.get
        values = {}
        for key in cls.model_fields:
            raw = getenv(cls.env_name(key))
            if raw is not None:
                values[key] = raw.strip().lower() not in _FALSE
        return cls(**values)

    def configure_as_dependency(self, parent: "Configuration") -> "Configuration":
        """Flags of a test run on a dependency of the object tested by ``parent``.

        Identification checks of a dependency (e.g. the ellipsoid of a datum)
        are enabled only if the parent enables dependency identification.
        """
        dependency_id = self.is_dependency_identification_supported and parent.is_dependency_identification_supported
        return self.model_copy(
            update={
                "is_deprecated_object_creation_supported": self.is_deprecated_object_creation_supported
                and parent.is_deprecated_object_creation_supported,
                "is_dependency_identification_supported": dependency_id,
                "is_standard_identifier_supported": self.is_standard_identifier_supported
                and parent.is_standard_identifier_supported
                and dependency_id,
                "is_standard_name_supported": self.is_standard_name_supported
                and parent.is_standard_name_supported
                and dependency_id,
                "is_standard_alias_supported": self.is_standard_alias_supported
                and parent.is_standard_alias_supported
                and dependency_id,
            }
        )
