"""Entity manifest - the YAML input listing entity classes.

Example::

    root: ActiveRecord::Base
    entities:
      - name: ApplicationRecord
        abstract: true
        scopes: [recent]
      - name: Post
        superclass: ApplicationRecord
        scopes: [published, drafts]
"""

import re
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from relgen.config.constants import PERSISTENCE_ROOT
from relgen.config.loader import read_yaml
from relgen.core.errors import ConfigError

_CONSTANT_NAME = r"^(::)?[A-Z]\w*(::[A-Z]\w*)*$"
_SCOPE_NAME = re.compile(r"^[a-z_][A-Za-z0-9_]*[?!]?$")


class EntitySpec(BaseModel):
    """One entity class as declared in the manifest."""

    name: str = Field(pattern=_CONSTANT_NAME)
    superclass: str | None = Field(
        default=None,
        description="Immediate superclass. Defaults to the manifest root.",
    )
    abstract: bool = False
    scopes: list[str] = Field(default_factory=list)

    @field_validator("scopes")
    @classmethod
    def validate_scopes(cls, v: list[str]) -> list[str]:
        for scope in v:
            if not _SCOPE_NAME.match(scope):
                raise ValueError(f"Invalid scope name: {scope!r}")
        return v


class EntityManifest(BaseModel):
    """Root of the manifest file."""

    root: str = Field(default=PERSISTENCE_ROOT, pattern=_CONSTANT_NAME)
    entities: list[EntitySpec] = Field(default_factory=list)


def parse_manifest(data: dict[str, Any], *, source: str = "<manifest>") -> EntityManifest:
    """Validate raw manifest data.

    Raises:
        ConfigError: If the data does not describe a valid manifest.
    """
    try:
        return EntityManifest.model_validate(data)
    except ValidationError as e:
        err = e.errors()[0]
        field = ".".join(str(loc) for loc in err["loc"])
        raise ConfigError.invalid_value(f"{source}:{field}", err.get("input"), err["msg"]) from e


def load_manifest(path: Path) -> EntityManifest:
    """Load and validate a manifest file.

    Raises:
        ConfigError: Missing file, invalid YAML, or invalid manifest content.
    """
    return parse_manifest(read_yaml(path, missing_ok=False), source=str(path))
