"""External database schema as returned by the schema provider."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Optional

from domain.identifiers.external_ref import ExternalRef

RELATION_KIND = "relation"


@dataclass(frozen=True, slots=True)
class SchemaProperty:
    """One property (column) of an external database."""

    name: str
    kind: str
    relation_target: Optional[ExternalRef] = None


@dataclass(frozen=True, slots=True)
class DatabaseSchema:
    """Properties of an external database, keyed by property name."""

    id: ExternalRef
    title: str = ""
    properties: Mapping[str, SchemaProperty] = field(default_factory=dict)
