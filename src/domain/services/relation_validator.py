"""Bidirectional relation checks between two external databases."""

from core.exceptions import MissingFieldError, WrongFieldTypeError, WrongTargetError
from domain.entities.schema import RELATION_KIND, DatabaseSchema
from domain.identifiers.external_ref import ExternalRef


def validate_relation(schema: DatabaseSchema, field_name: str, expected_target: ExternalRef) -> None:
    """Check that ``field_name`` in ``schema`` is a relation to ``expected_target``."""
    prop = schema.properties.get(field_name)
    if prop is None:
        raise MissingFieldError(field_name)
    if prop.kind != RELATION_KIND:
        raise WrongFieldTypeError(field_name, prop.kind)
    if prop.relation_target != expected_target:
        actual = str(prop.relation_target) if prop.relation_target else None
        raise WrongTargetError(field_name, str(expected_target), actual)


def validate_bidirectional(
    schema_a: DatabaseSchema,
    schema_b: DatabaseSchema,
    field_name_a: str,
    field_name_b: str,
    expected_b_id: ExternalRef,
    expected_a_id: ExternalRef,
) -> None:
    """Check that A and B link to each other through the named fields.

    ``field_name_a`` on A must be a relation targeting ``expected_b_id`` and
    ``field_name_b`` on B a relation targeting ``expected_a_id``. The A side
    is checked first.

    Raises:
        MissingFieldError: a field is absent from its schema.
        WrongFieldTypeError: a field is not a relation.
        WrongTargetError: a relation targets another database.
    """
    validate_relation(schema_a, field_name_a, expected_b_id)
    validate_relation(schema_b, field_name_b, expected_a_id)
