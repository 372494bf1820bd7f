"""Build typed property descriptors for store schemas."""

from eds_analytics.storage.schemas.types import (
    PropertyValueType,
    SdsTypeCode,
    SemanticType,
    TypeProperty,
)

# Store-specific code table. Targeting a different store means swapping this.
TYPE_CODES: dict[SemanticType, SdsTypeCode] = {
    SemanticType.DOUBLE: SdsTypeCode.DOUBLE,
    SemanticType.DATE_TIME: SdsTypeCode.DATE_TIME,
}


def build_property(
    id_and_name: str, is_key: bool, semantic_type: SemanticType
) -> TypeProperty:
    """Describe one schema property; id and name are the same string."""
    return TypeProperty(
        id=id_and_name,
        name=id_and_name,
        is_key=is_key,
        value_type=PropertyValueType(
            name=semantic_type.value, code=TYPE_CODES[semantic_type]
        ),
    )


def timestamp_key(id_and_name: str = "Timestamp") -> TypeProperty:
    return build_property(id_and_name, True, SemanticType.DATE_TIME)


def double_property(id_and_name: str) -> TypeProperty:
    return build_property(id_and_name, False, SemanticType.DOUBLE)
