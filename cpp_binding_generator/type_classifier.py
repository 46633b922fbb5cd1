"""
Classification of type definitions and struct fields
"""

from dataclasses import dataclass
from enum import Enum

from .constants import (
    DELEGATE_BASE,
    ENUM_BASE,
    FIXED_BUFFER_ATTRIBUTE,
    FIXED_BUFFER_MARKER,
    STRUCT_BASE,
    UNION_MARKER,
)
from .errors import AttributeContractError, InvariantError
from .metadata import Field, IntArg, TypeDef, TypeLayout, TypeSig, get_attribute


class Category(Enum):
    ENUM = "enum"
    STRUCT = "struct"
    DELEGATE = "delegate"
    CLASS = "class"
    INTERFACE = "interface"


def get_category(type_def: TypeDef) -> Category:
    """Categorize a type from its interface flag and base type"""
    if type_def.is_interface:
        return Category.INTERFACE
    if type_def.extends == ENUM_BASE:
        return Category.ENUM
    if type_def.extends == STRUCT_BASE:
        return Category.STRUCT
    if type_def.extends == DELEGATE_BASE:
        return Category.DELEGATE
    return Category.CLASS


def is_synthetic_nested(type_def: TypeDef) -> bool:
    """Nested types are compiler-synthesized helpers inlined into their parent"""
    return type_def.enclosing_type is not None


class FieldShape(Enum):
    ORDINARY = "ordinary"
    INLINE_ARRAY = "inline_array"
    SKIPPED_UNION = "skipped_union"
    SKIPPED_STRUCT = "skipped_struct"


@dataclass(frozen=True)
class StructField:
    """A struct field after nested helper types have been resolved"""
    name: str
    shape: FieldShape
    signature: TypeSig
    array_count: int | None = None

    @property
    def is_skipped(self) -> bool:
        return self.shape in (FieldShape.SKIPPED_UNION, FieldShape.SKIPPED_STRUCT)


def _nested_type(signature: TypeSig) -> TypeDef | None:
    type_def = signature.type_def
    if type_def is not None and type_def.enclosing_type is not None:
        return type_def
    return None


def _element_signature(nested: TypeDef, owner: TypeDef) -> TypeSig:
    if not nested.fields:
        raise InvariantError(f"Fixed buffer type '{nested.name}' has no element field", owner.full_name)
    return nested.fields[0].signature


def classify_field(field: Field, owner: TypeDef) -> StructField:
    """Resolve a struct field that may be backed by a nested helper type

    Args:
        field: The field to classify
        owner: The struct declaring the field (used in error messages)
    """
    nested = _nested_type(field.signature)
    if nested is None:
        return StructField(field.name, FieldShape.ORDINARY, field.signature)

    buffer_attribute = get_attribute(field, *FIXED_BUFFER_ATTRIBUTE)
    if buffer_attribute is not None:
        if len(buffer_attribute.fixed_args) != 2:
            raise AttributeContractError("FixedBufferAttribute should have 2 args", owner.full_name)
        count = buffer_attribute.fixed_args[1]
        if not isinstance(count, IntArg):
            raise AttributeContractError("FixedBufferAttribute count must be an integer", owner.full_name)
        return StructField(field.name, FieldShape.INLINE_ARRAY, _element_signature(nested, owner), count.value)

    if FIXED_BUFFER_MARKER in nested.name:
        return StructField(field.name, FieldShape.INLINE_ARRAY, _element_signature(nested, owner), len(nested.fields))

    if nested.layout == TypeLayout.EXPLICIT and UNION_MARKER in nested.name:
        return StructField(field.name, FieldShape.SKIPPED_UNION, field.signature)

    # Anonymous structs (_e__Struct) and any other nested helper are not modeled yet
    return StructField(field.name, FieldShape.SKIPPED_STRUCT, field.signature)
