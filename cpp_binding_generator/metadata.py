"""
Read-only views of the metadata entities the generator consumes

The reader that decodes the metadata container produces these objects with all
type references already resolved. The generator never mutates them.
"""

from dataclasses import dataclass, field
from enum import Enum


class ElementType(Enum):
    """Primitive element types of a type signature"""
    VOID = "void"
    BOOLEAN = "boolean"
    CHAR = "char"
    I1 = "i1"
    U1 = "u1"
    I2 = "i2"
    U2 = "u2"
    I4 = "i4"
    U4 = "u4"
    I8 = "i8"
    U8 = "u8"
    R4 = "r4"
    R8 = "r8"
    STRING = "string"
    I = "i"
    U = "u"
    OBJECT = "object"


class TypeLayout(Enum):
    AUTO = "auto"
    SEQUENTIAL = "sequential"
    EXPLICIT = "explicit"


class MemberAccess(Enum):
    PUBLIC = "public"
    PRIVATE = "private"


class NativeType(Enum):
    """Native representation requested by a field-marshal attribute"""
    LPSTR = "lpstr"
    LPWSTR = "lpwstr"
    BOOL = "bool"
    INTERFACE = "interface"
    ARRAY = "array"


# Attribute fixed arguments: a closed set of literal kinds

@dataclass(frozen=True)
class IntArg:
    value: int


@dataclass(frozen=True)
class StringArg:
    value: str


@dataclass(frozen=True)
class EnumArg:
    type_name: str
    value: int


FixedArg = IntArg | StringArg | EnumArg


@dataclass
class Attribute:
    namespace: str
    name: str
    fixed_args: list[FixedArg] = field(default_factory=list)


@dataclass
class TypeSig:
    """Either a primitive element type or a TypeDef reference, plus pointer depth"""
    element: ElementType | None = None
    type_def: "TypeDef | None" = None
    ptr_count: int = 0

    def __post_init__(self):
        if (self.element is None) == (self.type_def is None):
            raise ValueError("TypeSig needs exactly one of 'element' or 'type_def'")
        if self.ptr_count < 0:
            raise ValueError(f"Invalid pointer depth: {self.ptr_count}")


@dataclass
class Field:
    name: str
    signature: TypeSig
    constant: int | None = None
    marshal: NativeType | None = None
    attributes: list[Attribute] = field(default_factory=list)


@dataclass
class ParamDef:
    name: str
    signature: TypeSig
    is_in: bool = False
    is_out: bool = False
    marshal: NativeType | None = None


@dataclass
class MethodDef:
    name: str
    params: list[ParamDef] = field(default_factory=list)
    return_type: TypeSig | None = None
    access: MemberAccess = MemberAccess.PUBLIC
    is_static: bool = False

    @property
    def is_public(self) -> bool:
        return self.access == MemberAccess.PUBLIC


@dataclass(eq=False)
class TypeDef:
    """One named type and its members

    Compared and hashed by identity: metadata may hold distinct types sharing a name.
    """
    namespace: str
    name: str
    extends: str | None = None
    is_interface: bool = False
    layout: TypeLayout = TypeLayout.AUTO
    fields: list[Field] = field(default_factory=list)
    methods: list[MethodDef] = field(default_factory=list)
    attributes: list[Attribute] = field(default_factory=list)
    enclosing_type: "TypeDef | None" = None

    @property
    def full_name(self) -> str:
        if self.enclosing_type is not None:
            return f"{self.enclosing_type.full_name}/{self.name}"
        return f"{self.namespace}.{self.name}" if self.namespace else self.name


def get_attribute(entity, namespace: str, name: str) -> Attribute | None:
    """Return the first attribute of an entity matching namespace and name"""
    for attribute in entity.attributes:
        if attribute.namespace == namespace and attribute.name == name:
            return attribute
    return None
