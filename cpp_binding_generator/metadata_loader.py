"""
Loading of metadata documents (XML rendition of the type-metadata model)
"""

import sys
import xml.etree.ElementTree as ET
from pathlib import Path

from .metadata import (
    Attribute,
    ElementType,
    EnumArg,
    Field,
    IntArg,
    MemberAccess,
    MethodDef,
    NativeType,
    ParamDef,
    StringArg,
    TypeDef,
    TypeLayout,
    TypeSig,
)


def _is_true(element, name: str) -> bool:
    return element.get(name, "false").strip().lower() == "true"


def _required(element, name: str, context: str) -> str:
    value = element.get(name)
    if not value:
        raise ValueError(f"{context} missing '{name}' attribute")
    return value.strip()


def _parse_int(text: str, context: str) -> int:
    try:
        return int(text.strip(), 0)
    except ValueError:
        raise ValueError(f"Invalid integer '{text}' in {context}")


def _parse_enum(enum_type, text: str, context: str):
    try:
        return enum_type(text.strip().lower())
    except ValueError:
        raise ValueError(f"Unknown {enum_type.__name__} '{text}' in {context}")


class MetadataLoader:
    """Builds TypeDef graphs from one or more metadata documents

    Documents are declared first and resolved afterwards, so references may point
    forward or into another document.
    """

    def __init__(self):
        self.types = []
        self.types_by_name = {}
        self._pending = []  # (type_def, xml element) awaiting member resolution

    def declare(self, root):
        if root.tag != "metadata":
            raise ValueError(f"Expected root element 'metadata', got '{root.tag}'")
        for element in root.findall("type"):
            self._declare_type(element, None)

    def _declare_type(self, element, enclosing: TypeDef | None):
        context = "Type element"
        name = _required(element, "name", context)
        if enclosing is None:
            namespace = _required(element, "namespace", f"Type element '{name}'")
        else:
            namespace = enclosing.namespace

        type_def = TypeDef(
            namespace=namespace,
            name=name,
            extends=element.get("extends"),
            is_interface=_is_true(element, "interface"),
            layout=_parse_enum(TypeLayout, element.get("layout", "auto"), f"type '{name}'"),
            enclosing_type=enclosing,
        )
        if type_def.full_name in self.types_by_name:
            raise ValueError(f"Duplicate type '{type_def.full_name}'")

        self.types.append(type_def)
        self.types_by_name[type_def.full_name] = type_def
        self._pending.append((type_def, element))

        for nested in element.findall("type"):
            self._declare_type(nested, type_def)

    def _signature(self, element, context: str) -> TypeSig:
        type_text = _required(element, "type", context)
        ptr_count = _parse_int(element.get("pointer", "0"), context)
        if ptr_count < 0:
            raise ValueError(f"Invalid pointer depth {ptr_count} in {context}")

        try:
            return TypeSig(element=ElementType(type_text.lower()), ptr_count=ptr_count)
        except ValueError:
            pass

        type_def = self.types_by_name.get(type_text)
        if type_def is None:
            raise ValueError(f"Unknown type reference '{type_text}' in {context}")
        return TypeSig(type_def=type_def, ptr_count=ptr_count)

    def _marshal(self, element, context: str) -> NativeType | None:
        marshal = element.get("marshal")
        if marshal is None:
            return None
        return _parse_enum(NativeType, marshal, context)

    def _attributes(self, element, context: str) -> list[Attribute]:
        attributes = []
        for attribute in element.findall("attribute"):
            name = _required(attribute, "name", f"Attribute element in {context}")
            namespace = _required(attribute, "namespace", f"Attribute element '{name}' in {context}")
            args = []
            for arg in attribute.findall("arg"):
                arg_context = f"argument of '{name}' in {context}"
                kind = arg.get("kind", "int").strip().lower()
                value = _required(arg, "value", f"Arg element of '{name}' in {context}")
                if kind == "int":
                    args.append(IntArg(_parse_int(value, arg_context)))
                elif kind == "string":
                    args.append(StringArg(value))
                elif kind == "enum":
                    args.append(EnumArg(_required(arg, "type", f"Arg element of '{name}' in {context}"),
                                        _parse_int(value, arg_context)))
                else:
                    raise ValueError(f"Unknown argument kind '{kind}' in {arg_context}")
            attributes.append(Attribute(namespace, name, args))
        return attributes

    def _method(self, element, owner: str) -> MethodDef:
        name = _required(element, "name", f"Method element in '{owner}'")
        context = f"method '{owner}.{name}'"

        params = []
        for param in element.findall("param"):
            param_context = f"parameter of {context}"
            params.append(ParamDef(
                name=param.get("name", ""),
                signature=self._signature(param, param_context),
                is_in=_is_true(param, "in"),
                is_out=_is_true(param, "out"),
                marshal=self._marshal(param, param_context),
            ))

        return_element = element.find("return")
        return_type = None
        if return_element is not None:
            return_type = self._signature(return_element, f"return of {context}")

        return MethodDef(
            name=name,
            params=params,
            return_type=return_type,
            access=_parse_enum(MemberAccess, element.get("access", "public"), context),
            is_static=_is_true(element, "static"),
        )

    def resolve(self) -> list[TypeDef]:
        """Populate members of every declared type and return all types"""
        for type_def, element in self._pending:
            owner = type_def.full_name
            type_def.attributes = self._attributes(element, f"type '{owner}'")
            for field in element.findall("field"):
                name = _required(field, "name", f"Field element in '{owner}'")
                context = f"field '{owner}.{name}'"
                constant = field.get("constant")
                type_def.fields.append(Field(
                    name=name,
                    signature=self._signature(field, context),
                    constant=_parse_int(constant, context) if constant is not None else None,
                    marshal=self._marshal(field, context),
                    attributes=self._attributes(field, context),
                ))
            for method in element.findall("method"):
                type_def.methods.append(self._method(method, owner))
        self._pending.clear()
        return self.types


def parse_metadata(text: str) -> list[TypeDef]:
    """Parse a metadata document from a string"""
    try:
        root = ET.fromstring(text)
    except ET.ParseError as e:
        raise ValueError(f"XML parsing error: {e}")
    loader = MetadataLoader()
    loader.declare(root)
    return loader.resolve()


def load_metadata(paths: list[str], ignore_missing: bool = False) -> list[TypeDef]:
    """Load and merge metadata documents

    Args:
        paths: Metadata document paths
        ignore_missing: Warn about missing files instead of failing
    """
    loader = MetadataLoader()
    for path in paths:
        if not Path(path).exists():
            if ignore_missing:
                print(f"Warning: Metadata file not found: {path}", file=sys.stderr)
                continue
            raise FileNotFoundError(f"Metadata file not found: {path}")

        print(f"Processing: {path}")
        try:
            loader.declare(ET.parse(path).getroot())
        except ET.ParseError as e:
            raise ValueError(f"XML parsing error in {path}: {e}")

    types = loader.resolve()
    print(f"Loaded {len(types)} type(s)")
    return types
