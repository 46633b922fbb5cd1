"""
Type mapping logic for converting metadata signatures to C++ types
"""

import re
from dataclasses import dataclass

from .constants import NATIVE_TYPE_MAP, FLAGS_ATTRIBUTE, ROOT_NAMESPACE
from .metadata import NativeType, ParamDef, TypeDef, TypeSig, get_attribute
from .type_classifier import Category, get_category


@dataclass(frozen=True)
class RenderMode:
    """How a signature is rendered for one emission call

    Attributes:
        abi: Render exact calling-convention types (interfaces become void)
        full_namespace: Always qualify type names
        namespace: Namespace being written; types from other namespaces are qualified
    """
    abi: bool = False
    full_namespace: bool = False
    namespace: str | None = None

    @classmethod
    def user(cls, namespace: str | None = None) -> "RenderMode":
        return cls(namespace=namespace)

    @classmethod
    def qualified(cls) -> "RenderMode":
        return cls(full_namespace=True)

    @classmethod
    def abi_mode(cls) -> "RenderMode":
        return cls(abi=True, full_namespace=True)


def cpp_namespace(namespace: str) -> str:
    """Map a dotted metadata namespace to its C++ namespace"""
    if not namespace:
        return ROOT_NAMESPACE
    return "::".join([ROOT_NAMESPACE] + namespace.split("."))


def impl_name(type_def: TypeDef) -> str:
    """Identifier-safe name used for implementation helpers (consume_Ns_Name)"""
    return f"{type_def.namespace.replace('.', '_')}_{type_def.name}"


# Marshal kind -> (type when the parameter is [in], type otherwise)
_STRING_MARSHALING = {
    NativeType.LPSTR: ("const char*", "char*"),
    NativeType.LPWSTR: ("const wchar_t*", "wchar_t*"),
}


class TypeMapper:
    """Maps metadata type signatures to C++ types"""

    def __init__(self):
        self.type_map = NATIVE_TYPE_MAP.copy()
        # (pattern, is_regex) tuples matched against type names
        self.removals = []
        self.flag_enums = []

    @staticmethod
    def _matches(patterns, type_def: TypeDef) -> bool:
        for pattern, is_regex in patterns:
            for candidate in (type_def.name, type_def.full_name):
                if is_regex:
                    if re.fullmatch(pattern, candidate):
                        return True
                elif pattern == candidate:
                    return True
        return False

    def add_removal(self, pattern: str, is_regex: bool = False):
        """Exclude types whose name or full name matches the pattern"""
        if is_regex:
            re.compile(pattern)
        self.removals.append((pattern, is_regex))

    def is_removed(self, type_def: TypeDef) -> bool:
        return self._matches(self.removals, type_def)

    def add_flag_enum(self, pattern: str, is_regex: bool = False):
        """Treat matching enums as flags even without FlagsAttribute"""
        if is_regex:
            re.compile(pattern)
        self.flag_enums.append((pattern, is_regex))

    def is_flag_enum(self, type_def: TypeDef) -> bool:
        if get_attribute(type_def, *FLAGS_ATTRIBUTE) is not None:
            return True
        return self._matches(self.flag_enums, type_def)

    def type_name(self, type_def: TypeDef, mode: RenderMode) -> str:
        """Declared name of a type, qualified when the context requires it"""
        if mode.full_namespace or mode.namespace != type_def.namespace:
            return f"{cpp_namespace(type_def.namespace)}::{type_def.name}"
        return type_def.name

    def map_type(self, sig: TypeSig, mode: RenderMode) -> str:
        """Map a signature structurally: base type followed by one '*' per pointer level"""
        if sig.element is not None:
            base = self.type_map[sig.element]
        elif mode.abi and get_category(sig.type_def) == Category.INTERFACE:
            # Interface pointers cross the ABI untyped
            base = "void"
        else:
            base = self.type_name(sig.type_def, mode)
        return base + "*" * sig.ptr_count

    def map_marshaled(self, sig: TypeSig, marshal: NativeType | None, is_in: bool, mode: RenderMode) -> str:
        """Map a signature, letting a string-like field-marshal override win

        Args:
            sig: Structural signature of the field or parameter
            marshal: Field-marshal override, if any
            is_in: True for [in] parameters (selects the const pointer form)
            mode: Rendering mode of the current emission call
        """
        if marshal in _STRING_MARSHALING:
            in_type, out_type = _STRING_MARSHALING[marshal]
            return in_type if is_in else out_type
        return self.map_type(sig, mode)

    def map_param(self, param: ParamDef, mode: RenderMode) -> str:
        return self.map_marshaled(param.signature, param.marshal, param.is_in, mode)

    def map_return(self, sig: TypeSig | None, mode: RenderMode) -> str:
        if sig is None:
            return "void"
        return self.map_type(sig, mode)
