"""
Constants and mappings for C++ declarations generation
"""

from .metadata import ElementType


# Mapping from metadata element types to native C++ types
NATIVE_TYPE_MAP = {
    ElementType.VOID: "void",
    ElementType.BOOLEAN: "bool",
    ElementType.CHAR: "wchar_t",
    ElementType.I1: "int8_t",
    ElementType.U1: "uint8_t",
    ElementType.I2: "int16_t",
    ElementType.U2: "uint16_t",
    ElementType.I4: "int32_t",
    ElementType.U4: "uint32_t",
    ElementType.I8: "int64_t",
    ElementType.U8: "uint64_t",
    ElementType.R4: "float",
    ElementType.R8: "double",
    ElementType.STRING: "const wchar_t*",
    ElementType.I: "intptr_t",
    ElementType.U: "uintptr_t",
    ElementType.OBJECT: "void*",
}

# Element types occupying an 8-byte stack slot when passed by value
EIGHT_BYTE_ELEMENT_TYPES = frozenset({ElementType.I8, ElementType.U8, ElementType.R8})

# Root C++ namespace of the generated declarations
ROOT_NAMESPACE = "win32"
IMPL_NAMESPACE = "win32::_impl_"

# Prefix of the externally linked entry points backing class methods
ABI_PREFIX = "WIN32_IMPL_"

# Base types that decide a type's category
ENUM_BASE = "System.Enum"
STRUCT_BASE = "System.ValueType"
DELEGATE_BASE = "System.MulticastDelegate"

# Universal root interface; its first three methods are inherited by every interface
ROOT_INTERFACE_NAMESPACE = "Windows.Win32.System.Com"
ROOT_INTERFACE_NAME = "IUnknown"
ROOT_INTERFACE_METHOD_COUNT = 3

# Name of the method describing a delegate's signature
DELEGATE_INVOKE_METHOD = "Invoke"

# Attributes consumed by the generator
FLAGS_ATTRIBUTE = ("System", "FlagsAttribute")
GUID_ATTRIBUTE = ("System.Runtime.InteropServices", "GuidAttribute")
FIXED_BUFFER_ATTRIBUTE = ("System.Runtime.CompilerServices", "FixedBufferAttribute")

# Name markers of compiler-synthesized nested helper types
FIXED_BUFFER_MARKER = "__FixedBuffer"
UNION_MARKER = "_e__Union"

# Length of the canonical textual GUID form
GUID_TEXT_LENGTH = 36

# C++ keywords that cannot be used as parameter or field names
CPP_KEYWORDS = frozenset({
    'alignas', 'alignof', 'and', 'asm', 'auto', 'bool', 'break', 'case',
    'catch', 'char', 'class', 'const', 'constexpr', 'const_cast', 'continue',
    'decltype', 'default', 'delete', 'do', 'double', 'dynamic_cast', 'else',
    'enum', 'explicit', 'export', 'extern', 'false', 'float', 'for', 'friend',
    'goto', 'if', 'inline', 'int', 'long', 'mutable', 'namespace', 'new',
    'noexcept', 'not', 'nullptr', 'operator', 'or', 'private', 'protected',
    'public', 'register', 'reinterpret_cast', 'return', 'short', 'signed',
    'sizeof', 'static', 'static_assert', 'static_cast', 'struct', 'switch',
    'template', 'this', 'thread_local', 'throw', 'true', 'try', 'typedef',
    'typeid', 'typename', 'union', 'unsigned', 'using', 'virtual', 'void',
    'volatile', 'wchar_t', 'while', 'xor',
})
