"""
Code generation functions for C++ declarations
"""

from .constants import (
    ABI_PREFIX,
    CPP_KEYWORDS,
    DELEGATE_INVOKE_METHOD,
    EIGHT_BYTE_ELEMENT_TYPES,
    ROOT_INTERFACE_METHOD_COUNT,
    ROOT_INTERFACE_NAME,
    ROOT_INTERFACE_NAMESPACE,
)
from .errors import AttributeContractError, InvariantError
from .guid import format_guid_value, get_guid_text, to_guid
from .metadata import MethodDef, TypeDef, TypeSig
from .type_classifier import Category, FieldShape, classify_field, get_category
from .type_mapper import RenderMode, TypeMapper, cpp_namespace, impl_name


ROOT_INTERFACE_BASE = f"{cpp_namespace(ROOT_INTERFACE_NAMESPACE)}::{ROOT_INTERFACE_NAME}"


class CodeGenerator:
    """Generates C++ declarations from metadata types"""

    def __init__(self, type_mapper: TypeMapper):
        self.type_mapper = type_mapper

    @staticmethod
    def _escape_keyword(name: str) -> str:
        """Escape C++ keywords by appending an underscore"""
        if name in CPP_KEYWORDS:
            return f"{name}_"
        return name

    @staticmethod
    def _public_methods(type_def: TypeDef) -> list[MethodDef]:
        return [method for method in type_def.methods if method.is_public]

    def _param_names(self, method: MethodDef) -> list[str]:
        return [
            self._escape_keyword(param.name) if param.name else f"param{index}"
            for index, param in enumerate(method.params)
        ]

    def _params(self, method: MethodDef, mode: RenderMode) -> str:
        return ", ".join(
            f"{self.type_mapper.map_param(param, mode)} {name}"
            for param, name in zip(method.params, self._param_names(method))
        )

    def _forward_call(self, callee: str, method: MethodDef, mode: RenderMode) -> str:
        """Call an ABI entry point with a user-facing method's arguments

        Arguments are passed through unchanged unless their ABI type differs from the
        user-facing one (interface pointers), in which case they are reinterpreted.
        """
        abi = RenderMode.abi_mode()
        qualified = RenderMode.qualified()
        args = []
        for param, name in zip(method.params, self._param_names(method)):
            abi_type = self.type_mapper.map_param(param, abi)
            if abi_type == self.type_mapper.map_param(param, qualified):
                args.append(name)
            else:
                args.append(f"reinterpret_cast<{abi_type}>({name})")
        call = f"{callee}({', '.join(args)})"
        if self.type_mapper.map_return(method.return_type, abi) != self.type_mapper.map_return(method.return_type, qualified):
            call = f"reinterpret_cast<{self.type_mapper.map_return(method.return_type, mode)}>({call})"
        return call

    def generate_forward(self, type_def: TypeDef) -> str:
        return f"    struct {type_def.name};\n"

    def generate_enum(self, type_def: TypeDef, mode: RenderMode) -> str:
        """Generate an enum class whose underlying type comes from the first field"""
        if not type_def.fields:
            raise InvariantError("Enum has no underlying type field", type_def.full_name)
        underlying = self.type_mapper.map_type(type_def.fields[0].signature, mode)

        values = "".join(
            f"        {self._escape_keyword(field.name)} = {field.constant},\n"
            for field in type_def.fields
            if field.constant is not None
        )

        return f'''    enum class {type_def.name} : {underlying}
    {{
{values}    }};
'''

    def generate_enum_operators(self, type_def: TypeDef) -> str:
        """Generate bitwise operators for flags enums, nothing for other enums"""
        if not self.type_mapper.is_flag_enum(type_def):
            return ""

        name = type_def.name
        return f'''    constexpr auto operator|({name} const left, {name} const right) noexcept
    {{
        return static_cast<{name}>(_impl_::to_underlying_type(left) | _impl_::to_underlying_type(right));
    }}
    constexpr auto operator|=({name}& left, {name} const right) noexcept
    {{
        left = left | right;
        return left;
    }}
    constexpr auto operator&({name} const left, {name} const right) noexcept
    {{
        return static_cast<{name}>(_impl_::to_underlying_type(left) & _impl_::to_underlying_type(right));
    }}
    constexpr auto operator&=({name}& left, {name} const right) noexcept
    {{
        left = left & right;
        return left;
    }}
    constexpr auto operator~({name} const value) noexcept
    {{
        return static_cast<{name}>(~_impl_::to_underlying_type(value));
    }}
    constexpr auto operator^({name} const left, {name} const right) noexcept
    {{
        return static_cast<{name}>(_impl_::to_underlying_type(left) ^ _impl_::to_underlying_type(right));
    }}
    constexpr auto operator^=({name}& left, {name} const right) noexcept
    {{
        left = left ^ right;
        return left;
    }}
'''

    def generate_struct(self, type_def: TypeDef, mode: RenderMode) -> str:
        """Generate a struct, inlining fixed buffers and omitting anonymous unions/structs"""
        fields = []
        for field in type_def.fields:
            struct_field = classify_field(field, type_def)
            if struct_field.is_skipped:
                continue

            field_type = self.type_mapper.map_marshaled(struct_field.signature, field.marshal, False, mode)
            field_name = self._escape_keyword(struct_field.name)
            if struct_field.shape == FieldShape.INLINE_ARRAY:
                fields.append(f"        {field_type} {field_name}[{struct_field.array_count}];\n")
            else:
                fields.append(f"        {field_type} {field_name};\n")

        return f'''    struct {type_def.name}
    {{
{"".join(fields)}    }};
'''

    def generate_delegate(self, type_def: TypeDef, mode: RenderMode) -> str:
        """Generate a function pointer alias from the delegate's Invoke method"""
        invoke = next((method for method in type_def.methods if method.name == DELEGATE_INVOKE_METHOD), None)
        if invoke is None:
            raise InvariantError(f"Delegate has no {DELEGATE_INVOKE_METHOD} method", type_def.full_name)

        result_type = self.type_mapper.map_return(invoke.return_type, mode)
        params = ", ".join(self.type_mapper.map_param(param, mode) for param in invoke.params)
        return f"    using {type_def.name} = std::add_pointer_t<{result_type} __stdcall({params})>;\n"

    def generate_class(self, type_def: TypeDef, mode: RenderMode) -> str:
        """Generate a struct whose methods forward to the externally linked entry points"""
        methods = []
        for method in self._public_methods(type_def):
            modifier = "static " if method.is_static else ""
            result_type = self.type_mapper.map_return(method.return_type, mode)
            call = self._forward_call(f"{ABI_PREFIX}{method.name}", method, mode)
            methods.append(f'''        {modifier}{result_type} {method.name}({self._params(method, mode)})
        {{
            return {call};
        }}
''')

        return f'''    struct {type_def.name}
    {{
{"".join(methods)}    }};
'''

    def generate_class_abi(self, type_def: TypeDef) -> str:
        """Declare the extern "C" entry point of every public method"""
        mode = RenderMode.abi_mode()
        declarations = []
        for method in self._public_methods(type_def):
            result_type = self.type_mapper.map_return(method.return_type, mode)
            declarations.append(
                f"    {result_type} __stdcall {ABI_PREFIX}{method.name}({self._params(method, mode)}) noexcept;\n"
            )
        return "".join(declarations)

    @staticmethod
    def get_param_size(sig: TypeSig) -> int:
        """Native stack slot size of a parameter"""
        if sig.ptr_count == 0 and sig.element in EIGHT_BYTE_ELEMENT_TYPES:
            return 8
        return 4

    def get_link_token(self, method: MethodDef) -> tuple[str, int]:
        """(name, stack size) pair binding a method to its decorated entry point"""
        return method.name, sum(self.get_param_size(param.signature) for param in method.params)

    def generate_class_links(self, type_def: TypeDef) -> str:
        links = []
        for method in self._public_methods(type_def):
            name, size = self.get_link_token(method)
            links.append(f"WIN32_IMPL_LINK({name}, {size})\n")
        return "".join(links)

    @staticmethod
    def is_root_interface(type_def: TypeDef) -> bool:
        return type_def.namespace == ROOT_INTERFACE_NAMESPACE and type_def.name == ROOT_INTERFACE_NAME

    def generate_guid(self, type_def: TypeDef) -> str:
        """Bind an interface or class to the GUID in its GuidAttribute"""
        is_interface = get_category(type_def) == Category.INTERFACE
        # The root interface comes from the base layer; malformed interfaces are skipped
        if is_interface and not self.should_write_interface(type_def):
            return ""

        guid_text = get_guid_text(type_def)
        if guid_text is None:
            if is_interface:
                raise AttributeContractError(
                    "'System.Runtime.InteropServices.GuidAttribute' attribute not found", type_def.full_name
                )
            return ""

        guid_value = format_guid_value(to_guid(guid_text, type_def.full_name))
        qualified_name = self.type_mapper.type_name(type_def, RenderMode.qualified())
        return f"    template <> inline constexpr guid guid_v<{qualified_name}>{{ {guid_value} }}; // {guid_text}\n"

    @staticmethod
    def own_methods(type_def: TypeDef) -> list[MethodDef]:
        """Methods declared by the interface itself, after the inherited root slots"""
        if len(type_def.methods) < ROOT_INTERFACE_METHOD_COUNT:
            raise InvariantError(
                f"Expected at least {ROOT_INTERFACE_METHOD_COUNT} methods before slicing inherited ones",
                type_def.full_name,
            )
        return type_def.methods[ROOT_INTERFACE_METHOD_COUNT:]

    def should_write_interface(self, type_def: TypeDef) -> bool:
        return not self.is_root_interface(type_def) and len(type_def.methods) >= ROOT_INTERFACE_METHOD_COUNT

    def has_own_methods(self, type_def: TypeDef) -> bool:
        return self.should_write_interface(type_def) and len(type_def.methods) > ROOT_INTERFACE_METHOD_COUNT

    def generate_interface_abi(self, type_def: TypeDef) -> str:
        """Generate the abstract dispatch table of an interface's own methods"""
        if not self.has_own_methods(type_def):
            return ""

        mode = RenderMode.abi_mode()
        qualified_name = self.type_mapper.type_name(type_def, mode)
        slots = []
        for method in self.own_methods(type_def):
            result_type = self.type_mapper.map_return(method.return_type, mode)
            slots.append(
                f"            virtual {result_type} __stdcall {method.name}({self._params(method, mode)}) noexcept = 0;\n"
            )

        return f'''    template <> struct abi<{qualified_name}>
    {{
        struct __declspec(novtable) type : unknown_abi
        {{
{"".join(slots)}        }};
    }};
'''

    def generate_consume(self, type_def: TypeDef) -> str:
        """Declare the user-facing methods mixed into an interface handle"""
        if not self.has_own_methods(type_def):
            return ""

        mode = RenderMode.qualified()
        declarations = "".join(
            f"        WIN32_IMPL_AUTO({self.type_mapper.map_return(method.return_type, mode)}) "
            f"{method.name}({self._params(method, mode)}) const;\n"
            for method in self.own_methods(type_def)
        )

        return f'''    struct consume_{impl_name(type_def)}
    {{
{declarations}    }};
'''

    def generate_consume_definitions(self, type_def: TypeDef) -> str:
        """Define the consumer methods as calls through the dispatch table"""
        if not self.has_own_methods(type_def):
            return ""

        mode = RenderMode.qualified()
        qualified_name = self.type_mapper.type_name(type_def, mode)
        definitions = []
        for method in self.own_methods(type_def):
            result_type = self.type_mapper.map_return(method.return_type, mode)
            call = self._forward_call(f"(*(abi_t<{qualified_name}>**)&self)->{method.name}", method, mode)
            definitions.append(f'''    inline WIN32_IMPL_AUTO({result_type}) consume_{impl_name(type_def)}::{method.name}({self._params(method, mode)}) const
    {{
        auto const& self = static_cast<{qualified_name} const&>(*this);
        return {call};
    }}
''')
        return "".join(definitions)

    def generate_interface(self, type_def: TypeDef) -> str:
        """Generate the handle type combining the root interface and the consumer mixin"""
        if not self.should_write_interface(type_def):
            return ""

        name = type_def.name
        bases = [ROOT_INTERFACE_BASE]
        if self.has_own_methods(type_def):
            bases.append(f"_impl_::consume_{impl_name(type_def)}")
        bases_str = ",\n".join(f"        {base}" for base in bases)

        return f'''    struct __declspec(empty_bases) {name} :
{bases_str}
    {{
        {name}(std::nullptr_t = nullptr) noexcept {{}}
        {name}(void* ptr, take_ownership_from_abi_t) noexcept : {ROOT_INTERFACE_BASE}(ptr, take_ownership_from_abi) {{}}
    }};
'''
