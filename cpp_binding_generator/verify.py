"""
Syntax and semantic check of generated headers with libclang
"""

import clang.cindex


VERIFY_FILE_NAME = "generated_header.cpp"

CLANG_ARGS = ['-x', 'c++', '-std=c++17', '-fms-extensions']

# Minimal stand-ins for the base layer every generated header builds on
VERIFY_PRELUDE = """typedef signed char int8_t;
typedef unsigned char uint8_t;
typedef short int16_t;
typedef unsigned short uint16_t;
typedef int int32_t;
typedef unsigned int uint32_t;
typedef long long int64_t;
typedef unsigned long long uint64_t;
typedef __INTPTR_TYPE__ intptr_t;
typedef __UINTPTR_TYPE__ uintptr_t;

namespace std
{
    using nullptr_t = decltype(nullptr);
    template <typename T> struct add_pointer { using type = T*; };
    template <typename T> using add_pointer_t = typename add_pointer<T>::type;
}

#define WIN32_IMPL_AUTO(...) __VA_ARGS__
#define WIN32_IMPL_LINK(function, count)

namespace win32
{
    struct take_ownership_from_abi_t {};
    inline constexpr take_ownership_from_abi_t take_ownership_from_abi{};

    struct guid
    {
        uint32_t Data1;
        uint16_t Data2;
        uint16_t Data3;
        uint8_t Data4[8];
    };
}

namespace win32::_impl_
{
    template <typename T>
    constexpr auto to_underlying_type(T const value) noexcept
    {
        return static_cast<__underlying_type(T)>(value);
    }

    template <typename T> inline constexpr guid guid_v{};

    template <typename T> struct abi { using type = T; };
    template <typename T> using abi_t = typename abi<T>::type;

    struct unknown_abi
    {
        virtual int32_t __stdcall QueryInterface(guid const& id, void** object) noexcept = 0;
        virtual uint32_t __stdcall AddRef() noexcept = 0;
        virtual uint32_t __stdcall Release() noexcept = 0;
    };
}

namespace win32::Windows::Win32::System::Com
{
    struct IUnknown
    {
        IUnknown(std::nullptr_t = nullptr) noexcept {}
        IUnknown(void* ptr, take_ownership_from_abi_t) noexcept : m_ptr(ptr) {}

    private:
        void* m_ptr{};
    };
}

"""

PRELUDE_LINE_COUNT = VERIFY_PRELUDE.count("\n")


def verify_header(text: str, extra_args: list[str] | None = None) -> list[str]:
    """Parse a generated header and return its error diagnostics

    Args:
        text: Header text as produced by the generator
        extra_args: Additional clang arguments

    Returns:
        Messages of error and fatal diagnostics, with line numbers relative to the header
    """
    index = clang.cindex.Index.create()
    args = CLANG_ARGS + (extra_args or [])
    tu = index.parse(
        VERIFY_FILE_NAME,
        args=args,
        unsaved_files=[(VERIFY_FILE_NAME, VERIFY_PRELUDE + text)],
    )

    errors = []
    for diag in tu.diagnostics:
        if diag.severity < clang.cindex.Diagnostic.Error:
            continue
        line = diag.location.line - PRELUDE_LINE_COUNT
        if line > 0:
            errors.append(f"line {line}: {diag.spelling}")
        else:
            errors.append(f"prelude line {diag.location.line}: {diag.spelling}")
    return errors


def check_header(text: str, extra_args: list[str] | None = None):
    """Raise RuntimeError when the generated header does not compile"""
    errors = verify_header(text, extra_args)
    if errors:
        raise RuntimeError(f"Generated header has errors: {'; '.join(errors)}")
