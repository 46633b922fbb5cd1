"""
Pytest configuration and fixtures
"""

from types import SimpleNamespace

import pytest

from cpp_binding_generator.metadata import ElementType, Field, NativeType, TypeLayout, MemberAccess

from factories import (
    UI,
    api_class,
    delegate,
    enum,
    fixed_buffer_attribute,
    interface,
    method,
    param,
    prim,
    ref,
    root_interface,
    struct,
)


@pytest.fixture
def temp_dir(tmp_path):
    """Directory for generated files and documents"""
    return tmp_path


@pytest.fixture
def sample_types():
    """A small metadata model covering every category the generator emits"""
    I4, U4 = ElementType.I4, ElementType.U4

    win32_error = enum("WIN32_ERROR", [("ERROR_SUCCESS", 0), ("ERROR_FILE_NOT_FOUND", 2)], underlying=U4)
    file_access = enum("FILE_ACCESS_FLAGS", [("FILE_READ_DATA", 1), ("FILE_WRITE_DATA", 2)],
                       underlying=U4, flags=True)

    point = struct("POINT", [("x", prim(I4)), ("y", prim(I4))])
    rect = struct("RECT", [("left", prim(I4)), ("top", prim(I4)), ("right", prim(I4)), ("bottom", prim(I4))])
    hwnd = struct("HWND", [("Value", prim(ElementType.I))])

    # WINDOWINFO carries every kind of nested helper type
    window_info = struct("WINDOWINFO", namespace=UI)
    name_buffer = struct("_szName_e__FixedBuffer", [(f"_{i}", prim(ElementType.CHAR)) for i in range(4)],
                         namespace=UI, enclosing=window_info)
    data_buffer = struct("<data>e__FixedBuffer", [("FixedElementField", prim(ElementType.U1))],
                         namespace=UI, enclosing=window_info)
    anonymous = struct("_Anonymous_e__Union", [("ptMin", ref(point)), ("dwStyle", prim(U4))],
                       namespace=UI, layout=TypeLayout.EXPLICIT, enclosing=window_info)
    window_info.fields = [
        Field("cbSize", prim(U4)),
        Field("rcWindow", ref(rect)),
        Field("szName", ref(name_buffer)),
        Field("data", ref(data_buffer), attributes=[fixed_buffer_attribute(16)]),
        Field("Anonymous", ref(anonymous)),
        Field("hwndOwner", ref(hwnd)),
    ]

    unknown = root_interface()
    sequential_stream = interface("ISequentialStream", [
        method("Read", [param("pv", prim(ElementType.VOID, 1), False, True), param("cb", prim(U4)),
                        param("pcbRead", prim(U4, 1), False, True)], prim(I4)),
        method("Write", [param("pv", prim(ElementType.VOID, 1)), param("cb", prim(U4)),
                         param("pcbWritten", prim(U4, 1), False, True)], prim(I4)),
    ], guid="0C733A30-2A1C-11CE-ADE5-00AA0044773A")
    persist_stream = interface("IPersistStream", [
        method("Load", [param("pStm", ref(sequential_stream, 1))], prim(I4)),
        method("Save", [param("pStm", ref(sequential_stream, 1)), param("fClearDirty", prim(ElementType.BOOLEAN))],
               prim(I4)),
    ], guid="00000109-0000-0000-C000-000000000046")
    marker = interface("IMarker", guid="11111111-2222-3333-4444-555555555555")

    enum_proc = delegate("WNDENUMPROC", [param("hwnd", ref(hwnd)), param("lParam", prim(ElementType.I))], prim(I4))

    apis = api_class("Apis", [
        method("MessageBoxA", [
            param("hWnd", ref(hwnd)),
            param("lpText", prim(ElementType.U1, 1), marshal=NativeType.LPSTR),
            param("lpCaption", prim(ElementType.U1, 1), marshal=NativeType.LPSTR),
            param("uType", prim(U4)),
        ], prim(I4), is_static=True),
        method("GetTickCount64", [], prim(ElementType.U8), is_static=True),
        method("SetProgress", [param("id", prim(I4)), param("data", prim(ElementType.VOID, 1)),
                               param("progress", prim(ElementType.R8))], is_static=True),
        method("CreateStreamOnData", [param("data", prim(ElementType.U1, 1)),
                                      param("stream", ref(sequential_stream, 2), False, True)],
               prim(I4), is_static=True),
        method("GetWindowTextW", [param("hWnd", ref(hwnd)),
                                  param("lpString", prim(ElementType.CHAR, 1), False, True, NativeType.LPWSTR),
                                  param("nMaxCount", prim(I4))], prim(I4), is_static=True),
        method("InternalHelper", [], access=MemberAccess.PRIVATE, is_static=True),
    ])

    types = [
        win32_error, file_access, point, rect, hwnd, window_info, name_buffer, data_buffer, anonymous,
        unknown, sequential_stream, persist_stream, marker, enum_proc, apis,
    ]
    return SimpleNamespace(
        win32_error=win32_error,
        file_access=file_access,
        point=point,
        rect=rect,
        hwnd=hwnd,
        window_info=window_info,
        name_buffer=name_buffer,
        data_buffer=data_buffer,
        anonymous=anonymous,
        unknown=unknown,
        sequential_stream=sequential_stream,
        persist_stream=persist_stream,
        marker=marker,
        enum_proc=enum_proc,
        apis=apis,
        all=types,
    )


SAMPLE_METADATA = """
<metadata>
    <type namespace="Windows.Win32.Foundation" name="WIN32_ERROR" extends="System.Enum">
        <field name="value__" type="U4"/>
        <field name="ERROR_SUCCESS" type="Windows.Win32.Foundation.WIN32_ERROR" constant="0"/>
        <field name="ERROR_ACCESS_DENIED" type="Windows.Win32.Foundation.WIN32_ERROR" constant="0x5"/>
    </type>
    <type namespace="Windows.Win32.Foundation" name="RECT" extends="System.ValueType" layout="sequential">
        <field name="left" type="I4"/>
        <field name="top" type="I4"/>
        <field name="right" type="I4"/>
        <field name="bottom" type="I4"/>
    </type>
    <type namespace="Windows.Win32.Foundation" name="HWND" extends="System.ValueType" layout="sequential">
        <field name="Value" type="I"/>
    </type>
    <type namespace="Windows.Win32.UI.WindowsAndMessaging" name="TITLEBARINFO" extends="System.ValueType" layout="sequential">
        <field name="cbSize" type="U4"/>
        <field name="rcTitleBar" type="Windows.Win32.Foundation.RECT"/>
        <field name="rgstate" type="Windows.Win32.UI.WindowsAndMessaging.TITLEBARINFO/_rgstate_e__FixedBuffer"/>
        <type name="_rgstate_e__FixedBuffer" extends="System.ValueType" layout="sequential">
            <field name="_0" type="U4"/>
            <field name="_1" type="U4"/>
            <field name="_2" type="U4"/>
        </type>
    </type>
    <type namespace="Windows.Win32.System.Com" name="IUnknown" interface="true">
        <method name="QueryInterface">
            <param name="riid" type="Void" pointer="1" in="true"/>
            <param name="ppvObject" type="Void" pointer="2" out="true"/>
            <return type="I4"/>
        </method>
        <method name="AddRef"><return type="U4"/></method>
        <method name="Release"><return type="U4"/></method>
    </type>
    <type namespace="Windows.Win32.System.Com" name="IPersist" interface="true">
        <attribute namespace="System.Runtime.InteropServices" name="GuidAttribute">
            <arg kind="string" value="0000010C-0000-0000-C000-000000000046"/>
        </attribute>
        <method name="QueryInterface">
            <param name="riid" type="Void" pointer="1" in="true"/>
            <param name="ppvObject" type="Void" pointer="2" out="true"/>
            <return type="I4"/>
        </method>
        <method name="AddRef"><return type="U4"/></method>
        <method name="Release"><return type="U4"/></method>
        <method name="GetClassID">
            <param name="pClassID" type="Void" pointer="1" out="true"/>
            <return type="I4"/>
        </method>
    </type>
    <type namespace="Windows.Win32.UI.WindowsAndMessaging" name="Apis" extends="System.Object">
        <method name="MessageBoxA" static="true">
            <param name="hWnd" type="Windows.Win32.Foundation.HWND" in="true"/>
            <param name="lpText" type="U1" pointer="1" in="true" marshal="lpstr"/>
            <param name="lpCaption" type="U1" pointer="1" in="true" marshal="lpstr"/>
            <param name="uType" type="U4" in="true"/>
            <return type="I4"/>
        </method>
        <method name="GetTickCount64" static="true">
            <return type="U8"/>
        </method>
    </type>
</metadata>
"""


@pytest.fixture
def sample_metadata_text():
    return SAMPLE_METADATA


@pytest.fixture
def sample_metadata_file(temp_dir):
    """Write the sample metadata document to a file"""
    path = temp_dir / "win32.xml"
    path.write_text(SAMPLE_METADATA)
    return path
