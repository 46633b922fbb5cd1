"""
Decoding of GuidAttribute values into the platform GUID layout
"""

import re
import struct
from typing import NamedTuple

from .constants import GUID_ATTRIBUTE, GUID_TEXT_LENGTH
from .errors import AttributeContractError
from .metadata import StringArg, TypeDef, get_attribute


class Guid(NamedTuple):
    data1: int
    data2: int
    data3: int
    data4: tuple[int, ...]

    def to_bytes(self) -> bytes:
        """The 16-byte in-memory layout (little-endian Data1..Data3)"""
        return struct.pack("<IHH", self.data1, self.data2, self.data3) + bytes(self.data4)


# (start, end) slices of the canonical text xxxxxxxx-xxxx-xxxx-xxxx-xxxxxxxxxxxx
_DATA4_SLICES = [(19, 21), (21, 23), (24, 26), (26, 28), (28, 30), (30, 32), (32, 34), (34, 36)]

_GUID_PATTERN = re.compile(r"[0-9A-Fa-f]{8}-[0-9A-Fa-f]{4}-[0-9A-Fa-f]{4}-[0-9A-Fa-f]{4}-[0-9A-Fa-f]{12}")


def to_guid(text: str, type_name: str | None = None) -> Guid:
    """Parse the canonical textual GUID form"""
    if len(text) < GUID_TEXT_LENGTH:
        raise AttributeContractError("Invalid GuidAttribute blob", type_name)
    if not _GUID_PATTERN.match(text):
        raise AttributeContractError(f"Invalid GuidAttribute blob '{text}'", type_name)
    return Guid(
        int(text[0:8], 16),
        int(text[9:13], 16),
        int(text[14:18], 16),
        tuple(int(text[start:end], 16) for start, end in _DATA4_SLICES),
    )


def format_guid_value(guid: Guid) -> str:
    """Render a GUID as a brace initializer for the guid struct"""
    data4 = ",".join(f"0x{byte:02X}" for byte in guid.data4)
    return f"0x{guid.data1:08X},0x{guid.data2:04X},0x{guid.data3:04X},{{ {data4} }}"


def get_guid_text(type_def: TypeDef) -> str | None:
    """Return the textual GUID from a type's GuidAttribute, or None when absent"""
    attribute = get_attribute(type_def, *GUID_ATTRIBUTE)
    if attribute is None:
        return None
    if not attribute.fixed_args or not isinstance(attribute.fixed_args[0], StringArg):
        raise AttributeContractError("GuidAttribute should have a string argument", type_def.full_name)
    return attribute.fixed_args[0].value
