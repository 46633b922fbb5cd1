"""
XML configuration file parsing for C++ declarations generator
"""

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field


@dataclass
class BindingConfig:
    """Configuration for C++ declarations generation"""
    metadata_files: list[str] = field(default_factory=list)
    removals: list[tuple[str, bool]] = field(default_factory=list)
    flag_enums: list[tuple[str, bool]] = field(default_factory=list)
    verify: bool = False


def _patterns(root, tag: str, label: str) -> list[tuple[str, bool]]:
    patterns = []
    for element in root.findall(tag):
        pattern = element.get("pattern")
        if not pattern:
            raise ValueError(f"{label} element missing 'pattern' attribute")
        is_regex = element.get("regex", "false").lower() == "true"
        patterns.append((pattern.strip(), is_regex))
    return patterns


def parse_config_file(config_path):
    """Parse XML configuration file and return BindingConfig object"""
    try:
        tree = ET.parse(config_path)
        root = tree.getroot()

        if root.tag != "bindings":
            raise ValueError(f"Expected root element 'bindings', got '{root.tag}'")

        config = BindingConfig()
        config.verify = root.get("verify", "false").strip().lower() == "true"

        # Metadata documents to generate declarations for
        for metadata in root.findall("metadata"):
            path = metadata.get("file")
            if not path:
                raise ValueError("Metadata element missing 'file' attribute")
            config.metadata_files.append(path.strip())

        # Types to leave out (support both simple and regex)
        config.removals = _patterns(root, "remove", "Remove")

        # Enums that get bitwise operators even without FlagsAttribute
        config.flag_enums = _patterns(root, "flags", "Flags")

        return config

    except ET.ParseError as e:
        raise ValueError(f"XML parsing error: {e}")
    except FileNotFoundError:
        raise FileNotFoundError(f"Configuration file not found: {config_path}")
