"""
Tests for XML configuration file parsing
"""

import pytest

from cpp_binding_generator.config import BindingConfig, parse_config_file


class TestXMLConfigParsing:
    """Test XML configuration file parsing functionality"""

    def test_parse_valid_config_file(self, temp_dir):
        """Test parsing a valid XML configuration file"""
        config_file = temp_dir / "config.xml"
        config_file.write_text("""
        <bindings>
            <metadata file="/path/to/win32.xml"/>
            <metadata file=" /path/to/extra.xml "/>
        </bindings>
        """)

        config = parse_config_file(str(config_file))

        assert config.metadata_files == ["/path/to/win32.xml", "/path/to/extra.xml"]
        assert config.removals == []
        assert config.flag_enums == []
        assert config.verify is False

    def test_parse_removals_and_flags(self, temp_dir):
        """Test removal and flag-enum patterns"""
        config_file = temp_dir / "config.xml"
        config_file.write_text("""
        <bindings verify="true">
            <metadata file="win32.xml"/>
            <remove pattern="IUnknown"/>
            <remove pattern="IMAGE_.*" regex="true"/>
            <flags pattern=".*_STYLE" regex="TRUE"/>
        </bindings>
        """)

        config = parse_config_file(str(config_file))

        assert config.removals == [("IUnknown", False), ("IMAGE_.*", True)]
        assert config.flag_enums == [(".*_STYLE", True)]
        assert config.verify is True

    def test_defaults(self):
        """Test an empty configuration"""
        config = BindingConfig()
        assert config.metadata_files == []
        assert config.verify is False

    def test_missing_file_attribute(self, temp_dir):
        """Test metadata elements must name a file"""
        config_file = temp_dir / "config.xml"
        config_file.write_text("<bindings><metadata/></bindings>")
        with pytest.raises(ValueError, match="Metadata element missing 'file' attribute"):
            parse_config_file(str(config_file))

    def test_missing_pattern(self, temp_dir):
        """Test remove and flags elements must carry a pattern"""
        config_file = temp_dir / "config.xml"
        config_file.write_text("<bindings><remove regex='true'/></bindings>")
        with pytest.raises(ValueError, match="Remove element missing 'pattern' attribute"):
            parse_config_file(str(config_file))

        config_file.write_text("<bindings><flags/></bindings>")
        with pytest.raises(ValueError, match="Flags element missing 'pattern' attribute"):
            parse_config_file(str(config_file))

    def test_wrong_root(self, temp_dir):
        """Test the root element must be 'bindings'"""
        config_file = temp_dir / "config.xml"
        config_file.write_text("<config/>")
        with pytest.raises(ValueError, match="Expected root element 'bindings'"):
            parse_config_file(str(config_file))

    def test_invalid_xml(self, temp_dir):
        """Test malformed XML is reported"""
        config_file = temp_dir / "config.xml"
        config_file.write_text("<bindings><metadata file='x.xml'>")
        with pytest.raises(ValueError, match="XML parsing error"):
            parse_config_file(str(config_file))

    def test_missing_config_file(self, temp_dir):
        """Test a missing configuration file"""
        with pytest.raises(FileNotFoundError, match="Configuration file not found"):
            parse_config_file(str(temp_dir / "missing.xml"))
