"""Tests for Package.swift direct dependency extraction."""

import logging

import pytest

from spm_outdated.errors import ManifestUnavailable
from spm_outdated.manifest import (
    direct_dependencies_from_source,
    extract_dependencies_section,
    extract_package_names,
    filter_direct_dependencies,
    read_direct_dependencies,
)
from spm_outdated.models import Pin


class TestManifestExtraction:
    """Test text extraction from Package.swift."""

    def test_extract_dependencies_section(self, package_swift):
        """Should return the body of the first dependencies list."""
        section = extract_dependencies_section(package_swift)
        assert "swift-log" in section
        assert ".target" not in section

    def test_extract_dependencies_section_missing(self):
        """Should return None without a dependencies list."""
        assert extract_dependencies_section('let package = Package(name: "Empty")') is None

    def test_extract_package_names(self, package_swift):
        """Should take the last URL component and strip .git."""
        names = extract_package_names(extract_dependencies_section(package_swift))
        assert names == ["swift-log", "Alamofire"]

    def test_extract_package_names_ignores_other_declarations(self):
        """Path dependencies and too-short URLs are skipped."""
        section = '''
            .package(path: "../Local"),
            .package(url: "Lonely", from: "1.0.0"),
            .package( url: "https://github.com/pointfreeco/swift-snapshot-testing", exact: "1.12.0"),
            .package(url: "git@github.com:org/tool.git", branch: "main"),
        '''
        assert extract_package_names(section) == ["swift-snapshot-testing", "tool"]

    def test_direct_dependencies_from_source(self, package_swift):
        """Should combine section and name extraction."""
        assert direct_dependencies_from_source(package_swift) == ["swift-log", "Alamofire"]

    def test_direct_dependencies_without_section(self):
        """Should raise ManifestUnavailable without a dependencies section."""
        with pytest.raises(ManifestUnavailable):
            direct_dependencies_from_source("// nothing here")


class TestReadDirectDependencies:
    """Test reading Package.swift from disk."""

    def test_read_direct_dependencies(self, tmp_path, package_swift):
        """Should read names from Package.swift."""
        (tmp_path / "Package.swift").write_text(package_swift)
        assert read_direct_dependencies(tmp_path) == ["swift-log", "Alamofire"]

    def test_missing_manifest(self, tmp_path, caplog):
        """Should return None and warn when Package.swift is missing."""
        with caplog.at_level(logging.WARNING):
            assert read_direct_dependencies(tmp_path) is None
        assert "Package.swift file not found" in caplog.text

    def test_manifest_without_dependencies(self, tmp_path, caplog):
        """Should return None when there is no dependencies section."""
        (tmp_path / "Package.swift").write_text('let package = Package(name: "Empty")\n')
        with caplog.at_level(logging.WARNING):
            assert read_direct_dependencies(tmp_path) is None
        assert "dependencies section" in caplog.text


class TestFilterDirectDependencies:
    """Test filtering pins down to direct dependencies."""

    def setup_method(self):
        """Setup test fixtures."""
        self.pins = [
            Pin(identity="alamofire", location="https://github.com/Alamofire/Alamofire.git"),
            Pin(identity="swift-log", location="https://github.com/apple/swift-log.git"),
            Pin(identity="swift-atomics", location="https://github.com/apple/swift-atomics.git"),
        ]

    def test_filter_case_insensitive(self):
        """Should match identities case-insensitively."""
        filtered = filter_direct_dependencies(self.pins, ["Alamofire", "swift-log"])
        assert [pin.identity for pin in filtered] == ["alamofire", "swift-log"]

    def test_filter_unavailable(self, caplog):
        """Should keep all pins and warn when dependencies are unknown."""
        with caplog.at_level(logging.WARNING):
            filtered = filter_direct_dependencies(self.pins, None)

        assert filtered == self.pins
        assert "showing all dependencies" in caplog.text

    def test_filter_empty_list(self):
        """An empty dependency list keeps nothing."""
        assert filter_direct_dependencies(self.pins, []) == []
