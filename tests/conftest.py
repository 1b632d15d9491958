"""Pytest configuration and fixtures."""

import json

import pytest

from spm_outdated.models import Pin
from spm_outdated.version import Version


@pytest.fixture
def resolved_v1():
    """Schema version 1 Package.resolved content."""
    return json.dumps({
        "object": {
            "pins": [
                {
                    "package": "Alamofire",
                    "repositoryURL": "https://github.com/Alamofire/Alamofire.git",
                    "state": {"branch": None, "revision": "f96b619", "version": "5.4.0"}
                },
                {
                    "package": "Kingfisher",
                    "repositoryURL": "https://github.com/onevcat/Kingfisher.git",
                    "state": {"branch": "master", "revision": "a1b2c3d", "version": None}
                }
            ]
        },
        "version": 1
    })


@pytest.fixture
def resolved_v2():
    """Schema version 2 Package.resolved content."""
    return json.dumps({
        "pins": [
            {
                "identity": "swift-log",
                "kind": "remoteSourceControl",
                "location": "https://github.com/apple/swift-log.git",
                "state": {"revision": "32e8d72", "version": "1.5.2"}
            },
            {
                "identity": "swift-argument-parser",
                "kind": "remoteSourceControl",
                "location": "https://github.com/apple/swift-argument-parser",
                "state": {"revision": "8f4d2753", "version": "1.2.3"}
            }
        ],
        "version": 2
    })


@pytest.fixture
def package_swift():
    """Package.swift declaring two direct dependencies."""
    return """// swift-tools-version:5.7
import PackageDescription

let package = Package(
    name: "Example",
    dependencies: [
        .package(url: "https://github.com/apple/swift-log.git", from: "1.5.2"),
        .package(url: "https://github.com/Alamofire/Alamofire", from: "5.4.0"),
    ],
    targets: [
        .target(name: "Example", dependencies: []),
    ]
)
"""


@pytest.fixture
def ls_remote_output():
    """Sample ``git ls-remote --tags`` output."""
    return (
        "a1\trefs/tags/5.4.0\n"
        "b2\trefs/tags/v5.5.0\n"
        "c3\trefs/tags/5.5.0^{}\n"
        "d4\trefs/tags/5.6.0\n"
        "e5\trefs/tags/nightly\n"
        "f6\trefs/tags/6.0.0-beta.1\n"
    )


@pytest.fixture
def alamofire_pin():
    return Pin(
        identity="Alamofire",
        location="https://github.com/Alamofire/Alamofire.git",
        revision="f96b619",
        version=Version.parse("5.4.0"),
    )
