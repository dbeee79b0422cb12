from __future__ import annotations

import pytest

from hud_config.defaults import DEFAULT_VERSION, VERSIONS, default_document
from hud_config.document import find_unsupported, section_names
from hud_layout.modules import HUD_SECTION, derive_hud_modules


def test_versions_and_default():
    assert VERSIONS == ("v4", "v5", "v6")
    assert DEFAULT_VERSION == "v6"


@pytest.mark.parametrize("version", VERSIONS)
def test_defaults_are_fully_supported(version):
    document = default_document(version)
    assert document["namespace"] == "gc"
    assert section_names(document)[0] == HUD_SECTION
    assert find_unsupported(document) == []


def test_container_section_added_in_v5():
    assert "container_config@gc.pnl" not in default_document("v4")
    assert "container_config@gc.pnl" in default_document("v5")


def test_newer_versions_expose_more_modules():
    counts = [len(derive_hud_modules(default_document(version)[HUD_SECTION])) for version in VERSIONS]
    assert counts == sorted(counts)
    assert counts[0] < counts[-1]


def test_default_document_returns_copies():
    first = default_document("v6")
    first[HUD_SECTION]["$fps"] = True
    assert default_document("v6")[HUD_SECTION]["$fps"] is False


def test_unknown_version_raises():
    with pytest.raises(KeyError):
        default_document("v3")
