"""Shared fixtures for patch renderer tests."""

import xml.etree.ElementTree as ET
from pathlib import Path

import pytest
import yaml

SVG_NS = "{http://www.w3.org/2000/svg}"
EXAMPLES_DIR = Path(__file__).parent.parent / "examples"


@pytest.fixture
def minimal_config():
    """Two modules and one cable, both modules at the origin."""
    return {
        "modules": [
            {"name": "Osc", "outputs": ["out"]},
            {"name": "Amp", "inputs": ["in"]},
        ],
        "connections": [
            {"from": "Osc:out", "to": "Amp:in"},
        ],
    }


@pytest.fixture
def vco_definitions():
    return {
        "VCO": {
            "inputs": ["fm"],
            "outputs": ["saw"],
            "width": 100,
            "knobs": [
                {"name": "tune", "value": 0.5},
                {"name": "wave", "value": 0, "positions": ["SIN", "SAW"]},
            ],
        },
    }


@pytest.fixture
def voice_config():
    """The example patch shipped with the package."""
    with open(EXAMPLES_DIR / "synth_voice.yaml", "r", encoding="utf-8") as f:
        return yaml.safe_load(f)


@pytest.fixture
def parse_svg():
    """Parse an SVG string into (root, top-level children)."""
    def _parse(svg: str):
        root = ET.fromstring(svg)
        return root, list(root)
    return _parse


@pytest.fixture
def by_class():
    """Select elements of an SVG string by tag and exact class attribute."""
    def _select(svg: str, tag: str, css_class: str):
        root = ET.fromstring(svg)
        return [
            el for el in root.iter(f"{SVG_NS}{tag}")
            if el.get("class") == css_class
        ]
    return _select
