"""Tests for the layout calculator."""

import logging

import pytest
from patchvis.models import KnobSpec, RenderOptions
from patchvis.parsers import normalize
from patchvis.drawing import (
    Point,
    LayoutCalculator,
    KnobPlacement,
    knob_reading,
    layout_patch,
    snap,
    path_data,
)


class TestPrimitives:
    """Tests for geometry helpers."""

    def test_snap(self):
        """Test rounding of output coordinates."""
        assert snap(80.00000000000001) == 80
        assert isinstance(snap(80.0), int)
        assert snap(1.23456) == 1.23
        assert snap(-3.3e-15) == 0

    def test_polar(self):
        """Test points on a circle, clockwise from 3 o'clock."""
        center = Point(10, 10)
        assert center.polar(0, 5).to_tuple() == (15, 10)
        assert center.polar(90, 5).to_tuple() == (10, 15)
        assert center.polar(180, 5).to_tuple() == (5, 10)

    def test_path_data(self):
        """Test joining path commands."""
        assert path_data("M", Point(1.0, 2.5), "L", 3, 4) == "M 1 2.5 L 3 4"


class TestKnobReading:
    """Tests for knob fraction and label."""

    def test_continuous_percentage(self):
        """Test a continuous knob shows a percentage."""
        reading = knob_reading(KnobSpec("cutoff", 0.25))
        assert reading.label == "25"
        assert reading.fraction == 0.25

    def test_percentage_rounds_half_up(self):
        """Test that half percentages round up."""
        assert knob_reading(KnobSpec("cutoff", 0.125)).label == "13"

    @pytest.mark.parametrize("value", [2, 2.0])
    def test_discrete_index(self, value):
        """Test a whole value indexes the position labels."""
        reading = knob_reading(KnobSpec("wave", value, positions=["A", "B", "C", "D"]))
        assert reading.label == "C"
        assert reading.fraction == pytest.approx(2 / 3)

    def test_discrete_fraction(self):
        """Test a fractional value maps onto the position labels."""
        reading = knob_reading(KnobSpec("wave", 0.5, positions=["A", "B", "C", "D"]))
        assert reading.label == "C"
        assert reading.fraction == 0.5

    def test_discrete_index_clamped(self):
        """Test an index past the end selects the last label."""
        reading = knob_reading(KnobSpec("wave", 7, positions=["A", "B", "C", "D"]))
        assert reading.label == "D"
        assert reading.fraction == 1.0

    def test_single_position(self):
        """Test a knob with only one label."""
        reading = knob_reading(KnobSpec("mode", 0, positions=["ON"]))
        assert reading.label == "ON"
        assert reading.fraction == 0

    @pytest.mark.parametrize("value,fraction,label", [
        (-0.2, 0.0, "0"),
        (1.5, 1.0, "100"),
        (1, 1.0, "100"),
        (0, 0.0, "0"),
    ])
    def test_continuous_clamped(self, value, fraction, label):
        """Test out-of-range continuous values are clamped."""
        reading = knob_reading(KnobSpec("level", value))
        assert reading.fraction == fraction
        assert reading.label == label

    def test_empty_positions_is_continuous(self):
        """Test that an empty label list behaves like no labels."""
        assert knob_reading(KnobSpec("level", 0.4, positions=[])).label == "40"


class TestKnobGeometry:
    """Tests for ring and indicator geometry."""

    def _placement(self, value):
        return KnobPlacement(
            knob=KnobSpec("k", value),
            center=Point(80, 230),
            radius=15,
            reading=knob_reading(KnobSpec("k", value)),
        )

    def test_half_ring(self):
        """Test the ring of a knob at one half."""
        placement = self._placement(0.5)
        assert placement.ring_radius == 18
        assert placement.ring_path() == "M 80 248 A 18 18 0 0 1 80 212"

    def test_large_arc(self):
        """Test the large-arc flag past one half."""
        placement = self._placement(0.75)
        assert placement.ring_path() == "M 80 248 A 18 18 0 1 1 98 230"

    def test_indicator(self):
        """Test the indicator end point at one quarter."""
        assert self._placement(0.25).indicator_end().to_tuple() == (68, 230)

    def test_visibility(self):
        """Test when ring and indicator are drawn."""
        assert not self._placement(0).shows_value
        assert self._placement(0.01).shows_value
        assert self._placement(1).is_full
        assert not self._placement(0.99).is_full

    def test_labels(self):
        """Test value and name label positions."""
        placement = self._placement(0.5)
        assert placement.value_label_position().to_tuple() == (80, 208)
        assert placement.name_label_position().to_tuple() == (80, 257)


class TestCanvasSize:
    """Tests for canvas sizing."""

    def test_minimal(self, minimal_config):
        """Test the canvas of two overlapping default modules."""
        layout = layout_patch(minimal_config)
        assert (layout.width, layout.height) == (160, 290)
        assert layout.top_padding == 20

    def test_title_band(self, minimal_config):
        """Test that a title adds a band above the modules."""
        minimal_config["title"] = "Voice"
        layout = layout_patch(minimal_config)
        assert layout.height == 330
        assert layout.top_padding == 60
        assert layout.modules[0].origin.to_tuple() == (20, 60)

    def test_grows_with_module_extent(self):
        """Test that the canvas follows the furthest module."""
        near = layout_patch({"modules": [{"name": "A", "position": {"x": 100, "y": 0}}]})
        far = layout_patch({"modules": [{"name": "A", "position": {"x": 300, "y": 50}}]})
        assert far.width == 460
        assert far.height == 340
        assert far.width > near.width
        assert far.height > near.height

    def test_module_size_override(self):
        """Test that per-module size is used for the extent."""
        layout = layout_patch({"modules": [{"name": "A", "width": 80, "height": 100}]})
        assert (layout.width, layout.height) == (120, 140)

    def test_empty_patch(self):
        """Test that an empty patch is just the padding."""
        layout = layout_patch({"modules": []})
        assert (layout.width, layout.height) == (40, 40)


class TestPlacement:
    """Tests for module, port and knob placement."""

    def test_ports(self, minimal_config):
        """Test port positions of the minimal patch."""
        layout = layout_patch(minimal_config)
        assert layout.port_positions["Osc:out"].to_tuple() == (140, 60)
        assert layout.port_positions["Amp:in"].to_tuple() == (20, 60)

    def test_port_spacing(self):
        """Test ports stacked down each edge."""
        layout = layout_patch({
            "modules": [{"name": "Mix", "inputs": ["a", "b", "c"], "outputs": ["out"]}],
        })
        mix = layout.modules[0]
        assert [p.center.to_tuple() for p in mix.inputs] == [(20, 60), (20, 80), (20, 100)]
        assert [p.center.to_tuple() for p in mix.outputs] == [(140, 60)]
        assert all(p.is_input for p in mix.inputs)
        assert layout.port_count == 4

    def test_one_entry_per_port(self):
        """Test that port names shared across modules get separate keys."""
        layout = layout_patch({
            "modules": [
                {"name": "Osc", "outputs": ["out"]},
                {"name": "Lfo", "position": {"x": 150}, "outputs": ["out"]},
            ],
        })
        assert set(layout.port_positions) == {"Osc:out", "Lfo:out"}
        assert layout.port_positions["Lfo:out"].to_tuple() == (290, 60)

    def test_port_key_matches_module(self):
        """Test that placed ports use the module's connection key."""
        layout = layout_patch({"modules": [{"name": "Osc", "inputs": ["fm"], "outputs": ["saw"]}]})
        osc = layout.modules[0]
        assert [p.key for p in osc.ports] == [osc.module.port_key("fm"), osc.module.port_key("saw")]
        assert set(layout.port_positions) == {"Osc:fm", "Osc:saw"}

    def test_duplicate_port_key_keeps_last(self):
        """Test that a repeated module:port key points at the last module."""
        layout = layout_patch({
            "modules": [
                {"name": "Osc", "outputs": ["out"]},
                {"name": "Osc", "position": {"x": 200}, "outputs": ["out"]},
            ],
        })
        assert len(layout.port_positions) == 1
        assert layout.port_positions["Osc:out"].to_tuple() == (340, 60)
        assert layout.port_count == 2

    def test_auto_knob_row(self):
        """Test knobs spread along the bottom row."""
        layout = layout_patch({
            "modules": [{"name": "Env", "knobs": [{"name": "A"}, {"name": "D"}, {"name": "R"}]}],
        })
        centers = [k.center.to_tuple() for k in layout.modules[0].knobs]
        assert centers == [(50, 230), (80, 230), (110, 230)]
        assert all(k.radius == 15 for k in layout.modules[0].knobs)
        assert layout.knob_count == 3

    def test_single_knob_centered(self):
        """Test a single knob sits on the module midpoint."""
        layout = layout_patch({"modules": [{"name": "Amp", "knobs": [{"name": "level"}]}]})
        assert layout.modules[0].knobs[0].center.to_tuple() == (80, 230)

    def test_explicit_knob_position(self):
        """Test a knob positioned relative to the module origin."""
        layout = layout_patch({
            "modules": [{
                "name": "Osc",
                "knobs": [{"name": "tune", "position": {"x": 10, "y": 100}, "radius": 8}],
            }],
        })
        knob = layout.modules[0].knobs[0]
        assert knob.center.to_tuple() == (30, 120)
        assert knob.radius == 8

    def test_module_name_label(self, minimal_config):
        """Test the module name sits centered near the top."""
        layout = layout_patch(minimal_config)
        assert layout.modules[0].name_label_position().to_tuple() == (80, 40)


class TestConnections:
    """Tests for connector routing."""

    def test_curve_path(self, minimal_config):
        """Test the minimal patch cable."""
        layout = layout_patch(minimal_config)
        assert len(layout.curves) == 1
        assert layout.curves[0].path() == "M 140 60 Q 80 60 80 60 T 20 60"

    def test_curve_between_rows(self):
        """Test the control point stays level with the source."""
        layout = layout_patch({
            "modules": [
                {"name": "Osc", "outputs": ["out"]},
                {"name": "Amp", "position": {"x": 200, "y": 100}, "inputs": ["in"]},
            ],
            "connections": [{"from": "Osc:out", "to": "Amp:in"}],
        })
        # start (140, 60), end (220, 160)
        assert layout.curves[0].path() == "M 140 60 Q 180 60 180 110 T 220 160"

    def test_unknown_port_dropped(self, minimal_config, caplog):
        """Test that a connection to an unknown port is skipped with a warning."""
        minimal_config["connections"].append({"from": "Osc:out", "to": "Amp:nope"})

        with caplog.at_level(logging.WARNING, logger="patchvis.drawing.layout"):
            layout = layout_patch(minimal_config)

        assert len(layout.curves) == 1
        assert len(layout.dropped_connections) == 1
        assert layout.dropped_connections[0].target == "Amp:nope"
        assert "Amp:nope" in caplog.text


class TestOptions:
    """Tests for option merging during layout."""

    def test_config_options(self, minimal_config):
        """Test that the config's own options apply."""
        minimal_config["options"] = {"moduleWidth": 200}
        assert layout_patch(minimal_config).width == 240

    def test_caller_options_win(self, minimal_config):
        """Test that caller options override config options."""
        minimal_config["options"] = {"moduleWidth": 200, "padding": 10}
        layout = layout_patch(minimal_config, {"moduleWidth": 300})
        assert layout.width == 320

    def test_options_instance_used_as_is(self, minimal_config):
        """Test that a RenderOptions instance ignores config options."""
        minimal_config["options"] = {"moduleWidth": 200}
        layout = layout_patch(minimal_config, RenderOptions(module_width=50))
        assert layout.width == 90

    def test_calculator_defaults(self, minimal_config):
        """Test the calculator with default options."""
        calculator = LayoutCalculator()
        layout = calculator.layout(normalize(minimal_config))
        assert (layout.width, layout.height) == (160, 290)
