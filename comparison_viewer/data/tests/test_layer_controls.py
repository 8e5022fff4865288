"""
Tests for layer_controls module.
"""

import pytest

from ..layer_controls import LayerControls


@pytest.fixture
def controls():
    return LayerControls()


class TestLayerOpacity:
    """Test analysis layer opacity."""

    def test_defaults(self, controls):
        assert controls.layer_opacity == {'tracing': 100, 'landmarks': 100, 'measurements': 100}

    def test_set_value(self, controls):
        assert controls.update_layer_opacity('landmarks', 40) == 40
        assert controls.layer_opacity['landmarks'] == 40
        assert controls.layer_opacity['tracing'] == 100

    def test_update_with_function(self, controls):
        controls.update_layer_opacity('tracing', 60)

        controls.update_layer_opacity('tracing', lambda previous: previous - 10)

        assert controls.layer_opacity['tracing'] == 50

    def test_unknown_layer(self, controls):
        with pytest.raises(KeyError):
            controls.update_layer_opacity('grid', 10)

    def test_signal(self, controls):
        received = []
        controls.layerOpacityChanged.connect(lambda layer, value: received.append((layer, value)))

        controls.update_layer_opacity('measurements', 25)

        assert received == [('measurements', 25.0)]


class TestImageControls:
    """Test brightness and contrast."""

    def test_defaults(self, controls):
        assert controls.brightness == 0
        assert controls.contrast == 0

    def test_values_are_clamped(self, controls):
        assert controls.update_image_control('brightness', 150) == 100
        assert controls.update_image_control('contrast', -300) == -100

    def test_update_with_function(self, controls):
        controls.update_image_control('contrast', 20)

        controls.update_image_control('contrast', lambda previous: previous * 2)

        assert controls.contrast == 40

    def test_unknown_control(self, controls):
        with pytest.raises(KeyError):
            controls.update_image_control('gamma', 1)


class TestReset:
    """Test resetting all controls."""

    def test_reset_all_controls(self, controls):
        reset = []
        controls.controlsReset.connect(lambda: reset.append(True))
        controls.update_layer_opacity('tracing', 10)
        controls.update_image_control('brightness', 30)

        controls.reset_all_controls()

        assert controls.layer_opacity['tracing'] == 100
        assert controls.brightness == 0
        assert reset == [True]

    def test_show_layer_controls(self, controls):
        assert controls.show_layer_controls is False

        controls.set_show_layer_controls(True)

        assert controls.get_state()['show_layer_controls'] is True
