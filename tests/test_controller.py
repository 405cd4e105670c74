import pytest

from mandelview.controller import (
    Click,
    Pan,
    PanDirection,
    Reset,
    ViewportController,
    Zoom,
    ZoomDirection,
    event_for_key,
)
from mandelview.errors import ConfigurationError
from mandelview.palette import DEFAULT_ANCHORS, build_palette
from mandelview.plane import ComplexPlaneMapper, ViewState
from mandelview.raster import FractalRaster


@pytest.fixture
def controller(counting_evaluator):
    mapper = ComplexPlaneMapper(80, 60)
    raster = FractalRaster(mapper, counting_evaluator, build_palette(DEFAULT_ANCHORS, 8), 8)
    redraws = []
    ctrl = ViewportController(mapper, raster, on_redraw=lambda: redraws.append(mapper.view))
    ctrl.redraws = redraws
    return ctrl


def test_zoom_in_at_cursor(controller):
    before = controller.mapper.pixel_to_complex(10, 50)
    controller.handle(Zoom(ZoomDirection.IN, (10, 50)))
    after = controller.mapper.pixel_to_complex(10, 50)

    assert controller.mapper.view.zoom == pytest.approx(1.5)
    assert after.real == pytest.approx(before.real, abs=1e-9)
    assert after.imaginary == pytest.approx(before.imaginary, abs=1e-9)


def test_zoom_out_uses_inverse_factor(controller):
    controller.handle(Zoom(ZoomDirection.OUT, (0, 0)))

    assert controller.mapper.view.zoom == pytest.approx(1 / 1.5)


def test_keyboard_zoom_uses_grid_center(controller):
    controller.handle(Zoom(ZoomDirection.IN))

    view = controller.mapper.view
    assert view.zoom == pytest.approx(1.5)
    assert view.center_real == pytest.approx(-0.5, abs=1e-12)
    assert view.center_imaginary == pytest.approx(0.0, abs=1e-12)


def test_click_centers_on_point(controller):
    target = controller.mapper.pixel_to_complex(20, 15)
    controller.handle(Click(20, 15))

    assert controller.mapper.view.center == target
    centre = controller.mapper.pixel_to_complex(40, 30)
    assert centre.real == pytest.approx(target.real)
    assert centre.imaginary == pytest.approx(target.imaginary)


@pytest.mark.parametrize(
    "direction, d_real, d_imaginary",
    [
        (PanDirection.RIGHT, 1, 0),
        (PanDirection.LEFT, -1, 0),
        (PanDirection.UP, 0, -1),
        (PanDirection.DOWN, 0, 1),
    ],
)
def test_pan_step_scales_with_zoom(controller, direction, d_real, d_imaginary):
    controller.mapper.set_zoom(4.0)
    start = controller.mapper.view

    controller.handle(Pan(direction))

    view = controller.mapper.view
    assert view.center_real == pytest.approx(start.center_real + d_real * 0.1 / 4.0)
    assert view.center_imaginary == pytest.approx(start.center_imaginary + d_imaginary * 0.1 / 4.0)


def test_reset_restores_defaults_after_history(controller):
    for event in (
        Zoom(ZoomDirection.IN, (3, 7)),
        Pan(PanDirection.LEFT),
        Click(70, 2),
        Zoom(ZoomDirection.OUT),
        Pan(PanDirection.DOWN),
    ):
        controller.handle(event)

    controller.handle(Reset())

    assert controller.mapper.view == ViewState(-0.5, 0.0, 1.0)


def test_every_event_invalidates_and_requests_redraw(controller):
    controller.raster.render()
    events = [Zoom(ZoomDirection.IN), Click(1, 1), Pan(PanDirection.UP), Reset()]

    for count, event in enumerate(events, start=1):
        assert not controller.raster.dirty
        controller.handle(event)
        assert controller.raster.dirty
        assert len(controller.redraws) == count
        controller.raster.render()


def test_unknown_event_is_rejected(controller):
    with pytest.raises(TypeError):
        controller.handle("zoom")


def test_rejects_invalid_configuration(controller):
    with pytest.raises(ConfigurationError):
        ViewportController(controller.mapper, controller.raster, zoom_factor=0)
    with pytest.raises(ConfigurationError):
        ViewportController(controller.mapper, controller.raster, pan_step=-0.1)


def test_key_bindings():
    assert event_for_key("r") == Reset()
    assert event_for_key("R") == Reset()
    assert event_for_key("+") == Zoom(ZoomDirection.IN)
    assert event_for_key("=") == Zoom(ZoomDirection.IN)
    assert event_for_key("-") == Zoom(ZoomDirection.OUT)
    assert event_for_key("left") == Pan(PanDirection.LEFT)
    assert event_for_key("q") is None
    assert event_for_key(None) is None
