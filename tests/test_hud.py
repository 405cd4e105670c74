import numpy as np
import PIL.Image

from mandelview.core import ViewStatus
from mandelview.hud import annotate_status, frame_to_image

STATUS = ViewStatus(zoom=2.25, center_real=-0.5, center_imaginary=0.0)


def test_frame_to_image_without_status():
    frame = np.full((30, 40, 3), 7, dtype=np.uint8)
    image = frame_to_image(frame)

    assert image.mode == "RGB"
    assert image.size == (40, 30)
    np.testing.assert_array_equal(np.array(image), frame)


def test_frame_to_image_draws_panel():
    frame = np.zeros((240, 320, 3), dtype=np.uint8)
    image = frame_to_image(frame, STATUS)

    pixels = np.array(image)
    assert image.mode == "RGB"
    assert pixels.shape == frame.shape
    assert pixels[:80, :200].any()


def test_annotate_status_returns_rgba():
    image = PIL.Image.new("RGB", (200, 150))
    annotated = annotate_status(image, STATUS, hint=None)

    assert annotated.mode == "RGBA"
    assert annotated.size == (200, 150)
