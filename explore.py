import os
import sys
import warnings
from argparse import ArgumentParser
from dataclasses import dataclass
from pathlib import Path

_VERBOSE_FLAGS = {"--verbose", "-v"}
_cli_verbose = any(arg in _VERBOSE_FLAGS for arg in sys.argv[1:])
_env_log_level = os.environ.get("TF_CPP_MIN_LOG_LEVEL")
_suppress_messages = (not _cli_verbose) and _env_log_level != "0"

if _suppress_messages and _env_log_level is None:
    os.environ["TF_CPP_MIN_LOG_LEVEL"] = "3"

if _suppress_messages:
    warnings.filterwarnings(
        "ignore",
        message=r"Protobuf gencode version .* is exactly one major version older than the runtime version .*",
        category=UserWarning,
        module="google.protobuf",
    )

import tensorflow as tf
import numpy as np

if _suppress_messages:
    tf.get_logger().setLevel("ERROR")

import imageio
import PIL.Image

from mandelview import (
    DEFAULT_ANCHORS,
    Click,
    ConfigurationError,
    CoreHandle,
    Pan,
    PanDirection,
    Reset,
    Zoom,
    ZoomDirection,
    anchors_from_colormap,
    event_for_key,
    initialize,
    parse_hex_color,
)
from mandelview.hud import CONTROLS_HINT, frame_to_image
from mandelview.verbosity import log, set_verbose

set_verbose(_cli_verbose)

VALID_MODES = ("image", "gif", "interactive")

CONTROLS_BANNER = """\
=== MANDELBROT VIEWPORT ===
Controls:
  * Mouse wheel: zoom at the cursor
  * Click: center on the clicked point
  * Arrow keys: pan
  * +/-: zoom at the window center
  * R: reset the view"""


@dataclass
class OutputConfig:
    mode: str
    output_path: Path | None
    image_format: str
    hud: bool
    frame_duration: float


def build_parser():
    parser = ArgumentParser(description='Explore the Mandelbrot set through a zoomable, pannable viewport.')

    parser.add_argument('--width', type=int,
                        dest='width', help='width of the pixel grid',
                        metavar='WIDTH', default=800)

    parser.add_argument('--height', type=int,
                        dest='height', help='height of the pixel grid',
                        metavar='HEIGHT', default=600)

    parser.add_argument('--max-iterations', type=int,
                        dest='max_iterations', help='maximum number of escape-time iterations per pixel',
                        metavar='MAX_ITERATIONS', default=256)

    parser.add_argument('--zoom-factor', type=float,
                        dest='zoom_factor', help='zoom multiplier applied per zoom-in step (its inverse zooms out)',
                        metavar='ZOOM_FACTOR', default=1.5)

    parser.add_argument('--pan-step', type=float,
                        dest='pan_step', help='pan distance in plane units at zoom 1; scaled by 1/zoom',
                        metavar='PAN_STEP', default=0.1)

    parser.add_argument('--lock-aspect', action='store_true',
                        help='Derive the plane height from the grid aspect ratio instead of the 4:3 baseline.')

    colors = parser.add_mutually_exclusive_group()
    colors.add_argument('--anchors', type=str, dest='anchors', metavar='ANCHORS',
                        help='comma separated #RRGGBB anchor colors for the gradient (at least 2)')
    colors.add_argument('--colormap', type=str, dest='colormap', metavar='COLORMAP',
                        help='matplotlib colormap to sample the gradient anchors from (e.g. "inferno")')

    parser.add_argument('--colormap-anchors', type=int, dest='colormap_anchors', default=13,
                        metavar='N', help='number of anchors sampled from --colormap')

    parser.add_argument('--event', dest='events', action='append', metavar='EVENT', default=[],
                        help='Viewport event to replay before output. May be repeated. '
                             'Forms: zoom-in[@X,Y], zoom-out[@X,Y], click@X,Y, pan-up, pan-down, '
                             'pan-left, pan-right, reset.')

    parser.add_argument('--mode', dest='mode', choices=VALID_MODES, default='image',
                        help='image: write the final frame; gif: one frame per event; interactive: open a window.')

    parser.add_argument('--output', dest='output', type=str,
                        help='Destination file for image or gif modes.')

    parser.add_argument('--format', type=str,
                        dest='format', help='file format for image mode. Any extension supported by Pillow. Default: "png".',
                        metavar='FORMAT', default='png')

    parser.add_argument('--hud', action='store_true',
                        help='overlay the zoom and center readout on written frames')

    parser.add_argument('--gif-frame-duration', type=float, dest='gif_frame_duration', default=0.5,
                        metavar='SECONDS', help='display time of each GIF frame')

    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable verbose logging, including TensorFlow diagnostics and render timings.')

    return parser


def parse_event(text: str):
    """Parse an ``--event`` value into a viewport event."""

    name, _, position = text.strip().lower().partition('@')
    cursor = None
    if position:
        parts = position.split(',')
        if len(parts) != 2:
            raise ValueError(f"event position '{position}' must be X,Y.")
        try:
            cursor = (float(parts[0]), float(parts[1]))
        except ValueError as exc:
            raise ValueError(f"event position '{position}' must contain numbers.") from exc

    if name in ('zoom-in', 'zoom-out'):
        direction = ZoomDirection.IN if name == 'zoom-in' else ZoomDirection.OUT
        return Zoom(direction, cursor)
    if name == 'click':
        if cursor is None:
            raise ValueError("click events need a position, e.g. click@400,300.")
        return Click(*cursor)
    if name.startswith('pan-'):
        try:
            direction = PanDirection(name[len('pan-'):])
        except ValueError as exc:
            raise ValueError(f"unknown pan direction in '{text}'.") from exc
        if cursor is not None:
            raise ValueError(f"pan events take no position: '{text}'.")
        return Pan(direction)
    if name == 'reset':
        if cursor is not None:
            raise ValueError(f"reset takes no position: '{text}'.")
        return Reset()
    raise ValueError(f"unknown event '{text}'.")


def resolve_anchors(opt, parser: ArgumentParser):
    try:
        if opt.anchors:
            return tuple(parse_hex_color(part) for part in opt.anchors.split(',') if part.strip())
        if opt.colormap:
            return anchors_from_colormap(opt.colormap, opt.colormap_anchors)
    except ConfigurationError as exc:
        parser.error(str(exc))
    return DEFAULT_ANCHORS


def resolve_output_config(opt, parser: ArgumentParser) -> OutputConfig:
    image_format = (getattr(opt, "format", "png") or "png").lower().lstrip(".")
    if not image_format:
        image_format = "png"

    if opt.gif_frame_duration <= 0:
        parser.error("--gif-frame-duration must be positive.")

    output_path: Path | None = None
    if opt.mode == 'interactive':
        if opt.output:
            parser.error("--output is only valid with the image or gif modes.")
    elif opt.mode == 'gif':
        output_path = Path(opt.output or "viewport.gif").expanduser()
        if output_path.suffix:
            if output_path.suffix.lower() != ".gif":
                parser.error("GIF outputs must end with .gif.")
        else:
            output_path = output_path.with_suffix(".gif")
    else:
        output_path = Path(opt.output or f"viewport.{image_format}").expanduser()
        expected_suffix = f".{image_format}"
        if output_path.suffix:
            if output_path.suffix.lower() != expected_suffix.lower():
                parser.error(f"--output extension {output_path.suffix} does not match --format {image_format}.")
        else:
            output_path = output_path.with_suffix(expected_suffix)

    if output_path is not None:
        if output_path.exists() and output_path.is_dir():
            parser.error("--output must point to a file, not a directory.")
        output_path = output_path.resolve()

    return OutputConfig(
        mode=opt.mode,
        output_path=output_path,
        image_format=image_format,
        hud=bool(opt.hud),
        frame_duration=float(opt.gif_frame_duration),
    )


def _pil_format_name(ext: str) -> str:
    upper = ext.upper()
    if upper == "JPG":
        return "JPEG"
    if upper == "TIF":
        return "TIFF"
    return upper


def write_single_image(image: PIL.Image.Image, output_path: Path, image_format: str) -> None:
    """Write a single image to ``output_path`` using the provided format."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    image.save(str(output_path), format=_pil_format_name(image_format))


def compose_frame(core: CoreHandle, hud: bool) -> np.ndarray:
    frame = core.get_frame()
    if not hud:
        return np.array(frame, copy=True)
    return np.array(frame_to_image(frame, core.get_status()), copy=True)


def replay_to_image(core: CoreHandle, events, config: OutputConfig) -> None:
    for index, event in enumerate(events):
        log("event {0}: {1}".format(index, event))
        core.handle(event)
    image = frame_to_image(core.get_frame(), core.get_status() if config.hud else None)
    write_single_image(image, config.output_path, config.image_format)
    print(f"Wrote {config.output_path}")


def replay_to_gif(core: CoreHandle, events, config: OutputConfig) -> None:
    config.output_path.parent.mkdir(parents=True, exist_ok=True)
    writer = imageio.get_writer(str(config.output_path), mode="I", duration=config.frame_duration * 1000, loop=0)
    try:
        writer.append_data(compose_frame(core, config.hud))
        for index, event in enumerate(events):
            print("frame {0} out of {1}".format(index + 1, len(events)), end='\r')
            core.handle(event)
            writer.append_data(compose_frame(core, config.hud))
    finally:
        writer.close()
    print(f"Wrote {config.output_path}")


class InteractiveViewer:
    """matplotlib window that forwards scroll, click and key input to the core."""

    def __init__(self, core: CoreHandle) -> None:
        import matplotlib.pyplot as plt

        self._plt = plt
        self.core = core
        plt.rcParams['toolbar'] = 'None'
        self.fig, self.ax = plt.subplots(figsize=(core.width / 100, core.height / 100), dpi=100)
        self.fig.subplots_adjust(left=0, right=1, top=1, bottom=0)
        self.ax.set_axis_off()
        self.image = self.ax.imshow(core.get_frame(), interpolation='nearest')
        self.status_text = self.ax.text(
            10, 20, '', color='white', fontsize=9, va='top',
            bbox=dict(boxstyle='round', facecolor='black', alpha=0.5),
        )
        self.ax.text(10, core.height - 10, CONTROLS_HINT, color='white', fontsize=8)

        self.fig.canvas.mpl_connect('scroll_event', self._on_scroll)
        self.fig.canvas.mpl_connect('button_press_event', self._on_press)
        self.fig.canvas.mpl_connect('key_press_event', self._on_key)
        core.controller.on_redraw = self.redraw
        self._update_status()

    def _update_status(self) -> None:
        self.status_text.set_text("\n".join(self.core.get_status().lines()))

    def redraw(self) -> None:
        self.image.set_data(self.core.get_frame())
        self._update_status()
        self.fig.canvas.draw_idle()

    def _on_scroll(self, event):
        if event.inaxes != self.ax or event.xdata is None:
            return
        direction = ZoomDirection.IN if event.button == 'up' else ZoomDirection.OUT
        self.core.handle(Zoom(direction, (event.xdata, event.ydata)))

    def _on_press(self, event):
        if event.inaxes != self.ax or event.xdata is None or event.button != 1:
            return
        # imshow centers pixel i on coordinate i
        self.core.handle(Click(int(round(event.xdata)), int(round(event.ydata))))

    def _on_key(self, event):
        viewport_event = event_for_key(event.key)
        if viewport_event is not None:
            self.core.handle(viewport_event)

    def show(self):
        self._plt.show()


def main():
    parser = build_parser()
    opt = parser.parse_args()

    set_verbose(opt.verbose)
    log("TensorFlow version: %s" % tf.__version__)

    output_config = resolve_output_config(opt, parser)
    anchors = resolve_anchors(opt, parser)

    events = []
    for text in opt.events:
        try:
            events.append(parse_event(text))
        except ValueError as exc:
            parser.error(str(exc))

    try:
        core = initialize(
            opt.width,
            opt.height,
            opt.max_iterations,
            anchors,
            zoom_factor=opt.zoom_factor,
            pan_step=opt.pan_step,
            lock_aspect=bool(opt.lock_aspect),
        )
    except ConfigurationError as exc:
        parser.error(str(exc))

    if output_config.mode == 'gif':
        replay_to_gif(core, events, output_config)
    elif output_config.mode == 'interactive':
        for event in events:
            core.handle(event)
        print(CONTROLS_BANNER)
        InteractiveViewer(core).show()
    else:
        replay_to_image(core, events, output_config)


if __name__ == '__main__':
    main()
