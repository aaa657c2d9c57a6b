import logging
import os
import sys
import time
import warnings
from argparse import ArgumentParser
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

import numpy as np
import tensorflow as tf

if _suppress_messages:
    tf.get_logger().setLevel("ERROR")

import PIL.Image
import matplotlib.pyplot as plt

from juliaset import (
    DEFAULT_ITERATIONS,
    FillError,
    PlaneWindow,
    RasterDimensions,
    RenderParameters,
    render,
)

logger = logging.getLogger("juliaset.cli")

WINDOW_TITLE = "Julia Set"


def setup_logging(verbose: bool) -> None:
    """Attach a stdout handler to the ``juliaset`` logger."""

    level = logging.DEBUG if verbose else logging.WARNING
    package_logger = logging.getLogger("juliaset")
    package_logger.setLevel(level)

    if package_logger.handlers:
        package_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(
        logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%H:%M:%S',
        )
    )
    package_logger.addHandler(handler)

    if verbose:
        tf.get_logger().setLevel("DEBUG")
        logger.debug("TensorFlow version: %s", tf.__version__)


def build_parser():
    parser = ArgumentParser(description="Render a region of the Julia set of f(z) = z^2 + (a + bi).")

    parser.add_argument('width', type=int, metavar='WIDTH',
                        help='width of the image in pixels')
    parser.add_argument('height', type=int, metavar='HEIGHT',
                        help='height of the image in pixels')
    parser.add_argument('plane_width', type=float, metavar='PLANE_WIDTH',
                        help='width of the displayed slice of the complex plane')
    parser.add_argument('plane_height', type=float, metavar='PLANE_HEIGHT',
                        help='height of the displayed slice of the complex plane')
    parser.add_argument('center_x', type=float, metavar='CENTER_X',
                        help='real coordinate the image is centered on')
    parser.add_argument('center_y', type=float, metavar='CENTER_Y',
                        help='imaginary coordinate the image is centered on')
    parser.add_argument('a', type=float, metavar='A',
                        help='real part of the constant C')
    parser.add_argument('b', type=float, metavar='B',
                        help='imaginary part of the constant C')
    parser.add_argument('workers', type=int, metavar='WORKERS',
                        help='number of worker threads filling the image')

    parser.add_argument('--max-iterations', type=int, dest='max_iterations',
                        help='iterations applied to each point before it is presumed to be in the set',
                        metavar='MAX_ITERATIONS', default=DEFAULT_ITERATIONS)

    parser.add_argument('--output', dest='output', type=str,
                        help='write the image to this file instead of only displaying it')

    parser.add_argument('--format', type=str, dest='format',
                        help='file format for --output. Can be any extension supported by Pillow. Default: "png".',
                        metavar='FORMAT', default='png')

    parser.add_argument('--show', action='store_true',
                        help='display the image in a window until it is closed (default when --output is not given)')

    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable verbose logging, including TensorFlow diagnostics.')

    return parser


def resolve_render_parameters(opt, parser: ArgumentParser) -> RenderParameters:
    if opt.width <= 0 or opt.height <= 0:
        parser.error("Window dimensions must be greater than 0.")
    if opt.plane_width <= 0.0 or opt.plane_height <= 0.0:
        parser.error("Plane dimensions must be greater than 0.")
    if opt.workers <= 0:
        parser.error("Number of workers must be greater than 0.")
    if opt.max_iterations <= 0:
        parser.error("--max-iterations must be greater than 0.")

    return RenderParameters(
        raster=RasterDimensions(width=opt.width, height=opt.height),
        window=PlaneWindow(
            center_x=opt.center_x,
            center_y=opt.center_y,
            plane_width=opt.plane_width,
            plane_height=opt.plane_height,
        ),
        c=complex(opt.a, opt.b),
        max_iterations=opt.max_iterations,
        num_workers=opt.workers,
    )


def resolve_output_path(opt, parser: ArgumentParser) -> tuple[Path | None, str]:
    image_format = (opt.format or "png").lower().lstrip(".") or "png"

    if not opt.output:
        return None, image_format

    output_path = Path(opt.output).expanduser()
    if str(opt.output).endswith(tuple(filter(None, {os.sep, os.altsep}))):
        parser.error("--output must be a file path.")
    if output_path.exists() and output_path.is_dir():
        parser.error("--output must point to a file, not a directory.")

    expected_suffix = f".{image_format}"
    if output_path.suffix:
        if output_path.suffix.lower() != expected_suffix:
            parser.error(f"--output extension {output_path.suffix} does not match --format {image_format}.")
    else:
        output_path = output_path.with_suffix(expected_suffix)

    return output_path.resolve(), image_format


def _pil_format_name(ext: str) -> str:
    upper = ext.upper()
    if upper == "JPG":
        return "JPEG"
    if upper == "TIF":
        return "TIFF"
    return upper


def write_single_image(buffer: np.ndarray, output_path: Path, image_format: str) -> None:
    """Write the RGBA ``buffer`` to ``output_path`` using the provided format."""

    pil_format = _pil_format_name(image_format)
    image = PIL.Image.fromarray(buffer)
    if pil_format == "JPEG":
        image = image.convert("RGB")
    output_path.parent.mkdir(parents=True, exist_ok=True)
    image.save(str(output_path), format=pil_format)


def show_image(buffer: np.ndarray, title: str = WINDOW_TITLE) -> None:
    """Display ``buffer`` at one screen pixel per raster pixel and block until closed."""

    dpi = 100
    height, width = buffer.shape[:2]
    fig = plt.figure(figsize=(width / dpi, height / dpi), dpi=dpi)
    fig.canvas.manager.set_window_title(title)
    ax = fig.add_axes((0, 0, 1, 1))
    ax.imshow(buffer, interpolation="nearest")
    ax.set_axis_off()
    plt.show()
    plt.close(fig)


def main(argv=None):
    parser = build_parser()
    opt = parser.parse_args(argv)

    setup_logging(bool(opt.verbose))

    params = resolve_render_parameters(opt, parser)
    output_path, image_format = resolve_output_path(opt, parser)

    start = time.perf_counter()
    try:
        buffer = render(params)
    except FillError as exc:
        logger.error("Rendering failed: %s", exc)
        return 1
    elapsed_ms = int((time.perf_counter() - start) * 1000)

    print(f"Processing time: {elapsed_ms}ms")

    if output_path is not None:
        write_single_image(buffer, output_path, image_format)
        logger.debug("wrote %s", output_path)

    if opt.show or output_path is None:
        show_image(buffer)

    return 0


if __name__ == '__main__':
    sys.exit(main())
