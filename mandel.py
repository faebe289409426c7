import os
import re
import sys
import time
import warnings
from argparse import ArgumentParser

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

VERBOSE = _cli_verbose


def log(message, *args, **kwargs):
    if VERBOSE:
        print(message, *args, **kwargs)


import tensorflow as tf

if _suppress_messages:
    tf.get_logger().setLevel("ERROR")
    for handler in tf.get_logger().handlers:
        handler.setLevel("ERROR")

from mandelbrot import (
    BACKENDS,
    DEFAULT_LIMIT,
    LOSSLESS_FORMATS,
    RenderParameters,
    parse_complex,
    parse_dimensions,
    render_image,
    save_image,
)
from mandelbrot.renderer import DEFAULT_BAND_ROWS, MAX_LIMIT

EXAMPLE_ARGS = "mandel.png 1000x750 -1.20,0.35 -1,0.20"

# corner points such as -1.20,0.35 are positionals, not option flags
_LEADING_MINUS_NUMBER = re.compile(r"-\.?[0-9]")


class MandelArgumentParser(ArgumentParser):
    """Argument parser that exits with status 1 and shows an example call."""

    def _parse_optional(self, arg_string):
        if _LEADING_MINUS_NUMBER.match(arg_string):
            return None
        return super()._parse_optional(arg_string)

    def error(self, message):
        self.print_usage(sys.stderr)
        print(f"Example: {self.prog} {EXAMPLE_ARGS}", file=sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def _positive_int(text):
    value = int(text)
    if value <= 0:
        raise ValueError(text)
    return value


_positive_int.__name__ = "positive integer"


def build_parser():
    parser = MandelArgumentParser(description="Render the Mandelbrot set to a grayscale image.")

    parser.add_argument('file', metavar='FILE', help='path of the image file to write')

    parser.add_argument('pixels', metavar='PIXELS',
                        help='image size in pixels as WIDTHxHEIGHT, e.g. 1000x750')

    parser.add_argument('upper_left', metavar='UPPERLEFT',
                        help='complex point at the upper left corner as RE,IM, e.g. -1.20,0.35')

    parser.add_argument('lower_right', metavar='LOWERRIGHT',
                        help='complex point at the lower right corner as RE,IM, e.g. -1,0.20')

    parser.add_argument('--limit', type=_positive_int,
                        dest='limit', help=f'maximum number of iterations per point (1-{MAX_LIMIT})',
                        metavar='LIMIT', default=DEFAULT_LIMIT)

    parser.add_argument('--backend', choices=BACKENDS, default='tensor',
                        help='"tensor" evaluates bands of rows with TensorFlow; "scalar" loops over single pixels.')

    parser.add_argument('--band-rows', type=_positive_int,
                        dest='band_rows', help='number of rows evaluated together by the tensor backend',
                        metavar='BAND_ROWS', default=DEFAULT_BAND_ROWS)

    parser.add_argument('--workers', type=_positive_int,
                        dest='workers', help='number of threads rendering bands with the tensor backend',
                        metavar='WORKERS', default=1)

    parser.add_argument('--format', type=str, choices=LOSSLESS_FORMATS,
                        dest='format', help='lossless file format of the output image. Default: "png".',
                        metavar='FORMAT', default='png')

    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable verbose logging, including TensorFlow diagnostics and render timing.')

    return parser


def resolve_parameters(opt, parser: ArgumentParser) -> RenderParameters:
    bounds = parse_dimensions(opt.pixels)
    if bounds is None:
        parser.error(f"error parsing image dimensions '{opt.pixels}'")
    upper_left = parse_complex(opt.upper_left)
    if upper_left is None:
        parser.error(f"error parsing upper left corner point '{opt.upper_left}'")
    lower_right = parse_complex(opt.lower_right)
    if lower_right is None:
        parser.error(f"error parsing lower right corner point '{opt.lower_right}'")
    if opt.limit > MAX_LIMIT:
        parser.error(f"--limit must be between 1 and {MAX_LIMIT}, got {opt.limit}")

    return RenderParameters(
        bounds=bounds,
        upper_left=upper_left,
        lower_right=lower_right,
        limit=opt.limit,
    )


def main(argv=None):
    parser = build_parser()
    opt = parser.parse_args(argv)

    global VERBOSE
    VERBOSE = bool(opt.verbose)

    params = resolve_parameters(opt, parser)

    log("TensorFlow version: %s" % tf.__version__)
    log("Rendering {0}x{1} pixels of [{2}, {3}] with the {4} backend, limit {5}".format(
        params.bounds[0], params.bounds[1], params.upper_left, params.lower_right, opt.backend, params.limit))

    start = time.perf_counter()
    pixels = render_image(params, backend=opt.backend, band_rows=opt.band_rows, workers=opt.workers)
    log("Rendered in {0:.3f}s".format(time.perf_counter() - start))

    try:
        save_image(opt.file, pixels, params.bounds, opt.format)
    except (OSError, ValueError) as exc:
        print(f"error writing image file: {exc}", file=sys.stderr)
        return 2

    log("Wrote %s" % opt.file)
    return 0


if __name__ == '__main__':
    sys.exit(main())
