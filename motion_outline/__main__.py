# motion_outline/__main__.py
import sys
import argparse
import logging

from .models.source_config import file_source, camera_source
from .models.frame_source import FrameSource, SourceUnavailableError
from .utils.log import setup as setup_logging, setup_file_logging
from .utils.input_selector import select_source
from .utils.presets import DEFAULT_PRESET, BG_PRESETS, load_presets, resolve_preset, split_params
from .utils.frame_processor import FrameProcessor
from .utils.detection_loop import DetectionLoop
from .views.display_window import WindowPresenter, DEFAULT_WAIT_MS

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_SOURCE_UNAVAILABLE = 2
EXIT_INPUT_CLOSED = 3
EXIT_BAD_CONFIG = 4


def _positive_int(text):
    # cv.waitKey(<=0) menunggu tanpa batas
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {text!r}") from None
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return value


def parse_arguments(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="motion-outline",
        description="Outline moving objects using MOG2 background subtraction"
    )

    # Video source (tanpa argumen: tanya lewat prompt konsol)
    source = parser.add_mutually_exclusive_group()
    source.add_argument('--file', type=str, default=None,
                        help='Video file to analyse (skips the console prompt)')
    source.add_argument('--camera', type=int, default=None,
                        help='Camera index to capture from (skips the console prompt)')

    # Processing configuration
    parser.add_argument('--preset', type=str, default=DEFAULT_PRESET,
                        help=f"Background subtraction preset. Built-in: {', '.join(BG_PRESETS)}")
    parser.add_argument('--preset-file', type=str, default=None,
                        help='JSON file with extra presets')
    parser.add_argument('--nmixtures', type=int, default=None,
                        help='Number of Gaussian mixtures per pixel (overrides preset)')
    parser.add_argument('--detect-shadows', action=argparse.BooleanOptionalAction, default=None,
                        help='Turn MOG2 shadow detection on/off, overriding the preset '
                             '(shadows count as background)')
    parser.add_argument('--min-area', type=float, default=None,
                        help='Drop contours smaller than this area in pixels')

    # Display / logging
    parser.add_argument('--wait-ms', type=_positive_int, default=DEFAULT_WAIT_MS,
                        help=f'Key poll wait per frame in ms. Default: {DEFAULT_WAIT_MS}')
    parser.add_argument('--debug', action='store_true',
                        help='Verbose logging')
    parser.add_argument('--log-dir', type=str, default=None,
                        help='Also write logs to a daily file in this directory')

    return parser.parse_args(argv)


def build_processor(args) -> FrameProcessor:
    """
    Raises:
        ValueError: preset / preset file / override tidak valid
    """
    presets = load_presets(args.preset_file) if args.preset_file else None
    params = resolve_preset(args.preset, overrides={
        'nmixtures': args.nmixtures,
        'detect_shadows': args.detect_shadows,
        'min_contour_area': args.min_area,
    }, presets=presets)
    bg_params, cleaner_params, contour_params = split_params(params)
    logger.info(f"Preset '{args.preset}': {params}")
    return FrameProcessor.from_params(bg_params, cleaner_params, contour_params)


def main(argv=None) -> int:
    """Fungsi titik-masuk aplikasi, dipanggil `motion-outline` & `python -m motion_outline`."""
    args = parse_arguments(argv)

    # 1) Logging
    setup_logging(debug=args.debug)
    if args.log_dir:
        try:
            setup_file_logging(args.log_dir, debug=args.debug)
        except OSError as e:
            logger.error(f"Failed to setup file logging: {e}")

    # 2) Pilih sumber video
    if args.file is not None:
        config = file_source(args.file)
    elif args.camera is not None:
        config = camera_source(args.camera)
    else:
        try:
            config = select_source()
        except EOFError:
            print("Error: input closed before a valid choice was entered", file=sys.stderr)
            return EXIT_INPUT_CLOSED

    # 3) Background model & pipeline
    try:
        processor = build_processor(args)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_BAD_CONFIG

    # 4) Buka sumber, gagal = fatal
    source = FrameSource(config)
    try:
        source.open()
    except SourceUnavailableError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_SOURCE_UNAVAILABLE

    # 5) Loop utama sampai tombol ditekan / video habis
    presenter = WindowPresenter(wait_ms=args.wait_ms)
    try:
        presenter.open()
        loop = DetectionLoop(source, processor, presenter)
        reason = loop.run()
        logger.info(f"Stopped: {reason.name}")
    finally:
        source.release()
        presenter.close()

    return EXIT_OK


# ------------------------------------------------------------------------
# Tetap mendukung: python -m motion_outline
# ------------------------------------------------------------------------
if __name__ == "__main__":
    raise SystemExit(main())
