import argparse
import logging
import sys
from typing import List, Optional

from image_convolution import ImageDecodeError, __version__
from image_convolution.config import ConvolutionConfig
from image_convolution.display import show_results
from image_convolution.filters import FILTERS, FilterDefinition, get_filter
from image_convolution.pipeline import filter_and_save, load_raster

logger = logging.getLogger(__name__)


def filter_type(value: str) -> FilterDefinition:
    """コマンドライン引数のフィルタIDまたは表示名をフィルタに変換する。"""
    definition = get_filter(value)
    if definition is None:
        choices = ", ".join(f.id for f in FILTERS)
        raise argparse.ArgumentTypeError(
            f"unknown filter: {value} (choose from {choices})"
        )
    return definition


def positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1: {value}")
    return number


def build_parser(config: ConvolutionConfig) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="image-convolution",
        description="Apply a 3x3 line detection filter to a grayscale image.",
    )
    parser.add_argument(
        "image", nargs="?", help="input image (opens a file chooser if omitted)"
    )
    parser.add_argument(
        "-f",
        "--filter",
        type=filter_type,
        help="filter id or name, 'all' applies every filter "
        "(opens a chooser if omitted)",
    )
    parser.add_argument(
        "-n",
        "--amount",
        type=positive_int,
        default=config.amount,
        help="number of filter and normalize passes (default: %(default)s)",
    )
    parser.add_argument(
        "--width",
        type=positive_int,
        default=config.target_width,
        help="minimum display width of each image (default: %(default)s)",
    )
    parser.add_argument(
        "--no-show", action="store_true", help="do not open the output window"
    )
    parser.add_argument(
        "--no-save", action="store_true", help="do not write the output files"
    )
    parser.add_argument(
        "-v", "--verbose", action="count", default=0, help="increase log output"
    )
    parser.add_argument("--version", action="version", version=__version__)
    return parser


def apply_args(config: ConvolutionConfig, args: argparse.Namespace) -> None:
    """コマンドライン引数で設定を上書きする。"""
    config.amount = args.amount
    config.target_width = args.width
    config.show = config.show and not args.no_show
    config.save = config.save and not args.no_save
    if args.filter is not None:
        config.default_filter_id = args.filter.id
    if args.verbose == 1:
        config.log_level = "INFO"
    elif 1 < args.verbose:
        config.log_level = "DEBUG"


def main(argv: Optional[List[str]] = None) -> int:
    config = ConvolutionConfig()
    args = build_parser(config).parse_args(argv)
    apply_args(config, args)
    logging.basicConfig(
        level=config.log_level, format="%(levelname)s %(name)s: %(message)s"
    )

    # 画像とフィルタが指定されていない場合はダイアログで選択
    # tkinterはダイアログを開くときだけ読み込む
    path = args.image
    if path is None:
        from image_convolution.dialogs import choose_file

        path = choose_file()
        if path is None:
            print("画像が選択されていません。", file=sys.stderr)
            return 1
    definition = (
        get_filter(config.default_filter_id)
        if config.default_filter_id is not None
        else None
    )
    if definition is None:
        from image_convolution.dialogs import choose_filter

        definition = choose_filter()
        if definition is None:
            print("フィルタが選択されていません。", file=sys.stderr)
            return 1

    try:
        original = load_raster(path)
    except ImageDecodeError as e:
        logger.debug("decode failed", exc_info=True)
        print(f"画像を読み込めません: {e}", file=sys.stderr)
        return 1
    results = filter_and_save(
        original, path, definition, config.amount, save=config.save
    )

    for result in results:
        if result.saved:
            print(f"保存しました: {result.output_path}")
    if config.show:
        show_results(original, results, config.target_width)
    return 0


if __name__ == "__main__":
    sys.exit(main())
