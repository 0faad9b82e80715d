import logging
import os
from dataclasses import dataclass
from typing import List

from PIL import Image
from tqdm import tqdm

from image_convolution import ImageDecodeError
from image_convolution.codec import image_to_raster, raster_to_image
from image_convolution.filters import FilterDefinition, concrete_filters
from image_convolution.processing import apply_convolution, normalize
from image_convolution.raster import RasterImage

logger = logging.getLogger(__name__)

# 出力画像の形式と拡張子
OUTPUT_FORMAT = "PNG"
OUTPUT_EXTENSION = ".png"


@dataclass
class FilterResult:
    """1つのフィルタを適用した結果"""

    definition: FilterDefinition
    raster: RasterImage
    image: Image.Image
    output_path: str
    saved: bool = False


def load_raster(path: str) -> RasterImage:
    """画像ファイルを読み込んでグレースケールのラスタ画像に変換する。

    Args:
        path (str): 画像ファイルのパス
    Returns:
        RasterImage: 0から1の範囲の画素値を持つラスタ画像
    Raises:
        ImageDecodeError: 画像ファイルを読み込めなかった場合
    """
    # 存在しないファイルや壊れたファイルはOSError(UnidentifiedImageErrorを含む)になる
    try:
        with Image.open(path) as image:
            image.load()
            return image_to_raster(image)
    except OSError as e:
        raise ImageDecodeError(path, str(e)) from e


def filter_raster(
    raster: RasterImage, definition: FilterDefinition, amount: int = 1
) -> RasterImage:
    """フィルタの適用と正規化を指定回数だけ繰り返す。

    各回は前回の正規化した結果を入力とする。

    Args:
        raster (RasterImage): 入力ラスタ画像
        definition (FilterDefinition): 適用するフィルタ(`All`は不可)
        amount (int, optional): 繰り返す回数、デフォルトは1
    Returns:
        RasterImage: 正規化したラスタ画像
    """
    if definition.is_all:
        raise ValueError("the All filter must be expanded before filtering.")
    if amount < 1:
        raise ValueError("amount must be at least 1.")
    for _ in range(amount):
        raster = normalize(apply_convolution(raster, definition))
    return raster


def expand_filters(definition: FilterDefinition) -> List[FilterDefinition]:
    """`All`をすべての具体的なフィルタに展開する。"""
    if definition.is_all:
        return concrete_filters()
    return [definition]


def output_path(input_path: str, definition: FilterDefinition) -> str:
    """入力画像と同じディレクトリに置く出力画像のパスを返す。

    Args:
        input_path (str): 入力画像のパス
        definition (FilterDefinition): 適用したフィルタ
    Returns:
        str: `<入力画像の拡張子を除いた名前>_<フィルタID>.png`のパス
    """
    directory, filename = os.path.split(os.path.abspath(input_path))
    stem = os.path.splitext(filename)[0]
    return os.path.join(directory, f"{stem}_{definition.id}{OUTPUT_EXTENSION}")


def save_raster(raster: RasterImage, path: str) -> bool:
    """ラスタ画像をPNG形式で保存する。既存のファイルは上書きする。

    Args:
        raster (RasterImage): 保存するラスタ画像
        path (str): 保存先のパス
    Returns:
        bool: 保存できた場合はTrue
    """
    try:
        raster_to_image(raster).save(path, format=OUTPUT_FORMAT)
    except OSError:
        logger.exception("failed to write %s", path)
        return False
    logger.info("wrote %s", path)
    return True


def run_pipeline(
    path: str, definition: FilterDefinition, amount: int = 1, save: bool = True
) -> List[FilterResult]:
    """画像を読み込み、フィルタを適用して保存する。

    `All`を指定した場合は、具体的なフィルタごとに個別に適用する。
    保存に失敗しても残りのフィルタの処理は続ける。

    Args:
        path (str): 入力画像のパス
        definition (FilterDefinition): 適用するフィルタ
        amount (int, optional): フィルタの適用と正規化を繰り返す回数、デフォルトは1
        save (bool, optional): 結果を保存するかを指定するフラグ、デフォルトはTrue
    Returns:
        List[FilterResult]: フィルタごとの結果
    Raises:
        ImageDecodeError: 入力画像を読み込めなかった場合
    """
    return filter_and_save(load_raster(path), path, definition, amount, save)


def filter_and_save(
    raster: RasterImage,
    input_path: str,
    definition: FilterDefinition,
    amount: int = 1,
    save: bool = True,
) -> List[FilterResult]:
    """読み込み済みのラスタ画像にフィルタを適用して、入力画像の隣に保存する。

    Args:
        raster (RasterImage): 入力ラスタ画像
        input_path (str): 出力画像のパスを決める入力画像のパス
        definition (FilterDefinition): 適用するフィルタ
        amount (int, optional): フィルタの適用と正規化を繰り返す回数、デフォルトは1
        save (bool, optional): 結果を保存するかを指定するフラグ、デフォルトはTrue
    Returns:
        List[FilterResult]: フィルタごとの結果
    """
    if amount < 1:
        raise ValueError("amount must be at least 1.")
    results = []
    with tqdm(expand_filters(definition), disable=not definition.is_all) as pbar:
        for f in pbar:
            pbar.set_description(f"[{f.name}]")
            filtered = filter_raster(raster, f, amount)
            result = FilterResult(
                definition=f,
                raster=filtered,
                image=raster_to_image(filtered),
                output_path=output_path(input_path, f),
            )
            if save:
                result.saved = save_raster(filtered, result.output_path)
            results.append(result)
    return results
