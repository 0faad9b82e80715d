from typing import Tuple

import numpy as np

from image_convolution.filters import FilterDefinition
from image_convolution.raster import RasterImage


def raster_sum_count(
    samples: np.ndarray, kernel: np.ndarray
) -> Tuple[np.ndarray, np.ndarray]:
    """各ピクセルについて、カーネルとの積和と加算した項の数を計算する。

    カーネルは中心に置かず、ピクセル(x, y)から右下方向に広げる。
    画像からはみ出る項はパディングせずに積和と項の数の両方から除外する。

    Args:
        samples (np.ndarray): 画素値([width, height])
        kernel (np.ndarray): カーネル([kernel_width, kernel_height])
    Returns:
        Tuple[np.ndarray, np.ndarray]: 積和と項の数を格納したタプル([width, height])
    """
    width, height = samples.shape
    kernel_width, kernel_height = kernel.shape
    sums = np.zeros((width, height), dtype=np.float32)
    counts = np.zeros((width, height), dtype=np.float32)
    # 1ピクセルずつ計算する場合と同じ順序(yが外側、xが内側)で加算
    for dy in range(kernel_height):
        if height <= dy:
            break
        for dx in range(kernel_width):
            if width <= dx:
                break
            # 出力の(x, y)に、入力の(x + dx, y + dy)とカーネルの(dx, dy)の積を加算
            # 入力の範囲を超える出力の右端と下端には加算しない
            sums[: width - dx, : height - dy] += (
                samples[dx:, dy:] * np.float32(kernel[dx, dy])
            )
            counts[: width - dx, : height - dy] += 1
    return sums, counts


def apply_convolution(raster: RasterImage, definition: FilterDefinition) -> RasterImage:
    """ラスタ画像にフィルタを適用する。

    出力の各画素値は、ウィンドウ内で画像に収まる項の重み付き和を項の数で割った平均である。
    出力の大きさは入力と同じで、正規化はしない。

    Args:
        raster (RasterImage): フィルタを適用するラスタ画像
        definition (FilterDefinition): 適用するフィルタ
    Returns:
        RasterImage: フィルタを適用したラスタ画像、`None`と`All`の場合は入力そのもの
    """
    if not definition.is_concrete:
        return raster
    sums, counts = raster_sum_count(raster.samples, definition.weights)
    # 画像が空でなければ、どのピクセルも少なくとも(x, y)自身の項を持つ
    return RasterImage(np.divide(sums, counts, out=sums, where=counts > 0))


def normalize(raster: RasterImage) -> RasterImage:
    """最小値が0、最大値が1になるようにラスタ画像を正規化する。

    すべての画素値が同じ場合は、すべての画素値が0のラスタ画像を返す。

    Args:
        raster (RasterImage): 正規化するラスタ画像
    Returns:
        RasterImage: 正規化したラスタ画像
    """
    samples = raster.samples
    if samples.size == 0:
        return RasterImage.zeros(raster.width, raster.height)
    x_min = np.amin(samples)
    x_max = np.amax(samples)
    if x_max == x_min:
        return RasterImage.zeros(raster.width, raster.height)
    return RasterImage((samples - x_min) / (x_max - x_min))
