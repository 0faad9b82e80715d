import math
from typing import Sequence

import numpy as np
from matplotlib import pyplot as plt
from scipy import ndimage

from image_convolution.pipeline import FilterResult
from image_convolution.raster import RasterImage


def upscale(rows: np.ndarray, target_width: int) -> np.ndarray:
    """幅が指定した幅以上になるように、画像を整数倍に拡大する。

    拡大には最近傍補間を使用するため、画素の境界がぼけない。

    Args:
        rows (np.ndarray): 画像([height, width])
        target_width (int): 拡大後の最小の幅
    Returns:
        np.ndarray: 拡大した画像([height * scale, width * scale])
    """
    width = rows.shape[1]
    if width == 0:
        return rows
    scale = max(1, math.ceil(target_width / width))
    if scale == 1:
        return rows
    return ndimage.zoom(rows, scale, order=0, grid_mode=True, mode="nearest")


def show_results(
    original: RasterImage, results: Sequence[FilterResult], target_width: int = 256
) -> None:
    """入力画像とフィルタを適用した画像を並べて表示する。

    Args:
        original (RasterImage): 入力画像
        results (Sequence[FilterResult]): フィルタを適用した結果
        target_width (int, optional): 画像1枚あたりの最小の幅
    """
    panels = [("Original", original)]
    panels.extend((result.definition.name, result.raster) for result in results)
    plt.figure(num="Convolution", figsize=(3 * len(panels), 3.5))
    for i, (title, raster) in enumerate(panels):
        plt.subplot(1, len(panels), i + 1)
        plt.imshow(
            upscale(raster.to_rows(), target_width),
            cmap="gray",
            vmin=0,
            vmax=1,
            interpolation="nearest",
        )
        plt.title(title)
        plt.axis("off")
    plt.show()
