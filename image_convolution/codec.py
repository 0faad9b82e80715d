"""パック形式のRGBと単チャネルの画素値を相互に変換する。

パック形式のRGBは、赤を16から23ビット、緑を8から15ビット、青を0から7ビットに
格納した24ビットの整数である。
"""

import numpy as np
from PIL import Image

from image_convolution.raster import RasterImage

# 8ビットのチャネルの最大値
CHANNEL_MAX = np.float32(0xFF)


def pack_rgb(rgb: np.ndarray) -> np.ndarray:
    """RGBの配列をパック形式の整数に変換する。

    Args:
        rgb (np.ndarray): 最終軸にR, G, Bを格納した配列([..., 3])
    Returns:
        np.ndarray: パック形式のRGB([...])
    """
    rgb = np.asarray(rgb, dtype=np.uint32)
    return (rgb[..., 0] << 16) | (rgb[..., 1] << 8) | rgb[..., 2]


def unpack_rgb(packed: np.ndarray) -> np.ndarray:
    """パック形式の整数をRGBの配列に変換する。

    Args:
        packed (np.ndarray): パック形式のRGB([...])
    Returns:
        np.ndarray: 最終軸にR, G, Bを格納した8ビット符号なし整数の配列([..., 3])
    """
    packed = np.asarray(packed, dtype=np.uint32)
    rgb = np.stack(((packed >> 16) & 0xFF, (packed >> 8) & 0xFF, packed & 0xFF), axis=-1)
    return rgb.astype(np.uint8)


def to_samples(packed: np.ndarray) -> np.ndarray:
    """パック形式のRGBを白に対する割合で表したグレースケールの画素値に変換する。

    3チャネルの平均を255で割る。計算は単精度で行う。

    Args:
        packed (np.ndarray): パック形式のRGB
    Returns:
        np.ndarray: 0から1の範囲の画素値
    """
    rgb = unpack_rgb(packed).astype(np.float32)
    total = rgb[..., 0] + rgb[..., 1] + rgb[..., 2]
    return (total / np.float32(3)) / CHANNEL_MAX


def from_samples(samples: np.ndarray) -> np.ndarray:
    """画素値をパック形式のグレースケールのRGBに変換する。

    画素値は0から1の範囲に切り詰めてから255倍し、0方向に丸める。
    計算は単精度で行うため、`c / 255`の画素値は`c`に戻る。

    Args:
        samples (np.ndarray): 画素値
    Returns:
        np.ndarray: パック形式のRGB
    """
    samples = np.clip(np.asarray(samples, dtype=np.float32), 0, 1)
    c = np.trunc(samples * CHANNEL_MAX).astype(np.uint32)
    return c | (c << 8) | (c << 16)


def to_sample(packed: int) -> float:
    """パック形式のRGBを1つの画素値に変換する。"""
    return float(to_samples(np.uint32(packed)))


def from_sample(weight: float) -> int:
    """1つの画素値をパック形式のグレースケールのRGBに変換する。"""
    return int(from_samples(np.float32(weight)))


def image_to_raster(image: Image.Image) -> RasterImage:
    """画像をグレースケールのラスタ画像に変換する。

    Args:
        image (Image.Image): 任意のモードの画像
    Returns:
        RasterImage: ラスタ画像
    """
    # [height, width, 3]のRGB配列を[width, height]の画素値に変換
    rgb = np.array(image.convert("RGB"), dtype=np.uint8)
    return RasterImage(to_samples(pack_rgb(rgb)).T)


def raster_to_image(raster: RasterImage) -> Image.Image:
    """ラスタ画像をグレースケールのRGB画像に変換する。

    Args:
        raster (RasterImage): ラスタ画像
    Returns:
        Image.Image: RGBモードの画像
    """
    packed = from_samples(raster.to_rows())
    return Image.fromarray(unpack_rgb(packed))
