from typing import Self, Sequence

import numpy as np


class RasterImage:
    """単チャネルの浮動小数点ラスタ画像

    画素値は`samples[x, y]`で参照する。形状は(幅, 高さ)である。
    生成後は変更できない。
    """

    def __init__(self, samples: np.ndarray) -> None:
        """イニシャライザ

        Args:
            samples (np.ndarray): 画素値を格納した2次元配列([width, height])
        """
        samples = np.array(samples, dtype=np.float32)
        if samples.ndim != 2:
            raise ValueError("samples must be a 2D array.")
        # 生成後に画素値を書き換えられないように読み取り専用にする
        samples.setflags(write=False)
        self._samples = samples

    @classmethod
    def zeros(cls, width: int, height: int) -> Self:
        """すべての画素値が0のラスタ画像を生成する。

        Args:
            width (int): 画像の幅
            height (int): 画像の高さ
        Returns:
            RasterImage: ラスタ画像
        """
        return cls(np.zeros((width, height), dtype=np.float32))

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[float]]) -> Self:
        """行(y)ごとに並んだ画素値からラスタ画像を生成する。

        Args:
            rows (Sequence[Sequence[float]]): 画素値([height, width])
        Returns:
            RasterImage: ラスタ画像
        """
        rows = np.array(rows, dtype=np.float32)
        if rows.ndim != 2:
            raise ValueError("rows must be a 2D sequence.")
        return cls(rows.T)

    @property
    def width(self) -> int:
        return self._samples.shape[0]

    @property
    def height(self) -> int:
        return self._samples.shape[1]

    @property
    def samples(self) -> np.ndarray:
        """画素値を格納した読み取り専用の配列([width, height])"""
        return self._samples

    def to_rows(self) -> np.ndarray:
        """行(y)ごとに並べた画素値の配列([height, width])を返す。"""
        return self._samples.T.copy()

    def min(self) -> float:
        return float(self._samples.min())

    def max(self) -> float:
        return float(self._samples.max())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RasterImage):
            return NotImplemented
        return np.array_equal(self._samples, other._samples)

    def __repr__(self) -> str:
        return f"RasterImage(width={self.width}, height={self.height})"
