import enum
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

logger = logging.getLogger(__name__)

# カーネルの幅と高さ
KERNEL_SIZE = 3


class FilterKind(enum.Enum):
    """フィルタの種類"""

    NONE = enum.auto()
    HORIZONTAL = enum.auto()
    VERTICAL = enum.auto()
    DIAGONAL_POSITIVE = enum.auto()
    DIAGONAL_NEGATIVE = enum.auto()
    # すべての具体的なフィルタを個別に適用することを示す
    ALL = enum.auto()


# フィルタの種類ごとの表示名とID
# IDは表示名の各単語を小文字にして先頭3文字を連結したもので、出力ファイル名の接尾辞に使用する
FILTER_NAMES: Dict[FilterKind, Tuple[str, str]] = {
    FilterKind.NONE: ("None", "non"),
    FilterKind.HORIZONTAL: ("Horizontal", "hor"),
    FilterKind.VERTICAL: ("Vertical", "ver"),
    FilterKind.DIAGONAL_POSITIVE: ("Diagonal Positive", "diapos"),
    FilterKind.DIAGONAL_NEGATIVE: ("Diagonal Negative", "dianeg"),
    FilterKind.ALL: ("All", "all"),
}


def line_kernels() -> Dict[FilterKind, np.ndarray]:
    """線を検出するカーネルを生成する。

    カーネルは`kernel[x, y]`で参照する。検出したい模様を1、それ以外を0で表現する。

    Returns:
        Dict[FilterKind, np.ndarray]: フィルタの種類をキー、カーネルを値とする辞書
    """
    # カーネル用の変数を準備
    kernel_h = np.zeros((KERNEL_SIZE, KERNEL_SIZE), dtype=np.float32)
    kernel_v = np.zeros((KERNEL_SIZE, KERNEL_SIZE), dtype=np.float32)
    kernel_pos = np.zeros((KERNEL_SIZE, KERNEL_SIZE), dtype=np.float32)
    kernel_neg = np.zeros((KERNEL_SIZE, KERNEL_SIZE), dtype=np.float32)
    # 水平方向の線(y = 1の行)
    kernel_h[:, 1] = 1
    # 垂直方向の線(x = 1の列)
    kernel_v[1, :] = 1
    # 右上がりの対角線
    kernel_pos[0, 2] = 1
    kernel_pos[1, 1] = 1
    kernel_pos[2, 0] = 1
    # 右下がりの対角線
    np.fill_diagonal(kernel_neg, 1)
    return {
        FilterKind.HORIZONTAL: kernel_h,
        FilterKind.VERTICAL: kernel_v,
        FilterKind.DIAGONAL_POSITIVE: kernel_pos,
        FilterKind.DIAGONAL_NEGATIVE: kernel_neg,
    }


@dataclass(frozen=True, eq=False)
class FilterDefinition:
    """名前とIDを持つ3x3のフィルタ

    `None`と`All`はカーネルを持たない。
    """

    kind: FilterKind
    name: str
    id: str
    weights: Optional[np.ndarray] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if self.weights is not None:
            weights = np.array(self.weights, dtype=np.float32)
            if weights.shape != (KERNEL_SIZE, KERNEL_SIZE):
                raise ValueError("weights must be a 3x3 array.")
            weights.setflags(write=False)
            object.__setattr__(self, "weights", weights)

    @property
    def width(self) -> int:
        return 0 if self.weights is None else self.weights.shape[0]

    @property
    def height(self) -> int:
        return 0 if self.weights is None else self.weights.shape[1]

    @property
    def is_identity(self) -> bool:
        return self.kind is FilterKind.NONE

    @property
    def is_all(self) -> bool:
        return self.kind is FilterKind.ALL

    @property
    def is_concrete(self) -> bool:
        """畳み込み演算に渡せるカーネルを持つかを返す。"""
        return self.weights is not None

    def weight(self, x: int, y: int) -> float:
        """カーネルの(x, y)における重みを返す。

        座標がカーネルの外にある場合は0を返す。

        Args:
            x (int): カーネル内の水平方向の位置
            y (int): カーネル内の垂直方向の位置
        Returns:
            float: 重み
        """
        if self.weights is None or not (0 <= x < self.width and 0 <= y < self.height):
            logger.error(
                "weight coordinate (%d, %d) not within bounds of filter %s",
                x,
                y,
                self.name,
            )
            return 0.0
        return float(self.weights[x, y])

    def __str__(self) -> str:
        return self.name


def create_filters() -> Tuple[FilterDefinition, ...]:
    """宣言順に並んだ組み込みフィルタを生成する。

    Returns:
        Tuple[FilterDefinition, ...]: 組み込みフィルタ
    """
    kernels = line_kernels()
    filters = []
    for kind in FilterKind:
        name, filter_id = FILTER_NAMES[kind]
        filters.append(FilterDefinition(kind, name, filter_id, kernels.get(kind)))
    return tuple(filters)


FILTERS = create_filters()

NONE, HORIZONTAL, VERTICAL, DIAGONAL_POSITIVE, DIAGONAL_NEGATIVE, ALL = FILTERS


def concrete_filters(
    filters: Sequence[FilterDefinition] = FILTERS,
) -> List[FilterDefinition]:
    """カーネルを持つフィルタを返す。`None`と`All`は含まない。"""
    return [f for f in filters if f.is_concrete]


def get_filter(
    filter_id: str, filters: Sequence[FilterDefinition] = FILTERS
) -> Optional[FilterDefinition]:
    """IDまたは表示名に一致するフィルタを返す。

    Args:
        filter_id (str): フィルタのID、または大文字と小文字を区別しない表示名
        filters (Sequence[FilterDefinition], optional): 検索するフィルタ
    Returns:
        Optional[FilterDefinition]: 一致したフィルタ、存在しない場合はNone
    """
    for f in filters:
        if f.id == filter_id:
            return f
    for f in filters:
        if f.name.lower() == filter_id.lower():
            return f
    return None


def filter_exists(filter_id: str, filters: Sequence[FilterDefinition] = FILTERS) -> bool:
    return get_filter(filter_id, filters) is not None
