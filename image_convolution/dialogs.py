import tkinter as tk
from tkinter import filedialog, simpledialog, ttk
from typing import Optional, Sequence

from image_convolution.filters import FILTERS, FilterDefinition

# 選択できる画像ファイルの拡張子
IMAGE_EXTENSIONS = ("jpg", "jpeg", "png", "bmp", "gif")


def image_filetypes() -> list:
    """ファイル選択ダイアログに渡すファイルの種類を返す。"""
    patterns = " ".join(f"*.{ext}" for ext in IMAGE_EXTENSIONS)
    return [("Image Files", patterns)]


class FilterDialog(simpledialog.Dialog):
    """フィルタを選択するダイアログ"""

    def __init__(self, parent: tk.Misc, filters: Sequence[FilterDefinition]) -> None:
        """イニシャライザ

        Args:
            parent (tk.Misc): 親ウィジェット
            filters (Sequence[FilterDefinition]): 選択肢として表示するフィルタ
        """
        self.filters = list(filters)
        self.selected: Optional[FilterDefinition] = None
        super().__init__(parent, title="Choose Filter")

    def body(self, master: tk.Frame) -> tk.Widget:
        ttk.Label(master, text="Choose Filter").pack(anchor=tk.W, padx=5, pady=5)
        self.combo = ttk.Combobox(
            master, values=[f.name for f in self.filters], state="readonly"
        )
        # 先頭のフィルタを初期値にする
        self.combo.current(0)
        self.combo.pack(fill=tk.X, padx=5, pady=5)
        return self.combo

    def apply(self) -> None:
        self.selected = self.filters[self.combo.current()]


def _hidden_root() -> tk.Tk:
    root = tk.Tk()
    root.withdraw()
    return root


def choose_file() -> Optional[str]:
    """画像ファイルを選択する。

    Returns:
        Optional[str]: 選択した画像ファイルのパス、選択しなかった場合はNone
    """
    root = _hidden_root()
    try:
        path = filedialog.askopenfilename(
            parent=root, title="Open image", filetypes=image_filetypes()
        )
    finally:
        root.destroy()
    return path or None


def choose_filter(
    filters: Sequence[FilterDefinition] = FILTERS,
) -> Optional[FilterDefinition]:
    """適用するフィルタを選択する。

    Args:
        filters (Sequence[FilterDefinition], optional): 選択肢として表示するフィルタ
    Returns:
        Optional[FilterDefinition]: 選択したフィルタ、選択しなかった場合はNone
    """
    root = _hidden_root()
    try:
        dialog = FilterDialog(root, filters)
    finally:
        root.destroy()
    return dialog.selected
