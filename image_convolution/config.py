from typing import Optional


class ConvolutionConfig:
    """フィルタの適用と表示のオプション"""

    def __init__(self) -> None:
        """イニシャライザー"""
        self.amount = 1  # フィルタの適用と正規化を繰り返す回数
        self.target_width = 256  # 結果を表示するときの画像1枚あたりの最小の幅(ピクセル)
        self.show = True  # 結果をウィンドウに表示
        self.save = True  # 結果を入力画像と同じディレクトリにPNG形式で保存
        self.default_filter_id: Optional[str] = None  # Noneの場合はダイアログで選択
        self.log_level = "WARNING"  # ログの出力レベル
