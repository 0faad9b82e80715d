__version__ = "0.1.0"


class ImageConvolutionError(Exception):
    """パッケージが送出する例外の基本クラス"""


class ImageDecodeError(ImageConvolutionError):
    """画像ファイルを読み込めなかったことを示す例外"""

    def __init__(self, path: str, reason: str = "") -> None:
        """イニシャライザ

        Args:
            path (str): 読み込めなかった画像ファイルのパス
            reason (str, optional): 読み込めなかった理由
        """
        message = f"cannot decode image: {path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.path = path
