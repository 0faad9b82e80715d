import matplotlib

# ウィンドウを開かずにテストする
matplotlib.use("Agg")

import numpy as np
import pytest
from PIL import Image


@pytest.fixture
def gradient_image_path(tmp_path):
    """左から右に明るくなる6x4のグレースケール画像を保存して、そのパスを返す。"""
    rows = np.tile(np.arange(0, 240, 40, dtype=np.uint8), (4, 1))
    path = tmp_path / "gradient.png"
    Image.fromarray(np.stack((rows, rows, rows), axis=-1)).save(path)
    return str(path)
