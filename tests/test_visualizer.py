import cv2
import numpy as np
import pytest

from utils import visualizer
from utils.visualizer import DisparityVisualizer


def _ramp():
    return np.tile(np.arange(0, 40, dtype=np.uint8), (10, 1))


def test_colorize_shape_and_palette():
    colored = DisparityVisualizer().colorize_dispmap(_ramp())
    assert colored.shape == (10, 40, 3)
    assert colored.dtype == np.uint8
    low, high = colored[0, 0], colored[0, -1]
    # JET: low values are blue, high values are red (BGR order)
    assert low[0] > low[2]
    assert high[2] > high[0]


def test_colorize_uses_full_range():
    narrow = np.full((4, 4), 7, dtype=np.uint8)
    narrow[0, 0] = 9
    colored = DisparityVisualizer().colorize_dispmap(narrow)
    expected = cv2.applyColorMap(np.array([[255, 0]], dtype=np.uint8), cv2.COLORMAP_JET)
    assert np.array_equal(colored[0, 0], expected[0, 0])
    assert np.array_equal(colored[1, 1], expected[0, 1])


def test_show_dispmap_blocks_and_closes(monkeypatch):
    calls = []
    monkeypatch.setattr(cv2, "imshow", lambda name, image: calls.append(("imshow", name, image.shape)))
    monkeypatch.setattr(cv2, "waitKey", lambda *args: calls.append(("waitKey",)) or 27)
    monkeypatch.setattr(cv2, "destroyWindow", lambda name: calls.append(("destroyWindow", name)))

    visualizer.show_dispmap(_ramp())
    assert calls == [
        ("imshow", "disparity_map", (10, 40, 3)),
        ("waitKey",),
        ("destroyWindow", "disparity_map"),
    ]


def test_save_dispmap(tmp_path):
    output = DisparityVisualizer().save_dispmap(_ramp(), tmp_path / "out" / "disp.png")
    assert output.exists()
    written = cv2.imread(str(output))
    assert written.shape == (10, 40, 3)


def test_save_dispmap_failure(tmp_path):
    with pytest.raises(OSError):
        DisparityVisualizer().save_dispmap(_ramp(), tmp_path / "disp.unknownext")
