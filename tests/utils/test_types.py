import pytest

from pagewise.utils.types import clamp, coerce_int


class TestCoerceInt:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (4, 4),
            ("4", 4),
            (" 4 ", 4),
            ("2.0", 2),
            (3.9, 3),
            ("x", 7),
            (None, 7),
            (True, 7),
            (float("nan"), 7),
            (float("inf"), 7),
        ],
    )
    def test_values(self, value, expected):
        assert coerce_int(value, 7) == expected


def test_clamp():
    assert clamp(5, 1, 3) == 3
    assert clamp(-1, 1, 3) == 1
    assert clamp(2, 1, 3) == 2
