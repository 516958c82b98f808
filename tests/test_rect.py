"""Tests for the Rect geometry type."""

from tilewm.tiling.rect import Rect


class TestCopy:
    def test_clone_is_independent(self):
        r = Rect(1, 2, 3, 4)
        c = r.clone()
        c.x = 99
        assert r == Rect(1, 2, 3, 4)
        assert c is not r

    def test_copy_from_overwrites_in_place(self):
        r = Rect(0, 0, 0, 0)
        r.copy_from(Rect(5, 6, 7, 8))
        assert r == Rect(5, 6, 7, 8)

    def test_equality_compares_all_fields(self):
        assert Rect(0, 0, 10, 10) != Rect(0, 0, 10, 11)


class TestGeometry:
    def test_right_bottom(self):
        r = Rect(10, 20, 100, 50)
        assert r.right == 110
        assert r.bottom == 70

    def test_slice_columns_last_absorbs_remainder(self):
        cols = Rect(0, 0, 1000, 100).slice_columns(3)
        assert [c.width for c in cols] == [333, 333, 334]
        assert [c.x for c in cols] == [0, 333, 666]

    def test_slice_rows(self):
        rows = Rect(0, 10, 50, 90).slice_rows(2)
        assert rows == [Rect(0, 10, 50, 45), Rect(0, 55, 50, 45)]

    def test_slice_nothing(self):
        assert Rect(0, 0, 10, 10).slice_rows(0) == []
        assert Rect(0, 0, 10, 10).slice_columns(-1) == []

    def test_split_horizontal(self):
        left, right = Rect(100, 0, 1000, 500).split_horizontal(0.25)
        assert left == Rect(100, 0, 250, 500)
        assert right == Rect(350, 0, 750, 500)

    def test_pad_clamps_to_zero(self):
        assert Rect(0, 0, 100, 50).pad(10) == Rect(10, 10, 80, 30)
        assert Rect(0, 0, 10, 10).pad(20).width == 0

    def test_ltrb_round_trip(self):
        r = Rect.from_ltrb(10, 20, 110, 70)
        assert r == Rect(10, 20, 100, 50)
        assert r.to_ltrb() == (10, 20, 110, 70)

    def test_str(self):
        assert str(Rect(1, 2, 30, 40)) == "Rect(30x40+1+2)"
