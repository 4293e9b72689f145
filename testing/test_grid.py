import pytest

from mealy_tools.grid import Grid, OutOfRangeError

@pytest.fixture
def grid():
    g = Grid()
    g.set("a", 0, 0)
    g.set("b", 1, 2)
    g.set("c", 2, 1)
    return g

def test_empty_grid():
    g = Grid()
    assert g.shape == (0, 0)
    assert g.flatten() == []

    with pytest.raises(OutOfRangeError):
        g.get(0, 0)

def test_presized_grid():
    g = Grid(2, 3)
    assert g.row_count == 2
    assert g.column_count == 3
    assert g.flatten() == [None] * 6

    assert Grid.square(4).shape == (4, 4)

def test_set_get(grid):
    assert grid.get(0, 0) == "a"
    assert grid.get(1, 2) == "b"
    assert grid[2, 1] == "c"
    assert grid.get(2, 2) is None

def test_set_grows(grid):
    assert grid.shape == (3, 3)
    assert grid.set("d", 5, 4) is grid
    assert grid.row_count > 5
    assert grid.column_count > 4

    assert grid.get(0, 0) == "a"
    assert grid.get(1, 2) == "b"
    assert grid.get(2, 1) == "c"
    assert grid.get(5, 4) == "d"
    assert grid.get(5, 0) is None

def test_stays_rectangular(grid):
    grid.set("e", 7, 0)
    assert len(grid.row(7)) == grid.column_count
    for i in range(grid.column_count):
        assert len(grid.column(i)) == grid.row_count

def test_get_out_of_range(grid):
    with pytest.raises(OutOfRangeError):
        grid.get(3, 0)
    with pytest.raises(OutOfRangeError):
        grid.get(0, 3)
    with pytest.raises(OutOfRangeError):
        grid.get(-1, 0)
    with pytest.raises(IndexError):
        grid.row(3)
    with pytest.raises(IndexError):
        grid.column(5)

def test_set_negative(grid):
    with pytest.raises(OutOfRangeError):
        grid.set("x", -1, 0)

def test_grow(grid):
    grid.grow_columns(2)
    assert grid.shape == (3, 5)
    grid.grow_rows(1)
    assert grid.shape == (4, 5)
    assert grid.row(3) == [None] * 5

    grid.increase(1)
    assert grid.shape == (5, 6)

    with pytest.raises(ValueError):
        grid.grow_rows(-1)

def test_rows_and_columns(grid):
    assert grid.row(1) == [None, None, "b"]
    assert grid.column(1) == [None, None, "c"]

def test_flatten_column_major(grid):
    assert grid.flatten() == ["a", None, None,
                              None, None, "c",
                              None, "b", None]

def test_copy_shares_values():
    g = Grid()
    value = ["x"]
    g.set(value, 0, 0)

    copied = g.copy()
    copied.set("y", 1, 1)
    assert g.shape == (1, 1)
    assert copied.get(0, 0) is value

def test_filter(grid):
    filtered = grid.filter(lambda v: v != "b")
    assert filtered.get(1, 2) is None
    assert filtered.get(0, 0) == "a"
    assert grid.get(1, 2) == "b"

    grid.filter(lambda v: v == "a", in_place=True)
    assert grid.flatten() == ["a"] + [None] * 8

def test_initialize():
    g = Grid(2, 2).initialize(0)
    assert g.flatten() == [0, 0, 0, 0]

def test_str(grid):
    assert str(grid) == "a - -\n- - b\n- c -"
