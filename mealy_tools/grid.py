"""A growable two-dimensional container.

The `Grid` class stores one optional value per `(row, column)` cell. The
underlying data is a numpy ndarray with `dtype=object`, so any python
object can be stored in a cell; `None` marks an absent cell.

Writing outside of the current extents grows the grid instead of
failing:

```python
from mealy_tools.grid import Grid

grid = Grid()
grid.set("x", 2, 1)
grid.shape
```
    (3, 2)

Reading outside of the current extents raises `OutOfRangeError`.

"""

import numpy as np


class OutOfRangeError(IndexError):
    """Thrown when a grid is read at an index outside of its current
    extents.

    """
    pass


class Grid:
    """Grid: a rectangular, auto-growing table of optional values.

    The grid is always rectangular: growing one axis fills the new
    cells along the other axis with `None`. A grid never shrinks.

    """
    def __init__(self, rows=0, columns=0):
        """

        Parameters
        ----------
        rows : int
            initial number of rows.

        columns : int
            initial number of columns.

        """
        if rows < 0 or columns < 0:
            raise ValueError(
                "Cannot build a grid of shape ({}, {})".format(rows, columns)
            )
        self._data = np.full((rows, columns), None, dtype=object)

    @classmethod
    def square(cls, size):
        return cls(size, size)

    @property
    def row_count(self):
        return self._data.shape[0]

    @property
    def column_count(self):
        return self._data.shape[1]

    @property
    def shape(self):
        return self._data.shape

    def _check_index(self, row, column):
        if not (0 <= row < self.row_count and 0 <= column < self.column_count):
            raise OutOfRangeError(
                "Index {}x{} out of bounds. Grid size is {}x{}.".format(
                    row, column, self.row_count, self.column_count
                )
            )

    def get(self, row, column):
        """Get the value stored at a cell.

        Raises
        ------
        OutOfRangeError
            If `row` or `column` lies outside of the current extents.

        """
        self._check_index(row, column)
        return self._data[row, column]

    def __getitem__(self, index):
        row, column = index
        return self.get(row, column)

    def set(self, value, row, column):
        """Store a value at a cell, growing the grid first if the cell
        does not exist yet.

        Parameters
        ----------
        value : object
            value to store. `None` clears the cell.

        row : int
            row index (non-negative).

        column : int
            column index (non-negative).

        Returns
        -------
        Grid
            this grid.

        """
        if row < 0 or column < 0:
            raise OutOfRangeError(
                "Cannot write at negative index {}x{}".format(row, column)
            )
        if row >= self.row_count:
            self.grow_rows(row - self.row_count + 1)
        if column >= self.column_count:
            self.grow_columns(column - self.column_count + 1)

        self._data[row, column] = value
        return self

    def grow_columns(self, amount):
        """Append `amount` empty columns."""
        if amount < 0:
            raise ValueError("Cannot grow a grid by {} columns".format(amount))
        new_columns = np.full((self.row_count, amount), None, dtype=object)
        self._data = np.concatenate([self._data, new_columns], axis=1)

    def grow_rows(self, amount):
        """Append `amount` empty rows."""
        if amount < 0:
            raise ValueError("Cannot grow a grid by {} rows".format(amount))
        new_rows = np.full((amount, self.column_count), None, dtype=object)
        self._data = np.concatenate([self._data, new_rows], axis=0)

    def increase(self, rows, columns=None):
        """Grow the grid along both axes.

        If `columns` is `None`, grow both axes by `rows`.

        """
        if columns is None:
            columns = rows
        self.grow_columns(columns)
        self.grow_rows(rows)
        return self

    def initialize(self, value):
        """Set every cell of the grid to `value`."""
        for row in range(self.row_count):
            for column in range(self.column_count):
                self._data[row, column] = value
        return self

    def row(self, index):
        if not 0 <= index < self.row_count:
            raise OutOfRangeError(
                "Row {} out of bounds for a grid with {} rows".format(
                    index, self.row_count)
            )
        return self._data[index, :].tolist()

    def column(self, index):
        if not 0 <= index < self.column_count:
            raise OutOfRangeError(
                "Column {} out of bounds for a grid with {} columns".format(
                    index, self.column_count)
            )
        return self._data[:, index].tolist()

    def flatten(self):
        """Get every cell of the grid as a single list, column after
        column.

        """
        return self._data.flatten(order="F").tolist()

    def copy(self):
        """Get a copy of this grid.

        The copy has its own storage, but the values in its cells are
        the same objects as the values in this grid.

        """
        grid = Grid()
        grid._data = self._data.copy()
        return grid

    def filter(self, predicate, in_place=False):
        """Clear every cell whose value does not satisfy a predicate.

        Parameters
        ----------
        predicate : callable
            function taking a cell value and returning a bool. It is
            not called on absent cells.

        in_place : bool
            If `True`, modify this grid. Otherwise (the default),
            filter a copy and leave this grid unchanged.

        Returns
        -------
        Grid
            the filtered grid.

        """
        grid = self if in_place else self.copy()
        for (row, column), value in np.ndenumerate(grid._data):
            if value is not None and not predicate(value):
                grid._data[row, column] = None
        return grid

    def __str__(self):
        lines = []
        for row in range(self.row_count):
            lines.append(" ".join(
                "-" if value is None else str(value)
                for value in self._data[row, :]
            ))
        return "\n".join(lines)

    def __repr__(self):
        return "Grid(rows={}, columns={})".format(
            self.row_count, self.column_count
        )
