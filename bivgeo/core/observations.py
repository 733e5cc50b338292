"""Normalization of paired (x, y) observations.

Every public function accepts its data either as two equal-length
sequences ``x`` and ``y`` (scalars allowed), or as one two-column table
passed as ``x`` with ``y=None``: a 2-D array, a list of pairs or a pandas
DataFrame. Extra columns of a table are ignored. ``Observations.from_input``
turns all of these into one canonical pair of int64 arrays.
"""

from dataclasses import dataclass
from typing import Any, Optional, Union

import numpy as np
import pandas as pd

from .exceptions import ObservationError


@dataclass(frozen=True)
class Observations:
    """Canonical paired representation of (x, y) data."""
    x: np.ndarray
    y: np.ndarray
    scalar: bool = False

    @classmethod
    def from_input(cls, x: Any, y: Any = None, min_value: int = 1) -> "Observations":
        """Build observations from any accepted input shape.

        Args:
            x: Values of x, or a two-column table when ``y`` is None
            y: Values of y
            min_value: Smallest admissible value (1 for the pmf, 0 for cdf/sf)

        Returns:
            Validated observations

        Raises:
            ObservationError: On shape mismatch or inadmissible values
        """
        if y is None:
            x0, y0 = cls._split_table(x)
            scalar = False
        else:
            x0 = cls._as_vector(x, 'x')
            y0 = cls._as_vector(y, 'y')
            if x0.shape != y0.shape:
                raise ObservationError(
                    f"lengths of x and y are not equal ({x0.size} != {y0.size})",
                    field_name='y',
                )
            scalar = np.ndim(x) == 0 and np.ndim(y) == 0

        if x0.size == 0:
            raise ObservationError("no observations supplied")

        return cls(
            x=cls._as_integers(x0, 'x', min_value),
            y=cls._as_integers(y0, 'y', min_value),
            scalar=scalar,
        )

    @staticmethod
    def _split_table(table: Any):
        if isinstance(table, pd.DataFrame):
            values = table.to_numpy()
        else:
            try:
                values = np.asarray(table)
            except (TypeError, ValueError) as exc:
                raise ObservationError(
                    "x is not a two-column table and y was not supplied"
                ) from exc

        if values.ndim != 2 or values.shape[1] < 2:
            raise ObservationError(
                "x is not a two-column table and y was not supplied"
            )
        return values[:, 0], values[:, 1]

    @staticmethod
    def _as_vector(values: Any, name: str) -> np.ndarray:
        if isinstance(values, (pd.Series, pd.Index)):
            values = values.to_numpy()
        arr = np.asarray(values)
        if arr.ndim > 1:
            raise ObservationError(
                f"{name} must be a scalar or a one-dimensional sequence", field_name=name
            )
        return np.atleast_1d(arr)

    @staticmethod
    def _as_integers(values: np.ndarray, name: str, min_value: int) -> np.ndarray:
        try:
            as_float = values.astype(float)
        except (TypeError, ValueError) as exc:
            raise ObservationError(f"{name} must be numeric", field_name=name) from exc

        if not np.all(np.isfinite(as_float)):
            raise ObservationError(f"{name} contains non-finite values", field_name=name)
        if np.any(as_float != np.floor(as_float)):
            raise ObservationError(f"{name} must contain integers", field_name=name)
        if np.any(as_float < min_value):
            raise ObservationError(
                f"{name} must be >= {min_value}, got min {as_float.min():g}",
                field_name=name,
            )
        return as_float.astype(np.int64)

    def __len__(self) -> int:
        return int(self.x.size)

    def wrap(self, values: np.ndarray) -> Union[float, np.ndarray]:
        """Return a float for scalar input, otherwise the array itself."""
        if self.scalar:
            return float(values[0])
        return values

    def to_array(self) -> np.ndarray:
        """Return an (n, 2) int64 array with x in column 0 and y in column 1."""
        return np.column_stack([self.x, self.y])

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame({'x': self.x, 'y': self.y})


def as_observations(x: Any, y: Optional[Any] = None, min_value: int = 1) -> Observations:
    """Shorthand for ``Observations.from_input``."""
    if isinstance(x, Observations) and y is None:
        return x
    return Observations.from_input(x, y, min_value=min_value)
