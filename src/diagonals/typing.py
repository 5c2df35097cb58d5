from __future__ import annotations

from collections.abc import Callable
from typing import TypeAlias

import numpy as np
from numpy.typing import ArrayLike, NDArray

# typing only
FloatArray: TypeAlias = NDArray[np.floating]
VectorLike: TypeAlias = ArrayLike
BandRowsLike: TypeAlias = ArrayLike  # (n, 3) rows [lower, diag, upper]
RhsFn: TypeAlias = Callable[[float, float], float]  # f(t, y)

# Runtime types
FloatDType = np.float64  # runtime dtype only
