"""Fixed-step explicit integration of scalar initial-value problems.

This module provides:

1) A small *one-step method interface* (:class:`OneStepMethod`) so the
   integration loop can call different update rules in a uniform way.
2) A string-to-method *registry* so users can do ``method="rk4"`` (or register
   their own rules) without editing :func:`ode_solve`.

The right-hand side ``f(t, y)`` is pluggable as well; the default is
:func:`exponential_growth` (``y' = y``).
"""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass
from numbers import Integral
from typing import Protocol, runtime_checkable

from diagonals.config import DEFAULT_ODE, ODEConfig
from diagonals.exceptions import InvalidStructureError, NullInputError
from diagonals.typing import RhsFn

__all__ = [
    "OneStepMethod",
    "ExplicitEuler",
    "ExplicitMidpoint",
    "Heun",
    "RK4",
    "ODEResult",
    "exponential_growth",
    "register_method",
    "available_methods",
    "resolve_method",
    "ode_integrate",
    "ode_solve",
]


def exponential_growth(t: float, y: float) -> float:
    """Default right-hand side: y' = y."""
    return y


@runtime_checkable
class OneStepMethod(Protocol):
    """An explicit single-step update y_{n+1} = Phi(f, t_n, y_n, h)."""

    @property
    def name(self) -> str:  # pragma: no cover
        ...

    def step(
        self, f: RhsFn, t: float, y: float, h: float
    ) -> float:  # pragma: no cover
        ...


@dataclass(frozen=True, slots=True)
class ExplicitEuler:
    @property
    def name(self) -> str:
        return "euler"

    def step(self, f: RhsFn, t: float, y: float, h: float) -> float:
        return y + h * f(t, y)


@dataclass(frozen=True, slots=True)
class ExplicitMidpoint:
    @property
    def name(self) -> str:
        return "midpoint"

    def step(self, f: RhsFn, t: float, y: float, h: float) -> float:
        k1 = f(t, y)
        return y + h * f(t + 0.5 * h, y + 0.5 * h * k1)


@dataclass(frozen=True, slots=True)
class Heun:
    """Improved Euler (explicit trapezoid)."""

    @property
    def name(self) -> str:
        return "heun"

    def step(self, f: RhsFn, t: float, y: float, h: float) -> float:
        k1 = f(t, y)
        k2 = f(t + h, y + h * k1)
        return y + 0.5 * h * (k1 + k2)


@dataclass(frozen=True, slots=True)
class RK4:
    @property
    def name(self) -> str:
        return "rk4"

    def step(self, f: RhsFn, t: float, y: float, h: float) -> float:
        k1 = f(t, y)
        k2 = f(t + 0.5 * h, y + 0.5 * h * k1)
        k3 = f(t + 0.5 * h, y + 0.5 * h * k2)
        k4 = f(t + h, y + h * k3)
        return y + (h / 6.0) * (k1 + 2.0 * k2 + 2.0 * k3 + k4)


@dataclass(frozen=True, slots=True)
class ODEResult:
    t_final: float
    y_final: float
    steps: int
    method: str


# -----------------------------
# Registry
# -----------------------------

MethodFactory = Callable[[], OneStepMethod]
_METHOD_REGISTRY: dict[str, MethodFactory] = {}


def register_method(
    name: str,
    factory: MethodFactory,
    *,
    overwrite: bool = False,
    aliases: tuple[str, ...] = (),
) -> None:
    """Register a method factory under one or more names.

    Parameters
    ----------
    name:
        Primary key users will pass to ``ode_solve(..., method=...)``.
    factory:
        Callable returning a new method instance.
    overwrite:
        If False (default), raise if ``name`` or any alias already exists.
    aliases:
        Additional strings that should resolve to the same factory.
    """

    keys = (name, *aliases)
    for k in keys:
        kk = str(k).lower().strip()
        if not kk:
            raise ValueError("Method name/alias cannot be empty")
        if (not overwrite) and (kk in _METHOD_REGISTRY):
            raise KeyError(f"Method '{kk}' is already registered")
        _METHOD_REGISTRY[kk] = factory


def available_methods() -> list[str]:
    """Return the currently registered method keys (sorted)."""

    return sorted(_METHOD_REGISTRY.keys())


def resolve_method(method: str | OneStepMethod | None) -> OneStepMethod:
    """Resolve a method name, instance or ``None`` (default "euler")."""

    if method is None:
        method = DEFAULT_ODE.method

    # If a user passes a concrete method object, trust it.
    if isinstance(method, OneStepMethod):
        return method

    key = str(method).lower().strip()
    try:
        factory = _METHOD_REGISTRY[key]
    except KeyError as e:
        raise ValueError(
            f"Unknown method '{method}'. Available: {', '.join(available_methods())}"
        ) from e
    return factory()


def _register_builtin_methods() -> None:
    register_method(
        "euler",
        ExplicitEuler,
        overwrite=True,
        aliases=("explicit-euler", "forward-euler", "fe"),
    )
    register_method("midpoint", ExplicitMidpoint, overwrite=True)
    register_method("heun", Heun, overwrite=True, aliases=("improved-euler",))
    register_method("rk4", RK4, overwrite=True, aliases=("runge-kutta",))


_register_builtin_methods()


# -----------------------------
# Integration loop
# -----------------------------


def ode_integrate(
    initial_value: float,
    step_size: float,
    step_count: int,
    *,
    rhs: RhsFn | None = None,
    method: str | OneStepMethod | None = None,
    config: ODEConfig | None = None,
) -> ODEResult:
    """Advance y(t0) = initial_value by ``step_count`` steps of size ``step_size``.

    ``step_count == 0`` returns the initial value unchanged, whatever the step
    size. A negative ``step_size`` integrates backward in time. Only the final
    state is kept. Bad step counts and non-finite inputs raise
    :class:`InvalidStructureError` (a ``ValueError``).
    """
    cfg = DEFAULT_ODE if config is None else config
    stepper = resolve_method(cfg.method if method is None else method)
    t0 = float(cfg.t0)

    if initial_value is None or step_size is None or step_count is None:
        raise NullInputError("initial_value, step_size and step_count are required")
    if isinstance(step_count, bool) or not isinstance(step_count, Integral):
        raise InvalidStructureError("step_count must be an integer")
    if step_count < 0:
        raise InvalidStructureError("step_count must be >= 0")
    if step_count == 0:
        return ODEResult(
            t_final=t0, y_final=initial_value, steps=0, method=stepper.name
        )

    try:
        h = float(step_size)
        y = float(initial_value)
    except (TypeError, ValueError) as e:
        raise InvalidStructureError("step_size and initial_value must be real") from e
    if not math.isfinite(h):
        raise InvalidStructureError("step_size must be finite")
    if not math.isfinite(y):
        raise InvalidStructureError("initial_value must be finite")

    f = exponential_growth if rhs is None else rhs
    for k in range(int(step_count)):
        y = stepper.step(f, t0 + k * h, y, h)

    return ODEResult(
        t_final=t0 + int(step_count) * h,
        y_final=y,
        steps=int(step_count),
        method=stepper.name,
    )


def ode_solve(
    initial_value: float,
    step_size: float,
    step_count: int,
    *,
    rhs: RhsFn | None = None,
    method: str | OneStepMethod | None = None,
    config: ODEConfig | None = None,
) -> float:
    return ode_integrate(
        initial_value,
        step_size,
        step_count,
        rhs=rhs,
        method=method,
        config=config,
    ).y_final
