from __future__ import annotations
import math
import jax.numpy as jnp
from dataclasses import dataclass

from .floquet import PeriodicFactor
from .utils import fourier
from . import constants as const

@dataclass(frozen=True)
class PeriodicityReport:
    n_periods: int
    n_coefficients: int
    bandwidth: float
    max_periodicity_error: float

def periodicity_check(
    periodic_factor: PeriodicFactor,
    n_periods: int = 1,
    samples_per_period: int = const.FOURIER_SAMPLES_PER_PERIOD,
    tol: float = const.FOURIER_TOL,
) -> PeriodicityReport:
    """Re-express P on a periodic domain of n_periods * T and count the Fourier coefficients it needs.

    P is sampled without periodic wrapping, so the count reflects the solved
    fundamental matrix. A T-periodic P only excites every n_periods-th
    wavenumber on the longer domain, so the count does not grow with n_periods.
    This is a qualitative check; no threshold is applied.

    Args:
        periodic_factor: P(t) = Phi(t) exp(-tB).
        n_periods: Number of periods sampled. The fundamental matrix must cover them.
        samples_per_period: Uniform samples per period.
        tol: Coefficients below tol * max|c| are not counted.

    Returns:
        A PeriodicityReport. max_periodicity_error is max |P(t + T) - P(t)| over the
        samples when n_periods >= 2, nan otherwise. bandwidth is the highest
        significant harmonic of 2 pi / T.
    """
    if n_periods < 1:
        raise ValueError(f"n_periods must be at least 1, got {n_periods}.")

    period = periodic_factor.period
    t1 = periodic_factor.fundamental.domain[1]
    if t1 < n_periods * period * (1.0 - 1e-12):
        raise ValueError(f"Fundamental matrix is solved up to t = {t1}, but {n_periods} periods "
                         f"require t = {n_periods * period}.")

    ts = fourier.uniform_samples(period, n_periods, samples_per_period)
    samples = periodic_factor.unwrapped(ts)  # (n_samples, n, n)

    coeffs = fourier.fourier_coefficients(samples)
    wavenumbers = fourier.significant_wavenumbers(coeffs, tol)

    if n_periods >= 2:
        shift = samples_per_period
        max_periodicity_error = float(jnp.max(jnp.abs(samples[shift:] - samples[:-shift])))
    else:
        max_periodicity_error = math.nan

    return PeriodicityReport(
        n_periods=n_periods,
        n_coefficients=int(wavenumbers.size),
        bandwidth=float(jnp.max(jnp.abs(wavenumbers))) / n_periods,
        max_periodicity_error=max_periodicity_error,
    )
