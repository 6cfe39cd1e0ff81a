import jax.numpy as jnp

def uniform_samples(period: float, n_periods: int, samples_per_period: int) -> jnp.ndarray:
    """Uniform grid on [0, n_periods * period), endpoint excluded."""
    n_samples = n_periods * samples_per_period
    return jnp.arange(n_samples) * (period / samples_per_period)

def fourier_coefficients(samples: jnp.ndarray) -> jnp.ndarray:
    """Normalised Fourier coefficients along axis 0 of uniformly sampled periodic data."""
    return jnp.fft.fft(samples, axis=0) / samples.shape[0]

def significant_wavenumbers(coeffs: jnp.ndarray, tol: float) -> jnp.ndarray:
    """Signed wavenumbers whose coefficient exceeds tol * max|c| in any entry."""
    n = coeffs.shape[0]
    magnitude = jnp.abs(coeffs).reshape(n, -1).max(axis=1)
    scale = jnp.max(magnitude)
    wavenumbers = jnp.fft.fftfreq(n, d=1.0 / n).astype(int)
    if float(scale) == 0.0:
        return wavenumbers[:1]
    return wavenumbers[magnitude > tol * scale]

def n_significant_coefficients(coeffs: jnp.ndarray, tol: float) -> int:
    return int(significant_wavenumbers(coeffs, tol).size)
