import matplotlib.pyplot as plt
import jax.numpy as jnp
import numpy as np

from .. import constants as const

def _save(fig, path):
    if path is None:
        return
    fmt = "svg" if str(path).lower().endswith(".svg") else None
    fig.savefig(path, format=fmt, dpi=300)

def plot_trajectory(
    trajectory,
    *,
    labels=None,
    ax=None,
    period=None,
    title="Floquet propagation",
    path=None,
):
    """
    One line per state component of x(t). Vertical markers at multiples of
    the period when it is given. Saved as SVG when path ends in .svg.
    """
    ts = np.asarray(trajectory.ts)
    xs = np.asarray(trajectory.xs)
    n = xs.shape[1]

    if labels is None:
        labels = [f"x[{i}]" for i in range(n)]
    if len(labels) != n:
        raise ValueError(f"Got {len(labels)} labels for {n} state components.")

    # --- figure
    if ax is None:
        fig, ax = plt.subplots(figsize=(10, 6))
    else:
        fig = ax.figure

    for i, label in enumerate(labels):
        ax.plot(ts, xs[:, i], lw=1.3, label=label)

    # --- period markers
    if period is not None:
        n_periods = int(np.floor(ts[-1] / period + 1e-9))
        for k in range(1, n_periods + 1):
            ax.axvline(k * period, color="0.8", lw=0.6, zorder=0)

    ax.set_xlabel("t")
    ax.set_ylabel("x(t)")
    ax.set_title(title)
    ax.legend(frameon=False)
    ax.grid(const.PLOT_GRID, alpha=0.25)
    fig.tight_layout()

    _save(fig, path)
    return fig, ax

def plot_floquet_multipliers(
    multipliers,
    *,
    ax=None,
    tol_inside=1e-6,
    title="Floquet multipliers",
    path=None,
):
    """
    Multipliers in the complex plane against the unit circle. Multipliers with
    |rho| <= 1 - tol_inside are drawn as stable.
    """
    mu = np.asarray(jnp.asarray(multipliers)).astype(complex).ravel()
    rho = np.abs(mu)
    stable = np.isfinite(rho) & (rho <= (1.0 - tol_inside))

    if ax is None:
        fig, ax = plt.subplots(figsize=(6, 6))
    else:
        fig = ax.figure

    theta = np.linspace(0.0, 2.0 * np.pi, 400)
    ax.plot(np.cos(theta), np.sin(theta), color="k", lw=1.0, ls="--", label="|rho| = 1")

    ax.scatter(mu.real[stable], mu.imag[stable], marker="o", s=60, c="C0", label="inside")
    ax.scatter(mu.real[~stable], mu.imag[~stable], marker="x", s=60, c="C3", label="on / outside")

    ax.set_xlabel("Re(rho)")
    ax.set_ylabel("Im(rho)")
    ax.set_aspect("equal", adjustable="datalim")
    ax.set_title(title)
    ax.legend(frameon=False)
    ax.grid(const.PLOT_GRID, alpha=0.25)
    fig.tight_layout()

    _save(fig, path)
    return fig, ax
