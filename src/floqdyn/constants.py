# constants.py
from enum import Enum, auto
import math

class Precision(Enum):
    SINGLE = auto()
    DOUBLE = auto()

# Coupled Mathieu example
PERIOD = math.pi
COUPLING_AMPLITUDE = 0.15
N_STATES = 4
N_PERIODS_TO_PLOT = 10
N_POINTS_PER_PERIOD = 200

N_CHEBYSHEV_NODES = 64
N_QUADRATURE_NODES = 64

FOURIER_SAMPLES_PER_PERIOD = 128
FOURIER_TOL = 1e-8
CHEBYSHEV_CHOP_TOL = 1e-13

IMAG_WARNING_TOL = 1e-8

PLOT_GRID = True
