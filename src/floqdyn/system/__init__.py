from .abstract_system import AbstractPeriodicSystem
from .second_order_system import AbstractSecondOrderSystem
from .coupled_mathieu_system import CoupledMathieuSystem
from .mathieu_oscillator import MathieuOscillator
from .linear_periodic_system import LinearPeriodicSystem
