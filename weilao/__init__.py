from .models import Inputs, Result, default_inputs, demo_inputs
from .engine import compute, sensitivity_grid

__all__ = ["Inputs", "Result", "compute", "sensitivity_grid", "default_inputs", "demo_inputs"]
