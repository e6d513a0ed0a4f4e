from .operators import (
    backward,
    centered,
    forward,
    negated,
    time_avg,
    time_diff,
)
from .stencils import d1_backward_3pt_coeffs, d1_central_coeffs, d1_forward_3pt_coeffs

__all__ = [
    # Coefficients
    "d1_central_coeffs",
    "d1_forward_3pt_coeffs",
    "d1_backward_3pt_coeffs",
    # Point-wise operators
    "centered",
    "forward",
    "backward",
    "negated",
    "time_diff",
    "time_avg",
]
