"""
numerics/fd/stencils.py (pure coefficients/weights)
Responsibility: return stencil coefficients; no "apply to a buffer" logic.

These weights give the Jacobian diagonal used by the relaxation and the
sparse matrix assembled by the direct solver. The point-wise operators in
`wave1d.numerics.fd.operators` apply the same stencils in difference form;
the tests check the two agree.
"""


def d1_central_coeffs(dx):
    """Central 3-point coefficients for the first derivative on a uniform grid.

    Returns coefficients (dl, dd, du) such that:
        y'(x_i) ≈ dl*y_{i-1} + dd*y_i + du*y_{i+1}

    Second-order accurate; exact for quadratics.
    """
    h2 = 2.0 * dx
    return -1.0 / h2, 0.0, 1.0 / h2


def d1_forward_3pt_coeffs(dx):
    """One-sided forward 3-point first-derivative weights.

    Returns (w0, w1, w2) such that:
        y'(x_i) ≈ w0*y_i + w1*y_{i+1} + w2*y_{i+2}

    Used at the left boundary, where no point exists to the left of x_i.
    """
    h2 = 2.0 * dx
    return -3.0 / h2, 4.0 / h2, -1.0 / h2


def d1_backward_3pt_coeffs(dx):
    """One-sided backward 3-point first-derivative weights.

    Returns (w0, w1, w2) such that:
        y'(x_i) ≈ w0*y_{i-2} + w1*y_{i-1} + w2*y_i

    Used at the right boundary.
    """
    h2 = 2.0 * dx
    return 1.0 / h2, -4.0 / h2, 3.0 / h2
