"""Exception types raised by the cost function core."""


class CostFunctionError(ValueError):
    """Base class for invalid inputs to the cost function."""


class ShapeMismatchError(CostFunctionError):
    """Raised when matrix or vector shapes are inconsistent.

    Covers feature/outcome row-count mismatches, parameter vectors whose
    length does not match ``classes * n_features``, and reshapes between
    vectors and matrices of different sizes.
    """
