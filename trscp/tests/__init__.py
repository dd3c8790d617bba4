import operator

from numpy.testing import assert_array_compare


def assert_array_less_equal(x, y, err_msg='', verbose=True):
    """
    Check componentwise that ``x <= y``.

    This is used to check that directions and slack variables lie within
    their bounds, for which `numpy.testing.assert_array_less` is too strict.

    Parameters
    ----------
    x : array_like
        Lower object, for example the lower bounds of the trust region.
    y : array_like
        Upper object, for example a direction.
    err_msg : str, optional
        Error message to be printed in case of failure.
    verbose : bool, optional
        Whether the conflicting values are appended to the error message
        (default is True).

    Raises
    ------
    AssertionError
        If a component of `x` is greater than the corresponding component of
        `y`.
    """
    assert_array_compare(operator.__le__, x, y, err_msg, verbose, 'Arrays are not less-or-equal-ordered')
