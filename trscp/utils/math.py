import numpy as np


def get_arrays_tol(*arrays):
    """
    Get a relative tolerance for a set of arrays.

    Parameters
    ----------
    *arrays: tuple
        Set of `arrays` to get the tolerance for.

    Returns
    -------
    float
        Relative tolerance for the set of arrays.
    """
    if len(arrays) == 0:
        raise ValueError('At least one array must be provided.')
    size = max(array.size for array in arrays)
    weight = max(np.max(np.abs(array[np.isfinite(array)]), initial=1.0) for array in arrays)
    return 10.0 * np.finfo(float).eps * max(size, 1.0) * weight


def exact_1d_array(x, message):
    """
    Preprocess a one-dimensional array.

    Parameters
    ----------
    x : array_like
        Array to be preprocessed.
    message : str
        Error message if `x` cannot be interpreted as a one-dimensional array.

    Returns
    -------
    numpy.ndarray
        Preprocessed one-dimensional array.

    Raises
    ------
    ValueError
        If `x` is not a one-dimensional array.
    """
    x = np.atleast_1d(np.squeeze(x)).astype(float)
    if x.ndim != 1:
        raise ValueError(message)
    return x


def exact_2d_array(x, message):
    """
    Preprocess a two-dimensional array.

    Parameters
    ----------
    x : array_like
        Array to be preprocessed.
    message : str
        Error message if `x` cannot be interpreted as a two-dimensional array.

    Returns
    -------
    numpy.ndarray
        Preprocessed two-dimensional array.

    Raises
    ------
    ValueError
        If `x` is not a two-dimensional array.
    """
    x = np.atleast_2d(x).astype(float)
    if x.ndim != 2:
        raise ValueError(message)
    return x


def gradient(fun, x, step):
    """
    Approximate the gradient of a scalar function by central differences.

    Parameters
    ----------
    fun : callable
        Function to differentiate.

            ``fun(x) -> float``

    x : numpy.ndarray, shape (n,)
        Point at which the gradient is approximated.
    step : float
        Difference step along each coordinate.

    Returns
    -------
    numpy.ndarray, shape (n,)
        Approximated gradient of `fun` at `x`.
    """
    x = exact_1d_array(x, 'The point must be a vector.')
    if step <= 0.0:
        raise ValueError('The difference step must be positive.')
    grad = np.empty(x.size)
    for i in range(x.size):
        x_plus = np.copy(x)
        x_minus = np.copy(x)
        x_plus[i] += step
        x_minus[i] -= step

        # The actual difference may differ from twice the step because of
        # rounding errors.
        grad[i] = (fun(x_plus) - fun(x_minus)) / (x_plus[i] - x_minus[i])
    return grad
