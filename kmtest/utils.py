"""
Utility functions for the Kobayashi-McAleer tests.

Shared helper routines used by the V1, V2, U1 and U2 test
implementations: input validation, lagged design matrices, least
squares fitting, lag order selection and data generation.

References
----------
Kobayashi, M. and McAleer, M. (1999). Tests of Linear and Logarithmic
    Transformations for Integrated Processes. Journal of the American
    Statistical Association, 94(447), 860-868.
"""

import numpy as np
import warnings

DEFAULT_MAX_P = 12
MIN_OBS = 10


class ValidationError(ValueError):
    """Raised when an input series is not a valid positive I(1) sample."""


class RankDeficiencyWarning(RuntimeWarning):
    """Issued when a regression design matrix is not of full column rank."""


def validate_series(y):
    """
    Check and convert an input series.

    The checks run in a fixed order and the first failure wins:
    numeric type, strict positivity, then minimum length.

    Parameters
    ----------
    y : array_like
        Observed series.

    Returns
    -------
    y : ndarray, shape (n,)
        The series as a 1-d float array.

    Raises
    ------
    ValidationError
        If any of the checks fails.
    """
    arr = np.asarray(y)
    if arr.dtype.kind not in "iuf":
        raise ValidationError("y must be numeric")
    arr = arr.astype(np.float64).ravel()
    if not np.all(arr > 0):
        raise ValidationError("y must contain only positive values")
    if len(arr) < MIN_OBS:
        raise ValidationError(f"y must have at least {MIN_OBS} observations")
    return arr


def create_lags(x, p):
    """
    Build the matrix of lagged values of a series.

    Column j holds x lagged by j + 1 periods, and row i is aligned with
    the target value x[p + i]:

        X[i, j] = x[p + i - (j + 1)]

    Parameters
    ----------
    x : ndarray, shape (m,)
        Series to lag.
    p : int
        Number of lags, 1 <= p < m.

    Returns
    -------
    X : ndarray, shape (m - p, p)
    """
    x = np.asarray(x, dtype=np.float64).ravel()
    m = len(x)
    if p < 1:
        raise ValueError(f"p must be at least 1, got {p}")
    if p >= m:
        raise ValueError(f"Insufficient observations: m={m}, p={p}")
    return np.column_stack([x[p - j - 1: m - j - 1] for j in range(p)])


def ols_fit(y, X=None, intercept=False):
    """
    Ordinary least squares fit.

    Parameters
    ----------
    y : ndarray, shape (m,)
        Response vector.
    X : ndarray, shape (m,) or (m, k), or None
        Regressors. None fits an intercept-only model (requires
        intercept=True).
    intercept : bool
        If True, a leading column of ones is added to X.

    Returns
    -------
    beta : ndarray
        Coefficients, intercept first when present.
    residuals : ndarray, shape (m,)
        y - Z @ beta.
    rank : int
        Column rank of the design matrix.

    Notes
    -----
    A rank-deficient or under-determined design does not raise: a
    RankDeficiencyWarning is issued and the minimum-norm least squares
    solution is returned.
    """
    y = np.asarray(y, dtype=np.float64).ravel()
    m = len(y)

    columns = []
    if intercept:
        columns.append(np.ones((m, 1)))
    if X is not None:
        X = np.asarray(X, dtype=np.float64)
        if X.ndim == 1:
            X = X.reshape(-1, 1)
        if X.shape[0] != m:
            raise ValueError(
                f"Design matrix has {X.shape[0]} rows, response has {m}")
        columns.append(X)
    if not columns:
        raise ValueError("Empty design: pass X or set intercept=True")

    Z = np.hstack(columns)
    k = Z.shape[1]

    beta, _, rank, _ = np.linalg.lstsq(Z, y, rcond=None)
    if rank < k:
        warnings.warn(
            f"Design matrix is rank deficient (rank {rank} < {k} columns, "
            f"{m} observations)", RankDeficiencyWarning, stacklevel=2)

    residuals = y - Z @ beta
    return beta, residuals, int(rank)


def information_criterion(sigma2, k, n, criterion="AIC"):
    """
    Per-observation information criterion.

        AIC = ln(sigma2) + 2k/n
        SIC = ln(sigma2) + k ln(n)/n
    """
    criterion = criterion.upper()
    with np.errstate(divide="ignore"):
        log_sigma2 = np.log(sigma2)
    if criterion == "AIC":
        return log_sigma2 + 2.0 * k / n
    if criterion in ("SIC", "BIC"):
        return log_sigma2 + k * np.log(n) / n
    raise ValueError(f"Unknown criterion: {criterion}. Use 'AIC' or 'SIC'.")


def select_lag_order(x, max_p=DEFAULT_MAX_P, criterion="AIC"):
    """
    Select the autoregressive lag order by an information criterion.

    For each candidate p = 0, ..., max_p an AR(p) model with intercept
    is fitted to x by OLS:
        - p = 0: mean model, sigma^2 = SSR / n, k = 1
        - p > 0: sigma^2 = SSR / (n - p), k = p + 1
    where n = len(x). The order with the smallest criterion value is
    returned; exact ties go to the smallest p.

    Parameters
    ----------
    x : ndarray, shape (n,)
        Series to model (typically a differenced series).
    max_p : int
        Maximum lag order to consider.
    criterion : str
        'AIC' or 'SIC' (alias 'BIC').

    Returns
    -------
    p_opt : int
        Optimal lag order in [0, max_p].
    """
    x = np.asarray(x, dtype=np.float64).ravel()
    n = len(x)

    best_ic = np.inf
    p_opt = 0
    skipped = []

    for p in range(0, max_p + 1):
        if p == 0:
            _, resid, _ = ols_fit(x, intercept=True)
            sigma2 = np.sum(resid ** 2) / n
            k = 1
        else:
            # No residual degree of freedom left for an AR(p) with intercept
            if n - p <= p + 1:
                skipped.append(p)
                continue
            _, resid, _ = ols_fit(x[p:], create_lags(x, p), intercept=True)
            sigma2 = np.sum(resid ** 2) / (n - p)
            k = p + 1

        ic = information_criterion(sigma2, k, n, criterion)
        if ic < best_ic:
            best_ic = ic
            p_opt = p

    if skipped:
        warnings.warn(
            f"Lag orders {skipped[0]}..{skipped[-1]} skipped: too few "
            f"observations (n={n}) for max_p={max_p}", stacklevel=2)

    return p_opt


def generate_integrated_data(n, model="linear", drift=0.0, sigma=1.0,
                             level=100.0, seed=None):
    """
    Generate a positive integrated process in levels or logarithms.

        linear: y_t = level + sum_{s<=t} e_s
        log:    log y_t = log(level) + sum_{s<=t} e_s

    with e_s ~ N(drift, sigma^2) i.i.d.

    Parameters
    ----------
    n : int
        Sample size.
    model : str
        'linear' or 'log'.
    drift : float
        Mean of the increments.
    sigma : float
        Standard deviation of the increments.
    level : float
        Starting level (must be positive for model='log').
    seed : int or None
        Random seed.

    Returns
    -------
    y : ndarray, shape (n,)
    """
    rng = np.random.default_rng(seed)
    increments = rng.normal(drift, sigma, size=n)

    if model == "linear":
        return level + np.cumsum(increments)
    elif model == "log":
        return np.exp(np.log(level) + np.cumsum(increments))
    raise ValueError(f"Unknown model: {model}. Use 'linear' or 'log'.")
