"""
Tests of linear and logarithmic transformations from Kobayashi and
McAleer (1999).

Implements the four statistics proposed in:

    Kobayashi, M. and McAleer, M. (1999). Tests of Linear and Logarithmic
    Transformations for Integrated Processes. Journal of the American
    Statistical Association, 94(447), 860-868.

This module provides:
    - V1: linear I(1) with drift (H0) vs. logarithmic I(1)
    - V2: logarithmic I(1) with drift (H0) vs. linear I(1)
    - U1: linear I(1) without drift (H0) vs. logarithmic I(1)
    - U2: logarithmic I(1) without drift (H0) vs. linear I(1)
    - Critical values of U1 and U2 (Table 1 of the paper)

Models for the differenced series:
    linear:      Delta y_t     = mu  + sum_j a_j Delta y_{t-j}     + z_t
    logarithmic: Delta log y_t = eta + sum_j b_j Delta log y_{t-j} + v_t
The drift term (mu, eta) is dropped for the U tests.

V1 and V2 are asymptotically N(0, 1) under their nulls. U1 and U2 have a
nonstandard limit distribution, identical for both by symmetry.
"""

import numpy as np
import warnings
from scipy import stats
from .utils import (
    DEFAULT_MAX_P,
    validate_series,
    create_lags,
    ols_fit,
    select_lag_order,
)

# ============================================================================
# Asymptotic critical values of |U1| and |U2|
# Kobayashi and McAleer (1999, Table 1), 20,000 replications.
# ============================================================================

U_CRITICAL_VALUES = {0.10: 0.477, 0.05: 0.664, 0.01: 1.116}

_V_SIG_LEVEL = 0.05

_HYPOTHESES = {
    "V1": ("Linear integrated process (with drift)",
           "Logarithmic integrated process"),
    "V2": ("Logarithmic integrated process (with drift)",
           "Linear integrated process"),
    "U1": ("Linear integrated process (no drift)",
           "Logarithmic integrated process"),
    "U2": ("Logarithmic integrated process (no drift)",
           "Linear integrated process"),
}


def get_u_critical_values(test="U1"):
    """
    Critical values of the U1 or U2 statistic at 10%, 5% and 1%.

    U2 shares the U1 table by the symmetry of the limit distribution.

    Returns
    -------
    cvs : dict
        Significance level -> critical value for |U|.
    """
    if test not in ("U1", "U2"):
        raise ValueError(f"test must be 'U1' or 'U2', got {test}")
    return dict(U_CRITICAL_VALUES)


def get_u_critical_value(alpha, test="U1"):
    """
    Look up a single critical value of |U1| or |U2|.

    Parameters
    ----------
    alpha : float
        Significance level, one of 0.10, 0.05, 0.01.
    test : str
        'U1' or 'U2'.

    Returns
    -------
    cv : float
    """
    cvs = get_u_critical_values(test)
    if alpha not in cvs:
        raise ValueError(
            f"alpha={alpha} not available. Use one of {sorted(cvs)}")
    return cvs[alpha]


# ============================================================================
# Shared estimation steps
# ============================================================================

def _fit_ar_differences(dx, p, drift):
    """
    Fit the AR(p) model for a differenced series.

    Parameters
    ----------
    dx : ndarray, shape (n - 1,)
        Differenced series (levels or logs).
    p : int
        Lag order.
    drift : bool
        Include an intercept (V tests) or not (U tests).

    Returns
    -------
    residuals : ndarray, shape (n - 1 - p,)
    param : float
        Long-run drift mu_hat / eta_hat when drift is True, otherwise the
        AR polynomial at one, alpha(1) / beta(1).
    """
    if p > 0:
        X = create_lags(dx, p)
        beta, residuals, _ = ols_fit(dx[p:], X, intercept=drift)
        if drift:
            with np.errstate(divide="ignore", invalid="ignore"):
                param = beta[0] / (1.0 - np.sum(beta[1:]))
        else:
            param = 1.0 - np.sum(beta)
    elif drift:
        beta, residuals, _ = ols_fit(dx, intercept=True)
        param = beta[0]
    else:
        # No regression: the innovations are the differences themselves
        residuals = dx.copy()
        param = 1.0
    return residuals, float(param)


def _resolve_lag(dz, p, max_p, criterion):
    if p is None:
        return select_lag_order(dz, max_p=max_p, criterion=criterion)
    if p < 0:
        raise ValueError(f"p must be non-negative, got {p}")
    if int(p) != p:
        raise ValueError(f"p must be an integer, got {p}")
    return int(p)


def _lagged_levels(z, p, n_resid):
    """
    Level (or minus log level) one period before each residual.

    The residual for Delta z_t, t = p+1, ..., n-1 (0-indexed), is paired
    with z_{t-1}, i.e. z[p : n - 1].
    """
    z_lag = z[p: len(z) - 1]
    if len(z_lag) != n_resid:
        raise ValueError(
            f"Alignment mismatch: {n_resid} residuals but "
            f"{len(z_lag)} lagged levels (p={p})")
    return z_lag


def _km_numerator(z_lag, residuals):
    """sum_t z_{t-1} * (e_t^2 - mean(e^2)) and mean(e^2)."""
    s_sq = np.mean(residuals ** 2)
    return np.sum(z_lag * (residuals ** 2 - s_sq)), s_sq


def _check_finite(statistic, test_type):
    if not np.isfinite(statistic):
        warnings.warn(
            f"{test_type} statistic is not finite: the drift or AR-sum "
            f"estimate or the innovation variance is degenerate",
            RuntimeWarning, stacklevel=4)


def _v_test(y, p, max_p, criterion, test_type):
    y = validate_series(y)
    n = len(y)

    if test_type == "V1":
        z = y
        x = y
    else:
        z = np.log(y)
        x = -z
    dz = np.diff(z)

    p = _resolve_lag(dz, p, max_p, criterion)

    residuals, drift_hat = _fit_ar_differences(dz, p, drift=True)
    x_lag = _lagged_levels(x, p, len(residuals))
    numerator, s_sq = _km_numerator(x_lag, residuals)

    # V = sum / (n^{3/2} * sqrt(s^4 mu^2 / 6))
    with np.errstate(divide="ignore", invalid="ignore"):
        denominator = np.sqrt(s_sq ** 2 * drift_hat ** 2 / 6.0)
        statistic = numerator / (n ** 1.5 * denominator)
    _check_finite(statistic, test_type)

    p_value = 2.0 * (1.0 - stats.norm.cdf(np.abs(statistic)))
    critical = stats.norm.ppf(1.0 - _V_SIG_LEVEL / 2.0)
    null, alt = _HYPOTHESES[test_type]

    return KMTestResult(
        test_type=test_type,
        statistic=float(statistic),
        null_hypothesis=null,
        alternative=alt,
        lag_order=int(p),
        innovation_variance=float(s_sq),
        nobs=n,
        residuals=residuals,
        p_value=float(p_value),
        reject_null=bool(np.abs(statistic) > critical),
        drift_parameter=drift_hat,
    )


def _u_test(y, p, max_p, criterion, test_type):
    y = validate_series(y)
    n = len(y)

    if test_type == "U1":
        z = y
        x = y
    else:
        z = np.log(y)
        x = -z
    dz = np.diff(z)

    p = _resolve_lag(dz, p, max_p, criterion)

    residuals, ar_sum = _fit_ar_differences(dz, p, drift=False)
    x_lag = _lagged_levels(x, p, len(residuals))
    numerator, s_sq = _km_numerator(x_lag, residuals)

    # U = sum / (n * sqrt(2 s^6 / alpha(1)))
    with np.errstate(divide="ignore", invalid="ignore"):
        denominator = np.sqrt(2.0 * s_sq ** 3 / ar_sum)
        statistic = numerator / (n * denominator)
    _check_finite(statistic, test_type)

    cvs = get_u_critical_values(test_type)
    abs_stat = np.abs(statistic)
    null, alt = _HYPOTHESES[test_type]

    return KMTestResult(
        test_type=test_type,
        statistic=float(statistic),
        null_hypothesis=null,
        alternative=alt,
        lag_order=int(p),
        innovation_variance=float(s_sq),
        nobs=n,
        residuals=residuals,
        critical_values=cvs,
        reject_10=bool(abs_stat > cvs[0.10]),
        reject_05=bool(abs_stat > cvs[0.05]),
        reject_01=bool(abs_stat > cvs[0.01]),
        ar_sum_parameter=ar_sum,
    )


# ============================================================================
# Public tests
# ============================================================================

def v1_test(y, p=None, max_p=DEFAULT_MAX_P, criterion="AIC"):
    """
    Kobayashi-McAleer V1 test.

    H0: linear integrated process with drift.
    H1: logarithmic integrated process.

    The statistic is

        V1 = sum_{t} y_{t-1} (z_t^2 - s^2) / (n^{3/2} sqrt(s^4 mu^2 / 6))

    where z_t are the residuals of the AR(p) model with intercept for
    Delta y_t, s^2 = mean(z_t^2) and mu = a_0 / (1 - sum a_j) is the
    long-run drift. V1 is asymptotically N(0, 1) under H0; large |V1|
    favours the logarithmic model.

    Parameters
    ----------
    y : array_like, shape (n,)
        Positive series, n >= 10.
    p : int or None
        AR lag order. If None, selected by `criterion` over 0..max_p.
    max_p : int
        Maximum lag order for automatic selection.
    criterion : str
        'AIC' (default) or 'SIC'.

    Returns
    -------
    result : KMTestResult
        V-shape result with p_value, reject_null and drift_parameter.
    """
    return _v_test(y, p, max_p, criterion, "V1")


def v2_test(y, p=None, max_p=DEFAULT_MAX_P, criterion="AIC"):
    """
    Kobayashi-McAleer V2 test.

    H0: logarithmic integrated process with drift.
    H1: linear integrated process.

    Same construction as V1 on log y, with drift eta, innovation
    variance w^2 and the regressor -log y_{t-1}.

    Parameters
    ----------
    y : array_like, shape (n,)
        Positive series, n >= 10.
    p : int or None
        AR lag order. If None, selected automatically.
    max_p : int
        Maximum lag order for automatic selection.
    criterion : str
        'AIC' (default) or 'SIC'.

    Returns
    -------
    result : KMTestResult
    """
    return _v_test(y, p, max_p, criterion, "V2")


def u1_test(y, p=None, max_p=DEFAULT_MAX_P, criterion="AIC"):
    """
    Kobayashi-McAleer U1 test.

    H0: linear integrated process without drift.
    H1: logarithmic integrated process.

        U1 = sum_{t} y_{t-1} (z_t^2 - s^2) / (n sqrt(2 s^6 / alpha(1)))

    with z_t the residuals of an AR(p) without intercept for Delta y_t
    and alpha(1) = 1 - sum a_j. When p = 0 the differences are used as
    residuals directly and alpha(1) = 1. |U1| is compared with the
    critical values of Table 1 at 10%, 5% and 1%.

    Parameters
    ----------
    y : array_like, shape (n,)
        Positive series, n >= 10.
    p : int or None
        AR lag order. If None, selected automatically.
    max_p : int
        Maximum lag order for automatic selection.
    criterion : str
        'AIC' (default) or 'SIC'.

    Returns
    -------
    result : KMTestResult
        U-shape result with critical_values and reject_10/05/01.
    """
    return _u_test(y, p, max_p, criterion, "U1")


def u2_test(y, p=None, max_p=DEFAULT_MAX_P, criterion="AIC"):
    """
    Kobayashi-McAleer U2 test.

    H0: logarithmic integrated process without drift.
    H1: linear integrated process.

    Mirror of U1 on log y with beta(1), w^2 and the regressor
    -log y_{t-1}. Uses the U1 critical values.
    """
    return _u_test(y, p, max_p, criterion, "U2")


# ============================================================================
# Result class
# ============================================================================

class KMTestResult:
    """
    Container for a single Kobayashi-McAleer test.

    V tests (V1, V2) carry p_value, reject_null and drift_parameter;
    U tests (U1, U2) carry critical_values, reject_10, reject_05,
    reject_01 and ar_sum_parameter. The fields of the other shape are
    None.

    Attributes
    ----------
    test_type : str
        'V1', 'V2', 'U1' or 'U2'.
    statistic : float
        Test statistic.
    null_hypothesis : str
    alternative : str
    lag_order : int
        AR lag order used.
    innovation_variance : float
        Mean squared residual (s^2 or w^2).
    nobs : int
        Length of the input series.
    residuals : ndarray
        Residuals of the AR model for the differenced series.
    p_value : float or None
        Two-sided asymptotic normal p-value (V tests).
    reject_null : bool or None
        Rejection at 5% (V tests).
    drift_parameter : float or None
        mu_hat (V1) or eta_hat (V2).
    critical_values : dict or None
        {0.10, 0.05, 0.01} -> critical value (U tests).
    reject_10, reject_05, reject_01 : bool or None
        |statistic| above the respective critical value (U tests).
    ar_sum_parameter : float or None
        alpha(1) (U1) or beta(1) (U2).
    """

    def __init__(self, test_type, statistic, null_hypothesis, alternative,
                 lag_order, innovation_variance, nobs, residuals,
                 p_value=None, reject_null=None, drift_parameter=None,
                 critical_values=None, reject_10=None, reject_05=None,
                 reject_01=None, ar_sum_parameter=None):
        self.test_type = test_type
        self.statistic = statistic
        self.null_hypothesis = null_hypothesis
        self.alternative = alternative
        self.lag_order = lag_order
        self.innovation_variance = innovation_variance
        self.nobs = nobs
        self.residuals = residuals
        self.p_value = p_value
        self.reject_null = reject_null
        self.drift_parameter = drift_parameter
        self.critical_values = critical_values
        self.reject_10 = reject_10
        self.reject_05 = reject_05
        self.reject_01 = reject_01
        self.ar_sum_parameter = ar_sum_parameter

    @property
    def is_v_test(self):
        return self.test_type in ("V1", "V2")

    def significant(self, alpha=0.05):
        """
        Check whether the test rejects H0 at level alpha.

        V tests accept any level in (0, 1); U tests only the tabulated
        levels 0.10, 0.05 and 0.01 (None otherwise).
        """
        if self.is_v_test:
            return bool(np.abs(self.statistic)
                        > stats.norm.ppf(1.0 - alpha / 2.0))
        cv = (self.critical_values or {}).get(alpha)
        if cv is None:
            return None
        return bool(np.abs(self.statistic) > cv)

    def summary(self):
        """
        Produce a formatted summary string.

        Returns
        -------
        s : str
        """
        lines = []
        lines.append("=" * 60)
        lines.append("Kobayashi-McAleer Test Result")
        lines.append("=" * 60)
        lines.append(f"Test type:        {self.test_type}")
        lines.append(f"Null hypothesis:  {self.null_hypothesis}")
        lines.append(f"Alternative:      {self.alternative}")
        lines.append(f"Observations:     {self.nobs}")
        lines.append(f"Lag order:        {self.lag_order}")
        lines.append("-" * 60)
        lines.append(f"Test statistic:   {self.statistic:.4f}")

        if self.is_v_test:
            decision = "Reject null" if self.reject_null else "Do not reject null"
            label = "mu_hat" if self.test_type == "V1" else "eta_hat"
            lines.append(f"P-value:          {self.p_value:.4f}")
            lines.append(f"Decision (5%):    {decision}")
            lines.append(f"{label + ':':<18}{self.drift_parameter:.6f}")
        else:
            label = "alpha(1)" if self.test_type == "U1" else "beta(1)"
            lines.append("Critical values:")
            for alpha, flag in [(0.10, self.reject_10),
                                (0.05, self.reject_05),
                                (0.01, self.reject_01)]:
                mark = "  [REJECTED]" if flag else ""
                lines.append(f"  {alpha:>4.0%} level:     "
                             f"{self.critical_values[alpha]:.3f}{mark}")
            lines.append(f"{label + ':':<18}{self.ar_sum_parameter:.6f}")

        lines.append(f"Innov. variance:  {self.innovation_variance:.6g}")
        lines.append("=" * 60)
        return "\n".join(lines)

    def __repr__(self):
        return self.summary()
