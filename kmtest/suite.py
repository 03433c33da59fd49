"""
Kobayashi-McAleer test suite with automatic interpretation.

Runs the matched pair of tests for a series and decides between levels
and logarithms:
    - with drift:    V1 (linear null) and V2 (logarithmic null)
    - without drift: U1 (linear null) and U2 (logarithmic null)

Interpretation:
    - only the linear null rejected      -> model in logarithms
    - only the logarithmic null rejected -> model in levels
    - both or neither rejected           -> inconclusive
"""

from .km1999 import v1_test, v2_test, u1_test, u2_test
from .utils import DEFAULT_MAX_P, validate_series

CONCLUSION_LOGARITHMS = "Conclusion: Data should be modeled in LOGARITHMS"
CONCLUSION_LEVELS = "Conclusion: Data should be modeled in LEVELS"
CONCLUSION_BOTH_REJECTED = "Conclusion: INCONCLUSIVE - both nulls rejected"
CONCLUSION_BOTH_REJECTED_DRIFT = "\n".join([
    CONCLUSION_BOTH_REJECTED,
    "Consider: (1) Different model specification, or",
    "          (2) Presence of structural breaks, or",
    "          (3) Stochastic unit root process",
])
CONCLUSION_NEITHER_REJECTED = "Conclusion: INCONCLUSIVE - neither null rejected"


def interpret_results(tests, has_drift):
    """
    Interpret a pair of test results.

    Parameters
    ----------
    tests : dict
        {'v1', 'v2'} -> KMTestResult when has_drift, otherwise
        {'u1', 'u2'} -> KMTestResult.
    has_drift : bool
        Whether the V (drift) or U (no drift) tests were run.

    Returns
    -------
    conclusion : str
        One of the CONCLUSION_* strings.
    decision : str
        'logarithms', 'levels' or 'inconclusive'.
    """
    if has_drift:
        linear_rejected = tests["v1"].reject_null
        log_rejected = tests["v2"].reject_null
        both = CONCLUSION_BOTH_REJECTED_DRIFT
    else:
        linear_rejected = tests["u1"].reject_05
        log_rejected = tests["u2"].reject_05
        both = CONCLUSION_BOTH_REJECTED

    if linear_rejected and not log_rejected:
        return CONCLUSION_LOGARITHMS, "logarithms"
    if log_rejected and not linear_rejected:
        return CONCLUSION_LEVELS, "levels"
    if linear_rejected and log_rejected:
        return both, "inconclusive"
    return CONCLUSION_NEITHER_REJECTED, "inconclusive"


def test_suite(y, has_drift=True, p=None, max_p=DEFAULT_MAX_P,
               verbose=True, callback=None):
    """
    Run the appropriate pair of Kobayashi-McAleer tests and interpret them.

    Parameters
    ----------
    y : array_like, shape (n,)
        Positive series, n >= 10.
    has_drift : bool
        If True, run V1 and V2; otherwise U1 and U2.
    p : int or None
        Lag order passed to both tests (None for automatic selection).
    max_p : int
        Maximum lag order for automatic selection.
    verbose : bool
        If True, report progress and decisions.
    callback : callable or None
        Receives each progress message when verbose is True. Defaults
        to print.

    Returns
    -------
    result : KMSuiteResult
    """
    y = validate_series(y)
    emit = (callback or print) if verbose else (lambda msg: None)

    emit("=== Kobayashi-McAleer Tests for Data Transformation ===")

    tests = {}
    if has_drift:
        emit("Testing: Linear (with drift) vs Logarithmic")
        tests["v1"] = v1_test(y, p, max_p)
        emit(f"V1 statistic: {tests['v1'].statistic:.4f} "
             f"(p-value: {tests['v1'].p_value:.4f})")
        emit(f"Reject linear null: "
             f"{'YES' if tests['v1'].reject_null else 'NO'}")

        emit("Testing: Logarithmic (with drift) vs Linear")
        tests["v2"] = v2_test(y, p, max_p)
        emit(f"V2 statistic: {tests['v2'].statistic:.4f} "
             f"(p-value: {tests['v2'].p_value:.4f})")
        emit(f"Reject logarithmic null: "
             f"{'YES' if tests['v2'].reject_null else 'NO'}")
    else:
        emit("Testing: Linear (no drift) vs Logarithmic")
        tests["u1"] = u1_test(y, p, max_p)
        emit(f"U1 statistic: {tests['u1'].statistic:.4f}")
        emit(f"Reject at 5%: {'YES' if tests['u1'].reject_05 else 'NO'}")

        emit("Testing: Logarithmic (no drift) vs Linear")
        tests["u2"] = u2_test(y, p, max_p)
        emit(f"U2 statistic: {tests['u2'].statistic:.4f}")
        emit(f"Reject at 5%: {'YES' if tests['u2'].reject_05 else 'NO'}")

    conclusion, decision = interpret_results(tests, has_drift)

    emit("=== Interpretation ===")
    emit(conclusion)

    return KMSuiteResult(tests=tests, conclusion=conclusion,
                         has_drift=has_drift, decision=decision)


class KMSuiteResult:
    """
    Container for a Kobayashi-McAleer test suite run.

    Attributes
    ----------
    tests : dict
        Test name ('v1', 'v2' or 'u1', 'u2') -> KMTestResult.
    conclusion : str
        Interpretation of the pair of tests.
    has_drift : bool
        Drift assumption used to choose the tests.
    decision : str
        'logarithms', 'levels' or 'inconclusive'.
    """

    def __init__(self, tests, conclusion, has_drift, decision):
        self.tests = tests
        self.conclusion = conclusion
        self.has_drift = has_drift
        self.decision = decision

    def summary(self):
        lines = []
        lines.append("=" * 60)
        lines.append("Kobayashi-McAleer Test Suite Results")
        lines.append("=" * 60)
        if self.has_drift:
            lines.append("Tests performed: V1 and V2 (with drift)")
        else:
            lines.append("Tests performed: U1 and U2 (without drift)")
        lines.append("")
        for name in self.tests:
            lines.append(self.tests[name].summary())
            lines.append("")
        lines.append(self.conclusion)
        return "\n".join(lines)

    def __repr__(self):
        return self.summary()
