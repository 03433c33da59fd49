"""
Monte Carlo size and power analysis for the Kobayashi-McAleer tests.

Draws integrated processes in levels or logarithms, runs the matched
pair of tests on each draw and reports rejection frequencies, in the
spirit of the experiments in Kobayashi and McAleer (1999, Section 4).

The critical values themselves are not simulated here; the U tests use
the published values of Table 1.
"""

import numpy as np


def monte_carlo_size_power(n=200, n_reps=1000, model="linear", drift=0.5,
                           sigma=1.0, level=100.0, has_drift=True, p=None,
                           max_p=12, seed=None):
    """
    Rejection frequencies of the Kobayashi-McAleer tests.

    With model='linear' the rejection rate of V1/U1 is the empirical
    size and that of V2/U2 the power; with model='log' the roles swap.

    Parameters
    ----------
    n : int
        Sample size.
    n_reps : int
        Number of Monte Carlo replications.
    model : str
        Data generating process: 'linear' or 'log'.
    drift : float
        Mean of the increments of y (model='linear') or log y
        (model='log').
    sigma : float
        Standard deviation of the increments.
    level : float
        Starting level of the series.
    has_drift : bool
        Run V1/V2 (True) or U1/U2 (False).
    p : int or None
        Lag order (None for automatic selection in each replication).
    max_p : int
        Maximum lag order for automatic selection.
    seed : int or None
        Random seed.

    Returns
    -------
    results : dict
        Rejection frequency at 5% for each test ('v1', 'v2' or 'u1',
        'u2'), frequency of each suite decision under 'decisions', and
        the number of replications that could not be evaluated under
        'n_failed'.
    """
    from .utils import generate_integrated_data
    from .suite import test_suite

    rng = np.random.default_rng(seed)

    names = ("v1", "v2") if has_drift else ("u1", "u2")
    rejections = {name: 0 for name in names}
    decisions = {"logarithms": 0, "levels": 0, "inconclusive": 0}
    n_failed = 0

    for rep in range(n_reps):
        seed_i = rng.integers(0, 2**31)
        y = generate_integrated_data(n, model=model, drift=drift,
                                     sigma=sigma, level=level, seed=seed_i)
        # A linear walk that crosses zero fails validation
        try:
            res = test_suite(y, has_drift=has_drift, p=p, max_p=max_p,
                             verbose=False)
        except (ValueError, np.linalg.LinAlgError):
            n_failed += 1
            continue

        for name in names:
            test = res.tests[name]
            rejected = test.reject_null if has_drift else test.reject_05
            if rejected:
                rejections[name] += 1
        decisions[res.decision] += 1

    n_ok = n_reps - n_failed
    results = {
        name: (rejections[name] / n_ok if n_ok else np.nan)
        for name in names
    }
    results["decisions"] = {
        d: (count / n_ok if n_ok else np.nan)
        for d, count in decisions.items()
    }
    results["n_failed"] = n_failed
    return results
