"""
kmtest: Kobayashi-McAleer Tests for Data Transformations
========================================================

A Python library implementing the tests of linear and logarithmic
transformations for integrated processes from:

    Kobayashi, M. and McAleer, M. (1999). Tests of Linear and Logarithmic
    Transformations for Integrated Processes. Journal of the American
    Statistical Association, 94(447), 860-868.

Main Functions
--------------
test_suite :
    Runs V1/V2 (with drift) or U1/U2 (without drift) and decides between
    levels and logarithms.

v1_test, v2_test :
    Asymptotically normal tests for processes with drift.

u1_test, u2_test :
    Tests for driftless processes with tabulated critical values.

Utility Functions
-----------------
select_lag_order :
    AR lag order selection by AIC or SIC.

generate_integrated_data :
    Simulate a linear or logarithmic integrated process.

monte_carlo_size_power :
    Size and power analysis of the tests.

Example
-------
>>> from kmtest import test_suite, generate_integrated_data
>>>
>>> y = generate_integrated_data(200, model="linear", drift=0.5, seed=123)
>>> res = test_suite(y, has_drift=True, verbose=False)
>>> print(res.conclusion)
"""

__version__ = "1.0.0"
__author__ = "Dr Merwan Roudane"
__email__ = "merwanroudane920@gmail.com"

from .km1999 import (
    v1_test,
    v2_test,
    u1_test,
    u2_test,
    get_u_critical_value,
    get_u_critical_values,
    U_CRITICAL_VALUES,
    KMTestResult,
)

from .suite import (
    test_suite,
    interpret_results,
    KMSuiteResult,
)

from .utils import (
    ValidationError,
    RankDeficiencyWarning,
    create_lags,
    ols_fit,
    select_lag_order,
    generate_integrated_data,
)

from .simulation import monte_carlo_size_power

__all__ = [
    # Tests
    "v1_test",
    "v2_test",
    "u1_test",
    "u2_test",
    "get_u_critical_value",
    "get_u_critical_values",
    "U_CRITICAL_VALUES",
    "KMTestResult",
    # Suite
    "test_suite",
    "interpret_results",
    "KMSuiteResult",
    # Utilities
    "ValidationError",
    "RankDeficiencyWarning",
    "create_lags",
    "ols_fit",
    "select_lag_order",
    "generate_integrated_data",
    # Simulation
    "monte_carlo_size_power",
]
