"""
Example: Levels or Logarithms?
==============================

This script demonstrates the use of the kmtest package to decide
whether an integrated series should be modeled in levels or in
logarithms, using the Kobayashi and McAleer (1999) tests:

    - V1 / V2 for processes with drift (asymptotically normal)
    - U1 / U2 for processes without drift (tabulated critical values)

Four series are generated from known DGPs (linear or logarithmic, with
or without drift) and the matching test suite is applied to each.
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))
from kmtest import (
    test_suite,
    v1_test,
    u1_test,
    generate_integrated_data,
    monte_carlo_size_power,
)


def main():
    T = 200

    # ================================================================
    # 1. Processes with drift: V1 and V2
    # ================================================================
    print("=" * 60)
    print("PROCESSES WITH DRIFT: V1 and V2")
    print("=" * 60)
    print()

    y_lin = generate_integrated_data(T, model="linear", drift=0.5, seed=123)
    y_log = generate_integrated_data(
        T, model="log", drift=0.01, sigma=0.05, seed=789)

    for label, y in [("Linear DGP", y_lin), ("Logarithmic DGP", y_log)]:
        print(f"--- {label} ---")
        res = test_suite(y, has_drift=True, verbose=False)
        print(res.summary())
        print()

    # ================================================================
    # 2. Processes without drift: U1 and U2
    # ================================================================
    print("=" * 60)
    print("PROCESSES WITHOUT DRIFT: U1 and U2")
    print("=" * 60)
    print()

    y_rw = generate_integrated_data(T, model="linear", drift=0.0, seed=456)
    y_lrw = generate_integrated_data(
        T, model="log", drift=0.0, sigma=0.05, seed=321)

    for label, y in [("Linear random walk", y_rw),
                     ("Logarithmic random walk", y_lrw)]:
        print(f"--- {label} ---")
        test_suite(y, has_drift=False)
        print()

    # ================================================================
    # 3. Individual tests with fixed lag order
    # ================================================================
    print("=" * 60)
    print("INDIVIDUAL TESTS")
    print("=" * 60)
    print()

    print(v1_test(y_lin, p=1))
    print()
    print(u1_test(y_rw, p=0))
    print()

    # ================================================================
    # 4. Small size/power study
    # ================================================================
    print("=" * 60)
    print("MONTE CARLO (linear DGP with drift, 200 replications)")
    print("=" * 60)
    mc = monte_carlo_size_power(n=T, n_reps=200, model="linear", drift=0.5,
                                p=1, seed=42)
    print(f"  Size of V1 (5%):   {mc['v1']:.3f}")
    print(f"  Power of V2 (5%):  {mc['v2']:.3f}")
    for decision, freq in mc["decisions"].items():
        print(f"  {decision:<14}     {freq:.3f}")
    print()
    print("=" * 60)
    print("END OF EXAMPLE")
    print("=" * 60)


if __name__ == "__main__":
    main()
