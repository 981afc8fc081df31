"""
Regressions of usage rank on stats, and type group tests.

- Polynomial fit of rank on base stat total (OLS, statsmodels)
- One simple OLS per stat, raw and standardized
- Kruskal-Wallis of rank across primary types
- Mann-Whitney U of rank by secondary-type presence
"""

from dataclasses import dataclass
from typing import Dict, List, Optional
import logging

import numpy as np
import pandas as pd
import statsmodels.api as sm
from scipy import stats

from pokecorr.config import REPORT_CONFIG

logger = logging.getLogger(__name__)


@dataclass
class PolynomialFit:
    """OLS fit of y on x, x^2, ..., x^degree."""
    degree: int
    params: np.ndarray
    pvalues: np.ndarray
    rsquared: float
    nobs: int

    @property
    def estimated(self) -> bool:
        """False when there were too few observations to fit."""
        return not np.isnan(self.rsquared)

    def predict(self, x: np.ndarray) -> np.ndarray:
        """Evaluate the fitted polynomial at x."""
        x = np.asarray(x, dtype=float)
        return sum(self.params[k] * x**k for k in range(self.degree + 1))


def polynomial_design(x: np.ndarray, degree: int) -> np.ndarray:
    """Columns 1, x, ..., x^degree."""
    x = np.asarray(x, dtype=float)
    return np.column_stack([x**k for k in range(degree + 1)])


def fit_polynomial(
    df: pd.DataFrame,
    x: str = "total",
    y: str = "rank",
    degree: Optional[int] = None,
) -> PolynomialFit:
    """
    Fit y on a polynomial in x by OLS.

    With degree + 1 observations or fewer the fit is not estimated:
    coefficients, p-values and R² are NaN.
    """
    degree = degree or REPORT_CONFIG.poly_degree
    sub = df[[x, y]].dropna()
    if len(sub) <= degree + 1:
        logger.warning(f"  {y} ~ poly({x}, {degree}) not estimated: {len(sub)} observations")
        return PolynomialFit(
            degree=degree,
            params=np.full(degree + 1, np.nan),
            pvalues=np.full(degree + 1, np.nan),
            rsquared=np.nan,
            nobs=len(sub),
        )

    X = polynomial_design(sub[x].values, degree)
    model = sm.OLS(sub[y].values.astype(float), X).fit()

    logger.info(f"  {y} ~ poly({x}, {degree}): R² = {model.rsquared:.3f}, n = {int(model.nobs)}")
    return PolynomialFit(
        degree=degree,
        params=np.asarray(model.params),
        pvalues=np.asarray(model.pvalues),
        rsquared=float(model.rsquared),
        nobs=int(model.nobs),
    )


def regress_on_each(
    df: pd.DataFrame,
    columns: List[str],
    y: str = "rank",
) -> pd.DataFrame:
    """Simple OLS of y on each column separately (intercept included)."""
    rows = []
    for col in columns:
        sub = df[[col, y]].dropna()
        if len(sub) < 3 or sub[col].nunique() < 2:
            rows.append({"variable": col, "coef": np.nan, "se": np.nan,
                         "p_value": np.nan, "r_squared": np.nan, "n": len(sub)})
            continue

        X = sm.add_constant(sub[col].values.astype(float))
        model = sm.OLS(sub[y].values.astype(float), X).fit()
        rows.append({
            "variable": col,
            "coef": float(model.params[1]),
            "se": float(model.bse[1]),
            "p_value": float(model.pvalues[1]),
            "r_squared": float(model.rsquared),
            "n": int(model.nobs),
        })

    return pd.DataFrame(rows)


def _groups_by(df: pd.DataFrame, by: str, value: str, min_size: int) -> Dict[str, np.ndarray]:
    groups = {}
    for key, sub in df.groupby(by):
        values = sub[value].dropna().values
        if len(values) >= min_size:
            groups[str(key)] = values
    return groups


def type_group_tests(
    df: pd.DataFrame,
    value: str = "rank",
    min_group_size: Optional[int] = None,
) -> pd.DataFrame:
    """
    Nonparametric tests of whether usage rank differs by type.

    Returns
    -------
    pd.DataFrame
        One row per test: statistic, p-value and number of groups.
    """
    min_group_size = min_group_size or REPORT_CONFIG.min_group_size
    rows = []

    by_type = _groups_by(df, "type1", value, min_group_size)
    if len(by_type) >= 2:
        try:
            stat, p = stats.kruskal(*by_type.values())
        except ValueError as e:
            logger.warning(f"Kruskal-Wallis by type1 not computed: {e}")
            stat, p = np.nan, np.nan
    else:
        stat, p = np.nan, np.nan
    rows.append({"test": "kruskal_wallis_type1", "statistic": float(stat),
                 "p_value": float(p), "n_groups": len(by_type)})

    with_t2 = df.loc[df["has_type2"], value].dropna()
    without_t2 = df.loc[~df["has_type2"], value].dropna()
    if len(with_t2) > 0 and len(without_t2) > 0:
        stat, p = stats.mannwhitneyu(with_t2, without_t2, alternative="two-sided")
    else:
        stat, p = np.nan, np.nan
    rows.append({"test": "mann_whitney_has_type2", "statistic": float(stat),
                 "p_value": float(p), "n_groups": int(len(with_t2) > 0) + int(len(without_t2) > 0)})

    return pd.DataFrame(rows)
