from __future__ import annotations

import numpy as np
import pandas as pd
import pytest

from intermodel import FitResult, analyze, analyze_many, improve


DESIGN = np.array([[0, 0, 1], [0, 0, 1], [1, 1, 0]], dtype=float)


def _make_fit(
    connection: np.ndarray = DESIGN,
    scheme: str = "factorial",
    ave_inner=0.42,
    ave_outer=0.58,
    seed: int = 0,
) -> FitResult:
    rng = np.random.default_rng(seed)
    n_blocks = connection.shape[0]
    base = rng.normal(size=(25, 1))
    scores = [base + rng.normal(size=(25, 1)) for _ in range(n_blocks)]
    return FitResult.from_dict(
        {
            "Y": scores,
            "a": [rng.normal(size=(4, 1)) for _ in range(n_blocks)],
            "astar": [rng.normal(size=(4, 1)) for _ in range(n_blocks)],
            "AVE": {
                "AVE_inner": ave_inner,
                "AVE_outer": ave_outer,
                "AVE_X": [rng.uniform(size=1) for _ in range(n_blocks)],
            },
            "call": {"connection": connection, "scheme": scheme},
        }
    )


def test_analyze_labels_in_fixed_order() -> None:
    result = analyze(_make_fit())

    assert list(result.index) == [
        "vs12", "vs13", "vs23",
        "AVE_inner", "AVE_outer",
        "cc1",
        "var12", "var13", "var23",
        "weights",
    ]


def test_analyze_end_to_end_values() -> None:
    fit = _make_fit()
    scores = np.column_stack([fit.Y[name][:, 0] for name in fit.block_names])
    r = np.corrcoef(scores, rowvar=False)

    result = analyze(fit)

    np.testing.assert_allclose(result[["vs12", "vs13", "vs23"]].values, [r[0, 1], r[0, 2], r[1, 2]], atol=1e-12)
    np.testing.assert_allclose(result[["var12", "var13", "var23"]].values, [0.0, 1.0, 1.0])
    assert result["weights"] == 2
    np.testing.assert_allclose(result["cc1"], r[0, 2] ** 2 + r[1, 2] ** 2, atol=1e-12)
    assert result["AVE_inner"] == pytest.approx(0.42)
    assert result["AVE_outer"] == pytest.approx(0.58)


def test_analyze_fully_connected_design_counts_three_weights() -> None:
    result = analyze(_make_fit(connection=np.ones((3, 3)) - np.eye(3), scheme="centroid"))

    assert result["weights"] == 3


def test_analyze_keeps_weighted_connection_values() -> None:
    connection = np.array([[0, 0.5, 0], [0.5, 0, 2.0], [0, 2.0, 0]])
    result = analyze(_make_fit(connection=connection, scheme="horst"))

    np.testing.assert_allclose(result[["var12", "var13", "var23"]].values, [0.5, 0.0, 2.0])
    assert result["weights"] == 2
    np.testing.assert_allclose(
        result["cc1"], 0.5 * result["vs12"] + 2.0 * result["vs23"], atol=1e-12
    )


def test_analyze_flattens_per_dimension_ave() -> None:
    result = analyze(_make_fit(ave_inner=[0.4, 0.2], ave_outer=[0.6, 0.3]))

    assert ["AVE_inner1", "AVE_inner2", "AVE_outer1", "AVE_outer2"] == list(result.index[3:7])
    np.testing.assert_allclose(result[["AVE_inner1", "AVE_inner2"]].values, [0.4, 0.2])


@pytest.mark.parametrize("n_blocks", [2, 3, 4, 6])
def test_analyze_length_depends_on_blocks_and_ave_arity(n_blocks: int) -> None:
    connection = np.ones((n_blocks, n_blocks)) - np.eye(n_blocks)
    pairs = n_blocks * (n_blocks - 1) // 2

    single = analyze(_make_fit(connection=connection))
    double = analyze(_make_fit(connection=connection, ave_inner=[0.1, 0.2], ave_outer=[0.3, 0.4]))

    assert len(single) == 2 * pairs + 2 + 1 + 1
    assert len(double) == 2 * pairs + 4 + 1 + 1


def test_analyze_is_unaffected_by_block_names() -> None:
    fit = _make_fit()
    named = improve(fit, ["Agric", "Ind", "Polit"])

    pd.testing.assert_series_equal(analyze(fit), analyze(named))


def test_analyze_many_stacks_one_row_per_fit() -> None:
    fits = [_make_fit(scheme="factorial"), _make_fit(connection=np.ones((3, 3)) - np.eye(3), scheme="centroid")]

    frame = analyze_many(fits, labels=["design_a", "design_b"])

    assert frame.shape == (2, 10)
    assert list(frame.index) == ["design_a", "design_b"]
    assert frame.index.name == "model"
    assert frame.loc["design_a", "weights"] == 2
    assert frame.loc["design_b", "weights"] == 3
    pd.testing.assert_series_equal(frame.loc["design_a"], analyze(fits[0]), check_names=False)


def test_analyze_many_requires_fits_and_matching_labels() -> None:
    with pytest.raises(ValueError):
        analyze_many([])
    with pytest.raises(ValueError):
        analyze_many([_make_fit()], labels=["a", "b"])
