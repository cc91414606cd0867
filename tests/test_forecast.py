import logging

import numpy as np
import pandas as pd
import pytest

from hwforecast import (
    ForecastConfig,
    InsufficientDataError,
    ValidationError,
    forecast,
    forecast_with_config,
    valid_args,
    validate_args,
)

SERIES = [10.0, 20.0, 30.0, 40.0, 11.0, 22.0, 31.0, 42.0, 10.0, 21.0, 33.0, 41.0]

# (33.225 + 10.3275) * seasonal_index[0]
GOLDEN_FT4 = 17.363608265947889


def test_concrete_scenario():
    ft = forecast(SERIES, 0.5, 0.4, 0.6, 4, 1)

    assert isinstance(ft, np.ndarray)
    assert len(ft) == 12
    assert list(ft[:4]) == [0.0, 0.0, 0.0, 0.0]
    assert ft[4] == pytest.approx(GOLDEN_FT4, rel=1e-12)
    assert np.all(np.isfinite(ft))
    assert np.all(ft[4:] > 0.0)


def test_forecast_is_deterministic():
    first = forecast(SERIES, 0.5, 0.4, 0.6, 4, 2)
    second = forecast(SERIES, 0.5, 0.4, 0.6, 4, 2)
    assert first.tobytes() == second.tobytes()


@pytest.mark.parametrize("period, m", [(4, 1), (4, 4), (3, 2), (2, 1), (6, 5)])
def test_forecast_length_matches_series(period, m):
    data = SERIES * 2
    ft = forecast(data, 0.2, 0.3, 0.4, period, m)
    assert len(ft) == len(data)


def test_forecast_does_not_mutate_input():
    data = np.array(SERIES)
    before = data.copy()
    forecast(data, 0.5, 0.4, 0.6, 4, 1)
    assert np.array_equal(data, before)


def test_forecast_preserves_pandas_index():
    index = pd.date_range("2024-01-01", periods=len(SERIES), freq="QS")
    series = pd.Series(SERIES, index=index, name="sales")

    ft = forecast(series, 0.5, 0.4, 0.6, 4, 1)

    assert isinstance(ft, pd.Series)
    assert ft.index.equals(index)
    assert ft.name == "sales"
    assert ft.iloc[4] == pytest.approx(GOLDEN_FT4, rel=1e-12)


@pytest.mark.parametrize("series, alpha, beta, gamma, period, m", [
    ([], 0.5, 0.4, 0.6, 4, 1),
    (SERIES, 0.5, 0.4, 0.6, 4, 0),
    (SERIES, 0.5, 0.4, 0.6, 4, -1),
    (SERIES, 0.5, 0.4, 0.6, 4, 5),
    (SERIES, -0.1, 0.4, 0.6, 4, 1),
    (SERIES, 1.1, 0.4, 0.6, 4, 1),
    (SERIES, 0.5, -0.01, 0.6, 4, 1),
    (SERIES, 0.5, 1.01, 0.6, 4, 1),
    (SERIES, 0.5, 0.4, -1.0, 4, 1),
    (SERIES, 0.5, 0.4, 2.0, 4, 1),
])
def test_invalid_args_return_none(series, alpha, beta, gamma, period, m):
    assert not valid_args(series, alpha, beta, gamma, period, m)
    assert forecast(series, alpha, beta, gamma, period, m) is None


def test_boundary_parameters_are_valid():
    assert valid_args(SERIES, 0.0, 0.0, 0.0, 4, 4)
    assert valid_args(SERIES, 1.0, 1.0, 1.0, 4, 1)
    assert forecast(SERIES, 1.0, 1.0, 1.0, 4, 4) is not None


def test_validate_args_checks_in_order():
    # empty series is reported before the bad horizon and bad alpha
    with pytest.raises(ValidationError) as excinfo:
        validate_args([], 5.0, 0.4, 0.6, 4, 0)
    assert excinfo.value.field == "series"

    with pytest.raises(ValidationError) as excinfo:
        validate_args(SERIES, 5.0, 0.4, 0.6, 4, 9)
    assert excinfo.value.field == "m"
    assert excinfo.value.value == 9

    with pytest.raises(ValidationError) as excinfo:
        validate_args(SERIES, 0.5, 0.4, 7.0, 4, 1)
    assert excinfo.value.field == "gamma"


def test_rejected_forecast_is_logged(caplog):
    with caplog.at_level(logging.WARNING, logger="hwforecast"):
        assert forecast(SERIES, 0.5, 0.4, 0.6, 4, 0) is None
    assert any("m=0" in record.getMessage() for record in caplog.records)


def test_non_numeric_series_returns_none():
    assert forecast(["a", "b", "c"], 0.5, 0.4, 0.6, 1, 1) is None


def test_short_series_raises():
    with pytest.raises(InsufficientDataError):
        forecast([1.0, 2.0, 3.0], 0.5, 0.4, 0.6, 4, 1)
    with pytest.raises(InsufficientDataError):
        forecast(SERIES[:7], 0.5, 0.4, 0.6, 4, 1)


def test_zero_season_propagates_nan():
    data = [0.0, 0.0, 0.0, 0.0, 1.0, 2.0, 3.0, 4.0, 1.0, 2.0, 3.0, 4.0]
    ft = forecast(data, 0.5, 0.4, 0.6, 4, 1)
    assert len(ft) == len(data)
    assert np.isnan(ft[4])


def test_forecast_with_default_config():
    ft = forecast_with_config(SERIES)
    assert ft[4] == pytest.approx(GOLDEN_FT4, rel=1e-12)


def test_forecast_with_config():
    config = ForecastConfig(alpha=0.2, beta=0.3, gamma=0.4, period=4, m=2)
    expected = forecast(SERIES, 0.2, 0.3, 0.4, 4, 2)
    assert np.array_equal(forecast_with_config(SERIES, config), expected)


def test_config_from_dict():
    config = ForecastConfig.from_dict({"alpha": "0.25", "period": "6", "m": 3})
    assert config == ForecastConfig(alpha=0.25, beta=0.4, gamma=0.6, period=6, m=3)
    assert isinstance(config.period, int)
    assert ForecastConfig.from_dict(config.to_dict()) == config


@pytest.mark.parametrize("params, field", [
    ({"delta": 0.1}, "config"),
    ({"alpha": "abc"}, "alpha"),
    ({"m": 1.5}, "m"),
])
def test_config_from_dict_rejects_bad_values(params, field):
    with pytest.raises(ValidationError) as excinfo:
        ForecastConfig.from_dict(params)
    assert excinfo.value.field == field
