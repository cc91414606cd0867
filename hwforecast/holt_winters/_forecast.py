"""
Holt-Winters 预测入口

参数验证 -> 初始趋势 + 季节指数 -> 递推 -> 预测数组
"""

import logging
from dataclasses import dataclass, asdict, fields
from typing import Any, Dict, Optional

import pandas as pd

from vectorbt import _typing as tp

from hwforecast._utils import (
    as_series_array,
    check_unit_interval,
    safe_float_convert,
    ValidationError,
)
from hwforecast.holt_winters._holt_winters import (
    initial_trend,
    seasonal_indices,
    holt_winters_forecast,
)

logger = logging.getLogger(__name__)


@dataclass
class ForecastConfig:
    """预测参数配置（alpha→水平, gamma→趋势, beta→季节）"""
    alpha: float = 0.5
    beta: float = 0.4
    gamma: float = 0.6
    period: int = 4
    m: int = 1

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, params: Dict[str, Any]) -> "ForecastConfig":
        """
        从字典创建配置，缺失的键使用默认值

        Raises:
            ValidationError: 存在未知键或数值无法转换时抛出
        """
        known = {f.name for f in fields(cls)}
        unknown = set(params) - known
        if unknown:
            raise ValidationError(f"Unknown config keys: {sorted(unknown)}",
                                  field="config", value=sorted(unknown))

        kwargs = {}
        for key, value in params.items():
            converted = safe_float_convert(value)
            if converted is None:
                raise ValidationError(f"Config value for '{key}' is not numeric: {value!r}",
                                      field=key, value=value)
            if key in ("period", "m"):
                if converted != int(converted):
                    raise ValidationError(f"Config value for '{key}' must be an integer: {value!r}",
                                          field=key, value=value)
                converted = int(converted)
            kwargs[key] = converted
        return cls(**kwargs)


def validate_args(series, alpha: float, beta: float, gamma: float, period: int, m: int) -> bool:
    """
    按顺序验证预测参数，第一个失败即抛出

    Args:
        series: 输入时间序列
        alpha, beta, gamma: 平滑参数
        period: 季节长度
        m: 预测步数

    Returns:
        验证通过时返回True

    Raises:
        ValidationError: 参数验证失败时抛出
    """
    if len(series) == 0:
        raise ValidationError("Series cannot be empty", field="series", value=0)
    if m <= 0:
        raise ValidationError(f"m must be positive: {m}", field="m", value=m)
    if m > period:
        raise ValidationError(f"m must not exceed period {period}: {m}", field="m", value=m)
    check_unit_interval("alpha", alpha)
    check_unit_interval("beta", beta)
    check_unit_interval("gamma", gamma)
    return True


def valid_args(series, alpha: float, beta: float, gamma: float, period: int, m: int) -> bool:
    """`validate_args` 的布尔版本"""
    try:
        return validate_args(series, alpha, beta, gamma, period, m)
    except ValidationError:
        return False


def forecast(series,
             alpha: float,
             beta: float,
             gamma: float,
             period: int,
             m: int) -> Optional[tp.Union[tp.Array1d, pd.Series]]:
    """
    Holt-Winters 三次指数平滑预测（乘法季节模型）

    Args:
        series: 输入时间序列（list、numpy数组或pandas Series）
        alpha: 水平平滑参数
        beta: 季节平滑参数
        gamma: 趋势平滑参数
        period: 季节长度
        m: 预测步数，0 < m <= period

    Returns:
        与输入等长的预测数组；输入为pandas Series时返回同索引的Series。
        参数验证失败时返回None。

    Raises:
        InsufficientDataError: 序列长度小于 2 * period 时抛出
    """
    try:
        a = as_series_array(series)
        validate_args(a, alpha, beta, gamma, period, m)
    except ValidationError as e:
        logger.warning(f"Forecast rejected ({e.field}={e.value!r}): {e}")
        return None

    seasons = len(a) // period
    st_1 = float(a[0])
    bt_1 = initial_trend(a, period)
    seasonal = seasonal_indices(a, period, seasons)
    logger.debug(f"Initial level={st_1}, trend={bt_1}, seasons={seasons}")

    ft = holt_winters_forecast(a, st_1, bt_1, alpha, beta, gamma, seasonal, period, m)

    if isinstance(series, pd.Series):
        return pd.Series(ft, index=series.index, name=series.name)
    return ft


def forecast_with_config(series, config: Optional[ForecastConfig] = None) -> Optional[tp.Union[tp.Array1d, pd.Series]]:
    """使用 ForecastConfig 运行 `forecast`"""
    config = config or ForecastConfig()
    return forecast(series, config.alpha, config.beta, config.gamma, config.period, config.m)
