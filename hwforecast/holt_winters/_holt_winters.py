import logging

from numba import njit
import numpy as np
from vectorbt import _typing as tp

from hwforecast._utils import as_series_array, InsufficientDataError, ValidationError

logger = logging.getLogger(__name__)


@njit(cache=True)
def initial_trend_nb(a: tp.Array1d, period: int) -> float:
    """Average per-step change between the first two seasons."""
    total = 0.0
    for i in range(period):
        total += a[period + i] - a[i]
    return total / (period * period)


@njit(cache=True, error_model="numpy")
def seasonal_indices_nb(a: tp.Array1d, period: int, seasons: int) -> tp.Array1d:
    """
    Multiplicative seasonal indices, one per position within a season.

    Parameters
    ----------
    a : 1d array
        输入时间序列（float）。只使用前 seasons * period 个观测值，末尾不完整的季节被忽略。
    period : int
        季节长度。
    seasons : int
        完整季节数，要求 >= 1。

    Returns
    -------
    si : 1d array
        长度为 period 的季节指数，每个位置为各季节中 观测值/季节均值 的平均。
    """
    savg = np.zeros(seasons, dtype=np.float64)
    obsavg = np.zeros(seasons * period, dtype=np.float64)
    si = np.zeros(period, dtype=np.float64)

    # 季节均值
    for i in range(seasons):
        for j in range(period):
            savg[i] += a[i * period + j]
        savg[i] /= period

    # 按季节均值归一化的观测值
    for i in range(seasons):
        for j in range(period):
            obsavg[i * period + j] = a[i * period + j] / savg[i]

    # 季节指数
    for i in range(period):
        for j in range(seasons):
            si[i] += obsavg[j * period + i]
        si[i] /= seasons

    return si


@njit(cache=True, error_model="numpy")
def holt_winters_components_nb(a: tp.Array1d,
                               st_1: float,
                               bt_1: float,
                               alpha: float,
                               beta: float,
                               gamma: float,
                               seasonal: tp.Array1d,
                               period: int,
                               m: int) -> tp.Tuple[tp.Array1d, tp.Array1d, tp.Array1d, tp.Array1d]:
    """
    Multiplicative Holt-Winters recurrence with m-step-ahead forecasts.

    Parameters
    ----------
    a : 1d array
        输入时间序列（float）。
    st_1, bt_1 : float
        初始水平与初始趋势，写入 st[1] 与 bt[1]。
    alpha, beta, gamma : float in [0, 1]
        水平/季节/趋势 平滑参数（注意 beta 作用于季节，gamma 作用于趋势）。
    seasonal : 1d array
        初始季节指数，长度为 period，按绝对位置写入 it[0..period-1]。
    period : int
        季节长度。
    m : int
        预测步数，0 < m <= period。

    Returns
    -------
    st, bt, it, ft : 1d arrays
        水平、趋势、季节分量与预测值，长度与 a 相同。
        st/bt/it 中未计算的位置为 NaN，ft 中未写入的位置为 0.0。
        除零不做保护，Inf/NaN 按 IEEE 规则传播。
    """
    n = len(a)
    st = np.full(max(n, 2), np.nan)
    bt = np.full(max(n, 2), np.nan)
    it = np.full(max(n, period), np.nan)
    ft = np.zeros(n, dtype=np.float64)

    st[1] = st_1
    bt[1] = bt_1
    for i in range(period):
        it[i] = seasonal[i]

    for i in range(2, n):
        # 水平分量
        if i - period >= 0:
            st[i] = alpha * a[i] / it[i - period] + (1.0 - alpha) * (st[i - 1] + bt[i - 1])
        else:
            st[i] = alpha * a[i] + (1.0 - alpha) * (st[i - 1] + bt[i - 1])

        # 趋势分量
        bt[i] = gamma * (st[i] - st[i - 1]) + (1.0 - gamma) * bt[i - 1]

        # 季节分量
        if i - period >= 0:
            it[i] = beta * a[i] / st[i] + (1.0 - beta) * it[i - period]

        # m步预测，超出序列末尾的预测被丢弃
        if i + m >= period and i + m < n:
            ft[i + m] = (st[i] + m * bt[i]) * it[i - period + m]

    return st[:n], bt[:n], it[:n], ft


@njit(cache=True, error_model="numpy")
def holt_winters_forecast_nb(a: tp.Array1d,
                             st_1: float,
                             bt_1: float,
                             alpha: float,
                             beta: float,
                             gamma: float,
                             seasonal: tp.Array1d,
                             period: int,
                             m: int) -> tp.Array1d:
    """Forecast-only version of `holt_winters_components_nb`."""
    return holt_winters_components_nb(a, st_1, bt_1, alpha, beta, gamma, seasonal, period, m)[3]


def initial_trend(series, period: int) -> float:
    """
    根据前两个季节计算初始趋势

    Args:
        series: 输入时间序列
        period: 季节长度

    Returns:
        初始趋势估计值

    Raises:
        InsufficientDataError: 序列长度小于 2 * period 时抛出
    """
    a = as_series_array(series)
    if period < 1:
        raise ValidationError(f"period must be >= 1: {period}", field="period", value=period)
    if len(a) < 2 * period:
        raise InsufficientDataError(
            f"Initial trend needs at least 2 * period = {2 * period} observations, got {len(a)}",
            required=2 * period, actual=len(a))
    return float(initial_trend_nb(a, int(period)))


def seasonal_indices(series, period: int, seasons: tp.Optional[int] = None) -> tp.Array1d:
    """
    计算乘法季节指数

    Args:
        series: 输入时间序列
        period: 季节长度
        seasons: 完整季节数，默认为 len(series) // period

    Returns:
        长度为 period 的季节指数数组

    Raises:
        InsufficientDataError: 没有完整季节，或 seasons 超出序列长度时抛出
    """
    a = as_series_array(series)
    if period < 1:
        raise ValidationError(f"period must be >= 1: {period}", field="period", value=period)
    if seasons is None:
        seasons = len(a) // period
    if seasons < 1 or seasons * period > len(a):
        raise InsufficientDataError(
            f"Seasonal indices need at least one complete season of {period} observations "
            f"(seasons={seasons}, length={len(a)})",
            required=max(seasons, 1) * period, actual=len(a))
    return seasonal_indices_nb(a, int(period), int(seasons))


def _check_recurrence_args(seasonal, period, m):
    seasonal = as_series_array(seasonal)
    if period < 1:
        raise ValidationError(f"period must be >= 1: {period}", field="period", value=period)
    if len(seasonal) != period:
        raise ValidationError(f"Expected {period} seasonal indices, got {len(seasonal)}",
                              field="seasonal", value=len(seasonal))
    if m < 1 or m > period:
        raise ValidationError(f"m must satisfy 0 < m <= period: {m}", field="m", value=m)
    return seasonal


def holt_winters_components(series,
                            st_1: float,
                            bt_1: float,
                            alpha: float,
                            beta: float,
                            gamma: float,
                            seasonal,
                            period: int,
                            m: int) -> tp.Tuple[tp.Array1d, tp.Array1d, tp.Array1d, tp.Array1d]:
    """
    运行Holt-Winters递推，返回 (st, bt, it, ft) 四个分量数组

    用于检查水平、趋势、季节分量；`forecast` 只使用其中的 ft。
    """
    a = as_series_array(series)
    seasonal = _check_recurrence_args(seasonal, period, m)
    return holt_winters_components_nb(a, float(st_1), float(bt_1), float(alpha), float(beta),
                                      float(gamma), seasonal, int(period), int(m))


def holt_winters_forecast(series,
                          st_1: float,
                          bt_1: float,
                          alpha: float,
                          beta: float,
                          gamma: float,
                          seasonal,
                          period: int,
                          m: int) -> tp.Array1d:
    """运行Holt-Winters递推，只返回预测数组 ft"""
    a = as_series_array(series)
    seasonal = _check_recurrence_args(seasonal, period, m)
    ft = holt_winters_forecast_nb(a, float(st_1), float(bt_1), float(alpha), float(beta),
                                  float(gamma), seasonal, int(period), int(m))
    logger.debug(f"Holt-Winters recurrence finished: length={len(a)}, period={period}, m={m}")
    return ft


def first_forecast_index(period: int, m: int) -> int:
    """ft 中第一个由递推写入的位置（递推从 i=2 开始，且需满足 i + m >= period）"""
    return max(period, 2 + m)


def forecast_residuals(series, ft, period: int, m: int) -> tp.Array1d:
    """
    计算观测值与预测值之差 (series - ft)

    first_forecast_index 之前没有预测值的位置为 NaN。
    """
    a = as_series_array(series)
    f = as_series_array(ft)
    if len(a) != len(f):
        raise ValidationError(f"Series and forecast lengths differ: {len(a)} != {len(f)}",
                              field="ft", value=len(f))
    residuals = a - f
    residuals[:min(first_forecast_index(period, m), len(a))] = np.nan
    return residuals
