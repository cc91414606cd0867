from typing import Any, Optional

import numpy as np
import pandas as pd

from vectorbt import _typing as tp


def as_series_array(series: Any) -> tp.Array1d:
    """
    将输入序列转换为连续的一维float64数组（始终复制，不修改调用方数据）

    Args:
        series: list/tuple、numpy数组或pandas Series

    Returns:
        一维float64 numpy数组

    Raises:
        ValidationError: 输入无法转换为一维数值数组时抛出
    """
    if isinstance(series, pd.Series):
        series = series.to_numpy()
    try:
        arr = np.array(series, dtype=np.float64, copy=True)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"Series must be numeric: {e}", field="series")

    if arr.ndim != 1:
        raise ValidationError(f"Series must be 1-dimensional, got {arr.ndim} dimensions",
                              field="series", value=arr.shape)

    return np.ascontiguousarray(arr)


def check_unit_interval(name: str, value: float) -> float:
    """
    验证平滑参数位于闭区间 [0, 1]

    Raises:
        ValidationError: 参数越界时抛出
    """
    if value < 0.0 or value > 1.0:
        raise ValidationError(f"{name} must be in [0, 1]: {value}", field=name, value=value)
    return value


def safe_float_convert(value: Any, default: Optional[float] = None) -> Optional[float]:
    """
    安全转换为float类型

    Args:
        value: 要转换的值
        default: 转换失败时的默认值

    Returns:
        转换后的float值或默认值
    """
    if value is None or value == '' or value == '--' or value == 'N/A':
        return default

    if isinstance(value, (int, float)):
        return float(value)

    if isinstance(value, str):
        value = value.strip()
        try:
            if "%" in value:
                return float(value.replace("%", "")) / 100
            return float(value)
        except (ValueError, TypeError):
            return default

    try:
        return float(value)
    except (ValueError, TypeError):
        return default


class ValidationError(Exception):
    """参数验证异常"""
    def __init__(self, message: str, field: str = None, value=None):
        super().__init__(message)
        self.field = field
        self.value = value


class InsufficientDataError(Exception):
    """序列长度不足以完成初始化"""
    def __init__(self, message: str, required: int = None, actual: int = None):
        super().__init__(message)
        self.required = required
        self.actual = actual
