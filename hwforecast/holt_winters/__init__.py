"""
Holt-Winters 时间序列预测模块

提供乘法季节 Holt-Winters 三次指数平滑预测

模块结构:
- _holt_winters: 核心算法实现（初始趋势、季节指数、递推）
- _forecast: 参数验证、配置与预测入口

主要功能:
- forecast: 对单条序列进行 m 步预测
- holt_winters_components: 查看水平/趋势/季节分量
- forecast_residuals: 观测值与预测值之差
"""

from hwforecast.holt_winters._holt_winters import (
    initial_trend,
    seasonal_indices,
    holt_winters_forecast,
    holt_winters_components,
    first_forecast_index,
    forecast_residuals,
)

from hwforecast.holt_winters._forecast import (
    ForecastConfig,
    validate_args,
    valid_args,
    forecast,
    forecast_with_config,
)

__all__ = [
    # 核心算法
    "initial_trend",
    "seasonal_indices",
    "holt_winters_forecast",
    "holt_winters_components",
    "first_forecast_index",
    "forecast_residuals",

    # 预测入口
    "ForecastConfig",
    "validate_args",
    "valid_args",
    "forecast",
    "forecast_with_config",
]

# 模块元信息
__module_name__ = "holt_winters"
__module_description__ = "Holt-Winters时间序列预测模块"
__algorithms__ = [
    "乘法季节 Holt-Winters 三次指数平滑",
]
