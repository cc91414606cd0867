"""
HWForecast 模块

Holt-Winters 三次指数平滑时间序列预测

模块结构:
- holt_winters: Holt-Winters 预测算法
- _utils: 输入转换、参数验证与异常定义
"""

# 版本信息
__version__ = "0.1.0"
__author__ = "HWForecast Team"
__description__ = "Holt-Winters triple exponential smoothing forecast"
__license__ = "MIT"

# 导入Holt-Winters模块
from hwforecast.holt_winters import *

# 导入异常类型
from hwforecast._utils import ValidationError, InsufficientDataError

# 定义公开API
__all__ = [
    # 版本信息
    "__version__",
    "__author__",
    "__description__",
    "__license__",

    # 核心模块
    "holt_winters",

    # 异常
    "ValidationError",
    "InsufficientDataError",
]
__all__ += holt_winters.__all__
