"""
引擎错误类型
NotFoundError: 词汇集、目标、里程碑等不存在
ValidationError: 输入不合法（未知题目ID、不属于词汇集的符号等）
"""


class EngineError(Exception):
    """引擎错误基类"""

    code = "engine_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(EngineError):
    code = "not_found"


class ValidationError(EngineError):
    code = "validation_error"
