from ._config import TraceLogConfig
from ._config import config


__all__ = ["TraceLogConfig", "config"]
