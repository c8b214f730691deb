"""
shared_config 모듈
로깅 설정 등 공통 설정을 중앙 관리합니다.
"""

from .logger import (
    logger,
    configure_console_logging,
    verbosity_to_level,
    setup_file_logging,
    LogStage,
)

__all__ = [
    # logger
    "logger",
    "configure_console_logging",
    "verbosity_to_level",
    "setup_file_logging",
    "LogStage",
]
