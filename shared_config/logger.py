"""
Loguru 기반 로깅 시스템
콘솔(stderr) 진단 출력과 선택적 파일 로깅을 제공합니다.

호출 그래프 텍스트는 stdout으로만 나가므로, 모든 로그는 stderr 또는 파일로 보냅니다.
"""
import sys
from pathlib import Path
from loguru import logger

# 기본 로거 제거 (중복 방지)
logger.remove()

# =============================================================================
# 포맷 설정
# =============================================================================

# 콘솔용 포맷 (컬러 + file.path:line 형식)
CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <7}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)

# 파일용 포맷 (플레인 텍스트)
FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss} | "
    "{level: <7} | "
    "{file.path}:{line} in {function}() | "
    "{message}"
)

DEFAULT_CONSOLE_LEVEL = "WARNING"

# 현재 콘솔 핸들러 ID
_console_handler_id = None


# =============================================================================
# 콘솔 로깅 설정
# =============================================================================

def configure_console_logging(level: str = DEFAULT_CONSOLE_LEVEL, colorize: bool = None):
    """
    콘솔(stderr) 핸들러를 (재)설정합니다.

    Args:
        level: 로그 레벨 (예: "WARNING", "INFO", "DEBUG")
        colorize: 컬러 출력 여부 (None이면 터미널일 때만)

    Returns:
        추가된 핸들러 ID
    """
    global _console_handler_id

    if _console_handler_id is not None:
        try:
            logger.remove(_console_handler_id)
        except ValueError:
            # 외부에서 logger.remove()로 이미 제거된 경우
            pass

    if colorize is None:
        colorize = hasattr(sys.stderr, "isatty") and sys.stderr.isatty()

    _console_handler_id = logger.add(
        sys.stderr,
        format=CONSOLE_FORMAT,
        level=level,
        colorize=colorize,
    )
    return _console_handler_id


# 기본 콘솔 핸들러 추가
configure_console_logging()


def verbosity_to_level(verbosity: int) -> str:
    """-v 횟수를 로그 레벨로 변환 (0: WARNING, 1: INFO, 2 이상: DEBUG)"""
    if verbosity <= 0:
        return "WARNING"
    if verbosity == 1:
        return "INFO"
    return "DEBUG"


# =============================================================================
# 파일 로깅 함수
# =============================================================================

def setup_file_logging(
    log_dir: str = "./logs",
    level: str = "DEBUG",
    rotation: str = "1 day",
    retention: str = "7 days"
):
    """
    파일 로깅 설정

    Args:
        log_dir: 로그 디렉토리 경로
        level: 로그 레벨
        rotation: 로테이션 주기
        retention: 보관 기간

    Returns:
        추가된 핸들러 ID
    """
    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)

    handler_id = logger.add(
        str(log_path / "{time:YYYY-MM-DD}_callgraph.log"),
        format=FILE_FORMAT,
        level=level,
        rotation=rotation,
        retention=retention,
        encoding="utf-8",
    )

    logger.info(f"파일 로깅 시작: {log_path}")
    return handler_id


# =============================================================================
# 단계 추적 컨텍스트 매니저
# =============================================================================

class LogStage:
    """
    단계 추적 컨텍스트 매니저

    사용 예:
        with LogStage("함수 추출", modules=3):
            ...
    """

    def __init__(self, stage_name: str, **context):
        self.stage_name = stage_name
        self.context = context

    def __enter__(self):
        context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
        if context_str:
            logger.info(f"[시작] {self.stage_name} ({context_str})")
        else:
            logger.info(f"[시작] {self.stage_name}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type:
            # 오류 메시지는 호출자(CLI)가 한 줄로 출력하므로 여기서는 DEBUG로만 남김
            logger.debug(f"[실패] {self.stage_name}: {exc_val}")
        else:
            logger.success(f"[완료] {self.stage_name}")
        return False


__all__ = [
    "logger",
    "configure_console_logging",
    "verbosity_to_level",
    "setup_file_logging",
    "LogStage",
    "CONSOLE_FORMAT",
    "FILE_FORMAT",
]
