"""
입력 파일을 읽어 Module 객체로 변환하는 모듈입니다.
모든 파일을 먼저 읽으므로, 읽기 실패 시 함수 추출은 시작되지 않습니다.
"""
from typing import List, Iterable

from shared_config.logger import logger

from .exceptions import ModuleReadError
from .models import Module


def load_module(path, encoding: str = 'utf-8') -> Module:
    """
    파일 하나를 읽어 Module을 생성합니다.

    디코딩할 수 없는 바이트는 치환 문자로 바뀝니다.

    Raises:
        ModuleReadError: 파일을 열거나 읽을 수 없는 경우
    """
    filename = str(path)
    try:
        with open(filename, 'r', encoding=encoding, errors='replace') as f:
            source = f.read()
    except OSError as e:
        raise ModuleReadError(filename, e.strerror or str(e)) from e

    module = Module(filename=filename, source=source)
    logger.info(f"모듈 로드: {module.label}")
    return module


def load_modules(paths: Iterable, encoding: str = 'utf-8') -> List[Module]:
    """입력 순서대로 모든 파일을 읽습니다."""
    return [load_module(path, encoding) for path in paths]
