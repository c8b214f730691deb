"""
호출 그래프 생성 과정에서 발생하는 예외 클래스를 정의한 모듈입니다.

모든 예외는 CallGraphError를 상속하며, CLI는 이 기본 클래스만 잡아
오류 한 줄을 출력하고 종료 코드 1을 반환합니다.
"""


class CallGraphError(Exception):
    """호출 그래프 생성 중 발생하는 모든 치명적 오류의 기본 클래스"""
    pass


class ConfigurationError(CallGraphError):
    """
    사용자 설정 오류입니다.

    패턴 컴파일 실패, 빈 문자열에 매칭되는 정리 패턴, 알 수 없는 전략 이름,
    잘못된 YAML 설정 파일 등에서 발생합니다. 파일을 읽기 전에 검출됩니다.
    """
    pass


class ModuleReadError(CallGraphError, OSError):
    """입력 파일을 열거나 읽을 수 없을 때 발생합니다."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"파일을 읽을 수 없습니다: {path} ({reason})")

    def __str__(self):
        return self.args[0]


class MalformedDeclarationError(CallGraphError):
    """시작 패턴에 매칭된 라인에서 함수 이름을 추출할 수 없을 때 발생합니다."""

    def __init__(self, line: str, filename: str = None, line_number: int = None):
        self.line = line
        self.filename = filename
        self.line_number = line_number

        location = filename or "<unknown>"
        if line_number is not None:
            location = f"{location}:{line_number}"
        super().__init__(f"함수 이름을 추출할 수 없습니다 ({location}): {line!r}")

    def with_location(self, filename: str, line_number: int) -> "MalformedDeclarationError":
        """파일/라인 정보를 채운 새 예외를 반환합니다."""
        return MalformedDeclarationError(self.line, filename, line_number)
