"""
산술화 공유 유틸리티
====================

여러 모듈에서 공유되는 검사/보조 함수를 제공한다.

**계약 위반 (contract violation)**:
  인덱스 범위 초과, 기록되지 않은 셀 읽기, 잘못된 copy constraint,
  manifest와 맞지 않는 열 구성 등은 회로 구성 코드의 버그이다.
  복구 가능한 입력 오류가 아니므로 즉시 ContractViolation을 던져
  회로 구성을 중단한다. 엔진 내부에서는 이 예외를 잡지 않는다.
"""


class ContractViolation(AssertionError):
    """회로 구성 코드의 계약 위반 (치명적, 복구 불가)."""


def ensure(condition, message, *args):
    """조건이 거짓이면 ContractViolation을 던진다.

    Args:
        condition: 검사할 조건
        message: 에러 메시지 (% 포맷 문자열)
        *args: 메시지 포맷 인자

    예시:
        >>> ensure(index < 3, "witness 열 인덱스 범위 초과: %d", index)
    """
    if not condition:
        raise ContractViolation(message % args if args else message)


def next_power_of_2(n):
    """n 이상인 가장 작은 2의 거듭제곱을 반환한다."""
    if n <= 1:
        return 1
    return 1 << (n - 1).bit_length()
