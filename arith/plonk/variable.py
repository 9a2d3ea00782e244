"""
변수 (Variable): 할당 테이블 주소
================================

Variable은 할당 테이블의 한 셀을 가리키는 값 타입이다.

  Variable(index, rotation, relative, type)

  - type: 열 종류 (witness, public_input, constant, selector)
  - index: 해당 종류 안에서의 열 인덱스
  - rotation: 행 오프셋
  - relative: True면 rotation은 게이트 활성 행 기준 상대 오프셋,
              False면 절대 행 인덱스

**상대 vs 절대**:
  게이트 제약 안에서는 상대 변수를 쓴다. 예: var(W(0), -1)은
  "셀렉터가 켜진 행의 바로 윗행, 0번 witness 열".
  컴포넌트 경계를 넘는 값(입력/출력)은 절대 변수로 표현한다.

**스크래치 변수**:
  ScratchVariable(index)는 산술화되지 않는 private scratch 저장소를
  가리킨다. 테이블 열이 아니므로 게이트, lookup, copy constraint에
  참여할 수 없다.

**연산**:
  Variable끼리의 +, -, *, 스칼라 곱, 단항 -, 정수 거듭제곱은
  Expression을 만든다.

    >>> x = Variable(0, 0)
    >>> y = Variable(1, 0)
    >>> z = Variable(2, 0)
    >>> constraint = z - x * y      # Expression
"""

from dataclasses import dataclass
from enum import IntEnum


class ColumnType(IntEnum):
    """테이블 열 종류."""
    WITNESS = 0
    PUBLIC_INPUT = 1
    CONSTANT = 2
    SELECTOR = 3


def _lift(value):
    from arith.plonk.expression import Expression
    return Expression.lift(value)


@dataclass(frozen=True, order=True)
class Variable:
    """테이블 기반 변수.

    dataclass 필드 순서 (index, rotation, relative, type)가 정렬 순서이며,
    Expression의 정규형(canonical form)은 이 순서를 사용한다.
    """
    index: int
    rotation: int = 0
    relative: bool = True
    type: ColumnType = ColumnType.WITNESS

    def absolute(self, row):
        """상대 변수를 row 기준 절대 변수로 변환한다."""
        if not self.relative:
            return self
        return Variable(self.index, row + self.rotation, False, self.type)

    def relative_to(self, row):
        """절대 변수를 row 기준 상대 변수로 변환한다."""
        if self.relative:
            return self
        return Variable(self.index, self.rotation - row, True, self.type)

    def __add__(self, other):
        return _lift(self) + other

    def __radd__(self, other):
        return _lift(other) + self

    def __sub__(self, other):
        return _lift(self) - other

    def __rsub__(self, other):
        return _lift(other) - self

    def __mul__(self, other):
        return _lift(self) * other

    def __rmul__(self, other):
        return _lift(other) * self

    def __neg__(self):
        return -_lift(self)

    def __pow__(self, power):
        return _lift(self) ** power

    def __str__(self):
        prefix = {
            ColumnType.WITNESS: "w",
            ColumnType.PUBLIC_INPUT: "pi",
            ColumnType.CONSTANT: "c",
            ColumnType.SELECTOR: "q",
        }[self.type]
        if self.relative:
            return f"{prefix}{self.index}[{self.rotation:+d}]"
        return f"{prefix}{self.index}@{self.rotation}"


@dataclass(frozen=True)
class ScratchVariable:
    """private scratch 저장소의 index번째 칸."""
    index: int

    def __str__(self):
        return f"scratch{self.index}"


def W(index, rotation=0, relative=True):
    """witness 변수 단축 생성자."""
    return Variable(index, rotation, relative, ColumnType.WITNESS)


def PI(index, rotation=0, relative=True):
    """public input 변수 단축 생성자."""
    return Variable(index, rotation, relative, ColumnType.PUBLIC_INPUT)
