"""
불리언 연산 컴포넌트 (Boolean Operations)
=========================================

한 행에 입력 비트들과 출력 비트를 배치하고, 출력이 입력의 불리언 함수
값과 같다는 제약 하나를 거는 컴포넌트.

  | W0 | W1 | ... | W(n-1) | W(n)     |
  |----|----|-----|--------|----------|
  | x0 | x1 | ... | x(n-1) | f(x...)  |

**불리언 함수**:
  BooleanFunction은 arity, output(입력들), evaluate(값들)을 제공한다.
  output은 입력이 0/1일 때 함수 값과 일치하는 다항식이다.

  | 함수 | output(x, y)        |
  |------|---------------------|
  | AND  | x·y                 |
  | OR   | x + y - x·y         |
  | XOR  | x + y - 2·x·y       |
  | NOT  | 1 - x               |
  | NAND | 1 - x·y             |
  | NOR  | 1 - x - y + x·y     |

  입력의 불리언성(x ∈ {0, 1})은 이 컴포넌트가 강제하지 않는다.
  호출자가 이미 불리언으로 제약된 변수를 넘겨야 한다.

    >>> op = BooleanOpComponent([0, 1, 2], AndFunction())
    >>> result = op.generate_assignments(table, BooleanOpInput([x, y]), 0)
    >>> op.generate_circuit(circuit, table, BooleanOpInput([x, y]), 0)
"""

from dataclasses import dataclass
from typing import List

from arith.plonk.assignment import var_value
from arith.plonk.component import PlonkComponent
from arith.plonk.manifest import ComponentManifest, ManifestSingleValue
from arith.plonk.utils import ensure
from arith.plonk.variable import Variable


class BooleanFunction:
    """불리언 함수 기반 클래스. 하위 클래스는 output을 구현한다."""

    name = None
    arity = 2

    def output(self, inputs):
        """입력(Expression 또는 정수)들로 출력 다항식을 만든다."""
        raise NotImplementedError

    def constraint(self, witnesses):
        """witnesses[:arity]가 입력, witnesses[arity]가 출력인 제약식."""
        ensure(len(witnesses) == self.arity + 1,
               "%s: witness %d개가 필요합니다 (받은 수 %d)",
               self.name, self.arity + 1, len(witnesses))
        return witnesses[self.arity] - self.output(witnesses[:self.arity])

    def evaluate(self, values):
        """0/1 입력 값들에 대한 함수 값 (정수)."""
        bits = [int(v) for v in values]
        ensure(len(bits) == self.arity, "%s: 입력 %d개가 필요합니다", self.name, self.arity)
        ensure(all(b in (0, 1) for b in bits), "%s: 불리언이 아닌 입력 %s", self.name, bits)
        return self.output(bits)

    def __repr__(self):
        return f"{type(self).__name__}()"


class AndFunction(BooleanFunction):
    name = "and"

    def output(self, inputs):
        x, y = inputs
        return x * y


class OrFunction(BooleanFunction):
    name = "or"

    def output(self, inputs):
        x, y = inputs
        return x + y - x * y


class XorFunction(BooleanFunction):
    name = "xor"

    def output(self, inputs):
        x, y = inputs
        return x + y - 2 * x * y


class NotFunction(BooleanFunction):
    name = "not"
    arity = 1

    def output(self, inputs):
        (x,) = inputs
        return 1 - x


class NandFunction(BooleanFunction):
    name = "nand"

    def output(self, inputs):
        x, y = inputs
        return 1 - x * y


class NorFunction(BooleanFunction):
    name = "nor"

    def output(self, inputs):
        x, y = inputs
        return 1 - x - y + x * y


BOOLEAN_FUNCTIONS = {
    cls.name: cls
    for cls in (AndFunction, OrFunction, XorFunction, NotFunction, NandFunction, NorFunction)
}


@dataclass
class BooleanOpInput:
    inputs: List[Variable]


@dataclass
class BooleanOpResult:
    output: Variable


class BooleanOpComponent(PlonkComponent):
    """입력 arity개 + 출력 1개를 한 행에 두는 불리언 연산 컴포넌트."""

    rows_amount = 1

    def __init__(self, witnesses, function):
        self.function = function
        super().__init__(witnesses, manifest=self.get_manifest(function.arity))

    @classmethod
    def get_manifest(cls, arity=2):
        return ComponentManifest(ManifestSingleValue(arity + 1))

    def gate_constraints(self):
        witnesses = [self.var(i) for i in range(self.function.arity + 1)]
        return [[self.function.constraint(witnesses)]]

    def _check_input(self, instance_input):
        ensure(len(instance_input.inputs) == self.function.arity,
               "%s: 입력 변수 %d개가 필요합니다 (받은 수 %d)",
               self.function.name, self.function.arity, len(instance_input.inputs))

    def generate_assignments(self, table, instance_input, start_row):
        self._check_input(instance_input)
        values = [var_value(table, v) for v in instance_input.inputs]
        for i, value in enumerate(values):
            table.set_witness(self.W(i), start_row, value)
        table.set_witness(self.W(self.function.arity), start_row,
                          self.function.evaluate(values))
        return self.result(start_row)

    def generate_copy_constraints(self, circuit, table, instance_input, start_row):
        self._check_input(instance_input)
        for i, v in enumerate(instance_input.inputs):
            circuit.add_copy_constraint(self.var(i, start_row, False), v)

    def result(self, start_row):
        return BooleanOpResult(self.var(self.function.arity, start_row, False))
