"""
논리곱 플래그 (Logic AND Flag)
==============================

f = (x · y ≠ 0) 를 계산한다. 역원 규약 inverse(0) = 0 위에서 건전하다.

**값**:
  p = x · y
  v = inverse(p)        (p = 0 이면 0)
  f = v · p             (p ≠ 0 이면 1, 아니면 0)

**제약식 (하나의 게이트)**:
  p - x·y        = 0
  f·(f - 1)      = 0     f는 불리언
  f - p·v        = 0
  (v - p)·(f - 1) = 0    f = 0 이면 v = p, 따라서 p·v = p² = 0 → p = 0

**레이아웃 (witness 열 수 w ∈ [2, 5])**:
  x, y, p, v, f를 행 우선으로 w열에 채운다 (인덱스 i·w + j).
  f는 마지막 행의 마지막 열 W(w-1)에도 기록된다 (출력 위치).

  | w | 행 수 | 셀렉터 행   | 게이트 오프셋 |
  |---|-------|-------------|---------------|
  | 2 |   3   | start + 1   | -1            |
  | 3 |   2   | start       |  0            |
  | 4 |   2   | start       |  0            |
  | 5 |   1   | start       |  0            |

  w = 2일 때는 셀렉터를 가운데 행에 두어 회전 -1, 0, +1만 쓴다.
"""

from dataclasses import dataclass

from arith.plonk.assignment import var_value
from arith.plonk.component import PlonkComponent
from arith.plonk.field import inverse
from arith.plonk.manifest import ComponentManifest, ManifestRange
from arith.plonk.variable import Variable

VALUES_AMOUNT = 5


@dataclass
class LogicAndFlagInput:
    x: Variable
    y: Variable


@dataclass
class LogicAndFlagResult:
    flag: Variable


class LogicAndFlag(PlonkComponent):

    def __init__(self, witnesses, constants=(), public_inputs=()):
        super().__init__(witnesses, constants, public_inputs)
        w = self.witness_amount
        if w == 2:
            self.rows_amount = 3
        elif w < 5:
            self.rows_amount = 2
        else:
            self.rows_amount = 1
        self.gate_offset = -1 if self.rows_amount == 3 else 0

    @classmethod
    def get_manifest(cls):
        return ComponentManifest(ManifestRange(2, 5))

    def _cells(self):
        """값 인덱스 → (로컬 열, 행 오프셋)."""
        w = self.witness_amount
        return [(idx % w, idx // w) for idx in range(VALUES_AMOUNT)]

    def gate_constraints(self):
        x, y, p, v = [
            self.var(j, i + self.gate_offset) for j, i in self._cells()[:4]
        ]
        f = self.var(self.witness_amount - 1, self.gate_offset + self.rows_amount - 1)
        return [[
            p - x * y,
            f * (f - 1),
            f - p * v,
            (v - p) * (f - 1),
        ]]

    def selector_rows(self, start_row):
        if self.rows_amount == 3:
            return [(0, start_row + 1)]
        return [(0, start_row)]

    def generate_assignments(self, table, instance_input, start_row):
        x = var_value(table, instance_input.x)
        y = var_value(table, instance_input.y)
        p = x * y
        v = inverse(p, table.field)
        f = v * p
        values = [x, y, p, v, f]
        for idx, (j, i) in enumerate(self._cells()):
            table.set_witness(self.W(j), start_row + i, values[idx])
        table.set_witness(self.W(self.witness_amount - 1),
                          start_row + self.rows_amount - 1, f)
        return self.result(start_row)

    def generate_copy_constraints(self, circuit, table, instance_input, start_row):
        circuit.add_copy_constraint(self.var(0, start_row, False), instance_input.x)
        circuit.add_copy_constraint(self.var(1, start_row, False), instance_input.y)

    def result(self, start_row):
        return LogicAndFlagResult(
            self.var(self.witness_amount - 1, start_row + self.rows_amount - 1, False)
        )
