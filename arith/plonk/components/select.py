"""
선택 (Select): z = c ? x : y
============================

  | W0 | W1 | W2 | W3 |
  |----|----|----|----|
  | c  | x  | y  | z  |

제약식:
  c·(x - y) + y - z = 0
  c·(c - 1)         = 0     c는 불리언
"""

from dataclasses import dataclass

from arith.plonk.assignment import var_value
from arith.plonk.component import PlonkComponent
from arith.plonk.manifest import ComponentManifest, ManifestSingleValue
from arith.plonk.utils import ensure
from arith.plonk.variable import Variable


@dataclass
class SelectInput:
    condition: Variable
    x: Variable
    y: Variable


@dataclass
class SelectResult:
    output: Variable


class Select(PlonkComponent):

    rows_amount = 1

    @classmethod
    def get_manifest(cls):
        return ComponentManifest(ManifestSingleValue(4))

    def gate_constraints(self):
        c, x, y, z = (self.var(i) for i in range(4))
        return [[c * (x - y) + y - z, c * (c - 1)]]

    def _inputs(self, instance_input):
        return [instance_input.condition, instance_input.x, instance_input.y]

    def generate_assignments(self, table, instance_input, start_row):
        c, x, y = (var_value(table, v) for v in self._inputs(instance_input))
        ensure(int(c) in (0, 1), "select 조건은 0 또는 1이어야 합니다: %d", int(c))
        z = x if int(c) == 1 else y
        for i, value in enumerate((c, x, y, z)):
            table.set_witness(self.W(i), start_row, value)
        return self.result(start_row)

    def generate_copy_constraints(self, circuit, table, instance_input, start_row):
        for i, v in enumerate(self._inputs(instance_input)):
            circuit.add_copy_constraint(self.var(i, start_row, False), v)

    def result(self, start_row):
        return SelectResult(self.var(3, start_row, False))
