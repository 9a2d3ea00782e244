"""
범위 검사 (Range Check)
=======================

값 x가 0 ≤ x < 2^bits 임을 lookup 제약 하나로 보인다.

  | W0 |          lookup: (W0) ∈ range_{bits}bit_table/full
  |----|
  | x  |

다항식 게이트는 없고 lookup 게이트 하나만 있다. 테이블 정의는
LookupTableRegistry에서 이름으로 공유하므로 여러 인스턴스가 같은
RangeTable을 참조한다.

    >>> registry = LookupTableRegistry()
    >>> rc = RangeCheck([3], registry, bits=8)
    >>> rc.generate_circuit(circuit, table, RangeCheckInput(x), row)
"""

from dataclasses import dataclass

from arith.plonk.assignment import var_value
from arith.plonk.component import PlonkComponent
from arith.plonk.lookup import RangeTable
from arith.plonk.manifest import ComponentManifest, ManifestSingleValue
from arith.plonk.variable import Variable


@dataclass
class RangeCheckInput:
    x: Variable


@dataclass
class RangeCheckResult:
    value: Variable


class RangeCheck(PlonkComponent):

    rows_amount = 1

    def __init__(self, witnesses, registry, bits=8):
        super().__init__(witnesses)
        self.bits = bits
        self.table = registry.register(RangeTable(bits))

    @classmethod
    def get_manifest(cls):
        return ComponentManifest(ManifestSingleValue(1))

    def gate_constraints(self):
        return []

    def lookup_constraints(self):
        return [[(self.table.full_name(RangeTable.SUBTABLE_NAME), [self.var(0)])]]

    def lookup_tables(self):
        return [self.table]

    def generate_assignments(self, table, instance_input, start_row):
        table.set_witness(self.W(0), start_row, var_value(table, instance_input.x))
        return self.result(start_row)

    def generate_copy_constraints(self, circuit, table, instance_input, start_row):
        circuit.add_copy_constraint(self.var(0, start_row, False), instance_input.x)

    def result(self, start_row):
        return RangeCheckResult(self.var(0, start_row, False))
