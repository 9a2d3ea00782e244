"""
만족성 검사 (Satisfiability Checker)
====================================

완성된 (AssignmentTable, Circuit) 쌍이 만족 가능한 할당인지 직접 확인한다.
증명 프로토콜의 일부가 아니라, 테스트와 디버깅용 진단 도구다.

  1. 게이트: 셀렉터가 켜진 모든 행에서 모든 제약식 = 0
  2. copy constraint: var_value(a) == var_value(b)
  3. lookup 게이트: 셀렉터가 켜진 행의 값 튜플 ∈ 서브테이블

    >>> is_satisfied(circuit, table)    # True / False
    >>> check_gates(circuit, table)     # [Violation(...), ...]
"""

from typing import NamedTuple, Optional

from arith.plonk.assignment import var_value
from arith.plonk.variable import ColumnType


class Violation(NamedTuple):
    """만족되지 않은 제약 하나.

    kind: "gate", "copy", "lookup"
    index: 게이트/copy constraint/lookup 게이트 인덱스
    constraint: 게이트 안의 제약 인덱스 (copy는 None)
    row: 활성 행 (copy는 None)
    """
    kind: str
    index: int
    constraint: Optional[int]
    row: Optional[int]


def enabled_rows(table, selector_index):
    """셀렉터가 1인 행 인덱스 리스트."""
    if selector_index >= table.selectors_amount:
        return []
    one = table.field(1)
    column = table.column(ColumnType.SELECTOR, selector_index)
    return [row for row, value in enumerate(column) if value == one]


def check_gates(circuit, table):
    violations = []
    zero = table.field(0)
    for gate_index, gate in enumerate(circuit.gates):
        for row in enabled_rows(table, gate.selector_index):
            for j, constraint in enumerate(gate.constraints):
                if constraint.evaluate(table, row) != zero:
                    violations.append(Violation("gate", gate_index, j, row))
    return violations


def check_copy_constraints(circuit, table):
    violations = []
    for index, (a, b) in enumerate(circuit.copy_constraints):
        if var_value(table, a) != var_value(table, b):
            violations.append(Violation("copy", index, None, None))
    return violations


def check_lookup_gates(circuit, table, registry=None):
    """lookup 게이트 검사.

    테이블 정의는 circuit.lookup_tables에서 찾고, 없으면 registry에서 찾는다.
    """
    violations = []
    for gate_index, gate in enumerate(circuit.lookup_gates):
        for row in enabled_rows(table, gate.selector_index):
            for j, constraint in enumerate(gate.constraints):
                name, _, subtable = constraint.table_id.partition("/")
                definition = circuit.lookup_tables.get(name)
                if definition is None and registry is not None:
                    definition = registry.get(name)
                if definition is None:
                    violations.append(Violation("lookup", gate_index, j, row))
                    continue
                definition.generate()
                if not definition.contains(subtable, constraint.evaluate(table, row)):
                    violations.append(Violation("lookup", gate_index, j, row))
    return violations


def check_all(circuit, table, registry=None):
    return (check_gates(circuit, table)
            + check_copy_constraints(circuit, table)
            + check_lookup_gates(circuit, table, registry))


def is_satisfied(circuit, table, registry=None):
    return not check_all(circuit, table, registry)
