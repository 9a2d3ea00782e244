"""
Circuit, SelectorAllocator 테스트.

테스트 대상:
  - add_constraint / add_gate 검증
  - copy constraint 검증
  - lookup 제약/게이트
  - 셀렉터 할당: 중복 제거, 추가 전용, arity
"""

import pytest
from arith.plonk.assignment import ArithmetizationParams
from arith.plonk.circuit import Circuit, Constraint, Gate, LookupGate
from arith.plonk.field import FR
from arith.plonk.lookup import RangeTable
from arith.plonk.selector import GateShape, SelectorAllocator
from arith.plonk.utils import ContractViolation
from arith.plonk.variable import ColumnType, ScratchVariable, Variable, W, PI


def mul_shape():
    x, y, z = W(0), W(1), W(2)
    return GateShape.of([[z - x * y]])


# ─────────────────────────────────────────────────────────────────────
# 게이트
# ─────────────────────────────────────────────────────────────────────

class TestGates:

    def test_add_gate_returns_index(self, circuit):
        s = circuit.allocate_selector(mul_shape())
        index = circuit.add_gate(s, [circuit.add_constraint(W(2) - W(0) * W(1))])
        assert index == 0
        assert circuit.gates_amount == 1
        assert circuit.gate_for_selector(s) is circuit.gates[0]

    def test_add_gate_accepts_expressions(self, circuit):
        s = circuit.allocate_selector(mul_shape())
        circuit.add_gate(s, [W(2) - W(0) * W(1)])
        assert isinstance(circuit.gates[0].constraints[0], Constraint)

    def test_unallocated_selector_rejected(self, circuit):
        with pytest.raises(ContractViolation):
            circuit.add_gate(0, [W(0)])

    def test_selector_backs_one_gate(self, circuit):
        s = circuit.allocate_selector(mul_shape())
        circuit.add_gate(s, [W(0)])
        with pytest.raises(ContractViolation):
            circuit.add_gate(s, [W(1)])

    def test_empty_gate_rejected(self, circuit):
        s = circuit.allocate_selector(mul_shape())
        with pytest.raises(ContractViolation):
            circuit.add_gate(s, [])

    def test_constraint_column_bounds(self, circuit):
        with pytest.raises(ContractViolation):
            circuit.add_constraint(W(4) - W(0))
        with pytest.raises(ContractViolation):
            circuit.add_constraint(PI(1))

    def test_constraint_rejects_absolute_and_selector(self, circuit):
        with pytest.raises(ContractViolation):
            circuit.add_constraint(W(0, 1, False))
        with pytest.raises(ContractViolation):
            circuit.add_constraint(Variable(0, 0, True, ColumnType.SELECTOR) * W(0))

    def test_gate_check(self, circuit, table):
        """셀렉터 행 r에서 상대 회전 +1은 r+1행을 읽는다."""
        gate = Gate(0, [circuit.add_constraint(W(1, 1) - W(0) * W(0))])
        table.set_witness(0, 3, FR(4))
        table.set_witness(1, 4, FR(16))
        table.set_witness(1, 3, FR(0))
        assert gate.check(table, 3) is True
        table.set_witness(1, 4, FR(15))
        assert gate.check(table, 3) is False


# ─────────────────────────────────────────────────────────────────────
# copy constraint
# ─────────────────────────────────────────────────────────────────────

class TestCopyConstraints:

    def test_add_copy_constraint(self, circuit):
        circuit.add_copy_constraint(W(0, 3, False), PI(0, 0, False))
        circuit.add_copy_constraint((W(1, 0, False), W(2, 1, False)))
        assert circuit.copy_constraints_amount == 2
        assert circuit.copy_constraints[0] == (W(0, 3, False), PI(0, 0, False))

    def test_relative_rejected(self, circuit):
        with pytest.raises(ContractViolation):
            circuit.add_copy_constraint(W(0), W(1, 0, False))

    def test_out_of_bounds_rejected(self, circuit):
        with pytest.raises(ContractViolation):
            circuit.add_copy_constraint(W(9, 0, False), W(1, 0, False))

    def test_scratch_rejected(self, circuit):
        with pytest.raises(ContractViolation):
            circuit.add_copy_constraint(ScratchVariable(0), W(1, 0, False))

    def test_selector_rejected(self, circuit):
        with pytest.raises(ContractViolation):
            circuit.add_copy_constraint(
                Variable(0, 0, False, ColumnType.SELECTOR), W(1, 0, False))


# ─────────────────────────────────────────────────────────────────────
# lookup
# ─────────────────────────────────────────────────────────────────────

class TestLookupGates:

    def test_add_lookup_gate(self, circuit):
        shape = GateShape.of([], [[("range_8bit_table/full", [W(0)])]])
        s = circuit.allocate_selector(shape)
        constraint = circuit.add_lookup_constraint("range_8bit_table/full", [W(0)])
        assert circuit.add_lookup_gate(s, [constraint]) == 0
        assert isinstance(circuit.gate_for_selector(s), LookupGate)

    def test_table_id_format(self, circuit):
        with pytest.raises(ContractViolation):
            circuit.add_lookup_constraint("range_8bit_table", [W(0)])

    def test_register_lookup_table_by_reference(self, circuit):
        table = RangeTable(4)
        circuit.register_lookup_table(table)
        circuit.register_lookup_table(table)
        assert circuit.lookup_tables == {"range_4bit_table": table}
        with pytest.raises(ContractViolation):
            circuit.register_lookup_table(RangeTable(4))


# ─────────────────────────────────────────────────────────────────────
# 셀렉터 할당
# ─────────────────────────────────────────────────────────────────────

class TestSelectorAllocator:

    def test_find_then_allocate(self):
        allocator = SelectorAllocator()
        assert allocator.find(mul_shape()) is None
        assert allocator.allocate(mul_shape()) == 0
        assert allocator.find(mul_shape()) == 0

    def test_same_shape_built_differently(self):
        x, y, z = W(0), W(1), W(2)
        allocator = SelectorAllocator()
        allocator.allocate(GateShape.of([[z - x * y]]))
        assert allocator.find(GateShape.of([[-(y * x) + z]])) == 0

    def test_duplicate_allocation_rejected(self):
        allocator = SelectorAllocator()
        allocator.allocate(mul_shape())
        with pytest.raises(ContractViolation):
            allocator.allocate(mul_shape())

    def test_arity_reserves_consecutive(self):
        allocator = SelectorAllocator()
        two = GateShape.of([[W(0)], [W(1)]])
        assert two.arity == 2
        assert allocator.allocate(two) == 0
        assert allocator.allocate(mul_shape()) == 2
        assert allocator.selectors_amount == 3
        assert len(allocator) == 2

    def test_initial_index(self):
        allocator = SelectorAllocator(initial_index=3)
        assert allocator.allocate(mul_shape()) == 3

    def test_circuit_respects_declared_selectors(self):
        circuit = Circuit(ArithmetizationParams(3, selector_columns=2))
        assert circuit.allocate_selector(mul_shape()) == 2
        assert circuit.selectors_amount == 3

    def test_selector_shapes_in_allocation_order(self, circuit):
        first = mul_shape()
        second = GateShape.of([[W(0) * (W(0) - 1)]])
        circuit.allocate_selector(first)
        circuit.allocate_selector(second)
        assert circuit.selector_shapes() == [(first, 0), (second, 1)]
