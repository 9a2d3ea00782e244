"""
AssignmentTable 테스트.

테스트 대상:
  - 읽기/쓰기, 0 채우기, 경계 검사
  - allocated_rows 규칙
  - 셀렉터 활성화, reserve_selectors
  - private scratch 저장소
  - var_value
"""

import pytest
from arith.plonk.assignment import ArithmetizationParams, AssignmentTable, var_value
from arith.plonk.field import FR
from arith.plonk.utils import ContractViolation
from arith.plonk.variable import ColumnType, ScratchVariable, Variable, W, PI


class TestReadWrite:

    def test_write_grows_and_zero_fills(self):
        """3열 테이블에서 2번 열 4행에 쓰면 allocated_rows = 5, 빈 칸은 0."""
        table = AssignmentTable(ArithmetizationParams(3))
        table.set_witness(2, 4, FR(7))
        assert table.allocated_rows == 5
        assert table.witness(2, 4) == FR(7)
        assert table.witness(2, 0) == FR(0)
        assert table.column_size(ColumnType.WITNESS, 2) == 5

    def test_int_value_converted(self, table):
        table.set_witness(0, 0, 9)
        assert table.witness(0, 0) == FR(9)
        assert isinstance(table.witness(0, 0), FR)

    def test_read_does_not_grow(self, table):
        table.set_witness(0, 1, FR(1))
        with pytest.raises(ContractViolation):
            table.witness(0, 2)
        assert table.column_size(ColumnType.WITNESS, 0) == 2

    def test_unwritten_column_read_fails(self, table):
        with pytest.raises(ContractViolation):
            table.witness(1, 0)

    def test_column_index_out_of_range(self, table):
        with pytest.raises(ContractViolation):
            table.set_witness(4, 0, FR(1))
        with pytest.raises(ContractViolation):
            table.set_public_input(1, 0, FR(1))

    def test_negative_row(self, table):
        with pytest.raises(ContractViolation):
            table.set_witness(0, -1, FR(1))

    def test_column_is_copy(self, table):
        table.set_constant(0, 0, FR(3))
        column = table.column(ColumnType.CONSTANT, 0)
        column[0] = FR(4)
        assert table.constant(0, 0) == FR(3)

    def test_amounts(self, table):
        assert table.witnesses_amount == 4
        assert table.public_inputs_amount == 1
        assert table.constants_amount == 1
        assert table.selectors_amount == 0


class TestAllocatedRows:

    def test_empty_table(self, table):
        assert table.allocated_rows == 0
        assert table.rows_amount == 0

    def test_constant_write_counts(self, table):
        table.set_constant(0, 6, FR(1))
        assert table.allocated_rows == 7

    def test_public_input_and_selector_do_not_count(self, table):
        table.set_public_input(0, 9, FR(1))
        table.reserve_selectors(1)
        table.enable_selector(0, 12)
        assert table.allocated_rows == 0
        assert table.rows_amount == 13

    def test_monotone(self, table):
        table.set_witness(0, 5, FR(1))
        table.set_witness(0, 2, FR(1))
        assert table.allocated_rows == 6


class TestSelectors:

    def test_enable_requires_reserved_column(self, table):
        with pytest.raises(ContractViolation):
            table.enable_selector(0, 0)

    def test_reserve_never_shrinks(self, table):
        table.reserve_selectors(3)
        table.reserve_selectors(1)
        assert table.selectors_amount == 3

    def test_enable_selector(self, table):
        table.reserve_selectors(1)
        table.enable_selector(0, 2)
        assert table.selector(0, 2) == FR(1)
        assert table.column(ColumnType.SELECTOR, 0) == [FR(0), FR(0), FR(1)]

    def test_enable_selectors_inclusive_with_step(self, table):
        table.reserve_selectors(1)
        table.enable_selectors(0, 1, 5, 2)
        assert [int(v) for v in table.column(ColumnType.SELECTOR, 0)] == [0, 1, 0, 1, 0, 1]

    def test_initial_selector_columns(self):
        table = AssignmentTable(ArithmetizationParams(1, selector_columns=2))
        assert table.selectors_amount == 2


class TestScratch:

    def test_scratch_independent_of_witness(self, table):
        """scratch 10번 칸 쓰기는 witness 열에 영향이 없다."""
        table.set_witness(0, 0, FR(1))
        table.set_scratch(10, FR(42))
        assert table.scratch(10) == FR(42)
        assert table.scratch_size == 11
        assert table.scratch(3) == FR(0)
        assert table.witness(0, 0) == FR(1)
        assert table.allocated_rows == 1
        assert table.column_size(ColumnType.WITNESS, 0) == 1

    def test_resize_and_clear(self, table):
        table.set_scratch(4, FR(1))
        table.resize_scratch(2)
        assert table.scratch_size == 2
        with pytest.raises(ContractViolation):
            table.scratch(4)
        table.clear_scratch()
        assert table.scratch_size == 0


class TestVarValue:

    def test_dispatch_by_kind(self, table):
        table.set_witness(1, 2, FR(5))
        table.set_public_input(0, 0, FR(6))
        table.set_constant(0, 1, FR(7))
        table.set_scratch(0, FR(8))
        assert var_value(table, W(1, 2, False)) == FR(5)
        assert var_value(table, PI(0, 0, False)) == FR(6)
        assert var_value(table, Variable(0, 1, False, ColumnType.CONSTANT)) == FR(7)
        assert var_value(table, ScratchVariable(0)) == FR(8)
        assert table.public_input(0, 0) == FR(6)

    def test_relative_variable_rejected(self, table):
        table.set_witness(0, 0, FR(1))
        with pytest.raises(ContractViolation):
            var_value(table, W(0, 0))

    def test_out_of_bounds(self, table):
        with pytest.raises(ContractViolation):
            var_value(table, W(0, 0, False))
