"""
데모 회로 통합 테스트: 결정론, 셀렉터 공유, 만족성.
"""

import pytest
from arith.plonk.assignment import var_value
from arith.plonk.checker import check_all, is_satisfied
from arith.plonk.example import build_example_circuit
from arith.plonk.field import FR

from arith_serializers import serialize_circuit, serialize_table


class TestExampleCircuit:

    @pytest.mark.parametrize("x,y,out", [(3, 5, 5), (0, 5, 5), (7, 0, 0)])
    def test_satisfied(self, x, y, out):
        example = build_example_circuit(x, y)
        assert check_all(example.circuit, example.table) == []
        assert var_value(example.table, example.results["out"].output) == FR(out)

    def test_flags(self):
        example = build_example_circuit(3, 5)
        table, results = example.table, example.results
        assert var_value(table, results["flag1"].flag) == FR(1)
        assert var_value(table, results["flag2"].flag) == FR(1)
        assert var_value(table, results["both"].output) == FR(1)
        assert var_value(table, results["diff"].output) == FR(0)

    def test_shape(self):
        """LogicAndFlag 두 인스턴스는 셀렉터 하나를 공유한다."""
        example = build_example_circuit(3, 5)
        circuit, table = example.circuit, example.table
        assert circuit.selectors_amount == 5
        assert circuit.gates_amount == 4
        assert circuit.lookup_gates_amount == 1
        assert circuit.copy_constraints_amount == 12
        assert table.allocated_rows == 8
        assert table.selectors_amount == 5

    def test_out_of_range_output_detected(self):
        example = build_example_circuit(1000, 300)
        violations = check_all(example.circuit, example.table)
        assert [v.kind for v in violations] == ["lookup"]

    def test_two_builds_identical(self):
        first = build_example_circuit(3, 5)
        second = build_example_circuit(3, 5)
        assert serialize_circuit(first.circuit) == serialize_circuit(second.circuit)
        assert serialize_table(first.table) == serialize_table(second.table)

    def test_circuit_independent_of_witness(self):
        """회로 모양은 입력 값에 의존하지 않는다."""
        assert (serialize_circuit(build_example_circuit(3, 5).circuit)
                == serialize_circuit(build_example_circuit(0, 9).circuit))

    def test_tampered_table_fails(self):
        example = build_example_circuit(3, 5)
        flag = example.results["flag1"].flag
        example.table.set_witness(flag.index, flag.rotation, FR(0))
        assert not is_satisfied(example.circuit, example.table)
