"""
불리언 연산 컴포넌트 테스트.
"""

import pytest
from arith.plonk.assignment import var_value
from arith.plonk.checker import check_gates, is_satisfied
from arith.plonk.components import (
    BOOLEAN_FUNCTIONS,
    AndFunction,
    BooleanOpComponent,
    BooleanOpInput,
    NotFunction,
    OrFunction,
    XorFunction,
)
from arith.plonk.field import FR
from arith.plonk.utils import ContractViolation
from arith.plonk.variable import W, PI


TRUTH_TABLES = {
    "and": {(0, 0): 0, (0, 1): 0, (1, 0): 0, (1, 1): 1},
    "or": {(0, 0): 0, (0, 1): 1, (1, 0): 1, (1, 1): 1},
    "xor": {(0, 0): 0, (0, 1): 1, (1, 0): 1, (1, 1): 0},
    "nand": {(0, 0): 1, (0, 1): 1, (1, 0): 1, (1, 1): 0},
    "nor": {(0, 0): 1, (0, 1): 0, (1, 0): 0, (1, 1): 0},
    "not": {(0,): 1, (1,): 0},
}


class TestBooleanFunctions:

    @pytest.mark.parametrize("name", sorted(TRUTH_TABLES))
    def test_truth_table(self, name):
        function = BOOLEAN_FUNCTIONS[name]()
        for inputs, expected in TRUTH_TABLES[name].items():
            assert function.evaluate([FR(b) for b in inputs]) == expected

    @pytest.mark.parametrize("name", sorted(TRUTH_TABLES))
    def test_constraint_vanishes_on_truth_table(self, name):
        function = BOOLEAN_FUNCTIONS[name]()
        witnesses = [W(i) for i in range(function.arity + 1)]
        constraint = function.constraint(witnesses)
        for inputs, expected in TRUTH_TABLES[name].items():
            values = dict(zip(witnesses, [FR(b) for b in inputs] + [FR(expected)]))
            assert constraint.evaluate(values.__getitem__) == FR(0)
            values[witnesses[-1]] = FR(1 - expected)
            assert constraint.evaluate(values.__getitem__) != FR(0)

    def test_non_boolean_input_rejected(self):
        with pytest.raises(ContractViolation):
            AndFunction().evaluate([FR(2), FR(1)])

    def test_arity(self):
        assert NotFunction().arity == 1
        assert OrFunction().arity == 2


class TestBooleanOpComponent:

    def test_manifest_is_arity_plus_one(self):
        assert BooleanOpComponent.get_manifest(2).witness_amounts() == [3]
        with pytest.raises(ContractViolation):
            BooleanOpComponent([0, 1], AndFunction())
        BooleanOpComponent([0, 1], NotFunction())

    def test_xor_assignment_and_circuit(self, circuit, table):
        table.set_public_input(0, 0, FR(1))
        table.set_public_input(0, 1, FR(1))
        op = BooleanOpComponent([0, 1, 2], XorFunction())
        inp = BooleanOpInput([PI(0, 0, False), PI(0, 1, False)])
        result = op.generate_assignments(table, inp, 0)
        op.generate_circuit(circuit, table, inp, 0)

        assert result.output == W(2, 0, False)
        assert var_value(table, result.output) == FR(0)
        assert circuit.copy_constraints_amount == 2
        assert is_satisfied(circuit, table)

    def test_different_functions_get_different_selectors(self, circuit, table):
        table.set_public_input(0, 0, FR(1))
        table.set_public_input(0, 1, FR(0))
        inp = BooleanOpInput([PI(0, 0, False), PI(0, 1, False)])
        for row, function in enumerate((AndFunction(), OrFunction(), AndFunction())):
            op = BooleanOpComponent([0, 1, 2], function)
            op.generate_assignments(table, inp, row)
            op.generate_circuit(circuit, table, inp, row)
        assert circuit.selectors_amount == 2
        assert circuit.gates_amount == 2
        assert is_satisfied(circuit, table)

    def test_wrong_output_detected(self, circuit, table):
        table.set_public_input(0, 0, FR(1))
        table.set_public_input(0, 1, FR(1))
        op = BooleanOpComponent([0, 1, 2], AndFunction())
        inp = BooleanOpInput([PI(0, 0, False), PI(0, 1, False)])
        op.generate_assignments(table, inp, 0)
        op.generate_circuit(circuit, table, inp, 0)
        table.set_witness(2, 0, FR(0))
        violations = check_gates(circuit, table)
        assert [(v.kind, v.row) for v in violations] == [("gate", 0)]

    def test_input_count_checked(self, circuit, table):
        op = BooleanOpComponent([0, 1, 2], AndFunction())
        with pytest.raises(ContractViolation):
            op.generate_copy_constraints(circuit, table, BooleanOpInput([PI(0, 0, False)]), 0)
