"""
산술화 데모: 컴포넌트 조합
==========================

이 스크립트는 공개 입력 x, y로부터 회로를 조립하는 전체 흐름을 시연한다.

실행:
    python -m arith.plonk.example

흐름:
    1. 공개 입력 배치 (PI0: x, y)
    2. flag1 = (x·y ≠ 0)             LogicAndFlag
    3. flag2 = (y·flag1 ≠ 0)         LogicAndFlag (같은 셀렉터 재사용)
    4. both  = flag1 AND flag2       BooleanOp
    5. diff  = flag1 XOR both        BooleanOp
    6. out   = diff ? x : y          Select
    7. out < 2^8                     RangeCheck (lookup)
    8. 만족성 검사, 테이블 덤프
"""

import io
from typing import Dict, NamedTuple

from arith.plonk.assignment import ArithmetizationParams, AssignmentTable
from arith.plonk.checker import check_all
from arith.plonk.circuit import Circuit
from arith.plonk.components import (
    AndFunction,
    BooleanOpComponent,
    BooleanOpInput,
    LogicAndFlag,
    LogicAndFlagInput,
    RangeCheck,
    RangeCheckInput,
    Select,
    SelectInput,
    XorFunction,
)
from arith.plonk.export import export_table
from arith.plonk.field import FR
from arith.plonk.lookup import LookupTableRegistry
from arith.plonk.variable import PI

EXAMPLE_PARAMS = ArithmetizationParams(witness_columns=4, public_input_columns=1)


class ExampleCircuit(NamedTuple):
    circuit: Circuit
    table: AssignmentTable
    registry: LookupTableRegistry
    results: Dict[str, object]


def _place(component, circuit, table, instance_input, row):
    """Prover 흐름: 할당 후 회로 생성. 두 결과는 같은 위치를 가리킨다."""
    result = component.generate_assignments(table, instance_input, row)
    component.generate_circuit(circuit, table, instance_input, row)
    return result, row + component.rows_amount


def build_example_circuit(x, y, params=EXAMPLE_PARAMS):
    """데모 회로를 조립한다.

    Args:
        x, y: 공개 입력 (정수 또는 FR)
        params: 열 구성 (witness 4열, public input 1열 이상)

    Returns:
        ExampleCircuit
    """
    table = AssignmentTable(params)
    circuit = Circuit(params)
    registry = LookupTableRegistry()

    table.set_public_input(0, 0, FR(x))
    table.set_public_input(0, 1, FR(y))
    x_var = PI(0, 0, False)
    y_var = PI(0, 1, False)

    results = {}
    row = 0

    flag = LogicAndFlag([0, 1, 2])
    results["flag1"], row = _place(
        flag, circuit, table, LogicAndFlagInput(x_var, y_var), row)
    results["flag2"], row = _place(
        flag, circuit, table, LogicAndFlagInput(y_var, results["flag1"].flag), row)

    both = BooleanOpComponent([0, 1, 2], AndFunction())
    results["both"], row = _place(
        both, circuit, table,
        BooleanOpInput([results["flag1"].flag, results["flag2"].flag]), row)

    diff = BooleanOpComponent([0, 1, 2], XorFunction())
    results["diff"], row = _place(
        diff, circuit, table,
        BooleanOpInput([results["flag1"].flag, results["both"].output]), row)

    select = Select([0, 1, 2, 3])
    results["out"], row = _place(
        select, circuit, table,
        SelectInput(results["diff"].output, x_var, y_var), row)

    range_check = RangeCheck([0], registry, bits=8)
    results["range"], row = _place(
        range_check, circuit, table, RangeCheckInput(results["out"].output), row)

    return ExampleCircuit(circuit, table, registry, results)


def main():
    print("=" * 60)
    print("  PLONK 산술화 데모")
    print("  회로: flag = (x·y ≠ 0) → AND/XOR → select → range check")
    print("=" * 60)

    for x, y in ((3, 5), (0, 5)):
        print(f"\n[입력] x = {x}, y = {y}")
        example = build_example_circuit(x, y)
        circuit, table = example.circuit, example.table

        print(f"    사용된 행 수: {table.allocated_rows}")
        print(f"    셀렉터 수: {circuit.selectors_amount}")
        print(f"    게이트 수: {circuit.gates_amount}")
        print(f"    lookup 게이트 수: {circuit.lookup_gates_amount}")
        print(f"    배선 복사 제약 수: {circuit.copy_constraints_amount}")

        print("\n    게이트 제약:")
        for gate in circuit.gates:
            for constraint in gate.constraints:
                print(f"      q{gate.selector_index}: {constraint} = 0")

        print("\n    결과:")
        for name, result in example.results.items():
            (var,) = vars(result).values()
            print(f"      {name:6s} = {var} → {int(table.read(var.type, var.index, var.rotation))}")

        violations = check_all(circuit, table)
        print(f"\n    만족성 검사: {'성공 ✓' if not violations else '실패 ✗'}")
        for violation in violations:
            print(f"      {violation}")

    print("\n[테이블 덤프] x = 3, y = 5")
    stream = io.StringIO()
    export_table(build_example_circuit(3, 5).table, stream)
    print(stream.getvalue())


if __name__ == "__main__":
    main()
