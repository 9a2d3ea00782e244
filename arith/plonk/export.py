"""
진단용 덤프 (Diagnostic Export)
===============================

할당 테이블과 제약 시스템을 사람이 읽을 수 있는 텍스트로 내보낸다.
증명 프로토콜의 일부가 아니며, 현재 내용을 그대로 반영하는 것 외에
다른 불변식은 없다.

**테이블 형식**:
  첫 줄 (10진수):
    witnesses_size: W public_inputs_size: P constants_size: C selectors_size: S max_size: M
  이후 행마다 (16진수):
    w_0 w_1 ... | pi_0 ... | c_0 ... | q_0 q_1 ...

  wide=True이면 witness/public input/constant 값을 필드 비트 폭에 맞춰
  ceil(bits / 4)자리로 0을 채운다 (바이트 정렬된 행이 필요한 도구용).
  셀렉터는 한 비트이므로 폭을 맞추지 않는다.
"""

from arith.plonk.field import modulus_bits
from arith.plonk.variable import ColumnType


def _cell(table, kind, index, row):
    if row < table.column_size(kind, index):
        return int(table.read(kind, index, row))
    return 0


def export_table(table, stream, wide=False):
    """테이블을 stream에 쓴다.

    Args:
        table: AssignmentTable
        stream: write()를 가진 텍스트 스트림
        wide: 고정 폭 16진수 출력 여부
    """
    amounts = {kind: table.columns_amount(kind) for kind in ColumnType}
    max_size = table.rows_amount
    stream.write(
        f"witnesses_size: {amounts[ColumnType.WITNESS]} "
        f"public_inputs_size: {amounts[ColumnType.PUBLIC_INPUT]} "
        f"constants_size: {amounts[ColumnType.CONSTANT]} "
        f"selectors_size: {amounts[ColumnType.SELECTOR]} "
        f"max_size: {max_size}\n"
    )

    width = (modulus_bits(table.field) + 3) // 4 if wide else 0
    for row in range(max_size):
        line = ""
        for kind in (ColumnType.WITNESS, ColumnType.PUBLIC_INPUT, ColumnType.CONSTANT):
            for index in range(amounts[kind]):
                line += format(_cell(table, kind, index, row), "x").zfill(width) + " "
            line += "| "
        line += " ".join(
            format(_cell(table, ColumnType.SELECTOR, index, row), "x")
            for index in range(amounts[ColumnType.SELECTOR])
        )
        stream.write(line + "\n")


def export_circuit(circuit, stream):
    """게이트, lookup 게이트, copy constraint 목록을 stream에 쓴다."""
    stream.write(
        f"gates: {circuit.gates_amount} "
        f"lookup_gates: {circuit.lookup_gates_amount} "
        f"selectors: {circuit.selectors_amount} "
        f"copy_constraints: {circuit.copy_constraints_amount}\n"
    )
    for gate in circuit.gates:
        stream.write(f"gate q{gate.selector_index}:\n")
        for constraint in gate.constraints:
            stream.write(f"  {constraint} = 0\n")
    for gate in circuit.lookup_gates:
        stream.write(f"lookup q{gate.selector_index}:\n")
        for constraint in gate.constraints:
            exprs = ", ".join(str(e) for e in constraint.expressions)
            stream.write(f"  ({exprs}) in {constraint.table_id}\n")
    for a, b in circuit.copy_constraints:
        stream.write(f"copy {a} == {b}\n")
