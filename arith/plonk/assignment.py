"""
할당 테이블 (Assignment Table)
==============================

회로의 구체적인 값(witness 생성 결과)을 열(column) 단위로 저장한다.

**열 종류**:
  | 종류          | 내용                         | allocated_rows 갱신 |
  |---------------|------------------------------|---------------------|
  | witness       | Prover만 아는 비공개 값      | O                   |
  | public_input  | Prover/Verifier 공유 입력    | X                   |
  | constant      | 회로 고정 상수               | O                   |
  | selector      | 게이트 on/off (0 또는 1)     | X                   |

  별도로, 산술화되지 않는 private scratch 저장소(정수 인덱스 벡터)를 둔다.

**성장 규칙**:
  - 쓰기(write)는 열을 필요한 만큼 늘리고 빈 칸을 0으로 채운다.
  - 읽기(read)는 절대 저장소를 늘리지 않는다.
  - allocated_rows = 1 + (witness/constant 열에 쓴 최대 행 인덱스),
    아무것도 쓰지 않았으면 0. 단조 증가한다.

**경계 검사**:
  모든 읽기/쓰기는 _check_cell 한 곳을 통과한다. 선언된 열 수를 넘는
  인덱스, 기록되지 않은 셀 읽기, 음수 행은 ContractViolation이다.

사용 예시:
    >>> table = AssignmentTable(ArithmetizationParams(3, 1, 0))
    >>> table.set_witness(2, 4, FR(7))
    >>> table.allocated_rows      # 5
    >>> table.witness(2, 0)       # FR(0)
"""

from dataclasses import dataclass

from arith.plonk.field import FR
from arith.plonk.utils import ensure
from arith.plonk.variable import ColumnType, Variable, ScratchVariable


@dataclass(frozen=True)
class ArithmetizationParams:
    """빌드 세션의 열 구성.

    witness/public_input/constant 열 수는 세션 시작 시 고정된다.
    selector 열 수는 초기값이며 셀렉터 할당에 따라 늘어날 수 있다.
    """
    witness_columns: int
    public_input_columns: int = 0
    constant_columns: int = 0
    selector_columns: int = 0

    def columns_amount(self, kind):
        return {
            ColumnType.WITNESS: self.witness_columns,
            ColumnType.PUBLIC_INPUT: self.public_input_columns,
            ColumnType.CONSTANT: self.constant_columns,
            ColumnType.SELECTOR: self.selector_columns,
        }[kind]


class AssignmentTable:
    """열 지향 할당 테이블.

    속성:
        params: ArithmetizationParams
        field: 셀 값의 필드 클래스 (기본값 FR)
        allocated_rows: witness/constant 기준 사용된 행 수
    """

    def __init__(self, params, field=FR):
        self.params = params
        self.field = field
        self._columns = {
            kind: [[] for _ in range(params.columns_amount(kind))]
            for kind in ColumnType
        }
        self._allocated_rows = 0
        self._scratch = []

    # ── 경계 검사 ──

    def _check_cell(self, kind, index, row, reading):
        columns = self._columns[kind]
        ensure(0 <= index < len(columns),
               "%s 열 인덱스 범위 초과: %d (선언된 열 수 %d)",
               kind.name.lower(), index, len(columns))
        ensure(row >= 0, "음수 행 인덱스: %d", row)
        if reading:
            ensure(row < len(columns[index]),
                   "기록되지 않은 셀 읽기: %s[%d] 행 %d (열 길이 %d)",
                   kind.name.lower(), index, row, len(columns[index]))
        return columns[index]

    # ── 일반 읽기/쓰기 ──

    def read(self, kind, index, row):
        """셀 값을 읽는다. 저장소를 늘리지 않는다."""
        return self._check_cell(kind, index, row, reading=True)[row]

    def write(self, kind, index, row, value):
        """셀 값을 쓴다. 열이 짧으면 0으로 채워 늘린다."""
        column = self._check_cell(kind, index, row, reading=False)
        if len(column) <= row:
            column.extend([self.field(0)] * (row + 1 - len(column)))
        column[row] = value if isinstance(value, self.field) else self.field(value)
        if kind in (ColumnType.WITNESS, ColumnType.CONSTANT):
            self._allocated_rows = max(self._allocated_rows, row + 1)

    # ── 종류별 단축 메서드 ──

    def witness(self, index, row):
        return self.read(ColumnType.WITNESS, index, row)

    def set_witness(self, index, row, value):
        self.write(ColumnType.WITNESS, index, row, value)

    def public_input(self, index, row):
        return self.read(ColumnType.PUBLIC_INPUT, index, row)

    def set_public_input(self, index, row, value):
        self.write(ColumnType.PUBLIC_INPUT, index, row, value)

    def constant(self, index, row):
        return self.read(ColumnType.CONSTANT, index, row)

    def set_constant(self, index, row, value):
        self.write(ColumnType.CONSTANT, index, row, value)

    def selector(self, index, row):
        return self.read(ColumnType.SELECTOR, index, row)

    def enable_selector(self, index, row):
        """selector[index][row] = 1."""
        self.write(ColumnType.SELECTOR, index, row, self.field(1))

    def enable_selectors(self, index, begin_row, end_row, step=1):
        """begin_row부터 end_row까지(포함) step 간격으로 셀렉터를 켠다."""
        ensure(step > 0, "step은 양수여야 합니다: %d", step)
        for row in range(begin_row, end_row + 1, step):
            self.enable_selector(index, row)

    def reserve_selectors(self, count):
        """셀렉터 열 수를 count까지 늘린다. 줄이지는 않는다."""
        selectors = self._columns[ColumnType.SELECTOR]
        while len(selectors) < count:
            selectors.append([])

    # ── private scratch 저장소 ──

    def scratch(self, index):
        ensure(0 <= index < len(self._scratch),
               "스크래치 인덱스 범위 초과: %d (크기 %d)", index, len(self._scratch))
        return self._scratch[index]

    def set_scratch(self, index, value):
        ensure(index >= 0, "음수 스크래치 인덱스: %d", index)
        if len(self._scratch) <= index:
            self.resize_scratch(index + 1)
        self._scratch[index] = value if isinstance(value, self.field) else self.field(value)

    def resize_scratch(self, size):
        ensure(size >= 0, "음수 스크래치 크기: %d", size)
        if size < len(self._scratch):
            del self._scratch[size:]
        else:
            self._scratch.extend([self.field(0)] * (size - len(self._scratch)))

    def clear_scratch(self):
        self._scratch.clear()

    @property
    def scratch_size(self):
        return len(self._scratch)

    # ── 메타데이터 ──

    @property
    def allocated_rows(self):
        return self._allocated_rows

    @property
    def witnesses_amount(self):
        return len(self._columns[ColumnType.WITNESS])

    @property
    def public_inputs_amount(self):
        return len(self._columns[ColumnType.PUBLIC_INPUT])

    @property
    def constants_amount(self):
        return len(self._columns[ColumnType.CONSTANT])

    @property
    def selectors_amount(self):
        return len(self._columns[ColumnType.SELECTOR])

    def columns_amount(self, kind):
        return len(self._columns[kind])

    def column_size(self, kind, index):
        return len(self._check_cell(kind, index, 0, reading=False))

    def column(self, kind, index):
        """열 복사본."""
        return list(self._check_cell(kind, index, 0, reading=False))

    @property
    def rows_amount(self):
        """가장 긴 열의 길이 (모든 종류 포함)."""
        return max(
            (len(col) for columns in self._columns.values() for col in columns),
            default=0,
        )


def var_value(table, var):
    """변수가 가리키는 값을 읽는다.

    모든 게이트 검사, copy constraint 검사, 컴포넌트 입력 읽기가 이 함수를 거친다.

    Args:
        table: AssignmentTable
        var: 절대 Variable 또는 ScratchVariable

    Returns:
        필드 원소
    """
    if isinstance(var, ScratchVariable):
        return table.scratch(var.index)
    ensure(isinstance(var, Variable), "Variable이 아닙니다: %r", var)
    ensure(not var.relative, "상대 변수는 게이트 밖에서 읽을 수 없습니다: %s", var)
    return table.read(var.type, var.index, var.rotation)
