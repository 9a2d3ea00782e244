"""
컴포넌트 프로토콜 (Component Protocol)
======================================

독립적으로 작성된 회로 조각(컴포넌트)들이 행, 열, 게이트 정의를
안전하고 결정론적으로 공유하기 위한 4단계 계약.

  ┌─────────────────────────────────────────────────────────────┐
  │  generate_assignments(table, input, start_row) → result     │
  │    witness 값 계산 후 테이블에 기록 (Prover 전용)             │
  ├─────────────────────────────────────────────────────────────┤
  │  generate_gates(circuit, table, input, first_selector)      │
  │    상대 오프셋 제약식을 게이트로 등록                          │
  ├─────────────────────────────────────────────────────────────┤
  │  generate_copy_constraints(circuit, table, input, start_row)│
  │    내부 입력 배선을 호출자가 준 입력 변수에 연결              │
  ├─────────────────────────────────────────────────────────────┤
  │  generate_circuit(circuit, table, input, start_row) → result│
  │    셀렉터 조회/할당 → (처음일 때만) generate_gates             │
  │    → 셀렉터 활성화 → generate_copy_constraints                │
  └─────────────────────────────────────────────────────────────┘

**두 진입점**:
  Prover는 generate_assignments와 generate_circuit을 모두 호출한다.
  회로 모양만 필요한 쪽(예: 검증 키 생성)은 generate_circuit만 호출한다.
  두 진입점이 돌려주는 result는 같은 출력 위치를 가리킨다.

**하위 클래스가 구현할 것**:
  - get_manifest (classmethod)
  - rows_amount
  - generate_assignments
  - gate_constraints (+ 필요하면 lookup_constraints, lookup_tables)
  - generate_copy_constraints
  - result
"""

from arith.plonk.selector import GateShape
from arith.plonk.utils import ensure
from arith.plonk.variable import ColumnType, Variable


class PlonkComponent:
    """PLONK 컴포넌트 기반 클래스.

    속성:
        witnesses: 컴포넌트 로컬 witness 열 → 전역 열 인덱스
        constants: 로컬 constant 열 → 전역 열 인덱스
        public_inputs: 로컬 public input 열 → 전역 열 인덱스
        manifest: ComponentManifest
    """

    rows_amount = 1

    def __init__(self, witnesses, constants=(), public_inputs=(), manifest=None):
        self.witnesses = list(witnesses)
        self.constants = list(constants)
        self.public_inputs = list(public_inputs)
        self.manifest = manifest if manifest is not None else self.get_manifest()
        self.manifest.check(len(self.witnesses), len(self.constants), len(self.public_inputs))

    @classmethod
    def get_manifest(cls):
        raise NotImplementedError

    # ── 열 매핑 ──

    def W(self, i):
        """로컬 witness 열 i의 전역 인덱스."""
        ensure(0 <= i < len(self.witnesses), "로컬 witness 인덱스 범위 초과: %d", i)
        return self.witnesses[i]

    def C(self, i):
        ensure(0 <= i < len(self.constants), "로컬 constant 인덱스 범위 초과: %d", i)
        return self.constants[i]

    def PI(self, i):
        ensure(0 <= i < len(self.public_inputs), "로컬 public input 인덱스 범위 초과: %d", i)
        return self.public_inputs[i]

    @property
    def witness_amount(self):
        return len(self.witnesses)

    def var(self, i, rotation=0, relative=True):
        """로컬 witness 열 i의 변수."""
        return Variable(self.W(i), rotation, relative, ColumnType.WITNESS)

    # ── 게이트 모양 ──

    def gate_constraints(self):
        """게이트별 제약식 리스트: [[Expression, ...], ...]."""
        raise NotImplementedError

    def lookup_constraints(self):
        """lookup 게이트별 제약 리스트: [[(table_id, [Expression, ...]), ...], ...]."""
        return []

    def lookup_tables(self):
        """참조하는 LookupTableDefinition 리스트."""
        return []

    @property
    def gates_amount(self):
        return len(self.gate_constraints()) + len(self.lookup_constraints())

    def gate_shape(self):
        return GateShape.of(self.gate_constraints(), self.lookup_constraints())

    # ── 4단계 ──

    def generate_assignments(self, table, instance_input, start_row):
        raise NotImplementedError

    def generate_gates(self, circuit, table, instance_input, first_selector_index):
        """게이트와 lookup 게이트를 first_selector_index부터 차례로 등록한다."""
        selector = first_selector_index
        for gate in self.gate_constraints():
            circuit.add_gate(selector, [circuit.add_constraint(e) for e in gate])
            selector += 1
        for gate in self.lookup_constraints():
            circuit.add_lookup_gate(selector, [
                circuit.add_lookup_constraint(table_id, exprs)
                for table_id, exprs in gate
            ])
            selector += 1

    def generate_copy_constraints(self, circuit, table, instance_input, start_row):
        raise NotImplementedError

    def selector_rows(self, start_row):
        """활성화할 (셀렉터 오프셋, 행) 쌍. 기본: 모든 게이트를 start_row에서."""
        return [(offset, start_row) for offset in range(self.gates_amount)]

    def result(self, start_row):
        raise NotImplementedError

    def generate_circuit(self, circuit, table, instance_input, start_row):
        """회로 생성 진입점.

        단계:
        1. 게이트 모양으로 기존 셀렉터 조회, 없으면 할당 후 generate_gates
        2. 테이블 셀렉터 열 확보 후 이 인스턴스가 차지하는 행에서 활성화
        3. 참조하는 lookup 테이블 기록
        4. copy constraint 등록

        Returns:
            generate_assignments와 같은 result
        """
        shape = self.gate_shape()
        first_selector_index = circuit.find_selector(shape)
        if first_selector_index is None:
            first_selector_index = circuit.allocate_selector(shape, shape.arity)
            self.generate_gates(circuit, table, instance_input, first_selector_index)

        table.reserve_selectors(circuit.selectors_amount)
        for offset, row in self.selector_rows(start_row):
            table.enable_selector(first_selector_index + offset, row)

        for definition in self.lookup_tables():
            circuit.register_lookup_table(definition)

        self.generate_copy_constraints(circuit, table, instance_input, start_row)
        return self.result(start_row)
