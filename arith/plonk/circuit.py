"""
제약 시스템 (Circuit)
=====================

할당 테이블 위의 다항식 제약, 게이트, 배선(copy) 제약, lookup 게이트를 모은다.

**게이트 구조**:
  게이트 = (셀렉터 인덱스, 제약식 리스트).
  셀렉터 열이 1인 모든 행 r에서, 각 제약식의 상대 변수 var(i, k)를
  셀 (i, r + k)로 치환한 값이 0이어야 한다.

    q_s(r) · constraint_j(r) = 0    (모든 r, 모든 j)

  셀렉터 하나는 최대 하나의 게이트(다항식 또는 lookup)만 가진다.

**배선(Copy) 제약**:
  두 절대 변수 {a, b}가 같은 값을 가져야 한다는 기록.
  여기서는 기록만 하고, 강제는 외부 순열 인자(permutation argument)의 몫이다.

**Lookup 게이트**:
  셀렉터가 켜진 행에서 식들의 값 튜플이 지정한 lookup 테이블
  ("table/subtable")의 한 행과 같아야 한다.

**셀렉터 중복 제거**:
  find_selector / allocate_selector는 SelectorAllocator에 위임한다.
  같은 모양의 게이트는 한 번만 등록된다.

사용 예시:
    >>> circuit = Circuit(ArithmetizationParams(3))
    >>> x, y, z = Variable(0), Variable(1), Variable(2)
    >>> shape = GateShape.of([[z - x * y]])
    >>> s = circuit.allocate_selector(shape)
    >>> circuit.add_gate(s, [circuit.add_constraint(z - x * y)])
"""

from arith.plonk.expression import Expression
from arith.plonk.selector import SelectorAllocator
from arith.plonk.utils import ensure
from arith.plonk.variable import ColumnType, Variable


class Constraint:
    """게이트에 등록된 다항식 제약."""

    def __init__(self, expression):
        self.expression = expression

    def evaluate(self, table, row):
        """row를 활성 행으로 하여 제약식을 평가한다."""
        return self.expression.evaluate(
            lambda v: table.read(v.type, v.index, row + v.rotation),
            table.field,
        )

    def __eq__(self, other):
        if not isinstance(other, Constraint):
            return NotImplemented
        return self.expression == other.expression

    def __hash__(self):
        return hash(self.expression)

    def __str__(self):
        return str(self.expression)


class Gate:
    """셀렉터에 묶인 제약 묶음.

    속성:
        selector_index: 셀렉터 열 인덱스
        constraints: Constraint 리스트 (순서는 직렬화 재현성에만 의미가 있다)
    """

    def __init__(self, selector_index, constraints):
        self.selector_index = selector_index
        self.constraints = list(constraints)

    def check(self, table, row):
        """row에서 모든 제약이 0으로 평가되는지 확인한다.

        Returns:
            bool: 제약 만족 여부
        """
        zero = table.field(0)
        return all(c.evaluate(table, row) == zero for c in self.constraints)


class LookupConstraint:
    """식 튜플이 lookup 테이블의 한 행이어야 한다는 제약.

    속성:
        table_id: "테이블 이름/서브테이블 이름"
        expressions: Expression 리스트 (서브테이블 열 순서와 대응)
    """

    def __init__(self, table_id, expressions):
        self.table_id = table_id
        self.expressions = list(expressions)

    def evaluate(self, table, row):
        """row에서 식들의 값 튜플."""
        resolve = lambda v: table.read(v.type, v.index, row + v.rotation)  # noqa: E731
        return tuple(e.evaluate(resolve, table.field) for e in self.expressions)


class LookupGate:
    """셀렉터에 묶인 lookup 제약 묶음."""

    def __init__(self, selector_index, constraints):
        self.selector_index = selector_index
        self.constraints = list(constraints)


class Circuit:
    """PLONK 제약 시스템.

    속성:
        params: ArithmetizationParams (열 인덱스 검증에 사용)
        gates: Gate 리스트 (등록 순서)
        lookup_gates: LookupGate 리스트 (등록 순서)
        copy_constraints: (Variable, Variable) 튜플 리스트 (등록 순서)
        lookup_tables: 테이블 이름 → LookupTableDefinition (레지스트리 참조)
    """

    def __init__(self, params):
        self.params = params
        self.gates = []
        self.lookup_gates = []
        self.copy_constraints = []
        self.lookup_tables = {}
        self._selectors = SelectorAllocator(params.selector_columns)
        self._gate_by_selector = {}

    # ── 검증 ──

    def _check_column(self, var):
        ensure(isinstance(var, Variable), "테이블 변수가 아닙니다: %r", var)
        ensure(var.type != ColumnType.SELECTOR,
               "셀렉터 열은 제약에 직접 쓸 수 없습니다: %s", var)
        amount = self.params.columns_amount(var.type)
        ensure(0 <= var.index < amount,
               "%s 열 인덱스 범위 초과: %d (선언된 열 수 %d)",
               var.type.name.lower(), var.index, amount)

    def _check_gate_expression(self, expression):
        for var in expression.variables():
            self._check_column(var)
            ensure(var.relative, "게이트 제약에는 상대 변수만 쓸 수 있습니다: %s", var)

    def _check_free_selector(self, selector_index):
        ensure(0 <= selector_index < self.selectors_amount,
               "할당되지 않은 셀렉터입니다: %d", selector_index)
        ensure(selector_index not in self._gate_by_selector,
               "셀렉터 %d에는 이미 게이트가 있습니다", selector_index)

    # ── 제약/게이트 ──

    def add_constraint(self, expression):
        """다항식 제약을 검증하고 Constraint 핸들을 반환한다."""
        expression = Expression.lift(expression)
        self._check_gate_expression(expression)
        return Constraint(expression)

    def add_gate(self, selector_index, constraints):
        """제약 묶음을 셀렉터에 등록한다.

        Returns:
            int: 게이트 인덱스
        """
        self._check_free_selector(selector_index)
        constraints = [
            c if isinstance(c, Constraint) else self.add_constraint(c)
            for c in constraints
        ]
        ensure(len(constraints) > 0, "빈 게이트는 등록할 수 없습니다")
        gate = Gate(selector_index, constraints)
        self.gates.append(gate)
        self._gate_by_selector[selector_index] = gate
        return len(self.gates) - 1

    def add_lookup_constraint(self, table_id, expressions):
        """lookup 제약을 검증하고 LookupConstraint 핸들을 반환한다."""
        ensure("/" in table_id, "lookup 테이블 id는 'table/subtable' 형식이어야 합니다: %s",
               table_id)
        expressions = [Expression.lift(e) for e in expressions]
        for e in expressions:
            self._check_gate_expression(e)
        return LookupConstraint(table_id, expressions)

    def add_lookup_gate(self, selector_index, constraints):
        """lookup 제약 묶음을 셀렉터에 등록한다.

        Returns:
            int: lookup 게이트 인덱스
        """
        self._check_free_selector(selector_index)
        ensure(len(constraints) > 0, "빈 lookup 게이트는 등록할 수 없습니다")
        gate = LookupGate(selector_index, constraints)
        self.lookup_gates.append(gate)
        self._gate_by_selector[selector_index] = gate
        return len(self.lookup_gates) - 1

    def register_lookup_table(self, definition):
        """컴포넌트가 참조하는 lookup 테이블을 기록한다 (복사하지 않는다)."""
        existing = self.lookup_tables.get(definition.name)
        ensure(existing is None or existing is definition,
               "같은 이름의 다른 lookup 테이블이 이미 등록되어 있습니다: %s",
               definition.name)
        self.lookup_tables[definition.name] = definition

    # ── 배선 제약 ──

    def add_copy_constraint(self, a, b=None):
        """배선 복사 제약 추가: a == b.

        (a, b) 튜플 하나를 넘겨도 된다.

        예시:
            >>> circuit.add_copy_constraint(W(0, 3, False), PI(0, 0, False))
        """
        if b is None:
            a, b = a
        for var in (a, b):
            self._check_column(var)
            ensure(not var.relative, "copy constraint에는 절대 변수만 쓸 수 있습니다: %s", var)
            ensure(var.rotation >= 0, "음수 행 인덱스: %s", var)
        self.copy_constraints.append((a, b))

    # ── 셀렉터 ──

    def find_selector(self, shape):
        return self._selectors.find(shape)

    def allocate_selector(self, shape, arity=None):
        return self._selectors.allocate(shape, arity)

    def selector_shapes(self):
        """할당 순서대로 (GateShape, 첫 셀렉터 인덱스) 리스트."""
        return list(self._selectors)

    def gate_for_selector(self, selector_index):
        """셀렉터에 등록된 Gate 또는 LookupGate, 없으면 None."""
        return self._gate_by_selector.get(selector_index)

    # ── 개수 ──

    @property
    def selectors_amount(self):
        return self._selectors.selectors_amount

    @property
    def gates_amount(self):
        return len(self.gates)

    @property
    def lookup_gates_amount(self):
        return len(self.lookup_gates)

    @property
    def copy_constraints_amount(self):
        return len(self.copy_constraints)
