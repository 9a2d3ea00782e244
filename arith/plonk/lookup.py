"""
Lookup 테이블 정의 (Lookup Table Definition)
============================================

다항식으로 표현하기 어려운 함수를 미리 계산한 입력→출력 대응표로 제공한다.
컴포넌트는 다항식 제약 대신 "값 튜플이 표의 한 행이다"라는 lookup 제약을 쓴다.

**구조**:
  - name: 테이블 이름 (레지스트리 키)
  - 열(column): generate()가 채우는 필드 원소 리스트들
  - subtables: 이름 → Subtable(열 인덱스, 시작 행, 끝 행(포함))
    하나의 물리 테이블이 여러 논리적 lookup 모양을 제공한다.
    예: XorTable의 "full"은 (x, y, x^y) 세 열, "inputs"는 앞의 두 열.

**generate() 계약**:
  - 순수하고 결정론적이다. 내용은 필드와 생성 파라미터에만 의존한다.
  - 멱등적이다: 두 번째 호출부터는 아무 일도 하지 않는다.

**레지스트리**:
  LookupTableRegistry는 이름으로 테이블 정의를 공유한다.
  컴포넌트는 정의를 복사하지 않고 참조한다.

    >>> registry = LookupTableRegistry()
    >>> table = registry.register(RangeTable(8))
    >>> registry.generated("range_8bit_table").rows_number()   # 256
    >>> table.contains("full", [FR(17)])                        # True
"""

import logging
from typing import NamedTuple, Tuple

from arith.plonk.field import FR
from arith.plonk.utils import ensure

logger = logging.getLogger(__name__)


class Subtable(NamedTuple):
    """물리 테이블의 일부 열/행 범위."""
    column_indices: Tuple[int, ...]
    begin: int
    end: int


class LookupTableDefinition:
    """lookup 테이블 정의 기반 클래스.

    하위 클래스는 _generate_columns, columns_number, rows_number를 구현한다.
    """

    def __init__(self, name, field=FR):
        self.name = name
        self.field = field
        self.subtables = {}
        self._columns = None
        self._row_sets = {}

    def _generate_columns(self):
        raise NotImplementedError

    def columns_number(self):
        raise NotImplementedError

    def rows_number(self):
        raise NotImplementedError

    def generate(self):
        """열 데이터를 채운다. 이미 채웠으면 아무 일도 하지 않는다."""
        if self._columns is not None:
            return
        columns = self._generate_columns()
        ensure(len(columns) == self.columns_number(),
               "%s: 열 수 불일치 (%d != %d)", self.name, len(columns), self.columns_number())
        for column in columns:
            ensure(len(column) == self.rows_number(),
                   "%s: 행 수 불일치 (%d != %d)", self.name, len(column), self.rows_number())
        self._columns = columns
        logger.debug("lookup table %s generated: %d x %d",
                     self.name, self.columns_number(), self.rows_number())

    @property
    def is_generated(self):
        return self._columns is not None

    @property
    def columns(self):
        ensure(self._columns is not None, "생성되지 않은 lookup 테이블입니다: %s", self.name)
        return self._columns

    def full_name(self, subtable):
        return f"{self.name}/{subtable}"

    def subtable_rows(self, subtable):
        """서브테이블의 행들을 값 튜플 리스트로 반환한다."""
        ensure(subtable in self.subtables, "%s에 서브테이블 %s가 없습니다", self.name, subtable)
        spec = self.subtables[subtable]
        columns = self.columns
        return [
            tuple(columns[c][row] for c in spec.column_indices)
            for row in range(spec.begin, spec.end + 1)
        ]

    def contains(self, subtable, values):
        """값 튜플이 서브테이블의 한 행인지 확인한다."""
        if subtable not in self._row_sets:
            self._row_sets[subtable] = {
                tuple(int(v) for v in row) for row in self.subtable_rows(subtable)
            }
        return tuple(int(v) for v in values) in self._row_sets[subtable]


class RangeTable(LookupTableDefinition):
    """0 .. 2^bits - 1 한 열짜리 범위 테이블."""

    SUBTABLE_NAME = "full"

    def __init__(self, bits, field=FR):
        super().__init__(f"range_{bits}bit_table", field)
        self.bits = bits
        self.subtables[self.SUBTABLE_NAME] = Subtable((0,), 0, self.rows_number() - 1)

    def _generate_columns(self):
        return [[self.field(i) for i in range(self.rows_number())]]

    def columns_number(self):
        return 1

    def rows_number(self):
        return 1 << self.bits


class XorTable(LookupTableDefinition):
    """(x, y, x ^ y) 세 열짜리 비트 XOR 테이블.

    서브테이블:
        full: 세 열 전체
        inputs: 앞의 두 열 (입력 쌍이 범위 안인지 확인하는 용도)
    """

    def __init__(self, bits, field=FR):
        super().__init__(f"xor_{bits}bit_table", field)
        self.bits = bits
        last = self.rows_number() - 1
        self.subtables["full"] = Subtable((0, 1, 2), 0, last)
        self.subtables["inputs"] = Subtable((0, 1), 0, last)

    def _generate_columns(self):
        size = 1 << self.bits
        xs, ys, zs = [], [], []
        for x in range(size):
            for y in range(size):
                xs.append(self.field(x))
                ys.append(self.field(y))
                zs.append(self.field(x ^ y))
        return [xs, ys, zs]

    def columns_number(self):
        return 3

    def rows_number(self):
        return 1 << (2 * self.bits)


class LookupTableRegistry:
    """이름 → lookup 테이블 정의. 등록 순서를 유지한다."""

    def __init__(self):
        self._tables = {}

    def register(self, definition):
        """정의를 등록한다. 같은 이름이 이미 있으면 기존 정의를 반환한다."""
        existing = self._tables.get(definition.name)
        if existing is not None:
            ensure(type(existing) is type(definition),
                   "같은 이름의 다른 종류 테이블입니다: %s", definition.name)
            return existing
        self._tables[definition.name] = definition
        return definition

    def get(self, name):
        ensure(name in self._tables, "등록되지 않은 lookup 테이블입니다: %s", name)
        return self._tables[name]

    def generated(self, name):
        """테이블을 (한 번만) 생성해서 반환한다."""
        definition = self.get(name)
        definition.generate()
        return definition

    def resolve(self, table_id):
        """'table/subtable' → (생성된 정의, 서브테이블 이름)."""
        name, _, subtable = table_id.partition("/")
        return self.generated(name), subtable

    def __contains__(self, name):
        return name in self._tables

    def __iter__(self):
        return iter(self._tables.values())

    def __len__(self):
        return len(self._tables)
