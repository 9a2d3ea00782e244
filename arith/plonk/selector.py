"""
셀렉터 할당기 (Selector Allocator)
==================================

컴포넌트가 만드는 게이트 모양(gate shape)이 이미 등록된 것과 같으면
기존 셀렉터를 재사용하고, 처음 보는 모양일 때만 새 셀렉터 열을 할당한다.

**게이트 모양 (GateShape)**:
  컴포넌트의 모든 게이트 제약과 lookup 제약을 정규형(canonical form)으로
  모은 것. 제약은 컴포넌트 로컬 프레임의 상대 오프셋으로 표현되므로,
  같은 컴포넌트를 다른 행에 배치하거나 다른 입력 열에 연결해도
  모양은 같다.

**중복 제거 불변식**:
  구조적으로 같은 모양의 두 컴포넌트 인스턴스에는 셀렉터가 정확히
  하나만 할당된다.

**결정론**:
  할당은 추가 전용(append-only)이다. 인덱스는 재사용/회수되지 않으므로
  같은 순서로 회로를 두 번 만들면 같은 셀렉터 인덱스가 나온다.

    >>> allocator = SelectorAllocator()
    >>> shape = GateShape.of([[z - x * y]])
    >>> allocator.find(shape)             # None
    >>> allocator.allocate(shape)         # 0
    >>> allocator.find(shape)             # 0
"""

import logging
from dataclasses import dataclass

from arith.plonk.expression import Expression
from arith.plonk.utils import ensure

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GateShape:
    """컴포넌트 게이트들의 정규형.

    속성:
        gates: 게이트별 제약 정규형 튜플의 튜플
        lookup_gates: lookup 게이트별 ((table_id, 식 정규형 튜플), ...) 튜플
    """
    gates: tuple
    lookup_gates: tuple = ()

    @property
    def arity(self):
        """이 모양이 차지하는 셀렉터 수."""
        return len(self.gates) + len(self.lookup_gates)

    @classmethod
    def of(cls, gate_constraints, lookup_constraints=()):
        """Expression 리스트들로부터 GateShape을 만든다.

        Args:
            gate_constraints: [[Expression, ...], ...] (게이트별)
            lookup_constraints: [[(table_id, [Expression, ...]), ...], ...]
        """
        gates = tuple(
            tuple(Expression.lift(e).canonical() for e in gate)
            for gate in gate_constraints
        )
        lookups = tuple(
            tuple(
                (table_id, tuple(Expression.lift(e).canonical() for e in exprs))
                for table_id, exprs in gate
            )
            for gate in lookup_constraints
        )
        return cls(gates, lookups)


class SelectorAllocator:
    """게이트 모양 → 첫 셀렉터 인덱스 매핑."""

    def __init__(self, initial_index=0):
        self._selectors = {}
        self._next_index = initial_index

    def find(self, shape):
        """이미 할당된 셀렉터 인덱스, 없으면 None."""
        return self._selectors.get(shape)

    def allocate(self, shape, arity=None):
        """새 셀렉터를 할당하고 첫 인덱스를 반환한다.

        arity개의 연속된 셀렉터 인덱스를 예약한다.
        """
        if arity is None:
            arity = shape.arity
        ensure(arity >= 1, "셀렉터 arity는 1 이상이어야 합니다: %d", arity)
        ensure(shape not in self._selectors, "이미 할당된 게이트 모양입니다")
        first = self._next_index
        self._selectors[shape] = first
        self._next_index += arity
        logger.debug("selector %d..%d allocated", first, first + arity - 1)
        return first

    @property
    def selectors_amount(self):
        return self._next_index

    def __len__(self):
        return len(self._selectors)

    def __iter__(self):
        return iter(self._selectors.items())
