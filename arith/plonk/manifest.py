"""
컴포넌트 manifest
=================

컴포넌트가 필요로 하는 자원(열 수)을 구체적인 열 배치와 무관하게 기술한다.
외부 레이아웃 플래너는 manifest를 보고 실제 열을 고른다.

  | 파라미터            | 의미                           |
  |---------------------|--------------------------------|
  | ManifestSingleValue | witness 열 수가 정확히 n       |
  | ManifestRange       | witness 열 수가 [low, high]    |

  ComponentManifest는 witness 파라미터와 함께 상수 열 필요 여부,
  public input 열 수를 담는다.

**병합 (merge)**:
  서브 컴포넌트를 내장하는 컴포넌트는 각 manifest를 교집합으로 병합한다.
  교집합이 비면 그 조합은 배치할 수 없다.

    >>> m = ComponentManifest(ManifestRange(2, 5))
    >>> m.merge(ComponentManifest(ManifestSingleValue(3))).witness_amounts()
    [3]
"""

from arith.plonk.utils import ensure


class ManifestParam:
    """witness 열 수 조건."""

    def accepts(self, amount):
        raise NotImplementedError

    def values(self):
        raise NotImplementedError

    def intersect(self, other):
        common = sorted(set(self.values()) & set(other.values()))
        ensure(len(common) > 0, "manifest 교집합이 비어 있습니다: %s ∩ %s", self, other)
        if len(common) == 1:
            return ManifestSingleValue(common[0])
        ensure(common == list(range(common[0], common[-1] + 1)),
               "연속되지 않은 manifest 교집합: %s", common)
        return ManifestRange(common[0], common[-1])


class ManifestSingleValue(ManifestParam):

    def __init__(self, value):
        ensure(value >= 1, "witness 열 수는 1 이상이어야 합니다: %d", value)
        self.value = value

    def accepts(self, amount):
        return amount == self.value

    def values(self):
        return [self.value]

    def __eq__(self, other):
        return isinstance(other, ManifestSingleValue) and other.value == self.value

    def __hash__(self):
        return hash(("single", self.value))

    def __repr__(self):
        return f"ManifestSingleValue({self.value})"


class ManifestRange(ManifestParam):

    def __init__(self, low, high):
        ensure(1 <= low <= high, "잘못된 manifest 범위: [%d, %d]", low, high)
        self.low = low
        self.high = high

    def accepts(self, amount):
        return self.low <= amount <= self.high

    def values(self):
        return list(range(self.low, self.high + 1))

    def __eq__(self, other):
        return (isinstance(other, ManifestRange)
                and (other.low, other.high) == (self.low, self.high))

    def __hash__(self):
        return hash(("range", self.low, self.high))

    def __repr__(self):
        return f"ManifestRange({self.low}, {self.high})"


class ComponentManifest:
    """컴포넌트 자원 요구사항.

    속성:
        witness: ManifestParam
        constant_required: 상수 열이 최소 하나 필요한지
        public_input_amount: 필요한 public input 열 수
    """

    def __init__(self, witness, constant_required=False, public_input_amount=0):
        self.witness = witness
        self.constant_required = constant_required
        self.public_input_amount = public_input_amount

    def accepts(self, witness_amount):
        return self.witness.accepts(witness_amount)

    def witness_amounts(self):
        return self.witness.values()

    def merge(self, other):
        return ComponentManifest(
            self.witness.intersect(other.witness),
            self.constant_required or other.constant_required,
            max(self.public_input_amount, other.public_input_amount),
        )

    def check(self, witness_amount, constant_amount, public_input_amount):
        """제공된 열 구성이 manifest를 만족하지 않으면 ContractViolation."""
        ensure(self.accepts(witness_amount),
               "witness 열 수 %d가 manifest %r와 맞지 않습니다", witness_amount, self.witness)
        ensure(not self.constant_required or constant_amount > 0,
               "상수 열이 필요합니다")
        ensure(public_input_amount >= self.public_input_amount,
               "public input 열이 %d개 필요합니다 (제공 %d)",
               self.public_input_amount, public_input_amount)

    def __repr__(self):
        return (f"ComponentManifest({self.witness!r}, "
                f"constant_required={self.constant_required}, "
                f"public_input_amount={self.public_input_amount})")
