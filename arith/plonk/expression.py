"""
다항식 제약식 (Expression)
==========================

게이트 제약은 Variable 위의 다항식이다. 이 모듈은 다항식을 전개형
(expanded form)으로 표현한다:

    Σ  coeff_k · v_k1 · v_k2 · ...

  - 단항식(monomial): 정렬된 Variable 튜플. 상수항은 빈 튜플 ().
  - 계수(coefficient): 정확한 정수 (필드에 독립적). 평가 시 field(coeff)로 변환.
  - 계수가 0이 된 항은 즉시 제거한다.

**구조적 동등성 (structural equality)**:
  canonical()은 (단항식, 계수) 쌍을 정렬한 튜플을 돌려준다.
  두 제약식은 canonical()이 같을 때만 같다. 셀렉터 재사용 판단
  (SelectorAllocator)은 이 동등성만 사용한다.

  같은 다항식을 다른 순서로 만들어도 정규형은 같다:
    x*y - z  ≡  -z + y*x

  계수는 정수로 비교하므로 -1과 p-1은 다른 계수로 취급된다.
  이 경우 셀렉터가 하나 더 할당될 뿐 잘못 공유되지는 않는다.

사용 예시:
    >>> x, y, z = Variable(0, 0), Variable(1, 0), Variable(2, 0)
    >>> e = z - x * y
    >>> e.degree()   # 2
    >>> e.evaluate(lambda v: {x: FR(3), y: FR(5), z: FR(15)}[v])   # FR(0)
"""

from py_ecc.fields.field_elements import FQ

from arith.plonk.field import FR
from arith.plonk.utils import ensure
from arith.plonk.variable import Variable, ScratchVariable


class Expression:
    """Variable 위의 전개형 다항식.

    속성:
        terms: dict, 단항식(정렬된 Variable 튜플) → 정수 계수
               삽입 순서는 생성 순서를 따른다.
    """

    __slots__ = ("terms",)

    def __init__(self, terms=None):
        self.terms = {}
        if terms:
            for monomial, coeff in terms.items():
                self._accumulate(tuple(sorted(monomial)), coeff)

    @classmethod
    def lift(cls, value):
        """Expression, Variable, 정수, 필드 원소를 Expression으로 변환한다."""
        if isinstance(value, Expression):
            return value
        if isinstance(value, Variable):
            return cls({(value,): 1})
        ensure(not isinstance(value, ScratchVariable),
               "스크래치 변수는 제약식에 쓸 수 없습니다: %s", value)
        if isinstance(value, FQ):
            value = int(value)
        ensure(isinstance(value, int), "제약식으로 변환할 수 없는 값: %r", value)
        return cls({(): value})

    def _accumulate(self, monomial, coeff):
        total = self.terms.get(monomial, 0) + coeff
        if total == 0:
            self.terms.pop(monomial, None)
        else:
            self.terms[monomial] = total

    # ── 산술 연산 ──

    def __add__(self, other):
        other = Expression.lift(other)
        result = Expression(self.terms)
        for monomial, coeff in other.terms.items():
            result._accumulate(monomial, coeff)
        return result

    def __radd__(self, other):
        return Expression.lift(other) + self

    def __neg__(self):
        return Expression({m: -c for m, c in self.terms.items()})

    def __sub__(self, other):
        return self + (-Expression.lift(other))

    def __rsub__(self, other):
        return Expression.lift(other) - self

    def __mul__(self, other):
        other = Expression.lift(other)
        result = Expression()
        for m1, c1 in self.terms.items():
            for m2, c2 in other.terms.items():
                result._accumulate(tuple(sorted(m1 + m2)), c1 * c2)
        return result

    def __rmul__(self, other):
        return Expression.lift(other) * self

    def __pow__(self, power):
        ensure(isinstance(power, int) and power >= 0,
               "거듭제곱 지수는 0 이상의 정수여야 합니다: %r", power)
        result = Expression.lift(1)
        for _ in range(power):
            result = result * self
        return result

    # ── 구조 ──

    def canonical(self):
        """정렬된 (단항식, 계수) 튜플. 구조적 동등성의 기준."""
        return tuple(sorted(self.terms.items()))

    def __eq__(self, other):
        if not isinstance(other, Expression):
            return NotImplemented
        return self.canonical() == other.canonical()

    def __hash__(self):
        return hash(self.canonical())

    def is_zero(self):
        return not self.terms

    def degree(self):
        """전체 차수. 영 다항식과 상수는 0."""
        return max((len(m) for m in self.terms), default=0)

    def variables(self):
        """등장하는 모든 Variable (정렬됨)."""
        return sorted({v for monomial in self.terms for v in monomial})

    def evaluate(self, resolve, field=FR):
        """각 Variable을 resolve(v)로 치환하여 값을 계산한다.

        Args:
            resolve: Variable → 필드 원소
            field: 계수를 변환할 필드 클래스

        Returns:
            필드 원소
        """
        acc = field(0)
        for monomial, coeff in self.terms.items():
            term = field(coeff)
            for v in monomial:
                term = term * resolve(v)
            acc = acc + term
        return acc

    def __repr__(self):
        return f"Expression({self})"

    def __str__(self):
        if not self.terms:
            return "0"
        parts = []
        for monomial, coeff in self.canonical():
            factors = [str(v) for v in monomial]
            if not factors:
                body = str(abs(coeff))
            elif abs(coeff) == 1:
                body = "*".join(factors)
            else:
                body = "*".join([str(abs(coeff))] + factors)
            sign = "-" if coeff < 0 else "+"
            parts.append((sign, body))
        first_sign, first_body = parts[0]
        text = ("-" if first_sign == "-" else "") + first_body
        for sign, body in parts[1:]:
            text += f" {sign} {body}"
        return text
