"""
산술화 기반 모듈: 유한체(Finite Field)
======================================

산술화 엔진이 테이블 셀과 제약식 평가에 사용하는 필드 원소 타입을 정의한다.

**유한체 FR**:
  bn128 타원곡선의 스칼라 필드 (scalar field).
  - 위수(order) p ≈ 2^254, 소수체(prime field)
  - 엔진 자체는 필드에 독립적이다: field(int), +, -, *, == 만 사용한다.
    AssignmentTable의 field 인자로 다른 필드 클래스를 넘길 수 있다.

**역원 규약 (inversion convention)**:
  inverse(0) = 0 으로 정의한다 (에러가 아니다).
  게이트 제약은 이 규약 아래에서도 건전하도록 작성된다.
  예: logic_and_flag의 보조 변수 v가 p = 0인 경우를 흡수한다.

사용 예시:
    >>> from arith.plonk.field import FR, inverse
    >>> inverse(FR(3)) * FR(3)   # FR(1)
    >>> inverse(FR(0))           # FR(0)
"""

from py_ecc.fields import bn128_FQ as FQ
from py_ecc import bn128


class FR(FQ):
    """bn128 스칼라 필드 위의 유한체 원소.

    py_ecc의 FQ 클래스를 상속하여 +, -, *, /, ** 등의 필드 연산을 제공한다.

    예시:
        >>> x = FR(3)
        >>> x * x          # FR(9)
        >>> FR(-1) == FR(CURVE_ORDER - 1)   # True
    """
    field_modulus = bn128.curve_order

    def is_zero(self):
        return self.n == 0

    def inversed(self):
        """역원. 0의 역원은 0이다."""
        return inverse(self)


# 곡선 위수 (필드 크기)
CURVE_ORDER = bn128.curve_order

# 필드 원소 하나를 표현하는 데 필요한 비트 수 (wide export 폭 계산에 사용)
MODULUS_BITS = CURVE_ORDER.bit_length()


def modulus_bits(field):
    """필드 클래스의 모듈러스 비트 수."""
    return field.field_modulus.bit_length()


def inverse(x, field=FR):
    """곱셈 역원을 반환한다. x = 0 이면 0을 반환한다.

    Args:
        x: 필드 원소 또는 정수
        field: 정수를 변환할 필드 클래스 (기본값 FR)

    Returns:
        x ≠ 0: x⁻¹ (x · x⁻¹ = 1)
        x = 0: 0

    예시:
        >>> inverse(FR(15)) * FR(15) == FR(1)   # True
        >>> inverse(0) == FR(0)                 # True
    """
    if not isinstance(x, FQ):
        x = field(x)
    if x == type(x)(0):
        return type(x)(0)
    return type(x)(1) / x
