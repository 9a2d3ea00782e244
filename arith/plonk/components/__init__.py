"""
데모 컴포넌트 모음
==================

컴포넌트 프로토콜(PlonkComponent) 위에 작성된 작은 가젯들.

  | 컴포넌트           | witness 열 | 행  | 게이트                 |
  |--------------------|------------|-----|------------------------|
  | BooleanOpComponent | arity + 1  | 1   | out - f(x, y)          |
  | LogicAndFlag       | 2 ~ 5      | 1~3 | f = (x·y ≠ 0), 제약 4개 |
  | Select             | 4          | 1   | z = c ? x : y          |
  | RangeCheck         | 1          | 1   | lookup (x) ∈ range     |

사용 예시:
    >>> from arith.plonk.components import LogicAndFlag, LogicAndFlagInput
    >>> flag = LogicAndFlag([0, 1, 2])
    >>> flag.generate_assignments(table, LogicAndFlagInput(x, y), 0)
"""

from arith.plonk.components.boolean_op import (
    BOOLEAN_FUNCTIONS,
    AndFunction,
    BooleanFunction,
    BooleanOpComponent,
    BooleanOpInput,
    BooleanOpResult,
    NandFunction,
    NorFunction,
    NotFunction,
    OrFunction,
    XorFunction,
)
from arith.plonk.components.logic_and_flag import (
    LogicAndFlag,
    LogicAndFlagInput,
    LogicAndFlagResult,
)
from arith.plonk.components.range_check import RangeCheck, RangeCheckInput, RangeCheckResult
from arith.plonk.components.select import Select, SelectInput, SelectResult
