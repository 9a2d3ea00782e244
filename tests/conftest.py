import sys
import os
import pytest

# 프로젝트 루트를 sys.path에 추가
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from arith.plonk.assignment import ArithmetizationParams, AssignmentTable
from arith.plonk.circuit import Circuit
from arith.plonk.lookup import LookupTableRegistry


# ── 테스트 상수 ──
WITNESS_COLUMNS = 4
PUBLIC_INPUT_COLUMNS = 1
CONSTANT_COLUMNS = 1


@pytest.fixture
def params():
    """witness 4열, public input 1열, constant 1열."""
    return ArithmetizationParams(WITNESS_COLUMNS, PUBLIC_INPUT_COLUMNS, CONSTANT_COLUMNS)


@pytest.fixture
def table(params):
    return AssignmentTable(params)


@pytest.fixture
def circuit(params):
    return Circuit(params)


@pytest.fixture
def registry():
    return LookupTableRegistry()
