"""
산술화 데이터 직렬화/역직렬화 헬퍼
==================================

TinyDB에 저장 가능한 형태로 산술화 객체를 변환한다.
FR, Variable, Expression, GateShape, Gate, LookupGate, Circuit, AssignmentTable 등.

필드 원소와 정수 계수는 10진수 문자열로 저장한다 (JSON 정수 범위 밖).
같은 회로를 두 번 만들어 직렬화하면 결과가 같다.
"""

from arith.plonk.assignment import ArithmetizationParams, AssignmentTable
from arith.plonk.circuit import Circuit
from arith.plonk.expression import Expression
from arith.plonk.field import FR
from arith.plonk.lookup import LookupTableRegistry, RangeTable, XorTable
from arith.plonk.selector import GateShape
from arith.plonk.utils import ensure, next_power_of_2
from arith.plonk.variable import ColumnType, Variable

LOOKUP_TABLE_KINDS = {
    "range": RangeTable,
    "xor": XorTable,
}


# ─── FR ───

def serialize_fr(val):
    """FR → str(int)"""
    return str(int(val))


def deserialize_fr(s):
    """str(int) → FR"""
    return FR(int(s))


def serialize_fr_list(lst):
    """list[FR] → list[str]"""
    return [str(int(v)) for v in lst]


def deserialize_fr_list(data):
    """list[str] → list[FR]"""
    return [FR(int(s)) for s in data]


# ─── Variable ───

def serialize_variable(var):
    """Variable → dict"""
    return {
        "type": var.type.name.lower(),
        "index": var.index,
        "rotation": var.rotation,
        "relative": var.relative,
    }


def deserialize_variable(data):
    """dict → Variable"""
    return Variable(
        data["index"],
        data["rotation"],
        data["relative"],
        ColumnType[data["type"].upper()],
    )


# ─── Expression ───

def _serialize_terms(canonical):
    return [
        {"coeff": str(coeff), "vars": [serialize_variable(v) for v in monomial]}
        for monomial, coeff in canonical
    ]


def serialize_expression(expr):
    """Expression → 정규형 순서의 항 리스트"""
    return _serialize_terms(expr.canonical())


def deserialize_expression(data):
    """항 리스트 → Expression"""
    return Expression({
        tuple(deserialize_variable(v) for v in term["vars"]): int(term["coeff"])
        for term in data
    })


# ─── GateShape ───

def serialize_shape(shape):
    """GateShape → dict"""
    return {
        "gates": [[_serialize_terms(c) for c in gate] for gate in shape.gates],
        "lookup_gates": [
            [{"table_id": table_id, "expressions": [_serialize_terms(c) for c in exprs]}
             for table_id, exprs in gate]
            for gate in shape.lookup_gates
        ],
    }


def deserialize_shape(data):
    """dict → GateShape"""
    gates = [
        [deserialize_expression(c) for c in gate]
        for gate in data["gates"]
    ]
    lookups = [
        [(item["table_id"], [deserialize_expression(c) for c in item["expressions"]])
         for item in gate]
        for gate in data["lookup_gates"]
    ]
    return GateShape.of(gates, lookups)


# ─── Gate ───

def serialize_gate(gate):
    """Gate → dict"""
    return {
        "selector": gate.selector_index,
        "constraints": [serialize_expression(c.expression) for c in gate.constraints],
    }


def serialize_lookup_gate(gate):
    """LookupGate → dict"""
    return {
        "selector": gate.selector_index,
        "constraints": [
            {"table_id": c.table_id,
             "expressions": [serialize_expression(e) for e in c.expressions]}
            for c in gate.constraints
        ],
    }


# ─── Params ───

def serialize_params(params):
    return {
        "witness_columns": params.witness_columns,
        "public_input_columns": params.public_input_columns,
        "constant_columns": params.constant_columns,
        "selector_columns": params.selector_columns,
    }


def deserialize_params(data):
    return ArithmetizationParams(**data)


# ─── Circuit ───

def serialize_circuit(circuit):
    """Circuit → dict"""
    shapes = circuit.selector_shapes()
    selectors = []
    for i, (shape, first) in enumerate(shapes):
        end = shapes[i + 1][1] if i + 1 < len(shapes) else circuit.selectors_amount
        selectors.append({"first": first, "arity": end - first, "shape": serialize_shape(shape)})
    return {
        "params": serialize_params(circuit.params),
        "selectors": selectors,
        "gates": [serialize_gate(g) for g in circuit.gates],
        "lookup_gates": [serialize_lookup_gate(g) for g in circuit.lookup_gates],
        "copy_constraints": [
            [serialize_variable(a), serialize_variable(b)]
            for a, b in circuit.copy_constraints
        ],
        "lookup_tables": [
            {"name": d.name, "kind": _lookup_kind(d), "bits": d.bits}
            for d in circuit.lookup_tables.values()
        ],
    }


def _lookup_kind(definition):
    for kind, cls in LOOKUP_TABLE_KINDS.items():
        if type(definition) is cls:
            return kind
    ensure(False, "직렬화할 수 없는 lookup 테이블 종류: %s", type(definition).__name__)


def deserialize_circuit(data, registry=None):
    """dict → Circuit

    lookup 테이블은 registry(없으면 새 레지스트리)에 등록된 정의를 참조한다.
    """
    if registry is None:
        registry = LookupTableRegistry()
    circuit = Circuit(deserialize_params(data["params"]))
    for entry in data["selectors"]:
        first = circuit.allocate_selector(deserialize_shape(entry["shape"]), entry["arity"])
        ensure(first == entry["first"], "셀렉터 인덱스 불일치: %d != %d", first, entry["first"])
    for gate in data["gates"]:
        circuit.add_gate(gate["selector"], [
            circuit.add_constraint(deserialize_expression(c)) for c in gate["constraints"]
        ])
    for gate in data["lookup_gates"]:
        circuit.add_lookup_gate(gate["selector"], [
            circuit.add_lookup_constraint(
                c["table_id"], [deserialize_expression(e) for e in c["expressions"]])
            for c in gate["constraints"]
        ])
    for a, b in data["copy_constraints"]:
        circuit.add_copy_constraint(deserialize_variable(a), deserialize_variable(b))
    for entry in data["lookup_tables"]:
        definition = registry.register(LOOKUP_TABLE_KINDS[entry["kind"]](entry["bits"]))
        circuit.register_lookup_table(definition)
    return circuit


# ─── AssignmentTable ───

def serialize_table(table):
    """AssignmentTable → dict (열 종류별 str 리스트)"""
    return {
        "params": serialize_params(table.params),
        "columns": {
            kind.name.lower(): [
                serialize_fr_list(table.column(kind, i))
                for i in range(table.columns_amount(kind))
            ]
            for kind in ColumnType
        },
        "scratch": serialize_fr_list(table.scratch(i) for i in range(table.scratch_size)),
        "allocated_rows": table.allocated_rows,
    }


def deserialize_table(data):
    """dict → AssignmentTable"""
    table = AssignmentTable(deserialize_params(data["params"]))
    table.reserve_selectors(len(data["columns"]["selector"]))
    for kind in ColumnType:
        for index, column in enumerate(data["columns"][kind.name.lower()]):
            for row, value in enumerate(column):
                table.write(kind, index, row, deserialize_fr(value))
    for index, value in enumerate(data["scratch"]):
        table.set_scratch(index, deserialize_fr(value))
    ensure(table.allocated_rows == data["allocated_rows"],
           "allocated_rows 불일치: %d != %d", table.allocated_rows, data["allocated_rows"])
    return table


# ─── 요약 ───

def circuit_summary(circuit, table):
    """회로/테이블 요약 (UI 표시용)"""
    return {
        "witness_columns": table.witnesses_amount,
        "public_input_columns": table.public_inputs_amount,
        "constant_columns": table.constants_amount,
        "selector_columns": table.selectors_amount,
        "allocated_rows": table.allocated_rows,
        "rows_amount": table.rows_amount,
        "domain_size": next_power_of_2(table.rows_amount),
        "gates": circuit.gates_amount,
        "lookup_gates": circuit.lookup_gates_amount,
        "copy_constraints": circuit.copy_constraints_amount,
        "lookup_tables": sorted(circuit.lookup_tables),
    }


def fr_short(val):
    """FR → 축약 문자열 (UI 표시용)"""
    if val is None:
        return "None"
    s = str(int(val))
    if len(s) <= 10:
        return s
    return s[:4] + "..." + s[-4:]
