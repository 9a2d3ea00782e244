"""
산술화 Flask Blueprint: 회로 조회 엔드포인트
=============================================

데모 회로를 조립해 TinyDB에 저장하고, 요약/만족성 검사/덤프를 제공한다.
총 6개 엔드포인트 (GET 3 + POST 3)

  GET  /arith/circuit               요약 + 마지막 검사 결과 (JSON)
  POST /arith/circuit/load-example  x, y로 데모 회로 조립
  POST /arith/circuit/check         만족성 검사
  POST /arith/circuit/clear         저장된 데이터 삭제
  GET  /arith/table/export          테이블 덤프 (text/plain, ?wide=1)
  GET  /arith/circuit/export        제약 시스템 덤프 (text/plain)
"""

import io
import logging

from flask import Blueprint, Response, jsonify, redirect, request, url_for
from tinydb import Query

from arith.plonk.checker import check_all
from arith.plonk.example import build_example_circuit
from arith.plonk.export import export_circuit, export_table
from arith.plonk.lookup import LookupTableRegistry

from arith_serializers import (
    serialize_circuit, deserialize_circuit,
    serialize_table, deserialize_table,
    serialize_variable,
    circuit_summary, fr_short,
)

logger = logging.getLogger(__name__)

arith_bp = Blueprint('arith', __name__, url_prefix='/arith')

DATA = Query()

# DB는 app.py에서 주입
DB = None


def init_arith_bp(db):
    """app.py에서 DB를 주입받는다."""
    global DB
    DB = db


# ─── DB 헬퍼 ───

def db_get(key):
    """DB에서 키로 데이터를 조회한다."""
    result = DB.search(DATA.type == key)
    if not result:
        return None
    return result[0].get("data")


def db_set(key, data):
    """DB에 키로 데이터를 저장한다."""
    DB.upsert({"type": key, "data": data}, DATA.type == key)


def db_remove_prefix(prefix):
    """prefix로 시작하는 모든 키를 삭제한다."""
    DB.remove(DATA.type.test(lambda t: t.startswith(prefix)))


def load_session():
    """저장된 (circuit, table)을 복원한다. 없으면 None."""
    circuit_raw = db_get("arith.circuit.raw")
    table_raw = db_get("arith.table.raw")
    if circuit_raw is None or table_raw is None:
        return None
    registry = LookupTableRegistry()
    return deserialize_circuit(circuit_raw, registry), deserialize_table(table_raw)


def error(message, status=400):
    return jsonify({"error": message}), status


# ──────────────────────────────────────────────────────────────
# Circuit
# ──────────────────────────────────────────────────────────────

@arith_bp.route("/circuit")
def circuit_page():
    """회로 요약."""
    summary = db_get("arith.circuit.summary")
    if summary is None:
        return jsonify({"loaded": False})
    return jsonify({
        "loaded": True,
        "inputs": db_get("arith.circuit.inputs"),
        "summary": summary,
        "results": db_get("arith.circuit.results"),
        "check": db_get("arith.circuit.check"),
    })


@arith_bp.route("/circuit/load-example", methods=["POST"])
def circuit_load_example():
    """데모 회로를 조립한다."""
    try:
        x = int(request.form.get("x", "3"))
        y = int(request.form.get("y", "5"))
    except ValueError:
        return error("x, y는 정수여야 합니다")

    example = build_example_circuit(x, y)
    circuit, table = example.circuit, example.table
    logger.info("example circuit loaded: x=%d y=%d rows=%d", x, y, table.allocated_rows)

    results = {}
    for name, result in example.results.items():
        (var,) = vars(result).values()
        results[name] = {
            "variable": serialize_variable(var),
            "value": fr_short(table.read(var.type, var.index, var.rotation)),
        }

    # 입력 변경 시 이전 검사 결과 클리어
    db_remove_prefix("arith.")
    db_set("arith.circuit.inputs", {"x": str(x), "y": str(y)})
    db_set("arith.circuit.raw", serialize_circuit(circuit))
    db_set("arith.table.raw", serialize_table(table))
    db_set("arith.circuit.summary", circuit_summary(circuit, table))
    db_set("arith.circuit.results", results)

    return redirect(url_for("arith.circuit_page"))


@arith_bp.route("/circuit/check", methods=["POST"])
def circuit_check():
    """만족성 검사를 실행한다."""
    session = load_session()
    if session is None:
        return error("회로가 로드되지 않았습니다")
    circuit, table = session

    violations = check_all(circuit, table)
    db_set("arith.circuit.check", {
        "satisfied": not violations,
        "violations": [v._asdict() for v in violations],
    })
    return redirect(url_for("arith.circuit_page"))


@arith_bp.route("/circuit/clear", methods=["POST"])
def circuit_clear():
    """모든 산술화 데이터를 클리어한다."""
    db_remove_prefix("arith.")
    return redirect(url_for("arith.circuit_page"))


# ──────────────────────────────────────────────────────────────
# 덤프
# ──────────────────────────────────────────────────────────────

@arith_bp.route("/table/export")
def table_export():
    """할당 테이블 텍스트 덤프."""
    session = load_session()
    if session is None:
        return error("회로가 로드되지 않았습니다")
    _, table = session

    stream = io.StringIO()
    export_table(table, stream, wide=request.args.get("wide") == "1")
    return Response(stream.getvalue(), mimetype="text/plain")


@arith_bp.route("/circuit/export")
def circuit_export():
    """제약 시스템 텍스트 덤프."""
    session = load_session()
    if session is None:
        return error("회로가 로드되지 않았습니다")
    circuit, _ = session

    stream = io.StringIO()
    export_circuit(circuit, stream)
    return Response(stream.getvalue(), mimetype="text/plain")
