"""
산술화 엔진 조회용 Flask 앱
===========================

환경 변수:
  ARITH_DB_PATH     TinyDB JSON 파일 경로 (없으면 메모리 DB)
  ARITH_SECRET_KEY  Flask secret key

실행:
    flask --app app run
"""

import logging
import os

from flask import Flask, redirect, url_for

from tinydb import TinyDB
from tinydb.storages import MemoryStorage

from arith_routes import arith_bp, init_arith_bp


def create_app(db_path=None):
    """Flask 앱을 만든다.

    Args:
        db_path: TinyDB 파일 경로. None이면 ARITH_DB_PATH, 그것도 없으면 메모리 DB.
    """
    db_path = db_path or os.environ.get("ARITH_DB_PATH")
    if db_path:
        db = TinyDB(db_path)                  # Storage DB
    else:
        db = TinyDB(storage=MemoryStorage)    # Memory DB

    app = Flask(__name__)
    app.secret_key = os.environ.get("ARITH_SECRET_KEY", "key")

    init_arith_bp(db.table("arith"))
    app.register_blueprint(arith_bp)

    @app.route("/")
    def main():
        return redirect(url_for("arith.circuit_page"))

    return app


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    create_app().run(debug=True)
