import logging
import os

from flask import Flask, jsonify

from tinydb import TinyDB
from tinydb.storages import MemoryStorage

from kzg_routes import kzg_bp, init_kzg_bp
from pcs.kzg.config import KZGConfig


def open_db(path=None):
    """KZG_DB_PATH가 있으면 파일 DB, 없으면 메모리 DB."""
    path = path or os.environ.get("KZG_DB_PATH")
    if path:
        return TinyDB(path)               #Storage DB
    return TinyDB(storage=MemoryStorage)  #Memory DB


DB = open_db()

app = Flask(__name__)
app.secret_key = os.environ.get("KZG_SECRET_KEY", "key")
app.config["KZG_CONFIG"] = KZGConfig.from_env()

kzg_db = DB.table("kzg")
init_kzg_bp(kzg_db)
app.register_blueprint(kzg_bp)


@app.route("/")
def main():
    return jsonify({
        "config": {
            "log_n": app.config["KZG_CONFIG"].log_n,
            "workers": app.config["KZG_CONFIG"].workers,
            "executor": app.config["KZG_CONFIG"].executor,
        },
        "endpoints": sorted(
            str(rule) for rule in app.url_map.iter_rules() if str(rule).startswith("/kzg")
        ),
    })


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    app.run(debug=True)
