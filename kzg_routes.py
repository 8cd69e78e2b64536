"""
KZG Flask Blueprint — 커밋먼트 엔드포인트
=========================================

Setup, Proving, Opening, Verifying 단계를 JSON API로 노출한다.
세션 상태는 TinyDB에 직렬화된 공개 데이터로 저장한다 (τ는 저장하지 않음).

    GET  /kzg/state
    POST /kzg/setup    {"log_n": 2, "seed": "42"}
    POST /kzg/prove    {"inputs": ["1", "2", ...]}      (생략 시 무작위)
    POST /kzg/open     {"point": "7"}                  (생략 시 무작위)
    POST /kzg/verify   {"opening": {...}, "commitment": [...]}
    POST /kzg/clear
"""

import dataclasses
import logging
import secrets

from flask import Blueprint, current_app, jsonify, request
from tinydb import Query

from pcs.kzg.config import DEFAULT_CONFIG
from pcs.kzg.errors import KZGError
from pcs.kzg.field import CURVE_ORDER, FR
from pcs.kzg.opening import open_evaluations, verify
from pcs.kzg.prover import Prover
from pcs.kzg.srs import SRS, sample_public_evaluations

from kzg_serializers import (
    serialize_fr, deserialize_fr,
    serialize_g1, deserialize_g1,
    serialize_fr_list, deserialize_fr_list,
    serialize_srs, deserialize_srs,
    serialize_vk, deserialize_vk,
    serialize_opening, deserialize_opening,
    g1_short, fr_short,
)

logger = logging.getLogger(__name__)

kzg_bp = Blueprint('kzg', __name__, url_prefix='/kzg')

DATA = Query()

# DB는 app.py에서 주입
DB = None


def init_kzg_bp(db):
    """app.py에서 DB를 주입받는다."""
    global DB
    DB = db


# ─── DB 헬퍼 ───

def db_get(key):
    result = DB.search(DATA.type == key)
    if not result:
        return None
    return result[0].get("data")


def db_set(key, data):
    DB.upsert({"type": key, "data": data}, DATA.type == key)


def db_remove_prefix(prefix):
    DB.remove(DATA.type.test(lambda t: t.startswith(prefix)))


def _config():
    return current_app.config.get("KZG_CONFIG", DEFAULT_CONFIG)


def _body():
    return request.get_json(silent=True) or {}


def _conflict(message):
    return jsonify({"error": "Conflict", "message": message}), 409


@kzg_bp.errorhandler(KZGError)
def handle_kzg_error(exc):
    logger.warning("%s: %s", type(exc).__name__, exc)
    return jsonify({"error": type(exc).__name__, "message": str(exc)}), 400


# ──────────────────────────────────────────────────────────────
# State
# ──────────────────────────────────────────────────────────────

@kzg_bp.route("/state")
def state():
    srs_info = db_get("kzg.srs.info")
    commitment = db_get("kzg.round.commitment")
    return jsonify({
        "setup": srs_info,
        "vk": db_get("kzg.vk"),
        "commitment": commitment,
        "commitment_short": g1_short(deserialize_g1(commitment)) if commitment else None,
        "last_opening": db_get("kzg.round.opening"),
    })


@kzg_bp.route("/clear", methods=["POST"])
def clear():
    db_remove_prefix("kzg.")
    return jsonify({"cleared": True})


# ──────────────────────────────────────────────────────────────
# Setup
# ──────────────────────────────────────────────────────────────

@kzg_bp.route("/setup", methods=["POST"])
def setup():
    """SRS와 공개 평가 벡터를 생성한다."""
    body = _body()
    log_n = body.get("log_n", _config().log_n)
    if isinstance(log_n, bool) or not isinstance(log_n, int):
        return jsonify({"error": "InvalidConfig", "message": f"log_n must be an integer, got {log_n!r}"}), 400
    try:
        config = dataclasses.replace(_config(), log_n=log_n)
    except ValueError as exc:
        return jsonify({"error": "InvalidConfig", "message": str(exc)}), 400
    seed = body.get("seed")

    srs = SRS.generate(config.two_n, seed=seed, config=config)
    public_evals = sample_public_evaluations(config.two_n, seed=seed)

    db_remove_prefix("kzg.")
    db_set("kzg.config.log_n", config.log_n)
    db_set("kzg.srs", serialize_srs(srs))
    db_set("kzg.vk", serialize_vk(srs.verifying_key()))
    db_set("kzg.public_evals", serialize_fr_list(public_evals))
    info = {
        "log_n": config.log_n,
        "n": config.n,
        "domain_size": srs.domain_size,
        "g1": g1_short(srs.monomial_g1[0]),
    }
    db_set("kzg.srs.info", info)
    return jsonify(info)


def _load_setup():
    srs_data = db_get("kzg.srs")
    if srs_data is None:
        return None, None, None
    config = dataclasses.replace(_config(), log_n=db_get("kzg.config.log_n"))
    return deserialize_srs(srs_data), deserialize_fr_list(db_get("kzg.public_evals")), config


# ──────────────────────────────────────────────────────────────
# Proving
# ──────────────────────────────────────────────────────────────

@kzg_bp.route("/prove", methods=["POST"])
def prove():
    """위트니스를 해싱하고 커밋먼트를 만든다."""
    srs, public_evals, config = _load_setup()
    if srs is None:
        return _conflict("run /kzg/setup first")

    inputs = _body().get("inputs")
    if inputs is not None:
        inputs = deserialize_fr_list(inputs)

    prover = Prover(srs, public_evals, config)
    commitment = prover.prove(inputs)

    db_remove_prefix("kzg.round.")
    db_set("kzg.round.commitment", serialize_g1(commitment))
    db_set("kzg.round.product_evals", serialize_fr_list(prover.product_evals()))
    return jsonify({
        "commitment": serialize_g1(commitment),
        "commitment_short": g1_short(commitment),
        "witness": [fr_short(f) for f in prover.witness],
    })


@kzg_bp.route("/open", methods=["POST"])
def open_commitment():
    """마지막 커밋먼트를 주어진 점에서 연다."""
    srs, _, config = _load_setup()
    product_evals = db_get("kzg.round.product_evals")
    if srs is None or product_evals is None:
        return _conflict("run /kzg/setup and /kzg/prove first")

    point = _body().get("point")
    if point is None:
        point = FR(secrets.randbelow(CURVE_ORDER))
    else:
        point = deserialize_fr(point)

    opening = open_evaluations(
        deserialize_fr_list(product_evals), point, srs.monomial_g1, config
    )
    data = serialize_opening(opening)
    db_set("kzg.round.opening", data)
    return jsonify(data)


# ──────────────────────────────────────────────────────────────
# Verifying
# ──────────────────────────────────────────────────────────────

@kzg_bp.route("/verify", methods=["POST"])
def verify_opening():
    """공개 데이터만으로 열기 증명을 검증한다."""
    vk_data = db_get("kzg.vk")
    if vk_data is None:
        return _conflict("run /kzg/setup first")

    body = _body()
    commitment_data = body.get("commitment", db_get("kzg.round.commitment"))
    opening_data = body.get("opening", db_get("kzg.round.opening"))
    if opening_data is None:
        return _conflict("no opening proof to verify")

    opening = deserialize_opening(opening_data)
    result = verify(deserialize_g1(commitment_data), opening, deserialize_vk(vk_data))
    return jsonify({"result": result, "point": serialize_fr(opening.point)})
