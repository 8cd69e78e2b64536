"""
KZG Flask Blueprint 테스트 (test_client + 메모리 TinyDB).

흐름: setup → prove → open → verify, 그리고 상태 오류(409)와
입력 오류(400) 매핑.
"""

import pytest
from tinydb import TinyDB
from tinydb.storages import MemoryStorage

from app import app
from kzg_routes import init_kzg_bp
from kzg_serializers import serialize_g1
from pcs.kzg.field import CURVE_ORDER, FR
from pcs.kzg.prover import Prover
from pcs.kzg.srs import SRS, sample_public_evaluations

INPUTS = ["1", "2", "3", "4"]


@pytest.fixture
def client():
    init_kzg_bp(TinyDB(storage=MemoryStorage).table("kzg"))
    app.config["TESTING"] = True
    with app.test_client() as client:
        yield client


@pytest.fixture
def ready(client):
    """setup까지 마친 클라이언트."""
    resp = client.post("/kzg/setup", json={"log_n": 2, "seed": "42"})
    assert resp.status_code == 200
    return client


class TestIndex:

    def test_lists_endpoints(self, client):
        data = client.get("/").get_json()
        assert "/kzg/setup" in data["endpoints"]
        assert "log_n" in data["config"]


class TestSetup:

    def test_setup(self, client):
        resp = client.post("/kzg/setup", json={"log_n": 2, "seed": "42"})
        data = resp.get_json()
        assert resp.status_code == 200
        assert data["n"] == 4
        assert data["domain_size"] == 8

    def test_state_after_setup(self, ready):
        state = ready.get("/kzg/state").get_json()
        assert state["setup"]["domain_size"] == 8
        assert state["vk"] is not None
        assert state["commitment"] is None

    def test_invalid_log_n(self, client):
        resp = client.post("/kzg/setup", json={"log_n": "big"})
        assert resp.status_code == 400
        resp = client.post("/kzg/setup", json={"log_n": 40})
        assert resp.status_code == 400

    @pytest.mark.parametrize("log_n", [2.7, True, "2", None])
    def test_log_n_must_be_integer(self, client, log_n):
        resp = client.post("/kzg/setup", json={"log_n": log_n})
        assert resp.status_code == 400
        assert resp.get_json()["error"] == "InvalidConfig"

    def test_clear(self, ready):
        assert ready.post("/kzg/clear").get_json() == {"cleared": True}
        assert ready.get("/kzg/state").get_json()["setup"] is None


class TestConflicts:

    def test_prove_before_setup(self, client):
        assert client.post("/kzg/prove", json={"inputs": INPUTS}).status_code == 409

    def test_open_before_prove(self, ready):
        assert ready.post("/kzg/open", json={"point": "7"}).status_code == 409

    def test_verify_before_setup(self, client):
        assert client.post("/kzg/verify", json={}).status_code == 409

    def test_verify_without_opening(self, ready):
        ready.post("/kzg/prove", json={"inputs": INPUTS})
        assert ready.post("/kzg/verify", json={}).status_code == 409


class TestInputErrors:

    def test_wrong_input_count(self, ready):
        resp = ready.post("/kzg/prove", json={"inputs": ["1", "2"]})
        assert resp.status_code == 400
        assert resp.get_json()["error"] == "LengthMismatch"

    def test_malformed_input(self, ready):
        resp = ready.post("/kzg/prove", json={"inputs": ["1", "2", "x", "4"]})
        assert resp.status_code == 400
        assert resp.get_json()["error"] == "InvalidEncoding"

    def test_malformed_point(self, ready):
        ready.post("/kzg/prove", json={"inputs": INPUTS})
        resp = ready.post("/kzg/open", json={"point": "-7"})
        assert resp.status_code == 400

    def test_oversized_point(self, ready):
        ready.post("/kzg/prove", json={"inputs": INPUTS})
        resp = ready.post("/kzg/open", json={"point": "9" * 5000})
        assert resp.status_code == 400
        assert resp.get_json()["error"] == "InvalidEncoding"

    def test_malformed_opening(self, ready):
        ready.post("/kzg/prove", json={"inputs": INPUTS})
        resp = ready.post("/kzg/verify", json={"opening": {"point": "x"}})
        assert resp.status_code == 400
        assert resp.get_json()["error"] == "InvalidEncoding"


class TestFlow:

    def test_commitment_matches_library(self, ready):
        data = ready.post("/kzg/prove", json={"inputs": INPUTS}).get_json()
        srs = SRS.generate(8, seed="42")
        prover = Prover(srs, sample_public_evaluations(8, seed="42"))
        expected = prover.prove([FR(int(x)) for x in INPUTS])
        assert data["commitment"] == serialize_g1(expected)

    def test_prove_open_verify(self, ready):
        prove = ready.post("/kzg/prove", json={"inputs": INPUTS}).get_json()
        opening = ready.post("/kzg/open", json={"point": "7"}).get_json()
        assert opening["point"] == "7"

        resp = ready.post("/kzg/verify", json={})
        assert resp.status_code == 200
        assert resp.get_json()["result"] is True

        state = ready.get("/kzg/state").get_json()
        assert state["commitment"] == prove["commitment"]
        assert state["last_opening"] == opening

    def test_tampered_opening(self, ready):
        ready.post("/kzg/prove", json={"inputs": INPUTS})
        opening = ready.post("/kzg/open", json={"point": "7"}).get_json()
        tampered = dict(opening, evaluation=str((int(opening["evaluation"]) + 1) % CURVE_ORDER))
        resp = ready.post("/kzg/verify", json={"opening": tampered})
        assert resp.status_code == 200
        assert resp.get_json()["result"] is False
