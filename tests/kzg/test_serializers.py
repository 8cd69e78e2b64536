"""
kzg_serializers 테스트: 정규 인코딩과 거부 규칙.
"""

import pytest

from kzg_serializers import (
    serialize_fr, deserialize_fr,
    serialize_fr_list, deserialize_fr_list,
    serialize_g1, deserialize_g1,
    serialize_g2, deserialize_g2,
    serialize_srs, deserialize_srs,
    serialize_vk, deserialize_vk,
    serialize_opening, deserialize_opening,
    g1_short, fr_short,
)
from pcs.kzg.errors import InvalidEncoding
from pcs.kzg.field import CURVE_ORDER, FIELD_MODULUS, FR, G1, G2, ec_mul
from pcs.kzg.opening import OpeningProof


class TestScalar:

    def test_roundtrip(self):
        for v in [FR(0), FR(1), FR(CURVE_ORDER - 1)]:
            assert deserialize_fr(serialize_fr(v)) == v
        assert serialize_fr(FR(42)) == "42"

    def test_accepts_int(self):
        assert deserialize_fr(42) == FR(42)

    @pytest.mark.parametrize("data", [
        "-1", "abc", "", "1.5", "１２", str(CURVE_ORDER), CURVE_ORDER, -3, True, None, [1],
        "1" * 5000, "9" * 78,
    ])
    def test_rejects(self, data):
        with pytest.raises(InvalidEncoding):
            deserialize_fr(data)

    def test_list(self):
        values = [FR(1), FR(2), FR(3)]
        assert deserialize_fr_list(serialize_fr_list(values)) == values
        with pytest.raises(InvalidEncoding):
            deserialize_fr_list("1,2,3")


class TestPoints:

    def test_g1_roundtrip(self):
        p = ec_mul(G1, 17)
        assert deserialize_g1(serialize_g1(p)) == p
        assert serialize_g1(None) is None
        assert deserialize_g1(None) is None

    def test_g1_off_curve(self):
        with pytest.raises(InvalidEncoding):
            deserialize_g1(["1", "1"])

    def test_g1_not_reduced(self):
        with pytest.raises(InvalidEncoding):
            deserialize_g1([str(FIELD_MODULUS + 1), "2"])

    def test_g1_bad_shape(self):
        with pytest.raises(InvalidEncoding):
            deserialize_g1(["1"])
        with pytest.raises(InvalidEncoding):
            deserialize_g1("1,2")

    def test_g2_roundtrip(self):
        assert deserialize_g2(serialize_g2(G2)) == G2

    def test_g2_off_curve(self):
        with pytest.raises(InvalidEncoding):
            deserialize_g2([["1", "0"], ["1", "0"]])


class TestStructures:

    def test_srs_roundtrip(self, srs):
        restored = deserialize_srs(serialize_srs(srs))
        assert restored.domain_size == srs.domain_size
        assert restored.monomial_g1 == srs.monomial_g1
        assert restored.lagrange_g1 == srs.lagrange_g1
        assert restored.g2_powers == srs.g2_powers

    def test_srs_public_fields_only(self, srs):
        assert set(serialize_srs(srs)) == {"domain_size", "monomial_g1", "lagrange_g1", "g2_powers"}

    def test_srs_malformed(self, srs):
        data = serialize_srs(srs)
        with pytest.raises(InvalidEncoding):
            deserialize_srs({k: v for k, v in data.items() if k != "lagrange_g1"})
        with pytest.raises(InvalidEncoding):
            deserialize_srs(dict(data, domain_size=6))
        with pytest.raises(InvalidEncoding):
            deserialize_srs(dict(data, monomial_g1=data["monomial_g1"][:4]))
        with pytest.raises(InvalidEncoding):
            deserialize_srs(None)

    def test_vk_roundtrip(self, vk):
        assert deserialize_vk(serialize_vk(vk)) == vk

    def test_vk_malformed(self):
        with pytest.raises(InvalidEncoding):
            deserialize_vk({"g1": serialize_g1(G1)})

    def test_opening_roundtrip(self):
        o = OpeningProof(point=FR(3), evaluation=FR(9), proof=ec_mul(G1, 4))
        assert deserialize_opening(serialize_opening(o)) == o

    def test_opening_malformed(self):
        with pytest.raises(InvalidEncoding):
            deserialize_opening({})
        with pytest.raises(InvalidEncoding):
            deserialize_opening({"point": "x", "evaluation": "1", "proof": None})


class TestDisplay:

    def test_short(self):
        assert g1_short(None) == "∞"
        assert g1_short(G1) == "(1, 2)"
        assert fr_short(FR(12345)) == "12345"
        assert fr_short(FR(1234567890)) == "1234...7890"
        assert fr_short(None) == "None"
