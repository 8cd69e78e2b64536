import pytest

from pcs.kzg.config import KZGConfig
from pcs.kzg.field import FR
from pcs.kzg.srs import SRS, sample_public_evaluations


# ── 테스트 상수 ──
TEST_SEED = 42


@pytest.fixture(scope="session")
def config():
    """n = 4, 도메인 8, 직렬 실행."""
    return KZGConfig.test()


@pytest.fixture(scope="session")
def srs(config):
    """테스트용 SRS (도메인 8, seed=42)."""
    return SRS.generate(config.two_n, seed=TEST_SEED, config=config)


@pytest.fixture(scope="session")
def vk(srs):
    return srs.verifying_key()


@pytest.fixture(scope="session")
def public_evals(config):
    return sample_public_evaluations(config.two_n, seed=TEST_SEED)


@pytest.fixture(scope="session")
def inputs():
    """n = 4개의 위트니스 입력."""
    return [FR(1), FR(2), FR(3), FR(4)]
