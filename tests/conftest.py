import pytest

from eddsa_poseidon import derive_public_key, sign_message

PRIVATE_KEY = "secret"
MESSAGE = 2


@pytest.fixture(scope="session")
def public_key():
    return derive_public_key(PRIVATE_KEY)


@pytest.fixture(scope="session")
def signature():
    return sign_message(PRIVATE_KEY, MESSAGE)
