"""Password hashing tests."""

from bookshelf.auth.password import hash_password, verify_password


def test_hash_is_salted_and_not_plaintext():
    h1 = hash_password("correct horse")
    h2 = hash_password("correct horse")
    assert "correct horse" not in h1
    assert h1.startswith("$2")
    assert h1 != h2  # fresh salt each time


def test_verify_password():
    h = hash_password("correct horse")
    assert verify_password("correct horse", h)
    assert not verify_password("wrong horse", h)


def test_verify_against_corrupt_hash_is_false():
    assert not verify_password("anything", "not-a-bcrypt-hash")
    assert not verify_password("anything", "")
