from app.utils import auth_hash


def test_hash_and_verify():
    pw = "correct horse battery staple"
    h = auth_hash.hash_password(pw)
    assert isinstance(h, str) and len(h) > 0
    assert auth_hash.verify_password(pw, h) is True


def test_wrong_password_fails():
    h = auth_hash.hash_password("s3cret-memo")
    assert auth_hash.verify_password("wrong", h) is False


def test_garbage_hash_does_not_raise():
    assert auth_hash.verify_password("anything", "not-a-hash") is False
    assert auth_hash.verify_password(None, "x") is False


def test_hashes_differ_for_same_password():
    pw = "repeatable"
    h1 = auth_hash.hash_password(pw)
    h2 = auth_hash.hash_password(pw)
    # salted, so two hashes differ
    assert h1 != h2
    assert auth_hash.verify_password(pw, h1)
    assert auth_hash.verify_password(pw, h2)
