# tests/test_auth.py
from app.auth import authenticate, extract_api_key
from app.errors import ErrorKind
from app.result import Err, Ok


def test_exact_match_is_accepted():
    assert isinstance(authenticate("s3cret", "s3cret"), Ok)


def test_missing_and_wrong_keys_are_rejected_the_same_way():
    missing = authenticate(None, "s3cret")
    wrong = authenticate("S3CRET", "s3cret")
    for outcome in (missing, wrong, authenticate("", "s3cret")):
        assert isinstance(outcome, Err)
        assert outcome.error.kind is ErrorKind.UNAUTHORIZED
        assert outcome.error.status_code == 401
    assert missing.error.message == wrong.error.message


def test_prefix_of_the_secret_is_rejected():
    assert isinstance(authenticate("s3cre", "s3cret"), Err)
    assert isinstance(authenticate("s3cret ", "s3cret"), Err)


def test_key_is_read_from_either_header():
    assert extract_api_key({"x-api-key": "a"}) == "a"
    assert extract_api_key({"api-key": "b"}) == "b"
    assert extract_api_key({"x-api-key": "a", "api-key": "b"}) == "a"
    assert extract_api_key({"authorization": "Bearer a"}) is None
