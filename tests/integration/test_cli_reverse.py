from tests.integration._cli import run


def test_reverse_name():
    out = run("reverse", "name")
    assert out["command"] == "reverse"
    assert out["data"] == {"text": "name", "reverse": "eman", "palindrome": False}


def test_reverse_palindrome():
    out = run("reverse", "otto")
    assert out["data"]["reverse"] == "otto"
    assert out["data"]["palindrome"] is True
