from __future__ import annotations

import hashlib
from pathlib import Path

from glovebox.core.artifact import digest, digest_bytes, digest_file, matches, short


def test_digest_format():
    value = digest("FROM ubuntu:24.04\n")
    assert value == "sha256:" + hashlib.sha256(b"FROM ubuntu:24.04\n").hexdigest()


def test_same_text_same_digest_and_any_change_differs():
    text = "FROM ubuntu:24.04\nRUN true\n"
    assert digest(text) == digest(text)
    assert digest(text) != digest(text + " ")


def test_digest_file(tmp_path: Path):
    path = tmp_path / "Dockerfile"
    assert digest_file(path) is None
    path.write_text("FROM x\n", encoding="utf-8")
    assert digest_file(path) == digest("FROM x\n")


def test_matches():
    assert matches("abc", digest("abc"))
    assert not matches("abc", digest("abd"))
    assert not matches("abc", None)
    assert not matches("abc", "")


def test_short():
    value = digest("abc")
    assert short(value) == value[len("sha256:"):][:12]
    assert short(None) == ""
    assert short("0123456789abcdef") == "0123456789ab"


def test_digest_file_sees_line_ending_changes(tmp_path: Path):
    text = "FROM x\nRUN true\n"
    path = tmp_path / "Dockerfile"
    path.write_bytes(text.replace("\n", "\r\n").encode("utf-8"))
    assert digest_file(path) != digest(text)
    assert digest_file(path) == digest_bytes(path.read_bytes())
    assert digest(text.encode("utf-8")) == digest(text)
