from unittest import mock

import pytest

from huffpack.cli import main
from huffpack.container import encode


def test_compress_then_decompress(tmp_path):
    source = tmp_path / "odyssey.txt"
    source.write_bytes(b"Sing to me of the man, Muse, the man of twists and turns" * 20)
    packed = tmp_path / "odyssey.huf"
    restored = tmp_path / "odyssey.out"

    assert main(["compress", str(source), str(packed)]) == 0
    assert packed.read_bytes() == encode(source.read_bytes())
    assert main(["decompress", str(packed), str(restored)]) == 0
    assert restored.read_bytes() == source.read_bytes()


def test_empty_file_roundtrip(tmp_path):
    source = tmp_path / "empty"
    source.write_bytes(b"")
    assert main(["compress", str(source), str(tmp_path / "empty.huf")]) == 0
    assert (tmp_path / "empty.huf").read_bytes() == b""
    assert main(["decompress", str(tmp_path / "empty.huf"), str(tmp_path / "out")]) == 0
    assert (tmp_path / "out").read_bytes() == b""


def test_existing_output_is_not_overwritten(tmp_path, capsys):
    source = tmp_path / "in"
    source.write_bytes(b"Hello")
    target = tmp_path / "out"
    target.write_bytes(b"keep me")

    assert main(["compress", str(source), str(target)]) == 1
    assert target.read_bytes() == b"keep me"
    assert "ERROR" in capsys.readouterr().err

    assert main(["compress", "--force", str(source), str(target)]) == 0
    assert target.read_bytes() == encode(b"Hello")


def test_missing_input(tmp_path, capsys):
    assert main(["compress", str(tmp_path / "nope"), str(tmp_path / "out")]) == 1
    assert "nope" in capsys.readouterr().err
    assert not (tmp_path / "out").exists()


def test_corrupt_container_leaves_no_output(tmp_path, capsys):
    packed = tmp_path / "bad.huf"
    packed.write_bytes(encode(b"Hello")[:-1])
    target = tmp_path / "out"

    assert main(["decompress", str(packed), str(target)]) == 1
    assert "TruncatedPayloadError" in capsys.readouterr().err
    assert not target.exists()


def test_unknown_subcommand_is_usage_error():
    with pytest.raises(SystemExit) as excinfo:
        main(["explode", "a", "b"])
    assert excinfo.value.code == 2


def test_missing_arguments_is_usage_error():
    with pytest.raises(SystemExit) as excinfo:
        main(["compress", "only-one"])
    assert excinfo.value.code == 2


def test_remote_compress_uses_service_client(tmp_path, monkeypatch):
    monkeypatch.setenv("HUFFPACK_SERVICE_URL", "http://compressor:9000")
    source = tmp_path / "in"
    source.write_bytes(b"Hello")
    target = tmp_path / "out.huf"

    with mock.patch("huffpack.cli.ServiceClient") as client_cls:
        client_cls.return_value.compress.return_value = b"remote container"
        assert main(["compress", "--remote", str(source), str(target)]) == 0

    client_cls.assert_called_once_with(base_url="http://compressor:9000", timeout=30.0)
    client_cls.return_value.compress.assert_called_once_with(b"Hello", filename=str(source))
    assert target.read_bytes() == b"remote container"


def test_remote_decompress_with_explicit_url(tmp_path):
    source = tmp_path / "in.huf"
    source.write_bytes(encode(b"Hello"))
    target = tmp_path / "out"

    with mock.patch("huffpack.cli.ServiceClient") as client_cls:
        client_cls.return_value.decompress.return_value = b"Hello"
        assert (
            main(
                [
                    "decompress",
                    "--remote",
                    "--service-url",
                    "http://other:1234",
                    str(source),
                    str(target),
                ]
            )
            == 0
        )

    assert client_cls.call_args.kwargs["base_url"] == "http://other:1234"
    assert target.read_bytes() == b"Hello"
