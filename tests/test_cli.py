import json

from blindproto import __version__
from blindproto.cli import app


def test_version(runner):
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_decode(runner):
    result = runner.invoke(app, ["decode", "CJYBEgVoZWxsbw=="])
    assert result.exit_code == 0, result.output
    assert result.stdout == (
        "Decoded Protobuf Message:\n"
        "Tag 1 (Varint): {\n"
        "  [uint64]: 150, [uint32]: 150, [int64]: 150, [int32]: 150, "
        "[sint64]: 75, [sint32]: 75, [enum]: 150\n"
        "}\n"
        'Tag 2 (Bytes): string: "hello"\n'
    )


def test_decode_hex(runner):
    result = runner.invoke(app, ["decode", "--encoding", "hex", "0801"])
    assert result.exit_code == 0, result.output
    assert "[bool]: true" in result.stdout


def test_decode_stdin(runner):
    result = runner.invoke(app, ["decode", "-"], input="CJYB\n")
    assert result.exit_code == 0, result.output
    assert "[uint64]: 150" in result.stdout


def test_decode_grpc_web(runner):
    # 00 00000003 089601
    result = runner.invoke(app, ["decode", "AAAAAAMIlgE="])
    assert result.exit_code == 0, result.output
    assert "Tag 1 (Varint)" in result.stdout

    result = runner.invoke(app, ["decode", "--no-grpc-web", "AAAAAAMIlgE="])
    assert result.exit_code == 1
    assert "Tag 1" not in result.stdout


def test_decode_json(runner):
    result = runner.invoke(app, ["decode", "--json", "--casing", "snake", "CJYB"])
    assert result.exit_code == 0, result.output
    (field,) = json.loads(result.stdout)
    assert field["wire_type"] == "Varint"
    assert field["readings"]["sint32"] == 75


def test_decode_parse_error(runner):
    # 08 01 12 05 61 62: the length runs past the end
    result = runner.invoke(app, ["decode", "--encoding", "hex", "080112056162"])
    assert result.exit_code == 1
    assert "Parse error" in result.output
    assert "Decoded Protobuf Message" not in result.stdout


def test_decode_input_error(runner):
    result = runner.invoke(app, ["decode", "not encoded!"])
    assert result.exit_code == 1
    assert "Error decoding input" in result.output


def test_decode_max_depth(runner):
    # 0a 02 0a 00: two levels of nesting
    result = runner.invoke(app, ["decode", "-e", "hex", "--max-depth", "1", "0a020a00"])
    assert result.exit_code == 1
    assert "nesting" in result.output

    result = runner.invoke(
        app, ["decode", "-e", "hex", "0a020a00"], env={"BLINDPROTO_MAX_DEPTH": "2"}
    )
    assert result.exit_code == 0, result.output


def test_decode_several_inputs(runner):
    result = runner.invoke(app, ["decode", "-e", "hex", "0801", "zz", "1001"])
    assert result.exit_code == 1
    assert result.stdout.count("Decoded Protobuf Message:") == 2
    assert "Tag 2 (Varint)" in result.stdout


def test_decode_stdin_only_once(runner):
    result = runner.invoke(app, ["decode", "-", "-"], input="CJYB\n")
    assert result.exit_code == 2
    assert "only be read once" in result.output
    assert "Decoded Protobuf Message" not in result.output
