import logging
from pathlib import Path

import pytest

from pycfgfile.cfg.model import ConfigMap
from pycfgfile.cfg.parser import (
    CommentType,
    ConfigTextHandler,
    get_comment_type,
    is_section,
    strip_comments,
)
from pycfgfile.option import make_option


@pytest.mark.parametrize(
    "line, kind",
    [("// c", CommentType.SINGLE), ("# c", CommentType.SINGLE),
     (":: c", CommentType.SINGLE), ("; c", CommentType.SINGLE),
     ("/* c", CommentType.START), ("/* c */", CommentType.SINGLE),
     ("a = 1", CommentType.NONE), ("end */", CommentType.NONE),
     ("a = 1 # c", CommentType.NONE)],
)
def test_comment_types(line: str, kind: CommentType) -> None:
    assert get_comment_type(line) is kind


def test_end_detection_inside_block() -> None:
    assert get_comment_type("end */", check_end=True) is CommentType.END
    assert get_comment_type("# x */", check_end=True) is CommentType.END
    assert get_comment_type("/* again", check_end=True) is CommentType.START
    assert get_comment_type("a = 1", check_end=True) is CommentType.NONE


def test_strip_comments() -> None:
    assert strip_comments("; gone") == ("", CommentType.SINGLE)
    assert strip_comments("/* open") == ("/* open", CommentType.START)


@pytest.mark.parametrize(
    "line, expected",
    [("[a]", True), ("[]", True), ("[", False), ("[a", False), ("a]", False)],
)
def test_is_section(line: str, expected: bool) -> None:
    assert is_section(line) is expected


def test_parse_sections_and_options() -> None:
    cfg = ConfigTextHandler.loads(
        "top = 1\n"
        "[General]\n"
        "  name = \"Alice\"  \n"
        "single = 'quoted'\n"
        "count=5\n"
        "expr = a=b\n"
    )

    assert list(cfg) == ["", "General"]
    assert cfg[""]["top"].to_int() == 1
    general = cfg["General"]
    assert general["name"].to_string() == "Alice"
    assert general["name"].has_quotes()
    assert general["single"].to_string() == "quoted"
    assert general["count"].to_int() == 5
    assert not general["count"].has_quotes()
    assert general["expr"].to_string() == "a=b"


def test_quoted_number_keeps_quotes() -> None:
    cfg = ConfigTextHandler.loads('n = "5"')

    assert cfg[""]["n"].to_int() == 5
    assert cfg[""]["n"].has_quotes()


def test_malformed_lines_are_skipped() -> None:
    cfg = ConfigTextHandler.loads("no equals here\n= value\n[unclosed\n")

    assert len(cfg) == 0


def test_indented_comment_contributes_nothing() -> None:
    cfg = ConfigTextHandler.loads("  # comment\n\t; other = 1\n  // [Section]")

    assert len(cfg) == 0


def test_trailing_comment_is_part_of_value() -> None:
    cfg = ConfigTextHandler.loads("a = 1 ; not a comment")

    assert cfg[""]["a"].to_string() == "1 ; not a comment"


def test_block_comment_suppresses_lines() -> None:
    cfg = ConfigTextHandler.loads(
        "/* start [Hidden]\n"
        "hidden = 1\n"
        "[AlsoHidden]\n"
        "[Nope] end */\n"
        "shown = 2\n"
    )

    assert list(cfg) == [""]
    assert list(cfg[""]) == ["shown"]


def test_block_comment_on_one_line() -> None:
    cfg = ConfigTextHandler.loads("/* one liner */\nvisible = yes")

    assert cfg[""]["visible"].to_string() == "yes"


def test_block_end_outside_block_is_plain_line() -> None:
    cfg = ConfigTextHandler.loads("a = 1 */")

    assert cfg[""]["a"].to_string() == "1 */"


def test_crlf_and_cr_line_endings() -> None:
    cfg = ConfigTextHandler.loads("[S]\r\na = 1\rb = 2\r\n")

    assert list(cfg["S"]) == ["a", "b"]


def test_range_violation_keeps_default_and_warns(
    caplog: pytest.LogCaptureFixture
) -> None:
    cfg = ConfigMap({"S": {"level": make_option(5, 0, 10)}})

    with caplog.at_level(logging.WARNING):
        ConfigTextHandler.loads("[S]\nlevel = 20\n", cfg, warnings=True)

    assert cfg["S"]["level"].to_int() == 5
    assert 'Option "level" was out of range' in caplog.text
    assert "Using default value: 5" in caplog.text


def test_range_violation_is_silent_without_warnings(
    caplog: pytest.LogCaptureFixture
) -> None:
    cfg = ConfigMap({"S": {"level": make_option(5, 0, 10)}})

    with caplog.at_level(logging.WARNING):
        ConfigTextHandler.loads("[S]\nlevel = 20\n", cfg)

    assert caplog.text == ""


def test_rejected_quoted_value_still_gets_quote_flag() -> None:
    cfg = ConfigMap({"": {"level": make_option(5, 0, 10)}})

    ConfigTextHandler.loads('level = "99"', cfg)

    assert cfg[""]["level"].to_string() == "5"
    assert cfg[""]["level"].to_string_with_quotes() == '"5"'


def test_serialize_example() -> None:
    cfg = ConfigTextHandler.loads('[General]\nname = "Alice"\ncount = 5\n')

    assert ConfigTextHandler.dumps(cfg) == (
        '[General]\nname = "Alice"\ncount = 5\n')


def test_serialize_global_section_has_no_header() -> None:
    cfg = ConfigMap()
    cfg.get_or_create("a").set_string("x")
    cfg.get_or_create("b", "S").set_int(2)

    assert ConfigTextHandler.dumps(cfg) == 'a = "x"\n\n[S]\nb = 2\n'
    assert ConfigTextHandler.dumps(ConfigMap()) == ""


def test_round_trip_preserves_text_quotes_and_order() -> None:
    src = (
        "z = 1\n"
        "[B]\n"
        "name = 'Bob'\n"
        "ratio = 0.25\n"
        "flag = true\n"
        "[A]\n"
        "list = {1, 2}\n"
    )
    first = ConfigTextHandler.loads(src)
    second = ConfigTextHandler.loads(ConfigTextHandler.dumps(first))

    def pairs(cfg: ConfigMap) -> list:
        return [(s, k, v.to_string(), v.has_quotes())
                for s, sect in cfg.items() for k, v in sect.items()]

    assert pairs(second) == pairs(first)
    assert ConfigTextHandler.dumps(second) == ConfigTextHandler.dumps(first)


def test_handler_reads_and_writes_file(tmp_path: Path) -> None:
    path = tmp_path / "app.cfg"
    path.write_text("[S]\nkey = \"v\"\n", encoding="utf-8")

    handler = ConfigTextHandler(str(path), "utf-8")
    cfg = handler.read()
    cfg.get_or_create("other", "S").set_int(3)
    handler.write(cfg)

    assert path.read_text(encoding="utf-8") == '[S]\nkey = "v"\nother = 3\n'
    assert str(handler) == f"Config file: {path}(utf-8)"


def test_handler_falls_back_to_detected_encoding(tmp_path: Path) -> None:
    path = tmp_path / "legacy.cfg"
    text = "[Über]\nname = \"Größe und Maße\"\n" * 3
    path.write_bytes(text.encode("utf-16"))

    cfg = ConfigTextHandler(str(path), "ascii").read()

    assert cfg["Über"]["name"].to_string() == "Größe und Maße"


def test_handler_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(OSError):
        ConfigTextHandler(str(tmp_path / "nope.cfg")).read()


def test_round_trip_of_typed_setters() -> None:
    cfg = ConfigMap()
    cfg.get_or_create("flag", "S").set_bool(True)
    cfg.get_or_create("off", "S").set_bool(False)
    cfg.get_or_create("count", "S").set_int(-4)
    cfg.get_or_create("ratio", "S").set_float(0.1 + 0.2)
    cfg.get_or_create("big", "S").set_float(1e20)

    again = ConfigTextHandler.loads(ConfigTextHandler.dumps(cfg))

    def facets(m: ConfigMap) -> list:
        return [(k, v.to_string(), v.has_quotes(), v.to_float(), v.to_bool())
                for k, v in m["S"].items()]

    assert facets(again) == facets(cfg)


def test_utf8_bom_does_not_hide_first_section(tmp_path: Path) -> None:
    path = tmp_path / "bom.cfg"
    path.write_bytes(b"\xef\xbb\xbf[General]\nname = Alice\n")

    for codec in (None, "utf-8"):
        cfg = ConfigTextHandler(str(path), codec).read()

        assert list(cfg) == ["General"]
        assert cfg["General"]["name"].to_string() == "Alice"


def test_loads_drops_leading_bom() -> None:
    cfg = ConfigTextHandler.loads("\ufeff[S]\na = 1")

    assert cfg.option_exists("a", "S")


def test_handler_remembers_detected_encoding(tmp_path: Path) -> None:
    path = tmp_path / "legacy.cfg"
    path.write_bytes("[S]\nname = \"Größe\"\n".encode("utf-16"))

    handler = ConfigTextHandler(str(path), "ascii")
    cfg = handler.read()
    handler.write(cfg)

    assert handler.encoding.lower().startswith("utf-16")
    assert path.read_bytes().decode("utf-16") == '[S]\nname = "Größe"\n'
