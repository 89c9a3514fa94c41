import pytest

from quadset.cfg import Config, ConfigError, load_config, loads_config, to_dict
from quadset.index import QuadTree


def test_defaults_from_empty_document():
    cfg = loads_config("")
    assert cfg == Config()
    assert cfg.index.transition_size == 8
    assert cfg.logging.level == "INFO"


def test_values_are_coerced():
    cfg = loads_config(
        """
index:
  transition_size: "4"
  max_depth: 10.0
logging:
  level: debug
plot:
  show_points: "no"
"""
    )
    assert cfg.index.transition_size == 4
    assert cfg.index.max_depth == 10
    assert cfg.logging.level == "DEBUG"
    assert cfg.plot.show_points is False
    assert to_dict(cfg)["index"] == {"transition_size": 4, "max_depth": 10}


def test_unknown_field_detection():
    with pytest.raises(ConfigError):
        loads_config("index:\n  capacity: 3\n")
    with pytest.raises(ConfigError):
        loads_config("unknown_top_level: 123\n")


@pytest.mark.parametrize(
    "text",
    [
        "index:\n  transition_size: 0\n",
        "index:\n  max_depth: -1\n",
        "index:\n  transition_size: true\n",
        "logging:\n  level: LOUD\n",
        "plot:\n  point_size: 0\n",
        "- not\n- a mapping\n",
    ],
)
def test_invalid_values_rejected(text):
    with pytest.raises(ConfigError):
        loads_config(text)


def test_load_config_from_file(tmp_path):
    p = tmp_path / "cfg.yaml"
    p.write_text("index:\n  transition_size: 2\n", encoding="utf-8")
    cfg = load_config(p)
    tree = QuadTree.from_config(cfg.index)
    assert tree.transition_size == 2
    assert tree.max_depth == 32

    with pytest.raises(ConfigError):
        load_config(tmp_path / "missing.yaml")


def test_nested_section_must_be_mapping():
    assert loads_config("index:\n").index == Config().index
    with pytest.raises(ConfigError):
        loads_config("index: 5\n")
    with pytest.raises(ConfigError):
        loads_config("plot: [1, 2]\n")


@pytest.mark.parametrize(
    "text, expected",
    [
        ("logging:\n  level: WARNING\n", "WARNING"),
        ("logging:\n  level: ' error '\n", "ERROR"),
    ],
)
def test_literal_level_matches_case_insensitively(text, expected):
    assert loads_config(text).logging.level == expected


@pytest.mark.parametrize(
    "raw, expected",
    [("true", True), ("on", True), ("'yes'", True), ("'0'", False), ("off", False)],
)
def test_bool_coercion(raw, expected):
    assert loads_config(f"plot:\n  show_centroids: {raw}\n").plot.show_centroids is expected


def test_bool_rejects_other_values():
    with pytest.raises(ConfigError):
        loads_config("plot:\n  show_points: maybe\n")
    with pytest.raises(ConfigError):
        loads_config("plot:\n  show_points: 2\n")


@pytest.mark.parametrize("raw, expected", [("3", 3), ("'12'", 12), ("7.0", 7)])
def test_int_coercion(raw, expected):
    assert loads_config(f"index:\n  max_depth: {raw}\n").index.max_depth == expected


@pytest.mark.parametrize("raw", ["2.5", "'abc'", "[1]"])
def test_int_rejects_other_values(raw):
    with pytest.raises(ConfigError):
        loads_config(f"index:\n  max_depth: {raw}\n")


@pytest.mark.parametrize("raw, expected", [("3", 3.0), ("2.5", 2.5), ("'1.25'", 1.25)])
def test_float_coercion(raw, expected):
    assert loads_config(f"plot:\n  point_size: {raw}\n").plot.point_size == expected


@pytest.mark.parametrize("raw", ["true", "'big'", "{a: 1}"])
def test_float_rejects_other_values(raw):
    with pytest.raises(ConfigError):
        loads_config(f"plot:\n  point_size: {raw}\n")
