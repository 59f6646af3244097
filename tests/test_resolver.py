import pytest

from torchbootstrap.errors import BootstrapError
from torchbootstrap.resolver import (
    TorchSource,
    load_sources_from_str,
    parse_version,
    resolve_best_source,
)

SOURCES = [
    TorchSource("11.8", "torch-cu118", "https://download.example.com/whl/cu118"),
    TorchSource("12.1", "torch-cu121", "https://download.example.com/whl/cu121"),
    TorchSource("12.4", "torch-cu124", "https://download.example.com/whl/cu124"),
]


def test_parse_version_simple():
    assert parse_version("12.3") == (12, 3)


def test_parse_version_trims_whitespace():
    assert parse_version(" 11.8\n") == (11, 8)


@pytest.mark.parametrize("text", ["12", "1.2.3", "a.b", "", "cpu", "-1.2", "12.x"])
def test_parse_version_rejects(text):
    assert parse_version(text) is None


def test_resolve_picks_highest_not_above():
    assert resolve_best_source("12.3", SOURCES) == SOURCES[1]


def test_resolve_exact_match():
    assert resolve_best_source("12.4", SOURCES) == SOURCES[2]


def test_resolve_above_all_picks_highest():
    assert resolve_best_source("13.0", SOURCES) == SOURCES[2]


def test_resolve_order_independent():
    assert resolve_best_source("12.3", list(reversed(SOURCES))) == SOURCES[1]


def test_resolve_tie_keeps_first():
    first = TorchSource("12.1", "a", "https://a.example.com")
    second = TorchSource("12.1", "b", "https://b.example.com")
    assert resolve_best_source("12.2", [first, second]) is first


@pytest.mark.parametrize("version", ["cpu", "11.0", ""])
def test_resolve_falls_back_to_pypi(version):
    result = resolve_best_source(version, SOURCES)
    assert result.source == "pypi"
    assert result.url == "https://pypi.org/simple"
    assert result.cuda == "cpu"


def test_resolve_ignores_unparseable_sources():
    bad = TorchSource("nightly", "x", "https://x.example.com")
    assert resolve_best_source("12.1", [bad, SOURCES[0]]) == SOURCES[0]


def test_load_sources_round_trip():
    text = (
        '[{"cuda": "12.1", "source": "torch-cu121", '
        '"url": "https://download.example.com/whl/cu121", "extra": 1}]'
    )
    assert load_sources_from_str(text) == [SOURCES[1]]


def test_load_sources_invalid_json():
    with pytest.raises(BootstrapError) as info:
        load_sources_from_str("not json")
    assert str(info.value).startswith("❌ Error: Failed to parse embedded cuda_torch_sources.json: ")


def test_load_sources_missing_field():
    with pytest.raises(BootstrapError):
        load_sources_from_str('[{"cuda": "12.1", "source": "x"}]')


def test_load_sources_wrong_shape():
    with pytest.raises(BootstrapError):
        load_sources_from_str('{"cuda": "12.1"}')