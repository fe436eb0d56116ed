import pytest
import yaml

from seats_aero.config import (
    Config,
    load_config,
    mask_api_key,
    write_sample_config,
)
from seats_aero.errors import ConfigError


def test_load_from_yaml(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        yaml.dump(
            {
                "api_key": "file-key",
                "default_sources": ["aeroplan"],
                "default_cabins": ["Y"],
                "preferred_airports": ["SFO", "LAX"],
            }
        )
    )

    config = load_config(path, environ={})

    assert config.api_key == "file-key"
    assert config.default_sources == ["aeroplan"]
    assert config.default_cabins == ["Y"]
    assert config.preferred_airports == ["SFO", "LAX"]
    assert config.path == path


def test_environment_overrides_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("api_key: file-key\ndefault_sources: [aeroplan]\n")

    config = load_config(
        path,
        environ={
            "SEATS_AERO_API_KEY": "env-key",
            "SEATS_AERO_DEFAULT_SOURCES": "united, delta",
        },
    )

    assert config.api_key == "env-key"
    assert config.default_sources == ["united", "delta"]


def test_missing_file_gives_defaults(tmp_path):
    config = load_config(tmp_path / "absent.yaml", environ={})

    assert config == Config()
    assert config.default_cabins == ["J", "F"]
    assert config.path is None


def test_invalid_yaml_is_a_config_error(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("api_key: [unclosed\n")

    with pytest.raises(ConfigError):
        load_config(path, environ={})


def test_non_mapping_file_is_a_config_error(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("- just\n- a list\n")

    with pytest.raises(ConfigError):
        load_config(path, environ={})


def test_validate_requires_api_key():
    with pytest.raises(ConfigError) as excinfo:
        Config().validate()

    assert "SEATS_AERO_API_KEY" in str(excinfo.value)
    Config(api_key="abc").validate()


def test_sample_config_loads_back(tmp_path):
    path = tmp_path / "nested" / "config.yaml"

    write_sample_config(path)
    config = load_config(path, environ={})

    assert config.api_key == ""
    assert config.default_sources == ["aeroplan", "united"]
    assert config.default_cabins == ["J", "F"]


@pytest.mark.parametrize(
    "key, masked",
    [
        ("", "(not set)"),
        ("short", "****"),
        ("abcdefgh", "****"),
        ("abcd1234efgh5678", "abcd...5678"),
    ],
)
def test_mask_api_key(key, masked):
    assert mask_api_key(key) == masked
