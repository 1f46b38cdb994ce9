# -----------------------------------------------------------------------------
# /*
#  * Copyright (C) 2025 CodeStory
#  *
#  * This program is free software; you can redistribute it and/or modify
#  * it under the terms of the GNU General Public License as published by
#  * the Free Software Foundation; Version 2.
#  *
#  * This program is distributed in the hope that it will be useful,
#  * but WITHOUT ANY WARRANTY; without even the implied warranty of
#  * MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
#  * GNU General Public License for more details.
#  *
#  * You should have received a copy of the GNU General Public License
#  * along with this program; if not, you can contact us at support@codestory.build
#  */
# -----------------------------------------------------------------------------


import pytest
from pydantic import ValidationError as PydanticValidationError

from nbtranspiler.core.config import ConfigLoader, TranspilerConfig
from nbtranspiler.core.config.config_loader import load_env, load_toml
from nbtranspiler.core.exceptions import ConfigurationError


@pytest.fixture
def clean_env(monkeypatch):
    for key in ("NBT_GLOBAL_NAME", "NBT_IMPORT_NAME", "NBT_CONSOLE_NAME", "NBT_VERBOSE", "NBT_SILENT"):
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


def write_toml(path, body: str):
    path.write_text(body, encoding="utf-8")
    return path


# -----------------------------------------------------------------------------
# TranspilerConfig
# -----------------------------------------------------------------------------


def test_defaults():
    config = TranspilerConfig()

    assert config.global_name == "__global"
    assert config.import_name == "__import"
    assert config.console_name == "console"
    assert config.reserved_names() == {"__global", "__import"}


@pytest.mark.parametrize("name", ["1abc", "a-b", "", "a b"])
def test_names_must_be_identifiers(name):
    with pytest.raises(PydanticValidationError):
        TranspilerConfig(global_name=name)


@pytest.mark.parametrize("name", ["class", "await", "this", "null", "yield", "let", "arguments"])
def test_names_must_not_be_reserved_words(name):
    with pytest.raises(PydanticValidationError):
        TranspilerConfig(import_name=name)


def test_names_must_differ():
    with pytest.raises(PydanticValidationError):
        TranspilerConfig(global_name="same", import_name="same")


def test_dollar_names_are_allowed():
    assert TranspilerConfig(global_name="$g").global_name == "$g"


# -----------------------------------------------------------------------------
# ConfigLoader
# -----------------------------------------------------------------------------


def test_layers_are_merged_by_priority(tmp_path, clean_env):
    local = write_toml(tmp_path / "local.toml", 'global_name = "L"\nimport_name = "LI"\n')
    global_ = write_toml(tmp_path / "global.toml", 'console_name = "con"\nglobal_name = "GG"\n')
    clean_env.setenv("NBT_IMPORT_NAME", "EI")
    clean_env.setenv("NBT_SILENT", "true")

    config = ConfigLoader(local, "NBT_", global_).load(TranspilerConfig, {"verbose": True})

    assert config.global_name == "L"
    assert config.import_name == "LI"
    assert config.console_name == "con"
    assert config.verbose is True
    assert config.silent is True


def test_custom_config_beats_local(tmp_path, clean_env):
    local = write_toml(tmp_path / "local.toml", 'global_name = "L"\n')
    custom = write_toml(tmp_path / "custom.toml", 'global_name = "C"\n')
    loader = ConfigLoader(local, "NBT_", tmp_path / "missing.toml", custom)

    assert loader.load(TranspilerConfig).global_name == "C"
    assert loader.load(TranspilerConfig, {"global_name": "Arg"}).global_name == "Arg"


def test_missing_layers_fall_back_to_defaults(tmp_path, clean_env):
    loader = ConfigLoader(tmp_path / "local.toml", "NBT_", tmp_path / "global.toml")

    assert loader.load(TranspilerConfig) == TranspilerConfig()


def test_unknown_keys_are_ignored(tmp_path, clean_env):
    local = write_toml(tmp_path / "local.toml", 'colour = "blue"\nglobal_name = "G"\n')

    config = ConfigLoader(local, "NBT_", tmp_path / "global.toml").load(TranspilerConfig)

    assert config.global_name == "G"


def test_missing_custom_config_is_an_error(tmp_path, clean_env):
    loader = ConfigLoader(
        tmp_path / "local.toml", "NBT_", tmp_path / "global.toml", tmp_path / "nope.toml"
    )

    with pytest.raises(ConfigurationError):
        loader.load(TranspilerConfig)


def test_invalid_toml_is_skipped(tmp_path):
    broken = write_toml(tmp_path / "broken.toml", "global_name = \n")

    assert load_toml(broken) == {}


def test_invalid_values_raise_configuration_error(tmp_path, clean_env):
    loader = ConfigLoader(tmp_path / "local.toml", "NBT_", tmp_path / "global.toml")

    with pytest.raises(ConfigurationError):
        loader.load(TranspilerConfig, {"global_name": "not valid"})


def test_load_env_strips_prefix_and_lowercases(clean_env):
    clean_env.setenv("NBT_GLOBAL_NAME", "envG")

    assert load_env("NBT_")["global_name"] == "envG"
