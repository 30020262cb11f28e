import pytest

from logmerge.config import (
    MergeConfig,
    environ_values,
    load_config,
    parse_config_arg,
)
from logmerge.errors import InvalidConfig, UnknownConfigKey


class TestMergeConfig:
    def test_defaults(self):
        config = MergeConfig()
        assert config.batch_size == 2
        assert config.mode == "async"
        assert config.check_order is False
        assert config.log_level == "INFO"

    def test_parses_strings(self):
        config = MergeConfig(
            batch_size="8",
            mode="SYNC",
            check_order="yes",
            log_level="debug",
        )
        assert config == MergeConfig(8, "sync", True, "DEBUG")

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"batch_size": "0"},
            {"batch_size": "many"},
            {"mode": "threads"},
            {"check_order": "maybe"},
            {"log_level": "LOUD"},
        ],
    )
    def test_invalid(self, kwargs):
        with pytest.raises(InvalidConfig):
            MergeConfig(**kwargs)

    def test_replace_ignores_none(self):
        config = MergeConfig(batch_size=4)
        assert config.replace(batch_size=None, mode="sync") == MergeConfig(4, "sync")

    def test_replace_unknown_key(self):
        with pytest.raises(UnknownConfigKey):
            MergeConfig().replace(batch=3)


class TestParseConfigArg:
    @pytest.mark.parametrize(
        "arg, expected",
        [
            ("key=value", ("key", "value")),
            ("batch_size=10", ("batch_size", "10")),
            ("_k_=a=b", ("_k_", "a=b")),
            ("mode=", ("mode", "")),
        ],
    )
    def test_parse(self, arg, expected):
        assert parse_config_arg(arg) == expected

    @pytest.mark.parametrize("arg", ["1=x", "key value", "k.e=y", "=v"])
    def test_invalid(self, arg):
        msg = "invalid configuration argument '%s', must be in key=value form" % arg
        with pytest.raises(ValueError) as excinfo:
            parse_config_arg(arg)
        assert str(excinfo.value) == msg


class TestLoadConfig:
    def test_environ_values(self):
        environ = {
            "LOGMERGE_BATCH_SIZE": "5",
            "LOGMERGE_MODE": "sync",
            "UNRELATED": "1",
        }
        assert environ_values(environ) == {"batch_size": "5", "mode": "sync"}

    def test_overrides_win(self):
        config = load_config(
            environ={"LOGMERGE_BATCH_SIZE": "5", "LOGMERGE_CHECK_ORDER": "1"},
            overrides=["batch_size=7"],
        )
        assert config == MergeConfig(7, "async", True, "INFO")

    def test_empty(self):
        assert load_config(environ={}) == MergeConfig()

    def test_unknown_override(self):
        with pytest.raises(UnknownConfigKey) as excinfo:
            load_config(environ={}, overrides=["colour=blue"])
        assert "colour" in str(excinfo.value)

    def test_invalid_environment(self):
        with pytest.raises(InvalidConfig):
            load_config(environ={"LOGMERGE_MODE": "parallel"})
