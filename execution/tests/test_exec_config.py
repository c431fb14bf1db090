import pytest

from execution.config import Limits, load_config, summary


def test_defaults_from_empty_env():
    cfg = load_config({})
    assert cfg.chain_id == 1337
    assert cfg.address_len == 20
    assert cfg.limits == Limits()


def test_env_and_size_suffixes():
    cfg = load_config(
        {
            "ANIMICA_CHAIN_ID": "7",
            "ANIMICA_EXEC_ADDRESS_LEN": "32",
            "ANIMICA_EXEC_MAX_STORAGE_VALUE_BYTES": "8KiB",
            "ANIMICA_EXEC_MAX_LOGS_PER_CALL": "16",
        }
    )
    assert (cfg.chain_id, cfg.address_len) == (7, 32)
    assert cfg.limits.max_storage_value_bytes == 8 * 1024
    assert cfg.limits.max_logs_per_call == 16
    assert "chain=7" in summary(cfg)


def test_overrides_win_over_env():
    cfg = load_config({"ANIMICA_EXEC_MAX_CALL_DEPTH": "9"}, overrides={"max_call_depth": 3})
    assert cfg.limits.max_call_depth == 3


@pytest.mark.parametrize(
    "env",
    [
        {"ANIMICA_CHAIN_ID": "0"},
        {"ANIMICA_EXEC_ADDRESS_LEN": "4"},
        {"ANIMICA_EXEC_MAX_CALL_DEPTH": "0"},
    ],
)
def test_invalid_values_rejected(env):
    with pytest.raises(ValueError):
        load_config(env)
