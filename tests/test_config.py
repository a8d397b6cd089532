import pytest

from pistream.config import DEFAULT_OUTPUT, RunConfig, format_duration, parse_digit_count


def test_parse_digit_count_suffixes():
    assert parse_digit_count("250") == 250
    assert parse_digit_count("10K") == 10_000
    assert parse_digit_count("3m") == 3_000_000
    assert parse_digit_count("1B") == 1_000_000_000
    assert parse_digit_count(" 2k ") == 2000


@pytest.mark.parametrize("spec", ["", "K", "abc", "1.5M", "10X"])
def test_parse_digit_count_rejects_garbage(spec):
    with pytest.raises(ValueError):
        parse_digit_count(spec)


def test_format_duration():
    assert format_duration(0) == "0 hour 0 minute 0 second 0 millisecond"
    assert format_duration(3723.5) == "1 hour 2 minute 3 second 500 millisecond"


def test_run_config_clamps():
    cfg = RunConfig(digits=0, threads=-3, block_size=5, strategy=" Tasks ", executor_kind="THREAD").normalized()
    assert cfg.digits == 1
    assert cfg.threads == 1
    assert cfg.block_size == 5
    assert cfg.strategy == "tasks"
    assert cfg.executor_kind == "thread"
    assert cfg.out_path == DEFAULT_OUTPUT
    assert RunConfig(block_size=None).normalized().block_size is None


def test_non_positive_block_size_means_automatic():
    assert RunConfig(block_size=0).normalized().block_size is None
    assert RunConfig(block_size=-4).normalized().block_size is None
