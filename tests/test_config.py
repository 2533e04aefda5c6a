import logging

from vcfimport import config


def test_env_int_reads_integer(monkeypatch):
    monkeypatch.setenv("VCF_TEST_LIMIT", "2048")
    assert config._env_int("VCF_TEST_LIMIT", 10) == 2048


def test_env_int_uses_default_when_unset(monkeypatch):
    monkeypatch.delenv("VCF_TEST_LIMIT", raising=False)
    assert config._env_int("VCF_TEST_LIMIT", 10) == 10


def test_env_int_falls_back_on_bad_value(monkeypatch, caplog):
    monkeypatch.setenv("VCF_TEST_LIMIT", "5MB")
    with caplog.at_level(logging.WARNING, logger="vcfimport.config"):
        assert config._env_int("VCF_TEST_LIMIT", 10) == 10
    assert "Invalid VCF_TEST_LIMIT '5MB'" in caplog.text
