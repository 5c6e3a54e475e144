import pytest

from firstboot_agent.config import DEFAULT_INVENTORY_URL, AgentConfig, load_config


def test_defaults_without_a_file():
    cfg = load_config(None)

    assert cfg.script_file == "c:/firstboot/temp-script.cmd"
    assert cfg.diskpart_file == "c:/firstboot/disk.txt"
    assert cfg.pre_install_script == "c:/firstboot/preInstall.cmd"
    assert cfg.post_install_script == "c:/firstboot/postInstall.cmd"
    assert cfg.inventory_url == DEFAULT_INVENTORY_URL
    assert cfg.probe_host == "osinstall."
    assert (cfg.max_attempts, cfg.interval_seconds, cfg.settle_seconds) == (300, 2.0, 30.0)
    assert cfg.code_page == "gbk"
    assert cfg.log_level == "info"


def test_yaml_overrides(tmp_path):
    p = tmp_path / "agent.yaml"
    p.write_text(
        "paths:\n"
        "  root: d:/provision\n"
        "logger:\n"
        "  level: debug\n"
        "network:\n"
        "  probe_host: deploy.example\n"
        "  max_attempts: 10\n"
        "encoding:\n"
        "  code_page: cp1252\n",
        encoding="utf-8",
    )

    cfg = load_config(str(p))

    assert cfg.script_file == "d:/provision/temp-script.cmd"
    assert cfg.log_file == "d:/provision/firstboot-agent.log"
    assert cfg.log_level == "debug"
    assert cfg.probe_host == "deploy.example"
    assert cfg.max_attempts == 10
    assert cfg.interval_seconds == 2.0
    assert cfg.code_page == "cp1252"


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "nope.yaml"))


def test_rejects_non_yaml_and_non_mapping(tmp_path):
    ini = tmp_path / "agent.ini"
    ini.write_text("[logger]\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(str(ini))

    lst = tmp_path / "agent.yaml"
    lst.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(str(lst))


def test_empty_sections_fall_back_to_defaults():
    cfg = AgentConfig(raw={"network": None, "inventory": {}})
    assert cfg.max_attempts == 300
    assert cfg.http_timeout == 10.0


def test_explicit_zero_numbers_are_kept():
    cfg = AgentConfig(
        raw={
            "network": {"settle_seconds": 0, "interval_seconds": 0, "max_attempts": 0},
            "inventory": {"timeout_seconds": 0},
        }
    )
    assert (cfg.settle_seconds, cfg.interval_seconds, cfg.max_attempts) == (0.0, 0.0, 0)
    assert cfg.http_timeout == 0.0
