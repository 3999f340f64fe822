import pandas as pd
import pytest

from ping_command.config_loader import ConfigLoader


@pytest.fixture
def servers_file(tmp_path):
    path = tmp_path / "servers.xlsx"
    pd.DataFrame([
        {"ip": "10.0.0.1", "user": "admin", "pass": "pw", "port": 2222},
        {"ip": None, "user": None, "pass": None, "port": None},
        {"ip": "10.0.0.2", "user": None, "pass": None, "port": None},
    ]).to_excel(path, index=False)
    return path


def test_load_config(servers_file):
    servers = ConfigLoader(str(servers_file)).load_config()

    assert servers == [
        {"ip": "10.0.0.1", "user": "admin", "password": "pw", "port": 2222},
        {"ip": "10.0.0.2", "user": "root", "password": "", "port": 22},
    ]


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        ConfigLoader(str(tmp_path / "nope.xlsx")).load_config()


def test_missing_ip_column(tmp_path):
    path = tmp_path / "bad.xlsx"
    pd.DataFrame([{"host": "10.0.0.1"}]).to_excel(path, index=False)

    with pytest.raises(ValueError):
        ConfigLoader(str(path)).load_config()


def test_validate_config():
    loader = ConfigLoader("unused.xlsx")
    assert not loader.validate_config([])
    assert not loader.validate_config([{"ip": ""}])
    assert loader.validate_config([{"ip": "10.0.0.1"}])


def test_find_server():
    servers = [{"ip": "10.0.0.1"}, {"ip": "10.0.0.2"}]
    assert ConfigLoader.find_server(servers, "10.0.0.2") == {"ip": "10.0.0.2"}
    assert ConfigLoader.find_server(servers, "10.0.0.3") is None
