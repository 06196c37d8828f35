"""
Tests for the version module of the VSC client.
"""
import importlib
import re
from importlib import metadata as importlib_metadata
from unittest.mock import mock_open, patch

import pytest

import vsc_client.version as vmod
from vsc_client import __version__


def _missing_metadata(name):
    raise importlib_metadata.PackageNotFoundError(name)


@pytest.fixture(autouse=True)
def restore_version():
    yield
    importlib.reload(vmod)


def test_version_format():
    """The version string follows semantic versioning"""
    assert re.match(r'^\d+\.\d+\.\d+$', __version__)


@patch('importlib.metadata.version')
def test_version_from_metadata(mock_metadata_version):
    mock_metadata_version.return_value = "2.3.4"
    importlib.reload(vmod)
    assert vmod.__version__ == "2.3.4"
    mock_metadata_version.assert_called_with("vsc-client")


def test_version_from_pyproject(monkeypatch):
    """When the package is not installed, pyproject.toml is read"""
    monkeypatch.setattr(importlib_metadata, 'version', _missing_metadata)
    monkeypatch.setattr('pathlib.Path.open', mock_open(read_data=b'[project]\nversion = "1.2.3"\n'))
    importlib.reload(vmod)
    assert vmod.__version__ == "1.2.3"


def test_version_pyproject_missing(monkeypatch):
    monkeypatch.setattr(importlib_metadata, 'version', _missing_metadata)

    def missing(*args, **kwargs):
        raise FileNotFoundError()

    monkeypatch.setattr('pathlib.Path.open', missing)
    importlib.reload(vmod)
    assert vmod.__version__ == "0.2.0"


def test_version_key_missing(monkeypatch):
    monkeypatch.setattr(importlib_metadata, 'version', _missing_metadata)
    monkeypatch.setattr('pathlib.Path.open', mock_open(read_data=b'[project]\nname = "vsc-client"\n'))
    importlib.reload(vmod)
    assert vmod.__version__ == "0.2.0"


def test_version_invalid_toml(monkeypatch):
    monkeypatch.setattr(importlib_metadata, 'version', _missing_metadata)
    monkeypatch.setattr('pathlib.Path.open', mock_open(read_data=b'not [valid toml'))
    importlib.reload(vmod)
    assert vmod.__version__ == "0.2.0"
