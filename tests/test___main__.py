import json
import logging

import pytest

from folder_admin import CONFIG_FILE_NAME
from folder_admin.__main__ import main

RULES = [{"dirname": "python", "extensions": ["py"]}]


def test___main__(capsys, tmp_path):
    with pytest.raises(SystemExit):
        main(["--unknown"])
    assert "unrecognized arguments" in capsys.readouterr().err

    assert main([str(tmp_path)]) == 1
    assert "folder-admin: " in capsys.readouterr().err

    (tmp_path / CONFIG_FILE_NAME).write_text(json.dumps(RULES))
    test_file = tmp_path / "test_file.py"
    test_file.write_text("Hello World")

    assert main(["-p", str(tmp_path)]) == 0
    assert "python <- py" in capsys.readouterr().out
    assert test_file.exists()

    assert main(["--create-only", str(tmp_path)]) == 0
    assert (tmp_path / "python").is_dir()
    assert test_file.exists()

    assert main([str(tmp_path)]) == 0
    assert not test_file.exists()
    assert (tmp_path / "python" / test_file.name).exists()


def test___main___cwd(monkeypatch, tmp_path):
    (tmp_path / CONFIG_FILE_NAME).write_text(json.dumps(RULES))
    (tmp_path / "script.PY").write_text("")
    monkeypatch.chdir(tmp_path)

    assert main(["-v"]) == 0
    assert (tmp_path / "python" / "script.PY").exists()


def test___main___move_failure(capsys, tmp_path):
    (tmp_path / CONFIG_FILE_NAME).write_text(json.dumps(RULES))
    (tmp_path / "test_file.py").write_text("Blocked")
    (tmp_path / "python" / "test_file.py").mkdir(parents=True)
    (tmp_path / "python" / "test_file.py" / "occupied").write_text("")

    logger = logging.getLogger("folder_admin")
    level = logger.level

    assert main(["-v", str(tmp_path)]) == 1
    assert capsys.readouterr().err.count("FAILED: Moving 'test_file.py'") == 1
    assert logger.level == level
    assert (tmp_path / "test_file.py").exists()
