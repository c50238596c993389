from __future__ import annotations

from pathlib import Path
import textwrap

import pytest

from lister.config import default_config_candidates, load_task_config
from lister.errors import ConfigError


def _write_config(tmp_path: Path, filename: str, content: str) -> Path:
    path = tmp_path / filename
    path.write_text(content, encoding="utf-8")
    return path


def _wrap_task_config(body: str, logging_body: str | None = None) -> str:
    logging_block = (logging_body or "level: INFO").strip()
    parts = [
        "logging:\n",
        textwrap.indent(logging_block, "  "),
        "\ntasks:\n",
        "  file_list:\n",
        textwrap.indent(body.strip(), "    "),
        "\n",
    ]
    return "".join(parts)


def test_load_task_config_full(tmp_path: Path) -> None:
    cfg_path = _write_config(
        tmp_path,
        "list.yaml",
        _wrap_task_config(
            (
                f"roots:\n  - '{tmp_path}'\n"
                "extensions: [jpg, .png]\n"
                "depth: 0\n"
                f"output_dir: '{tmp_path / 'reports'}'\n"
                "base_name: photos\n"
                "batch_size: 100\n"
                "skip_unreadable: yes\n"
                "full_path: 'n'\n"
            )
        ),
    )

    config = load_task_config(cfg_path)

    assert config["roots"] == [str(tmp_path)]
    assert config["extensions"] == ["jpg", "png"]
    assert config["depth"] == 0
    assert config["output_dir"] == str(tmp_path / "reports")
    assert config["base_name"] == "photos"
    assert config["batch_size"] == 100
    assert config["skip_unreadable"] is True
    assert config["full_path"] is False
    assert config["__config_path__"] == str(cfg_path)
    logging_cfg = config["__logging__"]
    assert logging_cfg["level"] == "INFO"
    assert logging_cfg["log_dir"] is None
    assert logging_cfg["file_prefix"] == "file_list"


def test_load_task_config_aliases_and_comma_extensions(tmp_path: Path) -> None:
    cfg_path = _write_config(
        tmp_path,
        "alias.yaml",
        _wrap_task_config(
            (
                f"root: '{tmp_path}'\n"
                "ext: 'jpg, txt'\n"
                f"output: '{tmp_path}'\n"
            )
        ),
    )

    config = load_task_config(cfg_path)

    assert config["roots"] == [str(tmp_path)]
    assert config["extensions"] == ["jpg", "txt"]
    assert config["output_dir"] == str(tmp_path)


def test_load_task_config_numeric_extension_is_text(tmp_path: Path) -> None:
    cfg_path = _write_config(
        tmp_path,
        "num.yaml",
        _wrap_task_config(f"roots: ['{tmp_path}']\nextensions: [264, mp4]\n"),
    )

    assert load_task_config(cfg_path)["extensions"] == ["264", "mp4"]


def test_load_task_config_bare_task_body(tmp_path: Path) -> None:
    cfg_path = _write_config(tmp_path, "bare.yaml", f"roots: ['{tmp_path}']\ndepth: 2\n")

    config = load_task_config(cfg_path)

    assert config["roots"] == [str(tmp_path)]
    assert config["depth"] == 2
    assert config["__logging__"]["level"] == "INFO"


def test_relative_log_dir_anchors_under_output_dir(tmp_path: Path) -> None:
    output_dir = tmp_path / "reports"
    cfg_path = _write_config(
        tmp_path,
        "logs.yaml",
        _wrap_task_config(
            f"roots: ['{tmp_path}']\noutput_dir: '{output_dir}'\n",
            logging_body="level: debug\nuse_rich: 'off'\nlog_dir: logs\nfile_prefix: photos\n",
        ),
    )

    logging_cfg = load_task_config(cfg_path)["__logging__"]

    assert logging_cfg["level"] == "DEBUG"
    assert logging_cfg["use_rich"] is False
    assert logging_cfg["log_dir"] == str((output_dir / "logs").resolve())
    assert logging_cfg["file_prefix"] == "photos"


@pytest.mark.parametrize(
    "body, message",
    [
        ("depth: 1\n", "missing required fields"),
        ("roots: ['/tmp']\ncolour: blue\n", "unsupported keys"),
        ("roots: ['/tmp']\ndepth: deep\n", "must be an integer"),
        ("roots: ['/tmp']\ndepth: -1\n", "must not be negative"),
        ("roots: ['/tmp']\nbatch_size: true\n", "must be an integer"),
        ("roots: ['/tmp']\nskip_unreadable: maybe\n", "must be yes/no"),
        ("roots: ['/tmp']\nextensions: 5\n", "must be a list"),
        ("roots: ['/tmp']\nextensions: []\n", "at least one extension"),
        ("roots: ['/tmp']\nextensions: ['a/b']\n", "forbidden characters"),
    ],
)
def test_load_task_config_rejects_invalid_values(tmp_path: Path, body: str, message: str) -> None:
    cfg_path = _write_config(tmp_path, "bad.yaml", _wrap_task_config(body))

    with pytest.raises(ConfigError) as excinfo:
        load_task_config(cfg_path)

    assert message in str(excinfo.value)


def test_load_task_config_missing_task(tmp_path: Path) -> None:
    cfg_path = _write_config(tmp_path, "other.yaml", "tasks:\n  other_task:\n    roots: ['/tmp']\n")

    with pytest.raises(ConfigError, match="missing task 'file_list'"):
        load_task_config(cfg_path)


def test_load_task_config_rejects_unknown_logging_keys(tmp_path: Path) -> None:
    cfg_path = _write_config(
        tmp_path,
        "log.yaml",
        _wrap_task_config("roots: ['/tmp']\n", logging_body="level: INFO\ncolour: red\n"),
    )

    with pytest.raises(ConfigError, match="unsupported keys"):
        load_task_config(cfg_path)


def test_load_task_config_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="not found"):
        load_task_config(tmp_path / "absent.yaml")


def test_load_task_config_invalid_yaml(tmp_path: Path) -> None:
    cfg_path = _write_config(tmp_path, "broken.yaml", "tasks: [unclosed\n")

    with pytest.raises(ConfigError, match="Invalid YAML"):
        load_task_config(cfg_path)


def test_load_task_config_non_mapping_root(tmp_path: Path) -> None:
    cfg_path = _write_config(tmp_path, "list.yaml", "- just\n- a list\n")

    with pytest.raises(ConfigError, match="must be a mapping"):
        load_task_config(cfg_path)


def test_default_config_candidates_look_in_working_directory(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)

    assert default_config_candidates() == [tmp_path / "configs" / "config.yaml"]


def test_default_config_candidates_put_explicit_path_first(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)
    explicit = tmp_path / "elsewhere" / "tasks.yaml"

    assert default_config_candidates(explicit) == [
        explicit,
        tmp_path / "configs" / "config.yaml",
    ]
