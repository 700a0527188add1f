"""Tests for the command-line interface."""

from pathlib import Path
from unittest.mock import patch

import pytest
from bulletin_stats.__main__ import build_config, main, parse_args
from bulletin_stats.errors import MalformedBulletinError
from bulletin_stats.models import BulletinRecord


def test_build_config_from_args(tmp_path):
    args = parse_args(['run', '--output', str(tmp_path / 'o.json'), '--limit', '2'])
    config = build_config(args)
    assert config.output_path == tmp_path / 'o.json'
    assert config.limit == 2


def test_cli_overrides_yaml(tmp_path):
    path = tmp_path / 'config.yaml'
    path.write_text('limit: 5\npoliteness_delay: 2.0\n', encoding='utf-8')
    args = parse_args(['run', '--config', str(path), '--limit', '1'])
    config = build_config(args)
    assert config.limit == 1
    assert config.politeness_delay == 2.0


def test_invalid_override_rejected(tmp_path):
    path = tmp_path / 'config.yaml'
    path.write_text('limit: 5\n', encoding='utf-8')
    args = parse_args(['run', '--config', str(path), '--limit', '0'])
    with pytest.raises(ValueError):
        build_config(args)


def test_main_success(tmp_path, sample_post):
    records = [BulletinRecord(post=sample_post)]
    with patch('bulletin_stats.__main__.run_pipeline', return_value=records) as run:
        with pytest.raises(SystemExit) as exc_info:
            main(['run', '--output', str(tmp_path / 'o.json')])
    assert exc_info.value.code == 0
    assert run.call_args[0][0].output_path == Path(tmp_path / 'o.json')


def test_main_hard_failure_exits_1(tmp_path):
    error = MalformedBulletinError('count', '今日检测阳性率', link='https://example.cn/t1.html')
    with patch('bulletin_stats.__main__.run_pipeline', side_effect=error):
        with pytest.raises(SystemExit) as exc_info:
            main(['run', '--output', str(tmp_path / 'o.json')])
    assert exc_info.value.code == 1


def test_no_command_prints_help():
    with pytest.raises(SystemExit) as exc_info:
        parse_args([])
    assert exc_info.value.code == 2


def test_unknown_yaml_key_exits_1(tmp_path):
    path = tmp_path / 'config.yaml'
    path.write_text('outptu_path: typo.json\n', encoding='utf-8')
    with pytest.raises(SystemExit) as exc_info:
        main(['run', '--config', str(path)])
    assert exc_info.value.code == 1
