import importlib.util
import os
import sys
from pathlib import Path

SCRIPT_PATH = Path(__file__).resolve().parents[1] / 'run_dashboard.py'


def _load_launcher():
    spec = importlib.util.spec_from_file_location('run_dashboard_test', SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_default_command_runs_home_script():
    launcher = _load_launcher()
    command = launcher.build_command(launcher.parse_args([]))

    assert command[:4] == [sys.executable, '-m', 'streamlit', 'run']
    assert Path(command[4]) == SCRIPT_PATH.parent / 'expense_dashboard' / 'Home.py'
    assert len(command) == 5


def test_port_and_headless_become_server_flags():
    launcher = _load_launcher()
    command = launcher.build_command(launcher.parse_args(['--port', '8502', '--headless']))

    assert command[5:] == ['--server.port', '8502', '--server.headless', 'true']


def test_options_are_passed_as_environment(tmp_path):
    launcher = _load_launcher()
    args = launcher.parse_args([
        '--db', str(tmp_path / 'x.db'),
        '--profile', 'alice',
        '--currency', '$',
    ])

    env = launcher.build_env(args, base={'PYTHONPATH': '/elsewhere'})

    assert env['EXPENSE_DASHBOARD_DB_PATH'] == str((tmp_path / 'x.db').resolve())
    assert env['EXPENSE_DASHBOARD_DEFAULT_PROFILE'] == 'alice'
    assert env['EXPENSE_DASHBOARD_CURRENCY'] == '$'
    assert env['PYTHONPATH'].split(os.pathsep) == [str(SCRIPT_PATH.parent), '/elsewhere']


def test_env_left_alone_without_options():
    launcher = _load_launcher()
    env = launcher.build_env(launcher.parse_args([]), base={'HOME': '/home/me'})

    assert env['HOME'] == '/home/me'
    assert 'EXPENSE_DASHBOARD_DB_PATH' not in env
    assert env['PYTHONPATH'] == str(SCRIPT_PATH.parent)


def test_main_returns_streamlit_exit_code(monkeypatch):
    launcher = _load_launcher()
    seen = {}

    def fake_call(command, env):
        seen['command'] = command
        return 3

    monkeypatch.setattr(launcher.subprocess, 'call', fake_call)

    assert launcher.main(['--port', '9000']) == 3
    assert '--server.port' in seen['command']
