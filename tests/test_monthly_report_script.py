import importlib.util
from datetime import date
from pathlib import Path

from expense_dashboard.db import TransactionStore
from expense_dashboard.models import TransactionKind

SCRIPT_PATH = Path(__file__).resolve().parents[1] / 'scripts' / 'monthly_report.py'


def _load_script_module():
    spec = importlib.util.spec_from_file_location('monthly_report_test', SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_report_prints_budget_and_trend(tmp_path, capsys):
    db_path = tmp_path / 'expenses.db'
    store = TransactionStore(db_path)
    store.add_transaction('alice', TransactionKind.EXPENSE, 'Rent', 1200, 'Bills', date(2025, 3, 1))
    store.add_transaction('alice', TransactionKind.INCOME, 'Pay', 3000, 'Salary', date(2025, 3, 1))
    store.upsert_budget('alice', date(2025, 3, 1), 1000)

    module = _load_script_module()
    code = module.main('alice', 3, db_path=db_path, today=date(2025, 3, 20))
    out = capsys.readouterr().out

    assert code == 0
    assert 'Profile: alice (March 2025)' in out
    assert '120.0% used' in out
    assert 'EXCEEDED' in out
    assert 'Jan 2025' in out and 'Mar 2025' in out


def test_report_without_budget(tmp_path, capsys):
    module = _load_script_module()
    code = module.main('nobody', 2, db_path=tmp_path / 'expenses.db', today=date(2025, 3, 20))
    out = capsys.readouterr().out

    assert code == 0
    assert 'Budget:      not set' in out
