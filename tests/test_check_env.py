import importlib.util
import os

import pytest

SCRIPT = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "scripts", "check_env.py")


@pytest.fixture(scope="module")
def check_env():
    spec = importlib.util.spec_from_file_location("check_env", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_parse_version(check_env):
    assert check_env.parse_version("1.26.4") == (1, 26, 4)
    assert check_env.parse_version("3.1rc1") == (3, 1)
    assert check_env.parse_version("dev") == ()


def test_dependency_minimums(check_env):
    ok, detail = check_env.check_dependency("numpy", (1, 25))
    assert ok, detail
    ok, detail = check_env.check_dependency("numpy", (999,))
    assert not ok
    assert "< 999" in detail
    ok, detail = check_env.check_dependency("no-such-distribution-here", (1,))
    assert not ok
    assert detail == "not installed"


def test_spawn_and_solver_checks(check_env):
    assert check_env.check_spawn()[0]
    ok, detail = check_env.check_solvers()
    assert ok, detail
    assert "sequential" in detail and "parallel" in detail


def test_main_passes_without_optional_render_dependency(check_env, capsys, monkeypatch):
    monkeypatch.setattr(check_env, "OPTIONAL", {"no-such-distribution-here": (1,)})
    assert check_env.main() == 0
    out = capsys.readouterr().out
    assert "[OK] numpy" in out
    assert "[WARN] no-such-distribution-here" in out
    assert "triangle solved" in out
