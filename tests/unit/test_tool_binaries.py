from agentstamp.runtime import binaries
from agentstamp.runtime.binaries import resolve_tool_binary


def test_env_override_wins(monkeypatch):
    monkeypatch.setenv("AGENTSTAMP_TOOL_BINARY", "/custom/git-ai")
    assert resolve_tool_binary("git-ai") == "/custom/git-ai"


def test_bare_name_resolved_through_path(monkeypatch):
    monkeypatch.delenv("AGENTSTAMP_TOOL_BINARY", raising=False)
    monkeypatch.setattr(binaries.shutil, "which", lambda name: f"/usr/bin/{name}")
    assert resolve_tool_binary("git-ai") == "/usr/bin/git-ai"


def test_unresolved_name_is_returned_unchanged(monkeypatch):
    monkeypatch.delenv("AGENTSTAMP_TOOL_BINARY", raising=False)
    monkeypatch.setattr(binaries.shutil, "which", lambda name: None)
    assert resolve_tool_binary("git-ai") == "git-ai"


def test_explicit_path_is_not_looked_up(monkeypatch, tmp_path):
    monkeypatch.delenv("AGENTSTAMP_TOOL_BINARY", raising=False)
    monkeypatch.setattr(binaries.shutil, "which", lambda name: "/should/not/be/used")
    target = tmp_path / "bin" / "git-ai"
    assert resolve_tool_binary(str(target)) == str(target)
