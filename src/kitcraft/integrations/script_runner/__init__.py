from kitcraft.integrations.script_runner.abc import ScriptRunner
from kitcraft.integrations.script_runner.fake import FakeScriptRunner, ScriptCall
from kitcraft.integrations.script_runner.real import RealScriptRunner

__all__ = ["FakeScriptRunner", "RealScriptRunner", "ScriptCall", "ScriptRunner"]
